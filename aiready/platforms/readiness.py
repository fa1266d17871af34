"""Per-platform AI readiness: which of each assistant's requirements a crawl meets."""
from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any

from aiready.scoring.grades import round_half_up


class Importance(Enum):
    CRITICAL = "critical"
    IMPORTANT = "important"
    RECOMMENDED = "recommended"


class CheckStatus(Enum):
    PASS = "pass"
    CRITICAL_FAIL = "critical_fail"
    NEEDS_ATTENTION = "needs_attention"


@dataclass(frozen=True)
class PlatformCheck:
    """A requirement satisfied when no unresolved issue carries ``issue_code``."""
    factor: str
    label: str
    issue_code: str
    importance: Importance


def _check(factor: str, label: str, issue_code: str, importance: str) -> PlatformCheck:
    return PlatformCheck(factor, label, issue_code, Importance(importance))


PLATFORM_REQUIREMENTS: Mapping[str, tuple[PlatformCheck, ...]] = MappingProxyType({
    "ChatGPT": (
        _check("ai_crawlers", "GPTBot allowed", "AI_CRAWLER_BLOCKED", "critical"),
        _check("structured_data", "JSON-LD schema", "NO_STRUCTURED_DATA", "critical"),
        _check("llms_txt", "llms.txt file", "MISSING_LLMS_TXT", "important"),
        _check("direct_answers", "Direct answers", "NO_DIRECT_ANSWERS", "important"),
        _check("title", "Title tag", "MISSING_TITLE", "important"),
        _check("meta_desc", "Meta description", "MISSING_META_DESC", "recommended"),
        _check("sitemap", "Sitemap", "MISSING_SITEMAP", "recommended"),
        _check("citation", "Citation worthy", "CITATION_WORTHINESS", "important"),
    ),
    "Claude": (
        _check("llms_txt", "llms.txt file", "MISSING_LLMS_TXT", "critical"),
        _check("ai_crawlers", "ClaudeBot allowed", "AI_CRAWLER_BLOCKED", "critical"),
        _check("structured_data", "JSON-LD schema", "NO_STRUCTURED_DATA", "important"),
        _check("content_depth", "Content depth", "THIN_CONTENT", "critical"),
        _check("direct_answers", "Direct answers", "NO_DIRECT_ANSWERS", "important"),
        _check("citation", "Citation worthy", "CITATION_WORTHINESS", "critical"),
        _check("summary", "Summary section", "NO_SUMMARY_SECTION", "recommended"),
        _check("faq", "FAQ structure", "MISSING_FAQ_STRUCTURE", "recommended"),
    ),
    "Perplexity": (
        _check("ai_crawlers", "PerplexityBot allowed", "AI_CRAWLER_BLOCKED", "critical"),
        _check("citation", "Citation worthy", "CITATION_WORTHINESS", "critical"),
        _check("direct_answers", "Direct answers", "NO_DIRECT_ANSWERS", "critical"),
        _check("structured_data", "JSON-LD schema", "NO_STRUCTURED_DATA", "important"),
        _check("llms_txt", "llms.txt file", "MISSING_LLMS_TXT", "important"),
        _check("title", "Title tag", "MISSING_TITLE", "important"),
        _check("internal_links", "Internal links", "NO_INTERNAL_LINKS", "recommended"),
        _check("questions", "Question coverage", "POOR_QUESTION_COVERAGE", "important"),
    ),
    "Gemini": (
        _check("structured_data", "JSON-LD schema", "NO_STRUCTURED_DATA", "critical"),
        _check("ai_crawlers", "Google-Extended allowed", "AI_CRAWLER_BLOCKED", "critical"),
        _check("title", "Title tag", "MISSING_TITLE", "important"),
        _check("meta_desc", "Meta description", "MISSING_META_DESC", "important"),
        _check("sitemap", "Sitemap", "MISSING_SITEMAP", "important"),
        _check("canonical", "Canonical URL", "MISSING_CANONICAL", "important"),
        _check("llms_txt", "llms.txt file", "MISSING_LLMS_TXT", "recommended"),
        _check("entity_markup", "Entity markup", "MISSING_ENTITY_MARKUP", "recommended"),
    ),
})

PLATFORM_IDS = tuple(name.lower() for name in PLATFORM_REQUIREMENTS)


def check_status(importance: Importance, passed: bool) -> CheckStatus:
    """Display status of a single platform check."""
    if passed:
        return CheckStatus.PASS
    if importance is Importance.CRITICAL:
        return CheckStatus.CRITICAL_FAIL
    return CheckStatus.NEEDS_ATTENTION


@dataclass(frozen=True)
class CheckResult:
    factor: str
    label: str
    importance: Importance
    passed: bool

    @property
    def status(self) -> CheckStatus:
        return check_status(self.importance, self.passed)

    def to_dict(self) -> dict:
        return {
            "factor": self.factor,
            "label": self.label,
            "importance": self.importance.value,
            "pass": self.passed,
            "status": self.status.value,
        }


@dataclass(frozen=True)
class PlatformReadiness:
    platform: str
    pass_rate: int
    checks: list[CheckResult] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "platform": self.platform,
            "pass_rate": self.pass_rate,
            "checks": [c.to_dict() for c in self.checks],
        }


def _open_codes(issues: Iterable[Any]) -> set[str]:
    codes = set()
    for issue in issues:
        if isinstance(issue, str):
            codes.add(issue)
            continue
        if isinstance(issue, Mapping):
            code, resolved = issue.get("code"), issue.get("resolved", False)
        else:
            code, resolved = getattr(issue, "code", None), getattr(issue, "resolved", False)
        if isinstance(code, str) and not resolved:
            codes.add(code)
    return codes


def evaluate_platform_readiness(
    issues: Iterable[Any],
    *,
    requirements: Mapping[str, Iterable[PlatformCheck]] = PLATFORM_REQUIREMENTS,
) -> list[PlatformReadiness]:
    """Evaluate every platform's checks against a crawl's issues.

    Args:
        issues: Issues (objects, mappings with ``code``, or bare codes).
            Resolved issues do not fail checks.
        requirements: Platform name → ordered checks

    Returns:
        One PlatformReadiness per platform, in ``requirements`` order
    """
    open_codes = _open_codes(issues)
    readiness = []
    for platform, checks in requirements.items():
        results = [
            CheckResult(
                factor=check.factor,
                label=check.label,
                importance=check.importance,
                passed=check.issue_code not in open_codes,
            )
            for check in checks
        ]
        passing = sum(1 for r in results if r.passed)
        pass_rate = round_half_up(passing / len(results) * 100) if results else 0
        readiness.append(PlatformReadiness(platform=platform, pass_rate=pass_rate, checks=results))
    return readiness
