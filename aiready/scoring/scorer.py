"""Composite page scoring."""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from aiready.audit.base import Issue, IssueCategory, RuleResult
from aiready.audit.detector import issues_from_results, run_checks
from aiready.audit.registry import RuleRegistry, default_registry
from aiready.classify.content_type import (
    DEFAULT_CONTENT_TYPE_RULES,
    ContentTypeRules,
    detect_content_type,
)
from aiready.config.settings import ScoringSettings, settings
from aiready.logger import get_logger
from aiready.scoring.caps import CapsEngine
from aiready.scoring.grades import clamp_score, letter_grade
from aiready.scoring.weights import CATEGORY_WEIGHTS, CategoryWeights
from aiready.signals import PageSignals, parse_page_signals

log = get_logger("scoring")


@dataclass(frozen=True)
class ScoringConfig:
    """Everything the scorer depends on. Defaults come from settings."""
    weights: CategoryWeights = CATEGORY_WEIGHTS
    registry: RuleRegistry = field(default_factory=lambda: default_registry)
    scoring: ScoringSettings = field(default_factory=lambda: settings.scoring)
    content_type_rules: ContentTypeRules = DEFAULT_CONTENT_TYPE_RULES


@dataclass(frozen=True)
class PageScore:
    """Scores and issues for one page."""
    page_id: str | None
    url: str
    overall_score: int
    technical_score: int
    content_score: int
    ai_readiness_score: int
    performance_score: int
    letter_grade: str
    issues: tuple[Issue, ...] = ()
    content_type: str = "unknown"
    caps_applied: tuple[str, ...] = ()

    @property
    def status(self) -> str:
        return "scored"

    def category_scores(self) -> dict[str, int]:
        return {
            "technical": self.technical_score,
            "content": self.content_score,
            "ai_readiness": self.ai_readiness_score,
            "performance": self.performance_score,
        }

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "status": self.status,
            "page_id": self.page_id,
            "url": self.url,
            "overall_score": self.overall_score,
            "technical_score": self.technical_score,
            "content_score": self.content_score,
            "ai_readiness_score": self.ai_readiness_score,
            "performance_score": self.performance_score,
            "letter_grade": self.letter_grade,
            "content_type": self.content_type,
            "caps_applied": list(self.caps_applied),
            "issues": [issue.to_dict() for issue in self.issues],
        }


@dataclass(frozen=True)
class UngradedPage:
    """Returned instead of a score when required input is malformed."""
    url: str | None
    errors: tuple[str, ...]

    @property
    def status(self) -> str:
        return "ungraded"

    def to_dict(self) -> dict:
        return {"status": self.status, "url": self.url, "errors": list(self.errors)}


def category_pass_rate(
    results: list[RuleResult],
    category: IssueCategory,
    *,
    include_llm: bool = False,
) -> float:
    """Weighted pass rate (0-1) of the applicable checks in a category.

    A failing check still earns whatever its deduction leaves of its weight.
    Categories with no applicable checks rate 0.
    """
    possible = 0
    earned = 0
    for r in results:
        if r.category is not category or not r.applicable:
            continue
        if r.llm_derived and not include_llm:
            continue
        possible += r.weight
        earned += r.earned
    if possible == 0:
        return 0.0
    return earned / possible


def _technical_score(results: list[RuleResult]) -> float:
    return category_pass_rate(results, IssueCategory.TECHNICAL) * 100


def _content_score(signals: PageSignals, results: list[RuleResult], config: ScoringSettings) -> float:
    word_curve = min(1.0, signals.word_count / config.word_count_target)
    checks = category_pass_rate(results, IssueCategory.CONTENT)
    heuristic = (word_curve + checks) / 2 * 100
    if signals.llm_scores is None:
        return heuristic
    blend = config.content_llm_blend
    return (1 - blend) * heuristic + blend * signals.llm_scores.content_average()


def _ai_readiness_score(signals: PageSignals, results: list[RuleResult], config: ScoringSettings) -> float:
    checks = category_pass_rate(results, IssueCategory.AI_READINESS) * 100
    if signals.llm_scores is None:
        return checks
    blend = config.ai_readiness_llm_blend
    return (1 - blend) * checks + blend * signals.llm_scores.citation_worthiness


def _performance_score(signals: PageSignals, config: ScoringSettings) -> float:
    if signals.lighthouse is None or signals.lighthouse.performance is None:
        return config.neutral_performance_score
    return max(0.0, min(1.0, signals.lighthouse.performance)) * 100


def score_page(
    signals: PageSignals,
    *,
    page_id: str | None = None,
    config: ScoringConfig | None = None,
) -> PageScore:
    """Score a page.

    Args:
        signals: Validated page signals
        page_id: Optional identifier carried through to the result
        config: Weights, rules and scoring settings

    Returns:
        PageScore with four clamped sub-scores, the weighted overall score,
        its letter grade, the detected issues and any caps applied
    """
    config = config or ScoringConfig()
    results = run_checks(signals, registry=config.registry)
    issues = issues_from_results(results)

    raw = {
        IssueCategory.TECHNICAL: clamp_score(_technical_score(results)),
        IssueCategory.CONTENT: clamp_score(_content_score(signals, results, config.scoring)),
        IssueCategory.AI_READINESS: clamp_score(_ai_readiness_score(signals, results, config.scoring)),
        IssueCategory.PERFORMANCE: clamp_score(_performance_score(signals, config.scoring)),
    }

    caps = CapsEngine(config.scoring)
    capped = caps.apply_category_caps(raw, results)
    scores = capped.scores

    w = config.weights
    weighted = (
        scores[IssueCategory.TECHNICAL] * w.technical
        + scores[IssueCategory.CONTENT] * w.content
        + scores[IssueCategory.AI_READINESS] * w.ai_readiness
        + scores[IssueCategory.PERFORMANCE] * w.performance
    ) / w.total()
    overall = caps.apply_overall_caps(
        clamp_score(weighted),
        signals.status_code,
        "noindex" in signals.robots_directives,
    )

    content_type = detect_content_type(
        signals.url, signals.schema_types, rules=config.content_type_rules
    )
    caps_applied = tuple(capped.caps_applied + overall.caps_applied)

    log.debug(
        "Scored %s: overall=%d tech=%d content=%d ai=%d perf=%d caps=%s",
        signals.url,
        overall.overall,
        scores[IssueCategory.TECHNICAL],
        scores[IssueCategory.CONTENT],
        scores[IssueCategory.AI_READINESS],
        scores[IssueCategory.PERFORMANCE],
        list(caps_applied),
    )

    return PageScore(
        page_id=page_id,
        url=signals.url,
        overall_score=overall.overall,
        technical_score=scores[IssueCategory.TECHNICAL],
        content_score=scores[IssueCategory.CONTENT],
        ai_readiness_score=scores[IssueCategory.AI_READINESS],
        performance_score=scores[IssueCategory.PERFORMANCE],
        letter_grade=letter_grade(overall.overall),
        issues=tuple(issues),
        content_type=content_type.type.value,
        caps_applied=caps_applied,
    )


def score_page_data(
    data: Mapping[str, Any],
    *,
    page_id: str | None = None,
    config: ScoringConfig | None = None,
) -> PageScore | UngradedPage:
    """Validate raw signals and score them, or report why they cannot be."""
    parsed = parse_page_signals(data)
    if not parsed.ok:
        url = data.get("url") if isinstance(data, Mapping) else None
        log.info("Page %s left ungraded: %s", url, "; ".join(parsed.errors))
        return UngradedPage(url=url if isinstance(url, str) else None, errors=parsed.errors)
    return score_page(parsed.signals, page_id=page_id, config=config)
