"""
Hard caps: keep broken pages from receiving inflated scores.

Rules:
- A failing critical check caps its category (technical 20, content 20,
  ai_readiness 30)
- 4xx/5xx status caps the overall score at 30
- noindex caps the overall score at 50
"""
from __future__ import annotations

from dataclasses import dataclass, field

from aiready.audit.base import IssueCategory, IssueSeverity, RuleResult
from aiready.config.settings import ScoringSettings, settings
from aiready.logger import get_logger

log = get_logger("scoring.caps")


@dataclass
class CategoryCapResult:
    """Category scores after caps."""
    scores: dict[IssueCategory, int]
    caps_applied: list[str] = field(default_factory=list)


@dataclass
class OverallCapResult:
    """Overall score after caps."""
    overall: int
    caps_applied: list[str] = field(default_factory=list)


class CapsEngine:
    """Apply hard caps to category and overall scores."""

    def __init__(self, config: ScoringSettings | None = None):
        self.config = config or settings.scoring

    def category_caps(self) -> dict[IssueCategory, int]:
        return {
            IssueCategory.TECHNICAL: self.config.technical_critical_cap,
            IssueCategory.CONTENT: self.config.content_critical_cap,
            IssueCategory.AI_READINESS: self.config.ai_readiness_critical_cap,
        }

    def apply_category_caps(
        self,
        scores: dict[IssueCategory, int],
        results: list[RuleResult],
    ) -> CategoryCapResult:
        """Cap each category that has a failing critical check.

        Args:
            scores: Raw category scores
            results: Rule results for the page

        Returns:
            CategoryCapResult with potentially reduced scores
        """
        result = CategoryCapResult(scores=dict(scores))
        caps = self.category_caps()
        for category, cap in caps.items():
            critical = [
                r.code for r in results
                if r.issue is not None
                and r.category is category
                and r.issue.severity is IssueSeverity.CRITICAL
            ]
            if not critical:
                continue
            if result.scores[category] > cap:
                result.scores[category] = cap
                result.caps_applied.append(f"{category.value}_capped_{cap}_{critical[0].lower()}")
                log.debug("Applied cap: %s → %s≤%d", critical[0], category.value, cap)
        return result

    def apply_overall_caps(self, overall: int, status_code: int, has_noindex: bool) -> OverallCapResult:
        """Cap the overall score for error pages and noindex pages."""
        result = OverallCapResult(overall=overall)

        if status_code >= 400:
            cap = self.config.error_status_overall_cap
            if result.overall > cap:
                result.overall = cap
                result.caps_applied.append(f"overall_capped_{cap}_status_{status_code}")
                log.debug("Applied cap: status %d → overall≤%d", status_code, cap)

        if has_noindex:
            cap = self.config.noindex_overall_cap
            if result.overall > cap:
                result.overall = cap
                result.caps_applied.append(f"overall_capped_{cap}_noindex")
                log.debug("Applied cap: noindex → overall≤%d", cap)

        return result
