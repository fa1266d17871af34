"""Turn detected issues into prioritized recommendations and list strengths."""
from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from aiready.audit.base import IssueDefinition
from aiready.audit.definitions import ISSUE_DEFINITIONS
from aiready.platforms.readiness import PLATFORM_IDS

PRIORITY_FROM_SEVERITY = {"critical": "high", "warning": "medium", "info": "low"}
EFFORT_MAP = {"low": "quick", "medium": "moderate", "high": "significant"}
SEVERITY_RANK = {"critical": 3, "warning": 2, "info": 1}
PRIORITY_RANK = {"high": 0, "medium": 1, "low": 2}
IMPACT_RANK = {"high": 0, "medium": 1, "low": 2}

STRENGTH_THRESHOLDS = {
    "technical": 85,
    "content": 88,
    "ai_readiness": 85,
    "performance": 80,
}

STRENGTH_TEMPLATES = {
    "technical": (
        "Technical foundation is solid",
        "Core SEO infrastructure (indexation, canonicals, metadata) is in great shape.",
    ),
    "content": (
        "Content depth and structure stand out",
        "Pages provide comprehensive coverage with clear hierarchy and supporting assets.",
    ),
    "ai_readiness": (
        "Optimized for AI discovery",
        "Structured data, crawler access, and llms.txt signals are configured well.",
    ),
    "performance": (
        "Fast, stable experience",
        "Lighthouse and Core Web Vitals indicators show consistently quick rendering.",
    ),
}


@dataclass(frozen=True)
class Recommendation:
    issue_code: str
    title: str
    description: str
    priority: str
    effort: str
    impact: str
    estimated_improvement: int
    affected_platforms: list[str] = field(default_factory=list)
    steps: list[str] | None = None

    def to_dict(self) -> dict:
        return {
            "issue_code": self.issue_code,
            "title": self.title,
            "description": self.description,
            "priority": self.priority,
            "effort": self.effort,
            "impact": self.impact,
            "estimated_improvement": self.estimated_improvement,
            "affected_platforms": list(self.affected_platforms),
            "steps": list(self.steps) if self.steps else None,
        }


@dataclass(frozen=True)
class Strength:
    category: str
    title: str
    description: str

    def to_dict(self) -> dict:
        return {"category": self.category, "title": self.title, "description": self.description}


def _get(issue: Any, name: str):
    if isinstance(issue, Mapping):
        return issue.get(name)
    value = getattr(issue, name, None)
    # enums serialize by value
    return getattr(value, "value", value)


def title_from_code(code: str) -> str:
    return " ".join(part.capitalize() for part in code.lower().split("_"))


def impact_from_score(score_impact: int) -> str:
    impact = abs(score_impact)
    if impact >= 15:
        return "high"
    if impact >= 8:
        return "medium"
    return "low"


def _template(code: str, definition: IssueDefinition | None) -> Recommendation:
    if definition is None:
        return Recommendation(
            issue_code=code,
            title=title_from_code(code),
            description="Address this issue to improve AI visibility.",
            priority="medium",
            effort="moderate",
            impact="medium",
            estimated_improvement=5,
            affected_platforms=list(PLATFORM_IDS),
        )

    steps = None
    if definition.implementation_snippet:
        steps = ["Implement the following snippet:", definition.implementation_snippet]
    # rubric-mapped codes have no nominal impact; their ceiling stands in
    impact = definition.score_impact or definition.weight
    return Recommendation(
        issue_code=code,
        title=title_from_code(code),
        description=definition.recommendation,
        priority=PRIORITY_FROM_SEVERITY.get(definition.severity.value, "medium"),
        effort=EFFORT_MAP.get(definition.effort_level.value, "moderate"),
        impact=impact_from_score(impact),
        estimated_improvement=max(3, min(20, abs(impact))),
        affected_platforms=list(PLATFORM_IDS),
        steps=steps,
    )


def generate_recommendations(
    issues: Iterable[Any],
    overall_score: int,
    max_recommendations: int = 10,
    *,
    definitions: Mapping[str, IssueDefinition] = ISSUE_DEFINITIONS,
) -> list[Recommendation]:
    """Build at most ``max_recommendations`` recommendations, one per code.

    When a code appears with different severities the most severe one is
    kept. Pages scoring below 60 get a +2 boost on estimated improvement.
    """
    by_code: dict[str, str] = {}
    for issue in issues:
        code = _get(issue, "code")
        if not isinstance(code, str):
            continue
        severity = _get(issue, "severity") or ""
        existing = by_code.get(code)
        if existing is None or SEVERITY_RANK.get(severity, 0) > SEVERITY_RANK.get(existing, 0):
            by_code[code] = severity

    boost = 2 if overall_score < 60 else 0
    recommendations = []
    for code in by_code:
        template = _template(code, definitions.get(code))
        recommendations.append(Recommendation(
            issue_code=template.issue_code,
            title=template.title,
            description=template.description,
            priority=template.priority,
            effort=template.effort,
            impact=template.impact,
            estimated_improvement=template.estimated_improvement + boost,
            affected_platforms=template.affected_platforms,
            steps=template.steps,
        ))

    recommendations.sort(key=lambda r: (
        PRIORITY_RANK[r.priority],
        IMPACT_RANK[r.impact],
        -r.estimated_improvement,
    ))
    return recommendations[:max_recommendations]


def generate_strengths(
    category_scores: Mapping[str, int],
    issues: Iterable[Any],
    max_strengths: int = 5,
) -> list[Strength]:
    """List categories scoring at or above their strength threshold.

    A category with any critical issue is never reported as a strength.
    """
    critical_categories = {
        _get(issue, "category")
        for issue in issues
        if _get(issue, "severity") == "critical"
    }

    strengths = []
    for category, score in category_scores.items():
        if category in critical_categories or category not in STRENGTH_TEMPLATES:
            continue
        if score >= STRENGTH_THRESHOLDS.get(category, 85):
            title, description = STRENGTH_TEMPLATES[category]
            strengths.append(Strength(category=category, title=title, description=description))
    return strengths[:max_strengths]
