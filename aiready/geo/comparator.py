"""
Competitor benchmark comparison.

Compares a project's crawl scores against competitor benchmark rows to
identify gaps per category and which site is most AI-ready.
"""
from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from aiready.scoring.grades import letter_grade

# (field, display name)
COMPARED_METRICS = [
    ("overall_score", "Overall"),
    ("technical_score", "Technical"),
    ("content_score", "Content"),
    ("ai_readiness_score", "AI Readiness"),
    ("performance_score", "Performance"),
]


@dataclass(frozen=True)
class BenchmarkScore:
    """Scores recorded for a competitor domain at one point in time."""
    competitor_domain: str
    overall_score: int
    technical_score: int
    content_score: int
    ai_readiness_score: int
    performance_score: int
    created_at: datetime | None = None
    letter_grade: str | None = None

    @property
    def grade(self) -> str:
        return self.letter_grade or letter_grade(self.overall_score)

    def to_dict(self) -> dict:
        return {
            "competitor_domain": self.competitor_domain,
            "overall_score": self.overall_score,
            "technical_score": self.technical_score,
            "content_score": self.content_score,
            "ai_readiness_score": self.ai_readiness_score,
            "performance_score": self.performance_score,
            "letter_grade": self.grade,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


def _get(row: Any, name: str, default: Any = None) -> Any:
    if isinstance(row, Mapping):
        return row.get(name, default)
    return getattr(row, name, default)


def _normalize_domain(domain: str) -> str:
    return domain.strip().lower()


def dedupe_benchmarks(rows: Iterable[BenchmarkScore]) -> list[BenchmarkScore]:
    """Keep one row per competitor domain: the first one in list order.

    Repositories return rows newest first, so the first row is the latest.
    Timestamps are deliberately not consulted.
    """
    seen: set[str] = set()
    unique = []
    for row in rows:
        key = _normalize_domain(row.competitor_domain)
        if key in seen:
            continue
        seen.add(key)
        unique.append(row)
    return unique


def compare_benchmarks(project_scores: Any, benchmarks: Iterable[BenchmarkScore]) -> dict:
    """
    Compare a project's scores with its competitors' latest benchmarks.

    Args:
        project_scores: Mapping or object with ``overall_score`` and the four
            category score fields (e.g. an aggregate of the latest crawl)
        benchmarks: Competitor rows, newest first

    Returns:
        Comparison with summary, per-metric diffs, per-competitor gaps
        (project minus competitor) and insights
    """
    competitors = dedupe_benchmarks(benchmarks)

    project_overall = _get(project_scores, "overall_score", 0) or 0
    # competitor maps are keyed by domain only; the project lives apart so a
    # domain can never shadow it
    summary = {
        "project": {"overall_score": project_overall, "letter_grade": letter_grade(project_overall)},
        "coverage": {},
        "grades": {},
        "leader": None,
        "project_leads": True,
    }
    for row in competitors:
        summary["coverage"][row.competitor_domain] = row.overall_score
        summary["grades"][row.competitor_domain] = row.grade

    # Ties go to the project
    if summary["coverage"]:
        best = max(summary["coverage"], key=summary["coverage"].get)
        if summary["coverage"][best] > project_overall:
            summary["leader"] = best
            summary["project_leads"] = False

    diffs = []
    for field_name, display_name in COMPARED_METRICS:
        diffs.append({
            "metric": display_name,
            "key": field_name,
            "project": _get(project_scores, field_name, 0) or 0,
            "values": {row.competitor_domain: getattr(row, field_name) for row in competitors},
        })

    gaps = []
    for row in competitors:
        deltas = {
            field_name: (_get(project_scores, field_name, 0) or 0) - getattr(row, field_name)
            for field_name, _ in COMPARED_METRICS
        }
        gaps.append({
            "competitor_domain": row.competitor_domain,
            "benchmark": row.to_dict(),
            "deltas": deltas,
        })

    comparison = {
        "summary": summary,
        "diffs": diffs,
        "competitors": gaps,
    }
    comparison["insights"] = get_comparison_insights(comparison)
    return comparison


def get_comparison_insights(comparison: dict) -> list[str]:
    """
    Generate insights from comparison results.

    Args:
        comparison: Result from compare_benchmarks()

    Returns:
        List of insight strings
    """
    insights = []
    summary = comparison.get("summary", {})
    coverage = summary.get("coverage", {})

    if not coverage:
        return insights

    project = summary.get("project", {})
    project_score = project.get("overall_score", 0)
    gap = project_score - max(coverage.values())

    leader = summary.get("leader")
    if summary.get("project_leads", leader is None):
        insights.append(f"Your site leads all tracked competitors by {gap} points")
    else:
        insights.append(f"{leader} leads with a {-gap} point advantage over your site")

    # Category gaps against the leader
    for competitor in comparison.get("competitors", []):
        if competitor["competitor_domain"] != leader:
            continue
        behind = [
            display for field_name, display in COMPARED_METRICS[1:]
            if competitor["deltas"][field_name] < -10
        ]
        if behind:
            insights.append(f"Largest gaps vs {leader}: {', '.join(behind)}")

    scores = [project_score, *coverage.values()]
    if max(scores) - min(scores) < 5:
        insights.append("All sites have similar AI-readiness scores")

    if project.get("letter_grade") in ("D", "F"):
        insights.append("Your site needs significant improvement for AI visibility")

    return insights
