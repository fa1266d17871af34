"""Crawl-level score aggregation."""
from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from aiready.scoring.grades import letter_grade, make_score, round_half_up

CATEGORY_FIELDS = {
    "technical": "technical_score",
    "content": "content_score",
    "ai_readiness": "ai_readiness_score",
    "performance": "performance_score",
}


@dataclass(frozen=True)
class AggregateScores:
    """Mean scores over the pages of a crawl."""
    overall_score: int
    letter_grade: str
    scores: dict[str, int] = field(default_factory=dict)
    pages_scored: int = 0

    def to_dict(self) -> dict:
        return {
            "overall_score": self.overall_score,
            "letter_grade": self.letter_grade,
            "scores": dict(self.scores),
            "pages_scored": self.pages_scored,
        }


def _value(row: Any, name: str) -> int | None:
    if isinstance(row, Mapping):
        value = row.get(name)
    else:
        value = getattr(row, name, None)
    # missing, non-numeric, non-finite and out-of-range scores are skipped
    result = make_score(value)
    return result.value if result.ok else None


def average_scores(values: Iterable[float | None]) -> int:
    """Mean of the numeric values, rounded half up. Missing values are
    ignored; no values at all averages to 0."""
    present = [v for v in values if v is not None]
    if not present:
        return 0
    return round_half_up(sum(present) / len(present))


def aggregate_page_scores(rows: Iterable[Any]) -> AggregateScores:
    """Aggregate page scores (``PageScore`` objects or mappings with the same
    field names) into crawl-level means and a letter grade."""
    rows = list(rows)
    overall = average_scores(_value(row, "overall_score") for row in rows)
    scores = {
        category: average_scores(_value(row, attr) for row in rows)
        for category, attr in CATEGORY_FIELDS.items()
    }
    return AggregateScores(
        overall_score=overall,
        letter_grade=letter_grade(overall),
        scores=scores,
        pages_scored=len(rows),
    )
