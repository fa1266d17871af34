"""Score rounding, clamping and letter grades."""
from __future__ import annotations

import math
from dataclasses import dataclass

from aiready.config.settings import settings


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (2.5 -> 3, -2.5 -> -2)."""
    return int(math.floor(value + 0.5))


def round_half_up_1(value: float) -> float:
    """Round to one decimal place with halves going up."""
    return math.floor(value * 10 + 0.5) / 10


def clamp_score(value: float) -> int:
    """Round and clamp to the 0-100 score range."""
    return max(0, min(100, round_half_up(value)))


def letter_grade(score: float) -> str:
    """Letter grade for a 0-100 score."""
    g = settings.grades
    if score >= g.grade_a_threshold:
        return "A"
    elif score >= g.grade_b_threshold:
        return "B"
    elif score >= g.grade_c_threshold:
        return "C"
    elif score >= g.grade_d_threshold:
        return "D"
    else:
        return "F"


def grade_label(grade: str) -> str:
    return {
        "A": "excellent",
        "B": "good",
        "C": "fair",
        "D": "poor",
    }.get(grade, "critical")


def determine_grade(score: float) -> tuple[str, str]:
    """Determine letter grade and label from a score."""
    grade = letter_grade(score)
    return grade, grade_label(grade)


@dataclass(frozen=True)
class ScoreResult:
    """Outcome of ``make_score``: a valid score or an error message."""
    ok: bool
    value: int | None = None
    error: str | None = None


def make_score(value) -> ScoreResult:
    """Validate a raw score value without raising.

    Accepts ints and floats within 0-100 (floats are rounded half up).
    Anything else, including NaN and booleans, yields ``ok=False``.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return ScoreResult(ok=False, error=f"Score must be a number, got {type(value).__name__}")
    if isinstance(value, float) and not math.isfinite(value):
        return ScoreResult(ok=False, error="Score must be finite")
    if value < 0 or value > 100:
        return ScoreResult(ok=False, error=f"Score {value} is outside 0-100")
    return ScoreResult(ok=True, value=round_half_up(value))
