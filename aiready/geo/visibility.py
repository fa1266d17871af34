"""Off-site AI visibility score from aggregated visibility-check results."""
from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from aiready.scoring.grades import clamp_score, letter_grade, round_half_up
from aiready.scoring.weights import VISIBILITY_WEIGHTS, VisibilityWeights

# Provider whose checks measure AI search results rather than chat answers
AI_SEARCH_PROVIDER = "gemini_ai_mode"
# Referring domains at which backlink authority saturates
BACKLINK_SATURATION_DOMAINS = 50


@dataclass(frozen=True)
class VisibilityRates:
    """Normalized rates in [0, 1]. Out-of-range values are clamped on use."""
    llm_mention_rate: float = 0.0
    ai_search_presence_rate: float = 0.0
    share_of_voice: float = 0.0
    backlink_authority_signal: float = 0.0

    def to_dict(self) -> dict:
        return {
            "llm_mention_rate": self.llm_mention_rate,
            "ai_search_presence_rate": self.ai_search_presence_rate,
            "share_of_voice": self.share_of_voice,
            "backlink_authority_signal": self.backlink_authority_signal,
        }

    def clamped(self) -> VisibilityRates:
        """Copy with every rate in [0, 1]; non-finite rates become 0."""
        return VisibilityRates(
            llm_mention_rate=_clamp_rate(self.llm_mention_rate),
            ai_search_presence_rate=_clamp_rate(self.ai_search_presence_rate),
            share_of_voice=_clamp_rate(self.share_of_voice),
            backlink_authority_signal=_clamp_rate(self.backlink_authority_signal),
        )


@dataclass(frozen=True)
class AIVisibilityScore:
    overall: int
    grade: str
    breakdown: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {"overall": self.overall, "grade": self.grade, "breakdown": dict(self.breakdown)}


def _clamp_rate(value: float) -> float:
    if not math.isfinite(value):
        return 0.0
    return max(0.0, min(1.0, value))


def compute_ai_visibility_score(
    rates: VisibilityRates,
    *,
    weights: VisibilityWeights = VISIBILITY_WEIGHTS,
) -> AIVisibilityScore:
    """Weighted visibility score.

    Every rate is clamped to [0, 1] before weighting, so the score is
    monotonic in each rate and can never leave 0-100.
    """
    rates = rates.clamped()
    components = {
        "llm_mentions": rates.llm_mention_rate * weights.llm_mentions,
        "ai_search": rates.ai_search_presence_rate * weights.ai_search,
        "share_of_voice": rates.share_of_voice * weights.share_of_voice,
        "backlink_authority": rates.backlink_authority_signal * weights.backlink_authority,
    }
    overall = clamp_score(sum(components.values()))
    return AIVisibilityScore(
        overall=overall,
        grade=letter_grade(overall),
        breakdown={name: round_half_up(value) for name, value in components.items()},
    )


def _get(check: Any, name: str, default=None):
    if isinstance(check, Mapping):
        return check.get(name, default)
    return getattr(check, name, default)


def aggregate_visibility_checks(
    checks: Iterable[Any],
    referring_domains: int = 0,
) -> VisibilityRates:
    """Reduce raw visibility checks into normalized rates.

    Args:
        checks: Check results with ``llm_provider``, ``brand_mentioned`` and
            optionally ``competitor_mentions`` (each with ``mentioned``)
        referring_domains: Distinct domains linking to the project

    Returns:
        VisibilityRates. Rates without any supporting checks are 0.
    """
    checks = list(checks)
    llm_checks = [c for c in checks if _get(c, "llm_provider") != AI_SEARCH_PROVIDER]
    ai_checks = [c for c in checks if _get(c, "llm_provider") == AI_SEARCH_PROVIDER]

    user_mentions = sum(1 for c in llm_checks if _get(c, "brand_mentioned"))
    llm_rate = user_mentions / len(llm_checks) if llm_checks else 0.0
    ai_rate = (
        sum(1 for c in ai_checks if _get(c, "brand_mentioned")) / len(ai_checks)
        if ai_checks else 0.0
    )

    competitor_mentions = 0
    for check in llm_checks:
        for mention in _get(check, "competitor_mentions") or ():
            if _get(mention, "mentioned"):
                competitor_mentions += 1
    total_mentions = user_mentions + competitor_mentions
    share = user_mentions / total_mentions if total_mentions else 0.0

    backlink = min(1.0, max(0, referring_domains) / BACKLINK_SATURATION_DOMAINS)

    return VisibilityRates(
        llm_mention_rate=llm_rate,
        ai_search_presence_rate=ai_rate,
        share_of_voice=share,
        backlink_authority_signal=backlink,
    )
