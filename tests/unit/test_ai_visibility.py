"""Tests for the AI visibility score."""
import math

import pytest

from aiready.geo.visibility import (
    VisibilityRates,
    aggregate_visibility_checks,
    compute_ai_visibility_score,
)

RATE_FIELDS = (
    "llm_mention_rate",
    "ai_search_presence_rate",
    "share_of_voice",
    "backlink_authority_signal",
)


class TestVisibilityScore:
    """Weighted 40/30/20/10 blend of normalized rates."""

    def test_all_zero(self):
        """No visibility scores zero."""
        result = compute_ai_visibility_score(VisibilityRates())

        assert result.overall == 0
        assert result.grade == "F"

    def test_all_one(self):
        """Full visibility scores 100 with the full breakdown."""
        result = compute_ai_visibility_score(VisibilityRates(1, 1, 1, 1))

        assert result.overall == 100
        assert result.grade == "A"
        assert result.breakdown == {
            "llm_mentions": 40,
            "ai_search": 30,
            "share_of_voice": 20,
            "backlink_authority": 10,
        }

    def test_half(self):
        """Half rates score half."""
        result = compute_ai_visibility_score(VisibilityRates(0.5, 0.5, 0.5, 0.5))

        assert result.overall == 50
        assert result.breakdown["ai_search"] == 15

    def test_out_of_range_rates_clamped(self):
        """Rates outside 0-1 are clamped before weighting."""
        result = compute_ai_visibility_score(VisibilityRates(2.0, -1.0, math.nan, 0))

        assert result.overall == 40
        assert result.breakdown["ai_search"] == 0
        assert result.breakdown["share_of_voice"] == 0

    def test_infinite_rates_count_as_zero(self):
        """Infinite rates never inflate the score."""
        rates = VisibilityRates(math.inf, -math.inf, 0.5, math.inf)
        result = compute_ai_visibility_score(rates)

        assert result.breakdown == {
            "llm_mentions": 0,
            "ai_search": 0,
            "share_of_voice": 10,
            "backlink_authority": 0,
        }
        assert rates.clamped().llm_mention_rate == 0.0

    @pytest.mark.parametrize("field_name", RATE_FIELDS)
    def test_monotonic_in_each_rate(self, field_name):
        """Raising any single rate never lowers the score."""
        previous = -1
        for step in range(11):
            rates = VisibilityRates(**{field_name: step / 10})
            overall = compute_ai_visibility_score(rates).overall
            assert overall >= previous
            previous = overall

    def test_to_dict(self):
        """Serialize the score, grade and breakdown."""
        data = compute_ai_visibility_score(VisibilityRates(llm_mention_rate=1)).to_dict()
        assert data == {
            "overall": 40,
            "grade": "F",
            "breakdown": {"llm_mentions": 40, "ai_search": 0, "share_of_voice": 0, "backlink_authority": 0},
        }


class TestAggregateChecks:
    """Raw checks reduced to rates."""

    def test_rates(self):
        """Reduce provider checks to the four rates."""
        checks = [
            {
                "llm_provider": "chatgpt",
                "brand_mentioned": True,
                "competitor_mentions": [{"name": "rival", "mentioned": True}],
            },
            {
                "llm_provider": "claude",
                "brand_mentioned": True,
                "competitor_mentions": [{"name": "rival", "mentioned": False}],
            },
            {"llm_provider": "perplexity", "brand_mentioned": False},
            {"llm_provider": "gemini_ai_mode", "brand_mentioned": True},
            {"llm_provider": "gemini_ai_mode", "brand_mentioned": False},
        ]
        rates = aggregate_visibility_checks(checks, referring_domains=25)

        assert rates.llm_mention_rate == pytest.approx(2 / 3)
        assert rates.ai_search_presence_rate == pytest.approx(0.5)
        assert rates.share_of_voice == pytest.approx(2 / 3)
        assert rates.backlink_authority_signal == pytest.approx(0.5)

    def test_no_checks(self):
        """No checks means zero rates."""
        assert aggregate_visibility_checks([]) == VisibilityRates()

    def test_backlinks_saturate(self):
        """Backlink authority saturates at 1.0."""
        rates = aggregate_visibility_checks([], referring_domains=500)
        assert rates.backlink_authority_signal == 1.0
