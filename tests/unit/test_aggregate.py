"""Tests for crawl-level score aggregation."""
import math

from aiready.scoring.aggregate import aggregate_page_scores, average_scores
from aiready.scoring.scorer import score_page_data


class TestAggregate:
    """Crawl means over page score rows."""

    def test_means_round_half_up(self):
        """Category means round halves up."""
        rows = [
            {"overall_score": 90, "technical_score": 80, "content_score": 71,
             "ai_readiness_score": 60, "performance_score": 50},
            {"overall_score": 71, "technical_score": 81, "content_score": 70,
             "ai_readiness_score": 61, "performance_score": 51},
        ]
        result = aggregate_page_scores(rows)

        # 80.5 -> 81
        assert result.overall_score == 81
        assert result.letter_grade == "B"
        assert result.scores == {
            "technical": 81,
            "content": 71,
            "ai_readiness": 61,
            "performance": 51,
        }
        assert result.pages_scored == 2

    def test_accepts_page_scores(self, excellent_data, worst_data):
        """PageScore objects aggregate like mappings."""
        rows = [score_page_data(excellent_data), score_page_data(worst_data)]
        result = aggregate_page_scores(rows)

        # (98 + 28) / 2
        assert result.overall_score == 63
        assert result.letter_grade == "D"

    def test_empty(self):
        """An empty crawl aggregates to zero."""
        result = aggregate_page_scores([])

        assert result.overall_score == 0
        assert result.letter_grade == "F"
        assert result.to_dict()["pages_scored"] == 0

    def test_missing_values_ignored(self):
        """Missing values do not drag the mean down."""
        assert average_scores([None, 70, None, 80]) == 75

    def test_invalid_scores_skipped(self):
        """Non-finite, out-of-range and non-numeric scores are left out of the mean."""
        rows = [
            {"overall_score": 80},
            {"overall_score": math.nan},
            {"overall_score": 140},
            {"overall_score": "90"},
            {"overall_score": 60},
        ]
        result = aggregate_page_scores(rows)

        assert result.overall_score == 70
        assert result.pages_scored == 5
