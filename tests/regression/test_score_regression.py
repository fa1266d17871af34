"""
AI Readiness Score Regression Tests.

These tests ensure that code changes don't unexpectedly alter scoring behavior.
If a test fails, it means the scoring algorithm has changed - this may be intentional
(in which case update the expected values) or a bug (fix the code).

Golden data approach:
- Each fixture is a complete set of extracted page signals
- Tests pin the exact sub-scores, overall score and grade
- Any deviation indicates an algorithm or threshold change
"""
from __future__ import annotations

import copy
import json
from pathlib import Path

import pytest

from aiready.scoring.scorer import PageScore, score_page_data

FIXTURES_DIR = Path(__file__).parent.parent / "fixtures" / "signals"


def load_fixture(name: str) -> dict:
    path = FIXTURES_DIR / f"{name}.json"
    if not path.exists():
        pytest.skip("Fixture file not found")
    return json.loads(path.read_text(encoding="utf-8"))


class TestGoldenScores:
    """Pinned scores for the signal fixtures."""

    def test_excellent_page(self):
        """
        Excellent fixture scores 98 (Grade A).

        This fixture has:
        - AI crawlers allowed and llms.txt present
        - Complete Article, FAQPage and Organization markup
        - Answer-first headings with a summary section
        - Strong Lighthouse results and LLM rubric
        """
        result = score_page_data(load_fixture("excellent_page"))

        assert (
            result.technical_score,
            result.content_score,
            result.ai_readiness_score,
            result.performance_score,
        ) == (100, 99, 99, 92)
        assert result.overall_score == 98
        assert result.letter_grade == "A"
        assert result.content_type == "blog_post"

    def test_average_page(self):
        """
        Average fixture scores 72 (Grade C).

        This fixture has:
        - Good title and canonical, no meta description
        - No llms.txt and no structured data
        - Moderate word count, no Lighthouse or rubric data
        """
        result = score_page_data(load_fixture("average_page"))

        # technical 127/168 weighted checks; content (0.45 + 1) / 2; ai 50/65
        assert (
            result.technical_score,
            result.content_score,
            result.ai_readiness_score,
            result.performance_score,
        ) == (76, 73, 77, 50)
        # (76*25 + 73*30 + 77*30 + 50*15) / 100 = 71.5
        assert result.overall_score == 72
        assert result.letter_grade == "C"
        assert result.content_type == "landing_page"
        assert result.caps_applied == ()

    def test_poor_page(self):
        """
        Poor fixture scores 46 (Grade F).

        This fixture has:
        - Thin content, short title, no headings
        - Slow response, no sitemap, no llms.txt
        - Weak Lighthouse results
        """
        result = score_page_data(load_fixture("poor_page"))

        assert (
            result.technical_score,
            result.content_score,
            result.ai_readiness_score,
            result.performance_score,
        ) == (45, 20, 77, 35)
        assert result.caps_applied == ("content_capped_20_thin_content",)
        # (45*25 + 20*30 + 77*30 + 35*15) / 100 = 45.6
        assert result.overall_score == 46
        assert result.letter_grade == "F"
        assert result.content_type == "unknown"

    def test_poor_page_issue_codes(self):
        """The poor page raises its pinned issue codes."""
        result = score_page_data(load_fixture("poor_page"))
        codes = {issue.code for issue in result.issues}

        assert {
            "THIN_CONTENT",
            "TITLE_LENGTH",
            "MISSING_META_DESC",
            "MISSING_H1",
            "SLOW_RESPONSE",
            "MISSING_SITEMAP",
            "MISSING_LLMS_TXT",
            "NO_STRUCTURED_DATA",
            "POOR_READABILITY",
            "LH_PERF_LOW",
            "LARGE_PAGE_SIZE",
        } <= codes
        assert result.issues[0].code == "THIN_CONTENT"


class TestScoreConsistency:
    """Tests for score calculation consistency."""

    @pytest.mark.parametrize("name", ["excellent_page", "average_page", "poor_page"])
    def test_same_input_same_output(self, name):
        """Same input should always produce the same result."""
        data = load_fixture(name)
        results = [score_page_data(copy.deepcopy(data)).to_dict() for _ in range(5)]

        assert all(r == results[0] for r in results)


class TestScoreRangeInvariants:
    """Tests for score range invariants that must always hold."""

    @pytest.mark.parametrize("name", ["excellent_page", "average_page", "poor_page"])
    def test_scores_in_range(self, name):
        """Every score stays within 0-100."""
        result = score_page_data(load_fixture(name))

        assert isinstance(result, PageScore)
        for value in result.category_scores().values():
            assert 0 <= value <= 100
        assert 0 <= result.overall_score <= 100

    def test_more_content_never_decreases_content_score(self):
        """Adding words should not decrease the content score."""
        base = load_fixture("average_page")
        previous = -1
        for word_count in (0, 100, 199, 200, 450, 1000, 5000):
            result = score_page_data({**base, "word_count": word_count})
            assert result.content_score >= previous, f"dropped at {word_count} words"
            previous = result.content_score

    @pytest.mark.parametrize("name", ["excellent_page", "average_page", "poor_page"])
    def test_blocked_crawler_caps_ai_readiness(self, name):
        """Blocked crawlers cap the AI readiness score."""
        data = load_fixture(name)
        data["site_context"] = {**data["site_context"], "ai_crawlers_blocked": ["GPTBot"]}
        result = score_page_data(data)

        assert result.ai_readiness_score <= 30

    @pytest.mark.parametrize("name", ["excellent_page", "average_page", "poor_page"])
    def test_error_status_caps_overall(self, name):
        """An error status caps the overall score."""
        result = score_page_data({**load_fixture(name), "status_code": 503})
        assert result.overall_score <= 30

    def test_adding_llms_txt_never_lowers_technical(self):
        """Adding llms.txt never lowers the technical score."""
        base = load_fixture("average_page")
        with_llms = copy.deepcopy(base)
        with_llms["site_context"]["has_llms_txt"] = True

        assert (
            score_page_data(with_llms).technical_score
            >= score_page_data(base).technical_score
        )
