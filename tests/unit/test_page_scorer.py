"""Tests for the composite page scorer."""
from __future__ import annotations

import pytest

from aiready.audit.base import IssueCategory, RuleResult
from aiready.scoring.scorer import (
    PageScore,
    ScoringConfig,
    UngradedPage,
    category_pass_rate,
    score_page,
    score_page_data,
)
from aiready.scoring.weights import CategoryWeights


class TestExcellentPage:
    """A page that passes every check."""

    def test_sub_scores(self, make_signals):
        """Each category scores near the top."""
        result = score_page(make_signals())

        assert result.technical_score == 100
        # 50/50 blend of heuristic 100 and rubric mean 97.5
        assert result.content_score == 99
        # 70/30 blend of checks 100 and citation worthiness 98
        assert result.ai_readiness_score == 99
        assert result.performance_score == 92

    def test_overall_and_grade(self, make_signals):
        """The weighted overall score earns an A."""
        result = score_page(make_signals())

        assert result.overall_score == 98
        assert result.letter_grade == "A"
        assert result.issues == ()
        assert result.caps_applied == ()

    def test_content_type_and_identity(self, make_signals):
        """The result carries the page identity and content type."""
        result = score_page(make_signals(), page_id="page-1")

        assert result.content_type == "blog_post"
        assert result.page_id == "page-1"
        assert result.url == "https://example.com/blog/ai-readiness-guide"
        assert result.status == "scored"


class TestWorstCasePage:
    """Empty page, no title or description, AI crawlers blocked, no rubric."""

    def test_low_technical_and_content(self, worst_data):
        """Technical and content scores stay low."""
        result = score_page_data(worst_data)

        assert isinstance(result, PageScore)
        assert result.technical_score <= 20
        assert result.content_score <= 20

    def test_critical_issues(self, worst_data):
        """The critical issues are reported."""
        result = score_page_data(worst_data)

        critical = [i.code for i in result.issues if i.severity.value == "critical"]
        assert "MISSING_TITLE" in critical
        assert "THIN_CONTENT" in critical
        assert "AI_CRAWLER_BLOCKED" in critical

    def test_caps_applied(self, worst_data):
        """Every triggered cap is recorded."""
        result = score_page_data(worst_data)

        assert result.caps_applied == (
            "technical_capped_20_missing_title",
            "content_capped_20_thin_content",
            "ai_readiness_capped_30_ai_crawler_blocked",
        )
        assert result.ai_readiness_score == 30
        assert result.performance_score == 50
        # (20*25 + 20*30 + 30*30 + 50*15) / 100 = 27.5, rounded half up
        assert result.overall_score == 28
        assert result.letter_grade == "F"

    def test_critical_issues_sorted_first(self, worst_data):
        """Issues are ordered by severity."""
        result = score_page_data(worst_data)

        severities = [i.severity.rank for i in result.issues]
        assert severities == sorted(severities, reverse=True)
        assert [i.code for i in result.issues[:3]] == [
            "MISSING_TITLE",
            "THIN_CONTENT",
            "AI_CRAWLER_BLOCKED",
        ]


class TestOverallCaps:
    """HTTP errors and noindex cap the overall score."""

    def test_error_status_caps_overall(self, make_signals):
        """An error status caps the overall score."""
        result = score_page(make_signals(status_code=404))

        assert result.overall_score == 30
        assert result.technical_score == 20
        assert result.caps_applied == (
            "technical_capped_20_http_status",
            "overall_capped_30_status_404",
        )

    def test_noindex_caps_overall(self, make_signals):
        """A noindex directive caps the overall score."""
        result = score_page(make_signals(robots_directives=["noindex", "follow"]))

        assert result.overall_score == 50
        assert "overall_capped_50_noindex" in result.caps_applied

    def test_redirect_status_not_capped(self, make_signals):
        """Redirects are not capped."""
        result = score_page(make_signals(status_code=301))

        assert result.overall_score == 98
        assert result.caps_applied == ()


class TestDegradedInput:
    """Missing optional signals fall back to documented defaults."""

    def test_no_lighthouse_is_neutral_performance(self, make_signals):
        """Missing Lighthouse data scores performance as neutral."""
        result = score_page(make_signals(lighthouse=None))

        assert result.performance_score == 50
        # (100*25 + 99*30 + 99*30 + 50*15) / 100 = 91.9
        assert result.overall_score == 92

    def test_no_rubric_uses_heuristics_only(self, make_signals):
        """Without a rubric the content score is heuristic only."""
        result = score_page(make_signals(llm_scores=None))

        assert result.content_score == 100
        assert result.ai_readiness_score == 100
        assert result.overall_score == 99

    def test_minimal_page_scores_without_error(self, minimal_data):
        """A page with only url and status still scores."""
        result = score_page_data(minimal_data)

        assert isinstance(result, PageScore)
        for value in (
            result.overall_score,
            result.technical_score,
            result.content_score,
            result.ai_readiness_score,
            result.performance_score,
        ):
            assert 0 <= value <= 100

    def test_deterministic(self, make_signals):
        """Scoring the same signals twice gives the same result."""
        signals = make_signals()
        assert score_page(signals) == score_page(signals)


class TestUngraded:
    """Malformed required input is reported, never scored as zero."""

    def test_missing_status_code(self):
        """A missing status code leaves the page ungraded."""
        result = score_page_data({"url": "https://example.com/"})

        assert isinstance(result, UngradedPage)
        assert result.status == "ungraded"
        assert result.url == "https://example.com/"
        assert result.errors

    def test_missing_url(self):
        """A missing URL leaves the page ungraded."""
        result = score_page_data({"status_code": 200})

        assert isinstance(result, UngradedPage)
        assert result.url is None

    def test_not_a_mapping(self):
        """Non-mapping input leaves the page ungraded."""
        result = score_page_data(["not", "signals"])

        assert isinstance(result, UngradedPage)

    def test_to_dict(self):
        """Serialize an ungraded page."""
        data = score_page_data({"url": "https://example.com/", "status_code": "200"}).to_dict()

        assert data["status"] == "ungraded"
        assert data["errors"]


class TestConfig:
    """Weights are injectable."""

    def test_custom_weights(self, make_signals):
        """Custom weights change the overall score."""
        config = ScoringConfig(weights=CategoryWeights(technical=0, content=0, ai_readiness=0, performance=100))
        result = score_page(make_signals(), config=config)

        assert result.overall_score == 92


class TestCategoryPassRate:
    """Weighted pass rates."""

    def _result(self, code, category, weight, earned, applicable=True, llm=False):
        return RuleResult(
            code=code,
            category=category,
            applicable=applicable,
            passed=earned == weight,
            weight=weight,
            earned=earned,
            llm_derived=llm,
        )

    def test_no_applicable_checks_rate_zero(self):
        """No applicable checks gives a zero rate."""
        results = [self._result("A", IssueCategory.CONTENT, 0, 0, applicable=False)]
        assert category_pass_rate(results, IssueCategory.CONTENT) == 0.0

    def test_partial_credit(self):
        """Weighted rate over the requested category only."""
        results = [
            self._result("A", IssueCategory.TECHNICAL, 10, 10),
            self._result("B", IssueCategory.TECHNICAL, 10, 0),
            self._result("C", IssueCategory.CONTENT, 10, 0),
        ]
        assert category_pass_rate(results, IssueCategory.TECHNICAL) == pytest.approx(0.5)

    def test_llm_checks_excluded_by_default(self):
        """Rubric-backed checks are excluded unless asked for."""
        results = [
            self._result("A", IssueCategory.CONTENT, 10, 10),
            self._result("B", IssueCategory.CONTENT, 20, 0, llm=True),
        ]
        assert category_pass_rate(results, IssueCategory.CONTENT) == 1.0
        assert category_pass_rate(results, IssueCategory.CONTENT, include_llm=True) == pytest.approx(1 / 3)
