"""Tests for recommendations and strengths."""
from aiready.scoring.recommendations import (
    generate_recommendations,
    generate_strengths,
    impact_from_score,
    title_from_code,
)
from aiready.scoring.scorer import score_page_data


def _issue(code, severity, category="technical"):
    return {"code": code, "severity": severity, "category": category}


class TestRecommendations:
    """One recommendation per code, most urgent first."""

    def test_priority_order(self):
        """Recommendations are ordered by priority."""
        issues = [
            _issue("MISSING_OG_TAGS", "info"),
            _issue("MISSING_CANONICAL", "warning"),
            _issue("MISSING_TITLE", "critical"),
        ]
        recs = generate_recommendations(issues, overall_score=75)

        assert [r.issue_code for r in recs] == ["MISSING_TITLE", "MISSING_CANONICAL", "MISSING_OG_TAGS"]
        assert [r.priority for r in recs] == ["high", "medium", "low"]

    def test_fields_from_catalog(self):
        """Fields come from the issue catalog."""
        rec = generate_recommendations([_issue("MISSING_TITLE", "critical")], overall_score=75)[0]

        assert rec.title == "Missing Title"
        assert rec.effort == "quick"
        assert rec.impact == "high"
        assert rec.estimated_improvement == 15
        assert rec.steps[0] == "Implement the following snippet:"
        assert rec.affected_platforms == ["chatgpt", "claude", "perplexity", "gemini"]

    def test_low_score_boost(self):
        """A low overall score raises the estimated improvement."""
        issues = [_issue("MISSING_CANONICAL", "warning")]

        assert generate_recommendations(issues, overall_score=75)[0].estimated_improvement == 8
        assert generate_recommendations(issues, overall_score=59)[0].estimated_improvement == 10

    def test_rubric_code_uses_ceiling(self):
        """Rubric codes are estimated from their impact ceiling."""
        rec = generate_recommendations([_issue("CONTENT_CLARITY", "warning", "content")], 80)[0]

        assert rec.impact == "high"
        assert rec.estimated_improvement == 20

    def test_duplicates_collapse(self):
        """Repeated codes give one recommendation."""
        issues = [_issue("MISSING_H1", "warning")] * 5
        assert len(generate_recommendations(issues, overall_score=80)) == 1

    def test_unknown_code_gets_generic_template(self):
        """Unknown codes get a generic recommendation."""
        rec = generate_recommendations([_issue("CUSTOM_CHECK", "warning")], 80)[0]

        assert rec.title == "Custom Check"
        assert rec.priority == "medium"
        assert rec.estimated_improvement == 5

    def test_limit(self):
        """Limit the number of recommendations."""
        codes = ["MISSING_TITLE", "MISSING_H1", "MISSING_CANONICAL", "MISSING_OG_TAGS"]
        issues = [_issue(code, "warning") for code in codes]
        assert len(generate_recommendations(issues, 80, max_recommendations=2)) == 2

    def test_accepts_issue_objects(self, worst_data):
        """Issue objects from the scorer are accepted."""
        result = score_page_data(worst_data)
        recs = generate_recommendations(result.issues, result.overall_score)

        assert recs[0].priority == "high"


class TestStrengths:
    """Categories above threshold without critical issues."""

    def test_thresholds(self):
        """Categories at or above the threshold are strengths."""
        scores = {"technical": 85, "content": 87, "ai_readiness": 90, "performance": 80}
        strengths = generate_strengths(scores, [])

        assert [s.category for s in strengths] == ["technical", "ai_readiness", "performance"]

    def test_critical_issue_blocks_strength(self):
        """A critical issue blocks its category's strength."""
        scores = {"technical": 95, "content": 95}
        strengths = generate_strengths(scores, [_issue("THIN_CONTENT", "critical", "content")])

        assert [s.category for s in strengths] == ["technical"]

    def test_to_dict(self):
        """Serialize a strength."""
        strength = generate_strengths({"performance": 99}, [])[0]
        assert strength.to_dict()["title"] == "Fast, stable experience"


class TestHelpers:
    """Title and impact helpers."""

    def test_title_from_code(self):
        """Turn an issue code into a title."""
        assert title_from_code("NO_STRUCTURED_DATA") == "No Structured Data"

    def test_impact_buckets(self):
        """Bucket score impact into labels."""
        assert impact_from_score(-25) == "high"
        assert impact_from_score(-8) == "medium"
        assert impact_from_score(-3) == "low"
