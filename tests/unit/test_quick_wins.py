"""Tests for quick win ranking."""
from aiready.audit.base import CrawlIssue, IssueCategory, IssueSeverity
from aiready.scoring.quick_wins import get_quick_wins


def _issue(page_id, code, resolved=False):
    return {"page_id": page_id, "code": code, "resolved": resolved}


class TestQuickWins:
    """Grouping, ranking and filtering."""

    def test_groups_by_code_and_counts_pages(self):
        """Issues group by code with a page count."""
        issues = [
            _issue("p1", "MISSING_H1"),
            _issue("p2", "MISSING_H1"),
            _issue("p2", "MISSING_H1"),
        ]
        wins = get_quick_wins(issues)

        assert len(wins) == 1
        assert wins[0].code == "MISSING_H1"
        assert wins[0].affected_pages == 2
        assert wins[0].score_impact == -8

    def test_sorted_by_impact_then_pages(self):
        """Rank by impact, then by affected pages."""
        issues = [
            _issue("p1", "MISSING_CANONICAL"),
            _issue("p1", "AI_CRAWLER_BLOCKED"),
            _issue("p1", "MISSING_H1"),
            _issue("p2", "MISSING_H1"),
        ]
        codes = [w.code for w in get_quick_wins(issues)]

        # -25 first; MISSING_H1 and MISSING_CANONICAL are both -8
        assert codes == ["AI_CRAWLER_BLOCKED", "MISSING_H1", "MISSING_CANONICAL"]

    def test_resolved_and_unknown_codes_skipped(self):
        """Resolved and unknown issues are skipped."""
        issues = [
            _issue("p1", "MISSING_TITLE", resolved=True),
            _issue("p1", "NOT_A_REAL_CODE"),
        ]
        assert get_quick_wins(issues) == []

    def test_rubric_mapped_codes_skipped(self):
        """Rubric codes without a nominal impact are skipped."""
        assert get_quick_wins([_issue("p1", "CONTENT_CLARITY")]) == []

    def test_limit(self):
        """Limit the number of wins."""
        issues = [_issue("p1", code) for code in ("MISSING_TITLE", "MISSING_H1", "NOINDEX_SET")]

        assert len(get_quick_wins(issues, limit=2)) == 2
        assert get_quick_wins(issues, limit=0) == []

    def test_accepts_crawl_issue_objects(self):
        """CrawlIssue objects are accepted."""
        issue = CrawlIssue(
            page_id="p1",
            code="THIN_CONTENT",
            category=IssueCategory.CONTENT,
            severity=IssueSeverity.CRITICAL,
        )
        wins = get_quick_wins([issue])

        assert wins[0].effort_level
        assert wins[0].to_dict()["code"] == "THIN_CONTENT"

    def test_idempotent(self):
        """Ranking the same issues twice gives the same wins."""
        issues = [_issue("p1", "MISSING_TITLE"), _issue("p2", "NO_STRUCTURED_DATA")]
        assert get_quick_wins(issues) == get_quick_wins(issues)

    def test_empty(self):
        """No issues means no wins."""
        assert get_quick_wins([]) == []
