"""Tests for project progress lookups over repositories."""
from datetime import UTC, datetime

import pytest

from aiready.errors import NotFoundError
from aiready.progress.service import ProgressService, snapshot_from_rows


class FakeProjects:
    def __init__(self, projects):
        self._projects = projects

    def get_by_id(self, project_id):
        return self._projects.get(project_id)


class FakeCrawls:
    def __init__(self, crawls):
        self._crawls = crawls

    def list_by_project(self, project_id):
        return [c for c in self._crawls if c["project_id"] == project_id]


class FakeRows:
    """Pages, scores and issues keyed by crawl id."""

    def __init__(self, rows, issues=None):
        self._rows = rows
        self._issues = issues or {}
        self.loaded = []

    def list_by_job(self, job_id):
        self.loaded.append(job_id)
        return self._rows.get(job_id, [])

    def get_issues_by_job(self, job_id):
        return self._issues.get(job_id, [])


def _crawl(crawl_id, day, status="complete"):
    return {
        "id": crawl_id,
        "project_id": "proj-1",
        "status": status,
        "created_at": datetime(2024, 1, day, tzinfo=UTC),
    }


@pytest.fixture
def service():
    crawls = [
        _crawl("c1", 1),
        _crawl("c2", 10),
        _crawl("c3", 20, status="failed"),
    ]
    pages = FakeRows({
        "c1": [{"id": "a1", "url": "https://example.com/"}],
        "c2": [{"id": "b1", "url": "https://example.com/"}],
    })
    scores = FakeRows(
        {
            "c1": [{"page_id": "a1", "overall_score": 60}],
            "c2": [{"page_id": "b1", "overall_score": 72}],
        },
        issues={
            "c1": [{"page_id": "a1", "code": "MISSING_TITLE"}],
            "c2": [],
        },
    )
    return ProgressService(
        FakeProjects({"proj-1": {"id": "proj-1", "user_id": "user-1"}}),
        FakeCrawls(crawls),
        pages,
        scores,
    )


class TestProgressService:
    """Ownership checks and crawl selection."""

    def test_progress_between_latest_completed(self, service):
        """Compare the two newest completed crawls."""
        delta = service.get_project_progress("user-1", "proj-1")

        assert delta.current_crawl_id == "c2"
        assert delta.previous_crawl_id == "c1"
        assert delta.score_delta == 12
        assert delta.issues_fixed == 1

    def test_only_selected_crawls_loaded(self, service):
        """Rows are loaded only for the compared crawls."""
        service.get_project_progress("user-1", "proj-1")
        assert sorted(service.pages.loaded) == ["c1", "c2"]

    def test_other_users_project_not_found(self, service):
        """Another user's project is reported as not found."""
        with pytest.raises(NotFoundError):
            service.get_project_progress("user-2", "proj-1")

    def test_missing_project_not_found(self, service):
        """A missing project raises a 404 error."""
        with pytest.raises(NotFoundError) as exc_info:
            service.get_project_progress("user-1", "nope")
        assert exc_info.value.status_code == 404

    def test_single_completed_crawl(self):
        """One completed crawl gives no progress."""
        service = ProgressService(
            FakeProjects({"p": {"user_id": "u"}}),
            FakeCrawls([{**_crawl("c1", 1), "project_id": "p"}]),
            FakeRows({}),
            FakeRows({}),
        )
        assert service.get_project_progress("u", "p") is None


class TestSnapshotFromRows:
    """Snapshots from repository rows."""

    def test_objects_and_mappings(self):
        """Rows may be objects or mappings."""
        class Page:
            id = "p1"
            url = "https://example.com/x"
            word_count = None
            title = "X"

        snapshot = snapshot_from_rows(
            {"id": "c1"},
            [Page()],
            [{"page_id": "p1", "overall_score": 80, "content_score": 70}],
            [{"page_id": "p1", "code": "MISSING_H1", "severity": "warning"}],
        )

        assert snapshot.status == "complete"
        assert snapshot.pages[0].word_count == 0
        assert snapshot.scores[0].technical_score is None
        assert snapshot.issues[0].severity == "warning"
