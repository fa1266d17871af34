"""Project progress lookups over caller-supplied repositories."""
from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Protocol

from aiready.errors import NotFoundError
from aiready.logger import get_logger
from aiready.progress.delta import (
    CrawlSnapshot,
    IssueRecord,
    PageRecord,
    ProgressDelta,
    ScoreRecord,
    compute_progress,
    latest_completed,
)

log = get_logger("progress.service")


class ProjectRepository(Protocol):
    def get_by_id(self, project_id: str) -> Any | None: ...


class CrawlRepository(Protocol):
    def list_by_project(self, project_id: str) -> list[Any]: ...


class PageRepository(Protocol):
    def list_by_job(self, job_id: str) -> list[Any]: ...


class ScoreRepository(Protocol):
    def list_by_job(self, job_id: str) -> list[Any]: ...

    def get_issues_by_job(self, job_id: str) -> list[Any]: ...


def _get(row: Any, name: str, default: Any = None) -> Any:
    if isinstance(row, Mapping):
        return row.get(name, default)
    return getattr(row, name, default)


def snapshot_from_rows(
    crawl: Any,
    pages: Iterable[Any],
    scores: Iterable[Any],
    issues: Iterable[Any],
) -> CrawlSnapshot:
    """Build a snapshot from repository rows (mappings or objects)."""
    return CrawlSnapshot(
        crawl_id=_get(crawl, "id"),
        status=_get(crawl, "status", "complete"),
        created_at=_get(crawl, "created_at"),
        pages=tuple(
            PageRecord(
                id=_get(p, "id"),
                url=_get(p, "url"),
                word_count=_get(p, "word_count", 0) or 0,
                title=_get(p, "title"),
            )
            for p in pages
        ),
        scores=tuple(
            ScoreRecord(
                page_id=_get(s, "page_id"),
                overall_score=_get(s, "overall_score", 0),
                technical_score=_get(s, "technical_score"),
                content_score=_get(s, "content_score"),
                ai_readiness_score=_get(s, "ai_readiness_score"),
                performance_score=_get(s, "performance_score"),
            )
            for s in scores
        ),
        issues=tuple(
            IssueRecord(
                page_id=_get(i, "page_id"),
                code=_get(i, "code"),
                category=_get(i, "category"),
                severity=_get(i, "severity"),
            )
            for i in issues
        ),
    )


class ProgressService:
    """Progress between a project's two newest completed crawls.

    Usage:
        service = ProgressService(projects, crawls, pages, scores)
        delta = service.get_project_progress(user_id, project_id)
    """

    def __init__(
        self,
        projects: ProjectRepository,
        crawls: CrawlRepository,
        pages: PageRepository,
        scores: ScoreRepository,
    ):
        self.projects = projects
        self.crawls = crawls
        self.pages = pages
        self.scores = scores

    def _require_project(self, user_id: str, project_id: str) -> Any:
        project = self.projects.get_by_id(project_id)
        # A project owned by someone else is indistinguishable from a missing one
        if project is None or _get(project, "user_id") != user_id:
            raise NotFoundError("Project not found")
        return project

    def _load_snapshot(self, crawl: Any) -> CrawlSnapshot:
        job_id = _get(crawl, "id")
        return snapshot_from_rows(
            crawl,
            self.pages.list_by_job(job_id),
            self.scores.list_by_job(job_id),
            self.scores.get_issues_by_job(job_id),
        )

    def get_project_progress(self, user_id: str, project_id: str) -> ProgressDelta | None:
        """Compute progress for a project the user owns.

        Raises:
            NotFoundError: If the project is missing or owned by another user

        Returns:
            ProgressDelta, or None when fewer than two crawls are complete
        """
        self._require_project(user_id, project_id)

        headers = [
            snapshot_from_rows(crawl, (), (), ())
            for crawl in self.crawls.list_by_project(project_id)
        ]
        latest = latest_completed(headers)
        if len(latest) < 2:
            log.info("Project %s has %d completed crawl(s); no progress", project_id, len(latest))
            return None

        current, previous = (
            self._load_snapshot({"id": s.crawl_id, "status": s.status, "created_at": s.created_at})
            for s in latest
        )
        return compute_progress(current, previous)
