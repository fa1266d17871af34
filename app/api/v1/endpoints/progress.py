"""Crawl history endpoints: progress and insight snapshots."""
from __future__ import annotations

from fastapi import APIRouter

from aiready.insights.capture import CaptureArgs, capture_insights
from aiready.progress.delta import (
    CrawlSnapshot,
    IssueRecord,
    PageRecord,
    ScoreRecord,
    compute_progress,
    detect_regressions,
    latest_completed,
)
from aiready.progress.service import snapshot_from_rows
from aiready.scoring.aggregate import CATEGORY_FIELDS, aggregate_page_scores
from app.api.models.requests import CrawlItem, InsightsRequest, ProgressRequest
from app.api.models.responses import InsightsResponse, ProgressResponse

router = APIRouter(tags=["Progress"])


def _snapshot(crawl: CrawlItem) -> CrawlSnapshot:
    return snapshot_from_rows(
        {"id": crawl.id, "status": crawl.status, "created_at": crawl.created_at},
        [page.model_dump() for page in crawl.pages],
        [score.model_dump() for score in crawl.scores],
        [issue.model_dump() for issue in crawl.issues],
    )


def _crawl_summary(snapshot: CrawlSnapshot) -> dict:
    aggregate = aggregate_page_scores(snapshot.scores)
    summary = {"overall_score": aggregate.overall_score}
    for category, field_name in CATEGORY_FIELDS.items():
        summary[field_name] = aggregate.scores[category]
    return summary


@router.post(
    "/progress",
    response_model=ProgressResponse,
    summary="Progress between crawls",
    description="""
Compare the two newest completed crawls: score and category deltas, fixed
and new issues, top movers and grade changes. Pages are matched by URL.

Returns `{"progress": null}` until two crawls have completed.
""",
)
async def progress(body: ProgressRequest) -> ProgressResponse:
    latest = latest_completed([_snapshot(crawl) for crawl in body.crawls])
    if len(latest) < 2:
        return ProgressResponse(progress=None)

    current, previous = latest
    delta = compute_progress(current, previous)
    regressions = detect_regressions(_crawl_summary(current), _crawl_summary(previous))
    return ProgressResponse(
        progress=delta.to_dict(),
        regressions=[r.to_dict() for r in regressions],
    )


@router.post(
    "/insights",
    response_model=InsightsResponse,
    summary="Capture crawl insights",
    description="Shape a finished crawl into crawl-level summary rows and per-page hotspots.",
)
async def insights(body: InsightsRequest) -> InsightsResponse:
    args = CaptureArgs(
        crawl_id=body.crawl_id,
        project_id=body.project_id,
        scores=tuple(ScoreRecord(**score.model_dump()) for score in body.scores),
        issues=tuple(IssueRecord(**issue.model_dump()) for issue in body.issues),
        pages=tuple(PageRecord(**page.model_dump()) for page in body.pages),
    )
    return InsightsResponse(**capture_insights(args).to_dict())
