"""Crawl-level issue endpoints: quick wins and platform readiness."""
from __future__ import annotations

from fastapi import APIRouter

from aiready.config.settings import settings
from aiready.platforms.readiness import evaluate_platform_readiness
from aiready.scoring.quick_wins import get_quick_wins
from app.api.models.requests import PlatformReadinessRequest, QuickWinsRequest
from app.api.models.responses import PlatformReadinessResponse, QuickWinsResponse

router = APIRouter(tags=["Crawl"])


@router.post(
    "/quick-wins",
    response_model=QuickWinsResponse,
    summary="Rank quick wins",
    description="""
Group a crawl's unresolved issues by code and rank them by nominal score
impact, then by the number of affected pages.
""",
)
async def quick_wins(body: QuickWinsRequest) -> QuickWinsResponse:
    limit = body.limit if body.limit is not None else settings.api.quick_win_limit
    wins = get_quick_wins([issue.model_dump() for issue in body.issues], limit=limit)
    return QuickWinsResponse(quick_wins=[w.to_dict() for w in wins])


@router.post(
    "/platform-readiness",
    response_model=PlatformReadinessResponse,
    summary="Per-assistant readiness",
    description="Evaluate ChatGPT, Claude, Perplexity and Gemini requirements against a crawl's issues.",
)
async def platform_readiness(body: PlatformReadinessRequest) -> PlatformReadinessResponse:
    platforms = evaluate_platform_readiness([issue.model_dump() for issue in body.issues])
    return PlatformReadinessResponse(platforms=[p.to_dict() for p in platforms])
