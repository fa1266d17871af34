"""Page scoring and classification endpoints."""
from __future__ import annotations

from fastapi import APIRouter

from aiready.classify.content_type import detect_content_type
from aiready.errors import InvalidSignalsError
from aiready.scoring.recommendations import generate_recommendations, generate_strengths
from aiready.scoring.scorer import UngradedPage, score_page_data
from app.api.models.errors import ErrorResponse
from app.api.models.requests import ClassifyRequest, ScoreRequest
from app.api.models.responses import ContentTypeResponse, PageScoreResponse

router = APIRouter(tags=["Scoring"])


@router.post(
    "/score",
    response_model=PageScoreResponse,
    responses={
        422: {"model": ErrorResponse, "description": "Malformed page signals"},
    },
    summary="Score a page for AI readiness",
    description="""
Score one page from its already-extracted signals.

**Sub-scores (0-100):**
- **Technical** (25%): titles, headings, indexability, sitemap, llms.txt
- **Content** (30%): depth, links, readability, plus the LLM rubric when given
- **AI Readiness** (30%): structured data, direct answers, citations
- **Performance** (15%): Lighthouse performance, neutral 50 when absent

Critical issues, HTTP errors and noindex cap the result; applied caps are
listed in `caps_applied`.
""",
)
async def score(body: ScoreRequest) -> PageScoreResponse:
    """Score a page and attach recommendations and strengths."""
    result = score_page_data(body.signals, page_id=body.page_id)
    if isinstance(result, UngradedPage):
        raise InvalidSignalsError(result.errors)

    recommendations = generate_recommendations(result.issues, result.overall_score)
    strengths = generate_strengths(result.category_scores(), result.issues)
    return PageScoreResponse(
        **result.to_dict(),
        recommendations=[r.to_dict() for r in recommendations],
        strengths=[s.to_dict() for s in strengths],
    )


@router.post(
    "/classify",
    response_model=ContentTypeResponse,
    summary="Classify page content type",
    description="Classify a page from its URL path and schema.org types. Never fails on odd URLs.",
)
async def classify(body: ClassifyRequest) -> ContentTypeResponse:
    result = detect_content_type(body.url, body.schema_types)
    return ContentTypeResponse(**result.to_dict())
