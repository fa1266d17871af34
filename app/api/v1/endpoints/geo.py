"""Citation, visibility and competitor benchmark endpoints."""
from __future__ import annotations

from fastapi import APIRouter

from aiready.errors import InvalidSignalsError
from aiready.geo.citation import CitationInput, compute_citation_readiness, parse_facts
from aiready.geo.comparator import BenchmarkScore, compare_benchmarks
from aiready.geo.visibility import (
    VisibilityRates,
    aggregate_visibility_checks,
    compute_ai_visibility_score,
)
from aiready.signals import parse_page_signals
from app.api.models.errors import ErrorResponse
from app.api.models.requests import (
    BenchmarkCompareRequest,
    CitationReadinessRequest,
    VisibilityScoreRequest,
)
from app.api.models.responses import (
    BenchmarkComparisonResponse,
    CitationReadinessResponse,
    VisibilityScoreResponse,
)

router = APIRouter(tags=["GEO"])


@router.post(
    "/citation-readiness",
    response_model=CitationReadinessResponse,
    responses={
        422: {"model": ErrorResponse, "description": "Malformed page signals"},
    },
    summary="Citation readiness score",
    description="""
Score how quotable a page is for AI assistants.

**Components:**
- **Fact citability** (40%): mean of the top 5 extracted facts
- **LLM citation worthiness** (35%): rubric value, 0 when absent
- **Schema quality** (25%): high-value schema.org types

Up to 5 bonus points for external citations.
""",
)
async def citation_readiness(body: CitationReadinessRequest) -> CitationReadinessResponse:
    facts = parse_facts([fact.model_dump() for fact in body.facts])
    if body.signals is not None:
        parsed = parse_page_signals(body.signals)
        if not parsed.ok:
            raise InvalidSignalsError(parsed.errors)
        data = CitationInput.from_signals(parsed.signals, facts)
    else:
        data = CitationInput(
            citation_worthiness=body.citation_worthiness,
            schema_types=tuple(body.schema_types),
            structured_data_count=body.structured_data_count,
            external_link_count=body.external_link_count,
            facts=tuple(facts),
        )
    return CitationReadinessResponse(**compute_citation_readiness(data).to_dict())


@router.post(
    "/visibility-score",
    response_model=VisibilityScoreResponse,
    summary="AI visibility score",
    description="""
Weighted off-site visibility: LLM mentions (40%), AI search presence (30%),
share of voice (20%) and backlink authority (10%). Pass normalized rates, or
raw visibility `checks` with `referring_domains` to aggregate them first.
""",
)
async def visibility_score(body: VisibilityScoreRequest) -> VisibilityScoreResponse:
    if body.checks is not None:
        rates = aggregate_visibility_checks(
            [check.model_dump() for check in body.checks],
            referring_domains=body.referring_domains,
        )
    else:
        rates = VisibilityRates(
            llm_mention_rate=body.llm_mention_rate,
            ai_search_presence_rate=body.ai_search_presence_rate,
            share_of_voice=body.share_of_voice,
            backlink_authority_signal=body.backlink_authority_signal,
        )
    result = compute_ai_visibility_score(rates)
    return VisibilityScoreResponse(**result.to_dict(), rates=rates.clamped().to_dict())


@router.post(
    "/benchmarks/compare",
    response_model=BenchmarkComparisonResponse,
    summary="Compare against competitors",
    description="""
Compare the project's scores with competitor benchmarks. Rows are expected
newest first; only the first row per domain is used.
""",
)
async def compare(body: BenchmarkCompareRequest) -> BenchmarkComparisonResponse:
    benchmarks = [BenchmarkScore(**row.model_dump()) for row in body.benchmarks]
    comparison = compare_benchmarks(body.project.model_dump(), benchmarks)
    return BenchmarkComparisonResponse(**comparison)
