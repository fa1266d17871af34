"""Health check endpoint."""
from __future__ import annotations

from datetime import UTC, datetime

from fastapi import APIRouter

from aiready.audit.registry import default_registry
from aiready.scoring.weights import CATEGORY_WEIGHTS
from app.api.models.responses import HealthResponse

router = APIRouter(tags=["Health"])

VERSION = "0.1.0"


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check API health and engine status.",
)
async def health_check() -> HealthResponse:
    """Return API health status."""
    checks = {
        "rule_registry": bool(default_registry.list_all()),
        "category_weights": CATEGORY_WEIGHTS.total() == 100,
    }
    overall_status = "healthy" if all(checks.values()) else "degraded"

    return HealthResponse(
        status=overall_status,
        version=VERSION,
        timestamp=datetime.now(UTC),
        checks=checks,
    )
