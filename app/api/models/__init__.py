"""API Pydantic models."""
from app.api.models.errors import ErrorCodes, ErrorDetail, ErrorResponse
from app.api.models.requests import ScoreRequest
from app.api.models.responses import HealthResponse, PageScoreResponse

__all__ = [
    "ScoreRequest",
    "PageScoreResponse",
    "HealthResponse",
    "ErrorResponse",
    "ErrorDetail",
    "ErrorCodes",
]
