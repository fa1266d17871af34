"""Engine and service error types."""
from __future__ import annotations

from typing import Any


class ErrorCodes:
    """Standardized error codes."""

    # 4xx Client Errors
    INVALID_SIGNALS = "INVALID_SIGNALS"
    INVALID_REQUEST = "INVALID_REQUEST"
    NOT_FOUND = "NOT_FOUND"

    # 5xx Server Errors
    INTERNAL_ERROR = "INTERNAL_ERROR"


class EngineError(Exception):
    """Base class for errors raised by the engine's service layer."""


class ServiceError(EngineError):
    """A caller-visible failure with a machine-readable code."""

    def __init__(
        self,
        code: str,
        status_code: int,
        message: str,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.status_code = status_code
        self.message = message
        self.details = details

    def to_dict(self) -> dict:
        error = {"code": self.code, "message": self.message}
        if self.details is not None:
            error["details"] = self.details
        return {"error": error}


class NotFoundError(ServiceError):
    """Missing resource, or a resource the caller does not own."""

    def __init__(self, message: str = "Not found"):
        super().__init__(ErrorCodes.NOT_FOUND, 404, message)


class InvalidSignalsError(ServiceError):
    """Page signals failed boundary validation."""

    def __init__(self, errors: list[str] | tuple[str, ...]):
        super().__init__(
            ErrorCodes.INVALID_SIGNALS,
            422,
            "Page signals are malformed",
            details={"errors": list(errors)},
        )
