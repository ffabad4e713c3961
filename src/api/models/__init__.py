"""API Pydantic models."""

from .responses import (
    ErrorCodes,
    ErrorResponse,
    EventModel,
    HealthResponse,
    SubmissionRequest,
    SubmissionResponse,
)

__all__ = [
    "HealthResponse",
    "ErrorResponse",
    "ErrorCodes",
    "EventModel",
    "SubmissionRequest",
    "SubmissionResponse",
]
