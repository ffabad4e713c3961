"""Pydantic request/response models for API endpoints."""

from datetime import date as Date, datetime
from typing import Literal, Union

from pydantic import BaseModel

from models.events import Event

# Form answers: text, checkbox list, or grid
ResponseValue = Union[str, list[str], list[list[str]], None]


class HealthResponse(BaseModel):
    """Health check response."""

    status: str  # "healthy" or "unhealthy"
    version: str
    bid_report_available: bool
    timestamp: str  # ISO 8601 UTC
    error: str | None = None


class SubmissionRequest(BaseModel):
    """A form submission: answers in question order."""

    responses: list[ResponseValue]
    dry_run: bool = False


class EventModel(BaseModel):
    """A built calendar event."""

    kind: Literal["timed", "all_day"]
    title: str
    start_time: datetime | None = None
    end_time: datetime | None = None
    date: Date | None = None

    @classmethod
    def from_event(cls, event: Event) -> "EventModel":
        if event.kind == "timed":
            return cls(
                kind=event.kind,
                title=event.title,
                start_time=event.start_time,
                end_time=event.end_time,
            )
        return cls(kind=event.kind, title=event.title, date=event.date)


class SubmissionResponse(BaseModel):
    """Result of processing a submission."""

    category: str | None
    events: list[EventModel]
    deleted: int = 0
    created: int = 0
    dry_run: bool = False
    details: list[str] = []


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str
    code: str
    details: list[str] = []


class ErrorCodes:
    """Error code constants."""

    INVALID_REQUEST = "INVALID_REQUEST"
    UNAUTHORIZED = "UNAUTHORIZED"
    BID_REPORT_UNAVAILABLE = "BID_REPORT_UNAVAILABLE"
    CALENDAR_NOT_FOUND = "CALENDAR_NOT_FOUND"
    INTERNAL_ERROR = "INTERNAL_ERROR"
