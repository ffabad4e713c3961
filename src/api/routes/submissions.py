"""Form submission endpoint."""

import asyncio
import time

from fastapi import APIRouter, Depends, HTTPException, Request, status

from api.dependencies import verify_api_key
from api.logging import RequestLog, log_request
from api.models.responses import (
    ErrorCodes,
    EventModel,
    SubmissionRequest,
    SubmissionResponse,
)
from models.events import Event, Response, Run
from services.bid_report import load_runs_from_file
from services.calendar import events_span, sync_events
from services.events import make_events

router = APIRouter(prefix="/v1")


def get_client_ip(request: Request) -> str:
    """Extract client IP from request, handling proxies."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def _load_runs() -> dict[str, Run]:
    """Read the bid report, reporting unreadable files as BID_REPORT_UNAVAILABLE."""
    try:
        return load_runs_from_file()
    except (FileNotFoundError, ValueError) as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "Bid report could not be read",
                "code": ErrorCodes.BID_REPORT_UNAVAILABLE,
                "details": [str(e)],
            },
        ) from e


def _build_events(
    responses: list[Response], details: list[tuple[str, str]]
) -> list[Event]:
    """Build all events for a submission, reading the bid report fresh."""
    return list(make_events(responses, load_runs=_load_runs, details=details))


@router.post("/submissions", response_model=SubmissionResponse)
async def submit_form(
    request: Request,
    submission: SubmissionRequest,
    _api_key: str = Depends(verify_api_key),
):
    """
    Turn a form submission into calendar events.

    Builds the day's events and, unless dry_run is set, replaces the events
    already on the calendar for that day.
    """
    start_time = time.time()
    responses = submission.responses
    category = responses[0] if responses and isinstance(responses[0], str) else None

    request_log = RequestLog(
        endpoint="/v1/submissions",
        method="POST",
        client_ip=get_client_ip(request),
        category=category,
        dry_run=submission.dry_run,
    )
    details: list[tuple[str, str]] = []

    try:
        events = await asyncio.to_thread(_build_events, responses, details)

        request_log.events_built = len(events)
        request_log.scheduled_hours = round(events_span(events).total_seconds() / 3600, 2)

        deleted = created = 0
        if not submission.dry_run:
            try:
                result = await sync_events(events)
            except LookupError as e:
                raise HTTPException(
                    status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                    detail={
                        "error": "Calendar not found",
                        "code": ErrorCodes.CALENDAR_NOT_FOUND,
                        "details": [str(e)],
                    },
                )
            deleted, created = result.deleted, result.created
            request_log.events_deleted = deleted
            details.extend(("event_created", event.title) for event in events)

        request_log.status_code = 200
        request_log.details.extend(details)
        request_log.processing_time_ms = int((time.time() - start_time) * 1000)

        return SubmissionResponse(
            category=category,
            events=[EventModel.from_event(event) for event in events],
            deleted=deleted,
            created=created,
            dry_run=submission.dry_run,
            details=[message for detail_type, message in details if detail_type == "warning"],
        )

    except HTTPException as e:
        request_log.status_code = e.status_code
        request_log.details.extend(details)
        if isinstance(e.detail, dict):
            request_log.error_code = e.detail.get("code")
            request_log.error_message = e.detail.get("error")
        else:
            request_log.error_message = str(e.detail)
        request_log.processing_time_ms = int((time.time() - start_time) * 1000)
        raise

    except Exception as e:
        # Unexpected errors (Graph failures, bad credentials)
        request_log.status_code = 500
        request_log.error_code = ErrorCodes.INTERNAL_ERROR
        request_log.error_message = str(e)
        request_log.processing_time_ms = int((time.time() - start_time) * 1000)

        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "Internal server error",
                "code": ErrorCodes.INTERNAL_ERROR,
                "details": [],
            },
        )

    finally:
        # Always log the request
        try:
            log_request(request_log)
        except Exception as e:
            # Don't fail the request if logging fails
            print(f"Failed to log request {request_log.request_id}: {e}")
