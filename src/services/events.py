"""
Calendar event building from form submissions.

The first form response picks the kind of day; the matching builder reads the
remaining responses by position and yields the events for that day. Bad or
missing answers never raise: the builder skips them and, when a ``details``
list is passed in, records a ``(detail_type, message)`` entry explaining why.
"""

from collections.abc import Callable, Iterator, Sequence
from datetime import datetime, timedelta

from core.config import (
    CATEGORY_DAY_OFF,
    CATEGORY_RUN,
    CATEGORY_SHOW,
    DAY_OFF_TITLE,
    SHOW_TITLE,
    SPLIT_SHOW_HOURS,
    STRAIGHT_SHOW_HOURS,
)
from core.dates import add_duration, make_range, resolve_date, set_time_of_day
from core.times import parse_time
from models.events import AllDayEvent, Event, Piece, Response, Run, TimedEvent
from services.bid_report import load_runs_from_file

RunLoader = Callable[[], dict[str, Run]]
Details = list[tuple[str, str]]


def _response_at(responses: Sequence[Response], index: int) -> Response:
    """Positional answer, or None when the form sent fewer answers."""
    return responses[index] if index < len(responses) else None


def _note(details: Details | None, detail_type: str, message: str) -> None:
    print(f"  {message}")
    if details is not None:
        details.append((detail_type, message))


# =============================================================================
# BUILDERS
# =============================================================================


def _piece_event(run_number: str, piece: Piece, day: datetime) -> TimedEvent:
    start, end = make_range(day, piece.report_time, piece.sign_out)
    return TimedEvent(
        title=f"Run {run_number} Block {piece.block}",
        start_time=start,
        end_time=end,
    )


def make_run_events(
    responses: Sequence[Response],
    load_runs: RunLoader = load_runs_from_file,
    now: datetime | None = None,
    details: Details | None = None,
) -> Iterator[Event]:
    """
    Events for a bus run: one per piece of the run.

    Responses: [category, run number, "Today"/"Tomorrow"].
    """
    runs = load_runs()
    run_number = _response_at(responses, 1)
    if not isinstance(run_number, str) or run_number not in runs:
        _note(details, "warning", f"Run does not exist: {run_number}")
        return

    day = resolve_date(_response_at(responses, 2), now)
    for piece in runs[run_number].pieces:
        yield _piece_event(run_number, piece, day)


def make_show_events(
    responses: Sequence[Response],
    load_runs: RunLoader | None = None,
    now: datetime | None = None,
    details: Details | None = None,
) -> Iterator[Event]:
    """
    Events for a show duty.

    Responses: [category, start time, optional second start time,
    "Today"/"Tomorrow"]. A single start time is an 8 hour shift; two start
    times are two independent 4 hour shifts.
    """
    first_time = parse_time(_response_at(responses, 1))
    second_time = parse_time(_response_at(responses, 2))
    if first_time is None:
        _note(details, "warning", f"Unreadable show time: {_response_at(responses, 1)}")
        return

    day = resolve_date(_response_at(responses, 3), now)
    if second_time is None:
        start = set_time_of_day(day, first_time)
        end = add_duration(start, timedelta(hours=STRAIGHT_SHOW_HOURS))
        yield TimedEvent(title=SHOW_TITLE, start_time=start, end_time=end)
    else:
        for start_of_day in (first_time, second_time):
            start = set_time_of_day(day, start_of_day)
            end = add_duration(start, timedelta(hours=SPLIT_SHOW_HOURS))
            yield TimedEvent(title=SHOW_TITLE, start_time=start, end_time=end)


def make_day_off_events(
    responses: Sequence[Response],
    load_runs: RunLoader | None = None,
    now: datetime | None = None,
    details: Details | None = None,
) -> Iterator[Event]:
    """A single all-day event. Responses: [category, "Today"/"Tomorrow"]."""
    day = resolve_date(_response_at(responses, 1), now)
    yield AllDayEvent(title=DAY_OFF_TITLE, date=day.date())


BUILDERS = {
    CATEGORY_RUN: make_run_events,
    CATEGORY_SHOW: make_show_events,
    CATEGORY_DAY_OFF: make_day_off_events,
}


# =============================================================================
# DISPATCH
# =============================================================================


def make_events(
    responses: Sequence[Response],
    load_runs: RunLoader = load_runs_from_file,
    now: datetime | None = None,
    details: Details | None = None,
) -> Iterator[Event]:
    """
    Build calendar event(s) for the day's assignment.

    Args:
        responses: Form answers in question order
        load_runs: Returns the bid report runs; only called for run submissions
        now: Reference time for "Today"/"Tomorrow" (defaults to local now)
        details: Optional list collecting (detail_type, message) for skips

    Yields:
        TimedEvent or AllDayEvent values. An unrecognised category yields
        nothing.
    """
    category = _response_at(responses, 0)
    builder = BUILDERS.get(category) if isinstance(category, str) else None
    if builder is None:
        _note(details, "warning", f"Unrecognised submission category: {category}")
        return

    yield from builder(responses, load_runs=load_runs, now=now, details=details)
