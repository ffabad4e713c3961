"""
Calendar reads and writes through MS Graph.

Built events replace whatever already starts on their day: the first new
event's day is cleared, then every new event is created.
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from msgraph.generated.models.date_time_time_zone import DateTimeTimeZone
from msgraph.generated.models.event import Event as GraphEvent
from msgraph.generated.users.item.calendars.item.events.events_request_builder import (
    EventsRequestBuilder,
)

from core.config import CALENDAR_NAME, CALENDAR_USER, TIMEZONE
from core.dates import ONE_DAY, day_bounds, starts_within_day
from core.graph_client import get_graph_client
from models.events import AllDayEvent, Event, TimedEvent

UTC = ZoneInfo("UTC")


@dataclass
class SyncResult:
    """Outcome of writing a submission's events to the calendar."""

    calendar_id: str | None = None
    deleted: int = 0
    created: int = 0


# =============================================================================
# CONVERSION
# =============================================================================


def _graph_time(value: datetime, tz: ZoneInfo) -> DateTimeTimeZone:
    """
    Graph timestamp for value.

    Aware values are sent in UTC so the repeated hour of a daylight saving
    change stays unambiguous; naive values are taken as wall-clock time in tz.
    """
    if value.tzinfo is not None:
        value = value.astimezone(UTC).replace(tzinfo=None)
        return DateTimeTimeZone(date_time=value.isoformat(timespec="seconds"), time_zone="UTC")
    return DateTimeTimeZone(date_time=value.isoformat(timespec="seconds"), time_zone=tz.key)


def to_graph_event(event: Event, tz_name: str = TIMEZONE) -> GraphEvent:
    """Convert a built event to an MS Graph Event."""
    tz = ZoneInfo(tz_name)
    if event.kind == "timed":
        return GraphEvent(
            subject=event.title,
            start=_graph_time(event.start_time, tz),
            end=_graph_time(event.end_time, tz),
        )

    # Graph all-day events run midnight to midnight
    start, end = day_bounds(event.date)
    return GraphEvent(
        subject=event.title,
        is_all_day=True,
        start=_graph_time(start, tz),
        end=_graph_time(end, tz),
    )


def parse_graph_start(event: GraphEvent, tz_name: str = TIMEZONE) -> datetime | None:
    """Start of a Graph event as an aware datetime in tz_name."""
    if not (event.start and event.start.date_time):
        return None
    try:
        source_tz = ZoneInfo(event.start.time_zone or "UTC")
    except (ZoneInfoNotFoundError, ValueError):
        source_tz = UTC
    # Graph reports 7 fractional digits; seconds precision is enough here
    start = datetime.fromisoformat(event.start.date_time[:19]).replace(tzinfo=source_tz)
    return start.astimezone(ZoneInfo(tz_name))


def starts_on_day(event: GraphEvent, day: date, tz_name: str = TIMEZONE) -> bool:
    """
    Whether a Graph event starts on day (local time).

    All-day events start at a floating midnight: Graph labels it with the
    response time zone, so the date is read as written instead of converted.
    """
    if not (event.start and event.start.date_time):
        return False
    if event.is_all_day:
        return date.fromisoformat(event.start.date_time[:10]) == day
    return starts_within_day(parse_graph_start(event, tz_name), day)


# =============================================================================
# CALENDAR OPERATIONS
# =============================================================================


async def find_calendar(user_id: str, calendar_name: str):
    """Find a calendar by name for a user, or None."""
    graph = get_graph_client()
    calendars_response = await graph.users.by_user_id(user_id).calendars.get()
    calendars = calendars_response.value if calendars_response.value else []

    for calendar in calendars:
        if calendar.name == calendar_name:
            return calendar
    return None


async def list_events_on(user_id: str, calendar_id: str, day: date) -> list[GraphEvent]:
    """
    Events that start on day (local time).

    The query window reaches a day either side so all-day events, whose
    floating midnight Graph reports as UTC, are returned too; the exact day is
    checked afterwards.
    """
    graph = get_graph_client()
    tz = ZoneInfo(TIMEZONE)
    start_dt, _ = day_bounds(day - ONE_DAY, tz)
    _, end_dt = day_bounds(day + ONE_DAY, tz)
    start_str = start_dt.astimezone(UTC).strftime("%Y-%m-%dT%H:%M:%SZ")
    end_str = end_dt.astimezone(UTC).strftime("%Y-%m-%dT%H:%M:%SZ")

    query_params = EventsRequestBuilder.EventsRequestBuilderGetQueryParameters(
        filter=f"start/dateTime ge '{start_str}' and start/dateTime lt '{end_str}'",
        orderby=["start/dateTime"],
        top=100,
    )
    config = EventsRequestBuilder.EventsRequestBuilderGetRequestConfiguration(
        query_parameters=query_params
    )
    events_response = await graph.users.by_user_id(user_id).calendars.by_calendar_id(
        calendar_id
    ).events.get(request_configuration=config)
    raw_events = events_response.value if events_response.value else []

    events = []
    for event in raw_events:
        if starts_on_day(event, day, TIMEZONE):
            events.append(event)
    return events


async def create_timed_event(
    user_id: str, calendar_id: str, title: str, start: datetime, end: datetime
) -> GraphEvent:
    graph = get_graph_client()
    return await graph.users.by_user_id(user_id).calendars.by_calendar_id(
        calendar_id
    ).events.post(to_graph_event(TimedEvent(title=title, start_time=start, end_time=end)))


async def create_all_day_event(
    user_id: str, calendar_id: str, title: str, day: date
) -> GraphEvent:
    graph = get_graph_client()
    return await graph.users.by_user_id(user_id).calendars.by_calendar_id(
        calendar_id
    ).events.post(to_graph_event(AllDayEvent(title=title, date=day)))


async def delete_event(user_id: str, calendar_id: str, event: GraphEvent) -> None:
    graph = get_graph_client()
    await graph.users.by_user_id(user_id).calendars.by_calendar_id(
        calendar_id
    ).events.by_event_id(event.id).delete()


async def sync_events(
    events: list[Event],
    user_id: str | None = None,
    calendar_name: str | None = None,
) -> SyncResult:
    """
    Replace the events starting on the submission's day with the new ones.

    Raises:
        LookupError: If the calendar does not exist
    """
    result = SyncResult()
    if not events:
        return result

    user_id = user_id or CALENDAR_USER
    calendar_name = calendar_name or CALENDAR_NAME
    calendar = await find_calendar(user_id, calendar_name)
    if calendar is None:
        raise LookupError(f"Calendar '{calendar_name}' not found for {user_id}")
    result.calendar_id = calendar.id

    # Clear any events on the selected day
    day = events[0].day
    for existing in await list_events_on(user_id, calendar.id, day):
        await delete_event(user_id, calendar.id, existing)
        result.deleted += 1
        print(f"  Deleted: {existing.subject}")

    for event in events:
        if event.kind == "timed":
            await create_timed_event(
                user_id, calendar.id, event.title, event.start_time, event.end_time
            )
        else:
            await create_all_day_event(user_id, calendar.id, event.title, event.date)
        result.created += 1
        print(f"  Created: {event.title}")

    return result


def events_span(events: list[Event]) -> timedelta:
    """Total elapsed time across timed events."""
    return sum(
        (_elapsed(e.start_time, e.end_time) for e in events if e.kind == "timed"),
        timedelta(),
    )


def _elapsed(start: datetime, end: datetime) -> timedelta:
    # Same-zone subtraction ignores DST offsets, so compare in UTC
    if start.tzinfo is not None and end.tzinfo is not None:
        return end.astimezone(UTC) - start.astimezone(UTC)
    return end - start
