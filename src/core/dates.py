"""
Date helpers for turning form answers and times of day into timestamps.
"""

from datetime import date, datetime, time, timedelta, timezone, tzinfo
from zoneinfo import ZoneInfo

from core.config import DATE_TOMORROW, TIMEZONE
from models.events import Response, Time

ONE_DAY = timedelta(days=1)


def local_now() -> datetime:
    """Current time in the calendar's time zone."""
    return datetime.now(ZoneInfo(TIMEZONE))


def resolve_date(response: Response, now: datetime | None = None) -> datetime:
    """
    Read the submitter's choice of today or tomorrow.

    Anything other than "Tomorrow" (including "Today" and missing answers)
    means today. Only the date part matters; callers set the time of day.
    """
    if now is None:
        now = local_now()
    if response == DATE_TOMORROW:
        return add_to_date(now, ONE_DAY)
    return now


def set_time_of_day(value: datetime, time_of_day: Time) -> datetime:
    """
    Return value at the given hour and minute, seconds and microseconds zeroed.

    Hours or minutes past the end of their range roll into the next day.
    """
    midnight = value.replace(hour=0, minute=0, second=0, microsecond=0)
    return midnight + timedelta(hours=time_of_day.hours, minutes=time_of_day.minutes)


def make_range(value: datetime, start: Time, end: Time) -> tuple[datetime, datetime]:
    """
    Build a [start, end] pair on the day of value.

    An end strictly earlier in the day than the start crosses midnight and
    lands on the following day. Equal times give a zero-length range.
    """
    wraps_around = end.minutes_of_day < start.minutes_of_day
    start_time = set_time_of_day(value, start)
    end_day = add_to_date(value, ONE_DAY) if wraps_around else value
    end_time = set_time_of_day(end_day, end)
    return start_time, end_time


def add_to_date(value: datetime, offset: timedelta) -> datetime:
    """
    Return a copy of value shifted by offset on the wall clock.

    Used for calendar-day shifts: one day later is the same time of day even
    across a daylight saving change.
    """
    return value + offset


def add_duration(value: datetime, duration: timedelta) -> datetime:
    """
    Return the moment duration of elapsed time after value.

    Aware values are shifted in UTC, so a 4 hour shift lasts 4 real hours on
    the night the clocks change.
    """
    if value.tzinfo is None:
        return value + duration
    return (value.astimezone(timezone.utc) + duration).astimezone(value.tzinfo)


def day_bounds(day: date, tz: tzinfo | None = None) -> tuple[datetime, datetime]:
    """Midnight at the start of day and midnight at the start of the next."""
    start = datetime.combine(day, time.min, tzinfo=tz)
    return start, datetime.combine(day + ONE_DAY, time.min, tzinfo=tz)


def starts_within_day(moment: datetime, day: date) -> bool:
    """Whether moment falls in [midnight of day, midnight of the next day)."""
    start, end = day_bounds(day, moment.tzinfo)
    return start <= moment < end
