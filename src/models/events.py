"""
Data models for bid report runs and calendar events.

Runs and events are tagged unions: every variant carries a literal ``kind``
so callers branch on the tag instead of probing for attributes.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Literal, Union


@dataclass(frozen=True)
class Time:
    """A time of day as entered on the form or in the bid report."""

    hours: int
    minutes: int

    @property
    def minutes_of_day(self) -> int:
        return self.hours * 60 + self.minutes

    def __str__(self) -> str:
        return f"{self.hours}:{self.minutes:02d}"


@dataclass(frozen=True)
class Piece:
    """One bid report row: a contiguous piece of work within a run."""

    run: str
    block: str
    report_time: Time
    sign_out: Time


@dataclass(frozen=True)
class StraightRun:
    """A run worked as a single piece."""

    shift: Piece
    kind: Literal["straight"] = field(default="straight", init=False)

    @property
    def pieces(self) -> tuple[Piece, ...]:
        return (self.shift,)


@dataclass(frozen=True)
class SplitRun:
    """A run worked as two pieces on the same day."""

    first_half: Piece
    second_half: Piece
    kind: Literal["split"] = field(default="split", init=False)

    @property
    def pieces(self) -> tuple[Piece, ...]:
        return (self.first_half, self.second_half)


Run = Union[StraightRun, SplitRun]


@dataclass(frozen=True)
class TimedEvent:
    """Calendar event with start and end timestamps."""

    title: str
    start_time: datetime
    end_time: datetime
    kind: Literal["timed"] = field(default="timed", init=False)

    @property
    def day(self) -> date:
        return self.start_time.date()


@dataclass(frozen=True)
class AllDayEvent:
    """Calendar event covering a whole day."""

    title: str
    date: date
    kind: Literal["all_day"] = field(default="all_day", init=False)

    @property
    def day(self) -> date:
        return self.date


Event = Union[TimedEvent, AllDayEvent]

# A single form answer: text, checkbox list, or grid
Response = Union[str, list[str], list[list[str]], None]
