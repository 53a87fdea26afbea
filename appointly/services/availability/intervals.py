# appointly/services/availability/intervals.py
"""
Half-open time intervals and wall-clock helpers.

All booking maths runs on absolute naive datetimes. "HH:MM" strings only
exist at the edges (schedule rows in, slot labels out).
"""
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Iterable

WALL_CLOCK_FORMAT = "%H:%M"


@dataclass(frozen=True)
class TimeInterval:
    """[start, end) range; touching endpoints do not overlap."""
    start: datetime
    end: datetime

    @classmethod
    def from_duration(cls, start: datetime, minutes: int) -> "TimeInterval":
        return cls(start, start + timedelta(minutes=minutes))

    @property
    def is_empty(self) -> bool:
        return self.start >= self.end

    def overlaps(self, other: "TimeInterval") -> bool:
        return self.start < other.end and self.end > other.start

    def overlaps_any(self, others: Iterable["TimeInterval"]) -> bool:
        return any(self.overlaps(other) for other in others)

    def contains(self, other: "TimeInterval") -> bool:
        return self.start <= other.start and other.end <= self.end


def parse_wall_clock(value: str) -> time:
    """Parse an "HH:MM" string. Raises ValueError on malformed input."""
    return datetime.strptime(value, WALL_CLOCK_FORMAT).time()


def format_wall_clock(moment: datetime) -> str:
    return moment.strftime(WALL_CLOCK_FORMAT)


def combine(day: date, wall_clock: str) -> datetime:
    """Anchor an "HH:MM" string on a calendar date."""
    return datetime.combine(day, parse_wall_clock(wall_clock))


def day_bounds(day: date) -> TimeInterval:
    """[midnight, next midnight) for a calendar date."""
    start = datetime.combine(day, time.min)
    return TimeInterval(start, start + timedelta(days=1))


def sunday_based_weekday(day: date) -> int:
    """Day of week with 0=Sunday .. 6=Saturday."""
    return (day.weekday() + 1) % 7
