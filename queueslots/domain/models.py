"""
Domain models for shift templates, time intervals and bookable slots.
"""

import logging
import re
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

import pendulum
from pendulum import DateTime

from .exceptions import MalformedBusyInterval, MalformedTimeOfDay
from .overlap import conflicts

logger = logging.getLogger(__name__)

_TIME_OF_DAY_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})$")
_DURATION_PATTERN = re.compile(r"^(\d{1,3}):(\d{2})$")


class Weekday(str, Enum):
    """Canonical weekday identifiers, Sunday first."""
    SUNDAY = "Sunday"
    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"

    @classmethod
    def from_name(cls, name: str) -> "Weekday":
        """Look up a weekday by its English name, ignoring case."""
        key = str(name).strip().lower()
        for day in cls:
            if day.value.lower() == key:
                return day
        raise ValueError(f"Unknown weekday name: {name!r}")

    @classmethod
    def for_date(cls, day: date) -> "Weekday":
        """Return the weekday a calendar date falls on."""
        # isoweekday(): Monday=1 ... Sunday=7
        return list(cls)[day.isoweekday() % 7]


@dataclass(frozen=True, order=True)
class TimeOfDay:
    """
    A wall-clock time without a date.

    Only becomes an instant once anchored to a date in a timezone.
    """
    hour: int
    minute: int

    @classmethod
    def parse(cls, value: str) -> "TimeOfDay":
        """
        Parse an ``HH:mm`` string.

        Raises:
            MalformedTimeOfDay: If the value is not a valid time of day
        """
        match = _TIME_OF_DAY_PATTERN.match(value.strip()) if isinstance(value, str) else None
        if not match:
            raise MalformedTimeOfDay(f"Expected a time of day as HH:mm, got {value!r}")

        hour, minute = int(match.group(1)), int(match.group(2))
        if hour > 23 or minute > 59:
            raise MalformedTimeOfDay(f"Time of day out of range: {value!r}")

        return cls(hour=hour, minute=minute)

    def __str__(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"


@dataclass(frozen=True)
class ShiftRange:
    """
    One opening range of a weekday, as supplied by the branch data layer.

    The bounds are kept as raw ``HH:mm`` strings; they are parsed when the
    range is resolved so that one bad entry only drops itself.
    A ``to_time`` at or before ``from_time`` crosses midnight.
    """
    from_time: str
    to_time: str

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ShiftRange":
        """Build from a ``{"from": "HH:mm", "to": "HH:mm"}`` mapping."""
        return cls(from_time=data.get("from"), to_time=data.get("to"))

    def __str__(self) -> str:
        return f"{self.from_time}-{self.to_time}"


class ReservationWindow(ShiftRange):
    """Per-service daily gate, at most as wide as the branch shift."""


@dataclass
class WeeklyShiftTemplate:
    """
    Weekly working shifts of a branch, keyed by weekday.

    Ranges of one weekday may be unsorted and may overlap.
    """
    shifts: Dict[Weekday, List[ShiftRange]] = field(default_factory=dict)

    def for_weekday(self, day: Weekday) -> List[ShiftRange]:
        return list(self.shifts.get(day, []))

    def for_date(self, day: date) -> List[ShiftRange]:
        return self.for_weekday(Weekday.for_date(day))

    @classmethod
    def from_mapping(cls, mapping: Mapping[Any, Iterable[Any]]) -> "WeeklyShiftTemplate":
        """
        Build a template from ``{"Monday": [{"from": ..., "to": ...}], ...}``.

        Raises:
            ValueError: If a key is not a weekday name
        """
        shifts: Dict[Weekday, List[ShiftRange]] = {}

        for name, ranges in mapping.items():
            day = name if isinstance(name, Weekday) else Weekday.from_name(name)
            day_shifts = shifts.setdefault(day, [])

            for item in ranges or []:
                if isinstance(item, ShiftRange):
                    day_shifts.append(item)
                elif isinstance(item, Mapping):
                    day_shifts.append(ShiftRange.from_mapping(item))
                else:
                    logger.warning("Skipping %s shift entry that is not a mapping: %r", day.value, item)

        return cls(shifts=shifts)


@dataclass(frozen=True)
class TimeRange:
    """
    Represents an immutable time range with start and end datetime.

    Invariant: start must be before end.
    """
    start: DateTime
    end: DateTime

    def __post_init__(self):
        if self.start >= self.end:
            raise ValueError(f"Start time {self.start} must be before end time {self.end}")

    def duration_minutes(self) -> int:
        """Return the duration in minutes."""
        return int((self.end - self.start).total_seconds() / 60)

    def overlaps(self, other: Union["TimeRange", "BusyInterval"]) -> bool:
        """Check if this range conflicts with another; touching ends do not."""
        return conflicts(self, other)

    def __str__(self) -> str:
        return f"{self.start.format('DD.MM.YYYY HH:mm')} - {self.end.format('HH:mm')}"


@dataclass(frozen=True)
class BusyInterval:
    """
    An already committed span: a manual block, a reservation or an
    employee booking.

    Either bound may be ``None`` when the source record was incomplete or
    unparsable; such an interval never conflicts with anything.
    """
    start: Optional[DateTime]
    end: Optional[DateTime]

    @property
    def is_bounded(self) -> bool:
        return self.start is not None and self.end is not None and self.start < self.end

    @classmethod
    def from_record(
        cls,
        record: Mapping[str, Any],
        timezone: Any = "UTC"
    ) -> "BusyInterval":
        """
        Convert a ``{"from_date_time": ..., "to_date_time": ...}`` record.

        Naive timestamps are read in ``timezone``. Bounds that are missing or
        cannot be parsed become ``None`` instead of failing the whole call.
        """
        bounds = []
        for key in ("from_date_time", "to_date_time"):
            value = record.get(key)
            try:
                bounds.append(parse_instant(value, timezone))
            except MalformedBusyInterval as exc:
                if value is not None:
                    logger.warning("Ignoring busy interval bound %s: %s", key, exc)
                bounds.append(None)

        return cls(start=bounds[0], end=bounds[1])


@dataclass(frozen=True)
class TimeSlot:
    """
    A bookable slot returned to callers.
    """
    time_range: TimeRange

    @property
    def start(self) -> DateTime:
        return self.time_range.start

    @property
    def end(self) -> DateTime:
        return self.time_range.end

    def format_display(self) -> str:
        """
        Format the slot for display.
        Format: Weekday, DD.MM.YYYY | HH:mm - HH:mm (N min)
        """
        weekday = Weekday.for_date(self.start).value
        date_str = self.start.format("DD.MM.YYYY")
        time_str = f"{self.start.format('HH:mm')} - {self.end.format('HH:mm')}"
        duration = self.time_range.duration_minutes()

        return f"{weekday}, {date_str} | {time_str} ({duration} min)"


def parse_instant(value: Any, timezone: Any = "UTC") -> DateTime:
    """
    Parse an absolute instant from an ISO 8601 string or a datetime.

    Raises:
        MalformedBusyInterval: If the value is missing or not a datetime
    """
    if value is None:
        raise MalformedBusyInterval("bound is missing")

    if isinstance(value, datetime):
        return pendulum.instance(value, tz=timezone)

    if not isinstance(value, str):
        raise MalformedBusyInterval(f"unsupported bound type {type(value).__name__}")

    try:
        parsed = pendulum.parse(value, tz=timezone)
    except ValueError as exc:
        raise MalformedBusyInterval(f"could not parse {value!r}: {exc}") from exc

    if not isinstance(parsed, DateTime):
        raise MalformedBusyInterval(f"{value!r} is not a date and time")

    return parsed


def parse_duration(value: Union[int, str]) -> int:
    """
    Return a service duration in minutes.

    Accepts a number of minutes or an ``HH:mm`` duration string.
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid duration: {value!r}")

    if isinstance(value, int):
        minutes = value
    elif isinstance(value, str) and value.strip().isdigit():
        minutes = int(value.strip())
    else:
        match = _DURATION_PATTERN.match(str(value).strip())
        if not match:
            raise ValueError(f"Invalid duration: {value!r}. Use minutes or HH:mm.")
        minutes = int(match.group(1)) * 60 + int(match.group(2))

    if minutes <= 0:
        raise ValueError("Duration must be greater than zero")

    return minutes
