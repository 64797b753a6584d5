"""
Filters enumerated candidates down to bookable ones.
"""

from dataclasses import dataclass, field
from typing import Any, Iterable, List, Mapping, Optional, Union

from .models import BusyInterval, TimeRange
from .overlap import conflicts_with_any, contains

BusyRecord = Union[BusyInterval, Mapping[str, Any]]


def to_busy_intervals(items: Optional[Iterable[BusyRecord]], timezone: Any = "UTC") -> List[BusyInterval]:
    """Accept ``BusyInterval`` objects or raw data-layer records."""
    return [
        item if isinstance(item, BusyInterval) else BusyInterval.from_record(item, timezone)
        for item in items or []
    ]


@dataclass
class BusySnapshot:
    """
    Committed intervals read from the booking data layer at one moment.
    """
    blocked: List[BusyInterval] = field(default_factory=list)
    reserved: List[BusyInterval] = field(default_factory=list)
    employee: List[BusyInterval] = field(default_factory=list)

    @classmethod
    def from_records(
        cls,
        blocked: Optional[Iterable[BusyRecord]] = None,
        reserved: Optional[Iterable[BusyRecord]] = None,
        employee: Optional[Iterable[BusyRecord]] = None,
        timezone: Any = "UTC"
    ) -> "BusySnapshot":
        return cls(
            blocked=to_busy_intervals(blocked, timezone),
            reserved=to_busy_intervals(reserved, timezone),
            employee=to_busy_intervals(employee, timezone),
        )

    def is_free(self, candidate: TimeRange, require_employee: bool) -> bool:
        """Check the candidate against blocks, reservations and, if required, the employee."""
        if conflicts_with_any(candidate, self.blocked):
            return False
        if conflicts_with_any(candidate, self.reserved):
            return False
        if require_employee and conflicts_with_any(candidate, self.employee):
            return False
        return True


class AvailabilityFilter:
    """
    Keeps a candidate only when:

    1. it fits in at least one resolved shift,
    2. it fits in the reservation window (when one applies),
    3. it conflicts with no blocked and no reserved interval,
    4. it conflicts with no employee interval, if an employee is required.
    """

    def filter(
        self,
        candidates: Iterable[TimeRange],
        shifts: List[TimeRange],
        window: Optional[List[TimeRange]],
        busy: BusySnapshot,
        require_employee: bool = False
    ) -> List[TimeRange]:
        return [
            candidate
            for candidate in candidates
            if self._within_any(candidate, shifts)
            and (window is None or self._within_any(candidate, window))
            and busy.is_free(candidate, require_employee)
        ]

    @staticmethod
    def _within_any(candidate: TimeRange, intervals: List[TimeRange]) -> bool:
        return any(contains(interval, candidate) for interval in intervals)
