"""
Generates every structurally possible slot of a business day.
"""

from datetime import date, datetime
from typing import List, Optional

from .business_clock import BusinessClock
from .models import TimeRange


class SlotEnumerator:
    """
    Walks a business day in fixed steps of the service duration.

    The last candidate may run past the end of the business day; it is kept
    and left to shift containment to accept or reject.
    """

    def __init__(self, clock: BusinessClock):
        self.clock = clock

    def enumerate(
        self,
        day: date,
        duration_minutes: int,
        now: Optional[datetime] = None,
        ignore_current_time: bool = False,
        anchor_offset_hours: Optional[int] = None
    ) -> List[TimeRange]:
        """
        Enumerate candidate intervals ``[start, start + duration)``.

        Args:
            day: Calendar date whose business day is walked
            duration_minutes: Step and candidate length
            now: Current instant; candidates starting before it are dropped
                when ``day`` is today (calendar or business day)
            ignore_current_time: Keep past candidates regardless of ``now``
            anchor_offset_hours: Override the clock's business-day anchor

        Returns:
            Candidates in ascending order
        """
        if duration_minutes <= 0:
            raise ValueError(f"duration_minutes must be greater than zero, got {duration_minutes}")

        day = self.clock.to_date(day)
        bounds = self.clock.business_day_bounds(day, anchor_offset_hours)
        cutoff = None if ignore_current_time else self._cutoff(day, bounds, now)

        candidates: List[TimeRange] = []
        start = bounds.start

        while start < bounds.end:
            end = start.add(minutes=duration_minutes)
            if cutoff is None or start >= cutoff:
                candidates.append(TimeRange(start=start, end=end))
            start = end

        return candidates

    def _cutoff(self, day: date, bounds: TimeRange, now: Optional[datetime]):
        if now is None:
            return None

        local_now = self.clock.localize(now)
        if local_now.date() == day or bounds.start <= local_now < bounds.end:
            return local_now

        return None
