"""
Turns a weekly shift template into absolute shift intervals for one business day.
"""

import logging
from datetime import date, timedelta
from typing import List, Optional

from .business_clock import BusinessClock
from .exceptions import MalformedTimeOfDay
from .models import ReservationWindow, ShiftRange, TimeOfDay, TimeRange, WeeklyShiftTemplate

logger = logging.getLogger(__name__)


class ShiftResolver:
    """
    Resolves shift ranges against a calendar date.

    A business day can reach past midnight, so the ranges of the following
    weekday are resolved too (anchored at the following date). Nothing is
    sorted or merged: a candidate only needs to fit in one of the intervals.
    """

    def __init__(self, clock: BusinessClock):
        self.clock = clock

    def resolve_shifts(self, template: WeeklyShiftTemplate, day: date) -> List[TimeRange]:
        """
        Return the absolute shift intervals governing the business day of ``day``.
        """
        day = self.clock.to_date(day)
        intervals: List[TimeRange] = []

        for anchor_day in (day, day + timedelta(days=1)):
            for shift in template.for_date(anchor_day):
                interval = self.resolve_range(shift, anchor_day)
                if interval is not None:
                    intervals.append(interval)

        return intervals

    def resolve_window(
        self,
        window: Optional[ReservationWindow],
        day: date
    ) -> Optional[List[TimeRange]]:
        """
        Project a reservation window onto ``day`` and the following date.

        Returns None when there is no usable window, meaning no gate applies.
        """
        if window is None:
            return None

        day = self.clock.to_date(day)
        intervals = [
            interval
            for interval in (
                self.resolve_range(window, anchor_day)
                for anchor_day in (day, day + timedelta(days=1))
            )
            if interval is not None
        ]

        return intervals or None

    def resolve_range(self, shift: ShiftRange, day: date) -> Optional[TimeRange]:
        """
        Anchor one range at ``day``; ``to <= from`` ends on the next date.

        Returns None (and logs) when the range cannot be parsed.
        """
        try:
            opens = TimeOfDay.parse(shift.from_time)
            closes = TimeOfDay.parse(shift.to_time)
        except MalformedTimeOfDay as exc:
            logger.warning("Skipping shift %s on %s: %s", shift, day.isoformat(), exc)
            return None

        end_day = day if closes > opens else day + timedelta(days=1)
        start = self.clock.at(day, opens)
        end = self.clock.at(end_day, closes)

        if end <= start:
            # Only reachable around a DST jump
            logger.warning("Skipping empty shift %s on %s", shift, day.isoformat())
            return None

        return TimeRange(start=start, end=end)
