"""
Core business logic for resolving bookable time slots.

This is the heart of the application - pure domain logic without any
external dependencies (no API calls, no database, no I/O). The only
ambient input is the current instant, and even that can be injected.
"""

import logging
from datetime import date, datetime
from typing import Iterable, List, Optional

from .availability_filter import AvailabilityFilter, BusyRecord, BusySnapshot
from .business_clock import BusinessClock
from .models import ReservationWindow, TimeRange, TimeSlot, WeeklyShiftTemplate
from .shift_resolver import ShiftResolver
from .slot_enumerator import SlotEnumerator

logger = logging.getLogger(__name__)


class AvailabilityService:
    """
    Lists available slots for a service and re-checks single intervals.

    Algorithm for listing:
    1. Enumerate the business day in steps of the service duration
    2. Resolve the shifts of the day (and of the following day)
    3. Keep candidates inside a shift and the reservation window
    4. Drop candidates conflicting with blocked / reserved / employee intervals
    5. Deduplicate and sort by start
    """

    def __init__(self, clock: Optional[BusinessClock] = None):
        self.clock = clock or BusinessClock()
        self.enumerator = SlotEnumerator(self.clock)
        self.resolver = ShiftResolver(self.clock)
        self.availability_filter = AvailabilityFilter()

    def list_available_slots(
        self,
        *,
        date: date,
        duration_minutes: int,
        shift_template: WeeklyShiftTemplate,
        reservation_window: Optional[ReservationWindow],
        blocked: Iterable[BusyRecord] = (),
        reserved: Iterable[BusyRecord] = (),
        require_employee: bool = False,
        employee: Iterable[BusyRecord] = (),
        ignore_current_time: bool = False,
        now: Optional[datetime] = None
    ) -> List[TimeSlot]:
        """
        Find all bookable slots of one business day.

        Args:
            date: Calendar date of the business day
            duration_minutes: Service duration
            shift_template: Weekly working shifts of the branch
            reservation_window: Daily gate of the service, or None
            blocked: Manually blocked intervals
            reserved: Existing reservations
            require_employee: Whether the employee's own bookings matter
            employee: Existing bookings of the chosen employee
            ignore_current_time: Include slots that already started
            now: Current instant; read from the clock when omitted

        Returns:
            Slots sorted by start, without duplicates
        """
        now = now if now is not None else self.clock.now()
        busy = BusySnapshot.from_records(
            blocked=blocked,
            reserved=reserved,
            employee=employee if require_employee else (),
            timezone=self.clock.tz,
        )

        candidates = self.enumerator.enumerate(
            date,
            duration_minutes,
            now=now,
            ignore_current_time=ignore_current_time,
        )
        shifts = self.resolver.resolve_shifts(shift_template, date)
        window = self.resolver.resolve_window(reservation_window, date)

        available = self.availability_filter.filter(
            candidates,
            shifts=shifts,
            window=window,
            busy=busy,
            require_employee=require_employee,
        )

        unique = {(candidate.start, candidate.end): candidate for candidate in available}
        slots = [
            TimeSlot(time_range=candidate)
            for candidate in sorted(unique.values(), key=lambda r: r.start)
        ]

        logger.debug(
            "%d of %d candidates available on %s",
            len(slots), len(candidates), date.isoformat()
        )

        return slots

    def is_interval_available(
        self,
        candidate: TimeRange,
        *,
        blocked: Iterable[BusyRecord] = (),
        reserved: Iterable[BusyRecord] = (),
        require_employee: bool = False,
        employee: Iterable[BusyRecord] = ()
    ) -> bool:
        """
        Check one explicit interval against committed bookings only.

        Shift and reservation-window containment are not re-checked: the
        caller validated the interval against opening hours when it was
        offered. This is the guard to run right before committing a booking.
        """
        busy = BusySnapshot.from_records(
            blocked=blocked,
            reserved=reserved,
            employee=employee if require_employee else (),
            timezone=self.clock.tz,
        )

        return busy.is_free(candidate, require_employee)
