"""
Domain layer - Pure business logic without external dependencies.
"""

from .availability import AvailabilityService
from .availability_filter import AvailabilityFilter, BusySnapshot
from .business_clock import BusinessClock
from .exceptions import (
    BusySourceError,
    InvalidTimezone,
    MalformedBusyInterval,
    MalformedTimeOfDay,
    SlotError,
)
from .models import (
    BusyInterval,
    ReservationWindow,
    ShiftRange,
    TimeOfDay,
    TimeRange,
    TimeSlot,
    WeeklyShiftTemplate,
    Weekday,
    parse_duration,
)
from .overlap import conflicts, contains
from .queue_ordering import Ticket, order_queue
from .shift_resolver import ShiftResolver
from .shift_status import ShiftStatus, is_within_waiting_window, shift_status
from .slot_enumerator import SlotEnumerator

__all__ = [
    "AvailabilityFilter",
    "AvailabilityService",
    "BusinessClock",
    "BusyInterval",
    "BusySnapshot",
    "BusySourceError",
    "InvalidTimezone",
    "MalformedBusyInterval",
    "MalformedTimeOfDay",
    "ReservationWindow",
    "ShiftRange",
    "ShiftResolver",
    "ShiftStatus",
    "SlotEnumerator",
    "SlotError",
    "Ticket",
    "TimeOfDay",
    "TimeRange",
    "TimeSlot",
    "WeeklyShiftTemplate",
    "Weekday",
    "conflicts",
    "contains",
    "is_within_waiting_window",
    "order_queue",
    "parse_duration",
    "shift_status",
]
