"""
Application services for listing and confirming bookable slots.

The service coordinates fetching busy intervals via a booking-data source
and delegates the actual availability resolution to the domain-level
``AvailabilityService``. This keeps the CLI thin and improves testability by
allowing the data source to be replaced via a simple protocol.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, List, Mapping, Optional, Protocol

from ..config import BranchConfig, ServiceConfig
from ..domain.availability import AvailabilityService
from ..domain.models import TimeRange, TimeSlot

BusyRecords = Dict[str, List[Mapping[str, Any]]]

BUSY_COLLECTIONS = ("blocked", "reserved", "employee")


class BusySourceProtocol(Protocol):
    """Protocol describing the booking-data source needed by the service."""

    async def get_busy_snapshot(
        self,
        branch: str,
        window: TimeRange,
        employee_id: Optional[str] = None,
    ) -> BusyRecords:
        """Return raw ``blocked``/``reserved``/``employee`` records overlapping ``window``."""


class SlotFinderService:
    """
    Orchestrates busy-interval retrieval and slot resolution for a branch.

    The source is read once per call; nothing is cached between calls, so
    ``confirm_available`` always sees the latest bookings.
    """

    def __init__(self, busy_source: BusySourceProtocol) -> None:
        self._busy_source = busy_source

    async def find_slots(
        self,
        *,
        branch: BranchConfig,
        service: ServiceConfig,
        day: date,
        employee_id: Optional[str] = None,
        ignore_current_time: bool = False,
        now: Optional[datetime] = None,
    ) -> List[TimeSlot]:
        """
        Fetch a busy snapshot for the business day and list available slots.
        """
        availability = AvailabilityService(branch.build_clock())
        bounds = availability.clock.business_day_bounds(day)
        # The trailing slot may run past the business day
        window = TimeRange(
            start=bounds.start,
            end=bounds.end.add(minutes=service.duration_minutes),
        )

        busy = await self.fetch_busy(branch=branch, window=window, employee_id=employee_id)

        return availability.list_available_slots(
            date=day,
            duration_minutes=service.duration_minutes,
            shift_template=branch.shift_template(),
            reservation_window=service.window(),
            blocked=busy["blocked"],
            reserved=busy["reserved"],
            require_employee=service.require_employee,
            employee=busy["employee"],
            ignore_current_time=ignore_current_time,
            now=now,
        )

    async def confirm_available(
        self,
        *,
        branch: BranchConfig,
        service: ServiceConfig,
        candidate: TimeRange,
        employee_id: Optional[str] = None,
    ) -> bool:
        """
        Re-check one interval against a fresh snapshot right before booking.
        """
        availability = AvailabilityService(branch.build_clock())
        busy = await self.fetch_busy(branch=branch, window=candidate, employee_id=employee_id)

        return availability.is_interval_available(
            candidate,
            blocked=busy["blocked"],
            reserved=busy["reserved"],
            require_employee=service.require_employee,
            employee=busy["employee"],
        )

    async def fetch_busy(
        self,
        *,
        branch: BranchConfig,
        window: TimeRange,
        employee_id: Optional[str] = None,
    ) -> BusyRecords:
        """Fetch busy records for the branch within ``window``."""
        records = await self._busy_source.get_busy_snapshot(
            branch=branch.name,
            window=window,
            employee_id=employee_id,
        )

        return self._ensure_busy_collections(records)

    @staticmethod
    def _ensure_busy_collections(records: Optional[BusyRecords]) -> BusyRecords:
        """
        Ensure every busy collection appears in the snapshot.

        Sources may omit a collection when it has no entries; we normalise
        that to an explicit empty list for deterministic downstream behaviour.
        """
        records = records or {}
        return {
            name: list(records.get(name) or [])
            for name in BUSY_COLLECTIONS
        }
