"""
Busy-interval source backed by a JSON snapshot file.

Stands in for the booking data layer in the CLI and in tests. The file holds
either one snapshot for every branch::

    {"blocked": [...], "reserved": [...], "employees": {"emp-1": [...]}}

or one snapshot per branch under ``{"branches": {"<name>": {...}}}``.
Each record is ``{"from_date_time": "...", "to_date_time": "..."}``.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from ..domain.exceptions import BusySourceError
from ..domain.models import BusyInterval, TimeRange
from ..domain.overlap import conflicts

logger = logging.getLogger(__name__)


class JsonBusySource:
    """
    Loads busy records from a JSON file and serves them per branch and window.
    """

    def __init__(self, data_file: Optional[Path] = None):
        """
        Args:
            data_file: Path to the snapshot file; a missing file means no bookings
        """
        self.data_file = data_file
        self._data = self._load_data()

    def _load_data(self) -> Dict[str, Any]:
        """Load the snapshot from disk."""
        if self.data_file is None or not self.data_file.exists():
            return {}

        try:
            with open(self.data_file, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as exc:
            raise BusySourceError(f"Invalid JSON in {self.data_file}: {exc}") from exc

        if not isinstance(data, dict):
            raise BusySourceError(f"{self.data_file} must contain a JSON object at the root level.")

        return data

    def _branch_snapshot(self, branch: str) -> Mapping[str, Any]:
        branches = self._data.get("branches")
        if branches is None:
            return self._data
        if not isinstance(branches, Mapping):
            raise BusySourceError(f"'branches' in {self.data_file} must be a JSON object.")

        for name, snapshot in branches.items():
            if name.lower() == branch.lower():
                if not isinstance(snapshot, Mapping):
                    raise BusySourceError(f"Snapshot of branch '{name}' in {self.data_file} must be a JSON object.")
                return snapshot
        return {}

    async def get_busy_snapshot(
        self,
        branch: str,
        window: TimeRange,
        employee_id: Optional[str] = None,
    ) -> Dict[str, List[Mapping[str, Any]]]:
        """
        Return the records of a branch that overlap ``window``.

        Args:
            branch: Branch name
            window: Absolute interval of interest
            employee_id: Employee whose own bookings are wanted, if any

        Returns:
            Dictionary with ``blocked``, ``reserved`` and ``employee`` record lists
        """
        snapshot = self._branch_snapshot(branch)
        employees = snapshot.get("employees") or {}
        if not isinstance(employees, Mapping):
            raise BusySourceError(f"'employees' of branch '{branch}' must be a JSON object keyed by employee id.")
        employee_records = employees.get(employee_id, []) if employee_id else []

        return {
            "blocked": self._within(snapshot.get("blocked") or [], window),
            "reserved": self._within(snapshot.get("reserved") or [], window),
            "employee": self._within(employee_records, window),
        }

    def _within(self, records: List[Mapping[str, Any]], window: TimeRange) -> List[Mapping[str, Any]]:
        if not isinstance(records, list):
            raise BusySourceError(f"Busy records must be a JSON array, got {type(records).__name__}.")

        selected: List[Mapping[str, Any]] = []

        for record in records:
            if not isinstance(record, Mapping):
                logger.warning("Skipping busy record that is not an object: %r", record)
                continue

            interval = BusyInterval.from_record(record, window.start.tzinfo)
            # Incomplete records are passed through; the domain ignores them
            if not interval.is_bounded or conflicts(interval, window):
                selected.append(record)

        return selected
