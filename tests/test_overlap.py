"""
Tests for the containment and conflict predicates.
"""

import pendulum
import pytest

from queueslots.domain.models import BusyInterval, TimeRange
from queueslots.domain.overlap import conflicts, conflicts_with_any, contains

TZ = "Asia/Riyadh"


def at(hhmm: str):
    return pendulum.parse(f"2024-11-25 {hhmm}", tz=TZ)


def rng(start: str, end: str) -> TimeRange:
    return TimeRange(start=at(start), end=at(end))


class TestConflicts:
    """Tests for conflicts()."""

    def test_back_to_back_never_conflicts(self):
        assert not conflicts(rng("10:00", "11:00"), rng("11:00", "12:00"))
        assert not conflicts(rng("11:00", "12:00"), rng("10:00", "11:00"))

    def test_overlapping_intervals_conflict(self):
        assert conflicts(rng("10:00", "11:00"), rng("10:30", "10:45"))
        assert conflicts(rng("10:00", "11:00"), rng("10:30", "11:30"))
        assert conflicts(rng("10:00", "11:00"), rng("09:00", "12:00"))
        assert conflicts(rng("10:00", "11:00"), rng("10:00", "11:00"))

    def test_disjoint_intervals_do_not_conflict(self):
        assert not conflicts(rng("10:00", "11:00"), rng("12:00", "13:00"))

    @pytest.mark.parametrize(
        "a, b",
        [
            (("10:00", "11:00"), ("10:30", "10:45")),
            (("10:00", "11:00"), ("11:00", "12:00")),
            (("09:00", "17:00"), ("16:59", "18:00")),
            (("09:00", "10:00"), ("14:00", "15:00")),
        ],
    )
    def test_symmetry(self, a, b):
        assert conflicts(rng(*a), rng(*b)) == conflicts(rng(*b), rng(*a))

    def test_null_bounds_never_conflict(self):
        candidate = rng("10:00", "11:00")

        assert not conflicts(candidate, BusyInterval(start=None, end=at("12:00")))
        assert not conflicts(candidate, BusyInterval(start=at("09:00"), end=None))
        assert not conflicts(BusyInterval(start=None, end=None), candidate)

    def test_inverted_busy_interval_never_conflicts(self):
        assert not conflicts(rng("10:00", "11:00"), BusyInterval(start=at("12:00"), end=at("09:00")))

    def test_conflicts_with_any(self):
        busy = [rng("08:00", "09:00"), BusyInterval(start=None, end=None), rng("10:30", "11:30")]

        assert conflicts_with_any(rng("10:00", "11:00"), busy)
        assert not conflicts_with_any(rng("09:00", "10:00"), busy)
        assert not conflicts_with_any(rng("09:00", "10:00"), [])


class TestContains:
    """Tests for contains()."""

    def test_closed_bounds(self):
        shift = rng("09:00", "17:00")

        assert contains(shift, rng("09:00", "10:00"))
        assert contains(shift, rng("16:00", "17:00"))
        assert contains(shift, rng("09:00", "17:00"))

    def test_partially_outside(self):
        shift = rng("09:00", "17:00")

        assert not contains(shift, rng("08:30", "09:30"))
        assert not contains(shift, rng("16:30", "17:30"))

    def test_point(self):
        shift = rng("09:00", "17:00")

        assert contains(shift, at("09:00"))
        assert contains(shift, at("17:00"))
        assert not contains(shift, at("17:01"))
