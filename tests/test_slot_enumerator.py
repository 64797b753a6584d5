"""
Tests for SlotEnumerator.
"""

from datetime import date

import pendulum
import pytest

from queueslots.domain.business_clock import BusinessClock
from queueslots.domain.slot_enumerator import SlotEnumerator

TZ = "Asia/Riyadh"
MONDAY = date(2024, 11, 25)


def dt(value: str):
    return pendulum.parse(value, tz=TZ)


@pytest.fixture
def enumerator() -> SlotEnumerator:
    return SlotEnumerator(BusinessClock(TZ))


class TestSlotEnumerator:
    """Tests for enumerate()."""

    def test_walks_whole_business_day(self, enumerator):
        candidates = enumerator.enumerate(MONDAY, 60, ignore_current_time=True)

        assert len(candidates) == 24
        assert candidates[0].start == dt("2024-11-25 03:00")
        assert candidates[-1].start == dt("2024-11-26 02:00")
        assert all(c.duration_minutes() == 60 for c in candidates)

    def test_trailing_slot_may_pass_day_end(self, enumerator):
        candidates = enumerator.enumerate(MONDAY, 50, ignore_current_time=True)

        assert len(candidates) == 29
        assert candidates[-1].start == dt("2024-11-26 02:20")
        assert candidates[-1].end == dt("2024-11-26 03:10")

    def test_no_duplicates_when_duration_divides_unevenly(self, enumerator):
        candidates = enumerator.enumerate(MONDAY, 50, ignore_current_time=True)

        starts = [c.start for c in candidates]
        assert len(starts) == len(set(starts))
        assert starts == sorted(starts)

    def test_drops_past_candidates_today(self, enumerator):
        candidates = enumerator.enumerate(MONDAY, 60, now=dt("2024-11-25 10:30"))

        assert candidates[0].start == dt("2024-11-25 11:00")
        assert len(candidates) == 16

    def test_candidate_starting_now_is_kept(self, enumerator):
        candidates = enumerator.enumerate(MONDAY, 60, now=dt("2024-11-25 10:00"))

        assert candidates[0].start == dt("2024-11-25 10:00")

    def test_ignore_current_time(self, enumerator):
        candidates = enumerator.enumerate(
            MONDAY, 60, now=dt("2024-11-25 10:30"), ignore_current_time=True
        )

        assert len(candidates) == 24

    def test_other_day_is_not_cut(self, enumerator):
        candidates = enumerator.enumerate(MONDAY, 60, now=dt("2024-11-26 10:00"))

        assert len(candidates) == 24

    def test_after_midnight_tail_of_business_day_is_cut(self, enumerator):
        candidates = enumerator.enumerate(MONDAY, 60, now=dt("2024-11-26 01:00"))

        assert [c.start for c in candidates] == [dt("2024-11-26 01:00"), dt("2024-11-26 02:00")]

    def test_now_in_other_timezone(self, enumerator):
        # 07:30 UTC is 10:30 in Riyadh
        candidates = enumerator.enumerate(MONDAY, 60, now=pendulum.parse("2024-11-25T07:30:00Z"))

        assert candidates[0].start == dt("2024-11-25 11:00")

    def test_invalid_duration(self, enumerator):
        with pytest.raises(ValueError):
            enumerator.enumerate(MONDAY, 0, ignore_current_time=True)
