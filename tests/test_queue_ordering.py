"""
Tests for queue display ordering.
"""

import pendulum

from queueslots.domain.queue_ordering import Ticket, order_queue

TZ = "Asia/Riyadh"


def dt(value: str):
    return pendulum.parse(value, tz=TZ)


def ids(tickets):
    return [t.ticket_id for t in tickets]


def test_groups_are_ordered_by_state():
    tickets = [
        Ticket("canceled", dt("2024-11-25 08:00"), is_canceled=True),
        Ticket("done", dt("2024-11-25 08:05"), done=True),
        Ticket("late", dt("2024-11-25 09:30")),
        Ticket("ready", dt("2024-11-25 09:40"), is_ready=True),
        Ticket("early", dt("2024-11-25 09:10")),
        Ticket("serving", dt("2024-11-25 09:50"), serving_now=True),
    ]

    assert ids(order_queue(tickets)) == ["serving", "ready", "early", "late", "done", "canceled"]


def test_canceled_wins_over_other_flags():
    tickets = [
        Ticket("a", dt("2024-11-25 08:00"), serving_now=True, is_canceled=True),
        Ticket("b", dt("2024-11-25 08:05"), done=True, is_canceled=True),
        Ticket("c", dt("2024-11-25 08:10"), done=True, is_ready=True),
    ]

    assert ids(order_queue(tickets)) == ["c", "a", "b"]


def test_reservations_by_scheduled_time():
    tickets = [
        Ticket("r1", dt("2024-11-20 10:00"), scheduled_for=dt("2024-11-25 15:00")),
        Ticket("r2", dt("2024-11-22 10:00"), scheduled_for=dt("2024-11-25 09:00")),
        Ticket("r3", dt("2024-11-21 10:00"), scheduled_for=dt("2024-11-25 12:00")),
    ]

    assert ids(order_queue(tickets, key="scheduled_for")) == ["r2", "r3", "r1"]


def test_empty_queue():
    assert order_queue([]) == []
