"""
Display ordering for a branch's waiting list and reservation list.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional

from pendulum import DateTime


@dataclass
class Ticket:
    """A waiting-queue ticket or a reservation, as far as ordering is concerned."""
    ticket_id: str
    created_at: DateTime
    scheduled_for: Optional[DateTime] = None
    is_canceled: bool = False
    done: bool = False
    is_ready: bool = False
    serving_now: bool = False


def order_queue(tickets: Iterable[Ticket], key: str = "created_at") -> List[Ticket]:
    """
    Order tickets for display.

    Being served first, then ready, then the waiting queue oldest first
    (by ``key``), then done, then canceled. Use ``key="scheduled_for"`` for
    reservations. Order within the non-queue groups is preserved.
    """
    tickets = list(tickets)

    canceled = [t for t in tickets if t.is_canceled]
    done = [t for t in tickets if t.done and not t.is_canceled]
    serving = [t for t in tickets if t.serving_now and not t.done and not t.is_canceled]
    ready = [
        t for t in tickets
        if t.is_ready and not t.done and not t.is_canceled and not t.serving_now
    ]
    waiting = sorted(
        (
            t for t in tickets
            if not (t.is_canceled or t.serving_now or t.done or t.is_ready)
        ),
        key=lambda t: _sort_value(t, key),
    )

    return serving + ready + waiting + done + canceled


def _sort_value(ticket: Ticket, key: str) -> DateTime:
    value = getattr(ticket, key)
    # Reservations without a schedule fall back to creation time
    return value if value is not None else ticket.created_at
