"""
Domain event models.

These events represent immutable facts observed while folding execution
events into order state. They are consumed by loggers, recorders, and
monitoring pipelines.
"""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class OrderStatusTransitionEvent:
    root_order_id: str
    order_id: str | None
    prev_status: str
    next_status: str
    filled_quantity: int
    expected_quantity: int


@dataclass(slots=True)
class FillRecordedEvent:
    root_order_id: str
    order_id: str | None
    fill_id: str

    quantity: int
    price: str

    cum_filled_qty: int


@dataclass(slots=True)
class DuplicateFillObservedEvent:
    """A fill id was replayed on the same node.

    The ledger total is unchanged but the fills sequence grew by one entry.
    """

    root_order_id: str
    order_id: str | None
    fill_id: str

    fills_len: int
    ledger_len: int


@dataclass(slots=True)
class UnrecognizedEventAbsorbedEvent:
    root_order_id: str
    order_id: str
    event_id: str | None
    event_type: str | None
