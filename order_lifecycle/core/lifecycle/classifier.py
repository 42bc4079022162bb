"""Stateless classification of execution events.

Every well-formed event maps to exactly one EventKind; nothing here raises.
"""

from __future__ import annotations

from enum import Enum

from order_lifecycle.core.domain.types import (
    FILL_TYPE,
    ORDER_DEFINITION_TYPE,
    ExecutionEvent,
)


class EventKind(str, Enum):
    ORDER_DEFINITION = "ORDER_DEFINITION"
    FILL = "FILL"
    UNRECOGNIZED = "UNRECOGNIZED"


def is_order_definition(event: ExecutionEvent) -> bool:
    return event.type == ORDER_DEFINITION_TYPE


def is_fill(event: ExecutionEvent) -> bool:
    return event.type == FILL_TYPE


def is_child_target(event: ExecutionEvent) -> bool:
    """Return True if the event concerns a child order of the root."""
    return event.parent_order_id is not None


def classify(event: ExecutionEvent) -> EventKind:
    if is_order_definition(event):
        return EventKind.ORDER_DEFINITION
    if is_fill(event):
        return EventKind.FILL
    return EventKind.UNRECOGNIZED
