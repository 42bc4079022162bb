"""
Order completion status definitions.

This module defines the canonical order statuses and the allowed transitions
between them. Completion is monotone: once an order is FILLED it stays FILLED,
even if further definition or fill events arrive afterwards.
"""

from __future__ import annotations

from enum import Enum


class OrderStatus(str, Enum):
    NOT_FILLED = "NOT_FILLED"
    FILLED = "FILLED"


# Terminal statuses: once reached, the status is never downgraded.
ORDER_TERMINAL_STATUSES: frozenset[OrderStatus] = frozenset({OrderStatus.FILLED})


# Allowed status transitions.
#
# Key   : previous status
# Value : set of allowed next statuses
#
# Notes:
# - Repeated statuses are allowed (re-evaluation is a no-op).
# - There is no way back from FILLED.
ORDER_ALLOWED_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.NOT_FILLED: frozenset(
        {
            OrderStatus.NOT_FILLED,
            OrderStatus.FILLED,
        }
    ),

    OrderStatus.FILLED: frozenset(
        {
            OrderStatus.FILLED,
        }
    ),
}


def is_terminal_status(status: OrderStatus) -> bool:
    """Return True if the given status is terminal."""
    return status in ORDER_TERMINAL_STATUSES


def is_valid_transition(prev_status: OrderStatus, next_status: OrderStatus) -> bool:
    """Return True if the transition prev_status -> next_status is allowed."""
    allowed = ORDER_ALLOWED_TRANSITIONS.get(prev_status)
    if allowed is None:
        return False
    return next_status in allowed
