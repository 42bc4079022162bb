"""Completion evaluation for order nodes.

This is the only place where an order's status changes. The transition rule
lives in ``order_status``: NOT_FILLED may become FILLED, never the reverse.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from order_lifecycle.core.domain.order_status import (
    OrderStatus,
    is_terminal_status,
    is_valid_transition,
)

if TYPE_CHECKING:
    from order_lifecycle.core.domain.state import OrderNode


def evaluate_status(node: OrderNode) -> OrderStatus:
    """Return the status the node should hold given its current quantities."""
    if node.is_fully_filled():
        return OrderStatus.FILLED
    return OrderStatus.NOT_FILLED


def recompute_status(node: OrderNode) -> bool:
    """Promote the node to FILLED if it is fully filled.

    Returns True if the node's status changed.
    """
    if is_terminal_status(node.status):
        return False

    next_status = evaluate_status(node)
    if next_status == node.status:
        return False
    if not is_valid_transition(node.status, next_status):
        # Not in ORDER_ALLOWED_TRANSITIONS.
        return False
    node.status = next_status
    return True
