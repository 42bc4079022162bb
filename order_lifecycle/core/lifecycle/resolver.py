"""Routing of an execution event to the order node it mutates."""

from __future__ import annotations

from typing import TYPE_CHECKING

from order_lifecycle.core.domain.state import OrderNode
from order_lifecycle.core.lifecycle.classifier import is_child_target

if TYPE_CHECKING:
    from order_lifecycle.core.domain.state import OrderState
    from order_lifecycle.core.domain.types import ExecutionEvent


def resolve_target_node(state: OrderState, event: ExecutionEvent) -> OrderNode:
    """Return the single node that receives the event's effect.

    Root-targeted events resolve to the root itself. Child-targeted events
    resolve to ``state.child_orders[event.order_id]`` (the event's own order
    id, not its parent id), creating an empty child on first reference.
    """
    if not is_child_target(event):
        return state

    child = state.child_orders.get(event.order_id)
    if child is None:
        child = OrderNode(order_id=event.order_id, parent_order_id=event.parent_order_id)
        state.child_orders[event.order_id] = child
    return child
