"""
Semantic test: order status transition table.

Invariant:
NOT_FILLED may move to FILLED; FILLED is terminal.
"""

from __future__ import annotations

from order_lifecycle.core.domain.order_status import (
    OrderStatus,
    is_terminal_status,
    is_valid_transition,
)
from order_lifecycle.core.domain.state import OrderNode
from order_lifecycle.core.lifecycle.completion import recompute_status


def test_not_filled_to_filled_is_allowed() -> None:
    assert is_valid_transition(OrderStatus.NOT_FILLED, OrderStatus.FILLED)
    assert is_valid_transition(OrderStatus.NOT_FILLED, OrderStatus.NOT_FILLED)


def test_filled_is_terminal() -> None:
    assert is_terminal_status(OrderStatus.FILLED)
    assert not is_terminal_status(OrderStatus.NOT_FILLED)

    assert is_valid_transition(OrderStatus.FILLED, OrderStatus.FILLED)
    assert not is_valid_transition(OrderStatus.FILLED, OrderStatus.NOT_FILLED)


def test_status_values_are_wire_strings() -> None:
    assert OrderStatus("FILLED") is OrderStatus.FILLED
    assert OrderStatus.NOT_FILLED.value == "NOT_FILLED"


def test_recompute_leaves_terminal_node_untouched() -> None:
    # Filled order whose quantities were later lowered by a redefinition.
    node = OrderNode(
        order_id="o-1",
        status=OrderStatus.FILLED,
        expected_quantity=100,
        filled_quantity_map={"f-1": 10},
    )

    assert not recompute_status(node)
    assert node.status is OrderStatus.FILLED
