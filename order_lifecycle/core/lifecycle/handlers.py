"""Effects of order-definition and fill events on an order node."""

from __future__ import annotations

from typing import TYPE_CHECKING

from order_lifecycle.core.domain.state import Fill

if TYPE_CHECKING:
    from order_lifecycle.core.domain.state import OrderNode
    from order_lifecycle.core.domain.types import ExecutionEvent


def apply_definition(event: ExecutionEvent, node: OrderNode) -> None:
    """Overwrite the node's definition fields from an order-definition event.

    Fills and the fill ledger are left untouched, so a definition arriving
    after fills keeps the quantity already accumulated.
    """
    node.order_id = event.order_id
    node.msg_id = event.event_id
    node.expected_quantity = event.order_quantity
    node.trade_date = event.trade_date
    node.transaction_time = event.transaction_time
    node.currency = event.currency


def fill_from_event(event: ExecutionEvent) -> Fill:
    # event_id is guaranteed for fills by ExecutionEvent validation.
    return Fill(
        fill_id=event.event_id,
        transaction_time=event.transaction_time,
        quantity=event.fill_quantity,
        price=event.fill_price,
    )


def apply_fill(event: ExecutionEvent, node: OrderNode) -> tuple[Fill, bool]:
    """Record the event's fill on the node.

    Returns the recorded fill and whether its fill id had already been seen on
    this node (a replay: the ledger total is unchanged).
    """
    fill = fill_from_event(event)
    replayed = node.add_fill(fill)
    return fill, replayed
