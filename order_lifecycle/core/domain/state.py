"""Order lifecycle state models.

An order is tracked as a small owned tree: the root ``OrderState`` holds its own
definition fields and fill ledger plus a mapping from child order id to child
``OrderNode``. Child nodes are never shared, never reparented and never
removed. Only one level of nesting is modelled.

These models are the value persisted by the hosting runtime for each root
order id, so they share the wire conventions of ``types.WireModel``.
"""

# pylint: disable=missing-function-docstring
from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from pydantic import ConfigDict, Field, computed_field

from order_lifecycle.core.domain.order_status import OrderStatus
from order_lifecycle.core.domain.types import WireModel


class Fill(WireModel):
    """A single execution against an order. Immutable once recorded."""

    fill_id: str = Field(..., min_length=1)
    transaction_time: datetime | None = None
    quantity: int = Field(..., gt=0)
    price: Decimal = Decimal("0")

    model_config = ConfigDict(frozen=True)


class OrderNode(WireModel):
    """One order's definition, fill ledger, status and child orders."""

    order_id: str | None = None
    # Id of the last order-definition event applied to this node.
    msg_id: str | None = None
    # Fixed when a child node is first created.
    parent_order_id: str | None = None

    trade_date: date | None = None
    transaction_time: datetime | None = None
    currency: str | None = None

    status: OrderStatus = OrderStatus.NOT_FILLED
    # 0 until an order-definition event has been applied.
    expected_quantity: int = 0

    # Arrival order, not event time. Not deduplicated by fill id.
    fills: list[Fill] = Field(default_factory=list)
    # Fill ledger: fill id -> quantity. Replaying a fill id overwrites.
    filled_quantity_map: dict[str, int] = Field(default_factory=dict)

    child_orders: dict[str, OrderNode] = Field(default_factory=dict)

    @computed_field(alias="filledQuantity")  # type: ignore[prop-decorator]
    @property
    def filled_quantity(self) -> int:
        """Ledger total of this node plus the filled quantity of every child."""
        own = sum(self.filled_quantity_map.values())
        from_children = sum(child.filled_quantity for child in self.child_orders.values())
        return own + from_children

    def add_fill(self, fill: Fill) -> bool:
        """Record a fill in the ledger and the fills sequence.

        Returns True if the fill id had already been recorded on this node.
        """
        seen = fill.fill_id in self.filled_quantity_map
        self.fills.append(fill)
        self.filled_quantity_map[fill.fill_id] = fill.quantity
        return seen

    def is_fully_filled(self) -> bool:
        return self.expected_quantity > 0 and self.filled_quantity >= self.expected_quantity

    def child_fills(self) -> list[Fill]:
        fills: list[Fill] = []
        for child in self.child_orders.values():
            fills.extend(child.fills)
        return fills

    def all_fills(self) -> list[Fill]:
        """Own fills followed by the fills of every child order."""
        return [*self.fills, *self.child_fills()]


class OrderState(OrderNode):
    """Root aggregate persisted per root order id."""

    # UTC wall-clock time of the last processed event, whatever its kind.
    last_action_timestamp: datetime | None = None
