"""Core wire models.

This module defines the canonical Pydantic models for the execution events
consumed by the lifecycle aggregator. These types are treated as schema
definitions: unknown input fields are ignored on read, and ``None`` values and
empty collections are omitted on write so that the schema can evolve in both
directions.
"""

# pylint: disable=line-too-long,missing-class-docstring,missing-function-docstring
from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Any

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    SerializerFunctionWrapHandler,
    model_serializer,
    model_validator,
)
from pydantic.alias_generators import to_camel

# Discriminator values carried in ExecutionEvent.type.
ORDER_DEFINITION_TYPE: str = "O"
FILL_TYPE: str = "F"


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, (list, dict, tuple)):
        return len(value) == 0
    return False


class WireModel(BaseModel):
    """Base model for everything that crosses a serialization boundary.

    - camelCase on the wire, snake_case in Python (both accepted on read)
    - unknown fields are ignored
    - None values and empty collections are omitted on write (empty strings are kept)
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    @model_serializer(mode="wrap")
    def serialize_non_empty(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        return {key: value for key, value in data.items() if not _is_empty(value)}


# ---------------------------------------------------------------------------
# ExecutionEvent (input record)
# ---------------------------------------------------------------------------


class ExecutionEvent(WireModel):
    """
    One execution report for an order: either the order definition or a fill.

    Notes:
    - parent_order_id is present only when the event concerns a child order.
    - event_id is the message id for order definitions and the fill id for fills.
    - order_quantity is meaningful only for order definitions; fill_quantity and
      fill_price only for fills.
    """

    order_id: str = Field(..., min_length=1)
    parent_order_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("parentOrderId", "parentId", "parent_order_id"),
        serialization_alias="parentOrderId",
    )
    event_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("eventId", "execId", "event_id"),
        serialization_alias="eventId",
    )
    type: str | None = Field(
        default=None,
        description="Discriminator: 'O' order definition, 'F' fill, anything else is unrecognized.",
    )

    currency: str | None = None
    trade_date: date | None = None
    transaction_time: datetime | None = Field(
        default=None,
        validation_alias=AliasChoices("transactionTime", "txnTime", "transaction_time"),
        serialization_alias="transactionTime",
    )

    order_quantity: int = 0
    fill_quantity: int = Field(
        default=0,
        validation_alias=AliasChoices("fillQuantity", "lastQty", "fill_quantity"),
        serialization_alias="fillQuantity",
    )
    fill_price: Decimal = Field(
        default=Decimal("0"),
        validation_alias=AliasChoices("fillPrice", "lastPx", "fill_price"),
        serialization_alias="fillPrice",
    )

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def validate_fill_payload(self) -> ExecutionEvent:
        """
        Reject malformed fills before they reach the aggregator:
        - a fill must carry a positive fill_quantity
        - a fill must carry an event_id (it is the fill ledger key)
        """
        if self.type == FILL_TYPE:
            if self.fill_quantity <= 0:
                raise ValueError("fill_quantity must be > 0 when type is 'F'")
            if not self.event_id:
                raise ValueError("event_id is required when type is 'F'")
        return self

    def root_order_id(self) -> str:
        """Return the identifier of the root order this event belongs to."""
        return self.parent_order_id if self.parent_order_id is not None else self.order_id
