"""Fold function that turns execution events into order state.

The hosting runtime groups events by root order id and calls
``OrderLifecycleAggregator.aggregate`` once per event with the previous
aggregate for that key. Delivery order is not assumed to match event time:
fills may precede their order definition, and fills may be replayed.

Invariant:
- Exactly one node (the root or one child) is mutated per event.
- Completion is re-evaluated on that node and then on the root.
- The root's last_action_timestamp advances on every event.
"""

# pylint: disable=too-few-public-methods
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Callable

from order_lifecycle.core.domain.state import OrderState
from order_lifecycle.core.events.events import (
    DuplicateFillObservedEvent,
    FillRecordedEvent,
    OrderStatusTransitionEvent,
    UnrecognizedEventAbsorbedEvent,
)
from order_lifecycle.core.lifecycle.classifier import EventKind, classify
from order_lifecycle.core.lifecycle.completion import recompute_status
from order_lifecycle.core.lifecycle.handlers import apply_definition, apply_fill
from order_lifecycle.core.lifecycle.resolver import resolve_target_node

if TYPE_CHECKING:
    from order_lifecycle.core.domain.state import OrderNode
    from order_lifecycle.core.domain.types import ExecutionEvent
    from order_lifecycle.core.events.event_bus import EventBus

LOGGER = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class OrderLifecycleAggregator:
    """Folds execution events into a per-root ``OrderState``."""

    def __init__(
        self,
        event_bus: EventBus,
        *,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._event_bus = event_bus
        self._clock = clock if clock is not None else _utc_now

    @staticmethod
    def initialize() -> OrderState:
        """Return the empty aggregate used before the first event of a key."""
        return OrderState()

    def aggregate(self, key: str, event: ExecutionEvent, state: OrderState) -> OrderState:
        """Apply one event to the aggregate for ``key`` and return it.

        The aggregate is mutated in place; the returned object is ``state``.
        """
        LOGGER.debug(
            "Processing execution event %s for key %s",
            event.event_id,
            key,
        )

        if state.order_id is None:
            state.order_id = key

        node = resolve_target_node(state, event)
        kind = classify(event)

        if kind is EventKind.ORDER_DEFINITION:
            apply_definition(event, node)
        elif kind is EventKind.FILL:
            self._apply_fill(key, event, node)
        else:
            LOGGER.debug(
                "Unrecognized event type %r for order %s; only the activity timestamp advances",
                event.type,
                event.order_id,
            )
            self._event_bus.emit(
                UnrecognizedEventAbsorbedEvent(
                    root_order_id=key,
                    order_id=event.order_id,
                    event_id=event.event_id,
                    event_type=event.type,
                )
            )

        # Child first, then root: a child's completion feeds the root total.
        if node is not state:
            self._recompute(key, node)
        self._recompute(key, state)

        state.last_action_timestamp = self._clock()
        return state

    def _apply_fill(self, key: str, event: ExecutionEvent, node: OrderNode) -> None:
        fill, replayed = apply_fill(event, node)

        if replayed:
            # The ledger overwrote the entry; the fills sequence still grew.
            LOGGER.warning(
                "Duplicate fill %s on order %s: ledger unchanged, fills sequence now %d entries for %d ledger ids",
                fill.fill_id,
                node.order_id,
                len(node.fills),
                len(node.filled_quantity_map),
            )
            self._event_bus.emit(
                DuplicateFillObservedEvent(
                    root_order_id=key,
                    order_id=node.order_id,
                    fill_id=fill.fill_id,
                    fills_len=len(node.fills),
                    ledger_len=len(node.filled_quantity_map),
                )
            )
            return

        self._event_bus.emit(
            FillRecordedEvent(
                root_order_id=key,
                order_id=node.order_id,
                fill_id=fill.fill_id,
                quantity=fill.quantity,
                price=str(fill.price),
                cum_filled_qty=node.filled_quantity,
            )
        )

    def _recompute(self, key: str, node: OrderNode) -> None:
        prev_status = node.status
        if not recompute_status(node):
            return

        LOGGER.info("The order %s is fully filled", node.order_id)
        self._event_bus.emit(
            OrderStatusTransitionEvent(
                root_order_id=key,
                order_id=node.order_id,
                prev_status=prev_status.value,
                next_status=node.status.value,
                filled_quantity=node.filled_quantity,
                expected_quantity=node.expected_quantity,
            )
        )
