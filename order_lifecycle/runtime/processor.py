"""Keyed aggregation loop.

Groups execution events by root order id and folds each one into the stored
aggregate for that key. This stands in for the stream-processing runtime:

Invariant:
- Events for one key are folded sequentially, in delivery order.
- The value stored after an event is exactly what the aggregator returned.
- Child orders never get a top-level entry; they live under their root.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable

from pydantic import ValidationError

from order_lifecycle.core.domain.order_status import OrderStatus
from order_lifecycle.core.domain.reject_reasons import RejectReason
from order_lifecycle.core.errors import PartitionKeyMismatchError
from order_lifecycle.runtime.serde import decode_event, decode_state, encode_state

if TYPE_CHECKING:
    from order_lifecycle.core.domain.state import OrderState
    from order_lifecycle.core.domain.types import ExecutionEvent
    from order_lifecycle.core.lifecycle.aggregator import OrderLifecycleAggregator
    from order_lifecycle.core.ports.state_store import StateStore

LOGGER = logging.getLogger(__name__)


def _is_undecodable(err: dict) -> bool:
    # Not JSON at all, or JSON whose top level is not an object.
    if err["type"] == "json_invalid":
        return True
    return err["type"] == "model_type" and not err["loc"]


@dataclass(slots=True)
class RejectedEventRecord:
    """A payload refused before it reached the aggregator."""

    reason: RejectReason
    detail: str
    payload: str


@dataclass(slots=True)
class ProcessorStats:
    processed: int = 0
    rejected: int = 0
    rejected_by_reason: dict[str, int] = field(default_factory=dict)


class KeyedAggregationProcessor:
    """Folds events into per-root aggregates held in a ``StateStore``."""

    def __init__(
        self,
        *,
        aggregator: OrderLifecycleAggregator,
        store: StateStore,
    ) -> None:
        self._aggregator = aggregator
        self._store = store

        self.stats = ProcessorStats()
        self.rejected: list[RejectedEventRecord] = []

    @staticmethod
    def partition_key(event: ExecutionEvent) -> str:
        """Return the grouping key for an event: the root order id."""
        return event.root_order_id()

    def process(self, event: ExecutionEvent, *, key: str | None = None) -> OrderState:
        """Fold one validated event and persist the resulting aggregate.

        ``key`` is the key the event was delivered under, if the transport
        carries one. It must equal the event's root order id.
        """
        root_key = self.partition_key(event)
        if key is not None and key != root_key:
            raise PartitionKeyMismatchError(
                key=key,
                root_order_id=root_key,
                order_id=event.order_id,
            )

        previous = self._store.get(root_key)
        state = decode_state(previous) if previous is not None else self._aggregator.initialize()

        state = self._aggregator.aggregate(root_key, event, state)

        self._store.put(root_key, encode_state(state))
        self.stats.processed += 1
        return state

    def process_raw(self, payload: bytes | str, *, key: str | None = None) -> OrderState | None:
        """Decode, validate and fold one payload.

        Malformed payloads are recorded in ``rejected`` and skipped; they never
        reach the aggregator. Returns None for a rejected payload.
        """
        try:
            event = decode_event(payload)
        except ValidationError as exc:
            self._reject(payload, exc)
            return None

        return self.process(event, key=key)

    def process_all(self, payloads: Iterable[bytes | str]) -> None:
        for payload in payloads:
            self.process_raw(payload)

    def _reject(self, payload: bytes | str, exc: ValidationError) -> None:
        if any(_is_undecodable(err) for err in exc.errors()):
            reason = RejectReason.UNDECODABLE
        else:
            reason = RejectReason.INVALID_EVENT

        text = payload.decode("utf-8", errors="replace") if isinstance(payload, bytes) else payload
        detail = "; ".join(err["msg"] for err in exc.errors())

        self.rejected.append(RejectedEventRecord(reason=reason, detail=detail, payload=text))
        self.stats.rejected += 1
        self.stats.rejected_by_reason[reason.value] = (
            self.stats.rejected_by_reason.get(reason.value, 0) + 1
        )

        LOGGER.warning("Rejected execution event (%s): %s", reason.value, detail)

    # ---- Queries ----

    def get(self, key: str) -> OrderState | None:
        raw = self._store.get(key)
        return decode_state(raw) if raw is not None else None

    def states(self) -> dict[str, OrderState]:
        result: dict[str, OrderState] = {}
        for key in self._store.keys():
            state = self.get(key)
            if state is not None:
                result[key] = state
        return result

    def filled_count(self) -> int:
        return sum(1 for state in self.states().values() if state.status == OrderStatus.FILLED)
