"""
Semantic test: keyed aggregation processor.

Invariant:
Events are grouped by root order id, the stored value after each event is
the aggregator's result, malformed payloads never reach the aggregator, and
an event delivered under a foreign key is fatal.
"""

from __future__ import annotations

import json

import pytest

from order_lifecycle.core.domain.order_status import OrderStatus
from order_lifecycle.core.domain.reject_reasons import RejectReason
from order_lifecycle.core.domain.types import ExecutionEvent
from order_lifecycle.core.errors import PartitionKeyMismatchError
from order_lifecycle.core.events.sinks.null_event_bus import NullEventBus
from order_lifecycle.core.lifecycle.aggregator import OrderLifecycleAggregator
from order_lifecycle.runtime.processor import KeyedAggregationProcessor
from order_lifecycle.runtime.store import InMemoryStateStore, JsonFileStateStore


def _processor(store: InMemoryStateStore | None = None) -> KeyedAggregationProcessor:
    return KeyedAggregationProcessor(
        aggregator=OrderLifecycleAggregator(NullEventBus()),
        store=store if store is not None else InMemoryStateStore(),
    )


def test_events_are_grouped_by_root_order_id() -> None:
    processor = _processor()

    processor.process(ExecutionEvent(order_id="a", event_id="m-a", type="O", order_quantity=5))
    processor.process(ExecutionEvent(order_id="b", event_id="m-b", type="O", order_quantity=7))
    processor.process(ExecutionEvent(order_id="a", event_id="f-a", type="F", fill_quantity=5))
    processor.process(
        ExecutionEvent(order_id="b-child", parent_order_id="b", event_id="f-b", type="F", fill_quantity=7)
    )

    states = processor.states()
    assert set(states) == {"a", "b"}
    assert states["a"].status == OrderStatus.FILLED
    assert states["b"].status == OrderStatus.FILLED
    assert states["b"].child_orders["b-child"].filled_quantity == 7
    assert processor.filled_count() == 2
    assert processor.stats.processed == 4


def test_initial_aggregate_takes_order_id_from_key() -> None:
    processor = _processor()

    state = processor.process(
        ExecutionEvent(order_id="child-1", parent_order_id="root-1", event_id="f-1", type="F", fill_quantity=3)
    )

    assert state.order_id == "root-1"
    assert processor.get("root-1").order_id == "root-1"


def test_matching_delivery_key_is_accepted() -> None:
    processor = _processor()
    event = ExecutionEvent(order_id="child-1", parent_order_id="root-1", type="O", order_quantity=3)

    state = processor.process(event, key="root-1")

    assert "child-1" in state.child_orders


def test_foreign_delivery_key_is_fatal() -> None:
    processor = _processor()
    event = ExecutionEvent(order_id="child-1", parent_order_id="root-1", type="O", order_quantity=3)

    with pytest.raises(PartitionKeyMismatchError) as excinfo:
        processor.process(event, key="child-1")

    assert excinfo.value.key == "child-1"
    assert excinfo.value.root_order_id == "root-1"
    assert processor.get("root-1") is None
    assert processor.get("child-1") is None


def test_malformed_payloads_are_rejected_before_the_fold() -> None:
    processor = _processor()

    assert processor.process_raw("{not json") is None
    assert processor.process_raw(json.dumps({"eventId": "m-1", "type": "O"})) is None
    assert processor.process_raw(json.dumps({"orderId": "o-1", "eventId": "f-1", "type": "F", "fillQuantity": 0})) is None

    state = processor.process_raw(
        json.dumps({"orderId": "o-1", "execId": "f-2", "type": "F", "lastQty": 2, "lastPx": 10.0}).encode("utf-8")
    )
    assert state is not None
    assert state.filled_quantity == 2

    assert [r.reason for r in processor.rejected] == [
        RejectReason.UNDECODABLE,
        RejectReason.INVALID_EVENT,
        RejectReason.INVALID_EVENT,
    ]
    assert processor.stats.rejected == 3
    assert processor.stats.rejected_by_reason == {"UNDECODABLE": 1, "INVALID_EVENT": 2}
    assert processor.stats.processed == 1
    assert list(processor.states()) == ["o-1"]


@pytest.mark.parametrize("payload", ["[1]", '"o-1"', "42", b"\xff\xfe bad"])
def test_non_object_payloads_are_undecodable(payload) -> None:
    processor = _processor()

    assert processor.process_raw(payload) is None

    assert [r.reason for r in processor.rejected] == [RejectReason.UNDECODABLE]
    assert processor.stats.rejected_by_reason == {"UNDECODABLE": 1}
    assert processor.states() == {}


def test_json_file_store_restores_previous_run(tmp_path) -> None:
    path = tmp_path / "state" / "order_states.json"

    store = JsonFileStateStore(path)
    processor = _processor(store)
    processor.process(ExecutionEvent(order_id="o-1", event_id="m-1", type="O", order_quantity=10))
    processor.process(ExecutionEvent(order_id="o-1", event_id="f-1", type="F", fill_quantity=4))
    store.close()

    document = json.loads(path.read_text(encoding="utf-8"))
    assert document["o-1"]["filledQuantityMap"] == {"f-1": 4}

    resumed_store = JsonFileStateStore(path)
    resumed = _processor(resumed_store)
    state = resumed.process(ExecutionEvent(order_id="o-1", event_id="f-2", type="F", fill_quantity=6))

    assert state.filled_quantity == 10
    assert state.status == OrderStatus.FILLED
    assert [fill.fill_id for fill in state.fills] == ["f-1", "f-2"]


def test_json_file_store_rejects_non_object_document(tmp_path) -> None:
    path = tmp_path / "order_states.json"
    path.write_text("[]", encoding="utf-8")

    with pytest.raises(ValueError):
        JsonFileStateStore(path)
