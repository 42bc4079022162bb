"""
Semantic test: event classification and routing predicates.

Invariant:
'O' is an order definition, 'F' is a fill, anything else is unrecognized.
Child targeting depends only on the presence of a parent order id.
"""

from __future__ import annotations

import pytest

from order_lifecycle.core.domain.types import ExecutionEvent
from order_lifecycle.core.lifecycle.classifier import EventKind, classify, is_child_target


@pytest.mark.parametrize(
    ("event_type", "kind"),
    [
        ("O", EventKind.ORDER_DEFINITION),
        ("F", EventKind.FILL),
        ("X", EventKind.UNRECOGNIZED),
        ("o", EventKind.UNRECOGNIZED),
        ("", EventKind.UNRECOGNIZED),
        (None, EventKind.UNRECOGNIZED),
    ],
)
def test_classify(event_type: str | None, kind: EventKind) -> None:
    event = ExecutionEvent(order_id="o-1", event_id="e-1", type=event_type, fill_quantity=1)

    assert classify(event) is kind


def test_is_child_target() -> None:
    root_event = ExecutionEvent(order_id="o-1", type="O")
    child_event = ExecutionEvent(order_id="c-1", parent_order_id="o-1", type="O")

    assert not is_child_target(root_event)
    assert is_child_target(child_event)


def test_root_order_id_uses_parent_when_present() -> None:
    assert ExecutionEvent(order_id="o-1").root_order_id() == "o-1"
    assert ExecutionEvent(order_id="c-1", parent_order_id="o-1").root_order_id() == "o-1"
