"""JSON decoding of execution events and JSON encoding of order state.

Reads ignore unknown fields; writes omit None values and empty collections.
"""

from __future__ import annotations

from order_lifecycle.core.domain.state import OrderState
from order_lifecycle.core.domain.types import ExecutionEvent


def decode_event(payload: bytes | str) -> ExecutionEvent:
    """Decode and validate one execution event.

    Raises pydantic.ValidationError for malformed payloads.
    """
    return ExecutionEvent.model_validate_json(payload)


def encode_state(state: OrderState, *, indent: int | None = None) -> bytes:
    return state.model_dump_json(by_alias=True, indent=indent).encode("utf-8")


def decode_state(payload: bytes | str) -> OrderState:
    return OrderState.model_validate_json(payload)
