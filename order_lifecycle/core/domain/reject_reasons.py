"""Reasons an inbound payload is rejected before reaching the aggregator."""

from __future__ import annotations

from enum import Enum


class RejectReason(str, Enum):
    # Payload is not valid JSON or not a JSON object.
    UNDECODABLE = "UNDECODABLE"
    # Payload decoded but failed ExecutionEvent validation
    # (missing order id, non-positive fill quantity, fill without id).
    INVALID_EVENT = "INVALID_EVENT"
