"""
Consumer side of the domain event bus.

The aggregator emits facts about order state (fills recorded, replays
observed, status transitions); sinks decide where those facts go.
"""
from __future__ import annotations

from typing import Any, Protocol


class EventSink(Protocol):
    def on_event(self, event: Any) -> None:
        """Consume one domain event. Sinks must not mutate it."""
