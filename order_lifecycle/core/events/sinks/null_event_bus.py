from __future__ import annotations

from order_lifecycle.core.events.event_bus import EventBus


class NullEventBus(EventBus):
    """EventBus with no sinks. Aggregators built in tests use it."""

    def __init__(self) -> None:
        super().__init__(sinks=())
