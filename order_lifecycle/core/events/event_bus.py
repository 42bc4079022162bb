"""
Synchronous fan-out of order lifecycle domain events.
"""
from __future__ import annotations

from collections import Counter
from typing import Any, Iterable

from order_lifecycle.core.events.event_sink import EventSink


class EventBus:
    """Delivers each emitted event to every registered sink, in order.

    The bus also tallies emissions per event type so a replay can report
    how many transitions, fills and replayed fills it observed.
    """

    def __init__(self, sinks: Iterable[EventSink] | None = None) -> None:
        self._sinks: list[EventSink] = list(sinks) if sinks is not None else []
        self._counts: Counter[str] = Counter()
        self._closed = False

    def register(self, sink: EventSink) -> None:
        if self._closed:
            raise RuntimeError("cannot register a sink on a closed EventBus")
        self._sinks.append(sink)

    def emit(self, event: Any) -> None:
        self._counts[type(event).__name__] += 1
        for sink in self._sinks:
            sink.on_event(event)

    def emitted_counts(self) -> dict[str, int]:
        """Number of events emitted so far, keyed by event class name."""
        return dict(self._counts)

    def close(self) -> None:
        """Close every sink that has a close() method. Safe to call twice."""
        if self._closed:
            return

        for sink in self._sinks:
            close_fn = getattr(sink, "close", None)
            if callable(close_fn):
                close_fn()

        self._closed = True
