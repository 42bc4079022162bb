"""Replay a JSON-lines file of execution events into order states.

Usage:
    order-lifecycle --input events.jsonl [--config runtime.toml] [--output states.json]
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Iterator, Sequence

from order_lifecycle.core.events.event_bus import EventBus
from order_lifecycle.core.events.sinks.file_recorder import FileRecorderSink
from order_lifecycle.core.events.sinks.sink_logging import LoggingEventSink
from order_lifecycle.core.lifecycle.aggregator import OrderLifecycleAggregator
from order_lifecycle.runtime.processor import KeyedAggregationProcessor
from order_lifecycle.runtime.prometheus_metrics import PrometheusMetricsClient
from order_lifecycle.runtime.runtime_config import RuntimeConfig
from order_lifecycle.runtime.store import InMemoryStateStore, JsonFileStateStore

if TYPE_CHECKING:
    from order_lifecycle.core.domain.state import OrderState
    from order_lifecycle.core.ports.state_store import StateStore

LOGGER = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _read_payloads(path: Path) -> Iterator[bytes]:
    # Binary: a line that is not UTF-8 is rejected by the processor, not here.
    if not path.exists():
        raise FileNotFoundError(path)
    with path.open("rb") as fh:
        for line in fh:
            line = line.strip()
            if line:
                yield line


def _build_event_bus(cfg: RuntimeConfig) -> EventBus:
    sinks = [LoggingEventSink(logging.getLogger("bus"))]
    if cfg.event_log_path is not None:
        sinks.append(FileRecorderSink(cfg.event_log_path))
    return EventBus(sinks=sinks)


def _dump_states(states: dict[str, OrderState]) -> str:
    document = {
        key: state.model_dump(mode="json", by_alias=True)
        for key, state in sorted(states.items())
    }
    return json.dumps(document, indent=2)


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser("order-lifecycle")
    parser.add_argument("--input", type=Path, required=True, help="JSON-lines execution events")
    parser.add_argument("--config", type=Path, default=None, help="TOML file with a [runtime] table")
    parser.add_argument("--output", type=Path, default=None, help="Write final states here instead of stdout")
    args = parser.parse_args(argv)

    cfg = RuntimeConfig.from_toml(args.config) if args.config is not None else RuntimeConfig()

    logging.basicConfig(
        level=cfg.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    event_bus = _build_event_bus(cfg)
    store: StateStore | None = None

    try:
        store = (
            JsonFileStateStore(cfg.state_store_path)
            if cfg.state_store_path is not None
            else InMemoryStateStore()
        )
        processor = KeyedAggregationProcessor(
            aggregator=OrderLifecycleAggregator(event_bus),
            store=store,
        )

        processor.process_all(_read_payloads(args.input))

        states = processor.states()
        rendered = _dump_states(states)
        if args.output is not None:
            args.output.parent.mkdir(parents=True, exist_ok=True)
            args.output.write_text(rendered + "\n", encoding="utf-8")
        else:
            sys.stdout.write(rendered + "\n")

        filled = processor.filled_count()
        LOGGER.info(
            "Replay finished: %d events processed, %d rejected, %d/%d orders filled",
            processor.stats.processed,
            processor.stats.rejected,
            filled,
            len(states),
        )
        LOGGER.info("Domain events emitted: %s", event_bus.emitted_counts())

        # --- Prometheus metrics (side-effect only) ---
        metrics = PrometheusMetricsClient()

        if metrics.is_enabled():
            try:
                metrics.record_replay(
                    stats=processor.stats,
                    filled_orders=filled,
                    total_orders=len(states),
                )
                metrics.push_all(job=cfg.metrics_job)

            except Exception:
                LOGGER.exception("Prometheus push failed")
    finally:
        event_bus.close()
        if store is not None:
            store.close()

    return 0


if __name__ == "__main__":
    sys.exit(main())
