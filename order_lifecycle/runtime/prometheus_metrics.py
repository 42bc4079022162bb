from __future__ import annotations

import json
import logging
import os
from typing import TYPE_CHECKING

from prometheus_client import CollectorRegistry, Gauge, push_to_gateway

if TYPE_CHECKING:
    from order_lifecycle.runtime.processor import ProcessorStats

LOGGER = logging.getLogger(__name__)


class PrometheusMetricsClient:
    """Pushgateway client for replay runs.

    Expected environment:
    - PROMETHEUS_PUSHGATEWAY_URL: URL to the Pushgateway.
      Example: http://pushgateway.monitoring.svc.cluster.local:9091

    Optional:
    - PROMETHEUS_PUSHGATEWAY_GROUPING_KEY_JSON: JSON object used as grouping key,
      e.g. {"instance": "replay-01"}.

    Metrics delivery is a side-effect: when the URL is unset every call is a
    no-op, and callers must not fail a replay because of it.
    """

    def __init__(self) -> None:
        self._pushgateway_url = os.environ.get("PROMETHEUS_PUSHGATEWAY_URL")
        self._grouping_key = self._load_grouping_key()
        self._registry = CollectorRegistry()

        self._events = Gauge(
            "order_lifecycle_events",
            documentation="Execution events seen in the last replay, by outcome.",
            labelnames=["outcome"],
            registry=self._registry,
        )
        self._orders = Gauge(
            "order_lifecycle_orders",
            documentation="Root orders held in the state store, by status.",
            labelnames=["status"],
            registry=self._registry,
        )

    def is_enabled(self) -> bool:
        return self._pushgateway_url is not None

    @staticmethod
    def _load_grouping_key() -> dict[str, str]:
        raw = os.environ.get("PROMETHEUS_PUSHGATEWAY_GROUPING_KEY_JSON")
        if not raw:
            return {}

        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            LOGGER.warning(
                "Invalid PROMETHEUS_PUSHGATEWAY_GROUPING_KEY_JSON; ignoring"
            )
            return {}

        if not isinstance(data, dict):
            return {}

        return {
            key: value
            for key, value in data.items()
            if isinstance(key, str) and isinstance(value, str)
        }

    def record_replay(self, *, stats: ProcessorStats, filled_orders: int, total_orders: int) -> None:
        self._events.labels(outcome="processed").set(stats.processed)
        self._events.labels(outcome="rejected").set(stats.rejected)

        self._orders.labels(status="FILLED").set(filled_orders)
        self._orders.labels(status="NOT_FILLED").set(total_orders - filled_orders)

    def sample(self, name: str, labels: dict[str, str]) -> float | None:
        """Return the current value of a recorded sample (None if absent)."""
        return self._registry.get_sample_value(name, labels)

    def push_all(self, *, job: str) -> None:
        if not self._pushgateway_url:
            return

        push_to_gateway(
            gateway=self._pushgateway_url,
            job=job,
            registry=self._registry,
            grouping_key=self._grouping_key,
        )

        LOGGER.info(
            "Prometheus metrics pushed",
            extra={"job": job, "grouping_key": self._grouping_key},
        )
