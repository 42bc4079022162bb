"""Public API for the order_lifecycle package.

Only symbols imported here are considered part of the stable,
supported external interface.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

# ----------------------------------------------------------------------
# Domain Types
# ----------------------------------------------------------------------
from order_lifecycle.core.domain.order_status import OrderStatus
from order_lifecycle.core.domain.state import Fill, OrderNode, OrderState
from order_lifecycle.core.domain.types import (
    FILL_TYPE,
    ORDER_DEFINITION_TYPE,
    ExecutionEvent,
)
from order_lifecycle.core.errors import (
    ConfigError,
    OrderLifecycleError,
    PartitionKeyMismatchError,
)

# ----------------------------------------------------------------------
# Aggregation API
# ----------------------------------------------------------------------
from order_lifecycle.core.events.event_bus import EventBus
from order_lifecycle.core.lifecycle.aggregator import OrderLifecycleAggregator
from order_lifecycle.core.lifecycle.classifier import EventKind, classify, is_child_target

# ----------------------------------------------------------------------
# Runtime API
# ----------------------------------------------------------------------
from order_lifecycle.runtime.processor import KeyedAggregationProcessor
from order_lifecycle.runtime.runtime_config import RuntimeConfig
from order_lifecycle.runtime.store import InMemoryStateStore, JsonFileStateStore

# ----------------------------------------------------------------------
# Public API definition
# ----------------------------------------------------------------------

__all__ = [
    # Domain
    "ExecutionEvent",
    "ORDER_DEFINITION_TYPE",
    "FILL_TYPE",
    "Fill",
    "OrderNode",
    "OrderState",
    "OrderStatus",

    # Aggregation
    "OrderLifecycleAggregator",
    "EventBus",
    "EventKind",
    "classify",
    "is_child_target",

    # Runtime
    "KeyedAggregationProcessor",
    "InMemoryStateStore",
    "JsonFileStateStore",
    "RuntimeConfig",

    # Errors
    "OrderLifecycleError",
    "ConfigError",
    "PartitionKeyMismatchError",

    # Version
    "__version__",
]

# ----------------------------------------------------------------------
# Package version
# ----------------------------------------------------------------------

try:
    __version__ = version("order-lifecycle")
except PackageNotFoundError:
    __version__ = "0.0.0"
