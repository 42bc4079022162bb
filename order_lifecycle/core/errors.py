"""Exception hierarchy for order lifecycle processing.

The aggregator itself never raises for a validated event. These exceptions
belong to the integration edges: configuration loading and event routing.
"""

from __future__ import annotations


class OrderLifecycleError(Exception):
    """Base class for all order lifecycle errors."""


class ConfigError(OrderLifecycleError):
    """Configuration could not be loaded or failed validation."""


class PartitionKeyMismatchError(OrderLifecycleError):
    """An event was delivered under a key other than its root order id."""

    def __init__(self, *, key: str, root_order_id: str, order_id: str) -> None:
        super().__init__(
            f"Event for order {order_id!r} declares root {root_order_id!r} "
            f"but was delivered under key {key!r}"
        )
        self.key = key
        self.root_order_id = root_order_id
        self.order_id = order_id
