"""State store protocol for per-key order aggregates.

This module defines the persistence boundary used by the keyed aggregation
processor. Concrete implementations keep one serialized ``OrderState`` per
root order id.
"""

from __future__ import annotations

from typing import Iterator, Protocol


class StateStore(Protocol):
    """Key-value store of serialized aggregates.

    Values are opaque bytes; encoding and decoding belong to the caller so
    that every read goes through the same schema rules as a changelog restore.
    """

    def get(self, key: str) -> bytes | None:
        """Return the stored value for key, or None if absent."""

    def put(self, key: str, value: bytes) -> None:
        """Store value under key, replacing any previous value."""

    def keys(self) -> Iterator[str]:
        """Iterate over stored keys."""

    def close(self) -> None:
        """Flush and release resources."""
