"""State store implementations.

Both stores keep values serialized, so a value read back has been through the
same encode/decode path a restore from a changelog would take.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterator

LOGGER = logging.getLogger(__name__)


class InMemoryStateStore:
    """Process-local key-value store."""

    def __init__(self) -> None:
        self._data: dict[str, bytes] = {}

    def get(self, key: str) -> bytes | None:
        return self._data.get(key)

    def put(self, key: str, value: bytes) -> None:
        self._data[key] = value

    def keys(self) -> Iterator[str]:
        return iter(list(self._data))

    def close(self) -> None:
        return


class JsonFileStateStore(InMemoryStateStore):
    """In-memory store restored from and flushed to a single JSON document.

    The file holds ``{key: <order state object>}``. It is loaded on
    construction and rewritten atomically on ``flush()`` / ``close()``.
    """

    def __init__(self, path: str | Path) -> None:
        super().__init__()
        self._path = Path(path)
        self._closed = False
        self._restore()

    def _restore(self) -> None:
        if not self._path.exists():
            return

        raw = json.loads(self._path.read_text(encoding="utf-8"))
        if not isinstance(raw, dict):
            raise ValueError(f"State file must contain a JSON object: {self._path}")

        for key, value in raw.items():
            self._data[key] = json.dumps(value).encode("utf-8")

        LOGGER.info("Restored %d order states from %s", len(raw), self._path)

    def flush(self) -> None:
        document = {key: json.loads(value) for key, value in self._data.items()}

        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(document, indent=2), encoding="utf-8")
        tmp_path.replace(self._path)

    def close(self) -> None:
        if self._closed:
            return
        self.flush()
        self._closed = True
