"""Runtime configuration model for the replay entrypoint."""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from order_lifecycle.core.errors import ConfigError


class RuntimeConfig(BaseModel):
    """Structured runtime configuration.

    TOML example:
        [runtime]
        log_level = "INFO"
        event_log_path = "out/events.jsonl"
        state_store_path = "out/order_states.json"
        metrics_job = "order-lifecycle-replay"
    """

    log_level: str = "INFO"

    # Domain events are appended here as JSON lines when set.
    event_log_path: Path | None = None
    # Aggregates are restored from and flushed to this file when set.
    state_store_path: Path | None = None

    metrics_job: str = Field("order-lifecycle", min_length=1)

    model_config = ConfigDict(extra="forbid")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level: {value!r}")
        return level

    @classmethod
    def from_json_obj(cls, obj: dict[str, Any]) -> RuntimeConfig:
        """Create a RuntimeConfig from a JSON-compatible object."""
        try:
            return cls.model_validate(obj)
        except ValidationError as exc:
            raise ConfigError(f"Invalid runtime configuration: {exc}") from exc

    @classmethod
    def from_toml(cls, path: str | Path) -> RuntimeConfig:
        """Load the ``[runtime]`` table of a TOML file.

        A file without a ``[runtime]`` table yields the defaults.
        """
        path = Path(path)
        try:
            data = tomllib.loads(path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise ConfigError(f"Cannot read config file {path}: {exc}") from exc
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"Invalid TOML in {path}: {exc}") from exc

        runtime = data.get("runtime", {})
        if not isinstance(runtime, dict):
            raise ConfigError(f"[runtime] must be a table in {path}")

        return cls.from_json_obj(runtime)
