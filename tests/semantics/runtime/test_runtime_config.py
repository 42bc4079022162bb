"""
Semantic test: runtime configuration loading.

Invariant:
Configuration is read from the [runtime] table of a TOML file; unknown keys,
bad log levels, and unreadable or invalid files raise ConfigError.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from order_lifecycle.core.errors import ConfigError
from order_lifecycle.runtime.runtime_config import RuntimeConfig


def test_defaults() -> None:
    cfg = RuntimeConfig()

    assert cfg.log_level == "INFO"
    assert cfg.event_log_path is None
    assert cfg.state_store_path is None
    assert cfg.metrics_job == "order-lifecycle"


def test_from_toml(tmp_path) -> None:
    path = tmp_path / "runtime.toml"
    path.write_text(
        "\n".join(
            [
                "[runtime]",
                'log_level = "debug"',
                'event_log_path = "out/events.jsonl"',
                'state_store_path = "out/states.json"',
                'metrics_job = "replay-eu"',
            ]
        ),
        encoding="utf-8",
    )

    cfg = RuntimeConfig.from_toml(path)

    assert cfg.log_level == "DEBUG"
    assert cfg.event_log_path == Path("out/events.jsonl")
    assert cfg.state_store_path == Path("out/states.json")
    assert cfg.metrics_job == "replay-eu"


def test_missing_runtime_table_yields_defaults(tmp_path) -> None:
    path = tmp_path / "runtime.toml"
    path.write_text("[other]\nvalue = 1\n", encoding="utf-8")

    assert RuntimeConfig.from_toml(path) == RuntimeConfig()


@pytest.mark.parametrize(
    "body",
    [
        '[runtime]\nlog_level = "LOUD"\n',
        '[runtime]\nunknown_key = 1\n',
        '[runtime]\nmetrics_job = ""\n',
        "runtime = 3\n",
        "[runtime\n",
    ],
)
def test_invalid_config_raises_config_error(tmp_path, body: str) -> None:
    path = tmp_path / "runtime.toml"
    path.write_text(body, encoding="utf-8")

    with pytest.raises(ConfigError):
        RuntimeConfig.from_toml(path)


def test_missing_file_raises_config_error(tmp_path) -> None:
    with pytest.raises(ConfigError):
        RuntimeConfig.from_toml(tmp_path / "absent.toml")
