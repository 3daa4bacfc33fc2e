"""
Shared pytest fixtures for cron-reality-check tests.

This module provides:
- A fixed clock so every run is deterministic
- A small but realistic cron table, recurrence registry and callback table
- A helper that writes snapshot documents to a temporary directory
"""

import json
from pathlib import Path
from typing import Any, Callable

import pytest

from cron_reality.analysis import Snapshot, build_snapshot

NOW = 1_700_000_000


@pytest.fixture
def now() -> int:
    """Fixed evaluation time shared by all fixtures."""
    return NOW


@pytest.fixture
def schedules() -> dict[str, dict[str, Any]]:
    """Recurrence registry as the host exposes it."""
    return {
        "every_minute": {"interval": 60, "display": "Every minute"},
        "every_five_minutes": {"interval": 300, "display": "Every 5 minutes"},
        "hourly": {"interval": 3600, "display": "Once Hourly"},
        "twicedaily": {"interval": 43200, "display": "Twice Daily"},
        "daily": {"interval": 86400, "display": "Once Daily"},
    }


@pytest.fixture
def cron_table() -> dict[Any, Any]:
    """
    Cron table with one of everything:

    - wp_version_check: twice daily, overdue by 2 hours
    - cleanup: every minute, two future runs (heavy)
    - old_plugin_task: hourly, no callbacks (orphan), overdue by 10 minutes
    - publish_future_post: one-off, due in 30 seconds
    """
    return {
        NOW - 7200: {
            "wp_version_check": {
                "40cd750bba9870f18aada2478b24840a": {
                    "schedule": "twicedaily",
                    "args": [],
                    "interval": 43200,
                },
            },
        },
        NOW - 600: {
            "old_plugin_task": {
                "40cd750bba9870f18aada2478b24840a": {"schedule": "hourly", "args": []},
            },
        },
        NOW + 30: {
            "publish_future_post": {
                "a0b1c2": {"schedule": False, "args": [42]},
            },
        },
        NOW + 60: {
            "cleanup": {"k1": {"schedule": "every_minute", "args": []}},
        },
        NOW + 120: {
            "cleanup": {"k1": {"schedule": "every_minute", "args": []}},
        },
        "version": 2,
    }


@pytest.fixture
def callbacks() -> dict[str, list[str]]:
    """Live hook → callbacks table; old_plugin_task is deliberately missing."""
    return {
        "wp_version_check": ["wp_version_check"],
        "cleanup": ["purge_transients"],
        "publish_future_post": ["check_and_publish_future_post"],
    }


@pytest.fixture
def snapshot(cron_table, schedules, now) -> Snapshot:
    return build_snapshot(cron_table, schedules, now)


@pytest.fixture
def snapshot_document(cron_table, schedules, callbacks, now) -> dict[str, Any]:
    """JSON-ready document bundling the fixtures above."""
    return {
        "now": now,
        "cron": {str(k): v for k, v in cron_table.items()},
        "schedules": schedules,
        "callbacks": callbacks,
        "cron_lock": [now - 5.5, "web-1"],
        "config": {"DISABLE_WP_CRON": False, "WP_CRON_URL": "https://example.test/wp-cron.php"},
    }


@pytest.fixture
def write_document(tmp_path: Path) -> Callable[[Any], Path]:
    """Write a snapshot document to disk and return its path."""

    def _write(data: Any, name: str = "cron.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write


@pytest.fixture(autouse=True)
def isolate_settings(monkeypatch, tmp_path):
    """Keep CRON_REALITY_* variables and stray .env files out of tests."""
    import os

    for key in list(os.environ):
        if key.startswith("CRON_REALITY_") or key in ("DISABLE_WP_CRON", "ALTERNATE_WP_CRON", "WP_CRON_URL"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
