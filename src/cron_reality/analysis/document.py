"""Snapshot documents: the JSON bundle the CLI and HTTP harnesses read.

A document carries every input of one analysis run::

    {
        "now": 1700000000,                      # optional, wall clock if absent
        "cron": {"1699990000": {"hook": {...}}},
        "schedules": {"hourly": {"interval": 3600}},
        "callbacks": {"hook": ["callback_name"]},   # or ["hook", ...]
        "cron_lock": [1699999990.25, "web-1"],     # optional
        "config": {"DISABLE_WP_CRON": false}       # optional, os.environ if absent
    }
"""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from cron_reality.analysis.engine import RealityCheck
from cron_reality.analysis.models import RealityCheckResult
from cron_reality.core.errors import ParseError, SourceError, SourceNotFoundError, ValidationError


@dataclass
class SnapshotDocument:
    """Parsed snapshot document."""

    cron: Any = None
    schedules: dict[str, Any] = field(default_factory=dict)
    callbacks: Any = None
    cron_lock: Any = None
    config: Mapping[str, Any] | None = None
    now: int | None = None
    source_path: str | None = None

    def run(self, check: RealityCheck) -> RealityCheckResult:
        """Analyse this document with ``check``.

        Without a ``config`` object the scheduler flags are read from the
        process environment.
        """
        environment = self.config if self.config is not None else os.environ
        return check.run(
            raw_table=self.cron,
            recurrence_registry=self.schedules,
            callback_registry=self.callbacks,
            raw_lock=self.cron_lock,
            environment=environment,
            now=self.now,
        )


def parse_document(data: Any, source_path: str | None = None) -> SnapshotDocument:
    """Build a :class:`SnapshotDocument` from decoded JSON.

    The cron table itself is not validated; the snapshot builder tolerates
    whatever it finds there.

    Raises:
        ParseError: ``data`` is not a JSON object
        ValidationError: ``now`` is not an integer, ``config`` /
            ``schedules`` are not objects, or ``callbacks`` is neither an
            object nor a list of hook names
    """
    if not isinstance(data, Mapping):
        raise ParseError("Snapshot document must be a JSON object").with_context(
            source_path=source_path
        )

    now = data.get("now")
    if now is not None and (isinstance(now, bool) or not isinstance(now, int)):
        raise ValidationError(
            "'now' must be an integer number of epoch seconds", field="now", value=now
        ).with_context(source_path=source_path)

    schedules = data.get("schedules") or {}
    if not isinstance(schedules, Mapping):
        raise ValidationError(
            "'schedules' must be an object", field="schedules", value=schedules
        ).with_context(source_path=source_path)

    callbacks = data.get("callbacks")
    if callbacks is not None and not isinstance(callbacks, Mapping) and not (
        isinstance(callbacks, list) and all(isinstance(hook, str) for hook in callbacks)
    ):
        raise ValidationError(
            "'callbacks' must be an object or a list of hook names",
            field="callbacks",
            value=callbacks,
        ).with_context(source_path=source_path)

    config = data.get("config")
    if config is not None and not isinstance(config, Mapping):
        raise ValidationError(
            "'config' must be an object", field="config", value=config
        ).with_context(source_path=source_path)

    return SnapshotDocument(
        cron=data.get("cron"),
        schedules=dict(schedules),
        callbacks=callbacks,
        cron_lock=data.get("cron_lock"),
        config=config,
        now=now,
        source_path=source_path,
    )


def load_document(path: str | Path) -> SnapshotDocument:
    """Read and parse a snapshot document from disk.

    Raises:
        SourceNotFoundError: the file does not exist
        SourceError: the file cannot be read
        ParseError: the file is not valid JSON or not an object
    """
    path = Path(path)
    if not path.is_file():
        raise SourceNotFoundError(f"Snapshot document not found: {path}").with_context(
            source_path=str(path)
        )
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise SourceError(f"Cannot read snapshot document: {e}", cause=e).with_context(
            source_path=str(path)
        ) from e
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ParseError(
            f"Snapshot document is not valid JSON: {e.msg} (line {e.lineno})", cause=e
        ).with_context(source_path=str(path)) from e
    return parse_document(data, source_path=str(path))
