"""Helpers for rendering analysis results.

Nothing here changes what the engine computed. These functions only pick,
order and format for display.
"""

from __future__ import annotations

import csv
import json
from typing import TextIO

from cron_reality.analysis.models import ClassificationResult, OverdueEvent, Snapshot

CSV_COLUMNS = ("timestamp", "hook", "schedule", "interval", "args")


def format_interval(seconds: int | float) -> str:
    """Human-readable interval, floored to the largest whole unit.

    >>> format_interval(45)
    '45 s'
    >>> format_interval(3600)
    '1 h'
    >>> format_interval(200000)
    '2 days'
    """
    seconds = int(seconds)
    if seconds < 60:
        return f"{seconds} s"

    minutes = seconds // 60
    if minutes < 60:
        return f"{minutes} min"

    hours = minutes // 60
    if hours < 24:
        return f"{hours} h"

    return f"{hours // 24} days"


def top_hooks(snapshot: Snapshot, limit: int = 10) -> list[tuple[str, int]]:
    """Most scheduled hooks first; ties keep snapshot order."""
    ranked = sorted(snapshot.hook_counts.items(), key=lambda item: item[1], reverse=True)
    return ranked[:limit]


def top_overdue(classification: ClassificationResult, limit: int = 50) -> list[OverdueEvent]:
    """The ``limit`` most overdue events."""
    return classification.overdue[:limit]


def write_events_csv(snapshot: Snapshot, stream: TextIO) -> int:
    """Write one CSV row per scheduled event.

    ``args`` is JSON-encoded; values JSON cannot represent fall back to
    ``str()``.

    Returns:
        Number of data rows written
    """
    writer = csv.writer(stream)
    writer.writerow(CSV_COLUMNS)
    for event in snapshot.events:
        writer.writerow(
            [
                event.timestamp,
                event.hook,
                event.schedule,
                "" if event.interval is None else event.interval,
                json.dumps(list(event.args), default=str),
            ]
        )
    return snapshot.total
