"""Flatten the scheduler's raw cron table into a :class:`Snapshot`.

The host persists its schedule as a nested mapping::

    {
        1700000000: {
            "wp_version_check": {
                "40cd750bba9870f18aada2478b24840a": {
                    "schedule": "twicedaily",
                    "args": [],
                    "interval": 43200,
                },
            },
        },
        "version": 2,
    }

Iteration order of the source is kept as-is. Anything that does not look
like the structure above is skipped rather than reported.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from cron_reality.analysis.models import ScheduledEvent, Snapshot
from cron_reality.analysis.registry import resolve_interval
from cron_reality.core.logging import get_logger

logger = get_logger(__name__)


def build_snapshot(
    raw_table: Any,
    recurrence_registry: Mapping[str, Any] | None,
    now: int,
) -> Snapshot:
    """Build a snapshot of every scheduled instance in ``raw_table``.

    Args:
        raw_table: timestamp → hook → instances. Instances are either a
            mapping (fingerprint → details) or a sequence of details.
        recurrence_registry: schedule name → ``{"interval": seconds}``
        now: Evaluation time in UTC epoch seconds, shared by all events

    Returns:
        Snapshot; empty when ``raw_table`` is not a mapping
    """
    snapshot = Snapshot(now=int(now))

    if not isinstance(raw_table, Mapping):
        logger.debug("snapshot_source_not_mapping", source_type=type(raw_table).__name__)
        return snapshot

    for raw_timestamp, hooks in raw_table.items():
        timestamp = _coerce_timestamp(raw_timestamp)
        if timestamp is None or not isinstance(hooks, Mapping):
            continue

        for hook, instances in hooks.items():
            hook = str(hook)
            for details in _iter_instances(instances):
                schedule = details.get("schedule") or ""
                if not isinstance(schedule, str):
                    schedule = str(schedule)
                snapshot.events.append(
                    ScheduledEvent(
                        timestamp=timestamp,
                        hook=hook,
                        args=_coerce_args(details.get("args")),
                        schedule=schedule,
                        interval=resolve_interval(recurrence_registry, schedule),
                        now=snapshot.now,
                    )
                )
                snapshot.hook_counts[hook] = snapshot.hook_counts.get(hook, 0) + 1

    logger.debug(
        "snapshot_built",
        total=snapshot.total,
        hooks=len(snapshot.hook_counts),
        now=snapshot.now,
    )
    return snapshot


def _coerce_timestamp(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        pass
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return None


def _iter_instances(instances: Any) -> list[Mapping[str, Any]]:
    if isinstance(instances, Mapping):
        candidates = list(instances.values())
    elif isinstance(instances, Sequence) and not isinstance(instances, (str, bytes)):
        candidates = list(instances)
    else:
        return []
    return [details for details in candidates if isinstance(details, Mapping)]


def _coerce_args(args: Any) -> tuple[Any, ...]:
    if args is None:
        return ()
    if isinstance(args, Mapping):
        return tuple(args.values())
    if isinstance(args, Sequence) and not isinstance(args, (str, bytes)):
        return tuple(args)
    return (args,)
