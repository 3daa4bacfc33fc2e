"""Sort snapshot events into overdue, heavy-repeating and orphaned buckets.

┌──────────────────────────────────────────────────────────────────────────────┐
│  EVENT CLASSIFICATION                                                         │
│                                                                               │
│   Overdue:   timestamp + grace < now          → annotated with age,          │
│                                                 most overdue first (stable)  │
│                                                                               │
│   Heavy:     0 < interval <= heavy_threshold  → grouped by hook,             │
│              (one-shot events never qualify)    at most 3 examples each      │
│                                                                               │
│   Orphaned:  hook seen in snapshot AND        → hook names, first-seen order │
│              registry reports 0 callbacks       one registry query per hook  │
│                                                                               │
│   Timeline (grace = 60s, now = 1000):                                         │
│                                                                               │
│      100 ──────── 500 ──────────── 940 ─── 950 ──── 1000                     │
│       │            │                │       │         │                       │
│    overdue      overdue          boundary  queued    now                     │
│    (age 900)    (age 500)        (not late)                                  │
└──────────────────────────────────────────────────────────────────────────────┘

The classifier never mutates the snapshot and never truncates the overdue
list; display limits belong to whoever renders the result.
"""

from __future__ import annotations

from typing import Any

from cron_reality.analysis.models import (
    ClassificationResult,
    HeavyRepeatingGroup,
    OverdueEvent,
    ScheduledEvent,
    Snapshot,
)
from cron_reality.analysis.registry import as_callback_registry
from cron_reality.core.logging import get_logger
from cron_reality.core.settings import (
    DEFAULT_HEAVY_REPEAT_THRESHOLD_SECONDS,
    DEFAULT_OVERDUE_GRACE_SECONDS,
)

logger = get_logger(__name__)

# Samples kept per heavy-repeating hook.
MAX_HEAVY_EXAMPLES = 3


def is_overdue(event: ScheduledEvent, now: int, grace_seconds: int) -> bool:
    """True when ``event`` is late by more than the grace period."""
    return event.timestamp + grace_seconds < now


def is_heavy_repeating(event: ScheduledEvent, heavy_threshold_seconds: int) -> bool:
    """True when ``event`` recurs at or below the heavy threshold."""
    if not event.schedule or event.interval is None:
        return False
    return 0 < event.interval <= heavy_threshold_seconds


def classify(
    snapshot: Snapshot,
    callback_registry: Any,
    grace_seconds: int = DEFAULT_OVERDUE_GRACE_SECONDS,
    heavy_threshold_seconds: int = DEFAULT_HEAVY_REPEAT_THRESHOLD_SECONDS,
) -> ClassificationResult:
    """Classify every event of ``snapshot``.

    Args:
        snapshot: Output of :func:`build_snapshot`
        callback_registry: A :class:`CallbackRegistry`, a ``{hook: callbacks}``
            mapping, or an iterable of hook names that have callbacks
        grace_seconds: Tolerance before an event counts as overdue
        heavy_threshold_seconds: Largest interval still considered heavy

    Returns:
        ClassificationResult

    Raises:
        Whatever the callback registry raises, unchanged.
    """
    registry = as_callback_registry(callback_registry)
    result = ClassificationResult()
    overdue: list[OverdueEvent] = []
    hooks_seen: dict[str, None] = {}

    for event in snapshot.events:
        if is_overdue(event, snapshot.now, grace_seconds):
            overdue.append(OverdueEvent.from_event(event, age=snapshot.now - event.timestamp))

        if is_heavy_repeating(event, heavy_threshold_seconds):
            group = result.heavy_repeating.get(event.hook)
            if group is None:
                group = HeavyRepeatingGroup(
                    hook=event.hook,
                    schedule=event.schedule,
                    interval=event.interval,
                )
                result.heavy_repeating[event.hook] = group
            if len(group.examples) < MAX_HEAVY_EXAMPLES:
                group.examples.append(event)

        hooks_seen.setdefault(event.hook, None)

    # sorted() is stable: equal ages keep snapshot order.
    result.overdue = sorted(overdue, key=lambda e: e.age, reverse=True)

    for hook in hooks_seen:
        if registry.callback_count(hook) <= 0:
            result.orphaned_hooks.append(hook)

    logger.debug(
        "events_classified",
        overdue=len(result.overdue),
        heavy=len(result.heavy_repeating),
        orphaned=len(result.orphaned_hooks),
        distinct_hooks=len(hooks_seen),
    )
    return result
