"""Analysis package for cron-reality-check.

Manifesto:
    A cooperative scheduler only runs when something pokes it. Its
    persisted table therefore says what *should* have happened, not what
    did. This package compares the two without touching anything: it
    never reschedules, deletes or fires events.

┌──────────────────────────────────────────────────────────────────────────────┐
│  CRON REALITY CHECK - Read-only scheduler diagnosis                          │
│                                                                               │
│  Quick Start:                                                                 │
│  ┌──────────────────────────────────────────────────────────────────────┐   │
│  │   from cron_reality.analysis import create_reality_check             │   │
│  │                                                                      │   │
│  │   check = create_reality_check(grace_seconds=60)                     │   │
│  │   result = check.run(                                                │   │
│  │       raw_table=cron_table,                                          │   │
│  │       recurrence_registry=schedules,                                 │   │
│  │       callback_registry=filters,                                     │   │
│  │       raw_lock=lock_value,                                           │   │
│  │       environment=os.environ,                                        │   │
│  │       now=int(time.time()),                                          │   │
│  │   )                                                                  │   │
│  │   print(result.health.score, result.health.severity)                 │   │
│  └──────────────────────────────────────────────────────────────────────┘   │
│                                                                               │
│  Pipeline:                                                                    │
│  ┌─────────────────────────────────────────────────────────────────────┐    │
│  │                                                                     │    │
│  │   raw table ──► build_snapshot ──► classify ──► score_health        │    │
│  │                                      ▲              ▲               │    │
│  │                      callback registry     inspect_lock             │    │
│  │                                            read_config              │    │
│  │                                                                     │    │
│  └─────────────────────────────────────────────────────────────────────┘    │
└──────────────────────────────────────────────────────────────────────────────┘

Guardrails:
    ❌ Reading global registries inside the engine
    ✅ Pass the callback and recurrence registries in explicitly
    ❌ Truncating results inside the engine
    ✅ ``top_overdue()`` / ``top_hooks()`` at render time
    ❌ Reading the clock per event
    ✅ One ``now`` per snapshot

Tags:
    cron-reality, scheduling, health-score, overdue, orphaned-hooks
"""

from __future__ import annotations

from .classifier import MAX_HEAVY_EXAMPLES, classify, is_heavy_repeating, is_overdue
from .document import SnapshotDocument, load_document, parse_document
from .engine import RealityCheck
from .inspector import LOCK_STALE_SECONDS, inspect_lock, read_config
from .models import (
    ClassificationResult,
    ConfigFlags,
    HealthCounts,
    HealthReport,
    HeavyRepeatingGroup,
    LockInfo,
    OverdueEvent,
    RealityCheckResult,
    ScheduledEvent,
    Severity,
    Snapshot,
)
from .presentation import format_interval, top_hooks, top_overdue, write_events_csv
from .registry import CallbackRegistry, MappingCallbackRegistry, as_callback_registry
from .scoring import score_health
from .snapshot import build_snapshot

__all__ = [
    # Models
    "ScheduledEvent",
    "OverdueEvent",
    "Snapshot",
    "HeavyRepeatingGroup",
    "ClassificationResult",
    "LockInfo",
    "ConfigFlags",
    "HealthCounts",
    "HealthReport",
    "RealityCheckResult",
    "Severity",
    # Registries
    "CallbackRegistry",
    "MappingCallbackRegistry",
    "as_callback_registry",
    # Pipeline
    "build_snapshot",
    "classify",
    "is_overdue",
    "is_heavy_repeating",
    "MAX_HEAVY_EXAMPLES",
    "inspect_lock",
    "read_config",
    "LOCK_STALE_SECONDS",
    "score_health",
    "RealityCheck",
    # Documents
    "SnapshotDocument",
    "load_document",
    "parse_document",
    # Presentation
    "format_interval",
    "top_hooks",
    "top_overdue",
    "write_events_csv",
    "create_reality_check",
]


def create_reality_check(
    grace_seconds: int | None = None,
    heavy_threshold_seconds: int | None = None,
    settings=None,
) -> RealityCheck:
    """Factory function to create a configured engine.

    Explicit arguments win over ``settings``; ``settings`` defaults to a
    freshly loaded :class:`~cron_reality.core.settings.RealityCheckSettings`.

    Raises:
        InvalidConfigError: a value is negative or not an integer
    """
    if settings is None:
        from cron_reality.core.settings import RealityCheckSettings

        settings = RealityCheckSettings()

    return RealityCheck(
        grace_seconds=(
            settings.overdue_grace_seconds if grace_seconds is None else grace_seconds
        ),
        heavy_threshold_seconds=(
            settings.heavy_repeat_threshold_seconds
            if heavy_threshold_seconds is None
            else heavy_threshold_seconds
        ),
    )
