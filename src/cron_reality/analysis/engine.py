"""Run the whole snapshot → classify → score pipeline against one clock."""

from __future__ import annotations

import time
from collections.abc import Mapping
from typing import Any

from cron_reality.analysis.classifier import classify
from cron_reality.analysis.inspector import inspect_lock, read_config
from cron_reality.analysis.models import RealityCheckResult
from cron_reality.analysis.scoring import score_health
from cron_reality.analysis.snapshot import build_snapshot
from cron_reality.core.errors import InvalidConfigError
from cron_reality.core.logging import get_logger
from cron_reality.core.settings import (
    DEFAULT_HEAVY_REPEAT_THRESHOLD_SECONDS,
    DEFAULT_OVERDUE_GRACE_SECONDS,
    RealityCheckSettings,
)

logger = get_logger(__name__)


class RealityCheck:
    """Configured analysis engine.

    Holds the two numeric knobs of the classifier and validates them once,
    up front. Every :meth:`run` is otherwise a pure function of its inputs,
    so one instance can serve any number of concurrent callers.

    Example:
        >>> check = RealityCheck(grace_seconds=60, heavy_threshold_seconds=300)
        >>> result = check.run(
        ...     raw_table={1000: {"cleanup": {"k": {"schedule": "", "args": []}}}},
        ...     recurrence_registry={},
        ...     callback_registry={"cleanup": ["purge"]},
        ...     now=2000,
        ... )
        >>> result.health.counts.overdue
        1
    """

    def __init__(
        self,
        grace_seconds: int = DEFAULT_OVERDUE_GRACE_SECONDS,
        heavy_threshold_seconds: int = DEFAULT_HEAVY_REPEAT_THRESHOLD_SECONDS,
    ) -> None:
        self.grace_seconds = _validate_seconds("grace_seconds", grace_seconds)
        self.heavy_threshold_seconds = _validate_seconds(
            "heavy_threshold_seconds", heavy_threshold_seconds
        )

    @classmethod
    def from_settings(cls, settings: RealityCheckSettings) -> RealityCheck:
        return cls(
            grace_seconds=settings.overdue_grace_seconds,
            heavy_threshold_seconds=settings.heavy_repeat_threshold_seconds,
        )

    def run(
        self,
        raw_table: Any,
        recurrence_registry: Mapping[str, Any] | None,
        callback_registry: Any,
        raw_lock: Any = None,
        environment: Mapping[str, Any] | None = None,
        now: int | None = None,
        current_time: float | None = None,
    ) -> RealityCheckResult:
        """Analyse one scheduler state.

        Args:
            raw_table: The host's cron table
            recurrence_registry: schedule name → ``{"interval": seconds}``
            callback_registry: Live hook → callbacks table (see ``classify``)
            raw_lock: Persisted lock marker, if any
            environment: Mapping holding the scheduler's flags
            now: Evaluation time in epoch seconds; wall clock when omitted
            current_time: High-resolution time for lock staleness;
                defaults to ``now``
        """
        if now is None:
            current_time = time.time() if current_time is None else current_time
            now = int(current_time)
        elif current_time is None:
            current_time = float(now)

        snapshot = build_snapshot(raw_table, recurrence_registry, now)
        classification = classify(
            snapshot,
            callback_registry,
            grace_seconds=self.grace_seconds,
            heavy_threshold_seconds=self.heavy_threshold_seconds,
        )
        lock = inspect_lock(raw_lock, current_time)
        config = read_config(environment)
        health = score_health(snapshot, classification, lock, config)

        logger.debug(
            "reality_check_completed",
            score=health.score,
            severity=health.severity.value,
            now=snapshot.now,
        )
        return RealityCheckResult(
            snapshot=snapshot,
            classification=classification,
            lock=lock,
            config=config,
            health=health,
        )

    def __repr__(self) -> str:
        return (
            f"RealityCheck(grace_seconds={self.grace_seconds}, "
            f"heavy_threshold_seconds={self.heavy_threshold_seconds})"
        )


def _validate_seconds(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidConfigError(name, value, f"{name} must be an integer number of seconds")
    if value < 0:
        raise InvalidConfigError(name, value, f"{name} must not be negative (got {value})")
    return value
