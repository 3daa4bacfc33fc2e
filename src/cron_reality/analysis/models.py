"""Records produced by the analysis pipeline.

Every stage returns plain dataclasses so callers can render them however
they like. ``to_dict()`` gives a JSON-ready view for the CLI and the HTTP
router.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any


class Severity(str, Enum):
    """Health tier derived from the clamped score."""

    GOOD = "good"
    WARNING = "warning"
    CRITICAL = "critical"


@dataclass(frozen=True)
class ScheduledEvent:
    """One scheduled occurrence of a hook.

    ``interval`` is ``None`` for one-shot events and for recurrences the
    registry does not know about. ``now`` is shared by every event of the
    snapshot it belongs to.
    """

    timestamp: int
    hook: str
    args: tuple[Any, ...]
    schedule: str
    interval: int | None
    now: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "hook": self.hook,
            "args": list(self.args),
            "schedule": self.schedule,
            "interval": self.interval,
            "now": self.now,
        }


@dataclass(frozen=True)
class OverdueEvent(ScheduledEvent):
    """A scheduled event annotated with how late it is."""

    age: int

    @classmethod
    def from_event(cls, event: ScheduledEvent, age: int) -> OverdueEvent:
        values = {f.name: getattr(event, f.name) for f in fields(ScheduledEvent)}
        return cls(**values, age=age)

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["age"] = self.age
        return result


@dataclass
class Snapshot:
    """Flattened view of the scheduler table at one instant."""

    now: int
    events: list[ScheduledEvent] = field(default_factory=list)
    hook_counts: dict[str, int] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return len(self.events)

    def to_dict(self) -> dict[str, Any]:
        return {
            "now": self.now,
            "total": self.total,
            "hook_counts": dict(self.hook_counts),
            "events": [event.to_dict() for event in self.events],
        }


@dataclass
class HeavyRepeatingGroup:
    """Short-interval recurrences of one hook, with a few sample events."""

    hook: str
    schedule: str
    interval: int
    examples: list[ScheduledEvent] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "hook": self.hook,
            "schedule": self.schedule,
            "interval": self.interval,
            "examples": [event.to_dict() for event in self.examples],
        }


@dataclass
class ClassificationResult:
    """Overdue events, heavy-repeating groups and orphaned hooks."""

    overdue: list[OverdueEvent] = field(default_factory=list)
    heavy_repeating: dict[str, HeavyRepeatingGroup] = field(default_factory=dict)
    orphaned_hooks: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "overdue": [event.to_dict() for event in self.overdue],
            "heavy_repeating": {
                hook: group.to_dict() for hook, group in self.heavy_repeating.items()
            },
            "orphaned_hooks": list(self.orphaned_hooks),
        }


@dataclass(frozen=True)
class LockInfo:
    """What the scheduler's lock marker says about the last run."""

    timestamp: float | None = None
    owner: str | None = None
    is_stale: bool = False
    age_seconds: float | None = None
    raw: Any = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "owner": self.owner,
            "is_stale": self.is_stale,
            "age_seconds": self.age_seconds,
        }


@dataclass(frozen=True)
class ConfigFlags:
    """Operating mode of the inspected scheduler."""

    scheduler_disabled: bool = False
    alternate_mode_enabled: bool = False
    trigger_url: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "scheduler_disabled": self.scheduler_disabled,
            "alternate_mode_enabled": self.alternate_mode_enabled,
            "trigger_url": self.trigger_url,
        }


@dataclass(frozen=True)
class HealthCounts:
    total: int = 0
    overdue: int = 0
    heavy: int = 0
    orphaned: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            "total": self.total,
            "overdue": self.overdue,
            "heavy": self.heavy,
            "orphaned": self.orphaned,
        }


@dataclass
class HealthReport:
    """Heuristic score, tier and the explanations behind them."""

    score: int
    severity: Severity
    messages: list[str] = field(default_factory=list)
    counts: HealthCounts = field(default_factory=HealthCounts)

    def to_dict(self) -> dict[str, Any]:
        return {
            "score": self.score,
            "severity": self.severity.value,
            "messages": list(self.messages),
            "counts": self.counts.to_dict(),
        }


@dataclass
class RealityCheckResult:
    """Everything one analysis run produced."""

    snapshot: Snapshot
    classification: ClassificationResult
    lock: LockInfo
    config: ConfigFlags
    health: HealthReport

    def to_dict(self) -> dict[str, Any]:
        return {
            "health": self.health.to_dict(),
            "config": self.config.to_dict(),
            "lock": self.lock.to_dict(),
            "classification": self.classification.to_dict(),
            "snapshot": self.snapshot.to_dict(),
        }
