"""Settings for cron-reality-check.

``RealityCheckSettings`` holds the numeric tuning of the analysis engine
and the harness defaults. Values come from ``CRON_REALITY_*`` environment
variables or a ``.env`` file.

The scheduler's own flags (disabled, alternate mode, trigger URL) are *not*
settings of this tool; they describe the scheduler being inspected and are
read by :func:`cron_reality.analysis.inspector.read_config`.

Examples:
    >>> from cron_reality.core.settings import RealityCheckSettings
    >>> settings = RealityCheckSettings(overdue_grace_seconds=120)
    >>> settings.heavy_repeat_threshold_seconds
    300

Tags:
    settings, configuration, pydantic, environment, cron-reality
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_OVERDUE_GRACE_SECONDS = 60
DEFAULT_HEAVY_REPEAT_THRESHOLD_SECONDS = 300


class RealityCheckSettings(BaseSettings):
    """Engine and harness configuration.

    Fields
    ──────
    overdue_grace_seconds          : Tolerance before a past-due event counts as overdue
    heavy_repeat_threshold_seconds : Intervals at or below this are "heavy"
    top_overdue_limit              : Rows shown by the overdue listing
    top_hooks_limit                : Rows shown by the most-used-hooks summary
    log_level                      : Structlog log level
    json_logs                      : Force JSON (True) / console (False) logs
    """

    model_config = SettingsConfigDict(
        env_prefix="CRON_REALITY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Engine ───────────────────────────────────────────────────
    overdue_grace_seconds: int = Field(default=DEFAULT_OVERDUE_GRACE_SECONDS, ge=0)
    heavy_repeat_threshold_seconds: int = Field(
        default=DEFAULT_HEAVY_REPEAT_THRESHOLD_SECONDS, ge=0
    )

    # ── Presentation ─────────────────────────────────────────────
    top_overdue_limit: int = Field(default=50, ge=1)
    top_hooks_limit: int = Field(default=10, ge=1)

    # ── Observability ────────────────────────────────────────────
    log_level: str = "WARNING"
    json_logs: bool | None = None
