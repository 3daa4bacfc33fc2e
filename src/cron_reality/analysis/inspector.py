"""Lock and configuration inspection.

Both functions are independent of the event list. They read what the host
persisted or configured, never validate beyond simple coercion, and never
fail on odd input.

Lock marker
    The host stores ``[claimed_at, owner]`` while a run is in progress.
    ``claimed_at`` is epoch seconds with sub-second precision. A claim
    older than :data:`LOCK_STALE_SECONDS` is stale.

Configuration
    ``DISABLE_WP_CRON``    the scheduler never fires on its own
    ``ALTERNATE_WP_CRON``  the redirect-based fallback trigger is on
    ``WP_CRON_URL``        endpoint a real cron should hit
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from typing import Any

from cron_reality.analysis.models import ConfigFlags, LockInfo

# Matches the host scheduler's own lock expiry.
LOCK_STALE_SECONDS = 60

DISABLED_FLAG = "DISABLE_WP_CRON"
ALTERNATE_FLAG = "ALTERNATE_WP_CRON"
TRIGGER_URL_KEY = "WP_CRON_URL"

_TRUE_STRINGS = frozenset({"1", "true", "yes", "on"})


def inspect_lock(raw_lock_value: Any, current_time: float) -> LockInfo:
    """Describe the scheduler lock.

    Args:
        raw_lock_value: ``None`` or ``[timestamp, owner]``
        current_time: High-resolution epoch seconds

    Returns:
        LockInfo; inert (no timestamp, not stale) for any other shape
    """
    if (
        not isinstance(raw_lock_value, Sequence)
        or isinstance(raw_lock_value, (str, bytes))
        or len(raw_lock_value) != 2
    ):
        return LockInfo(raw=raw_lock_value)

    raw_timestamp, raw_owner = raw_lock_value
    timestamp = _coerce_float(raw_timestamp)
    if timestamp is None:
        return LockInfo(raw=raw_lock_value)

    age = float(current_time) - timestamp
    return LockInfo(
        timestamp=timestamp,
        owner=None if raw_owner is None else str(raw_owner),
        is_stale=age > LOCK_STALE_SECONDS,
        age_seconds=age,
        raw=raw_lock_value,
    )


def read_config(environment: Mapping[str, Any] | None) -> ConfigFlags:
    """Read the scheduler's operating flags from ``environment``.

    Absent flags are False and an absent trigger URL is ``""``.
    """
    if not isinstance(environment, Mapping):
        return ConfigFlags()
    url = environment.get(TRIGGER_URL_KEY)
    return ConfigFlags(
        scheduler_disabled=coerce_flag(environment.get(DISABLED_FLAG)),
        alternate_mode_enabled=coerce_flag(environment.get(ALTERNATE_FLAG)),
        trigger_url="" if url is None else str(url),
    )


def coerce_flag(value: Any) -> bool:
    """Boolean coercion for flag values that may arrive as strings."""
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_STRINGS
    return bool(value)


def _coerce_float(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    return result if math.isfinite(result) else None
