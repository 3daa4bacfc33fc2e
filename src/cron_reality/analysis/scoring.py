"""Heuristic health score for the inspected scheduler.

The score starts at 100 and loses points for each kind of trouble. The
numbers are deliberately blunt; the messages carry the detail.

    ┌──────────────────────────┬───────────────────────────┐
    │ condition                │ deduction                 │
    ├──────────────────────────┼───────────────────────────┤
    │ scheduler disabled       │ 50                        │
    │ overdue events           │ min(40, 2 × overdue)      │
    │ heavy-repeating hooks    │ min(20, 2 × heavy)        │
    │ orphaned hooks           │ min(15, orphaned)         │
    │ more than 500 events     │ 10                        │
    │ no events at all         │ 0 (note only)             │
    └──────────────────────────┴───────────────────────────┘

    score >= 80 → good,  50..79 → warning,  < 50 → critical

Messages are emitted in table order and the tier remark always comes last.
"""

from __future__ import annotations

from cron_reality.analysis.models import (
    ClassificationResult,
    ConfigFlags,
    HealthCounts,
    HealthReport,
    LockInfo,
    Severity,
    Snapshot,
)
from cron_reality.core.logging import get_logger

logger = get_logger(__name__)

MAX_SCORE = 100
GOOD_SCORE = 80
WARNING_SCORE = 50
HIGH_VOLUME_EVENTS = 500

DISABLED_DEDUCTION = 50
OVERDUE_DEDUCTION_CAP = 40
HEAVY_DEDUCTION_CAP = 20
ORPHANED_DEDUCTION_CAP = 15
HIGH_VOLUME_DEDUCTION = 10

DISABLED_MESSAGE = (
    "WP Cron appears to be disabled via DISABLE_WP_CRON. If you do not have a real "
    "server cron calling wp-cron.php, scheduled tasks will not run."
)
OVERDUE_MESSAGES = (
    "There is {count} overdue cron event. Something is running late.",
    "There are {count} overdue cron events. Something is badly behind.",
)
HEAVY_MESSAGES = (
    "There is {count} repeating job with a very short interval. This can add constant load.",
    "There are {count} repeating jobs with very short intervals. This can quietly chew CPU.",
)
ORPHANED_MESSAGES = (
    "There is {count} cron hook with no callbacks attached. Likely from an old plugin.",
    "There are {count} cron hooks with no callbacks attached. Likely leftovers from old plugins.",
)
HIGH_VOLUME_MESSAGE = (
    "There are more than 500 scheduled cron events. This might be normal on a busy "
    "site, or it might be a plugin leaking jobs."
)
EMPTY_MESSAGE = (
    "There are no cron events scheduled at all. Either this is a very simple site, "
    "or something wiped the cron array."
)
REASSURANCE_MESSAGE = "No overdue, heavy or orphaned cron events were found."
TIER_REMARKS = {
    Severity.GOOD: "Cron looks reasonably healthy. No obvious disasters detected.",
    Severity.WARNING: "Cron is limping. Nothing is on fire yet, but there are things to fix.",
    Severity.CRITICAL: "Cron health is poor. Expect missed scheduled posts and background tasks.",
}


def plural(messages: tuple[str, str], count: int) -> str:
    """Pick the singular or plural form and fill in ``count``."""
    singular, many = messages
    return (singular if count == 1 else many).format(count=count)


def severity_for(score: int) -> Severity:
    if score >= GOOD_SCORE:
        return Severity.GOOD
    if score >= WARNING_SCORE:
        return Severity.WARNING
    return Severity.CRITICAL


def score_health(
    snapshot: Snapshot,
    classification: ClassificationResult,
    lock_info: LockInfo,
    config_flags: ConfigFlags,
) -> HealthReport:
    """Score the scheduler and explain the score.

    ``lock_info`` is accepted so every input of a run reaches the scorer,
    but no deduction depends on it; lock state is reported, not scored.

    Returns:
        HealthReport with score in ``[0, 100]``
    """
    counts = HealthCounts(
        total=snapshot.total,
        overdue=len(classification.overdue),
        heavy=len(classification.heavy_repeating),
        orphaned=len(classification.orphaned_hooks),
    )
    score = MAX_SCORE
    messages: list[str] = []

    if config_flags.scheduler_disabled:
        score -= DISABLED_DEDUCTION
        messages.append(DISABLED_MESSAGE)

    if counts.overdue > 0:
        score -= min(OVERDUE_DEDUCTION_CAP, counts.overdue * 2)
        messages.append(plural(OVERDUE_MESSAGES, counts.overdue))

    if counts.heavy > 0:
        score -= min(HEAVY_DEDUCTION_CAP, counts.heavy * 2)
        messages.append(plural(HEAVY_MESSAGES, counts.heavy))

    if counts.orphaned > 0:
        score -= min(ORPHANED_DEDUCTION_CAP, counts.orphaned)
        messages.append(plural(ORPHANED_MESSAGES, counts.orphaned))

    if counts.total > HIGH_VOLUME_EVENTS:
        score -= HIGH_VOLUME_DEDUCTION
        messages.append(HIGH_VOLUME_MESSAGE)

    deductions_reported = bool(messages)

    if counts.total == 0:
        messages.append(EMPTY_MESSAGE)

    score = max(0, min(MAX_SCORE, score))
    severity = severity_for(score)

    if severity is Severity.GOOD and not deductions_reported:
        messages.append(REASSURANCE_MESSAGE)
    messages.append(TIER_REMARKS[severity])

    logger.debug(
        "health_scored",
        score=score,
        severity=severity.value,
        lock_stale=lock_info.is_stale,
        **counts.to_dict(),
    )
    return HealthReport(score=score, severity=severity, messages=messages, counts=counts)
