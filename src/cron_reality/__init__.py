"""
cron-reality-check - read-only diagnosis of a cooperative task scheduler.

Looks at what the scheduler's persisted table says it is doing, compares it
to the clock and to the live callback registry, and reports overdue events,
suspiciously frequent recurrences, orphaned hooks and a blunt health score.
"""

__version__ = "0.1.0"
