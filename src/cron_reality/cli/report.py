"""
CLI: report commands — ``cron-reality check|overdue|heavy|orphans|summary|lock|export``.

Every command reads one snapshot document and renders part of the
analysis. None of them writes anything back to the scheduler.
"""

from __future__ import annotations

import sys
from pathlib import Path

import typer
from rich.markup import escape

from cron_reality.analysis import format_interval, top_hooks, top_overdue, write_events_csv
from cron_reality.cli.utils import (
    SEVERITY_STYLES,
    console,
    fail,
    load_settings,
    print_dict,
    print_json,
    print_table,
    run_document,
)

DocumentArg = typer.Argument(..., help="Snapshot document (JSON).")
GraceOpt = typer.Option(None, "--grace", help="Overdue grace period in seconds.")
HeavyOpt = typer.Option(
    None, "--heavy-threshold", help="Largest interval (seconds) counted as heavy."
)
JsonOpt = typer.Option(False, "--json", help="Emit JSON instead of tables.")


def check(
    document: Path = DocumentArg,
    grace: int | None = GraceOpt,
    heavy_threshold: int | None = HeavyOpt,
    json_out: bool = JsonOpt,
) -> None:
    """Show the health score and what drove it."""
    result = run_document(document, grace=grace, heavy_threshold=heavy_threshold)
    health = result.health

    if json_out:
        print_json(health.to_dict())
        return

    style = SEVERITY_STYLES[health.severity.value]
    console.print(
        f"[bold]Cron health:[/bold] [{style}]{health.score}/100 ({health.severity.value})[/{style}]"
    )
    for message in health.messages:
        console.print(f"  • {escape(message)}")
    print_dict(health.counts.to_dict(), title="Counts")


def overdue(
    document: Path = DocumentArg,
    limit: int | None = typer.Option(None, "--limit", "-n", help="Rows to show."),
    grace: int | None = GraceOpt,
    json_out: bool = JsonOpt,
) -> None:
    """List overdue events, most overdue first."""
    result = run_document(document, grace=grace)
    limit = limit if limit is not None else load_settings().top_overdue_limit
    if limit < 1:
        fail("--limit must be at least 1", code="VALIDATION")
    events = top_overdue(result.classification, limit=limit)

    if json_out:
        print_json([event.to_dict() for event in events])
        return

    print_table(
        [
            {
                "hook": event.hook,
                "scheduled": event.timestamp,
                "late": f"{format_interval(event.age)} late",
                "schedule": event.schedule or "one-off",
                "interval": (
                    f"{format_interval(event.interval)} between runs"
                    if event.interval
                    else ""
                ),
            }
            for event in events
        ],
        title="Overdue events",
        empty="No overdue events detected within the current snapshot.",
    )
    total = len(result.classification.overdue)
    if total > len(events):
        console.print(f"\n[dim]Showing {len(events)} of {total}[/dim]")


def heavy(
    document: Path = DocumentArg,
    heavy_threshold: int | None = HeavyOpt,
    json_out: bool = JsonOpt,
) -> None:
    """List repeating hooks with very short intervals."""
    result = run_document(document, heavy_threshold=heavy_threshold)
    groups = list(result.classification.heavy_repeating.values())

    if json_out:
        print_json([group.to_dict() for group in groups])
        return

    print_table(
        [
            {
                "hook": group.hook,
                "schedule": group.schedule,
                "interval": format_interval(group.interval),
                "next runs": ", ".join(str(event.timestamp) for event in group.examples),
            }
            for group in groups
        ],
        title="Suspicious repeating events",
        empty="No repeating events with very short intervals were detected.",
    )


def orphans(
    document: Path = DocumentArg,
    json_out: bool = JsonOpt,
) -> None:
    """List scheduled hooks with no callbacks attached."""
    result = run_document(document)
    hooks = result.classification.orphaned_hooks
    counts = result.snapshot.hook_counts

    if json_out:
        print_json(list(hooks))
        return

    print_table(
        [{"hook": hook, "scheduled events": counts.get(hook, 0)} for hook in hooks],
        title="Orphaned cron hooks",
        empty="No orphaned cron hooks detected.",
    )


def summary(
    document: Path = DocumentArg,
    limit: int | None = typer.Option(None, "--limit", "-n", help="Hooks to show."),
    json_out: bool = JsonOpt,
) -> None:
    """Show total events and the most used hooks."""
    result = run_document(document)
    limit = limit if limit is not None else load_settings().top_hooks_limit
    if limit < 1:
        fail("--limit must be at least 1", code="VALIDATION")
    ranked = top_hooks(result.snapshot, limit=limit)

    if json_out:
        print_json(
            {
                "total": result.snapshot.total,
                "top_hooks": [{"hook": hook, "count": count} for hook, count in ranked],
            }
        )
        return

    console.print(f"[bold]Total scheduled events:[/bold] {result.snapshot.total}")
    print_table(
        [{"hook": hook, "count": count} for hook, count in ranked],
        title="Most used hooks",
        empty="No cron events registered.",
    )


def lock(
    document: Path = DocumentArg,
    json_out: bool = JsonOpt,
) -> None:
    """Show the scheduler lock and configuration flags."""
    result = run_document(document)
    lock_info, config = result.lock, result.config

    if json_out:
        print_json({"lock": lock_info.to_dict(), "config": config.to_dict()})
        return

    print_dict(config.to_dict(), title="Configuration")
    if config.scheduler_disabled:
        console.print(
            "  [yellow]Cron is disabled. A real server cron must call the trigger URL "
            "or scheduled tasks will never run.[/yellow]"
        )

    print_dict(lock_info.to_dict(), title="Lock")
    if lock_info.timestamp is None:
        console.print("  [dim]No active cron lock recorded.[/dim]")
    elif lock_info.is_stale:
        console.print(
            "  [yellow]The lock looks stale. If this persists, cron processes may be "
            "getting stuck.[/yellow]"
        )


def export(
    document: Path = DocumentArg,
    output: Path | None = typer.Option(
        None, "--output", "-o", help="CSV file to write (default: stdout)."
    ),
) -> None:
    """Export the flattened snapshot as CSV."""
    result = run_document(document)

    if output is None:
        write_events_csv(result.snapshot, sys.stdout)
        return

    with open(output, "w", newline="", encoding="utf-8") as f:
        rows = write_events_csv(result.snapshot, f)
    console.print(f"Wrote {rows} events to {escape(str(output))}")
