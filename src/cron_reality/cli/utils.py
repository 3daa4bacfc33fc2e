"""
CLI utility helpers — running the engine and rendering its output.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, NoReturn

import pydantic
import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from cron_reality.analysis import RealityCheckResult, create_reality_check, load_document
from cron_reality.core.errors import CronRealityError
from cron_reality.core.logging import LogContext, get_logger
from cron_reality.core.settings import RealityCheckSettings

console = Console()
err_console = Console(stderr=True)
logger = get_logger(__name__)

SEVERITY_STYLES = {
    "good": "bold green",
    "warning": "bold yellow",
    "critical": "bold red",
}


# ── Engine helpers ───────────────────────────────────────────────────────


def load_settings() -> RealityCheckSettings:
    """Load settings, turning validation failures into a CLI error."""
    try:
        return RealityCheckSettings()
    except pydantic.ValidationError as e:
        fail(f"Invalid CRON_REALITY_* settings: {e.errors()[0]['msg']}", code="CONFIG")


def run_document(
    path: Path,
    *,
    grace: int | None = None,
    heavy_threshold: int | None = None,
) -> RealityCheckResult:
    """Load a snapshot document and analyse it."""
    settings = load_settings()
    with LogContext(document=str(path)):
        try:
            check = create_reality_check(
                grace_seconds=grace,
                heavy_threshold_seconds=heavy_threshold,
                settings=settings,
            )
            document = load_document(path)
            return document.run(check)
        except CronRealityError as e:
            logger.warning("reality_check_failed", **e.to_dict())
            fail(e.message, code=e.category.value)


def fail(message: str, *, code: str = "ERROR") -> NoReturn:
    """Print an error line and exit with status 1."""
    err_console.print(f"[bold red]Error[/bold red] ({code}): {escape(message)}")
    raise typer.Exit(code=1)


# ── Output helpers ───────────────────────────────────────────────────────


def print_json(payload: Any) -> None:
    console.print_json(json.dumps(payload, default=str))


def print_table(rows: list[dict[str, Any]], *, title: str = "", empty: str = "No items.") -> None:
    """Render a list of dicts as a Rich table."""
    if not rows:
        console.print(f"[dim]{empty}[/dim]")
        return
    table = Table(title=title or None, show_lines=False, pad_edge=False)
    for col in rows[0]:
        table.add_column(col, overflow="fold")
    for row in rows:
        table.add_row(*("" if v is None else escape(str(v)) for v in row.values()))
    console.print(table)


def print_dict(data: dict[str, Any], *, title: str = "") -> None:
    """Render a single dict as key-value pairs."""
    if title:
        console.print(f"[bold]{title}[/bold]")
    for k, v in data.items():
        console.print(f"  [cyan]{k}[/cyan]: {escape(str(v))}")
