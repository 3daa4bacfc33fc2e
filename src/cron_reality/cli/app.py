"""
Root Typer application for the cron-reality CLI.
"""

from __future__ import annotations

import typer
from typer import Typer

from cron_reality.cli import report
from cron_reality.cli.utils import load_settings
from cron_reality.core.logging import configure_logging

app = Typer(
    name="cron-reality",
    help="cron-reality — compare what cron says it is doing with what is actually happening.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# ── Version callback ─────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        from importlib.metadata import PackageNotFoundError
        from importlib.metadata import version as pkg_version

        try:
            v = pkg_version("cron-reality-check")
        except PackageNotFoundError:
            from cron_reality import __version__ as v
        typer.echo(f"cron-reality {v}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(  # noqa: UP007
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging on stderr."),
) -> None:
    """cron-reality CLI — read-only diagnosis of a scheduler snapshot document."""
    settings = load_settings()
    configure_logging(
        level="DEBUG" if verbose else settings.log_level,
        json_format=settings.json_logs,
    )


# ── Commands ─────────────────────────────────────────────────────────────

app.command("check")(report.check)
app.command("overdue")(report.overdue)
app.command("heavy")(report.heavy)
app.command("orphans")(report.orphans)
app.command("summary")(report.summary)
app.command("lock")(report.lock)
app.command("export")(report.export)


if __name__ == "__main__":
    app()
