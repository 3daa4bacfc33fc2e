"""
CLI layer for cron-reality-check.

Provides a Typer application whose commands delegate to the analysis
engine (``cron_reality.analysis``). This package handles only terminal
transport: argument parsing, coloured output, and table formatting.

Entry point::

    cron-reality --help
"""

from cron_reality.cli.app import app

__all__ = ["app"]
