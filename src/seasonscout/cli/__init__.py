"""Command-line interface for seasonscout.

This package provides the Typer app used by the ``seasonscout`` console script.
All output goes through Rich (see :mod:`seasonscout.cli.console`) unless it is
disabled with ``--no-rich``.
"""

from seasonscout.cli.commands import app, main

__all__ = ["app", "main"]
