"""CLI package for modsweep.

This package contains the Typer application and all subcommands.
"""

from modsweep.cli.main import app

__all__ = ["app"]
