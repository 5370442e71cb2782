"""CLI commands for modsweep.

This package contains all subcommand implementations.
"""

from modsweep.cli.commands import config, remove, scan

__all__ = ["config", "remove", "scan"]
