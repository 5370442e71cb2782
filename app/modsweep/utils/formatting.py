"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

import logging
import sys

from rich.console import Console
from rich.logging import RichHandler

from modsweep.core.theme import get_theme


def _detect_color_system() -> str | None:
    """Detect the best color system for the current terminal.

    Returns "truecolor" for interactive terminals to enable full hex color support,
    None otherwise to let Rich auto-detect.
    """
    if sys.stdout.isatty():
        return "truecolor"
    return None


# Shared console instances (theme loaded once at import)
console = Console(theme=get_theme(), color_system=_detect_color_system())
err_console = Console(theme=get_theme(), stderr=True, color_system=_detect_color_system())


def configure_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Route modsweep log records to stderr through Rich.

    Progress lines (targets started, finished, remaining) are INFO and
    only shown with ``verbose``; per-target failures are WARNING.

    Args:
        verbose: Show progress lines.
        quiet: Show errors only.
    """
    level = logging.ERROR if quiet else logging.INFO if verbose else logging.WARNING
    package_logger = logging.getLogger("modsweep")
    package_logger.setLevel(level)
    if not any(isinstance(h, RichHandler) for h in package_logger.handlers):
        package_logger.addHandler(
            RichHandler(console=err_console, show_path=False, show_time=verbose)
        )


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{message}[/]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[warning]Warning:[/] {message}")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{message}[/]")
