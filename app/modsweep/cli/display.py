"""Shared Rich display functions for removal plans and results.

Provides table builders and summary printers used by the remove and
scan commands.
"""

from pathlib import Path

from rich.table import Table

from modsweep.removal.models import RemovalReport, TargetOutcome
from modsweep.utils.formatting import console, print_success


def create_plan_table(targets: list[Path], dry_run: bool = False) -> Table:
    """Create a Rich table listing the directories about to be removed.

    Args:
        targets: Target directories in removal order.
        dry_run: Whether this is a dry-run (changes table title).

    Returns:
        Rich Table configured for plan display.
    """
    title = "Planned Removals (Dry Run)" if dry_run else "Planned Removals"

    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("#", width=4, justify="right", style="muted")
    table.add_column("Directory", no_wrap=True)
    table.add_column("State", width=10)

    for index, target in enumerate(targets, start=1):
        state = "[removed]present[/removed]" if target.exists() else "[muted]missing[/muted]"
        table.add_row(str(index), f"[target.path]{target}[/target.path]", state)

    return table


def create_results_table(report: RemovalReport) -> Table:
    """Create a Rich table displaying per-target outcomes.

    Successful targets show "OK" (or "SCAN" in dry-run); failed targets
    show "FAIL" with the error message. Counts are files and nested
    directories removed, or found in dry-run.

    Args:
        report: Report returned by the coordinator.

    Returns:
        Rich Table configured for results display.
    """
    table = Table(
        title="Results",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Status", width=8, justify="center")
    table.add_column("Directory", no_wrap=True)
    table.add_column("Files", justify="right", width=8)
    table.add_column("Dirs", justify="right", width=8)
    table.add_column("Message")

    for outcome in report.outcomes:
        table.add_row(
            _status_cell(outcome),
            str(outcome.target),
            str(outcome.files),
            str(outcome.directories),
            f"[muted]{_message(outcome)}[/muted]",
        )

    return table


def print_results_summary(report: RemovalReport) -> None:
    """Print a summary of the removal run.

    Shows a success message when every target succeeded, or a count of
    succeeded/failed targets when there are failures.

    Args:
        report: Report returned by the coordinator.
    """
    success_count = len(report.succeeded)
    fail_count = len(report.failed)

    if fail_count == 0:
        print_success(f"All {success_count} target(s) completed successfully.")
    else:
        console.print(
            f"\n[success]{success_count} succeeded[/success], [error]{fail_count} failed[/error]"
        )


def _status_cell(outcome: TargetOutcome) -> str:
    if not outcome.success:
        return "[error]FAIL[/error]"
    if outcome.dry_run:
        return "[info]SCAN[/info]"
    return "[success]OK[/success]"


def _message(outcome: TargetOutcome) -> str:
    if outcome.error:
        return outcome.error
    if outcome.dry_run:
        return "would be removed"
    if outcome.top_level_removed:
        return "removed"
    return ""
