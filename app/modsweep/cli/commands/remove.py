"""Remove command implementation.

Removes the dependency folders declared in package.json from the
modules directory.
"""

import asyncio
from pathlib import Path
from typing import Annotated

import typer

from modsweep.cli.display import create_plan_table, create_results_table, print_results_summary
from modsweep.cli.types import resolve_settings, resolve_targets
from modsweep.removal.coordinator import RemovalCoordinator
from modsweep.utils.formatting import console, print_info


def remove(
    keys: Annotated[
        list[str] | None,
        typer.Argument(
            help="Manifest sections to remove (default: all dependency sections).",
            show_default=False,
        ),
    ] = None,
    manifest: Annotated[
        Path | None,
        typer.Option("--manifest", "-m", help="Path to package.json."),
    ] = None,
    modules_dir: Annotated[
        str | None,
        typer.Option(
            "--modules-dir",
            "-d",
            help="Modules directory, relative to the manifest.",
        ),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Show what would be removed."),
    ] = False,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt."),
    ] = False,
    max_concurrency: Annotated[
        int | None,
        typer.Option(
            "--max-concurrency",
            help="Maximum concurrent filesystem calls (0 = unbounded).",
            min=0,
        ),
    ] = None,
) -> None:
    """Remove declared dependency folders from node_modules."""
    settings = resolve_settings(
        manifest=str(manifest) if manifest is not None else None,
        modules_dir=modules_dir,
        max_concurrency=max_concurrency,
    )
    targets = resolve_targets(settings, keys)

    if not targets:
        print_info("No dependencies declared in the selected sections.")
        return

    console.print(create_plan_table(targets, dry_run=dry_run))

    # Confirm unless --yes or --dry-run
    if not dry_run and not yes:
        confirmed = typer.confirm(
            f"\nProceed with removing {len(targets)} dependency folder(s)?",
            default=False,
        )
        if not confirmed:
            print_info("Aborted.")
            raise typer.Exit(code=0)

    coordinator = RemovalCoordinator(
        dry_run=dry_run,
        max_concurrency=settings.max_concurrency or None,
    )
    report = asyncio.run(coordinator.remove_all(targets))

    console.print(create_results_table(report))
    print_results_summary(report)

    # Exit with error if any target failed
    if not report.ok:
        raise typer.Exit(code=1)
