"""Scan command implementation.

Walks the declared dependency folders without deleting anything and
reports how many files and directories each one holds.
"""

import asyncio
import json
from pathlib import Path
from typing import Annotated

import typer

from modsweep.cli.display import create_results_table
from modsweep.cli.types import OutputFormat, resolve_settings, resolve_targets
from modsweep.removal.coordinator import RemovalCoordinator
from modsweep.removal.models import RemovalReport
from modsweep.utils.formatting import console, print_info


def scan(
    keys: Annotated[
        list[str] | None,
        typer.Argument(
            help="Manifest sections to scan (default: all dependency sections).",
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
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
) -> None:
    """Scan declared dependency folders without removing anything."""
    settings = resolve_settings(
        manifest=str(manifest) if manifest is not None else None,
        modules_dir=modules_dir,
    )
    targets = resolve_targets(settings, keys)

    if not targets:
        print_info("No dependencies declared in the selected sections.")
        return

    coordinator = RemovalCoordinator(
        dry_run=True,
        max_concurrency=settings.max_concurrency or None,
    )
    report = asyncio.run(coordinator.remove_all(targets))

    if output_format == OutputFormat.JSON:
        _print_json(report)
    else:
        console.print(create_results_table(report))
        total_files = sum(o.files for o in report.outcomes)
        total_dirs = sum(o.directories for o in report.outcomes)
        console.print(
            f"\n[dim]Found {total_files} files and {total_dirs} directories "
            f"in {len(report.succeeded)} of {len(report.outcomes)} target(s)[/dim]"
        )

    if not report.ok:
        raise typer.Exit(code=1)


def _print_json(report: RemovalReport) -> None:
    """Display scan outcomes as JSON."""
    data = [
        {
            "target": str(o.target),
            "status": o.phase.value,
            "files": o.files,
            "directories": o.directories,
            "error": o.error,
        }
        for o in report.outcomes
    ]
    console.print_json(json.dumps(data))
