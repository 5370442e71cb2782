"""Shared types and helpers for CLI commands.

Settings resolution and target derivation are needed by both the
``remove`` and ``scan`` commands, so they live here.
"""

from enum import Enum
from pathlib import Path

import typer
from pydantic import ValidationError

from modsweep.core.manifest import require_manifest
from modsweep.core.settings import Settings, SettingsError, load_settings
from modsweep.core.targets import InvalidTargetError, build_target_paths
from modsweep.utils.formatting import print_error, print_warning


class OutputFormat(str, Enum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"


def resolve_settings(**overrides: object) -> Settings:
    """Load user settings and apply command-line overrides.

    Options left unset (None) keep the value from the settings file.

    Raises:
        typer.Exit: If the settings file or an override is invalid.
    """
    try:
        settings = load_settings()
    except SettingsError as e:
        print_error(f"Failed to load settings: {e}")
        raise typer.Exit(code=1) from e

    try:
        return settings.with_overrides(**overrides)
    except ValidationError as e:
        print_error(f"Invalid option: {e}")
        raise typer.Exit(code=1) from e


def resolve_targets(settings: Settings, keys: list[str] | None = None) -> list[Path]:
    """Derive target directories from the manifest named in ``settings``.

    The modules directory is resolved relative to the manifest's
    directory. Selected sections missing from the manifest produce a
    warning and are skipped.

    Args:
        settings: Effective settings.
        keys: Manifest sections to select. Defaults to ``settings.keys``.

    Returns:
        Distinct target directories, in manifest order.

    Raises:
        typer.Exit: If the manifest cannot be loaded or declares an
            invalid dependency name.
    """
    manifest_path = Path(settings.manifest)
    manifest = require_manifest(manifest_path)

    selected = keys or settings.keys
    for key in manifest.missing_sections(selected):
        print_warning(f"{key} not found in {manifest_path.name} file")

    modules_dir = manifest_path.parent / settings.modules_dir
    try:
        return build_target_paths(manifest.dependency_names(selected), modules_dir)
    except InvalidTargetError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
