"""package.json loading and dependency selection.

This module reads a project's package.json and turns the selected
dependency sections into a flat list of dependency names. Object
sections (``dependencies``, ``devDependencies``...) contribute their
keys; array sections (``bundledDependencies``) contribute their items.
"""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)

# Sections whose shape is checked strictly when present
OBJECT_SECTIONS: frozenset[str] = frozenset(
    {"dependencies", "devDependencies", "optionalDependencies", "peerDependencies"}
)
BUNDLED_SECTIONS: frozenset[str] = frozenset({"bundledDependencies", "bundleDependencies"})


class ManifestError(Exception):
    """Base exception for manifest-related errors."""


class ManifestNotFoundError(ManifestError):
    """Raised when the manifest file is not found."""


class ManifestParseError(ManifestError):
    """Raised when the manifest file is not valid JSON."""


class ManifestValidationError(ManifestError):
    """Raised when the manifest content has the wrong shape."""


class PackageManifest(BaseModel):
    """Dependency view of a package.json file.

    Attributes:
        name: Package name, if declared.
        version: Package version, if declared.
        sections: Every top-level key holding an object or a list of
            strings, mapped to the dependency names it declares.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str | None = None
    version: str | None = None
    sections: dict[str, list[str]] = Field(default_factory=dict)

    @classmethod
    def from_document(cls, data: Any) -> "PackageManifest":
        """Build a manifest from a parsed package.json document.

        Known dependency sections must have their npm shape. Any other
        top-level key holding an object or a list of strings becomes a
        selectable section too.

        Args:
            data: Parsed JSON document.

        Returns:
            Validated PackageManifest.

        Raises:
            ManifestValidationError: If the document or a known section has
                the wrong shape.
        """
        if not isinstance(data, dict):
            raise ManifestValidationError("Invalid manifest content: expected a JSON object")

        sections: dict[str, list[str]] = {}
        for key, value in data.items():
            if key in OBJECT_SECTIONS:
                if not isinstance(value, dict):
                    raise ManifestValidationError(
                        f"Invalid manifest content: '{key}' must be an object "
                        "mapping names to versions"
                    )
                sections[key] = list(value)
            elif key in BUNDLED_SECTIONS:
                if _is_name_list(value):
                    sections[key] = list(value)
                elif value is True:
                    # npm: `true` bundles every regular dependency
                    sections[key] = list(data.get("dependencies") or {})
                elif value is not False:
                    raise ManifestValidationError(
                        f"Invalid manifest content: '{key}' must be a list of names "
                        "or a boolean"
                    )
            elif isinstance(value, dict):
                sections[key] = list(value)
            elif _is_name_list(value):
                sections[key] = list(value)

        try:
            return cls(name=data.get("name"), version=data.get("version"), sections=sections)
        except ValidationError as e:
            raise ManifestValidationError(f"Invalid manifest content: {e}") from e

    def missing_sections(self, keys: list[str] | tuple[str, ...]) -> list[str]:
        """Return the selected keys the manifest does not declare."""
        return [key for key in keys if key not in self.sections]

    def dependency_names(self, keys: list[str] | tuple[str, ...]) -> list[str]:
        """Return dependency names from the selected sections.

        Names are returned in section order, then declaration order,
        with duplicates dropped. Keys absent from the manifest are
        logged and skipped.

        Args:
            keys: Section names to select.

        Returns:
            List of distinct dependency names.
        """
        names: dict[str, None] = {}
        for key in keys:
            section = self.sections.get(key)
            if section is None:
                logger.debug("%s not found in package.json file", key)
                continue
            names.update(dict.fromkeys(section))
        return list(names)


def _is_name_list(value: object) -> bool:
    return isinstance(value, list) and all(isinstance(item, str) for item in value)


def load_package_manifest(path: Path) -> PackageManifest:
    """Load and validate a package.json file.

    Args:
        path: Path to the manifest file.

    Returns:
        Validated PackageManifest.

    Raises:
        ManifestNotFoundError: If the file doesn't exist.
        ManifestParseError: If the JSON syntax is invalid.
        ManifestValidationError: If the content doesn't have the expected shape.
        ManifestError: If the file cannot be read.
    """
    if not path.exists():
        raise ManifestNotFoundError(f"Manifest not found: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ManifestParseError(f"Invalid JSON syntax: {e}") from e
    except OSError as e:
        raise ManifestError(f"Failed to read manifest: {e}") from e

    return PackageManifest.from_document(data)


def require_manifest(path: Path) -> PackageManifest:
    """Load the manifest or exit with a helpful error message.

    This is a convenience wrapper around load_package_manifest() that
    prints user-friendly messages and exits for the common failures.

    Args:
        path: Path to the manifest file.

    Returns:
        Loaded and validated PackageManifest.

    Raises:
        typer.Exit: If the manifest cannot be loaded.
    """
    import typer

    from modsweep.utils.formatting import print_error, print_info

    try:
        return load_package_manifest(path)
    except ManifestNotFoundError as e:
        print_error(f"Manifest not found: {path}")
        print_info("Run modsweep next to package.json or pass --manifest.")
        raise typer.Exit(code=1) from e
    except ManifestError as e:
        print_error(f"Failed to load manifest: {e}")
        raise typer.Exit(code=1) from e
