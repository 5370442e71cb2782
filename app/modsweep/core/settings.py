"""User settings for modsweep.

Settings are stored in ~/.config/modsweep/config.toml. Every field has a
default, so the file is optional; command-line options override it.

Example::

    keys = ["dependencies", "devDependencies"]
    modules_dir = "node_modules"
    max_concurrency = 64
"""

import tomllib
from pathlib import Path
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from modsweep.core.paths import DEFAULT_MANIFEST_NAME, DEFAULT_MODULES_DIR, get_settings_path

# Manifest sections removed when no keys are given
DEFAULT_DEPENDENCY_KEYS: tuple[str, ...] = (
    "devDependencies",
    "optionalDependencies",
    "dependencies",
    "bundledDependencies",
)


class Settings(BaseModel):
    """Effective modsweep configuration.

    Attributes:
        keys: Manifest sections whose dependencies are removed.
        modules_dir: Directory the dependency folders live in.
        manifest: Manifest file name or path.
        max_concurrency: Bound on concurrent filesystem calls (0 = unbounded).
    """

    model_config = ConfigDict(extra="forbid")

    keys: Annotated[
        list[str],
        Field(description="Manifest sections to remove"),
    ] = list(DEFAULT_DEPENDENCY_KEYS)
    modules_dir: Annotated[
        str,
        Field(min_length=1, description="Directory holding dependency folders"),
    ] = DEFAULT_MODULES_DIR
    manifest: Annotated[
        str,
        Field(min_length=1, description="Manifest file"),
    ] = DEFAULT_MANIFEST_NAME
    max_concurrency: Annotated[
        int,
        Field(ge=0, description="Concurrent filesystem calls (0 = unbounded)"),
    ] = 0

    @field_validator("keys")
    @classmethod
    def validate_keys(cls, v: list[str]) -> list[str]:
        """Reject an empty key list and blank key names."""
        if not v:
            msg = "keys cannot be empty"
            raise ValueError(msg)
        if any(not key.strip() for key in v):
            msg = "keys cannot contain blank names"
            raise ValueError(msg)
        return v

    def with_overrides(self, **overrides: object) -> "Settings":
        """Return a copy with every non-None override applied and validated."""
        data = self.model_dump()
        data.update({k: v for k, v in overrides.items() if v is not None})
        return Settings.model_validate(data)


class SettingsError(Exception):
    """Base exception for settings errors."""


class SettingsParseError(SettingsError):
    """Raised when the settings file cannot be parsed."""


def load_settings(path: Path | None = None) -> Settings:
    """Load settings from a TOML file.

    A missing file is not an error; the defaults are returned.

    Args:
        path: Path to the settings file. If None, uses the default path.

    Returns:
        Validated Settings object.

    Raises:
        SettingsParseError: If the TOML syntax is invalid.
        SettingsError: If the file cannot be read or the content is invalid.
    """
    settings_path = path or get_settings_path()

    if not settings_path.exists():
        return Settings()

    try:
        with open(settings_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise SettingsParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise SettingsError(f"Failed to read settings: {e}") from e

    try:
        return Settings.model_validate(data)
    except ValidationError as e:
        raise SettingsError(f"Invalid settings content: {e}") from e
