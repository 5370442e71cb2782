"""Derivation of target directories from dependency names."""

from collections.abc import Iterable
from pathlib import Path, PurePosixPath

from modsweep.core.paths import DEFAULT_MODULES_DIR


class InvalidTargetError(ValueError):
    """Raised when a dependency name cannot be mapped inside the modules directory."""


def target_path(name: str, modules_dir: Path | str = DEFAULT_MODULES_DIR) -> Path:
    """Map one dependency name to its directory under ``modules_dir``.

    Scoped names such as ``@types/node`` map to nested directories.

    Raises:
        InvalidTargetError: If the name is empty, absolute, or would
            escape ``modules_dir``.
    """
    parts = PurePosixPath(name).parts
    if not name.strip() or not parts:
        raise InvalidTargetError("Dependency name cannot be empty")
    if name.startswith("/") or "\\" in name or any(p in ("..", ".") for p in parts):
        raise InvalidTargetError(f"Dependency name escapes the modules directory: {name!r}")
    return Path(modules_dir).joinpath(*parts)


def build_target_paths(
    names: Iterable[str],
    modules_dir: Path | str = DEFAULT_MODULES_DIR,
) -> list[Path]:
    """Map dependency names to distinct target directories, keeping order.

    Args:
        names: Dependency names from the manifest.
        modules_dir: Directory the dependency folders live in.

    Returns:
        One path per distinct name.

    Raises:
        InvalidTargetError: If any name is not a valid dependency name.
    """
    return list(dict.fromkeys(target_path(name, modules_dir) for name in names))
