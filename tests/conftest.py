"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

import json
import os
from collections.abc import Callable
from pathlib import Path

import pytest
from modsweep.removal.fsio import LocalFilesystem
from modsweep.removal.models import EntryKind

# Nested dict describing a directory tree: str values are file contents,
# dict values are subdirectories.
TreeSpec = dict[str, "str | TreeSpec"]


class RecordingFilesystem:
    """LocalFilesystem wrapper that records calls and injects failures.

    Every call is appended to ``events`` as ``(operation, path)`` before
    it is forwarded. Paths listed in ``fail[operation]`` raise
    PermissionError instead. Each directory delete asserts that the
    directory has no entries at the moment of the call.
    """

    def __init__(self, fail: dict[str, set[Path]] | None = None) -> None:
        self._inner = LocalFilesystem()
        self._fail = fail or {}
        self.events: list[tuple[str, Path]] = []

    def _record(self, operation: str, path: Path) -> None:
        self.events.append((operation, path))
        if path in self._fail.get(operation, set()):
            raise PermissionError(13, "Permission denied", str(path))

    async def list_directory(self, path: Path) -> list[str]:
        self._record("list", path)
        return await self._inner.list_directory(path)

    async def stat_path(self, path: Path) -> EntryKind:
        self._record("stat", path)
        return await self._inner.stat_path(path)

    async def delete_file(self, path: Path) -> None:
        self._record("unlink", path)
        await self._inner.delete_file(path)

    async def delete_empty_directory(self, path: Path) -> None:
        self._record("rmdir", path)
        assert os.listdir(path) == [], f"{path} deleted while not empty"
        await self._inner.delete_empty_directory(path)

    def paths(self, operation: str) -> list[Path]:
        """Return the paths of every recorded call of ``operation``."""
        return [p for op, p in self.events if op == operation]

    def index(self, operation: str, path: Path) -> int:
        """Return the position of the first ``operation`` call on ``path``."""
        return self.events.index((operation, path))

    def mutations_under(self, root: Path) -> list[tuple[str, Path]]:
        """Return every unlink/rmdir recorded at or below ``root``."""
        return [
            (op, p)
            for op, p in self.events
            if op in ("unlink", "rmdir") and (p == root or root in p.parents)
        ]


@pytest.fixture
def recording_fs() -> Callable[..., RecordingFilesystem]:
    """Factory for RecordingFilesystem instances.

    Usage: ``recording_fs(list={path}, unlink={other})``.
    """

    def _make(**fail: set[Path]) -> RecordingFilesystem:
        return RecordingFilesystem(fail=fail)

    return _make


def _build(root: Path, spec: TreeSpec) -> None:
    root.mkdir(parents=True, exist_ok=True)
    for name, value in spec.items():
        if isinstance(value, dict):
            _build(root / name, value)
        else:
            (root / name).write_text(value)


@pytest.fixture
def make_tree() -> Callable[[Path, TreeSpec], Path]:
    """Create a directory tree from a nested dict and return its root."""

    def _make(root: Path, spec: TreeSpec) -> Path:
        _build(root, spec)
        return root

    return _make


@pytest.fixture(autouse=True)
def isolated_config(
    tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch
) -> Path:
    """Point XDG_CONFIG_HOME at an empty directory so user settings never leak in."""
    config_home = tmp_path_factory.mktemp("xdg-config")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    return config_home


@pytest.fixture
def project(tmp_path: Path, make_tree: Callable[[Path, TreeSpec], Path]) -> Path:
    """A project with a package.json and its installed node_modules.

    ``foo`` and ``@scope/pkg`` are regular dependencies, ``baz`` is a dev
    dependency. ``unrelated`` is installed but not declared.
    """
    (tmp_path / "package.json").write_text(
        json.dumps(
            {
                "name": "demo",
                "dependencies": {"foo": "^1.0.0", "@scope/pkg": "^2.0.0"},
                "devDependencies": {"baz": "*"},
            }
        )
    )
    make_tree(
        tmp_path / "node_modules",
        {
            "foo": {"a.txt": "a", "b.txt": "b", "bar": {}},
            "baz": {"inner": {"c.txt": "c"}},
            "@scope": {"pkg": {"index.js": "x"}},
            "unrelated": {"keep.js": "k"},
        },
    )
    return tmp_path
