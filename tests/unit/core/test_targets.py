"""Unit tests for dependency name to directory mapping."""

from pathlib import Path

import pytest
from modsweep.core.targets import InvalidTargetError, build_target_paths, target_path


class TestTargetPath:
    """Tests for target_path function."""

    def test_plain_name(self) -> None:
        assert target_path("foo") == Path("node_modules/foo")

    def test_scoped_name(self) -> None:
        """Scoped packages live in a nested directory."""
        assert target_path("@types/node", "/proj/node_modules") == Path(
            "/proj/node_modules/@types/node"
        )

    def test_custom_modules_dir(self, tmp_path: Path) -> None:
        assert target_path("baz", tmp_path) == tmp_path / "baz"

    @pytest.mark.parametrize("name", ["", "   "])
    def test_rejects_empty(self, name: str) -> None:
        with pytest.raises(InvalidTargetError, match="cannot be empty"):
            target_path(name)

    @pytest.mark.parametrize("name", ["..", "../etc", "foo/../../x", "/etc/passwd", "a\\b"])
    def test_rejects_escaping_names(self, name: str) -> None:
        with pytest.raises(InvalidTargetError, match="escapes the modules directory"):
            target_path(name)


class TestBuildTargetPaths:
    """Tests for build_target_paths function."""

    def test_keeps_order_and_drops_duplicates(self) -> None:
        paths = build_target_paths(["foo", "baz", "foo"], "nm")
        assert paths == [Path("nm/foo"), Path("nm/baz")]

    def test_empty(self) -> None:
        assert build_target_paths([]) == []

    def test_one_invalid_name_fails_all(self) -> None:
        with pytest.raises(InvalidTargetError):
            build_target_paths(["foo", "../bar"])
