"""Unit tests for package.json loading.

Tests for PackageManifest section collection and dependency selection.
"""

import json
import logging
from pathlib import Path
from typing import Any

import pytest
import typer
from modsweep.core.manifest import (
    ManifestNotFoundError,
    ManifestParseError,
    ManifestValidationError,
    PackageManifest,
    load_package_manifest,
    require_manifest,
)


def _write_manifest(path: Path, data: Any) -> Path:
    path.write_text(json.dumps(data))
    return path


@pytest.fixture
def sample_data() -> dict[str, Any]:
    """A package.json with every kind of dependency section."""
    return {
        "name": "demo",
        "version": "1.2.3",
        "scripts": {"build": "tsc"},
        "dependencies": {"foo": "^1.0.0", "@scope/pkg": "2.x"},
        "devDependencies": {"baz": "*", "foo": "^1.0.0"},
        "optionalDependencies": {},
        "bundledDependencies": ["foo"],
        "files": ["dist"],
        "private": True,
    }


class TestPackageManifest:
    """Tests for PackageManifest section collection."""

    def test_collects_object_and_list_sections(self, sample_data: dict[str, Any]) -> None:
        manifest = PackageManifest.from_document(sample_data)

        assert manifest.name == "demo"
        assert manifest.version == "1.2.3"
        assert manifest.sections["dependencies"] == ["foo", "@scope/pkg"]
        assert manifest.sections["devDependencies"] == ["baz", "foo"]
        assert manifest.sections["optionalDependencies"] == []
        assert manifest.sections["bundledDependencies"] == ["foo"]
        assert manifest.sections["files"] == ["dist"]

    def test_scalars_are_not_sections(self, sample_data: dict[str, Any]) -> None:
        manifest = PackageManifest.from_document(sample_data)

        assert "name" not in manifest.sections
        assert "private" not in manifest.sections

    def test_bundled_true_means_all_dependencies(self) -> None:
        """bundledDependencies: true bundles every regular dependency."""
        manifest = PackageManifest.from_document(
            {"dependencies": {"a": "1", "b": "2"}, "bundledDependencies": True}
        )
        assert manifest.sections["bundledDependencies"] == ["a", "b"]

    def test_bundled_false_declares_nothing(self) -> None:
        manifest = PackageManifest.from_document({"bundleDependencies": False})
        assert "bundleDependencies" not in manifest.sections

    def test_bundled_invalid_value(self) -> None:
        with pytest.raises(ManifestValidationError, match="list of names or a boolean"):
            PackageManifest.from_document({"bundledDependencies": "foo"})

    @pytest.mark.parametrize(
        "key", ["dependencies", "devDependencies", "optionalDependencies", "peerDependencies"]
    )
    def test_object_section_must_be_object(self, key: str) -> None:
        """A list of names is not accepted where npm requires an object."""
        with pytest.raises(ManifestValidationError, match="must be an object"):
            PackageManifest.from_document({key: ["foo"]})

    def test_bundled_list_of_non_strings(self) -> None:
        with pytest.raises(ManifestValidationError, match="list of names or a boolean"):
            PackageManifest.from_document({"bundledDependencies": [1, 2]})

    def test_unknown_list_keys_are_sections(self) -> None:
        """Other string lists are selectable; lists of objects are ignored."""
        manifest = PackageManifest.from_document(
            {"workspaces": ["packages/a"], "contributors": [{"name": "x"}]}
        )

        assert manifest.sections == {"workspaces": ["packages/a"]}

    def test_sections_key_in_document_is_ordinary_data(self) -> None:
        """A top-level "sections" key is read like any other key."""
        manifest = PackageManifest.from_document(
            {"name": "x", "sections": ["a"], "dependencies": {"foo": "1"}}
        )

        assert manifest.name == "x"
        assert manifest.sections == {"sections": ["a"], "dependencies": ["foo"]}

    def test_non_string_name_rejected(self) -> None:
        with pytest.raises(ManifestValidationError, match="Invalid manifest content"):
            PackageManifest.from_document({"name": 5, "dependencies": {}})

    def test_document_must_be_object(self) -> None:
        with pytest.raises(ManifestValidationError, match="JSON object"):
            PackageManifest.from_document(["foo"])

    def test_manifest_is_frozen(self) -> None:
        manifest = PackageManifest.from_document({"dependencies": {"a": "1"}})
        with pytest.raises(ValueError):
            manifest.name = "other"  # type: ignore[misc]


class TestDependencyNames:
    """Tests for PackageManifest.dependency_names."""

    def test_selected_sections_in_order(self, sample_data: dict[str, Any]) -> None:
        """Names follow section order then declaration order, without duplicates."""
        manifest = PackageManifest.from_document(sample_data)

        names = manifest.dependency_names(["devDependencies", "dependencies"])

        assert names == ["baz", "foo", "@scope/pkg"]

    def test_missing_key_is_skipped(
        self, sample_data: dict[str, Any], caplog: pytest.LogCaptureFixture
    ) -> None:
        manifest = PackageManifest.from_document(sample_data)

        with caplog.at_level(logging.DEBUG, logger="modsweep"):
            names = manifest.dependency_names(["peerDependencies", "dependencies"])

        assert names == ["foo", "@scope/pkg"]
        assert "peerDependencies not found in package.json file" in caplog.text

    def test_empty_section(self, sample_data: dict[str, Any]) -> None:
        manifest = PackageManifest.from_document(sample_data)
        assert manifest.dependency_names(["optionalDependencies"]) == []

    def test_missing_sections(self, sample_data: dict[str, Any]) -> None:
        manifest = PackageManifest.from_document(sample_data)

        missing = manifest.missing_sections(["dependencies", "peerDependencies", "nope"])

        assert missing == ["peerDependencies", "nope"]


class TestLoadPackageManifest:
    """Tests for load_package_manifest function."""

    def test_loads_file(self, tmp_path: Path, sample_data: dict[str, Any]) -> None:
        path = _write_manifest(tmp_path / "package.json", sample_data)

        manifest = load_package_manifest(path)

        assert manifest.dependency_names(["dependencies"]) == ["foo", "@scope/pkg"]

    def test_loads_file_with_sections_key(self, tmp_path: Path) -> None:
        path = _write_manifest(
            tmp_path / "package.json",
            {"name": "x", "sections": ["a"], "dependencies": {"foo": "1"}},
        )

        manifest = load_package_manifest(path)

        assert manifest.dependency_names(["dependencies"]) == ["foo"]

    def test_list_dependencies_rejected(self, tmp_path: Path) -> None:
        path = _write_manifest(tmp_path / "package.json", {"dependencies": ["foo"]})

        with pytest.raises(ManifestValidationError, match="'dependencies' must be an object"):
            load_package_manifest(path)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ManifestNotFoundError, match="Manifest not found"):
            load_package_manifest(tmp_path / "package.json")

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "package.json"
        path.write_text('{"dependencies": {')

        with pytest.raises(ManifestParseError, match="Invalid JSON syntax"):
            load_package_manifest(path)

    def test_invalid_shape(self, tmp_path: Path) -> None:
        path = _write_manifest(tmp_path / "package.json", {"devDependencies": 3})

        with pytest.raises(ManifestValidationError, match="Invalid manifest content"):
            load_package_manifest(path)


class TestRequireManifest:
    """Tests for require_manifest function."""

    def test_returns_manifest(self, tmp_path: Path) -> None:
        path = _write_manifest(tmp_path / "package.json", {"dependencies": {"a": "1"}})
        assert require_manifest(path).sections == {"dependencies": ["a"]}

    def test_missing_file_exits(self, tmp_path: Path) -> None:
        with pytest.raises(typer.Exit) as exc_info:
            require_manifest(tmp_path / "package.json")
        assert exc_info.value.exit_code == 1

    def test_invalid_file_exits(self, tmp_path: Path) -> None:
        path = tmp_path / "package.json"
        path.write_text("not json")

        with pytest.raises(typer.Exit) as exc_info:
            require_manifest(path)
        assert exc_info.value.exit_code == 1
