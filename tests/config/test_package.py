"""Tests for banner metadata resolution."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from assetctl.config.package import read_package_json, resolve_package
from assetctl.config.settings import AssetSettings


class TestReadPackageJson:
    def test_reads_banner_fields(self, tmp_path: Path) -> None:
        path = tmp_path / "package.json"
        path.write_text(json.dumps({"name": "agency", "version": "7.0.0", "private": True}))
        package = read_package_json(path)
        assert package.name == "agency"
        assert package.version == "7.0.0"
        assert package.display_title == "agency"

    def test_author_object(self, tmp_path: Path) -> None:
        path = tmp_path / "package.json"
        path.write_text(json.dumps({"author": {"name": "Start Bootstrap", "url": "x"}}))
        assert read_package_json(path).author == "Start Bootstrap"

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "package.json"
        path.write_text("{nope")
        with pytest.raises(ValueError, match="Invalid JSON"):
            read_package_json(path)

    def test_not_an_object(self, tmp_path: Path) -> None:
        path = tmp_path / "package.json"
        path.write_text("[]")
        with pytest.raises(ValueError, match="JSON object"):
            read_package_json(path)


class TestResolvePackage:
    def test_toml_wins(self, tmp_path: Path) -> None:
        (tmp_path / "package.json").write_text(json.dumps({"name": "from-json"}))
        (tmp_path / "assetctl.toml").write_text('[package]\nname = "from-toml"\n')
        settings = AssetSettings.from_cli(project_root=tmp_path)
        assert resolve_package(settings).name == "from-toml"

    def test_package_json_fallback(self, tmp_path: Path) -> None:
        (tmp_path / "package.json").write_text(json.dumps({"name": "from-json"}))
        settings = AssetSettings.from_cli(project_root=tmp_path)
        assert resolve_package(settings).name == "from-json"

    def test_defaults(self, tmp_path: Path) -> None:
        settings = AssetSettings.from_cli(project_root=tmp_path)
        package = resolve_package(settings)
        assert package.name == ""
        assert package.version == "0.0.0"
