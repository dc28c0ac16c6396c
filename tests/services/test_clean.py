"""Tests for CleanService."""

from __future__ import annotations

from pathlib import Path

from assetctl.config.settings import AssetSettings
from assetctl.infrastructure.project import Project
from assetctl.services.build import BuildService
from assetctl.services.clean import CleanService
from tests.conftest import write


class TestClean:
    def test_removes_output_tree(self, project: Project) -> None:
        write(project.output_dir / "css" / "a.css", "x")
        result = CleanService(project).clean()
        assert result.ok
        assert result.data["removed"] is True
        assert not project.output_dir.exists()

    def test_missing_output_is_ok(self, project: Project) -> None:
        result = CleanService(project).clean()
        assert result.ok
        assert result.data["removed"] is False

    def test_leaves_sources_alone(self, project: Project, project_root: Path) -> None:
        write(project.output_dir / "index.html", "x")
        CleanService(project).clean()
        assert (project_root / "src" / "index.html").is_file()

    def test_refuses_project_root(self, project_root: Path) -> None:
        write(project_root / "assetctl.toml", '[paths]\noutput = "."\n')
        settings = AssetSettings.from_cli(project_root=project_root)
        result = CleanService(Project(settings)).clean()
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "UNSAFE_OUTPUT"
        assert (project_root / "src").is_dir()

    def test_refuses_input_directory(self, project_root: Path) -> None:
        write(project_root / "assetctl.toml", '[paths]\noutput = "src"\n')
        project = Project(AssetSettings.from_cli(project_root=project_root))
        result = CleanService(project).clean()
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "UNSAFE_OUTPUT"
        assert "input directory" in result.error.message
        assert (project_root / "src" / "index.html").is_file()

    def test_refuses_parent_of_input(self, project_root: Path) -> None:
        write(project_root / "assetctl.toml", '[paths]\ninput = "site/src"\noutput = "site"\n')
        write(project_root / "site" / "src" / "index.html", "<p>hi</p>\n")
        project = Project(AssetSettings.from_cli(project_root=project_root))
        result = CleanService(project).clean()
        assert result.error is not None
        assert result.error.code == "UNSAFE_OUTPUT"
        assert (project_root / "site" / "src" / "index.html").is_file()

    def test_refuses_ancestor_of_root(self, project_root: Path) -> None:
        write(project_root / "assetctl.toml", '[paths]\noutput = ".."\n')
        project = Project(AssetSettings.from_cli(project_root=project_root))
        result = CleanService(project).clean()
        assert result.error is not None
        assert result.error.code == "UNSAFE_OUTPUT"
        assert "project root" in result.error.message
        assert (project_root / "src").is_dir()

    def test_build_stops_before_deleting_sources(self, project_root: Path) -> None:
        write(project_root / "assetctl.toml", '[paths]\noutput = "src"\n')
        project = Project(AssetSettings.from_cli(project_root=project_root))
        result = BuildService(project).build()
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "BUILD_FAILED"
        assert (project_root / "src" / "scss" / "styles.scss").is_file()
