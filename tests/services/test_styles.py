"""Tests for StyleService."""

from __future__ import annotations

from pathlib import Path

import pytest

from assetctl.config.settings import AssetSettings
from assetctl.infrastructure.project import Project
from assetctl.services.styles import StyleService
from tests.conftest import write


class TestSources:
    def test_partials_excluded(self, project: Project) -> None:
        names = [p.name for p in StyleService(project).sources()]
        assert names == ["styles.scss"]

    def test_nested_sources_found(self, project: Project, project_root: Path) -> None:
        write(project_root / "src" / "scss" / "pages" / "about.scss", "a { b: c; }\n")
        rels = [p.relative_to(project_root).as_posix() for p in StyleService(project).sources()]
        assert "src/scss/pages/about.scss" in rels


class TestBuild:
    def test_writes_minified_file(self, project: Project) -> None:
        result = StyleService(project).build()
        assert result.ok, result.error
        assert result.op == "css"
        assert result.data["files"] == ["css/styles.min.css"]
        assert (project.output_dir / "css" / "styles.min.css").is_file()

    def test_keeps_subdirectory(self, project: Project, project_root: Path) -> None:
        write(project_root / "src" / "scss" / "pages" / "about.scss", "a { color: red; }\n")
        result = StyleService(project).build()
        assert result.ok
        assert "css/pages/about.min.css" in result.data["files"]

    def test_include_path_resolves_node_modules(self, project: Project, project_root: Path) -> None:
        write(project_root / "node_modules" / "theme" / "_mixins.scss", "$gap: 4px;\n")
        write(
            project_root / "src" / "scss" / "styles.scss",
            '@import "theme/mixins";\n.a { margin: $gap; }\n',
        )
        result = StyleService(project).build()
        assert result.ok, result.error
        css = (project.output_dir / "css" / "styles.min.css").read_text()
        assert ".a{margin:4px}" in css

    def test_sass_indented_syntax(self, project: Project, project_root: Path) -> None:
        write(project_root / "src" / "scss" / "plain.sass", ".b\n  color: blue\n")
        result = StyleService(project).build()
        assert result.ok, result.error
        css = (project.output_dir / "css" / "plain.min.css").read_text()
        assert ".b{color:blue}" in css

    def test_prefix_disabled(self, project_root: Path) -> None:
        write(project_root / "assetctl.toml", "[styles]\nprefix = false\n")
        settings = AssetSettings.from_cli(project_root=project_root)
        css_path = settings.output_dir / "css" / "styles.min.css"
        assert StyleService(Project(settings)).build().ok
        css = css_path.read_text()
        assert "-webkit-user-select" not in css
        assert "user-select:none" in css

    def test_compile_error_reported_per_file(self, project: Project, project_root: Path) -> None:
        write(project_root / "src" / "scss" / "broken.scss", "body { color: $missing; }\n")
        result = StyleService(project).build()
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "STYLE_COMPILE_ERROR"
        errors = result.error.detail["errors"]
        assert [e["file"] for e in errors] == ["broken.scss"]
        assert "missing" in errors[0]["message"]
        # The healthy stylesheet is still written.
        assert result.error.detail["files"] == ["css/styles.min.css"]

    def test_bad_source_date_epoch(
        self, project: Project, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("SOURCE_DATE_EPOCH", "yesterday")
        result = StyleService(project).build()
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "BANNER_ERROR"

    def test_no_sources(self, project: Project, project_root: Path) -> None:
        (project_root / "src" / "scss" / "styles.scss").unlink()
        result = StyleService(project).build()
        assert result.ok
        assert result.data["count"] == 0
