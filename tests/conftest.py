"""Shared pytest fixtures for assetctl tests."""

from __future__ import annotations

import json
import logging
from collections.abc import Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from assetctl.config.settings import AssetSettings
from assetctl.infrastructure.project import Project
from assetctl.services.telemetry import _current_span, disable_telemetry

# 2023-11-14T22:13:20Z
FIXED_EPOCH = "1700000000"

PACKAGE_JSON = {
    "name": "demo-theme",
    "title": "Demo Theme",
    "version": "1.2.3",
    "author": "Jane Doe",
    "license": "MIT",
    "homepage": "https://example.com/demo-theme",
}

STYLES_SCSS = """\
@import "variables";

body {
  color: $primary;
  user-select: none;
}

/* layout helpers */
.nav {
  .item {
    position: sticky;
  }
}
"""

APP_JS = """\
// greeting helper
function greet(name) {
  return "Hello, " + name;
}
"""

INDEX_HTML = """\
<!DOCTYPE html>
<html>
<head><link rel="stylesheet" href="css/styles.min.css"></head>
<body><h1>Demo</h1></body>
</html>
"""

# Every file a full build of the sample project writes, relative to docs/.
EXPECTED_OUTPUTS = {
    "css/styles.min.css",
    "js/app.min.js",
    "img/logo.png",
    "index.html",
    "vendor/bootstrap/css/bootstrap.min.css",
    "vendor/bootstrap/js/bootstrap.bundle.js",
    "vendor/fontawesome-free/css/all.min.css",
    "vendor/fontawesome-free/webfonts/fa-solid-900.woff2",
    "vendor/jquery/jquery.js",
    "vendor/jquery/jquery.min.js",
}


def write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def output_files(root: Path) -> set[str]:
    """Every file under *root* as a POSIX relative path."""
    return {p.relative_to(root).as_posix() for p in root.rglob("*") if p.is_file()}


@pytest.fixture(autouse=True)
def _reproducible_env(monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Pin the banner year and keep the host's assetctl env out of tests."""
    monkeypatch.setenv("SOURCE_DATE_EPOCH", FIXED_EPOCH)
    monkeypatch.delenv("ASSETCTL_CONFIG", raising=False)
    yield
    disable_telemetry()
    _current_span.set(None)


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Undo the handlers and levels each CLI invocation installs."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    app = logging.getLogger("assetctl")
    app_level = app.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    app.setLevel(app_level)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """A small theme laid out the way the default config expects.

    This is the single source of truth for the sample project layout.
    """
    src = tmp_path / "src"
    write(src / "scss" / "_variables.scss", "$primary: #0d6efd;\n")
    write(src / "scss" / "styles.scss", STYLES_SCSS)
    write(src / "js" / "app.js", APP_JS)
    (src / "img").mkdir(parents=True)
    (src / "img" / "logo.png").write_bytes(b"\x89PNG\r\n\x1a\nfake")
    write(src / "index.html", INDEX_HTML)

    modules = tmp_path / "node_modules"
    write(modules / "bootstrap" / "dist" / "css" / "bootstrap.min.css", ".btn{}\n")
    write(modules / "bootstrap" / "dist" / "js" / "bootstrap.bundle.js", "/* bs */\n")
    fontawesome = modules / "@fortawesome" / "fontawesome-free"
    write(fontawesome / "css" / "all.min.css", ".fa{}\n")
    (fontawesome / "webfonts").mkdir(parents=True)
    (fontawesome / "webfonts" / "fa-solid-900.woff2").write_bytes(b"wOF2")
    write(modules / "jquery" / "dist" / "jquery.js", "/* jq */\n")
    write(modules / "jquery" / "dist" / "jquery.min.js", "/* jq min */\n")
    write(modules / "jquery" / "dist" / "core.js", "/* core */\n")

    write(tmp_path / "package.json", json.dumps(PACKAGE_JSON, indent=2))
    return tmp_path


@pytest.fixture
def settings(project_root: Path) -> AssetSettings:
    return AssetSettings.from_cli(project_root=project_root)


@pytest.fixture
def project(settings: AssetSettings) -> Generator[Project]:
    """Project on the sample tree with a synchronous event bus."""
    p = Project(settings)
    p.init_event_bus()
    try:
        yield p
    finally:
        p.close()


@pytest.fixture
def _isolated_project(project_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to the sample project so the CLI builds it.

    Use via ``@pytest.mark.usefixtures("_isolated_project")`` on command
    test classes.
    """
    monkeypatch.chdir(project_root)
