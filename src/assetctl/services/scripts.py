"""ScriptService — minify, banner, rename, write.

Every file directly under the scripts source is treated as a script. The
``.min`` suffix goes before the existing extension.

The banner goes on after minification so the minifier never sees it.
"""

from __future__ import annotations

from pathlib import Path, PurePosixPath
from typing import Any

from assetctl.domain.paths import minified_name
from assetctl.domain.types import ReloadKind
from assetctl.infrastructure.compilers import CompilerError, minify_js
from assetctl.infrastructure.filesystem import collect_files, relative_posix, write_text_file
from assetctl.services.base import BaseService
from assetctl.services.result import ServiceResult
from assetctl.services.telemetry import trace_span, traced


class ScriptService(BaseService):
    """Builds every script source into a minified, bannered ``.min.js``."""

    @traced
    def build(self) -> ServiceResult:
        group = self._project.group("scripts")
        try:
            banner = self._project.render_banner()
        except ValueError as exc:
            return self._failed("js", "BANNER_ERROR", str(exc))

        written: list[Path] = []
        errors: list[dict[str, Any]] = []

        for source in collect_files(group.source, group.patterns):
            rel = relative_posix(source, group.source)
            with trace_span(f"js:{rel}"):
                target = group.dest / minified_name(rel, PurePosixPath(rel).suffix)
                try:
                    write_text_file(target, banner + minify_js(source))
                except (CompilerError, OSError) as exc:
                    message = exc.message if isinstance(exc, CompilerError) else str(exc)
                    errors.append({"file": rel, "message": message})
                    continue
            written.append(target)

        if errors:
            first = errors[0]
            return self._failed(
                "js",
                "SCRIPT_ERROR",
                f"{len(errors)} script(s) failed; {first['file']}: {first['message']}",
                errors=errors,
            )

        return self._written("js", written, [], reload=ReloadKind.FULL)
