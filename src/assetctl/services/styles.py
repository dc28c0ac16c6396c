"""StyleService — compile, prefix, banner, rename, minify, write.

Pipeline per stylesheet source:
  1. libsass, ``expanded`` output, ``node_modules/`` on the include path
  2. vendor prefixes (:mod:`assetctl.domain.prefixer`)
  3. license banner
  4. ``.min`` rename, keeping the subdirectory under the styles source
  5. minify, keeping the ``/*!`` banner
  6. write, then notify live-reload clients with a CSS hot swap

Partials (``_name.scss``) are only compiled through the files importing them.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from assetctl.domain.paths import is_partial, minified_name
from assetctl.domain.prefixer import prefix_css
from assetctl.domain.types import ReloadKind
from assetctl.infrastructure.compilers import CompilerError, compile_sass, minify_css
from assetctl.infrastructure.filesystem import collect_files, relative_posix, write_text_file
from assetctl.services.base import BaseService
from assetctl.services.result import ServiceResult
from assetctl.services.telemetry import trace_span, traced

logger = logging.getLogger(__name__)


class StyleService(BaseService):
    """Builds every stylesheet source into a minified, bannered ``.min.css``."""

    def sources(self) -> list[Path]:
        """Compilable stylesheet sources, partials excluded."""
        group = self._project.group("styles")
        return [
            path
            for path in collect_files(group.source, group.patterns)
            if not is_partial(relative_posix(path, group.source))
        ]

    @traced
    def build(self) -> ServiceResult:
        config = self._project.settings.styles
        group = self._project.group("styles")
        include_paths = [self._project.root / p for p in config.include_paths]

        try:
            banner = self._project.render_banner()
        except ValueError as exc:
            return self._failed("css", "BANNER_ERROR", str(exc))

        warnings: list[str] = []
        written: list[Path] = []
        errors: list[dict[str, Any]] = []

        for source in self.sources():
            rel = relative_posix(source, group.source)
            with trace_span(f"css:{rel}"):
                try:
                    css = compile_sass(
                        source,
                        include_paths=include_paths,
                        output_style=config.output_style,
                    )
                except CompilerError as exc:
                    logger.debug("Sass error in %s: %s", rel, exc.message)
                    errors.append({"file": rel, "message": exc.message})
                    continue

                if config.prefix:
                    css = prefix_css(css)
                target = group.dest / minified_name(rel, ".css")
                try:
                    write_text_file(target, minify_css(banner + css))
                except OSError as exc:
                    errors.append({"file": rel, "message": str(exc)})
                    continue
            written.append(target)

        if errors:
            first = errors[0]
            return self._failed(
                "css",
                "STYLE_COMPILE_ERROR",
                f"{len(errors)} stylesheet(s) failed; {first['file']}: {first['message']}",
                warnings=warnings,
                errors=errors,
                files=[relative_posix(p, self._project.output_dir) for p in written],
            )

        return self._written("css", written, warnings, reload=ReloadKind.CSS)
