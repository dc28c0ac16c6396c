"""VendorService — copy third-party files into the output vendor directory.

Each ``[[vendor]]`` entry is a straight copy from a fixed install location
(typically ``node_modules/``), decoupling the site from those libraries'
source control. A missing install location is a warning: the rest of the
vendor tree is still copied.
"""

from __future__ import annotations

from pathlib import Path

from assetctl.infrastructure.filesystem import collect_files, copy_files
from assetctl.services.base import BaseService
from assetctl.services.result import ServiceResult
from assetctl.services.telemetry import trace_span, traced


class VendorService(BaseService):
    """Copies every configured vendor entry."""

    @traced
    def copy(self) -> ServiceResult:
        warnings: list[str] = []
        written: list[Path] = []
        entries: list[dict[str, object]] = []

        for entry in self._project.settings.vendor:
            source = self._project.root / entry.source
            dest = self._project.output_dir / entry.dest
            with trace_span(f"vendor:{entry.name}") as span:
                if not source.is_dir():
                    warnings.append(f"Vendor source for {entry.name!r} not found: {source}")
                    entries.append({"name": entry.name, "count": 0})
                    continue
                files = collect_files(source, entry.patterns, exclude=entry.exclude)
                try:
                    copied = copy_files(files, source, dest)
                except OSError as exc:
                    return self._failed(
                        "vendor",
                        "VENDOR_COPY_ERROR",
                        f"Copying {entry.name!r} failed: {exc}",
                        warnings=warnings,
                        entry=entry.name,
                    )
                if span:
                    span.annotate("files", len(copied))
            written.extend(copied)
            entries.append({"name": entry.name, "count": len(copied)})

        return self._written("vendor", written, warnings, entries=entries)
