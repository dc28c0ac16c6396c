"""CopyService — straight copies of media and HTML into the output root."""

from __future__ import annotations

from assetctl.domain.types import ReloadKind
from assetctl.infrastructure.filesystem import collect_files, copy_files
from assetctl.services.base import BaseService
from assetctl.services.result import ServiceResult
from assetctl.services.telemetry import traced


class CopyService(BaseService):
    """Copies an asset group verbatim, preserving relative paths."""

    def _copy_group(self, op: str, group_name: str, reload: ReloadKind) -> ServiceResult:
        group = self._project.group(group_name)
        files = collect_files(group.source, group.patterns)
        try:
            written = copy_files(files, group.source, group.dest)
        except OSError as exc:
            return self._failed(op, "COPY_ERROR", f"Copying {group_name} failed: {exc}")
        return self._written(op, written, [], reload=reload)

    @traced
    def media(self) -> ServiceResult:
        return self._copy_group("media", "media", ReloadKind.NONE)

    @traced
    def html(self) -> ServiceResult:
        return self._copy_group("html", "html", ReloadKind.FULL)
