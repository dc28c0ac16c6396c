"""BaseService — abstract foundation for all assetctl build tasks.

Every service receives a :class:`Project` at construction time. The Project
resolves directories, renders the banner, and owns the plugin event bus.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from assetctl.domain.types import ReloadKind
from assetctl.infrastructure.filesystem import relative_posix
from assetctl.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from pathlib import Path

    from assetctl.infrastructure.project import Project

logger = logging.getLogger(__name__)


class BaseService:
    """Abstract base for all service-layer classes.

    Subclasses implement one task each (clean, vendor copy, css, js, media
    and html copy) or compose them (build, watch).

    Usage::

        class StyleService(BaseService):
            def build(self) -> ServiceResult:
                ...
                return self._written("css", outputs, [], reload=ReloadKind.CSS)
    """

    def __init__(self, project: Project) -> None:
        self._project = project

    def _dispatch_event(
        self,
        hook_name: str,
        payload: dict[str, Any],
        warnings: list[str],
    ) -> None:
        """Dispatch a lifecycle event. No-op if event bus not initialized.

        INVARIANT: Plugin failures are warnings, never errors.
        """
        bus = self._project.event_bus
        if bus is None:
            return
        if not bus.dispatch(hook_name, payload):
            warnings.append(f"Event dispatch failed for {hook_name}")

    def _written(
        self,
        op: str,
        outputs: list[Path],
        warnings: list[str],
        *,
        reload: ReloadKind = ReloadKind.NONE,
        **extra: Any,
    ) -> ServiceResult:
        """Build the success result for a task that wrote *outputs*.

        Fires ``post_task`` so live-reload clients hear about the new files.
        """
        files = [relative_posix(p, self._project.output_dir) for p in outputs]
        self._dispatch_event(
            "post_task",
            {"task": op, "outputs": files, "reload": str(reload)},
            warnings,
        )
        logger.debug("%s wrote %d file(s)", op, len(files))
        return ServiceResult(
            ok=True,
            op=op,
            data={"files": files, "count": len(files), **extra},
            warnings=warnings,
        )

    @staticmethod
    def _failed(
        op: str,
        code: str,
        message: str,
        *,
        warnings: list[str] | None = None,
        **detail: Any,
    ) -> ServiceResult:
        return ServiceResult(
            ok=False,
            op=op,
            warnings=warnings or [],
            error=ServiceError(code=code, message=message, detail=detail),
        )
