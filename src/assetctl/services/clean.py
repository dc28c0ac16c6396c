"""CleanService — delete the derived output tree."""

from __future__ import annotations

import logging
from pathlib import Path

from assetctl.infrastructure.filesystem import remove_tree
from assetctl.services.base import BaseService
from assetctl.services.result import ServiceResult
from assetctl.services.telemetry import traced

logger = logging.getLogger(__name__)


class CleanService(BaseService):
    """Removes the output directory. A missing directory is not an error."""

    @traced
    def clean(self) -> ServiceResult:
        output = self._project.output_dir
        guarded = self._guarded_by(output)
        if guarded is not None:
            return self._failed(
                "clean",
                "UNSAFE_OUTPUT",
                f"Refusing to delete {output}: it contains the {guarded}",
                path=str(output),
            )
        try:
            removed = remove_tree(output)
        except OSError as exc:
            return self._failed(
                "clean", "CLEAN_ERROR", f"Could not remove {output}: {exc}", path=str(output)
            )
        logger.debug("clean removed=%s path=%s", removed, output)
        return ServiceResult(ok=True, op="clean", data={"path": str(output), "removed": removed})

    def _guarded_by(self, output: Path) -> str | None:
        """Name the protected directory *output* would take with it, if any."""
        target = output.resolve()
        protected = (
            ("project root", self._project.root),
            ("input directory", self._project.input_dir),
        )
        for label, path in protected:
            if path.resolve().is_relative_to(target):
                return label
        return None
