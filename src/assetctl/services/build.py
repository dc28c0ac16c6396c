"""BuildService — the task graph.

    vendor = clean -> vendor copy
    build  = vendor -> (css | js | media | html)

The four tasks after the vendor stage read disjoint inputs and write
disjoint outputs, so they run on a thread pool with no ordering between
them. Any failure fails the build; the remaining tasks still finish so the
report lists every problem at once.
"""

from __future__ import annotations

import contextvars
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from typing import Any

from assetctl.domain.types import PARALLEL_TASKS, TaskName
from assetctl.services.base import BaseService
from assetctl.services.clean import CleanService
from assetctl.services.copy import CopyService
from assetctl.services.result import ServiceError, ServiceResult
from assetctl.services.scripts import ScriptService
from assetctl.services.styles import StyleService
from assetctl.services.telemetry import traced
from assetctl.services.vendor import VendorService


def _summary(result: ServiceResult) -> dict[str, Any]:
    entry: dict[str, Any] = {
        "task": result.op,
        "ok": result.ok,
        "count": result.data.get("count", 0),
    }
    if result.error is not None:
        entry["error"] = result.error.message
    return entry


class BuildService(BaseService):
    """Runs tasks individually or as the full build graph."""

    def task(self, name: TaskName) -> Callable[[], ServiceResult]:
        """Return the callable that runs a single named task."""
        runners: dict[TaskName, Callable[[], ServiceResult]] = {
            TaskName.CLEAN: CleanService(self._project).clean,
            TaskName.VENDOR: self.vendor,
            TaskName.CSS: StyleService(self._project).build,
            TaskName.JS: ScriptService(self._project).build,
            TaskName.MEDIA: CopyService(self._project).media,
            TaskName.HTML: CopyService(self._project).html,
            TaskName.BUILD: self.build,
        }
        return runners[name]

    @traced
    def vendor(self) -> ServiceResult:
        """Clean the output tree, then copy vendor files into it."""
        cleaned = CleanService(self._project).clean()
        if not cleaned.ok:
            return cleaned.model_copy(update={"op": "vendor"})
        copied = VendorService(self._project).copy()
        return copied.model_copy(
            update={"data": {**copied.data, "cleaned": cleaned.data.get("removed", False)}}
        )

    @traced
    def build(self) -> ServiceResult:
        """Run the full build graph."""
        results: list[ServiceResult] = []

        vendor = self.vendor()
        results.append(vendor)
        if vendor.ok:
            with ThreadPoolExecutor(max_workers=len(PARALLEL_TASKS)) as pool:
                futures = [
                    pool.submit(contextvars.copy_context().run, self.task(name))
                    for name in PARALLEL_TASKS
                ]
                results.extend(f.result() for f in futures)

        tasks = [_summary(r) for r in results]
        warnings = [w for r in results for w in r.warnings]
        failed = [r for r in results if not r.ok]
        ok = not failed

        self._dispatch_event("post_build", {"ok": ok, "tasks": tasks}, warnings)

        data = {"tasks": tasks, "count": sum(t["count"] for t in tasks)}
        if ok:
            return ServiceResult(ok=True, op="build", data=data, warnings=warnings)

        names = ", ".join(r.op for r in failed)
        return ServiceResult(
            ok=False,
            op="build",
            data=data,
            warnings=warnings,
            error=ServiceError(
                code="BUILD_FAILED",
                message=f"Failed task(s): {names}",
                detail={
                    "failed": {
                        r.op: r.error.model_dump() for r in failed if r.error is not None
                    }
                },
            ),
        )
