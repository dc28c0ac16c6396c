"""WatchService — rebuild on source changes.

Routes filesystem events to tasks:

* style sources  -> ``css`` (clients hot-swap stylesheets)
* script sources -> ``js``
* HTML sources   -> ``html`` copy (clients reload)

Bursts of events for the same task collapse into one run after the
debounce delay. Different tasks run independently on their own timer
threads; runs of the same task are serialized so two rebuilds never write
the same files at once.

INVARIANT: A failing task is logged, never raised. The loop keeps running
so the developer can fix the source and save again.
"""

from __future__ import annotations

import os
import threading
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

import structlog
from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from assetctl.domain.paths import matches
from assetctl.domain.types import TaskName
from assetctl.services.base import BaseService
from assetctl.services.copy import CopyService
from assetctl.services.scripts import ScriptService
from assetctl.services.styles import StyleService

if TYPE_CHECKING:
    from watchdog.observers.api import BaseObserver

    from assetctl.infrastructure.project import Project
    from assetctl.services.result import ServiceResult

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class WatchRoute:
    """Sources under *source* matching *patterns* trigger *task*."""

    task: TaskName
    source: Path
    patterns: tuple[str, ...]
    run: Callable[[], ServiceResult]

    def covers(self, path: Path) -> bool:
        try:
            rel = path.resolve().relative_to(self.source.resolve()).as_posix()
        except ValueError:
            return False
        return matches(rel, self.patterns)


class _ChangeHandler(FileSystemEventHandler):
    """Forward file events (never directory events) to the service."""

    def __init__(self, service: WatchService) -> None:
        self._service = service

    def on_any_event(self, event: FileSystemEvent) -> None:
        if event.is_directory or event.event_type in ("opened", "closed_no_write"):
            return
        paths = [event.src_path]
        dest = getattr(event, "dest_path", "")
        if dest:
            paths.append(dest)
        for raw in paths:
            self._service.on_change(Path(os.fsdecode(raw)))


class WatchService(BaseService):
    """Watch the input tree and re-run the matching task on change."""

    def __init__(
        self,
        project: Project,
        *,
        debounce_ms: int | None = None,
        on_result: Callable[[ServiceResult], None] | None = None,
    ) -> None:
        super().__init__(project)
        self._on_result = on_result
        if debounce_ms is None:
            debounce_ms = project.settings.watch.debounce_ms
        self._delay = max(debounce_ms, 0) / 1000
        styles = project.group("styles")
        scripts = project.group("scripts")
        html = project.group("html")
        self._routes = (
            WatchRoute(TaskName.CSS, styles.source, styles.patterns, StyleService(project).build),
            WatchRoute(TaskName.JS, scripts.source, scripts.patterns, ScriptService(project).build),
            WatchRoute(TaskName.HTML, html.source, html.patterns, CopyService(project).html),
        )
        self._timers: dict[TaskName, threading.Timer] = {}
        self._timer_lock = threading.Lock()
        self._run_locks = {route.task: threading.Lock() for route in self._routes}
        self._observer: BaseObserver | None = None

    @property
    def routes(self) -> tuple[WatchRoute, ...]:
        return self._routes

    # ------------------------------------------------------------------
    # Event routing
    # ------------------------------------------------------------------

    def route_for(self, path: Path) -> WatchRoute | None:
        """The first route whose sources include *path*, if any."""
        if self._is_output(path):
            return None
        for route in self._routes:
            if route.covers(path):
                return route
        return None

    def on_change(self, path: Path) -> TaskName | None:
        """Schedule the task for a changed *path*. Returns the task scheduled.

        With a zero debounce the task runs synchronously in the caller.
        """
        route = self.route_for(path)
        if route is None:
            return None
        logger.debug("source.changed", path=str(path), task=str(route.task))
        if self._delay == 0:
            self.run(route)
            return route.task

        with self._timer_lock:
            pending = self._timers.pop(route.task, None)
            if pending is not None:
                pending.cancel()
            timer = threading.Timer(self._delay, self.run, args=(route,))
            timer.daemon = True
            self._timers[route.task] = timer
            timer.start()
        return route.task

    def run(self, route: WatchRoute) -> ServiceResult:
        """Run *route*'s task, logging the outcome instead of raising."""
        with self._timer_lock:
            if self._timers.get(route.task) is threading.current_thread():
                del self._timers[route.task]
        with self._run_locks[route.task]:
            try:
                result = route.run()
            except Exception as exc:
                logger.exception("task.crashed", task=str(route.task))
                result = self._failed(str(route.task), "TASK_CRASHED", f"{type(exc).__name__}: {exc}")
        if result.ok:
            logger.info("task.rebuilt", task=result.op, files=result.data.get("count", 0))
        else:
            error = result.error
            logger.error(
                "task.failed",
                task=result.op,
                code=error.code if error else None,
                message=error.message if error else None,
            )
        for warning in result.warnings:
            logger.warning("task.warning", task=result.op, warning=warning)
        if self._on_result is not None:
            self._on_result(result)
        return result

    def _is_output(self, path: Path) -> bool:
        output = self._project.output_dir.resolve()
        return path.resolve().is_relative_to(output)

    # ------------------------------------------------------------------
    # Observer lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Start the filesystem observer on the input directory."""
        if self._observer is not None:
            return
        self._project.input_dir.mkdir(parents=True, exist_ok=True)
        observer = Observer()
        observer.schedule(_ChangeHandler(self), str(self._project.input_dir), recursive=True)
        observer.daemon = True
        observer.start()
        self._observer = observer
        logger.info("watch.started", path=str(self._project.input_dir))

    def stop(self) -> None:
        """Stop the observer and cancel pending debounced runs."""
        with self._timer_lock:
            for timer in self._timers.values():
                timer.cancel()
            self._timers.clear()
        if self._observer is not None:
            self._observer.stop()
            self._observer.join(timeout=5)
            self._observer = None
