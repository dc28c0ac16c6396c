"""Event dispatch via pluggy, synchronous or on a ThreadPoolExecutor.

The CLI dispatches synchronously so a finished ``build`` has already told
every plugin. Watch mode may dispatch asynchronously so a slow plugin never
delays the next rebuild.

INVARIANT: Plugin failures are warnings, never errors.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from assetctl.plugins.manager import PluginManager

logger = logging.getLogger(__name__)


class EventBus:
    """Hook dispatch via pluggy, inline or on a ThreadPoolExecutor.

    Parameters:
        plugin_manager: Loaded PluginManager for hook dispatch.
        sync: Dispatch in the caller's thread.
        max_workers: ThreadPoolExecutor worker count (async mode only).
    """

    def __init__(
        self,
        plugin_manager: PluginManager,
        *,
        sync: bool = True,
        max_workers: int = 2,
    ) -> None:
        self._pm = plugin_manager
        self._sync = sync
        self._executor: ThreadPoolExecutor | None = (
            None if sync else ThreadPoolExecutor(max_workers=max_workers)
        )
        self._pending = 0
        self._failures = 0
        self._idle = threading.Condition()

    @property
    def plugin_manager(self) -> PluginManager:
        return self._pm

    @property
    def pending(self) -> int:
        """Async dispatches submitted but not yet finished."""
        with self._idle:
            return self._pending

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def dispatch(self, hook_name: str, payload: dict[str, Any]) -> bool:
        """Call every implementation of *hook_name* with *payload*.

        Returns False when a synchronous dispatch hit a failing plugin.
        Asynchronous dispatch always returns True; see :meth:`drain`.
        """
        if self._sync:
            return self._execute_hook(hook_name, payload)
        assert self._executor is not None
        with self._idle:
            self._pending += 1
        try:
            self._executor.submit(self._execute_tracked, hook_name, payload)
        except RuntimeError:
            with self._idle:
                self._pending -= 1
                self._idle.notify_all()
            raise
        return True

    def drain(self) -> int:
        """Wait for in-flight async dispatches.

        Returns how many dispatches failed since the previous drain.
        """
        with self._idle:
            self._idle.wait_for(lambda: self._pending == 0)
            failures, self._failures = self._failures, 0
        return failures

    def shutdown(self) -> None:
        """Shutdown ThreadPoolExecutor, waiting for pending tasks."""
        self.drain()
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _execute_tracked(self, hook_name: str, payload: dict[str, Any]) -> None:
        """Run a hook on the pool, keeping only the running totals."""
        ok = False
        try:
            ok = self._execute_hook(hook_name, payload)
        finally:
            with self._idle:
                self._pending -= 1
                if not ok:
                    self._failures += 1
                self._idle.notify_all()

    def _execute_hook(self, hook_name: str, payload: dict[str, Any]) -> bool:
        """Attempt to dispatch a hook. Returns False if a plugin raised."""
        hook_fn = getattr(self._pm.hook, hook_name, None)
        if hook_fn is None:
            return True

        try:
            hook_fn(**payload)
        except Exception as exc:
            logger.warning("Hook %s failed: %s", hook_name, exc, exc_info=True)
            return False
        return True
