"""Live-reload plugin: turns finished tasks into preview-client events."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from assetctl.domain.types import ReloadKind
from assetctl.plugins.hookspecs import hookimpl

if TYPE_CHECKING:
    from assetctl.server.broadcaster import ReloadBroadcaster

logger = logging.getLogger(__name__)


class LiveReloadPlugin:
    """Publish ``css`` hot swaps and full ``reload`` events to the broadcaster."""

    def __init__(self, broadcaster: ReloadBroadcaster) -> None:
        self._broadcaster = broadcaster

    @hookimpl
    def post_task(self, task: str, outputs: list[str], reload: str) -> None:
        if reload == ReloadKind.NONE:
            return
        delivered = self._broadcaster.publish(reload, {"task": task, "paths": outputs})
        logger.debug("%s event for %s sent to %d client(s)", reload, task, delivered)
