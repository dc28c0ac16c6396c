"""PreviewServer — run the Flask preview app on a background thread."""

from __future__ import annotations

import logging
import socket
import threading
from typing import TYPE_CHECKING

from werkzeug.serving import make_server, select_address_family

from assetctl.server.app import create_app
from assetctl.server.broadcaster import ReloadBroadcaster

if TYPE_CHECKING:
    from pathlib import Path

    from werkzeug.serving import BaseWSGIServer

logger = logging.getLogger(__name__)


class PreviewServer:
    """Threaded WSGI server for the output directory.

    ``start()`` binds immediately (so a busy port fails fast) and serves on
    a daemon thread; ``stop()`` shuts the listener down.
    """

    def __init__(
        self,
        root: Path,
        *,
        host: str = "127.0.0.1",
        port: int = 3000,
        broadcaster: ReloadBroadcaster | None = None,
    ) -> None:
        self.root = root
        self.host = host
        self.port = port
        self.broadcaster = broadcaster or ReloadBroadcaster()
        self._server: BaseWSGIServer | None = None
        self._thread: threading.Thread | None = None

    @property
    def url(self) -> str:
        return f"http://{self.host}:{self.port}/"

    def start(self) -> None:
        """Bind and serve in the background.

        Raises:
            OSError: If the address is unavailable.
        """
        app = create_app(self.root, self.broadcaster)
        # werkzeug exits the process on a failed bind, so bind here and hand over the fd.
        family = select_address_family(self.host, self.port)
        with socket.create_server((self.host, self.port), family=family) as sock:
            self._server = make_server(
                self.host, self.port, app, threaded=True, fd=sock.fileno()
            )
        self.port = self._server.port
        self._thread = threading.Thread(
            target=self._server.serve_forever, name="assetctl-preview", daemon=True
        )
        self._thread.start()
        logger.info("Preview server listening on %s", self.url)

    def stop(self) -> None:
        if self._server is None:
            return
        self._server.shutdown()
        self._server.server_close()
        if self._thread is not None:
            self._thread.join(timeout=5)
        self._server = None
        self._thread = None
