"""Flask app serving the output directory with an injected reload client.

Routes:
  ``/__assetctl__/events``        server-sent event stream of reload events
  ``/__assetctl__/livereload.js`` the browser client
  ``/<path>``                     static files; directories serve ``index.html``

HTML responses get the client ``<script>`` inserted before ``</body>``.
"""

from __future__ import annotations

import json
import queue
from collections.abc import Iterator
from pathlib import Path
from typing import TYPE_CHECKING

from flask import Flask, Response, abort, redirect, send_from_directory
from werkzeug.security import safe_join

if TYPE_CHECKING:
    from werkzeug.wrappers import Response as BaseResponse

    from assetctl.server.broadcaster import ReloadBroadcaster

RELOAD_PREFIX = "/__assetctl__"
CLIENT_SCRIPT = f'<script src="{RELOAD_PREFIX}/livereload.js"></script>'
HTML_SUFFIXES = frozenset({".html", ".htm"})

_STATIC_DIR = Path(__file__).parent / "static"


def inject_client(html: str) -> str:
    """Insert the reload client before the last ``</body>`` (or append it)."""
    idx = html.lower().rfind("</body>")
    if idx == -1:
        return html + CLIENT_SCRIPT
    return html[:idx] + CLIENT_SCRIPT + html[idx:]


def format_event(message: dict) -> str:
    """Encode a broadcaster message as one SSE frame."""
    event_type = message.get("type", "message")
    payload = message.get("payload", {})
    return f"event: {event_type}\ndata: {json.dumps(payload)}\n\n"


def create_app(
    root: Path,
    broadcaster: ReloadBroadcaster,
    *,
    heartbeat: float = 15.0,
) -> Flask:
    """Build the preview app for the output directory *root*."""
    root = root.resolve()
    app = Flask(__name__, static_folder=None)
    app.config["ASSETCTL_ROOT"] = root

    @app.route(f"{RELOAD_PREFIX}/events")
    def events() -> Response:
        def stream() -> Iterator[str]:
            q = broadcaster.listen()
            try:
                yield "retry: 1000\n\n"
                while True:
                    try:
                        message = q.get(timeout=heartbeat)
                    except queue.Empty:
                        yield ": ping\n\n"
                        continue
                    yield format_event(message)
            finally:
                broadcaster.remove(q)

        return Response(
            stream(),
            mimetype="text/event-stream",
            headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
        )

    @app.route(f"{RELOAD_PREFIX}/livereload.js")
    def client_script() -> Response:
        return send_from_directory(
            _STATIC_DIR, "livereload.js", mimetype="text/javascript", max_age=0
        )

    @app.route("/", defaults={"filename": ""})
    @app.route("/<path:filename>")
    def static_file(filename: str) -> BaseResponse:
        joined = safe_join(str(root), filename) if filename else str(root)
        if joined is None:
            abort(404)
        path = Path(joined)
        if path.is_dir():
            if filename and not filename.endswith("/"):
                return redirect(f"/{filename}/")
            path = path / "index.html"
        if not path.is_file():
            abort(404)

        if path.suffix.lower() in HTML_SUFFIXES:
            # surrogateescape round-trips pages in any charset byte for byte.
            html = path.read_bytes().decode("utf-8", errors="surrogateescape")
            body = inject_client(html).encode("utf-8", errors="surrogateescape")
            return Response(body, content_type="text/html", headers={"Cache-Control": "no-cache"})
        return send_from_directory(root, path.relative_to(root).as_posix(), max_age=0)

    return app
