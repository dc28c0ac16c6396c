"""Tests for the preview Flask app."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from flask.testing import FlaskClient

from assetctl.server.app import (
    CLIENT_SCRIPT,
    RELOAD_PREFIX,
    create_app,
    format_event,
    inject_client,
)
from assetctl.server.broadcaster import ReloadBroadcaster


@pytest.fixture
def site(tmp_path: Path) -> Path:
    root = tmp_path / "docs"
    (root / "css").mkdir(parents=True)
    (root / "blog").mkdir()
    (root / "index.html").write_text("<html><body><h1>Home</h1></body></html>")
    (root / "blog" / "index.html").write_text("<p>no body tag</p>")
    (root / "css" / "styles.min.css").write_text("body{color:red}")
    (tmp_path / "secret.txt").write_text("do not serve")
    return root


@pytest.fixture
def broadcaster() -> ReloadBroadcaster:
    return ReloadBroadcaster()


@pytest.fixture
def client(site: Path, broadcaster: ReloadBroadcaster) -> FlaskClient:
    return create_app(site, broadcaster, heartbeat=0.05).test_client()


class TestInjectClient:
    def test_before_closing_body(self) -> None:
        html = "<body><p>x</p></body>"
        assert inject_client(html) == f"<body><p>x</p>{CLIENT_SCRIPT}</body>"

    def test_last_body_tag_wins(self) -> None:
        html = "<body><pre>&lt;/body&gt;</pre></BODY>"
        assert inject_client(html).endswith(f"{CLIENT_SCRIPT}</BODY>")

    def test_appended_without_body(self) -> None:
        assert inject_client("<p>x</p>") == f"<p>x</p>{CLIENT_SCRIPT}"


class TestStaticFiles:
    def test_index_has_client(self, client: FlaskClient) -> None:
        resp = client.get("/")
        assert resp.status_code == 200
        assert resp.mimetype == "text/html"
        body = resp.get_data(as_text=True)
        assert body == f"<html><body><h1>Home</h1>{CLIENT_SCRIPT}</body></html>"
        assert resp.headers["Cache-Control"] == "no-cache"

    def test_non_utf8_page_kept_byte_for_byte(self, client: FlaskClient, site: Path) -> None:
        page = "<html><body><p>Caf\u00e9 cr\u00e8me</p></body></html>".encode("latin-1")
        (site / "menu.html").write_bytes(page)
        resp = client.get("/menu.html")
        assert resp.status_code == 200
        expected = page.replace(b"</body>", CLIENT_SCRIPT.encode() + b"</body>")
        assert resp.get_data() == expected

    def test_directory_index(self, client: FlaskClient) -> None:
        resp = client.get("/blog/")
        assert resp.status_code == 200
        assert resp.get_data(as_text=True).endswith(CLIENT_SCRIPT)

    def test_directory_redirect(self, client: FlaskClient) -> None:
        resp = client.get("/blog")
        assert resp.status_code in (301, 302, 308)
        assert resp.headers["Location"].endswith("/blog/")

    def test_css_served_verbatim(self, client: FlaskClient) -> None:
        resp = client.get("/css/styles.min.css")
        assert resp.status_code == 200
        assert resp.mimetype == "text/css"
        assert resp.get_data(as_text=True) == "body{color:red}"

    def test_missing_file(self, client: FlaskClient) -> None:
        assert client.get("/nope.html").status_code == 404

    def test_traversal_rejected(self, client: FlaskClient) -> None:
        assert client.get("/../secret.txt").status_code == 404
        assert client.get("/%2e%2e/secret.txt").status_code == 404


class TestReloadEndpoints:
    def test_client_script(self, client: FlaskClient) -> None:
        resp = client.get(f"{RELOAD_PREFIX}/livereload.js")
        assert resp.status_code == 200
        assert "EventSource" in resp.get_data(as_text=True)

    def test_event_stream(self, client: FlaskClient, broadcaster: ReloadBroadcaster) -> None:
        resp = client.get(f"{RELOAD_PREFIX}/events", buffered=False)
        assert resp.mimetype == "text/event-stream"
        chunks = iter(resp.response)

        def next_text() -> str:
            chunk = next(chunks)
            return chunk.decode() if isinstance(chunk, bytes) else chunk

        assert next_text() == "retry: 1000\n\n"
        assert broadcaster.client_count == 1
        broadcaster.publish("css", {"task": "css", "paths": ["css/styles.min.css"]})
        frame = next_text()
        while frame.startswith(":"):
            frame = next_text()
        assert frame.startswith("event: css\n")
        resp.close()
        assert broadcaster.client_count == 0


class TestFormatEvent:
    def test_frame(self) -> None:
        frame = format_event({"type": "reload", "payload": {"task": "html"}})
        event_line, data_line, *_ = frame.split("\n")
        assert event_line == "event: reload"
        assert json.loads(data_line.removeprefix("data: ")) == {"task": "html"}
        assert frame.endswith("\n\n")
