"""Tests for ReloadBroadcaster fan-out."""

from __future__ import annotations

from assetctl.server.broadcaster import MAX_PENDING, ReloadBroadcaster


class TestReloadBroadcaster:
    def test_fan_out(self) -> None:
        broadcaster = ReloadBroadcaster()
        a, b = broadcaster.listen(), broadcaster.listen()
        assert broadcaster.publish("reload", {"task": "js"}) == 2
        for q in (a, b):
            message = q.get_nowait()
            assert message["type"] == "reload"
            assert message["payload"] == {"task": "js"}
            assert "ts" in message

    def test_no_clients(self) -> None:
        assert ReloadBroadcaster().publish("css", {}) == 0

    def test_remove(self) -> None:
        broadcaster = ReloadBroadcaster()
        q = broadcaster.listen()
        broadcaster.remove(q)
        broadcaster.remove(q)
        assert broadcaster.client_count == 0
        assert broadcaster.publish("css", {}) == 0

    def test_full_queue_drops_without_blocking(self) -> None:
        broadcaster = ReloadBroadcaster()
        stalled = broadcaster.listen()
        for _ in range(MAX_PENDING):
            broadcaster.publish("css", {})
        healthy = broadcaster.listen()
        assert broadcaster.publish("reload", {}) == 1
        assert stalled.qsize() == MAX_PENDING
        assert healthy.get_nowait()["type"] == "reload"
