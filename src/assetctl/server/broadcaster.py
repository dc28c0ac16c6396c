"""Publish/subscribe fan-out for live-reload clients.

Each connected browser holds one queue. Publishing never blocks: a client
that stopped reading has its message dropped rather than stalling a rebuild.
"""

from __future__ import annotations

import queue
import threading
import time
from typing import Any

# Per-client backlog. A healthy client drains immediately.
MAX_PENDING = 64


class ReloadBroadcaster:
    """Fan out reload events to every subscribed client queue."""

    def __init__(self) -> None:
        self._listeners: set[queue.Queue[dict[str, Any]]] = set()
        self._lock = threading.Lock()

    def listen(self) -> queue.Queue[dict[str, Any]]:
        q: queue.Queue[dict[str, Any]] = queue.Queue(maxsize=MAX_PENDING)
        with self._lock:
            self._listeners.add(q)
        return q

    def remove(self, q: queue.Queue[dict[str, Any]]) -> None:
        with self._lock:
            self._listeners.discard(q)

    @property
    def client_count(self) -> int:
        with self._lock:
            return len(self._listeners)

    def publish(self, event_type: str, payload: dict[str, Any]) -> int:
        """Queue an event for every client. Returns how many received it."""
        message = {
            "type": event_type,
            "payload": payload,
            "ts": time.time(),
        }
        with self._lock:
            listeners = list(self._listeners)
        delivered = 0
        for listener in listeners:
            try:
                listener.put_nowait(message)
            except queue.Full:
                continue
            delivered += 1
        return delivered
