"""Task timing spans — Span, @traced, trace_span.

Disabled unless ``--verbose``: each call then costs one ContextVar lookup.
Enabled, the outermost traced task collects a span tree that lands in
``ServiceResult.meta["telemetry"]`` and is printed under the result.

``build`` submits its parallel tasks through ``contextvars.copy_context()``,
so their spans hang off the shared ``build`` span. Spans opened on another
thread than their parent's record the worker's name.
"""

from __future__ import annotations

import functools
import threading
import time
from collections.abc import Callable, Generator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any, ParamSpec, TypeVar

import structlog

from assetctl.services.result import ServiceResult

_enabled: ContextVar[bool] = ContextVar("_enabled", default=False)
_current_span: ContextVar[Span | None] = ContextVar("_current_span", default=None)

logger = structlog.get_logger("assetctl.telemetry")


@dataclass
class Span:
    """One timed section of a task, with children and annotations."""

    name: str
    parent: Span | None = None
    thread: str = field(default_factory=lambda: threading.current_thread().name)
    children: list[Span] = field(default_factory=list)
    annotations: dict[str, Any] = field(default_factory=dict)
    start_time: float = field(default_factory=time.perf_counter)
    end_time: float | None = None

    @property
    def duration_ms(self) -> float:
        if self.end_time is None:
            return 0.0
        return (self.end_time - self.start_time) * 1000

    def end(self) -> None:
        self.end_time = time.perf_counter()

    def annotate(self, key: str, value: Any) -> None:
        self.annotations[key] = value

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"name": self.name, "duration_ms": round(self.duration_ms, 2)}
        if self.annotations:
            data["annotations"] = self.annotations
        if self.children:
            data["children"] = [child.to_dict() for child in self.children]
        return data


@contextmanager
def _open(name: str, parent: Span | None) -> Generator[Span]:
    """Make a span current for the duration of the block."""
    span = Span(name=name, parent=parent)
    if parent is not None:
        parent.children.append(span)
        if span.thread != parent.thread:
            span.annotate("thread", span.thread)
    token = _current_span.set(span)
    try:
        yield span
    finally:
        span.end()
        _current_span.reset(token)


@contextmanager
def trace_span(name: str) -> Generator[Span | None]:
    """Time a step inside a traced task.

    Yields None when telemetry is off or no task span is open.
    """
    parent = _current_span.get() if _enabled.get() else None
    if parent is None:
        yield None
        return
    with _open(name, parent) as span:
        yield span


_P = ParamSpec("_P")
_R = TypeVar("_R")


def traced(func: Callable[_P, _R]) -> Callable[_P, _R]:  # noqa: UP047
    """Time a task method.

    The outermost traced call owns the tree: its ServiceResult gets the
    spans in ``meta``. Nested traced calls only add children.
    """

    @functools.wraps(func)
    def wrapper(*args: _P.args, **kwargs: _P.kwargs) -> _R:
        if not _enabled.get():
            return func(*args, **kwargs)

        parent = _current_span.get()
        ok = False
        with _open(func.__qualname__, parent) as span:
            try:
                result = func(*args, **kwargs)
                ok = getattr(result, "ok", True)
            finally:
                logger.debug(
                    "span.complete",
                    span_name=span.name,
                    duration_ms=round((time.perf_counter() - span.start_time) * 1000, 2),
                    ok=ok,
                    children=len(span.children),
                )

        if parent is None and isinstance(result, ServiceResult):
            meta = {**(result.meta or {}), "telemetry": span.to_dict()}
            result = result.model_copy(update={"meta": meta})  # type: ignore[assignment]
        return result

    return wrapper


def enable_telemetry() -> None:
    """Turn span collection on (``--verbose``)."""
    _enabled.set(True)


def disable_telemetry() -> None:
    _enabled.set(False)


def get_current_span() -> Span | None:
    """The open span, for annotating from inside a task."""
    if not _enabled.get():
        return None
    return _current_span.get()
