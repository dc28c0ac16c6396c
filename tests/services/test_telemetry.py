"""Tests for telemetry primitives: Span, trace_span, @traced."""

from __future__ import annotations

import time

from assetctl.infrastructure.project import Project
from assetctl.services.build import BuildService
from assetctl.services.result import ServiceResult
from assetctl.services.telemetry import (
    Span,
    disable_telemetry,
    enable_telemetry,
    get_current_span,
    trace_span,
    traced,
)


class _Service:
    @traced
    def outer(self) -> ServiceResult:
        return self.inner()

    @traced
    def inner(self) -> ServiceResult:
        with trace_span("step") as span:
            if span:
                span.annotate("files", 3)
        return ServiceResult(ok=True, op="inner")


class TestSpan:
    def test_duration_before_end_is_zero(self) -> None:
        assert Span(name="test").duration_ms == 0.0

    def test_duration_after_end(self) -> None:
        span = Span(name="test")
        time.sleep(0.005)
        span.end()
        assert span.duration_ms > 0

    def test_to_dict_minimal(self) -> None:
        span = Span(name="root")
        span.end()
        d = span.to_dict()
        assert d["name"] == "root"
        assert "children" not in d
        assert "annotations" not in d


class TestTraced:
    def test_disabled_adds_no_meta(self) -> None:
        disable_telemetry()
        assert _Service().outer().meta is None

    def test_enabled_injects_tree_at_root_only(self) -> None:
        enable_telemetry()
        result = _Service().outer()
        assert result.meta is not None
        tree = result.meta["telemetry"]
        assert tree["name"].endswith("outer")
        (inner,) = tree["children"]
        assert inner["name"].endswith("inner")
        (step,) = inner["children"]
        assert step == {"name": "step", "duration_ms": step["duration_ms"], "annotations": {"files": 3}}

    def test_trace_span_without_parent(self) -> None:
        enable_telemetry()
        with trace_span("orphan") as span:
            assert span is None

    def test_current_span_disabled(self) -> None:
        disable_telemetry()
        assert get_current_span() is None


class TestBuildTelemetry:
    def test_parallel_tasks_attach_to_build(self, project: Project) -> None:
        enable_telemetry()
        result = BuildService(project).build()
        assert result.meta is not None
        children = [c["name"] for c in result.meta["telemetry"]["children"]]
        assert any(name.endswith("vendor") for name in children)
        for task in ("StyleService.build", "ScriptService.build", "CopyService.media", "CopyService.html"):
            assert task in children

    def test_pool_spans_record_worker_thread(self, project: Project) -> None:
        enable_telemetry()
        result = BuildService(project).build()
        assert result.meta is not None
        children = {c["name"]: c for c in result.meta["telemetry"]["children"]}
        assert "thread" not in children.get("BuildService.vendor", {}).get("annotations", {})
        assert "thread" in children["ScriptService.build"]["annotations"]
