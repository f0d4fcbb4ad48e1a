"""Tests for the telemetry module: Span, trace_span, @traced."""

from __future__ import annotations

import pytest

from datotools.domain.errors import ErrorKind
from datotools.services.result import ResponseEnvelope, build_error, build_success
from datotools.services.runtime import Runtime
from datotools.services.telemetry import (
    Span,
    _current_span,
    disable_telemetry,
    enable_telemetry,
    get_current_span,
    trace_span,
    traced,
)

TOKEN = "test-token"


# ── Span unit tests ───────────────────────────────────────────────────


class TestSpan:
    def test_duration_zero_before_end(self) -> None:
        assert Span(name="test").duration_ms == 0.0

    def test_duration_after_end(self) -> None:
        span = Span(name="test")
        span.end()
        assert span.duration_ms >= 0

    def test_to_dict_minimal(self) -> None:
        span = Span(name="test")
        span.end()
        d = span.to_dict()
        assert d["name"] == "test"
        assert "children" not in d
        assert "annotations" not in d

    def test_to_dict_nested(self) -> None:
        root = Span(name="root")
        child = Span(name="child", parent=root)
        root.children.append(child)
        child.end()
        root.end()
        assert root.to_dict()["children"][0]["name"] == "child"

    def test_annotations(self) -> None:
        span = Span(name="test")
        span.annotate("op", "records.list")
        span.end()
        assert span.to_dict()["annotations"] == {"op": "records.list"}


# ── trace_span tests ─────────────────────────────────────────────────


class TestTraceSpan:
    def test_disabled_yields_none(self) -> None:
        with trace_span("test") as span:
            assert span is None

    def test_no_root_yields_none(self) -> None:
        enable_telemetry()
        with trace_span("test") as span:
            assert span is None

    def test_enabled_with_root(self) -> None:
        enable_telemetry()
        root = Span(name="root")
        token = _current_span.set(root)
        try:
            with trace_span("child") as span:
                assert span is not None
                assert span.name == "child"
            assert len(root.children) == 1
            assert root.children[0].end_time is not None
        finally:
            _current_span.reset(token)

    def test_nested_spans(self) -> None:
        enable_telemetry()
        root = Span(name="root")
        token = _current_span.set(root)
        try:
            with trace_span("a"):
                with trace_span("b"):
                    pass
            assert root.children[0].name == "a"
            assert root.children[0].children[0].name == "b"
        finally:
            _current_span.reset(token)


# ── @traced decorator tests ──────────────────────────────────────────


class TestTracedDecorator:
    def test_noop_when_disabled(self) -> None:
        @traced
        def my_func() -> ResponseEnvelope:
            return build_success({"x": 1}, op="test")

        assert my_func().meta is None

    def test_injects_meta_when_enabled(self) -> None:
        @traced
        def my_func() -> ResponseEnvelope:
            return build_success({"x": 1}, op="test")

        enable_telemetry()
        result = my_func()
        assert result.meta is not None
        assert result.meta["telemetry"]["name"].endswith("my_func")
        assert result.meta["telemetry"]["duration_ms"] >= 0

    def test_error_envelope_gets_telemetry(self) -> None:
        @traced
        def my_func() -> ResponseEnvelope:
            return build_error(ErrorKind.NOT_FOUND, "gone", op="test")

        enable_telemetry()
        result = my_func()
        assert not result.success
        assert result.meta is not None
        assert "telemetry" in result.meta

    def test_non_envelope_passthrough(self) -> None:
        @traced
        def my_func() -> str:
            return "hello"

        enable_telemetry()
        assert my_func() == "hello"

    def test_exception_propagates(self) -> None:
        @traced
        def my_func() -> ResponseEnvelope:
            raise ValueError("boom")

        enable_telemetry()
        with pytest.raises(ValueError, match="boom"):
            my_func()
        assert _current_span.get() is None

    def test_child_spans_in_meta(self) -> None:
        @traced
        def my_func() -> ResponseEnvelope:
            with trace_span("stage_a"):
                pass
            with trace_span("stage_b"):
                pass
            return build_success({"x": 1}, op="test")

        enable_telemetry()
        children = my_func().meta["telemetry"]["children"]  # type: ignore[index]
        assert [c["name"] for c in children] == ["stage_a", "stage_b"]


class TestGetCurrentSpan:
    def test_returns_none_when_disabled(self) -> None:
        assert get_current_span() is None

    def test_returns_span_when_enabled(self) -> None:
        enable_telemetry()
        root = Span(name="root")
        token = _current_span.set(root)
        try:
            assert get_current_span() is root
        finally:
            _current_span.reset(token)
            disable_telemetry()


# ── Telemetry through a real dispatch ────────────────────────────────


class TestTracedDispatch:
    def test_dispatch_carries_pipeline_spans(self, runtime: Runtime, backend) -> None:
        backend.responses["find_record"] = {"id": "r1", "type": "item"}
        enable_telemetry()
        env = runtime.dispatch("records", "retrieve", {"apiToken": TOKEN, "itemId": "r1"})
        assert env.success
        assert env.meta is not None
        tel = env.meta["telemetry"]
        assert "dispatch" in tel["name"]
        names = [c["name"] for c in tel.get("children", [])]
        assert names == ["session", "remote_call"]
        assert tel["children"][1]["annotations"] == {"op": "records.retrieve"}

    def test_no_meta_without_verbose(self, runtime: Runtime, backend) -> None:
        backend.responses["find_record"] = {"id": "r1", "type": "item"}
        env = runtime.dispatch("records", "retrieve", {"apiToken": TOKEN, "itemId": "r1"})
        assert env.meta is None
