"""Tests for ResponseEnvelope and its builders."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from datotools.domain.errors import ErrorKind
from datotools.services.result import (
    EnvelopeError,
    ResponseEnvelope,
    build_error,
    build_success,
)


class TestResponseEnvelope:
    def test_success_construction(self) -> None:
        env = ResponseEnvelope(success=True, op="records.retrieve", data={"id": "1"})
        assert env.success is True
        assert env.data == {"id": "1"}
        assert env.error is None

    def test_success_requires_data(self) -> None:
        with pytest.raises(ValidationError):
            ResponseEnvelope(success=True)

    def test_failure_requires_error(self) -> None:
        with pytest.raises(ValidationError):
            ResponseEnvelope(success=False)

    def test_cannot_carry_both(self) -> None:
        error = EnvelopeError(code=ErrorKind.INTERNAL, message="boom")
        with pytest.raises(ValidationError):
            ResponseEnvelope(success=False, data={"x": 1}, error=error)
        with pytest.raises(ValidationError):
            ResponseEnvelope(success=True, data={"x": 1}, error=error)

    def test_frozen(self) -> None:
        env = build_success({"x": 1})
        with pytest.raises(ValidationError):
            env.success = False  # type: ignore[misc]


class TestBuilders:
    def test_build_success_replaces_none(self) -> None:
        env = build_success(None, op="webhooks.destroy", message="Webhook deleted.")
        assert env.data == {"message": "Webhook deleted."}

    def test_build_success_keeps_falsy_data(self) -> None:
        assert build_success([]).data == []

    def test_build_error(self) -> None:
        env = build_error(ErrorKind.NOT_FOUND, "missing", {"id": "x"}, op="records.retrieve")
        assert env.success is False
        assert env.error is not None
        assert env.error.code is ErrorKind.NOT_FOUND
        assert env.error.details == {"id": "x"}


class TestPayload:
    def test_success_payload(self) -> None:
        payload = build_success({"id": "1"}, op="records.retrieve").to_payload()
        assert payload == {"success": True, "op": "records.retrieve", "data": {"id": "1"}}

    def test_error_payload_uses_string_code(self) -> None:
        payload = build_error(ErrorKind.UNAUTHORIZED, "nope").to_payload()
        assert payload == {
            "success": False,
            "error": {"code": "Unauthorized", "message": "nope"},
        }

    def test_meta_included_when_present(self) -> None:
        env = build_success({"x": 1}).model_copy(update={"meta": {"telemetry": {}}})
        assert env.to_payload()["meta"] == {"telemetry": {}}
