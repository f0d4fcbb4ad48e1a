"""Tests for the Error Classifier."""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from datotools.domain.errors import (
    ArgumentValidationError,
    BulkLimitError,
    ContentBackendError,
    ErrorKind,
    ResourceNotFoundError,
    SchemaNotFoundError,
    SessionConstructionError,
    UnknownActionError,
    ValidationIssue,
)
from datotools.services.classifier import (
    STALE_VERSION_HINT,
    UNAUTHORIZED_MESSAGE,
    classify,
    error_envelope,
    not_found_message,
    status_of,
)


def backend_error(status: int | None, *codes: str, message: str = "failed") -> ContentBackendError:
    errors = [{"id": "e", "type": "api_error", "attributes": {"code": c}} for c in codes]
    return ContentBackendError(
        message, status=status, code=codes[0] if codes else None, errors=errors
    )


class HttpLikeError(Exception):
    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.response = SimpleNamespace(status_code=status_code)


class TestClassify:
    @pytest.mark.parametrize("status", [401, 403])
    def test_auth_status(self, status: int) -> None:
        assert classify(backend_error(status)) is ErrorKind.UNAUTHORIZED

    def test_auth_code_without_status(self) -> None:
        err = backend_error(None, "INVALID_AUTHORIZATION_HEADER")
        assert classify(err) is ErrorKind.UNAUTHORIZED

    def test_not_found_status(self) -> None:
        assert classify(backend_error(404, "NOT_FOUND")) is ErrorKind.NOT_FOUND

    def test_auth_wins_over_not_found(self) -> None:
        assert classify(backend_error(401, "NOT_FOUND")) is ErrorKind.UNAUTHORIZED

    def test_response_status_code(self) -> None:
        assert status_of(HttpLikeError("x", 404)) == 404
        assert classify(HttpLikeError("x", 404)) is ErrorKind.NOT_FOUND

    def test_message_text_fallback(self) -> None:
        assert classify(RuntimeError("401 Unauthorized")) is ErrorKind.UNAUTHORIZED
        assert classify(RuntimeError("Record not found")) is ErrorKind.NOT_FOUND

    def test_text_ignored_when_status_present(self) -> None:
        err = backend_error(422, "INVALID_FIELD", message="field not found in schema")
        assert classify(err) is ErrorKind.REMOTE_FAILURE

    def test_other_backend_failures(self) -> None:
        assert classify(backend_error(500)) is ErrorKind.REMOTE_FAILURE
        assert classify(ValueError("weird")) is ErrorKind.REMOTE_FAILURE

    def test_local_errors_keep_their_kind(self) -> None:
        assert classify(ArgumentValidationError("bad")) is ErrorKind.VALIDATION_FAILED
        assert classify(BulkLimitError("itemIds", 201, 200)) is ErrorKind.BULK_LIMIT_EXCEEDED
        assert classify(ResourceNotFoundError("Record", "1")) is ErrorKind.NOT_FOUND
        assert classify(SchemaNotFoundError("a", "b")) is ErrorKind.INTERNAL
        assert classify(SessionConstructionError("bad token")) is ErrorKind.INTERNAL


class TestErrorEnvelope:
    def test_unauthorized_has_fixed_message(self) -> None:
        env = error_envelope(backend_error(401, "INVALID_AUTHORIZATION_HEADER"), op="x.y")
        assert env.error is not None
        assert env.error.code is ErrorKind.UNAUTHORIZED
        assert env.error.message == UNAUTHORIZED_MESSAGE
        assert env.op == "x.y"

    def test_not_found_interpolates_identifier(self) -> None:
        env = error_envelope(backend_error(404), entity_label="Record", identifier="missing-id")
        assert env.error is not None
        assert env.error.message == "Record with ID 'missing-id' was not found."
        assert env.error.details == {"id": "missing-id"}

    def test_not_found_exception_supplies_label(self) -> None:
        env = error_envelope(ResourceNotFoundError("Upload", "u1"))
        assert env.error is not None
        assert env.error.message == not_found_message("Upload", "u1")

    def test_remote_failure_preserves_details(self) -> None:
        err = backend_error(422, "INVALID_FIELD", message="422 Unprocessable (INVALID_FIELD)")
        env = error_envelope(err)
        assert env.error is not None
        assert env.error.code is ErrorKind.REMOTE_FAILURE
        assert "422 Unprocessable" in env.error.message
        details = env.error.details
        assert details["status"] == 422
        assert details["code"] == "INVALID_FIELD"
        assert details["errors"] == err.errors

    def test_stale_version_hint(self) -> None:
        env = error_envelope(backend_error(422, "STALE_ITEM_VERSION"))
        assert env.error is not None
        assert env.error.details["hint"] == STALE_VERSION_HINT

    def test_validation_issues(self) -> None:
        issue = ValidationIssue(path="itemId", message="Field required")
        env = error_envelope(ArgumentValidationError("Invalid arguments", [issue]))
        assert env.error is not None
        assert env.error.details == {"issues": [{"path": "itemId", "message": "Field required"}]}

    def test_bulk_limit_details(self) -> None:
        env = error_envelope(BulkLimitError("itemIds", 201, 200))
        assert env.error is not None
        assert env.error.details == {"field": "itemIds", "received": 201, "limit": 200}

    def test_unknown_action_lists_valid(self) -> None:
        env = error_envelope(UnknownActionError("Unknown action", ["a", "b"]))
        assert env.error is not None
        assert env.error.code is ErrorKind.INTERNAL
        assert env.error.details == {"valid": ["a", "b"]}


class TestBackendErrorTransience:
    def test_transient_statuses(self) -> None:
        assert backend_error(429).transient
        assert backend_error(503).transient
        assert not backend_error(404).transient

    def test_transport_failures(self) -> None:
        assert ContentBackendError("down", code="TRANSPORT_ERROR").transient
        assert not ContentBackendError("bad download", code="DOWNLOAD_FAILED").transient
