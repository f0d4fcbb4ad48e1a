"""Error Classifier: map arbitrary failures onto the closed ErrorKind set.

Priority order:

1. ``DatoToolsError`` raised locally keeps its own kind (validation, bulk
   limit, not-found, internal defects).
2. Authentication/authorization signals become ``Unauthorized``.
3. Missing-resource signals become ``NotFound``.
4. Everything else becomes ``RemoteFailure`` with the original details.

Signals are read from structured status first, then backend error codes,
then message text.
"""

from __future__ import annotations

from typing import Any

from datotools.domain.errors import (
    ArgumentValidationError,
    BulkLimitError,
    ContentBackendError,
    DatoToolsError,
    ErrorKind,
    ResourceNotFoundError,
    UnknownActionError,
)
from datotools.services.result import ResponseEnvelope, build_error

UNAUTHORIZED_MESSAGE = (
    "The API token was rejected by DatoCMS. Check that the token is valid "
    "and has the permissions this operation requires."
)

_AUTH_STATUSES = frozenset({401, 403})
_AUTH_CODES = frozenset(
    {"INVALID_AUTHORIZATION_HEADER", "UNAUTHORIZED", "INSUFFICIENT_PERMISSIONS"}
)
_AUTH_TEXT = ("401", "unauthorized", "forbidden")

_NOT_FOUND_STATUSES = frozenset({404})
_NOT_FOUND_CODES = frozenset({"NOT_FOUND", "RECORD_NOT_FOUND"})
_NOT_FOUND_TEXT = ("404", "not found")

STALE_VERSION_HINT = (
    "The record was modified since it was fetched. Retrieve it again and "
    "pass the current meta.current_version."
)


def status_of(error: BaseException) -> int | None:
    """Best-effort HTTP status extraction from any exception shape."""
    for attr in ("status", "status_code"):
        value = getattr(error, attr, None)
        if isinstance(value, int):
            return value
    response = getattr(error, "response", None)
    value = getattr(response, "status_code", None)
    return value if isinstance(value, int) else None


def _codes_of(error: BaseException) -> list[str]:
    if isinstance(error, ContentBackendError):
        return error.codes
    code = getattr(error, "code", None)
    return [code] if isinstance(code, str) else []


def classify(error: BaseException) -> ErrorKind:
    """Return the ErrorKind for *error*."""
    if isinstance(error, DatoToolsError) and not isinstance(error, ContentBackendError):
        return error.kind

    status = status_of(error)
    codes = set(_codes_of(error))
    text = str(error).lower()

    if status in _AUTH_STATUSES or codes & _AUTH_CODES:
        return ErrorKind.UNAUTHORIZED
    if status in _NOT_FOUND_STATUSES or codes & _NOT_FOUND_CODES:
        return ErrorKind.NOT_FOUND
    if status is None and not codes:
        if any(token in text for token in _AUTH_TEXT):
            return ErrorKind.UNAUTHORIZED
        if any(token in text for token in _NOT_FOUND_TEXT):
            return ErrorKind.NOT_FOUND
    return ErrorKind.REMOTE_FAILURE


def remote_details(error: BaseException) -> dict[str, Any]:
    """Diagnostic details preserved for a RemoteFailure."""
    details: dict[str, Any] = {
        "status": status_of(error),
        "code": None,
        "message": str(error),
        "errors": [],
    }
    if isinstance(error, ContentBackendError):
        codes = error.codes
        details["code"] = codes[0] if codes else None
        details["errors"] = error.errors
        if "STALE_ITEM_VERSION" in codes:
            details["hint"] = STALE_VERSION_HINT
    else:
        details["type"] = type(error).__name__
    return details


def error_envelope(
    error: BaseException,
    *,
    entity_label: str = "Resource",
    identifier: str | None = None,
    op: str = "",
) -> ResponseEnvelope:
    """Classify *error* and build the matching failure envelope.

    ``entity_label`` and ``identifier`` shape the NotFound message, which
    always interpolates the identifier that was queried.
    """
    kind = classify(error)

    if kind is ErrorKind.VALIDATION_FAILED and isinstance(error, ArgumentValidationError):
        return build_error(
            kind,
            str(error),
            {"issues": [issue.to_dict() for issue in error.issues]},
            op=op,
        )
    if kind is ErrorKind.BULK_LIMIT_EXCEEDED and isinstance(error, BulkLimitError):
        return build_error(
            kind,
            str(error),
            {"field": error.field, "received": error.received, "limit": error.limit},
            op=op,
        )
    if kind is ErrorKind.UNAUTHORIZED:
        details = remote_details(error) if isinstance(error, ContentBackendError) else None
        return build_error(kind, UNAUTHORIZED_MESSAGE, details, op=op)
    if kind is ErrorKind.NOT_FOUND:
        if isinstance(error, ResourceNotFoundError):
            entity_label, identifier = error.entity_label, error.identifier
        return build_error(
            kind,
            not_found_message(entity_label, identifier),
            {"id": identifier} if identifier is not None else None,
            op=op,
        )
    if kind is ErrorKind.REMOTE_FAILURE:
        return build_error(kind, f"DatoCMS request failed: {error}", remote_details(error), op=op)
    details = {"valid": error.valid} if isinstance(error, UnknownActionError) else None
    return build_error(kind, str(error) or type(error).__name__, details, op=op)


def not_found_message(entity_label: str, identifier: str | None) -> str:
    if identifier is None:
        return f"{entity_label} was not found."
    return f"{entity_label} with ID '{identifier}' was not found."


def internal_envelope(error: BaseException, *, op: str = "") -> ResponseEnvelope:
    """Failure envelope for a defect in local handler logic (never classified)."""
    return build_error(
        ErrorKind.INTERNAL,
        f"Unexpected error while running {op}: {error}",
        {"type": type(error).__name__},
        op=op,
    )
