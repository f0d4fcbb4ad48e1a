"""Error taxonomy and exception hierarchy.

Every failure a tool call can report maps onto exactly one ``ErrorKind``.
Exceptions raised inside datotools carry their kind; exceptions raised by
the Content Backend are classified by the service layer.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any


class ErrorKind(StrEnum):
    """Closed set of error codes surfaced in a response envelope."""

    UNAUTHORIZED = "Unauthorized"
    NOT_FOUND = "NotFound"
    VALIDATION_FAILED = "ValidationFailed"
    BULK_LIMIT_EXCEEDED = "BulkLimitExceeded"
    REMOTE_FAILURE = "RemoteFailure"
    INTERNAL = "Internal"


@dataclass(frozen=True)
class ValidationIssue:
    """One problem found while validating tool arguments."""

    path: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"path": self.path, "message": self.message}


class DatoToolsError(Exception):
    """Base class for errors raised by datotools itself."""

    kind: ErrorKind = ErrorKind.INTERNAL


class ArgumentValidationError(DatoToolsError):
    """Tool arguments did not satisfy the operation contract."""

    kind = ErrorKind.VALIDATION_FAILED

    def __init__(self, message: str, issues: list[ValidationIssue] | None = None) -> None:
        super().__init__(message)
        self.issues = issues or [ValidationIssue(path="input", message=message)]


class BulkLimitError(DatoToolsError):
    """A bulk operation exceeded the per-call identifier cap."""

    kind = ErrorKind.BULK_LIMIT_EXCEEDED

    def __init__(self, field: str, received: int, limit: int) -> None:
        super().__init__(
            f"Too many identifiers in '{field}': received {received}, "
            f"the maximum per call is {limit}."
        )
        self.field = field
        self.received = received
        self.limit = limit


class ResourceNotFoundError(DatoToolsError):
    """The backend answered successfully but returned no resource."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, entity_label: str, identifier: str | None) -> None:
        super().__init__(f"{entity_label} '{identifier}' not found")
        self.entity_label = entity_label
        self.identifier = identifier


class SchemaNotFoundError(DatoToolsError):
    """No contract is registered for a (domain, action) pair."""

    def __init__(self, domain: str, action: str) -> None:
        super().__init__(f"No contract registered for {domain}.{action}")
        self.domain = domain
        self.action = action


class UnknownActionError(DatoToolsError):
    """A router was asked for an action (or domain) it does not serve."""

    def __init__(self, message: str, valid: list[str]) -> None:
        super().__init__(message)
        self.valid = valid


class SessionConstructionError(DatoToolsError):
    """A Content Backend session could not be built from its credentials."""


class ContentBackendError(DatoToolsError):
    """Non-success response reported by the Content Backend.

    Attributes:
        status: HTTP status code, when the failure came from a response.
        code: First backend error code (e.g. ``"INVALID_AUTHORIZATION_HEADER"``).
        errors: Raw backend error objects, preserved for diagnosis.
    """

    kind = ErrorKind.REMOTE_FAILURE

    def __init__(
        self,
        message: str,
        *,
        status: int | None = None,
        code: str | None = None,
        errors: list[dict[str, Any]] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status = status
        self.code = code
        self.errors = errors or []

    @property
    def codes(self) -> list[str]:
        """Every error code in the backend payload, in order."""
        found: list[str] = []
        for err in self.errors:
            attrs = err.get("attributes") if isinstance(err, dict) else None
            code = attrs.get("code") if isinstance(attrs, dict) else None
            if isinstance(code, str):
                found.append(code)
        if self.code and self.code not in found:
            found.insert(0, self.code)
        return found

    @property
    def transient(self) -> bool:
        """True for failures worth retrying: network errors, 429 and 5xx."""
        if self.status is None:
            return self.code == TRANSPORT_ERROR_CODE
        return self.status == 429 or self.status >= 500


TRANSPORT_ERROR_CODE = "TRANSPORT_ERROR"
