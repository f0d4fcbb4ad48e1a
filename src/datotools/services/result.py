"""ResponseEnvelope and EnvelopeError: the universal tool contract.

INVARIANT: every tool invocation returns a ResponseEnvelope, and exactly
one of ``data`` / ``error`` is populated. The MCP adapter, the CLI and the
tests all consume this type.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, model_validator

from datotools.domain.errors import ErrorKind


class EnvelopeError(BaseModel):
    """Structured error payload within a ResponseEnvelope."""

    model_config = {"frozen": True}

    code: ErrorKind
    message: str
    details: Any = None


class ResponseEnvelope(BaseModel):
    """Uniform return type of every tool operation.

    Attributes:
        success: Whether the operation succeeded.
        op: Qualified operation name (e.g. ``"records.retrieve"``).
        data: Operation payload on success. Never ``None`` when successful.
        error: Structured error when ``success`` is False.
        meta: Optional metadata (telemetry span tree, timings).
    """

    model_config = {"frozen": True}

    success: bool
    op: str = ""
    data: Any = None
    error: EnvelopeError | None = None
    meta: dict[str, Any] | None = Field(default=None)

    @model_validator(mode="after")
    def _exactly_one_outcome(self) -> ResponseEnvelope:
        if self.success:
            if self.error is not None:
                raise ValueError("a successful envelope cannot carry an error")
            if self.data is None:
                raise ValueError("a successful envelope must carry data")
        elif self.error is None:
            raise ValueError("a failed envelope must carry an error")
        elif self.data is not None:
            raise ValueError("a failed envelope cannot carry data")
        return self

    def to_payload(self) -> dict[str, Any]:
        """Serialize to the wire shape returned to callers."""
        payload: dict[str, Any] = {"success": self.success}
        if self.op:
            payload["op"] = self.op
        if self.error is None:
            payload["data"] = self.data
        else:
            error: dict[str, Any] = {
                "code": str(self.error.code),
                "message": self.error.message,
            }
            if self.error.details is not None:
                error["details"] = self.error.details
            payload["error"] = error
        if self.meta:
            payload["meta"] = self.meta
        return payload


def build_success(
    data: Any,
    *,
    op: str = "",
    message: str = "Operation completed.",
) -> ResponseEnvelope:
    """Wrap a successful result.

    A ``None`` result (e.g. a destroy that returns nothing) is replaced with
    a ``{"message": ...}`` payload so the envelope always carries data.
    """
    if data is None:
        data = {"message": message}
    return ResponseEnvelope(success=True, op=op, data=data)


def build_error(
    kind: ErrorKind,
    message: str,
    details: Any = None,
    *,
    op: str = "",
) -> ResponseEnvelope:
    """Wrap a failure of the given kind."""
    return ResponseEnvelope(
        success=False,
        op=op,
        error=EnvelopeError(code=kind, message=message, details=details),
    )
