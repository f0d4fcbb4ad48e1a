"""Action Router: the per-domain entry point of every tool call.

Each invocation walks ``Idle -> Validating -> Dispatching -> Succeeded |
Failed -> Idle``; no state is carried between invocations besides the
shared session cache behind the handlers.
"""

from __future__ import annotations

import functools
import threading
from collections.abc import Callable, Mapping
from enum import StrEnum
from typing import Any

import structlog

from datotools.domain.errors import ArgumentValidationError, UnknownActionError
from datotools.services.classifier import error_envelope, internal_envelope
from datotools.services.factory import Handler
from datotools.services.registry import SchemaRegistry
from datotools.services.result import ResponseEnvelope
from datotools.services.telemetry import traced

log = structlog.get_logger("datotools.router")

EntryPoint = Callable[..., ResponseEnvelope]


class DispatchState(StrEnum):
    IDLE = "idle"
    VALIDATING = "validating"
    DISPATCHING = "dispatching"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class ActionRouter:
    """Routes ``(domain, action, args)`` requests to registered handlers."""

    def __init__(self, registry: SchemaRegistry) -> None:
        self._registry = registry
        self._tables: dict[str, Mapping[str, Handler]] = {}
        self._lock = threading.Lock()

    def register(self, domain: str, table: Mapping[str, Handler]) -> EntryPoint:
        """Expose *domain*; returns its entry point ``(action, args) -> envelope``."""
        with self._lock:
            self._tables[domain] = dict(table)
        return functools.partial(self.dispatch, domain)

    def unregister(self, domain: str) -> None:
        """Remove a domain's entry point. No-op when it is not registered."""
        with self._lock:
            self._tables.pop(domain, None)

    def domains(self) -> list[str]:
        return sorted(self._tables)

    def actions(self, domain: str) -> list[str]:
        return sorted(self._tables.get(domain, {}))

    @traced
    def dispatch(self, domain: str, action: str, args: Any = None) -> ResponseEnvelope:
        """Validate and run one action, always returning an envelope."""
        op = f"{domain}.{action}"
        bound = log.bind(op=op)
        state = DispatchState.IDLE

        table = self._tables.get(domain)
        if table is None:
            return self._unknown(
                f"Unknown domain '{domain}'. Valid domains: {_listing(self.domains())}",
                self.domains(),
                op,
            )
        if action not in table or not self._registry.has(domain, action):
            valid = sorted(a for a in table if self._registry.has(domain, a))
            return self._unknown(
                f"Unknown action '{action}' for {domain}. Valid actions: {_listing(valid)}",
                valid,
                op,
            )

        state = DispatchState.VALIDATING
        bound.debug("dispatch.state", state=str(state))
        validation = self._registry.validate(domain, action, args)
        if not validation.ok:
            state = DispatchState.FAILED
            bound.debug("dispatch.state", state=str(state), reason="validation")
            return error_envelope(
                ArgumentValidationError(validation.message, validation.issues), op=op
            )

        state = DispatchState.DISPATCHING
        bound.debug("dispatch.state", state=str(state))
        try:
            envelope = table[action](validation.args)
        except Exception as exc:
            bound.exception("dispatch.handler_crashed")
            envelope = internal_envelope(exc, op=op)

        state = DispatchState.SUCCEEDED if envelope.success else DispatchState.FAILED
        bound.debug(
            "dispatch.state",
            state=str(state),
            error=None if envelope.error is None else str(envelope.error.code),
        )
        return envelope

    def _unknown(self, message: str, valid: list[str], op: str) -> ResponseEnvelope:
        log.warning("dispatch.unknown", op=op)
        return error_envelope(UnknownActionError(message, valid), op=op)


def _listing(names: list[str]) -> str:
    return ", ".join(names) if names else "(none)"
