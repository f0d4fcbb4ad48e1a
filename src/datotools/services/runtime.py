"""Runtime wiring: one registry, session cache, factory and router per process.

Both the CLI and the MCP server call :func:`build_runtime` once and route
every tool invocation through the returned :class:`Runtime`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from datotools.config.settings import DatoSettings
from datotools.domain.capabilities import ContentCapabilities
from datotools.domain.errors import SchemaNotFoundError, UnknownActionError
from datotools.services.classifier import error_envelope
from datotools.services.factory import HandlerFactory
from datotools.services.registry import SchemaRegistry
from datotools.services.result import ResponseEnvelope, build_success
from datotools.services.router import ActionRouter, EntryPoint
from datotools.services.sessions import SessionFactory, SessionManager

logger = logging.getLogger(__name__)


@dataclass
class Runtime:
    """Everything a tool invocation needs, wired together."""

    settings: DatoSettings
    registry: SchemaRegistry
    sessions: SessionManager
    factory: HandlerFactory
    router: ActionRouter
    entry_points: dict[str, EntryPoint] = field(default_factory=dict)

    def dispatch(self, domain: str, action: str, args: Any = None) -> ResponseEnvelope:
        return self.router.dispatch(domain, action, args)

    def domains(self) -> list[str]:
        return self.router.domains()

    def describe(self, domain: str | None = None, action: str | None = None) -> ResponseEnvelope:
        """List domains, a domain's actions, or the JSON Schema of one action."""
        op = "parameters"
        if domain is None:
            return build_success({"domains": self.domains()}, op=op)
        if domain not in self.registry.domains():
            return _unknown(f"Unknown domain '{domain}'", self.registry.domains(), op)
        actions = self.registry.actions(domain)
        if action is None:
            return build_success({"domain": domain, "actions": actions}, op=op)
        try:
            schema = self.registry.describe(domain, action)
        except SchemaNotFoundError as exc:
            return _unknown(str(exc), actions, op)
        return build_success({"domain": domain, "action": action, "schema": schema}, op=op)


def _unknown(message: str, valid: list[str], op: str) -> ResponseEnvelope:
    return error_envelope(
        UnknownActionError(f"{message}. Valid: {', '.join(valid) or '(none)'}", valid), op=op
    )


def backend_session_factory(settings: DatoSettings) -> SessionFactory:
    """Session factory opening a ContentBackend per ``(token, environment)``."""
    from datotools.infrastructure.backend import ContentBackend

    def connect(token: str, environment: str | None) -> ContentCapabilities:
        return ContentBackend.connect(token, environment, config=settings.backend)

    return connect


def build_runtime(
    settings: DatoSettings | None = None,
    *,
    session_factory: SessionFactory | None = None,
) -> Runtime:
    """Wire the dispatch core and install the operation catalogue.

    *session_factory* replaces the HTTP backend (tests pass a stub).
    """
    from datotools.catalog import install

    settings = settings or DatoSettings()
    registry = SchemaRegistry()
    sessions = SessionManager(session_factory or backend_session_factory(settings))
    factory = HandlerFactory(registry, sessions, retry_policy=settings.retry)
    router = ActionRouter(registry)
    runtime = Runtime(settings, registry, sessions, factory, router)
    runtime.entry_points = install(factory, router)
    logger.debug("Runtime ready with domains: %s", ", ".join(runtime.domains()))
    return runtime
