"""Handler Factory: build uniform operation handlers from declarations.

Each catalogue module describes its operations as ``OperationConfig``
entries. The factory turns each one into a handler with a fixed pipeline:

1. validate arguments through the Schema Registry
2. enforce structural limits (bulk identifier cap)
3. borrow a session from the Session Manager
4. invoke the remote call (retried with backoff for reads only)
5. shape the result and reduce locales on read paths, in the order the
   project declares its locales
6. wrap the outcome in a ResponseEnvelope

No exception escapes a handler; every exit is an envelope. Failures of
the backend are classified, while failures of the local shaping step are
reported as Internal.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from tenacity import (
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from datotools.config.models import RetryConfig
from datotools.domain.errors import (
    ArgumentValidationError,
    BulkLimitError,
    ContentBackendError,
    ResourceNotFoundError,
)
from datotools.domain.locales import contains_locale_map, reduce_locales
from datotools.services.classifier import error_envelope, internal_envelope
from datotools.services.contracts import BULK_LIMIT, OperationContract
from datotools.services.registry import SchemaRegistry
from datotools.services.result import ResponseEnvelope, build_success
from datotools.services.sessions import SessionManager
from datotools.services.telemetry import trace_span

logger = logging.getLogger(__name__)

Handler = Callable[[Any], ResponseEnvelope]
RemoteCall = Callable[[Any, Any], Any]
Transform = Callable[[Any, Any], Any]


class Variant(StrEnum):
    """Handler variants; only LIST and RETRIEVE are read-oriented by default."""

    LIST = "list"
    RETRIEVE = "retrieve"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    BULK = "bulk"
    CUSTOM = "custom"


_READ_VARIANTS = frozenset({Variant.LIST, Variant.RETRIEVE})


@dataclass(frozen=True)
class OperationConfig:
    """Declarative description of one operation.

    Attributes:
        action: Action name within the domain.
        contract: Argument contract registered for (domain, action).
        remote_call: ``(session, args) -> result``; the only code that
            touches the Content Backend.
        variant: Handler variant; selects retry, locale and not-found rules.
        entity_label: Human label for messages (``"Record"``, ``"Upload"``).
        id_field: Attribute of *args* naming the target identifier, used in
            NotFound messages.
        bulk_field: Attribute of *args* holding a bulk identifier list.
        read_only: Overrides the variant default for retry and locale
            reduction; set for side-effect-free CUSTOM operations.
        transform: ``(result, args) -> result`` shaping applied on success.
        success_message: Payload message when the remote call returns nothing.
    """

    action: str
    contract: type[OperationContract]
    remote_call: RemoteCall
    variant: Variant = Variant.CUSTOM
    entity_label: str = "Resource"
    id_field: str | None = None
    bulk_field: str | None = None
    read_only: bool | None = None
    transform: Transform | None = None
    success_message: str = "Operation completed."

    @property
    def is_read(self) -> bool:
        if self.read_only is not None:
            return self.read_only
        return self.variant in _READ_VARIANTS


def _is_transient(exc: BaseException) -> bool:
    return isinstance(exc, ContentBackendError) and exc.transient


class HandlerFactory:
    """Produce handlers bound to a registry, a session manager and a retry policy."""

    def __init__(
        self,
        registry: SchemaRegistry,
        sessions: SessionManager,
        *,
        retry_policy: RetryConfig | None = None,
    ) -> None:
        self._registry = registry
        self._sessions = sessions
        self._retry = retry_policy or RetryConfig()

    def build(self, domain: str, config: OperationConfig) -> Handler:
        """Build the handler of one operation (its contract must be registered)."""
        op = f"{domain}.{config.action}"
        call = self._with_retry(config.remote_call) if config.is_read else config.remote_call
        fetch_locales = self._with_retry(_site_locales)

        def handler(args: Any) -> ResponseEnvelope:
            validation = self._registry.validate(domain, config.action, args)
            if not validation.ok:
                error = ArgumentValidationError(validation.message, validation.issues)
                return error_envelope(error, op=op)
            parsed = validation.args
            identifier = getattr(parsed, config.id_field, None) if config.id_field else None
            reduce = config.is_read and not getattr(parsed, "return_all_locales", False)
            locales = None

            # Only backend interaction is classified; local shaping errors are Internal.
            try:
                _check_bulk_limit(config, parsed)
                with trace_span("session"):
                    session = self._sessions.get_session(parsed.api_token, parsed.environment)
                with trace_span("remote_call") as span:
                    result = call(session, parsed)
                    if reduce and contains_locale_map(result):
                        locales = fetch_locales(session)
                    if span is not None:
                        span.annotate("op", op)
                if config.variant is Variant.RETRIEVE and result is None:
                    raise ResourceNotFoundError(config.entity_label, identifier)
            except Exception as exc:
                logger.debug("%s failed: %s", op, exc)
                return error_envelope(
                    exc,
                    entity_label=config.entity_label,
                    identifier=identifier,
                    op=op,
                )

            try:
                if config.transform is not None:
                    result = config.transform(result, parsed)
                if reduce:
                    result = reduce_locales(result, locales=locales)
            except Exception as exc:
                logger.exception("%s: shaping the result failed", op)
                return internal_envelope(exc, op=op)
            return build_success(result, op=op, message=config.success_message)

        handler.__name__ = f"{domain}_{config.action}"
        handler.__qualname__ = handler.__name__
        return handler

    def build_table(self, domain: str, configs: Iterable[OperationConfig]) -> dict[str, Handler]:
        """Register every contract of *domain* atomically and build its handlers."""
        configs = list(configs)
        actions = [c.action for c in configs]
        if len(set(actions)) != len(actions):
            raise ValueError(f"Duplicate action in {domain} table")
        self._registry.register_bulk(domain, {c.action: c.contract for c in configs})
        return {c.action: self.build(domain, c) for c in configs}

    def _with_retry(self, call: Callable[..., Any]) -> Callable[..., Any]:
        policy = self._retry
        if not policy.enabled or policy.max_attempts <= 1:
            return call
        return retry(
            stop=stop_after_attempt(policy.max_attempts),
            wait=wait_exponential(
                multiplier=policy.wait_min, min=policy.wait_min, max=policy.wait_max
            ),
            retry=retry_if_exception(_is_transient),
            reraise=True,
        )(call)


def _check_bulk_limit(config: OperationConfig, args: Any) -> None:
    if config.bulk_field is None:
        return
    ids = getattr(args, config.bulk_field, None) or []
    if len(ids) > BULK_LIMIT:
        raise BulkLimitError(_wire_name(args, config.bulk_field), len(ids), BULK_LIMIT)


def _wire_name(args: Any, attribute: str) -> str:
    field = type(args).model_fields.get(attribute)
    return field.alias if field is not None and field.alias else attribute


def _site_locales(session: Any) -> list[str] | None:
    return session.site_locales()
