"""Webhooks domain: webhooks, call logs, build triggers and deploy events."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, HttpUrl, model_validator

from datotools.catalog.common import as_list, message, page_query, supplied
from datotools.services.contracts import (
    ListContract,
    OperationContract,
    ReadContract,
    identifier,
)
from datotools.services.factory import OperationConfig, Variant

DOMAIN = "webhooks"

Adapter = Literal["custom", "netlify", "vercel", "circle_ci", "gitlab", "travis"]
Trigger = Literal["item_type", "cache", "uploadable_item"]

_WEBHOOK_ATTRIBUTES = ("name", "url", "headers", "events", "payload_format", "triggers")
_TRIGGER_ATTRIBUTES = ("name", "adapter", "adapter_settings", "indexing_enabled")


# ── Webhooks ─────────────────────────────────────────────────────────


class ListWebhooks(ReadContract):
    pass


class WebhookTarget(OperationContract):
    webhook_id: str = identifier("ID of the webhook.")


class RetrieveWebhook(ReadContract):
    webhook_id: str = identifier("ID of the webhook.")


class CreateWebhook(OperationContract):
    name: str = Field(min_length=1)
    url: HttpUrl = Field(description="Endpoint called when the webhook fires.")
    headers: dict[str, str] | None = None
    events: list[str] = Field(min_length=1, description="Events such as create or publish.")
    payload_format: Literal["json", "form"] = "json"
    triggers: list[Trigger] | None = None
    https_only: bool = Field(default=False, description="Reject non-HTTPS URLs.")

    @model_validator(mode="after")
    def _https(self) -> CreateWebhook:
        if self.https_only and self.url.scheme != "https":
            raise ValueError("url must use https when httpsOnly is set")
        return self


class UpdateWebhook(WebhookTarget):
    name: str | None = Field(default=None, min_length=1)
    url: HttpUrl | None = None
    headers: dict[str, str] | None = None
    events: list[str] | None = None
    payload_format: Literal["json", "form"] | None = None
    triggers: list[Trigger] | None = None

    @model_validator(mode="after")
    def _something_to_update(self) -> UpdateWebhook:
        if not self.model_fields_set & set(_WEBHOOK_ATTRIBUTES):
            raise ValueError("At least one updatable field must be provided.")
        return self


def _create_webhook(session: Any, args: CreateWebhook) -> Any:
    attributes = args.model_dump(include=set(_WEBHOOK_ATTRIBUTES), exclude_none=True, mode="json")
    return session.create_webhook(attributes)


# ── Webhook calls ────────────────────────────────────────────────────


class CallFilter(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    status: Literal["triggered", "sending", "success", "failure"] | None = None
    item_type: str | None = Field(default=None, alias="itemType")
    event: str | None = None


class ListWebhookCalls(ListContract):
    webhook_id: str = identifier("Webhook whose call log to list.")
    filter: CallFilter | None = None


class RetrieveWebhookCall(ReadContract):
    webhook_id: str | None = None
    call_id: str = identifier("ID of the webhook call.")


class ResendWebhookCall(OperationContract):
    webhook_id: str | None = None
    call_id: str = identifier("ID of the webhook call to resend.")


def _list_calls(session: Any, args: ListWebhookCalls) -> Any:
    filters: dict[str, Any] = {"webhook_id": args.webhook_id}
    if args.filter is not None:
        filters["status"] = args.filter.status
        filters["item_type_id"] = args.filter.item_type
        filters["event_type"] = args.filter.event
    return session.list_webhook_calls({"filter": filters, **page_query(args)})


# ── Build triggers ───────────────────────────────────────────────────


class ListBuildTriggers(ReadContract):
    pass


class BuildTriggerTarget(OperationContract):
    build_trigger_id: str = identifier("ID of the build trigger.")


class RetrieveBuildTrigger(ReadContract):
    build_trigger_id: str = identifier("ID of the build trigger.")


class CreateBuildTrigger(OperationContract):
    name: str = Field(min_length=1)
    adapter: Adapter
    adapter_settings: dict[str, Any] = Field(default_factory=dict)
    indexing_enabled: bool = False


class UpdateBuildTrigger(BuildTriggerTarget):
    name: str | None = Field(default=None, min_length=1)
    adapter: Adapter | None = None
    adapter_settings: dict[str, Any] | None = None
    indexing_enabled: bool | None = None

    @model_validator(mode="after")
    def _something_to_update(self) -> UpdateBuildTrigger:
        if not self.model_fields_set & set(_TRIGGER_ATTRIBUTES):
            raise ValueError("At least one updatable field must be provided.")
        return self


# ── Deploy events ────────────────────────────────────────────────────


class EventFilter(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    event_type: str | None = Field(default=None, alias="eventType")


class ListDeployEvents(ListContract):
    build_trigger_id: str = identifier("Build trigger whose deploy events to list.")
    filter: EventFilter | None = None


class RetrieveDeployEvent(ReadContract):
    build_trigger_id: str | None = None
    event_id: str = identifier("ID of the deploy event.")


def _list_events(session: Any, args: ListDeployEvents) -> Any:
    filters: dict[str, Any] = {"build_trigger": {"eq": args.build_trigger_id}}
    if args.filter is not None and args.filter.event_type:
        filters["event_type"] = {"eq": args.filter.event_type}
    return session.list_deploy_events({"filter": filters, **page_query(args)})


OPERATIONS = [
    OperationConfig(
        "list",
        ListWebhooks,
        lambda s, a: s.list_webhooks(),
        Variant.LIST,
        "Webhook",
        transform=as_list,
    ),
    OperationConfig(
        "retrieve",
        RetrieveWebhook,
        lambda s, a: s.find_webhook(a.webhook_id),
        Variant.RETRIEVE,
        "Webhook",
        id_field="webhook_id",
    ),
    OperationConfig("create", CreateWebhook, _create_webhook, Variant.CREATE, "Webhook"),
    OperationConfig(
        "update",
        UpdateWebhook,
        lambda s, a: s.update_webhook(a.webhook_id, supplied(a, _WEBHOOK_ATTRIBUTES)),
        Variant.UPDATE,
        "Webhook",
        id_field="webhook_id",
    ),
    OperationConfig(
        "destroy",
        WebhookTarget,
        lambda s, a: s.destroy_webhook(a.webhook_id),
        Variant.DELETE,
        "Webhook",
        id_field="webhook_id",
        success_message="Webhook deleted.",
    ),
    OperationConfig(
        "list_calls",
        ListWebhookCalls,
        _list_calls,
        Variant.LIST,
        "Webhook call",
        transform=as_list,
    ),
    OperationConfig(
        "retrieve_call",
        RetrieveWebhookCall,
        lambda s, a: s.find_webhook_call(a.call_id),
        Variant.RETRIEVE,
        "Webhook call",
        id_field="call_id",
    ),
    OperationConfig(
        "resend_call",
        ResendWebhookCall,
        lambda s, a: s.resend_webhook_call(a.call_id),
        Variant.CUSTOM,
        "Webhook call",
        id_field="call_id",
        transform=message("Webhook call {call_id} resent."),
    ),
    OperationConfig(
        "list_build_triggers",
        ListBuildTriggers,
        lambda s, a: s.list_build_triggers(),
        Variant.LIST,
        "Build trigger",
        transform=as_list,
    ),
    OperationConfig(
        "retrieve_build_trigger",
        RetrieveBuildTrigger,
        lambda s, a: s.find_build_trigger(a.build_trigger_id),
        Variant.RETRIEVE,
        "Build trigger",
        id_field="build_trigger_id",
    ),
    OperationConfig(
        "create_build_trigger",
        CreateBuildTrigger,
        lambda s, a: s.create_build_trigger(a.model_dump(include=set(_TRIGGER_ATTRIBUTES))),
        Variant.CREATE,
        "Build trigger",
    ),
    OperationConfig(
        "update_build_trigger",
        UpdateBuildTrigger,
        lambda s, a: s.update_build_trigger(
            a.build_trigger_id, supplied(a, _TRIGGER_ATTRIBUTES)
        ),
        Variant.UPDATE,
        "Build trigger",
        id_field="build_trigger_id",
    ),
    OperationConfig(
        "destroy_build_trigger",
        BuildTriggerTarget,
        lambda s, a: s.destroy_build_trigger(a.build_trigger_id),
        Variant.DELETE,
        "Build trigger",
        id_field="build_trigger_id",
        success_message="Build trigger deleted.",
    ),
    OperationConfig(
        "trigger_build",
        BuildTriggerTarget,
        lambda s, a: s.trigger_build(a.build_trigger_id),
        Variant.CUSTOM,
        "Build trigger",
        id_field="build_trigger_id",
        transform=message("Build triggered for {build_trigger_id}."),
    ),
    OperationConfig(
        "abort_build",
        BuildTriggerTarget,
        lambda s, a: s.abort_build(a.build_trigger_id),
        Variant.CUSTOM,
        "Build trigger",
        id_field="build_trigger_id",
        transform=message("Build aborted for {build_trigger_id}."),
    ),
    OperationConfig(
        "reindex_site_search",
        BuildTriggerTarget,
        lambda s, a: s.reindex_site_search(a.build_trigger_id),
        Variant.CUSTOM,
        "Build trigger",
        id_field="build_trigger_id",
        transform=message("Site search reindex started for {build_trigger_id}."),
    ),
    OperationConfig(
        "list_deploy_events",
        ListDeployEvents,
        _list_events,
        Variant.LIST,
        "Deploy event",
        transform=as_list,
    ),
    OperationConfig(
        "retrieve_deploy_event",
        RetrieveDeployEvent,
        lambda s, a: s.find_deploy_event(a.event_id),
        Variant.RETRIEVE,
        "Deploy event",
        id_field="event_id",
    ),
]
