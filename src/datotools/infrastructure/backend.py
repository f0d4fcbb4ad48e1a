"""ContentBackend: the single adapter over the DatoCMS CMA.

One instance is one Session: it is bound to a ``(token, environment)``
pair and implements every capability protocol in
``datotools.domain.capabilities``. Handlers only ever call these named
operations; they never build URLs or JSON:API documents themselves.
"""

from __future__ import annotations

import posixpath
from collections.abc import Mapping, Sequence
from typing import Any
from urllib.parse import urlparse

from datotools.config.models import BackendConfig
from datotools.domain.capabilities import ContentCapabilities, Query, Resource
from datotools.infrastructure.transport import (
    BackendTransport,
    ResourceList,
    ref,
    refs,
    serialize_resource,
)


def _clean(attributes: Mapping[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in attributes.items() if v is not None}


def _bulk(operation_type: str, relation: str, related_type: str, ids: Sequence[str]) -> dict:
    return serialize_resource(operation_type, relationships={relation: refs(related_type, ids)})


# Relationship name -> related resource type.
_MENU_LINKS = {
    "parent": "menu_item",
    "item_type": "item_type",
    "item_type_filter": "item_type_filter",
}
_SCHEMA_MENU_LINKS = {"parent": "schema_menu_item", "item_type": "item_type"}


def _links(relationships: Mapping[str, Any], types: Mapping[str, str]) -> dict | None:
    """To-one linkages for the supplied names; ``None`` ids detach."""
    linked = {name: ref(types[name], rid) for name, rid in relationships.items()}
    return linked or None


class ContentBackend(ContentCapabilities):
    """Named operations against one DatoCMS project environment."""

    def __init__(self, transport: BackendTransport) -> None:
        self.transport = transport
        self._locales: list[str] | None = None

    @classmethod
    def connect(
        cls,
        token: str,
        environment: str | None = None,
        *,
        config: BackendConfig | None = None,
        **transport_options: Any,
    ) -> ContentBackend:
        return cls(BackendTransport(token, environment, config=config, **transport_options))

    @property
    def environment(self) -> str | None:
        return self.transport.environment

    def close(self) -> None:
        self.transport.close()

    # ── Records ──────────────────────────────────────────────────────

    def list_records(self, query: Query) -> ResourceList:
        return self.transport.fetch_list("/items", query)

    def find_record(self, record_id: str, query: Query) -> Resource | None:
        return self.transport.fetch(f"/items/{record_id}", query)

    def record_references(self, record_id: str, query: Query) -> ResourceList:
        return self.transport.fetch_list(f"/items/{record_id}/references", query)

    def create_record(
        self, item_type_id: str, fields: Mapping[str, Any], meta: Mapping[str, Any] | None
    ) -> Resource:
        body = serialize_resource(
            "item",
            fields,
            relationships={"item_type": ref("item_type", item_type_id)},
            meta=meta,
        )
        return self.transport.send("POST", "/items", body)

    def update_record(
        self, record_id: str, fields: Mapping[str, Any], meta: Mapping[str, Any] | None
    ) -> Resource:
        body = serialize_resource("item", fields, resource_id=record_id, meta=meta)
        return self.transport.send("PUT", f"/items/{record_id}", body)

    def duplicate_record(self, record_id: str) -> Resource:
        return self.transport.send("POST", f"/items/{record_id}/duplicate")

    def destroy_record(self, record_id: str) -> Resource:
        return self.transport.send("DELETE", f"/items/{record_id}")

    def bulk_destroy_records(self, record_ids: Sequence[str]) -> Any:
        body = _bulk("item_bulk_destroy_operation", "items", "item", record_ids)
        return self.transport.send("POST", "/items/bulk/destroy", body)

    def publish_record(
        self,
        record_id: str,
        *,
        content_in_locales: Sequence[str] | None,
        non_localized_content: bool | None,
        recursive: bool,
    ) -> Resource:
        body = None
        if content_in_locales is not None:
            body = serialize_resource(
                "selective_publish_operation",
                {
                    "content_in_locales": list(content_in_locales),
                    "non_localized_content": non_localized_content,
                },
            )
        return self.transport.send(
            "PUT", f"/items/{record_id}/publish", body, params={"recursive": recursive}
        )

    def bulk_publish_records(self, record_ids: Sequence[str], *, recursive: bool) -> Any:
        body = _bulk("item_bulk_publish_operation", "items", "item", record_ids)
        return self.transport.send(
            "POST", "/items/bulk/publish", body, params={"recursive": recursive}
        )

    def unpublish_record(self, record_id: str, *, recursive: bool) -> Resource:
        return self.transport.send(
            "PUT", f"/items/{record_id}/unpublish", params={"recursive": recursive}
        )

    def bulk_unpublish_records(self, record_ids: Sequence[str], *, recursive: bool) -> Any:
        body = _bulk("item_bulk_unpublish_operation", "items", "item", record_ids)
        return self.transport.send(
            "POST", "/items/bulk/unpublish", body, params={"recursive": recursive}
        )

    def schedule_publication(self, record_id: str, at: str) -> Resource:
        body = serialize_resource("scheduled_publication", {"publication_scheduled_at": at})
        return self.transport.send("POST", f"/items/{record_id}/scheduled-publication", body)

    def cancel_scheduled_publication(self, record_id: str) -> Resource:
        return self.transport.send("DELETE", f"/items/{record_id}/scheduled-publication")

    def schedule_unpublication(self, record_id: str, at: str) -> Resource:
        body = serialize_resource("scheduled_unpublishing", {"unpublishing_scheduled_at": at})
        return self.transport.send("POST", f"/items/{record_id}/scheduled-unpublishing", body)

    def cancel_scheduled_unpublication(self, record_id: str) -> Resource:
        return self.transport.send("DELETE", f"/items/{record_id}/scheduled-unpublishing")

    def list_record_versions(self, record_id: str, query: Query) -> ResourceList:
        return self.transport.fetch_list(f"/items/{record_id}/versions", query)

    def find_record_version(self, version_id: str) -> Resource | None:
        return self.transport.fetch(f"/versions/{version_id}")

    def restore_record_version(self, version_id: str) -> Any:
        return self.transport.send("POST", f"/versions/{version_id}/restore")

    # ── Uploads ──────────────────────────────────────────────────────

    def list_uploads(self, query: Query) -> ResourceList:
        return self.transport.fetch_list("/uploads", query)

    def find_upload(self, upload_id: str) -> Resource | None:
        return self.transport.fetch(f"/uploads/{upload_id}")

    def upload_references(self, upload_id: str, query: Query) -> ResourceList:
        return self.transport.fetch_list(f"/uploads/{upload_id}/references", query)

    def create_upload_from_url(
        self, url: str, filename: str | None, attributes: Mapping[str, Any]
    ) -> Resource:
        """Import a remote file: request a slot, store the bytes, create the upload."""
        filename = filename or posixpath.basename(urlparse(url).path) or "upload"
        content = self.transport.download(url)
        slot = self.transport.send(
            "POST", "/upload-requests", serialize_resource("upload_request", {"filename": filename})
        )
        self.transport.put_file(slot["url"], content, slot.get("request_headers") or {})
        attrs = dict(attributes)
        collection_id = attrs.pop("upload_collection", None)
        attrs["path"] = slot["id"]
        body = serialize_resource(
            "upload",
            _clean(attrs),
            relationships=(
                {"upload_collection": ref("upload_collection", collection_id)}
                if collection_id
                else None
            ),
        )
        return self.transport.send("POST", "/uploads", body)

    def update_upload(self, upload_id: str, attributes: Mapping[str, Any]) -> Resource:
        attrs = dict(attributes)
        relationships = None
        if "upload_collection" in attrs:
            relationships = {
                "upload_collection": ref("upload_collection", attrs.pop("upload_collection"))
            }
        body = serialize_resource(
            "upload", attrs, resource_id=upload_id, relationships=relationships
        )
        return self.transport.send("PUT", f"/uploads/{upload_id}", body)

    def destroy_upload(self, upload_id: str) -> Resource:
        return self.transport.send("DELETE", f"/uploads/{upload_id}")

    def bulk_destroy_uploads(self, upload_ids: Sequence[str]) -> Any:
        body = _bulk("upload_bulk_destroy_operation", "uploads", "upload", upload_ids)
        return self.transport.send("POST", "/uploads/bulk/destroy", body)

    def bulk_tag_uploads(self, upload_ids: Sequence[str], tags: Sequence[str]) -> Any:
        body = serialize_resource(
            "upload_bulk_tag_operation",
            {"tags": list(tags)},
            relationships={"uploads": refs("upload", upload_ids)},
        )
        return self.transport.send("POST", "/uploads/bulk/tag", body)

    def bulk_set_upload_collection(
        self, upload_ids: Sequence[str], collection_id: str | None
    ) -> Any:
        body = serialize_resource(
            "upload_bulk_set_upload_collection_operation",
            relationships={
                "upload_collection": ref("upload_collection", collection_id),
                "uploads": refs("upload", upload_ids),
            },
        )
        return self.transport.send("POST", "/uploads/bulk/set-upload-collection", body)

    def list_upload_tags(self, query: Query) -> ResourceList:
        return self.transport.fetch_list("/upload-tags", query)

    def create_upload_tag(self, name: str) -> Resource:
        body = serialize_resource("upload_tag", {"name": name})
        return self.transport.send("POST", "/upload-tags", body)

    def list_upload_smart_tags(self, query: Query) -> ResourceList:
        return self.transport.fetch_list("/upload-smart-tags", query)

    def list_upload_collections(self, query: Query) -> ResourceList:
        return self.transport.fetch_list("/upload-collections", query)

    def find_upload_collection(self, collection_id: str) -> Resource | None:
        return self.transport.fetch(f"/upload-collections/{collection_id}")

    def create_upload_collection(
        self, attributes: Mapping[str, Any], parent_id: str | None
    ) -> Resource:
        attrs = dict(attributes)
        collection_id = attrs.pop("id", None)
        body = serialize_resource(
            "upload_collection",
            _clean(attrs),
            resource_id=collection_id,
            relationships=(
                {"parent": ref("upload_collection", parent_id)} if parent_id else None
            ),
        )
        return self.transport.send("POST", "/upload-collections", body)

    def update_upload_collection(
        self,
        collection_id: str,
        attributes: Mapping[str, Any],
        relationships: Mapping[str, Any],
    ) -> Resource:
        rels: dict[str, Any] = {}
        if "parent" in relationships:
            rels["parent"] = ref("upload_collection", relationships["parent"])
        if "children" in relationships:
            rels["children"] = refs("upload_collection", relationships["children"])
        body = serialize_resource(
            "upload_collection",
            _clean(attributes),
            resource_id=collection_id,
            relationships=rels or None,
        )
        return self.transport.send("PUT", f"/upload-collections/{collection_id}", body)

    def destroy_upload_collection(self, collection_id: str) -> Resource:
        return self.transport.send("DELETE", f"/upload-collections/{collection_id}")

    # ── Schema ───────────────────────────────────────────────────────

    def list_item_types(self, query: Query) -> ResourceList:
        return self.transport.fetch_list("/item-types", query)

    def find_item_type(self, item_type_id: str) -> Resource | None:
        return self.transport.fetch(f"/item-types/{item_type_id}")

    def create_item_type(self, attributes: Mapping[str, Any]) -> Resource:
        body = serialize_resource("item_type", _clean(attributes))
        return self.transport.send("POST", "/item-types", body)

    def duplicate_item_type(self, item_type_id: str) -> Resource:
        return self.transport.send("POST", f"/item-types/{item_type_id}/duplicate")

    def update_item_type(self, item_type_id: str, attributes: Mapping[str, Any]) -> Resource:
        body = serialize_resource("item_type", _clean(attributes), resource_id=item_type_id)
        return self.transport.send("PUT", f"/item-types/{item_type_id}", body)

    def destroy_item_type(self, item_type_id: str) -> Resource:
        return self.transport.send("DELETE", f"/item-types/{item_type_id}")

    def list_fields(self, item_type_id: str) -> ResourceList:
        return self.transport.fetch_list(f"/item-types/{item_type_id}/fields")

    def find_field(self, field_id: str) -> Resource | None:
        return self.transport.fetch(f"/fields/{field_id}")

    def create_field(
        self, item_type_id: str, attributes: Mapping[str, Any], fieldset_id: str | None
    ) -> Resource:
        body = serialize_resource(
            "field",
            _clean(attributes),
            relationships={"fieldset": ref("fieldset", fieldset_id)} if fieldset_id else None,
        )
        return self.transport.send("POST", f"/item-types/{item_type_id}/fields", body)

    def update_field(
        self, field_id: str, attributes: Mapping[str, Any], fieldset_id: str | None
    ) -> Resource:
        body = serialize_resource(
            "field",
            _clean(attributes),
            resource_id=field_id,
            relationships={"fieldset": ref("fieldset", fieldset_id)} if fieldset_id else None,
        )
        return self.transport.send("PUT", f"/fields/{field_id}", body)

    def destroy_field(self, field_id: str) -> Resource:
        return self.transport.send("DELETE", f"/fields/{field_id}")

    def list_fieldsets(self, item_type_id: str) -> ResourceList:
        return self.transport.fetch_list(f"/item-types/{item_type_id}/fieldsets")

    def find_fieldset(self, fieldset_id: str) -> Resource | None:
        return self.transport.fetch(f"/fieldsets/{fieldset_id}")

    def create_fieldset(self, item_type_id: str, attributes: Mapping[str, Any]) -> Resource:
        body = serialize_resource("fieldset", _clean(attributes))
        return self.transport.send("POST", f"/item-types/{item_type_id}/fieldsets", body)

    def update_fieldset(self, fieldset_id: str, attributes: Mapping[str, Any]) -> Resource:
        body = serialize_resource("fieldset", _clean(attributes), resource_id=fieldset_id)
        return self.transport.send("PUT", f"/fieldsets/{fieldset_id}", body)

    def destroy_fieldset(self, fieldset_id: str) -> Resource:
        return self.transport.send("DELETE", f"/fieldsets/{fieldset_id}")

    # ── Environments ─────────────────────────────────────────────────

    def list_environments(self) -> ResourceList:
        return self.transport.fetch_list("/environments")

    def find_environment(self, environment_id: str) -> Resource | None:
        return self.transport.fetch(f"/environments/{environment_id}")

    def fork_environment(
        self, environment_id: str, new_id: str, *, fast: bool, force: bool
    ) -> Resource:
        body = serialize_resource("environment", resource_id=new_id)
        return self.transport.send(
            "POST",
            f"/environments/{environment_id}/fork",
            body,
            params={"fast": fast, "force": force},
        )

    def promote_environment(self, environment_id: str) -> Resource:
        return self.transport.send("PUT", f"/environments/{environment_id}/promote")

    def rename_environment(self, environment_id: str, new_id: str) -> Resource:
        body = serialize_resource("environment", resource_id=new_id)
        return self.transport.send("PUT", f"/environments/{environment_id}/rename", body)

    def destroy_environment(self, environment_id: str) -> Resource:
        return self.transport.send("DELETE", f"/environments/{environment_id}")

    def maintenance_mode(self) -> Resource:
        return self.transport.send("GET", "/maintenance-mode")

    def activate_maintenance_mode(self, *, force: bool) -> Resource:
        return self.transport.send(
            "PUT", "/maintenance-mode/activate", params={"force": force}
        )

    def deactivate_maintenance_mode(self) -> Resource:
        return self.transport.send("PUT", "/maintenance-mode/deactivate")

    # ── Webhooks, build triggers, deploy events ──────────────────────

    def list_webhooks(self) -> ResourceList:
        return self.transport.fetch_list("/webhooks")

    def find_webhook(self, webhook_id: str) -> Resource | None:
        return self.transport.fetch(f"/webhooks/{webhook_id}")

    def create_webhook(self, attributes: Mapping[str, Any]) -> Resource:
        body = serialize_resource("webhook", _clean(attributes))
        return self.transport.send("POST", "/webhooks", body)

    def update_webhook(self, webhook_id: str, attributes: Mapping[str, Any]) -> Resource:
        body = serialize_resource("webhook", _clean(attributes), resource_id=webhook_id)
        return self.transport.send("PUT", f"/webhooks/{webhook_id}", body)

    def destroy_webhook(self, webhook_id: str) -> Resource:
        return self.transport.send("DELETE", f"/webhooks/{webhook_id}")

    def list_webhook_calls(self, query: Query) -> ResourceList:
        return self.transport.fetch_list("/webhook_calls", query)

    def find_webhook_call(self, call_id: str) -> Resource | None:
        return self.transport.fetch(f"/webhook_calls/{call_id}")

    def resend_webhook_call(self, call_id: str) -> Any:
        return self.transport.send("POST", f"/webhook_calls/{call_id}/resend_webhook")

    def list_build_triggers(self) -> ResourceList:
        return self.transport.fetch_list("/build-triggers")

    def find_build_trigger(self, build_trigger_id: str) -> Resource | None:
        return self.transport.fetch(f"/build-triggers/{build_trigger_id}")

    def create_build_trigger(self, attributes: Mapping[str, Any]) -> Resource:
        body = serialize_resource("build_trigger", _clean(attributes))
        return self.transport.send("POST", "/build-triggers", body)

    def update_build_trigger(
        self, build_trigger_id: str, attributes: Mapping[str, Any]
    ) -> Resource:
        body = serialize_resource(
            "build_trigger", _clean(attributes), resource_id=build_trigger_id
        )
        return self.transport.send("PUT", f"/build-triggers/{build_trigger_id}", body)

    def destroy_build_trigger(self, build_trigger_id: str) -> Resource:
        return self.transport.send("DELETE", f"/build-triggers/{build_trigger_id}")

    def trigger_build(self, build_trigger_id: str) -> Any:
        return self.transport.send("POST", f"/build-triggers/{build_trigger_id}/trigger")

    def abort_build(self, build_trigger_id: str) -> Any:
        return self.transport.send("DELETE", f"/build-triggers/{build_trigger_id}/abort")

    def reindex_site_search(self, build_trigger_id: str) -> Any:
        return self.transport.send("POST", f"/build-triggers/{build_trigger_id}/reindex")

    def list_deploy_events(self, query: Query) -> ResourceList:
        return self.transport.fetch_list("/build-events", query)

    def find_deploy_event(self, event_id: str) -> Resource | None:
        return self.transport.fetch(f"/build-events/{event_id}")

    # ── Project ──────────────────────────────────────────────────────

    def find_site(self) -> Resource:
        return self.transport.send("GET", "/site")

    def update_site(self, attributes: Mapping[str, Any]) -> Resource:
        body = serialize_resource("site", _clean(attributes))
        self._locales = None
        return self.transport.send("PUT", "/site", body)

    def site_locales(self) -> list[str]:
        """Locale codes of this environment, primary first; fetched once per session."""
        if self._locales is None:
            self._locales = list(self.find_site().get("locales") or [])
        return self._locales

    def list_subscription_features(self) -> ResourceList:
        return self.transport.fetch_list("/subscription-features")

    def list_subscription_limits(self) -> ResourceList:
        return self.transport.fetch_list("/subscription-limits")

    # ── Collaborators, roles, API tokens ─────────────────────────────

    def list_invitations(self) -> ResourceList:
        return self.transport.fetch_list("/site-invitations")

    def find_invitation(self, invitation_id: str) -> Resource | None:
        return self.transport.fetch(f"/site-invitations/{invitation_id}")

    def create_invitation(self, email: str, role_id: str) -> Resource:
        body = serialize_resource(
            "site_invitation", {"email": email}, relationships={"role": ref("role", role_id)}
        )
        return self.transport.send("POST", "/site-invitations", body)

    def destroy_invitation(self, invitation_id: str) -> Resource:
        return self.transport.send("DELETE", f"/site-invitations/{invitation_id}")

    def resend_invitation(self, invitation_id: str) -> Any:
        return self.transport.send("PUT", f"/site-invitations/{invitation_id}/resend")

    def list_users(self) -> ResourceList:
        return self.transport.fetch_list("/users")

    def find_user(self, user_id: str) -> Resource | None:
        return self.transport.fetch(f"/users/{user_id}")

    def update_user(
        self, user_id: str, attributes: Mapping[str, Any], role_id: str | None
    ) -> Resource:
        body = serialize_resource(
            "user",
            _clean(attributes),
            resource_id=user_id,
            relationships={"role": ref("role", role_id)} if role_id else None,
        )
        return self.transport.send("PUT", f"/users/{user_id}", body)

    def destroy_user(self, user_id: str) -> Resource:
        return self.transport.send("DELETE", f"/users/{user_id}")

    def list_roles(self) -> ResourceList:
        return self.transport.fetch_list("/roles")

    def find_role(self, role_id: str) -> Resource | None:
        return self.transport.fetch(f"/roles/{role_id}")

    def create_role(self, attributes: Mapping[str, Any]) -> Resource:
        body = serialize_resource("role", _clean(attributes))
        return self.transport.send("POST", "/roles", body)

    def update_role(self, role_id: str, attributes: Mapping[str, Any]) -> Resource:
        body = serialize_resource("role", _clean(attributes), resource_id=role_id)
        return self.transport.send("PUT", f"/roles/{role_id}", body)

    def destroy_role(self, role_id: str) -> Resource:
        return self.transport.send("DELETE", f"/roles/{role_id}")

    def duplicate_role(self, role_id: str) -> Resource:
        return self.transport.send("POST", f"/roles/{role_id}/duplicate")

    def list_access_tokens(self) -> ResourceList:
        return self.transport.fetch_list("/access_tokens")

    def find_access_token(self, token_id: str) -> Resource | None:
        return self.transport.fetch(f"/access_tokens/{token_id}")

    def create_access_token(self, attributes: Mapping[str, Any], role_id: str) -> Resource:
        body = serialize_resource(
            "access_token", _clean(attributes), relationships={"role": ref("role", role_id)}
        )
        return self.transport.send("POST", "/access_tokens", body)

    def update_access_token(
        self, token_id: str, attributes: Mapping[str, Any], relationships: Mapping[str, Any]
    ) -> Resource:
        rels = {"role": ref("role", relationships["role"])} if "role" in relationships else None
        body = serialize_resource(
            "access_token", _clean(attributes), resource_id=token_id, relationships=rels
        )
        return self.transport.send("PUT", f"/access_tokens/{token_id}", body)

    def destroy_access_token(self, token_id: str) -> Resource:
        return self.transport.send("DELETE", f"/access_tokens/{token_id}")

    def rotate_access_token(self, token_id: str) -> Resource:
        return self.transport.send("POST", f"/access_tokens/{token_id}/regenerate_token")

    # ── Interface: menus, saved filters, plugins ─────────────────────

    def list_menu_items(self, query: Query) -> ResourceList:
        return self.transport.fetch_list("/menu-items", query)

    def find_menu_item(self, menu_item_id: str) -> Resource | None:
        return self.transport.fetch(f"/menu-items/{menu_item_id}")

    def create_menu_item(
        self, attributes: Mapping[str, Any], relationships: Mapping[str, Any]
    ) -> Resource:
        body = serialize_resource(
            "menu_item", _clean(attributes), relationships=_links(relationships, _MENU_LINKS)
        )
        return self.transport.send("POST", "/menu-items", body)

    def update_menu_item(
        self, menu_item_id: str, attributes: Mapping[str, Any], relationships: Mapping[str, Any]
    ) -> Resource:
        body = serialize_resource(
            "menu_item",
            _clean(attributes),
            resource_id=menu_item_id,
            relationships=_links(relationships, _MENU_LINKS),
        )
        return self.transport.send("PUT", f"/menu-items/{menu_item_id}", body)

    def destroy_menu_item(self, menu_item_id: str) -> Resource:
        return self.transport.send("DELETE", f"/menu-items/{menu_item_id}")

    def list_schema_menu_items(self, query: Query) -> ResourceList:
        return self.transport.fetch_list("/schema-menu-items", query)

    def find_schema_menu_item(self, schema_menu_item_id: str) -> Resource | None:
        return self.transport.fetch(f"/schema-menu-items/{schema_menu_item_id}")

    def create_schema_menu_item(
        self, attributes: Mapping[str, Any], relationships: Mapping[str, Any]
    ) -> Resource:
        body = serialize_resource(
            "schema_menu_item",
            _clean(attributes),
            relationships=_links(relationships, _SCHEMA_MENU_LINKS),
        )
        return self.transport.send("POST", "/schema-menu-items", body)

    def update_schema_menu_item(
        self,
        schema_menu_item_id: str,
        attributes: Mapping[str, Any],
        relationships: Mapping[str, Any],
    ) -> Resource:
        body = serialize_resource(
            "schema_menu_item",
            _clean(attributes),
            resource_id=schema_menu_item_id,
            relationships=_links(relationships, _SCHEMA_MENU_LINKS),
        )
        return self.transport.send("PUT", f"/schema-menu-items/{schema_menu_item_id}", body)

    def destroy_schema_menu_item(self, schema_menu_item_id: str) -> Resource:
        return self.transport.send("DELETE", f"/schema-menu-items/{schema_menu_item_id}")

    def list_upload_filters(self) -> ResourceList:
        return self.transport.fetch_list("/upload-filters")

    def find_upload_filter(self, filter_id: str) -> Resource | None:
        return self.transport.fetch(f"/upload-filters/{filter_id}")

    def create_upload_filter(self, attributes: Mapping[str, Any]) -> Resource:
        body = serialize_resource("upload_filter", _clean(attributes))
        return self.transport.send("POST", "/upload-filters", body)

    def update_upload_filter(self, filter_id: str, attributes: Mapping[str, Any]) -> Resource:
        body = serialize_resource("upload_filter", _clean(attributes), resource_id=filter_id)
        return self.transport.send("PUT", f"/upload-filters/{filter_id}", body)

    def destroy_upload_filter(self, filter_id: str) -> Resource:
        return self.transport.send("DELETE", f"/upload-filters/{filter_id}")

    def list_item_type_filters(self) -> ResourceList:
        return self.transport.fetch_list("/item-type-filters")

    def find_item_type_filter(self, filter_id: str) -> Resource | None:
        return self.transport.fetch(f"/item-type-filters/{filter_id}")

    def create_item_type_filter(self, item_type_id: str, attributes: Mapping[str, Any]) -> Resource:
        body = serialize_resource(
            "item_type_filter",
            _clean(attributes),
            relationships={"item_type": ref("item_type", item_type_id)},
        )
        return self.transport.send("POST", "/item-type-filters", body)

    def update_item_type_filter(self, filter_id: str, attributes: Mapping[str, Any]) -> Resource:
        body = serialize_resource("item_type_filter", _clean(attributes), resource_id=filter_id)
        return self.transport.send("PUT", f"/item-type-filters/{filter_id}", body)

    def destroy_item_type_filter(self, filter_id: str) -> Resource:
        return self.transport.send("DELETE", f"/item-type-filters/{filter_id}")

    def list_plugins(self, query: Query) -> ResourceList:
        return self.transport.fetch_list("/plugins", query)

    def find_plugin(self, plugin_id: str) -> Resource | None:
        return self.transport.fetch(f"/plugins/{plugin_id}")

    def create_plugin(self, attributes: Mapping[str, Any]) -> Resource:
        body = serialize_resource("plugin", _clean(attributes))
        return self.transport.send("POST", "/plugins", body)

    def update_plugin(self, plugin_id: str, attributes: Mapping[str, Any]) -> Resource:
        body = serialize_resource("plugin", _clean(attributes), resource_id=plugin_id)
        return self.transport.send("PUT", f"/plugins/{plugin_id}", body)

    def destroy_plugin(self, plugin_id: str) -> Resource:
        return self.transport.send("DELETE", f"/plugins/{plugin_id}")
