"""Named capability interfaces of the Content Backend.

Handlers depend on these protocols instead of an untyped client surface.
A single adapter (``datotools.infrastructure.backend.ContentBackend``)
implements all of them; tests substitute lightweight stubs.

Resources are plain dicts flattened from JSON:API documents: ``id``,
``type``, every attribute, relationships as ``{"type", "id"}`` references,
and ``meta``.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Protocol

Resource = dict[str, Any]
Query = Mapping[str, Any]


class RecordsCapability(Protocol):
    def list_records(self, query: Query) -> list[Resource]: ...

    def find_record(self, record_id: str, query: Query) -> Resource | None: ...

    def record_references(self, record_id: str, query: Query) -> list[Resource]: ...

    def create_record(
        self, item_type_id: str, fields: Mapping[str, Any], meta: Mapping[str, Any] | None
    ) -> Resource: ...

    def update_record(
        self, record_id: str, fields: Mapping[str, Any], meta: Mapping[str, Any] | None
    ) -> Resource: ...

    def duplicate_record(self, record_id: str) -> Resource: ...

    def destroy_record(self, record_id: str) -> Resource: ...

    def bulk_destroy_records(self, record_ids: Sequence[str]) -> Any: ...

    def publish_record(
        self,
        record_id: str,
        *,
        content_in_locales: Sequence[str] | None,
        non_localized_content: bool | None,
        recursive: bool,
    ) -> Resource: ...

    def bulk_publish_records(self, record_ids: Sequence[str], *, recursive: bool) -> Any: ...

    def unpublish_record(self, record_id: str, *, recursive: bool) -> Resource: ...

    def bulk_unpublish_records(self, record_ids: Sequence[str], *, recursive: bool) -> Any: ...

    def schedule_publication(self, record_id: str, at: str) -> Resource: ...

    def cancel_scheduled_publication(self, record_id: str) -> Resource: ...

    def schedule_unpublication(self, record_id: str, at: str) -> Resource: ...

    def cancel_scheduled_unpublication(self, record_id: str) -> Resource: ...

    def list_record_versions(self, record_id: str, query: Query) -> list[Resource]: ...

    def find_record_version(self, version_id: str) -> Resource | None: ...

    def restore_record_version(self, version_id: str) -> Any: ...


class UploadsCapability(Protocol):
    def list_uploads(self, query: Query) -> list[Resource]: ...

    def find_upload(self, upload_id: str) -> Resource | None: ...

    def upload_references(self, upload_id: str, query: Query) -> list[Resource]: ...

    def create_upload_from_url(
        self, url: str, filename: str | None, attributes: Mapping[str, Any]
    ) -> Resource: ...

    def update_upload(self, upload_id: str, attributes: Mapping[str, Any]) -> Resource: ...

    def destroy_upload(self, upload_id: str) -> Resource: ...

    def bulk_destroy_uploads(self, upload_ids: Sequence[str]) -> Any: ...

    def bulk_tag_uploads(self, upload_ids: Sequence[str], tags: Sequence[str]) -> Any: ...

    def bulk_set_upload_collection(
        self, upload_ids: Sequence[str], collection_id: str | None
    ) -> Any: ...

    def list_upload_tags(self, query: Query) -> list[Resource]: ...

    def create_upload_tag(self, name: str) -> Resource: ...

    def list_upload_smart_tags(self, query: Query) -> list[Resource]: ...

    def list_upload_collections(self, query: Query) -> list[Resource]: ...

    def find_upload_collection(self, collection_id: str) -> Resource | None: ...

    def create_upload_collection(
        self, attributes: Mapping[str, Any], parent_id: str | None
    ) -> Resource: ...

    def update_upload_collection(
        self,
        collection_id: str,
        attributes: Mapping[str, Any],
        relationships: Mapping[str, Any],
    ) -> Resource: ...

    def destroy_upload_collection(self, collection_id: str) -> Resource: ...


class SchemaCapability(Protocol):
    def list_item_types(self, query: Query) -> list[Resource]: ...

    def find_item_type(self, item_type_id: str) -> Resource | None: ...

    def create_item_type(self, attributes: Mapping[str, Any]) -> Resource: ...

    def duplicate_item_type(self, item_type_id: str) -> Resource: ...

    def update_item_type(self, item_type_id: str, attributes: Mapping[str, Any]) -> Resource: ...

    def destroy_item_type(self, item_type_id: str) -> Resource: ...

    def list_fields(self, item_type_id: str) -> list[Resource]: ...

    def find_field(self, field_id: str) -> Resource | None: ...

    def create_field(
        self, item_type_id: str, attributes: Mapping[str, Any], fieldset_id: str | None
    ) -> Resource: ...

    def update_field(
        self, field_id: str, attributes: Mapping[str, Any], fieldset_id: str | None
    ) -> Resource: ...

    def destroy_field(self, field_id: str) -> Resource: ...

    def list_fieldsets(self, item_type_id: str) -> list[Resource]: ...

    def find_fieldset(self, fieldset_id: str) -> Resource | None: ...

    def create_fieldset(self, item_type_id: str, attributes: Mapping[str, Any]) -> Resource: ...

    def update_fieldset(self, fieldset_id: str, attributes: Mapping[str, Any]) -> Resource: ...

    def destroy_fieldset(self, fieldset_id: str) -> Resource: ...


class EnvironmentsCapability(Protocol):
    def list_environments(self) -> list[Resource]: ...

    def find_environment(self, environment_id: str) -> Resource | None: ...

    def fork_environment(
        self, environment_id: str, new_id: str, *, fast: bool, force: bool
    ) -> Resource: ...

    def promote_environment(self, environment_id: str) -> Resource: ...

    def rename_environment(self, environment_id: str, new_id: str) -> Resource: ...

    def destroy_environment(self, environment_id: str) -> Resource: ...

    def maintenance_mode(self) -> Resource: ...

    def activate_maintenance_mode(self, *, force: bool) -> Resource: ...

    def deactivate_maintenance_mode(self) -> Resource: ...


class WebhooksCapability(Protocol):
    def list_webhooks(self) -> list[Resource]: ...

    def find_webhook(self, webhook_id: str) -> Resource | None: ...

    def create_webhook(self, attributes: Mapping[str, Any]) -> Resource: ...

    def update_webhook(self, webhook_id: str, attributes: Mapping[str, Any]) -> Resource: ...

    def destroy_webhook(self, webhook_id: str) -> Resource: ...

    def list_webhook_calls(self, query: Query) -> list[Resource]: ...

    def find_webhook_call(self, call_id: str) -> Resource | None: ...

    def resend_webhook_call(self, call_id: str) -> Any: ...

    def list_build_triggers(self) -> list[Resource]: ...

    def find_build_trigger(self, build_trigger_id: str) -> Resource | None: ...

    def create_build_trigger(self, attributes: Mapping[str, Any]) -> Resource: ...

    def update_build_trigger(
        self, build_trigger_id: str, attributes: Mapping[str, Any]
    ) -> Resource: ...

    def destroy_build_trigger(self, build_trigger_id: str) -> Resource: ...

    def trigger_build(self, build_trigger_id: str) -> Any: ...

    def abort_build(self, build_trigger_id: str) -> Any: ...

    def reindex_site_search(self, build_trigger_id: str) -> Any: ...

    def list_deploy_events(self, query: Query) -> list[Resource]: ...

    def find_deploy_event(self, event_id: str) -> Resource | None: ...


class ProjectCapability(Protocol):
    def find_site(self) -> Resource: ...

    def update_site(self, attributes: Mapping[str, Any]) -> Resource: ...

    def site_locales(self) -> list[str]: ...

    def list_subscription_features(self) -> list[Resource]: ...

    def list_subscription_limits(self) -> list[Resource]: ...


class CollaboratorsCapability(Protocol):
    def list_invitations(self) -> list[Resource]: ...

    def find_invitation(self, invitation_id: str) -> Resource | None: ...

    def create_invitation(self, email: str, role_id: str) -> Resource: ...

    def destroy_invitation(self, invitation_id: str) -> Resource: ...

    def resend_invitation(self, invitation_id: str) -> Any: ...

    def list_users(self) -> list[Resource]: ...

    def find_user(self, user_id: str) -> Resource | None: ...

    def update_user(
        self, user_id: str, attributes: Mapping[str, Any], role_id: str | None
    ) -> Resource: ...

    def destroy_user(self, user_id: str) -> Resource: ...

    def list_roles(self) -> list[Resource]: ...

    def find_role(self, role_id: str) -> Resource | None: ...

    def create_role(self, attributes: Mapping[str, Any]) -> Resource: ...

    def update_role(self, role_id: str, attributes: Mapping[str, Any]) -> Resource: ...

    def destroy_role(self, role_id: str) -> Resource: ...

    def duplicate_role(self, role_id: str) -> Resource: ...

    def list_access_tokens(self) -> list[Resource]: ...

    def find_access_token(self, token_id: str) -> Resource | None: ...

    def create_access_token(self, attributes: Mapping[str, Any], role_id: str) -> Resource: ...

    def update_access_token(
        self, token_id: str, attributes: Mapping[str, Any], relationships: Mapping[str, Any]
    ) -> Resource: ...

    def destroy_access_token(self, token_id: str) -> Resource: ...

    def rotate_access_token(self, token_id: str) -> Resource: ...


class InterfaceCapability(Protocol):
    def list_menu_items(self, query: Query) -> list[Resource]: ...

    def find_menu_item(self, menu_item_id: str) -> Resource | None: ...

    def create_menu_item(
        self, attributes: Mapping[str, Any], relationships: Mapping[str, Any]
    ) -> Resource: ...

    def update_menu_item(
        self, menu_item_id: str, attributes: Mapping[str, Any], relationships: Mapping[str, Any]
    ) -> Resource: ...

    def destroy_menu_item(self, menu_item_id: str) -> Resource: ...

    def list_schema_menu_items(self, query: Query) -> list[Resource]: ...

    def find_schema_menu_item(self, schema_menu_item_id: str) -> Resource | None: ...

    def create_schema_menu_item(
        self, attributes: Mapping[str, Any], relationships: Mapping[str, Any]
    ) -> Resource: ...

    def update_schema_menu_item(
        self,
        schema_menu_item_id: str,
        attributes: Mapping[str, Any],
        relationships: Mapping[str, Any],
    ) -> Resource: ...

    def destroy_schema_menu_item(self, schema_menu_item_id: str) -> Resource: ...

    def list_upload_filters(self) -> list[Resource]: ...

    def find_upload_filter(self, filter_id: str) -> Resource | None: ...

    def create_upload_filter(self, attributes: Mapping[str, Any]) -> Resource: ...

    def update_upload_filter(self, filter_id: str, attributes: Mapping[str, Any]) -> Resource: ...

    def destroy_upload_filter(self, filter_id: str) -> Resource: ...

    def list_item_type_filters(self) -> list[Resource]: ...

    def find_item_type_filter(self, filter_id: str) -> Resource | None: ...

    def create_item_type_filter(
        self, item_type_id: str, attributes: Mapping[str, Any]
    ) -> Resource: ...

    def update_item_type_filter(
        self, filter_id: str, attributes: Mapping[str, Any]
    ) -> Resource: ...

    def destroy_item_type_filter(self, filter_id: str) -> Resource: ...

    def list_plugins(self, query: Query) -> list[Resource]: ...

    def find_plugin(self, plugin_id: str) -> Resource | None: ...

    def create_plugin(self, attributes: Mapping[str, Any]) -> Resource: ...

    def update_plugin(self, plugin_id: str, attributes: Mapping[str, Any]) -> Resource: ...

    def destroy_plugin(self, plugin_id: str) -> Resource: ...


class ContentCapabilities(
    RecordsCapability,
    UploadsCapability,
    SchemaCapability,
    EnvironmentsCapability,
    WebhooksCapability,
    ProjectCapability,
    CollaboratorsCapability,
    InterfaceCapability,
    Protocol,
):
    """Everything a session handle offers to catalogue handlers."""
