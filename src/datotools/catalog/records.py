"""Records domain: content items, publication, scheduling and versions."""

from __future__ import annotations

from typing import Any, Literal
from urllib.parse import quote

from pydantic import BaseModel, ConfigDict, Field, model_validator

from datotools.catalog.common import (
    ISO_TIMESTAMP_PATTERN,
    ORDER_BY_PATTERN,
    ReferenceVersion,
    Version,
    as_list,
    confirm,
    confirmation_flag,
    message,
    page_query,
    split_ids,
)
from datotools.services.contracts import (
    ListContract,
    OperationContract,
    ReadContract,
    id_list,
    identifier,
)
from datotools.services.factory import OperationConfig, Variant

DOMAIN = "records"
ENTITY = "Record"


class RecordMeta(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    current_version: str | None = None
    status: Literal["draft", "updated", "published"] | None = None
    stage: str | None = None


# ── Contracts ────────────────────────────────────────────────────────


class QueryRecords(ListContract):
    text_search: str | None = Field(
        default=None, description="Plain search term matched across all records."
    )
    ids: str | list[str] | None = Field(
        default=None, description="Record IDs, as a list or a comma-separated string."
    )
    model_id: str | None = Field(default=None, description="Restrict results to one model.")
    model_name: str | None = Field(default=None, description="Model API key to restrict to.")
    field_filters: dict[str, Any] | None = Field(
        default=None,
        alias="fields",
        description=(
            'Field filters within one model, e.g. {"name": "Emily"} or '
            '{"name": {"matches": {"pattern": "Em"}}}. Requires modelId or modelName.'
        ),
    )
    locale: str | None = Field(default=None, description="Locale used by localized filters.")
    order_by: str | None = Field(default=None, pattern=ORDER_BY_PATTERN)
    version: Version = "current"
    nested: bool = True
    return_only_ids: bool = False

    @model_validator(mode="after")
    def _filters_need_model(self) -> QueryRecords:
        if self.field_filters and not (self.model_id or self.model_name or self.text_search):
            raise ValueError(
                "Field filtering requires either 'modelId' or 'modelName' to be specified."
            )
        return self


class RetrieveRecord(ReadContract):
    item_id: str = identifier("ID of the record.")
    version: Version = "published"
    nested: bool = True


class RecordReferences(ReadContract):
    item_id: str = identifier("ID of the referenced record.")
    version: ReferenceVersion = "current"
    nested: bool = True
    return_only_ids: bool = True


class RecordUrl(OperationContract):
    project_url: str = Field(
        min_length=1,
        description="Project domain, the internal_domain returned by project.get_info.",
    )
    item_type_id: str = identifier("Model ID of the record (item.item_type.id).")
    item_id: str = identifier("ID of the record.")


class CreateRecord(OperationContract):
    item_type: str = identifier("Model ID the new record belongs to.")
    data: dict[str, Any] = Field(
        description="Field values; localized fields take {locale: value} maps."
    )
    meta: RecordMeta | None = None
    return_only_confirmation: bool = confirmation_flag()


class UpdateRecord(OperationContract):
    item_id: str = identifier("ID of the record.")
    data: dict[str, Any] = Field(
        description=(
            "Field values to change. Localized fields must list every locale to keep."
        )
    )
    version: str | None = Field(
        default=None, description="Current version for optimistic locking."
    )
    meta: RecordMeta | None = None
    return_only_confirmation: bool = confirmation_flag()


class RecordTarget(OperationContract):
    item_id: str = identifier("ID of the record.")


class ConfirmableRecordTarget(RecordTarget):
    return_only_confirmation: bool = confirmation_flag()


class BulkRecords(OperationContract):
    item_ids: list[str] = id_list("Record IDs")


class PublishRecord(RecordTarget):
    content_in_locales: list[str] | None = None
    non_localized_content: bool | None = None
    recursive: bool = False

    @model_validator(mode="after")
    def _selective_pair(self) -> PublishRecord:
        if (self.content_in_locales is None) != (self.non_localized_content is None):
            raise ValueError(
                "If content_in_locales is provided, non_localized_content must also be "
                "provided, and vice versa."
            )
        return self


class BulkPublishRecords(BulkRecords):
    recursive: bool = False


class UnpublishRecord(RecordTarget):
    recursive: bool = False


class SchedulePublication(RecordTarget):
    publication_scheduled_at: str = Field(pattern=ISO_TIMESTAMP_PATTERN)


class ScheduleUnpublication(RecordTarget):
    unpublishing_scheduled_at: str = Field(pattern=ISO_TIMESTAMP_PATTERN)


class ListVersions(ListContract):
    item_id: str = identifier("ID of the record.")
    return_only_ids: bool = True


class RetrieveVersion(ReadContract):
    item_id: str = identifier("ID of the record.")
    version_id: str = identifier("ID of the version.")


class RestoreVersion(OperationContract):
    item_id: str = identifier("ID of the record.")
    version_id: str = identifier("ID of the version to restore.")


# ── Remote calls ─────────────────────────────────────────────────────


def _eq(value: Any) -> Any:
    return value if isinstance(value, dict) else {"eq": value}


def record_query(args: QueryRecords) -> dict[str, Any]:
    """Translate query arguments into CMA list parameters."""
    query: dict[str, Any] = {"version": args.version, "nested": args.nested, **page_query(args)}
    model = args.model_id or args.model_name
    ids = split_ids(args.ids)
    filters: dict[str, Any] = {}
    if args.text_search:
        filters["query"] = args.text_search
        if model:
            filters["type"] = model
    elif ids:
        filters["ids"] = ids
    elif model:
        filters["type"] = model
        if args.field_filters:
            filters["fields"] = {name: _eq(v) for name, v in args.field_filters.items()}
    if filters:
        query["filter"] = filters
    if args.locale:
        query["locale"] = args.locale
    if args.order_by and model:
        query["order_by"] = args.order_by
    return query


def _query(session: Any, args: QueryRecords) -> Any:
    return session.list_records(record_query(args))


def _retrieve(session: Any, args: RetrieveRecord) -> Any:
    return session.find_record(args.item_id, {"version": args.version, "nested": args.nested})


def _references(session: Any, args: RecordReferences) -> Any:
    query = {"version": args.version, "nested": args.nested}
    return session.record_references(args.item_id, query)


def editor_url(project_url: str, item_type_id: str, item_id: str, environment: str | None) -> str:
    host = project_url.strip().removeprefix("https://").removeprefix("http://").rstrip("/")
    url = f"https://{host}/editor/item_types/{item_type_id}/items/{item_id}/edit"
    if environment:
        url += f"?environment={quote(environment, safe='')}"
    return url


def _record_url(session: Any, args: RecordUrl) -> dict[str, str]:
    return {
        "message": "Editor URL of the record.",
        "url": editor_url(args.project_url, args.item_type_id, args.item_id, args.environment),
    }


def _meta(args: CreateRecord | UpdateRecord) -> dict[str, Any] | None:
    meta = args.meta.model_dump(exclude_none=True) if args.meta else {}
    if isinstance(args, UpdateRecord) and args.version:
        meta.setdefault("current_version", args.version)
    return meta or None


def _create(session: Any, args: CreateRecord) -> Any:
    return session.create_record(args.item_type, args.data, _meta(args))


def _update(session: Any, args: UpdateRecord) -> Any:
    return session.update_record(args.item_id, args.data, _meta(args))


def _publish(session: Any, args: PublishRecord) -> Any:
    return session.publish_record(
        args.item_id,
        content_in_locales=args.content_in_locales,
        non_localized_content=args.non_localized_content,
        recursive=args.recursive,
    )


def _versions(session: Any, args: ListVersions) -> Any:
    return session.list_record_versions(args.item_id, page_query(args))


OPERATIONS = [
    OperationConfig(
        "query", QueryRecords, _query, Variant.LIST, ENTITY, transform=as_list
    ),
    OperationConfig(
        "retrieve", RetrieveRecord, _retrieve, Variant.RETRIEVE, ENTITY, id_field="item_id"
    ),
    OperationConfig(
        "references",
        RecordReferences,
        _references,
        Variant.LIST,
        ENTITY,
        id_field="item_id",
        transform=as_list,
    ),
    OperationConfig("record_url", RecordUrl, _record_url, Variant.CUSTOM, ENTITY, read_only=True),
    OperationConfig(
        "create",
        CreateRecord,
        _create,
        Variant.CREATE,
        ENTITY,
        transform=confirm("Record created."),
    ),
    OperationConfig(
        "update",
        UpdateRecord,
        _update,
        Variant.UPDATE,
        ENTITY,
        id_field="item_id",
        transform=confirm("Record {item_id} updated."),
    ),
    OperationConfig(
        "duplicate",
        ConfirmableRecordTarget,
        lambda s, a: s.duplicate_record(a.item_id),
        Variant.CREATE,
        ENTITY,
        id_field="item_id",
        transform=confirm("Record {item_id} duplicated."),
    ),
    OperationConfig(
        "destroy",
        ConfirmableRecordTarget,
        lambda s, a: s.destroy_record(a.item_id),
        Variant.DELETE,
        ENTITY,
        id_field="item_id",
        transform=confirm("Record {item_id} deleted."),
    ),
    OperationConfig(
        "bulk_destroy",
        BulkRecords,
        lambda s, a: s.bulk_destroy_records(a.item_ids),
        Variant.BULK,
        ENTITY,
        bulk_field="item_ids",
        transform=message("Deleted {count} record(s).", count_field="item_ids"),
    ),
    OperationConfig(
        "publish", PublishRecord, _publish, Variant.UPDATE, ENTITY, id_field="item_id"
    ),
    OperationConfig(
        "bulk_publish",
        BulkPublishRecords,
        lambda s, a: s.bulk_publish_records(a.item_ids, recursive=a.recursive),
        Variant.BULK,
        ENTITY,
        bulk_field="item_ids",
        transform=message("Published {count} record(s).", count_field="item_ids"),
    ),
    OperationConfig(
        "unpublish",
        UnpublishRecord,
        lambda s, a: s.unpublish_record(a.item_id, recursive=a.recursive),
        Variant.UPDATE,
        ENTITY,
        id_field="item_id",
    ),
    OperationConfig(
        "bulk_unpublish",
        BulkPublishRecords,
        lambda s, a: s.bulk_unpublish_records(a.item_ids, recursive=a.recursive),
        Variant.BULK,
        ENTITY,
        bulk_field="item_ids",
        transform=message("Unpublished {count} record(s).", count_field="item_ids"),
    ),
    OperationConfig(
        "schedule_publication",
        SchedulePublication,
        lambda s, a: s.schedule_publication(a.item_id, a.publication_scheduled_at),
        Variant.UPDATE,
        ENTITY,
        id_field="item_id",
    ),
    OperationConfig(
        "cancel_scheduled_publication",
        RecordTarget,
        lambda s, a: s.cancel_scheduled_publication(a.item_id),
        Variant.DELETE,
        ENTITY,
        id_field="item_id",
        success_message="Scheduled publication cancelled.",
    ),
    OperationConfig(
        "schedule_unpublication",
        ScheduleUnpublication,
        lambda s, a: s.schedule_unpublication(a.item_id, a.unpublishing_scheduled_at),
        Variant.UPDATE,
        ENTITY,
        id_field="item_id",
    ),
    OperationConfig(
        "cancel_scheduled_unpublication",
        RecordTarget,
        lambda s, a: s.cancel_scheduled_unpublication(a.item_id),
        Variant.DELETE,
        ENTITY,
        id_field="item_id",
        success_message="Scheduled unpublication cancelled.",
    ),
    OperationConfig(
        "versions_list",
        ListVersions,
        _versions,
        Variant.LIST,
        ENTITY,
        id_field="item_id",
        transform=as_list,
    ),
    OperationConfig(
        "version_retrieve",
        RetrieveVersion,
        lambda s, a: s.find_record_version(a.version_id),
        Variant.RETRIEVE,
        "Record version",
        id_field="version_id",
    ),
    OperationConfig(
        "version_restore",
        RestoreVersion,
        lambda s, a: s.restore_record_version(a.version_id),
        Variant.UPDATE,
        "Record version",
        id_field="version_id",
        transform=message("Record {item_id} restored to version {version_id}."),
    ),
]
