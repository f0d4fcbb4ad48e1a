"""Uploads domain: media assets, tags, smart tags and upload collections."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, HttpUrl, model_validator

from datotools.catalog.common import (
    ORDER_BY_PATTERN,
    ReferenceVersion,
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

DOMAIN = "uploads"
ENTITY = "Upload"
COLLECTION = "Upload collection"


class CollectionRef(BaseModel):
    """``{"type": "upload_collection", "id": ...}`` linkage as agents send it."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    type: Literal["upload_collection"] = "upload_collection"
    id: str = Field(min_length=1)


# ── Contracts ────────────────────────────────────────────────────────


class UploadTarget(OperationContract):
    upload_id: str = identifier("ID of the upload.")


class RetrieveUpload(ReadContract):
    upload_id: str = identifier("ID of the upload.")


class QueryUploads(ListContract):
    ids: str | list[str] | None = Field(
        default=None, description="Upload IDs, as a list or a comma-separated string."
    )
    query: str | None = Field(
        default=None, min_length=1, description="Free-text search in filename and metadata."
    )
    field_filters: dict[str, Any] | None = Field(
        default=None, alias="fields", description="Advanced upload field filters."
    )
    locale: str | None = None
    order_by: str | None = Field(default=None, pattern=ORDER_BY_PATTERN)
    return_only_ids: bool = False


class UploadReferences(ReadContract):
    upload_id: str = identifier("ID of the upload.")
    nested: bool = True
    version: ReferenceVersion = "current"
    return_only_ids: bool = False


class CreateUpload(OperationContract):
    url: HttpUrl = Field(description="Remote URL of the file to import.")
    filename: str | None = Field(default=None, description="Override the inferred filename.")
    author: str | None = None
    copyright: str | None = None
    notes: str | None = None
    tags: list[str] | None = None
    default_field_metadata: dict[str, dict[str, Any]] | None = Field(
        default=None, description="Default metadata keyed by locale (alt, title, ...)."
    )
    upload_collection: CollectionRef | None = None


class UpdateUpload(UploadTarget):
    basename: str | None = None
    author: str | None = None
    copyright: str | None = None
    notes: str | None = None
    tags: list[str] | None = None
    default_field_metadata: dict[str, Any] | None = None
    upload_collection: CollectionRef | None = None

    @model_validator(mode="after")
    def _something_to_update(self) -> UpdateUpload:
        if not self.model_fields_set & set(_UPLOAD_ATTRIBUTES + ("upload_collection",)):
            raise ValueError("At least one updatable field must be provided.")
        return self


_UPLOAD_ATTRIBUTES = (
    "basename",
    "author",
    "copyright",
    "notes",
    "tags",
    "default_field_metadata",
)


class DestroyUpload(UploadTarget):
    return_only_confirmation: bool = confirmation_flag()


class BulkUploads(OperationContract):
    upload_ids: list[str] = id_list("Upload IDs")


class BulkTagUploads(BulkUploads):
    tags: list[str] = Field(min_length=1, description="Tag names to add.")


class BulkSetCollection(BulkUploads):
    collection_id: str | None = Field(
        description="Destination collection ID, or null to remove from any collection."
    )


class ListTags(ReadContract):
    filter: str | None = Field(
        default=None, description="Substring matched case-insensitively on tag names."
    )


class CreateTag(OperationContract):
    name: str = Field(min_length=1, description="New manual tag name.")


class SmartTagFilter(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    query: str | None = None


class ListSmartTags(ListContract):
    filter: SmartTagFilter | None = None


class CollectionTarget(OperationContract):
    upload_collection_id: str = identifier("ID of the upload collection.")


class RetrieveCollection(ReadContract):
    upload_collection_id: str = identifier("ID of the upload collection.")


class QueryCollections(ReadContract):
    ids: str | list[str] | None = None


class CreateCollection(OperationContract):
    label: str = Field(min_length=1)
    id: str | None = None
    position: int | None = Field(default=None, ge=0)
    parent: CollectionRef | None = None


class UpdateCollection(CollectionTarget):
    label: str | None = None
    position: int | None = Field(default=None, ge=0)
    parent: CollectionRef | None = None
    children: list[CollectionRef] | None = None

    @model_validator(mode="after")
    def _something_to_update(self) -> UpdateCollection:
        if not self.model_fields_set & {"label", "position", "parent", "children"}:
            raise ValueError("At least one updatable field must be provided.")
        return self


# ── Remote calls ─────────────────────────────────────────────────────


def _query(session: Any, args: QueryUploads) -> Any:
    query: dict[str, Any] = page_query(args)
    filters: dict[str, Any] = {}
    ids = split_ids(args.ids)
    if ids:
        filters["ids"] = ids
    if args.query:
        filters["query"] = args.query
    if args.field_filters:
        filters["fields"] = args.field_filters
    if filters:
        query["filter"] = filters
    if args.locale:
        query["locale"] = args.locale
    if args.order_by:
        query["order_by"] = args.order_by
    return session.list_uploads(query)


def _references(session: Any, args: UploadReferences) -> Any:
    query = {"nested": args.nested, "version": args.version}
    return session.upload_references(args.upload_id, query)


def _create(session: Any, args: CreateUpload) -> Any:
    attributes = args.model_dump(
        include=set(_UPLOAD_ATTRIBUTES) - {"basename"}, exclude_none=True
    )
    if args.upload_collection is not None:
        attributes["upload_collection"] = args.upload_collection.id
    return session.create_upload_from_url(str(args.url), args.filename, attributes)


def _update(session: Any, args: UpdateUpload) -> Any:
    attributes = {k: getattr(args, k) for k in _UPLOAD_ATTRIBUTES if k in args.model_fields_set}
    if "upload_collection" in args.model_fields_set:
        ref = args.upload_collection
        attributes["upload_collection"] = ref.id if ref is not None else None
    return session.update_upload(args.upload_id, attributes)


def _list_tags(session: Any, args: ListTags) -> Any:
    query = {"filter": {"query": args.filter}} if args.filter else {}
    return session.list_upload_tags(query)


def matching_tags(result: Any, args: ListTags) -> dict[str, Any]:
    """Keep tags whose name contains the filter, ignoring case."""
    tags = list(result or [])
    if args.filter:
        needle = args.filter.casefold()
        tags = [t for t in tags if needle in str(t.get("name", "")).casefold()]
    return {"count": len(tags), "items": tags}


def _list_smart_tags(session: Any, args: ListSmartTags) -> Any:
    query = page_query(args)
    if args.filter is not None and args.filter.query:
        query["filter"] = {"query": args.filter.query}
    return session.list_upload_smart_tags(query)


def _query_collections(session: Any, args: QueryCollections) -> Any:
    ids = split_ids(args.ids)
    return session.list_upload_collections({"filter": {"ids": ids}} if ids else {})


def _create_collection(session: Any, args: CreateCollection) -> Any:
    attributes = args.model_dump(include={"label", "position", "id"}, exclude_none=True)
    parent = args.parent.id if args.parent is not None else None
    return session.create_upload_collection(attributes, parent)


def _update_collection(session: Any, args: UpdateCollection) -> Any:
    attributes = {k: getattr(args, k) for k in ("label", "position") if k in args.model_fields_set}
    relationships: dict[str, Any] = {}
    if "parent" in args.model_fields_set:
        relationships["parent"] = args.parent.id if args.parent is not None else None
    if "children" in args.model_fields_set and args.children is not None:
        relationships["children"] = [child.id for child in args.children]
    return session.update_upload_collection(args.upload_collection_id, attributes, relationships)


OPERATIONS = [
    OperationConfig(
        "retrieve",
        RetrieveUpload,
        lambda s, a: s.find_upload(a.upload_id),
        Variant.RETRIEVE,
        ENTITY,
        id_field="upload_id",
    ),
    OperationConfig("query", QueryUploads, _query, Variant.LIST, ENTITY, transform=as_list),
    OperationConfig(
        "references",
        UploadReferences,
        _references,
        Variant.LIST,
        ENTITY,
        id_field="upload_id",
        transform=as_list,
    ),
    OperationConfig("create", CreateUpload, _create, Variant.CREATE, ENTITY),
    OperationConfig("update", UpdateUpload, _update, Variant.UPDATE, ENTITY, id_field="upload_id"),
    OperationConfig(
        "destroy",
        DestroyUpload,
        lambda s, a: s.destroy_upload(a.upload_id),
        Variant.DELETE,
        ENTITY,
        id_field="upload_id",
        transform=confirm("Upload {upload_id} deleted."),
    ),
    OperationConfig(
        "bulk_destroy",
        BulkUploads,
        lambda s, a: s.bulk_destroy_uploads(a.upload_ids),
        Variant.BULK,
        ENTITY,
        bulk_field="upload_ids",
        transform=message("Deleted {count} upload(s).", count_field="upload_ids"),
    ),
    OperationConfig(
        "bulk_tag",
        BulkTagUploads,
        lambda s, a: s.bulk_tag_uploads(a.upload_ids, a.tags),
        Variant.BULK,
        ENTITY,
        bulk_field="upload_ids",
        transform=message("Tagged {count} upload(s).", count_field="upload_ids"),
    ),
    OperationConfig(
        "bulk_set_collection",
        BulkSetCollection,
        lambda s, a: s.bulk_set_upload_collection(a.upload_ids, a.collection_id),
        Variant.BULK,
        ENTITY,
        bulk_field="upload_ids",
        transform=message("Moved {count} upload(s).", count_field="upload_ids"),
    ),
    OperationConfig(
        "list_tags", ListTags, _list_tags, Variant.LIST, "Upload tag", transform=matching_tags
    ),
    OperationConfig(
        "create_tag",
        CreateTag,
        lambda s, a: s.create_upload_tag(a.name),
        Variant.CREATE,
        "Upload tag",
    ),
    OperationConfig(
        "list_smart_tags",
        ListSmartTags,
        _list_smart_tags,
        Variant.LIST,
        "Upload smart tag",
        transform=as_list,
    ),
    OperationConfig(
        "retrieve_collection",
        RetrieveCollection,
        lambda s, a: s.find_upload_collection(a.upload_collection_id),
        Variant.RETRIEVE,
        COLLECTION,
        id_field="upload_collection_id",
    ),
    OperationConfig(
        "query_collections",
        QueryCollections,
        _query_collections,
        Variant.LIST,
        COLLECTION,
        transform=as_list,
    ),
    OperationConfig(
        "create_collection", CreateCollection, _create_collection, Variant.CREATE, COLLECTION
    ),
    OperationConfig(
        "update_collection",
        UpdateCollection,
        _update_collection,
        Variant.UPDATE,
        COLLECTION,
        id_field="upload_collection_id",
    ),
    OperationConfig(
        "destroy_collection",
        CollectionTarget,
        lambda s, a: s.destroy_upload_collection(a.upload_collection_id),
        Variant.DELETE,
        COLLECTION,
        id_field="upload_collection_id",
        success_message="Upload collection deleted.",
    ),
]
