"""UI domain: navigation menus, schema menu, saved filters and plugins."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from datotools.catalog.common import as_list, message, page_query, supplied
from datotools.domain.errors import ArgumentValidationError, ValidationIssue
from datotools.services.contracts import (
    ListContract,
    OperationContract,
    ReadContract,
    identifier,
)
from datotools.services.factory import OperationConfig, Variant

DOMAIN = "ui"

SchemaMenuKind = Literal[
    "general_group", "models_group", "block_models_group", "model", "plugin", "custom_page"
]

_MENU_ATTRIBUTES = ("label", "position", "external_url", "open_in_new_tab")
_MENU_RELATIONS = {
    "parent_id": "parent",
    "item_type_id": "item_type",
    "item_type_filter_id": "item_type_filter",
}
_SCHEMA_MENU_ATTRIBUTES = ("label", "position", "kind")
_SCHEMA_MENU_RELATIONS = {"parent_id": "parent", "item_type_id": "item_type"}
_UPLOAD_FILTER_ATTRIBUTES = ("name", "payload", "shared")
_MODEL_FILTER_ATTRIBUTES = ("name", "filter", "columns", "order_by", "shared")
_PLUGIN_ATTRIBUTES = (
    "name",
    "description",
    "url",
    "parameters",
    "package_name",
    "package_version",
    "permissions",
)


def _relations(args: BaseModel, names: dict[str, str]) -> dict[str, Any]:
    """Relationship ids keyed by relationship name, for the fields the caller set."""
    return {
        rel: getattr(args, field) for field, rel in names.items() if field in args.model_fields_set
    }


def _require_update(args: BaseModel, names: tuple[str, ...] | set[str]) -> None:
    if not args.model_fields_set & set(names):
        raise ValueError("At least one updatable field must be provided.")


# ── Menu items ───────────────────────────────────────────────────────


class ListMenuItems(ListContract):
    pass


class RetrieveMenuItem(ReadContract):
    menu_item_id: str = identifier("ID of the menu item.")


class CreateMenuItem(OperationContract):
    label: str = Field(min_length=1)
    position: int | None = Field(default=None, ge=0, description="Order among siblings.")
    external_url: str | None = None
    open_in_new_tab: bool = False
    parent_id: str | None = None
    item_type_id: str | None = Field(default=None, description="Model the item links to.")
    item_type_filter_id: str | None = Field(
        default=None, description="Saved model filter applied to the linked model."
    )


class UpdateMenuItem(OperationContract):
    menu_item_id: str = identifier("ID of the menu item.")
    label: str | None = Field(default=None, min_length=1)
    position: int | None = Field(default=None, ge=0)
    external_url: str | None = None
    open_in_new_tab: bool | None = None
    parent_id: str | None = None
    item_type_id: str | None = None
    item_type_filter_id: str | None = None

    @model_validator(mode="after")
    def _something_to_update(self) -> UpdateMenuItem:
        _require_update(self, {*_MENU_ATTRIBUTES, *_MENU_RELATIONS})
        return self


class DeleteMenuItem(OperationContract):
    menu_item_id: str = identifier("ID of the menu item.")
    force: bool = Field(default=False, description="Also delete the item's children.")


def _create_menu_item(session: Any, args: CreateMenuItem) -> Any:
    relationships = {
        rel: getattr(args, field)
        for field, rel in _MENU_RELATIONS.items()
        if getattr(args, field) is not None
    }
    return session.create_menu_item(
        args.model_dump(include=set(_MENU_ATTRIBUTES)), relationships
    )


def _children(items: list[dict[str, Any]], parent_id: str) -> list[str]:
    return [
        item["id"]
        for item in items
        if isinstance(item.get("parent"), dict) and item["parent"].get("id") == parent_id
    ]


def _delete_menu_item(session: Any, args: DeleteMenuItem) -> None:
    items = list(session.list_menu_items({}) or [])
    children = _children(items, args.menu_item_id)
    if children and not args.force:
        text = (
            f"Menu item {args.menu_item_id} has children; set force to true to delete "
            "it together with its children."
        )
        raise ArgumentValidationError(text, [ValidationIssue(path="force", message=text)])
    # Descendants go before their parents.
    pending, ordered = list(children), []
    while pending:
        child = pending.pop()
        ordered.append(child)
        pending.extend(_children(items, child))
    for child in reversed(ordered):
        session.destroy_menu_item(child)
    session.destroy_menu_item(args.menu_item_id)


# ── Schema menu items ────────────────────────────────────────────────


class ListSchemaMenuItems(ListContract):
    pass


class RetrieveSchemaMenuItem(ReadContract):
    schema_menu_item_id: str = identifier("ID of the schema menu item.")


class SchemaMenuItemTarget(OperationContract):
    schema_menu_item_id: str = identifier("ID of the schema menu item.")


class CreateSchemaMenuItem(OperationContract):
    label: str = Field(min_length=1)
    kind: SchemaMenuKind
    position: int | None = Field(default=None, ge=0)
    parent_id: str | None = None
    item_type_id: str | None = Field(default=None, description="Model linked when kind=model.")

    @model_validator(mode="after")
    def _model_needs_item_type(self) -> CreateSchemaMenuItem:
        if self.kind == "model" and not self.item_type_id:
            raise ValueError("itemTypeId is required when kind is 'model'.")
        return self


class UpdateSchemaMenuItem(SchemaMenuItemTarget):
    label: str | None = Field(default=None, min_length=1)
    kind: SchemaMenuKind | None = None
    position: int | None = Field(default=None, ge=0)
    parent_id: str | None = None
    item_type_id: str | None = None

    @model_validator(mode="after")
    def _something_to_update(self) -> UpdateSchemaMenuItem:
        _require_update(self, {*_SCHEMA_MENU_ATTRIBUTES, *_SCHEMA_MENU_RELATIONS})
        return self


def _create_schema_menu_item(session: Any, args: CreateSchemaMenuItem) -> Any:
    relationships = {
        rel: getattr(args, field)
        for field, rel in _SCHEMA_MENU_RELATIONS.items()
        if getattr(args, field) is not None
    }
    return session.create_schema_menu_item(
        args.model_dump(include=set(_SCHEMA_MENU_ATTRIBUTES)), relationships
    )


# ── Uploads filters ──────────────────────────────────────────────────


class ListUploadsFilters(ReadContract):
    pass


class RetrieveUploadsFilter(ReadContract):
    uploads_filter_id: str = identifier("ID of the uploads filter.")


class UploadsFilterTarget(OperationContract):
    uploads_filter_id: str = identifier("ID of the uploads filter.")


class CreateUploadsFilter(OperationContract):
    name: str = Field(min_length=1)
    payload: dict[str, Any] = Field(description="Saved media-area filter conditions.")
    shared: bool = False


class UpdateUploadsFilter(UploadsFilterTarget):
    name: str | None = Field(default=None, min_length=1)
    payload: dict[str, Any] | None = None
    shared: bool | None = None

    @model_validator(mode="after")
    def _something_to_update(self) -> UpdateUploadsFilter:
        _require_update(self, _UPLOAD_FILTER_ATTRIBUTES)
        return self


# ── Model filters ────────────────────────────────────────────────────


class FilterColumn(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(min_length=1)
    width: float = Field(gt=0, le=1, description="Share of the table width.")


class FilterQuery(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    query: str | None = None
    fields: dict[str, Any] | None = None


class ListModelFilters(ReadContract):
    pass


class RetrieveModelFilter(ReadContract):
    model_filter_id: str = identifier("ID of the model filter.")


class ModelFilterTarget(OperationContract):
    model_filter_id: str = identifier("ID of the model filter.")


class CreateModelFilter(OperationContract):
    name: str = Field(min_length=1)
    item_type: str = identifier("Model the filter applies to.")
    filter: FilterQuery | None = None
    columns: list[FilterColumn] | None = None
    order_by: str | None = Field(default=None, description="e.g. _updated_at_DESC")
    shared: bool = False


class UpdateModelFilter(ModelFilterTarget):
    name: str | None = Field(default=None, min_length=1)
    filter: FilterQuery | None = None
    columns: list[FilterColumn] | None = None
    order_by: str | None = None
    shared: bool | None = None

    @model_validator(mode="after")
    def _something_to_update(self) -> UpdateModelFilter:
        _require_update(self, _MODEL_FILTER_ATTRIBUTES)
        return self


def _create_model_filter(session: Any, args: CreateModelFilter) -> Any:
    attributes = args.model_dump(include=set(_MODEL_FILTER_ATTRIBUTES), exclude_none=True)
    return session.create_item_type_filter(args.item_type, attributes)


# ── Plugins ──────────────────────────────────────────────────────────


class ListPlugins(ListContract):
    pass


class RetrievePlugin(ReadContract):
    plugin_id: str = identifier("ID of the plugin.")


class PluginTarget(OperationContract):
    plugin_id: str = identifier("ID of the plugin.")


class CreatePlugin(OperationContract):
    name: str = Field(min_length=1)
    url: str = Field(min_length=1, description="Entry point of the plugin.")
    description: str | None = None
    parameters: dict[str, Any] | None = None
    package_name: str | None = Field(default=None, description="npm package of the plugin.")
    package_version: str | None = None
    permissions: list[str] | None = None


class UpdatePlugin(PluginTarget):
    name: str | None = Field(default=None, min_length=1)
    url: str | None = Field(default=None, min_length=1)
    description: str | None = None
    parameters: dict[str, Any] | None = None
    package_name: str | None = None
    package_version: str | None = None
    permissions: list[str] | None = None

    @model_validator(mode="after")
    def _something_to_update(self) -> UpdatePlugin:
        _require_update(self, _PLUGIN_ATTRIBUTES)
        return self


OPERATIONS = [
    OperationConfig(
        "menu_item_list",
        ListMenuItems,
        lambda s, a: s.list_menu_items(page_query(a)),
        Variant.LIST,
        "Menu item",
        transform=as_list,
    ),
    OperationConfig(
        "menu_item_retrieve",
        RetrieveMenuItem,
        lambda s, a: s.find_menu_item(a.menu_item_id),
        Variant.RETRIEVE,
        "Menu item",
        id_field="menu_item_id",
    ),
    OperationConfig(
        "menu_item_create", CreateMenuItem, _create_menu_item, Variant.CREATE, "Menu item"
    ),
    OperationConfig(
        "menu_item_update",
        UpdateMenuItem,
        lambda s, a: s.update_menu_item(
            a.menu_item_id, supplied(a, _MENU_ATTRIBUTES), _relations(a, _MENU_RELATIONS)
        ),
        Variant.UPDATE,
        "Menu item",
        id_field="menu_item_id",
    ),
    OperationConfig(
        "menu_item_delete",
        DeleteMenuItem,
        _delete_menu_item,
        Variant.DELETE,
        "Menu item",
        id_field="menu_item_id",
        transform=message("Menu item {menu_item_id} deleted."),
    ),
    OperationConfig(
        "schema_menu_item_list",
        ListSchemaMenuItems,
        lambda s, a: s.list_schema_menu_items(page_query(a)),
        Variant.LIST,
        "Schema menu item",
        transform=as_list,
    ),
    OperationConfig(
        "schema_menu_item_retrieve",
        RetrieveSchemaMenuItem,
        lambda s, a: s.find_schema_menu_item(a.schema_menu_item_id),
        Variant.RETRIEVE,
        "Schema menu item",
        id_field="schema_menu_item_id",
    ),
    OperationConfig(
        "schema_menu_item_create",
        CreateSchemaMenuItem,
        _create_schema_menu_item,
        Variant.CREATE,
        "Schema menu item",
    ),
    OperationConfig(
        "schema_menu_item_update",
        UpdateSchemaMenuItem,
        lambda s, a: s.update_schema_menu_item(
            a.schema_menu_item_id,
            supplied(a, _SCHEMA_MENU_ATTRIBUTES),
            _relations(a, _SCHEMA_MENU_RELATIONS),
        ),
        Variant.UPDATE,
        "Schema menu item",
        id_field="schema_menu_item_id",
    ),
    OperationConfig(
        "schema_menu_item_delete",
        SchemaMenuItemTarget,
        lambda s, a: s.destroy_schema_menu_item(a.schema_menu_item_id),
        Variant.DELETE,
        "Schema menu item",
        id_field="schema_menu_item_id",
        success_message="Schema menu item deleted.",
    ),
    OperationConfig(
        "uploads_filter_list",
        ListUploadsFilters,
        lambda s, a: s.list_upload_filters(),
        Variant.LIST,
        "Uploads filter",
        transform=as_list,
    ),
    OperationConfig(
        "uploads_filter_retrieve",
        RetrieveUploadsFilter,
        lambda s, a: s.find_upload_filter(a.uploads_filter_id),
        Variant.RETRIEVE,
        "Uploads filter",
        id_field="uploads_filter_id",
    ),
    OperationConfig(
        "uploads_filter_create",
        CreateUploadsFilter,
        lambda s, a: s.create_upload_filter(a.model_dump(include=set(_UPLOAD_FILTER_ATTRIBUTES))),
        Variant.CREATE,
        "Uploads filter",
    ),
    OperationConfig(
        "uploads_filter_update",
        UpdateUploadsFilter,
        lambda s, a: s.update_upload_filter(
            a.uploads_filter_id, supplied(a, _UPLOAD_FILTER_ATTRIBUTES)
        ),
        Variant.UPDATE,
        "Uploads filter",
        id_field="uploads_filter_id",
    ),
    OperationConfig(
        "uploads_filter_delete",
        UploadsFilterTarget,
        lambda s, a: s.destroy_upload_filter(a.uploads_filter_id),
        Variant.DELETE,
        "Uploads filter",
        id_field="uploads_filter_id",
        success_message="Uploads filter deleted.",
    ),
    OperationConfig(
        "model_filter_list",
        ListModelFilters,
        lambda s, a: s.list_item_type_filters(),
        Variant.LIST,
        "Model filter",
        transform=as_list,
    ),
    OperationConfig(
        "model_filter_retrieve",
        RetrieveModelFilter,
        lambda s, a: s.find_item_type_filter(a.model_filter_id),
        Variant.RETRIEVE,
        "Model filter",
        id_field="model_filter_id",
    ),
    OperationConfig(
        "model_filter_create",
        CreateModelFilter,
        _create_model_filter,
        Variant.CREATE,
        "Model filter",
    ),
    OperationConfig(
        "model_filter_update",
        UpdateModelFilter,
        lambda s, a: s.update_item_type_filter(
            a.model_filter_id, supplied(a, _MODEL_FILTER_ATTRIBUTES)
        ),
        Variant.UPDATE,
        "Model filter",
        id_field="model_filter_id",
    ),
    OperationConfig(
        "model_filter_delete",
        ModelFilterTarget,
        lambda s, a: s.destroy_item_type_filter(a.model_filter_id),
        Variant.DELETE,
        "Model filter",
        id_field="model_filter_id",
        success_message="Model filter deleted.",
    ),
    OperationConfig(
        "plugin_list",
        ListPlugins,
        lambda s, a: s.list_plugins(page_query(a)),
        Variant.LIST,
        "Plugin",
        transform=as_list,
    ),
    OperationConfig(
        "plugin_retrieve",
        RetrievePlugin,
        lambda s, a: s.find_plugin(a.plugin_id),
        Variant.RETRIEVE,
        "Plugin",
        id_field="plugin_id",
    ),
    OperationConfig(
        "plugin_create",
        CreatePlugin,
        lambda s, a: s.create_plugin(a.model_dump(include=set(_PLUGIN_ATTRIBUTES))),
        Variant.CREATE,
        "Plugin",
    ),
    OperationConfig(
        "plugin_update",
        UpdatePlugin,
        lambda s, a: s.update_plugin(a.plugin_id, supplied(a, _PLUGIN_ATTRIBUTES)),
        Variant.UPDATE,
        "Plugin",
        id_field="plugin_id",
    ),
    OperationConfig(
        "plugin_delete",
        PluginTarget,
        lambda s, a: s.destroy_plugin(a.plugin_id),
        Variant.DELETE,
        "Plugin",
        id_field="plugin_id",
        success_message="Plugin deleted.",
    ),
]
