"""Schema domain: models (item types), fieldsets and fields."""

from __future__ import annotations

from typing import Any, ClassVar, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from datotools.catalog.common import API_KEY_PATTERN, as_list, page_query
from datotools.services.contracts import (
    ListContract,
    OperationContract,
    ReadContract,
    identifier,
)
from datotools.services.factory import OperationConfig, Variant

DOMAIN = "schema"

FieldType = Literal[
    "boolean",
    "color",
    "date",
    "date_time",
    "file",
    "float",
    "gallery",
    "integer",
    "json",
    "lat_lon",
    "link",
    "links",
    "rich_text",
    "seo",
    "single_block",
    "slug",
    "string",
    "structured_text",
    "text",
    "video",
]

_ITEM_TYPE_ATTRIBUTES = (
    "name",
    "api_key",
    "all_locales_required",
    "draft_mode_active",
    "modular_block",
    "ordering_direction",
    "ordering_field",
    "singleton",
    "sortable",
    "title_field",
    "tree",
    "hint",
)
_FIELDSET_ATTRIBUTES = ("title", "hint", "position", "collapsible", "start_collapsed")
_FIELD_ATTRIBUTES = (
    "label",
    "api_key",
    "field_type",
    "validators",
    "appearance",
    "position",
    "hint",
    "localized",
    "default_value",
)


def _set_attributes(args: BaseModel, names: tuple[str, ...]) -> dict[str, Any]:
    """Attributes the caller actually supplied, in wire (snake_case) form."""
    return args.model_dump(include=set(names), exclude_unset=True)


class _RequiresUpdate(OperationContract):
    """Update contract that rejects calls changing nothing."""

    updatable_fields: ClassVar[tuple[str, ...]] = ()

    @model_validator(mode="after")
    def _something_to_update(self) -> _RequiresUpdate:
        if not self.model_fields_set & set(self.updatable_fields):
            raise ValueError("At least one updatable field must be provided.")
        return self


# ── Item types ───────────────────────────────────────────────────────


class CreateItemType(OperationContract):
    name: str = Field(min_length=1, description="Name of the model.")
    api_key: str = Field(pattern=API_KEY_PATTERN, description="Machine name of the model.")
    all_locales_required: bool = False
    draft_mode_active: bool = True
    modular_block: bool = Field(default=False, description="Create a block model.")
    ordering_direction: Literal["asc", "desc"] | None = None
    ordering_field: str | None = None
    singleton: bool = False
    sortable: bool = False
    title_field: str | None = None
    tree: bool = False
    hint: str | None = None


class ItemTypeTarget(OperationContract):
    item_type_id: str = identifier("ID of the model.")


class RetrieveItemType(ReadContract):
    item_type_id: str = identifier("ID of the model.")


class ListItemTypes(ListContract):
    pass


class UpdateItemType(_RequiresUpdate):
    updatable_fields = _ITEM_TYPE_ATTRIBUTES

    item_type_id: str = identifier("ID of the model.")
    name: str | None = Field(default=None, min_length=1)
    api_key: str | None = Field(default=None, pattern=API_KEY_PATTERN)
    all_locales_required: bool | None = None
    draft_mode_active: bool | None = None
    modular_block: bool | None = None
    ordering_direction: Literal["asc", "desc"] | None = None
    ordering_field: str | None = None
    singleton: bool | None = None
    sortable: bool | None = None
    title_field: str | None = None
    tree: bool | None = None
    hint: str | None = None


def _create_item_type(session: Any, args: CreateItemType) -> Any:
    attributes = args.model_dump(include=set(_ITEM_TYPE_ATTRIBUTES), exclude_none=True)
    return session.create_item_type(attributes)


def _update_item_type(session: Any, args: UpdateItemType) -> Any:
    return session.update_item_type(
        args.item_type_id, _set_attributes(args, _ITEM_TYPE_ATTRIBUTES)
    )


# ── Fieldsets ────────────────────────────────────────────────────────


class CreateFieldset(OperationContract):
    item_type_id: str = identifier("Model the fieldset belongs to.")
    title: str = Field(min_length=1)
    hint: str | None = None
    position: int | None = Field(default=None, ge=0)
    collapsible: bool = False
    start_collapsed: bool = False


class FieldsetTarget(OperationContract):
    fieldset_id: str = identifier("ID of the fieldset.")


class RetrieveFieldset(ReadContract):
    fieldset_id: str = identifier("ID of the fieldset.")


class ListFieldsets(ReadContract):
    item_type_id: str = identifier("Model whose fieldsets to list.")


class UpdateFieldset(_RequiresUpdate):
    updatable_fields = _FIELDSET_ATTRIBUTES

    fieldset_id: str = identifier("ID of the fieldset.")
    title: str | None = Field(default=None, min_length=1)
    hint: str | None = None
    position: int | None = Field(default=None, ge=0)
    collapsible: bool | None = None
    start_collapsed: bool | None = None


def _create_fieldset(session: Any, args: CreateFieldset) -> Any:
    attributes = args.model_dump(include=set(_FIELDSET_ATTRIBUTES), exclude_none=True)
    return session.create_fieldset(args.item_type_id, attributes)


def _update_fieldset(session: Any, args: UpdateFieldset) -> Any:
    return session.update_fieldset(args.fieldset_id, _set_attributes(args, _FIELDSET_ATTRIBUTES))


# ── Fields ───────────────────────────────────────────────────────────


class FieldAppearance(BaseModel):
    model_config = ConfigDict(extra="allow", frozen=True)

    editor: str = Field(min_length=1)
    parameters: dict[str, Any] = Field(default_factory=dict)
    addons: list[dict[str, Any]] = Field(default_factory=list)


class CreateField(OperationContract):
    item_type_id: str = identifier("Model the field belongs to.")
    label: str = Field(min_length=1)
    api_key: str = Field(pattern=API_KEY_PATTERN)
    field_type: FieldType
    validators: dict[str, Any] = Field(default_factory=dict)
    appearance: FieldAppearance | None = None
    position: int | None = Field(default=None, ge=0)
    hint: str | None = None
    localized: bool = False
    default_value: Any = None
    fieldset_id: str | None = None


class FieldTarget(OperationContract):
    field_id: str = identifier("ID of the field.")


class RetrieveField(ReadContract):
    field_id: str = identifier("ID of the field.")


class ListFields(ReadContract):
    item_type_id: str = identifier("Model whose fields to list.")


class UpdateField(_RequiresUpdate):
    updatable_fields = (*_FIELD_ATTRIBUTES, "fieldset_id")

    field_id: str = identifier("ID of the field.")
    label: str | None = Field(default=None, min_length=1)
    api_key: str | None = Field(default=None, pattern=API_KEY_PATTERN)
    field_type: FieldType | None = None
    validators: dict[str, Any] | None = None
    appearance: FieldAppearance | None = None
    position: int | None = Field(default=None, ge=0)
    hint: str | None = None
    localized: bool | None = None
    default_value: Any = None
    fieldset_id: str | None = None


def _create_field(session: Any, args: CreateField) -> Any:
    attributes = args.model_dump(include=set(_FIELD_ATTRIBUTES), exclude_none=True)
    return session.create_field(args.item_type_id, attributes, args.fieldset_id)


def _update_field(session: Any, args: UpdateField) -> Any:
    return session.update_field(
        args.field_id, _set_attributes(args, _FIELD_ATTRIBUTES), args.fieldset_id
    )


OPERATIONS = [
    OperationConfig("create_item_type", CreateItemType, _create_item_type, Variant.CREATE, "Model"),
    OperationConfig(
        "duplicate_item_type",
        ItemTypeTarget,
        lambda s, a: s.duplicate_item_type(a.item_type_id),
        Variant.CREATE,
        "Model",
        id_field="item_type_id",
    ),
    OperationConfig(
        "retrieve_item_type",
        RetrieveItemType,
        lambda s, a: s.find_item_type(a.item_type_id),
        Variant.RETRIEVE,
        "Model",
        id_field="item_type_id",
    ),
    OperationConfig(
        "list_item_types",
        ListItemTypes,
        lambda s, a: s.list_item_types(page_query(a)),
        Variant.LIST,
        "Model",
        transform=as_list,
    ),
    OperationConfig(
        "update_item_type",
        UpdateItemType,
        _update_item_type,
        Variant.UPDATE,
        "Model",
        id_field="item_type_id",
    ),
    OperationConfig(
        "destroy_item_type",
        ItemTypeTarget,
        lambda s, a: s.destroy_item_type(a.item_type_id),
        Variant.DELETE,
        "Model",
        id_field="item_type_id",
        success_message="Model deleted.",
    ),
    OperationConfig(
        "create_fieldset", CreateFieldset, _create_fieldset, Variant.CREATE, "Fieldset"
    ),
    OperationConfig(
        "update_fieldset",
        UpdateFieldset,
        _update_fieldset,
        Variant.UPDATE,
        "Fieldset",
        id_field="fieldset_id",
    ),
    OperationConfig(
        "list_fieldsets",
        ListFieldsets,
        lambda s, a: s.list_fieldsets(a.item_type_id),
        Variant.LIST,
        "Fieldset",
        id_field="item_type_id",
        transform=as_list,
    ),
    OperationConfig(
        "retrieve_fieldset",
        RetrieveFieldset,
        lambda s, a: s.find_fieldset(a.fieldset_id),
        Variant.RETRIEVE,
        "Fieldset",
        id_field="fieldset_id",
    ),
    OperationConfig(
        "destroy_fieldset",
        FieldsetTarget,
        lambda s, a: s.destroy_fieldset(a.fieldset_id),
        Variant.DELETE,
        "Fieldset",
        id_field="fieldset_id",
        success_message="Fieldset deleted.",
    ),
    OperationConfig("create_field", CreateField, _create_field, Variant.CREATE, "Field"),
    OperationConfig(
        "update_field", UpdateField, _update_field, Variant.UPDATE, "Field", id_field="field_id"
    ),
    OperationConfig(
        "retrieve_field",
        RetrieveField,
        lambda s, a: s.find_field(a.field_id),
        Variant.RETRIEVE,
        "Field",
        id_field="field_id",
    ),
    OperationConfig(
        "list_fields",
        ListFields,
        lambda s, a: s.list_fields(a.item_type_id),
        Variant.LIST,
        "Field",
        id_field="item_type_id",
        transform=as_list,
    ),
    OperationConfig(
        "destroy_field",
        FieldTarget,
        lambda s, a: s.destroy_field(a.field_id),
        Variant.DELETE,
        "Field",
        id_field="field_id",
        success_message="Field deleted.",
    ),
]
