"""Shared contract fields and result shaping for the operation catalogue."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field

from datotools.services.contracts import ListContract, OperationContract, Pagination

ORDER_BY_PATTERN = r"^[a-zA-Z0-9_]+_(ASC|DESC)$"
API_KEY_PATTERN = r"^[a-z][a-z0-9_]*$"
ENVIRONMENT_ID_PATTERN = r"^[a-z0-9-]+$"
ISO_TIMESTAMP_PATTERN = r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d+)?(Z|[+-]\d{2}:\d{2})$"

Version = Literal["current", "published"]
ReferenceVersion = Literal["current", "published", "published-or-current"]


def confirmation_flag() -> Any:
    return Field(
        default=False,
        description="Return only a confirmation message instead of the resource.",
    )


def split_ids(value: str | list[str] | None) -> list[str] | None:
    """Accept ``"a,b"`` or ``["a", "b"]``; drop blanks."""
    if value is None:
        return None
    parts = value.split(",") if isinstance(value, str) else value
    ids = [p.strip() for p in parts if p and p.strip()]
    return ids or None


def supplied(args: BaseModel, names: tuple[str, ...]) -> dict[str, Any]:
    """Attributes among *names* the caller actually set, JSON-ready."""
    return args.model_dump(include=set(names), exclude_unset=True, mode="json")


def page_query(args: ListContract) -> dict[str, Any]:
    page = args.pagination
    return {"page": {"offset": page.offset, "limit": page.limit}}


def pagination_info(items: list[Any], page: Pagination) -> dict[str, Any]:
    """Page summary; without a reported total, a full page implies more may follow."""
    full_page = len(items) == page.limit
    total = getattr(items, "total_count", None)
    if total is None:
        total, has_more = page.offset + len(items), full_page
    else:
        has_more = full_page and page.offset + len(items) < total
    return {"limit": page.limit, "offset": page.offset, "total": total, "has_more": has_more}


def as_list(result: Any, args: OperationContract) -> dict[str, Any]:
    """Shape a collection as ``{count, items[, pagination]}``.

    ``returnOnlyIds`` replaces every item with its id.
    """
    items = list(result or [])
    if getattr(args, "return_only_ids", False):
        items_out: list[Any] = [item.get("id") for item in items if isinstance(item, dict)]
    else:
        items_out = items
    shaped: dict[str, Any] = {"count": len(items_out), "items": items_out}
    if isinstance(args, ListContract):
        shaped["pagination"] = pagination_info(result or [], args.pagination)
    return shaped


def confirm(message: str):
    """Transform honouring ``returnOnlyConfirmation``."""

    def transform(result: Any, args: OperationContract) -> Any:
        if getattr(args, "return_only_confirmation", False) or result is None:
            return {"message": message.format(**_format_args(args))}
        return result

    return transform


def message(text: str, *, count_field: str | None = None):
    """Transform replacing the result with a confirmation message.

    *text* may reference argument names and, with *count_field*, ``{count}``.
    """

    def transform(result: Any, args: OperationContract) -> Any:
        values = _format_args(args)
        if count_field is not None:
            values["count"] = len(getattr(args, count_field) or [])
        payload: dict[str, Any] = {"message": text.format(**values)}
        if result not in (None, {}, []):
            payload["result"] = result
        return payload

    return transform


def _format_args(args: OperationContract) -> dict[str, Any]:
    return {k: v for k, v in args.model_dump().items() if k != "api_token"}

