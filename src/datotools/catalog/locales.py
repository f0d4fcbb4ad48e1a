"""Locales domain: the ordered locale list of the project.

Locales are not standalone resources; they are the ``locales`` attribute
of the site, primary locale first. Every change rewrites that list.
DatoCMS stores no display name for a locale, so its code stands in.
"""

from __future__ import annotations

from typing import Any

from pydantic import Field

from datotools.catalog.common import as_list, message
from datotools.domain.errors import (
    ArgumentValidationError,
    ResourceNotFoundError,
    ValidationIssue,
)
from datotools.services.contracts import OperationContract, ReadContract, identifier
from datotools.services.factory import OperationConfig, Variant

DOMAIN = "locales"
ENTITY = "Locale"

LOCALE_CODE_PATTERN = r"^[a-z]{2}(-[A-Z]{2})?(-[A-Za-z]{4})?$"


def _current(session: Any) -> list[str]:
    return list(session.find_site().get("locales") or [])


def _rejected(path: str, text: str) -> ArgumentValidationError:
    return ArgumentValidationError(text, [ValidationIssue(path=path, message=text)])


class ListLocales(ReadContract):
    pass


class GetLocale(ReadContract):
    locale_id: str = identifier("Locale code, e.g. en or pt-BR.")


class CreateLocale(OperationContract):
    name: str = Field(min_length=1, description="Human-readable name, e.g. English.")
    code: str = Field(
        pattern=LOCALE_CODE_PATTERN,
        description="Locale code in the form xx, xx-XX or xx-Xxxx (en, en-US, zh-Hans).",
    )


class DeleteLocale(OperationContract):
    locale_id: str = identifier("Locale code to remove.")


class ReorderLocales(OperationContract):
    locale_ids: list[str] = Field(
        min_length=1, description="Every current locale code, in the new order."
    )


def _list(session: Any, args: ListLocales) -> list[dict[str, str]]:
    return [{"code": code, "name": code} for code in _current(session)]


def _get(session: Any, args: GetLocale) -> dict[str, str] | None:
    if args.locale_id not in _current(session):
        return None
    return {"code": args.locale_id, "name": args.locale_id}


def _create(session: Any, args: CreateLocale) -> dict[str, Any]:
    locales = _current(session)
    if args.code in locales:
        raise _rejected("code", f"Locale {args.code} already exists in this project.")
    session.update_site({"locales": [*locales, args.code]})
    return {"code": args.code, "name": args.name, "added": True}


def _delete(session: Any, args: DeleteLocale) -> None:
    locales = _current(session)
    code = args.locale_id
    if code not in locales:
        raise ResourceNotFoundError(ENTITY, code)
    if len(locales) == 1:
        raise _rejected("localeId", "Cannot delete the only locale of the project.")
    if locales[0] == code:
        raise _rejected("localeId", f"Cannot delete the primary locale {code}.")
    session.update_site({"locales": [c for c in locales if c != code]})


def _reorder(session: Any, args: ReorderLocales) -> dict[str, Any]:
    locales = _current(session)
    wanted = args.locale_ids
    if len(set(wanted)) != len(wanted) or set(wanted) != set(locales):
        raise _rejected(
            "localeIds",
            f"localeIds must list each current locale exactly once: {', '.join(locales)}.",
        )
    session.update_site({"locales": list(wanted)})
    return {"locales": list(wanted)}


OPERATIONS = [
    OperationConfig("list", ListLocales, _list, Variant.LIST, ENTITY, transform=as_list),
    OperationConfig("get", GetLocale, _get, Variant.RETRIEVE, ENTITY, id_field="locale_id"),
    OperationConfig("create", CreateLocale, _create, Variant.CREATE, ENTITY),
    OperationConfig(
        "delete",
        DeleteLocale,
        _delete,
        Variant.DELETE,
        ENTITY,
        id_field="locale_id",
        transform=message("Locale {locale_id} removed."),
    ),
    OperationConfig("reorder", ReorderLocales, _reorder, Variant.UPDATE, ENTITY),
]
