"""Operation contracts: pydantic models validating tool arguments.

Every contract derives from ``OperationContract``, which carries the
mandatory ``apiToken`` and the optional ``environment``. Argument keys on
the wire are camelCase; attributes are snake_case.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

MAX_PAGE_LIMIT = 500
DEFAULT_PAGE_LIMIT = 100
BULK_LIMIT = 200


class OperationContract(BaseModel):
    """Base contract shared by every operation."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
        protected_namespaces=(),
        coerce_numbers_to_str=True,
    )

    api_token: str = Field(min_length=1, description="DatoCMS API token.")
    environment: str | None = Field(
        default=None,
        description="Target environment. Omit for the primary environment.",
    )

    def wire(self) -> dict[str, Any]:
        """Dump back to the camelCase wire shape (re-validates identically)."""
        return self.model_dump(by_alias=True, exclude_none=True)


class ReadContract(OperationContract):
    """Contract of an operation whose result may carry locale maps."""

    return_all_locales: bool = Field(
        default=False,
        description="Return every locale of localized fields instead of one value.",
    )


class Pagination(BaseModel):
    """``page`` argument of list operations."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    offset: int = Field(default=0, ge=0)
    limit: int = Field(default=DEFAULT_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT)


class ListContract(ReadContract):
    """Read contract with optional pagination."""

    page: Pagination | None = None

    @property
    def pagination(self) -> Pagination:
        return self.page or Pagination()


def identifier(description: str) -> Any:
    """Field definition of a required, non-blank identifier."""
    return Field(min_length=1, description=description)


def id_list(description: str) -> Any:
    """Field definition of a bulk identifier list.

    Only non-emptiness is enforced here; the per-call cap is a policy
    check applied by the handler so it reports ``BulkLimitExceeded``.
    """
    return Field(min_length=1, description=f"{description} (at most {BULK_LIMIT} per call).")
