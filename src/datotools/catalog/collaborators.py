"""Collaborators domain: invitations, users, roles and API tokens.

A role may be given as a preset name (``editor``), a numeric role ID, or a
``{"id": ..., "type": "role"}`` reference. Preset names are resolved
against the roles of the project, matching names case-insensitively.
"""

from __future__ import annotations

import re
from typing import Annotated, Any, Literal

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, model_validator

from datotools.catalog.common import as_list, message, supplied
from datotools.domain.errors import ResourceNotFoundError
from datotools.services.contracts import OperationContract, ReadContract, identifier
from datotools.services.factory import OperationConfig, Variant

DOMAIN = "collaborators"

PRESET_ROLES = ("admin", "editor", "developer", "seo", "contributor")
ROLE_ID_PATTERN = r"^[0-9]+$"
EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"

_ROLE_PERMISSIONS = (
    "can_edit_schema",
    "can_edit_others_content",
    "can_publish_content",
    "can_edit_favicon",
    "can_access_environments",
    "can_perform_site_search",
    "can_edit_site_entity",
)
_ROLE_ATTRIBUTES = ("name", *_ROLE_PERMISSIONS)
_TOKEN_ATTRIBUTES = ("name", "can_access_cda", "can_access_cda_preview", "can_access_cma")
_USER_ATTRIBUTES = ("email", "first_name", "last_name")


class RoleRef(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str = Field(min_length=1)
    type: Literal["role"] = "role"


def _check_role(value: Any) -> Any:
    if isinstance(value, str) and value not in PRESET_ROLES:
        if not re.fullmatch(ROLE_ID_PATTERN, value):
            raise ValueError(
                f"role must be one of {', '.join(PRESET_ROLES)}, a numeric role ID, "
                'or {"id": ..., "type": "role"}'
            )
    return value


RoleSpec = Annotated[str | RoleRef, AfterValidator(_check_role)]


def resolve_role(session: Any, role: RoleSpec) -> str:
    """Role ID for *role*; preset names are looked up among the project roles."""
    if isinstance(role, RoleRef):
        return role.id
    if role not in PRESET_ROLES:
        return role
    for candidate in session.list_roles() or []:
        if str(candidate.get("name", "")).lower() == role:
            return candidate["id"]
    raise ResourceNotFoundError("Role", role)


# ── Invitations ──────────────────────────────────────────────────────


class ListInvitations(ReadContract):
    pass


class RetrieveInvitation(ReadContract):
    invitation_id: str = identifier("ID of the invitation.")


class InvitationTarget(OperationContract):
    invitation_id: str = identifier("ID of the invitation.")


class CreateInvitation(OperationContract):
    email: str = Field(pattern=EMAIL_PATTERN, description="Address the invitation is sent to.")
    role: RoleSpec = Field(description="Preset role name, numeric role ID or role reference.")


def _create_invitation(session: Any, args: CreateInvitation) -> Any:
    return session.create_invitation(args.email, resolve_role(session, args.role))


# ── Users ────────────────────────────────────────────────────────────


class ListUsers(ReadContract):
    pass


class RetrieveUser(ReadContract):
    user_id: str = identifier("ID of the collaborator.")


class UserTarget(OperationContract):
    user_id: str = identifier("ID of the collaborator.")


class UpdateUser(UserTarget):
    email: str | None = Field(default=None, pattern=EMAIL_PATTERN)
    first_name: str | None = None
    last_name: str | None = None
    role_id: str | None = Field(default=None, pattern=ROLE_ID_PATTERN)

    @model_validator(mode="after")
    def _something_to_update(self) -> UpdateUser:
        if not self.model_fields_set & {*_USER_ATTRIBUTES, "role_id"}:
            raise ValueError("At least one updatable field must be provided.")
        return self


class InviteUser(OperationContract):
    email: str = Field(pattern=EMAIL_PATTERN, description="Address the invitation is sent to.")
    role_id: str = Field(pattern=ROLE_ID_PATTERN, description="Role given to the new user.")


# ── Roles ────────────────────────────────────────────────────────────


class ListRoles(ReadContract):
    pass


class RetrieveRole(ReadContract):
    role_id: str = identifier("ID of the role.")


class RoleTarget(OperationContract):
    role_id: str = identifier("ID of the role.")


class CreateRole(OperationContract):
    name: str = Field(min_length=1)
    can_edit_schema: bool | None = None
    can_edit_others_content: bool | None = None
    can_publish_content: bool | None = None
    can_edit_favicon: bool | None = None
    can_access_environments: bool | None = None
    can_perform_site_search: bool | None = None
    can_edit_site_entity: bool | None = None


class UpdateRole(RoleTarget):
    name: str | None = Field(default=None, min_length=1)
    can_edit_schema: bool | None = None
    can_edit_others_content: bool | None = None
    can_publish_content: bool | None = None
    can_edit_favicon: bool | None = None
    can_access_environments: bool | None = None
    can_perform_site_search: bool | None = None
    can_edit_site_entity: bool | None = None

    @model_validator(mode="after")
    def _something_to_update(self) -> UpdateRole:
        if not self.model_fields_set & set(_ROLE_ATTRIBUTES):
            raise ValueError("At least one updatable field must be provided.")
        return self


# ── API tokens ───────────────────────────────────────────────────────


class ListTokens(ReadContract):
    pass


class RetrieveToken(ReadContract):
    token_id: str = identifier("ID of the API token.")


class TokenTarget(OperationContract):
    token_id: str = identifier("ID of the API token.")


class CreateToken(OperationContract):
    name: str = Field(min_length=1)
    role: RoleSpec = Field(description="Preset role name, numeric role ID or role reference.")
    can_access_cda: bool = Field(description="Read published content through the CDA.")
    can_access_cda_preview: bool = Field(description="Read draft content through the CDA.")
    can_access_cma: bool = Field(description="Use the Content Management API.")


class UpdateToken(TokenTarget):
    name: str | None = Field(default=None, min_length=1)
    role: RoleSpec | None = Field(default=None, description="New role; null removes it.")
    can_access_cda: bool | None = None
    can_access_cda_preview: bool | None = None
    can_access_cma: bool | None = None

    @model_validator(mode="after")
    def _something_to_update(self) -> UpdateToken:
        if not self.model_fields_set & {*_TOKEN_ATTRIBUTES, "role"}:
            raise ValueError("At least one updatable field must be provided.")
        return self


def _create_token(session: Any, args: CreateToken) -> Any:
    attributes = args.model_dump(include=set(_TOKEN_ATTRIBUTES))
    return session.create_access_token(attributes, resolve_role(session, args.role))


def _update_token(session: Any, args: UpdateToken) -> Any:
    relationships: dict[str, Any] = {}
    if "role" in args.model_fields_set:
        relationships["role"] = None if args.role is None else resolve_role(session, args.role)
    return session.update_access_token(
        args.token_id, supplied(args, _TOKEN_ATTRIBUTES), relationships
    )


OPERATIONS = [
    OperationConfig(
        "invitation_create", CreateInvitation, _create_invitation, Variant.CREATE, "Invitation"
    ),
    OperationConfig(
        "invitation_list",
        ListInvitations,
        lambda s, a: s.list_invitations(),
        Variant.LIST,
        "Invitation",
        transform=as_list,
    ),
    OperationConfig(
        "invitation_retrieve",
        RetrieveInvitation,
        lambda s, a: s.find_invitation(a.invitation_id),
        Variant.RETRIEVE,
        "Invitation",
        id_field="invitation_id",
    ),
    OperationConfig(
        "invitation_destroy",
        InvitationTarget,
        lambda s, a: s.destroy_invitation(a.invitation_id),
        Variant.DELETE,
        "Invitation",
        id_field="invitation_id",
        success_message="Invitation deleted.",
    ),
    OperationConfig(
        "invitation_resend",
        InvitationTarget,
        lambda s, a: s.resend_invitation(a.invitation_id),
        Variant.CUSTOM,
        "Invitation",
        id_field="invitation_id",
        transform=message("Invitation {invitation_id} resent."),
    ),
    OperationConfig(
        "user_list",
        ListUsers,
        lambda s, a: s.list_users(),
        Variant.LIST,
        "User",
        transform=as_list,
    ),
    OperationConfig(
        "user_retrieve",
        RetrieveUser,
        lambda s, a: s.find_user(a.user_id),
        Variant.RETRIEVE,
        "User",
        id_field="user_id",
    ),
    OperationConfig(
        "user_update",
        UpdateUser,
        lambda s, a: s.update_user(a.user_id, supplied(a, _USER_ATTRIBUTES), a.role_id),
        Variant.UPDATE,
        "User",
        id_field="user_id",
    ),
    OperationConfig(
        "user_destroy",
        UserTarget,
        lambda s, a: s.destroy_user(a.user_id),
        Variant.DELETE,
        "User",
        id_field="user_id",
        success_message="User removed.",
    ),
    OperationConfig(
        "user_invite",
        InviteUser,
        lambda s, a: s.create_invitation(a.email, a.role_id),
        Variant.CREATE,
        "Invitation",
    ),
    OperationConfig(
        "create_role",
        CreateRole,
        lambda s, a: s.create_role(a.model_dump(include=set(_ROLE_ATTRIBUTES))),
        Variant.CREATE,
        "Role",
    ),
    OperationConfig(
        "list_roles",
        ListRoles,
        lambda s, a: s.list_roles(),
        Variant.LIST,
        "Role",
        transform=as_list,
    ),
    OperationConfig(
        "retrieve_role",
        RetrieveRole,
        lambda s, a: s.find_role(a.role_id),
        Variant.RETRIEVE,
        "Role",
        id_field="role_id",
    ),
    OperationConfig(
        "update_role",
        UpdateRole,
        lambda s, a: s.update_role(a.role_id, supplied(a, _ROLE_ATTRIBUTES)),
        Variant.UPDATE,
        "Role",
        id_field="role_id",
    ),
    OperationConfig(
        "destroy_role",
        RoleTarget,
        lambda s, a: s.destroy_role(a.role_id),
        Variant.DELETE,
        "Role",
        id_field="role_id",
        success_message="Role deleted.",
    ),
    OperationConfig(
        "duplicate_role",
        RoleTarget,
        lambda s, a: s.duplicate_role(a.role_id),
        Variant.CREATE,
        "Role",
        id_field="role_id",
    ),
    OperationConfig("create_token", CreateToken, _create_token, Variant.CREATE, "API token"),
    OperationConfig(
        "list_tokens",
        ListTokens,
        lambda s, a: s.list_access_tokens(),
        Variant.LIST,
        "API token",
        transform=as_list,
    ),
    OperationConfig(
        "retrieve_token",
        RetrieveToken,
        lambda s, a: s.find_access_token(a.token_id),
        Variant.RETRIEVE,
        "API token",
        id_field="token_id",
    ),
    OperationConfig(
        "update_token",
        UpdateToken,
        _update_token,
        Variant.UPDATE,
        "API token",
        id_field="token_id",
    ),
    OperationConfig(
        "destroy_token",
        TokenTarget,
        lambda s, a: s.destroy_access_token(a.token_id),
        Variant.DELETE,
        "API token",
        id_field="token_id",
        success_message="API token deleted.",
    ),
    OperationConfig(
        "rotate_token",
        TokenTarget,
        lambda s, a: s.rotate_access_token(a.token_id),
        Variant.CUSTOM,
        "API token",
        id_field="token_id",
    ),
]
