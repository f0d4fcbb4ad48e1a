"""Tests for the collaborators domain: invitations, users, roles, API tokens."""

from __future__ import annotations

from typing import Any

from datotools.domain.errors import ErrorKind
from datotools.services.runtime import Runtime

TOKEN = "test-token"

ROLES = [{"id": "11", "name": "Admin"}, {"id": "12", "name": "Editor"}]


def _call(runtime: Runtime, action: str, **args: Any):
    return runtime.dispatch("collaborators", action, {"apiToken": TOKEN, **args})


class TestInvitations:
    def test_preset_role_is_resolved(self, runtime: Runtime, backend: Any) -> None:
        backend.responses["list_roles"] = ROLES
        backend.responses["create_invitation"] = {"id": "inv1"}
        env = _call(runtime, "invitation_create", email="ada@example.com", role="editor")
        assert env.success
        assert backend.called("create_invitation") == [(("ada@example.com", "12"), {})]

    def test_numeric_role_is_used_as_is(self, runtime: Runtime, backend: Any) -> None:
        _call(runtime, "invitation_create", email="ada@example.com", role="42")
        assert backend.called("list_roles") == []
        assert backend.called("create_invitation") == [(("ada@example.com", "42"), {})]

    def test_role_reference(self, runtime: Runtime, backend: Any) -> None:
        _call(
            runtime,
            "invitation_create",
            email="ada@example.com",
            role={"id": "7", "type": "role"},
        )
        assert backend.called("create_invitation") == [(("ada@example.com", "7"), {})]

    def test_missing_preset_is_not_found(self, runtime: Runtime, backend: Any) -> None:
        backend.responses["list_roles"] = [{"id": "11", "name": "Admin"}]
        env = _call(runtime, "invitation_create", email="ada@example.com", role="seo")
        assert env.error is not None
        assert env.error.code is ErrorKind.NOT_FOUND
        assert env.error.message == "Role with ID 'seo' was not found."
        assert backend.called("create_invitation") == []

    def test_unknown_role_name_rejected(self, runtime: Runtime, backend: Any) -> None:
        env = _call(runtime, "invitation_create", email="ada@example.com", role="owner")
        assert env.error is not None
        assert env.error.code is ErrorKind.VALIDATION_FAILED
        assert backend.calls == []

    def test_bad_email_rejected(self, runtime: Runtime, backend: Any) -> None:
        env = _call(runtime, "invitation_create", email="not-an-email", role="42")
        assert env.error is not None
        assert env.error.code is ErrorKind.VALIDATION_FAILED

    def test_resend_message(self, runtime: Runtime, backend: Any) -> None:
        env = _call(runtime, "invitation_resend", invitationId="inv1")
        assert env.data == {"message": "Invitation inv1 resent."}


class TestUsers:
    def test_update_sends_only_supplied(self, runtime: Runtime, backend: Any) -> None:
        backend.responses["update_user"] = {"id": "u1"}
        _call(runtime, "user_update", userId="u1", firstName="Ada", roleId="12")
        assert backend.called("update_user") == [(("u1", {"first_name": "Ada"}, "12"), {})]

    def test_update_needs_a_change(self, runtime: Runtime, backend: Any) -> None:
        env = _call(runtime, "user_update", userId="u1")
        assert env.error is not None
        assert env.error.code is ErrorKind.VALIDATION_FAILED

    def test_retrieve_missing(self, runtime: Runtime, backend: Any) -> None:
        env = _call(runtime, "user_retrieve", userId="u9")
        assert env.error is not None
        assert env.error.message == "User with ID 'u9' was not found."

    def test_invite_creates_invitation(self, runtime: Runtime, backend: Any) -> None:
        _call(runtime, "user_invite", email="bo@example.com", roleId="12")
        assert backend.called("create_invitation") == [(("bo@example.com", "12"), {})]


class TestRoles:
    def test_create_role(self, runtime: Runtime, backend: Any) -> None:
        backend.responses["create_role"] = {"id": "13", "name": "Reviewer"}
        env = _call(runtime, "create_role", name="Reviewer", canPublishContent=True)
        assert env.success
        (attributes,), _ = backend.called("create_role")[0]
        assert attributes["name"] == "Reviewer"
        assert attributes["can_publish_content"] is True

    def test_list_roles(self, runtime: Runtime, backend: Any) -> None:
        backend.responses["list_roles"] = ROLES
        env = _call(runtime, "list_roles")
        assert env.data["count"] == 2

    def test_duplicate(self, runtime: Runtime, backend: Any) -> None:
        backend.responses["duplicate_role"] = {"id": "14"}
        env = _call(runtime, "duplicate_role", roleId="12")
        assert env.data == {"id": "14"}


class TestTokens:
    def test_create_token(self, runtime: Runtime, backend: Any) -> None:
        backend.responses["list_roles"] = ROLES
        backend.responses["create_access_token"] = {"id": "t1"}
        env = _call(
            runtime,
            "create_token",
            name="Frontend",
            role="admin",
            canAccessCda=True,
            canAccessCdaPreview=False,
            canAccessCma=False,
        )
        assert env.success
        assert backend.called("create_access_token") == [
            (
                (
                    {
                        "name": "Frontend",
                        "can_access_cda": True,
                        "can_access_cda_preview": False,
                        "can_access_cma": False,
                    },
                    "11",
                ),
                {},
            )
        ]

    def test_update_can_remove_role(self, runtime: Runtime, backend: Any) -> None:
        _call(runtime, "update_token", tokenId="t1", role=None)
        assert backend.called("update_access_token") == [(("t1", {}, {"role": None}), {})]

    def test_update_leaves_role_alone(self, runtime: Runtime, backend: Any) -> None:
        _call(runtime, "update_token", tokenId="t1", name="Renamed")
        assert backend.called("update_access_token") == [(("t1", {"name": "Renamed"}, {}), {})]

    def test_rotate(self, runtime: Runtime, backend: Any) -> None:
        backend.responses["rotate_access_token"] = {"id": "t1", "token": "new-secret"}
        env = _call(runtime, "rotate_token", tokenId="t1")
        assert env.data["token"] == "new-secret"
