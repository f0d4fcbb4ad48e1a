"""Tests for the environments and project domains."""

from __future__ import annotations

from typing import Any

from datotools.domain.errors import ContentBackendError, ErrorKind
from datotools.services.runtime import Runtime

TOKEN = "test-token"


def _call(runtime: Runtime, domain: str, action: str, **args: Any):
    return runtime.dispatch(domain, action, {"apiToken": TOKEN, **args})


class TestEnvironments:
    def test_fork_passes_flags(self, runtime: Runtime, backend: Any) -> None:
        backend.responses["fork_environment"] = {"id": "sandbox"}
        env = _call(
            runtime, "environments", "fork", environmentId="main", newId="sandbox", fast=True
        )
        assert env.success
        assert backend.called("fork_environment") == [
            (("main", "sandbox"), {"fast": True, "force": False})
        ]

    def test_environment_id_pattern(self, runtime: Runtime, backend: Any) -> None:
        env = _call(runtime, "environments", "fork", environmentId="main", newId="Bad Name")
        assert env.error is not None
        assert env.error.code is ErrorKind.VALIDATION_FAILED
        assert backend.calls == []

    def test_destroy_confirmation_must_be_literal(self, runtime: Runtime, backend: Any) -> None:
        env = _call(
            runtime, "environments", "destroy", environmentId="old", confirmation="yes"
        )
        assert env.error is not None
        assert env.error.code is ErrorKind.VALIDATION_FAILED

    def test_destroy(self, runtime: Runtime, backend: Any) -> None:
        env = _call(
            runtime, "environments", "destroy", environmentId="old", confirmation="confirm"
        )
        assert env.data == {"message": "Environment deleted."}

    def test_missing_environment(self, runtime: Runtime, backend: Any) -> None:
        env = _call(runtime, "environments", "retrieve", environmentId="ghost")
        assert env.error is not None
        assert env.error.message == "Environment with ID 'ghost' was not found."

    def test_maintenance_status_is_read(self, runtime: Runtime, backend: Any) -> None:
        backend.responses["maintenance_mode"] = {"id": "maintenance_mode", "active": False}
        env = _call(runtime, "environments", "maintenance_status")
        assert env.data == {"id": "maintenance_mode", "active": False}

    def test_activate_maintenance_force(self, runtime: Runtime, backend: Any) -> None:
        backend.responses["activate_maintenance_mode"] = {"active": True}
        _call(runtime, "environments", "maintenance_activate", force=True)
        assert backend.called("activate_maintenance_mode") == [((), {"force": True})]

    def test_session_uses_target_environment(
        self, settings: Any, backend: Any
    ) -> None:
        from datotools.services.runtime import build_runtime

        seen: list[tuple[str, str | None]] = []

        def factory(token: str, environment: str | None) -> Any:
            seen.append((token, environment))
            return backend

        rt = build_runtime(settings, session_factory=factory)
        backend.responses["list_environments"] = []
        rt.dispatch("environments", "list", {"apiToken": TOKEN, "environment": "sandbox"})
        rt.dispatch("environments", "list", {"apiToken": TOKEN})
        assert seen == [(TOKEN, "sandbox"), (TOKEN, None)]


class TestProject:
    def test_get_info(self, runtime: Runtime, backend: Any) -> None:
        backend.responses["find_site"] = {"id": "s1", "name": "Acme", "locales": ["en"]}
        env = _call(runtime, "project", "get_info")
        assert env.data["name"] == "Acme"

    def test_update_requires_settings(self, runtime: Runtime, backend: Any) -> None:
        env = _call(runtime, "project", "update_site_settings", settings={})
        assert env.error is not None
        assert env.error.code is ErrorKind.VALIDATION_FAILED

    def test_unauthorized(self, runtime: Runtime, backend: Any) -> None:
        backend.errors["update_site"] = ContentBackendError(
            "Unauthorized", status=401, code="INVALID_AUTHORIZATION_HEADER"
        )
        env = _call(runtime, "project", "update_site_settings", settings={"name": "X"})
        assert env.error is not None
        assert env.error.code is ErrorKind.UNAUTHORIZED
        assert env.error.details["status"] == 401

    def test_subscription_features(self, runtime: Runtime, backend: Any) -> None:
        backend.responses["list_subscription_features"] = [
            {"id": "scheduled_publishing", "enabled": True}
        ]
        env = _call(runtime, "project", "list_subscription_features")
        assert env.data == {
            "count": 1,
            "items": [{"id": "scheduled_publishing", "enabled": True}],
        }

    def test_usages_and_limits(self, runtime: Runtime, backend: Any) -> None:
        backend.responses["list_subscription_limits"] = [
            {"id": "items", "usage": 40, "limit": 100}
        ]
        env = _call(runtime, "project", "list_usages_and_limits")
        assert env.data["items"][0]["usage"] == 40
