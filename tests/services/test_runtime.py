"""Tests for runtime wiring and the parameter description surface."""

from __future__ import annotations

from typing import Any

from datotools.config.settings import DatoSettings
from datotools.domain.errors import ErrorKind
from datotools.services.runtime import Runtime, backend_session_factory, build_runtime


class TestDescribe:
    def test_lists_domains(self, runtime: Runtime) -> None:
        env = runtime.describe()
        assert env.success
        assert env.op == "parameters"
        assert "records" in env.data["domains"]

    def test_lists_actions(self, runtime: Runtime) -> None:
        env = runtime.describe("environments")
        assert env.data["domain"] == "environments"
        assert "fork" in env.data["actions"]

    def test_action_schema(self, runtime: Runtime) -> None:
        env = runtime.describe("records", "retrieve")
        schema = env.data["schema"]
        assert set(schema["properties"]) >= {"apiToken", "itemId", "returnAllLocales"}

    def test_unknown_domain(self, runtime: Runtime) -> None:
        env = runtime.describe("nope")
        assert env.error is not None
        assert env.error.code is ErrorKind.INTERNAL
        assert "records" in env.error.details["valid"]

    def test_unknown_action(self, runtime: Runtime) -> None:
        env = runtime.describe("project", "explode")
        assert env.error is not None
        assert env.error.details == {"valid": ["get_info", "update_site_settings"]}
        assert "get_info, update_site_settings" in env.error.message


class TestBuildRuntime:
    def test_sessions_are_cached(self, settings: DatoSettings, backend: Any) -> None:
        created: list[Any] = []

        def factory(token: str, environment: str | None) -> Any:
            created.append(token)
            return backend

        rt = build_runtime(settings, session_factory=factory)
        backend.responses["find_site"] = {"id": "s1"}
        for _ in range(3):
            rt.dispatch("project", "get_info", {"apiToken": "tok"})
        assert created == ["tok"]
        assert len(rt.sessions) == 1

    def test_malformed_token_is_internal(self, runtime: Runtime, backend: Any) -> None:
        env = runtime.dispatch("project", "get_info", {"apiToken": "bad token"})
        assert env.error is not None
        assert env.error.code is ErrorKind.INTERNAL
        assert backend.calls == []

    def test_default_session_factory_builds_backend(
        self, settings: DatoSettings, monkeypatch: Any
    ) -> None:
        from datotools.infrastructure import backend as backend_module

        opened: list[tuple[str, str | None]] = []

        def fake_connect(token: str, environment: str | None, *, config: Any) -> str:
            opened.append((token, environment))
            return "session"

        monkeypatch.setattr(backend_module.ContentBackend, "connect", fake_connect)
        factory = backend_session_factory(settings)
        assert factory("tok", "sandbox") == "session"
        assert opened == [("tok", "sandbox")]
