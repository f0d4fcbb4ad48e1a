"""Tests for the locales domain, backed by the site's locale list."""

from __future__ import annotations

from typing import Any

import pytest

from datotools.domain.errors import ErrorKind
from datotools.services.runtime import Runtime

TOKEN = "test-token"


def _call(runtime: Runtime, action: str, **args: Any):
    return runtime.dispatch("locales", action, {"apiToken": TOKEN, **args})


@pytest.fixture
def site(backend: Any) -> dict[str, Any]:
    current = {"id": "s1", "locales": ["en", "it", "de"]}
    backend.responses["find_site"] = lambda: current
    return current


class TestReading:
    def test_list(self, runtime: Runtime, backend: Any, site: dict[str, Any]) -> None:
        env = _call(runtime, "list")
        assert env.data == {
            "count": 3,
            "items": [
                {"code": "en", "name": "en"},
                {"code": "it", "name": "it"},
                {"code": "de", "name": "de"},
            ],
        }

    def test_get(self, runtime: Runtime, backend: Any, site: dict[str, Any]) -> None:
        env = _call(runtime, "get", localeId="it")
        assert env.data == {"code": "it", "name": "it"}

    def test_get_missing(self, runtime: Runtime, backend: Any, site: dict[str, Any]) -> None:
        env = _call(runtime, "get", localeId="fr")
        assert env.error is not None
        assert env.error.code is ErrorKind.NOT_FOUND
        assert env.error.message == "Locale with ID 'fr' was not found."


class TestChanging:
    def test_create_appends(self, runtime: Runtime, backend: Any, site: dict[str, Any]) -> None:
        env = _call(runtime, "create", name="Français", code="fr")
        assert env.data == {"code": "fr", "name": "Français", "added": True}
        assert backend.called("update_site") == [(({"locales": ["en", "it", "de", "fr"]},), {})]

    def test_create_existing(self, runtime: Runtime, backend: Any, site: dict[str, Any]) -> None:
        env = _call(runtime, "create", name="Italiano", code="it")
        assert env.error is not None
        assert env.error.code is ErrorKind.VALIDATION_FAILED
        assert env.error.details["issues"][0]["path"] == "code"
        assert backend.called("update_site") == []

    @pytest.mark.parametrize("code", ["EN", "english", "en_US", "en-us"])
    def test_create_code_format(self, runtime: Runtime, backend: Any, code: str) -> None:
        env = _call(runtime, "create", name="X", code=code)
        assert env.error is not None
        assert env.error.code is ErrorKind.VALIDATION_FAILED
        assert backend.calls == []

    def test_delete(self, runtime: Runtime, backend: Any, site: dict[str, Any]) -> None:
        env = _call(runtime, "delete", localeId="it")
        assert env.data == {"message": "Locale it removed."}
        assert backend.called("update_site") == [(({"locales": ["en", "de"]},), {})]

    def test_delete_primary(self, runtime: Runtime, backend: Any, site: dict[str, Any]) -> None:
        env = _call(runtime, "delete", localeId="en")
        assert env.error is not None
        assert env.error.code is ErrorKind.VALIDATION_FAILED
        assert "primary" in env.error.message
        assert backend.called("update_site") == []

    def test_delete_only_locale(self, runtime: Runtime, backend: Any) -> None:
        backend.responses["find_site"] = {"id": "s1", "locales": ["en"]}
        env = _call(runtime, "delete", localeId="en")
        assert env.error is not None
        assert "only locale" in env.error.message

    def test_delete_unknown(self, runtime: Runtime, backend: Any, site: dict[str, Any]) -> None:
        env = _call(runtime, "delete", localeId="fr")
        assert env.error is not None
        assert env.error.code is ErrorKind.NOT_FOUND

    def test_reorder(self, runtime: Runtime, backend: Any, site: dict[str, Any]) -> None:
        env = _call(runtime, "reorder", localeIds=["de", "en", "it"])
        assert env.data == {"locales": ["de", "en", "it"]}
        assert backend.called("update_site") == [(({"locales": ["de", "en", "it"]},), {})]

    @pytest.mark.parametrize(
        "order", [["en", "it"], ["en", "it", "de", "fr"], ["en", "en", "it", "de"]]
    )
    def test_reorder_must_be_a_permutation(
        self, runtime: Runtime, backend: Any, site: dict[str, Any], order: list[str]
    ) -> None:
        env = _call(runtime, "reorder", localeIds=order)
        assert env.error is not None
        assert env.error.code is ErrorKind.VALIDATION_FAILED
        assert backend.called("update_site") == []
