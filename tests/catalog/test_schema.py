"""Tests for the schema domain: models, fieldsets and fields."""

from __future__ import annotations

from typing import Any

from datotools.domain.errors import ErrorKind
from datotools.services.runtime import Runtime

TOKEN = "test-token"


def _call(runtime: Runtime, action: str, **args: Any):
    return runtime.dispatch("schema", action, {"apiToken": TOKEN, **args})


class TestItemTypes:
    def test_create_sends_snake_case_attributes(self, runtime: Runtime, backend: Any) -> None:
        backend.responses["create_item_type"] = {"id": "m1"}
        env = _call(runtime, "create_item_type", name="Article", apiKey="article", sortable=True)
        assert env.success
        (attributes,), _ = backend.called("create_item_type")[0]
        assert attributes["api_key"] == "article"
        assert attributes["sortable"] is True
        assert "hint" not in attributes

    def test_api_key_pattern(self, runtime: Runtime, backend: Any) -> None:
        env = _call(runtime, "create_item_type", name="Article", apiKey="Article Post")
        assert env.error is not None
        assert env.error.code is ErrorKind.VALIDATION_FAILED
        assert backend.calls == []

    def test_update_sends_only_supplied(self, runtime: Runtime, backend: Any) -> None:
        backend.responses["update_item_type"] = {"id": "m1"}
        _call(runtime, "update_item_type", itemTypeId="m1", hint=None, tree=True)
        assert backend.called("update_item_type") == [(("m1", {"hint": None, "tree": True}), {})]

    def test_update_requires_a_field(self, runtime: Runtime, backend: Any) -> None:
        env = _call(runtime, "update_item_type", itemTypeId="m1")
        assert env.error is not None
        assert env.error.code is ErrorKind.VALIDATION_FAILED

    def test_full_page_without_total_may_have_more(
        self, runtime: Runtime, backend: Any
    ) -> None:
        backend.responses["list_item_types"] = [{"id": "m1"}]
        env = _call(runtime, "list_item_types", page={"offset": 0, "limit": 1})
        assert env.data["pagination"] == {"limit": 1, "offset": 0, "total": 1, "has_more": True}

    def test_page_limit_cap(self, runtime: Runtime, backend: Any) -> None:
        env = _call(runtime, "list_item_types", page={"limit": 501})
        assert env.error is not None
        assert env.error.code is ErrorKind.VALIDATION_FAILED

    def test_destroy_message(self, runtime: Runtime, backend: Any) -> None:
        env = _call(runtime, "destroy_item_type", itemTypeId="m1")
        assert env.data == {"message": "Model deleted."}


class TestFields:
    def test_create_field(self, runtime: Runtime, backend: Any) -> None:
        backend.responses["create_field"] = {"id": "f1"}
        env = _call(
            runtime,
            "create_field",
            itemTypeId="m1",
            label="Title",
            apiKey="title",
            fieldType="string",
            validators={"required": {}},
            appearance={"editor": "single_line"},
            fieldsetId="fs1",
        )
        assert env.success
        (item_type_id, attributes, fieldset_id), _ = backend.called("create_field")[0]
        assert item_type_id == "m1"
        assert fieldset_id == "fs1"
        assert attributes["field_type"] == "string"
        assert attributes["appearance"] == {
            "editor": "single_line",
            "parameters": {},
            "addons": [],
        }

    def test_unknown_field_type(self, runtime: Runtime, backend: Any) -> None:
        env = _call(
            runtime,
            "create_field",
            itemTypeId="m1",
            label="Title",
            apiKey="title",
            fieldType="markdown",
        )
        assert env.error is not None
        assert env.error.details["issues"][0]["path"] == "fieldType"

    def test_missing_field_names_field(self, runtime: Runtime, backend: Any) -> None:
        env = _call(runtime, "retrieve_field", fieldId="f404")
        assert env.error is not None
        assert env.error.message == "Field with ID 'f404' was not found."

    def test_list_fields(self, runtime: Runtime, backend: Any) -> None:
        backend.responses["list_fields"] = [{"id": "f1"}, {"id": "f2"}]
        env = _call(runtime, "list_fields", itemTypeId="m1")
        assert env.data["count"] == 2
        assert "pagination" not in env.data


class TestFieldsets:
    def test_create_fieldset(self, runtime: Runtime, backend: Any) -> None:
        backend.responses["create_fieldset"] = {"id": "fs1"}
        _call(runtime, "create_fieldset", itemTypeId="m1", title="SEO", collapsible=True)
        (item_type_id, attributes), _ = backend.called("create_fieldset")[0]
        assert item_type_id == "m1"
        assert attributes == {"title": "SEO", "collapsible": True, "start_collapsed": False}

    def test_update_requires_a_field(self, runtime: Runtime, backend: Any) -> None:
        env = _call(runtime, "update_fieldset", fieldsetId="fs1")
        assert env.error is not None
        assert env.error.code is ErrorKind.VALIDATION_FAILED
