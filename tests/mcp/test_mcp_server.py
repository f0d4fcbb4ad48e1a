"""Tests for MCP server creation."""

from __future__ import annotations

from typing import Any
from unittest.mock import patch

import pytest

from datotools.mcp.server import create_server, mcp_available
from datotools.services.runtime import Runtime


class DummyFastMCP:
    def __init__(self, name: str, **kwargs: Any) -> None:
        self.name = name
        self.kwargs = kwargs
        self.tools: list[str] = []

    def tool(self, name: str, description: str | None = None):
        def decorator(fn: Any) -> Any:
            self.tools.append(name)
            return fn

        return decorator


class TestServerAvailability:
    def test_mcp_available_is_bool(self) -> None:
        assert isinstance(mcp_available, bool)

    def test_create_server_without_mcp_raises(self) -> None:
        with patch("datotools.mcp.server.mcp_available", False):
            with pytest.raises(RuntimeError, match="MCP extra not installed"):
                create_server()


class TestCreateServer:
    def test_registers_tools_on_runtime(self, runtime: Runtime) -> None:
        with (
            patch("datotools.mcp.server.mcp_available", True),
            patch("datotools.mcp.server._FastMCP", DummyFastMCP),
        ):
            server = create_server(runtime=runtime)
        assert server.name == "datotools"
        assert server.kwargs == {"host": "127.0.0.1", "port": 8000}
        assert "datocms_records" in server.tools
        assert "datocms_parameters" in server.tools

    def test_host_and_port_override(self, runtime: Runtime) -> None:
        with (
            patch("datotools.mcp.server.mcp_available", True),
            patch("datotools.mcp.server._FastMCP", DummyFastMCP),
        ):
            server = create_server(host="0.0.0.0", port=9001, runtime=runtime)
        assert server.kwargs == {"host": "0.0.0.0", "port": 9001}

    def test_builds_runtime_from_settings(self, settings: Any) -> None:
        with (
            patch("datotools.mcp.server.mcp_available", True),
            patch("datotools.mcp.server._FastMCP", DummyFastMCP),
        ):
            server = create_server(settings)
        assert len(server.tools) == 10
