"""FastMCP server setup.

Optional extra, guarded behind try/except ImportError.
Transport: stdio default, sse and streamable HTTP optional.
"""

from __future__ import annotations

from typing import Any

mcp_available = False
_FastMCP: Any = None

try:
    from mcp.server.fastmcp import FastMCP as _FastMCP  # type: ignore[no-redef,import-not-found]

    mcp_available = True
except ImportError:
    pass

__all__ = ["create_server", "mcp_available"]

SERVER_NAME = "datotools"


def create_server(
    settings: Any = None,
    *,
    host: str | None = None,
    port: int | None = None,
    runtime: Any = None,
) -> Any:
    """Create and configure the MCP server.

    Builds a Runtime from *settings* (unless *runtime* is given) and
    registers one tool per domain. Returns the FastMCP instance.

    *host* and *port* override the ``[mcp]`` settings for HTTP transports
    (sse, streamable-http). They are ignored when using stdio.

    Raises RuntimeError if the mcp extra is not installed.
    """
    if not mcp_available or _FastMCP is None:
        msg = "MCP extra not installed. Install with: pip install datotools[mcp]"
        raise RuntimeError(msg)

    from datotools.config.settings import DatoSettings
    from datotools.mcp.tools import register_tools
    from datotools.services.runtime import build_runtime

    if runtime is None:
        runtime = build_runtime(settings or DatoSettings())
    mcp_config = runtime.settings.mcp

    server = _FastMCP(
        SERVER_NAME,
        host=host or mcp_config.host,
        port=port or mcp_config.port,
    )
    register_tools(server, runtime)
    return server
