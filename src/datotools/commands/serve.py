"""serve: start the MCP server (requires the datotools[mcp] extra)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from datotools.commands._base import DatoCommand

if TYPE_CHECKING:
    from datotools.commands._context import AppContext


@click.command(
    cls=DatoCommand,
    examples="""\
  # Start the MCP server (stdio transport, default)
  datotools serve

  # Streamable HTTP on custom host/port
  datotools serve --transport streamable-http --host 0.0.0.0 --port 9000

  # SSE transport on the configured address
  datotools serve --transport sse""",
)
@click.option(
    "--transport",
    default=None,
    type=click.Choice(["stdio", "sse", "streamable-http"]),
    help="MCP transport protocol (defaults to [mcp] transport).",
)
@click.option("--host", default=None, help="Bind address (HTTP transports only).")
@click.option("--port", default=None, type=int, help="Listen port (HTTP transports only).")
@click.pass_obj
def serve(app: AppContext, transport: str | None, host: str | None, port: int | None) -> None:
    """Start the MCP server (requires datotools[mcp] extra)."""
    from datotools.mcp.server import create_server, mcp_available

    if not mcp_available:
        click.echo("MCP not installed. Install with: pip install datotools[mcp]", err=True)
        raise SystemExit(1)

    server = create_server(host=host, port=port, runtime=app.runtime)
    server.run(transport=transport or app.settings.mcp.transport)
