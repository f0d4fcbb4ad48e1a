"""MCP tool definitions: one tool per domain plus ``datocms_parameters``.

Every domain tool takes ``{action, args}`` and returns the ResponseEnvelope
as structured JSON. Each tool has a ``*_impl`` function testable without
the mcp package; ``register_tools()`` wraps them with FastMCP decorators.
"""

from __future__ import annotations

from typing import Any

from datotools.services.result import ResponseEnvelope
from datotools.services.runtime import Runtime

TOOL_PREFIX = "datocms_"

DOMAIN_DESCRIPTIONS: dict[str, str] = {
    "records": "Query, create, update, publish and version DatoCMS records.",
    "uploads": "Manage media uploads, tags, smart tags and upload collections.",
    "schema": "Manage models (item types), fieldsets and fields.",
    "environments": "List, fork, promote, rename and delete environments; maintenance mode.",
    "webhooks": "Manage webhooks, their call log, build triggers and deploy events.",
    "project": "Read project information, update site-wide settings, inspect the plan.",
    "collaborators": "Manage invitations, collaborators, roles and API tokens.",
    "locales": "List, add, remove and reorder the locales of the project.",
    "ui": "Manage menu items, the schema menu, saved filters and plugins.",
}


def tool_name(domain: str) -> str:
    return f"{TOOL_PREFIX}{domain}"


def _to_mcp_response(envelope: ResponseEnvelope) -> dict[str, Any]:
    return envelope.to_payload()


def domain_tool_impl(
    runtime: Runtime, domain: str, action: str, args: dict[str, Any] | None = None
) -> dict[str, Any]:
    """Route one ``{action, args}`` call of a domain tool."""
    return _to_mcp_response(runtime.dispatch(domain, action, args))


def parameters_impl(runtime: Runtime, domain: str, action: str | None = None) -> dict[str, Any]:
    """List a domain's actions, or return the JSON Schema of one action's arguments."""
    return _to_mcp_response(runtime.describe(domain, action))


def register_tools(server: Any, runtime: Runtime) -> None:
    """Register the domain tools and ``datocms_parameters`` on a FastMCP server."""
    for domain in runtime.domains():
        _register_domain_tool(server, runtime, domain)

    @server.tool(name=f"{TOOL_PREFIX}parameters")  # type: ignore[untyped-decorator]
    def datocms_parameters(domain: str, action: str | None = None) -> dict[str, Any]:
        """Describe the arguments a domain tool accepts.

        Without *action*, lists the domain's actions. With *action*, returns
        the JSON Schema of that action's ``args`` object.
        """
        return parameters_impl(runtime, domain, action)


def _register_domain_tool(server: Any, runtime: Runtime, domain: str) -> None:
    summary = DOMAIN_DESCRIPTIONS.get(domain, f"Operations of the {domain} domain.")
    description = (
        f"{summary} Actions: {', '.join(runtime.registry.actions(domain))}. "
        f"Every args object needs apiToken; call {TOOL_PREFIX}parameters for the "
        "arguments of an action."
    )

    def tool(action: str, args: dict[str, Any] | None = None) -> dict[str, Any]:
        return domain_tool_impl(runtime, domain, action, args)

    tool.__name__ = tool_name(domain)
    tool.__doc__ = description
    server.tool(name=tool_name(domain), description=description)(tool)
