"""Service layer: registry, factory, router and sessions returning ResponseEnvelope.

Services may import from domain, config and infrastructure layers.
They must never import from catalog, commands, output, or mcp.
"""
