"""Domain layer: error taxonomy, locale reduction and backend capabilities.

This layer depends only on the standard library.
It must never import from services, infrastructure, catalog, or config.
"""
