"""Operation catalogue: one module per tool domain.

Each module exposes ``DOMAIN`` and ``OPERATIONS``; :func:`install` turns
them into handler tables and registers those with the router.
"""

from __future__ import annotations

from types import ModuleType
from typing import TYPE_CHECKING

from datotools.catalog import (
    collaborators,
    environments,
    locales,
    project,
    records,
    schema,
    ui,
    uploads,
    webhooks,
)

if TYPE_CHECKING:
    from datotools.services.factory import HandlerFactory
    from datotools.services.router import ActionRouter, EntryPoint

CATALOG: tuple[ModuleType, ...] = (
    records,
    uploads,
    schema,
    environments,
    webhooks,
    project,
    collaborators,
    locales,
    ui,
)


def install(factory: HandlerFactory, router: ActionRouter) -> dict[str, EntryPoint]:
    """Build and register every domain; returns the entry point per domain."""
    entry_points: dict[str, EntryPoint] = {}
    for module in CATALOG:
        table = factory.build_table(module.DOMAIN, module.OPERATIONS)
        entry_points[module.DOMAIN] = router.register(module.DOMAIN, table)
    return entry_points
