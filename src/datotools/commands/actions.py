"""Command: list domains and actions, or show one action's argument schema."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from datotools.commands._base import DatoCommand

if TYPE_CHECKING:
    from datotools.commands._context import AppContext


@click.command(
    cls=DatoCommand,
    examples="""\
  datotools actions
  datotools actions records
  datotools --json actions records query""",
)
@click.argument("domain", required=False)
@click.argument("action", required=False)
@click.pass_obj
def actions(app: AppContext, domain: str | None, action: str | None) -> None:
    """List domains, a domain's actions, or the JSON Schema of ACTION."""
    app.emit(app.runtime.describe(domain, action))
