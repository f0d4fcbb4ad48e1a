"""Subcommand modules for datotools.

Provides register_commands() which uses deferred imports to keep
``datotools --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the standalone commands on the root CLI group."""
    from datotools.commands.actions import actions
    from datotools.commands.call import call
    from datotools.commands.serve import serve

    cli.add_command(call)
    cli.add_command(actions)
    cli.add_command(serve)
