"""Command: invoke one ``(domain, action)`` operation from the shell."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import click

from datotools.commands._base import DatoCommand

if TYPE_CHECKING:
    from datotools.commands._context import AppContext


def _parse_value(raw: str) -> Any:
    """JSON literal when it parses (numbers, booleans, lists), else the raw string."""
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


def build_args(
    args_json: str | None,
    pairs: tuple[str, ...],
    token: str | None,
) -> dict[str, Any]:
    """Merge ``--args`` JSON, ``-a key=value`` pairs and ``--token`` into one object."""
    args: dict[str, Any] = {}
    if args_json:
        try:
            parsed = json.loads(args_json)
        except json.JSONDecodeError as exc:
            raise click.BadParameter(f"not valid JSON: {exc}", param_hint="--args") from exc
        if not isinstance(parsed, dict):
            raise click.BadParameter("must be a JSON object", param_hint="--args")
        args.update(parsed)
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"expected key=value, got {pair!r}", param_hint="-a")
        args[key] = _parse_value(value)
    if token:
        args["apiToken"] = token
    return args


@click.command(
    cls=DatoCommand,
    examples="""\
  datotools call project get_info --token $DATO_TOKEN
  datotools call records retrieve -a itemId=12345
  datotools call records query --args '{"modelName": "article", "page": {"limit": 5}}'
  datotools call uploads list_tags -a filter=banner
  datotools --json call environments list -a environment=staging""",
)
@click.argument("domain")
@click.argument("action")
@click.option("--args", "args_json", default=None, help="Arguments as a JSON object.")
@click.option(
    "-a",
    "--arg",
    "pairs",
    multiple=True,
    help="Single argument as key=value (value parsed as JSON when possible).",
)
@click.option("--token", default=None, help="API token (defaults to DATOTOOLS_API_TOKEN).")
@click.pass_obj
def call(
    app: AppContext,
    domain: str,
    action: str,
    args_json: str | None,
    pairs: tuple[str, ...],
    token: str | None,
) -> None:
    """Run DOMAIN ACTION and print the response envelope."""
    args = build_args(args_json, pairs, token)
    if "apiToken" not in args and app.settings.api_token is not None:
        args["apiToken"] = app.settings.api_token.get_secret_value()
    app.emit(app.runtime.dispatch(domain, action, args))
