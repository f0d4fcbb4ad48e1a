"""Tests for the actions command."""

from __future__ import annotations

import json
from typing import Any

from click.testing import CliRunner

from datotools.cli import cli


class TestActionsCommand:
    def test_lists_domains(self, cli_runner: CliRunner, cli_runtime: Any) -> None:
        result = cli_runner.invoke(cli, ["--json", "actions"])
        assert result.exit_code == 0, result.output
        domains = json.loads(result.stdout)["data"]["domains"]
        assert domains == sorted(
            ["records", "uploads", "schema", "environments", "webhooks", "project"]
        )

    def test_lists_actions(self, cli_runner: CliRunner, cli_runtime: Any) -> None:
        result = cli_runner.invoke(cli, ["actions", "project"])
        assert result.exit_code == 0, result.output
        assert "get_info" in result.stdout

    def test_action_schema(self, cli_runner: CliRunner, cli_runtime: Any) -> None:
        result = cli_runner.invoke(cli, ["--json", "actions", "records", "query"])
        schema = json.loads(result.stdout)["data"]["schema"]
        assert "textSearch" in schema["properties"]

    def test_unknown_domain_exits_1(self, cli_runner: CliRunner, cli_runtime: Any) -> None:
        result = cli_runner.invoke(cli, ["actions", "nope"])
        assert result.exit_code == 1
        assert "Unknown domain 'nope'" in result.stderr


class TestRootGroup:
    def test_no_subcommand_shows_help(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, [])
        assert result.exit_code == 0
        assert "call" in result.output
        assert "actions" in result.output

    def test_version(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "datotools" in result.output

    def test_missing_config_file(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-c", "nope.toml", "actions"])
        assert result.exit_code == 1
        assert "Config file not found" in result.output
