"""Tests for the serve command."""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock, patch

from click.testing import CliRunner

from datotools.cli import cli


class TestServeCommand:
    def test_help_shows_transports(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["serve", "--help"])
        assert "stdio" in result.output
        assert "streamable-http" in result.output
        assert "--port" in result.output

    def test_without_mcp_extra(self, cli_runner: CliRunner) -> None:
        with patch("datotools.mcp.server.mcp_available", False):
            result = cli_runner.invoke(cli, ["serve"])
        assert result.exit_code == 1
        assert "pip install datotools[mcp]" in result.stderr

    def test_passes_transport_options(self, cli_runner: CliRunner, cli_runtime: Any) -> None:
        server = MagicMock()
        with (
            patch("datotools.mcp.server.mcp_available", True),
            patch("datotools.mcp.server.create_server", return_value=server) as create_server,
        ):
            result = cli_runner.invoke(
                cli,
                ["serve", "--transport", "streamable-http", "--host", "0.0.0.0", "--port", "9000"],
            )
        assert result.exit_code == 0, result.output
        create_server.assert_called_once_with(host="0.0.0.0", port=9000, runtime=cli_runtime)
        server.run.assert_called_once_with(transport="streamable-http")

    def test_transport_defaults_to_settings(
        self, cli_runner: CliRunner, cli_runtime: Any, tmp_path: Any
    ) -> None:
        (tmp_path / "datotools.toml").write_text('[mcp]\ntransport = "sse"\n')
        server = MagicMock()
        with (
            patch("datotools.mcp.server.mcp_available", True),
            patch("datotools.mcp.server.create_server", return_value=server),
        ):
            result = cli_runner.invoke(cli, ["serve"])
        assert result.exit_code == 0, result.output
        server.run.assert_called_once_with(transport="sse")
