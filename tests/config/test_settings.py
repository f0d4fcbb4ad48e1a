"""Tests for DatoSettings: unified settings with a TOML source."""

from __future__ import annotations

from pathlib import Path

import click
import pytest

from datotools.config.settings import DatoSettings


class TestDefaults:
    def test_all_defaults(self, tmp_path: Path) -> None:
        settings = DatoSettings.from_cli(start=tmp_path)
        assert settings.config_path is None
        assert settings.json_output is False
        assert settings.api_token is None
        assert settings.backend.base_url == "https://site-api.datocms.com"
        assert settings.retry.max_attempts == 3
        assert settings.mcp.transport == "stdio"

    def test_frozen(self, tmp_path: Path) -> None:
        settings = DatoSettings.from_cli(start=tmp_path)
        with pytest.raises(Exception):
            settings.quiet = True  # type: ignore[misc]


class TestTomlSource:
    def test_loads_sections(self, tmp_path: Path) -> None:
        (tmp_path / "datotools.toml").write_text(
            '[backend]\ntimeout = 5.0\n[mcp]\ntransport = "sse"\nport = 9000\n'
        )
        settings = DatoSettings.from_cli(start=tmp_path)
        assert settings.backend.timeout == 5.0
        assert settings.mcp.transport == "sse"
        assert settings.mcp.port == 9000
        assert settings.backend.api_version == "3"

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        custom = tmp_path / "custom" / "dato.toml"
        custom.parent.mkdir()
        custom.write_text("[retry]\nenabled = false\n")
        settings = DatoSettings.from_cli(config_path=str(custom))
        assert settings.retry.enabled is False
        assert settings.config_path == custom

    def test_missing_config_path(self, tmp_path: Path) -> None:
        with pytest.raises(click.ClickException, match="Config file not found"):
            DatoSettings.from_cli(config_path=str(tmp_path / "nope.toml"))

    def test_invalid_toml(self, tmp_path: Path) -> None:
        (tmp_path / "datotools.toml").write_text("[backend\n")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            DatoSettings.from_cli(start=tmp_path)

    def test_invalid_value(self, tmp_path: Path) -> None:
        (tmp_path / "datotools.toml").write_text("[retry]\nwait_min = 5.0\nwait_max = 1.0\n")
        with pytest.raises(ValueError, match="wait_max"):
            DatoSettings.from_cli(start=tmp_path)


class TestPriority:
    def test_env_overrides_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "datotools.toml").write_text("[mcp]\nport = 9000\n")
        monkeypatch.setenv("DATOTOOLS_MCP__PORT", "9100")
        settings = DatoSettings.from_cli(start=tmp_path)
        assert settings.mcp.port == 9100

    def test_cli_flags_override_env(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("DATOTOOLS_VERBOSE", "false")
        settings = DatoSettings.from_cli(start=tmp_path, verbose=True, json_output=True)
        assert settings.verbose is True
        assert settings.json_output is True

    def test_api_token_from_env_is_secret(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("DATOTOOLS_API_TOKEN", "secret-token")
        settings = DatoSettings.from_cli(start=tmp_path)
        assert settings.api_token is not None
        assert settings.api_token.get_secret_value() == "secret-token"
        assert "secret-token" not in repr(settings)
