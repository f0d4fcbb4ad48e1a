"""Tests for config discovery."""

from __future__ import annotations

from pathlib import Path

import pytest

from datotools.config.discovery import CONFIG_ENV_VAR, CONFIG_FILENAME, find_config


class TestFindConfig:
    def test_finds_in_current_dir(self, tmp_path: Path) -> None:
        config_file = tmp_path / CONFIG_FILENAME
        config_file.write_text("")
        assert find_config(tmp_path) == config_file

    def test_walks_up(self, tmp_path: Path) -> None:
        config_file = tmp_path / CONFIG_FILENAME
        config_file.write_text("")
        child = tmp_path / "a" / "b"
        child.mkdir(parents=True)
        assert find_config(child) == config_file

    def test_returns_none_when_not_found(self, tmp_path: Path) -> None:
        child = tmp_path / "empty"
        child.mkdir()
        assert find_config(child) is None

    def test_defaults_to_cwd(self, tmp_path: Path) -> None:
        config_file = tmp_path / CONFIG_FILENAME
        config_file.write_text("")
        assert find_config() == config_file.resolve()

    def test_env_var_override(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        config_file = tmp_path / "custom.toml"
        config_file.write_text("")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(config_file))
        assert find_config(tmp_path / "elsewhere") == config_file

    def test_dangling_env_var_disables_discovery(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / CONFIG_FILENAME).write_text("")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "missing.toml"))
        assert find_config(tmp_path) is None
