"""Unified settings: CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  (CLI flags passed by Click)
  2. Env vars     (``DATOTOOLS_*`` prefix, ``__`` for nested sections)
  3. TOML file    (``datotools.toml`` discovered via walk-up)
  4. Code defaults baked into the section models
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

import click
from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from datotools.config.discovery import find_config
from datotools.config.models import BackendConfig, McpConfig, RetryConfig


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``datotools.toml`` file."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                raise click.ClickException(f"Invalid TOML in {toml_path}: {exc}") from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# Thread-local storage for the TOML path during construction.
_tls = threading.local()


class DatoSettings(BaseSettings):
    """Settings for the datotools CLI and MCP server.

    Stored in ``click.Context.obj`` (via AppContext) at the CLI root and
    handed to ``build_runtime``.

    Attributes:
        config_path: The TOML file that was loaded, if any.
        api_token: Fallback token for ``datotools call`` when the supplied
            arguments carry no ``apiToken``.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "DATOTOOLS_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    api_token: SecretStr | None = None

    # --- TOML sections ---
    backend: BackendConfig = Field(default_factory=BackendConfig)
    retry: RetryConfig = Field(default_factory=RetryConfig)
    mcp: McpConfig = Field(default_factory=McpConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert the TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        start: Path | None = None,
        **cli_flags: Any,
    ) -> DatoSettings:
        """Construct settings from a CLI invocation.

        Uses *config_path* when given, otherwise discovers ``datotools.toml``
        by walking up from *start*. CLI flags override everything else.
        """
        if config_path:
            toml_path: Path | None = Path(config_path)
            if not toml_path.is_file():
                raise click.ClickException(f"Config file not found: {config_path}")
        else:
            toml_path = find_config(start)

        _tls.toml_path = toml_path
        try:
            return cls(config_path=toml_path, **cli_flags)
        finally:
            _tls.toml_path = None
