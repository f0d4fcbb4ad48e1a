"""Configuration: pydantic-settings object, TOML discovery, structlog setup."""
