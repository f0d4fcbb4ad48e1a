"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults live here, ``datotools.toml`` only holds
overrides. A fresh install needs no config file at all.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, model_validator

DEFAULT_BASE_URL = "https://site-api.datocms.com"


class BackendConfig(BaseModel):
    """[backend] section: how sessions reach the DatoCMS API."""

    model_config = {"frozen": True}

    base_url: str = DEFAULT_BASE_URL
    api_version: str = "3"
    timeout: float = Field(default=30.0, gt=0)
    job_poll_interval: float = Field(default=1.0, ge=0)
    job_poll_attempts: int = Field(default=60, ge=1)


class RetryConfig(BaseModel):
    """[retry] section: bounded backoff for read operations."""

    model_config = {"frozen": True}

    enabled: bool = True
    max_attempts: int = Field(default=3, ge=1)
    wait_min: float = Field(default=0.5, ge=0)
    wait_max: float = Field(default=8.0, ge=0)

    @model_validator(mode="after")
    def _ordered_waits(self) -> RetryConfig:
        if self.wait_max < self.wait_min:
            raise ValueError("retry.wait_max must be >= retry.wait_min")
        return self


class McpConfig(BaseModel):
    """[mcp] section."""

    model_config = {"frozen": True}

    transport: Literal["stdio", "sse", "streamable-http"] = "stdio"
    host: str = "127.0.0.1"
    port: int = Field(default=8000, ge=1, le=65535)
