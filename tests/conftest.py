"""Shared pytest fixtures and test helpers for datotools tests."""

from __future__ import annotations

import os
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from datotools.config.models import RetryConfig
from datotools.config.settings import DatoSettings
from datotools.services.runtime import Runtime, build_runtime
from datotools.services.telemetry import _current_span, disable_telemetry


class StubBackend:
    """Call-counting stand-in for ContentBackend.

    Any capability method can be called; it records ``(name, args, kwargs)``
    and returns the canned response for *name* (a value, or a callable that
    receives the call arguments). Entries in ``errors`` are raised instead.
    """

    def __init__(
        self,
        responses: dict[str, Any] | None = None,
        errors: dict[str, BaseException] | None = None,
    ) -> None:
        self.responses: dict[str, Any] = dict(responses or {})
        self.errors: dict[str, BaseException] = dict(errors or {})
        self.calls: list[tuple[str, tuple[Any, ...], dict[str, Any]]] = []

    def __getattr__(self, name: str) -> Callable[..., Any]:
        if name.startswith("_"):
            raise AttributeError(name)

        def method(*args: Any, **kwargs: Any) -> Any:
            self.calls.append((name, args, kwargs))
            if name in self.errors:
                raise self.errors[name]
            value = self.responses.get(name)
            return value(*args, **kwargs) if callable(value) else value

        return method

    def called(self, name: str) -> list[tuple[tuple[Any, ...], dict[str, Any]]]:
        return [(args, kwargs) for n, args, kwargs in self.calls if n == name]


@pytest.fixture(autouse=True)
def _isolated_environment(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[None]:
    """No ambient DATOTOOLS_* variables, config files or telemetry state."""
    for key in list(os.environ):
        if key.startswith("DATOTOOLS_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
    yield
    disable_telemetry()
    _current_span.set(None)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def backend() -> StubBackend:
    return StubBackend()


@pytest.fixture
def settings() -> DatoSettings:
    """Settings with retries disabled so failures surface immediately."""
    return DatoSettings(retry=RetryConfig(enabled=False))


@pytest.fixture
def runtime(settings: DatoSettings, backend: StubBackend) -> Runtime:
    """Fully wired runtime whose sessions are the stub backend."""
    return build_runtime(settings, session_factory=lambda token, environment: backend)
