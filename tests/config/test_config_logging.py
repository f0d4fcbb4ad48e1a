"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging
from collections.abc import Generator

import pytest
import structlog

from datotools.config.logging import configure_logging, token_fingerprint


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    dato = logging.getLogger("datotools")
    dato_level = dato.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    dato.setLevel(dato_level)
    structlog.reset_defaults()


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True)
        assert logging.getLogger("datotools").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False)
        assert logging.getLogger("datotools").level == logging.WARNING

    def test_httpx_stays_quiet(self) -> None:
        configure_logging(verbose=True)
        assert logging.getLogger("httpx").level == logging.WARNING

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        structlog.get_logger("datotools.test").warning("json test", answer=42)
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "json test"
        assert parsed["answer"] == 42
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "datotools.test"
        assert "timestamp" in parsed

    def test_stdlib_logger_gets_structured_fields(
        self, capfd: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("datotools.infrastructure").debug("GET %s", "/items")
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "GET /items"
        assert parsed["level"] == "debug"

    def test_nothing_on_stdout(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        structlog.get_logger("datotools.test").warning("to stderr")
        assert capfd.readouterr().out == ""


class TestTokenFingerprint:
    def test_stable_and_short(self) -> None:
        assert token_fingerprint("abc") == token_fingerprint("abc")
        assert len(token_fingerprint("abc")) == 12

    def test_does_not_leak_token(self) -> None:
        assert "secret" not in token_fingerprint("secret")

    def test_distinct_tokens_differ(self) -> None:
        assert token_fingerprint("a") != token_fingerprint("b")
