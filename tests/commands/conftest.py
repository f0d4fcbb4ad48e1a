"""Fixtures for CLI command tests."""

from __future__ import annotations

from collections.abc import Generator
from unittest.mock import patch

import pytest

from datotools.services.runtime import Runtime


@pytest.fixture
def cli_runtime(runtime: Runtime) -> Generator[Runtime]:
    """Make every AppContext in the test use the stub-backed runtime."""
    with patch("datotools.services.runtime.build_runtime", return_value=runtime):
        yield runtime
