"""Shared pytest fixtures and configuration for the admiral-cli test suite.

Guidelines
----------
* No network access in any test.
* The service is stubbed with ``httpx.MockTransport`` at the client.
* Core tests must be pure — gateways are mocks.
* Tests must not depend on the user's environment or config files.
"""

from __future__ import annotations

import logging
import os
from typing import Any

import pytest

from service_stub import RecordingService


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Any) -> None:
    """Drop ADMIRAL_* variables and point the user config dir at tmp."""
    for key in list(os.environ):
        if key.startswith("ADMIRAL_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))


@pytest.fixture(autouse=True)
def _reset_package_logger() -> Any:
    """Undo ``setup_logging`` so caplog keeps seeing package records."""
    yield
    logger = logging.getLogger("admiral_cli")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def service() -> RecordingService:
    return RecordingService()
