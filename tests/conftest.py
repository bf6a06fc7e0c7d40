"""Shared fixtures for klaw-match tests."""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest
import structlog

from klaw_match import _config
from klaw_match._logging import LOGGER_NAME


@pytest.fixture(autouse=True)
def reset_config(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Start every test from an untouched configuration and environment."""
    monkeypatch.delenv('KLAW_MATCH_TRACE', raising=False)
    monkeypatch.delenv('KLAW_MATCH_LOG_LEVEL', raising=False)
    monkeypatch.setattr(_config, '_config', None)

    logger = logging.getLogger(LOGGER_NAME)
    handlers, level, propagate = logger.handlers[:], logger.level, logger.propagate
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate

    structlog.reset_defaults()
