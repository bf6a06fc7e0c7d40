"""Configuration: MatchConfig, environment detection and initialization."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from klaw_match._logging import configure_logging

__all__ = [
    'MatchConfig',
    'get_config',
    'init',
]

_TRUTHY = frozenset({'1', 'true', 'yes', 'on'})
_FALSY = frozenset({'', '0', 'false', 'no', 'off'})


@dataclass(frozen=True)
class MatchConfig:
    """Configuration for klaw-match.

    Attributes:
        trace: Emit debug events for compiled patterns and match calls.
        log_level: Logging level (e.g., "DEBUG", "INFO"). None = leave logging alone.
        json_output: Render logs as JSON rather than colored console output.
    """

    trace: bool = False
    log_level: str | None = None
    json_output: bool = True


# Global configuration (set by init(), or lazily by get_config())
_config: MatchConfig | None = None


def _detect_trace() -> bool:
    """Read KLAW_MATCH_TRACE from the environment."""
    raw = os.environ.get('KLAW_MATCH_TRACE', '').strip().lower()
    if raw in _TRUTHY:
        return True
    if raw not in _FALSY:
        logging.warning("Unknown KLAW_MATCH_TRACE value '%s', tracing disabled", raw)
    return False


def _detect_log_level() -> str | None:
    """Read KLAW_MATCH_LOG_LEVEL from the environment."""
    raw = os.environ.get('KLAW_MATCH_LOG_LEVEL', '').strip()
    return raw.upper() or None


def init(
    trace: bool | None = None,
    log_level: str | None = None,
    *,
    json_output: bool = True,
) -> MatchConfig:
    """Initialize klaw-match with the given configuration.

    Args:
        trace: Emit match trace events. Read from KLAW_MATCH_TRACE if None.
        log_level: Logging level. Read from KLAW_MATCH_LOG_LEVEL if None;
            when neither is set logging is not configured.
        json_output: Render logs as JSON.

    Returns:
        The MatchConfig that was set.

    Example:
        ```python
        from klaw_match import init

        init(trace=True, log_level='DEBUG', json_output=False)
        ```
    """
    global _config  # noqa: PLW0603

    _config = MatchConfig(
        trace=_detect_trace() if trace is None else trace,
        log_level=_detect_log_level() if log_level is None else log_level,
        json_output=json_output,
    )

    if _config.log_level is not None:
        configure_logging(_config.log_level, json_output=json_output)

    return _config


def get_config() -> MatchConfig:
    """Get the current configuration.

    When init() was never called the configuration is read from the
    environment, without configuring logging.
    """
    global _config  # noqa: PLW0603

    if _config is None:
        _config = MatchConfig(trace=_detect_trace(), log_level=_detect_log_level())
    return _config
