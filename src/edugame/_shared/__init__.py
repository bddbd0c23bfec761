# Area: Shared
"""Shared utilities used across the engine (logging)."""

from .logging_config import (
    JSONFormatter,
    TerminalFormatter,
    log_engine_error,
    setup_logging,
    setup_logging_from_settings,
)

__all__ = [
    "JSONFormatter",
    "TerminalFormatter",
    "log_engine_error",
    "setup_logging",
    "setup_logging_from_settings",
]
