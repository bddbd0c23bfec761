# Area: Shared
"""
edugame._shared.logging_config — Structured logging setup
=========================================================

Configures dual logging: terminal (colored) + file (JSON lines).
Provides a helper for printing structured engine error blocks.
"""

from __future__ import annotations
import logging
import json
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Optional, Union

if TYPE_CHECKING:
    from ..config import EngineSettings
    from ..errors import EdugameError

# Package logger
logger = logging.getLogger("edugame")


class TerminalFormatter(logging.Formatter):
    """Colored formatter for terminal output."""

    COLORS = {
        "DEBUG": "\033[36m",     # Cyan
        "INFO": "\033[32m",      # Green
        "WARNING": "\033[33m",   # Yellow
        "ERROR": "\033[31m",     # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, self.RESET)
        record = logging.makeLogRecord(record.__dict__)
        record.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(record)


class JSONFormatter(logging.Formatter):
    """JSON formatter for file output."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_data)


def setup_logging(
    log_file_path: Optional[str] = "edugame.log",
    level: Union[int, str] = logging.INFO,
) -> logging.Logger:
    """
    Configure logging for the package.

    Parameters
    ----------
    log_file_path : str, optional
        Path to the JSON log file. ``None`` disables file logging.
    level : int or str
        Logging level. Defaults to INFO.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    pkg_logger = logging.getLogger("edugame")
    pkg_logger.setLevel(level)

    # Remove existing handlers
    pkg_logger.handlers.clear()

    terminal_handler = logging.StreamHandler(sys.stdout)
    terminal_handler.setLevel(level)
    terminal_handler.setFormatter(TerminalFormatter(
        fmt="%(asctime)s │ %(levelname)s │ %(name)s │ %(message)s",
        datefmt="%H:%M:%S",
    ))
    pkg_logger.addHandler(terminal_handler)

    if log_file_path:
        try:
            log_path = Path(log_file_path)
            log_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_path, encoding="utf-8")
            file_handler.setLevel(level)
            file_handler.setFormatter(JSONFormatter())
            pkg_logger.addHandler(file_handler)
        except OSError as e:
            pkg_logger.warning(f"Could not create log file: {e}")

    # Prevent propagation to root logger
    pkg_logger.propagate = False
    return pkg_logger


def setup_logging_from_settings(settings: "EngineSettings") -> logging.Logger:
    """Configure logging from loaded EngineSettings."""
    return setup_logging(log_file_path=settings.log_file, level=settings.log_level)


def log_engine_error(error: "EdugameError") -> None:
    """
    Print an engine error in the structured block format and log it.

    Parameters
    ----------
    error : EdugameError
        Any package error offering ``format_error_log()``.
    """
    formatter = getattr(error, "format_error_log", None)
    block = formatter() if callable(formatter) else str(error)

    # Print to terminal (bypassing logger for exact formatting)
    print(block, file=sys.stderr)

    logger.error(
        f"Engine error: {error.__class__.__name__}: {error}",
        extra={"error_type": error.__class__.__name__},
    )
