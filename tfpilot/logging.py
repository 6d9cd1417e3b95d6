"""Logging from config and env.

Levels (inclusive):
- ERROR: critical errors only
- WARNING: non-critical issues and ERROR
- INFO: progress messages, WARNING, and ERROR
- DEBUG: debugging and all levels above

Diagnostics always go to stderr so they never mix with terraform output on
stdout. Configure via tfpilot.yaml (logging.*) or env (LOGGING_LEVEL,
LOGGING_FORMAT, LOGGING_COLOR).
"""

import logging
import sys

from tfpilot.config import LoggingConfig

# Supported levels only (DEBUG, INFO, WARNING, ERROR)
LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}

DEFAULT_LEVEL = "INFO"
DEFAULT_FORMAT = "%(levelname)s: %(message)s"

RESET_COLOR = "\033[0m"
COLORS = {
    logging.DEBUG: "\033[36;1m",
    logging.INFO: "\033[34;1m",
    logging.WARNING: "\033[33;1m",
    logging.ERROR: "\033[31;1m",
    logging.CRITICAL: "\033[31;1m",
}


def _resolve_level(level: str) -> int:
    """Map level name to logging constant.

    Falls back to INFO if unknown.
    """
    return LEVELS.get(level.upper().strip(), logging.INFO)


class ColorFormatter(logging.Formatter):
    """Formatter that wraps the level name in an ANSI color by severity."""

    def format(self, record: logging.LogRecord) -> str:
        color = COLORS.get(record.levelno)
        if not color:
            return super().format(record)
        original = record.levelname
        record.levelname = f"{color}{original}{RESET_COLOR}"
        try:
            return super().format(record)
        finally:
            record.levelname = original


class TfpilotLogging:
    """Configures root logger from LoggingConfig (YAML + env LOGGING_*)."""

    def __init__(self, config: LoggingConfig) -> None:
        """Store logging config (level, format, color)."""
        self._level = _resolve_level(config.level)
        self._format = config.format or DEFAULT_FORMAT
        self._color = config.color

    def setup(self) -> None:
        """Apply level, format and stderr handler to the root logger."""
        logging.basicConfig(
            level=self._level,
            format=self._format,
            stream=sys.stderr,
            force=True,
        )
        if self._color:
            for handler in logging.root.handlers:
                handler.setFormatter(ColorFormatter(self._format))

    def get_logger(self, name: str) -> logging.Logger:
        """Return a logger with the given name (uses root config)."""
        return logging.getLogger(name)
