"""Tests for tfpilot.logging (TfpilotLogging, level/format/color from config)."""

import logging
import sys

from tfpilot.config import LoggingConfig
from tfpilot.logging import (
    DEFAULT_FORMAT,
    DEFAULT_LEVEL,
    LEVELS,
    RESET_COLOR,
    ColorFormatter,
    TfpilotLogging,
    _resolve_level,
)


class TestResolveLevel:
    """_resolve_level maps level names to logging constants."""

    def test_known_levels(self) -> None:
        for name, value in LEVELS.items():
            assert _resolve_level(name) == value

    def test_lowercase_and_whitespace(self) -> None:
        assert _resolve_level(" debug ") == logging.DEBUG

    def test_unknown_level_returns_info(self) -> None:
        assert _resolve_level("TRACE") == logging.INFO
        assert _resolve_level("") == logging.INFO
        assert DEFAULT_LEVEL == "INFO"


class TestColorFormatter:
    """Level names are wrapped in ANSI colors by severity."""

    def _record(self, level: int) -> logging.LogRecord:
        return logging.LogRecord("tfpilot", level, __file__, 1, "msg %s", ("x",), None)

    def test_info_is_blue(self) -> None:
        out = ColorFormatter(DEFAULT_FORMAT).format(self._record(logging.INFO))
        assert out == f"\033[34;1mINFO{RESET_COLOR}: msg x"

    def test_error_is_red_and_record_restored(self) -> None:
        record = self._record(logging.ERROR)
        out = ColorFormatter(DEFAULT_FORMAT).format(record)
        assert out.startswith("\033[31;1mERROR")
        assert record.levelname == "ERROR"


class TestTfpilotLogging:
    """TfpilotLogging applies LoggingConfig to the root logger."""

    def test_setup_level_and_stderr(self) -> None:
        TfpilotLogging(LoggingConfig(level="WARNING", format="%(message)s", color=False)).setup()
        assert logging.root.level == logging.WARNING
        handler = logging.root.handlers[0]
        assert handler.stream is sys.stderr
        assert handler.formatter._fmt == "%(message)s"
        assert not isinstance(handler.formatter, ColorFormatter)

    def test_color_formatter_installed(self) -> None:
        TfpilotLogging(LoggingConfig(level="INFO", format="", color=True)).setup()
        fmt = logging.root.handlers[0].formatter
        assert isinstance(fmt, ColorFormatter)
        assert fmt._fmt == DEFAULT_FORMAT

    def test_get_logger(self) -> None:
        log = TfpilotLogging(LoggingConfig()).get_logger("tfpilot.test")
        assert log.name == "tfpilot.test"
