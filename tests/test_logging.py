"""Tests for the logging provider and formatter."""

from __future__ import annotations

import logging

import pytest

from gradeworks.core import GradeworksContainer, LoggingProvider
from gradeworks.core.provider import TraceLevel
from gradeworks.lib.logging import ExtraFormatter


def _record(msg: str, *args: object, **extra: object) -> logging.LogRecord:
    record = logging.LogRecord("gradeworks.test", logging.INFO, __file__, 1, msg, args, None)
    record.__dict__.update(extra)
    return record


class TestExtraFormatter(object):
    def test_appends_extra_fields_as_json(self) -> None:
        formatter = ExtraFormatter(logging.Formatter, "%(levelname)s %(message)s", indent=False)

        line = formatter.format(_record("built %d roots", 3, subject="PRJ301", count=3))

        assert line == 'INFO built 3 roots {"count": 3, "subject": "PRJ301"}'

    def test_plain_message_without_extra(self) -> None:
        formatter = ExtraFormatter(logging.Formatter, "%(message)s")

        assert formatter.format(_record("validated grade forest")) == "validated grade forest"

    def test_indents_continuation_lines(self) -> None:
        formatter = ExtraFormatter(logging.Formatter, "%(levelname)s %(message)s")

        assert formatter.format(_record("first\nsecond")) == "INFO first\n     second"


class TestLoggingProvider(object):
    def test_registers_trace_level(self, container: GradeworksContainer) -> None:
        container.logging()

        assert logging.getLevelName(5) == "TRACE"

    def test_loggers_gain_trace(self, container: GradeworksContainer, caplog: pytest.LogCaptureFixture) -> None:
        logger = LoggingProvider.get_logger(name="gradeworks.test_logging.trace")
        caplog.set_level(TraceLevel, logger=logger.name)

        logger.trace("visited %d components", 4)

        assert [(r.levelname, r.getMessage()) for r in caplog.records] == [("TRACE", "visited 4 components")]

    def test_names_loggers_after_caller(self) -> None:
        assert LoggingProvider.get_logger().name == __name__
        assert LoggingProvider.get_logger("cls").name == f"{__name__}.TestLoggingProvider"
        function_logger = LoggingProvider.get_logger("fn")
        assert function_logger.name == f"{__name__}.TestLoggingProvider.test_names_loggers_after_caller"
        assert LoggingProvider.get_logger(name="gradeworks.grading").name == "gradeworks.grading"
