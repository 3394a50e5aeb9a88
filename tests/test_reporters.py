"""Tests for the line consumers."""

import logging

import pytest

from gitsandbox.constants import REPORT_LOGGER_NAME
from gitsandbox.reporters import LoggingReporter, OutputAccumulator, ReporterClosedError
from gitsandbox.sink import LineBufferingLogSink


class TestOutputAccumulator:
    """Test the OutputAccumulator class."""

    def test_text_joins_lines_with_newlines(self):
        """Every appended line is newline-terminated."""
        acc = OutputAccumulator()
        acc.append_line("a")
        acc.append_line("")
        acc.append_line("b")

        assert acc.text == "a\n\nb\n"

    def test_empty_text(self):
        """Nothing appended means empty text."""
        assert OutputAccumulator().text == ""

    def test_text_cached_after_first_read(self):
        """Lines appended after the first read are not reflected in text."""
        acc = OutputAccumulator()
        acc.append_line("before")
        first = acc.text

        acc.append_line("after")

        assert acc.text == first == "before\n"
        assert acc.lines == ["before", "after"]

    def test_lines_returns_copy(self):
        """Mutating the returned list does not touch the accumulator."""
        acc = OutputAccumulator()
        acc.append_line("x")
        acc.lines.append("y")

        assert acc.lines == ["x"]


class TestLoggingReporter:
    """Test the LoggingReporter class."""

    def test_report_line_logs_info(self, caplog):
        """Lines are logged at INFO on the given logger."""
        logger = logging.getLogger("gitsandbox.test.report")
        reporter = LoggingReporter("tests/test_x.py::test_y", logger)

        with caplog.at_level(logging.INFO, logger="gitsandbox.test.report"):
            reporter.report_line("Rewrote 2 commits")

        assert [r.getMessage() for r in caplog.records] == ["Rewrote 2 commits"]
        assert caplog.records[0].levelno == logging.INFO

    def test_default_logger(self):
        """Without a logger the reporter uses the report logger."""
        reporter = LoggingReporter("t")
        assert reporter.logger.name == REPORT_LOGGER_NAME

    def test_report_after_finish_raises(self):
        """A finished test rejects further output."""
        reporter = LoggingReporter("tests/test_x.py::test_y")
        reporter.finish()

        with pytest.raises(ReporterClosedError, match="test_y"):
            reporter.report_line("late")

    def test_sink_propagates_closed_reporter(self):
        """Writing through a sink after the test finished fails loudly."""
        reporter = LoggingReporter("t")
        acc = OutputAccumulator()
        sink = LineBufferingLogSink(reporter, acc)
        reporter.finish()

        with pytest.raises(ReporterClosedError):
            sink.write("late\n")
        assert acc.lines == []
        sink.close()
