"""Line consumers fed by the output sink."""

import logging
from functools import cached_property
from typing import List, Optional

from .utils import setup_report_logger


class ReporterClosedError(RuntimeError):
    """Raised when a line is reported after its test has finished."""

    pass


class OutputAccumulator:
    """Append-only text buffer shared across a test fixture's lifetime."""

    def __init__(self) -> None:
        self._lines: List[str] = []

    def append_line(self, text: str) -> None:
        """Append a completed line.

        Args:
            text: Line content without its trailing newline.
        """
        self._lines.append(text)

    @property
    def lines(self) -> List[str]:
        """Return a copy of the lines appended so far."""
        return list(self._lines)

    @cached_property
    def text(self) -> str:
        """Full accumulated text, each line terminated by a newline.

        Computed on first access and cached; lines appended afterwards are
        not reflected, so read it only once all writers are done.
        """
        return "".join(f"{line}\n" for line in self._lines)


class LoggingReporter:
    """Per-test reporting channel that forwards lines to a logger.

    pytest attaches records emitted during a test to its report under
    "Captured log call", which makes this the report channel of choice.
    """

    def __init__(self, test_name: str, logger: Optional[logging.Logger] = None):
        """Initialize the reporter.

        Args:
            test_name: Identifier of the test this reporter belongs to.
            logger: Logger receiving the lines. Defaults to the report logger
                from ``setup_report_logger``.
        """
        self.test_name = test_name
        self.logger = logger or setup_report_logger()
        self.finished = False

    def report_line(self, text: str) -> None:
        """Route one line of output to the test report.

        Raises:
            ReporterClosedError: If the owning test has already finished.
        """
        if self.finished:
            raise ReporterClosedError(
                f"Test '{self.test_name}' has finished; cannot report: {text!r}"
            )
        self.logger.info(text)

    def finish(self) -> None:
        """Mark the owning test as finished."""
        self.finished = True
