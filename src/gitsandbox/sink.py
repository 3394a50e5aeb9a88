"""Line-buffering text sink that fans completed lines out to two consumers."""

import io
from typing import List, Protocol

from .constants import SINK_ENCODING


class LineReporter(Protocol):
    def report_line(self, text: str) -> None: ...


class LineAccumulator(Protocol):
    def append_line(self, text: str) -> None: ...


class LineBufferingLogSink(io.TextIOBase):
    """Turn character writes into line records for a reporter and an accumulator.

    Characters are buffered until a newline arrives; the completed line goes
    to the reporter first and the accumulator second. Closing the sink
    delivers any pending partial line. Consumer errors propagate unchanged.

    Not thread-safe: a sink expects a single writer. Close it explicitly
    (or use it as a context manager); a sink left to the garbage collector
    flushes whenever it is finalized, possibly after its reporter is done.
    """

    def __init__(self, reporter: LineReporter, accumulator: LineAccumulator):
        """Initialize the sink.

        Args:
            reporter: Per-test report channel (``report_line``).
            accumulator: Shared text buffer (``append_line``).
        """
        super().__init__()
        self.reporter = reporter
        self.accumulator = accumulator
        self._buffer: List[str] = []

    @property
    def encoding(self) -> str:
        return SINK_ENCODING

    def writable(self) -> bool:
        return True

    def write(self, text: str) -> int:
        """Buffer ``text`` one character at a time, emitting on each newline.

        Args:
            text: Characters to write; a single character or a whole string.

        Returns:
            Number of characters consumed.
        """
        if self.closed:
            raise ValueError("I/O operation on closed sink.")
        for ch in text:
            if ch == "\n":
                self._emit()
            else:
                self._buffer.append(ch)
        return len(text)

    def close(self) -> None:
        """Deliver a pending partial line, then close the sink."""
        if self.closed:
            return
        try:
            if self._buffer:
                self._emit()
        finally:
            super().close()

    def _emit(self) -> None:
        line = "".join(self._buffer)
        self._buffer.clear()
        self.reporter.report_line(line)
        self.accumulator.append_line(line)
