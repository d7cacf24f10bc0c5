"""Timing a block of work and reporting how long it took."""

from __future__ import annotations

import sys
import time
from typing import Optional, TextIO


def format_duration(microseconds: float) -> str:
    """Render a duration in seconds, milliseconds or microseconds."""
    if microseconds >= 1_000_000:
        return f"{microseconds / 1_000_000:g}s"
    if microseconds >= 1000:
        return f"{microseconds / 1000:g}ms"
    return f"{microseconds:g}us"


class Timer:
    """Measures from creation and prints ``message`` with the elapsed time.

    Used as a context manager it reports on exit unless already stopped.
    """

    def __init__(self, message: str, stream: Optional[TextIO] = None) -> None:
        self.message = message
        self.stream = stream
        self.stopped = False
        self._start = time.perf_counter_ns()

    def stop(self) -> str:
        """Write and return the elapsed-time line."""
        elapsed_us = (time.perf_counter_ns() - self._start) // 1000
        line = f"{self.message} {format_duration(elapsed_us)}\n"
        (self.stream if self.stream is not None else sys.stdout).write(line)
        self.stopped = True
        return line

    def __enter__(self) -> Timer:
        return self

    def __exit__(self, *exc_info: object) -> None:
        if not self.stopped:
            self.stop()