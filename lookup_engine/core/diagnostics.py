"""Per-member cost probes.

Each diagnoser measures one window at a time: start() before a single
member evaluation, stop() right after it, then one read. Reads reset the
markers, so a stop or read with no matching start reports zero.
"""

import logging
import time
import tracemalloc
from datetime import timedelta

logger = logging.getLogger(__name__)


class TimeDiagnoser:
    """Measures wall time of one evaluation with a monotonic clock."""

    def __init__(self) -> None:
        self._start_ns = 0
        self._end_ns = 0

    def start(self) -> None:
        self._start_ns = time.perf_counter_ns()
        self._end_ns = 0

    def stop(self) -> None:
        if self._start_ns:
            self._end_ns = time.perf_counter_ns()

    def read_elapsed_time(self) -> timedelta:
        elapsed_ns = 0
        if self._start_ns and self._end_ns >= self._start_ns:
            elapsed_ns = self._end_ns - self._start_ns

        self._start_ns = 0
        self._end_ns = 0
        return timedelta(microseconds=elapsed_ns / 1000)


class MemoryDiagnoser:
    """Measures memory allocated during one evaluation using tracemalloc.

    If tracing is not already active, the diagnoser turns it on for the
    window and off again at stop(), leaving the process as it found it, and
    reports the peak reached inside the window. If the caller is already
    tracing, its peak is left untouched and the reading is the net growth of
    traced memory over the window.
    """

    def __init__(self) -> None:
        self._baseline: int | None = None
        self._allocated = 0
        self._owns_tracing = False

    def start(self) -> None:
        self._allocated = 0
        self._owns_tracing = not tracemalloc.is_tracing()
        if self._owns_tracing:
            tracemalloc.start()
            tracemalloc.reset_peak()
        self._baseline = tracemalloc.get_traced_memory()[0]

    def stop(self) -> None:
        if self._baseline is None:
            return

        if tracemalloc.is_tracing():
            current, peak = tracemalloc.get_traced_memory()
            # Caller-owned trace: peak not reset, net growth only
            reached = peak if self._owns_tracing else current
            self._allocated = max(reached - self._baseline, 0)
        else:
            logger.debug("tracemalloc was stopped during a measurement window")
            self._allocated = 0

        if self._owns_tracing and tracemalloc.is_tracing():
            tracemalloc.stop()
        self._owns_tracing = False
        self._baseline = None

    def read_allocated_bytes(self) -> int:
        allocated = self._allocated
        if self._owns_tracing and tracemalloc.is_tracing():
            tracemalloc.stop()
        self._owns_tracing = False
        self._allocated = 0
        self._baseline = None
        return allocated
