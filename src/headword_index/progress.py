# headword_index/progress.py
"""Progress tracking and rendering for harvesting runs."""

from __future__ import annotations

import sys
import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional, TextIO

from tqdm import tqdm

__all__ = ["ProgressSnapshot", "ProgressFormatter", "ProgressReporter"]

SPINNER = "|/-\\"


@dataclass(frozen=True)
class ProgressSnapshot:
    """Immutable snapshot of progress at a point in time."""

    completed: int
    total: int
    elapsed: float

    @property
    def ratio(self) -> float:
        """Completed fraction (0.0 to 1.0)."""
        if self.total <= 0:
            return 0.0
        return self.completed / self.total

    @property
    def eta_seconds(self) -> Optional[float]:
        """Linear extrapolation of remaining time, None until it is defined."""
        if self.completed < 1 or self.elapsed <= 0:
            return None
        rate = self.completed / self.elapsed
        return (self.total - self.completed) / rate


class ProgressFormatter:
    """Formatting helpers for the single-line progress display."""

    @staticmethod
    def spinner_glyph(now_ns: int) -> str:
        """Spinner frame for a wall-clock time (changes every ~268 ms)."""
        return SPINNER[(now_ns >> 28) % 4]

    @staticmethod
    def format_eta(seconds: Optional[float]) -> str:
        if seconds is None:
            return "?"
        return tqdm.format_interval(int(seconds))

    @classmethod
    def format_line(cls, snapshot: ProgressSnapshot, *, fancy: bool, now_ns: int) -> str:
        """
        Format a progress line, framed by carriage returns.

        Plain:  "| 12.34% done"
        Fancy:  "| 12.34% done, elapsed 01:02, eta 07:24"
        """
        glyph = cls.spinner_glyph(now_ns)
        pct = snapshot.ratio * 100.0

        if not fancy:
            return f"\r{glyph} {pct:.2f}% done\r"

        elapsed_str = tqdm.format_interval(int(snapshot.elapsed))
        eta_str = cls.format_eta(snapshot.eta_seconds)
        return f"\r{glyph} {pct:.2f}% done, elapsed {elapsed_str}, eta {eta_str:<12}\r"


class ProgressReporter:
    """
    Count completed pages and render progress on a background thread.

    Workers call tick(), which only bumps a counter under a lock. A single
    render thread samples that counter every ``interval`` seconds, so a slow
    terminal never holds up the workers.
    """

    def __init__(
            self,
            total: int,
            *,
            mode: str = "plain",
            stream: Optional[TextIO] = None,
            interval: float = 0.1,
            clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize reporter.

        Args:
            total: Number of pages in the run
            mode: "off", "plain" or "fancy"
            stream: Status stream (default: sys.stderr)
            interval: Seconds between renders
            clock: Monotonic clock used for elapsed time
        """
        self.total = total
        self.mode = mode
        self.stream = stream if stream is not None else sys.stderr
        self.interval = interval
        self._clock = clock

        self._lock = threading.Lock()
        self._completed = 0
        self._start = clock()

        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def enabled(self) -> bool:
        return self.mode != "off"

    def tick(self) -> None:
        """Record one completed page."""
        with self._lock:
            self._completed += 1

    @property
    def completed(self) -> int:
        with self._lock:
            return self._completed

    def snapshot(self) -> ProgressSnapshot:
        """Capture current progress."""
        with self._lock:
            completed = self._completed
        return ProgressSnapshot(
            completed=completed,
            total=self.total,
            elapsed=max(0.0, self._clock() - self._start),
        )

    def render(self) -> None:
        """Write one progress line to the status stream."""
        line = ProgressFormatter.format_line(
            self.snapshot(),
            fancy=self.mode == "fancy",
            now_ns=time.time_ns(),
        )
        self.stream.write(line)
        self.stream.flush()

    def start(self) -> None:
        """Reset the clock and start the render thread (no-op when off)."""
        self._start = self._clock()
        if not self.enabled or self._thread is not None:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._run, name="hwi-progress", daemon=True
        )
        self._thread.start()

    def stop(self) -> None:
        """Stop the render thread after one final render."""
        if self._thread is None:
            return
        self._stop_event.set()
        self._thread.join()
        self._thread = None
        self.stream.write("\n")
        self.stream.flush()

    def _run(self) -> None:
        while not self._stop_event.wait(self.interval):
            self.render()
        self.render()

    def __enter__(self) -> "ProgressReporter":
        self.start()
        return self

    def __exit__(self, *exc) -> None:
        self.stop()
