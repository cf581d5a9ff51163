"""Two-stage interrupt handling: drain on the first signal, exit on the second."""
from __future__ import annotations

import enum
import logging
import os
import signal
import sys
import threading
from typing import Callable, Dict, Iterable, Optional, TextIO

from headword_index.cursor import Cursor

logger = logging.getLogger(__name__)

__all__ = ["RunState", "InterruptController", "DEFAULT_SIGNALS"]

DEFAULT_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class RunState(enum.Enum):
    """Lifecycle of a run with respect to operator interrupts."""

    RUNNING = "running"
    DRAINING = "draining"
    TERMINATED = "terminated"


class InterruptController:
    """
    Turn SIGINT/SIGTERM into a drain-then-kill sequence.

    First signal: truncate the cursor so no new pages are claimed; pages
    already in flight finish and buffered results are still flushed.
    Second signal: exit the process immediately with status 1, discarding
    anything not yet written.

    Python only delivers signals to the main thread, so the handler runs
    there while the main thread waits on the worker pool; it stays installed
    through the draining phase.
    """

    def __init__(
            self,
            cursor: Cursor,
            *,
            signals: Iterable[int] = DEFAULT_SIGNALS,
            exit_func: Callable[[int], None] = os._exit,
            stream: Optional[TextIO] = None,
    ):
        """
        Initialize controller.

        Args:
            cursor: Cursor to truncate on the first interrupt
            signals: Signal numbers to handle
            exit_func: Called with the exit status on the second interrupt
            stream: Status stream cleared before exiting (default: sys.stderr)
        """
        self.cursor = cursor
        self.signals = tuple(signals)
        self.exit_func = exit_func
        self.stream = stream if stream is not None else sys.stderr

        # Reentrant: a signal can arrive while the main thread holds it
        self._lock = threading.RLock()
        self._state = RunState.RUNNING
        self._previous: Dict[int, object] = {}

    @property
    def state(self) -> RunState:
        with self._lock:
            return self._state

    @property
    def interrupted(self) -> bool:
        """True once at least one interrupt has been received."""
        return self.state is not RunState.RUNNING

    def handle(self, signum: int, frame=None) -> None:
        """Signal handler; also callable directly to request a drain."""
        with self._lock:
            if self._state is RunState.RUNNING:
                self._state = RunState.DRAINING
                escalate = False
            else:
                self._state = RunState.TERMINATED
                escalate = True

        if not escalate:
            limit = self.cursor.truncate()
            logger.warning(
                "Received %s: no new pages after index %d; finishing in-flight work "
                "(interrupt again to quit immediately)",
                _signal_name(signum), limit,
            )
            return

        self.stream.write("\r")
        self.stream.flush()
        logger.critical("user interrupted")
        for handler in logging.getLogger().handlers:
            handler.flush()
        self.exit_func(1)

    def install(self) -> bool:
        """
        Install handlers for the configured signals.

        Returns:
            True if installed; False when not called from the main thread
        """
        if threading.current_thread() is not threading.main_thread():
            logger.warning("Not on the main thread; interrupt handling disabled")
            return False
        for signum in self.signals:
            self._previous[signum] = signal.signal(signum, self.handle)
        return True

    def restore(self) -> None:
        """Put back the handlers that were active before install()."""
        for signum, previous in self._previous.items():
            signal.signal(signum, previous if previous is not None else signal.SIG_DFL)
        self._previous.clear()

    def __enter__(self) -> "InterruptController":
        self.install()
        return self

    def __exit__(self, *exc) -> None:
        self.restore()


def _signal_name(signum: int) -> str:
    try:
        return signal.Signals(signum).name
    except ValueError:
        return str(signum)
