"""Result collection for harvest workers."""
from __future__ import annotations

import logging
import sys
import threading
from typing import Dict, Optional, TextIO

from headword_index.io.write import format_record, write_records

logger = logging.getLogger(__name__)

__all__ = ["Collector", "StreamCollector", "BufferedCollector"]


class Collector:
    """
    Base class for thread-safe result sinks.

    Workers call add() from many threads at once; subclasses do their
    bookkeeping under self._lock, which is never held across network I/O
    and is independent of the cursor's lock.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._added = 0

    def add(self, key: int, value: str) -> None:
        """Record the headword for a page index."""
        raise NotImplementedError

    def flush(self) -> int:
        """
        Write anything still pending to the destination.

        Returns:
            Number of records written by this call
        """
        return 0

    @property
    def added(self) -> int:
        """Number of records accepted so far."""
        with self._lock:
            return self._added


class StreamCollector(Collector):
    """
    Immediate mode: each record is written to the stream as it arrives.

    Records appear in completion order, not index order.
    """

    def __init__(self, stream: Optional[TextIO] = None):
        """
        Initialize stream collector.

        Args:
            stream: Text stream for records (default: sys.stdout)
        """
        super().__init__()
        self.stream = stream if stream is not None else sys.stdout

    def add(self, key: int, value: str) -> None:
        line = format_record(key, value) + "\n"
        with self._lock:
            self.stream.write(line)
            self.stream.flush()
            self._added += 1


class BufferedCollector(Collector):
    """
    Buffered mode: records are kept in memory and written once by flush().

    A repeated index overwrites the earlier value, so each index appears at
    most once in the output.
    """

    def __init__(self, out: TextIO, *, sort_keys: bool = True):
        """
        Initialize buffered collector.

        Args:
            out: Open text stream the CSV is written to at flush time
            sort_keys: Write records in ascending index order
        """
        super().__init__()
        self.out = out
        self.sort_keys = sort_keys
        self.pending: Dict[int, str] = {}
        self.total_written = 0

    def add(self, key: int, value: str) -> None:
        with self._lock:
            self.pending[key] = value
            self._added += 1

    def flush(self) -> int:
        """
        Write the header and every buffered record to the output stream.

        Raises:
            OSError: If writing fails (the buffer is kept for inspection)
        """
        with self._lock:
            try:
                written = write_records(self.out, self.pending, sort_keys=self.sort_keys)
            except OSError:
                logger.error(
                    "Write error for %d buffered records; output is incomplete",
                    len(self.pending),
                )
                raise
            self.total_written += written
            return written

    def snapshot(self) -> Dict[int, str]:
        """Copy of the records buffered so far."""
        with self._lock:
            return dict(self.pending)
