"""Concurrent page processing with a fixed pool of worker threads."""
from __future__ import annotations

import logging
from concurrent.futures import FIRST_COMPLETED, ThreadPoolExecutor, wait
from typing import Callable, Dict, List, Optional

from headword_index.collector import Collector
from headword_index.cursor import Cursor
from headword_index.io.fetch import Fetcher
from headword_index.progress import ProgressReporter
from headword_index.worker import WorkerStats, run_worker

logger = logging.getLogger(__name__)

__all__ = ["process_pages"]


def process_pages(
        cursor: Cursor,
        collector: Collector,
        progress: ProgressReporter,
        *,
        workers: int,
        fetcher_factory: Callable[[], Fetcher],
        base_url: str,
        selector: str,
        on_missing: str = "skip",
        poll_interval: float = 0.1,
) -> List[WorkerStats]:
    """
    Run ``workers`` worker loops until the cursor is exhausted.

    If a worker raises, the cursor is truncated so the remaining workers
    stop after their current page, and the first error is re-raised once
    every worker has returned.

    Args:
        cursor: Shared work cursor
        collector: Shared result sink
        progress: Shared progress reporter
        workers: Number of worker threads
        fetcher_factory: Builds one fetcher per worker
        base_url: URL prefix the index is appended to
        selector: CSS selector of the headword element
        on_missing: "skip" or "abort"
        poll_interval: Seconds between wake-ups of the waiting thread, so
                       interrupt handlers get a chance to run

    Returns:
        Per-worker statistics, ordered by worker id
    """
    stats: List[WorkerStats] = []
    first_error: Optional[BaseException] = None

    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="hwi-worker") as executor:
        futures: Dict[object, int] = {}
        for worker_id in range(1, workers + 1):
            fut = executor.submit(
                run_worker,
                worker_id,
                cursor,
                collector,
                progress,
                fetcher_factory=fetcher_factory,
                base_url=base_url,
                selector=selector,
                on_missing=on_missing,
            )
            futures[fut] = worker_id

        # Wake periodically so interrupt handlers get to run on this thread
        while futures:
            done, _ = wait(futures.keys(), timeout=poll_interval, return_when=FIRST_COMPLETED)

            for fut in done:
                worker_id = futures.pop(fut)
                try:
                    stats.append(fut.result())
                except Exception as exc:
                    if first_error is None:
                        first_error = exc
                        limit = cursor.truncate()
                        logger.error(
                            "Worker %s failed: %s; no new pages after index %d",
                            worker_id, exc, limit
                        )
                    else:
                        logger.error("Worker %s failed: %s", worker_id, exc)

    if first_error is not None:
        raise first_error

    stats.sort(key=lambda s: s.worker_id)
    return stats
