"""Worker loop for fetching pages and extracting headwords."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

import requests
from setproctitle import setthreadtitle

from headword_index.collector import Collector
from headword_index.cursor import Cursor
from headword_index.io.fetch import Fetcher
from headword_index.io.locations import build_entry_url
from headword_index.io.parse import ExtractionError, extract_headword
from headword_index.progress import ProgressReporter

logger = logging.getLogger(__name__)

__all__ = ["WorkerStats", "fetch_headword", "run_worker"]


@dataclass
class WorkerStats:
    """Per-worker page counts."""

    worker_id: int
    succeeded: int = 0
    failed: int = 0
    missing: int = 0

    @property
    def claimed(self) -> int:
        return self.succeeded + self.failed + self.missing


def fetch_headword(
        key: int,
        fetch: Fetcher,
        *,
        base_url: str,
        selector: str,
        worker_id: int = 0,
) -> Optional[str]:
    """
    Fetch one page and extract its headword.

    Args:
        key: Page index
        fetch: Fetch collaborator for this worker
        base_url: URL prefix the index is appended to
        selector: CSS selector of the headword element
        worker_id: Worker identifier for logging

    Returns:
        Cleaned headword, or None if the page could not be fetched

    Raises:
        ExtractionError: If the page has no headword element
    """
    url = build_entry_url(base_url, key)

    try:
        page = fetch(url)
    except requests.Timeout:
        logger.warning("Worker %s: Timeout - %s", worker_id, url)
        return None
    except requests.RequestException as exc:
        logger.warning("Worker %s: Network error - %s (%s)", worker_id, url, exc)
        return None

    if not page.ok:
        logger.warning(
            "Worker %s: HTTP returned %d %s when getting %s",
            worker_id, page.status_code, page.reason, url
        )
        return None

    return extract_headword(page.text, selector)


def run_worker(
        worker_id: int,
        cursor: Cursor,
        collector: Collector,
        progress: ProgressReporter,
        *,
        fetcher_factory: Callable[[], Fetcher],
        base_url: str,
        selector: str,
        on_missing: str = "skip",
) -> WorkerStats:
    """
    Claim and process pages until the cursor is exhausted.

    Each successful page is handed to the collector and then counted by the
    progress reporter. Failed fetches are logged and skipped, never retried.
    A missing headword is skipped the same way under the "skip" policy and
    re-raised under "abort".

    Args:
        worker_id: Worker identifier for logging and the thread title
        cursor: Shared work cursor
        collector: Shared result sink
        progress: Shared progress reporter
        fetcher_factory: Builds this worker's private fetcher
        base_url: URL prefix the index is appended to
        selector: CSS selector of the headword element
        on_missing: "skip" or "abort"

    Returns:
        Page counts for this worker

    Raises:
        ExtractionError: Under the "abort" policy
    """
    setthreadtitle(f"hwi:worker[{worker_id:03d}]")

    stats = WorkerStats(worker_id=worker_id)
    fetch = fetcher_factory()

    try:
        key = cursor.claim()
        while key is not None:
            try:
                word = fetch_headword(
                    key, fetch, base_url=base_url, selector=selector, worker_id=worker_id
                )
            except ExtractionError as exc:
                if on_missing == "abort":
                    logger.error("Worker %s: No headword on page %d: %s", worker_id, key, exc)
                    raise
                logger.warning("Worker %s: Skipping page %d: %s", worker_id, key, exc)
                stats.missing += 1
            else:
                if word is None:
                    stats.failed += 1
                else:
                    collector.add(key, word)
                    logger.debug("parsed: %d", key)
                    progress.tick()
                    stats.succeeded += 1

            key = cursor.claim()
    finally:
        close = getattr(fetch, "close", None)
        if close is not None:
            close()

    logger.debug("Worker %s: done (%d pages)", worker_id, stats.claimed)
    return stats
