"""Main entry point for headword harvesting runs."""
from __future__ import annotations

import contextlib
import logging
import os
import sys
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, List, Optional, TextIO

from setproctitle import setproctitle

from headword_index.collector import BufferedCollector, Collector, StreamCollector
from headword_index.config import HarvestConfig
from headword_index.cursor import Cursor
from headword_index.executor import process_pages
from headword_index.interrupt import InterruptController
from headword_index.io.fetch import Fetcher, make_fetcher_factory
from headword_index.progress import ProgressReporter
from headword_index.reporter import print_final_summary, print_run_header
from headword_index.worker import WorkerStats

logger = logging.getLogger(__name__)

__all__ = ["HarvestResult", "harvest"]


@dataclass
class HarvestResult:
    """Outcome of a completed (possibly drained) run."""

    written: int
    limit: int
    interrupted: bool
    elapsed: float
    worker_stats: List[WorkerStats] = field(default_factory=list)

    @property
    def succeeded(self) -> int:
        return sum(s.succeeded for s in self.worker_stats)

    @property
    def failed(self) -> int:
        return sum(s.failed for s in self.worker_stats)

    @property
    def missing(self) -> int:
        return sum(s.missing for s in self.worker_stats)


def harvest(
        config: HarvestConfig,
        *,
        fetcher_factory: Optional[Callable[[], Fetcher]] = None,
        stdout: Optional[TextIO] = None,
        stderr: Optional[TextIO] = None,
        handle_signals: bool = True,
        exit_func: Callable[[int], None] = os._exit,
) -> HarvestResult:
    """
    Harvest headwords for pages 1..config.count.

    Orchestrates a run:
    1. Validates the configuration
    2. Opens the CSV output (buffered mode) before any page is fetched
    3. Starts the progress reporter and the interrupt handler
    4. Runs the worker pool until the cursor is exhausted or drained
    5. Flushes buffered records to the CSV output

    Args:
        config: Run configuration
        fetcher_factory: Builds one fetcher per worker (default: HTTP fetchers
                         using config.timeout and config.user_agent)
        stdout: Record stream for immediate mode (default: sys.stdout)
        stderr: Status stream for progress and summaries (default: sys.stderr)
        handle_signals: If True, install the two-stage SIGINT/SIGTERM handler
        exit_func: Called with the exit status on a second interrupt

    Returns:
        HarvestResult with record and page counts

    Raises:
        ConfigError: If the configuration is invalid
        ExtractionError: If a headword is missing under the "abort" policy
        OSError: If the output file cannot be written
    """
    config.validate()

    stdout = stdout if stdout is not None else sys.stdout
    stderr = stderr if stderr is not None else sys.stderr
    workers = config.resolved_workers()
    if fetcher_factory is None:
        fetcher_factory = make_fetcher_factory(config.timeout, config.user_agent)

    setproctitle("hwi:main")
    start_time = datetime.now()

    if config.show_milestones:
        print_run_header(
            start_time=start_time,
            base_url=config.base_url,
            count=config.count,
            workers=workers,
            output=config.output,
            progress=config.progress,
            on_missing=config.on_missing,
            stream=stderr,
        )

    cursor = Cursor(config.count)
    progress = ProgressReporter(
        config.count,
        mode=config.progress,
        stream=stderr,
        interval=config.progress_interval,
    )
    controller = InterruptController(cursor, exit_func=exit_func, stream=stderr)

    with contextlib.ExitStack() as stack:
        collector: Collector
        if config.buffered:
            out = stack.enter_context(
                open(config.output, "w", encoding="utf-8", newline="")
            )
            collector = BufferedCollector(out, sort_keys=config.sort_output)
        else:
            collector = StreamCollector(stdout)

        if handle_signals:
            stack.enter_context(controller)

        logger.info("started %d tasks for indexing", workers)

        with progress:
            stats = process_pages(
                cursor,
                collector,
                progress,
                workers=workers,
                fetcher_factory=fetcher_factory,
                base_url=config.base_url,
                selector=config.selector,
                on_missing=config.on_missing,
            )

        if controller.interrupted:
            logger.info("drained after index %d", cursor.limit)

        if config.buffered:
            logger.info("writing to %s", config.output)
            written = collector.flush()
        else:
            written = collector.added

    end_time = datetime.now()
    if config.show_milestones:
        print_final_summary(
            start_time=start_time,
            end_time=end_time,
            stats=stats,
            written=written,
            interrupted=controller.interrupted,
            stream=stderr,
        )

    logger.info("exiting")
    return HarvestResult(
        written=written,
        limit=cursor.limit,
        interrupted=controller.interrupted,
        elapsed=(end_time - start_time).total_seconds(),
        worker_stats=stats,
    )
