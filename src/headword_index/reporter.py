"""Run header and final summary for harvesting runs."""
from __future__ import annotations

import sys
from datetime import datetime, timedelta
from pathlib import Path
from typing import List, Optional, TextIO

from headword_index.utilities.display import format_banner, format_rate, truncate_to_fit
from headword_index.worker import WorkerStats

__all__ = ["print_run_header", "print_final_summary"]


def print_run_header(
    start_time: datetime,
    base_url: str,
    count: int,
    workers: int,
    output: Optional[Path],
    progress: str,
    on_missing: str,
    *,
    stream: Optional[TextIO] = None,
) -> None:
    """
    Print the run configuration to the status stream.

    Args:
        start_time: Run start timestamp
        base_url: Page URL prefix
        count: Number of pages in the run
        workers: Number of worker threads
        output: CSV destination, or None for stdout
        progress: Progress mode
        on_missing: Missing-headword policy
        stream: Status stream (default: sys.stderr)
    """
    out = stream if stream is not None else sys.stderr
    destination = str(output) if output is not None else "stdout (unbuffered)"

    lines = [
        format_banner("HEADWORD INDEX HARVEST", style="━"),
        f"Start Time: {start_time:%Y-%m-%d %H:%M:%S}",
        "",
        format_banner("Configuration"),
        f"Source:             {truncate_to_fit(base_url, 'Source:             ')}",
        f"Pages:              1 to {count:,}",
        f"Workers:            {workers}",
        f"Output:             {truncate_to_fit(destination, 'Output:             ')}",
        f"Progress:           {progress}",
        f"Missing headword:   {on_missing}",
        "",
    ]
    print("\n".join(lines), file=out, flush=True)


def print_final_summary(
    start_time: datetime,
    end_time: datetime,
    stats: List[WorkerStats],
    written: int,
    interrupted: bool,
    *,
    stream: Optional[TextIO] = None,
) -> None:
    """
    Print final run statistics to the status stream.

    Args:
        start_time: Run start timestamp
        end_time: Run end timestamp
        stats: Per-worker statistics
        written: Records written to the output
        interrupted: Whether the run was drained by an interrupt
        stream: Status stream (default: sys.stderr)
    """
    out = stream if stream is not None else sys.stderr
    total_runtime = end_time - start_time
    if total_runtime < timedelta(0):
        total_runtime = timedelta(0)

    ok = sum(s.succeeded for s in stats)
    failed = sum(s.failed for s in stats)
    missing = sum(s.missing for s in stats)

    lines = [
        "",
        format_banner("Final Summary"),
        f"Pages parsed:       {ok:,}",
        f"Fetch failures:     {failed:,}",
        f"Missing headwords:  {missing:,}",
        f"Records written:    {written:,}",
        f"Interrupted:        {interrupted}",
        f"Throughput:         {format_rate(ok, total_runtime.total_seconds())}",
        "",
        f"End Time: {end_time:%Y-%m-%d %H:%M:%S}",
        f"Total Runtime: {total_runtime}",
    ]
    print("\n".join(lines), file=out, flush=True)
