"""Command-line interface for headword harvesting."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from headword_index.config import (
    DEFAULT_BASE_URL,
    DEFAULT_COUNT,
    DEFAULT_SELECTOR,
    MISSING_POLICIES,
    ConfigError,
    HarvestConfig,
    default_workers,
)
from headword_index.core import harvest
from headword_index.io.parse import ExtractionError
from headword_index.logger import setup_logger

logger = logging.getLogger(__name__)

__all__ = ["parse_args", "build_config", "main"]

EXIT_OK = 0
EXIT_FATAL = 1
EXIT_CONFIG = 2


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="headword-index",
        description="Harvest one headword per numbered dictionary page.",
    )
    p.add_argument("-o", dest="output", type=Path, default=None, metavar="FILE",
                   help="Write CSV to FILE after all pages finish instead of streaming to stdout")
    p.add_argument("-c", dest="count", type=int, default=DEFAULT_COUNT, metavar="N",
                   help=f"Parse pages 1..N (default: {DEFAULT_COUNT})")
    p.add_argument("-t", dest="workers", type=int, default=0, metavar="N",
                   help=f"Start N simultaneous workers; 0 means default ({default_workers()} on this system)")
    p.add_argument("-p", dest="progress", action="count", default=0,
                   help="Show the percentage finished; -pp adds elapsed time and ETA")
    p.add_argument("-v", dest="verbose", action="store_true",
                   help="Verbose output (one line per parsed page)")
    p.add_argument("--base-url", default=DEFAULT_BASE_URL,
                   help=f"URL prefix the page index is appended to (default: {DEFAULT_BASE_URL})")
    p.add_argument("--selector", default=DEFAULT_SELECTOR,
                   help=f"CSS selector of the headword element (default: {DEFAULT_SELECTOR})")
    p.add_argument("--on-missing", choices=MISSING_POLICIES, default="skip",
                   help="What to do when a page has no headword element (default: skip)")
    p.add_argument("--unsorted", action="store_true",
                   help="Write CSV records in completion order instead of by index")
    p.add_argument("--timeout", type=float, nargs=2, default=(10.0, 30.0),
                   metavar=("CONNECT", "READ"), help="HTTP timeouts in seconds (default: 10 30)")
    p.add_argument("--user-agent", default=None, help="User-Agent header for requests")
    p.add_argument("--log-dir", type=Path, default=None,
                   help="Also write a timestamped log file to this directory")
    return p.parse_args(argv)


def build_config(args: argparse.Namespace) -> HarvestConfig:
    """Translate parsed arguments into a HarvestConfig."""
    progress = ("off", "plain", "fancy")[min(args.progress, 2)]
    return HarvestConfig(
        count=args.count,
        workers=args.workers,
        output=args.output,
        sort_output=not args.unsorted,
        base_url=args.base_url,
        selector=args.selector,
        timeout=tuple(args.timeout),
        user_agent=args.user_agent,
        on_missing=args.on_missing,
        progress=progress,
        verbose=args.verbose,
        log_dir=args.log_dir,
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    config = build_config(args)

    try:
        config.validate()
    except ConfigError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return EXIT_CONFIG

    if config.verbose:
        level = logging.DEBUG
    elif config.show_milestones:
        level = logging.INFO
    else:
        level = logging.WARNING
    setup_logger(config.log_dir, level=level, force=True)
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    try:
        harvest(config)
    except ExtractionError as exc:
        logger.critical("aborting: %s", exc)
        return EXIT_FATAL
    except OSError as exc:
        logger.critical("%s", exc)
        return EXIT_FATAL

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
