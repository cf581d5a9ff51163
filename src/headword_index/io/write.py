"""Record formatting and CSV output for harvested headwords."""
from __future__ import annotations

import logging
from typing import Mapping, TextIO

logger = logging.getLogger(__name__)

CSV_HEADER = "Word,Index"
__all__ = ["CSV_HEADER", "format_record", "write_records"]


def format_record(key: int, value: str) -> str:
    """
    Format one result line (without trailing newline).

    Examples:
        >>> format_record(7, "abacus")
        '"abacus",7'
    """
    return f'"{value}",{key}'


def write_records(
        out: TextIO,
        records: Mapping[int, str],
        *,
        sort_keys: bool = True,
        header: bool = True,
) -> int:
    """
    Write a completed index -> headword mapping as CSV.

    Args:
        out: Open text stream to write to
        records: Mapping of page index to cleaned headword
        sort_keys: If True, write in ascending index order; otherwise in
                   mapping iteration order
        header: If True, write the "Word,Index" header line first

    Returns:
        Number of records written (header excluded)
    """
    n = len(records)
    logger.info("Writing %s records", f"{n:,}")

    if header:
        out.write(CSV_HEADER + "\n")

    keys = sorted(records) if sort_keys else list(records)
    for k in keys:
        out.write(format_record(k, records[k]) + "\n")
    out.flush()

    logger.info("Write complete: %s records", f"{n:,}")
    return n
