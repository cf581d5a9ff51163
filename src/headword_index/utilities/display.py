# utilities/display.py
"""Common display formatting utilities for harvest reports."""

from pathlib import Path
from typing import Union

__all__ = ["format_banner", "truncate_to_fit", "format_rate"]


def format_banner(title: str, width: int = 80, style: str = "═") -> str:
    """Create a formatted banner with title and separator line.

    Examples:
        >>> print(format_banner("Run Summary", width=11))
        Run Summary
        ═══════════
    """
    return f"{title}\n{style * width}"


def truncate_to_fit(
    text: Union[Path, str],
    prefix: str,
    total_width: int = 80,
) -> str:
    """Truncate text from the left so prefix + text fits within total_width.

    Args:
        text: Path or URL to display
        prefix: The label printed before the text
        total_width: Total character width for the entire line

    Returns:
        The text, or "..." followed by its tail when too long
    """
    text_str = str(text)
    max_length = total_width - len(prefix)

    if len(text_str) <= max_length:
        return text_str

    if max_length < 4:
        return "..."

    return "..." + text_str[-(max_length - 3):]


def format_rate(count: int, elapsed_seconds: float, unit: str = "pages") -> str:
    """Format a processing rate.

    Examples:
        >>> format_rate(10000, 2.5, "pages")
        '4,000 pages/sec'
        >>> format_rate(3, 2.0)
        '1.50 pages/sec'
    """
    if elapsed_seconds <= 0:
        return f"0 {unit}/sec"

    rate = count / elapsed_seconds

    if rate >= 1000:
        return f"{rate:,.0f} {unit}/sec"
    elif rate >= 10:
        return f"{rate:.1f} {unit}/sec"
    else:
        return f"{rate:.2f} {unit}/sec"
