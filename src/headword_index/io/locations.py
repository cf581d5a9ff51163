"""URL construction for indexed dictionary pages."""
from __future__ import annotations

from urllib.parse import urlparse

__all__ = ["build_entry_url", "validate_base_url"]


def validate_base_url(base_url: str) -> str:
    """
    Check that a base URL can be used as a page prefix.

    Args:
        base_url: URL prefix to which page indices are appended

    Returns:
        The base URL unchanged

    Raises:
        ValueError: If the URL has no http(s) scheme or no host
    """
    parsed = urlparse(base_url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError(f"base_url must be an absolute http(s) URL, got {base_url!r}")
    return base_url


def build_entry_url(base_url: str, key: int) -> str:
    """
    Build the page URL for an index.

    The index is appended verbatim, so the base URL decides the separator.

    Examples:
        >>> build_entry_url("https://www.oed.com/oed2/", 42)
        'https://www.oed.com/oed2/42'
    """
    return f"{base_url}{key}"
