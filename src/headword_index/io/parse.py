"""Headword extraction and cleaning for dictionary pages."""
from __future__ import annotations

from typing import Optional

import regex
import soupsieve
from bs4 import BeautifulSoup, Comment, NavigableString

__all__ = [
    "ExtractionError",
    "clean_headword",
    "extract_field",
    "extract_headword",
    "validate_selector",
]

# Anything that is not a letter, number, comma, space or hyphen, plus
# modifier letters (which \p{L} would otherwise keep)
_DISALLOWED = regex.compile(r"[^, \-\p{L}\p{N}]|\p{Lm}")


class ExtractionError(ValueError):
    """Raised when a page has no usable headword element."""


def clean_headword(text: str) -> str:
    """
    Normalize a raw headword.

    Strips disallowed characters, trims surrounding whitespace, then drops
    one trailing comma.

    Examples:
        >>> clean_headword("Example-Word, ")
        'Example-Word'
        >>> clean_headword("ˈab·a·cus,")
        'abacus'
    """
    word = _DISALLOWED.sub("", text)
    word = word.strip()
    if word.endswith(","):
        word = word[:-1]
    return word


def extract_field(html: Optional[str], selector: str) -> str:
    """
    Return the first direct text node of the first element matching selector.

    Args:
        html: Page body
        selector: CSS selector for the headword element

    Returns:
        Raw (uncleaned) text

    Raises:
        ExtractionError: If the body is empty, nothing matches, or the match
                         has no direct text content
    """
    if not html:
        raise ExtractionError("empty document")

    soup = BeautifulSoup(html, "html.parser")
    element = soup.select_one(selector)
    if element is None:
        raise ExtractionError(f"no element matches {selector!r}")

    for child in element.children:
        if isinstance(child, NavigableString) and not isinstance(child, Comment):
            return str(child)

    raise ExtractionError(f"element {selector!r} has no direct text")


def extract_headword(html: Optional[str], selector: str = ".hwLabel") -> str:
    """
    Extract and clean the headword from a page.

    Args:
        html: Page body
        selector: CSS selector for the headword element

    Returns:
        Cleaned headword

    Raises:
        ExtractionError: If the headword element is missing
    """
    return clean_headword(extract_field(html, selector))


def validate_selector(selector: str) -> str:
    """
    Check that a CSS selector compiles.

    Returns:
        The selector unchanged

    Raises:
        ValueError: If the selector is empty or not valid CSS
    """
    if not selector:
        raise ValueError("selector must not be empty")
    try:
        soupsieve.compile(selector)
    except soupsieve.SelectorSyntaxError as exc:
        raise ValueError(f"selector {selector!r} is not valid CSS: {exc}") from exc
    return selector
