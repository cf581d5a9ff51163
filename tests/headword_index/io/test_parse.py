# tests/headword_index/io/test_parse.py
from __future__ import annotations

import pytest

from headword_index.io.parse import (
    ExtractionError,
    clean_headword,
    extract_field,
    extract_headword,
    validate_selector,
)


# --- clean_headword ----------------------------------------------------------


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("Example-Word, ", "Example-Word"),
        ("  abacus  ", "abacus"),
        ("ˈab·a·cus,", "abacus"),                 # modifier letter + middle dot
        ("A1, B2", "A1, B2"),
        ("rock 'n' roll", "rock n roll"),
        ("he\u0301llo, wo\u0308rld,  ", "hello, world"),  # combining marks dropped
        ("héllo", "héllo"),                       # precomposed letters are letters
        ("ʻokina", "okina"),                      # U+02BB is Lm
        ("word,,", "word,"),                      # only one trailing comma goes
        ("", ""),
    ],
)
def test_clean_headword(raw, expected):
    assert clean_headword(raw) == expected


@pytest.mark.parametrize(
    "raw",
    ["Example-Word, ", " he\u0301llo, wo\u0308rld,  ", "ˈab·a·cus,", "x-ray (n.)"],
)
def test_clean_headword_is_stable(raw):
    once = clean_headword(raw)
    assert clean_headword(once) == once


# --- extract_field -----------------------------------------------------------


def test_extract_first_direct_text_of_first_match():
    html = """
    <div class="hwLabel">first<sup>1</sup> trailing</div>
    <div class="hwLabel">second</div>
    """
    assert extract_field(html, ".hwLabel") == "first"


def test_extract_skips_leading_child_elements_and_comments():
    html = '<span class="hwLabel"><!-- c --><b>bold</b>direct</span>'
    assert extract_field(html, ".hwLabel") == "direct"


@pytest.mark.parametrize(
    "html",
    [
        None,
        "",
        "<html><body><p>no label</p></body></html>",
        '<span class="hwLabel"><b>only nested</b></span>',
    ],
)
def test_extract_missing_raises(html):
    with pytest.raises(ExtractionError):
        extract_field(html, ".hwLabel")


def test_extraction_error_is_value_error():
    assert issubclass(ExtractionError, ValueError)


def test_extract_headword_end_to_end():
    html = '<h1><span class="hwLabel">ˈzy·mase, <i>n.</i></span></h1>'
    assert extract_headword(html) == "zymase"


def test_extract_headword_custom_selector():
    html = '<div id="w">custom,</div>'
    assert extract_headword(html, "#w") == "custom"


# --- validate_selector -------------------------------------------------------


@pytest.mark.parametrize("selector", [".hwLabel", "h1 span.hw", "div#entry > .hwLabel"])
def test_validate_selector_accepts_css(selector):
    assert validate_selector(selector) == selector


@pytest.mark.parametrize("selector", ["", "[[[", ".hwLabel >"])
def test_validate_selector_rejects_malformed(selector):
    with pytest.raises(ValueError, match="selector"):
        validate_selector(selector)
