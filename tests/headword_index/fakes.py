# tests/headword_index/fakes.py
"""Hand-written fakes shared by the harvest tests."""
from __future__ import annotations

import threading
from typing import Callable, Dict, Iterable, List, Optional

from headword_index.io.fetch import Page


def headword_page(word: str) -> str:
    return f'<html><body><div class="entry"><span class="hwLabel">{word}<sup>1</sup></span></div></body></html>'


class FakeFetcher:
    """Fetcher serving pages by index parsed from the URL tail."""

    def __init__(
        self,
        pages: Callable[[int], Page],
        on_fetch: Optional[Callable[[int], None]] = None,
    ):
        self.pages = pages
        self.on_fetch = on_fetch
        self.closed = False
        self.calls: List[int] = []

    def __call__(self, url: str) -> Page:
        key = int(url.rsplit("/", 1)[-1])
        self.calls.append(key)
        if self.on_fetch is not None:
            self.on_fetch(key)
        return self.pages(key)

    def close(self) -> None:
        self.closed = True


class FetcherPool:
    """Factory handing each worker its own FakeFetcher and remembering them."""

    def __init__(
        self,
        pages: Callable[[int], Page],
        on_fetch: Optional[Callable[[int], None]] = None,
    ):
        self.pages = pages
        self.on_fetch = on_fetch
        self._lock = threading.Lock()
        self.fetchers: List[FakeFetcher] = []

    def __call__(self) -> FakeFetcher:
        fetcher = FakeFetcher(self.pages, self.on_fetch)
        with self._lock:
            self.fetchers.append(fetcher)
        return fetcher

    @property
    def fetched(self) -> List[int]:
        return [k for f in self.fetchers for k in f.calls]


def word_pages(word: str = "Example-Word, ", failing: Iterable[int] = ()) -> Callable[[int], Page]:
    failing = set(failing)

    def pages(key: int) -> Page:
        url = f"https://example.test/oed2/{key}"
        if key in failing:
            return Page(url=url, status_code=404, reason="Not Found")
        return Page(url=url, status_code=200, reason="OK", text=headword_page(word))

    return pages


class RecordingCollector:
    """Collector stand-in that keeps every add() call."""

    def __init__(self):
        self._lock = threading.Lock()
        self.items: Dict[int, str] = {}
        self.calls = 0

    def add(self, key: int, value: str) -> None:
        with self._lock:
            self.items[key] = value
            self.calls += 1

    def flush(self) -> int:
        return 0


class CountingProgress:
    def __init__(self):
        self._lock = threading.Lock()
        self.ticks = 0

    def tick(self) -> None:
        with self._lock:
            self.ticks += 1
