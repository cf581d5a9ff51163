"""HTTP page fetching for harvest workers."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

import requests

logger = logging.getLogger(__name__)

__all__ = ["Page", "Fetcher", "HttpFetcher", "make_fetcher_factory"]


@dataclass(frozen=True)
class Page:
    """A fetched page: HTTP status plus decoded body."""

    url: str
    status_code: int
    reason: str = ""
    text: str = ""

    @property
    def ok(self) -> bool:
        """Only a plain 200 counts as a usable page."""
        return self.status_code == 200


Fetcher = Callable[[str], Page]


class HttpFetcher:
    """
    Fetch pages over a dedicated requests.Session.

    One instance belongs to one worker thread; sessions are not shared.
    Transport failures raise requests.RequestException. Non-200 responses
    are returned as a Page so the caller decides what to do with them.
    """

    def __init__(
        self,
        *,
        timeout: Tuple[float, float] = (10.0, 30.0),
        user_agent: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize fetcher.

        Args:
            timeout: (connect_timeout, read_timeout) in seconds
            user_agent: Optional User-Agent header value
            session: Optional session to use instead of a fresh one
        """
        self.timeout = timeout
        self.session = session or requests.Session()
        if user_agent:
            self.session.headers["User-Agent"] = user_agent

    def __call__(self, url: str) -> Page:
        resp = self.session.get(url, timeout=self.timeout)
        try:
            # Handle encoding
            if not resp.encoding:
                resp.encoding = resp.apparent_encoding
            text = resp.text if resp.status_code == 200 else ""
            return Page(
                url=url,
                status_code=resp.status_code,
                reason=resp.reason or "",
                text=text,
            )
        finally:
            resp.close()

    def close(self) -> None:
        """Close the underlying session."""
        self.session.close()

    def __enter__(self) -> "HttpFetcher":
        return self

    def __exit__(self, *exc) -> None:
        self.close()


def make_fetcher_factory(
    timeout: Tuple[float, float] = (10.0, 30.0),
    user_agent: Optional[str] = None,
) -> Callable[[], HttpFetcher]:
    """
    Build a factory producing one HttpFetcher per worker.

    Args:
        timeout: (connect_timeout, read_timeout) in seconds
        user_agent: Optional User-Agent header value

    Returns:
        Zero-argument callable returning a new HttpFetcher
    """
    def factory() -> HttpFetcher:
        return HttpFetcher(timeout=timeout, user_agent=user_agent)

    return factory
