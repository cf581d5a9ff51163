# tests/headword_index/io/test_fetch.py
from __future__ import annotations

import pytest
import requests

from headword_index.io.fetch import HttpFetcher, Page, make_fetcher_factory


class FakeResp:
    def __init__(self, text: str, status: int = 200, reason: str = "OK", encoding="utf-8"):
        self.text = text
        self.status_code = status
        self.reason = reason
        self.encoding = encoding
        self.apparent_encoding = "utf-8"
        self.closed = False

    def close(self):
        self.closed = True


class FakeSession:
    def __init__(self, responses):
        # responses: list of FakeResp or Exception
        self.responses = list(responses)
        self.headers = {}
        self.calls = []
        self.last_timeout = None
        self.closed = False

    def get(self, url, timeout=None):
        self.calls.append(url)
        self.last_timeout = timeout
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    def close(self):
        self.closed = True


def test_success_returns_page_and_closes_response():
    resp = FakeResp("<html>ok</html>")
    sess = FakeSession([resp])
    fetch = HttpFetcher(session=sess, timeout=(1.0, 2.0))

    page = fetch("https://ex/oed2/1")

    assert page == Page(url="https://ex/oed2/1", status_code=200, reason="OK", text="<html>ok</html>")
    assert page.ok
    assert resp.closed
    assert sess.last_timeout == (1.0, 2.0)


def test_non_200_is_returned_not_raised():
    sess = FakeSession([FakeResp("gone", status=404, reason="Not Found")])
    page = HttpFetcher(session=sess)("https://ex/oed2/2")

    assert not page.ok
    assert page.status_code == 404
    assert page.reason == "Not Found"
    assert page.text == ""


@pytest.mark.parametrize("status", [201, 204, 301])
def test_only_plain_200_is_ok(status):
    assert not Page(url="u", status_code=status).ok


def test_missing_encoding_falls_back_to_apparent():
    resp = FakeResp("body", encoding=None)
    HttpFetcher(session=FakeSession([resp]))("https://ex/oed2/3")
    assert resp.encoding == "utf-8"


def test_transport_errors_propagate():
    sess = FakeSession([requests.ConnectionError("refused")])
    with pytest.raises(requests.RequestException):
        HttpFetcher(session=sess)("https://ex/oed2/4")


def test_user_agent_header_and_close():
    sess = FakeSession([])
    with HttpFetcher(session=sess, user_agent="hwi-test/1.0") as fetch:
        assert fetch.session.headers["User-Agent"] == "hwi-test/1.0"
    assert sess.closed


def test_factory_builds_independent_fetchers():
    factory = make_fetcher_factory(timeout=(3.0, 4.0), user_agent="ua")
    a, b = factory(), factory()
    try:
        assert a is not b
        assert a.session is not b.session
        assert a.timeout == (3.0, 4.0)
        assert a.session.headers["User-Agent"] == "ua"
    finally:
        a.close()
        b.close()
