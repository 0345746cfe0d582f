import asyncio
import httpx
import pytest
from app.core.config import settings
from app.fetch.base import FetchFailure, FetchSuccess
from app.fetch.fetcher import create_http_client, fetch_url

def run_fetch(upstream, url):
    async def _run():
        async with upstream.client() as client:
            return await fetch_url(client, url)
    return asyncio.run(_run())

class TestFetchUrl:
    """Unit tests for fetching a single URL"""

    def test_success_returns_body(self, upstream):
        upstream.add("http://ok.test/a", body="<body-a>")
        outcome = run_fetch(upstream, "http://ok.test/a")
        assert outcome == FetchSuccess(url="http://ok.test/a", status_code=200, body="<body-a>")

    def test_body_passed_through_unparsed(self, upstream):
        raw = '{"not": "validated", '
        upstream.add("http://ok.test/raw", body=raw)
        outcome = run_fetch(upstream, "http://ok.test/raw")
        assert outcome.body == raw

    def test_user_agent_attached(self, upstream):
        settings.USER_AGENT = "Test-Agent/2.0"
        upstream.add("http://ok.test/a", body="a")
        run_fetch(upstream, "http://ok.test/a")
        assert upstream.requests[0].headers["User-Agent"] == "Test-Agent/2.0"
        assert upstream.requests[0].method == "GET"

    def test_connection_refused(self, upstream):
        outcome = run_fetch(upstream, "http://fail.test/b")
        assert isinstance(outcome, FetchFailure)
        assert outcome.url == "http://fail.test/b"
        assert "Connection refused" in outcome.message

    def test_timeout(self, upstream):
        upstream.add("http://slow.test/", error=httpx.ReadTimeout)
        outcome = run_fetch(upstream, "http://slow.test/")
        assert isinstance(outcome, FetchFailure)
        assert "Timeout" in outcome.message

    def test_http_error_status(self, upstream):
        upstream.add("http://ok.test/missing", body="nope", status_code=404)
        outcome = run_fetch(upstream, "http://ok.test/missing")
        assert isinstance(outcome, FetchFailure)
        assert outcome.message == "HTTP error 404 Not Found"

    @pytest.mark.parametrize("url", ["not-a-url", "", "ftp://files.test/a.txt"])
    def test_malformed_url_is_failure(self, upstream, url):
        """Bad URLs become per-item failures without any request"""
        outcome = run_fetch(upstream, url)
        assert isinstance(outcome, FetchFailure)
        assert "http://" in outcome.message
        assert upstream.requests == []

    def test_unencodable_url_is_failure(self, upstream):
        """A lone surrogate cannot be encoded into a request line"""
        outcome = run_fetch(upstream, "http://x.test/\ud800")
        assert isinstance(outcome, FetchFailure)
        assert outcome.url == "http://x.test/\ud800"
        assert outcome.message.startswith("Invalid URL: ")
        assert upstream.requests == []

class TestCreateHttpClient:
    """Unit tests for the shared client factory"""

    def test_client_settings(self):
        async def _run():
            client = create_http_client()
            try:
                assert isinstance(client, httpx.AsyncClient)
                assert client.timeout.read == settings.REQUEST_TIMEOUT
                assert client.timeout.pool is None
                assert client.follow_redirects == settings.FOLLOW_REDIRECTS
            finally:
                await client.aclose()
        asyncio.run(_run())
