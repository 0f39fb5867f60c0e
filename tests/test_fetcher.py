"""Tests for the page fetchers."""

import asyncio
from unittest.mock import Mock

import httpx
import pytest
import requests

from seoprofile.exceptions import FetchError, FetchErrorKind
from seoprofile.fetcher import AsyncPageFetcher, PageFetcher, validate_url

HTML = "<html><head><title>Fetched</title></head><body></body></html>"


def mock_session(response=None, side_effect=None):
    session = Mock()
    session.headers = {}
    session.get.return_value = response
    session.get.side_effect = side_effect
    return session


def mock_response(status_code=200, text=HTML, url="https://example.com/"):
    response = Mock()
    response.status_code = status_code
    response.url = url
    response.text = text
    response.content = text.encode()
    response.encoding = "utf-8"
    response.headers = {"Content-Type": "text/html"}
    return response


class TestValidateUrl:
    """Test cases for URL validation."""

    @pytest.mark.parametrize(
        "url",
        ["example.com", "/relative/path", "ftp://example.com/file", "", "https://", "http://[::1"],
    )
    def test_rejects_non_absolute_urls(self, url):
        with pytest.raises(FetchError) as excinfo:
            validate_url(url)
        assert excinfo.value.kind == FetchErrorKind.INVALID_URL.value

    def test_accepts_http_and_https(self):
        validate_url("http://example.com")
        validate_url("https://example.com/path?q=1")


class TestPageFetcher:
    """Test cases for the requests-based fetcher."""

    def test_initialization(self):
        fetcher = PageFetcher(user_agent="CustomBot/1.0", timeout=5)

        assert fetcher.user_agent == "CustomBot/1.0"
        assert fetcher.timeout == 5
        assert fetcher.session.headers["User-Agent"] == "CustomBot/1.0"

    def test_fetch_success(self):
        session = mock_session(response=mock_response())
        fetcher = PageFetcher(session=session)

        page = fetcher.fetch("https://example.com/")

        assert page.text == HTML
        assert page.status_code == 200
        assert page.final_url == "https://example.com/"
        assert len(page.html_hash) == 12
        session.get.assert_called_once_with(
            "https://example.com/", timeout=15.0, allow_redirects=True
        )

    def test_per_call_timeout(self):
        session = mock_session(response=mock_response())
        PageFetcher(session=session, timeout=30).fetch("https://example.com/", timeout=2)

        assert session.get.call_args.kwargs["timeout"] == 2

    def test_timeout(self):
        session = mock_session(side_effect=requests.exceptions.Timeout("slow"))

        with pytest.raises(FetchError) as excinfo:
            PageFetcher(session=session).fetch("https://example.com/")
        assert excinfo.value.kind == "timeout"
        assert excinfo.value.cause == "timeout"

    def test_network_error(self):
        session = mock_session(side_effect=requests.exceptions.ConnectionError("refused"))

        with pytest.raises(FetchError) as excinfo:
            PageFetcher(session=session).fetch("https://example.com/")
        assert excinfo.value.kind == "network"

    def test_http_status_error(self):
        session = mock_session(response=mock_response(status_code=404))

        with pytest.raises(FetchError) as excinfo:
            PageFetcher(session=session).fetch("https://example.com/missing")
        assert excinfo.value.kind == "httpStatus"
        assert excinfo.value.status_code == 404
        assert excinfo.value.cause == "httpStatus:404"

    def test_no_retry(self):
        session = mock_session(side_effect=requests.exceptions.ConnectionError("refused"))

        with pytest.raises(FetchError):
            PageFetcher(session=session).fetch("https://example.com/")
        assert session.get.call_count == 1

    def test_invalid_url_makes_no_request(self):
        session = mock_session(response=mock_response())

        with pytest.raises(FetchError):
            PageFetcher(session=session).fetch("not-a-url")
        session.get.assert_not_called()


def async_fetcher(handler):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler), follow_redirects=True)
    return AsyncPageFetcher(client=client)


class TestAsyncPageFetcher:
    """Test cases for the httpx-based fetcher."""

    @pytest.mark.asyncio
    async def test_fetch_success(self):
        fetcher = async_fetcher(lambda request: httpx.Response(200, html=HTML))

        page = await fetcher.fetch("https://example.com/")
        await fetcher.client.aclose()

        assert page.text == HTML
        assert page.status_code == 200
        assert page.final_url == "https://example.com/"

    @pytest.mark.asyncio
    async def test_http_status_error(self):
        fetcher = async_fetcher(lambda request: httpx.Response(503))

        with pytest.raises(FetchError) as excinfo:
            await fetcher.fetch("https://example.com/")
        await fetcher.client.aclose()

        assert excinfo.value.cause == "httpStatus:503"

    @pytest.mark.asyncio
    async def test_timeout(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        fetcher = async_fetcher(handler)

        with pytest.raises(FetchError) as excinfo:
            await fetcher.fetch("https://example.com/", timeout=1)
        await fetcher.client.aclose()

        assert excinfo.value.kind == "timeout"

    @pytest.mark.asyncio
    async def test_network_error(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        fetcher = async_fetcher(handler)

        with pytest.raises(FetchError) as excinfo:
            await fetcher.fetch("https://example.com/")
        await fetcher.client.aclose()

        assert excinfo.value.kind == "network"

    @pytest.mark.asyncio
    async def test_cancellation_aborts_request(self):
        """Setting the cancel event aborts an in-flight request."""
        async def slow_handler(request):
            await asyncio.sleep(10)
            return httpx.Response(200, html=HTML)

        fetcher = async_fetcher(slow_handler)
        cancel_event = asyncio.Event()
        asyncio.get_running_loop().call_later(0.05, cancel_event.set)

        with pytest.raises(FetchError) as excinfo:
            await fetcher.fetch("https://example.com/", cancel_event=cancel_event)
        await fetcher.client.aclose()

        assert excinfo.value.kind == "cancelled"

    @pytest.mark.asyncio
    async def test_already_cancelled(self):
        fetcher = async_fetcher(lambda request: httpx.Response(200, html=HTML))
        cancel_event = asyncio.Event()
        cancel_event.set()

        with pytest.raises(FetchError) as excinfo:
            await fetcher.fetch("https://example.com/", cancel_event=cancel_event)
        await fetcher.client.aclose()

        assert excinfo.value.kind == "cancelled"

    @pytest.mark.asyncio
    async def test_unused_cancel_event(self):
        fetcher = async_fetcher(lambda request: httpx.Response(200, html=HTML))

        page = await fetcher.fetch("https://example.com/", cancel_event=asyncio.Event())
        await fetcher.client.aclose()

        assert page.text == HTML
