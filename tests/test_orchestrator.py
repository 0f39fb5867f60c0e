"""Tests for pipeline orchestration."""

import asyncio
import hashlib
from unittest.mock import Mock

import httpx
import pytest

from seoprofile.config import Config, ExtractionOptions, ScoringThresholds
from seoprofile.exceptions import FetchError, FetchErrorKind, ParseError
from seoprofile.fetcher import AsyncPageFetcher, PageFetcher
from seoprofile.models import RawPage
from seoprofile.orchestrator import AsyncProfileExtractor, ProfileExtractor

URL = "https://studio.example/"

HTML = """
<html>
    <head>
        <title>Studio Lumi | Family Photographer in Vienna</title>
        <meta name="description" content="Relaxed family sessions">
    </head>
    <body>
        <h1>Studio Lumi</h1>
        <p>Fresh bread from our bakery every morning.</p>
        <img src="/hero.jpg">
    </body>
</html>
"""


def raw_page(html=HTML, url=URL):
    return RawPage(url=url, final_url=url, content=html.encode(), text=html)


@pytest.fixture
def fetcher():
    mock = Mock(spec=PageFetcher)
    mock.fetch.return_value = raw_page()
    return mock


class TestProfileExtractor:
    """Test cases for the synchronous orchestrator."""

    def test_successful_extraction(self, fetcher):
        extractor = ProfileExtractor(config=Config(), fetcher=fetcher)
        result = extractor.extract(URL)

        assert result.success is True
        assert result.error is None
        assert result.profile.url == URL
        assert result.profile.title == "Studio Lumi | Family Photographer in Vienna"
        assert result.profile.images.hero == ("https://studio.example/hero.jpg",)
        assert result.assessment.score == 85  # short meta description, one image without alt
        assert result.html_hash == hashlib.sha1(HTML.encode()).hexdigest()[:12]
        fetcher.fetch.assert_called_once_with(URL, timeout=15.0)

    def test_options_timeout_passed_to_fetcher(self, fetcher):
        extractor = ProfileExtractor(config=Config(), fetcher=fetcher)
        extractor.extract(URL, ExtractionOptions(timeout=3))

        fetcher.fetch.assert_called_once_with(URL, timeout=3)

    def test_fetch_error_becomes_failed_result(self, fetcher):
        error = FetchError(
            "httpStatus:500", url=URL, kind=FetchErrorKind.HTTP_STATUS, status_code=500
        )
        fetcher.fetch.side_effect = error

        result = ProfileExtractor(config=Config(), fetcher=fetcher).extract(URL)

        assert result.success is False
        assert result.error is error
        assert result.profile is None
        assert result.assessment is None
        assert result.to_dict()["error"]["cause"] == "httpStatus:500"

    def test_parse_error_becomes_failed_result(self, fetcher):
        fetcher.fetch.return_value = raw_page(html="   ")

        result = ProfileExtractor(config=Config(), fetcher=fetcher).extract(URL)

        assert result.success is False
        assert isinstance(result.error, ParseError)

    def test_keyword_overrides(self, fetcher):
        options = ExtractionOptions(keyword_overrides={"about_keywords": ["bakery"]})
        result = ProfileExtractor(config=Config(), fetcher=fetcher).extract(URL, options)

        assert result.profile.about_text == "Fresh bread from our bakery every morning."

    def test_unknown_keyword_override_raises(self, fetcher):
        options = ExtractionOptions(keyword_overrides={"colour_keywords": ["red"]})

        with pytest.raises(ValueError, match="colour_keywords"):
            ProfileExtractor(config=Config(), fetcher=fetcher).extract(URL, options)
        fetcher.fetch.assert_not_called()

    def test_extract_html(self, fetcher):
        result = ProfileExtractor(config=Config(), fetcher=fetcher).extract_html(HTML, url=URL)

        assert result.success is True
        assert result.profile.headings.h1 == ("Studio Lumi",)
        fetcher.fetch.assert_not_called()

    def test_extract_html_empty(self, fetcher):
        result = ProfileExtractor(config=Config(), fetcher=fetcher).extract_html("")

        assert result.success is False
        assert isinstance(result.error, ParseError)

    def test_malformed_url_becomes_failed_result(self):
        session = Mock()
        session.headers = {}
        extractor = ProfileExtractor(config=Config(), fetcher=PageFetcher(session=session))

        result = extractor.extract("http://[::1")

        assert result.success is False
        assert result.error.kind == "invalidUrl"
        session.get.assert_not_called()

    def test_config_thresholds_reach_scorer(self, fetcher):
        """Relaxed meta description bounds remove the length deduction."""
        config = Config(thresholds=ScoringThresholds(meta_description_min=10))
        result = ProfileExtractor(config=config, fetcher=fetcher).extract(URL)

        assert result.assessment.score == 95


def async_extractor(handler, max_workers=2):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler), follow_redirects=True)
    return AsyncProfileExtractor(
        config=Config(), max_workers=max_workers, fetcher=AsyncPageFetcher(client=client)
    )


class TestAsyncProfileExtractor:
    """Test cases for the concurrent orchestrator."""

    @pytest.mark.asyncio
    async def test_extract_many_keeps_order(self):
        def handler(request):
            if request.url.path == "/missing":
                return httpx.Response(404)
            return httpx.Response(200, html=HTML)

        urls = [
            "https://a.example/",
            "https://b.example/missing",
            "https://c.example/",
        ]
        async with async_extractor(handler) as extractor:
            results = await extractor.extract_many(urls)

        assert [r.url for r in results] == urls
        assert [r.success for r in results] == [True, False, True]
        assert results[1].error.cause == "httpStatus:404"
        assert results[2].profile.images.hero == ("https://c.example/hero.jpg",)

    @pytest.mark.asyncio
    async def test_worker_limit(self):
        """No more than max_workers fetches are in flight at once."""
        active = 0
        peak = 0

        async def handler(request):
            nonlocal active, peak
            active += 1
            peak = max(peak, active)
            await asyncio.sleep(0.01)
            active -= 1
            return httpx.Response(200, html=HTML)

        urls = [f"https://site{i}.example/" for i in range(6)]
        async with async_extractor(handler, max_workers=2) as extractor:
            results = await extractor.extract_many(urls)

        assert len(results) == 6
        assert all(r.success for r in results)
        assert peak <= 2

    @pytest.mark.asyncio
    async def test_cancellation_yields_failed_results(self):
        async def handler(request):
            await asyncio.sleep(10)
            return httpx.Response(200, html=HTML)

        cancel_event = asyncio.Event()
        asyncio.get_running_loop().call_later(0.05, cancel_event.set)

        async with async_extractor(handler) as extractor:
            results = await extractor.extract_many(
                ["https://a.example/", "https://b.example/", "https://c.example/"],
                cancel_event=cancel_event,
            )

        assert all(r.error.kind == "cancelled" for r in results)
        assert all(r.profile is None for r in results)

    @pytest.mark.asyncio
    async def test_malformed_url_does_not_abort_batch(self):
        urls = ["https://ok.example/", "http://[::1", "https://also-ok.example/"]
        async with async_extractor(lambda request: httpx.Response(200, html=HTML)) as extractor:
            results = await extractor.extract_many(urls)

        assert [r.url for r in results] == urls
        assert [r.success for r in results] == [True, False, True]
        assert results[1].error.kind == "invalidUrl"
