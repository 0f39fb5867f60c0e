"""Pipeline orchestration: fetch, parse, extract and score."""

import asyncio
import logging
from typing import Iterable, List, Optional, Union

from seoprofile.config import Config, ExtractionOptions, KeywordConfig
from seoprofile.exceptions import FetchError, ParseError
from seoprofile.extractors import extract_profile
from seoprofile.fetcher import AsyncPageFetcher, PageFetcher
from seoprofile.models import ExtractionResult, RawPage
from seoprofile.parser import ParsedDocument, parse
from seoprofile.scorer import SEOScorer

logger = logging.getLogger(__name__)


def _analyze_document(
    doc: ParsedDocument,
    url: str,
    options: ExtractionOptions,
    keywords: KeywordConfig,
    scorer: SEOScorer,
    html_hash: Optional[str] = None,
) -> ExtractionResult:
    """Run extractors and scorer; neither raises on a parsed document."""
    profile = extract_profile(
        doc,
        keywords=keywords,
        dedupe_social_links=options.dedupe_social_links,
        url=url,
    )
    assessment = scorer.score(doc)
    logger.info(f"Analyzed {url}: SEO score {assessment.score}")
    return ExtractionResult(
        url=url, profile=profile, assessment=assessment, html_hash=html_hash
    )


class ProfileExtractor:
    """Runs the extraction pipeline for one URL at a time.

    Fetch and parse failures are returned as a failed ExtractionResult and
    never raised past this class.
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        fetcher: Optional[PageFetcher] = None,
        scorer: Optional[SEOScorer] = None,
    ):
        """Initialize the extractor.

        Args:
            config: Runtime configuration (defaults from environment)
            fetcher: Page fetcher to use
            scorer: SEO scorer to use
        """
        self.config = config or Config.from_env()
        self.fetcher = fetcher or PageFetcher(
            user_agent=self.config.user_agent, timeout=self.config.timeout
        )
        self.scorer = scorer or SEOScorer(thresholds=self.config.thresholds)

    def _options(self, options: Optional[ExtractionOptions]) -> ExtractionOptions:
        return options or ExtractionOptions(timeout=self.config.timeout)

    def extract(self, url: str, options: Optional[ExtractionOptions] = None) -> ExtractionResult:
        """Fetch and analyze a URL.

        Args:
            url: Absolute http(s) URL
            options: Per-call options

        Returns:
            ExtractionResult; on fetch or parse failure ``error`` is set

        Raises:
            ValueError: If the keyword overrides name unknown keyword lists
        """
        options = self._options(options)
        keywords = options.keywords()

        try:
            raw = self.fetcher.fetch(url, timeout=options.timeout)
            doc = parse(raw, features=self.config.html_parser)
        except (FetchError, ParseError) as e:
            logger.warning(f"Could not analyze {url}: {e}")
            return ExtractionResult(url=url, error=e)

        return _analyze_document(doc, url, options, keywords, self.scorer, raw.html_hash)

    def extract_html(
        self,
        markup: Union[str, bytes, RawPage],
        url: str = "",
        options: Optional[ExtractionOptions] = None,
    ) -> ExtractionResult:
        """Analyze markup that was obtained elsewhere."""
        options = self._options(options)
        keywords = options.keywords()

        try:
            doc = parse(markup, url=url, features=self.config.html_parser)
        except ParseError as e:
            logger.warning(f"Could not analyze {url or 'markup'}: {e}")
            return ExtractionResult(url=url, error=e)

        html_hash = markup.html_hash if isinstance(markup, RawPage) else None
        return _analyze_document(doc, url or doc.url, options, keywords, self.scorer, html_hash)

    def close(self) -> None:
        self.fetcher.close()


class AsyncProfileExtractor:
    """Runs independent extraction jobs concurrently.

    Concurrency is bounded by a semaphore of ``max_workers``; each job owns
    its own document, so no state is shared between jobs.
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        max_workers: Optional[int] = None,
        fetcher: Optional[AsyncPageFetcher] = None,
        scorer: Optional[SEOScorer] = None,
    ):
        """Initialize the extractor.

        Args:
            config: Runtime configuration (defaults from environment)
            max_workers: Maximum concurrent jobs (defaults to config.max_workers)
            fetcher: Async page fetcher to use
            scorer: SEO scorer to use
        """
        self.config = config or Config.from_env()
        self.max_workers = max(1, max_workers or self.config.max_workers)
        self.fetcher = fetcher or AsyncPageFetcher(
            user_agent=self.config.user_agent, timeout=self.config.timeout
        )
        self.scorer = scorer or SEOScorer(thresholds=self.config.thresholds)
        self.semaphore = asyncio.Semaphore(self.max_workers)

    async def __aenter__(self) -> "AsyncProfileExtractor":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.fetcher.aclose()

    async def extract(
        self,
        url: str,
        options: Optional[ExtractionOptions] = None,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> ExtractionResult:
        """Fetch and analyze a URL once a worker slot is free."""
        options = options or ExtractionOptions(timeout=self.config.timeout)
        keywords = options.keywords()

        async with self.semaphore:
            try:
                raw = await self.fetcher.fetch(
                    url, timeout=options.timeout, cancel_event=cancel_event
                )
                doc = parse(raw, features=self.config.html_parser)
            except (FetchError, ParseError) as e:
                logger.warning(f"Could not analyze {url}: {e}")
                return ExtractionResult(url=url, error=e)

            return _analyze_document(doc, url, options, keywords, self.scorer, raw.html_hash)

    async def extract_many(
        self,
        urls: Iterable[str],
        options: Optional[ExtractionOptions] = None,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> List[ExtractionResult]:
        """Analyze several URLs; results are returned in input order."""
        urls = list(urls)
        logger.info(f"Analyzing {len(urls)} URLs with {self.max_workers} workers")
        return await asyncio.gather(
            *(self.extract(url, options, cancel_event) for url in urls)
        )


def extract_website_profile(
    url: str,
    options: Optional[ExtractionOptions] = None,
    config: Optional[Config] = None,
) -> ExtractionResult:
    """Fetch a page and extract its profile and SEO assessment.

    Args:
        url: Absolute http(s) URL
        options: Timeout and keyword overrides
        config: Runtime configuration

    Returns:
        ExtractionResult; ``result.error`` carries a FetchError or ParseError
        when the page could not be analyzed
    """
    extractor = ProfileExtractor(config=config)
    try:
        return extractor.extract(url, options)
    finally:
        extractor.close()


def extract_website_profiles(
    urls: Iterable[str],
    options: Optional[ExtractionOptions] = None,
    config: Optional[Config] = None,
    max_workers: Optional[int] = None,
) -> List[ExtractionResult]:
    """Analyze several URLs concurrently from synchronous code."""

    async def _run() -> List[ExtractionResult]:
        async with AsyncProfileExtractor(config=config, max_workers=max_workers) as extractor:
            return await extractor.extract_many(urls, options)

    return asyncio.run(_run())
