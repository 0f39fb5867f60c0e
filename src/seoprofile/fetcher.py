"""Page fetchers for retrieving raw markup over HTTP."""

import asyncio
import contextlib
import logging
import time
from typing import Optional
from urllib.parse import urlparse

import httpx
import requests

from seoprofile.constants import DEFAULT_FETCH_TIMEOUT_SECONDS, DEFAULT_USER_AGENT
from seoprofile.exceptions import FetchError, FetchErrorKind
from seoprofile.models import RawPage

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9,de;q=0.8",
    "Accept-Encoding": "gzip, deflate",
}


def validate_url(url: str) -> None:
    """Reject anything that is not an absolute http(s) URL.

    Raises:
        FetchError: With kind ``invalidUrl``
    """
    try:
        parsed = urlparse(url or "")
    except ValueError as e:
        raise FetchError(
            f"Malformed URL {url!r}: {e}", url=url, kind=FetchErrorKind.INVALID_URL
        ) from e

    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise FetchError(
            f"Not an absolute http(s) URL: {url!r}",
            url=url,
            kind=FetchErrorKind.INVALID_URL,
        )


def _status_error(url: str, status_code: int) -> FetchError:
    return FetchError(
        f"httpStatus:{status_code}",
        url=url,
        kind=FetchErrorKind.HTTP_STATUS,
        status_code=status_code,
    )


class PageFetcher:
    """Fetches a single page with a bounded timeout. Never retries."""

    def __init__(
        self,
        user_agent: Optional[str] = None,
        timeout: float = DEFAULT_FETCH_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
    ):
        """Initialize the fetcher.

        Args:
            user_agent: User agent sent with every request
            timeout: Default timeout in seconds
            session: Optional pre-built requests session
        """
        self.user_agent = user_agent or DEFAULT_USER_AGENT
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update(DEFAULT_HEADERS)
        self.session.headers["User-Agent"] = self.user_agent

    def fetch(self, url: str, timeout: Optional[float] = None) -> RawPage:
        """Fetch raw markup for a URL.

        Args:
            url: Absolute http(s) URL
            timeout: Timeout in seconds, defaults to the fetcher's timeout

        Returns:
            RawPage with the response body

        Raises:
            FetchError: On invalid URL, timeout, transport failure or non-2xx status
        """
        validate_url(url)
        timeout = timeout if timeout is not None else self.timeout

        start_time = time.time()
        try:
            response = self.session.get(url, timeout=timeout, allow_redirects=True)
        except requests.exceptions.Timeout as e:
            raise FetchError(
                f"Request timeout after {timeout}s", url=url, kind=FetchErrorKind.TIMEOUT
            ) from e
        except requests.exceptions.RequestException as e:
            raise FetchError(
                f"Connection error: {e}", url=url, kind=FetchErrorKind.NETWORK
            ) from e
        elapsed = time.time() - start_time

        if not 200 <= response.status_code < 300:
            raise _status_error(url, response.status_code)

        logger.debug(f"Fetched {url} ({response.status_code}) in {elapsed:.2f}s")

        return RawPage(
            url=url,
            final_url=response.url or url,
            status_code=response.status_code,
            content=response.content,
            text=response.text,
            encoding=response.encoding,
            headers=dict(response.headers),
            elapsed=elapsed,
        )

    def close(self) -> None:
        self.session.close()


class AsyncPageFetcher:
    """Asynchronous, cancellable page fetcher backed by httpx."""

    def __init__(
        self,
        user_agent: Optional[str] = None,
        timeout: float = DEFAULT_FETCH_TIMEOUT_SECONDS,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """Initialize the fetcher.

        Args:
            user_agent: User agent sent with every request
            timeout: Default timeout in seconds
            client: Optional pre-built httpx client (e.g. with a mock transport)
        """
        self.user_agent = user_agent or DEFAULT_USER_AGENT
        self.timeout = timeout
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(follow_redirects=True)
        self.client.headers.update(DEFAULT_HEADERS)
        self.client.headers["User-Agent"] = self.user_agent

    async def __aenter__(self) -> "AsyncPageFetcher":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()

    async def fetch(
        self,
        url: str,
        timeout: Optional[float] = None,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> RawPage:
        """Fetch raw markup for a URL.

        Args:
            url: Absolute http(s) URL
            timeout: Timeout in seconds, defaults to the fetcher's timeout
            cancel_event: When set, the in-flight request is aborted

        Returns:
            RawPage with the response body

        Raises:
            FetchError: On invalid URL, timeout, cancellation, transport
                failure or non-2xx status
        """
        validate_url(url)
        timeout = timeout if timeout is not None else self.timeout

        if cancel_event is None:
            return await self._get(url, timeout)

        if cancel_event.is_set():
            raise FetchError("Fetch cancelled", url=url, kind=FetchErrorKind.CANCELLED)

        request_task = asyncio.ensure_future(self._get(url, timeout))
        cancel_task = asyncio.ensure_future(cancel_event.wait())
        try:
            await asyncio.wait(
                {request_task, cancel_task}, return_when=asyncio.FIRST_COMPLETED
            )
        finally:
            cancel_task.cancel()
            if not request_task.done():
                request_task.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await request_task

        if request_task.cancelled():
            logger.debug(f"Fetch of {url} cancelled")
            raise FetchError("Fetch cancelled", url=url, kind=FetchErrorKind.CANCELLED)

        return request_task.result()

    async def _get(self, url: str, timeout: float) -> RawPage:
        start_time = time.time()
        try:
            response = await self.client.get(url, timeout=timeout)
        except httpx.TimeoutException as e:
            raise FetchError(
                f"Request timeout after {timeout}s", url=url, kind=FetchErrorKind.TIMEOUT
            ) from e
        except httpx.HTTPError as e:
            raise FetchError(
                f"Connection error: {e}", url=url, kind=FetchErrorKind.NETWORK
            ) from e
        elapsed = time.time() - start_time

        if not response.is_success:
            raise _status_error(url, response.status_code)

        logger.debug(f"Fetched {url} ({response.status_code}) in {elapsed:.2f}s")

        return RawPage(
            url=url,
            final_url=str(response.url),
            status_code=response.status_code,
            content=response.content,
            text=response.text,
            encoding=response.encoding,
            headers=dict(response.headers),
            elapsed=elapsed,
        )
