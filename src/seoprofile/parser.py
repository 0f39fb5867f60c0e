"""Document parser turning raw markup into a queryable tree."""

import logging
from typing import List, Optional, Union
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Tag

from seoprofile.constants import BINARY_SNIFF_BYTES
from seoprofile.exceptions import ParseError
from seoprofile.models import RawPage

logger = logging.getLogger(__name__)


def collapse_whitespace(text: str) -> str:
    return " ".join(text.split())


class ParsedDocument:
    """Parsed page supporting CSS-selector queries and text access.

    Selectors are evaluated by soupsieve, so ``:has()`` and
    ``:-soup-contains()`` are available alongside standard CSS.
    """

    def __init__(self, soup: BeautifulSoup, url: str = ""):
        self.soup = soup
        self.url = url

    def select_one(self, selector: str) -> Optional[Tag]:
        return self.soup.select_one(selector)

    def select(self, selector: str, limit: Optional[int] = None) -> List[Tag]:
        return self.soup.select(selector, limit=limit)

    def body_text(self) -> str:
        """Plain text of the body, or of the whole document if it has none."""
        root = self.soup.body or self.soup
        return root.get_text()

    @property
    def title(self) -> str:
        """Whitespace-collapsed document title, empty if there is none.

        Titles inside embedded SVG or MathML (icon labels) are not page titles.
        """
        for title_tag in self.soup.find_all("title"):
            if title_tag.find_parent(["svg", "math"]) is None:
                return collapse_whitespace(title_tag.get_text())
        return ""

    def meta_content(self, name: str) -> Optional[str]:
        """Content of ``<meta name=...>``; None when the element is absent."""
        meta = self.soup.find("meta", attrs={"name": name})
        if meta is None:
            return None
        return meta.get("content") or ""

    def images(self) -> List[Tag]:
        return self.soup.find_all("img")

    def resolve(self, src: str) -> str:
        """Resolve a (possibly relative) reference against the page URL."""
        if not self.url:
            return src
        return urljoin(self.url, src)

    @property
    def markup(self) -> str:
        return str(self.soup)


def _looks_binary(content: bytes) -> bool:
    return b"\x00" in content[:BINARY_SNIFF_BYTES]


def parse(
    page: Union[RawPage, str, bytes],
    url: str = "",
    features: str = "lxml",
) -> ParsedDocument:
    """Parse markup into a ParsedDocument.

    Malformed markup is repaired by the tree builder; only payloads with
    nothing to parse are rejected.

    Args:
        page: A RawPage, or markup as text or bytes
        url: Page URL used to resolve relative references (taken from the
            RawPage when not given)
        features: BeautifulSoup tree builder name

    Returns:
        ParsedDocument for the page

    Raises:
        ParseError: If the payload is empty or binary
    """
    if isinstance(page, RawPage):
        url = url or page.final_url or page.url
        if _looks_binary(page.content):
            raise ParseError("Binary payload", url=url)
        markup = page.text
    elif isinstance(page, bytes):
        if _looks_binary(page):
            raise ParseError("Binary payload", url=url)
        markup = page.decode("utf-8", errors="replace")
    else:
        markup = page or ""

    if "\x00" in markup[:BINARY_SNIFF_BYTES]:
        raise ParseError("Binary payload", url=url)
    if not markup.strip():
        raise ParseError("Empty payload", url=url)

    soup = BeautifulSoup(markup, features)
    logger.debug(f"Parsed {url or 'markup'} ({len(markup)} chars)")
    return ParsedDocument(soup, url=url)
