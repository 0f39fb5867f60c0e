"""Ordered fallback chains expressed as data.

A chain is a prioritized tuple of strategies. Each strategy names the CSS
selectors it queries and how a value is read from a matched element. Chains
are evaluated in one of two modes:

- ``first``: the first strategy yielding a non-empty value wins; if none
  does, the chain's fallback (if any) is applied to the document.
- ``collect``: values from every strategy are gathered, strategy by
  strategy in document order, visiting each element at most once.
"""

from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, List, Optional, Tuple, TypeVar

from bs4 import Tag

from seoprofile.parser import ParsedDocument

T = TypeVar("T")

ValueReader = Callable[[ParsedDocument, Tag], Optional[str]]


def element_text(doc: ParsedDocument, element: Tag) -> Optional[str]:
    """Trimmed text content of an element."""
    return element.get_text().strip()


def image_source(doc: ParsedDocument, element: Tag) -> Optional[str]:
    """Resolved ``src`` of an image element, None if it has none."""
    src = element.get("src")
    if not src:
        return None
    return doc.resolve(src.strip())


@dataclass(frozen=True)
class Strategy:
    """One named candidate query within a chain."""

    name: str
    selectors: Tuple[str, ...]
    read: ValueReader = element_text
    # Only the first `limit` matches of each selector are considered
    limit: Optional[int] = None

    def matches(self, doc: ParsedDocument) -> Iterator[Tag]:
        for selector in self.selectors:
            yield from doc.select(selector, limit=self.limit)

    def values(self, doc: ParsedDocument, seen: Optional[set] = None) -> Iterator[str]:
        for element in self.matches(doc):
            if seen is not None:
                if id(element) in seen:
                    continue
                seen.add(id(element))
            value = self.read(doc, element)
            if value:
                yield value


@dataclass(frozen=True)
class FallbackChain:
    """Prioritized strategies plus an optional document-level fallback."""

    name: str
    strategies: Tuple[Strategy, ...]
    fallback: Optional[Callable[[ParsedDocument], str]] = None

    def first(self, doc: ParsedDocument) -> Optional[str]:
        """Value of the first strategy that yields one, else the fallback."""
        for strategy in self.strategies:
            for value in strategy.values(doc):
                return value
        if self.fallback is not None:
            return self.fallback(doc)
        return None

    def winning_strategy(self, doc: ParsedDocument) -> Optional[str]:
        """Name of the strategy `first` would take its value from."""
        for strategy in self.strategies:
            for _ in strategy.values(doc):
                return strategy.name
        return None

    def collect(self, doc: ParsedDocument) -> List[str]:
        """Values of every strategy, each element visited once."""
        seen: set = set()
        values: List[str] = []
        for strategy in self.strategies:
            values.extend(strategy.values(doc, seen))
        return values


def unique(values: Iterable[T], limit: Optional[int] = None) -> List[T]:
    """Deduplicate preserving first occurrence, optionally capped."""
    result: List[T] = []
    seen = set()
    for value in values:
        if value in seen:
            continue
        seen.add(value)
        result.append(value)
        if limit is not None and len(result) >= limit:
            break
    return result


def css_string(value: str) -> str:
    """Quote a value for use inside a CSS selector."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'
