"""Data models for website profile extraction and SEO scoring."""

import hashlib
from dataclasses import asdict, dataclass, field
from typing import Dict, List, Optional, Tuple, Union

from seoprofile.constants import (
    DEFAULT_INDUSTRY_LABEL,
    DEFAULT_LANGUAGE,
    DEFAULT_LOCATION,
    DEFAULT_SECONDARY_KEYWORDS,
    DEFAULT_SERVICES,
    DEFAULT_SUBJECT,
    HTML_HASH_LENGTH,
)
from seoprofile.exceptions import SEOProfileError


@dataclass(frozen=True)
class RawPage:
    """Markup retrieved for a URL."""

    url: str
    content: bytes
    text: str
    status_code: int = 200
    final_url: str = ""
    encoding: Optional[str] = None
    headers: Dict[str, str] = field(default_factory=dict)
    elapsed: float = 0.0  # seconds

    @property
    def html_hash(self) -> str:
        """Short SHA-1 digest of the content, for spotting unchanged pages."""
        return hashlib.sha1(self.content).hexdigest()[:HTML_HASH_LENGTH]


@dataclass(frozen=True)
class Headings:
    """Heading texts per level, in document order."""

    h1: Tuple[str, ...] = ()
    h2: Tuple[str, ...] = ()
    h3: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ContactInfo:
    """Contact details; a field is None unless its pattern matched."""

    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None


@dataclass(frozen=True)
class ImageSet:
    """Representative images of a page."""

    logo: Optional[str] = None
    gallery: Tuple[str, ...] = ()
    hero: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ExtractionProfile:
    """Structured marketing content extracted from one page."""

    url: str
    title: str = ""
    meta_description: str = ""
    headings: Headings = field(default_factory=Headings)
    about_text: str = ""
    services: Tuple[str, ...] = ()
    contact_info: ContactInfo = field(default_factory=ContactInfo)
    testimonials: Tuple[str, ...] = ()
    social_links: Tuple[str, ...] = ()
    images: ImageSet = field(default_factory=ImageSet)
    meta_keywords: Tuple[str, ...] = ()
    brand_colors: Tuple[str, ...] = ()

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class SeoAssessment:
    """Outcome of the rule-based SEO check."""

    score: int
    issues: Tuple[str, ...] = ()
    recommendations: Tuple[str, ...] = ()

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class BusinessProfile:
    """Caller-supplied business details used to localize recommendations."""

    industry_label: str = DEFAULT_INDUSTRY_LABEL
    services: List[str] = field(default_factory=lambda: list(DEFAULT_SERVICES))
    location: str = DEFAULT_LOCATION
    subject: str = DEFAULT_SUBJECT
    secondary_keywords: List[str] = field(
        default_factory=lambda: list(DEFAULT_SECONDARY_KEYWORDS)
    )
    language: str = DEFAULT_LANGUAGE


RecommendationValue = Union[str, Tuple[str, ...]]


@dataclass(frozen=True)
class RecommendationRecord:
    """A current value paired with a synthesized replacement."""

    field: str
    current: RecommendationValue
    improved: RecommendationValue
    reasoning: str


@dataclass(frozen=True)
class KeywordSet:
    primary: Tuple[str, ...]
    secondary: Tuple[str, ...]
    location: str


@dataclass(frozen=True)
class SeoRecommendationSet:
    """Synthesized content recommendations for one page."""

    title: RecommendationRecord
    meta_description: RecommendationRecord
    h1: RecommendationRecord
    h2: RecommendationRecord
    about: RecommendationRecord
    services: RecommendationRecord
    keywords: KeywordSet

    def records(self) -> List[RecommendationRecord]:
        """Return the content records in display order."""
        return [
            self.title,
            self.meta_description,
            self.h1,
            self.h2,
            self.about,
            self.services,
        ]

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class ContentSummary:
    """Condensed profile used as writing context by other tools."""

    services: str
    brand_voice: str
    key_features: str
    contact_info: ContactInfo
    title: str

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class ExtractionResult:
    """Result of running the pipeline on one URL.

    Either ``profile`` and ``assessment`` are set, or ``error`` is.
    """

    url: str
    profile: Optional[ExtractionProfile] = None
    assessment: Optional[SeoAssessment] = None
    error: Optional[SEOProfileError] = None
    html_hash: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        return {
            "url": self.url,
            "success": self.success,
            "html_hash": self.html_hash,
            "profile": self.profile.to_dict() if self.profile else None,
            "assessment": self.assessment.to_dict() if self.assessment else None,
            "error": self.error.to_dict() if self.error else None,
        }
