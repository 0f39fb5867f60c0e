"""Website content extraction and SEO heuristic scoring."""

__version__ = "0.1.0"

from seoprofile.config import (
    Config,
    ExtractionOptions,
    KeywordConfig,
    ScoringThresholds,
)
from seoprofile.exceptions import FetchError, FetchErrorKind, ParseError, SEOProfileError
from seoprofile.models import (
    BusinessProfile,
    ContactInfo,
    ContentSummary,
    ExtractionProfile,
    ExtractionResult,
    Headings,
    ImageSet,
    KeywordSet,
    RawPage,
    RecommendationRecord,
    SeoAssessment,
    SeoRecommendationSet,
)
from seoprofile.fetcher import AsyncPageFetcher, PageFetcher
from seoprofile.parser import ParsedDocument, parse
from seoprofile.extractors import extract_profile
from seoprofile.scorer import SEOScorer, score_seo
from seoprofile.synthesizer import (
    RecommendationSynthesizer,
    summarize_profile,
    synthesize_recommendations,
)
from seoprofile.orchestrator import (
    AsyncProfileExtractor,
    ProfileExtractor,
    extract_website_profile,
    extract_website_profiles,
)

__all__ = [
    # Entry points
    "extract_website_profile",
    "extract_website_profiles",
    "score_seo",
    "synthesize_recommendations",
    "summarize_profile",
    # Pipeline
    "ProfileExtractor",
    "AsyncProfileExtractor",
    "PageFetcher",
    "AsyncPageFetcher",
    "ParsedDocument",
    "parse",
    "extract_profile",
    "SEOScorer",
    "RecommendationSynthesizer",
    # Models
    "RawPage",
    "ExtractionProfile",
    "ExtractionResult",
    "Headings",
    "ContactInfo",
    "ImageSet",
    "SeoAssessment",
    "BusinessProfile",
    "RecommendationRecord",
    "KeywordSet",
    "SeoRecommendationSet",
    "ContentSummary",
    # Errors
    "SEOProfileError",
    "FetchError",
    "FetchErrorKind",
    "ParseError",
    # Config
    "Config",
    "ExtractionOptions",
    "KeywordConfig",
    "ScoringThresholds",
]
