# src/seoprofile/constants.py
"""Centralized constants for the profile extractor.

This module contains magic numbers and default keyword lists that are used
across multiple modules. For user-configurable thresholds, see config.py
and ScoringThresholds.
"""

# =============================================================================
# Fetching Constants
# =============================================================================

# Default request timeout (seconds)
DEFAULT_FETCH_TIMEOUT_SECONDS = 15.0

# Upper bound accepted for a caller-supplied timeout (seconds)
MAX_FETCH_TIMEOUT_SECONDS = 120.0

# Default number of concurrent extraction jobs
DEFAULT_MAX_WORKERS = 5

DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; SEO-Profile/1.0)"

# Leading bytes inspected when deciding whether a payload is binary
BINARY_SNIFF_BYTES = 1024

# Hex digits kept from the SHA-1 of the page content
HTML_HASH_LENGTH = 12


# =============================================================================
# Extraction Constants
# =============================================================================

MAX_SERVICES = 10
MAX_TESTIMONIALS = 5
MAX_GALLERY_IMAGES = 20
MAX_HERO_IMAGES = 5
MAX_BRAND_COLORS = 10

# Testimonials must be longer than this (characters)
MIN_TESTIMONIAL_LENGTH = 20

# Paragraphs used by the about-text fallback must be longer than this
MIN_ABOUT_PARAGRAPH_LENGTH = 50

# Number of paragraphs joined by the about-text fallback
ABOUT_FALLBACK_PARAGRAPHS = 3

# Headings searched for "About" when looking for an about section
ABOUT_SECTION_HEADING_TEXT = "About"

DEFAULT_ABOUT_KEYWORDS = ["photographer", "photography"]
DEFAULT_SERVICE_LIST_KEYWORDS = ["photography"]
DEFAULT_SERVICE_HEADING_KEYWORDS = ["Wedding", "Portrait", "Family"]
DEFAULT_GALLERY_ALT_KEYWORDS = ["photography"]

SOCIAL_PLATFORMS = ("facebook", "instagram", "twitter", "linkedin")


# =============================================================================
# Scoring Constants
# =============================================================================

MAX_SCORE = 100
MIN_SCORE = 0

MISSING_TITLE_POINTS = 20
TITLE_LENGTH_POINTS = 10
MISSING_META_DESCRIPTION_POINTS = 15
META_DESCRIPTION_LENGTH_POINTS = 10
MISSING_H1_POINTS = 15
MULTIPLE_H1_POINTS = 10
MISSING_ALT_POINTS_PER_IMAGE = 5
MISSING_ALT_MAX_POINTS = 20

# Always emitted, regardless of the issues found
GENERIC_SEO_RECOMMENDATIONS = (
    "Add location-specific keywords to title and headings",
    "Include photography service keywords throughout content",
    "Add structured data for business information",
    "Optimize images with descriptive alt text",
    "Add internal linking between service pages",
)


# =============================================================================
# Business Profile Defaults
# =============================================================================

DEFAULT_INDUSTRY_LABEL = "Familienfotograf"
DEFAULT_LOCATION = "Wien"
DEFAULT_SUBJECT = "Fotografie"
DEFAULT_LANGUAGE = "de"
DEFAULT_SERVICES = [
    "Familienfotografie",
    "Neugeborenenfotos",
    "Hochzeitsfotografie",
    "Portraitfotografie",
]
DEFAULT_SECONDARY_KEYWORDS = [
    "professionelle Fotografie",
    "Familienshooting",
    "Fotostudio Wien",
    "Babyfotos",
]

# Used by summarize_profile when no profile could be extracted
FALLBACK_SUMMARY = {
    "services": "Family, newborn, maternity, and portrait photography",
    "brand_voice": "Professional, warm, and personal photography services",
    "key_features": "High-quality photography, professional editing, personal service",
    "title": "Professional Photography Studio",
}
