"""Field extractors for marketing content.

Every extractor is a pure function of a ParsedDocument (and, where it uses
keywords, a KeywordConfig). Missing content yields an empty value; no
extractor raises because something was not found.
"""

import logging
import re
from typing import Dict, List, Optional, Tuple

from bs4 import Tag

from seoprofile.config import KeywordConfig, default_keywords
from seoprofile.constants import (
    ABOUT_FALLBACK_PARAGRAPHS,
    ABOUT_SECTION_HEADING_TEXT,
    MAX_BRAND_COLORS,
    MAX_GALLERY_IMAGES,
    MAX_HERO_IMAGES,
    MAX_SERVICES,
    MAX_TESTIMONIALS,
    MIN_ABOUT_PARAGRAPH_LENGTH,
    MIN_TESTIMONIAL_LENGTH,
    SOCIAL_PLATFORMS,
)
from seoprofile.models import ContactInfo, ExtractionProfile, Headings, ImageSet
from seoprofile.parser import ParsedDocument
from seoprofile.patterns import DEFAULT_CONTACT_PATTERNS, ContactPattern
from seoprofile.strategies import (
    FallbackChain,
    Strategy,
    css_string,
    image_source,
    unique,
)

logger = logging.getLogger(__name__)

HEX_COLOR_RE = re.compile(r"#(?:[0-9a-fA-F]{3}){1,2}\b")


def _contains(tag_selector: str, keywords: List[str]) -> Tuple[str, ...]:
    return tuple(f"{tag_selector}:-soup-contains({css_string(k)})" for k in keywords)


def _testimonial_text(doc: ParsedDocument, element: Tag) -> Optional[str]:
    text = element.get_text().strip()
    return text if len(text) > MIN_TESTIMONIAL_LENGTH else None


def _leading_paragraphs(doc: ParsedDocument) -> str:
    """Join the first few long paragraphs in document order."""
    paragraphs = []
    for p in doc.select("p"):
        text = p.get_text().strip()
        if len(text) > MIN_ABOUT_PARAGRAPH_LENGTH:
            paragraphs.append(text)
            if len(paragraphs) == ABOUT_FALLBACK_PARAGRAPHS:
                break
    return " ".join(paragraphs)


# =============================================================================
# Chains
# =============================================================================

def about_chain(keywords: KeywordConfig = default_keywords) -> FallbackChain:
    heading = css_string(ABOUT_SECTION_HEADING_TEXT)
    return FallbackChain(
        name="about_text",
        strategies=(
            Strategy("about_named", ('[class*="about"]', '[id*="about"]')),
            Strategy(
                "about_section",
                (f"section:has(h1:-soup-contains({heading}), h2:-soup-contains({heading}))",),
            ),
            Strategy("keyword_paragraph", _contains("p", keywords.about_keywords)),
        ),
        fallback=_leading_paragraphs,
    )


def services_chain(keywords: KeywordConfig = default_keywords) -> FallbackChain:
    return FallbackChain(
        name="services",
        strategies=(
            Strategy("service_class", ('[class*="service"]',)),
            Strategy("portfolio_class", ('[class*="portfolio"]',)),
            Strategy("offering_class", ('[class*="offering"]',)),
            Strategy("service_list_item", _contains("ul li", keywords.service_list_keywords)),
            Strategy("service_heading", _contains("h3", keywords.service_heading_keywords)),
        ),
    )


TESTIMONIALS_CHAIN = FallbackChain(
    name="testimonials",
    strategies=(
        Strategy(
            "testimonial_named",
            ('[class*="testimonial"]', '[id*="testimonial"]'),
            _testimonial_text,
        ),
        Strategy("review_named", ('[class*="review"]', '[id*="review"]'), _testimonial_text),
        Strategy("quote_named", ('[class*="quote"]', '[id*="quote"]'), _testimonial_text),
        Strategy("blockquote", ("blockquote",), _testimonial_text),
    ),
)

LOGO_CHAIN = FallbackChain(
    name="logo",
    strategies=(
        Strategy("logo_alt", ('img[alt*="logo"]',), image_source),
        Strategy("logo_class", ('img[class*="logo"]',), image_source),
        Strategy("logo_id", ('img[id*="logo"]',), image_source),
        Strategy("header_image", ("header img", ".navbar img"), image_source, limit=1),
    ),
)


def gallery_chain(keywords: KeywordConfig = default_keywords) -> FallbackChain:
    alt_selectors = tuple(f"img[alt*={css_string(k)}]" for k in keywords.gallery_alt_keywords)
    return FallbackChain(
        name="gallery_images",
        strategies=(
            Strategy("gallery_class", ('[class*="gallery"] img',), image_source),
            Strategy("portfolio_class", ('[class*="portfolio"] img',), image_source),
            Strategy("work_class", ('[class*="work"] img',), image_source),
            Strategy("keyword_alt", alt_selectors, image_source),
        ),
    )


HERO_CHAIN = FallbackChain(
    name="hero_images",
    strategies=(
        Strategy("header_images", ("header img",), image_source),
        Strategy("hero_class", ('[class*="hero"] img',), image_source),
        Strategy("banner_class", ('[class*="banner"] img',), image_source),
        Strategy("first_image", ("img",), image_source, limit=1),
    ),
)


# =============================================================================
# Extractors
# =============================================================================

def extract_title(doc: ParsedDocument) -> str:
    return doc.title


def extract_meta_description(doc: ParsedDocument) -> str:
    return doc.meta_content("description") or ""


def extract_headings(doc: ParsedDocument) -> Headings:
    """Collect h1-h3 texts per level, in document order, without dedup."""
    return Headings(
        h1=tuple(h.get_text().strip() for h in doc.select("h1")),
        h2=tuple(h.get_text().strip() for h in doc.select("h2")),
        h3=tuple(h.get_text().strip() for h in doc.select("h3")),
    )


def extract_about_text(doc: ParsedDocument, keywords: KeywordConfig = default_keywords) -> str:
    """Find the about paragraph.

    Tries about-named elements, sections headed "About", then paragraphs
    mentioning an about keyword; falls back to the first three paragraphs
    longer than 50 characters.
    """
    return about_chain(keywords).first(doc) or ""


def extract_services(doc: ParsedDocument, keywords: KeywordConfig = default_keywords) -> List[str]:
    return unique(services_chain(keywords).collect(doc), limit=MAX_SERVICES)


def extract_contact_info(
    doc: ParsedDocument,
    patterns: Optional[Dict[str, ContactPattern]] = None,
) -> ContactInfo:
    """Scan the body text for a phone number, email and street address."""
    patterns = patterns or DEFAULT_CONTACT_PATTERNS
    text = doc.body_text()

    found = {}
    for field_name in ("phone", "email", "address"):
        pattern = patterns.get(field_name)
        if pattern is not None:
            found[field_name] = pattern.first_match(text)

    return ContactInfo(**found)


def extract_testimonials(doc: ParsedDocument) -> List[str]:
    return TESTIMONIALS_CHAIN.collect(doc)[:MAX_TESTIMONIALS]


def extract_social_links(doc: ParsedDocument, dedupe: bool = False) -> List[str]:
    """Hrefs of links pointing at a known social platform, in document order."""
    selector = ", ".join(f'a[href*="{platform}"]' for platform in SOCIAL_PLATFORMS)
    links = [a.get("href") for a in doc.select(selector) if a.get("href")]
    return unique(links) if dedupe else links


def extract_logo(doc: ParsedDocument) -> Optional[str]:
    return LOGO_CHAIN.first(doc)


def extract_gallery_images(
    doc: ParsedDocument, keywords: KeywordConfig = default_keywords
) -> List[str]:
    return unique(gallery_chain(keywords).collect(doc), limit=MAX_GALLERY_IMAGES)


def extract_hero_images(doc: ParsedDocument) -> List[str]:
    """Header, hero and banner images plus the first image, deduplicated."""
    return unique(HERO_CHAIN.collect(doc), limit=MAX_HERO_IMAGES)


def extract_meta_keywords(doc: ParsedDocument) -> List[str]:
    content = doc.meta_content("keywords") or ""
    return [k.strip() for k in content.split(",") if k.strip()]


def extract_brand_colors(doc: ParsedDocument) -> List[str]:
    """Distinct hex colours mentioned anywhere in the markup."""
    colors = (c.lower() for c in HEX_COLOR_RE.findall(doc.markup))
    return unique(colors, limit=MAX_BRAND_COLORS)


def extract_profile(
    doc: ParsedDocument,
    keywords: Optional[KeywordConfig] = None,
    dedupe_social_links: bool = False,
    url: Optional[str] = None,
) -> ExtractionProfile:
    """Run every field extractor over a document.

    Args:
        doc: Parsed page
        keywords: Keyword lists for the keyword-driven strategies
        dedupe_social_links: Drop repeated social hrefs
        url: URL recorded on the profile, defaults to the document's URL

    Returns:
        A fresh ExtractionProfile
    """
    keywords = keywords or default_keywords

    profile = ExtractionProfile(
        url=url or doc.url,
        title=extract_title(doc),
        meta_description=extract_meta_description(doc),
        headings=extract_headings(doc),
        about_text=extract_about_text(doc, keywords),
        services=tuple(extract_services(doc, keywords)),
        contact_info=extract_contact_info(doc),
        testimonials=tuple(extract_testimonials(doc)),
        social_links=tuple(extract_social_links(doc, dedupe=dedupe_social_links)),
        images=ImageSet(
            logo=extract_logo(doc),
            gallery=tuple(extract_gallery_images(doc, keywords)),
            hero=tuple(extract_hero_images(doc)),
        ),
        meta_keywords=tuple(extract_meta_keywords(doc)),
        brand_colors=tuple(extract_brand_colors(doc)),
    )

    logger.debug(
        f"Extracted profile for {doc.url or 'markup'}: "
        f"{len(profile.services)} services, {len(profile.testimonials)} testimonials, "
        f"{len(profile.images.gallery)} gallery images"
    )
    return profile
