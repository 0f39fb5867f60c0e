"""Template-driven content recommendations for an extracted profile."""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from seoprofile.constants import FALLBACK_SUMMARY
from seoprofile.models import (
    BusinessProfile,
    ContactInfo,
    ContentSummary,
    ExtractionProfile,
    KeywordSet,
    RecommendationRecord,
    SeoRecommendationSet,
)
from seoprofile.strategies import unique


@dataclass(frozen=True)
class RecommendationTemplates:
    """Format strings for one language.

    Placeholders: ``{industry}``, ``{location}``, ``{subject}``,
    ``{services}`` (comma-joined), ``{service_pair}`` (first two services
    joined with " & ") and, in ``service``, ``{service}``.
    """

    title: str
    meta_description: str
    h1: Tuple[str, ...]
    h2: Tuple[str, ...]
    about: str
    service: str


GERMAN_TEMPLATES = RecommendationTemplates(
    title="{industry} {location} | Professionelle {subject} Services",
    meta_description=(
        "Professioneller {industry} in {location}. Spezialisiert auf {services}. "
        "Hochwertige {subject} für Ihre besonderen Momente. Jetzt Termin vereinbaren!"
    ),
    h1=("{industry} in {location}, dem Sie vertrauen können",),
    h2=("{service_pair}", "Preise & Pakete", "Häufige Fragen"),
    about=(
        "Als erfahrener {industry} in {location} bringe ich Ihre wertvollsten Momente "
        "zum Leben. Spezialisiert auf {services} biete ich professionelle "
        "{subject}-Services für Familien in ganz {location} und Umgebung."
    ),
    service="{service} {location}",
)

ENGLISH_TEMPLATES = RecommendationTemplates(
    title="{industry} {location} | Professional {subject} Services",
    meta_description=(
        "Professional {industry} in {location}. Specializing in {services}. "
        "High-quality {subject} for your special moments. Book your session today!"
    ),
    h1=("{industry} in {location} You Can Trust",),
    h2=("{service_pair}", "Pricing & Packages", "Frequently Asked Questions"),
    about=(
        "As an experienced {industry} in {location}, I bring your most precious "
        "moments to life. Specializing in {services}, I offer professional {subject} "
        "services for clients throughout {location} and the surrounding area."
    ),
    service="{service} {location}",
)

TEMPLATES: Dict[str, RecommendationTemplates] = {
    "de": GERMAN_TEMPLATES,
    "en": ENGLISH_TEMPLATES,
}

REASONING = {
    "title": "Includes primary keyword, location, and clear service description for better local SEO",
    "meta_description": "Incorporates location, services, and call-to-action within optimal character limit",
    "h1": "Trust-building language with location and service keywords",
    "h2": "Service-focused H2s with FAQ section for better user experience",
    "about": "Emphasizes expertise, location, and specific services while maintaining personal touch",
    "services": "Location-specific service descriptions for better local search ranking",
}


def templates_for(language: str) -> RecommendationTemplates:
    """Look up the template set for a language code.

    Raises:
        ValueError: If no template set exists for the language
    """
    try:
        return TEMPLATES[language.lower()]
    except KeyError:
        raise ValueError(
            f"No recommendation templates for language {language!r} "
            f"(available: {', '.join(sorted(TEMPLATES))})"
        ) from None


class RecommendationSynthesizer:
    """Builds "current -> improved" pairs by template substitution.

    No quality checks are made: an improved value is produced for every
    field, whether or not the current value is already good.
    """

    def __init__(self, business: Optional[BusinessProfile] = None):
        self.business = business or BusinessProfile()
        self.templates = templates_for(self.business.language)

    def _services(self) -> List[str]:
        services = [s.strip() for s in self.business.services if s and s.strip()]
        return services or [self.business.industry_label]

    def _values(self) -> Dict[str, str]:
        services = self._services()
        return {
            "industry": self.business.industry_label,
            "location": self.business.location,
            "subject": self.business.subject,
            "services": ", ".join(services),
            "service_pair": " & ".join(services[:2]),
        }

    def synthesize(self, profile: ExtractionProfile) -> SeoRecommendationSet:
        values = self._values()
        services = self._services()
        location = self.business.location
        templates = self.templates

        def record(field_name, current, improved):
            return RecommendationRecord(
                field=field_name,
                current=current,
                improved=improved,
                reasoning=REASONING[field_name],
            )

        return SeoRecommendationSet(
            title=record("title", profile.title, templates.title.format(**values)),
            meta_description=record(
                "meta_description",
                profile.meta_description,
                templates.meta_description.format(**values),
            ),
            h1=record(
                "h1",
                tuple(profile.headings.h1),
                tuple(t.format(**values) for t in templates.h1),
            ),
            h2=record(
                "h2",
                tuple(profile.headings.h2),
                tuple(t.format(**values) for t in templates.h2),
            ),
            about=record("about", profile.about_text, templates.about.format(**values)),
            services=record(
                "services",
                tuple(profile.services),
                tuple(
                    templates.service.format(service=service, location=location)
                    for service in services
                ),
            ),
            keywords=KeywordSet(
                primary=tuple(unique(
                    [f"{self.business.industry_label} {location}"]
                    + [f"{service} {location}" for service in services[:2]]
                )),
                secondary=tuple(self.business.secondary_keywords),
                location=location,
            ),
        )


def synthesize_recommendations(
    profile: ExtractionProfile, business: Optional[BusinessProfile] = None
) -> SeoRecommendationSet:
    """Synthesize localized recommendations for a profile.

    Args:
        profile: Extracted page profile (read only)
        business: Business details; defaults describe a family photography studio in Vienna

    Returns:
        SeoRecommendationSet with a record per content field and a keyword set
    """
    return RecommendationSynthesizer(business).synthesize(profile)


def summarize_profile(profile: Optional[ExtractionProfile]) -> ContentSummary:
    """Condense a profile into writing context.

    When no profile is available (the page could not be analyzed) a fixed
    generic summary is returned instead.
    """
    if profile is None:
        return ContentSummary(contact_info=ContactInfo(), **FALLBACK_SUMMARY)

    return ContentSummary(
        services=", ".join(profile.services),
        brand_voice=profile.about_text,
        key_features=", ".join(profile.headings.h2),
        contact_info=profile.contact_info,
        title=profile.title,
    )
