"""Rule-based SEO scoring of a parsed page."""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from seoprofile.config import ScoringThresholds, default_thresholds
from seoprofile.constants import (
    GENERIC_SEO_RECOMMENDATIONS,
    MAX_SCORE,
    META_DESCRIPTION_LENGTH_POINTS,
    MIN_SCORE,
    MISSING_ALT_MAX_POINTS,
    MISSING_ALT_POINTS_PER_IMAGE,
    MISSING_H1_POINTS,
    MISSING_META_DESCRIPTION_POINTS,
    MISSING_TITLE_POINTS,
    MULTIPLE_H1_POINTS,
    TITLE_LENGTH_POINTS,
)
from seoprofile.models import SeoAssessment
from seoprofile.parser import ParsedDocument

logger = logging.getLogger(__name__)

# (points, issue) when a rule fires
Deduction = Tuple[int, str]


@dataclass(frozen=True)
class DeductionRule:
    """A single scoring condition and its penalty."""

    name: str
    evaluate: Callable[[ParsedDocument, ScoringThresholds], Optional[Deduction]]


def _missing_title(doc: ParsedDocument, thresholds: ScoringThresholds) -> Optional[Deduction]:
    if not doc.title:
        return MISSING_TITLE_POINTS, "Missing page title"
    return None


def _title_length(doc: ParsedDocument, thresholds: ScoringThresholds) -> Optional[Deduction]:
    title = doc.title
    if title and not thresholds.title_min <= len(title) <= thresholds.title_max:
        return (
            TITLE_LENGTH_POINTS,
            f"Title length not optimal (should be "
            f"{thresholds.title_min}-{thresholds.title_max} characters)",
        )
    return None


def _missing_meta_description(
    doc: ParsedDocument, thresholds: ScoringThresholds
) -> Optional[Deduction]:
    if doc.meta_content("description") is None:
        return MISSING_META_DESCRIPTION_POINTS, "Missing meta description"
    return None


def _meta_description_length(
    doc: ParsedDocument, thresholds: ScoringThresholds
) -> Optional[Deduction]:
    content = doc.meta_content("description")
    if content is None:
        return None
    if not thresholds.meta_description_min <= len(content) <= thresholds.meta_description_max:
        return (
            META_DESCRIPTION_LENGTH_POINTS,
            f"Meta description length not optimal (should be "
            f"{thresholds.meta_description_min}-{thresholds.meta_description_max} characters)",
        )
    return None


def _missing_h1(doc: ParsedDocument, thresholds: ScoringThresholds) -> Optional[Deduction]:
    if not doc.select("h1"):
        return MISSING_H1_POINTS, "Missing H1 heading"
    return None


def _multiple_h1(doc: ParsedDocument, thresholds: ScoringThresholds) -> Optional[Deduction]:
    if len(doc.select("h1")) > 1:
        return MULTIPLE_H1_POINTS, "Multiple H1 headings found"
    return None


def _missing_alt(doc: ParsedDocument, thresholds: ScoringThresholds) -> Optional[Deduction]:
    # An empty alt attribute counts as missing
    missing = sum(1 for img in doc.images() if not img.get("alt"))
    if missing > 0:
        points = min(missing * MISSING_ALT_POINTS_PER_IMAGE, MISSING_ALT_MAX_POINTS)
        return points, f"{missing} images missing alt text"
    return None


DEFAULT_RULES: Tuple[DeductionRule, ...] = (
    DeductionRule("missing_title", _missing_title),
    DeductionRule("title_length", _title_length),
    DeductionRule("missing_meta_description", _missing_meta_description),
    DeductionRule("meta_description_length", _meta_description_length),
    DeductionRule("missing_h1", _missing_h1),
    DeductionRule("multiple_h1", _multiple_h1),
    DeductionRule("missing_alt", _missing_alt),
)


class SEOScorer:
    """Applies a table of deduction rules to a document.

    Every rule is evaluated independently; the deductions of all rules that
    fire are summed and subtracted from 100, and the result is clamped.
    """

    def __init__(
        self,
        thresholds: Optional[ScoringThresholds] = None,
        rules: Optional[Tuple[DeductionRule, ...]] = None,
        recommendations: Optional[Tuple[str, ...]] = None,
    ):
        """Initialize scorer with configurable settings.

        Args:
            thresholds: Length bounds for title and meta description
            rules: Deduction rule table
            recommendations: Generic recommendations emitted with every assessment
        """
        self.thresholds = thresholds or default_thresholds
        self.rules = rules or DEFAULT_RULES
        self.recommendations = recommendations or GENERIC_SEO_RECOMMENDATIONS

    def deductions(self, doc: ParsedDocument) -> List[Tuple[str, int, str]]:
        """Return (rule name, points, issue) for every rule that fires."""
        fired = []
        for rule in self.rules:
            result = rule.evaluate(doc, self.thresholds)
            if result is not None:
                points, issue = result
                fired.append((rule.name, points, issue))
        return fired

    def score(self, doc: ParsedDocument) -> SeoAssessment:
        fired = self.deductions(doc)
        total = sum(points for _, points, _ in fired)
        score = max(MIN_SCORE, min(MAX_SCORE, MAX_SCORE - total))

        logger.debug(f"Scored {doc.url or 'markup'}: {score} ({len(fired)} issues)")

        return SeoAssessment(
            score=score,
            issues=tuple(issue for _, _, issue in fired),
            recommendations=tuple(self.recommendations),
        )


def score_seo(
    doc: ParsedDocument, thresholds: Optional[ScoringThresholds] = None
) -> SeoAssessment:
    """Score a previously parsed document."""
    return SEOScorer(thresholds=thresholds).score(doc)
