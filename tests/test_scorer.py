"""Tests for the rule-based SEO scorer."""

import pytest

from seoprofile.config import ScoringThresholds
from seoprofile.constants import GENERIC_SEO_RECOMMENDATIONS
from seoprofile.parser import parse
from seoprofile.scorer import DEFAULT_RULES, DeductionRule, SEOScorer, score_seo

OPTIMAL_TITLE = "T" * 40
OPTIMAL_DESCRIPTION = "D" * 140


def build_page(
    title=OPTIMAL_TITLE,
    description=OPTIMAL_DESCRIPTION,
    h1_count=1,
    images_without_alt=0,
    images_with_alt=1,
):
    """Build a parsed page with the given SEO characteristics."""
    head = ""
    if title is not None:
        head += f"<title>{title}</title>"
    if description is not None:
        head += f'<meta name="description" content="{description}">'

    body = "".join(f"<h1>Heading {i}</h1>" for i in range(h1_count))
    body += "".join(f'<img src="plain{i}.jpg">' for i in range(images_without_alt))
    body += "".join(
        f'<img src="described{i}.jpg" alt="Picture {i}">' for i in range(images_with_alt)
    )
    return parse(f"<html><head>{head}</head><body><p>Content</p>{body}</body></html>")


class TestSEOScorer:
    """Test cases for SEOScorer."""

    def test_optimal_page_scores_100(self):
        """An optimal page has no issues and a perfect score."""
        assessment = score_seo(build_page())

        assert assessment.score == 100
        assert assessment.issues == ()

    def test_bare_page_scores_35(self):
        """No title, meta, H1 and three images without alt: 100-20-15-15-15."""
        doc = build_page(
            title=None, description=None, h1_count=0, images_without_alt=3, images_with_alt=0
        )
        assessment = score_seo(doc)

        assert assessment.score == 35
        assert len(assessment.issues) == 4
        assert "Missing page title" in assessment.issues
        assert "Missing meta description" in assessment.issues
        assert "Missing H1 heading" in assessment.issues
        assert "3 images missing alt text" in assessment.issues

    def test_svg_title_does_not_count_as_page_title(self):
        """An inline icon title does not satisfy the title rule."""
        doc = parse(
            "<html><head></head><body><svg><title>Menu icon</title></svg>"
            "<h1>Hi</h1></body></html>"
        )
        assessment = score_seo(doc)

        assert "Missing page title" in assessment.issues
        assert not any(issue.startswith("Title length") for issue in assessment.issues)

    def test_multiple_h1_scores_90(self):
        """Two H1 headings on an otherwise optimal page deduct 10."""
        assessment = score_seo(build_page(h1_count=2))

        assert assessment.score == 90
        assert assessment.issues == ("Multiple H1 headings found",)

    def test_missing_alt_deduction_is_capped(self):
        """Ten images without alt text deduct 20, not 50."""
        assessment = score_seo(build_page(images_without_alt=10))

        assert assessment.score == 80
        assert assessment.issues == ("10 images missing alt text",)

    def test_empty_alt_counts_as_missing(self):
        """An empty alt attribute is treated like a missing one."""
        doc = parse(
            f"<html><head><title>{OPTIMAL_TITLE}</title>"
            f'<meta name="description" content="{OPTIMAL_DESCRIPTION}"></head>'
            '<body><h1>Hi</h1><img src="a.jpg" alt=""></body></html>'
        )
        assessment = score_seo(doc)

        assert assessment.score == 95
        assert assessment.issues == ("1 images missing alt text",)

    def test_short_title(self):
        """A title shorter than 30 characters deducts 10."""
        assessment = score_seo(build_page(title="Short title"))

        assert assessment.score == 90
        assert assessment.issues == (
            "Title length not optimal (should be 30-60 characters)",
        )

    def test_long_meta_description(self):
        """A meta description longer than 160 characters deducts 10."""
        assessment = score_seo(build_page(description="D" * 200))

        assert assessment.score == 90
        assert assessment.issues == (
            "Meta description length not optimal (should be 120-160 characters)",
        )

    def test_meta_description_without_content(self):
        """A description element without content is present but too short."""
        doc = parse(
            f"<html><head><title>{OPTIMAL_TITLE}</title>"
            '<meta name="description"></head><body><h1>Hi</h1></body></html>'
        )
        assessment = score_seo(doc)

        assert assessment.score == 90
        assert "Missing meta description" not in assessment.issues

    def test_length_bounds_are_inclusive(self):
        """Titles of exactly 30 and 60 characters are optimal."""
        assert score_seo(build_page(title="T" * 30)).score == 100
        assert score_seo(build_page(title="T" * 60)).score == 100
        assert score_seo(build_page(title="T" * 61)).score == 90

    def test_custom_thresholds(self):
        """Configured bounds drive both the check and the issue text."""
        scorer = SEOScorer(thresholds=ScoringThresholds(title_min=5, title_max=20))
        assessment = scorer.score(build_page(title="T" * 40))

        assert assessment.issues == (
            "Title length not optimal (should be 5-20 characters)",
        )

    def test_recommendations_always_emitted(self):
        """The generic recommendations do not depend on the issues found."""
        perfect = score_seo(build_page())
        poor = score_seo(build_page(title=None, h1_count=0))

        assert perfect.recommendations == GENERIC_SEO_RECOMMENDATIONS
        assert poor.recommendations == GENERIC_SEO_RECOMMENDATIONS
        assert len(perfect.recommendations) == 5

    def test_score_clamped_at_zero(self):
        """Deductions beyond 100 cannot push the score below zero."""
        rules = DEFAULT_RULES + (
            DeductionRule("everything", lambda doc, thresholds: (150, "Everything is wrong")),
        )
        assessment = SEOScorer(rules=rules).score(build_page())

        assert assessment.score == 0
        assert assessment.issues == ("Everything is wrong",)

    def test_deductions_lists_fired_rules(self):
        """deductions() reports rule names and points."""
        fired = SEOScorer().deductions(build_page(title=None, h1_count=2))

        assert fired == [
            ("missing_title", 20, "Missing page title"),
            ("multiple_h1", 10, "Multiple H1 headings found"),
        ]

    @pytest.mark.parametrize(
        "kwargs",
        [
            {},
            {"title": None, "description": None, "h1_count": 0, "images_without_alt": 30},
            {"title": "x", "description": "y", "h1_count": 5, "images_without_alt": 2},
            {"title": "T" * 300, "description": None, "h1_count": 0},
        ],
    )
    def test_score_within_bounds(self, kwargs):
        """Scores always fall within 0-100."""
        assessment = score_seo(build_page(**kwargs))
        assert 0 <= assessment.score <= 100

    def test_scoring_is_deterministic(self):
        """The same document always gets the same assessment."""
        doc = build_page(title="Short", images_without_alt=2)
        assert score_seo(doc) == score_seo(doc)
