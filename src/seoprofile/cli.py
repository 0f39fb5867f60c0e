"""Command-line interface for the website profile extractor."""

import argparse
import json
import sys
from dataclasses import replace
from typing import List, Optional

from pydantic import ValidationError

from seoprofile.config import Config, ExtractionOptions, ScoringThresholds
from seoprofile.constants import (
    DEFAULT_INDUSTRY_LABEL,
    DEFAULT_LANGUAGE,
    DEFAULT_LOCATION,
    DEFAULT_SERVICES,
    DEFAULT_SUBJECT,
)
from seoprofile.logging_config import setup_logging
from seoprofile.models import BusinessProfile, ExtractionResult, SeoRecommendationSet
from seoprofile.orchestrator import extract_website_profile, extract_website_profiles
from seoprofile.synthesizer import synthesize_recommendations


def _format_value(value) -> str:
    if isinstance(value, (list, tuple)):
        return " | ".join(value) if value else "(not detected)"
    return value or "(not detected)"


def print_result(result: ExtractionResult, recommendations: Optional[SeoRecommendationSet] = None):
    """Print an extraction result in a readable form.

    Args:
        result: The extraction result
        recommendations: Optional synthesized recommendations
    """
    if not result.success:
        print(f"\n❌ Could not analyze {result.url}: {result.error}")
        return

    profile = result.profile
    assessment = result.assessment

    print(f"\n{'=' * 60}")
    print(f"Website Profile for: {result.url}")
    print(f"{'=' * 60}")
    print(f"\nTitle: {_format_value(profile.title)}")
    print(f"Meta description: {_format_value(profile.meta_description)}")
    print(f"H1: {_format_value(profile.headings.h1)}")
    print(f"H2: {_format_value(profile.headings.h2)}")
    print(f"About: {_format_value(profile.about_text)}")
    print(f"Services: {_format_value(profile.services)}")
    print(f"Phone: {_format_value(profile.contact_info.phone)}")
    print(f"Email: {_format_value(profile.contact_info.email)}")
    print(f"Address: {_format_value(profile.contact_info.address)}")
    print(f"Social links: {_format_value(profile.social_links)}")
    print(f"Logo: {_format_value(profile.images.logo)}")
    print(f"Gallery images: {len(profile.images.gallery)}")
    print(f"Hero images: {len(profile.images.hero)}")

    print(f"\n📊 SEO Score: {assessment.score}/100")

    if assessment.issues:
        print(f"\n⚠️  Issues:")
        for issue in assessment.issues:
            print(f"  • {issue}")

    print(f"\n💡 Recommendations:")
    for rec in assessment.recommendations:
        print(f"  • {rec}")

    if recommendations is not None:
        print(f"\n✏️  Suggested content:")
        for record in recommendations.records():
            print(f"  [{record.field}]")
            print(f"    current:  {_format_value(record.current)}")
            print(f"    improved: {_format_value(record.improved)}")
        print(f"  Primary keywords: {', '.join(recommendations.keywords.primary)}")

    print(f"\n{'=' * 60}\n")


def build_parser(config: Optional[Config] = None) -> argparse.ArgumentParser:
    """Build the argument parser; defaults come from the environment config."""
    config = config or Config.from_env()
    parser = argparse.ArgumentParser(
        prog="seoprofile",
        description="Extract a marketing profile and SEO score from websites",
    )
    parser.add_argument("urls", nargs="+", help="URLs to analyze")
    parser.add_argument(
        "--timeout", type=float, default=config.timeout,
        help="Fetch timeout in seconds",
    )
    parser.add_argument(
        "--workers", type=int, default=config.max_workers,
        help="Concurrent jobs when several URLs are given",
    )
    parser.add_argument("--json", action="store_true", help="Print results as JSON")
    parser.add_argument(
        "--recommendations", action="store_true",
        help="Also synthesize content recommendations",
    )
    parser.add_argument("--industry", default=DEFAULT_INDUSTRY_LABEL, help="Industry label")
    parser.add_argument("--location", default=DEFAULT_LOCATION, help="Business location")
    parser.add_argument("--subject", default=DEFAULT_SUBJECT, help="Service subject noun")
    parser.add_argument(
        "--service", action="append", dest="services",
        help="Service offered (repeatable)",
    )
    parser.add_argument(
        "--language", default=DEFAULT_LANGUAGE, choices=["de", "en"],
        help="Language of synthesized content",
    )
    parser.add_argument(
        "--thresholds", metavar="FILE",
        help="JSON file with title and meta description length bounds",
    )
    parser.add_argument("--log-level", default=config.log_level, help="Log level")
    parser.add_argument("--log-file", default=config.log_file, help="Also log to this file")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the ``seoprofile`` command."""
    config = Config.from_env()
    parser = build_parser(config)
    args = parser.parse_args(argv)
    setup_logging(args.log_level, log_file=args.log_file)

    try:
        options = ExtractionOptions(timeout=args.timeout)
    except ValidationError as e:
        parser.error(f"invalid --timeout {args.timeout}: {e.errors()[0]['msg']}")

    if args.thresholds:
        try:
            thresholds = ScoringThresholds.from_file(args.thresholds)
        except (OSError, ValueError) as e:
            parser.error(f"cannot load thresholds from {args.thresholds}: {e}")
        config = replace(config, thresholds=thresholds)

    if len(args.urls) == 1:
        results = [extract_website_profile(args.urls[0], options, config=config)]
    else:
        results = extract_website_profiles(
            args.urls, options, config=config, max_workers=args.workers
        )

    business = BusinessProfile(
        industry_label=args.industry,
        services=args.services or list(DEFAULT_SERVICES),
        location=args.location,
        subject=args.subject,
        language=args.language,
    )

    output = []
    for result in results:
        recommendations = None
        if args.recommendations and result.success:
            recommendations = synthesize_recommendations(result.profile, business)

        if args.json:
            data = result.to_dict()
            data["recommendations"] = recommendations.to_dict() if recommendations else None
            output.append(data)
        else:
            print_result(result, recommendations)

    if args.json:
        print(json.dumps(output, indent=2, ensure_ascii=False))

    return 0 if all(result.success for result in results) else 1


if __name__ == "__main__":
    sys.exit(main())
