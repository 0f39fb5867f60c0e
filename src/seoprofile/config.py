from dotenv import load_dotenv
from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional
from pathlib import Path
import json
import os

from pydantic import BaseModel, Field

from seoprofile.constants import (
    DEFAULT_ABOUT_KEYWORDS,
    DEFAULT_FETCH_TIMEOUT_SECONDS,
    DEFAULT_GALLERY_ALT_KEYWORDS,
    DEFAULT_MAX_WORKERS,
    DEFAULT_SERVICE_HEADING_KEYWORDS,
    DEFAULT_SERVICE_LIST_KEYWORDS,
    DEFAULT_USER_AGENT,
    MAX_FETCH_TIMEOUT_SECONDS,
)

load_dotenv()  # Loads variables from .env file


@dataclass
class ScoringThresholds:
    """Configurable length bounds for SEO scoring."""

    title_min: int = 30
    title_max: int = 60
    meta_description_min: int = 120
    meta_description_max: int = 160

    @classmethod
    def from_env(cls) -> "ScoringThresholds":
        """Load thresholds from environment variables.

        Environment variables should be prefixed with SEOPROFILE_THRESHOLD_
        e.g., SEOPROFILE_THRESHOLD_TITLE_MAX=65

        Returns:
            ScoringThresholds with values from environment
        """
        thresholds = cls()
        prefix = "SEOPROFILE_THRESHOLD_"

        for field_name in thresholds.__dataclass_fields__:
            env_value = os.getenv(f"{prefix}{field_name.upper()}")

            if env_value is not None:
                try:
                    setattr(thresholds, field_name, int(env_value))
                except ValueError:
                    pass  # Keep default if conversion fails

        return thresholds

    @classmethod
    def from_file(cls, path: str) -> "ScoringThresholds":
        """Load thresholds from a JSON configuration file.

        Values missing from the file keep their defaults.

        Args:
            path: Path to JSON configuration file

        Returns:
            ScoringThresholds with values from file

        Raises:
            FileNotFoundError: If the file does not exist
        """
        thresholds = cls()

        with open(Path(path), 'r') as f:
            config = json.load(f)

        threshold_config = config.get('thresholds', config)

        for field_name in thresholds.__dataclass_fields__:
            if field_name in threshold_config:
                setattr(thresholds, field_name, int(threshold_config[field_name]))

        return thresholds


# Global default thresholds instance
default_thresholds = ScoringThresholds()


@dataclass
class Config:
    """Configuration for the profile extractor."""
    user_agent: str = DEFAULT_USER_AGENT
    timeout: float = DEFAULT_FETCH_TIMEOUT_SECONDS
    max_workers: int = DEFAULT_MAX_WORKERS
    log_level: str = "INFO"
    log_file: Optional[str] = None
    html_parser: str = "lxml"
    thresholds: ScoringThresholds = field(default_factory=ScoringThresholds)

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables.

        Returns:
            Config: Configuration instance with values from environment
        """
        return cls(
            user_agent=os.getenv("USER_AGENT", DEFAULT_USER_AGENT),
            timeout=float(os.getenv("FETCH_TIMEOUT", str(DEFAULT_FETCH_TIMEOUT_SECONDS))),
            max_workers=int(os.getenv("MAX_WORKERS", str(DEFAULT_MAX_WORKERS))),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_file=os.getenv("LOG_FILE") or None,
            html_parser=os.getenv("HTML_PARSER", "lxml"),
            thresholds=ScoringThresholds.from_env(),
        )


@dataclass(frozen=True)
class KeywordConfig:
    """Keyword lists driving the keyword-based extraction strategies."""

    about_keywords: List[str] = field(default_factory=lambda: list(DEFAULT_ABOUT_KEYWORDS))
    service_list_keywords: List[str] = field(
        default_factory=lambda: list(DEFAULT_SERVICE_LIST_KEYWORDS)
    )
    service_heading_keywords: List[str] = field(
        default_factory=lambda: list(DEFAULT_SERVICE_HEADING_KEYWORDS)
    )
    gallery_alt_keywords: List[str] = field(
        default_factory=lambda: list(DEFAULT_GALLERY_ALT_KEYWORDS)
    )

    def with_overrides(self, overrides: Optional[Dict[str, List[str]]]) -> "KeywordConfig":
        """Return a copy with the given keyword lists replaced.

        Args:
            overrides: Mapping of field name to replacement keyword list

        Returns:
            New KeywordConfig; the receiver is left untouched

        Raises:
            ValueError: If a key does not name a keyword list
        """
        if not overrides:
            return self

        unknown = sorted(set(overrides) - set(self.__dataclass_fields__))
        if unknown:
            raise ValueError(f"Unknown keyword list(s): {', '.join(unknown)}")

        return replace(self, **{name: list(values) for name, values in overrides.items()})


default_keywords = KeywordConfig()


class ExtractionOptions(BaseModel):
    """
    Per-call options for a website profile extraction.

    Validated by Pydantic so bad input is rejected before any network call.
    """

    timeout: float = Field(
        default=DEFAULT_FETCH_TIMEOUT_SECONDS,
        description="Fetch timeout in seconds",
        gt=0,
        le=MAX_FETCH_TIMEOUT_SECONDS,
    )

    keyword_overrides: Dict[str, List[str]] = Field(
        default_factory=dict,
        description="Replacement keyword lists, keyed by KeywordConfig field name",
    )

    dedupe_social_links: bool = Field(
        default=False,
        description="Drop repeated social link hrefs",
    )

    class Config:
        """Pydantic model configuration."""
        frozen = True

    def keywords(self, base: Optional[KeywordConfig] = None) -> KeywordConfig:
        """Resolve the keyword configuration for this call."""
        return (base or default_keywords).with_overrides(self.keyword_overrides)
