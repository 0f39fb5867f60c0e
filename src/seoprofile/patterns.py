"""Regular-expression patterns for contact details in free text.

Each pattern is an independent object so it can be tuned or swapped
without touching extraction control flow. Matching is approximate.
"""

import re
from dataclasses import dataclass
from typing import Dict, Optional, Pattern


@dataclass(frozen=True)
class ContactPattern:
    """A named pattern; only its first match in a text is used."""

    name: str
    regex: Pattern[str]

    def first_match(self, text: str) -> Optional[str]:
        match = self.regex.search(text)
        return match.group(0) if match else None


# Optional country code, then 3-3-4 digit groups with flexible separators
PHONE_PATTERN = ContactPattern(
    name="phone",
    regex=re.compile(r"(\+?\d{1,3}[-.\s]?)?\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}"),
)

EMAIL_PATTERN = ContactPattern(
    name="email",
    regex=re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}"),
)

# Number, street, city, two-letter region, five-digit postal code
ADDRESS_PATTERN = ContactPattern(
    name="address",
    regex=re.compile(r"\d+\s+[A-Za-z\s]+,\s*[A-Za-z\s]+,\s*[A-Za-z]{2}\s+\d{5}"),
)

DEFAULT_CONTACT_PATTERNS: Dict[str, ContactPattern] = {
    pattern.name: pattern
    for pattern in (PHONE_PATTERN, EMAIL_PATTERN, ADDRESS_PATTERN)
}
