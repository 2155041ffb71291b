"""
Regex patterns for resume field extraction.

Pattern classes follow the same convention throughout the codebase:
- Dataclasses with frozen=True for immutability
- Class-level constants for patterns
- Helper functions that build patterns from vocabulary lists

Word lists themselves live in vocabulary.py; this module only holds the
shapes of things (emails, phones, bylines, labels).
"""

import re
from dataclasses import dataclass
from typing import Iterable, List

# =============================================================================
# CONTACT PATTERNS
# =============================================================================


@dataclass(frozen=True)
class ContactPatterns:
    """
    Regex patterns for contact tokens.

    Phone candidates are deliberately loose; is_phone_number() in
    contact_extractor.py applies the digit-count and year filters.
    """

    # Lookbehind: a match starts at the beginning of the local part only
    EMAIL: re.Pattern = re.compile(r"(?<![\w.+-])[\w.+-]+@[\w.-]+\.\w+")

    # Digits with spaces, dots, dashes or parentheses between them, on one line.
    # Lookbehind keeps version strings and paths from contributing digits.
    PHONE_CANDIDATE: re.Pattern = re.compile(r"(?<![\w/.])\+?\(?\d[\d \t().-]{7,}\d(?![\w/])")

    # Any scheme://non-whitespace run, starting at the beginning of the scheme
    URL: re.Pattern = re.compile(r"(?<![a-zA-Z0-9+.-])[a-zA-Z][a-zA-Z0-9+.-]*://\S+")

    # Punctuation that closes a sentence rather than belonging to a URL
    URL_TRAILING_PUNCTUATION: str = ".,;:)]>'\""

    # Lines that are a bare web address ("www.site.dev/me (Portfolio)")
    WEB_ADDRESS_LINE: re.Pattern = re.compile(r"^(?:[a-zA-Z][a-zA-Z0-9+.-]*://|www\.)\S+")

    YEAR: re.Pattern = re.compile(r"^(?:19|20)\d{2}$")


def build_social_profile_pattern(domain_path: str) -> re.Pattern:
    """
    Build the pattern for one social-profile domain path.

    Args:
        domain_path: Domain plus fixed path prefix (e.g., "linkedin.com/in")

    Returns:
        Pattern whose group(0) is "<domain_path>/<handle>" without scheme or www
    """
    return re.compile(rf"(?<![\w-]){re.escape(domain_path)}/[\w-]+", re.IGNORECASE)


# =============================================================================
# CERTIFICATION PATTERNS
# =============================================================================


@dataclass(frozen=True)
class CertificationPatterns:
    """
    Regex patterns for certification line classification.
    """

    # "Firstname Lastname" byline - LinkedIn prints the author name as a page header
    NAME_BYLINE: re.Pattern = re.compile(r"^[A-ZÀ-Ý][a-zà-ÿ]+\s+[A-ZÀ-Ý][a-zà-ÿ]+$")

    # Loose "word + number" course codes - e.g., "Python 101", "AZ-900"
    COURSE_NUMBER: re.Pattern = re.compile(r"[a-z]\s*\d", re.IGNORECASE)

    # Line starts with a capitalized word
    TITLE_CASE: re.Pattern = re.compile(r"^[A-ZÀ-Ý][a-zà-ÿ]+")

    ALL_DIGITS: re.Pattern = re.compile(r"^\d+$")

    ALL_LOWERCASE: re.Pattern = re.compile(r"^[a-zà-ÿ\s]+$")


def build_label_prefix_pattern(labels: Iterable[str]) -> re.Pattern:
    """Pattern matching a leading "<label>:" prefix and the whitespace after it."""
    alternation = "|".join(re.escape(label) for label in labels)
    return re.compile(rf"^(?:{alternation})\s*:\s*", re.IGNORECASE)


def build_noise_patterns(patterns: Iterable[str]) -> List[re.Pattern]:
    """Compile full-line noise regexes case-insensitively."""
    return [re.compile(pattern, re.IGNORECASE) for pattern in patterns]


def build_token_pattern(name: str) -> re.Pattern:
    """
    Pattern matching a keyword as a whole token.

    Token edges exclude word characters plus "+" and "#" so that "C" never
    matches inside "C++" and "Java" never matches inside "JavaScript".
    Names of two characters or fewer ("Go", "R") match case-sensitively,
    which keeps the English verb "go" and stray letters out.
    """
    flags = 0 if len(name) <= 2 else re.IGNORECASE
    return re.compile(rf"(?<![\w+#]){re.escape(name)}(?![\w+#])", flags)


# =============================================================================
# LANGUAGE PATTERNS
# =============================================================================


@dataclass(frozen=True)
class SpokenLanguagePatterns:
    """
    Regex patterns for spoken-language entries.
    """

    # "English (Full Professional)" / "Português (Native or Bilingual)"
    LANGUAGE_ENTRY: re.Pattern = re.compile(r"^([A-ZÀ-Ý][\wÀ-ÿ' \t-]*)\(([^()]+)\)$")
