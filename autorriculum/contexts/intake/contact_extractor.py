"""
Contact extraction for the Intake context.

Pulls emails, phone numbers, URLs and social-profile paths out of raw
resume text. Results keep discovery order per category and are concatenated
in the order emails, phones, URLs, social profiles, then deduplicated.
"""

import re
from typing import List

from autorriculum.contexts.intake.extraction_patterns import (
    ContactPatterns,
    build_social_profile_pattern,
)
from autorriculum.contexts.intake.vocabulary import DEFAULT_VOCABULARY, ExtractionVocabulary

MIN_PHONE_DIGITS = 10
MAX_PHONE_DIGITS = 15


def is_phone_number(candidate: str) -> bool:
    """
    Decide whether a digit run is a phone number.

    Rejects anything outside 10-15 digits, bare 2- and 4-digit tokens, and
    runs made only of calendar years ("2019 2020 2021"), which show up next
    to dates and page numbers in exported resumes.

    Args:
        candidate: Text matched by ContactPatterns.PHONE_CANDIDATE

    Returns:
        True if the candidate should be kept as a phone number
    """
    digits = re.sub(r"\D", "", candidate)

    if len(digits) in (2, 4) or ContactPatterns.YEAR.match(digits):
        return False
    if not MIN_PHONE_DIGITS <= len(digits) <= MAX_PHONE_DIGITS:
        return False

    groups = re.findall(r"\d+", candidate)
    if all(ContactPatterns.YEAR.match(group) for group in groups):
        return False

    return True


def extract_emails(text: str) -> List[str]:
    return ContactPatterns.EMAIL.findall(text)


def extract_phones(text: str) -> List[str]:
    phones = []
    for match in ContactPatterns.PHONE_CANDIDATE.finditer(text):
        candidate = match.group(0).strip()
        if is_phone_number(candidate):
            phones.append(candidate)
    return phones


def extract_urls(text: str) -> List[str]:
    urls = []
    for match in ContactPatterns.URL.finditer(text):
        url = match.group(0).rstrip(ContactPatterns.URL_TRAILING_PUNCTUATION)
        if "://" in url and not url.endswith("://"):
            urls.append(url)
    return urls


def extract_social_profiles(
    text: str, vocabulary: ExtractionVocabulary = DEFAULT_VOCABULARY
) -> List[str]:
    """
    Find social-profile paths and normalize them to https:// URLs.

    "www.linkedin.com/in/jane-doe" and "linkedin.com/in/jane-doe" both become
    "https://linkedin.com/in/jane-doe".
    """
    profiles = []
    for domain_path in vocabulary.social_profile_domains:
        pattern = build_social_profile_pattern(domain_path)
        for match in pattern.finditer(text):
            profiles.append(f"https://{match.group(0)}")
    return profiles


def dedupe_preserving_order(items: List[str]) -> List[str]:
    """Exact-match dedup keeping the first occurrence."""
    seen = set()
    unique = []
    for item in items:
        if item not in seen:
            seen.add(item)
            unique.append(item)
    return unique


def extract_contacts(text: str, vocabulary: ExtractionVocabulary = DEFAULT_VOCABULARY) -> List[str]:
    """
    Extract every contact token from raw resume text.

    Never raises on malformed input. An empty list means no contact data was
    found, which callers treat as "nothing to merge" rather than an error.

    Args:
        text: Full raw document text
        vocabulary: Supplies the social-profile domain allow-list

    Returns:
        Ordered, deduplicated list of emails, phones, URLs and profile URLs
    """
    found = (
        extract_emails(text)
        + extract_phones(text)
        + extract_urls(text)
        + extract_social_profiles(text, vocabulary)
    )
    return dedupe_preserving_order(found)


def is_contact_line(line: str, vocabulary: ExtractionVocabulary = DEFAULT_VOCABULARY) -> bool:
    """
    Check whether a whole line is a contact token.

    Used by the line classifier so that an email or profile link sitting
    inside a certifications section is never taken for a certificate.
    """
    stripped = line.strip()
    if not stripped:
        return False

    if ContactPatterns.EMAIL.fullmatch(stripped):
        return True
    if ContactPatterns.WEB_ADDRESS_LINE.match(stripped):
        return True
    if ContactPatterns.PHONE_CANDIDATE.fullmatch(stripped) and is_phone_number(stripped):
        return True

    lowered = stripped.lower()
    return any(lowered.startswith(domain_path) for domain_path in vocabulary.social_profile_domains)
