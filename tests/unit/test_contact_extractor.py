"""Unit tests for contact extraction."""

import pytest

from autorriculum.contexts.intake.contact_extractor import (
    extract_contacts,
    extract_emails,
    extract_phones,
    extract_social_profiles,
    extract_urls,
    is_contact_line,
    is_phone_number,
)


@pytest.mark.unit
def test_extract_email_ignores_trailing_period():
    """Sentence punctuation after an address is not part of it."""
    assert extract_emails("Reach me at alice@example.com.") == ["alice@example.com"]


@pytest.mark.unit
def test_extract_formatted_phone():
    """International phone with parentheses and dash is kept as written."""
    assert extract_phones("Phone: +55 (81) 99999-0000") == ["+55 (81) 99999-0000"]


@pytest.mark.unit
def test_year_ranges_are_not_phones():
    """Date ranges and runs of years never become phone numbers."""
    text = "Acme Corp\n2019 - 2021\n2018 2019 2020\nPage 1 of 2"
    assert extract_phones(text) == []


@pytest.mark.unit
@pytest.mark.parametrize(
    "candidate, expected",
    [
        ("+1 555 123 4567", True),
        ("(81) 3333-4444", True),
        ("2020", False),
        ("12", False),
        ("2019 2020 2021", False),
        ("123 456", False),
        ("1234567890123456", False),
    ],
)
def test_is_phone_number(candidate, expected):
    """Digit-count and year filters."""
    assert is_phone_number(candidate) is expected


@pytest.mark.unit
def test_extract_urls_strips_trailing_punctuation():
    """A URL closing a sentence or parenthesis loses the punctuation."""
    text = "Blog: https://alice.dev/blog. Slides (https://talks.alice.dev)"
    assert extract_urls(text) == ["https://alice.dev/blog", "https://talks.alice.dev"]


@pytest.mark.unit
def test_social_profiles_normalized_to_https():
    """Bare and www-prefixed profile paths become https URLs."""
    text = "www.linkedin.com/in/alice-smith\ngithub.com/alice"
    assert extract_social_profiles(text) == [
        "https://linkedin.com/in/alice-smith",
        "https://github.com/alice",
    ]


@pytest.mark.unit
def test_extract_contacts_order_and_dedup():
    """Emails, phones, URLs, then profiles; duplicates collapse to the first occurrence."""
    text = (
        "alice@example.com\n"
        "+55 (81) 99999-0000\n"
        "https://github.com/alice\n"
        "github.com/alice\n"
        "alice@example.com\n"
    )
    assert extract_contacts(text) == [
        "alice@example.com",
        "+55 (81) 99999-0000",
        "https://github.com/alice",
    ]


@pytest.mark.unit
def test_extract_contacts_empty_text():
    """No contact data is an empty list, not an error."""
    assert extract_contacts("") == []
    assert extract_contacts("Software engineer with ten years of experience") == []


@pytest.mark.unit
@pytest.mark.parametrize(
    "line, expected",
    [
        ("alice@example.com", True),
        ("www.alice.dev", True),
        ("https://alice.dev (Portfolio)", True),
        ("linkedin.com/in/alice-smith (LinkedIn)", True),
        ("+55 81 99999-0000", True),
        ("AWS Certified Developer", False),
        ("", False),
    ],
)
def test_is_contact_line(line, expected):
    """Whole-line contact tokens are recognized."""
    assert is_contact_line(line) is expected
