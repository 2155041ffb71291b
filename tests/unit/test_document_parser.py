"""Unit tests for whole-document parsing."""

import time

import pytest

from autorriculum.contexts.intake.document_parser import parse_document_text
from autorriculum.contexts.intake.normalizer import normalize_unicode

LINKEDIN_EXPORT = """Contact
alice@example.com
+55 (81) 99999-0000
www.linkedin.com/in/alice-smith
Top Skills
Python
Docker
Languages
English (Full Professional)
Português (Native or Bilingual)
Certifications
AWS Certified Cloud Practitioner
Microsoft Azure
fundamentals
Alice Smith
Software Engineer
Experience
Acme Corp
Backend Developer
Built services in Python and Go on Kubernetes
Page 1 of 2
Education
Universidade de Pernambuco
Engenharia da Computação"""


@pytest.fixture
def fragment():
    return parse_document_text(LINKEDIN_EXPORT)


@pytest.mark.unit
def test_contacts(fragment):
    assert fragment.contact == [
        "alice@example.com",
        "+55 (81) 99999-0000",
        "https://linkedin.com/in/alice-smith",
    ]


@pytest.mark.unit
def test_certifications(fragment):
    """Both certificates, with the wrapped title joined and the byline excluded."""
    assert list(fragment.certifications) == [
        "aws_certified_cloud_practitioner",
        "microsoft_azure_fundamentals",
    ]


@pytest.mark.unit
def test_languages(fragment):
    """Programming languages first, then spoken languages."""
    assert [language.name for language in fragment.languages] == [
        "Python",
        "Go",
        "English",
        "Português",
    ]
    assert fragment.languages[2].proficiency == "Full Professional"


@pytest.mark.unit
def test_tools(fragment):
    assert fragment.technical_skills.tools_and_technologies == [
        "Docker",
        "Kubernetes",
        "AWS",
        "Azure",
    ]
    assert fragment.technical_skills.programming_languages is None


@pytest.mark.unit
def test_education(fragment):
    assert list(fragment.superior_education) == ["computer_engineering_upe"]


@pytest.mark.unit
def test_fields_not_extracted_stay_absent(fragment):
    """Sections no extractor produces are None, never empty containers."""
    assert fragment.name is None
    assert fragment.projects is None
    assert fragment.professional_experience is None
    assert fragment.github_stats is None


@pytest.mark.unit
@pytest.mark.parametrize(
    "text",
    [
        "",
        "\n\n\n",
        "%%%% ((( ))) [[[ ]]] @@@ ::// \t\t",
        "Senior engineer at Acme, shipped products for retail clients\n" * 20000,
    ],
    ids=["empty", "blank_lines", "garbage", "long"],
)
def test_never_raises(text):
    """Empty, garbage and long inputs produce a fragment, never an exception."""
    fragment = parse_document_text(text)
    assert fragment.certifications is None


@pytest.mark.unit
@pytest.mark.parametrize(
    "text",
    ["a" * 100_000, "Aa" * 50_000, "a." * 50_000, "Certifications\n" + "a" * 100_000],
    ids=["letters", "title_case", "dotted", "in_section"],
)
def test_long_single_token_line_is_fast(text):
    """One huge token is scanned in linear time by every pattern."""
    start = time.perf_counter()
    parse_document_text(text)
    assert time.perf_counter() - start < 1.0


@pytest.mark.unit
def test_empty_text_gives_empty_fragment():
    assert parse_document_text("").is_empty()


@pytest.mark.unit
def test_normalize_unicode():
    """Bullets vanish, smart quotes straighten, carriage returns become newlines."""
    assert normalize_unicode("• Docker\r\nO’Reilly “Kubernetes”\rEnd") == (
        " Docker\nO'Reilly \"Kubernetes\"\nEnd"
    )


@pytest.mark.unit
def test_normalize_invisible_characters():
    """Non-breaking and zero-width characters from PDF text layers are cleaned."""
    assert normalize_unicode("\ufeff\u200bDocker\u00a0101\u200d\u2060") == "Docker 101"
    assert normalize_unicode("AWS\u202fCertified\u2014Developer") == "AWS Certified-Developer"
