"""
Resume text parsing for the Intake context.

parse_document_text() is the main entry point: it normalizes the text and
runs every extractor, returning an ExtractedFragment with only the fields
that found something. It performs no I/O and never raises on string input;
no match anywhere simply yields an empty fragment.
"""

from pathlib import Path
from typing import Optional

from autorriculum.contexts.intake.certification_extractor import extract_certifications
from autorriculum.contexts.intake.contact_extractor import extract_contacts
from autorriculum.contexts.intake.document_reader import read_document_text
from autorriculum.contexts.intake.education_extractor import extract_education
from autorriculum.contexts.intake.logger import _log_info
from autorriculum.contexts.intake.normalizer import normalize_unicode
from autorriculum.contexts.intake.skill_extractor import (
    extract_programming_languages,
    extract_spoken_languages,
    extract_tools,
)
from autorriculum.contexts.intake.vocabulary import DEFAULT_VOCABULARY, ExtractionVocabulary
from autorriculum.contexts.profile.profile_data_structure import (
    ExtractedFragment,
    LanguageProficiency,
    TechnicalSkills,
)


def parse_document_text(
    text: str, vocabulary: ExtractionVocabulary = DEFAULT_VOCABULARY
) -> ExtractedFragment:
    """
    Extract a profile fragment from resume text.

    Args:
        text: Raw document text, newline-delimited
        vocabulary: Word lists and thresholds for the extractors

    Returns:
        ExtractedFragment; fields with no matches are left None
    """
    text = normalize_unicode(text)
    lines = text.split("\n")

    contacts = extract_contacts(text, vocabulary)
    education = extract_education(text.lower(), vocabulary.education_rules)
    certifications = extract_certifications(text, vocabulary)
    languages = extract_programming_languages(text, vocabulary) + extract_spoken_languages(
        lines, vocabulary
    )
    tools = extract_tools(text, vocabulary)

    fragment = ExtractedFragment(
        contact=contacts or None,
        superior_education=education or None,
        certifications=certifications or None,
        languages=[LanguageProficiency.from_dict(entry) for entry in languages] or None,
        technical_skills=TechnicalSkills(tools_and_technologies=tools) if tools else None,
    )

    _log_info(
        f"Extracted contacts={len(contacts)} education={len(education)} "
        f"certifications={len(certifications)} languages={len(languages)} tools={len(tools)}"
    )
    return fragment


def parse_document_file(
    document_path: Path, vocabulary: Optional[ExtractionVocabulary] = None
) -> ExtractedFragment:
    """
    Read a resume document and extract a profile fragment.

    Args:
        document_path: Path to a .pdf or text file
        vocabulary: Word lists (defaults to DEFAULT_VOCABULARY)

    Returns:
        ExtractedFragment

    Raises:
        SourceDocumentNotFoundError: If the document does not exist
    """
    text = read_document_text(document_path)
    return parse_document_text(text, vocabulary or DEFAULT_VOCABULARY)
