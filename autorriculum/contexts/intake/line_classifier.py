"""
Line classification for the certification line scan.

Each stripped line is sorted into one of four kinds given the current
section state. Classification is pure: it reads the line, the state and the
vocabulary, and never looks at neighbouring lines (continuation joining is
the extractor's job).
"""

import re
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import List, Tuple

from autorriculum.contexts.intake.contact_extractor import is_contact_line
from autorriculum.contexts.intake.extraction_patterns import (
    CertificationPatterns,
    build_noise_patterns,
    build_token_pattern,
)
from autorriculum.contexts.intake.section_tracker import SectionState
from autorriculum.contexts.intake.vocabulary import DEFAULT_VOCABULARY, ExtractionVocabulary


class LineKind(Enum):
    NOISE = "noise"
    CONTACT = "contact"
    CERTIFICATION_CANDIDATE = "certification_candidate"
    IRRELEVANT = "irrelevant"


class Signal(Enum):
    """Reasons a line became a certification candidate, strongest first."""

    KEYWORD = "keyword"
    PROVIDER = "provider"
    COURSE_PATTERN = "course_pattern"
    CONTEXTUAL = "contextual"


@dataclass(frozen=True)
class LineClassification:
    kind: LineKind
    signals: Tuple[Signal, ...] = ()

    @property
    def is_candidate(self) -> bool:
        return self.kind is LineKind.CERTIFICATION_CANDIDATE


@lru_cache(maxsize=None)
def _compiled_noise(patterns: Tuple[str, ...]) -> List[re.Pattern]:
    return build_noise_patterns(patterns)


@lru_cache(maxsize=None)
def _compiled_providers(providers: Tuple[str, ...]) -> List[re.Pattern]:
    return [build_token_pattern(provider) for provider in providers]


def is_noise(line: str, vocabulary: ExtractionVocabulary = DEFAULT_VOCABULARY) -> bool:
    """Check a stripped line against the structural noise patterns (footers, bare titles)."""
    return any(pattern.match(line) for pattern in _compiled_noise(vocabulary.noise_patterns))


def has_certification_keyword(line_lower: str, vocabulary: ExtractionVocabulary) -> bool:
    return any(keyword in line_lower for keyword in vocabulary.certification_keywords)


def has_provider(line: str, vocabulary: ExtractionVocabulary) -> bool:
    return any(
        pattern.search(line) for pattern in _compiled_providers(vocabulary.certification_providers)
    )


def has_course_pattern(line: str) -> bool:
    """Loose "word + number" match on a title-cased line ("Python 101", "Scrum Master 2")."""
    return bool(
        CertificationPatterns.TITLE_CASE.match(line)
        and CertificationPatterns.COURSE_NUMBER.search(line)
    )


def is_contextual_match(line: str, state: SectionState, vocabulary: ExtractionVocabulary) -> bool:
    """
    Weakest signal: any reasonable-looking line inside a certifications section.

    Never fires outside the section, so documents without a certification
    header get no contextual candidates at all.
    """
    return (
        state is SectionState.IN_CERTIFICATIONS
        and len(line) > vocabulary.contextual_min_length
        and not CertificationPatterns.ALL_DIGITS.match(line)
        and not CertificationPatterns.ALL_LOWERCASE.match(line)
    )


def classify_line(
    line: str,
    state: SectionState,
    vocabulary: ExtractionVocabulary = DEFAULT_VOCABULARY,
) -> LineClassification:
    """
    Classify one stripped line.

    Order of checks:
    1. Too short or a structural noise line -> NOISE
    2. Whole-line email, URL, phone or profile path -> CONTACT
    3. Any candidate signal -> CERTIFICATION_CANDIDATE (signals recorded)
    4. Otherwise -> IRRELEVANT

    Args:
        line: Stripped line text
        state: Section state at this point of the scan
        vocabulary: Word lists and thresholds

    Returns:
        LineClassification with kind and, for candidates, the signals that fired
    """
    if len(line) < vocabulary.min_line_length or is_noise(line, vocabulary):
        return LineClassification(LineKind.NOISE)

    if is_contact_line(line, vocabulary):
        return LineClassification(LineKind.CONTACT)

    line_lower = line.lower()
    signals = []
    if has_certification_keyword(line_lower, vocabulary):
        signals.append(Signal.KEYWORD)
    if has_provider(line, vocabulary):
        signals.append(Signal.PROVIDER)
    if has_course_pattern(line):
        signals.append(Signal.COURSE_PATTERN)
    if is_contextual_match(line, state, vocabulary):
        signals.append(Signal.CONTEXTUAL)

    if signals:
        return LineClassification(LineKind.CERTIFICATION_CANDIDATE, tuple(signals))

    return LineClassification(LineKind.IRRELEVANT)
