"""Unit tests for line classification and section tracking."""

import dataclasses

import pytest

from autorriculum.contexts.intake.line_classifier import (
    LineKind,
    Signal,
    classify_line,
    has_provider,
    is_noise,
)
from autorriculum.contexts.intake.section_tracker import SectionState, SectionTracker
from autorriculum.contexts.intake.vocabulary import DEFAULT_VOCABULARY


@pytest.mark.unit
@pytest.mark.parametrize(
    "line",
    ["Page 2 of 3", "Página 1 de 2", "Certifications", "Certificações", "6 months", "Top Skills", "ab"],
)
def test_noise_lines(line):
    """Structural lines and very short lines are noise in any state."""
    assert classify_line(line, SectionState.IN_CERTIFICATIONS).kind is LineKind.NOISE


@pytest.mark.unit
def test_contact_line():
    """An email line is contact, never a certificate candidate."""
    result = classify_line("alice@example.com", SectionState.IN_CERTIFICATIONS)
    assert result.kind is LineKind.CONTACT
    assert not result.is_candidate


@pytest.mark.unit
def test_keyword_and_provider_signals():
    """Both signals are recorded, strongest first."""
    result = classify_line("AWS Certified Developer", SectionState.OUTSIDE)
    assert result.kind is LineKind.CERTIFICATION_CANDIDATE
    assert result.signals == (Signal.KEYWORD, Signal.PROVIDER)


@pytest.mark.unit
def test_course_pattern_signal():
    result = classify_line("Python 101", SectionState.OUTSIDE)
    assert result.signals == (Signal.COURSE_PATTERN,)


@pytest.mark.unit
def test_contextual_only_inside_section():
    """The same line is a candidate inside the section and irrelevant outside."""
    inside = classify_line("Scrum Master Professional", SectionState.IN_CERTIFICATIONS)
    outside = classify_line("Scrum Master Professional", SectionState.OUTSIDE)

    assert inside.signals == (Signal.CONTEXTUAL,)
    assert outside.kind is LineKind.IRRELEVANT


@pytest.mark.unit
def test_provider_matches_whole_tokens():
    """"aws" inside "Lawson" is not the provider."""
    assert has_provider("Lawson Consulting Group", DEFAULT_VOCABULARY) is False
    assert has_provider("Red Hat System Administration", DEFAULT_VOCABULARY) is True


@pytest.mark.unit
def test_custom_noise_pattern():
    """Noise patterns come from the vocabulary."""
    vocabulary = dataclasses.replace(
        DEFAULT_VOCABULARY,
        noise_patterns=DEFAULT_VOCABULARY.noise_patterns + (r"^confidential$",),
    )
    assert is_noise("Confidential", vocabulary)
    assert not is_noise("Confidential")


@pytest.mark.unit
class TestSectionTracker:
    def test_header_enters_section_and_is_consumed(self):
        tracker = SectionTracker()
        assert tracker.observe("Certifications") is True
        assert tracker.in_certifications

    def test_portuguese_header(self):
        tracker = SectionTracker()
        assert tracker.observe("Certificações") is True
        assert tracker.state is SectionState.IN_CERTIFICATIONS

    def test_experience_exits(self):
        """Exit lines leave the section but are not consumed."""
        tracker = SectionTracker()
        tracker.observe("Certifications")
        assert tracker.observe("Professional Experience") is False
        assert tracker.state is SectionState.OUTSIDE

    def test_byline_exits(self):
        tracker = SectionTracker()
        tracker.observe("Certifications")
        tracker.observe("Jane Doe")
        assert not tracker.in_certifications

    def test_configured_author_name_exits(self):
        """Author names from the vocabulary close the section in any casing."""
        vocabulary = dataclasses.replace(DEFAULT_VOCABULARY, author_names=("Maria da Silva",))
        tracker = SectionTracker(vocabulary)
        tracker.observe("Certifications")
        tracker.observe("MARIA DA SILVA - Recife")
        assert tracker.state is SectionState.OUTSIDE

    def test_exit_outside_section_is_noop(self):
        tracker = SectionTracker()
        assert tracker.observe("Education") is False
        assert tracker.state is SectionState.OUTSIDE

    def test_regular_lines_keep_state(self):
        tracker = SectionTracker()
        tracker.observe("Certifications")
        tracker.observe("Docker Essentials Training")
        assert tracker.in_certifications
