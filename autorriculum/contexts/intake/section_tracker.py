"""
Section state tracking for the certification line scan.

Certificate names cannot be recognized by shape alone; the weakest rule in
the line classifier only applies while the scan is inside a certifications
section. SectionTracker is the small state machine that knows where that
section starts and where it ends. One tracker lives for exactly one pass
over one document.
"""

from enum import Enum

from autorriculum.contexts.intake.extraction_patterns import CertificationPatterns
from autorriculum.contexts.intake.vocabulary import DEFAULT_VOCABULARY, ExtractionVocabulary


class SectionState(Enum):
    """Where the scan currently is relative to a certifications section."""

    OUTSIDE = "outside"
    IN_CERTIFICATIONS = "in_certifications"


class SectionTracker:
    """
    State machine over section boundaries.

    Transitions:
        OUTSIDE -> IN_CERTIFICATIONS   on a certification header line
        IN_CERTIFICATIONS -> OUTSIDE   on an exit signal (another section
                                       header, or an author byline)
    """

    def __init__(self, vocabulary: ExtractionVocabulary = DEFAULT_VOCABULARY):
        self.vocabulary = vocabulary
        self.state = SectionState.OUTSIDE
        self._author_names = tuple(name.lower() for name in vocabulary.author_names)

    @property
    def in_certifications(self) -> bool:
        return self.state is SectionState.IN_CERTIFICATIONS

    def is_certification_header(self, line: str) -> bool:
        lowered = line.lower()
        return any(keyword in lowered for keyword in self.vocabulary.certification_headers)

    def is_exit_signal(self, line: str) -> bool:
        """
        Check whether a line closes the certifications section.

        Exit signals are another known section header (experience or
        education, either language), a configured author name, or a
        two-capitalized-word "Firstname Lastname" byline.
        """
        lowered = line.lower()
        if any(keyword in lowered for keyword in self.vocabulary.section_exit_keywords):
            return True
        if any(name in lowered for name in self._author_names):
            return True
        return bool(CertificationPatterns.NAME_BYLINE.match(line))

    def observe(self, line: str) -> bool:
        """
        Feed one stripped line to the state machine.

        Args:
            line: Stripped line text

        Returns:
            True if the line was consumed as a certification header and must
            not be processed further; False otherwise (including exit lines,
            which still go through classification)
        """
        if self.is_certification_header(line):
            self.state = SectionState.IN_CERTIFICATIONS
            return True

        if self.in_certifications and self.is_exit_signal(line):
            self.state = SectionState.OUTSIDE

        return False
