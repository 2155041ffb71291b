"""
Certification extraction for the Intake context.

Two independent heuristics, each a pure function returning a
key -> entry mapping:

- scan_certification_lines(): forward scan with a SectionTracker and the
  line classifier. Wrapped titles are rejoined by looking one line ahead;
  consumed continuation lines are tracked in a parallel marker list so the
  input sequence is never modified.
- scan_certification_blocks(): finds whole-line certification headers and
  takes every line of the block beneath them, up to a blank line, the next
  section title (known or ALL-CAPS), or an author byline.

Resume layouts vary and either heuristic alone misses entries, so
extract_certifications() unions both, first writer wins per key.
"""

from functools import lru_cache
from typing import Dict, List, Optional, Tuple

from autorriculum.contexts.intake.extraction_patterns import build_label_prefix_pattern
from autorriculum.contexts.intake.line_classifier import LineKind, classify_line
from autorriculum.contexts.intake.logger import _log_debug
from autorriculum.contexts.intake.section_tracker import SectionState, SectionTracker
from autorriculum.contexts.intake.vocabulary import DEFAULT_VOCABULARY, ExtractionVocabulary
from autorriculum.contexts.profile.nomenclature import derive_key

CERTIFICATION_TYPE = "course_completion"


@lru_cache(maxsize=None)
def _label_prefix(labels: Tuple[str, ...]):
    return build_label_prefix_pattern(labels)


def certification_entry(name: str) -> dict:
    """Entry stored under the derived key for one extracted certificate."""
    return {
        "name": name,
        "type": CERTIFICATION_TYPE,
        "extracted_from_pdf": True,
    }


def strip_label_prefix(name: str, vocabulary: ExtractionVocabulary = DEFAULT_VOCABULARY) -> str:
    """Remove a leading "Certificate:" / "Course:" style label."""
    if not vocabulary.certification_labels:
        return name
    return _label_prefix(vocabulary.certification_labels).sub("", name).strip()


def is_generic_name(name: str, vocabulary: ExtractionVocabulary = DEFAULT_VOCABULARY) -> bool:
    """A bare keyword, section title or "Science" is not a certificate."""
    lowered = name.lower()
    return (
        lowered in vocabulary.certification_keywords
        or lowered in vocabulary.generic_names
        or lowered in vocabulary.certification_section_titles
    )


def is_continuation(line: str, vocabulary: ExtractionVocabulary = DEFAULT_VOCABULARY) -> bool:
    """
    Check whether a stripped line is the wrapped tail of the previous title.

    PDF text layers break long titles ("Microsoft Azure" / "fundamentals").
    A tail is short and starts lower-case, or is one of the configured
    continuation tokens ("Science").
    """
    if not line or len(line) >= vocabulary.continuation_max_length:
        return False
    return line[0].islower() or line in vocabulary.continuation_tokens


def add_certification(
    certifications: Dict[str, dict],
    name: str,
    vocabulary: ExtractionVocabulary = DEFAULT_VOCABULARY,
) -> Optional[str]:
    """
    Clean a candidate name and store it if it survives.

    Args:
        certifications: Mapping being built (modified in place)
        name: Raw candidate name, possibly with a label prefix
        vocabulary: Word lists and thresholds

    Returns:
        The key the name maps to if it was accepted (new or already present),
        None if the candidate was rejected
    """
    cleaned = strip_label_prefix(name.strip(), vocabulary)
    if len(cleaned) <= vocabulary.min_name_length or is_generic_name(cleaned, vocabulary):
        return None

    key = derive_key(cleaned)
    if not key:
        return None

    # First writer wins
    if key not in certifications:
        certifications[key] = certification_entry(cleaned)
    return key


def _next_unconsumed(lines: List[str], index: int, consumed: List[bool]) -> Optional[str]:
    """Stripped text of lines[index + 1] unless it is out of range or already consumed."""
    following = index + 1
    if following >= len(lines) or consumed[following]:
        return None
    return lines[following].strip()


def scan_certification_lines(
    lines: List[str], vocabulary: ExtractionVocabulary = DEFAULT_VOCABULARY
) -> Dict[str, dict]:
    """
    Forward scan over the document lines with section tracking.

    Per line: skip short lines; let the tracker consume headers and react to
    exit signals; classify; for candidates, absorb a wrapped continuation
    line, strip label prefixes and store the name under its derived key.

    If no certification header is ever seen the tracker stays OUTSIDE and
    only keyword, provider and course-pattern signals apply.

    Args:
        lines: Document lines (not modified)
        vocabulary: Word lists and thresholds

    Returns:
        Mapping of derived key -> certification entry, in discovery order
    """
    tracker = SectionTracker(vocabulary)
    consumed = [False] * len(lines)
    certifications: Dict[str, dict] = {}

    for index, raw_line in enumerate(lines):
        if consumed[index]:
            continue

        line = raw_line.strip()
        if len(line) < vocabulary.min_line_length:
            continue

        if tracker.observe(line):
            continue

        classification = classify_line(line, tracker.state, vocabulary)
        if not classification.is_candidate:
            continue

        name = line
        following = _next_unconsumed(lines, index, consumed)
        if following is not None and is_continuation(following, vocabulary):
            name = f"{name} {following}"
            consumed[index + 1] = True

        key = add_certification(certifications, name, vocabulary)
        if key:
            signals = ", ".join(signal.value for signal in classification.signals)
            _log_debug(f"Certification candidate '{name}' -> {key} ({signals})")

    return certifications


def is_block_header(line: str, vocabulary: ExtractionVocabulary = DEFAULT_VOCABULARY) -> bool:
    """Whole-line certification section title, with or without a trailing colon."""
    title = line.strip().rstrip(":").strip().lower()
    return title in vocabulary.certification_section_titles


def is_section_title(line: str, vocabulary: ExtractionVocabulary = DEFAULT_VOCABULARY) -> bool:
    """Whole-line title of any known section, or an ALL-CAPS line such as "HOBBIES"."""
    stripped = line.strip().rstrip(":").strip()
    if stripped.isupper():
        return True
    title = stripped.lower()
    return title in vocabulary.section_titles or title in vocabulary.certification_section_titles


def join_continuations(
    block: List[str], vocabulary: ExtractionVocabulary = DEFAULT_VOCABULARY
) -> List[str]:
    """Fold wrapped-title tails onto the line before them."""
    joined: List[str] = []
    for line in block:
        if joined and is_continuation(line, vocabulary):
            joined[-1] = f"{joined[-1]} {line}"
        else:
            joined.append(line)
    return joined


def ends_block(
    line: str, tracker: SectionTracker, vocabulary: ExtractionVocabulary = DEFAULT_VOCABULARY
) -> bool:
    """
    Check whether a stripped line closes a certification block.

    Blank lines, known section titles and ALL-CAPS headers always do. Exit
    signals (author bylines, experience/education headers) do unless the
    line also carries a keyword, provider or course-pattern signal, so
    "Microsoft Azure" stays inside the block while "Jane Doe" ends it.
    """
    if not line or is_section_title(line, vocabulary):
        return True
    if not tracker.is_exit_signal(line):
        return False
    return not classify_line(line, SectionState.OUTSIDE, vocabulary).is_candidate


def find_certification_blocks(
    text: str, vocabulary: ExtractionVocabulary = DEFAULT_VOCABULARY
) -> List[List[str]]:
    """
    Locate the line blocks that sit under certification section headers.

    A block runs from the line after the header up to (not including) the
    first line for which ends_block() holds. Noise and contact lines inside
    a block are dropped.

    Returns:
        One list of stripped lines per header found
    """
    lines = [line.strip() for line in text.split("\n")]
    tracker = SectionTracker(vocabulary)
    blocks = []

    index = 0
    while index < len(lines):
        if not is_block_header(lines[index], vocabulary):
            index += 1
            continue

        index += 1
        block = []
        while index < len(lines) and not ends_block(lines[index], tracker, vocabulary):
            kind = classify_line(lines[index], SectionState.IN_CERTIFICATIONS, vocabulary).kind
            if kind not in (LineKind.NOISE, LineKind.CONTACT):
                block.append(lines[index])
            index += 1
        blocks.append(block)

    return blocks


def scan_certification_blocks(
    text: str, vocabulary: ExtractionVocabulary = DEFAULT_VOCABULARY
) -> Dict[str, dict]:
    """
    Block-level pass: every non-trivial line under a certification header.

    Args:
        text: Full document text
        vocabulary: Word lists and thresholds

    Returns:
        Mapping of derived key -> certification entry, in discovery order
    """
    certifications: Dict[str, dict] = {}
    for block in find_certification_blocks(text, vocabulary):
        for name in join_continuations(block, vocabulary):
            add_certification(certifications, name, vocabulary)
    return certifications


def union_first_writer_wins(*candidate_maps: Dict[str, dict]) -> Dict[str, dict]:
    """Union keyed mappings; for a shared key the earliest mapping's entry is kept."""
    merged: Dict[str, dict] = {}
    for candidates in candidate_maps:
        for key, entry in candidates.items():
            merged.setdefault(key, entry)
    return merged


def extract_certifications(
    text: str, vocabulary: ExtractionVocabulary = DEFAULT_VOCABULARY
) -> Dict[str, dict]:
    """
    Extract certifications with both heuristics.

    Args:
        text: Full document text
        vocabulary: Word lists and thresholds

    Returns:
        Mapping of derived key -> {"name", "type", "extracted_from_pdf"};
        empty when nothing was found
    """
    by_line = scan_certification_lines(text.split("\n"), vocabulary)
    by_block = scan_certification_blocks(text, vocabulary)
    return union_first_writer_wins(by_line, by_block)
