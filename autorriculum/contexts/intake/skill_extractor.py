"""
Skill and language extraction for the Intake context.

Keyword lists come from the vocabulary; matching is whole-token so "Git"
does not fire on "GitHub" and "Java" does not fire on "JavaScript".
"""

from functools import lru_cache
from typing import List, Tuple

from autorriculum.contexts.intake.extraction_patterns import (
    SpokenLanguagePatterns,
    build_token_pattern,
)
from autorriculum.contexts.intake.vocabulary import DEFAULT_VOCABULARY, ExtractionVocabulary


@lru_cache(maxsize=None)
def _compiled_keywords(names: Tuple[str, ...]):
    return [(name, build_token_pattern(name)) for name in names]


def find_keywords(text: str, names: Tuple[str, ...]) -> List[str]:
    """
    Return the display names that occur in the text, in vocabulary order.

    Args:
        text: Document text (original casing)
        names: Display names to look for

    Returns:
        Matching names, each at most once
    """
    return [name for name, pattern in _compiled_keywords(names) if pattern.search(text)]


def extract_programming_languages(
    text: str, vocabulary: ExtractionVocabulary = DEFAULT_VOCABULARY
) -> List[dict]:
    """Programming languages mentioned anywhere, as language-proficiency entries."""
    return [
        {
            "name": name,
            "proficiency": vocabulary.programming_language_proficiency,
            "context": vocabulary.extraction_context,
        }
        for name in find_keywords(text, vocabulary.programming_languages)
    ]


def extract_tools(text: str, vocabulary: ExtractionVocabulary = DEFAULT_VOCABULARY) -> List[str]:
    """Tools and technologies mentioned anywhere."""
    return find_keywords(text, vocabulary.tools)


def extract_spoken_languages(
    lines: List[str], vocabulary: ExtractionVocabulary = DEFAULT_VOCABULARY
) -> List[dict]:
    """
    Parse "Name (Proficiency)" entries under a languages section header.

    LinkedIn exports list spoken languages as:

        Languages
        English (Full Professional)
        Portuguese (Native or Bilingual)

    Blank lines inside the section are skipped; the first line that is not
    an entry ends it.

    Args:
        lines: Document lines
        vocabulary: Supplies the section titles and extraction context

    Returns:
        List of {"name", "proficiency", "context"} dicts in document order
    """
    languages = []
    in_section = False

    for raw_line in lines:
        line = raw_line.strip()
        title = line.rstrip(":").strip().lower()

        if title in vocabulary.language_section_titles:
            in_section = True
            continue
        if not in_section:
            continue
        if not line:
            continue

        match = SpokenLanguagePatterns.LANGUAGE_ENTRY.match(line)
        if not match:
            in_section = False
            continue

        languages.append(
            {
                "name": match.group(1).strip(),
                "proficiency": match.group(2).strip(),
                "context": vocabulary.extraction_context,
            }
        )

    return languages
