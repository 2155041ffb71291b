"""
Education extraction for the Intake context.

Resumes in this use case list one institution per candidate, so a
whole-document containment check per rule is enough: a rule fires when all
of its phrases (institution AND field of study) appear anywhere in the text.
"""

from typing import Dict, Iterable

from autorriculum.contexts.intake.vocabulary import DEFAULT_EDUCATION_RULES, EducationRule


def extract_education(
    text_lower: str, rules: Iterable[EducationRule] = DEFAULT_EDUCATION_RULES
) -> Dict[str, dict]:
    """
    Apply education rules to lower-cased document text.

    Args:
        text_lower: Full document text, lower-cased
        rules: Containment rules, each with a key and a fixed entry

    Returns:
        Mapping of rule key -> entry (with extracted_from_pdf=True) for every
        rule whose phrases all appear; rules that do not match are omitted
    """
    education = {}
    for rule in rules:
        if rule.key in education or not rule.matches(text_lower):
            continue
        education[rule.key] = {**rule.entry, "extracted_from_pdf": True}
    return education
