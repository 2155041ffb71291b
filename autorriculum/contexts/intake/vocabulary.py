"""
Extraction vocabulary for the Intake context.

Keyword, provider, section-title and skill lists are configuration data, not
control logic. Extractors receive an ExtractionVocabulary and never hardcode
words, so a locale or a person-specific tweak is a YAML override away:

    # configs/extraction_vocabulary.yaml
    author_names: ["Jane Doe"]
    certification_providers: ["aws", "microsoft", "alura"]

Only the keys present in the override file replace the defaults.
"""

import dataclasses
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

from dotenv import load_dotenv
from omegaconf import OmegaConf

from autorriculum.contexts.intake.exceptions import InvalidVocabularyError

load_dotenv()
EXTRACTION_VOCABULARY_PATH = os.getenv("EXTRACTION_VOCABULARY_PATH")


@dataclass(frozen=True)
class EducationRule:
    """
    Whole-document containment rule for one education entry.

    The entry is emitted when every phrase in required_phrases appears
    somewhere in the lower-cased document text. Proximity is ignored.
    """

    key: str
    required_phrases: Tuple[str, ...]
    entry: Mapping[str, Any] = field(default_factory=dict)

    def matches(self, text_lower: str) -> bool:
        return bool(self.required_phrases) and all(
            phrase.lower() in text_lower for phrase in self.required_phrases
        )


DEFAULT_EDUCATION_RULES = (
    EducationRule(
        key="computer_engineering_upe",
        required_phrases=("engenharia da computação", "universidade de pernambuco"),
        entry={
            "degree": "Bachelor of Engineering",
            "field": "Computer Engineering",
            "institution": "Universidade de Pernambuco (UPE)",
            "location": "Recife, Pernambuco, Brasil",
            "start_date": "April 2024",
            "end_date": "December 2028",
            "status": "in_progress",
        },
    ),
)


@dataclass(frozen=True)
class ExtractionVocabulary:
    """
    Word lists and thresholds consumed by the extractors.

    English and Portuguese entries sit side by side; matching is done on
    lower-cased text unless noted otherwise.
    """

    # Substrings that open a certifications section (line scan)
    certification_headers: Tuple[str, ...] = (
        "certification",
        "certificação",
        "certificações",
    )

    # Whole-line titles that open a certifications block (block pass)
    certification_section_titles: Tuple[str, ...] = (
        "certifications",
        "certification",
        "certificates",
        "licenses & certifications",
        "licenses and certifications",
        "certificações",
        "certificação",
        "certificados",
        "licenças e certificados",
    )

    # Substrings that close a certifications section
    section_exit_keywords: Tuple[str, ...] = (
        "experience",
        "experiência",
        "education",
        "formação",
    )

    # Document author bylines also close a section (LinkedIn repeats the name per page)
    author_names: Tuple[str, ...] = ()

    # Whole-line titles of any resume section (block pass terminators)
    section_titles: Tuple[str, ...] = (
        "summary",
        "resumo",
        "contact",
        "contato",
        "top skills",
        "principais competências",
        "languages",
        "idiomas",
        "experience",
        "experiência",
        "education",
        "formação acadêmica",
        "formação",
        "projects",
        "projetos",
        "publications",
        "publicações",
        "honors-awards",
        "honors & awards",
        "prêmios",
        "volunteer experience",
        "trabalho voluntário",
        "skills",
        "competências",
    )

    # Headers of the spoken-languages section
    language_section_titles: Tuple[str, ...] = ("languages", "idiomas")

    certification_keywords: Tuple[str, ...] = (
        "certification",
        "certificate",
        "certified",
        "course",
        "training",
        "certificação",
        "certificado",
        "curso",
        "treinamento",
    )

    # Matched as whole tokens, so "aws" does not fire inside "laws"
    certification_providers: Tuple[str, ...] = (
        "aws",
        "microsoft",
        "google",
        "oracle",
        "cisco",
        "comptia",
        "coursera",
        "udemy",
        "edx",
        "linkedin learning",
        "pluralsight",
        "figma",
        "adobe",
        "salesforce",
        "vmware",
        "red hat",
    )

    # Leading labels stripped from a certificate name ("Course: Docker 101")
    certification_labels: Tuple[str, ...] = (
        "certificate",
        "certification",
        "certified",
        "course",
        "training",
        "certificado",
        "certificação",
        "curso",
        "treinamento",
    )

    # Full-line regexes for lines that are never certificate names
    noise_patterns: Tuple[str, ...] = (
        r"^page\s+\d+\s+of\s+\d+$",
        r"^p[áa]gina\s+\d+\s+de\s+\d+$",
        r"^certifications?$",
        r"^certificaç(?:ão|ões)$",
        r"^\d+\s*(?:months?|meses?)$",
        r"^languages?$",
        r"^idiomas?$",
        r"^contact$",
        r"^contato$",
        r"^top\s+skills$",
        r"^principais\s+competências$",
    )

    # Names that only look like certificates after continuation joining
    generic_names: Tuple[str, ...] = (
        "certifications",
        "certificações",
        "science",
    )

    # Wrapped-title continuation: next line shorter than this and lower-case
    continuation_max_length: int = 15
    continuation_tokens: Tuple[str, ...] = ("Science",)

    min_line_length: int = 3
    # Accepted names must be strictly longer than this
    min_name_length: int = 3
    # Contextual fallback only fires for lines strictly longer than this
    contextual_min_length: int = 3

    # Display names; names of two characters or fewer match case-sensitively
    programming_languages: Tuple[str, ...] = (
        "JavaScript",
        "Python",
        "Java",
        "C++",
        "C#",
        "Ruby",
        "Go",
        "Rust",
        "TypeScript",
        "PHP",
        "Swift",
        "Kotlin",
        "Scala",
        "R",
        "MATLAB",
        "HTML",
        "CSS",
        "SQL",
        "Bash",
        "Shell",
    )

    tools: Tuple[str, ...] = (
        "Docker",
        "Kubernetes",
        "AWS",
        "Azure",
        "GCP",
        "Linux",
        "Windows",
        "Git",
        "Jenkins",
        "Terraform",
        "Ansible",
        "MongoDB",
        "PostgreSQL",
        "MySQL",
        "Redis",
        "Elasticsearch",
        "Nginx",
        "Apache",
    )

    programming_language_proficiency: str = "intermediate"
    extraction_context: str = "Extracted from PDF"

    # Domain paths recognized as social profiles, normalized to https://<path>
    social_profile_domains: Tuple[str, ...] = ("linkedin.com/in", "github.com")

    education_rules: Tuple[EducationRule, ...] = DEFAULT_EDUCATION_RULES


DEFAULT_VOCABULARY = ExtractionVocabulary()

_FIELD_TYPES = {f.name: f.type for f in dataclasses.fields(ExtractionVocabulary)}


def _build_education_rules(raw_rules: Any) -> Tuple[EducationRule, ...]:
    """Convert YAML education rule dicts to EducationRule instances."""
    if not isinstance(raw_rules, list):
        raise InvalidVocabularyError("'education_rules' must be a list of mappings")

    rules = []
    for raw in raw_rules:
        if not isinstance(raw, dict) or "key" not in raw or "required_phrases" not in raw:
            raise InvalidVocabularyError(
                f"Education rule needs 'key' and 'required_phrases': {raw!r}"
            )
        rules.append(
            EducationRule(
                key=str(raw["key"]),
                required_phrases=tuple(str(p) for p in raw["required_phrases"]),
                entry=dict(raw.get("entry") or {}),
            )
        )
    return tuple(rules)


def vocabulary_from_dict(
    overrides: Dict[str, Any], base: ExtractionVocabulary = DEFAULT_VOCABULARY
) -> ExtractionVocabulary:
    """
    Apply a dict of overrides on top of a base vocabulary.

    Args:
        overrides: Mapping of vocabulary field name to new value
        base: Vocabulary supplying every field not overridden

    Returns:
        New ExtractionVocabulary

    Raises:
        InvalidVocabularyError: If a key is unknown or a value has the wrong shape
    """
    unknown = set(overrides) - set(_FIELD_TYPES)
    if unknown:
        raise InvalidVocabularyError(
            f"Unknown vocabulary keys: {sorted(unknown)}. Valid keys: {sorted(_FIELD_TYPES)}"
        )

    changes = {}
    for name, value in overrides.items():
        if name == "education_rules":
            changes[name] = _build_education_rules(value)
        elif isinstance(getattr(base, name), int):
            if not isinstance(value, int):
                raise InvalidVocabularyError(f"'{name}' must be an integer, got {value!r}")
            changes[name] = value
        elif isinstance(getattr(base, name), str):
            changes[name] = str(value)
        else:
            if not isinstance(value, list):
                raise InvalidVocabularyError(f"'{name}' must be a list, got {value!r}")
            changes[name] = tuple(str(item) for item in value)

    return dataclasses.replace(base, **changes)


def load_vocabulary(config_path: Optional[Path] = None) -> ExtractionVocabulary:
    """
    Load the extraction vocabulary, applying a YAML override file if one is configured.

    Args:
        config_path: Optional path to the override YAML
                     (defaults to EXTRACTION_VOCABULARY_PATH env variable)

    Returns:
        DEFAULT_VOCABULARY when no override file is configured, otherwise the
        defaults with the file's keys replaced

    Raises:
        InvalidVocabularyError: If the file is missing or its keys are malformed
    """
    if config_path is None:
        if not EXTRACTION_VOCABULARY_PATH:
            return DEFAULT_VOCABULARY
        config_path = Path(EXTRACTION_VOCABULARY_PATH)

    if not Path(config_path).is_file():
        raise InvalidVocabularyError(f"Vocabulary file not found: {config_path}")

    overrides = OmegaConf.to_container(OmegaConf.load(config_path), resolve=True)
    if overrides is None:
        return DEFAULT_VOCABULARY
    if not isinstance(overrides, dict):
        raise InvalidVocabularyError(f"Vocabulary file must hold a mapping: {config_path}")

    return vocabulary_from_dict(overrides)
