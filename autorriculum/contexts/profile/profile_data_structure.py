"""
Profile data structures for the Profile context.

ProfileRecord mirrors the stored profile.json; ExtractedFragment is the
partial view produced by one extraction pass. Both round-trip through plain
dicts so the stored JSON stays the single source of truth.

Pattern follows the intake context: parsers produce data, data structures
consume it.
"""

import copy
from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Optional

from autorriculum.contexts.profile.exceptions import InvalidProfileStructureError

# Keyed sections, in stored order
MAP_FIELDS = (
    "projects",
    "certifications",
    "superior_education",
    "professional_experience",
    "academical_research",
    "memberships",
)

# Unique-string list sections
STRING_LIST_FIELDS = ("contact", "facts")


@dataclass
class LanguageProficiency:
    """One spoken or programming language with a proficiency level."""

    name: str
    proficiency: str
    context: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "LanguageProficiency":
        if not isinstance(data, dict) or not isinstance(data.get("name"), str):
            raise InvalidProfileStructureError(f"Language entry needs a string 'name': {data!r}")
        return cls(
            name=data["name"],
            proficiency=str(data.get("proficiency", "")),
            context=data.get("context"),
        )

    def to_dict(self) -> Dict[str, Any]:
        data = {"name": self.name, "proficiency": self.proficiency}
        if self.context is not None:
            data["context"] = self.context
        return data


@dataclass
class TechnicalSkills:
    """
    Technical skill lists.

    Every list is optional: None means "not present", which matters for
    merging, where only the sub-lists present in a fragment replace the
    stored ones.
    """

    operating_systems: Optional[List[str]] = None
    programming_languages: Optional[List[str]] = None
    tools_and_technologies: Optional[List[str]] = None
    areas_of_expertise: Optional[List[str]] = None

    @classmethod
    def from_dict(cls, data: Any) -> "TechnicalSkills":
        if not isinstance(data, dict):
            raise InvalidProfileStructureError(f"'technical_skills' must be a mapping: {data!r}")

        values = {}
        for skill_field in fields(cls):
            value = data.get(skill_field.name)
            if value is None:
                continue
            if not isinstance(value, list):
                raise InvalidProfileStructureError(
                    f"'technical_skills.{skill_field.name}' must be a list: {value!r}"
                )
            values[skill_field.name] = [str(item) for item in value]
        return cls(**values)

    def to_dict(self) -> Dict[str, List[str]]:
        return {
            skill_field.name: list(getattr(self, skill_field.name))
            for skill_field in fields(self)
            if getattr(self, skill_field.name) is not None
        }


def _string_list(data: Dict[str, Any], key: str) -> List[str]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise InvalidProfileStructureError(f"'{key}' must be a list of strings: {value!r}")
    return list(value)


def _mapping(data: Dict[str, Any], key: str) -> Dict[str, Any]:
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise InvalidProfileStructureError(f"'{key}' must be a mapping: {value!r}")
    return copy.deepcopy(value)


def _name(data: Dict[str, Any], key: str) -> str:
    value = data[key]
    if not isinstance(value, str):
        raise InvalidProfileStructureError(f"'{key}' must be a string: {value!r}")
    return value


def _languages(data: Dict[str, Any], key: str) -> List[LanguageProficiency]:
    value = data[key]
    if not isinstance(value, list):
        raise InvalidProfileStructureError(f"'{key}' must be a list: {value!r}")
    return [LanguageProficiency.from_dict(entry) for entry in value]


def _technical_skills(data: Dict[str, Any], key: str) -> TechnicalSkills:
    return TechnicalSkills.from_dict(data[key])


# Record field -> parser(data, key); a parser raises InvalidProfileStructureError on a bad type
_SECTION_PARSERS = {
    "name": _name,
    "contact": _string_list,
    "facts": _string_list,
    "projects": _mapping,
    "languages": _languages,
    "certifications": _mapping,
    "superior_education": _mapping,
    "professional_experience": _mapping,
    "academical_research": _mapping,
    "memberships": _mapping,
    "technical_skills": _technical_skills,
    "github_stats": _mapping,
}


@dataclass
class ProfileRecord:
    """
    The persisted structured profile.

    Factory methods:
        from_dict(data) - Build from parsed JSON (raises InvalidProfileStructureError)
        from_dict(data, keep_malformed=True) - Same, but badly typed sections are
                          kept verbatim instead of raising
        empty()         - All-empty but well-typed record

    Top-level keys this class does not know about are kept in `extra` and
    written back unchanged, so hand-added sections survive a merge.
    """

    name: Optional[str] = None
    contact: List[str] = field(default_factory=list)
    facts: List[str] = field(default_factory=list)
    projects: Dict[str, Any] = field(default_factory=dict)
    languages: List[LanguageProficiency] = field(default_factory=list)
    certifications: Dict[str, Any] = field(default_factory=dict)
    superior_education: Dict[str, Any] = field(default_factory=dict)
    professional_experience: Dict[str, Any] = field(default_factory=dict)
    academical_research: Dict[str, Any] = field(default_factory=dict)
    memberships: Dict[str, Any] = field(default_factory=dict)
    technical_skills: Optional[TechnicalSkills] = None
    github_stats: Optional[Dict[str, Any]] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    # =========================================================================
    # FACTORY METHODS
    # =========================================================================

    @classmethod
    def empty(cls) -> "ProfileRecord":
        return cls()

    @classmethod
    def from_dict(cls, data: Any, keep_malformed: bool = False) -> "ProfileRecord":
        """
        Build a record from parsed JSON.

        Args:
            data: Parsed profile.json content
            keep_malformed: If True, a known section with the wrong type is
                kept verbatim in `extra` instead of failing the whole record.
                Such sections are written back unchanged and skipped by merges
                (see malformed_sections()).

        Returns:
            ProfileRecord; missing sections default to empty

        Raises:
            InvalidProfileStructureError: If data is not a mapping, or a known
                section has the wrong type and keep_malformed is False
        """
        if not isinstance(data, dict):
            raise InvalidProfileStructureError(
                f"Profile must be a JSON object, got {type(data).__name__}"
            )

        known = {record_field.name for record_field in fields(cls)} - {"extra"}
        extra = {key: copy.deepcopy(value) for key, value in data.items() if key not in known}

        values = {}
        for section, parse in _SECTION_PARSERS.items():
            if data.get(section) is None:
                continue
            try:
                values[section] = parse(data, section)
            except InvalidProfileStructureError:
                if not keep_malformed:
                    raise
                extra[section] = copy.deepcopy(data[section])

        return cls(**values, extra=extra)

    def malformed_sections(self) -> List[str]:
        """Known sections held verbatim in `extra` because their stored type was wrong."""
        known = {record_field.name for record_field in fields(self)} - {"extra"}
        return [key for key in self.extra if key in known]

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the stored JSON shape (optional sections omitted when unset)."""
        data: Dict[str, Any] = {}
        if self.name is not None:
            data["name"] = self.name
        data["contact"] = list(self.contact)
        data["facts"] = list(self.facts)
        data["projects"] = copy.deepcopy(self.projects)
        data["languages"] = [language.to_dict() for language in self.languages]
        data["certifications"] = copy.deepcopy(self.certifications)
        data["superior_education"] = copy.deepcopy(self.superior_education)
        data["professional_experience"] = copy.deepcopy(self.professional_experience)
        data["academical_research"] = copy.deepcopy(self.academical_research)
        if self.memberships:
            data["memberships"] = copy.deepcopy(self.memberships)
        if self.technical_skills is not None:
            data["technical_skills"] = self.technical_skills.to_dict()
        if self.github_stats is not None:
            data["github_stats"] = copy.deepcopy(self.github_stats)
        data.update(copy.deepcopy(self.extra))
        return data


@dataclass
class ExtractedFragment:
    """
    Partial profile produced by one extraction pass.

    Every field is optional. None means "absent" and never overwrites
    anything on merge; extractors leave a field None rather than setting an
    empty container when they find nothing.
    """

    name: Optional[str] = None
    contact: Optional[List[str]] = None
    facts: Optional[List[str]] = None
    projects: Optional[Dict[str, Any]] = None
    languages: Optional[List[LanguageProficiency]] = None
    certifications: Optional[Dict[str, Any]] = None
    superior_education: Optional[Dict[str, Any]] = None
    professional_experience: Optional[Dict[str, Any]] = None
    academical_research: Optional[Dict[str, Any]] = None
    memberships: Optional[Dict[str, Any]] = None
    technical_skills: Optional[TechnicalSkills] = None
    github_stats: Optional[Dict[str, Any]] = None

    def is_empty(self) -> bool:
        return all(getattr(self, fragment_field.name) is None for fragment_field in fields(self))

    def to_dict(self) -> Dict[str, Any]:
        """Present fields only, in stored JSON shape (used for previews and logs)."""
        data: Dict[str, Any] = {}
        for fragment_field in fields(self):
            value = getattr(self, fragment_field.name)
            if value is None:
                continue
            if fragment_field.name == "languages":
                value = [language.to_dict() for language in value]
            elif fragment_field.name == "technical_skills":
                value = value.to_dict()
            else:
                value = copy.deepcopy(value)
            data[fragment_field.name] = value
        return data
