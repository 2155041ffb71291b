"""
Deduplicating merge of extracted fragments into profile records.

merge_profile() is pure: it copies the current record, folds the fragment
in, and returns the copy. Existing data always wins; extraction only adds.
Re-running the same extraction is therefore a no-op:

    merge_profile(merge_profile(R, F), F) == merge_profile(R, F)

Per-section rules:
- contact, facts: ordered union, exact-string dedup
- languages: append entries whose lower-cased name is unseen
- keyed sections: incoming keys already present are dropped silently,
  never merged field by field, so hand-curated entries are never clobbered
- technical_skills: sub-lists present in the fragment replace the stored
  sub-list wholesale; absent sub-lists are untouched
- name: filled only when the record has none
- github_stats: replaced wholesale

Sections the stored profile holds verbatim because their type was wrong
(ProfileRecord.malformed_sections()) are left alone.
"""

import copy
from dataclasses import fields
from typing import Any, Dict, Iterable, List, Optional

from autorriculum.contexts.profile.profile_data_structure import (
    MAP_FIELDS,
    STRING_LIST_FIELDS,
    ExtractedFragment,
    LanguageProficiency,
    ProfileRecord,
    TechnicalSkills,
)


def merge_unique(existing: List[str], incoming: Iterable[str]) -> List[str]:
    """Ordered union: existing order kept, unseen incoming values appended once."""
    merged = list(existing)
    seen = set(merged)
    for value in incoming:
        if value not in seen:
            seen.add(value)
            merged.append(value)
    return merged


def merge_languages(
    existing: List[LanguageProficiency], incoming: Iterable[LanguageProficiency]
) -> List[LanguageProficiency]:
    """Append languages whose case-insensitive name is new; existing entries are not updated."""
    merged = list(existing)
    seen = {language.name.lower() for language in merged}
    for language in incoming:
        key = language.name.lower()
        if key not in seen:
            seen.add(key)
            merged.append(copy.deepcopy(language))
    return merged


def merge_keyed(existing: Dict[str, Any], incoming: Dict[str, Any]) -> Dict[str, Any]:
    """First writer wins: keys already present keep their entry untouched."""
    merged = dict(existing)
    for key, entry in incoming.items():
        if key not in merged:
            merged[key] = copy.deepcopy(entry)
    return merged


def merge_technical_skills(
    existing: Optional[TechnicalSkills], incoming: TechnicalSkills
) -> TechnicalSkills:
    """Shallow merge: each sub-list set on incoming replaces the stored one."""
    merged = copy.deepcopy(existing) if existing is not None else TechnicalSkills()
    for skill_field in fields(incoming):
        value = getattr(incoming, skill_field.name)
        if value is not None:
            setattr(merged, skill_field.name, list(value))
    return merged


def merge_profile(current: ProfileRecord, incoming: ExtractedFragment) -> ProfileRecord:
    """
    Merge a fragment into a record.

    Args:
        current: Stored profile (not modified)
        incoming: Fragment from an extraction pass (not modified)

    Returns:
        New ProfileRecord with the fragment folded in
    """
    merged = copy.deepcopy(current)
    kept_verbatim = set(current.malformed_sections())

    if incoming.name and not merged.name and "name" not in kept_verbatim:
        merged.name = incoming.name

    for list_field in STRING_LIST_FIELDS:
        values = getattr(incoming, list_field)
        if values is not None and list_field not in kept_verbatim:
            setattr(merged, list_field, merge_unique(getattr(merged, list_field), values))

    if incoming.languages is not None and "languages" not in kept_verbatim:
        merged.languages = merge_languages(merged.languages, incoming.languages)

    for map_field in MAP_FIELDS:
        entries = getattr(incoming, map_field)
        if entries is not None and map_field not in kept_verbatim:
            setattr(merged, map_field, merge_keyed(getattr(merged, map_field), entries))

    if incoming.technical_skills is not None and "technical_skills" not in kept_verbatim:
        merged.technical_skills = merge_technical_skills(
            merged.technical_skills, incoming.technical_skills
        )

    if incoming.github_stats is not None and "github_stats" not in kept_verbatim:
        merged.github_stats = copy.deepcopy(incoming.github_stats)

    return merged
