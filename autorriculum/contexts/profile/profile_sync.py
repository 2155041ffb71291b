"""
Profile update orchestration.

Wires the Intake context's extraction into the stored profile:

    document -> text -> ExtractedFragment -> merge_profile() -> backup + atomic write

The same load / merge / save path serves repository statistics, so every
source of new data goes through one set of merge rules.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv

from autorriculum.contexts.intake.document_parser import parse_document_text
from autorriculum.contexts.intake.document_reader import read_document_text
from autorriculum.contexts.intake.vocabulary import ExtractionVocabulary, load_vocabulary
from autorriculum.contexts.profile.logger import _log_info, _log_success, _log_warning
from autorriculum.contexts.profile.merge import merge_profile
from autorriculum.contexts.profile.profile_data_structure import (
    MAP_FIELDS,
    STRING_LIST_FIELDS,
    ExtractedFragment,
    ProfileRecord,
)
from autorriculum.contexts.profile.profile_store import PROFILE_PATH, load_profile, save_profile
from autorriculum.contexts.profile.repository_stats import RepositoryStats, stats_to_fragment

load_dotenv()
SOURCE_DOCUMENT_PATH = Path(os.getenv("SOURCE_DOCUMENT_PATH", "data/profile.pdf"))


@dataclass
class SyncResult:
    """
    Outcome of one profile update.

    Attributes:
        profile_path: Stored profile that was (or would be) written
        fragment: What the extraction pass found
        record: Merged profile
        added: Section name -> number of new entries the merge contributed
        backup_path: Backup of the previous profile (None if there was none or dry run)
        written: False for dry runs
    """

    profile_path: Path
    fragment: ExtractedFragment
    record: ProfileRecord
    added: Dict[str, int] = field(default_factory=dict)
    backup_path: Optional[Path] = None
    written: bool = False

    @property
    def changed(self) -> bool:
        return any(self.added.values())


@dataclass
class PreviewResult:
    """Extracted text and fragment, nothing merged or written."""

    document_path: Path
    text: str
    fragment: ExtractedFragment

    @property
    def line_count(self) -> int:
        return len(self.text.splitlines())


def count_additions(before: ProfileRecord, after: ProfileRecord) -> Dict[str, int]:
    """
    Count entries the merge added, per section.

    Only growth is counted; technical_skills and github_stats are replaced
    wholesale and reported as 1 when they differ.
    """
    added: Dict[str, int] = {}
    for section in STRING_LIST_FIELDS + MAP_FIELDS + ("languages",):
        added[section] = len(getattr(after, section)) - len(getattr(before, section))
    added["name"] = int(before.name != after.name)
    added["technical_skills"] = int(before.technical_skills != after.technical_skills)
    added["github_stats"] = int(before.github_stats != after.github_stats)
    return {section: count for section, count in added.items() if count}


def apply_fragment(
    fragment: ExtractedFragment,
    profile_path: Path = None,
    dry_run: bool = False,
    current: Optional[ProfileRecord] = None,
) -> SyncResult:
    """
    Merge a fragment into the stored profile and persist it.

    Args:
        fragment: Data from any extraction source
        profile_path: Stored profile (defaults to PROFILE_PATH)
        dry_run: Merge but do not write
        current: Stored profile already loaded from profile_path (loaded here if None)

    Returns:
        SyncResult

    Raises:
        BackupError: If the previous profile could not be backed up
        ProfilePersistenceError: If the merged profile could not be written
    """
    if profile_path is None:
        profile_path = PROFILE_PATH
    profile_path = Path(profile_path)

    if current is None:
        current = load_profile(profile_path)
    merged = merge_profile(current, fragment)
    result = SyncResult(
        profile_path=profile_path,
        fragment=fragment,
        record=merged,
        added=count_additions(current, merged),
    )

    for section, count in result.added.items():
        _log_info(f"{section}: +{count}")

    if dry_run:
        _log_info("Dry run: profile not written")
        return result

    if fragment.is_empty():
        _log_warning("Nothing extracted; rewriting profile unchanged")

    result.backup_path = save_profile(merged, profile_path)
    result.written = True
    _log_success(f"Profile updated: {profile_path}")
    return result


def sync_profile(
    document_path: Path = None,
    profile_path: Path = None,
    dry_run: bool = False,
    vocabulary: Optional[ExtractionVocabulary] = None,
) -> SyncResult:
    """
    Extract a resume document and merge it into the stored profile.

    Args:
        document_path: Resume (.pdf or text, defaults to SOURCE_DOCUMENT_PATH)
        profile_path: Stored profile (defaults to PROFILE_PATH)
        dry_run: Merge but do not write
        vocabulary: Extraction word lists (defaults to load_vocabulary())

    Returns:
        SyncResult

    Raises:
        SourceDocumentNotFoundError: If the document does not exist
        SourceDocumentReadError: If the document cannot be read
        InvalidVocabularyError: If the vocabulary override file is malformed
        BackupError: If the previous profile could not be backed up
        ProfilePersistenceError: If the merged profile could not be written
    """
    if document_path is None:
        document_path = SOURCE_DOCUMENT_PATH
    if vocabulary is None:
        vocabulary = load_vocabulary()

    text = read_document_text(document_path)
    fragment = parse_document_text(text, vocabulary)
    return apply_fragment(fragment, profile_path, dry_run=dry_run)


def preview_extraction(
    document_path: Path = None, vocabulary: Optional[ExtractionVocabulary] = None
) -> PreviewResult:
    """
    Extract a document without touching the stored profile.

    Raises:
        SourceDocumentNotFoundError: If the document does not exist
        SourceDocumentReadError: If the document cannot be read
    """
    if document_path is None:
        document_path = SOURCE_DOCUMENT_PATH
    if vocabulary is None:
        vocabulary = load_vocabulary()

    text = read_document_text(document_path)
    return PreviewResult(
        document_path=Path(document_path),
        text=text,
        fragment=parse_document_text(text, vocabulary),
    )


def apply_stats_file(stats_path: Path, profile_path: Path = None, dry_run: bool = False) -> SyncResult:
    """
    Merge aggregated repository statistics into the stored profile.

    Args:
        stats_path: JSON file in the RepositoryStats shape
        profile_path: Stored profile (defaults to PROFILE_PATH)
        dry_run: Merge but do not write

    Raises:
        FileNotFoundError: If the stats file does not exist
        InvalidProfileStructureError: If the stats file is malformed
    """
    if profile_path is None:
        profile_path = PROFILE_PATH

    stats = RepositoryStats.from_file(stats_path)
    _log_info(
        f"Repository stats for {stats.username}: {stats.public_repos} repos, "
        f"{stats.total_stars} stars, {len(stats.notable_repos)} notable"
    )
    current = load_profile(profile_path)
    fragment = stats_to_fragment(stats, current)
    return apply_fragment(fragment, profile_path, dry_run=dry_run, current=current)


def summarize_record(record: ProfileRecord) -> List[Dict[str, Any]]:
    """Section sizes for display, in stored order."""
    rows = [{"section": section, "count": len(getattr(record, section))} for section in STRING_LIST_FIELDS]
    rows.append({"section": "languages", "count": len(record.languages)})
    rows.extend({"section": section, "count": len(getattr(record, section))} for section in MAP_FIELDS)
    return rows
