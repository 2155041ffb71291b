"""
Profile persistence for the Profile context.

The stored profile is a JSON file (default data/profile.json, override with
the PROFILE_PATH env variable). Every overwrite is preceded by a
byte-identical backup next to it:

    data/profile.json
    data/profile.json.backup.20251113_153045_572549

Write discipline:
1. Copy the current file to a fresh timestamped backup path
2. Write the new content to a temp file in the same directory
3. Rename the temp file over the profile

A failure in step 1 aborts before anything is written; a failure in step 2
or 3 leaves both the previous profile and its backup intact.
"""

import json
import os
import shutil
import tempfile
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from autorriculum.contexts.profile.exceptions import (
    BackupError,
    InvalidProfileStructureError,
    ProfilePersistenceError,
)
from autorriculum.contexts.profile.logger import _log_info, _log_warning
from autorriculum.contexts.profile.profile_data_structure import ProfileRecord
from autorriculum.utils.timestamp import backup_stamp, parse_backup_stamp

load_dotenv()
PROFILE_PATH = Path(os.getenv("PROFILE_PATH", "data/profile.json"))

BACKUP_MARKER = ".backup."


@dataclass
class ProfileBackup:
    """One backup file and the moment it was taken."""

    path: Path
    created: Optional[datetime]


def load_profile(profile_path: Path = None) -> ProfileRecord:
    """
    Load the stored profile, falling back to an empty record.

    A missing file, unreadable JSON, or JSON that is not an object is logged
    as a warning and replaced by ProfileRecord.empty(); none of these are
    fatal. A single section with the wrong type does not discard the rest:
    it is kept verbatim, written back unchanged, and skipped by the merge.

    Args:
        profile_path: Path to profile JSON (defaults to PROFILE_PATH)

    Returns:
        ProfileRecord
    """
    if profile_path is None:
        profile_path = PROFILE_PATH
    profile_path = Path(profile_path)

    if not profile_path.exists():
        _log_warning(f"No stored profile at {profile_path}; starting from an empty record")
        return ProfileRecord.empty()

    try:
        data = json.loads(profile_path.read_text(encoding="utf-8"))
        record = ProfileRecord.from_dict(data, keep_malformed=True)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, InvalidProfileStructureError) as e:
        _log_warning(f"Could not load profile {profile_path} ({e}); starting from an empty record")
        return ProfileRecord.empty()

    for section in record.malformed_sections():
        _log_warning(f"Section '{section}' in {profile_path} has an unexpected type; kept as is")
    return record


def backup_path_for(profile_path: Path, moment: Optional[datetime] = None) -> Path:
    """
    Derive an unused backup path for a profile.

    Appends ".backup.<stamp>"; if that exact path exists (two backups within
    the same microsecond) a counter is added.
    """
    profile_path = Path(profile_path)
    candidate = profile_path.with_name(f"{profile_path.name}{BACKUP_MARKER}{backup_stamp(moment)}")

    counter = 1
    unique = candidate
    while unique.exists():
        unique = candidate.with_name(f"{candidate.name}_{counter}")
        counter += 1
    return unique


def backup_profile(profile_path: Path) -> Optional[Path]:
    """
    Copy the stored profile to a timestamped backup.

    Args:
        profile_path: Profile to back up

    Returns:
        Backup path, or None if there was no profile file to back up

    Raises:
        BackupError: If the copy fails
    """
    profile_path = Path(profile_path)
    if not profile_path.exists():
        return None

    backup_path = backup_path_for(profile_path)
    try:
        shutil.copyfile(profile_path, backup_path)
    except OSError as e:
        raise BackupError("Could not back up profile", path=backup_path, original_error=e) from e

    _log_info(f"Backup created: {backup_path}")
    return backup_path


def write_profile_atomic(record: ProfileRecord, profile_path: Path) -> None:
    """
    Write a profile via temp file + rename so the target is never half-written.

    Raises:
        ProfilePersistenceError: If writing or renaming fails
    """
    profile_path = Path(profile_path)
    content = json.dumps(record.to_dict(), indent=2, ensure_ascii=False) + "\n"

    try:
        profile_path.parent.mkdir(parents=True, exist_ok=True)
        temp_fd, temp_path = tempfile.mkstemp(
            suffix=".json", prefix=f".{profile_path.name}.", dir=profile_path.parent, text=True
        )
    except OSError as e:
        raise ProfilePersistenceError(
            "Could not create temp file for profile", path=profile_path, original_error=e
        ) from e

    try:
        with os.fdopen(temp_fd, "w", encoding="utf-8") as f:
            f.write(content)

        # Only overwrite original if write succeeded
        os.replace(temp_path, profile_path)
    except OSError as e:
        # Clean up temp file if write failed
        if os.path.exists(temp_path):
            os.unlink(temp_path)
        raise ProfilePersistenceError(
            "Could not write profile", path=profile_path, original_error=e
        ) from e


def save_profile(record: ProfileRecord, profile_path: Path = None) -> Optional[Path]:
    """
    Back up the stored profile, then atomically write the new one.

    The write is never attempted if the backup failed.

    Args:
        record: Profile to persist
        profile_path: Target path (defaults to PROFILE_PATH)

    Returns:
        Backup path, or None when there was no previous profile

    Raises:
        BackupError: If the backup copy fails (nothing written)
        ProfilePersistenceError: If the write fails (previous profile intact)
    """
    if profile_path is None:
        profile_path = PROFILE_PATH
    profile_path = Path(profile_path)

    backup_path = backup_profile(profile_path)
    write_profile_atomic(record, profile_path)
    _log_info(f"Profile written: {profile_path}")
    return backup_path


def list_backups(profile_path: Path = None) -> List[ProfileBackup]:
    """
    List backups of a profile, oldest first.

    Args:
        profile_path: Profile whose backups to list (defaults to PROFILE_PATH)

    Returns:
        List of ProfileBackup sorted by creation stamp
    """
    if profile_path is None:
        profile_path = PROFILE_PATH
    profile_path = Path(profile_path)

    if not profile_path.parent.exists():
        return []

    backups = []
    prefix = f"{profile_path.name}{BACKUP_MARKER}"
    for candidate in profile_path.parent.glob(f"{prefix}*"):
        stamp = candidate.name[len(prefix):].split("_")
        created = parse_backup_stamp("_".join(stamp[:3]))
        backups.append(ProfileBackup(path=candidate, created=created))

    return sorted(backups, key=lambda backup: (backup.created or datetime.min, backup.path.name))
