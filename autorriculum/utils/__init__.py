"""
Shared utilities for autorriculum.

Common functionality used across contexts:
- Timestamps for backups and log directories
- Logger setup
- PDF text extraction
"""

from autorriculum.utils.timestamp import backup_stamp, format_timestamp, parse_backup_stamp

__all__ = ["backup_stamp", "format_timestamp", "parse_backup_stamp"]
