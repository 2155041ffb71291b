"""Timestamp formatting utilities."""

from datetime import datetime
from typing import Optional

# Sortable, filesystem-safe stamp used for backup suffixes and log directories
STAMP_FORMAT = "%Y%m%d_%H%M%S_%f"


def backup_stamp(moment: Optional[datetime] = None) -> str:
    """
    Build a filesystem-safe timestamp suffix.

    Args:
        moment: Time to format (defaults to now)

    Returns:
        Stamp like "20251113_153045_572549"
    """
    if moment is None:
        moment = datetime.now()
    return moment.strftime(STAMP_FORMAT)


def parse_backup_stamp(stamp: str) -> Optional[datetime]:
    """Inverse of backup_stamp(), or None when the stamp is not one of ours."""
    try:
        return datetime.strptime(stamp, STAMP_FORMAT)
    except ValueError:
        return None


def format_timestamp(moment: datetime, relative: bool = False) -> str:
    """
    Format a datetime for display.

    Args:
        moment: datetime to format
        relative: If True, show relative time (e.g., "2h ago")
                 If False, show absolute time (e.g., "2025-11-13 18:45:40")

    Returns:
        Human-readable timestamp
    """
    if relative:
        return _format_relative_time(moment)
    return moment.strftime("%Y-%m-%d %H:%M:%S")


def _format_relative_time(dt: datetime) -> str:
    """
    Format datetime as relative time in compact format (e.g., "2h ago").

    - Seconds: "30s ago"
    - Minutes: "15m ago"
    - Hours: "2h ago"
    - Days: "5d ago"
    """
    diff = datetime.now() - dt

    # Future times
    if diff.total_seconds() < 0:
        diff = -diff
        suffix = "from now"
    else:
        suffix = "ago"

    seconds = int(diff.total_seconds())
    minutes = seconds // 60
    hours = minutes // 60
    days = diff.days

    if seconds < 60:
        return f"{seconds}s {suffix}"
    elif minutes < 60:
        return f"{minutes}m {suffix}"
    elif hours < 24:
        return f"{hours}h {suffix}"
    else:
        return f"{days}d {suffix}"
