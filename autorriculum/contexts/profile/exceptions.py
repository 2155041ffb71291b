"""Custom exceptions for the profile context."""

from pathlib import Path
from typing import Optional


class InvalidProfileStructureError(ValueError):
    """
    Raised when stored profile data does not have the ProfileRecord shape.

    The profile store recovers from this by substituting an empty record,
    so it only escapes to callers that parse records directly.
    """

    pass


class ProfilePersistenceError(Exception):
    """
    Raised when the merged profile cannot be written.

    Attributes:
        message: Error description
        path: Profile path being written
        original_error: The underlying OS error
    """

    def __init__(
        self,
        message: str,
        path: Optional[Path] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.path = path
        self.original_error = original_error

        parts = [message]
        if path:
            parts.append(f"Path: {path}")
        if original_error:
            parts.append(f"Original error: {original_error}")

        super().__init__("\n".join(parts))


class BackupError(ProfilePersistenceError):
    """Raised when the pre-write backup copy fails; the main write is never attempted."""

    pass
