"""Custom exceptions for the intake context."""

from pathlib import Path
from typing import Optional


class SourceDocumentNotFoundError(FileNotFoundError):
    """
    Raised when the resume document to extract from does not exist.

    Attributes:
        path: The path that was expected to hold the document
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        super().__init__(f"Source document not found: {self.path}")


class InvalidVocabularyError(ValueError):
    """Raised when an extraction vocabulary override file has unknown or malformed keys."""

    pass


class SourceDocumentReadError(Exception):
    """
    Raised when the resume document exists but its text cannot be read.

    Covers malformed PDFs and unreadable files.

    Attributes:
        message: Human-readable error message
        path: The document that failed
        original_error: The underlying exception
    """

    def __init__(self, message: str, path: Path, original_error: Optional[Exception] = None):
        self.message = message
        self.path = Path(path)
        self.original_error = original_error

        parts = [message, f"Path: {self.path}"]
        if original_error:
            parts.append(f"Original error: {original_error}")

        super().__init__("\n".join(parts))
