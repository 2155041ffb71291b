"""
Source document reading for the Intake context.

The extractors only need one text string with newlines between logical
lines. PDFs go through pdfplumber; anything else is read as UTF-8 text.
"""

from pathlib import Path

from autorriculum.contexts.intake.exceptions import (
    SourceDocumentNotFoundError,
    SourceDocumentReadError,
)
from autorriculum.contexts.intake.logger import _log_info, _log_warning
from autorriculum.utils.pdf_processing import pdf_page_texts

PDF_SUFFIXES = {".pdf"}


def read_document_text(document_path: Path) -> str:
    """
    Read a resume document as plain text.

    Args:
        document_path: Path to a .pdf or text file

    Returns:
        Document text (may be empty for image-only PDFs)

    Raises:
        SourceDocumentNotFoundError: If the file does not exist
        SourceDocumentReadError: If the PDF is malformed or the file cannot be read
    """
    document_path = Path(document_path)
    if not document_path.is_file():
        raise SourceDocumentNotFoundError(document_path)

    if document_path.suffix.lower() in PDF_SUFFIXES:
        try:
            # pdfplumber surfaces pdfminer's parser errors under several types
            pages = pdf_page_texts(document_path)
        except Exception as e:
            raise SourceDocumentReadError(
                "Could not extract text from PDF", path=document_path, original_error=e
            ) from e
        _log_info(f"Extracted text from PDF: {document_path} ({len(pages)} pages)")
        # Page separator keeps a footer from fusing with the next page's first line
        text = "\n".join(pages)
    else:
        _log_info(f"Reading text document: {document_path}")
        try:
            text = document_path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            raise SourceDocumentReadError(
                "Could not read document", path=document_path, original_error=e
            ) from e

    if not text.strip():
        _log_warning(f"No extractable text in {document_path.name}; nothing will be merged")

    return text
