"""
PDF processing utilities for text extraction.

Helper functions:
    pdf_page_texts: Text layer of every page, one string per page.
"""

from pathlib import Path
from typing import List, Union

import pdfplumber


def pdf_page_texts(pdf_path: Union[str, Path]) -> List[str]:
    """
    Extract the text layer of each page.

    Pages without a text layer (scanned images) yield an empty string,
    so the list length always equals the page count.
    """
    with pdfplumber.open(str(pdf_path)) as pdf:
        return [page.extract_text() or "" for page in pdf.pages]
