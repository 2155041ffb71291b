"""
Source text normalizer for the Intake context.

PDF text layers carry non-breaking spaces, zero-width characters, smart quotes
and bullet glyphs that break keyword matching. Normalize BEFORE extraction so
every extractor sees the same plain text.
"""

import unicodedata

# Unicode replacements: problematic char → ASCII equivalent
UNICODE_REPLACEMENTS = {
    # Spaces
    "\u00a0": " ",  # non-breaking space
    "\u202f": " ",  # narrow no-break space
    # Zero-width characters → remove
    "\u200b": "",  # zero-width space
    "\u200c": "",  # zero-width non-joiner
    "\u200d": "",  # zero-width joiner
    "\u2060": "",  # word joiner
    "\ufeff": "",  # BOM / zero-width no-break space
    # Quotes
    "\u2018": "'",  # left single quote
    "\u2019": "'",  # right single quote
    "\u201c": '"',  # left double quote
    "\u201d": '"',  # right double quote
    # Dashes
    "\u2013": "-",  # en dash
    "\u2014": "-",  # em dash
    # Bullets and separators
    "\u2022": "",  # bullet
    "\u00b7": " ",  # middle dot (used as separator in skill lines)
    "\u2026": "...",  # ellipsis
}


def normalize_unicode(text: str) -> str:
    """
    Normalize unicode characters that cause parsing issues.

    Applies NFKC normalization (so decomposed accents compose and
    "certificação" matches however it was encoded) and replaces common
    problematic characters with ASCII equivalents.

    Args:
        text: Raw text possibly containing problematic unicode

    Returns:
        Text with normalized unicode
    """
    text = unicodedata.normalize("NFKC", text)

    for char, replacement in UNICODE_REPLACEMENTS.items():
        text = text.replace(char, replacement)

    # PDF extractors on Windows-produced files leave carriage returns behind
    return text.replace("\r\n", "\n").replace("\r", "\n")
