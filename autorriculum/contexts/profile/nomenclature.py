"""
Key derivation for keyed profile sections.

Certifications, education, projects and the other mapping-typed sections
are keyed by a canonical identifier derived from a human-readable name:

    >>> derive_key("AWS Certified!")
    'aws_certified'
    >>> derive_key("aws certified")
    'aws_certified'
    >>> derive_key("Certificação Scrum")
    'certificacao_scrum'

Derivation is idempotent (derive_key(derive_key(x)) == derive_key(x)), so a
key can always be re-derived from the stored name.
"""

import re
import unicodedata

KEY_SEPARATOR = "_"

_NON_ALPHANUMERIC_RUN = re.compile(r"[^a-z0-9]+")


def fold_accents(text: str) -> str:
    """Strip combining marks so "ç" becomes "c" and "ã" becomes "a"."""
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(char for char in decomposed if not unicodedata.combining(char))


def derive_key(name: str) -> str:
    """
    Derive the canonical map key for a display name.

    Lower-cases, folds accents to ASCII, collapses every run of
    non-alphanumeric characters into a single underscore, and trims
    underscores from both ends.

    Args:
        name: Human-readable name (e.g., "Microsoft Azure Fundamentals")

    Returns:
        Key such as "microsoft_azure_fundamentals"; empty string when the
        name holds no letters or digits
    """
    folded = fold_accents(name).lower()
    return _NON_ALPHANUMERIC_RUN.sub(KEY_SEPARATOR, folded).strip(KEY_SEPARATOR)
