"""Text normalization helpers shared by the extractors.

Functions accept None and return an empty string rather than raising.
"""

import re
import unicodedata

# Zero-width spaces/joiners, word joiner, BOM and soft hyphen
_INVISIBLE_RE = re.compile("[\u200b\u200c\u200d\u2060\ufeff\u00ad]")
# No-break spaces Word inserts before French punctuation
_NBSP_RE = re.compile("[\u00a0\u202f\u2007]")
_WHITESPACE_RE = re.compile(r"\s+")

_HONORIFIC_RE = re.compile(r"^(?:M\.|MM\.|Mme|Mmes|Mlle)\s+", re.IGNORECASE)


def strip_invisible(text) -> str:
    """Remove invisible Unicode and turn no-break spaces into plain spaces.

    Line breaks and surrounding whitespace are left untouched.
    """
    if not text:
        return ""
    text = _INVISIBLE_RE.sub("", text)
    return _NBSP_RE.sub(" ", text)


def collapse_whitespace(text) -> str:
    """Collapse runs of whitespace (including newlines) to single spaces."""
    if not text:
        return ""
    return _WHITESPACE_RE.sub(" ", text).strip()


def strip_accents(text) -> str:
    """Remove diacritics: 'Émilie Bélanger' -> 'Emilie Belanger'."""
    if not text:
        return ""
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(c for c in decomposed if not unicodedata.combining(c))


def normalize_person_name(name) -> str:
    """Normalize a person's name for comparison.

    Drops the honorific, accents and case:
    - "Mme Émilie Bélanger" -> "emilie belanger"
    - "M.  Jean-Luc  Roy" -> "jean-luc roy"
    """
    name = collapse_whitespace(strip_invisible(name))
    name = _HONORIFIC_RE.sub("", name)
    return strip_accents(name).casefold()
