"""Text canonicalisation.

Raw text is folded into a stream of lowercase ASCII alphanumeric tokens
separated by single spaces, so that shingles from different documents are
comparable regardless of case, accents, punctuation or layout.
"""
from __future__ import annotations

import re
import unicodedata

# -----------------------------------------------------------
# Patterns (applied in this order)
# -----------------------------------------------------------

_NON_ASCII_RE = re.compile(r"[^\x00-\x7f]")
_NON_ALNUM_RE = re.compile(r"[^a-z0-9\s]")
_LEADING_ZERO_RE = re.compile(r"\b0+(?=\d)")
_WHITESPACE_RE = re.compile(r"\s+")


def strip_diacritics(text: str) -> str:
    """Decompose accented characters and drop everything outside ASCII."""
    return _NON_ASCII_RE.sub("", unicodedata.normalize("NFD", text))


def canonicalize(raw_text: str) -> str:
    """Return the canonical form of *raw_text*.

    Steps, each feeding the next:

    1. lowercase
    2. strip diacritics (``"café"`` -> ``"cafe"``)
    3. replace anything but ``[a-z0-9]`` and whitespace with a space
    4. drop leading zeros of a number while another digit follows
       (``"007"`` -> ``"7"``; a lone ``"0"`` is kept)
    5. collapse whitespace runs and trim

    Any input, including ``""``, yields a (possibly empty) string, and
    ``canonicalize(canonicalize(x)) == canonicalize(x)``.
    """
    # Cast non-string (e.g. None) to empty string.
    if raw_text is None or not isinstance(raw_text, str):
        raw_text = ""

    text = raw_text.lower()
    text = strip_diacritics(text)
    text = _NON_ALNUM_RE.sub(" ", text)
    text = _LEADING_ZERO_RE.sub("", text)
    return _WHITESPACE_RE.sub(" ", text).strip()
