"""Tokenisation and word-shingle helpers for ShingleSketch.

Shingles are built from *canonical* text (see :mod:`.canonical`) so that the
tokens are already lowercase ASCII words separated by single spaces.
"""
from __future__ import annotations

import logging
import re
from typing import FrozenSet, Iterable, List

from .errors import InvariantViolation

logger = logging.getLogger(__name__)

# -----------------------------------------------------------
# Tokenisation helpers
# -----------------------------------------------------------

_WHITESPACE_RE = re.compile(r"\s+")

DEFAULT_SHINGLE_LENGTH = 3


def tokenize(text: str) -> List[str]:
    """Split *text* into whitespace-separated tokens.

    Empty or blank text yields ``[]`` rather than ``[""]``.
    """
    # Cast non-string (e.g. NaN) to empty string.
    if text is None or not isinstance(text, str):
        text = ""
    return [tok for tok in _WHITESPACE_RE.split(text.strip()) if tok]


# -----------------------------------------------------------
# N-gram helpers
# -----------------------------------------------------------

def _check_length(n: int) -> None:
    if n < 1:
        raise InvariantViolation(f"Shingle length must be >= 1, got {n}")


def ngrams(tokens: List[str], n: int = DEFAULT_SHINGLE_LENGTH) -> Iterable[str]:
    """Generate *n*-grams (as space-joined strings) from *tokens*, in order.

    Repeated n-grams are yielded once per position; use :func:`shingles`
    for the de-duplicated set.
    """
    _check_length(n)
    for i in range(len(tokens) - n + 1):
        yield " ".join(tokens[i : i + n])  # noqa: E203 (black formatting)


def shingles(text: str, k: int = DEFAULT_SHINGLE_LENGTH) -> FrozenSet[str]:
    """Return the set of *k*-word shingles of canonical *text*.

    A document with fewer than *k* tokens has no shingles; that is a valid
    result, not an error. The set holds at most ``max(0, t - k + 1)``
    entries for *t* tokens.
    """
    _check_length(k)
    tokens = tokenize(text)
    result = frozenset(ngrams(tokens, k))
    logger.debug("%d tokens -> %d distinct %d-shingles", len(tokens), len(result), k)
    return result
