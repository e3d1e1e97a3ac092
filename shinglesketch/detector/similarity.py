"""Similarity utilities: MinHash estimate and exact shingle-set overlap."""
from __future__ import annotations

from typing import AbstractSet

from .errors import InvariantViolation
from .minhash import Signature

# -----------------------------------------------------------
# MinHash estimate
# -----------------------------------------------------------


def estimate_similarity(sig_a: Signature, sig_b: Signature) -> float:
    """Return the fraction of positions where *sig_a* and *sig_b* agree.

    This is the standard MinHash estimator of Jaccard similarity, always in
    ``[0, 1]``. Both signatures must come from the same hash family.
    """
    if len(sig_a) != len(sig_b):
        raise InvariantViolation(
            f"Cannot compare signatures of different lengths ({len(sig_a)} != {len(sig_b)})"
        )
    if sig_a.seed != sig_b.seed:
        raise InvariantViolation(
            f"Cannot compare signatures from different hash families (seed {sig_a.seed} != {sig_b.seed})"
        )
    return sig_a.minhash.jaccard(sig_b.minhash)


# -----------------------------------------------------------
# Exact set measures
# -----------------------------------------------------------


def exact_intersection_size(set_a: AbstractSet[str], set_b: AbstractSet[str]) -> int:
    """Number of shingles present in both sets."""
    if len(set_a) > len(set_b):
        set_a, set_b = set_b, set_a
    return sum(1 for s in set_a if s in set_b)


def jaccard(set_a: AbstractSet[str], set_b: AbstractSet[str]) -> float:
    """Exact Jaccard similarity; ``0.0`` when either set is empty."""
    if not set_a or not set_b:
        return 0.0
    inter = exact_intersection_size(set_a, set_b)
    return inter / (len(set_a) + len(set_b) - inter)
