"""MinHash utilities for ShingleSketch.

A :class:`HashFamily` of *n* linear hash functions
``h_i(x) = |int32(a_i * x + b_i)|`` reduces a shingle set to an *n*-long
:class:`Signature`. Arithmetic is done modulo ``2**32`` and reinterpreted as a
signed 32-bit integer before taking the absolute value; that wraparound is
part of the hash, not an overflow bug.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Tuple

import numpy as np
import xxhash
from datasketch import LeanMinHash

from . import NO_DATA
from .errors import InvariantViolation

logger = logging.getLogger(__name__)

# Coefficients are drawn from [1, MAX_INT].
MAX_INT = 2**31 - 1

DEFAULT_NUM_HASHES = 100
DEFAULT_SEED = 12345

_MASK32 = 0xFFFFFFFF
_SIGN32 = 0x80000000

# Shingles hashed per numpy block; bounds the (n, block) scratch grid.
_BLOCK = 4096

# -----------------------------------------------------------
# xxHash helpers
# -----------------------------------------------------------


def _to_int32(value: int) -> int:
    """Reinterpret the low 32 bits of *value* as a two's complement integer."""
    value &= _MASK32
    return value - (1 << 32) if value & _SIGN32 else value


def content_hash(value: str) -> int:
    """Signed 32-bit xxHash of a shingle's text."""
    return _to_int32(xxhash.xxh32_intdigest(value.encode("utf-8")))


def batch_xxhash32(strings: List[str]) -> np.ndarray:
    """Vectorised :func:`content_hash` returning an ``int64`` array."""
    digests = np.fromiter(
        (xxhash.xxh32_intdigest(s.encode("utf-8")) for s in strings),
        dtype=np.uint32,
        count=len(strings),
    )
    return digests.view(np.int32).astype(np.int64)


# -----------------------------------------------------------
# Hash family
# -----------------------------------------------------------


@dataclass(frozen=True, eq=False)
class HashFamily:
    """Immutable set of ``(a, b)`` coefficient pairs shared by a whole run."""

    a: np.ndarray
    b: np.ndarray
    seed: int

    def __post_init__(self) -> None:
        # Private read-only copies; the caller's arrays stay untouched.
        try:
            object.__setattr__(self, "a", np.array(self.a, dtype=np.int64))
            object.__setattr__(self, "b", np.array(self.b, dtype=np.int64))
        except (TypeError, ValueError) as e:
            raise InvariantViolation(f"Coefficients must be integers: {e}") from e
        if self.a.shape != self.b.shape or self.a.ndim != 1:
            raise InvariantViolation("Coefficient arrays must be 1-D and of equal length")
        if len(self.a) < 1:
            raise InvariantViolation("A hash family needs at least one function")
        self.a.flags.writeable = False
        self.b.flags.writeable = False

    def __len__(self) -> int:
        return len(self.a)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HashFamily):
            return NotImplemented
        return (
            self.seed == other.seed
            and np.array_equal(self.a, other.a)
            and np.array_equal(self.b, other.b)
        )

    def __hash__(self) -> int:
        return hash((self.seed, self.a.tobytes(), self.b.tobytes()))

    def coefficients(self) -> List[Tuple[int, int]]:
        """Return the ``(a, b)`` pairs as plain Python ints."""
        return [(int(a), int(b)) for a, b in zip(self.a, self.b)]

    def apply(self, i: int, x: int) -> int:
        """Evaluate hash function *i* on the 32-bit content hash *x*."""
        return abs(_to_int32(int(self.a[i]) * x + int(self.b[i])))


def generate_family(n: int = DEFAULT_NUM_HASHES, seed: int = DEFAULT_SEED) -> HashFamily:
    """Draw *n* coefficient pairs uniformly from ``[1, MAX_INT]``.

    The draw uses numpy's PCG64 generator seeded with *seed*, so the same
    seed always reproduces the same family.
    """
    if n < 1:
        raise InvariantViolation(f"Signature length must be >= 1, got {n}")
    rng = np.random.default_rng(seed)
    # One row per function, drawn a then b.
    coeffs = rng.integers(1, MAX_INT, size=(n, 2), endpoint=True, dtype=np.int64)
    logger.debug("Generated %d hash functions (seed=%d)", n, seed)
    return HashFamily(a=coeffs[:, 0].copy(), b=coeffs[:, 1].copy(), seed=seed)


# -----------------------------------------------------------
# Signatures
# -----------------------------------------------------------


class Signature:
    """Read-only MinHash signature backed by :class:`datasketch.LeanMinHash`.

    The seed of the producing :class:`HashFamily` travels with the values so
    signatures from different families are never compared by accident.
    """

    __slots__ = ("_mh",)

    def __init__(self, hashvalues: Iterable[int], seed: int) -> None:
        self._mh = LeanMinHash(seed=seed, hashvalues=np.asarray(hashvalues, dtype=np.uint64))
        self._mh.hashvalues.flags.writeable = False

    @property
    def seed(self) -> int:
        return self._mh.seed

    @property
    def hashvalues(self) -> np.ndarray:
        return self._mh.hashvalues

    @property
    def minhash(self) -> LeanMinHash:
        return self._mh

    def is_empty(self) -> bool:
        """*True* when every slot holds :data:`NO_DATA` (no shingles)."""
        return bool(np.all(self._mh.hashvalues == NO_DATA))

    def __len__(self) -> int:
        return len(self._mh.hashvalues)

    def __getitem__(self, i: int) -> int:
        return int(self._mh.hashvalues[i])

    def __iter__(self) -> Iterator[int]:
        return (int(v) for v in self._mh.hashvalues)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Signature):
            return NotImplemented
        return self.seed == other.seed and np.array_equal(self.hashvalues, other.hashvalues)

    def __hash__(self) -> int:
        return hash((self.seed, self._mh.hashvalues.tobytes()))

    def __repr__(self) -> str:
        return f"Signature(len={len(self)}, seed={self.seed}, empty={self.is_empty()})"


def sign(shingle_set: Iterable[str], family: HashFamily) -> Signature:
    """Reduce *shingle_set* to a MinHash signature under *family*.

    ``signature[i]`` is the minimum of ``family.apply(i, content_hash(s))``
    over all shingles *s*; an empty set gives a signature of
    :data:`NO_DATA` in every slot.
    """
    values = np.full(len(family), NO_DATA, dtype=np.uint64)
    items = list(shingle_set)
    a = family.a[:, None]
    b = family.b[:, None]

    for start in range(0, len(items), _BLOCK):
        x = batch_xxhash32(items[start : start + _BLOCK])[None, :]  # noqa: E203
        # a < 2**31 and |x| <= 2**31, so the products fit in int64.
        wrapped = ((a * x + b) & _MASK32).astype(np.uint32).view(np.int32)
        block_min = np.abs(wrapped.astype(np.int64)).min(axis=1)
        values = np.minimum(values, block_min.astype(np.uint64))

    return Signature(values, seed=family.seed)
