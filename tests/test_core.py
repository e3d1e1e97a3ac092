"""Basic sanity tests for ShingleSketch."""
from __future__ import annotations

import numpy as np
import pytest
from datasketch import LeanMinHash

from shinglesketch.detector import NO_DATA
from shinglesketch.detector.canonical import canonicalize
from shinglesketch.detector.errors import InvariantViolation
from shinglesketch.detector.ingest import ngrams, shingles, tokenize
from shinglesketch.detector.minhash import (
    MAX_INT,
    HashFamily,
    content_hash,
    generate_family,
    sign,
)

# ---------------------------------------------------------------------------
# Canonicalisation
# ---------------------------------------------------------------------------


def test_canonicalize_punctuation_and_case() -> None:
    assert canonicalize("The Cat. Sat, on THE mat!") == "the cat sat on the mat"


def test_canonicalize_leading_zero() -> None:
    assert canonicalize("order 007 placed") == "order 7 placed"


@pytest.mark.parametrize("raw", ["0", "a 0 b", "10 100", "x0 7"])
def test_canonicalize_keeps_non_leading_zeros(raw: str) -> None:
    assert canonicalize(raw) == raw


def test_canonicalize_diacritics() -> None:
    assert canonicalize("café") == "cafe"
    assert canonicalize("Crème BRÛLÉE") == "creme brulee"


def test_canonicalize_whitespace() -> None:
    assert canonicalize("  hello\t\n  world \r\n") == "hello world"
    assert canonicalize("rock-n-roll") == "rock n roll"


@pytest.mark.parametrize("raw", ["", "   ", "!!! ???", None])
def test_canonicalize_empty(raw) -> None:
    assert canonicalize(raw) == ""


# ---------------------------------------------------------------------------
# Shingles
# ---------------------------------------------------------------------------


def test_tokenize_empty_text() -> None:
    assert tokenize("") == []
    assert tokenize("a  b") == ["a", "b"]


def test_shingles_example() -> None:
    text = canonicalize("The Cat. Sat, on THE mat!")
    assert shingles(text, 3) == {"the cat sat", "cat sat on", "sat on the", "on the mat"}


def test_shingles_short_text() -> None:
    assert shingles("", 3) == frozenset()
    assert shingles("only two", 3) == frozenset()
    assert shingles("exactly three words", 3) == {"exactly three words"}


def test_shingles_duplicates_collapse() -> None:
    assert shingles("a a a a a", 3) == {"a a a"}
    assert list(ngrams(["a"] * 5, 3)) == ["a a a"] * 3


def test_shingles_single_word() -> None:
    assert shingles("b a b", 1) == {"a", "b"}


@pytest.mark.parametrize("k", [0, -1])
def test_shingles_invalid_length(k: int) -> None:
    with pytest.raises(InvariantViolation):
        shingles("some text here", k)


# ---------------------------------------------------------------------------
# Hash family
# ---------------------------------------------------------------------------


def test_family_deterministic() -> None:
    fam1 = generate_family(100, seed=12345)
    fam2 = generate_family(100, seed=12345)
    assert len(fam1) == 100
    assert fam1 == fam2
    assert fam1.coefficients() == fam2.coefficients()


def test_family_seed_changes_coefficients() -> None:
    assert generate_family(100, seed=1) != generate_family(100, seed=2)


def test_family_coefficients_in_range() -> None:
    for a, b in generate_family(500, seed=7).coefficients():
        assert 1 <= a <= MAX_INT
        assert 1 <= b <= MAX_INT


def test_family_is_read_only() -> None:
    fam = generate_family(10)
    with pytest.raises(ValueError):
        fam.a[0] = 1


def test_family_invalid_length() -> None:
    with pytest.raises(InvariantViolation):
        generate_family(0)


def test_hash_wraparound() -> None:
    fam = HashFamily(
        a=np.array([MAX_INT, 1], dtype=np.int64),
        b=np.array([1, MAX_INT], dtype=np.int64),
        seed=0,
    )
    # (2**31 - 1)**2 + 1 == 2 (mod 2**32)
    assert fam.apply(0, MAX_INT) == 2
    # 1 + (2**31 - 1) wraps to -2**31
    assert fam.apply(1, 1) == 2**31
    # -1 * 1 + (2**31 - 1) stays positive
    assert fam.apply(1, -1) == MAX_INT - 1


def test_content_hash_is_signed_32_bit() -> None:
    values = [content_hash(f"shingle {i}") for i in range(1000)]
    assert all(-(2**31) <= v < 2**31 for v in values)
    assert any(v < 0 for v in values)
    assert content_hash("the cat sat") == content_hash("the cat sat")


# ---------------------------------------------------------------------------
# Signatures
# ---------------------------------------------------------------------------


def test_sign_empty_set() -> None:
    sig = sign(frozenset(), generate_family(100))
    assert len(sig) == 100
    assert all(v == NO_DATA for v in sig)
    assert sig.is_empty()


def test_sign_matches_scalar_definition() -> None:
    fam = generate_family(20, seed=3)
    shingle_set = shingles(canonicalize("The quick brown fox jumps over the lazy dog again"), 3)
    sig = sign(shingle_set, fam)
    for i in range(len(fam)):
        expected = min(fam.apply(i, content_hash(s)) for s in shingle_set)
        assert sig[i] == expected
    assert not sig.is_empty()


def test_sign_order_independent() -> None:
    fam = generate_family(50)
    items = [f"w{i} w{i+1} w{i+2}" for i in range(300)]
    assert sign(items, fam) == sign(list(reversed(items)), fam)


def test_sign_large_set_spans_blocks() -> None:
    fam = generate_family(10, seed=11)
    items = [f"t{i} t{i+1} t{i+2}" for i in range(10_000)]
    sig = sign(items, fam)
    assert sig == sign(set(items), fam)
    assert all(v <= 2**31 for v in sig)


def test_signature_carries_seed() -> None:
    sig = sign({"a b c"}, generate_family(10, seed=99))
    assert sig.seed == 99
    with pytest.raises(ValueError):
        sig.hashvalues[0] = 0


def test_signature_backed_by_lean_minhash() -> None:
    fam = generate_family(100)
    sig = sign(shingles("the cat sat on the mat", 3), fam)
    empty = sign(frozenset(), fam)
    assert isinstance(sig.minhash, LeanMinHash)
    assert sig.minhash.seed == fam.seed
    assert list(sig.minhash.hashvalues) == list(sig)
    assert sig.minhash.jaccard(sig.minhash) == 1.0
    assert empty.minhash.jaccard(sig.minhash) == 0.0


def test_family_copies_caller_arrays() -> None:
    a = np.array([3, 5], dtype=np.int64)
    b = np.array([7, 11], dtype=np.int64)
    fam = HashFamily(a=a, b=b, seed=0)
    assert a.flags.writeable and b.flags.writeable
    a[0] = 99
    assert fam.coefficients() == [(3, 7), (5, 11)]


def test_family_accepts_lists() -> None:
    fam = HashFamily(a=[1, 2], b=[3, 4], seed=0)
    assert len(fam) == 2
    assert not fam.a.flags.writeable


@pytest.mark.parametrize(
    "a, b", [([1, 2], [3]), ([[1], [2]], [[3], [4]]), (["x"], ["y"]), ([], [])]
)
def test_family_invalid_coefficients(a, b) -> None:
    with pytest.raises(InvariantViolation):
        HashFamily(a=a, b=b, seed=0)
