"""Pairwise similarity pipeline for ShingleSketch.

Integrates:
- Canonicalisation and word shingling
- MinHash signing against one shared hash family
- All-pairs comparison (MinHash estimate + exact overlap)
"""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass, asdict
from typing import Any, Dict, FrozenSet, List, Optional, Sequence

from tqdm import tqdm

from .canonical import canonicalize
from .config import RunConfig
from .errors import InvariantViolation
from .ingest import shingles, tokenize
from .minhash import HashFamily, Signature, generate_family, sign
from .similarity import estimate_similarity, exact_intersection_size, jaccard

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DocumentSketch:
    """Everything derived from one document's text."""

    index: int
    label: str
    canonical_text: str
    shingles: FrozenSet[str]
    signature: Signature

    @property
    def token_count(self) -> int:
        return len(tokenize(self.canonical_text))


@dataclass(frozen=True)
class PairResult:
    """Comparison of documents ``doc_index_a < doc_index_b`` (0-based)."""

    doc_index_a: int
    doc_index_b: int
    exact_intersection_size: int
    estimated_similarity: float
    exact_jaccard: float
    label_a: str = ""
    label_b: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class SimilarityPipeline:
    """Sketch documents once and compare every pair.

    The :class:`HashFamily` is built on construction and shared, unmodified,
    by every document sketched through this pipeline.
    """

    def __init__(
        self,
        config: Optional[RunConfig] = None,
        family: Optional[HashFamily] = None,
        verbose: bool = False,
    ):
        self.config = config or RunConfig()
        if family is None:
            family = generate_family(self.config.signature_length, self.config.seed)
        elif len(family) != self.config.signature_length:
            raise InvariantViolation(
                f"Hash family has {len(family)} functions but signature_length is "
                f"{self.config.signature_length}"
            )
        self.family = family
        self.verbose = verbose

    def sketch(self, text: str, index: int = 0, label: str = "") -> DocumentSketch:
        """Canonicalise, shingle and sign a single document."""
        canonical = canonicalize(text)
        shingle_set = shingles(canonical, self.config.shingle_length)
        signature = sign(shingle_set, self.family)
        return DocumentSketch(
            index=index,
            label=label or f"doc_{index + 1}",
            canonical_text=canonical,
            shingles=shingle_set,
            signature=signature,
        )

    def sketch_all(
        self, texts: Sequence[str], labels: Optional[Sequence[str]] = None
    ) -> List[DocumentSketch]:
        if labels is not None and len(labels) != len(texts):
            raise ValueError(f"Got {len(labels)} labels for {len(texts)} documents")

        docs = enumerate(texts)
        if self.verbose:
            docs = tqdm(docs, total=len(texts), desc="Sketching documents")

        sketches = []
        for i, text in docs:
            sketch = self.sketch(text, index=i, label=labels[i] if labels else "")
            logger.debug("%s: %d shingles", sketch.label, len(sketch.shingles))
            sketches.append(sketch)
        return sketches

    @staticmethod
    def compare(a: DocumentSketch, b: DocumentSketch) -> PairResult:
        return PairResult(
            doc_index_a=a.index,
            doc_index_b=b.index,
            exact_intersection_size=exact_intersection_size(a.shingles, b.shingles),
            estimated_similarity=estimate_similarity(a.signature, b.signature),
            exact_jaccard=jaccard(a.shingles, b.shingles),
            label_a=a.label,
            label_b=b.label,
        )

    def run(
        self, texts: Sequence[str], labels: Optional[Sequence[str]] = None
    ) -> List[PairResult]:
        """Return one :class:`PairResult` per pair ``i < j``, in input order."""
        t0 = time.time()
        sketches = self.sketch_all(texts, labels)
        results = [
            self.compare(sketches[i], sketches[j])
            for i in range(len(sketches))
            for j in range(i + 1, len(sketches))
        ]
        logger.info(
            "Compared %d documents (%d pairs) in %.3fs",
            len(sketches),
            len(results),
            time.time() - t0,
        )
        return results


def compare_documents(
    texts: Sequence[str],
    config: Optional[RunConfig] = None,
    labels: Optional[Sequence[str]] = None,
    verbose: bool = False,
) -> List[PairResult]:
    """
    Convenience function to compare every pair of *texts*.

    Args:
        texts: Raw document texts, in order
        config: Run parameters (defaults: k=3, N=100, seed=12345)
        labels: Optional display names, one per document
        verbose: Show a progress bar while sketching

    Returns:
        Pair records ordered by ``(doc_index_a, doc_index_b)``
    """
    return SimilarityPipeline(config, verbose=verbose).run(texts, labels)
