"""ShingleSketch - MinHash estimates of document similarity over word shingles.

Each document is canonicalised (lowercase ASCII words), cut into overlapping
3-word shingles and reduced to a 100-slot MinHash signature. Comparing two
signatures estimates the Jaccard similarity of the shingle sets; the exact
shingle overlap is reported alongside.

Quick Start:
    # CLI usage
    shinglesketch compare f1.txt f2.txt f3.txt

    # Python API
    from shinglesketch import compare_documents
    for pair in compare_documents([text1, text2, text3]):
        print(pair.doc_index_a, pair.doc_index_b, pair.estimated_similarity)
"""

from .detector import __version__, NO_DATA

# Re-export main API
from .detector import (
    canonicalize,
    shingles,
    generate_family,
    sign,
    estimate_similarity,
    exact_intersection_size,
    compare_documents,
    SimilarityPipeline,
    RunConfig,
    PairResult,
    Signature,
    HashFamily,
    InvariantViolation,
    AcquisitionError,
)

__all__ = [
    "__version__",
    "NO_DATA",
    "canonicalize",
    "shingles",
    "generate_family",
    "sign",
    "estimate_similarity",
    "exact_intersection_size",
    "compare_documents",
    "SimilarityPipeline",
    "RunConfig",
    "PairResult",
    "Signature",
    "HashFamily",
    "InvariantViolation",
    "AcquisitionError",
]
