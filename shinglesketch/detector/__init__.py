"""ShingleSketch detector package.

Core public API lives here so external users can::

    import shinglesketch as ss
    ss.NO_DATA
    ss.__version__

The pipeline is canonicalize -> shingles -> sign -> estimate_similarity:
    from shinglesketch.detector.canonical import canonicalize
    from shinglesketch.detector.ingest import shingles
    from shinglesketch.detector.minhash import generate_family, sign
    from shinglesketch.detector.similarity import estimate_similarity
"""

from importlib.metadata import PackageNotFoundError, version as _pkg_version


# Semantic version of the installed package
try:
    __version__: str = _pkg_version("shinglesketch")
except PackageNotFoundError:  # pragma: no cover – local dev path
    __version__ = "0.1.0"


# Signature slot value for a document without shingles. Larger than any
# value a hash function can produce (those lie in [0, 2**31]).
NO_DATA: int = 2**32 - 1

from .errors import ShingleSketchError, InvariantViolation, AcquisitionError
from .canonical import canonicalize
from .ingest import tokenize, shingles
from .minhash import HashFamily, Signature, generate_family, sign, content_hash
from .similarity import estimate_similarity, exact_intersection_size, jaccard
from .config import RunConfig, load_config
from .pipeline import SimilarityPipeline, DocumentSketch, PairResult, compare_documents
from .file_ingest import read_document, read_documents
from .output import format_report, write_jsonl

__all__ = [
    "NO_DATA",
    "__version__",
    # Errors
    "ShingleSketchError",
    "InvariantViolation",
    "AcquisitionError",
    # Core
    "canonicalize",
    "tokenize",
    "shingles",
    "HashFamily",
    "Signature",
    "generate_family",
    "sign",
    "content_hash",
    "estimate_similarity",
    "exact_intersection_size",
    "jaccard",
    # Pipeline
    "RunConfig",
    "load_config",
    "SimilarityPipeline",
    "DocumentSketch",
    "PairResult",
    "compare_documents",
    # I/O
    "read_document",
    "read_documents",
    "format_report",
    "write_jsonl",
]
