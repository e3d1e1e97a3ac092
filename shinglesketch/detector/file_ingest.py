"""Document acquisition for ShingleSketch.

Each input file is one document. Supported:
- plain text (any extension not listed below)
- .gz compressed text
- .html / .htm (visible text only)

Lines are joined with single spaces; canonicalisation takes care of the rest.
"""
from __future__ import annotations

import gzip
import logging
from pathlib import Path
from typing import Iterable, List, Optional, Union

import chardet
from bs4 import BeautifulSoup

from .errors import AcquisitionError

logger = logging.getLogger(__name__)

_HTML_SUFFIXES = {".html", ".htm"}


def detect_encoding(raw: bytes) -> str:
    """Detect the encoding of *raw* using chardet, defaulting to UTF-8."""
    result = chardet.detect(raw[:8192])
    return result.get("encoding") or "utf-8"


def _read_bytes(file_path: Path) -> bytes:
    if file_path.suffix.lower() == ".gz":
        with gzip.open(file_path, "rb") as f:
            return f.read()
    return file_path.read_bytes()


def _html_to_text(content: str) -> str:
    soup = BeautifulSoup(content, "lxml")

    # Remove script and style elements
    for script in soup(["script", "style"]):
        script.decompose()

    return soup.get_text(separator="\n")


def _inner_suffix(file_path: Path) -> str:
    """Suffix that decides the format (``a.html.gz`` -> ``.html``)."""
    if file_path.suffix.lower() == ".gz":
        return Path(file_path.stem).suffix.lower()
    return file_path.suffix.lower()


def read_document(file_path: Union[str, Path], encoding: Optional[str] = None) -> str:
    """Return the whole text of *file_path* as one space-joined string.

    Raises:
        AcquisitionError: the file is missing, unreadable or not decodable
    """
    file_path = Path(file_path)
    try:
        raw = _read_bytes(file_path)
        content = raw.decode(encoding or detect_encoding(raw), errors="replace")
    except (OSError, EOFError, LookupError) as e:
        raise AcquisitionError(file_path, str(e)) from e

    if _inner_suffix(file_path) in _HTML_SUFFIXES:
        content = _html_to_text(content)

    text = " ".join(content.splitlines())
    logger.debug("Read %s (%d bytes, %d chars)", file_path, len(raw), len(text))
    return text


def read_documents(paths: Iterable[Union[str, Path]]) -> List[str]:
    """Read every path in order; the first failure aborts the whole batch."""
    return [read_document(p) for p in paths]
