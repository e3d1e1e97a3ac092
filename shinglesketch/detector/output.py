"""Output module for ShingleSketch.

Pair results can be rendered as a console report or written as JSON Lines,
one object per compared pair.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable, List, Union

from .pipeline import PairResult


def format_pair(result: PairResult) -> List[str]:
    """Two report lines for *result*, with 1-based document numbers."""
    i = result.doc_index_a + 1
    j = result.doc_index_b + 1
    return [
        f"Intersection size between Doc {i} and Doc {j}: {result.exact_intersection_size}",
        f"Similarity between Document {i} and Document {j}: {result.estimated_similarity * 100:.2f}%",
    ]


def format_report(results: Iterable[PairResult], show_labels: bool = False) -> str:
    """Render every pair as report text."""
    lines: List[str] = []
    for result in results:
        if show_labels:
            lines.append(f"# {result.label_a} <-> {result.label_b}")
        lines.extend(format_pair(result))
    return "\n".join(lines)


def write_jsonl(results: Iterable[PairResult], output_path: Union[str, Path]) -> int:
    """Write one JSON object per pair to *output_path*; return the count."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    count = 0
    with open(output_path, "w", encoding="utf-8") as f:
        for result in results:
            json.dump(result.to_dict(), f, ensure_ascii=False)
            f.write("\n")
            count += 1
    return count
