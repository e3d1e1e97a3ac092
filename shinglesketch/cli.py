"""ShingleSketch command-line interface.

Usage
-----
$ shinglesketch compare f1.txt f2.txt f3.txt
$ shinglesketch compare docs/*.txt --json results/pairs.jsonl
$ shinglesketch run config.yml

The *compare* command reads every file as one document and prints, for each
pair, the exact shingle intersection size and the MinHash similarity
estimate.

The *run* command takes the document list and parameters from a YAML
configuration file (see :mod:`shinglesketch.detector.config`).
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from .detector import __version__
from .detector.config import RunConfig, load_config
from .detector.errors import AcquisitionError, InvariantViolation
from .detector.file_ingest import read_documents
from .detector.output import format_report, write_jsonl
from .detector.pipeline import compare_documents

logger = logging.getLogger(__name__)

# -----------------------------------------------------------
# Helpers
# -----------------------------------------------------------


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _compare_files(
    paths: Sequence[Path],
    config: RunConfig,
    json_out: Optional[Path],
    show_labels: bool,
    verbose: bool,
) -> None:
    if len(paths) < 2:
        logger.warning("Need at least two documents to compare, got %d", len(paths))

    texts = read_documents(paths)
    results = compare_documents(
        texts, config=config, labels=[str(p) for p in paths], verbose=verbose
    )

    report = format_report(results, show_labels=show_labels)
    if report:
        print(report)

    if json_out is not None:
        count = write_jsonl(results, json_out)
        print(f"[json] {count} pairs written to {json_out}")


# -----------------------------------------------------------
# Commands
# -----------------------------------------------------------


def _cmd_compare(args: argparse.Namespace) -> None:
    config = RunConfig(
        shingle_length=args.shingle_length,
        signature_length=args.signature_length,
        seed=args.seed,
    )
    _compare_files(args.files, config, args.json, args.labels, args.verbose)


def _cmd_run(args: argparse.Namespace) -> None:
    run_spec = load_config(args.config)
    _compare_files(run_spec.documents, run_spec.config, run_spec.out, args.labels, args.verbose)


# -----------------------------------------------------------
# Entrypoint
# -----------------------------------------------------------


def main(argv: List[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="shinglesketch",
        description="Estimate pairwise document similarity with MinHash over word shingles",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(required=True, dest="cmd")

    defaults = RunConfig()

    # compare
    p_compare = sub.add_parser("compare", help="Compare every pair of the given files")
    p_compare.add_argument("files", nargs="+", type=Path, help="Documents, one per file")
    p_compare.add_argument("-k", "--shingle-length", type=int, default=defaults.shingle_length,
                           help=f"Words per shingle (default: {defaults.shingle_length})")
    p_compare.add_argument("-n", "--signature-length", type=int, default=defaults.signature_length,
                           help=f"Hash functions per signature (default: {defaults.signature_length})")
    p_compare.add_argument("--seed", type=int, default=defaults.seed,
                           help=f"Seed for the hash family (default: {defaults.seed})")
    p_compare.add_argument("--json", type=Path, help="Also write pair records as JSON Lines")
    p_compare.set_defaults(func=_cmd_compare)

    # run
    p_run = sub.add_parser("run", help="Compare documents listed in a YAML configuration file")
    p_run.add_argument("config", type=Path, help="Path to YAML configuration file")
    p_run.set_defaults(func=_cmd_run)

    for p in (p_compare, p_run):
        p.add_argument("--labels", action="store_true", help="Print file names above each pair")
        p.add_argument("-v", "--verbose", action="store_true", help="Debug logging and progress bar")

    args = parser.parse_args(argv)
    _setup_logging(args.verbose)

    try:
        args.func(args)
    except AcquisitionError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    except InvariantViolation as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
