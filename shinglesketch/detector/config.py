"""Run configuration for ShingleSketch.

A run is fully described by three numbers. They can be given directly or
read from a YAML file such as::

    shingle_length: 3
    signature_length: 100
    seed: 12345
    documents:
      - data/f1.txt
      - data/f2.txt
    out: results/pairs.jsonl

``documents`` and ``out`` are only used by the ``shinglesketch run`` command.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml  # type: ignore

from .errors import AcquisitionError, InvariantViolation
from .ingest import DEFAULT_SHINGLE_LENGTH
from .minhash import DEFAULT_NUM_HASHES, DEFAULT_SEED

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunConfig:
    """Parameters shared by every document in a run."""

    shingle_length: int = DEFAULT_SHINGLE_LENGTH
    signature_length: int = DEFAULT_NUM_HASHES
    seed: int = DEFAULT_SEED

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            # YAML `true` loads as bool, which is an int subclass.
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvariantViolation(f"{f.name} must be an integer, got {value!r}")
        if self.shingle_length < 1:
            raise InvariantViolation(f"shingle_length must be >= 1, got {self.shingle_length}")
        if self.signature_length < 1:
            raise InvariantViolation(f"signature_length must be >= 1, got {self.signature_length}")

    @classmethod
    def from_dict(cls, cfg: Dict[str, Any]) -> "RunConfig":
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in cfg.items() if k in known})


@dataclass
class RunSpec:
    """A :class:`RunConfig` plus the inputs and output of a ``run`` command."""

    config: RunConfig = field(default_factory=RunConfig)
    documents: List[Path] = field(default_factory=list)
    out: Optional[Path] = None


_RUN_KEYS = {"documents", "out"}


def load_config(path: Union[str, Path]) -> RunSpec:
    """Read a YAML run description; relative paths resolve against its folder."""
    cfg_path = Path(path).expanduser().resolve()
    try:
        with cfg_path.open() as f:
            cfg = yaml.safe_load(f) or {}
    except OSError as e:
        raise AcquisitionError(cfg_path, str(e)) from e
    except yaml.YAMLError as e:
        raise InvariantViolation(f"{cfg_path} is not valid YAML: {e}") from e

    if not isinstance(cfg, dict):
        raise InvariantViolation(f"{cfg_path} must contain a YAML mapping")

    known = {f.name for f in fields(RunConfig)} | _RUN_KEYS
    for key in sorted(set(cfg) - known):
        logger.warning("Ignoring unknown config key %r in %s", key, cfg_path)

    base = cfg_path.parent
    documents = [(base / Path(p).expanduser()) for p in cfg.get("documents") or []]
    out = cfg.get("out")
    return RunSpec(
        config=RunConfig.from_dict(cfg),
        documents=documents,
        out=(base / Path(out).expanduser()) if out else None,
    )
