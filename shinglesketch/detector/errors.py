"""Exception types raised by the ShingleSketch detector."""
from __future__ import annotations


class ShingleSketchError(Exception):
    """Base class for every error raised by this package."""


class InvariantViolation(ShingleSketchError, ValueError):
    """Wiring error: inputs that can never be valid for the pipeline.

    Raised for a shingle length or signature length below 1 and for
    comparing signatures of different lengths or from different hash
    families.
    """


class AcquisitionError(ShingleSketchError, OSError):
    """A document's text could not be obtained."""

    def __init__(self, path, reason: str) -> None:
        super().__init__(f"Failed to read {path}: {reason}")
        self.path = path
        self.reason = reason
