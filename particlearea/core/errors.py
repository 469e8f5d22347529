# particlearea/core/errors.py
# Exception types raised by the measurement pipeline

from __future__ import annotations
from typing import Any, Optional


class ParticleAreaError(Exception):
    """Base class for all pipeline failures."""


class InvalidImage(ParticleAreaError, ValueError):
    """Image could not be decoded, is empty, or has an unusable shape."""


class EmptyOutlineSet(ParticleAreaError, ValueError):
    """Frame filtering was asked to work on an empty outline set."""


class WriteFailure(ParticleAreaError, OSError):
    """
    An output artifact (result record or annotated image) could not be written.
    The measurement that was already computed travels with the error in `result`.
    """

    def __init__(self, path: str, reason: str, result: Optional[Any] = None):
        super().__init__(f"Could not write {path}: {reason}")
        self.path = path
        self.reason = reason
        self.result = result
