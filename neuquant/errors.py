# neuquant/errors.py
from __future__ import annotations

"""
Precondition errors raised before training starts.

Both subclass ValueError so callers that already guard on ValueError keep working.
"""

from numbers import Integral

from .constants import MIN_PIXELS, SAMPLE_FACTOR_MAX, SAMPLE_FACTOR_MIN


class NeuQuantError(Exception):
    """Base class for quantizer precondition failures."""


class ImageTooSmallError(NeuQuantError, ValueError):
    """Fewer pixels than the prime-step traversal needs."""

    def __init__(self, pixel_count: int) -> None:
        self.pixel_count = int(pixel_count)
        super().__init__(
            f"image is too small: {self.pixel_count} pixels (need at least {MIN_PIXELS})"
        )


class InvalidSamplingFactorError(NeuQuantError, ValueError):
    """Sampling factor outside [SAMPLE_FACTOR_MIN, SAMPLE_FACTOR_MAX]."""

    def __init__(self, sample_factor: object) -> None:
        self.sample_factor = sample_factor
        super().__init__(
            f"sample factor must be an integer between {SAMPLE_FACTOR_MIN} and "
            f"{SAMPLE_FACTOR_MAX}, got {sample_factor!r}"
        )


def check_sample_factor(sample_factor: object) -> int:
    """Return sample_factor as int or raise InvalidSamplingFactorError."""
    if isinstance(sample_factor, bool) or not isinstance(sample_factor, Integral):
        raise InvalidSamplingFactorError(sample_factor)
    if sample_factor < SAMPLE_FACTOR_MIN or sample_factor > SAMPLE_FACTOR_MAX:
        raise InvalidSamplingFactorError(sample_factor)
    return int(sample_factor)


def check_pixel_count(pixel_count: int) -> int:
    """Return pixel_count or raise ImageTooSmallError below MIN_PIXELS."""
    if pixel_count < MIN_PIXELS:
        raise ImageTooSmallError(pixel_count)
    return int(pixel_count)


__all__ = [
    "NeuQuantError",
    "ImageTooSmallError",
    "InvalidSamplingFactorError",
    "check_sample_factor",
    "check_pixel_count",
]
