"""Collocation transcription schemes sharing the :class:`TranscriptionScheme` interface."""

from .base import TranscriptionScheme
from .legendre_gauss_radau import LegendreGaussRadau
from .trapezoidal import Trapezoidal


__all__ = [
    "LegendreGaussRadau",
    "TranscriptionScheme",
    "Trapezoidal",
]
