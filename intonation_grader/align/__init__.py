"""Alignment module for mapping user contours onto the reference time axis."""

from .base import Aligner
from .dtw import DTWAligner, DTWAlignerConfig
from .padded import PaddedAligner

__all__ = [
    "Aligner",
    "DTWAligner",
    "DTWAlignerConfig",
    "PaddedAligner",
]
