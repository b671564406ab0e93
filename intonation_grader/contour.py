"""Contour post-processing: silence trimming and display-range normalization.

Zero is the silence sentinel throughout. Trimming only removes boundary
zeros and normalization only rescales non-zero values, so the two steps
commute; the analyzer trims first.
"""

import numpy as np
from numpy.typing import NDArray

from .models import ContourPoint


def trim_contour(contour: NDArray[np.floating]) -> NDArray[np.floating]:
    """Drop leading and trailing runs of exact zeros.

    Interior zeros (pauses) are kept. An all-zero or empty contour
    yields an empty array.

    Args:
        contour: Per-frame values with 0 marking silence.

    Returns:
        Contiguous slice of the input.
    """
    values = np.asarray(contour, dtype=np.float64)
    nonzero = np.flatnonzero(values)
    if len(nonzero) == 0:
        return values[:0]
    return values[nonzero[0]:nonzero[-1] + 1]


def normalize_contour(
    contour: NDArray[np.floating],
    floor: float = 10.0,
    ceiling: float = 90.0,
) -> NDArray[np.floating]:
    """Linearly map the observed range of non-zero values onto [floor, ceiling].

    The span is clamped to at least 1 so a monotone contour does not divide
    by zero. Zeros stay zero. A contour with no non-zero values is returned
    unchanged.

    Args:
        contour: Per-frame values with 0 marking silence.
        floor: Output value for the smallest non-zero input.
        ceiling: Output value for the largest non-zero input.

    Returns:
        New array of the same length.
    """
    values = np.asarray(contour, dtype=np.float64)
    voiced = values != 0
    if not np.any(voiced):
        return values.copy()

    lo = float(values[voiced].min())
    hi = float(values[voiced].max())
    span = max(hi - lo, 1.0)

    result = np.zeros_like(values)
    result[voiced] = (values[voiced] - lo) / span * (ceiling - floor) + floor
    return result


def to_points(contour: NDArray[np.floating]) -> list[ContourPoint]:
    """Pair each value with its zero-based frame position."""
    return [ContourPoint(position=i, value=float(v)) for i, v in enumerate(contour)]
