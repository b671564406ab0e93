"""Padded aligner - baseline that performs no time warping."""

import numpy as np
from numpy.typing import NDArray

from ..types import AlignmentResult
from .base import Aligner


class PaddedAligner(Aligner):
    """Aligner that lays the user contour on the reference axis as-is.

    The user contour is truncated or zero-padded to the reference length.
    Useful as the "no alignment" baseline DTW is measured against.
    Not suitable for attempts spoken at a different rate.
    """

    @property
    def name(self) -> str:
        return "padded"

    def align(
        self,
        reference: NDArray[np.floating],
        user: NDArray[np.floating],
    ) -> AlignmentResult:
        n = len(reference)
        m = min(n, len(user))

        aligned = np.zeros(n, dtype=np.float64)
        aligned[:m] = np.asarray(user, dtype=np.float64)[:m]

        total_cost = float(np.sum(np.abs(np.asarray(reference, dtype=np.float64) - aligned)))
        return AlignmentResult(
            aligned=aligned,
            path=[(i, i) for i in range(m)],
            total_cost=total_cost,
        )
