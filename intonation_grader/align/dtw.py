"""DTW aligner for pitch contours."""

import logging
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from ..types import AlignmentResult
from .base import Aligner

logger = logging.getLogger(__name__)


def _band_limits(
    i: int, n: int, m: int, band_fraction: float | None
) -> tuple[int, int]:
    """Inclusive column range searched for row i."""
    if band_fraction is None:
        return 0, m - 1
    band_width = max(1, int(max(n, m) * band_fraction))
    expected_j = round(i * (m - 1) / (n - 1)) if n > 1 else 0
    return max(0, expected_j - band_width), min(m - 1, expected_j + band_width)


def dtw_cost_matrix(
    reference: NDArray[np.floating],
    user: NDArray[np.floating],
    band_fraction: float | None = None,
) -> NDArray[np.floating]:
    """Cumulative absolute-difference cost of matching every prefix pair.

    C[i, j] = |ref[i] - user[j]| + min(C[i-1, j], C[i, j-1], C[i-1, j-1]),
    with the first row and column accumulating along a single axis.

    Args:
        reference: Reference contour [N].
        user: User contour [M].
        band_fraction: Optional Sakoe-Chiba band as a fraction of the longer
            length. None searches the full matrix.

    Returns:
        Cost matrix [N, M]. Cells outside the band are inf.
    """
    ref = np.asarray(reference, dtype=np.float64)
    usr = np.asarray(user, dtype=np.float64)
    n, m = len(ref), len(usr)

    cost = np.full((n, m), np.inf)
    if n == 0 or m == 0:
        return cost

    dist = np.abs(ref[:, None] - usr[None, :])

    for i in range(n):
        j_min, j_max = _band_limits(i, n, m, band_fraction)
        for j in range(j_min, j_max + 1):
            if i == 0 and j == 0:
                cost[0, 0] = dist[0, 0]
                continue
            if i == 0:
                best = cost[0, j - 1]
            elif j == 0:
                best = cost[i - 1, 0]
            else:
                best = min(cost[i - 1, j], cost[i, j - 1], cost[i - 1, j - 1])
            cost[i, j] = dist[i, j] + best

    return cost


def dtw_backtrack(cost: NDArray[np.floating]) -> list[tuple[int, int]]:
    """Recover the warping path from a cost matrix.

    Walks from (N-1, M-1) back to (0, 0). On the first row only the user
    index moves, on the first column only the reference index moves.
    Elsewhere the cheapest predecessor wins, ties resolved as
    diagonal, then reference step, then user step.

    Returns:
        [(reference_idx, user_idx), ...] from (0, 0) to (N-1, M-1).
    """
    n, m = cost.shape
    if n == 0 or m == 0:
        return []

    i, j = n - 1, m - 1
    path = [(i, j)]

    while i > 0 or j > 0:
        if i == 0:
            j -= 1
        elif j == 0:
            i -= 1
        else:
            diagonal = cost[i - 1, j - 1]
            ref_step = cost[i - 1, j]
            user_step = cost[i, j - 1]
            best = min(diagonal, ref_step, user_step)
            if diagonal == best:
                i -= 1
                j -= 1
            elif ref_step == best:
                i -= 1
            else:
                j -= 1
        path.append((i, j))

    return path[::-1]


def warp_to_reference(
    user: NDArray[np.floating],
    path: list[tuple[int, int]],
    n: int,
) -> NDArray[np.floating]:
    """Resample the user contour onto the reference axis along a path.

    Position r takes the user value of the last path entry with reference
    index r. Positions the path never visits stay 0.
    """
    usr = np.asarray(user, dtype=np.float64)
    aligned = np.zeros(n, dtype=np.float64)
    for r_idx, u_idx in path:
        aligned[r_idx] = usr[u_idx]
    return aligned


@dataclass
class DTWAlignerConfig:
    """Configuration for DTW aligner."""

    band_fraction: float | None = None  # None = full N x M matrix


class DTWAligner(Aligner):
    """Aligner using Dynamic Time Warping on pitch contours.

    Finds the minimum-cost monotonic correspondence between the reference
    and user contours, then reads the user contour along that path so it
    lines up with the reference frame by frame. Empty inputs give an
    all-zero contour of the reference length.
    """

    def __init__(self, config: DTWAlignerConfig | None = None):
        self.config = config or DTWAlignerConfig()

    @property
    def name(self) -> str:
        return "dtw"

    def align(
        self,
        reference: NDArray[np.floating],
        user: NDArray[np.floating],
    ) -> AlignmentResult:
        n, m = len(reference), len(user)
        if n == 0 or m == 0:
            return AlignmentResult(aligned=np.zeros(n, dtype=np.float64))

        cost = dtw_cost_matrix(reference, user, self.config.band_fraction)
        if np.isinf(cost[n - 1, m - 1]):
            logger.warning(
                f"No path within band {self.config.band_fraction} for {n}x{m}, "
                "using full matrix"
            )
            cost = dtw_cost_matrix(reference, user)

        path = dtw_backtrack(cost)
        return AlignmentResult(
            aligned=warp_to_reference(user, path, n),
            path=path,
            total_cost=float(cost[n - 1, m - 1]),
        )
