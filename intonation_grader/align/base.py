"""Base classes for contour alignment."""

from abc import ABC, abstractmethod

import numpy as np
from numpy.typing import NDArray

from ..types import AlignmentResult


class Aligner(ABC):
    """Abstract base class for contour aligners.

    Aligners map a user contour onto the time axis of a reference contour,
    producing an output the same length as the reference. This allows
    swapping between alignment strategies (DTW, zero padding, ...).
    """

    @abstractmethod
    def align(
        self,
        reference: NDArray[np.floating],
        user: NDArray[np.floating],
    ) -> AlignmentResult:
        """Align a user contour to a reference contour.

        Args:
            reference: Reference contour, shape [N]. 0 marks silence.
            user: User contour, shape [M]. 0 marks silence.

        Returns:
            AlignmentResult whose `aligned` array has shape [N].
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the aligner name for logging."""
        pass
