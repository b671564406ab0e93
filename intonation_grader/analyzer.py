"""Reference-versus-attempt contour comparison.

This module provides the ContourAnalyzer class that integrates:
- Energy-gated AMDF pitch extraction
- Silence trimming and display-range normalization
- Alignment (DTW or zero padding)

The result is a pair of equal-length contours ready for plotting or for
an external scorer.
"""

import logging
import math
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor

import numpy as np
from numpy.typing import NDArray

from .align import Aligner, DTWAligner, DTWAlignerConfig, PaddedAligner
from .config import AnalyzerConfig
from .contour import normalize_contour, to_points, trim_contour
from .models import ContourComparison, ContourPoint
from .pitch import extract_pitch_contour
from .types import AudioDecodeError, SampleBuffer

logger = logging.getLogger(__name__)


class ContourAnalyzer:
    """Compare the pitch contour of an attempt against a reference.

    This analyzer:
    1. Extracts a raw F0 contour from each buffer
    2. Trims leading/trailing silence
    3. Normalizes voiced frames into the display range
    4. Warps the attempt onto the reference time axis

    The aligner is swappable for A/B comparison.
    """

    def __init__(
        self,
        config: AnalyzerConfig | None = None,
        aligner: Aligner | None = None,
    ):
        """Initialize analyzer with optional custom aligner.

        Args:
            config: Analyzer configuration.
            aligner: Custom aligner (overrides config.aligner).
        """
        self.config = config or AnalyzerConfig()

        if aligner is not None:
            self.aligner = aligner
        elif self.config.aligner == "padded":
            self.aligner = PaddedAligner()
        else:
            self.aligner = DTWAligner(DTWAlignerConfig(band_fraction=self.config.band_fraction))

    @property
    def name(self) -> str:
        """Return analyzer name for logging."""
        return f"amdf_{self.aligner.name}"

    def extract(self, buffer: SampleBuffer) -> NDArray[np.floating]:
        """Raw per-frame F0 in Hz, 0 for silence."""
        return extract_pitch_contour(buffer, self.config.pitch)

    def prepare(self, buffer: SampleBuffer) -> NDArray[np.floating]:
        """Trimmed and normalized contour for one buffer."""
        pitch = self.config.pitch
        return normalize_contour(
            trim_contour(self.extract(buffer)),
            floor=pitch.normalized_floor,
            ceiling=pitch.normalized_ceiling,
        )

    def analyze(self, reference: SampleBuffer, attempt: SampleBuffer) -> ContourComparison:
        """Compare an attempt against a reference recording.

        Args:
            reference: Decoded reference utterance.
            attempt: Decoded learner recording.

        Returns:
            ContourComparison with both contours on the reference time axis.

        Raises:
            InvalidInputError: If either buffer is empty or non-finite.
        """
        if self.config.parallel:
            with ThreadPoolExecutor(max_workers=2) as pool:
                ref_future = pool.submit(self.prepare, reference)
                user_future = pool.submit(self.prepare, attempt)
                ref_contour = ref_future.result()
                user_contour = user_future.result()
        else:
            ref_contour = self.prepare(reference)
            user_contour = self.prepare(attempt)

        warnings = []
        if len(ref_contour) == 0:
            warnings.append("empty_reference")
        if len(user_contour) == 0:
            warnings.append("empty_attempt")

        result = self.aligner.align(ref_contour, user_contour)
        logger.info(
            f"{self.name}: reference {len(ref_contour)} frames, "
            f"attempt {len(user_contour)} frames, cost {result.total_cost:.1f}"
        )

        return ContourComparison(
            reference=to_points(ref_contour),
            user=to_points(result.aligned),
            warnings=warnings,
        )

    def analyze_or_fallback(
        self,
        load_reference: Callable[[], SampleBuffer],
        load_attempt: Callable[[], SampleBuffer],
    ) -> ContourComparison:
        """Decode both clips and compare them, substituting placeholder
        contours when decoding fails.

        Only AudioDecodeError triggers the fallback; invalid decoded
        samples still raise.
        """
        try:
            reference = load_reference()
            attempt = load_attempt()
        except AudioDecodeError as e:
            logger.error(f"Audio decoding failed, using fallback contours: {e}")
            comparison = fallback_comparison(self.config.fallback_points)
            comparison.warnings.append("decode_failed")
            return comparison

        return self.analyze(reference, attempt)


def fallback_comparison(n_points: int = 50) -> ContourComparison:
    """Smooth synthetic contour pair shown when real analysis is unavailable."""
    return ContourComparison(
        reference=[
            ContourPoint(position=i, value=50 + 20 * math.sin(i * 0.2))
            for i in range(n_points)
        ],
        user=[
            ContourPoint(position=i, value=50 + 20 * math.sin(i * 0.25))
            for i in range(n_points)
        ],
        is_fallback=True,
    )
