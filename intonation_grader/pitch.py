"""Pitch extraction with an Average Magnitude Difference Function lag search.

For every voiced frame the period is taken as the lag that minimises the
mean absolute difference between the frame and the signal `lag` samples
later. The shifted copy reaches past the end of the frame into the
following samples, so each frame is searched over a segment of
`window + max_lag` samples. The estimate is deliberately naive: no
smoothing, no octave-error correction, no interpolation between lags.
Silent frames are recorded as 0 without running the search.
"""

import logging

import numpy as np
from numpy.typing import NDArray

from .config import PitchConfig
from .types import SampleBuffer, validate_buffer
from .vad import count_frames, is_voiced

logger = logging.getLogger(__name__)


def amdf(
    segment: NDArray[np.floating],
    lag: int,
    stride: int = 4,
    window: int | None = None,
) -> float:
    """Mean |x[j] - x[j + lag]| over every `stride`-th j in [0, window).

    `segment` starts at the frame and may extend past it. Positions whose
    shifted sample falls off the end of the segment are skipped, which only
    happens near the end of the signal. `window` defaults to the whole
    segment.

    Returns inf when the lag leaves no overlap.
    """
    n = len(segment)
    if window is None:
        window = n
    if lag <= 0 or lag >= n:
        return float("inf")
    stop = min(window, n - lag)
    diff = segment[0:stop:stride] - segment[lag:lag + stop:stride]
    return float(np.mean(np.abs(diff)))


def best_lag(
    segment: NDArray[np.floating],
    min_lag: int,
    max_lag: int,
    stride: int = 4,
    window: int | None = None,
) -> int:
    """Lag in [min_lag, max_lag] with the lowest AMDF.

    Scans low to high; the first lag reaching the minimum wins.
    Returns 0 if the range is empty.
    """
    best = 0
    best_cost = float("inf")
    for lag in range(min_lag, max_lag + 1):
        cost = amdf(segment, lag, stride, window)
        if cost < best_cost:
            best_cost = cost
            best = lag
    return best


def estimate_f0(
    segment: NDArray[np.floating],
    sr: int,
    config: PitchConfig | None = None,
) -> float:
    """Estimate F0 in Hz for a frame already classified as voiced.

    Args:
        segment: Samples from the frame start onward. Up to `max_lag`
            samples beyond the window are used as the shifted copy.
        sr: Sample rate in Hz.
        config: Search range, window and sub-sampling stride.

    Returns:
        `sr / best_lag`, or 0.0 if no lag could be evaluated.
    """
    config = config or PitchConfig()
    window = min(config.window_length(sr), len(segment))
    lag = best_lag(segment, config.min_lag(sr), config.max_lag(sr), config.stride, window)
    if lag <= 0:
        return 0.0
    return sr / lag


def extract_pitch_contour(
    buffer: SampleBuffer,
    config: PitchConfig | None = None,
) -> NDArray[np.floating]:
    """Extract the raw pitch contour of a buffer.

    Args:
        buffer: Decoded mono audio.
        config: Framing, voicing and pitch-search parameters.

    Returns:
        F0 in Hz per frame, shape [floor((T - window) / hop) + 1].
        Silent frames have value 0. Empty if the buffer is shorter than
        one window.

    Raises:
        InvalidInputError: If the buffer is empty or contains non-finite samples.
    """
    config = config or PitchConfig()
    validate_buffer(buffer)

    sr = buffer.sample_rate
    samples = np.asarray(buffer.samples, dtype=np.float64)
    window = config.window_length(sr)
    hop = config.hop_length(sr)
    span = window + config.max_lag(sr)

    contour = np.zeros(count_frames(len(samples), window, hop), dtype=np.float64)
    for i in range(len(contour)):
        start = i * hop
        frame = samples[start:start + window]
        if is_voiced(frame, config):
            contour[i] = estimate_f0(samples[start:start + span], sr, config)

    logger.debug(
        f"Extracted {len(contour)} frames ({np.count_nonzero(contour)} voiced) at {sr} Hz"
    )
    return contour
