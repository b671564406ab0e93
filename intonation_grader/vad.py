"""Framing and energy-based voice activity detection.

Each frame is gated independently on its sub-sampled mean absolute
amplitude. There is no smoothing or hysteresis between frames.
"""

from collections.abc import Iterator

import numpy as np
from numpy.typing import NDArray

from .config import PitchConfig


def count_frames(n_samples: int, window: int, hop: int) -> int:
    """Number of full windows that fit in `n_samples` at the given hop.

    Returns 0 when the signal is shorter than one window.
    """
    if n_samples < window:
        return 0
    return (n_samples - window) // hop + 1


def iter_frames(
    samples: NDArray[np.floating],
    window: int,
    hop: int,
) -> Iterator[tuple[int, NDArray[np.floating]]]:
    """Yield (frame_index, frame) pairs. Frames are views, not copies."""
    for i in range(count_frames(len(samples), window, hop)):
        start = i * hop
        yield i, samples[start:start + window]


def frame_energy(frame: NDArray[np.floating], stride: int = 4) -> float:
    """Mean absolute amplitude over every `stride`-th sample."""
    if len(frame) == 0:
        return 0.0
    return float(np.mean(np.abs(frame[::stride])))


def is_voiced(frame: NDArray[np.floating], config: PitchConfig | None = None) -> bool:
    """Classify a frame as voiced. Energy strictly below the threshold is silence."""
    config = config or PitchConfig()
    return frame_energy(frame, config.stride) >= config.energy_threshold


def voicing_mask(
    samples: NDArray[np.floating],
    sr: int,
    config: PitchConfig | None = None,
) -> NDArray[np.bool_]:
    """Per-frame voiced flags for a whole signal."""
    config = config or PitchConfig()
    window = config.window_length(sr)
    hop = config.hop_length(sr)

    mask = np.zeros(count_frames(len(samples), window, hop), dtype=bool)
    for i, frame in iter_frames(samples, window, hop):
        mask[i] = is_voiced(frame, config)
    return mask
