"""Type definitions and data structures for intonation grading."""

from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray


class InvalidInputError(ValueError):
    """Raised when a sample buffer cannot be framed safely."""


class AudioDecodeError(RuntimeError):
    """Raised when audio bytes or files cannot be decoded."""


@dataclass(frozen=True)
class SampleBuffer:
    """Decoded single-channel audio."""

    samples: NDArray[np.floating]  # shape [T], normalized to [-1, 1]
    sample_rate: int

    @classmethod
    def from_channels(cls, channels: NDArray, sample_rate: int) -> "SampleBuffer":
        """Build a buffer from the first channel of a [C, T] (or [T]) array."""
        data = np.asarray(channels)
        if data.ndim == 2:
            if data.shape[0] == 0:
                raise InvalidInputError("channel array has no channels")
            data = data[0]
        return cls(samples=data.astype(np.float64), sample_rate=int(sample_rate))

    def __len__(self) -> int:
        return len(self.samples)

    @property
    def duration_ms(self) -> int:
        if self.sample_rate <= 0:
            return 0
        return int(len(self.samples) / self.sample_rate * 1000)


@dataclass
class AlignmentResult:
    """Result of aligning a user contour onto the reference time axis."""

    aligned: NDArray[np.floating]  # shape [N]
    path: list[tuple[int, int]] = field(default_factory=list)
    total_cost: float = 0.0

    def __len__(self) -> int:
        return len(self.aligned)


def validate_buffer(buffer: SampleBuffer) -> None:
    """Fail fast on buffers that would feed garbage into the pipeline.

    Raises:
        InvalidInputError: If the buffer is empty, multi-dimensional,
            has a non-positive sample rate or contains NaN/inf samples.
    """
    samples = np.asarray(buffer.samples)

    if buffer.sample_rate <= 0:
        raise InvalidInputError(f"sample rate must be positive, got {buffer.sample_rate}")
    if samples.ndim != 1:
        raise InvalidInputError(f"expected a single channel, got shape {samples.shape}")
    if samples.size == 0:
        raise InvalidInputError("sample buffer is empty")
    if not np.all(np.isfinite(samples)):
        bad = int(np.count_nonzero(~np.isfinite(samples)))
        raise InvalidInputError(f"sample buffer contains {bad} non-finite values")
