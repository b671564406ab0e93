"""Pytest configuration and fixtures for intonation_grader tests."""

import wave
from collections.abc import Callable
from pathlib import Path

import numpy as np
import pytest

from intonation_grader.types import SampleBuffer


@pytest.fixture
def make_tone() -> Callable[..., SampleBuffer]:
    """Factory for sine-wave buffers.

    Accepts one (freq_hz, duration_s) segment or a list of them, so a
    test can build a melody such as a high tone followed by a low tone.
    """

    def _make(
        segments: list[tuple[float, float]] | tuple[float, float],
        sr: int = 24000,
        amplitude: float = 0.5,
    ) -> SampleBuffer:
        if isinstance(segments, tuple):
            segments = [segments]
        parts = []
        for freq, duration in segments:
            t = np.arange(int(sr * duration)) / sr
            if freq > 0:
                parts.append(amplitude * np.sin(2 * np.pi * freq * t))
            else:
                parts.append(np.zeros_like(t))
        return SampleBuffer(samples=np.concatenate(parts), sample_rate=sr)

    return _make


@pytest.fixture
def silent_buffer() -> SampleBuffer:
    """Half a second of digital silence at 24 kHz."""
    return SampleBuffer(samples=np.zeros(12000), sample_rate=24000)


@pytest.fixture
def write_wav() -> Callable[[Path, SampleBuffer], Path]:
    """Write a SampleBuffer to a 16-bit mono WAV file."""

    def _write(path: Path, buffer: SampleBuffer) -> Path:
        audio_int16 = (buffer.samples * 32767).clip(-32768, 32767).astype(np.int16)
        with wave.open(str(path), "wb") as wf:
            wf.setnchannels(1)
            wf.setsampwidth(2)
            wf.setframerate(buffer.sample_rate)
            wf.writeframes(audio_int16.tobytes())
        return path

    return _write
