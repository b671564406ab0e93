"""Audio decoding utilities for intonation_grader."""

from .audio import (
    decode_audio_bytes,
    decode_reference_audio,
    load_audio,
    load_wav_from_bytes,
    pcm16_to_wav_bytes,
)

__all__ = [
    "decode_audio_bytes",
    "decode_reference_audio",
    "load_audio",
    "load_wav_from_bytes",
    "pcm16_to_wav_bytes",
]
