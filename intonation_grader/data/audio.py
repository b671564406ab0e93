"""Audio decoding utilities.

Turns files, WAV bytes and the base64 payloads returned by speech-synthesis
services into SampleBuffers. Decoding is kept out of the analysis core,
which only ever sees decoded samples.
"""

import base64
import binascii
import io
import logging
import wave
from pathlib import Path

import numpy as np

from ..types import AudioDecodeError, SampleBuffer

logger = logging.getLogger(__name__)

# Raw PCM returned by the reference TTS voice
TTS_PCM_SR = 24000


def load_audio(path: Path, target_sr: int | None = None) -> SampleBuffer:
    """Load an audio file as mono samples.

    Args:
        path: Path to audio file (supports WAV, MP3, M4A, etc.)
        target_sr: Resample to this rate. None keeps the native rate.

    Returns:
        SampleBuffer normalized to [-1, 1].

    Raises:
        AudioDecodeError: If the file is missing or cannot be decoded.
    """
    import librosa

    try:
        audio, sr = librosa.load(str(path), sr=target_sr, mono=True)
    except Exception as e:
        raise AudioDecodeError(f"Failed to load {path}: {e}") from e

    logger.debug(f"Loaded {path}: {len(audio)} samples at {sr} Hz")
    return SampleBuffer(samples=audio.astype(np.float64), sample_rate=int(sr))


def load_wav_from_bytes(wav_bytes: bytes) -> SampleBuffer:
    """Decode 16-bit PCM WAV bytes. Multi-channel audio keeps channel 0."""
    try:
        with wave.open(io.BytesIO(wav_bytes), "rb") as wf:
            n_channels = wf.getnchannels()
            sample_width = wf.getsampwidth()
            sample_rate = wf.getframerate()
            raw_data = wf.readframes(wf.getnframes())
    except (wave.Error, EOFError) as e:
        raise AudioDecodeError(f"Invalid WAV data: {e}") from e

    if sample_width != 2:
        raise AudioDecodeError(f"Unsupported WAV sample width: {sample_width} bytes")

    audio = np.frombuffer(raw_data, dtype="<i2").astype(np.float64) / 32768.0
    channels = audio.reshape(-1, n_channels).T
    return SampleBuffer.from_channels(channels, sample_rate)


def pcm16_to_wav_bytes(pcm: bytes, sample_rate: int = TTS_PCM_SR) -> bytes:
    """Wrap raw mono 16-bit little-endian PCM in a WAV container."""
    buf = io.BytesIO()
    with wave.open(buf, "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)
        wf.setframerate(sample_rate)
        wf.writeframes(pcm)
    return buf.getvalue()


def decode_audio_bytes(data: bytes) -> SampleBuffer:
    """Decode an in-memory audio file.

    WAV goes through the wave module; other containers go through librosa.
    """
    if data[:4] == b"RIFF" and data[8:12] == b"WAVE":
        return load_wav_from_bytes(data)

    import librosa

    try:
        audio, sr = librosa.load(io.BytesIO(data), sr=None, mono=True)
    except Exception as e:
        raise AudioDecodeError(f"Failed to decode {len(data)} bytes of audio: {e}") from e
    return SampleBuffer(samples=audio.astype(np.float64), sample_rate=int(sr))


def decode_reference_audio(encoded: str, pcm_sample_rate: int = TTS_PCM_SR) -> SampleBuffer:
    """Decode a reference clip as delivered by a TTS service.

    A `data:` URI carries a complete audio file. Any other string is
    taken to be base64 raw 16-bit PCM at `pcm_sample_rate`.
    """
    is_data_uri = encoded.startswith("data:")
    payload = encoded.split(",", 1)[1] if is_data_uri and "," in encoded else encoded
    # Line-wrapped base64 is common in stored payloads.
    payload = "".join(payload.split())

    try:
        raw = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise AudioDecodeError(f"Reference audio is not valid base64: {e}") from e

    if is_data_uri:
        return decode_audio_bytes(raw)
    return load_wav_from_bytes(pcm16_to_wav_bytes(raw, pcm_sample_rate))
