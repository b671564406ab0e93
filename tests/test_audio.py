"""Tests for audio decoding utilities."""

import base64
import io
import wave

import numpy as np
import pytest

from intonation_grader.data.audio import (
    TTS_PCM_SR,
    decode_audio_bytes,
    decode_reference_audio,
    load_audio,
    load_wav_from_bytes,
    pcm16_to_wav_bytes,
)
from intonation_grader.types import AudioDecodeError, SampleBuffer


def make_pcm(n: int = 2400) -> tuple[np.ndarray, bytes]:
    """Helper to create int16 PCM of a 220 Hz tone."""
    t = np.arange(n) / TTS_PCM_SR
    audio_int16 = (0.5 * np.sin(2 * np.pi * 220 * t) * 32767).astype(np.int16)
    return audio_int16, audio_int16.astype("<i2").tobytes()


class TestPcmToWav:
    """Tests for wrapping raw PCM in a WAV container."""

    def test_header(self) -> None:
        """Output is a mono 16-bit WAV at the requested rate."""
        _, pcm = make_pcm()

        wav_bytes = pcm16_to_wav_bytes(pcm, sample_rate=22050)

        assert wav_bytes[:4] == b"RIFF"
        assert wav_bytes[8:12] == b"WAVE"
        with wave.open(io.BytesIO(wav_bytes), "rb") as wf:
            assert wf.getnchannels() == 1
            assert wf.getsampwidth() == 2
            assert wf.getframerate() == 22050
            assert wf.getnframes() == 2400

    def test_default_rate_is_tts_rate(self) -> None:
        """TTS PCM defaults to 24 kHz."""
        _, pcm = make_pcm(10)
        with wave.open(io.BytesIO(pcm16_to_wav_bytes(pcm)), "rb") as wf:
            assert wf.getframerate() == 24000


class TestLoadWavFromBytes:
    """Tests for in-memory WAV decoding."""

    def test_scales_to_unit_range(self) -> None:
        """int16 samples become floats in [-1, 1]."""
        audio_int16, pcm = make_pcm()

        buffer = load_wav_from_bytes(pcm16_to_wav_bytes(pcm))

        assert isinstance(buffer, SampleBuffer)
        assert buffer.sample_rate == TTS_PCM_SR
        np.testing.assert_allclose(buffer.samples, audio_int16 / 32768.0)

    def test_stereo_keeps_first_channel(self) -> None:
        """Only channel 0 of interleaved stereo is used."""
        left = np.full(100, 1000, dtype=np.int16)
        right = np.full(100, -2000, dtype=np.int16)
        interleaved = np.stack([left, right], axis=1).reshape(-1)

        buf = io.BytesIO()
        with wave.open(buf, "wb") as wf:
            wf.setnchannels(2)
            wf.setsampwidth(2)
            wf.setframerate(16000)
            wf.writeframes(interleaved.tobytes())

        buffer = load_wav_from_bytes(buf.getvalue())

        assert len(buffer) == 100
        np.testing.assert_allclose(buffer.samples, 1000 / 32768.0)

    def test_rejects_8bit(self) -> None:
        """Only 16-bit PCM is supported."""
        buf = io.BytesIO()
        with wave.open(buf, "wb") as wf:
            wf.setnchannels(1)
            wf.setsampwidth(1)
            wf.setframerate(8000)
            wf.writeframes(bytes(100))

        with pytest.raises(AudioDecodeError, match="sample width"):
            load_wav_from_bytes(buf.getvalue())

    def test_garbage(self) -> None:
        """Malformed WAV raises AudioDecodeError."""
        with pytest.raises(AudioDecodeError):
            load_wav_from_bytes(b"RIFF\x00\x00\x00\x00WAVEjunk")


class TestDecodeReferenceAudio:
    """Tests for TTS payload decoding."""

    def test_raw_pcm(self) -> None:
        """Plain base64 is raw PCM at the TTS rate."""
        audio_int16, pcm = make_pcm()

        buffer = decode_reference_audio(base64.b64encode(pcm).decode("ascii"))

        assert buffer.sample_rate == 24000
        assert len(buffer) == len(audio_int16)

    def test_raw_pcm_custom_rate(self) -> None:
        """PCM rate can be overridden."""
        _, pcm = make_pcm()

        buffer = decode_reference_audio(base64.b64encode(pcm).decode("ascii"), pcm_sample_rate=16000)

        assert buffer.sample_rate == 16000

    def test_data_uri(self) -> None:
        """Data URIs carry a complete audio file."""
        audio_int16, pcm = make_pcm()
        wav_b64 = base64.b64encode(pcm16_to_wav_bytes(pcm, sample_rate=22050)).decode("ascii")

        buffer = decode_reference_audio(f"data:audio/wav;base64,{wav_b64}")

        assert buffer.sample_rate == 22050
        np.testing.assert_allclose(buffer.samples, audio_int16 / 32768.0)

    def test_line_wrapped_base64(self) -> None:
        """Whitespace and line breaks in the payload are ignored."""
        audio_int16, pcm = make_pcm()
        wrapped = base64.encodebytes(pcm).decode("ascii")

        buffer = decode_reference_audio(wrapped)

        assert "\n" in wrapped
        assert len(buffer) == len(audio_int16)

    def test_invalid_base64(self) -> None:
        """Non-base64 payloads raise AudioDecodeError."""
        with pytest.raises(AudioDecodeError, match="base64"):
            decode_reference_audio("not base64 at all!")


class TestDecodeAudioBytes:
    """Tests for container sniffing."""

    def test_wav_uses_wave_module(self) -> None:
        """WAV bytes decode without librosa."""
        _, pcm = make_pcm()

        buffer = decode_audio_bytes(pcm16_to_wav_bytes(pcm))

        assert buffer.sample_rate == TTS_PCM_SR


# Skip librosa-dependent tests if not available
try:
    import librosa
    HAS_LIBROSA = True
except ImportError:
    HAS_LIBROSA = False


@pytest.mark.skipif(not HAS_LIBROSA, reason="librosa not installed")
class TestLoadAudio:
    """Tests for file loading through librosa."""

    def test_native_rate(self, tmp_path, make_tone, write_wav) -> None:
        """Native sample rate is kept by default."""
        path = write_wav(tmp_path / "tone.wav", make_tone((220, 0.5), sr=22050))

        buffer = load_audio(path)

        assert buffer.sample_rate == 22050
        assert len(buffer) == 11025

    def test_resample(self, tmp_path, make_tone, write_wav) -> None:
        """target_sr resamples."""
        path = write_wav(tmp_path / "tone.wav", make_tone((220, 0.5), sr=24000))

        buffer = load_audio(path, target_sr=16000)

        assert buffer.sample_rate == 16000
        assert abs(len(buffer) - 8000) <= 1

    def test_missing_file(self, tmp_path) -> None:
        """Missing files raise AudioDecodeError."""
        with pytest.raises(AudioDecodeError):
            load_audio(tmp_path / "missing.wav")
