"""
Intonation Grader - pitch contour comparison for pronunciation practice.

This library extracts pitch contours from a learner's recording and from a
reference utterance and time-aligns them so they can be compared frame by
frame despite different speaking rates.

Modules:
    types: Sample buffers, alignment results and errors
    config: Pipeline configuration
    vad: Framing and energy-based voice activity detection
    pitch: AMDF pitch extraction
    contour: Silence trimming and normalization
    align: DTW and baseline aligners
    analyzer: End-to-end reference/attempt comparison
"""

from .align import Aligner, DTWAligner, DTWAlignerConfig, PaddedAligner
from .analyzer import ContourAnalyzer, fallback_comparison
from .config import AnalyzerConfig, PitchConfig, Settings, load_config
from .contour import normalize_contour, to_points, trim_contour
from .data import decode_audio_bytes, decode_reference_audio, load_audio
from .models import ContourComparison, ContourPoint
from .pitch import estimate_f0, extract_pitch_contour
from .types import AlignmentResult, AudioDecodeError, InvalidInputError, SampleBuffer
from .vad import frame_energy, is_voiced

__version__ = "0.1.0"

__all__ = [
    # Types
    "AlignmentResult",
    "AudioDecodeError",
    "InvalidInputError",
    "SampleBuffer",
    "ContourComparison",
    "ContourPoint",
    # Config
    "AnalyzerConfig",
    "PitchConfig",
    "Settings",
    "load_config",
    # Data
    "decode_audio_bytes",
    "decode_reference_audio",
    "load_audio",
    # VAD
    "frame_energy",
    "is_voiced",
    # Pitch
    "estimate_f0",
    "extract_pitch_contour",
    # Contour
    "normalize_contour",
    "to_points",
    "trim_contour",
    # Align
    "Aligner",
    "DTWAligner",
    "DTWAlignerConfig",
    "PaddedAligner",
    # Analyzer
    "ContourAnalyzer",
    "fallback_comparison",
]
