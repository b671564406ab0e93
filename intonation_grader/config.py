"""Configuration loading for intonation-grader."""

from typing import Literal, Optional

from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings


class PitchConfig(BaseModel):
    """Framing, voicing and pitch-search parameters.

    Durations are in milliseconds and converted to samples per buffer,
    since the reference and the attempt may use different sample rates.
    """

    model_config = {"frozen": True}

    hop_ms: float = Field(default=20.0, gt=0)
    window_ms: float = Field(default=40.0, gt=0)
    fmin: float = Field(default=75.0, gt=0)
    fmax: float = Field(default=600.0, gt=0)
    stride: int = Field(default=4, ge=1)  # sub-sampling for energy and AMDF
    energy_threshold: float = Field(default=0.01, ge=0)
    normalized_floor: float = 10.0
    normalized_ceiling: float = 90.0

    @model_validator(mode="after")
    def check_ranges(self) -> "PitchConfig":
        if self.fmin >= self.fmax:
            raise ValueError(f"fmin ({self.fmin}) must be below fmax ({self.fmax})")
        # Tail frames only have the window itself to search, so one full
        # period of the lowest frequency has to fit inside it.
        if self.window_ms <= 1000.0 / self.fmin:
            raise ValueError(
                f"window_ms ({self.window_ms}) must exceed one period of fmin "
                f"({1000.0 / self.fmin:.1f} ms)"
            )
        if not 0 < self.normalized_floor < self.normalized_ceiling <= 100:
            raise ValueError("normalized range must satisfy 0 < floor < ceiling <= 100")
        return self

    def hop_length(self, sr: int) -> int:
        return max(1, int(sr * self.hop_ms / 1000))

    def window_length(self, sr: int) -> int:
        return max(1, int(sr * self.window_ms / 1000))

    def min_lag(self, sr: int) -> int:
        return max(1, int(sr / self.fmax))

    def max_lag(self, sr: int) -> int:
        return min(int(sr / self.fmin), self.window_length(sr) - 1)


class AnalyzerConfig(BaseModel):
    """Configuration for the contour analyzer."""

    pitch: PitchConfig = Field(default_factory=PitchConfig)
    aligner: Literal["dtw", "padded"] = "dtw"
    band_fraction: Optional[float] = Field(default=None, gt=0, le=1)
    parallel: bool = False
    fallback_points: int = Field(default=50, ge=1)


class Settings(BaseSettings):
    """Application settings, read from the environment and `.env`."""

    analyzer: AnalyzerConfig = Field(default_factory=AnalyzerConfig)
    log_level: str = "INFO"

    model_config = {
        "env_prefix": "INTONATION_",
        "env_file": ".env",
        "env_nested_delimiter": "__",
    }


def load_config() -> Settings:
    """Load configuration from environment."""
    return Settings()
