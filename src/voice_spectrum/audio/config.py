"""Centralized audio capture and spectrum analysis configuration.

Defaults match the voice-wave display:
- Capture: mono 44.1 kHz, float32, 1024-sample blocks
- FFT: 1024 samples, periodic Hann window
- Bands: 60 log-spaced bars from 100 Hz to 1800 Hz
- Smoothing: [1, 2, 3, 5, 3, 2, 1] across bars, 0.5 across frames
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Tuple

from voice_spectrum.errors import InvalidConfiguration

DEFAULT_SPATIAL_KERNEL: Tuple[float, ...] = (1, 2, 3, 5, 3, 2, 1)

# Sample rate the A-weighting curve was tuned against
REFERENCE_SAMPLE_RATE = 44_100.0


@dataclass(frozen=True)
class AudioConfig:
    """Audio recording configuration."""

    sample_rate: int = 44_100
    channels: int = 1
    dtype: str = "float32"
    block_size: int = 1024


@dataclass(frozen=True)
class AnalysisConfig:
    """Spectrum analyzer parameters (immutable once the analyzer is built)."""

    fft_size: int = 1024
    band_count: int = 60
    start_frequency: float = 100.0
    end_frequency: float = 1800.0
    spatial_kernel: Tuple[float, ...] = DEFAULT_SPATIAL_KERNEL
    # Fraction of the previous frame kept per band
    temporal_smoothing: float = 0.5
    display_gain: float = 50.0
    # None: weight bins using the buffer's own sample rate
    weighting_sample_rate: Optional[float] = REFERENCE_SAMPLE_RATE

    def validate(self) -> None:
        """Raise InvalidConfiguration if the parameters cannot be analysed."""
        n = self.fft_size
        if not isinstance(n, int) or isinstance(n, bool) or n < 4 or n & (n - 1):
            raise InvalidConfiguration(f"fft_size must be a power of two >= 4, got {n!r}")
        if not isinstance(self.band_count, int) or self.band_count <= 0:
            raise InvalidConfiguration(f"band_count must be > 0, got {self.band_count!r}")
        if not (math.isfinite(self.start_frequency) and math.isfinite(self.end_frequency)):
            raise InvalidConfiguration("band frequencies must be finite")
        if self.start_frequency <= 0:
            raise InvalidConfiguration("start_frequency must be > 0")
        if self.start_frequency >= self.end_frequency:
            raise InvalidConfiguration(
                f"start_frequency ({self.start_frequency}) must be below "
                f"end_frequency ({self.end_frequency})"
            )
        if not 0.0 <= self.temporal_smoothing <= 1.0:
            raise InvalidConfiguration("temporal_smoothing must be in [0, 1]")
        if not math.isfinite(self.display_gain) or self.display_gain < 0:
            raise InvalidConfiguration("display_gain must be finite and >= 0")

        kernel = self.spatial_kernel
        if len(kernel) == 0 or len(kernel) % 2 == 0:
            raise InvalidConfiguration("spatial_kernel must have odd length")
        if any(w < 0 or not math.isfinite(w) for w in kernel):
            raise InvalidConfiguration("spatial_kernel weights must be finite and >= 0")
        if sum(kernel) <= 0:
            raise InvalidConfiguration("spatial_kernel weights must sum to > 0")

        rate = self.weighting_sample_rate
        if rate is not None and (not math.isfinite(rate) or rate <= 0):
            raise InvalidConfiguration("weighting_sample_rate must be > 0 or None")
