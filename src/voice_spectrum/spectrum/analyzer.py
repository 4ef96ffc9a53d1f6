"""Spectrum analyzer: PCM buffer -> smoothed, A-weighted band amplitudes.

Per channel: Hann window -> real FFT magnitudes -> A-weighting ->
log-band peaks x display gain -> spatial kernel. Channels are then
blended into the running history, which is the call's output.
"""

from __future__ import annotations

import logging
import math
from typing import Optional

import numpy as np

from voice_spectrum.audio.config import AnalysisConfig
from voice_spectrum.errors import InvalidInput
from voice_spectrum.smoothing import SpatialSmoother, TemporalSmoother
from voice_spectrum.spectrum.bands import BandMapper, BandTable
from voice_spectrum.spectrum.transform import RealTransform, SpectrumTransformer
from voice_spectrum.spectrum.weighting import PerceptualWeighter
from voice_spectrum.spectrum.window import Windower

logger = logging.getLogger(__name__)


class SpectrumAnalyzer:
    """Turns fixed-size audio buffers into per-channel bar amplitudes.

    Not thread-safe: history and scratch buffers are reused across calls,
    so feed one instance from a single thread (or use one per stream).

    Interface:
      analyzer = SpectrumAnalyzer(AnalysisConfig(fft_size=1024, band_count=60))
      bars = analyzer.analyze(samples, sample_rate=44_100)
      # samples: (channels, 1024) or (1024,); bars: (channels, 60)
      analyzer.reset()   # forget history
    """

    def __init__(
        self,
        config: Optional[AnalysisConfig] = None,
        transform: Optional[RealTransform] = None,
    ):
        """
        Args:
            config: Analysis parameters (validated here).
            transform: Real FFT implementation; defaults to PackedRealFFT.

        Raises:
            InvalidConfiguration: If config is unusable.
        """
        self.config = config or AnalysisConfig()
        self.config.validate()
        cfg = self.config

        self.band_table = BandTable.geometric(
            cfg.start_frequency, cfg.end_frequency, cfg.band_count
        )
        self.windower = Windower(cfg.fft_size)
        self.transformer = SpectrumTransformer(cfg.fft_size, transform)
        self.weighter = PerceptualWeighter(cfg.fft_size, cfg.weighting_sample_rate)
        self.band_mapper = BandMapper(self.band_table, cfg.fft_size, cfg.display_gain)
        self.spatial = SpatialSmoother(cfg.spatial_kernel)
        self.temporal = TemporalSmoother(cfg.band_count, cfg.temporal_smoothing)

        self._windowed = np.zeros(cfg.fft_size, dtype=np.float64)
        self._bands = np.zeros(cfg.band_count, dtype=np.float64)
        self._frame: Optional[np.ndarray] = None
        logger.debug(
            "Analyzer ready: fft_size=%d, %d bands %.1f-%.1f Hz",
            cfg.fft_size,
            cfg.band_count,
            cfg.start_frequency,
            cfg.end_frequency,
        )

    @property
    def history(self) -> Optional[np.ndarray]:
        """Smoothed output of the last call, or None before the first call."""
        return self.temporal.history

    def band_bins(self, sample_rate: float) -> np.ndarray:
        """Inclusive FFT bin range per band at sample_rate, shape (band_count, 2)."""
        return self.band_mapper.bin_ranges(self._check_rate(sample_rate))

    def reset(self) -> None:
        """Forget the smoothing history."""
        self.temporal.reset()

    def analyze(self, samples, sample_rate: float) -> np.ndarray:
        """Analyze one buffer.

        Args:
            samples: Array-like of shape (channels, fft_size), or (fft_size,)
                for a single channel, values roughly in [-1, 1].
            sample_rate: Stream sample rate in Hz.

        Returns:
            float64 array (channels, band_count) of non-negative amplitudes.

        Raises:
            InvalidInput: Malformed buffer or sample rate; history unchanged.
        """
        rate = self._check_rate(sample_rate)
        buffer = self._check_samples(samples)

        frame = self._frame_for(buffer.shape[0])
        for channel, row in zip(buffer, frame):
            self._analyze_channel(channel, rate, row)

        return self.temporal.update(frame).copy()

    def _analyze_channel(self, channel: np.ndarray, sample_rate: float, out: np.ndarray) -> None:
        windowed = self.windower.apply(channel, out=self._windowed)
        magnitudes = self.transformer.magnitudes(windowed)
        self.weighter.apply(magnitudes, sample_rate)
        self.band_mapper.map(magnitudes, sample_rate, out=self._bands)
        self.spatial.smooth(self._bands, out=out)

    def _frame_for(self, channels: int) -> np.ndarray:
        if self._frame is None or self._frame.shape[0] != channels:
            self._frame = np.zeros((channels, self.config.band_count), dtype=np.float64)
        return self._frame

    @staticmethod
    def _check_rate(sample_rate: float) -> float:
        try:
            rate = float(sample_rate)
        except (TypeError, ValueError) as e:
            raise InvalidInput(f"sample_rate must be a number, got {sample_rate!r}") from e
        if not math.isfinite(rate) or rate <= 0:
            raise InvalidInput(f"sample_rate must be finite and > 0, got {sample_rate!r}")
        return rate

    def _check_samples(self, samples) -> np.ndarray:
        try:
            buffer = np.asarray(samples, dtype=np.float64)
        except (TypeError, ValueError) as e:
            raise InvalidInput(f"Samples are not numeric: {e}") from e
        if buffer.ndim == 1:
            buffer = buffer[np.newaxis, :]
        if buffer.ndim != 2:
            raise InvalidInput(f"Expected (channels, samples), got shape {buffer.shape}")
        if buffer.shape[0] == 0:
            raise InvalidInput("Buffer has no channels")
        if buffer.shape[1] != self.config.fft_size:
            raise InvalidInput(
                f"Expected {self.config.fft_size} samples per channel, got {buffer.shape[1]}"
            )
        if not np.isfinite(buffer).all():
            raise InvalidInput("Buffer contains non-finite samples")
        return buffer
