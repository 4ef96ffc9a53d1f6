"""A-weighting curve sampled at FFT bin frequencies."""

import logging
from typing import Optional

import numpy as np

logger = logging.getLogger(__name__)

# Standard A-weighting pole frequencies, squared
C1 = 12194.217 ** 2
C2 = 20.598997 ** 2
C3 = 107.65265 ** 2
C4 = 737.86223 ** 2

# +2 dB so that the curve is unity at 1 kHz
A_WEIGHT_GAIN = 1.2589


def a_weighting(frequencies: np.ndarray) -> np.ndarray:
    """Linear A-weighting gain for each frequency in Hz (0 Hz -> 0)."""
    f2 = np.square(np.asarray(frequencies, dtype=np.float64))
    numerator = C1 * f2 * f2
    denominator = (f2 + C2) * np.sqrt((f2 + C3) * (f2 + C4)) * (f2 + C1)
    return A_WEIGHT_GAIN * numerator / denominator


def amplitude_weights(fft_size: int, sample_rate: float) -> np.ndarray:
    """Weights for the fft_size/2 bins of a transform at sample_rate."""
    bin_width = sample_rate / fft_size
    return a_weighting(np.arange(fft_size // 2) * bin_width)


class PerceptualWeighter:
    """Multiplies bin magnitudes by cached A-weighting gains.

    Weights follow the sample rate the bin frequencies are computed from
    and are rebuilt when it changes; with a fixed reference rate only one
    table is ever built.
    """

    def __init__(self, fft_size: int, reference_rate=None):
        self.fft_size = fft_size
        self.reference_rate = reference_rate
        # Only the table for the most recent rate is kept
        self._rate: Optional[float] = None
        self._weights: Optional[np.ndarray] = None
        if reference_rate is not None:
            self.weights_for(reference_rate)

    def weights_for(self, sample_rate: float) -> np.ndarray:
        rate = float(self.reference_rate if self.reference_rate is not None else sample_rate)
        if self._weights is None or rate != self._rate:
            logger.debug("Computing A-weighting for %d bins at %.1f Hz", self.fft_size // 2, rate)
            weights = amplitude_weights(self.fft_size, rate)
            weights.flags.writeable = False
            self._rate, self._weights = rate, weights
        return self._weights

    def apply(self, magnitudes: np.ndarray, sample_rate: float) -> np.ndarray:
        """Weight magnitudes in place and return them."""
        magnitudes *= self.weights_for(sample_rate)
        return magnitudes
