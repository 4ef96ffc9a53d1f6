"""Log-spaced band table and bin-to-band reduction."""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BandTable:
    """Geometrically spaced (lower, upper) frequency bounds in Hz."""

    bounds: Tuple[Tuple[float, float], ...]

    @classmethod
    def geometric(cls, start_frequency: float, end_frequency: float, band_count: int) -> "BandTable":
        """Split [start, end] into band_count bands with a constant ratio.

        Band i starts at start * ratio**i; the last upper bound is pinned to
        end_frequency so rounding never shortens the table.
        """
        ratio = (end_frequency / start_frequency) ** (1.0 / band_count)
        lowers = [start_frequency * ratio ** i for i in range(band_count)]
        uppers = lowers[1:] + [end_frequency]
        return cls(tuple(zip(lowers, uppers)))

    def __len__(self) -> int:
        return len(self.bounds)

    @property
    def lower_frequencies(self) -> np.ndarray:
        return np.array([lo for lo, _ in self.bounds])

    @property
    def upper_frequencies(self) -> np.ndarray:
        return np.array([hi for _, hi in self.bounds])


def band_bin_ranges(table: BandTable, fft_size: int, sample_rate: float) -> np.ndarray:
    """Inclusive (start, end) bin index per band, shape (band_count, 2).

    Indices are round(f / bin_width) clamped to [0, fft_size/2 - 1]; a band
    whose end rounds below its start collapses to the start bin.
    """
    bin_width = sample_rate / fft_size
    last_bin = fft_size // 2 - 1
    starts = np.clip(np.round(table.lower_frequencies / bin_width), 0, last_bin).astype(np.intp)
    ends = np.clip(np.round(table.upper_frequencies / bin_width), 0, last_bin).astype(np.intp)
    ends = np.maximum(ends, starts)
    return np.stack([starts, ends], axis=1)


class BandMapper:
    """Reduces weighted bin magnitudes to one scaled peak per band."""

    def __init__(self, table: BandTable, fft_size: int, display_gain: float):
        self.table = table
        self.fft_size = fft_size
        self.display_gain = display_gain
        self._rate: Optional[float] = None
        self._ranges: Optional[np.ndarray] = None

    def bin_ranges(self, sample_rate: float) -> np.ndarray:
        """Bin ranges for sample_rate, rebuilt only when the rate changes."""
        rate = float(sample_rate)
        if self._ranges is None or rate != self._rate:
            logger.debug("Mapping %d bands onto bins at %.1f Hz", len(self.table), rate)
            ranges = band_bin_ranges(self.table, self.fft_size, rate)
            ranges.flags.writeable = False
            self._rate, self._ranges = rate, ranges
        return self._ranges

    def map(self, magnitudes: np.ndarray, sample_rate: float, out: np.ndarray) -> np.ndarray:
        """Write max(magnitudes[start..end]) * display_gain for each band into out."""
        for i, (start, end) in enumerate(self.bin_ranges(sample_rate)):
            out[i] = magnitudes[start : end + 1].max()
        out *= self.display_gain
        return out
