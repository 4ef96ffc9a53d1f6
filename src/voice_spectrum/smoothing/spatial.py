"""Bar-to-bar smoothing with a fixed weighted kernel."""

from typing import Optional, Sequence

import numpy as np


class SpatialSmoother:
    """Weighted moving average across neighbouring bands.

    The kernel is normalized by its sum. The first and last len(kernel)//2
    bands are copied through untouched: no padding, no wraparound.
    """

    def __init__(self, kernel: Sequence[float]):
        weights = np.asarray(kernel, dtype=np.float64)
        self.kernel = weights / weights.sum()
        self.radius = len(weights) // 2
        # np.convolve flips its second argument
        self._flipped = self.kernel[::-1].copy()

    def smooth(self, bands: np.ndarray, out: Optional[np.ndarray] = None) -> np.ndarray:
        if out is None:
            out = np.empty_like(bands, dtype=np.float64)
        out[:] = bands
        r = self.radius
        if r and len(bands) > 2 * r:
            out[r:-r] = np.convolve(bands, self._flipped, mode="valid")
        return out
