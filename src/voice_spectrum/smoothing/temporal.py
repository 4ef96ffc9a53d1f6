"""Frame-to-frame exponential smoothing of band amplitudes."""

import logging
from typing import Optional

import numpy as np

logger = logging.getLogger(__name__)


class TemporalSmoother:
    """Blend each frame's bands into a per-channel history.

    history = history * smoothing + new * (1 - smoothing)

    The history is allocated lazily on the first frame (all zeros, one row
    per channel) and updated in place afterwards. A frame with a different
    channel count starts a fresh zeroed history.

    Interface:
      smoother = TemporalSmoother(band_count=60, smoothing=0.5)
      history = smoother.update(spatial)   # spatial: (channels, band_count)
      smoother.reset()                     # back to uninitialized
    """

    def __init__(self, band_count: int, smoothing: float):
        """
        Args:
            band_count: Bands per channel.
            smoothing: Fraction of the previous value retained, in [0, 1].
        """
        self.band_count = band_count
        self.smoothing = smoothing
        self._history: Optional[np.ndarray] = None

    @property
    def history(self) -> Optional[np.ndarray]:
        """Current history (channels, band_count), or None before the first frame."""
        return self._history

    @property
    def is_initialized(self) -> bool:
        return self._history is not None

    def _ensure_history(self, channels: int) -> np.ndarray:
        if self._history is None or self._history.shape[0] != channels:
            logger.debug("Initializing band history for %d channel(s)", channels)
            self._history = np.zeros((channels, self.band_count), dtype=np.float64)
        return self._history

    def update(self, spatial: np.ndarray) -> np.ndarray:
        """Blend new band values into the history and return it."""
        history = self._ensure_history(spatial.shape[0])
        history *= self.smoothing
        history += spatial * (1.0 - self.smoothing)
        return history

    def reset(self) -> None:
        """Drop the history; the next frame starts from zeros."""
        self._history = None
