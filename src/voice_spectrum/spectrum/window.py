"""Analysis window applied before the transform."""

from typing import Optional

import numpy as np
from scipy.signal import get_window


class Windower:
    """Periodic Hann window of a fixed length, computed once."""

    def __init__(self, size: int):
        self.size = size
        self.window = get_window("hann", size, fftbins=True).astype(np.float64)

    def apply(self, samples: np.ndarray, out: Optional[np.ndarray] = None) -> np.ndarray:
        """Multiply samples by the window, writing into `out` when given."""
        return np.multiply(samples, self.window, out=out)
