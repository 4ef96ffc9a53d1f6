"""Multi-channel ring buffer for re-framing streaming audio into FFT windows."""

import numpy as np


class RingBuffer:
    """Fixed-size ring of the most recent samples for each channel.

    Data is stored channel-major, shape (channels, size), which is the
    layout the spectrum analyzer consumes.
    """

    def __init__(self, size: int, channels: int = 1, dtype: type = np.float32):
        if size < 1 or channels < 1:
            raise ValueError("size and channels must be >= 1")
        self.size = size
        self.channels = channels
        self.dtype = dtype
        self._data = np.zeros((channels, size), dtype=dtype)
        self._write_idx = 0
        self._count = 0

    @property
    def count(self) -> int:
        """Number of valid samples per channel."""
        return self._count

    @property
    def is_full(self) -> bool:
        return self._count == self.size

    def push(self, chunk: np.ndarray) -> None:
        """Append frames; older data is overwritten.

        Args:
            chunk: Samples shaped (frames, channels) as delivered by audio
                callbacks, or (frames,) for a single channel.
        """
        chunk = np.asarray(chunk)
        if chunk.ndim == 1:
            chunk = chunk[:, np.newaxis]
        if chunk.shape[1] != self.channels:
            raise ValueError(
                f"Expected {self.channels} channel(s), got {chunk.shape[1]}"
            )
        frames = chunk.T.astype(self.dtype, copy=False)
        n = frames.shape[1]
        if n >= self.size:
            self._data[:] = frames[:, -self.size :]
            self._write_idx = 0
            self._count = self.size
            return
        start = self._write_idx
        end = start + n
        if end <= self.size:
            self._data[:, start:end] = frames
        else:
            head = self.size - start
            self._data[:, start:] = frames[:, :head]
            self._data[:, : end - self.size] = frames[:, head:]
        self._write_idx = end % self.size
        self._count = min(self._count + n, self.size)

    def get_all(self) -> np.ndarray:
        """Return buffered samples in chronological order, shape (channels, count)."""
        if self._count == 0:
            return np.zeros((self.channels, 0), dtype=self.dtype)
        if self._count < self.size:
            return self._data[:, : self._count].copy()
        return np.roll(self._data, -self._write_idx, axis=1)

    def clear(self) -> None:
        """Reset buffer."""
        self._write_idx = 0
        self._count = 0
