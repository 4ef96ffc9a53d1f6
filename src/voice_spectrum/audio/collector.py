"""Audio collection for the spectrum display: live capture and WAV loading."""

import logging
import queue
from typing import Iterator, Optional

import numpy as np

try:
    import sounddevice as sd
except ImportError:
    sd = None  # type: ignore

from voice_spectrum.audio.config import AudioConfig

logger = logging.getLogger(__name__)


class AudioCollector:
    """Records float32 PCM blocks shaped (frames, channels)."""

    def __init__(self, config: Optional[AudioConfig] = None):
        self.config = config or AudioConfig()

    def record_stream(
        self,
        block_size: Optional[int] = None,
        device: Optional[int] = None,
    ) -> Iterator[np.ndarray]:
        """Stream audio blocks continuously.

        Args:
            block_size: Frames per yielded block (default: config.block_size).
            device: Input device index (None = default).

        Yields:
            float32 blocks, shape (block_size, channels).
        """
        if sd is None:
            raise ImportError("sounddevice is required for recording. pip install sounddevice")

        blocksize = block_size or self.config.block_size
        q: queue.Queue[np.ndarray] = queue.Queue()

        def callback(indata: np.ndarray, _frames: int, _time: object, status: object) -> None:
            if status:
                logger.warning("Input stream status: %s", status)
            q.put(indata.copy())

        with sd.InputStream(
            samplerate=self.config.sample_rate,
            channels=self.config.channels,
            dtype=self.config.dtype,
            blocksize=blocksize,
            device=device,
            callback=callback,
        ):
            logger.debug(
                "Capturing %d ch at %d Hz, %d-frame blocks",
                self.config.channels,
                self.config.sample_rate,
                blocksize,
            )
            while True:
                yield q.get()


def load_wav(filepath: str) -> tuple[int, np.ndarray]:
    """Read a WAV file as float32 samples.

    Integer PCM is scaled to [-1, 1]; float files are passed through.

    Returns:
        (sample_rate, audio) with audio shaped (frames, channels).
    """
    import scipy.io.wavfile as wavfile

    sample_rate, audio = wavfile.read(filepath)
    if audio.dtype == np.uint8:
        audio = (audio.astype(np.float32) - 128.0) / 128.0
    elif np.issubdtype(audio.dtype, np.integer):
        audio = audio.astype(np.float32) / float(np.iinfo(audio.dtype).max + 1)
    else:
        audio = audio.astype(np.float32)
    if audio.ndim == 1:
        audio = audio[:, np.newaxis]
    return int(sample_rate), audio


def iter_blocks(audio: np.ndarray, block_size: int) -> Iterator[np.ndarray]:
    """Yield consecutive (block_size, channels) blocks; a short tail is dropped."""
    for start in range(0, len(audio) - block_size + 1, block_size):
        yield audio[start : start + block_size]
