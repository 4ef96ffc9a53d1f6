"""Streaming loop: audio chunks -> ring buffer -> spectrum analyzer -> display.

Audio callbacks deliver blocks of whatever size the device chooses; the
ring keeps the latest fft_size frames per channel and the analyzer runs
once every hop_size new frames.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterator, List, Optional

import numpy as np

from voice_spectrum.audio import AudioCollector, RingBuffer
from voice_spectrum.audio.config import AnalysisConfig, AudioConfig
from voice_spectrum.errors import InvalidConfiguration, InvalidInput
from voice_spectrum.spectrum import SpectrumAnalyzer

logger = logging.getLogger(__name__)


@dataclass
class StreamingConfig:
    """Streaming spectrum pipeline parameters."""

    sample_rate: int = 44_100
    channels: int = 1
    # New frames between analyzer updates (None = fft_size)
    hop_size: Optional[int] = None

    def hop_samples(self, fft_size: int) -> int:
        hop = fft_size if self.hop_size is None else self.hop_size
        if hop < 1:
            raise InvalidConfiguration(f"hop_size must be >= 1, got {hop}")
        return hop


# Receives (channels, band_count) amplitudes for each update
FrameCallback = Callable[[np.ndarray], None]


class StreamingSpectrumPipeline:
    """Runs the analyzer over a live or recorded audio stream.

    Interface:
      pipeline = StreamingSpectrumPipeline(
          config=StreamingConfig(sample_rate=44_100),
          analyzer=SpectrumAnalyzer(AnalysisConfig()),
          on_frame=draw_bars,
      )
      pipeline.run()  # blocks; use stop() from another thread or pass audio_iterator
    """

    def __init__(
        self,
        config: Optional[StreamingConfig] = None,
        analyzer: Optional[SpectrumAnalyzer] = None,
        on_frame: Optional[FrameCallback] = None,
        audio_collector: Optional[AudioCollector] = None,
    ):
        self.streaming_config = config or StreamingConfig()
        self.analyzer = analyzer or SpectrumAnalyzer(AnalysisConfig())
        self.on_frame = on_frame or (lambda bars: None)
        self.audio_collector = audio_collector or AudioCollector(
            AudioConfig(
                sample_rate=self.streaming_config.sample_rate,
                channels=self.streaming_config.channels,
                block_size=self.analyzer.config.fft_size,
            )
        )

        self._ring: Optional[RingBuffer] = None
        self._pending = 0
        self._stopped = False

    def stop(self) -> None:
        """Signal the run loop to exit (checked each iteration)."""
        self._stopped = True

    def _ensure_ring(self) -> RingBuffer:
        if self._ring is None:
            self._ring = RingBuffer(
                size=self.analyzer.config.fft_size,
                channels=self.streaming_config.channels,
                dtype=np.float32,
            )
        return self._ring

    def _process_chunk(self, chunk: np.ndarray) -> List[np.ndarray]:
        """Push one chunk; return the amplitudes of every update it completes.

        The chunk is fed to the ring in slices so that an update happens
        exactly every hop frames, however large the chunk is. Leftover
        frames carry over to the next chunk.
        """
        chunk = np.asarray(chunk, dtype=np.float32)
        if chunk.ndim == 1:
            chunk = chunk[:, np.newaxis]
        channels = self.streaming_config.channels
        if chunk.ndim != 2 or chunk.shape[1] != channels:
            logger.warning(
                "Skipping audio chunk: expected (frames, %d), got shape %s",
                channels,
                chunk.shape,
            )
            return []

        ring = self._ensure_ring()
        hop = self.streaming_config.hop_samples(self.analyzer.config.fft_size)
        frames: List[np.ndarray] = []
        offset = 0
        total = chunk.shape[0]
        while offset < total:
            was_full = ring.is_full
            if was_full:
                take = min(total - offset, hop - self._pending)
            else:
                take = min(total - offset, ring.size - ring.count)
            ring.push(chunk[offset : offset + take])
            offset += take
            if was_full:
                self._pending += take
            elif ring.is_full:
                # first complete window is analyzed straight away
                self._pending = hop
            if ring.is_full and self._pending >= hop:
                self._pending -= hop
                bars = self._analyze(ring)
                if bars is not None:
                    frames.append(bars)
        return frames

    def _analyze(self, ring: RingBuffer) -> Optional[np.ndarray]:
        try:
            return self.analyzer.analyze(ring.get_all(), self.streaming_config.sample_rate)
        except InvalidInput as e:
            logger.warning("Skipping audio buffer: %s", e)
            return None

    def run(
        self,
        audio_iterator: Optional[Iterator[np.ndarray]] = None,
        device: Optional[int] = None,
    ) -> None:
        """Run the streaming loop until stopped or iterator exhausted.

        Args:
            audio_iterator: Source of (frames, channels) chunks. If None, use
                the microphone via audio_collector.record_stream().
            device: Input device index for live audio (ignored if
                audio_iterator is provided).
        """
        self._stopped = False
        if audio_iterator is None:
            audio_iterator = self.audio_collector.record_stream(device=device)
        for chunk in audio_iterator:
            if self._stopped:
                break
            for bars in self._process_chunk(chunk):
                self.on_frame(bars)

    def run_for_n_updates(
        self,
        n: int,
        audio_iterator: Iterator[np.ndarray],
    ) -> list[np.ndarray]:
        """Run for exactly n analyzer updates; used for tests. Returns the frames."""
        self._stopped = False
        frames: list[np.ndarray] = []
        for chunk in audio_iterator:
            if len(frames) >= n:
                break
            for bars in self._process_chunk(chunk)[: n - len(frames)]:
                frames.append(bars)
                self.on_frame(bars)
        return frames

    def reset(self) -> None:
        """Clear buffered audio and analyzer history."""
        if self._ring is not None:
            self._ring.clear()
        self._pending = 0
        self.analyzer.reset()
