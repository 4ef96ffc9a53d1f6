"""Audio capture, configuration and buffering."""

from voice_spectrum.audio.collector import AudioCollector, iter_blocks, load_wav
from voice_spectrum.audio.config import AnalysisConfig, AudioConfig
from voice_spectrum.audio.ring_buffer import RingBuffer

__all__ = [
    "AnalysisConfig",
    "AudioCollector",
    "AudioConfig",
    "RingBuffer",
    "iter_blocks",
    "load_wav",
]
