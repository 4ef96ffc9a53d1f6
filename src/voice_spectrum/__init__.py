"""Voice spectrum - real-time band amplitudes for an equalizer-style voice wave display."""

from voice_spectrum.audio.config import AnalysisConfig
from voice_spectrum.errors import InvalidConfiguration, InvalidInput, SpectrumError
from voice_spectrum.spectrum import SpectrumAnalyzer

__all__ = [
    "AnalysisConfig",
    "InvalidConfiguration",
    "InvalidInput",
    "SpectrumAnalyzer",
    "SpectrumError",
]
