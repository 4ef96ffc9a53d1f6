"""Windowing, FFT, weighting and banding stages of the analyzer."""

from voice_spectrum.spectrum.analyzer import SpectrumAnalyzer
from voice_spectrum.spectrum.bands import BandMapper, BandTable, band_bin_ranges
from voice_spectrum.spectrum.transform import (
    PackedRealFFT,
    RealTransform,
    ReferenceDFT,
    SpectrumTransformer,
)
from voice_spectrum.spectrum.weighting import PerceptualWeighter, a_weighting, amplitude_weights
from voice_spectrum.spectrum.window import Windower

__all__ = [
    "BandMapper",
    "BandTable",
    "PackedRealFFT",
    "PerceptualWeighter",
    "RealTransform",
    "ReferenceDFT",
    "SpectrumAnalyzer",
    "SpectrumTransformer",
    "Windower",
    "a_weighting",
    "amplitude_weights",
    "band_bin_ranges",
]
