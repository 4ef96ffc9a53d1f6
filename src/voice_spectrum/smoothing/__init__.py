"""Spatial (across bands) and temporal (across frames) smoothing."""

from voice_spectrum.smoothing.spatial import SpatialSmoother
from voice_spectrum.smoothing.temporal import TemporalSmoother

__all__ = ["SpatialSmoother", "TemporalSmoother"]
