"""Streaming spectrum pipeline."""

from voice_spectrum.pipeline.streaming_loop import StreamingConfig, StreamingSpectrumPipeline

__all__ = ["StreamingConfig", "StreamingSpectrumPipeline"]
