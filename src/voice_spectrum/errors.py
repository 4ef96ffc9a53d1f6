"""Error types raised by the spectrum analyzer."""


class SpectrumError(ValueError):
    """Base class for analyzer errors."""


class InvalidConfiguration(SpectrumError):
    """AnalysisConfig cannot be used to build an analyzer."""


class InvalidInput(SpectrumError):
    """An audio buffer was rejected; analyzer state is left untouched."""
