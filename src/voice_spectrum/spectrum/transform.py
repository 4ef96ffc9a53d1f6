"""Real forward FFT and bin magnitudes.

Transforms return the packed split layout used by real-input FFT
libraries: two arrays (realp, imagp) of length N/2 where

  realp[0]            = 2 * X[0]      (DC, purely real)
  imagp[0]            = 2 * X[N/2]    (Nyquist, purely real)
  realp[k], imagp[k]  = 2 * X[k]      for 0 < k < N/2

X being the plain DFT of the N real samples. The factor of two is the
packed transform's native scale; SpectrumTransformer normalizes it away.
"""

from __future__ import annotations

from typing import Optional, Protocol, Tuple

import numpy as np

from voice_spectrum.errors import InvalidConfiguration


class RealTransform(Protocol):
    """Capability: compute the real forward FFT of length `size`."""

    size: int

    def forward(self, samples: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        ...


class PackedRealFFT:
    """Real FFT via a half-length complex FFT.

    Even samples go into the real part and odd samples into the imaginary
    part of an N/2 complex sequence; one complex FFT of that sequence is
    split back into the even/odd spectra and recombined with precomputed
    twiddles.

    Interface:
      fft = PackedRealFFT(1024)
      realp, imagp = fft.forward(samples)   # views of internal buffers
    """

    def __init__(self, size: int):
        self.size = size
        half = size // 2
        k = np.arange(half)
        self._twiddle = np.exp(-2j * np.pi * k / size)
        # Z[(M - k) % M] for the conjugate-symmetric split
        self._mirror = (-k) % half
        self._packed = np.empty(half, dtype=np.complex128)
        self._realp = np.empty(half, dtype=np.float64)
        self._imagp = np.empty(half, dtype=np.float64)
        self._zc = np.empty(half, dtype=np.complex128)
        self._even = np.empty(half, dtype=np.complex128)
        self._odd = np.empty(half, dtype=np.complex128)
        self._spectrum = np.empty(half, dtype=np.complex128)

    def forward(self, samples: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        packed = self._packed
        packed.real = samples[0::2]
        packed.imag = samples[1::2]
        z = np.fft.fft(packed)

        zc = self._zc
        np.take(z, self._mirror, out=zc)
        np.conjugate(zc, out=zc)
        even = self._even
        np.add(z, zc, out=even)
        even *= 0.5
        odd = self._odd
        np.subtract(z, zc, out=odd)
        odd *= -0.5j
        spectrum = self._spectrum
        np.multiply(self._twiddle, odd, out=spectrum)
        spectrum += even

        np.multiply(spectrum.real, 2.0, out=self._realp)
        np.multiply(spectrum.imag, 2.0, out=self._imagp)
        self._imagp[0] = 2.0 * (even[0].real - odd[0].real)
        return self._realp, self._imagp


class ReferenceDFT:
    """Direct O(N^2) real DFT in the same packed layout, for correctness checks."""

    def __init__(self, size: int):
        self.size = size
        half = size // 2
        angles = 2.0 * np.pi * np.outer(np.arange(half), np.arange(size)) / size
        self._cos = np.cos(angles)
        self._sin = np.sin(angles)
        self._alternating = np.where(np.arange(size) % 2 == 0, 1.0, -1.0)

    def forward(self, samples: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        x = np.asarray(samples, dtype=np.float64)
        realp = 2.0 * (self._cos @ x)
        imagp = -2.0 * (self._sin @ x)
        imagp[0] = 2.0 * float(self._alternating @ x)
        return realp, imagp


class SpectrumTransformer:
    """Windowed samples -> N/2 non-negative bin magnitudes (0 Hz .. Nyquist)."""

    def __init__(self, size: int, transform: Optional[RealTransform] = None):
        self.size = size
        self.transform = transform or PackedRealFFT(size)
        if self.transform.size != size:
            raise InvalidConfiguration(
                f"Transform size {self.transform.size} does not match {size}"
            )
        self._scale = 1.0 / size
        self._magnitudes = np.zeros(size // 2, dtype=np.float64)

    def magnitudes(self, windowed: np.ndarray) -> np.ndarray:
        """Return bin magnitudes in a reused buffer; copy to keep them."""
        realp, imagp = self.transform.forward(windowed)
        # Slot 0 carries Nyquist, not an imaginary DC term
        imagp[0] = 0.0
        mags = self._magnitudes
        np.hypot(realp, imagp, out=mags)
        mags *= self._scale
        mags[0] *= 0.5
        return mags
