"""Unit tests for the Hann window, real FFT implementations and bin magnitudes."""

from __future__ import annotations

import unittest

import numpy as np

from voice_spectrum.errors import InvalidConfiguration
from voice_spectrum.spectrum.transform import PackedRealFFT, ReferenceDFT, SpectrumTransformer
from voice_spectrum.spectrum.window import Windower


def _bin_sine(size: int, k: int, amplitude: float = 1.0) -> np.ndarray:
    """Sine that completes exactly k periods in `size` samples."""
    n = np.arange(size)
    return amplitude * np.sin(2 * np.pi * k * n / size)


class TestWindower(unittest.TestCase):
    """Tests for Windower."""

    def test_periodic_hann_shape(self) -> None:
        """Window is zero at the start and peaks at 1 in the middle."""
        w = Windower(16).window
        self.assertEqual(w.shape, (16,))
        self.assertAlmostEqual(w[0], 0.0)
        self.assertAlmostEqual(w[8], 1.0)
        np.testing.assert_allclose(w[1:8], w[15:8:-1])

    def test_apply_into_out(self) -> None:
        """apply() writes into the supplied buffer."""
        windower = Windower(8)
        out = np.empty(8)
        result = windower.apply(np.ones(8), out=out)
        self.assertIs(result, out)
        np.testing.assert_allclose(out, windower.window)


class TestRealFFT(unittest.TestCase):
    """PackedRealFFT against the direct DFT and numpy's rfft."""

    def test_packed_matches_reference(self) -> None:
        """Both transforms agree on random input for several sizes."""
        rng = np.random.default_rng(7)
        for size in (4, 8, 64, 1024):
            with self.subTest(size=size):
                x = rng.uniform(-1, 1, size)
                re_fast, im_fast = PackedRealFFT(size).forward(x)
                re_ref, im_ref = ReferenceDFT(size).forward(x)
                np.testing.assert_allclose(re_fast, re_ref, atol=1e-9)
                np.testing.assert_allclose(im_fast, im_ref, atol=1e-9)

    def test_packed_layout_matches_rfft(self) -> None:
        """DC and Nyquist share slot 0; other bins are twice the DFT."""
        size = 256
        x = np.random.default_rng(3).normal(size=size)
        realp, imagp = PackedRealFFT(size).forward(x)
        expected = np.fft.rfft(x)
        self.assertAlmostEqual(realp[0], 2 * expected[0].real, places=9)
        self.assertAlmostEqual(imagp[0], 2 * expected[size // 2].real, places=9)
        np.testing.assert_allclose(realp[1:], 2 * expected[1 : size // 2].real, atol=1e-9)
        np.testing.assert_allclose(imagp[1:], 2 * expected[1 : size // 2].imag, atol=1e-9)

    def test_forward_reuses_buffers(self) -> None:
        """Repeated calls write into the same arrays and stay correct."""
        size = 64
        fft = PackedRealFFT(size)
        rng = np.random.default_rng(5)
        first = fft.forward(rng.uniform(-1, 1, size))
        x = rng.uniform(-1, 1, size)
        realp, imagp = fft.forward(x)
        self.assertIs(realp, first[0])
        self.assertIs(imagp, first[1])
        re_ref, im_ref = ReferenceDFT(size).forward(x)
        np.testing.assert_allclose(realp, re_ref, atol=1e-9)
        np.testing.assert_allclose(imagp, im_ref, atol=1e-9)


class TestSpectrumTransformer(unittest.TestCase):
    """Tests for SpectrumTransformer magnitudes."""

    def test_silence(self) -> None:
        """All-zero input gives all-zero magnitudes."""
        mags = SpectrumTransformer(64).magnitudes(np.zeros(64))
        self.assertEqual(mags.shape, (32,))
        self.assertFalse(mags.any())

    def test_dc_is_halved(self) -> None:
        """A constant signal reports its own level in bin 0."""
        mags = SpectrumTransformer(64).magnitudes(np.full(64, 0.25))
        self.assertAlmostEqual(mags[0], 0.25)
        np.testing.assert_allclose(mags[1:], 0.0, atol=1e-12)

    def test_sine_amplitude(self) -> None:
        """An unwindowed bin-centred sine reports its amplitude in that bin."""
        mags = SpectrumTransformer(128).magnitudes(_bin_sine(128, 9, amplitude=0.6))
        self.assertAlmostEqual(mags[9], 0.6)
        self.assertEqual(int(np.argmax(mags)), 9)

    def test_nyquist_not_counted(self) -> None:
        """Energy at Nyquist does not leak into bin 0."""
        alternating = np.where(np.arange(32) % 2 == 0, 1.0, -1.0)
        mags = SpectrumTransformer(32).magnitudes(alternating)
        np.testing.assert_allclose(mags, 0.0, atol=1e-12)

    def test_reference_transform(self) -> None:
        """ReferenceDFT can be swapped in with identical results."""
        x = np.random.default_rng(11).uniform(-1, 1, 64)
        fast = SpectrumTransformer(64).magnitudes(x).copy()
        slow = SpectrumTransformer(64, ReferenceDFT(64)).magnitudes(x)
        np.testing.assert_allclose(fast, slow, atol=1e-12)

    def test_transform_size_mismatch(self) -> None:
        """The transform must match the transformer's size."""
        with self.assertRaises(InvalidConfiguration):
            SpectrumTransformer(64, PackedRealFFT(32))


if __name__ == "__main__":
    unittest.main()
