"""
Unit Tests for Interleaved Buffer Helpers

Run:
    pytest tests/test_spectral.py -v
"""

import numpy as np
import pytest

from webfft import FFTEngine, BufferSizeError, EngineClosedError
from webfft.spectral import (
    autocorrelation,
    complex_exp,
    dot,
    expand,
    gaussian,
    im,
    inverse_reim,
    magnitude,
    normalize,
    re,
    sqr_magnitude,
    sqr_magnitude_reim,
    transform_real,
)


class TestBufferHelpers:
    """Element-wise helpers."""

    def test_expand(self):
        assert expand([1, 2, 3]).tolist() == [1, 0, 2, 0, 3, 0]
        assert expand([1, 2]).dtype == np.float32

    def test_expand_into_out(self):
        out = np.full(4, 9, dtype=np.float32)
        assert expand([5, 6], out) is out
        assert out.tolist() == [5, 0, 6, 0]

    def test_re_im(self):
        buf = np.array([1, 2, 3, 4], dtype=np.float32)
        assert re(buf).tolist() == [1, 3]
        assert im(buf).tolist() == [2, 4]

    def test_odd_length_rejected(self):
        with pytest.raises(BufferSizeError):
            re(np.zeros(3, dtype=np.float32))

    def test_magnitude(self):
        buf = [3, 4, 0, -2]
        assert magnitude(buf).tolist() == [5, 2]
        assert sqr_magnitude(buf).tolist() == [25, 4]
        assert sqr_magnitude_reim(buf).tolist() == [25, 0, 4, 0]

    def test_dot(self):
        # (1+2j)(3+4j) = -5+10j, (0+1j)(0+1j) = -1
        a = [1, 2, 0, 1]
        b = [3, 4, 0, 1]
        assert dot(a, b).tolist() == [-5, 10, -1, 0]

    def test_dot_in_place(self):
        a = np.array([1, 2], dtype=np.float32)
        dot(a, [3, 4], out=a)
        assert a.tolist() == [-5, 10]

    def test_dot_length_mismatch(self):
        with pytest.raises(BufferSizeError):
            dot([1, 2], [1, 2, 3, 4])

    def test_normalize(self):
        buf = np.full(8, 2, dtype=np.float32)
        normalize(buf)
        np.testing.assert_allclose(buf, np.ones(8))

    def test_normalize_rejects_non_array(self):
        with pytest.raises(BufferSizeError):
            normalize([2.0, 0.0, 2.0, 0.0])

    @pytest.mark.parametrize("length", [0, 3])
    def test_normalize_rejects_bad_length(self, length):
        buf = np.ones(length, dtype=np.float32)
        with pytest.raises(BufferSizeError):
            normalize(buf)
        assert np.all(buf == 1)

    def test_complex_exp(self):
        size, freq, shift = 8, np.pi / 4, 1.5
        k = np.arange(size)
        expected = np.exp(1j * freq * (k - shift))
        buf = complex_exp(size, freq, shift)
        np.testing.assert_allclose(buf[0::2], expected.real, atol=1e-6)
        np.testing.assert_allclose(buf[1::2], expected.imag, atol=1e-6)

    def test_gaussian_is_circular(self):
        g = gaussian(8, sigma=1.0)
        assert g[0] == pytest.approx(1.0)
        assert g[2] == pytest.approx(np.exp(-0.5))
        assert g[14] == pytest.approx(np.exp(-0.5))
        assert not g[1::2].any()


class TestEngineHelpers:
    """Helpers built on an FFTEngine."""

    def test_autocorrelation(self):
        n = 32
        engine = FFTEngine(n)
        rng = np.random.default_rng(0)
        x = rng.standard_normal(2 * n).astype(np.float32)
        z = x[0::2] + 1j * x[1::2]

        # circular autocorrelation, scaled by the unitary 1/sqrt(N)
        expected = np.fft.ifft(np.abs(np.fft.fft(z)) ** 2) / np.sqrt(n)
        acf = autocorrelation(engine, x)
        np.testing.assert_allclose(acf[0::2], expected.real, atol=1e-4)
        np.testing.assert_allclose(acf[1::2], expected.imag, atol=1e-4)

    def test_autocorrelation_peak_at_zero_lag(self):
        engine = FFTEngine(64)
        x = expand(np.sin(np.arange(64) * 0.3))
        acf = re(autocorrelation(engine, x))
        assert np.argmax(acf) == 0

    def test_transform_real_pads(self):
        engine = FFTEngine(4)
        np.testing.assert_allclose(transform_real(engine, [1.0]), [0.5, 0] * 4, atol=1e-7)

    def test_transform_real_truncates(self):
        engine = FFTEngine(4)
        signal = np.arange(6, dtype=np.float32)
        expected = engine.forward(expand(signal[:4]))
        assert np.array_equal(transform_real(engine, signal), expected)

    def test_inverse_reim_round_trip(self):
        engine = FFTEngine(16)
        signal = np.linspace(-1, 1, 16, dtype=np.float32)
        restored = inverse_reim(engine, transform_real(engine, signal))
        np.testing.assert_allclose(re(restored), signal, atol=1e-5)
        np.testing.assert_allclose(im(restored), 0, atol=1e-5)

    def test_inverse_reim_wrong_length(self):
        engine = FFTEngine(8)
        with pytest.raises(BufferSizeError):
            inverse_reim(engine, np.zeros(8, dtype=np.float32))

    @pytest.mark.parametrize("helper", [autocorrelation, transform_real, inverse_reim])
    def test_closed_engine(self, helper):
        with pytest.raises(EngineClosedError):
            helper(FFTEngine(), np.zeros(8, dtype=np.float32))
