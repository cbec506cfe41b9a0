"""
Helpers for interleaved complex buffers.

Buffers follow the engine layout ``[re0, im0, re1, im1, ...]`` (float32).
Functions return a new array unless ``out`` is given.
"""

import numpy as np
from typing import Optional

from .engine import FFTEngine
from .errors import BufferSizeError, EngineClosedError


def _interleaved(buf, name: str = 'buf') -> np.ndarray:
    buf = np.asarray(buf, dtype=np.float32)
    if buf.ndim != 1 or buf.shape[0] % 2:
        raise BufferSizeError(f"{name} must be 1-D with an even length, got shape {buf.shape}")
    return buf


def _require_open(engine: FFTEngine, operation: str) -> None:
    if not engine.is_open:
        raise EngineClosedError(operation)


def expand(signal, out: Optional[np.ndarray] = None) -> np.ndarray:
    """Real signal of length N -> interleaved buffer with zero imaginary parts."""
    signal = np.asarray(signal, dtype=np.float32)
    if out is None:
        out = np.empty(2 * signal.shape[0], dtype=np.float32)
    out[0::2] = signal
    out[1::2] = 0
    return out


def re(buf) -> np.ndarray:
    """Real parts."""
    return np.ascontiguousarray(_interleaved(buf)[0::2])


def im(buf) -> np.ndarray:
    """Imaginary parts."""
    return np.ascontiguousarray(_interleaved(buf)[1::2])


def sqr_magnitude(buf) -> np.ndarray:
    """|z|^2 per sample."""
    buf = _interleaved(buf)
    re_, im_ = buf[0::2], buf[1::2]
    return re_ * re_ + im_ * im_


def magnitude(buf) -> np.ndarray:
    """|z| per sample."""
    return np.sqrt(sqr_magnitude(buf))


def sqr_magnitude_reim(buf, out: Optional[np.ndarray] = None) -> np.ndarray:
    """|z|^2 per sample, as an interleaved buffer with zero imaginary parts."""
    return expand(sqr_magnitude(buf), out)


def dot(a, b, out: Optional[np.ndarray] = None) -> np.ndarray:
    """Element-wise complex product of two interleaved buffers."""
    a = _interleaved(a, 'a')
    b = _interleaved(b, 'b')
    if a.shape != b.shape:
        raise BufferSizeError(f"Buffer lengths differ: {a.shape[0]} != {b.shape[0]}")

    re1, im1 = a[0::2], a[1::2]
    re2, im2 = b[0::2], b[1::2]
    # computed before writing so that out may alias a or b
    res_re = re1 * re2 - im1 * im2
    res_im = re1 * im2 + re2 * im1

    if out is None:
        out = np.empty_like(a)
    out[0::2] = res_re
    out[1::2] = res_im
    return out


def normalize(buf: np.ndarray) -> np.ndarray:
    """Scale in place by 1/sqrt(N), N = number of complex samples."""
    if not isinstance(buf, np.ndarray) or not np.issubdtype(buf.dtype, np.floating):
        raise BufferSizeError("buf must be a floating-point numpy array (scaled in place)")
    if buf.ndim != 1 or buf.shape[0] % 2 or buf.shape[0] == 0:
        raise BufferSizeError(f"buf must be 1-D with a non-zero even length, got shape {buf.shape}")
    n = buf.shape[0] // 2
    buf *= np.float32(1.0 / np.sqrt(n))
    return buf


def complex_exp(size: int, freq: float, shift: float = 0) -> np.ndarray:
    """
    Complex exponential exp(i * freq * (k - shift)) for k = 0..size-1.

    Parameters
    ----------
    size : int
        Number of complex samples
    freq : float
        Angular frequency in radians per sample
    shift : float
        Phase origin, in samples
    """
    k = np.arange(size)
    phase = freq * (k - shift)
    return _pack(np.cos(phase), np.sin(phase))


def gaussian(size: int, sigma: float, shift: float = 0) -> np.ndarray:
    """
    Circular Gaussian centered at ``shift``, with zero imaginary parts.

    Indices past size/2 wrap to negative offsets, so the bell is centered
    on sample 0 (for shift=0) the way FFT-based filters expect.
    """
    k = np.arange(size)
    x = np.where(k < size / 2, k, k - size)
    return expand(np.exp(-0.5 * ((x - shift) / sigma) ** 2))


def _pack(re_: np.ndarray, im_: np.ndarray) -> np.ndarray:
    out = np.empty(2 * re_.shape[0], dtype=np.float32)
    out[0::2] = re_
    out[1::2] = im_
    return out


def autocorrelation(engine: FFTEngine, buf, out: Optional[np.ndarray] = None) -> np.ndarray:
    """
    Circular autocorrelation via the Wiener-Khinchin theorem:
    inverse(|forward(buf)|^2).

    With the unitary transform the result is scaled by 1/sqrt(N) relative
    to the plain sum of products.
    """
    _require_open(engine, 'compute autocorrelation')
    spectrum = engine.forward(buf)
    return engine.inverse(sqr_magnitude_reim(spectrum), out)


def transform_real(engine: FFTEngine, signal) -> np.ndarray:
    """
    Forward transform of a real signal, truncated or zero-padded to
    ``engine.size`` samples.
    """
    _require_open(engine, 'transform a real signal')
    signal = np.asarray(signal, dtype=np.float32)[:engine.size]

    if signal.shape[0] < engine.size:
        padded = np.zeros(engine.size, dtype=np.float32)
        padded[:signal.shape[0]] = signal
        signal = padded

    return engine.forward(expand(signal))


def inverse_reim(engine: FFTEngine, buf) -> np.ndarray:
    """Inverse transform of an interleaved spectrum of exactly ``engine.size`` samples."""
    _require_open(engine, 'inverse transform a spectrum')
    buf = _interleaved(buf)
    if buf.shape[0] != 2 * engine.size:
        raise BufferSizeError(
            f"Spectrum has {buf.shape[0] // 2} samples, expected {engine.size}"
        )
    return engine.inverse(buf)
