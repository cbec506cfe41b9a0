"""
Unitary FFT Engine using Numba JIT

This module implements the iterative Cooley-Tukey radix-2 DIT FFT over
interleaved complex float32 buffers ``[re0, im0, re1, im1, ...]``.

Design:
1. Tables (bit-reversal index, N-th roots of unity) are built once per size
2. Bit-reversal permutation copies src into dst, butterflies then run in place
3. Unitary normalization (1/sqrt(N)) in both directions, so that
   IDFT(x) = conj(DFT(conj(x)))
4. Numba JIT kernels (nopython mode, cached)

Each ``FFTEngine`` owns its tables and one scratch buffer. A process-wide
default engine guarded by a lock is exposed through the ``fft_*`` functions.
"""

import math
import threading
from typing import Optional

import numpy as np
from numba import jit

from .errors import BufferSizeError, EngineClosedError, InvalidSizeError
from .utils.logging import get_logger

logger = get_logger(__name__)


def is_power_of_two(n) -> bool:
    """True for 1, 2, 4, 8, ..."""
    return isinstance(n, (int, np.integer)) and not isinstance(n, bool) and n > 0 and n & (n - 1) == 0


def validate_size(size) -> int:
    """Return ``size`` as an int, or raise InvalidSizeError."""
    if not is_power_of_two(size):
        raise InvalidSizeError(size)
    return int(size)


@jit(nopython=True, cache=True)
def _reverse_index(size: int) -> np.ndarray:
    """reverse_index[k] = k with its log2(size) low bits reversed."""
    revidx = np.empty(size, dtype=np.int32)
    for k in range(size):
        r = 0
        i = 0
        while (1 << i) < size:
            r = (r << 1) | ((k >> i) & 1)
            i += 1
        revidx[k] = r
    return revidx


@jit(nopython=True, cache=True)
def _unit_roots(size: int) -> np.ndarray:
    """Interleaved exp(2*pi*i*k/size) for k = 0..size-1."""
    uroots = np.empty(2 * size, dtype=np.float32)
    for k in range(size):
        a = 2.0 * math.pi * k / size
        uroots[2 * k] = math.cos(a)
        uroots[2 * k + 1] = math.sin(a)
    return uroots


@jit(nopython=True, cache=True)
def _transform(src: np.ndarray, res: np.ndarray, revidx: np.ndarray, uroots: np.ndarray) -> None:
    """
    Unitary DFT of ``src`` into ``res`` (Numba JIT).

    ``src`` and ``res`` must not overlap.
    """
    n = revidx.shape[0]

    # Bit-reversal permutation
    for i in range(n):
        r = revidx[i]
        res[2 * r] = src[2 * i]
        res[2 * r + 1] = src[2 * i + 1]

    # Butterfly stages: size 2, 4, 8, ..., n
    s = 2
    while s <= n:
        half = s // 2
        blocks = n // s
        for k in range(half):
            kth = (blocks * k) % n
            # exp(-2*pi*i*kth/n)
            cos = uroots[2 * kth]
            sin = -uroots[2 * kth + 1]

            for j in range(blocks):
                v = j * s + k
                u = v + half

                v_re = res[2 * v]
                v_im = res[2 * v + 1]
                u_re = res[2 * u]
                u_im = res[2 * u + 1]

                t_re = u_re * cos - u_im * sin
                t_im = u_re * sin + u_im * cos

                res[2 * u] = v_re - t_re
                res[2 * u + 1] = v_im - t_im
                res[2 * v] = v_re + t_re
                res[2 * v + 1] = v_im + t_im
        s *= 2

    # this makes the DFT unitary
    scale = np.float32(1.0 / math.sqrt(n))
    for i in range(2 * n):
        res[i] *= scale


@jit(nopython=True, cache=True)
def _conjugate(buf: np.ndarray, n: int) -> None:
    for i in range(n):
        buf[2 * i + 1] = -buf[2 * i + 1]


@jit(nopython=True, cache=True)
def _conjugate_into(src: np.ndarray, res: np.ndarray, n: int) -> None:
    for i in range(n):
        res[2 * i] = src[2 * i]
        res[2 * i + 1] = -src[2 * i + 1]


class FFTEngine:
    """
    Unitary FFT of one power-of-two size.

    Parameters
    ----------
    size : int, optional
        Transform length N. If given, the engine is initialized right away;
        otherwise call ``initialize`` before transforming.

    Notes
    -----
    Buffers are 1-D float32 arrays holding N interleaved complex samples
    (2N scalars). An engine is not thread-safe; use one per thread.

    Examples
    --------
    >>> import numpy as np
    >>> with FFTEngine(4) as engine:
    ...     spectrum = engine.forward(np.array([1, 0, 0, 0, 0, 0, 0, 0], dtype=np.float32))
    >>> spectrum.tolist()
    [0.5, 0.0, 0.5, 0.0, 0.5, 0.0, 0.5, 0.0]
    """

    def __init__(self, size: Optional[int] = None):
        self._size = 0
        self._reverse_index = None
        self._unit_roots = None
        self._scratch = None
        if size is not None:
            self.initialize(size)

    @classmethod
    def from_config(cls, config) -> "FFTEngine":
        """
        Build an initialized engine from an ``EngineConfig``.

        Only ``config.size`` is used; logging is configured separately with
        ``setup_logging(level=config.level)``.
        """
        return cls(config.size)

    @property
    def size(self) -> int:
        """Active transform length, 0 when closed."""
        return self._size

    @property
    def is_open(self) -> bool:
        return self._size != 0

    @property
    def reverse_index(self) -> Optional[np.ndarray]:
        return self._reverse_index

    @property
    def unit_roots(self) -> Optional[np.ndarray]:
        return self._unit_roots

    def initialize(self, size: int) -> None:
        """
        Build the tables for transforms of length ``size``.

        Any tables held from a previous size are released first.

        Raises
        ------
        InvalidSizeError
            If size is not a positive power of two.
        MemoryError
            If the tables cannot be allocated; the engine is left closed.
        """
        size = validate_size(size)
        self.close()

        try:
            revidx = _reverse_index(size)
            uroots = _unit_roots(size)
            scratch = np.empty(2 * size, dtype=np.float32)
        except MemoryError:
            logger.error(f"Failed to allocate FFT tables for size {size}")
            raise

        revidx.flags.writeable = False
        uroots.flags.writeable = False

        self._reverse_index = revidx
        self._unit_roots = uroots
        self._scratch = scratch
        self._size = size
        logger.debug(f"Initialized FFT tables for size {size}")

    def close(self) -> None:
        """Release the tables. Safe to call on a closed engine."""
        if not self._size:
            return
        logger.debug(f"Released FFT tables for size {self._size}")
        self._size = 0
        self._reverse_index = None
        self._unit_roots = None
        self._scratch = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    def __repr__(self):
        state = f"size={self._size}" if self._size else "closed"
        return f"FFTEngine({state})"

    # ------------------------------------------------------------------
    # Buffer checks
    # ------------------------------------------------------------------

    def _require_open(self, operation: str) -> None:
        if not self._size:
            raise EngineClosedError(operation)

    def _check_length(self, buf: np.ndarray, name: str) -> None:
        if buf.ndim != 1:
            raise BufferSizeError(f"{name} must be 1-D, got shape {buf.shape}")
        if buf.shape[0] != 2 * self._size:
            raise BufferSizeError(
                f"{name} has {buf.shape[0]} scalars, expected {2 * self._size} "
                f"({self._size} interleaved complex samples)"
            )

    def _input(self, src, name: str = 'src') -> np.ndarray:
        src = np.ascontiguousarray(src, dtype=np.float32)
        self._check_length(src, name)
        return src

    def _output(self, dst, name: str = 'dst') -> np.ndarray:
        if dst is None:
            return np.empty(2 * self._size, dtype=np.float32)
        return self._check_output(dst, name)

    def _check_output(self, dst, name: str) -> np.ndarray:
        """Validate a caller-owned buffer that is written in place."""
        if not isinstance(dst, np.ndarray) or dst.dtype != np.float32:
            raise BufferSizeError(f"{name} must be a float32 numpy array")
        self._check_length(dst, name)
        if not dst.flags.c_contiguous or not dst.flags.writeable:
            raise BufferSizeError(f"{name} must be a writable contiguous array")
        return dst

    # ------------------------------------------------------------------
    # Transforms
    # ------------------------------------------------------------------

    def transform(self, src, dst: Optional[np.ndarray] = None) -> np.ndarray:
        """
        Compute the unitary DFT of ``src`` into ``dst``.

        Parameters
        ----------
        src : array_like
            2N interleaved scalars
        dst : np.ndarray, optional
            float32 output of 2N scalars; allocated when omitted.
            May be ``src`` itself.

        Returns
        -------
        np.ndarray
            ``dst``
        """
        self._require_open('transform')
        src = self._input(src)
        dst = self._output(dst)

        if np.shares_memory(src, dst):
            self._scratch[:] = src
            src = self._scratch

        _transform(src, dst, self._reverse_index, self._unit_roots)
        return dst

    def forward(self, src, dst: Optional[np.ndarray] = None) -> np.ndarray:
        """Forward unitary DFT; same as ``transform``."""
        return self.transform(src, dst)

    def conjugate(self, buf: np.ndarray) -> np.ndarray:
        """Negate the imaginary part of every sample of ``buf`` in place."""
        self._require_open('conjugate')
        buf = self._check_output(buf, 'buf')
        _conjugate(buf, self._size)
        return buf

    def inverse(self, src, dst: Optional[np.ndarray] = None) -> np.ndarray:
        """
        Compute the unitary inverse DFT of ``src`` into ``dst``.

        IDFT(x) = conj(DFT(conj(x))). The conjugated input goes through the
        engine's scratch buffer, so ``src`` is never modified.
        """
        self._require_open('inverse')
        src = self._input(src)
        dst = self._output(dst)

        _conjugate_into(src, self._scratch, self._size)
        _transform(self._scratch, dst, self._reverse_index, self._unit_roots)
        _conjugate(dst, self._size)
        return dst


# ============== Process-wide default engine ==============

_default_engine = FFTEngine()
_default_lock = threading.Lock()


def get_default_engine() -> FFTEngine:
    """The engine behind the ``fft_*`` functions."""
    return _default_engine


def fft_init(size: int) -> None:
    """Initialize the default engine, releasing any previous size."""
    with _default_lock:
        _default_engine.initialize(size)


def fft_close() -> None:
    with _default_lock:
        _default_engine.close()


def fft_transform(src, dst: Optional[np.ndarray] = None) -> np.ndarray:
    with _default_lock:
        return _default_engine.transform(src, dst)


def fft_forward(src, dst: Optional[np.ndarray] = None) -> np.ndarray:
    with _default_lock:
        return _default_engine.forward(src, dst)


def fft_inverse(src, dst: Optional[np.ndarray] = None) -> np.ndarray:
    with _default_lock:
        return _default_engine.inverse(src, dst)


def fft_conjugate(buf: np.ndarray) -> np.ndarray:
    with _default_lock:
        return _default_engine.conjugate(buf)
