"""
webfft - Unitary FFT Engine for Audio Hosts

Iterative Cooley-Tukey FFT over interleaved complex float32 buffers of
power-of-two length, with unitary normalization in both directions.

Modules:
    - engine: FFTEngine and the process-wide fft_* functions
    - spectral: helpers for interleaved buffers (magnitude, dot, autocorrelation, ...)
    - config: YAML engine configuration
    - errors: exception hierarchy
"""

from .errors import FFTError, InvalidSizeError, BufferSizeError, EngineClosedError
from .engine import (
    FFTEngine,
    get_default_engine,
    fft_init,
    fft_close,
    fft_transform,
    fft_forward,
    fft_inverse,
    fft_conjugate,
    is_power_of_two,
)
from .config import EngineConfig, load_config

__all__ = [
    # Engine
    'FFTEngine',
    'get_default_engine',
    'fft_init',
    'fft_close',
    'fft_transform',
    'fft_forward',
    'fft_inverse',
    'fft_conjugate',
    'is_power_of_two',
    # Config
    'EngineConfig',
    'load_config',
    # Errors
    'FFTError',
    'InvalidSizeError',
    'BufferSizeError',
    'EngineClosedError',
]

__version__ = '1.0.0'
