"""
Exceptions raised by the FFT engine and its helpers.
"""


class FFTError(Exception):
    """Base class for all webfft errors."""


class InvalidSizeError(FFTError, ValueError):
    """Transform length is not a positive power of two."""

    def __init__(self, size):
        self.size = size
        super().__init__(f"FFT size must be a positive power of 2, got {size!r}")


class BufferSizeError(FFTError, ValueError):
    """Sample buffer does not match the engine's interleaved layout."""


class EngineClosedError(FFTError, RuntimeError):
    """Operation requires an initialized engine."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Cannot {operation}: FFT engine is closed (call initialize() first)")
