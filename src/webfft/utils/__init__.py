"""
Utility modules.
"""

from .logging import setup_logging, close_logging, get_logger

__all__ = ['setup_logging', 'close_logging', 'get_logger']
