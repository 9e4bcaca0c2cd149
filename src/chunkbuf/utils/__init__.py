"""Utility modules for chunkbuf.

Provides:
- logger: get_logger for logging
"""

from chunkbuf.utils.logger import get_logger

__all__ = [
    "get_logger",
]
