"""
Utility modules for tflite-metadump.
"""

from .logging import LogManager
from .common import read_binary_file, format_file_size

__all__ = [
    'LogManager',
    'read_binary_file',
    'format_file_size'
]
