"""
Common utility functions.
"""

from pathlib import Path
from typing import Union

from ..core.errors import ModelReadError


def read_binary_file(filepath: Union[str, Path]) -> bytes:
    """Read a whole file into memory; no handle is kept afterwards."""
    filepath = Path(filepath)
    try:
        with open(filepath, 'rb') as f:
            return f.read()
    except OSError as e:
        reason = e.strerror or str(e)
        raise ModelReadError(f"failed to read '{filepath}': {reason}") from e


def format_file_size(size_bytes: float) -> str:
    """Format file size in bytes to human readable string."""
    for unit in ['B', 'KB', 'MB', 'GB', 'TB']:
        if size_bytes < 1024.0:
            return f"{size_bytes:.2f} {unit}"
        size_bytes /= 1024.0
    return f"{size_bytes:.2f} PB"
