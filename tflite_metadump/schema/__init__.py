"""
FlatBuffers table accessors for the three schemas the dump walks: the
TensorFlow Lite model container, the TFLite metadata tree and the MediaPipe
object detector options.
"""

from .verifier import InvalidFlatbuffer, verify_root

__all__ = ['InvalidFlatbuffer', 'verify_root']
