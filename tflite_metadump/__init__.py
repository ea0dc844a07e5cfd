"""
tflite-metadump: print the metadata embedded in TensorFlow Lite models.
"""

from .core.inspector import dump_model_file, dump_model_metadata

__version__ = "0.1.0"

__all__ = ['dump_model_file', 'dump_model_metadata', '__version__']
