"""
Core functionality: locating, decoding and rendering model metadata.
"""

from .base import BaseCustomMetadataHandler
from .errors import (MetadumpError, UsageError, ModelReadError, RootDecodeError,
                     NoMetadataEntries, MetadataEntryNotFound, NoBufferList,
                     MetadataDecodeError, MalformedMetadata, CustomSubDecodeError)

__all__ = [
    'BaseCustomMetadataHandler',
    'MetadumpError',
    'UsageError',
    'ModelReadError',
    'RootDecodeError',
    'NoMetadataEntries',
    'MetadataEntryNotFound',
    'NoBufferList',
    'MetadataDecodeError',
    'MalformedMetadata',
    'CustomSubDecodeError'
]
