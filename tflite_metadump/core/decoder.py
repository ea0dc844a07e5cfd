"""
Decoders for the metadata payloads embedded in a model.

Decoding verifies the payload once and returns a lazily-read root table;
individual fields are only read when the renderer asks for them.
"""

from typing import Any

from ..schema import InvalidFlatbuffer, verify_root
from ..schema.detector import ObjectDetectorOptions
from ..schema.metadata import ModelMetadata
from .errors import CustomSubDecodeError, MetadataDecodeError


def decode_model_metadata(payload: Any) -> ModelMetadata:
    try:
        verify_root(payload, ModelMetadata)
    except InvalidFlatbuffer as e:
        raise MetadataDecodeError(f"failed to decode metadata: {e}") from e
    return ModelMetadata.root(payload)


def decode_detector_options(payload: Any) -> ObjectDetectorOptions:
    try:
        verify_root(payload, ObjectDetectorOptions)
    except InvalidFlatbuffer as e:
        raise CustomSubDecodeError(str(e)) from e
    return ObjectDetectorOptions.root(payload)
