"""
Locates the metadata payload inside a TensorFlow Lite model container.
"""

import logging
from typing import Any

from ..schema import InvalidFlatbuffer, verify_root
from ..schema.tflite import Model
from .errors import MetadataEntryNotFound, NoBufferList, NoMetadataEntries, RootDecodeError

logger = logging.getLogger(__name__)

METADATA_NAME = "TFLITE_METADATA"


def open_model(data: Any) -> Model:
    """Verify `data` as a TFLite model and return its root table.

    Raises:
        RootDecodeError: If the bytes are not a well-formed model container.
    """
    try:
        verify_root(data, Model)
    except InvalidFlatbuffer as e:
        raise RootDecodeError(f"failed to decode model: {e}") from e
    model = Model.root(data)
    logger.debug(f"Opened model (schema version {model.version}, {len(data)} bytes)")
    return model


def locate_metadata(model: Model, name: str = METADATA_NAME) -> memoryview:
    """Return the payload of the first metadata entry called `name`.

    The payload is a slice of the model's own buffer. A buffer index outside
    the buffer list, or a buffer without data, yields an empty payload.

    Raises:
        NoMetadataEntries: If the model has no metadata list.
        MetadataEntryNotFound: If no entry is called `name`.
        NoBufferList: If the model has no buffer list.
    """
    entries = model.metadata
    if entries is None:
        raise NoMetadataEntries()

    entry = next((e for e in entries if e.name == name), None)
    if entry is None:
        raise MetadataEntryNotFound(name)

    buffers = model.buffers
    if buffers is None:
        raise NoBufferList()

    index = entry.buffer
    if index >= len(buffers):
        logger.warning(
            f"Metadata entry `{name}` points at buffer {index} but the model has "
            f"{len(buffers)} buffers; treating its payload as empty"
        )
        return memoryview(b"")

    payload = buffers[index].data
    if payload is None:
        logger.debug(f"Buffer {index} of metadata entry `{name}` holds no data")
        return memoryview(b"")
    logger.debug(f"Found `{name}` payload of {payload.nbytes} bytes in buffer {index}")
    return payload
