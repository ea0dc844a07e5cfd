"""
Shared fixtures: FlatBuffers payloads built with `flatbuffers.Builder`.

Metadata and detector payloads are encoded from plain dicts keyed by field
name. The model container is laid out by hand with explicit slot numbers so
its accessors are checked against the real TFLite slot layout.
"""
import io
from typing import Any, Dict, List, Optional, Sequence, Tuple

import flatbuffers
import pytest

from tflite_metadump.config.manager import ConfigManager
from tflite_metadump.schema.base import (ByteVectorField, NumericVectorField, ScalarField,
                                         StringField, StringVectorField, StructVectorField,
                                         TableField, TableVectorField, UnionField)
from tflite_metadump.schema.detector import ObjectDetectorOptions
from tflite_metadump.schema.metadata import ModelMetadata


def _offset_vector(builder: flatbuffers.Builder, offsets: Sequence[int]) -> int:
    builder.StartVector(4, len(offsets), 4)
    for off in reversed(offsets):
        builder.PrependUOffsetTRelative(off)
    return builder.EndVector()


def encode_table(builder: flatbuffers.Builder, table_cls: type, values: Dict[str, Any]) -> int:
    """Encode `values` as a `table_cls` table; returns its offset."""
    fields = table_cls.fields()
    offsets: Dict[Any, int] = {}
    scalars: Dict[Any, Any] = {}

    for field in fields:
        value = values.get(field.name)
        if value is None:
            continue
        if isinstance(field, UnionField):
            tag, member_cls, member_values = value
            offsets[field] = encode_table(builder, member_cls, member_values)
            scalars[getattr(table_cls, field.type_field)] = int(tag)
        elif isinstance(field, StringField):
            offsets[field] = builder.CreateString(value)
        elif isinstance(field, TableField):
            offsets[field] = encode_table(builder, field.table_cls, value)
        elif isinstance(field, TableVectorField):
            children = [encode_table(builder, field.table_cls, v) for v in value]
            offsets[field] = _offset_vector(builder, children)
        elif isinstance(field, StringVectorField):
            strings = [builder.CreateString(s) for s in value]
            offsets[field] = _offset_vector(builder, strings)
        elif isinstance(field, ByteVectorField):
            offsets[field] = builder.CreateByteVector(bytes(value))
        elif isinstance(field, NumericVectorField):
            width = field.flags.bytewidth
            builder.StartVector(width, len(value), width)
            for v in reversed(value):
                builder.Prepend(field.flags, field.flags.py_type(v))
            offsets[field] = builder.EndVector()
        elif isinstance(field, StructVectorField):
            struct_cls = field.struct_cls
            builder.StartVector(struct_cls.SIZE, len(value), 4)
            for element in reversed(value):
                builder.Prep(4, struct_cls.SIZE)
                for v in reversed(element):
                    builder.PrependFloat32(float(v))
            offsets[field] = builder.EndVector()
        elif isinstance(field, ScalarField):
            scalars[field] = value

    builder.StartObject(max(((f.vt - 4) // 2 + 1 for f in fields), default=0))
    for field, value in scalars.items():
        slot = (field.vt - 4) // 2
        builder.PrependSlot(field.flags, slot, field.flags.py_type(value), None)
    for field, off in offsets.items():
        builder.PrependUOffsetTRelativeSlot((field.vt - 4) // 2, off, 0)
    return builder.EndObject()


def encode_root(table_cls: type, values: Dict[str, Any], file_identifier: Optional[bytes] = None) -> bytes:
    builder = flatbuffers.Builder(1024)
    root = encode_table(builder, table_cls, values)
    builder.Finish(root, file_identifier=file_identifier)
    return bytes(builder.Output())


def metadata_bytes(**values: Any) -> bytes:
    return encode_root(ModelMetadata, values, b"M001")


def detector_bytes(**values: Any) -> bytes:
    return encode_root(ObjectDetectorOptions, values, b"V001")


def model_bytes(entries: Optional[List[Tuple[str, int]]] = None,
                buffers: Optional[List[Optional[bytes]]] = None,
                version: int = 3) -> bytes:
    """Lay out a `tflite.Model` with explicit slots (version=0, buffers=4, metadata=6)."""
    builder = flatbuffers.Builder(1024)

    buffers_vec = None
    if buffers is not None:
        buffer_tables = []
        for data in buffers:
            data_vec = builder.CreateByteVector(data) if data is not None else None
            builder.StartObject(3)
            if data_vec is not None:
                builder.PrependUOffsetTRelativeSlot(0, data_vec, 0)
            buffer_tables.append(builder.EndObject())
        buffers_vec = _offset_vector(builder, buffer_tables)

    metadata_vec = None
    if entries is not None:
        entry_tables = []
        for name, index in entries:
            name_off = builder.CreateString(name)
            builder.StartObject(2)
            builder.PrependUOffsetTRelativeSlot(0, name_off, 0)
            builder.PrependUint32Slot(1, index, 0)
            entry_tables.append(builder.EndObject())
        metadata_vec = _offset_vector(builder, entry_tables)

    builder.StartObject(8)
    builder.PrependUint32Slot(0, version, 0)
    if buffers_vec is not None:
        builder.PrependUOffsetTRelativeSlot(4, buffers_vec, 0)
    if metadata_vec is not None:
        builder.PrependUOffsetTRelativeSlot(6, metadata_vec, 0)
    root = builder.EndObject()
    builder.Finish(root, file_identifier=b"TFL3")
    return bytes(builder.Output())


def model_with_metadata(payload: bytes) -> bytes:
    """A model whose `TFLITE_METADATA` entry points at buffer 1."""
    return model_bytes(entries=[("min_runtime_version", 0), ("TFLITE_METADATA", 1)],
                       buffers=[b"1.5.0\x00", payload])


def anchors(count: int) -> List[Tuple[float, float, float, float]]:
    """`count` distinct anchors; anchor i has x_center == i."""
    return [(float(i), 0.5, 0.25, 0.125) for i in range(count)]


class FlatbufferFactory:
    encode_root = staticmethod(encode_root)
    metadata = staticmethod(metadata_bytes)
    detector = staticmethod(detector_bytes)
    model = staticmethod(model_bytes)
    model_with_metadata = staticmethod(model_with_metadata)
    anchors = staticmethod(anchors)


@pytest.fixture
def fb():
    return FlatbufferFactory


@pytest.fixture
def render_text():
    """Run the full dump on model bytes and return the report text."""
    from tflite_metadump.core.inspector import dump_model_metadata

    def _render(data: bytes, budget: int = 24) -> str:
        out = io.StringIO()
        dump_model_metadata(data, out, anchor_display_budget=budget)
        return out.getvalue()
    return _render


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep user config files out of tests and give each test fresh defaults."""
    monkeypatch.delenv("TFLITE_METADUMP_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("tflite_metadump.config.manager.DEFAULT_CONFIG_PATHS",
                        [tmp_path / "tflite_metadump_config.json"])
    ConfigManager._instance = None  # type: ignore
    ConfigManager._config_data = None
    ConfigManager._config_file_path = None
    yield
    ConfigManager._instance = None  # type: ignore


@pytest.fixture(autouse=True)
def isolated_logging():
    """Drop handlers LogManager attached so each test starts unconfigured."""
    import logging
    from tflite_metadump.utils.logging import LOGGER_NAME, LogManager

    def _reset():
        logger = logging.getLogger(LOGGER_NAME)
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
        logger.setLevel(logging.NOTSET)
        LogManager._file_handlers.clear()
        LogManager._instance = None  # type: ignore
        LogManager._logger = None

    _reset()
    yield
    _reset()
