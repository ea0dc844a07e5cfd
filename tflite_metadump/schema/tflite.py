"""
Accessors for the parts of the TensorFlow Lite model schema (`schema.fbs`,
root type `tflite.Model`, file identifier "TFL3") that hold metadata.
"""

from flatbuffers import number_types as N

from .base import ByteVectorField, ScalarField, StringField, Table, TableVectorField

FILE_IDENTIFIER = b"TFL3"


class Buffer(Table):
    data = ByteVectorField(4)


class Metadata(Table):
    name = StringField(4)
    buffer = ScalarField(6, N.Uint32Flags)


class Model(Table):
    version = ScalarField(4, N.Uint32Flags)
    description = StringField(10)
    buffers = TableVectorField(12, Buffer)
    metadata = TableVectorField(16, Metadata)
