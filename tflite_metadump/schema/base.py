"""
Declarative FlatBuffers table accessors.

Each schema table is a `Table` subclass whose class attributes are field
descriptors keyed by their vtable offset. Reading an attribute decodes that
one field from the underlying buffer; nothing is materialized eagerly. The
same descriptors drive verification (see `verifier.py`) and the structured
`repr` used when printing records.
"""

import struct
from collections.abc import Sequence
from enum import IntEnum
from typing import Any, Dict, List, Optional, Type, Union

import numpy as np
from flatbuffers import number_types as N
from flatbuffers.table import Table as FlatTable

UOFFSET_SIZE = N.UOffsetTFlags.bytewidth


def format_float(value: float) -> str:
    """Shortest round-trip text for a float32 value."""
    return np.format_float_positional(np.float32(value), trim='0')


def format_value(value: Any) -> str:
    """Structured text for any value a field accessor can return."""
    if value is None:
        return 'None'
    if isinstance(value, IntEnum):
        return value.name
    if isinstance(value, (bool, int)):
        return repr(value)
    if isinstance(value, float):
        return format_float(value)
    if isinstance(value, str):
        return repr(value)
    if isinstance(value, np.ndarray):
        if value.dtype.kind == 'f':
            return '[' + ', '.join(format_float(v) for v in value) + ']'
        return '[' + ', '.join(str(int(v)) for v in value) + ']'
    if isinstance(value, memoryview):
        return f'<{value.nbytes} bytes>'
    if isinstance(value, (list, _VectorView)):
        return '[' + ', '.join(format_value(v) for v in value) + ']'
    return repr(value)


class UnknownUnionMember:
    """Placeholder for a union tag this schema revision does not know."""

    def __init__(self, enum_cls: Type[IntEnum], tag: int):
        self.enum_cls = enum_cls
        self.tag = tag

    def __repr__(self) -> str:
        return f'{self.enum_cls.__name__}({self.tag})'

    def __eq__(self, other: Any) -> bool:
        return (isinstance(other, UnknownUnionMember)
                and other.enum_cls is self.enum_cls and other.tag == self.tag)


class Field:
    """Base descriptor for a table field stored at vtable offset `vt`."""

    size = UOFFSET_SIZE
    in_repr = True

    def __init__(self, vt: int):
        self.vt = vt
        self.name = ''

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    def __get__(self, obj: Optional['Table'], owner: type) -> Any:
        if obj is None:
            return self
        offset = obj._tab.Offset(self.vt)
        if offset == 0:
            return self.default()
        return self.read(obj._tab, offset)

    def default(self) -> Any:
        return None

    def read(self, tab: FlatTable, offset: int) -> Any:
        raise NotImplementedError

    def verify(self, verifier: Any, table: Any) -> None:
        verifier.field_position(table, self.vt, self.size)

    def describe(self, value: Any) -> str:
        return format_value(value)


class ScalarField(Field):
    """Scalar (or enum) field with a schema default."""

    def __init__(self, vt: int, flags: Any, default: Union[int, float, bool] = 0,
                 enum: Optional[Type[IntEnum]] = None, in_repr: bool = True):
        super().__init__(vt)
        self.flags = flags
        self.size = flags.bytewidth
        self._default = default
        self.enum = enum
        self.in_repr = in_repr

    def _convert(self, raw: Any) -> Any:
        if self.enum is None:
            return raw
        try:
            return self.enum(raw)
        except ValueError:
            return raw

    def default(self) -> Any:
        return self._convert(self._default)

    def read(self, tab: FlatTable, offset: int) -> Any:
        return self._convert(tab.Get(self.flags, tab.Pos + offset))

    def describe(self, value: Any) -> str:
        if self.enum is not None and not isinstance(value, self.enum):
            return f'{self.enum.__name__}({value})'
        return format_value(value)


class StringField(Field):
    def read(self, tab: FlatTable, offset: int) -> str:
        return tab.String(tab.Pos + offset).decode('utf-8')

    def verify(self, verifier: Any, table: Any) -> None:
        position = verifier.field_position(table, self.vt, self.size)
        if position is not None:
            verifier.verify_string(verifier.follow(position))


class TableField(Field):
    def __init__(self, vt: int, table_cls: Type['Table']):
        super().__init__(vt)
        self.table_cls = table_cls

    def read(self, tab: FlatTable, offset: int) -> 'Table':
        return self.table_cls(tab.Bytes, tab.Indirect(tab.Pos + offset))

    def verify(self, verifier: Any, table: Any) -> None:
        position = verifier.field_position(table, self.vt, self.size)
        if position is not None:
            verifier.verify_table(verifier.follow(position), self.table_cls, table.depth + 1)


class UnionField(Field):
    """Union value; its tag lives in the sibling field named `type_field`."""

    def __init__(self, vt: int, type_field: str, members: Dict[int, Type['Table']]):
        super().__init__(vt)
        self.type_field = type_field
        self.members = members

    def __get__(self, obj: Optional['Table'], owner: type) -> Any:
        if obj is None:
            return self
        tag = getattr(obj, self.type_field)
        offset = obj._tab.Offset(self.vt)
        if tag == 0 or offset == 0:
            return None
        member_cls = self.members.get(int(tag))
        if member_cls is None:
            tag_field = getattr(type(obj), self.type_field)
            return UnknownUnionMember(tag_field.enum, int(tag))
        return member_cls(obj._tab.Bytes, obj._tab.Indirect(obj._tab.Pos + offset))

    def verify(self, verifier: Any, table: Any) -> None:
        position = verifier.field_position(table, self.vt, self.size)
        if position is None:
            return
        tag_field = getattr(table.cls, self.type_field)
        tag_position = verifier.field_position(table, tag_field.vt, tag_field.size)
        tag = verifier.read_uint8(tag_position) if tag_position is not None else 0
        member_cls = self.members.get(tag)
        if member_cls is not None:
            verifier.verify_table(verifier.follow(position), member_cls, table.depth + 1)


class VectorField(Field):
    """Base for `[T]` fields; `elem_size` is the inline width of one element."""

    elem_size = UOFFSET_SIZE

    def verify(self, verifier: Any, table: Any) -> None:
        position = verifier.field_position(table, self.vt, self.size)
        if position is None:
            return
        start, length = verifier.verify_vector(verifier.follow(position), self.elem_size)
        self.verify_elements(verifier, table, start, length)

    def verify_elements(self, verifier: Any, table: Any, start: int, length: int) -> None:
        pass


class _VectorView(Sequence):
    """Read-only, restartable view over the elements of a stored vector."""

    def __init__(self, tab: FlatTable, offset: int):
        self._tab = tab
        self._start = tab.Vector(offset)
        self._length = tab.VectorLen(offset)

    def __len__(self) -> int:
        return self._length

    def __getitem__(self, index):
        if isinstance(index, slice):
            return [self[i] for i in range(*index.indices(self._length))]
        if index < 0:
            index += self._length
        if not 0 <= index < self._length:
            raise IndexError('vector index out of range')
        return self._element(index)

    def _element(self, index: int) -> Any:
        raise NotImplementedError

    def __repr__(self) -> str:
        return format_value(self)


class TableVector(_VectorView):
    def __init__(self, tab: FlatTable, offset: int, table_cls: Type['Table']):
        super().__init__(tab, offset)
        self._table_cls = table_cls

    def _element(self, index: int) -> 'Table':
        position = self._start + index * UOFFSET_SIZE
        return self._table_cls(self._tab.Bytes, self._tab.Indirect(position))


class StringVector(_VectorView):
    def _element(self, index: int) -> str:
        return self._tab.String(self._start + index * UOFFSET_SIZE).decode('utf-8')


class StructVector(_VectorView):
    def __init__(self, tab: FlatTable, offset: int, struct_cls: Type['Struct']):
        super().__init__(tab, offset)
        self._struct_cls = struct_cls

    def _element(self, index: int) -> 'Struct':
        return self._struct_cls(self._tab.Bytes, self._start + index * self._struct_cls.SIZE)


class TableVectorField(VectorField):
    def __init__(self, vt: int, table_cls: Type['Table']):
        super().__init__(vt)
        self.table_cls = table_cls

    def read(self, tab: FlatTable, offset: int) -> TableVector:
        return TableVector(tab, offset, self.table_cls)

    def verify_elements(self, verifier: Any, table: Any, start: int, length: int) -> None:
        for i in range(length):
            element = verifier.follow(start + i * UOFFSET_SIZE)
            verifier.verify_table(element, self.table_cls, table.depth + 1)


class StringVectorField(VectorField):
    def read(self, tab: FlatTable, offset: int) -> StringVector:
        return StringVector(tab, offset)

    def verify_elements(self, verifier: Any, table: Any, start: int, length: int) -> None:
        for i in range(length):
            verifier.verify_string(verifier.follow(start + i * UOFFSET_SIZE))


class StructVectorField(VectorField):
    def __init__(self, vt: int, struct_cls: Type['Struct']):
        super().__init__(vt)
        self.struct_cls = struct_cls
        self.elem_size = struct_cls.SIZE

    def read(self, tab: FlatTable, offset: int) -> StructVector:
        return StructVector(tab, offset, self.struct_cls)


class NumericVectorField(VectorField):
    """Vector of scalars, returned as a zero-copy numpy view."""

    def __init__(self, vt: int, flags: Any):
        super().__init__(vt)
        self.flags = flags
        self.elem_size = flags.bytewidth

    def read(self, tab: FlatTable, offset: int) -> np.ndarray:
        return tab.GetVectorAsNumpy(self.flags, offset)


class ByteVectorField(VectorField):
    """`[ubyte]` blob, returned as a memoryview slice of the buffer."""

    elem_size = 1

    def read(self, tab: FlatTable, offset: int) -> memoryview:
        start = tab.Vector(offset)
        return memoryview(tab.Bytes)[start:start + tab.VectorLen(offset)]


class Table:
    """A FlatBuffers table positioned inside a shared buffer."""

    __slots__ = ('_tab',)

    def __init__(self, buf: Any, pos: int):
        self._tab = FlatTable(buf, pos)

    @classmethod
    def root(cls, buf: Any, offset: int = 0) -> 'Table':
        """Wrap the root table of `buf` without verifying it."""
        n = N.UOffsetTFlags.py_type(struct.unpack_from('<I', buf, offset)[0])
        return cls(buf, n + offset)

    @classmethod
    def fields(cls) -> List[Field]:
        found: Dict[str, Field] = {}
        for klass in reversed(cls.__mro__):
            for name, attr in vars(klass).items():
                if isinstance(attr, Field):
                    found[name] = attr
        return sorted(found.values(), key=lambda f: f.vt)

    def __repr__(self) -> str:
        parts = [f'{f.name}={f.describe(getattr(self, f.name))}'
                 for f in self.fields() if f.in_repr]
        return f"{type(self).__name__}({', '.join(parts)})"


class Struct:
    """Fixed-layout struct stored inline; `LAYOUT` lists (name, format) pairs."""

    __slots__ = ('_buf', '_pos')

    LAYOUT: tuple = ()
    SIZE = 0

    def __init__(self, buf: Any, pos: int):
        self._buf = buf
        self._pos = pos

    def _read(self, name: str) -> Any:
        offset = 0
        for field_name, fmt in self.LAYOUT:
            if field_name == name:
                return struct.unpack_from('<' + fmt, self._buf, self._pos + offset)[0]
            offset += struct.calcsize('<' + fmt)
        raise AttributeError(name)

    def __getattr__(self, name: str) -> Any:
        if name.startswith('_'):
            raise AttributeError(name)
        return self._read(name)

    def values(self) -> tuple:
        fmt = '<' + ''.join(f for _, f in self.LAYOUT)
        return struct.unpack_from(fmt, self._buf, self._pos)

    def __repr__(self) -> str:
        parts = [f'{name}={format_value(value)}'
                 for (name, _), value in zip(self.LAYOUT, self.values())]
        return f"{type(self).__name__}({', '.join(parts)})"
