"""
Bounds verification for FlatBuffers payloads.

The `flatbuffers` Python runtime reads fields without checking offsets, so a
truncated or foreign buffer can raise deep inside an accessor or silently
yield garbage. `verify_root` walks every field declared on a table class once
and raises `InvalidFlatbuffer` on the first offset that leaves the buffer.
"""

import struct
from collections import namedtuple
from typing import Any, Optional, Tuple, Type

MAX_DEPTH = 64
MAX_TABLES = 1000000

TableContext = namedtuple('TableContext', ['cls', 'pos', 'vtable', 'vtable_size', 'table_size', 'depth'])


class InvalidFlatbuffer(ValueError):
    """Raised when a buffer does not hold a well-formed instance of a table."""


class Verifier:
    def __init__(self, buf: Any, max_depth: int = MAX_DEPTH, max_tables: int = MAX_TABLES):
        self._buf = memoryview(buf)
        self._size = len(self._buf)
        self._max_depth = max_depth
        self._max_tables = max_tables
        self._tables = 0

    def _check_range(self, pos: int, size: int, what: str) -> None:
        if pos < 0 or size < 0 or pos + size > self._size:
            raise InvalidFlatbuffer(
                f"{what} at offset {pos} (+{size} bytes) is outside the {self._size}-byte buffer"
            )

    def _unpack(self, fmt: str, pos: int, what: str) -> int:
        self._check_range(pos, struct.calcsize(fmt), what)
        return struct.unpack_from(fmt, self._buf, pos)[0]

    def read_uint8(self, pos: int) -> int:
        return self._unpack('<B', pos, 'uint8')

    def follow(self, pos: int) -> int:
        """Resolve the uoffset stored at `pos` to an absolute position."""
        return pos + self._unpack('<I', pos, 'offset')

    def verify_root(self, table_cls: Type[Any]) -> None:
        if self._size < 4:
            raise InvalidFlatbuffer(f"buffer of {self._size} bytes is too small to hold a root offset")
        self.verify_table(self.follow(0), table_cls, 0)

    def verify_table(self, pos: int, table_cls: Type[Any], depth: int) -> None:
        if depth > self._max_depth:
            raise InvalidFlatbuffer(f"{table_cls.__name__} nested deeper than {self._max_depth} levels")
        self._tables += 1
        if self._tables > self._max_tables:
            raise InvalidFlatbuffer(f"buffer holds more than {self._max_tables} tables")

        vtable = pos - self._unpack('<i', pos, f"{table_cls.__name__} table")
        vtable_size = self._unpack('<H', vtable, f"{table_cls.__name__} vtable")
        if vtable_size < 4 or vtable_size % 2:
            raise InvalidFlatbuffer(f"{table_cls.__name__} vtable at offset {vtable} has invalid size {vtable_size}")
        self._check_range(vtable, vtable_size, f"{table_cls.__name__} vtable")
        table_size = self._unpack('<H', vtable + 2, f"{table_cls.__name__} vtable")
        self._check_range(pos, table_size, f"{table_cls.__name__} table")

        context = TableContext(table_cls, pos, vtable, vtable_size, table_size, depth)
        for field in table_cls.fields():
            field.verify(self, context)

    def field_position(self, table: TableContext, vt: int, size: int) -> Optional[int]:
        """Absolute position of a present field, or None when it is absent."""
        if vt >= table.vtable_size:
            return None
        offset = self._unpack('<H', table.vtable + vt, 'vtable entry')
        if offset == 0:
            return None
        if offset + size > table.table_size:
            raise InvalidFlatbuffer(
                f"{table.cls.__name__} field at vtable slot {vt} overruns its {table.table_size}-byte table"
            )
        return table.pos + offset

    def verify_vector(self, pos: int, elem_size: int) -> Tuple[int, int]:
        length = self._unpack('<I', pos, 'vector length')
        self._check_range(pos + 4, length * elem_size, 'vector')
        return pos + 4, length

    def verify_string(self, pos: int) -> None:
        start, length = self.verify_vector(pos, 1)
        self._check_range(start + length, 1, 'string terminator')
        if self._buf[start + length] != 0:
            raise InvalidFlatbuffer(f"string at offset {pos} is not NUL-terminated")
        try:
            bytes(self._buf[start:start + length]).decode('utf-8')
        except UnicodeDecodeError as e:
            raise InvalidFlatbuffer(f"string at offset {pos} is not valid UTF-8: {e}")


def verify_root(buf: Any, table_cls: Type[Any]) -> None:
    """Verify that `buf` holds a well-formed `table_cls` root."""
    Verifier(buf).verify_root(table_cls)
