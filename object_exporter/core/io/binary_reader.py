# -*- coding: utf-8 -*-
"""
ObjectExporter - Binary Reader

Decoding counterpart of BinaryWriter. Every read is bounds checked and raises
FormatError on truncation so that partially written files are detected.
"""

from __future__ import annotations
import struct
from typing import List, Tuple

from mathutils import Quaternion, Vector

from ..errors import FormatError


class BinaryReader:

    def __init__(self, data: bytes, little_endian: bool = True):
        self.data = data
        self.offset = 0
        self._prefix = '<' if little_endian else '>'

    @classmethod
    def from_file(cls, path: str, little_endian: bool = True) -> "BinaryReader":
        with open(path, 'rb') as f:
            return cls(f.read(), little_endian=little_endian)

    # ---- primitives ----
    def _unpack(self, fmt: str) -> Tuple:
        fmt = self._prefix + fmt
        size = struct.calcsize(fmt)
        if self.offset + size > len(self.data):
            raise FormatError(
                f"unexpected end of data at offset {self.offset} (need {size} bytes, have {self.remaining})"
            )
        values = struct.unpack_from(fmt, self.data, self.offset)
        self.offset += size
        return values

    @property
    def remaining(self) -> int:
        return len(self.data) - self.offset

    def at_end(self) -> bool:
        return self.offset >= len(self.data)

    def read_i32(self) -> int:
        return self._unpack('i')[0]

    def read_count(self) -> int:
        """Element count: i32 that must be non-negative."""
        count = self.read_i32()
        if count < 0:
            raise FormatError(f"negative element count {count} at offset {self.offset - 4}")
        return count

    def read_f32(self) -> float:
        return self._unpack('f')[0]

    # ---- compound ----
    def read_vec2(self) -> Tuple[float, float]:
        return self._unpack('ff')

    def read_vec3(self) -> Vector:
        return Vector(self._unpack('fff'))

    def read_vec4(self) -> Tuple[float, float, float, float]:
        return self._unpack('ffff')

    def read_quat(self) -> Quaternion:
        x, y, z, w = self._unpack('ffff')
        return Quaternion((w, x, y, z))

    def read_string(self) -> str:
        length = self.read_count()
        if self.offset + length > len(self.data):
            raise FormatError(f"string of {length} bytes runs past end of data")
        raw = self.data[self.offset:self.offset + length]
        self.offset += length
        try:
            return raw.decode('utf-8')
        except UnicodeDecodeError as e:
            raise FormatError(f"string is not valid UTF-8: {e}") from e

    def read_u16_array(self, count: int) -> List[int]:
        return list(self._unpack(f'{count}H')) if count else []
