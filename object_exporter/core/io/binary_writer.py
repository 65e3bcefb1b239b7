# -*- coding: utf-8 -*-
"""
ObjectExporter - Binary Writer

- Sequential, append-only little-endian byte sink bound to one destination file
- The file handle is owned by the writer scope and released on every exit path
- The format is defined implicitly by field write order (no magic, no sections)
- Fixed-width writers never mask: out-of-range values raise instead of wrapping
"""

from __future__ import annotations
import math
import struct
from dataclasses import dataclass
from typing import BinaryIO, Iterable, Optional, Sequence

from ..errors import EncodingOverflowError, OpenFailureError

# Largest finite float32
F32_MAX = 3.4028234663852886e38


def check_f32(values: Iterable[float], what: str, object_name: str = "") -> None:
    """
    Reject values that cannot be stored as a finite float32. Non-finite input is
    rejected too: mathutils keeps single precision, so an overflowed host value
    arrives here as inf.
    """
    for v in values:
        v = float(v)
        if not math.isfinite(v) or abs(v) > F32_MAX:
            raise EncodingOverflowError(f"{what} value {v} does not fit in float32", object_name)


# =========================
# Scalar / vector writers
# =========================

@dataclass
class BinaryWriter:
    """
    Minimalistic binary writer with explicit endianness.
    """
    stream: BinaryIO
    little_endian: bool = True
    bytes_written: int = 0

    def _pack(self, fmt: str, *values) -> None:
        try:
            data = struct.pack(('<' if self.little_endian else '>') + fmt, *values)
        except (struct.error, OverflowError) as e:
            raise EncodingOverflowError(f"cannot encode {values!r} as '{fmt}': {e}") from e
        self.stream.write(data)
        self.bytes_written += len(data)

    # ---- scalar writers ----
    def write_u16(self, v: int) -> None:
        v = int(v)
        if v < 0 or v > 0xFFFF:
            raise EncodingOverflowError(f"value {v} does not fit in uint16")
        self._pack('H', v)

    def write_i32(self, v: int) -> None:
        v = int(v)
        if v < -0x80000000 or v > 0x7FFFFFFF:
            raise EncodingOverflowError(f"value {v} does not fit in int32")
        self._pack('i', v)

    def write_f32(self, v: float) -> None:
        self._pack('f', float(v))

    # ---- compound writers ----
    def write_vec2(self, v: Sequence[float]) -> None:
        self._pack('ff', float(v[0]), float(v[1]))

    def write_vec3(self, v: Sequence[float]) -> None:
        self._pack('fff', float(v[0]), float(v[1]), float(v[2]))

    def write_vec4(self, v: Sequence[float]) -> None:
        self._pack('ffff', float(v[0]), float(v[1]), float(v[2]), float(v[3]))

    def write_quat(self, q) -> None:
        """Quaternion as (x, y, z, w)."""
        self._pack('ffff', float(q.x), float(q.y), float(q.z), float(q.w))

    def write_transform(self, translation, rotation, scale) -> None:
        self.write_vec3(translation)
        self.write_quat(rotation)
        self.write_vec3(scale)

    def write_string(self, s: str) -> None:
        """
        Write length-prefixed string: i32 byte length + UTF-8 bytes (no terminator).
        """
        data = s.encode('utf-8')
        self.write_i32(len(data))
        self.write_bytes(data)

    def write_bytes(self, data: bytes) -> None:
        self.stream.write(data)
        self.bytes_written += len(data)

    def write_u16_array(self, values: Iterable[int]) -> None:
        for v in values:
            self.write_u16(v)


# =========================
# File scope
# =========================

class BinaryFileWriter:
    """
    Owns one destination file for the duration of an export call.
    Usage:
      with BinaryFileWriter(path) as binw:
          binw.write_i32(len(vertices))
          ...
    Opening failures raise OpenFailureError; bytes already flushed before a
    later failure are left on disk.
    """

    def __init__(self, path: str, little_endian: bool = True):
        self.path = path
        self.little_endian = little_endian
        self._stream: Optional[BinaryIO] = None
        self.binw: Optional[BinaryWriter] = None

    def __enter__(self) -> BinaryWriter:
        try:
            self._stream = open(self.path, 'wb')
        except OSError as e:
            raise OpenFailureError(f"cannot open '{self.path}' for writing: {e}") from e
        self.binw = BinaryWriter(self._stream, little_endian=self.little_endian)
        return self.binw

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._stream is not None:
            try:
                self._stream.flush()
            finally:
                self._stream.close()
        self._stream = None
        self.binw = None

    @property
    def closed(self) -> bool:
        return self._stream is None
