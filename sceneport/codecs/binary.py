"""Little-endian primitive writer/reader shared by the binary codecs.

Strings are length-prefixed: ``int32`` byte count including a trailing NUL,
then UTF-8 bytes, then the NUL.  The empty string is a bare ``int32 0``.
"""

from __future__ import annotations

import struct
from typing import Sequence

from sceneport.errors import ErrorKind, ExportError


class BinaryWriter:
    """Accumulate packed fields in memory; the caller owns file I/O."""

    def __init__(self) -> None:
        self._buf = bytearray()

    def __len__(self) -> int:
        return len(self._buf)

    def getvalue(self) -> bytes:
        return bytes(self._buf)

    def _pack(self, fmt: str, *values: float | int) -> None:
        try:
            self._buf.extend(struct.pack(fmt, *values))
        except struct.error as exc:
            raise ExportError(
                ErrorKind.SERIALIZATION_FAILURE,
                f"cannot pack {values!r} as {fmt!r}: {exc}",
            ) from exc

    def int32(self, value: int) -> None:
        self._pack("<i", value)

    def uint16(self, value: int) -> None:
        self._pack("<H", value)

    def float32(self, value: float) -> None:
        self._pack("<f", value)

    def floats(self, values: Sequence[float]) -> None:
        self._pack(f"<{len(values)}f", *values)

    def string(self, value: str) -> None:
        if not value:
            self.int32(0)
            return
        encoded = value.encode("utf-8") + b"\x00"
        self.int32(len(encoded))
        self._buf.extend(encoded)


class BinaryReader:
    """Sequential reader over a byte string produced by :class:`BinaryWriter`."""

    def __init__(self, data: bytes) -> None:
        self._data = data
        self._offset = 0

    @property
    def remaining(self) -> int:
        return len(self._data) - self._offset

    def _unpack(self, fmt: str) -> tuple:
        size = struct.calcsize(fmt)
        if self._offset + size > len(self._data):
            raise ExportError(
                ErrorKind.SERIALIZATION_FAILURE,
                f"truncated stream: need {size} bytes at offset {self._offset}",
            )
        values = struct.unpack_from(fmt, self._data, self._offset)
        self._offset += size
        return values

    def int32(self) -> int:
        return self._unpack("<i")[0]

    def count(self) -> int:
        """Read an ``int32`` element count, rejecting negatives."""
        value = self.int32()
        if value < 0:
            raise ExportError(
                ErrorKind.SERIALIZATION_FAILURE, f"negative count {value}"
            )
        return value

    def uint16(self) -> int:
        return self._unpack("<H")[0]

    def float32(self) -> float:
        return self._unpack("<f")[0]

    def floats(self, n: int) -> tuple[float, ...]:
        return self._unpack(f"<{n}f")

    def string(self) -> str:
        length = self.count()
        if length == 0:
            return ""
        raw = self._unpack(f"<{length}s")[0]
        return raw.rstrip(b"\x00").decode("utf-8")
