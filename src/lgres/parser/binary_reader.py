"""Low-level binary reader with typed little-endian reads and a moving cursor."""

import struct


class BinaryReader:
    """Wraps a bytes buffer with typed reads and a moving cursor.

    Every read is bounds-checked against `end`, so a record decoder handed a
    buffer of exactly one record can never run into the next one.
    """

    __slots__ = ("_data", "_pos", "_end")

    def __init__(self, data: bytes, offset: int = 0, end: int | None = None) -> None:
        self._data = data
        self._pos = offset
        self._end = end if end is not None else len(data)

    @property
    def position(self) -> int:
        return self._pos

    @property
    def remaining(self) -> int:
        return self._end - self._pos

    def _read(self, size: int) -> bytes:
        if self._pos + size > self._end:
            raise ValueError(
                f"Read of {size} bytes at offset {self._pos} "
                f"would exceed boundary at {self._end}"
            )
        chunk = self._data[self._pos : self._pos + size]
        self._pos += size
        return chunk

    def uint8(self) -> int:
        return self._read(1)[0]

    def uint16(self) -> int:
        return struct.unpack_from("<H", self._read(2))[0]

    def uint24(self) -> int:
        """Read a 3-byte little-endian unsigned integer, zero-extended."""
        b0, b1, b2 = self._read(3)
        return b0 | (b1 << 8) | (b2 << 16)

    def uint32(self) -> int:
        return struct.unpack_from("<I", self._read(4))[0]

    def bytes(self, size: int) -> bytes:
        return self._read(size)

    def skip(self, size: int) -> None:
        if self._pos + size > self._end:
            raise ValueError(
                f"Skip of {size} bytes at offset {self._pos} "
                f"would exceed boundary at {self._end}"
            )
        self._pos += size
