"""Bounds-checked little-endian reads and path-or-bytes I/O."""
from __future__ import annotations

import struct
from pathlib import Path
from typing import Union

from .errors import ElmaIOError

Source = Union[str, Path, bytes, bytearray, memoryview]

UNEXPECTED_EOF = "UnexpectedEof"
INVALID_DATA = "InvalidData"


class ByteReader:
    """Sequential reader over an in-memory buffer.

    Every read is checked against the buffer end; running out of data raises
    ``ElmaIOError("UnexpectedEof")`` instead of ``struct.error``.
    """

    def __init__(self, data: bytes, offset: int = 0):
        self.data = memoryview(data)
        self.offset = offset

    @property
    def remaining(self) -> int:
        return len(self.data) - self.offset

    def _take(self, n: int) -> memoryview:
        if n < 0 or n > self.remaining:
            raise ElmaIOError(UNEXPECTED_EOF)
        chunk = self.data[self.offset:self.offset + n]
        self.offset += n
        return chunk

    def read_bytes(self, n: int) -> bytes:
        return bytes(self._take(n))

    def skip(self, n: int) -> None:
        self._take(n)

    def read(self, fmt: str) -> tuple:
        return struct.unpack(fmt, self._take(struct.calcsize(fmt)))

    def read_one(self, fmt: str):
        return self.read(fmt)[0]

    def read_array(self, code: str, count: int) -> tuple:
        """Read ``count`` consecutive little-endian values of one struct code."""
        if count < 0:
            raise ElmaIOError(INVALID_DATA)
        return self.read(f"<{count}{code}")


def read_source(source: Source) -> bytes:
    """Return the bytes of ``source``: a path is read from disk, a buffer is used as is."""
    if isinstance(source, (bytes, bytearray, memoryview)):
        return bytes(source)
    try:
        with open(source, "rb") as f:
            return f.read()
    except OSError as e:
        raise ElmaIOError(type(e).__name__) from None


def write_sink(path: Union[str, Path], data: bytes) -> None:
    try:
        with open(path, "wb") as f:
            f.write(data)
    except OSError as e:
        raise ElmaIOError(type(e).__name__) from None
