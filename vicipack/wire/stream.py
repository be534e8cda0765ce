"""
Byte sources consumed by the decoder.

Both sources expose the same small interface: ``read_tag()`` returns the next
tag byte or ``None`` at a clean end of input, ``read_exact(n)`` returns exactly
``n`` bytes or raises :class:`UnexpectedEndOfInput`, and ``position`` is the
number of bytes consumed so far.
"""
from __future__ import annotations

from typing import Optional, Protocol

from vicipack.errors import UnderlyingIoFailure, UnexpectedEndOfInput


class ByteSource(Protocol):
    position: int

    def read_tag(self) -> Optional[int]:
        ...

    def read_exact(self, size: int, what: str = "payload") -> bytes:
        ...


class Readable(Protocol):
    def read(self, size: int = -1) -> bytes:
        ...


class SliceSource:
    """Reads from an in-memory buffer without copying it up front."""

    def __init__(self, data: bytes) -> None:
        self._data = memoryview(data)
        self.position = 0

    def read_tag(self) -> Optional[int]:
        if self.position >= len(self._data):
            return None
        tag = self._data[self.position]
        self.position += 1
        return tag

    def read_exact(self, size: int, what: str = "payload") -> bytes:
        end = self.position + size
        if end > len(self._data):
            raise UnexpectedEndOfInput(f"EOF while parsing {what}", position=self.position)
        chunk = self._data[self.position:end].tobytes()
        self.position = end
        return chunk


class StreamSource:
    """Reads from a blocking file-like object (socket file, pipe, ``BytesIO``)."""

    def __init__(self, stream: Readable) -> None:
        self._stream = stream
        self.position = 0

    def _read(self, size: int) -> bytes:
        buf = bytearray()
        while len(buf) < size:
            try:
                chunk = self._stream.read(size - len(buf))
            except OSError as exc:
                raise UnderlyingIoFailure(str(exc), position=self.position + len(buf)) from exc
            if not chunk:
                break
            buf.extend(chunk)
        return bytes(buf)

    def read_tag(self) -> Optional[int]:
        chunk = self._read(1)
        if not chunk:
            return None
        self.position += 1
        return chunk[0]

    def read_exact(self, size: int, what: str = "payload") -> bytes:
        chunk = self._read(size)
        if len(chunk) < size:
            raise UnexpectedEndOfInput(f"EOF while parsing {what}", position=self.position)
        self.position += size
        return chunk
