"""Growable write buffer and cursor-based read buffer in network byte order."""

from __future__ import annotations

from . import byteorder


class BufferUnderflow(ValueError):
    """Raised when a read asks for more bytes than remain."""


class WriteBuffer:
    """Accumulates bytes and big-endian integers."""

    def __init__(self) -> None:
        self._buffer = bytearray()

    def __len__(self) -> int:
        return len(self._buffer)

    def write_bytes(self, data) -> None:
        """Append raw bytes."""
        self._buffer.extend(data)

    def write_uint64(self, value: int) -> None:
        self._buffer.extend(byteorder.write_be64(value))

    def write_uint32(self, value: int) -> None:
        self._buffer.extend(byteorder.write_be32(value))

    def write_uint16(self, value: int) -> None:
        self._buffer.extend(byteorder.write_be16(value))

    def write_uint8(self, value: int) -> None:
        self._buffer.extend(value.to_bytes(1, "big"))

    def getvalue(self) -> bytes:
        """Return everything written so far."""
        return bytes(self._buffer)


class ReadBuffer:
    """Reads big-endian integers and byte runs from a fixed block of data."""

    def __init__(self, data) -> None:
        self._data = bytes(data)
        self._start = 0

    def __len__(self) -> int:
        return len(self._data) - self._start

    def peek_bytes(self, size: int) -> bytes:
        """Return the next size bytes without consuming them."""
        if size < 0:
            raise ValueError("size must not be negative")
        if size > len(self):
            raise BufferUnderflow(f"need {size} bytes, {len(self)} remain")
        return self._data[self._start:self._start + size]

    def read_bytes(self, size: int) -> bytes:
        """Return and consume the next size bytes."""
        chunk = self.peek_bytes(size)
        self._start += size
        return chunk

    def read_string(self, size: int) -> str:
        """Return and consume the next size bytes decoded as UTF-8."""
        chunk = self.peek_bytes(size)
        text = chunk.decode("utf-8")
        self._start += size
        return text

    def consume(self, size: int) -> None:
        """Skip up to size bytes; never past the end."""
        if size < 0:
            raise ValueError("size must not be negative")
        self._start += min(size, len(self))

    def peek_uint64(self) -> int:
        return byteorder.read_be64(self.peek_bytes(8))

    def peek_uint32(self) -> int:
        return byteorder.read_be32(self.peek_bytes(4))

    def peek_uint16(self) -> int:
        return byteorder.read_be16(self.peek_bytes(2))

    def peek_uint8(self) -> int:
        return self.peek_bytes(1)[0]

    def read_uint64(self) -> int:
        return byteorder.read_be64(self.read_bytes(8))

    def read_uint32(self) -> int:
        return byteorder.read_be32(self.read_bytes(4))

    def read_uint16(self) -> int:
        return byteorder.read_be16(self.read_bytes(2))

    def read_uint8(self) -> int:
        return self.read_bytes(1)[0]