"""Fixed-width integer encoding in big- and little-endian byte order."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Union

BytesLike = Union[bytes, bytearray, memoryview]


def _write(value: int, size: int, order: str) -> bytes:
    return value.to_bytes(size, order)


def _read(data: BytesLike, size: int, order: str) -> int:
    if len(data) < size:
        raise ValueError(f"need {size} bytes, got {len(data)}")
    return int.from_bytes(bytes(data[:size]), order)


def write_be16(value: int) -> bytes:
    """Encode an unsigned 16-bit integer, big-endian."""
    return _write(value, 2, "big")


def write_be24(value: int) -> bytes:
    """Encode an unsigned 24-bit integer, big-endian."""
    return _write(value, 3, "big")


def write_be32(value: int) -> bytes:
    """Encode an unsigned 32-bit integer, big-endian."""
    return _write(value, 4, "big")


def write_be64(value: int) -> bytes:
    """Encode an unsigned 64-bit integer, big-endian."""
    return _write(value, 8, "big")


def read_be16(data: BytesLike) -> int:
    """Decode an unsigned 16-bit big-endian integer from the start of data."""
    return _read(data, 2, "big")


def read_be24(data: BytesLike) -> int:
    """Decode an unsigned 24-bit big-endian integer from the start of data."""
    return _read(data, 3, "big")


def read_be32(data: BytesLike) -> int:
    """Decode an unsigned 32-bit big-endian integer from the start of data."""
    return _read(data, 4, "big")


def read_be64(data: BytesLike) -> int:
    """Decode an unsigned 64-bit big-endian integer from the start of data."""
    return _read(data, 8, "big")


def write_le16(value: int) -> bytes:
    """Encode an unsigned 16-bit integer, little-endian."""
    return _write(value, 2, "little")


def write_le32(value: int) -> bytes:
    """Encode an unsigned 32-bit integer, little-endian."""
    return _write(value, 4, "little")


def write_le64(value: int) -> bytes:
    """Encode an unsigned 64-bit integer, little-endian."""
    return _write(value, 8, "little")


def read_le16(data: BytesLike) -> int:
    """Decode an unsigned 16-bit little-endian integer from the start of data."""
    return _read(data, 2, "little")


def read_le32(data: BytesLike) -> int:
    """Decode an unsigned 32-bit little-endian integer from the start of data."""
    return _read(data, 4, "little")


def read_le64(data: BytesLike) -> int:
    """Decode an unsigned 64-bit little-endian integer from the start of data."""
    return _read(data, 8, "little")


def buffers_to_bytes(buffers: BytesLike | Iterable[BytesLike]) -> bytes:
    """Join one buffer, or a sequence of buffers, into a single bytes object."""
    if isinstance(buffers, (bytes, bytearray, memoryview)):
        return bytes(buffers)
    return b"".join(bytes(chunk) for chunk in buffers)