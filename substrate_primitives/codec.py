"""SCALE codec helpers: compact integers, length prefixes and hashing."""

from __future__ import annotations

import hashlib

__all__ = [
    "CodecError",
    "ByteReader",
    "encode_compact",
    "encode_with_length_prefix",
    "blake2_256",
]

_SINGLE_BYTE_LIMIT = 1 << 6
_TWO_BYTE_LIMIT = 1 << 14
_FOUR_BYTE_LIMIT = 1 << 30
_MAX_BIG_INT_BYTES = 67  # 4 + 63: the largest length the mode byte can describe


class CodecError(ValueError):
    """Raised when data cannot be encoded or decoded."""


class ByteReader:
    """Sequential reader over a byte string."""

    def __init__(self, data: bytes | bytearray | memoryview) -> None:
        self._data = bytes(data)
        self._pos = 0

    def read_byte(self) -> int:
        """Read a single byte and return it as an integer."""
        return self.read(1)[0]

    def read(self, count: int) -> bytes:
        """Read exactly ``count`` bytes."""
        if count < 0:
            raise CodecError(f"cannot read a negative number of bytes: {count}")
        end = self._pos + count
        if end > len(self._data):
            raise CodecError("Not enough data to fill buffer")
        chunk = self._data[self._pos:end]
        self._pos = end
        return chunk

    def read_compact(self) -> int:
        """Read a SCALE compact-encoded unsigned integer."""
        first = self.read_byte()
        mode = first & 0b11
        if mode == 0:
            return first >> 2
        if mode == 1:
            value = int.from_bytes(bytes([first]) + self.read(1), "little") >> 2
            if value < _SINGLE_BYTE_LIMIT:
                raise CodecError("out of range decoding Compact")
            return value
        if mode == 2:
            value = int.from_bytes(bytes([first]) + self.read(3), "little") >> 2
            if value < _TWO_BYTE_LIMIT:
                raise CodecError("out of range decoding Compact")
            return value
        length = (first >> 2) + 4
        value = int.from_bytes(self.read(length), "little")
        if value < _FOUR_BYTE_LIMIT or (length > 4 and value < 1 << (8 * (length - 1))):
            raise CodecError("out of range decoding Compact")
        return value

    def remaining(self) -> int:
        """Number of bytes not yet read."""
        return len(self._data) - self._pos


def encode_compact(value: int) -> bytes:
    """Encode a non-negative integer in SCALE compact form."""
    if value < 0:
        raise CodecError(f"compact encoding needs a non-negative integer, got {value}")
    if value < _SINGLE_BYTE_LIMIT:
        return bytes([value << 2])
    if value < _TWO_BYTE_LIMIT:
        return ((value << 2) | 0b01).to_bytes(2, "little")
    if value < _FOUR_BYTE_LIMIT:
        return ((value << 2) | 0b10).to_bytes(4, "little")
    length = max(4, (value.bit_length() + 7) // 8)
    if length > _MAX_BIG_INT_BYTES:
        raise CodecError("integer too large for compact encoding")
    return bytes([((length - 4) << 2) | 0b11]) + value.to_bytes(length, "little")


def encode_with_length_prefix(payload: bytes) -> bytes:
    """Prefix ``payload`` with its compact-encoded length, as a ``Vec<u8>`` would be."""
    payload = bytes(payload)
    return encode_compact(len(payload)) + payload


def blake2_256(data: bytes) -> bytes:
    """Return the 32-byte BLAKE2b digest of ``data``."""
    return hashlib.blake2b(bytes(data), digest_size=32).digest()