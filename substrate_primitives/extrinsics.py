"""Version 4 unchecked extrinsics and their SCALE and hex forms."""

from __future__ import annotations

import binascii
from dataclasses import dataclass
from typing import Any, Callable

from .codec import ByteReader, CodecError, blake2_256, encode_with_length_prefix

__all__ = ["CallIndex", "UncheckedExtrinsicV4"]

CallIndex = tuple[int, int]
"""Pallet and call index that prefix every call."""

_V4 = 4
_SIGNED_BIT = 0b1000_0000
_VERSION_MASK = 0b0111_1111

Decoder = Callable[[ByteReader], Any]


def _encode_item(item: Any) -> bytes:
    if isinstance(item, (bytes, bytearray, memoryview)):
        return bytes(item)
    encode = getattr(item, "encode", None)
    if callable(encode):
        return encode()
    raise TypeError(f"cannot encode {item!r}")


@dataclass(frozen=True)
class UncheckedExtrinsicV4:
    """An extrinsic in the V4 format, signed or unsigned.

    ``signature`` is ``(address, signature, extra)`` for signed extrinsics.
    Each part, and the function, is bytes or an object with ``encode()``.
    """

    function: Any
    signature: tuple | None = None

    def __post_init__(self) -> None:
        if self.signature is not None and len(self.signature) != 3:
            raise ValueError("signature must be a tuple of (address, signature, extra)")

    @classmethod
    def new_signed(cls, function: Any, signed: Any, signature: Any, extra: Any) -> UncheckedExtrinsicV4:
        """A signed extrinsic."""
        return cls(function, (signed, signature, extra))

    @classmethod
    def new_unsigned(cls, function: Any) -> UncheckedExtrinsicV4:
        """An unsigned extrinsic."""
        return cls(function)

    def is_signed(self) -> bool:
        return self.signature is not None

    def encode(self) -> bytes:
        """SCALE encoding, length-prefixed so that it is compatible with ``Vec<u8>``."""
        if self.signature is not None:
            body = bytes([_V4 | _SIGNED_BIT]) + b"".join(_encode_item(p) for p in self.signature)
        else:
            body = bytes([_V4 & _VERSION_MASK])
        return encode_with_length_prefix(body + _encode_item(self.function))

    @classmethod
    def decode(
        cls,
        data: Any,
        signature_decoder: Decoder | None = None,
        function_decoder: Decoder | None = None,
    ) -> UncheckedExtrinsicV4:
        """Decode from bytes or a :class:`ByteReader`.

        ``signature_decoder`` reads ``(address, signature, extra)`` for signed
        extrinsics. Without ``function_decoder`` the function is the remaining bytes.
        """
        reader = data if isinstance(data, ByteReader) else ByteReader(data)
        reader.read_compact()
        version = reader.read_byte()
        is_signed = bool(version & _SIGNED_BIT)
        if version & _VERSION_MASK != _V4:
            raise CodecError("Invalid transaction version")
        signature = None
        if is_signed:
            if signature_decoder is None:
                raise CodecError("signed extrinsic but no signature decoder given")
            signature = tuple(signature_decoder(reader))
        if function_decoder is None:
            function = reader.read(reader.remaining())
        else:
            function = function_decoder(reader)
        return cls(function, signature)

    def to_hex(self) -> str:
        """The encoding as a ``0x``-prefixed hex string."""
        return "0x" + self.encode().hex()

    @classmethod
    def from_hex(
        cls,
        text: str,
        signature_decoder: Decoder | None = None,
        function_decoder: Decoder | None = None,
    ) -> UncheckedExtrinsicV4:
        """Decode from a hex string, with or without ``0x`` prefix."""
        digits = text[2:] if text.startswith("0x") else text
        try:
            raw = binascii.unhexlify(digits)
        except (binascii.Error, ValueError) as exc:
            raise ValueError(f"invalid hex string {text!r}") from exc
        try:
            return cls.decode(raw, signature_decoder, function_decoder)
        except CodecError as exc:
            raise CodecError(f"Decode error: {exc}") from exc

    def hash(self) -> bytes:
        """BLAKE2-256 hash of the encoding."""
        return blake2_256(self.encode())

    def __repr__(self) -> str:
        shown = None if self.signature is None else (self.signature[0], self.signature[2])
        return f"UncheckedExtrinsic({shown!r}, {self.function!r})"