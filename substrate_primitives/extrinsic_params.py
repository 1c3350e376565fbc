"""Signed extra, additional signed data and tips used to build extrinsics."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any

from .codec import ByteReader, CodecError, blake2_256, encode_compact

__all__ = [
    "Era",
    "PlainTip",
    "AssetTip",
    "GenericSignedExtra",
    "GenericAdditionalParams",
    "GenericExtrinsicParams",
    "SignedPayload",
]

_U32_MAX = (1 << 32) - 1
_U64_MAX = (1 << 64) - 1
_U128_MAX = (1 << 128) - 1
_MAX_PERIOD = 1 << 16
_MIN_PERIOD = 4
_PAYLOAD_HASH_THRESHOLD = 256


def _uint(value: Any, limit: int, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= limit:
        raise ValueError(f"{name} must be an unsigned integer up to {limit}, got {value!r}")
    return value


def _encode_item(item: Any) -> bytes:
    if isinstance(item, (bytes, bytearray, memoryview)):
        return bytes(item)
    encode = getattr(item, "encode", None)
    if callable(encode):
        return encode()
    raise TypeError(f"cannot encode {item!r}")


def _check_encodable(item: Any, name: str) -> None:
    if not isinstance(item, (bytes, bytearray, memoryview)) and not callable(
        getattr(item, "encode", None)
    ):
        raise TypeError(f"{name} must be bytes or have an encode() method, got {item!r}")


def _hash_bytes(value: Any, name: str) -> bytes:
    if not isinstance(value, (bytes, bytearray, memoryview)):
        raise TypeError(f"{name} must be bytes, got {value!r}")
    return bytes(value)


def _next_power_of_two(value: int) -> int:
    if value <= 1:
        return 1
    result = 1 << (value - 1).bit_length()
    return _MAX_PERIOD if result > _U64_MAX else result


@dataclass(frozen=True)
class Era:
    """Lifetime of a transaction: immortal (period 0) or mortal with a period and phase."""

    period: int = 0
    phase: int = 0

    def __post_init__(self) -> None:
        _uint(self.period, _MAX_PERIOD, "period")
        _uint(self.phase, _U64_MAX, "phase")
        if self.period == 0:
            if self.phase != 0:
                raise ValueError("an immortal era has no phase")
        elif (
            self.period < _MIN_PERIOD
            or self.period & (self.period - 1)
            or self.phase >= self.period
        ):
            raise ValueError(f"invalid mortal era: period {self.period}, phase {self.phase}")

    @property
    def is_immortal(self) -> bool:
        return self.period == 0

    @classmethod
    def immortal(cls) -> Era:
        """An era that never expires."""
        return cls()

    @classmethod
    def mortal(cls, period: int, current: int) -> Era:
        """A mortal era valid for about ``period`` blocks starting near block ``current``.

        The period is rounded up to a power of two in [4, 65536]; the phase is
        quantized so that it can be encoded in 12 bits.
        """
        _uint(period, _U64_MAX, "period")
        _uint(current, _U64_MAX, "current")
        period = min(max(_next_power_of_two(period), _MIN_PERIOD), _MAX_PERIOD)
        phase = current % period
        quantize_factor = max(period >> 12, 1)
        return cls(period, phase // quantize_factor * quantize_factor)

    def encode(self) -> bytes:
        """SCALE encoding: one zero byte if immortal, otherwise two bytes."""
        if self.is_immortal:
            return b"\x00"
        quantize_factor = max(self.period >> 12, 1)
        trailing_zeros = (self.period & -self.period).bit_length() - 1
        encoded = min(max(trailing_zeros - 1, 1), 15) | ((self.phase // quantize_factor) << 4)
        return encoded.to_bytes(2, "little")

    @classmethod
    def decode(cls, reader: Any) -> Era:
        """Decode from a :class:`ByteReader` or bytes."""
        if not isinstance(reader, ByteReader):
            reader = ByteReader(reader)
        first = reader.read_byte()
        if first == 0:
            return cls.immortal()
        encoded = first | (reader.read_byte() << 8)
        period = 2 << (encoded & 0xF)
        quantize_factor = max(period >> 12, 1)
        phase = (encoded >> 4) * quantize_factor
        if period >= _MIN_PERIOD and phase < period:
            return cls(period, phase)
        raise CodecError("Invalid period and phase")


@dataclass(frozen=True)
class PlainTip:
    """Tip paid in the native currency."""

    tip: int = 0

    def __post_init__(self) -> None:
        _uint(self.tip, _U128_MAX, "tip")

    def __int__(self) -> int:
        return self.tip

    def encode(self) -> bytes:
        """SCALE encoding: the tip as a compact integer."""
        return encode_compact(self.tip)


@dataclass(frozen=True)
class AssetTip:
    """Tip that may be paid in a given asset instead of the native currency."""

    tip: int = 0
    asset: int | None = None

    def __post_init__(self) -> None:
        _uint(self.tip, _U128_MAX, "tip")
        if self.asset is not None:
            _uint(self.asset, _U32_MAX, "asset")

    def __int__(self) -> int:
        return self.tip

    def of_asset(self, asset: int) -> AssetTip:
        """Return a copy of this tip designated for ``asset``."""
        return replace(self, asset=asset)

    def encode(self) -> bytes:
        """SCALE encoding: compact tip, then an optional little-endian u32 asset id."""
        asset = b"\x00" if self.asset is None else b"\x01" + self.asset.to_bytes(4, "little")
        return encode_compact(self.tip) + asset


def _as_tip(value: Any, tip_type: type) -> Any:
    if isinstance(value, (PlainTip, AssetTip)):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return tip_type(value)
    raise TypeError(f"cannot use {value!r} as a tip")


@dataclass(frozen=True)
class GenericSignedExtra:
    """Era, nonce and tip sent along with a signed extrinsic."""

    era: Era
    nonce: int
    tip: Any

    def __post_init__(self) -> None:
        _uint(self.nonce, _U128_MAX, "nonce")
        _check_encodable(self.tip, "tip")

    def encode(self) -> bytes:
        """SCALE encoding: era, compact nonce, tip."""
        return self.era.encode() + encode_compact(self.nonce) + _encode_item(self.tip)


class GenericAdditionalParams:
    """Optional extrinsic settings: era with its checkpoint block, and tip.

    The builder methods return new instances and leave this one unchanged.
    """

    __slots__ = ("_era", "_checkpoint", "_tip")

    def __init__(self, tip: Any = None) -> None:
        self._era = Era.immortal()
        self._checkpoint: bytes | None = None
        self._tip = PlainTip() if tip is None else _as_tip(tip, PlainTip)

    @property
    def current_era(self) -> Era:
        return self._era

    @property
    def mortality_checkpoint(self) -> bytes | None:
        return self._checkpoint

    @property
    def current_tip(self) -> Any:
        return self._tip

    def _copy(self) -> GenericAdditionalParams:
        clone = GenericAdditionalParams(self._tip)
        clone._era = self._era
        clone._checkpoint = self._checkpoint
        return clone

    def era(self, era: Era, checkpoint: bytes) -> GenericAdditionalParams:
        """Set the era and the block hash after which the extrinsic becomes valid."""
        if not isinstance(era, Era):
            raise TypeError(f"expected an Era, got {era!r}")
        clone = self._copy()
        clone._era = era
        clone._checkpoint = _hash_bytes(checkpoint, "checkpoint")
        return clone

    def tip(self, tip: Any) -> GenericAdditionalParams:
        """Set the tip for the block author; integers become the current tip type."""
        clone = self._copy()
        clone._tip = _as_tip(tip, type(self._tip))
        return clone

    def _key(self) -> tuple:
        return (self._era, self._checkpoint, self._tip)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GenericAdditionalParams):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __repr__(self) -> str:
        return (
            f"GenericAdditionalParams(era={self._era!r}, "
            f"mortality_checkpoint={self._checkpoint!r}, tip={self._tip!r})"
        )


@dataclass(frozen=True)
class GenericExtrinsicParams:
    """Signed extra and additional signed data as used by a default Substrate node."""

    era: Era
    nonce: int
    tip: Any
    spec_version: int
    transaction_version: int
    genesis_hash: bytes
    mortality_checkpoint: bytes

    def __post_init__(self) -> None:
        _uint(self.spec_version, _U32_MAX, "spec_version")
        _uint(self.transaction_version, _U32_MAX, "transaction_version")
        _uint(self.nonce, _U128_MAX, "nonce")

    @classmethod
    def new(
        cls,
        spec_version: int,
        transaction_version: int,
        nonce: int,
        genesis_hash: bytes,
        additional_params: GenericAdditionalParams | None = None,
    ) -> GenericExtrinsicParams:
        """Build the parameters; without a checkpoint the genesis hash is used."""
        params = additional_params if additional_params is not None else GenericAdditionalParams()
        genesis = _hash_bytes(genesis_hash, "genesis_hash")
        checkpoint = params.mortality_checkpoint
        return cls(
            era=params.current_era,
            nonce=nonce,
            tip=params.current_tip,
            spec_version=spec_version,
            transaction_version=transaction_version,
            genesis_hash=genesis,
            mortality_checkpoint=genesis if checkpoint is None else checkpoint,
        )

    def signed_extra(self) -> GenericSignedExtra:
        """The extra data sent along with the extrinsic."""
        return GenericSignedExtra(self.era, self.nonce, self.tip)

    def additional_signed(self) -> tuple:
        """The additional signed tuple; ``()`` stands for checks that carry no value."""
        return (
            (),
            self.spec_version,
            self.transaction_version,
            self.genesis_hash,
            self.mortality_checkpoint,
            (),
            (),
            (),
        )

    def encode_additional_signed(self) -> bytes:
        """SCALE encoding of :meth:`additional_signed`."""
        return b"".join(
            (
                self.spec_version.to_bytes(4, "little"),
                self.transaction_version.to_bytes(4, "little"),
                self.genesis_hash,
                self.mortality_checkpoint,
            )
        )


@dataclass(frozen=True)
class SignedPayload:
    """Call, signed extra and additional signed data that make up what gets signed."""

    call: Any
    extra: Any
    additional_signed: Any = field(default=b"")

    def __post_init__(self) -> None:
        _check_encodable(self.call, "call")
        _check_encodable(self.extra, "extra")
        _check_encodable(self.additional_signed, "additional_signed")

    @classmethod
    def from_raw(cls, call: Any, extra: Any, additional_signed: Any) -> SignedPayload:
        """Create a payload from its components (bytes or objects with ``encode()``)."""
        return cls(call, extra, additional_signed)

    def encoded(self) -> bytes:
        """The bytes to sign; payloads over 256 bytes are replaced by their BLAKE2-256 hash."""
        payload = b"".join(
            _encode_item(part) for part in (self.call, self.extra, self.additional_signed)
        )
        if len(payload) > _PAYLOAD_HASH_THRESHOLD:
            return blake2_256(payload)
        return payload