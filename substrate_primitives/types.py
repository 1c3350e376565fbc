"""Account, fee and node-status types exchanged with a Substrate node."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar

from .codec import ByteReader
from .rpc_numbers import U128_MAX

__all__ = [
    "RefCount",
    "Properties",
    "IS_NEW_LOGIC",
    "ExtraFlags",
    "AccountData",
    "AccountInfo",
    "InclusionFee",
    "FeeDetails",
    "DispatchClass",
    "RuntimeDispatchInfo",
    "RewardDestination",
    "Health",
    "ChainType",
]

RefCount = int
"""Number of references an account has (a u32)."""

Properties = dict[str, Any]
"""Arbitrary chain-spec properties, as a JSON object."""

IS_NEW_LOGIC = 1 << 127

_U32_MAX = (1 << 32) - 1
_BALANCE_TEXT = re.compile(r"\+?[0-9]+")


def _uint(value: Any, limit: int, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= limit:
        raise ValueError(f"{name} must be an unsigned integer up to {limit}, got {value!r}")
    return value


def _reader(source: Any) -> ByteReader:
    return source if isinstance(source, ByteReader) else ByteReader(source)


def _read_uint(reader: ByteReader, size: int) -> int:
    return int.from_bytes(reader.read(size), "little")


def _json_object(value: Any, type_name: str) -> dict:
    if not isinstance(value, dict):
        raise ValueError(f"invalid type: expected struct {type_name}, got {value!r}")
    return value


def _required(obj: dict, key: str) -> Any:
    if key not in obj:
        raise ValueError(f"missing field `{key}`")
    return obj[key]


def _json_bool(value: Any, name: str) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"{name} must be a boolean, got {value!r}")
    return value


def _saturating_add(*values: int) -> int:
    return min(sum(values), U128_MAX)


def _encode_item(item: Any) -> bytes:
    if isinstance(item, (bytes, bytearray, memoryview)):
        return bytes(item)
    encode = getattr(item, "encode", None)
    if callable(encode):
        return encode()
    raise TypeError(f"cannot encode {item!r}")


@dataclass
class ExtraFlags:
    """Account flags; the top bit marks the new ref-counting logic."""

    bits: int = IS_NEW_LOGIC

    def __post_init__(self) -> None:
        _uint(self.bits, U128_MAX, "flags")

    @classmethod
    def old_logic(cls) -> ExtraFlags:
        """Flags with the new-logic bit cleared."""
        return cls(0)

    def set_new_logic(self) -> None:
        """Set the new-logic bit."""
        self.bits |= IS_NEW_LOGIC

    def is_new_logic(self) -> bool:
        """Whether the new-logic bit is set."""
        return self.bits & IS_NEW_LOGIC == IS_NEW_LOGIC

    def encode(self) -> bytes:
        """SCALE encoding: a little-endian u128."""
        return self.bits.to_bytes(16, "little")


@dataclass
class AccountData:
    """Balance information for an account (u128 balances)."""

    free: int = 0
    reserved: int = 0
    frozen: int = 0
    flags: ExtraFlags = field(default_factory=ExtraFlags)

    def __post_init__(self) -> None:
        for name in ("free", "reserved", "frozen"):
            _uint(getattr(self, name), U128_MAX, name)

    def encode(self) -> bytes:
        """SCALE encoding of the four fields in order."""
        return b"".join(
            (
                self.free.to_bytes(16, "little"),
                self.reserved.to_bytes(16, "little"),
                self.frozen.to_bytes(16, "little"),
                self.flags.encode(),
            )
        )

    @classmethod
    def decode(cls, reader: Any) -> AccountData:
        """Decode from a :class:`ByteReader` or bytes."""
        reader = _reader(reader)
        free, reserved, frozen, flags = (_read_uint(reader, 16) for _ in range(4))
        return cls(free, reserved, frozen, ExtraFlags(flags))


@dataclass
class AccountInfo:
    """Nonce, reference counts and balance data of an account."""

    nonce: int = 0
    consumers: RefCount = 0
    providers: RefCount = 0
    sufficients: RefCount = 0
    data: AccountData = field(default_factory=AccountData)

    def __post_init__(self) -> None:
        for name in ("nonce", "consumers", "providers", "sufficients"):
            _uint(getattr(self, name), _U32_MAX, name)

    def encode(self) -> bytes:
        """SCALE encoding: four little-endian u32 values, then the account data."""
        counters = (self.nonce, self.consumers, self.providers, self.sufficients)
        return b"".join(n.to_bytes(4, "little") for n in counters) + _encode_item(self.data)

    @classmethod
    def decode(cls, reader: Any) -> AccountInfo:
        """Decode from a :class:`ByteReader` or bytes."""
        reader = _reader(reader)
        nonce, consumers, providers, sufficients = (_read_uint(reader, 4) for _ in range(4))
        return cls(nonce, consumers, providers, sufficients, AccountData.decode(reader))


@dataclass(frozen=True)
class InclusionFee:
    """Base, length and adjusted weight fee of a transaction."""

    base_fee: int
    len_fee: int
    adjusted_weight_fee: int

    def __post_init__(self) -> None:
        for name in ("base_fee", "len_fee", "adjusted_weight_fee"):
            _uint(getattr(self, name), U128_MAX, name)

    def inclusion_fee(self) -> int:
        """Saturating sum of the three fee parts."""
        return _saturating_add(self.base_fee, self.len_fee, self.adjusted_weight_fee)

    def to_json(self) -> dict[str, int]:
        return {
            "baseFee": self.base_fee,
            "lenFee": self.len_fee,
            "adjustedWeightFee": self.adjusted_weight_fee,
        }

    @classmethod
    def from_json(cls, value: Any) -> InclusionFee:
        obj = _json_object(value, "InclusionFee")
        return cls(
            _required(obj, "baseFee"),
            _required(obj, "lenFee"),
            _required(obj, "adjustedWeightFee"),
        )


@dataclass(frozen=True)
class FeeDetails:
    """Optional inclusion fee plus tip. The tip is not part of the JSON form."""

    inclusion_fee: InclusionFee | None = None
    tip: int = 0

    def __post_init__(self) -> None:
        _uint(self.tip, U128_MAX, "tip")

    def final_fee(self) -> int:
        """Saturating sum of the inclusion fee (zero if absent) and the tip."""
        base = self.inclusion_fee.inclusion_fee() if self.inclusion_fee is not None else 0
        return _saturating_add(base, self.tip)

    def to_json(self) -> dict[str, Any]:
        fee = self.inclusion_fee.to_json() if self.inclusion_fee is not None else None
        return {"inclusionFee": fee}

    @classmethod
    def from_json(cls, value: Any) -> FeeDetails:
        obj = _json_object(value, "FeeDetails")
        fee = obj.get("inclusionFee")
        return cls(InclusionFee.from_json(fee) if fee is not None else None)


class DispatchClass(Enum):
    """Group of dispatch types."""

    NORMAL = "normal"
    OPERATIONAL = "operational"
    MANDATORY = "mandatory"

    @classmethod
    def all(cls) -> tuple[DispatchClass, ...]:
        """All dispatch classes."""
        return (cls.NORMAL, cls.OPERATIONAL, cls.MANDATORY)

    @classmethod
    def non_mandatory(cls) -> tuple[DispatchClass, ...]:
        """All dispatch classes except ``MANDATORY``."""
        return (cls.NORMAL, cls.OPERATIONAL)

    def to_json(self) -> str:
        return self.value

    @classmethod
    def from_json(cls, value: Any) -> DispatchClass:
        for member in cls:
            if member.value == value:
                return member
        raise ValueError(f"unknown variant {value!r}, expected one of normal, operational, mandatory")


def _default_weight() -> dict[str, int]:
    return {"ref_time": 0, "proof_size": 0}


@dataclass(frozen=True)
class RuntimeDispatchInfo:
    """Weight, class and partial fee of a dispatch as reported by the runtime.

    The weight is kept in its JSON form; the partial fee travels as a decimal string.
    """

    weight: Any = field(default_factory=_default_weight)
    dispatch_class: DispatchClass = DispatchClass.NORMAL
    partial_fee: int = 0

    def __post_init__(self) -> None:
        _uint(self.partial_fee, U128_MAX, "partial_fee")

    def to_json(self) -> dict[str, Any]:
        return {
            "weight": self.weight,
            "class": self.dispatch_class.to_json(),
            "partialFee": str(self.partial_fee),
        }

    @classmethod
    def from_json(cls, value: Any) -> RuntimeDispatchInfo:
        obj = _json_object(value, "RuntimeDispatchInfo")
        weight = _required(obj, "weight")
        dispatch_class = DispatchClass.from_json(_required(obj, "class"))
        fee_text = _required(obj, "partialFee")
        if not isinstance(fee_text, str):
            raise ValueError(f"invalid type: expected a string, got {fee_text!r}")
        if not _BALANCE_TEXT.fullmatch(fee_text) or int(fee_text) > U128_MAX:
            raise ValueError("Parse from string failed")
        return cls(weight, dispatch_class, int(fee_text))


@dataclass(frozen=True)
class RewardDestination:
    """Where staking rewards are paid."""

    STAKED: ClassVar[RewardDestination]
    STASH: ClassVar[RewardDestination]
    CONTROLLER: ClassVar[RewardDestination]
    NONE: ClassVar[RewardDestination]
    _VARIANTS: ClassVar[tuple[str, ...]] = ("Staked", "Stash", "Controller", "Account", "None")

    variant: str = "Staked"
    account_id: Any = None

    def __post_init__(self) -> None:
        if self.variant not in self._VARIANTS:
            raise ValueError(f"unknown reward destination {self.variant!r}")
        if (self.variant == "Account") != (self.account_id is not None):
            raise ValueError("an account id is given exactly for the Account destination")

    @classmethod
    def account(cls, account_id: Any) -> RewardDestination:
        """Pay into the given account."""
        return cls("Account", account_id)

    def encode(self) -> bytes:
        """SCALE encoding: variant index, then the account id for ``Account``."""
        index = bytes([self._VARIANTS.index(self.variant)])
        if self.variant == "Account":
            return index + _encode_item(self.account_id)
        return index


RewardDestination.STAKED = RewardDestination("Staked")
RewardDestination.STASH = RewardDestination("Stash")
RewardDestination.CONTROLLER = RewardDestination("Controller")
RewardDestination.NONE = RewardDestination("None")


@dataclass(frozen=True)
class Health:
    """Node health as returned by ``system_health``."""

    peers: int
    is_syncing: bool
    should_have_peers: bool

    def __str__(self) -> str:
        return f"{self.peers} peers ({'syncing' if self.is_syncing else 'idle'})"

    def to_json(self) -> dict[str, Any]:
        return {
            "peers": self.peers,
            "isSyncing": self.is_syncing,
            "shouldHavePeers": self.should_have_peers,
        }

    @classmethod
    def from_json(cls, value: Any) -> Health:
        obj = _json_object(value, "Health")
        peers = _required(obj, "peers")
        if isinstance(peers, bool) or not isinstance(peers, int) or peers < 0:
            raise ValueError(f"peers must be a non-negative integer, got {peers!r}")
        return cls(
            peers,
            _json_bool(_required(obj, "isSyncing"), "isSyncing"),
            _json_bool(_required(obj, "shouldHavePeers"), "shouldHavePeers"),
        )


@dataclass(frozen=True)
class ChainType:
    """Type of a chain: Development, Local, Live or a named custom type."""

    DEVELOPMENT: ClassVar[ChainType]
    LOCAL: ClassVar[ChainType]
    LIVE: ClassVar[ChainType]
    _UNIT_VARIANTS: ClassVar[tuple[str, ...]] = ("Development", "Local", "Live")

    variant: str
    name: str | None = None

    def __post_init__(self) -> None:
        if self.variant in self._UNIT_VARIANTS:
            if self.name is not None:
                raise ValueError(f"{self.variant} carries no name")
        elif self.variant == "Custom":
            if not isinstance(self.name, str):
                raise ValueError("a Custom chain type needs a name")
        else:
            raise ValueError(f"unknown chain type {self.variant!r}")

    def to_json(self) -> str | dict[str, str]:
        if self.variant == "Custom":
            return {"Custom": self.name}
        return self.variant

    @classmethod
    def from_json(cls, value: Any) -> ChainType:
        if isinstance(value, str) and value in cls._UNIT_VARIANTS:
            return cls(value)
        if isinstance(value, dict) and len(value) == 1 and isinstance(value.get("Custom"), str):
            return cls("Custom", value["Custom"])
        raise ValueError(f"unknown variant {value!r}, expected Development, Local, Live or Custom")


ChainType.DEVELOPMENT = ChainType("Development")
ChainType.LOCAL = ChainType("Local")
ChainType.LIVE = ChainType("Live")