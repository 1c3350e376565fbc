"""A number that can be given either as a JSON number or as a hex string."""

from __future__ import annotations

import string
from dataclasses import dataclass
from typing import Any

__all__ = ["TryFromIntError", "NumberOrHex"]

U32_MAX = (1 << 32) - 1
U64_MAX = (1 << 64) - 1
U128_MAX = (1 << 128) - 1
U256_MAX = (1 << 256) - 1

_HEX_DIGITS = frozenset(string.hexdigits)


class TryFromIntError(ValueError):
    """Raised when a number does not fit the requested integer width."""


@dataclass(frozen=True)
class NumberOrHex:
    """Either a plain u64 number or a U256 carried as a hex string.

    Large values are sent as hex so that JSON consumers with limited integer
    precision do not overflow.
    """

    value: int = 0
    is_hex: bool = False

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValueError(f"expected an integer, got {self.value!r}")
        limit = U256_MAX if self.is_hex else U64_MAX
        if not 0 <= self.value <= limit:
            kind = "U256" if self.is_hex else "u64"
            raise ValueError(f"{self.value} does not fit into {kind}")

    @classmethod
    def from_int(cls, value: int) -> NumberOrHex:
        """Wrap an integer: values fitting a u64 become numbers, larger ones hex."""
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"expected an integer, got {value!r}")
        return cls(value, is_hex=value > U64_MAX)

    @classmethod
    def from_json(cls, value: Any) -> NumberOrHex:
        """Parse a JSON value: a u64 number or a ``0x``-prefixed hex string."""
        if isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= U64_MAX:
            return cls(value)
        if isinstance(value, str):
            return cls(_parse_hex(value), is_hex=True)
        raise ValueError("data did not match any variant of untagged enum NumberOrHex")

    def to_json(self) -> int | str:
        """Serialise as a JSON number or a ``0x``-prefixed hex string."""
        if self.is_hex:
            return f"0x{self.value:x}"
        return self.value

    def into_u256(self) -> int:
        """Return the value as an unbounded integer (at most 256 bits)."""
        return self.value

    def to_u32(self) -> int:
        """Return the value, failing if it does not fit into 32 bits."""
        return self._checked(U32_MAX)

    def to_u64(self) -> int:
        """Return the value, failing if it does not fit into 64 bits."""
        return self._checked(U64_MAX)

    def to_u128(self) -> int:
        """Return the value, failing if it does not fit into 128 bits."""
        return self._checked(U128_MAX)

    def __int__(self) -> int:
        return self.value

    def _checked(self, limit: int) -> int:
        if self.value > limit:
            raise TryFromIntError(f"{self.value} is out of range (max {limit})")
        return self.value


def _parse_hex(text: str) -> int:
    if not text.startswith("0x"):
        raise ValueError(f"invalid hex value {text!r}: missing 0x prefix")
    digits = text[2:]
    if not digits:
        raise ValueError("invalid hex value: expected a non-empty hex string")
    if len(digits) > 64:
        raise ValueError(f"invalid hex value {text!r}: too many digits for U256")
    if not _HEX_DIGITS.issuperset(digits):
        raise ValueError(f"invalid hex value {text!r}: not a hex string")
    return int(digits, 16)