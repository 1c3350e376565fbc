"""Addresses and signers used to sign extrinsics."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, ClassVar

from .codec import encode_compact, encode_with_length_prefix
from .rpc_numbers import U32_MAX

__all__ = ["MultiAddress", "ExtrinsicSigner", "StaticExtrinsicSigner"]

_ACCOUNT_ID_LEN = 32


@dataclass(frozen=True)
class MultiAddress:
    """An address: account id, account index, raw bytes, or a 32/20-byte address."""

    _VARIANTS: ClassVar[tuple[str, ...]] = ("Id", "Index", "Raw", "Address32", "Address20")
    _FIXED_LENGTHS: ClassVar[dict[str, int]] = {"Id": 32, "Address32": 32, "Address20": 20}

    variant: str
    value: Any

    def __post_init__(self) -> None:
        if self.variant not in self._VARIANTS:
            raise ValueError(f"unknown address variant {self.variant!r}")
        if self.variant == "Index":
            value = self.value
            if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= U32_MAX:
                raise ValueError(f"account index must be a u32, got {value!r}")
            return
        if not isinstance(self.value, (bytes, bytearray, memoryview)):
            raise TypeError(f"{self.variant} address needs bytes, got {self.value!r}")
        data = bytes(self.value)
        expected = self._FIXED_LENGTHS.get(self.variant)
        if expected is not None and len(data) != expected:
            raise ValueError(f"{self.variant} address needs {expected} bytes, got {len(data)}")
        object.__setattr__(self, "value", data)

    @classmethod
    def id(cls, account_id: bytes) -> MultiAddress:
        """Address by 32-byte account id."""
        return cls("Id", account_id)

    def encode(self) -> bytes:
        """SCALE encoding: variant index followed by the value."""
        index = bytes([self._VARIANTS.index(self.variant)])
        if self.variant == "Index":
            return index + encode_compact(self.value)
        if self.variant == "Raw":
            return index + encode_with_length_prefix(self.value)
        return index + self.value


@dataclass(frozen=True)
class ExtrinsicSigner:
    """Signs extrinsic payloads with a key pair.

    The key pair needs ``public()`` returning a 32-byte public key and
    ``sign(payload)`` returning a signature. ``signature_type``, if given,
    converts that signature into the runtime's signature type.
    """

    signer: Any
    signature_type: Callable[[Any], Any] | None = field(default=None, compare=False)
    account_id: bytes = field(init=False)
    _address: MultiAddress = field(init=False, repr=False)

    def __post_init__(self) -> None:
        public = self.signer.public()
        if not isinstance(public, (bytes, bytearray, memoryview)):
            raise TypeError(f"public key must be bytes, got {public!r}")
        account_id = bytes(public)
        if len(account_id) != _ACCOUNT_ID_LEN:
            raise ValueError(f"public key must be {_ACCOUNT_ID_LEN} bytes, got {len(account_id)}")
        object.__setattr__(self, "account_id", account_id)
        object.__setattr__(self, "_address", MultiAddress.id(account_id))

    def sign(self, payload: bytes) -> Any:
        """Sign ``payload`` and return the signature."""
        raw = self.signer.sign(bytes(payload))
        return raw if self.signature_type is None else self.signature_type(raw)

    def extrinsic_address(self) -> MultiAddress:
        """The signer's address as used in an extrinsic."""
        return self._address


class StaticExtrinsicSigner(ExtrinsicSigner):
    """A signer that is not bound to a runtime configuration."""

    def sign(self, payload: bytes) -> Any:
        """Sign ``payload`` and return the signature."""
        return super().sign(payload)

    def extrinsic_address(self) -> MultiAddress:
        """The signer's account-id address as used in an extrinsic."""
        return super().extrinsic_address()