"""Runtime configurations: which tip type and integer widths a chain uses."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

from .extrinsic_params import (
    AssetTip,
    GenericAdditionalParams,
    GenericExtrinsicParams,
    PlainTip,
)
from .rpc_numbers import U32_MAX, U128_MAX

__all__ = [
    "RuntimeConfig",
    "with_extrinsic_params",
    "ASSET_RUNTIME_CONFIG",
    "DEFAULT_RUNTIME_CONFIG",
]

_TIP_TYPES = (PlainTip, AssetTip)


@dataclass(frozen=True)
class RuntimeConfig:
    """Describes the types a runtime uses when building extrinsics.

    ``tip_type`` selects how the tip is encoded in the signed extra;
    ``index_max`` and ``balance_max`` bound the nonce and balance values.
    """

    name: str
    tip_type: type = AssetTip
    index_max: int = U32_MAX
    balance_max: int = U128_MAX

    def __post_init__(self) -> None:
        if not isinstance(self.tip_type, type) or not issubclass(self.tip_type, _TIP_TYPES):
            raise TypeError(f"tip_type must be PlainTip or AssetTip, got {self.tip_type!r}")

    def make_tip(self, amount: int) -> Any:
        """Create a tip of this runtime's tip type."""
        if isinstance(amount, bool) or not isinstance(amount, int):
            raise TypeError(f"tip amount must be an integer, got {amount!r}")
        if not 0 <= amount <= self.balance_max:
            raise ValueError(f"tip amount {amount} is out of range (max {self.balance_max})")
        return self.tip_type(amount)

    def extrinsic_params(
        self,
        spec_version: int,
        transaction_version: int,
        nonce: int,
        genesis_hash: bytes,
        additional_params: GenericAdditionalParams | None = None,
    ) -> GenericExtrinsicParams:
        """Build extrinsic parameters whose tip has this runtime's tip type."""
        if isinstance(nonce, bool) or not isinstance(nonce, int) or not 0 <= nonce <= self.index_max:
            raise ValueError(f"nonce must be an unsigned integer up to {self.index_max}, got {nonce!r}")
        if additional_params is None:
            additional_params = GenericAdditionalParams(self.make_tip(0))
        params = additional_params.tip(self._coerce_tip(additional_params.current_tip))
        return GenericExtrinsicParams.new(
            spec_version, transaction_version, nonce, genesis_hash, params
        )

    def _coerce_tip(self, tip: Any) -> Any:
        if isinstance(tip, self.tip_type):
            return tip
        if isinstance(tip, AssetTip) and tip.asset is not None:
            raise TypeError(f"{self.name} cannot pay a tip in asset {tip.asset}")
        return self.make_tip(int(tip))


def with_extrinsic_params(config: RuntimeConfig, tip_type: type) -> RuntimeConfig:
    """Return a copy of ``config`` that uses ``tip_type`` for its extrinsic parameters."""
    if not isinstance(config, RuntimeConfig):
        raise TypeError(f"expected a RuntimeConfig, got {config!r}")
    return replace(config, name=f"{config.name}[{getattr(tip_type, '__name__', tip_type)}]", tip_type=tip_type)


ASSET_RUNTIME_CONFIG = RuntimeConfig("AssetRuntimeConfig", AssetTip)
"""Standard config for nodes that use the asset payment pallet."""

DEFAULT_RUNTIME_CONFIG = replace(
    with_extrinsic_params(ASSET_RUNTIME_CONFIG, PlainTip), name="DefaultRuntimeConfig"
)
"""Standard config for Substrate and Polkadot nodes, paying tips in the native token."""