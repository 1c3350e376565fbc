import pytest

from substrate_primitives.codec import encode_compact
from substrate_primitives.config import (
    ASSET_RUNTIME_CONFIG,
    DEFAULT_RUNTIME_CONFIG,
    RuntimeConfig,
    with_extrinsic_params,
)
from substrate_primitives.extrinsic_params import (
    AssetTip,
    Era,
    GenericAdditionalParams,
    PlainTip,
)

GENESIS = bytes(32)
CHECKPOINT = bytes(range(32))


def test_asset_config_uses_asset_tip():
    assert ASSET_RUNTIME_CONFIG.make_tip(5) == AssetTip(5)


def test_default_config_uses_plain_tip():
    assert DEFAULT_RUNTIME_CONFIG.make_tip(5) == PlainTip(5)
    assert DEFAULT_RUNTIME_CONFIG.name == "DefaultRuntimeConfig"


def test_with_extrinsic_params_leaves_original_unchanged():
    plain = with_extrinsic_params(ASSET_RUNTIME_CONFIG, PlainTip)
    assert plain.tip_type is PlainTip
    assert ASSET_RUNTIME_CONFIG.tip_type is AssetTip
    assert plain.index_max == ASSET_RUNTIME_CONFIG.index_max
    assert plain.balance_max == ASSET_RUNTIME_CONFIG.balance_max


def test_with_extrinsic_params_rejects_unknown_tip_type():
    with pytest.raises(TypeError):
        with_extrinsic_params(ASSET_RUNTIME_CONFIG, int)


def test_with_extrinsic_params_rejects_non_config():
    with pytest.raises(TypeError):
        with_extrinsic_params("config", PlainTip)


def test_make_tip_rejects_negative_amount():
    with pytest.raises(ValueError):
        DEFAULT_RUNTIME_CONFIG.make_tip(-1)


def test_make_tip_rejects_too_large_amount():
    with pytest.raises(ValueError):
        DEFAULT_RUNTIME_CONFIG.make_tip(DEFAULT_RUNTIME_CONFIG.balance_max + 1)


def test_extrinsic_params_default_checkpoint_is_genesis():
    params = DEFAULT_RUNTIME_CONFIG.extrinsic_params(1, 2, 3, GENESIS)
    assert params.mortality_checkpoint == GENESIS
    assert params.tip == PlainTip(0)
    assert params.era == Era.immortal()


def test_extrinsic_params_signed_extra_encoding():
    additional = GenericAdditionalParams().tip(100)
    params = DEFAULT_RUNTIME_CONFIG.extrinsic_params(1, 1, 10, GENESIS, additional)
    expected = Era.immortal().encode() + encode_compact(10) + PlainTip(100).encode()
    assert params.signed_extra().encode() == expected


def test_asset_config_coerces_plain_tip():
    additional = GenericAdditionalParams().tip(7)
    params = ASSET_RUNTIME_CONFIG.extrinsic_params(1, 1, 0, GENESIS, additional)
    assert params.tip == AssetTip(7)


def test_plain_config_rejects_asset_tip_with_asset():
    additional = GenericAdditionalParams(AssetTip(3).of_asset(9))
    with pytest.raises(TypeError):
        DEFAULT_RUNTIME_CONFIG.extrinsic_params(1, 1, 0, GENESIS, additional)


def test_extrinsic_params_keeps_era_and_checkpoint():
    era = Era.mortal(8, 0)
    additional = GenericAdditionalParams().era(era, CHECKPOINT)
    params = DEFAULT_RUNTIME_CONFIG.extrinsic_params(1, 1, 0, GENESIS, additional)
    assert params.era == era
    assert params.mortality_checkpoint == CHECKPOINT


def test_nonce_must_fit_index():
    with pytest.raises(ValueError):
        ASSET_RUNTIME_CONFIG.extrinsic_params(1, 1, ASSET_RUNTIME_CONFIG.index_max + 1, GENESIS)


def test_invalid_tip_type_in_constructor():
    with pytest.raises(TypeError):
        RuntimeConfig("broken", tip_type=str)