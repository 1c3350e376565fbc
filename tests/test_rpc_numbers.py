import pytest
from hypothesis import given
from hypothesis import strategies as st

from substrate_primitives.rpc_numbers import NumberOrHex, TryFromIntError

U32_MAX = (1 << 32) - 1
U64_MAX = (1 << 64) - 1
U128_MAX = (1 << 128) - 1
U256_MAX = (1 << 256) - 1


def test_default_is_number_zero():
    default = NumberOrHex()
    assert default == NumberOrHex(0, is_hex=False)
    assert default.into_u256() == 0
    assert default.to_json() == 0


def test_from_int_small_is_number():
    value = NumberOrHex.from_int(5)
    assert value.is_hex is False
    assert value.to_u32() == 5


def test_from_int_large_is_hex():
    value = NumberOrHex.from_int(U64_MAX + 1)
    assert value.is_hex is True
    assert value.into_u256() == U64_MAX + 1


def test_number_and_hex_with_same_value_differ():
    assert NumberOrHex(7) != NumberOrHex(7, is_hex=True)
    assert NumberOrHex(7).into_u256() == NumberOrHex(7, is_hex=True).into_u256()


def test_hex_json_form():
    assert NumberOrHex(255, is_hex=True).to_json() == "0xff"


@pytest.mark.parametrize(
    "value, method, limit",
    [("to_u32", "to_u32", U32_MAX), ("to_u64", "to_u64", U64_MAX), ("to_u128", "to_u128", U128_MAX)],
)
def test_conversions_at_and_past_limit(value, method, limit):
    assert getattr(NumberOrHex(limit, is_hex=True), method)() == limit
    with pytest.raises(TryFromIntError):
        getattr(NumberOrHex(limit + 1, is_hex=True), method)()


def test_u32_conversion_of_number_out_of_range():
    with pytest.raises(TryFromIntError):
        NumberOrHex(U32_MAX + 1).to_u32()


@given(st.integers(min_value=0, max_value=U64_MAX))
def test_number_json_round_trip(value):
    number = NumberOrHex(value)
    assert number.to_json() == value
    assert NumberOrHex.from_json(number.to_json()) == number


@given(st.integers(min_value=0, max_value=U256_MAX))
def test_hex_json_round_trip(value):
    number = NumberOrHex(value, is_hex=True)
    assert NumberOrHex.from_json(number.to_json()) == number


def test_from_json_accepts_uppercase_and_leading_zeros():
    assert NumberOrHex.from_json("0x00FF") == NumberOrHex.from_json("0xff")


@pytest.mark.parametrize(
    "raw",
    ["ff", "0x", "0xzz", "0x" + "1" * 65, -1, True, 1.5, U64_MAX + 1, None, [1]],
)
def test_from_json_rejects_invalid(raw):
    with pytest.raises(ValueError):
        NumberOrHex.from_json(raw)


def test_construction_checks_range():
    with pytest.raises(ValueError):
        NumberOrHex(U64_MAX + 1)
    with pytest.raises(ValueError):
        NumberOrHex(U256_MAX + 1, is_hex=True)
    with pytest.raises(ValueError):
        NumberOrHex(-1)


def test_from_int_rejects_out_of_range_and_non_integers():
    with pytest.raises(ValueError):
        NumberOrHex.from_int(U256_MAX + 1)
    with pytest.raises(ValueError):
        NumberOrHex.from_int(-3)
    with pytest.raises(ValueError):
        NumberOrHex.from_int("12")


def test_int_conversion():
    assert int(NumberOrHex(42)) == 42