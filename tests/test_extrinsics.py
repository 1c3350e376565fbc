import pytest

from substrate_primitives.codec import ByteReader, CodecError, blake2_256, encode_with_length_prefix
from substrate_primitives.extrinsic_params import (
    Era,
    GenericAdditionalParams,
    GenericExtrinsicParams,
    GenericSignedExtra,
    PlainTip,
)
from substrate_primitives.extrinsics import UncheckedExtrinsicV4
from substrate_primitives.signer import MultiAddress

ACCOUNT = bytes(range(32))
SIGNATURE = b"\x01" + bytes(range(64))


def _decode_signature(reader: ByteReader):
    address = MultiAddress.id(reader.read(33)[1:])
    signature = reader.read(65)
    extra = GenericSignedExtra(Era.decode(reader), reader.read_compact(), PlainTip(reader.read_compact()))
    return address, signature, extra


def _signed_xt(function=None, era=None, nonce=0, tip=0):
    params = GenericAdditionalParams().era(era or Era.mortal(8, 0), bytes(32)).tip(tip)
    extra = GenericExtrinsicParams.new(0, 0, nonce, bytes(32), params).signed_extra()
    function = encode_with_length_prefix(b"\x01\x01\x01") if function is None else function
    return UncheckedExtrinsicV4.new_signed(function, MultiAddress.id(ACCOUNT), SIGNATURE, extra)


def test_encode_decode_roundtrip_works():
    xt = _signed_xt()
    decoded = UncheckedExtrinsicV4.decode(xt.encode(), _decode_signature)
    assert decoded == xt


def test_signed_version_byte():
    encoded = _signed_xt().encode()
    reader = ByteReader(encoded)
    length = reader.read_compact()
    assert length == reader.remaining()
    assert reader.read_byte() == 0x84


def test_unsigned_encoding():
    xt = UncheckedExtrinsicV4.new_unsigned(b"\x01\x02")
    assert xt.encode() == b"\x0c\x04\x01\x02"
    assert xt.is_signed() is False


def test_is_signed():
    assert _signed_xt().is_signed() is True


def test_serialize_deserialize_works():
    call = b"\x06\x02" + bytes(range(40))
    xt = UncheckedExtrinsicV4.new_unsigned(call)
    text = xt.to_hex()
    assert text.startswith("0x")
    assert UncheckedExtrinsicV4.from_hex(text).function == call


def test_from_hex_without_prefix():
    xt = UncheckedExtrinsicV4.new_unsigned(b"\xaa")
    assert UncheckedExtrinsicV4.from_hex(xt.encode().hex()) == xt


def test_hex_roundtrip_signed():
    xt = _signed_xt(nonce=10, tip=100, era=Era.immortal())
    assert UncheckedExtrinsicV4.from_hex(xt.to_hex(), _decode_signature) == xt


def test_from_hex_invalid_digits():
    with pytest.raises(ValueError):
        UncheckedExtrinsicV4.from_hex("0xzz")


def test_from_hex_decode_error_message():
    with pytest.raises(CodecError, match="Decode error"):
        UncheckedExtrinsicV4.from_hex("0x0405")


def test_invalid_version_rejected():
    with pytest.raises(CodecError, match="Invalid transaction version"):
        UncheckedExtrinsicV4.decode(b"\x04\x05")


def test_signed_without_decoder_rejected():
    with pytest.raises(CodecError):
        UncheckedExtrinsicV4.decode(_signed_xt().encode())


def test_function_decoder_used():
    xt = _signed_xt()

    def read_vec(reader):
        return encode_with_length_prefix(reader.read(reader.read_compact()))

    assert UncheckedExtrinsicV4.decode(xt.encode(), _decode_signature, read_vec).function == xt.function


def test_hash_matches_blake2_of_encoding():
    xt = _signed_xt()
    assert xt.hash() == blake2_256(xt.encode())
    assert len(xt.hash()) == 32


def test_large_extrinsic_hash():
    xt = _signed_xt(function=encode_with_length_prefix(bytes(5000)), era=Era.immortal(), nonce=10, tip=100)
    decoded = UncheckedExtrinsicV4.decode(xt.encode(), _decode_signature)
    assert decoded.hash() == xt.hash()


def test_repr_unsigned():
    assert repr(UncheckedExtrinsicV4.new_unsigned(b"\x01")) == "UncheckedExtrinsic(None, b'\\x01')"


def test_repr_signed_omits_signature():
    assert repr(SIGNATURE) not in repr(_signed_xt())


def test_bad_signature_tuple():
    with pytest.raises(ValueError):
        UncheckedExtrinsicV4(b"\x00", (1, 2))