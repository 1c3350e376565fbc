# substrate_primitives

This package provides plain-Python building blocks for working with
Substrate-based chains:

- SCALE encoding helpers
- JSON-RPC parameter building
- account and fee types
- extrinsic parameters
- unchecked extrinsics in format V4
- signers

It has no runtime dependencies. BLAKE2-256 hashing uses `hashlib`.

## Installation

```
pip install .
```

To run the test suite:

```
pip install .[test]
pytest
```

## Modules

### `substrate_primitives.codec`

- `encode_compact` encodes SCALE compact integers.
- `encode_with_length_prefix` adds a compact length prefix to bytes.
- `ByteReader` reads bytes in sequence. Its methods are `read_byte`, `read`,
  `read_compact` and `remaining`.
- `blake2_256` returns a 32-byte BLAKE2b digest.
- `CodecError` is raised on malformed or short input. It is a `ValueError`.

### `substrate_primitives.rpc_numbers`

`NumberOrHex` holds a number that is either a u64 JSON integer or a U256
`0x` hex string.

- It is built with `from_int` or `from_json` and serialised with `to_json`.
- `into_u256` returns the value.
- `to_u32`, `to_u64` and `to_u128` return the value and raise
  `TryFromIntError` when it does not fit.

### `substrate_primitives.rpc_params`

`RpcParams` collects positional parameters.

- Add values with `insert` or `insert_with_allocation`. The two behave the
  same.
- `build` returns a compact JSON array string, or `None` when nothing was
  inserted.
- `to_json_value` returns the parsed array, or `[None]` when nothing was
  inserted.

### `substrate_primitives.types`

Account types:

- `ExtraFlags` has `old_logic`, `set_new_logic`, `is_new_logic` and `encode`.
- `AccountData` and `AccountInfo` each have `encode` and `decode`.

Fee types:

- `InclusionFee.inclusion_fee` and `FeeDetails.final_fee` return saturating
  u128 sums.
- `RuntimeDispatchInfo` is read and written as JSON. In JSON the partial fee
  is a decimal string.

Chain and staking types:

- `DispatchClass` has `all` and `non_mandatory`.
- `RewardDestination` has the members `STAKED`, `STASH`, `CONTROLLER` and
  `NONE`, the constructor `account(...)`, and `encode`.
- `Health` formats itself as `"<n> peers (syncing|idle)"`.
- `ChainType` has `DEVELOPMENT`, `LOCAL`, `LIVE` and custom names.

Most of these types have `to_json` and `from_json`. The JSON uses camelCase
keys.

### `substrate_primitives.extrinsic_params`

- `Era` is either `immortal()` or `mortal(period, current)`. It has `encode`
  and `decode`.
- Tips:
  - `PlainTip` is a compact amount.
  - `AssetTip` is a compact amount plus an optional asset id, set with
    `of_asset`.
- `GenericSignedExtra` holds the era, nonce and tip.
- `GenericAdditionalParams` is an immutable builder with the methods `era`
  and `tip`.
- `GenericExtrinsicParams.new(...)` builds the parameters.
  - `signed_extra` returns the signed extra.
  - `additional_signed` returns the additional signed tuple.
  - `encode_additional_signed` returns that tuple SCALE-encoded.
  - When no mortality checkpoint is given, the genesis hash is used.
- `SignedPayload.from_raw(call, extra, additional_signed)` builds a payload.
  Its `encoded()` method returns the payload bytes. Payloads longer than 256
  bytes are replaced by their BLAKE2-256 hash.

### `substrate_primitives.config`

`RuntimeConfig` describes how a runtime builds extrinsics:

- the tip type;
- the upper bound for the nonce;
- the upper bound for balances.

It has two methods:

- `make_tip` creates a tip of the runtime's tip type.
- `extrinsic_params` builds a `GenericExtrinsicParams` with a tip of that
  type.

`with_extrinsic_params(config, tip_type)` returns a copy of a config with a
different tip type.

Two configs are provided:

- `ASSET_RUNTIME_CONFIG` uses `AssetTip`.
- `DEFAULT_RUNTIME_CONFIG` uses `PlainTip`.

### `substrate_primitives.extrinsics`

`UncheckedExtrinsicV4` is an extrinsic in format V4.

- Create one with `new_signed` or `new_unsigned`. `is_signed` tells which
  kind it is.
- `encode` returns the length-prefixed SCALE encoding. `to_hex` returns it as
  hex.
- `decode` and `from_hex` read it back. They take optional decoder callables
  for the signature and for the function. Without a function decoder, the
  function is the remaining bytes.
- `hash` returns the BLAKE2-256 hash of the encoding.

### `substrate_primitives.signer`

`MultiAddress` has the variants `Id`, `Index`, `Raw`, `Address32` and
`Address20`. It has the constructor `id(...)` and the method `encode`.

`ExtrinsicSigner` and `StaticExtrinsicSigner` wrap a key-pair object that you
supply. The object must provide two methods:

- `public()`, which returns a 32-byte public key;
- `sign(payload)`.

Each signer exposes:

- `account_id`;
- `sign(payload)`, which can convert its result through an optional
  `signature_type`;
- `extrinsic_address()`, which returns a `MultiAddress.id`.

## Examples

Build RPC parameters:

```python
from substrate_primitives.rpc_params import RpcParams

params = RpcParams()
params.insert(0)
params.insert("0x00")
params.build()          # '[0,"0x00"]'
RpcParams().build()     # None
```

Accept block numbers in either JSON form:

```python
from substrate_primitives.rpc_numbers import NumberOrHex

NumberOrHex.from_json("0x10").to_u32()   # 16
NumberOrHex.from_json(42).into_u256()    # 42
```

Put together the signed extra for a transaction:

```python
from substrate_primitives.extrinsic_params import (
    Era, GenericAdditionalParams, GenericExtrinsicParams, PlainTip,
)

genesis = bytes(32)
additional = GenericAdditionalParams().era(Era.mortal(8, 0), genesis).tip(PlainTip(100))
params = GenericExtrinsicParams.new(1, 1, 0, genesis, additional)
params.signed_extra().encode()
```

Use a runtime configuration:

```python
from substrate_primitives.config import DEFAULT_RUNTIME_CONFIG

params = DEFAULT_RUNTIME_CONFIG.extrinsic_params(1, 1, 0, bytes(32))
params.tip              # PlainTip(tip=0)
```

Wrap a call in an unsigned extrinsic, encode it and read it back:

```python
from substrate_primitives.extrinsics import UncheckedExtrinsicV4

xt = UncheckedExtrinsicV4.new_unsigned(b"\x01\x01\x01")
encoded = xt.encode()
UncheckedExtrinsicV4.decode(encoded).function   # b'\x01\x01\x01'
xt.to_hex()
```

## What this package does not do

- It is not a node client. It opens no connections and sends no RPC
  requests. It does not read chain metadata, storage or events.
- It does not generate keys or implement signature schemes such as sr25519.
  The signers call the key-pair object you pass in.
- It does not know runtime call types. Calls, signatures and addresses are
  taken as bytes or as objects with an `encode()` method. Decoding anything
  beyond raw bytes needs decoder callables that you supply.