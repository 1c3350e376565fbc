"""SCALE helpers, RPC parameters, account and fee types, extrinsic parameters, V4 extrinsics and signers for Substrate chains."""

__version__ = "0.1.0"