"""credential_resolver.codec: resource identifier framing across chains.

Accumulator and blob identifiers share one 32-byte payload but are framed
differently per chain. :func:`convert` moves an identifier between framings
without touching its payload.
"""
from __future__ import annotations

from credential_resolver.codec.chains import (
    CHAINS,
    CHEQD_MAINNET,
    CHEQD_TESTNET,
    DOCK,
    DOCK_SS58,
    ChainFraming,
    chain_framing,
)
from credential_resolver.codec.resource_id import (
    ResourceIdentifier,
    ResourceKind,
    convert,
    decode,
    encode,
    to_text,
)
from credential_resolver.codec.ss58 import decode_ss58, encode_ss58, validate_ss58_id

__all__ = [
    "CHAINS",
    "CHEQD_MAINNET",
    "CHEQD_TESTNET",
    "ChainFraming",
    "DOCK",
    "DOCK_SS58",
    "ResourceIdentifier",
    "ResourceKind",
    "chain_framing",
    "convert",
    "decode",
    "decode_ss58",
    "encode",
    "encode_ss58",
    "to_text",
    "validate_ss58_id",
]
