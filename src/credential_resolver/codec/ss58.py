"""SS58 address encoding, as used by Substrate chains such as Dock.

Layout of the decoded bytes (single-byte address types only)::

    [address type] [payload ...] [checksum: 2 bytes]

The checksum is the first two bytes of
``blake2b(b"SS58PRE" + address_type + payload, digest_size=64)``.
Dock mainnet uses address type 22.
"""
from __future__ import annotations

import hashlib

from credential_resolver.did.multibase import base58btc_decode, base58btc_encode

SS58_PREFIX: bytes = b"SS58PRE"
CHECKSUM_SIZE: int = 2
DOCK_ADDRESS_TYPE: int = 22


def ss58_checksum(data: bytes) -> bytes:
    """Return the 2-byte SS58 checksum of ``address type + payload``."""
    return hashlib.blake2b(SS58_PREFIX + data, digest_size=64).digest()[:CHECKSUM_SIZE]


def ss58_frame(payload: bytes, address_type: int = DOCK_ADDRESS_TYPE) -> bytes:
    """Return ``address type + payload + checksum`` for *payload*."""
    if not 0 <= address_type < 64:
        raise ValueError(f"Only single-byte SS58 address types (0-63) are supported, got {address_type}.")
    body = bytes([address_type]) + payload
    return body + ss58_checksum(body)


def ss58_unframe(raw: bytes, payload_size: int = 32) -> tuple[int, bytes]:
    """Split framed SS58 bytes into ``(address_type, payload)``.

    Raises
    ------
    ValueError
        On a length, address type or checksum mismatch.
    """
    expected = 1 + payload_size + CHECKSUM_SIZE
    if len(raw) != expected:
        raise ValueError(f"expected {expected} bytes, got {len(raw)}")
    address_type = raw[0]
    if address_type >= 64:
        raise ValueError(f"unsupported SS58 address type byte 0x{address_type:02x}")
    body, checksum = raw[:-CHECKSUM_SIZE], raw[-CHECKSUM_SIZE:]
    if ss58_checksum(body) != checksum:
        raise ValueError("SS58 checksum mismatch")
    return address_type, body[1:]


def encode_ss58(payload: bytes, address_type: int = DOCK_ADDRESS_TYPE) -> str:
    """Encode a 32-byte payload as an SS58 address string."""
    return base58btc_encode(ss58_frame(payload, address_type))


def decode_ss58(address: str, payload_size: int = 32) -> tuple[int, bytes]:
    """Decode an SS58 address string into ``(address_type, payload)``.

    Raises
    ------
    ValueError
        If the string is not base58 or fails :func:`ss58_unframe`.
    """
    return ss58_unframe(base58btc_decode(address), payload_size)


def validate_ss58_id(address: str, address_type: int = DOCK_ADDRESS_TYPE) -> None:
    """Raise ``ValueError`` unless *address* is a valid SS58 id of *address_type*.

    Suitable as the ``validate_id`` hook of
    :class:`~credential_resolver.resolver.ledger.LedgerResolver` for ``did:dock``.
    """
    decoded_type, _ = decode_ss58(address)
    if decoded_type != address_type:
        raise ValueError(
            f"SS58 address type {decoded_type} does not match expected {address_type}"
        )


__all__ = [
    "CHECKSUM_SIZE",
    "DOCK_ADDRESS_TYPE",
    "decode_ss58",
    "encode_ss58",
    "ss58_checksum",
    "ss58_frame",
    "ss58_unframe",
    "validate_ss58_id",
]
