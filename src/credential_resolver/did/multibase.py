"""Base58btc, multibase and multicodec helpers.

Used by the ``did:key`` resolver to decode public keys and by the codec to
render framed resource identifiers as text.

Multibase
---------
Only the base58btc encoding is supported; it is indicated by a leading
``z`` character.

Multicodec
----------
A multicodec value is an unsigned LEB128 varint prepended to the raw
bytes. ``0xed`` (Ed25519 public key) encodes as ``b"\\xed\\x01"`` and
``0xe7`` (secp256k1 public key) as ``b"\\xe7\\x01"``.
"""
from __future__ import annotations

# ---------------------------------------------------------------------------
# Multicodec codes
# ---------------------------------------------------------------------------

ED25519_PUB: int = 0xED
SECP256K1_PUB: int = 0xE7

MULTIBASE_BASE58BTC: str = "z"

# ---------------------------------------------------------------------------
# Base58btc codec
# ---------------------------------------------------------------------------

_BASE58_ALPHABET: str = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
_BASE58_INDEX: dict[str, int] = {char: index for index, char in enumerate(_BASE58_ALPHABET)}


def base58btc_encode(data: bytes) -> str:
    """Encode *data* to a base58btc string, preserving leading zero bytes as ``1``."""
    n = int.from_bytes(data, "big")
    result: list[str] = []
    while n > 0:
        n, remainder = divmod(n, 58)
        result.append(_BASE58_ALPHABET[remainder])
    for byte in data:
        if byte == 0:
            result.append("1")
        else:
            break
    return "".join(reversed(result))


def base58btc_decode(encoded: str) -> bytes:
    """Decode a base58btc string back to bytes.

    Raises
    ------
    ValueError
        If the string contains a character not in the base58btc alphabet.
    """
    n = 0
    for char in encoded:
        digit = _BASE58_INDEX.get(char)
        if digit is None:
            raise ValueError(
                f"Invalid base58btc character {char!r} in encoded string {encoded!r}"
            )
        n = n * 58 + digit
    result = n.to_bytes((n.bit_length() + 7) // 8, "big") if n > 0 else b""
    pad_size = len(encoded) - len(encoded.lstrip("1"))
    return b"\x00" * pad_size + result


# ---------------------------------------------------------------------------
# Multibase
# ---------------------------------------------------------------------------


def multibase_encode(data: bytes) -> str:
    """Encode *data* as a base58btc multibase string (``z`` prefix)."""
    return MULTIBASE_BASE58BTC + base58btc_encode(data)


def multibase_decode(encoded: str) -> bytes:
    """Decode a base58btc multibase string.

    Raises
    ------
    ValueError
        If the multibase prefix is not ``z`` or the body is not base58btc.
    """
    if not encoded.startswith(MULTIBASE_BASE58BTC):
        raise ValueError(
            f"Unsupported multibase prefix in {encoded!r}; only base58btc ('z') is supported."
        )
    body = encoded[len(MULTIBASE_BASE58BTC):]
    if not body:
        raise ValueError("Multibase value has no encoded body.")
    return base58btc_decode(body)


# ---------------------------------------------------------------------------
# Multicodec
# ---------------------------------------------------------------------------


def encode_varint(value: int) -> bytes:
    """Encode a non-negative integer as an unsigned LEB128 varint."""
    if value < 0:
        raise ValueError("varint value must be non-negative")
    out = bytearray()
    while True:
        byte = value & 0x7F
        value >>= 7
        if value:
            out.append(byte | 0x80)
        else:
            out.append(byte)
            return bytes(out)


def decode_varint(data: bytes) -> tuple[int, int]:
    """Decode an unsigned LEB128 varint from the start of *data*.

    Returns
    -------
    tuple[int, int]
        ``(value, bytes_consumed)``.

    Raises
    ------
    ValueError
        If *data* ends before the varint terminates or the varint exceeds 9 bytes.
    """
    value = 0
    for index, byte in enumerate(data[:9]):
        value |= (byte & 0x7F) << (7 * index)
        if not byte & 0x80:
            return value, index + 1
    raise ValueError("Truncated or oversized multicodec varint.")


def multicodec_wrap(code: int, data: bytes) -> bytes:
    """Prepend the varint for *code* to *data*."""
    return encode_varint(code) + data


def multicodec_unwrap(data: bytes) -> tuple[int, bytes]:
    """Split *data* into ``(code, raw_bytes)``."""
    code, consumed = decode_varint(data)
    return code, data[consumed:]


__all__ = [
    "ED25519_PUB",
    "MULTIBASE_BASE58BTC",
    "SECP256K1_PUB",
    "base58btc_decode",
    "base58btc_encode",
    "decode_varint",
    "encode_varint",
    "multibase_decode",
    "multibase_encode",
    "multicodec_unwrap",
    "multicodec_wrap",
]
