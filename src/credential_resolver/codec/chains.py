"""Chain framings for 32-byte resource identifier payloads.

A chain tag names the framing rules a target chain applies to the same
underlying payload. Two conventions exist:

* **context-tagged**: the raw bytes are the bare payload; which chain they
  belong to is known only from the caller's context (``dock``).
* **prefix-tagged**: the raw bytes carry an explicit prefix byte, optionally
  followed by a checksum suffix (``dock-ss58``, ``cheqd-testnet``,
  ``cheqd-mainnet``).

=================  ==========================================  ============
tag                raw layout                                  text form
=================  ==========================================  ============
``dock``           payload (32)                                ``0x`` + hex
``dock-ss58``      0x16 + payload + blake2b checksum (35)      base58btc
``cheqd-testnet``  0x74 + payload (33)                         ``z`` base58
``cheqd-mainnet``  0x6d + payload (33)                         ``z`` base58
=================  ==========================================  ============

Framings are stateless; every function in this module is pure.
"""
from __future__ import annotations

import re
from abc import ABC, abstractmethod
from types import MappingProxyType

from credential_resolver.codec.ss58 import DOCK_ADDRESS_TYPE, ss58_frame, ss58_unframe
from credential_resolver.did.multibase import (
    base58btc_decode,
    base58btc_encode,
    multibase_decode,
    multibase_encode,
)
from credential_resolver.errors import InvalidIdentifierFormatError

PAYLOAD_SIZE: int = 32

_HEX_DIGITS = re.compile(r"[0-9a-fA-F]*")


class ChainFraming(ABC):
    """Framing rules for one chain tag.

    Parameters
    ----------
    tag:
        The chain tag, e.g. ``"cheqd-testnet"``.
    qualifier:
        The chain segment used in qualified strings, e.g. ``"cheqd:testnet"``.
    """

    def __init__(self, tag: str, qualifier: str, payload_size: int = PAYLOAD_SIZE) -> None:
        self.tag = tag
        self.qualifier = qualifier
        self.payload_size = payload_size

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.tag!r})"

    @property
    @abstractmethod
    def raw_size(self) -> int:
        """Length in bytes of a framed identifier."""

    @abstractmethod
    def frame(self, payload: bytes) -> bytes:
        """Wrap a validated payload in this chain's framing."""

    @abstractmethod
    def unframe(self, raw: bytes) -> bytes:
        """Strip and verify the framing, returning the payload."""

    @abstractmethod
    def to_text(self, raw: bytes) -> str:
        """Render framed bytes in this chain's text form."""

    @abstractmethod
    def from_text(self, text: str) -> bytes:
        """Parse this chain's text form into framed bytes."""

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def check_payload(self, payload: bytes) -> bytes:
        if not isinstance(payload, (bytes, bytearray)):
            raise InvalidIdentifierFormatError(self.tag, "payload must be bytes")
        if len(payload) != self.payload_size:
            raise InvalidIdentifierFormatError(
                self.tag,
                f"payload must be {self.payload_size} bytes, got {len(payload)}",
            )
        return bytes(payload)

    def check_length(self, raw: bytes) -> None:
        if len(raw) != self.raw_size:
            raise InvalidIdentifierFormatError(
                self.tag, f"expected {self.raw_size} bytes, got {len(raw)}"
            )


class ContextFraming(ChainFraming):
    """Bare payload; the chain is implied by the caller's context."""

    @property
    def raw_size(self) -> int:
        return self.payload_size

    def frame(self, payload: bytes) -> bytes:
        return self.check_payload(payload)

    def unframe(self, raw: bytes) -> bytes:
        self.check_length(raw)
        return bytes(raw)

    def to_text(self, raw: bytes) -> str:
        return "0x" + bytes(raw).hex()

    def from_text(self, text: str) -> bytes:
        body = text[2:] if text[:2].lower() == "0x" else text
        if _HEX_DIGITS.fullmatch(body) is None:
            raise InvalidIdentifierFormatError(self.tag, f"{text!r} is not hex")
        try:
            return bytes.fromhex(body)
        except ValueError as exc:
            raise InvalidIdentifierFormatError(self.tag, f"{text!r} is not hex") from exc


class PrefixByteFraming(ChainFraming):
    """A single prefix byte followed by the payload, rendered as base58btc multibase."""

    def __init__(self, tag: str, qualifier: str, prefix: int) -> None:
        super().__init__(tag, qualifier)
        self.prefix = prefix

    @property
    def raw_size(self) -> int:
        return 1 + self.payload_size

    def frame(self, payload: bytes) -> bytes:
        return bytes([self.prefix]) + self.check_payload(payload)

    def unframe(self, raw: bytes) -> bytes:
        self.check_length(raw)
        if raw[0] != self.prefix:
            raise InvalidIdentifierFormatError(
                self.tag,
                f"prefix byte 0x{raw[0]:02x} does not match 0x{self.prefix:02x}",
            )
        return bytes(raw[1:])

    def to_text(self, raw: bytes) -> str:
        return multibase_encode(bytes(raw))

    def from_text(self, text: str) -> bytes:
        try:
            return multibase_decode(text)
        except ValueError as exc:
            raise InvalidIdentifierFormatError(self.tag, str(exc)) from exc


class SS58Framing(ChainFraming):
    """SS58: address-type prefix byte, payload and a 2-byte blake2b checksum suffix."""

    def __init__(self, tag: str, qualifier: str, address_type: int) -> None:
        super().__init__(tag, qualifier)
        self.address_type = address_type

    @property
    def raw_size(self) -> int:
        return 1 + self.payload_size + 2

    def frame(self, payload: bytes) -> bytes:
        return ss58_frame(self.check_payload(payload), self.address_type)

    def unframe(self, raw: bytes) -> bytes:
        try:
            address_type, payload = ss58_unframe(bytes(raw), self.payload_size)
        except ValueError as exc:
            raise InvalidIdentifierFormatError(self.tag, str(exc)) from exc
        if address_type != self.address_type:
            raise InvalidIdentifierFormatError(
                self.tag,
                f"address type {address_type} does not match {self.address_type}",
            )
        return payload

    def to_text(self, raw: bytes) -> str:
        return base58btc_encode(bytes(raw))

    def from_text(self, text: str) -> bytes:
        try:
            return base58btc_decode(text)
        except ValueError as exc:
            raise InvalidIdentifierFormatError(self.tag, str(exc)) from exc


# ---------------------------------------------------------------------------
# Built-in chain tags
# ---------------------------------------------------------------------------

DOCK = "dock"
DOCK_SS58 = "dock-ss58"
CHEQD_TESTNET = "cheqd-testnet"
CHEQD_MAINNET = "cheqd-mainnet"

CHAINS: MappingProxyType[str, ChainFraming] = MappingProxyType(
    {
        DOCK: ContextFraming(DOCK, "dock"),
        DOCK_SS58: SS58Framing(DOCK_SS58, "dock", DOCK_ADDRESS_TYPE),
        CHEQD_TESTNET: PrefixByteFraming(CHEQD_TESTNET, "cheqd:testnet", 0x74),
        CHEQD_MAINNET: PrefixByteFraming(CHEQD_MAINNET, "cheqd:mainnet", 0x6D),
    }
)


def chain_framing(chain_tag: str) -> ChainFraming:
    """Return the framing registered for *chain_tag*.

    Raises
    ------
    InvalidIdentifierFormatError
        If the tag is unknown.
    """
    framing = CHAINS.get(chain_tag)
    if framing is None:
        raise InvalidIdentifierFormatError(
            str(chain_tag), f"unknown chain tag; supported: {sorted(CHAINS)}"
        )
    return framing


__all__ = [
    "CHAINS",
    "CHEQD_MAINNET",
    "CHEQD_TESTNET",
    "ChainFraming",
    "ContextFraming",
    "DOCK",
    "DOCK_SS58",
    "PAYLOAD_SIZE",
    "PrefixByteFraming",
    "SS58Framing",
    "chain_framing",
]
