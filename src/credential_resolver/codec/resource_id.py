"""Chain-qualified resource identifiers and the decode/encode/convert codec.

Usage
-----
::

    from credential_resolver.codec import ResourceIdentifier, ResourceKind, convert

    dock_id = ResourceIdentifier.from_payload(ResourceKind.ACCUMULATOR, payload, "dock")
    cheqd_id = convert(dock_id, "cheqd-testnet")
    assert cheqd_id == dock_id
    print(cheqd_id)  # accumulator:cheqd:testnet:z...
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from credential_resolver.codec.chains import (
    CHAINS,
    CHEQD_MAINNET,
    CHEQD_TESTNET,
    DOCK,
    DOCK_SS58,
    chain_framing,
)
from credential_resolver.errors import InvalidIdentifierFormatError


class ResourceKind(str, Enum):
    """Kinds of on-chain resource addressed by a :class:`ResourceIdentifier`."""

    ACCUMULATOR = "accumulator"
    BLOB = "blob"


# ---------------------------------------------------------------------------
# Codec functions
# ---------------------------------------------------------------------------


def decode(raw: Union[bytes, str], chain_tag: str) -> bytes:
    """Validate a framed identifier and return its 32-byte payload.

    Parameters
    ----------
    raw:
        Framed bytes, or the chain's text form (hex for ``dock``,
        base58btc for the prefix-tagged chains).
    chain_tag:
        Which framing *raw* is in.

    Raises
    ------
    InvalidIdentifierFormatError
        On a wrong length, prefix byte or checksum, or an unknown tag.
    """
    framing = chain_framing(chain_tag)
    if isinstance(raw, str):
        raw = framing.from_text(raw)
    elif not isinstance(raw, (bytes, bytearray)):
        raise InvalidIdentifierFormatError(chain_tag, "expected bytes or str")
    return framing.unframe(bytes(raw))


def encode(payload: bytes, chain_tag: str) -> bytes:
    """Frame a 32-byte *payload* for *chain_tag*."""
    return chain_framing(chain_tag).frame(payload)


def to_text(raw: bytes, chain_tag: str) -> str:
    """Render framed bytes in the text form of *chain_tag*."""
    return chain_framing(chain_tag).to_text(raw)


def convert(identifier: "ResourceIdentifier", target_chain_tag: str) -> "ResourceIdentifier":
    """Re-frame *identifier* for *target_chain_tag*, preserving kind and payload."""
    payload = decode(identifier.raw, identifier.chain_tag)
    return ResourceIdentifier(
        kind=identifier.kind,
        chain_tag=target_chain_tag,
        raw=encode(payload, target_chain_tag),
    )


# ---------------------------------------------------------------------------
# ResourceIdentifier
# ---------------------------------------------------------------------------

_QUALIFIED_PREFIXES: tuple[tuple[str, str], ...] = (
    ("cheqd:testnet:", CHEQD_TESTNET),
    ("cheqd:mainnet:", CHEQD_MAINNET),
)


@dataclass(frozen=True, eq=False)
class ResourceIdentifier:
    """A resource identifier framed for a particular chain.

    The framing is validated on construction. Two identifiers compare equal
    when their kinds match and their payloads are bit-identical, whichever
    chains they are framed for.

    Parameters
    ----------
    kind:
        Accumulator or blob.
    chain_tag:
        The framing of :attr:`raw`; see :mod:`credential_resolver.codec.chains`.
    raw:
        The framed bytes.
    """

    kind: ResourceKind
    chain_tag: str
    raw: bytes
    payload: bytes = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if not isinstance(self.kind, ResourceKind):
            object.__setattr__(self, "kind", _kind(self.kind, f"{self.kind}:{self.chain_tag}"))
        object.__setattr__(self, "raw", bytes(self.raw))
        object.__setattr__(self, "payload", decode(self.raw, self.chain_tag))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ResourceIdentifier):
            return NotImplemented
        return self.kind == other.kind and self.payload == other.payload

    def __hash__(self) -> int:
        return hash((self.kind, self.payload))

    def __str__(self) -> str:
        qualifier = chain_framing(self.chain_tag).qualifier
        return f"{self.kind.value}:{qualifier}:{self.text}"

    @property
    def text(self) -> str:
        """The unqualified text form of :attr:`raw`."""
        return to_text(self.raw, self.chain_tag)

    @classmethod
    def from_payload(
        cls, kind: Union[ResourceKind, str], payload: bytes, chain_tag: str = DOCK
    ) -> "ResourceIdentifier":
        """Build an identifier by framing *payload* for *chain_tag*."""
        return cls(kind=kind, chain_tag=chain_tag, raw=encode(payload, chain_tag))

    @classmethod
    def parse(cls, text: str) -> "ResourceIdentifier":
        """Parse a qualified identifier string.

        Accepted shapes::

            <kind>:dock:0x<hex>
            <kind>:dock:<ss58>
            <kind>:cheqd:testnet:z<base58>
            <kind>:cheqd:mainnet:z<base58>
            dock:<kind>:<0x hex | ss58>      (legacy ordering)

        Raises
        ------
        InvalidIdentifierFormatError
            If the string matches none of the shapes or its value fails
            :func:`decode`.
        """
        if not isinstance(text, str) or not text:
            raise InvalidIdentifierFormatError("", "identifier must be a non-empty string")

        head, sep, rest = text.partition(":")
        if not sep:
            raise InvalidIdentifierFormatError("", f"{text!r} is not a qualified identifier")

        if head == "dock":
            kind_text, sep, value = rest.partition(":")
            if not sep:
                raise InvalidIdentifierFormatError(DOCK, f"{text!r} is missing a value")
            return cls._from_dock_value(_kind(kind_text, text), value)

        kind = _kind(head, text)
        if rest.startswith("dock:"):
            return cls._from_dock_value(kind, rest[len("dock:"):])
        for prefix, tag in _QUALIFIED_PREFIXES:
            if rest.startswith(prefix):
                value = rest[len(prefix):]
                return cls(kind=kind, chain_tag=tag, raw=chain_framing(tag).from_text(value))
        raise InvalidIdentifierFormatError(
            "", f"{text!r} names no supported chain; supported: {sorted(CHAINS)}"
        )

    @classmethod
    def _from_dock_value(cls, kind: ResourceKind, value: str) -> "ResourceIdentifier":
        tag = DOCK if value[:2].lower() == "0x" else DOCK_SS58
        return cls(kind=kind, chain_tag=tag, raw=chain_framing(tag).from_text(value))


def _kind(value: str, text: str) -> ResourceKind:
    try:
        return ResourceKind(value)
    except ValueError:
        raise InvalidIdentifierFormatError(
            "", f"{text!r} has unknown resource kind {value!r}"
        ) from None


__all__ = [
    "ResourceIdentifier",
    "ResourceKind",
    "convert",
    "decode",
    "encode",
    "to_text",
]
