"""Identifier: parse and serialize ``prefix:method:id`` identifiers and DID URLs.

Grammar
-------
::

    <scheme>:<method>:<method-specific-id>[;name=value...][/path][?query][#fragment]

``scheme`` is ``did`` for decentralized identifiers but any lowercase
scheme is accepted so that resource handles such as
``accumulator:dock:0x...`` route through the same registry.

Parsing is lossless: ``str(Identifier.parse(text)) == text`` for every
input the parser accepts. An empty query (``did:x:y?``) is kept as ``""``
and distinguished from an absent one (``None``); the same holds for path
and fragment.
"""
from __future__ import annotations

import re
from dataclasses import dataclass

from credential_resolver.errors import MalformedIdentifierError

DID_SCHEME: str = "did"

_SCHEME = r"(?P<scheme>[a-z][a-z0-9+.\-]*)"
_METHOD = r"(?P<method>[a-zA-Z0-9_]+)"
_ID_CHAR = r"[a-zA-Z0-9_.%\-]"
_METHOD_ID = rf"(?P<msid>{_ID_CHAR}+(?::{_ID_CHAR}+)*)"
_PARAM_CHAR = r"[a-zA-Z0-9_.:%\-]"
_PARAMS = rf"(?P<params>(?:;{_PARAM_CHAR}+={_PARAM_CHAR}*)*)"
_PATH = r"(?P<path>/[^#?]*)?"
_QUERY = r"(?P<query>\?[^#]*)?"
_FRAGMENT = r"(?P<fragment>#.*)?"

_IDENTIFIER_PATTERN = re.compile(
    rf"{_SCHEME}:{_METHOD}:{_METHOD_ID}{_PARAMS}{_PATH}{_QUERY}{_FRAGMENT}",
    re.DOTALL,
)


@dataclass(frozen=True)
class Identifier:
    """A parsed identifier or DID URL.

    Parameters
    ----------
    scheme:
        Leading segment, ``"did"`` for DIDs.
    method:
        Second segment; together with ``scheme`` it selects a resolver.
    method_specific_id:
        Everything between the method and the first parameter, path,
        query or fragment delimiter.
    params:
        Ordered ``(name, value)`` pairs from ``;name=value`` segments.
    path:
        Path including its leading ``/``, or ``None``.
    query:
        Query without the leading ``?``, or ``None``.
    fragment:
        Fragment without the leading ``#``, or ``None``.
    """

    scheme: str
    method: str
    method_specific_id: str
    params: tuple[tuple[str, str], ...] = ()
    path: str | None = None
    query: str | None = None
    fragment: str | None = None

    @classmethod
    def parse(cls, text: str) -> "Identifier":
        """Parse *text* into an :class:`Identifier`.

        Raises
        ------
        MalformedIdentifierError
            If *text* is empty, not a string, or does not match the grammar.
        """
        if not isinstance(text, str):
            raise MalformedIdentifierError(repr(text), "identifier must be a string")
        if not text:
            raise MalformedIdentifierError(text, "identifier is empty")

        match = _IDENTIFIER_PATTERN.fullmatch(text)
        if match is None:
            raise MalformedIdentifierError(
                text,
                "expected <scheme>:<method>:<method-specific-id>"
                "[;params][/path][?query][#fragment]",
            )

        params: list[tuple[str, str]] = []
        raw_params = match.group("params")
        if raw_params:
            for segment in raw_params[1:].split(";"):
                name, _, value = segment.partition("=")
                params.append((name, value))

        query = match.group("query")
        fragment = match.group("fragment")
        return cls(
            scheme=match.group("scheme"),
            method=match.group("method"),
            method_specific_id=match.group("msid"),
            params=tuple(params),
            path=match.group("path"),
            query=query[1:] if query is not None else None,
            fragment=fragment[1:] if fragment is not None else None,
        )

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def did(self) -> str:
        """The bare ``scheme:method:method-specific-id`` without URL components."""
        return f"{self.scheme}:{self.method}:{self.method_specific_id}"

    @property
    def is_did(self) -> bool:
        return self.scheme == DID_SCHEME

    @property
    def is_url(self) -> bool:
        """``True`` when any DID URL component beyond the bare DID is present."""
        return bool(self.params) or any(
            part is not None for part in (self.path, self.query, self.fragment)
        )

    def param(self, name: str) -> str | None:
        """Return the value of the first parameter called *name*, or ``None``."""
        for key, value in self.params:
            if key == name:
                return value
        return None

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def __str__(self) -> str:
        parts = [self.did]
        parts.extend(f";{name}={value}" for name, value in self.params)
        if self.path is not None:
            parts.append(self.path)
        if self.query is not None:
            parts.append(f"?{self.query}")
        if self.fragment is not None:
            parts.append(f"#{self.fragment}")
        return "".join(parts)


def parse_identifier(value: "str | Identifier") -> Identifier:
    """Return *value* unchanged if already parsed, otherwise :meth:`Identifier.parse` it."""
    if isinstance(value, Identifier):
        return value
    return Identifier.parse(value)


__all__ = ["DID_SCHEME", "Identifier", "parse_identifier"]
