"""MethodResolver interface and the registration records held by the registry.

A resolver knows nothing about where it is registered. The pairing of a
``(prefix, method)`` descriptor with a resolver instance lives in
:class:`Registration`, owned by
:class:`~credential_resolver.resolver.registry.ResolverRegistry`.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from credential_resolver.did.url import Identifier


class _Wildcard:
    """Sentinel matching any prefix or method."""

    _instance: "_Wildcard | None" = None

    def __new__(cls) -> "_Wildcard":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "WILDCARD"

    def __str__(self) -> str:
        return "*"


WILDCARD = _Wildcard()


class MethodResolver(ABC):
    """Resolves identifiers of one method family to a backend-shaped document."""

    @abstractmethod
    async def resolve(self, identifier: Identifier) -> Mapping[str, Any]:
        """Resolve *identifier* and return its document.

        Implementations raise only errors from
        :mod:`credential_resolver.errors`.
        """

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


@dataclass(frozen=True)
class ResolverDescriptor:
    """The ``(prefix, method)`` key a resolver is registered under.

    Either field may be :data:`WILDCARD`.
    """

    prefix: "str | _Wildcard"
    method: "str | _Wildcard"

    def __str__(self) -> str:
        return f"{self.prefix}:{self.method}"


@dataclass(frozen=True)
class Registration:
    """A descriptor paired with the resolver instance it routes to."""

    descriptor: ResolverDescriptor
    resolver: MethodResolver


__all__ = [
    "MethodResolver",
    "Registration",
    "ResolverDescriptor",
    "WILDCARD",
]
