"""credential_resolver.resolver: method resolvers and the registry that routes to them.

Quick start
-----------
::

    from credential_resolver.resolver import (
        DIDKeyResolver,
        ResolverRegistry,
        UniversalResolver,
        WILDCARD,
    )

    registry = ResolverRegistry()
    registry.register("did", "key", DIDKeyResolver())
    registry.register("did", WILDCARD, UniversalResolver("https://uniresolver.io"))
    registry.freeze()

    document = await registry.resolve("did:key:z6MkhaXgBZDvotDkL5257faiztiGiC2QtKLGpbnnEGta2doK")
"""
from __future__ import annotations

from credential_resolver.resolver.base import (
    WILDCARD,
    MethodResolver,
    Registration,
    ResolverDescriptor,
)
from credential_resolver.resolver.defaults import create_default_registry
from credential_resolver.resolver.delegated import DelegatedResolver
from credential_resolver.resolver.http import HTTPResolver
from credential_resolver.resolver.key import DIDKeyResolver, did_key_from_public_key
from credential_resolver.resolver.ledger import DIDLedger, LedgerResolver
from credential_resolver.resolver.registry import ResolverRegistry
from credential_resolver.resolver.universal import UniversalResolver
from credential_resolver.resolver.web import WebResolver, did_web_to_url

__all__ = [
    "DIDKeyResolver",
    "DIDLedger",
    "DelegatedResolver",
    "HTTPResolver",
    "LedgerResolver",
    "MethodResolver",
    "Registration",
    "ResolverDescriptor",
    "ResolverRegistry",
    "UniversalResolver",
    "WILDCARD",
    "WebResolver",
    "create_default_registry",
    "did_key_from_public_key",
    "did_web_to_url",
]
