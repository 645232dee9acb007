"""Startup construction of the default resolver registry."""
from __future__ import annotations

import logging

from aiohttp import ClientSession

from credential_resolver.config import ResolverSettings
from credential_resolver.resolver.base import WILDCARD
from credential_resolver.resolver.key import DIDKeyResolver
from credential_resolver.resolver.registry import ResolverRegistry
from credential_resolver.resolver.universal import UniversalResolver
from credential_resolver.resolver.web import WebResolver

logger = logging.getLogger(__name__)


def create_default_registry(
    settings: ResolverSettings | None = None,
    session: ClientSession | None = None,
    *,
    freeze: bool = True,
) -> ResolverRegistry:
    """Build the registry used by the CLI and by applications without custom wiring.

    * ``did:key`` is always registered.
    * ``did:web`` is registered when ``settings.enable_did_web`` is set.
    * ``(did, WILDCARD)`` falls back to the universal resolver when
      ``settings.universal_resolver_url`` is set.

    Pass ``freeze=False`` to register further resolvers before use; call
    :meth:`~credential_resolver.resolver.registry.ResolverRegistry.freeze`
    afterwards.
    """
    settings = settings or ResolverSettings()
    registry = ResolverRegistry()
    registry.register("did", "key", DIDKeyResolver())
    if settings.enable_did_web:
        registry.register(
            "did", "web", WebResolver(session=session, timeout=settings.http_timeout)
        )
    if settings.universal_resolver_url:
        registry.register(
            "did",
            WILDCARD,
            UniversalResolver(
                settings.universal_resolver_url,
                session=session,
                timeout=settings.http_timeout,
            ),
        )
    if freeze:
        registry.freeze()
    logger.debug("Default registry built with %d resolvers", len(registry))
    return registry


__all__ = ["create_default_registry"]
