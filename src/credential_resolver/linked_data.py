"""JSON-LD expansion of credentials and DID documents.

:func:`expand_document` runs pyld's expansion algorithm in a worker thread.
Remote contexts are fetched by a document loader, which is either supplied
by the caller or built around a resolver so that ``did:`` URLs inside a
document are resolved through the registry::

    registry = create_default_registry()
    expanded = await expand_document(credential, resolver=registry)
"""
from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Mapping
from typing import Any, Optional, Protocol

from pyld import jsonld

from credential_resolver.did.url import DID_SCHEME, Identifier
from credential_resolver.errors import ConfigurationError

logger = logging.getLogger(__name__)

DocumentLoader = Callable[..., dict[str, Any]]
"""pyld document loader: ``loader(url, options) -> RemoteDocument``."""


class DocumentResolver(Protocol):
    """Anything exposing ``async resolve(identifier)``; usually a ResolverRegistry."""

    async def resolve(self, identifier: Any) -> Mapping[str, Any]:
        ...


def remote_document(url: str, document: Mapping[str, Any]) -> dict[str, Any]:
    """Wrap *document* in the RemoteDocument shape pyld expects from a loader."""
    return {
        "contextUrl": None,
        "documentUrl": url,
        "document": dict(document),
        "contentType": "application/ld+json",
    }


def resolver_document_loader(
    resolver: DocumentResolver,
    loop: asyncio.AbstractEventLoop,
    fallback: Optional[DocumentLoader] = None,
) -> DocumentLoader:
    """Build a pyld loader that resolves ``did:`` URLs through *resolver*.

    The returned loader is called from pyld's worker thread; resolution is
    scheduled on *loop* and the thread blocks on its result. Any fragment is
    dropped before resolving. Other URLs go to *fallback*, defaulting to
    pyld's own loader.
    """
    fallback = fallback or jsonld.get_document_loader()

    def load(url: str, options: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        if url.startswith(DID_SCHEME + ":"):
            did = Identifier.parse(url).did
            logger.debug("Loading %s through the resolver", did)
            future = asyncio.run_coroutine_threadsafe(resolver.resolve(did), loop)
            return remote_document(url, future.result())
        return fallback(url, options or {})

    return load


async def expand_document(
    document: Mapping[str, Any],
    *,
    document_loader: Optional[DocumentLoader] = None,
    resolver: Optional[DocumentResolver] = None,
) -> list[dict[str, Any]]:
    """Expand *document* with the JSON-LD expansion algorithm.

    Parameters
    ----------
    document:
        A JSON-LD document, such as a verifiable credential.
    document_loader:
        A pyld loader used for every remote context.
    resolver:
        A resolver (typically a
        :class:`~credential_resolver.resolver.registry.ResolverRegistry`) used
        to load ``did:`` URLs. Mutually exclusive with *document_loader*.

    Returns
    -------
    list[dict]
        The expanded document.

    Raises
    ------
    ConfigurationError
        If both *document_loader* and *resolver* are given.
    pyld.jsonld.JsonLdError
        If expansion fails, including failures to load a context.
    """
    if document_loader is not None and resolver is not None:
        raise ConfigurationError(
            "Pass either document_loader or resolver to expand_document, not both."
        )

    options: dict[str, Any] = {}
    if resolver is not None:
        options["documentLoader"] = resolver_document_loader(
            resolver, asyncio.get_running_loop()
        )
    elif document_loader is not None:
        options["documentLoader"] = document_loader

    return await asyncio.to_thread(jsonld.expand, dict(document), options)


__all__ = [
    "DocumentLoader",
    "DocumentResolver",
    "expand_document",
    "remote_document",
    "resolver_document_loader",
]
