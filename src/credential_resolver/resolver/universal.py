"""UniversalResolver: adapter to a universal-resolver instance.

See https://github.com/decentralized-identity/universal-resolver. A DID is
resolved with::

    GET {base_url}/1.0/identifiers/{did}

and the response's ``didDocument`` member is returned. The universal
resolver answers 404 (and sometimes 410) for unknown DIDs; those become
:class:`~credential_resolver.errors.NotFoundError`. Every other failure is
:class:`~credential_resolver.errors.BackendUnavailableError`.
"""
from __future__ import annotations

from typing import Any
from urllib.parse import urlparse

from aiohttp import ClientSession

from credential_resolver.did.url import Identifier
from credential_resolver.errors import BackendUnavailableError
from credential_resolver.resolver.http import DEFAULT_TIMEOUT, HTTPResolver


class UniversalResolver(HTTPResolver):
    """Resolve any DID through a universal-resolver HTTP endpoint.

    Parameters
    ----------
    base_url:
        Address of the universal-resolver instance, e.g. ``https://uniresolver.io``.
    session, timeout:
        See :class:`~credential_resolver.resolver.http.HTTPResolver`.

    Raises
    ------
    ValueError
        If *base_url* is not an absolute http(s) URL.
    """

    def __init__(
        self,
        base_url: str,
        session: ClientSession | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        parsed = urlparse(base_url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"Universal resolver URL {base_url!r} is not an http(s) URL.")
        super().__init__(session=session, timeout=timeout)
        self._identifiers_url = f"{base_url.rstrip('/')}/1.0/identifiers/"

    def __repr__(self) -> str:
        return f"UniversalResolver({self._identifiers_url!r})"

    @property
    def identifiers_url(self) -> str:
        return self._identifiers_url

    async def resolve(self, identifier: Identifier) -> dict[str, Any]:
        did = identifier.did
        body = await self.fetch_json(did, f"{self._identifiers_url}{did}")
        document = body.get("didDocument")
        if not isinstance(document, dict):
            raise BackendUnavailableError(
                did, "universal resolver response has no didDocument"
            )
        return document


__all__ = ["UniversalResolver"]
