"""WebResolver: ``did:web`` resolution over HTTPS.

Transformation (https://w3c-ccg.github.io/did-method-web/)::

    did:web:example.com              -> https://example.com/.well-known/did.json
    did:web:example.com:user:alice   -> https://example.com/user/alice/did.json
    did:web:example.com%3A8443       -> https://example.com:8443/.well-known/did.json

The fetched document's ``id`` must equal the DID; a document for some
other subject is reported as not found.
"""
from __future__ import annotations

import re
from typing import Any

from credential_resolver.did.url import Identifier
from credential_resolver.errors import MalformedIdentifierError, NotFoundError
from credential_resolver.resolver.http import HTTPResolver

# Only the port colon may be percent-encoded in the host segment.
_HOST_PATTERN = re.compile(r"[A-Za-z0-9](?:[A-Za-z0-9.\-]*[A-Za-z0-9])?(?::[0-9]{1,5})?")
_PORT_COLON = re.compile("%3a", re.IGNORECASE)


def did_web_to_url(identifier: Identifier) -> str:
    """Return the HTTPS URL of the ``did.json`` for a ``did:web`` identifier.

    Path segments are used as given; only ``%3A`` in the host is decoded.

    Raises
    ------
    MalformedIdentifierError
        If the host segment is empty or is not a plain ``host[:port]``.
    """
    parts = identifier.method_specific_id.split(":")
    if not parts[0]:
        raise MalformedIdentifierError(identifier.did, "did:web host is empty")
    host = _PORT_COLON.sub(":", parts[0], count=1)
    if _HOST_PATTERN.fullmatch(host) is None:
        raise MalformedIdentifierError(
            identifier.did, f"did:web host {parts[0]!r} is not a valid host[:port]"
        )
    path = parts[1:] or [".well-known"]
    return "https://{inner}/did.json".format(inner="/".join([host, *path]))


class WebResolver(HTTPResolver):
    """Resolve ``did:web`` identifiers by fetching their ``did.json``."""

    async def resolve(self, identifier: Identifier) -> dict[str, Any]:
        did = identifier.did
        document = await self.fetch_json(did, did_web_to_url(identifier))
        if document.get("id") != did:
            raise NotFoundError(
                did, f"did.json describes {document.get('id')!r} instead"
            )
        return document


__all__ = ["WebResolver", "did_web_to_url"]
