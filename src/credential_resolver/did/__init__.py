"""credential_resolver.did: identifier grammar, DID documents and key encodings.

Submodules
----------
url
    Identifier: lossless parse/serialize of ``scheme:method:id`` DID URLs.
document
    DIDDocument, VerificationMethod and the ``@context`` normalization.
multibase
    Base58btc, multibase and multicodec helpers.
key_manager
    KeyManager for generating and validating ``did:key`` public keys.
"""
from __future__ import annotations

from credential_resolver.did.document import (
    CONTEXT_KEY,
    DID_CONTEXT,
    DIDDocument,
    VerificationMethod,
    normalize_document,
)
from credential_resolver.did.key_manager import KeyManager
from credential_resolver.did.url import DID_SCHEME, Identifier, parse_identifier

__all__ = [
    "CONTEXT_KEY",
    "DID_CONTEXT",
    "DID_SCHEME",
    "DIDDocument",
    "Identifier",
    "KeyManager",
    "VerificationMethod",
    "normalize_document",
    "parse_identifier",
]
