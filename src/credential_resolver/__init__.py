"""credential-resolver: DID resolution, chain identifier conversion and runtime type tables.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
>>> import credential_resolver
>>> credential_resolver.__version__
'0.1.0'

Quick start
-----------
::

    from credential_resolver import (
        # Resolution
        ResolverRegistry, DIDKeyResolver, UniversalResolver, WILDCARD,
        create_default_registry,
        # Identifier codec
        ResourceIdentifier, ResourceKind, convert, decode, encode,
        # Runtime types
        VersionedTypeRegistry, load_type_registry,
    )

    registry = create_default_registry()
    document = await registry.resolve("did:key:z6Mk...")
"""
from __future__ import annotations

__version__: str = "0.1.0"

# ------------------------------------------------------------------
# Errors
# ------------------------------------------------------------------
from credential_resolver.errors import (
    BackendUnavailableError,
    ConfigurationError,
    ConflictError,
    CredentialResolverError,
    InvalidIdentifierFormatError,
    InvalidRangeTableError,
    MalformedIdentifierError,
    NotFoundError,
    UnknownSpecError,
    UnsupportedMethodError,
    UnsupportedVersionError,
)

# ------------------------------------------------------------------
# Identifiers and documents
# ------------------------------------------------------------------
from credential_resolver.did import (
    DID_CONTEXT,
    DIDDocument,
    Identifier,
    KeyManager,
    VerificationMethod,
    normalize_document,
    parse_identifier,
)

# ------------------------------------------------------------------
# Resolution
# ------------------------------------------------------------------
from credential_resolver.config import ResolverSettings
from credential_resolver.resolver import (
    WILDCARD,
    DIDKeyResolver,
    DIDLedger,
    DelegatedResolver,
    LedgerResolver,
    MethodResolver,
    ResolverDescriptor,
    ResolverRegistry,
    UniversalResolver,
    WebResolver,
    create_default_registry,
    did_key_from_public_key,
)

# ------------------------------------------------------------------
# Identifier codec
# ------------------------------------------------------------------
from credential_resolver.codec import (
    ResourceIdentifier,
    ResourceKind,
    convert,
    decode,
    encode,
    to_text,
)

# ------------------------------------------------------------------
# Runtime types
# ------------------------------------------------------------------
from credential_resolver.runtime import (
    VersionRange,
    VersionedTypeRegistry,
    load_type_registry,
)

# ------------------------------------------------------------------
# Linked data
# ------------------------------------------------------------------
from credential_resolver.linked_data import expand_document

__all__ = [
    "__version__",
    # Errors
    "BackendUnavailableError",
    "ConfigurationError",
    "ConflictError",
    "CredentialResolverError",
    "InvalidIdentifierFormatError",
    "InvalidRangeTableError",
    "MalformedIdentifierError",
    "NotFoundError",
    "UnknownSpecError",
    "UnsupportedMethodError",
    "UnsupportedVersionError",
    # Identifiers and documents
    "DID_CONTEXT",
    "DIDDocument",
    "Identifier",
    "KeyManager",
    "VerificationMethod",
    "normalize_document",
    "parse_identifier",
    # Resolution
    "DIDKeyResolver",
    "DIDLedger",
    "DelegatedResolver",
    "LedgerResolver",
    "MethodResolver",
    "ResolverDescriptor",
    "ResolverRegistry",
    "ResolverSettings",
    "UniversalResolver",
    "WILDCARD",
    "WebResolver",
    "create_default_registry",
    "did_key_from_public_key",
    # Identifier codec
    "ResourceIdentifier",
    "ResourceKind",
    "convert",
    "decode",
    "encode",
    "to_text",
    # Runtime types
    "VersionRange",
    "VersionedTypeRegistry",
    "load_type_registry",
    # Linked data
    "expand_document",
]
