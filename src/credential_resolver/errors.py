"""Exception hierarchy shared by the resolver registry, the codec and the type registry.

Every error raised across a public boundary of this package derives from
:class:`CredentialResolverError`. Backend-specific exceptions are translated
into one of these types and chained with ``raise ... from exc``.
"""
from __future__ import annotations


class CredentialResolverError(Exception):
    """Base exception for credential-resolver errors."""


# ---------------------------------------------------------------------------
# Identifier / dispatch errors
# ---------------------------------------------------------------------------


class MalformedIdentifierError(CredentialResolverError):
    """Raised when an identifier does not parse into the expected grammar."""

    def __init__(self, identifier: str, reason: str = "") -> None:
        self.identifier = identifier
        self.reason = reason
        message = f"Malformed identifier {identifier!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class UnsupportedMethodError(CredentialResolverError):
    """Raised when no resolver is registered for an identifier's prefix and method."""

    def __init__(self, prefix: str, method: str, identifier: str) -> None:
        self.prefix = prefix
        self.method = method
        self.identifier = identifier
        super().__init__(
            f"No resolver registered for {prefix}:{method} (identifier {identifier!r})."
        )


class ConflictError(CredentialResolverError):
    """Raised when a resolver registration would overwrite an existing one."""

    def __init__(self, prefix: str, method: str, detail: str = "") -> None:
        self.prefix = prefix
        self.method = method
        super().__init__(
            detail or f"A resolver is already registered for {prefix}:{method}."
        )


# ---------------------------------------------------------------------------
# Backend outcomes
# ---------------------------------------------------------------------------


class NotFoundError(CredentialResolverError):
    """Raised when the backend was reached but holds no record for the identifier."""

    def __init__(self, identifier: str, detail: str = "") -> None:
        self.identifier = identifier
        message = f"Identifier {identifier!r} was not found"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class BackendUnavailableError(CredentialResolverError):
    """Raised when a backend could not be reached or answered with a failure."""

    def __init__(self, identifier: str, detail: str = "") -> None:
        self.identifier = identifier
        message = f"Backend unavailable while resolving {identifier!r}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


# ---------------------------------------------------------------------------
# Codec errors
# ---------------------------------------------------------------------------


class InvalidIdentifierFormatError(CredentialResolverError):
    """Raised when a resource identifier does not match its chain framing rules."""

    def __init__(self, chain_tag: str, reason: str) -> None:
        self.chain_tag = chain_tag
        self.reason = reason
        super().__init__(f"Invalid identifier for chain {chain_tag!r}: {reason}")


# ---------------------------------------------------------------------------
# Versioned type registry errors
# ---------------------------------------------------------------------------


class UnknownSpecError(CredentialResolverError):
    """Raised when a spec name has no registered version ranges."""

    def __init__(self, spec_name: str) -> None:
        self.spec_name = spec_name
        super().__init__(f"No type ranges registered for spec {spec_name!r}.")


class UnsupportedVersionError(CredentialResolverError):
    """Raised when a spec version falls outside every registered range."""

    def __init__(self, spec_name: str, version: int, detail: str = "") -> None:
        self.spec_name = spec_name
        self.version = version
        message = f"Spec {spec_name!r} has no types for version {version}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class InvalidRangeTableError(CredentialResolverError):
    """Raised at load time when a version range table overlaps, has gaps or is empty."""

    def __init__(self, spec_name: str, reason: str) -> None:
        self.spec_name = spec_name
        self.reason = reason
        super().__init__(f"Invalid version range table for spec {spec_name!r}: {reason}")


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


class ConfigurationError(CredentialResolverError):
    """Raised when mutually exclusive options are combined or settings are unusable."""


__all__ = [
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
]
