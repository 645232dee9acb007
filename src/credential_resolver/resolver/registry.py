"""ResolverRegistry: routes identifiers to method resolvers.

The registry is an explicit object built once at startup and handed to
every caller that needs resolution; there is no module-level instance.

Dispatch
--------
An identifier ``prefix:method:...`` is matched against the registered
descriptors in this order, the first hit wins::

    (prefix, method)
    (prefix, WILDCARD)
    (WILDCARD, method)
    (WILDCARD, WILDCARD)

Normalization
-------------
Resolver output is copied and passed through
:func:`~credential_resolver.did.document.normalize_document`, which adds
the DID Core ``@context`` only when the resolver supplied none.

Thread safety
-------------
Registration acquires a :class:`threading.Lock` and rejects duplicates with
:class:`~credential_resolver.errors.ConflictError`. Lookups read the
mapping without locking; the mapping is not mutated once :meth:`freeze`
has been called.

Example
-------
::

    registry = ResolverRegistry()
    registry.register("did", "key", DIDKeyResolver())
    registry.freeze()
    document = await registry.resolve("did:key:z6Mk...")
"""
from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Mapping
from typing import Any

from credential_resolver.did.document import normalize_document
from credential_resolver.did.url import Identifier, parse_identifier
from credential_resolver.errors import (
    BackendUnavailableError,
    ConflictError,
    CredentialResolverError,
    UnsupportedMethodError,
)
from credential_resolver.resolver.base import (
    WILDCARD,
    MethodResolver,
    Registration,
    ResolverDescriptor,
    _Wildcard,
)

logger = logging.getLogger(__name__)


class ResolverRegistry:
    """Maps ``(prefix, method)`` descriptors to :class:`MethodResolver` instances."""

    def __init__(self) -> None:
        self._registrations: dict[tuple[object, object], Registration] = {}
        self._frozen = False
        self._lock = threading.Lock()

    @classmethod
    def from_entries(
        cls,
        entries: Iterable[tuple["str | _Wildcard", "str | _Wildcard", MethodResolver]],
    ) -> "ResolverRegistry":
        """Build and freeze a registry from ``(prefix, method, resolver)`` triples."""
        registry = cls()
        for prefix, method, resolver in entries:
            registry.register(prefix, method, resolver)
        registry.freeze()
        return registry

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(
        self,
        prefix: "str | _Wildcard",
        method: "str | _Wildcard",
        resolver: MethodResolver,
    ) -> ResolverDescriptor:
        """Register *resolver* for ``(prefix, method)``.

        Parameters
        ----------
        prefix:
            Identifier scheme (``"did"``) or :data:`WILDCARD`.
        method:
            Method name (``"key"``) or :data:`WILDCARD`.
        resolver:
            The resolver that handles matching identifiers.

        Returns
        -------
        ResolverDescriptor
            The descriptor the resolver was stored under.

        Raises
        ------
        ConflictError
            If the pair is already registered or the registry is frozen.
        TypeError
            If *resolver* is not a :class:`MethodResolver`.
        """
        if not isinstance(resolver, MethodResolver):
            raise TypeError(
                f"Expected a MethodResolver instance, got {type(resolver).__name__}."
            )
        for value, name in ((prefix, "prefix"), (method, "method")):
            if value is not WILDCARD and (not isinstance(value, str) or not value):
                raise ValueError(f"{name} must be a non-empty string or WILDCARD.")

        descriptor = ResolverDescriptor(prefix=prefix, method=method)
        key = (prefix, method)
        with self._lock:
            if self._frozen:
                raise ConflictError(
                    str(prefix),
                    str(method),
                    f"Registry is frozen; cannot register {descriptor}.",
                )
            existing = self._registrations.get(key)
            if existing is not None:
                raise ConflictError(
                    str(prefix),
                    str(method),
                    f"Two resolvers for {descriptor}: "
                    f"{existing.resolver!r} and {resolver!r}.",
                )
            self._registrations[key] = Registration(descriptor, resolver)
        logger.info("Registered %r for %s", resolver, descriptor)
        return descriptor

    def freeze(self) -> None:
        """End the registration phase; later :meth:`register` calls fail."""
        with self._lock:
            self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def matching(self, identifier: "str | Identifier") -> Registration | None:
        """Return the registration that would handle *identifier*, or ``None``.

        Raises
        ------
        MalformedIdentifierError
            If *identifier* does not parse.
        """
        parsed = parse_identifier(identifier)
        for key in (
            (parsed.scheme, parsed.method),
            (parsed.scheme, WILDCARD),
            (WILDCARD, parsed.method),
            (WILDCARD, WILDCARD),
        ):
            registration = self._registrations.get(key)
            if registration is not None:
                return registration
        return None

    def supports(self, identifier: "str | Identifier") -> bool:
        """Return ``True`` if *identifier* parses and a resolver matches it."""
        try:
            return self.matching(identifier) is not None
        except CredentialResolverError:
            return False

    def descriptors(self) -> list[ResolverDescriptor]:
        """Return all registered descriptors in registration order."""
        return [registration.descriptor for registration in self._registrations.values()]

    def __len__(self) -> int:
        return len(self._registrations)

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    async def resolve(self, identifier: "str | Identifier") -> dict[str, Any]:
        """Resolve *identifier* to a normalized document.

        Raises
        ------
        MalformedIdentifierError
            If *identifier* does not parse. No resolver is consulted.
        UnsupportedMethodError
            If no resolver matches. No resolver is consulted.
        NotFoundError, BackendUnavailableError
            As reported by the resolver. Exceptions outside the package
            taxonomy are reported as :class:`BackendUnavailableError`.
        """
        parsed = parse_identifier(identifier)
        registration = self.matching(parsed)
        if registration is None:
            raise UnsupportedMethodError(parsed.scheme, parsed.method, str(parsed))

        logger.debug("Resolving %s via %s", parsed, registration.descriptor)
        try:
            document = await registration.resolver.resolve(parsed)
        except CredentialResolverError:
            raise
        except Exception as exc:
            logger.warning(
                "Resolver %r failed for %s: %s", registration.resolver, parsed, exc
            )
            raise BackendUnavailableError(
                str(parsed), f"{type(exc).__name__}: {exc}"
            ) from exc

        if not isinstance(document, Mapping):
            raise BackendUnavailableError(
                str(parsed),
                f"{registration.resolver!r} returned {type(document).__name__}, "
                "expected a mapping",
            )
        return normalize_document(document)


__all__ = ["ResolverRegistry"]
