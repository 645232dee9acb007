"""LedgerResolver: resolves DIDs registered on a ledger module.

The ledger transport is an external collaborator described by the
:class:`DIDLedger` protocol: anything with an
``async get_document(did) -> Mapping | None`` coroutine, such as a Dock or
cheqd DID module wrapper.

``None`` means the ledger was reached and has no document for the DID.
Transport failures (``ConnectionError``, ``TimeoutError``, ``OSError``)
mean it was not reached. The two are reported as
:class:`~credential_resolver.errors.NotFoundError` and
:class:`~credential_resolver.errors.BackendUnavailableError` respectively.
"""
from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any, Optional, Protocol, runtime_checkable

from credential_resolver.did.url import Identifier
from credential_resolver.errors import (
    BackendUnavailableError,
    CredentialResolverError,
    MalformedIdentifierError,
    NotFoundError,
)
from credential_resolver.resolver.base import MethodResolver

logger = logging.getLogger(__name__)


@runtime_checkable
class DIDLedger(Protocol):
    """Read access to DID documents stored on a ledger."""

    async def get_document(self, did: str) -> Optional[Mapping[str, Any]]:
        """Return the stored document for *did*, or ``None`` if there is none."""
        ...


class LedgerResolver(MethodResolver):
    """Resolve DIDs of one ledger method through a :class:`DIDLedger`.

    Parameters
    ----------
    ledger:
        The ledger access object.
    validate_id:
        Optional check applied to the method-specific id before the ledger
        is queried; it raises ``ValueError`` for ids the ledger could never
        hold (e.g. a malformed SS58 address).
    """

    def __init__(
        self,
        ledger: DIDLedger,
        validate_id: Callable[[str], None] | None = None,
    ) -> None:
        self._ledger = ledger
        self._validate_id = validate_id

    def __repr__(self) -> str:
        return f"LedgerResolver({type(self._ledger).__name__})"

    async def resolve(self, identifier: Identifier) -> Mapping[str, Any]:
        did = identifier.did
        if self._validate_id is not None:
            try:
                self._validate_id(identifier.method_specific_id)
            except ValueError as exc:
                raise MalformedIdentifierError(did, str(exc)) from exc

        try:
            document = await self._ledger.get_document(did)
        except CredentialResolverError:
            raise
        except (ConnectionError, TimeoutError, OSError) as exc:
            logger.warning("Ledger %r unreachable for %s: %s", self._ledger, did, exc)
            raise BackendUnavailableError(did, str(exc)) from exc

        if document is None:
            raise NotFoundError(did, "no document registered on the ledger")
        return document


__all__ = ["DIDLedger", "LedgerResolver"]
