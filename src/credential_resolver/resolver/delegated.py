"""DelegatedResolver: wraps a third-party resolution function.

The wrapped function receives the bare DID string and the parsed
:class:`~credential_resolver.did.url.Identifier`; it may be synchronous or
return an awaitable. Its result is passed through unchanged.

Error translation
-----------------
Errors raised by the function never cross this boundary as-is:

==============================  =====================================
Raised by the function          Raised by the resolver
==============================  =====================================
package errors                  unchanged
``ConnectionError``,            :class:`BackendUnavailableError`
``TimeoutError``
``ValueError``                  :class:`MalformedIdentifierError`
any other ``Exception``         :class:`NotFoundError`
``None`` result                 :class:`NotFoundError`
==============================  =====================================

Example
-------
::

    def resolve_ethr(did, identifier):
        return ethr_library.resolve(did)

    registry.register("did", "ethr", DelegatedResolver(resolve_ethr))
"""
from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable, Mapping
from typing import Any, Union

from credential_resolver.did.url import Identifier
from credential_resolver.errors import (
    BackendUnavailableError,
    CredentialResolverError,
    MalformedIdentifierError,
    NotFoundError,
)
from credential_resolver.resolver.base import MethodResolver

logger = logging.getLogger(__name__)

ResolutionFunction = Callable[
    [str, Identifier],
    Union[Mapping[str, Any], None, Awaitable[Union[Mapping[str, Any], None]]],
]


class DelegatedResolver(MethodResolver):
    """Forward resolution to an external function and translate its errors.

    Parameters
    ----------
    function:
        ``function(did, identifier)`` returning a document mapping, ``None``
        or an awaitable of either.
    name:
        Label used in logs and ``repr``; defaults to the function name.
    """

    def __init__(self, function: ResolutionFunction, name: str | None = None) -> None:
        self._function = function
        self._name = name or getattr(function, "__name__", type(function).__name__)

    def __repr__(self) -> str:
        return f"DelegatedResolver({self._name})"

    async def resolve(self, identifier: Identifier) -> Mapping[str, Any]:
        did = identifier.did
        try:
            result = self._function(did, identifier)
            if inspect.isawaitable(result):
                result = await result
        except CredentialResolverError:
            raise
        except (ConnectionError, TimeoutError) as exc:
            raise BackendUnavailableError(did, str(exc)) from exc
        except ValueError as exc:
            raise MalformedIdentifierError(did, str(exc)) from exc
        except Exception as exc:
            logger.debug("%r could not resolve %s: %s", self, did, exc)
            raise NotFoundError(did, f"{type(exc).__name__}: {exc}") from exc

        if result is None:
            raise NotFoundError(did, f"{self._name} returned no document")
        return result


__all__ = ["DelegatedResolver", "ResolutionFunction"]
