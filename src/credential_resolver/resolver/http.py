"""Shared HTTP plumbing for resolvers that query a remote service over ``aiohttp``.

:class:`HTTPResolver` owns the status-code and transport-error mapping:

* ``200`` with a JSON object body: success.
* ``404`` / ``410``: :class:`~credential_resolver.errors.NotFoundError`.
* any other status, ``aiohttp.ClientError``, ``asyncio.TimeoutError`` or an
  undecodable body: :class:`~credential_resolver.errors.BackendUnavailableError`.

A caller-supplied :class:`aiohttp.ClientSession` is reused across calls and
never closed by the resolver; without one, a short-lived session is opened
per request.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any

import aiohttp
from aiohttp import ClientSession, ClientTimeout

from credential_resolver.errors import BackendUnavailableError, NotFoundError
from credential_resolver.resolver.base import MethodResolver

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT: float = 30.0

_NOT_FOUND_STATUSES = frozenset({404, 410})


class HTTPResolver(MethodResolver):
    """Base class for resolvers backed by a JSON-over-HTTP service.

    Parameters
    ----------
    session:
        Optional shared client session.
    timeout:
        Total per-request timeout in seconds.
    """

    def __init__(
        self,
        session: ClientSession | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._session = session
        self._timeout = ClientTimeout(total=timeout)

    async def fetch_json(self, identifier: str, url: str) -> dict[str, Any]:
        """GET *url* and return its decoded JSON object.

        Raises
        ------
        NotFoundError
            On a 404 or 410 response.
        BackendUnavailableError
            On any other failure.
        """
        logger.debug("Fetching %s for %s", url, identifier)
        try:
            if self._session is not None:
                return await self._get(self._session, identifier, url)
            async with ClientSession(timeout=self._timeout) as session:
                return await self._get(session, identifier, url)
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            logger.warning("Request to %s failed: %s", url, exc)
            raise BackendUnavailableError(
                identifier, f"{type(exc).__name__}: {exc}"
            ) from exc

    async def _get(self, session: ClientSession, identifier: str, url: str) -> dict[str, Any]:
        async with session.get(
            url,
            timeout=self._timeout,
            headers={"Accept": "application/did+ld+json, application/json"},
        ) as resp:
            if resp.status in _NOT_FOUND_STATUSES:
                raise NotFoundError(identifier, f"{url} returned {resp.status}")
            if resp.status != 200:
                raise BackendUnavailableError(identifier, f"{url} returned {resp.status}")
            try:
                body = await resp.json(content_type=None)
            except ValueError as exc:
                raise BackendUnavailableError(
                    identifier, f"{url} returned a body that is not JSON"
                ) from exc
        if not isinstance(body, dict):
            raise BackendUnavailableError(identifier, f"{url} did not return a JSON object")
        return body


__all__ = ["DEFAULT_TIMEOUT", "HTTPResolver"]
