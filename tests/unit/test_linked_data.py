"""Tests for credential_resolver.linked_data: JSON-LD expansion with DID-aware loading."""
from __future__ import annotations

import asyncio
from collections.abc import Mapping
from typing import Any, Optional

import pytest

from credential_resolver.did.url import Identifier
from credential_resolver.errors import ConfigurationError
from credential_resolver.linked_data import (
    expand_document,
    remote_document,
    resolver_document_loader,
)
from credential_resolver.resolver import MethodResolver, ResolverRegistry

_SCHEMA_CONTEXT = {"@context": {"name": "http://schema.org/name"}}


class ContextResolver(MethodResolver):
    """Serves a JSON-LD context for any did:example identifier."""

    def __init__(self) -> None:
        self.calls: list[str] = []

    async def resolve(self, identifier: Identifier) -> Mapping[str, Any]:
        self.calls.append(str(identifier))
        return dict(_SCHEMA_CONTEXT)


@pytest.fixture()
def context_resolver() -> ContextResolver:
    return ContextResolver()


@pytest.fixture()
def registry(context_resolver: ContextResolver) -> ResolverRegistry:
    return ResolverRegistry.from_entries([("did", "example", context_resolver)])


class TestRemoteDocument:
    def test_shape(self) -> None:
        remote = remote_document("https://example.org/ctx", _SCHEMA_CONTEXT)
        assert remote["documentUrl"] == "https://example.org/ctx"
        assert remote["contextUrl"] is None
        assert remote["document"] == _SCHEMA_CONTEXT


class TestResolverDocumentLoader:
    @pytest.mark.asyncio
    async def test_did_url_goes_through_registry(
        self, registry: ResolverRegistry, context_resolver: ContextResolver
    ) -> None:
        loader = resolver_document_loader(registry, asyncio.get_running_loop())
        remote = await asyncio.to_thread(loader, "did:example:ctx#fragment", {})
        assert remote["documentUrl"] == "did:example:ctx#fragment"
        assert remote["document"]["@context"] == _SCHEMA_CONTEXT["@context"]
        assert context_resolver.calls == ["did:example:ctx"]

    @pytest.mark.asyncio
    async def test_other_urls_use_fallback(self, registry: ResolverRegistry) -> None:
        seen: list[str] = []

        def fallback(url: str, options: Optional[dict[str, Any]] = None) -> dict[str, Any]:
            seen.append(url)
            return remote_document(url, _SCHEMA_CONTEXT)

        loader = resolver_document_loader(registry, asyncio.get_running_loop(), fallback)
        await asyncio.to_thread(loader, "https://schema.org/", {})
        assert seen == ["https://schema.org/"]


class TestExpandDocument:
    @pytest.mark.asyncio
    async def test_both_options_rejected(self, registry: ResolverRegistry) -> None:
        with pytest.raises(ConfigurationError):
            await expand_document(
                {"@context": "did:example:ctx"},
                document_loader=lambda url, options=None: remote_document(url, {}),
                resolver=registry,
            )

    @pytest.mark.asyncio
    async def test_inline_context(self) -> None:
        expanded = await expand_document(
            {"@context": {"name": "http://schema.org/name"}, "name": "Alice"}
        )
        assert expanded == [{"http://schema.org/name": [{"@value": "Alice"}]}]

    @pytest.mark.asyncio
    async def test_custom_loader(self) -> None:
        requested: list[str] = []

        def loader(url: str, options: Optional[dict[str, Any]] = None) -> dict[str, Any]:
            requested.append(url)
            return remote_document(url, _SCHEMA_CONTEXT)

        expanded = await expand_document(
            {"@context": "https://example.org/custom-ctx-loader", "name": "Alice"},
            document_loader=loader,
        )
        assert expanded == [{"http://schema.org/name": [{"@value": "Alice"}]}]
        assert requested == ["https://example.org/custom-ctx-loader"]

    @pytest.mark.asyncio
    async def test_did_context_resolved(
        self, registry: ResolverRegistry, context_resolver: ContextResolver
    ) -> None:
        expanded = await expand_document(
            {"@context": "did:example:expand-ctx", "name": "Bob"},
            resolver=registry,
        )
        assert expanded == [{"http://schema.org/name": [{"@value": "Bob"}]}]
        assert context_resolver.calls == ["did:example:expand-ctx"]
