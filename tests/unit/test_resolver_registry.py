"""Tests for credential_resolver.resolver.registry: dispatch, wildcards and normalization."""
from __future__ import annotations

import asyncio
from collections.abc import Mapping
from typing import Any

import pytest

from credential_resolver.did.document import CONTEXT_KEY, DID_CONTEXT
from credential_resolver.did.url import Identifier
from credential_resolver.errors import (
    BackendUnavailableError,
    ConflictError,
    MalformedIdentifierError,
    NotFoundError,
    UnsupportedMethodError,
)
from credential_resolver.resolver import (
    WILDCARD,
    MethodResolver,
    ResolverDescriptor,
    ResolverRegistry,
)


class RecordingResolver(MethodResolver):
    """Returns a fixed document and records every identifier it sees."""

    def __init__(self, label: str, document: Any = None) -> None:
        self.label = label
        self.document = document
        self.calls: list[Identifier] = []

    def __repr__(self) -> str:
        return f"RecordingResolver({self.label})"

    async def resolve(self, identifier: Identifier) -> Mapping[str, Any]:
        self.calls.append(identifier)
        if self.document is not None:
            return self.document
        return {"id": identifier.did, "resolvedBy": self.label}


class FailingResolver(MethodResolver):
    def __init__(self, exc: BaseException) -> None:
        self.exc = exc

    async def resolve(self, identifier: Identifier) -> Mapping[str, Any]:
        raise self.exc


@pytest.fixture()
def registry() -> ResolverRegistry:
    return ResolverRegistry()


# ---------------------------------------------------------------------------
# Registration
# ---------------------------------------------------------------------------


class TestRegister:
    def test_returns_descriptor(self, registry: ResolverRegistry) -> None:
        descriptor = registry.register("did", "key", RecordingResolver("key"))
        assert descriptor == ResolverDescriptor("did", "key")
        assert str(descriptor) == "did:key"
        assert len(registry) == 1

    def test_duplicate_pair_conflicts(self, registry: ResolverRegistry) -> None:
        registry.register("did", "key", RecordingResolver("first"))
        with pytest.raises(ConflictError) as exc_info:
            registry.register("did", "key", RecordingResolver("second"))
        assert exc_info.value.prefix == "did"
        assert exc_info.value.method == "key"

    def test_duplicate_leaves_first_in_place(self, registry: ResolverRegistry) -> None:
        first = RecordingResolver("first")
        registry.register("did", "key", first)
        with pytest.raises(ConflictError):
            registry.register("did", "key", RecordingResolver("second"))
        assert registry.matching("did:key:zabc").resolver is first

    def test_duplicate_wildcard_conflicts(self, registry: ResolverRegistry) -> None:
        registry.register("did", WILDCARD, RecordingResolver("a"))
        with pytest.raises(ConflictError):
            registry.register("did", WILDCARD, RecordingResolver("b"))

    def test_frozen_registry_rejects(self, registry: ResolverRegistry) -> None:
        registry.freeze()
        assert registry.frozen is True
        with pytest.raises(ConflictError, match="frozen"):
            registry.register("did", "key", RecordingResolver("late"))

    def test_rejects_non_resolver(self, registry: ResolverRegistry) -> None:
        with pytest.raises(TypeError):
            registry.register("did", "key", object())  # type: ignore[arg-type]

    def test_rejects_empty_method(self, registry: ResolverRegistry) -> None:
        with pytest.raises(ValueError):
            registry.register("did", "", RecordingResolver("x"))

    def test_from_entries_freezes(self) -> None:
        registry = ResolverRegistry.from_entries([("did", "key", RecordingResolver("key"))])
        assert registry.frozen is True
        assert registry.descriptors() == [ResolverDescriptor("did", "key")]


# ---------------------------------------------------------------------------
# Lookup order
# ---------------------------------------------------------------------------


class TestMatching:
    @pytest.fixture()
    def full_registry(self, registry: ResolverRegistry) -> ResolverRegistry:
        registry.register("did", "dock", RecordingResolver("exact"))
        registry.register("did", WILDCARD, RecordingResolver("prefix-any"))
        registry.register(WILDCARD, "dock", RecordingResolver("any-method"))
        registry.register(WILDCARD, WILDCARD, RecordingResolver("any-any"))
        return registry

    def test_exact_match_wins(self, full_registry: ResolverRegistry) -> None:
        assert full_registry.matching("did:dock:abc").resolver.label == "exact"

    def test_prefix_wildcard_before_method_wildcard(self, full_registry: ResolverRegistry) -> None:
        assert full_registry.matching("did:ethr:0x1").resolver.label == "prefix-any"

    def test_method_wildcard_before_full_wildcard(self, full_registry: ResolverRegistry) -> None:
        assert full_registry.matching("accumulator:dock:0x01").resolver.label == "any-method"

    def test_full_wildcard_last(self, full_registry: ResolverRegistry) -> None:
        assert full_registry.matching("blob:cheqd:testnet:zabc").resolver.label == "any-any"

    def test_no_match_returns_none(self, registry: ResolverRegistry) -> None:
        registry.register("did", "key", RecordingResolver("key"))
        assert registry.matching("did:web:example.com") is None

    def test_supports(self, registry: ResolverRegistry) -> None:
        registry.register("did", "key", RecordingResolver("key"))
        assert registry.supports("did:key:zabc") is True
        assert registry.supports("did:web:example.com") is False
        assert registry.supports("did:") is False


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------


class TestResolve:
    @pytest.mark.asyncio
    async def test_dispatches_parsed_identifier(self, registry: ResolverRegistry) -> None:
        resolver = RecordingResolver("key")
        registry.register("did", "key", resolver)
        document = await registry.resolve("did:key:zabc#zabc")
        assert document["resolvedBy"] == "key"
        assert resolver.calls[0].fragment == "zabc"

    @pytest.mark.asyncio
    async def test_adds_default_context(self, registry: ResolverRegistry) -> None:
        registry.register("did", "key", RecordingResolver("key"))
        document = await registry.resolve("did:key:zabc")
        assert document[CONTEXT_KEY] == DID_CONTEXT

    @pytest.mark.asyncio
    async def test_keeps_resolver_context(self, registry: ResolverRegistry) -> None:
        context = [DID_CONTEXT, "https://example.org/extra"]
        registry.register(
            "did", "key", RecordingResolver("key", {CONTEXT_KEY: context, "id": "did:key:zabc"})
        )
        document = await registry.resolve("did:key:zabc")
        assert document[CONTEXT_KEY] == context

    @pytest.mark.asyncio
    async def test_returns_fresh_document_each_call(self, registry: ResolverRegistry) -> None:
        shared = {"id": "did:key:zabc"}
        registry.register("did", "key", RecordingResolver("key", shared))
        first = await registry.resolve("did:key:zabc")
        second = await registry.resolve("did:key:zabc")
        first["mutated"] = True
        assert "mutated" not in second
        assert CONTEXT_KEY not in shared

    @pytest.mark.asyncio
    async def test_malformed_never_reaches_backend(self, registry: ResolverRegistry) -> None:
        resolver = RecordingResolver("any")
        registry.register(WILDCARD, WILDCARD, resolver)
        with pytest.raises(MalformedIdentifierError):
            await registry.resolve("did:")
        assert resolver.calls == []

    @pytest.mark.asyncio
    async def test_trailing_newline_rejected(self, registry: ResolverRegistry) -> None:
        resolver = RecordingResolver("key")
        registry.register("did", "key", resolver)
        with pytest.raises(MalformedIdentifierError):
            await registry.resolve("did:key:zabc\n")
        assert resolver.calls == []

    @pytest.mark.asyncio
    async def test_unsupported_method(self, registry: ResolverRegistry) -> None:
        resolver = RecordingResolver("key")
        registry.register("did", "key", resolver)
        with pytest.raises(UnsupportedMethodError) as exc_info:
            await registry.resolve("did:web:example.com")
        assert exc_info.value.method == "web"
        assert resolver.calls == []

    @pytest.mark.asyncio
    async def test_taxonomy_errors_propagate(self, registry: ResolverRegistry) -> None:
        registry.register("did", "key", FailingResolver(NotFoundError("did:key:zabc")))
        with pytest.raises(NotFoundError):
            await registry.resolve("did:key:zabc")

    @pytest.mark.asyncio
    async def test_foreign_errors_become_backend_unavailable(
        self, registry: ResolverRegistry
    ) -> None:
        cause = RuntimeError("socket closed")
        registry.register("did", "key", FailingResolver(cause))
        with pytest.raises(BackendUnavailableError) as exc_info:
            await registry.resolve("did:key:zabc")
        assert exc_info.value.__cause__ is cause

    @pytest.mark.asyncio
    async def test_non_mapping_result(self, registry: ResolverRegistry) -> None:
        registry.register("did", "key", RecordingResolver("key", ["not", "a", "mapping"]))
        with pytest.raises(BackendUnavailableError, match="expected a mapping"):
            await registry.resolve("did:key:zabc")

    @pytest.mark.asyncio
    async def test_cancellation_propagates(self, registry: ResolverRegistry) -> None:
        registry.register("did", "key", FailingResolver(asyncio.CancelledError()))
        with pytest.raises(asyncio.CancelledError):
            await registry.resolve("did:key:zabc")

    @pytest.mark.asyncio
    async def test_concurrent_resolutions(self, registry: ResolverRegistry) -> None:
        registry.register("did", WILDCARD, RecordingResolver("any"))
        dids = [f"did:example:{index}" for index in range(20)]
        documents = await asyncio.gather(*(registry.resolve(did) for did in dids))
        assert [document["id"] for document in documents] == dids
