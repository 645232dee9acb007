"""Tests for credential_resolver.resolver.key: deterministic did:key resolution."""
from __future__ import annotations

import pytest

from credential_resolver.did.document import (
    CONTEXT_KEY,
    DID_CONTEXT,
    ED25519_2020_CONTEXT,
    SECP256K1_2019_CONTEXT,
)
from credential_resolver.did.key_manager import KeyManager
from credential_resolver.did.multibase import multibase_encode, multicodec_wrap
from credential_resolver.did.url import Identifier
from credential_resolver.errors import MalformedIdentifierError
from credential_resolver.resolver import (
    DIDKeyResolver,
    ResolverRegistry,
    did_key_from_public_key,
)


@pytest.fixture()
def resolver() -> DIDKeyResolver:
    return DIDKeyResolver()


@pytest.fixture()
def ed25519_did() -> str:
    _, public_bytes = KeyManager().generate_keypair("ed25519")
    return did_key_from_public_key(public_bytes, "ed25519")


@pytest.fixture()
def secp256k1_did() -> str:
    _, public_bytes = KeyManager().generate_keypair("secp256k1")
    return did_key_from_public_key(public_bytes, "secp256k1")


# ---------------------------------------------------------------------------
# KeyManager
# ---------------------------------------------------------------------------


class TestKeyManager:
    def test_ed25519_sizes(self) -> None:
        private_bytes, public_bytes = KeyManager().generate_keypair("ed25519")
        assert len(private_bytes) == 32
        assert len(public_bytes) == 32

    def test_secp256k1_compressed(self) -> None:
        _, public_bytes = KeyManager().generate_keypair("secp256k1")
        assert len(public_bytes) == 33
        assert public_bytes[0] in (0x02, 0x03)

    def test_unknown_key_type(self) -> None:
        with pytest.raises(ValueError, match="Unsupported key type"):
            KeyManager().generate_keypair("rsa")


# ---------------------------------------------------------------------------
# did_key_from_public_key
# ---------------------------------------------------------------------------


class TestDidKeyFromPublicKey:
    def test_ed25519_prefix(self, ed25519_did: str) -> None:
        assert ed25519_did.startswith("did:key:z6Mk")

    def test_secp256k1_prefix(self, secp256k1_did: str) -> None:
        assert secp256k1_did.startswith("did:key:zQ3s")

    def test_deterministic(self) -> None:
        key = bytes([0x01] * 32)
        assert did_key_from_public_key(key) == did_key_from_public_key(key)

    def test_wrong_length_rejected(self) -> None:
        with pytest.raises(ValueError):
            did_key_from_public_key(b"\x01" * 31)

    def test_unknown_key_type_rejected(self) -> None:
        with pytest.raises(ValueError):
            did_key_from_public_key(b"\x01" * 32, "p256")


# ---------------------------------------------------------------------------
# DIDKeyResolver
# ---------------------------------------------------------------------------


class TestDIDKeyResolver:
    @pytest.mark.asyncio
    async def test_ed25519_document(self, resolver: DIDKeyResolver, ed25519_did: str) -> None:
        document = await resolver.resolve(Identifier.parse(ed25519_did))
        msid = ed25519_did.split(":")[2]
        vm_id = f"{ed25519_did}#{msid}"
        assert document["id"] == ed25519_did
        assert document[CONTEXT_KEY] == [DID_CONTEXT, ED25519_2020_CONTEXT]
        assert document["verificationMethod"] == [
            {
                "id": vm_id,
                "type": "Ed25519VerificationKey2020",
                "controller": ed25519_did,
                "publicKeyMultibase": msid,
            }
        ]
        for relationship in (
            "authentication",
            "assertionMethod",
            "capabilityInvocation",
            "capabilityDelegation",
        ):
            assert document[relationship] == [vm_id]
        assert "keyAgreement" not in document

    @pytest.mark.asyncio
    async def test_secp256k1_document(
        self, resolver: DIDKeyResolver, secp256k1_did: str
    ) -> None:
        document = await resolver.resolve(Identifier.parse(secp256k1_did))
        assert document[CONTEXT_KEY] == [DID_CONTEXT, SECP256K1_2019_CONTEXT]
        assert document["verificationMethod"][0]["type"] == "EcdsaSecp256k1VerificationKey2019"

    @pytest.mark.asyncio
    async def test_same_input_same_document(
        self, resolver: DIDKeyResolver, ed25519_did: str
    ) -> None:
        identifier = Identifier.parse(ed25519_did)
        assert await resolver.resolve(identifier) == await resolver.resolve(identifier)

    @pytest.mark.asyncio
    async def test_fragment_ignored_for_document_id(
        self, resolver: DIDKeyResolver, ed25519_did: str
    ) -> None:
        msid = ed25519_did.split(":")[2]
        document = await resolver.resolve(Identifier.parse(f"{ed25519_did}#{msid}"))
        assert document["id"] == ed25519_did

    @pytest.mark.asyncio
    async def test_bad_multibase_prefix(self, resolver: DIDKeyResolver) -> None:
        with pytest.raises(MalformedIdentifierError):
            await resolver.resolve(Identifier.parse("did:key:f0123abcd"))

    @pytest.mark.asyncio
    async def test_bad_base58(self, resolver: DIDKeyResolver) -> None:
        with pytest.raises(MalformedIdentifierError):
            await resolver.resolve(Identifier.parse("did:key:z0OIl"))

    @pytest.mark.asyncio
    async def test_unsupported_codec(self, resolver: DIDKeyResolver) -> None:
        # 0x1200 is the P-256 multicodec
        msid = multibase_encode(multicodec_wrap(0x1200, b"\x02" * 33))
        with pytest.raises(MalformedIdentifierError, match="unsupported multicodec"):
            await resolver.resolve(Identifier.parse(f"did:key:{msid}"))

    @pytest.mark.asyncio
    async def test_truncated_key(self, resolver: DIDKeyResolver) -> None:
        msid = multibase_encode(multicodec_wrap(0xED, b"\x01" * 16))
        with pytest.raises(MalformedIdentifierError):
            await resolver.resolve(Identifier.parse(f"did:key:{msid}"))

    @pytest.mark.asyncio
    async def test_invalid_secp256k1_point(self, resolver: DIDKeyResolver) -> None:
        msid = multibase_encode(multicodec_wrap(0xE7, b"\x05" + b"\x01" * 32))
        with pytest.raises(MalformedIdentifierError):
            await resolver.resolve(Identifier.parse(f"did:key:{msid}"))

    @pytest.mark.asyncio
    async def test_other_method_rejected(self, resolver: DIDKeyResolver) -> None:
        with pytest.raises(MalformedIdentifierError):
            await resolver.resolve(Identifier.parse("did:web:example.com"))


class TestDIDKeyThroughRegistry:
    @pytest.mark.asyncio
    async def test_registry_keeps_key_contexts(self, ed25519_did: str) -> None:
        registry = ResolverRegistry.from_entries([("did", "key", DIDKeyResolver())])
        document = await registry.resolve(ed25519_did)
        assert document["id"] == ed25519_did
        assert DID_CONTEXT in document[CONTEXT_KEY]
