"""Test that the top-level quickstart API works for credential-resolver."""
from __future__ import annotations

import pytest


def test_quickstart_version() -> None:
    import credential_resolver

    assert credential_resolver.__version__ == "0.1.0"


@pytest.mark.asyncio
async def test_quickstart_resolve_did_key() -> None:
    from credential_resolver import (
        DID_CONTEXT,
        KeyManager,
        ResolverSettings,
        create_default_registry,
        did_key_from_public_key,
    )

    _, public_bytes = KeyManager().generate_keypair()
    did = did_key_from_public_key(public_bytes)
    registry = create_default_registry(ResolverSettings(enable_did_web=False))

    document = await registry.resolve(did)

    assert document["id"] == did
    assert DID_CONTEXT in document["@context"]


@pytest.mark.asyncio
async def test_quickstart_malformed_before_dispatch() -> None:
    from credential_resolver import (
        MalformedIdentifierError,
        ResolverSettings,
        create_default_registry,
    )

    registry = create_default_registry(ResolverSettings(enable_did_web=False))
    with pytest.raises(MalformedIdentifierError):
        await registry.resolve("did:")


def test_quickstart_convert() -> None:
    from credential_resolver import ResourceIdentifier, ResourceKind, convert, decode

    payload = bytes.fromhex("0adb5ec7" + "11" * 25 + "52d5fd")
    dock_id = ResourceIdentifier.from_payload(ResourceKind.ACCUMULATOR, payload, "dock")
    cheqd_id = convert(dock_id, "cheqd-testnet")

    assert decode(cheqd_id.raw, "cheqd-testnet") == payload
    assert cheqd_id == dock_id


def test_quickstart_types() -> None:
    from credential_resolver import load_type_registry

    registry = load_type_registry()
    assert registry.types_for("dock-main-runtime", 10) != registry.types_for(
        "dock-main-runtime", 23
    )
