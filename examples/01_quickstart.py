#!/usr/bin/env python3
"""Example: Quickstart

Builds the default resolver registry, generates a did:key and resolves it.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install credential-resolver
"""
from __future__ import annotations

import asyncio
import json

import credential_resolver
from credential_resolver import (
    KeyManager,
    ResolverSettings,
    create_default_registry,
    did_key_from_public_key,
)


async def main() -> None:
    print(f"credential-resolver version: {credential_resolver.__version__}")

    # Step 1: Create a did:key from a fresh Ed25519 key
    _, public_bytes = KeyManager().generate_keypair("ed25519")
    did = did_key_from_public_key(public_bytes)
    print(f"DID: {did}")

    # Step 2: Build the registry (did:key only, no network)
    registry = create_default_registry(ResolverSettings(enable_did_web=False))
    print(f"Registered: {', '.join(str(d) for d in registry.descriptors())}")

    # Step 3: Resolve
    document = await registry.resolve(did)
    print(json.dumps(document, indent=2))


if __name__ == "__main__":
    asyncio.run(main())
