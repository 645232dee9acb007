#!/usr/bin/env python3
"""Example: Identifier conversion

Moves an accumulator id between the Dock and cheqd framings and looks up
the runtime types for two Dock spec versions.

Usage:
    python examples/02_identifier_conversion.py

Requirements:
    pip install credential-resolver
"""
from __future__ import annotations

from credential_resolver import (
    ResourceIdentifier,
    ResourceKind,
    convert,
    load_type_registry,
)
from credential_resolver.runtime import thaw


def main() -> None:
    payload = bytes.fromhex("0adb5ec7" + "11" * 25 + "52d5fd")

    dock_id = ResourceIdentifier.from_payload(ResourceKind.ACCUMULATOR, payload, "dock")
    print(f"Dock:          {dock_id}")

    for tag in ("dock-ss58", "cheqd-testnet", "cheqd-mainnet"):
        converted = convert(dock_id, tag)
        print(f"{tag + ':':<15}{converted}  (same payload: {converted == dock_id})")

    registry = load_type_registry()
    for version in (49, 50):
        types = thaw(registry.types_for("dock-pos-main-runtime", version))
        print(f"dock-pos-main-runtime@{version}: DidOrDidMethodKey = {types['DidOrDidMethodKey']}")


if __name__ == "__main__":
    main()
