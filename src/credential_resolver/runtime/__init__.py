"""credential_resolver.runtime: chain runtime type definitions keyed by spec version."""
from __future__ import annotations

from credential_resolver.runtime.bundle import (
    DEFAULT_TYPE_TABLE,
    DOCK_MAIN_RUNTIME,
    DOCK_POS_MAIN_RUNTIME,
    DOCK_POS_TEST_RUNTIME,
    load_type_registry,
)
from credential_resolver.runtime.versioned import (
    BundleRange,
    BundleSpec,
    TypesBundle,
    VersionRange,
    VersionedTypeRegistry,
    thaw,
)

__all__ = [
    "BundleRange",
    "BundleSpec",
    "DEFAULT_TYPE_TABLE",
    "DOCK_MAIN_RUNTIME",
    "DOCK_POS_MAIN_RUNTIME",
    "DOCK_POS_TEST_RUNTIME",
    "TypesBundle",
    "VersionRange",
    "VersionedTypeRegistry",
    "load_type_registry",
    "thaw",
]
