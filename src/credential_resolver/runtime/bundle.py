"""Built-in Dock runtime type table and typesBundle loading."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional, Union

from pydantic import ValidationError

from credential_resolver.errors import ConfigurationError
from credential_resolver.runtime.versioned import VersionRange, VersionedTypeRegistry

logger = logging.getLogger(__name__)

DOCK_MAIN_RUNTIME = "dock-main-runtime"
DOCK_POS_MAIN_RUNTIME = "dock-pos-main-runtime"
DOCK_POS_TEST_RUNTIME = "dock-pos-test-runtime"

# Runtimes before spec 23 predate multi-address support.
_DOCK_MAIN_RANGES: tuple[VersionRange, ...] = (
    VersionRange(
        0,
        22,
        {
            "Address": "AccountId",
            "LookupSource": "AccountId",
            "Did": "[u8;32]",
        },
    ),
    VersionRange(
        23,
        None,
        {
            "Address": "MultiAddress",
            "LookupSource": "MultiAddress",
            "Did": "[u8;32]",
        },
    ),
)

# Spec 50 introduced did:key controllers alongside on-chain DIDs.
_DOCK_POS_RANGES: tuple[VersionRange, ...] = (
    VersionRange(
        0,
        49,
        {
            "Address": "MultiAddress",
            "LookupSource": "MultiAddress",
            "Did": "[u8;32]",
            "DidOrDidMethodKey": "Did",
        },
    ),
    VersionRange(
        50,
        None,
        {
            "Address": "MultiAddress",
            "LookupSource": "MultiAddress",
            "Did": "[u8;32]",
            "DidMethodKey": {
                "_enum": {"Sr25519": "[u8;32]", "Ed25519": "[u8;32]", "Secp256k1": "[u8;33]"}
            },
            "DidOrDidMethodKey": {"_enum": {"Did": "Did", "DidMethodKey": "DidMethodKey"}},
        },
    ),
)

DEFAULT_TYPE_TABLE: dict[str, tuple[VersionRange, ...]] = {
    DOCK_MAIN_RUNTIME: _DOCK_MAIN_RANGES,
    DOCK_POS_MAIN_RUNTIME: _DOCK_POS_RANGES,
    DOCK_POS_TEST_RUNTIME: _DOCK_POS_RANGES,
}


def load_type_registry(path: Optional[Union[str, Path]] = None) -> VersionedTypeRegistry:
    """Load a :class:`VersionedTypeRegistry` from a typesBundle JSON file.

    Parameters
    ----------
    path:
        JSON file in the typesBundle shape. When ``None`` the built-in Dock
        runtime table is used.

    Returns
    -------
    VersionedTypeRegistry

    Raises
    ------
    ConfigurationError
        If the file is not valid JSON or not a typesBundle.
    InvalidRangeTableError
        If the bundle's ranges overlap, leave gaps or are otherwise invalid.
    OSError
        If the file cannot be read.
    """
    if path is None:
        return VersionedTypeRegistry(DEFAULT_TYPE_TABLE)

    bundle_path = Path(path)
    logger.info("Loading types bundle from %s", bundle_path)
    try:
        raw: Any = json.loads(bundle_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"Types bundle {bundle_path} is not valid JSON: {exc}") from exc
    try:
        return VersionedTypeRegistry.from_types_bundle(raw)
    except ValidationError as exc:
        raise ConfigurationError(
            f"Types bundle {bundle_path} does not have the typesBundle shape: {exc}"
        ) from exc


__all__ = [
    "DEFAULT_TYPE_TABLE",
    "DOCK_MAIN_RUNTIME",
    "DOCK_POS_MAIN_RUNTIME",
    "DOCK_POS_TEST_RUNTIME",
    "load_type_registry",
]
