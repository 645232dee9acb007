"""VersionedTypeRegistry: runtime type definitions selected by spec version.

A chain runtime changes its type definitions across upgrades. For each spec
name the registry holds a sorted, gap-free list of :class:`VersionRange`
entries; :meth:`VersionedTypeRegistry.types_for` returns the definitions in
force for one spec version.

The registry is validated once at construction and never mutated afterwards,
so concurrent readers need no locking.

Tables can be exchanged in the polkadot ``typesBundle`` JSON shape::

    {
      "spec": {
        "dock-pos-main-runtime": {
          "types": [
            {"minmax": [0, 49], "types": {"DidOrDidMethodKey": "Did"}},
            {"minmax": [50, null], "types": {"DidOrDidMethodKey": {"_enum": ["Did", "DidMethodKey"]}}}
          ]
        }
      }
    }
"""
from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from credential_resolver.errors import (
    InvalidRangeTableError,
    UnknownSpecError,
    UnsupportedVersionError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VersionRange:
    """Type definitions valid for spec versions ``min_version..max_version`` inclusive.

    Parameters
    ----------
    min_version:
        Lowest spec version covered.
    max_version:
        Highest spec version covered, or ``None`` for an open-ended range.
    types:
        Mapping of type name to type definition. Stored as a deep read-only
        copy: nested mappings become read-only views and lists become tuples.
    """

    min_version: int
    max_version: Optional[int]
    types: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "types", _freeze(self.types))

    def to_dict(self) -> dict[str, Any]:
        """Return a mutable, JSON-compatible copy of :attr:`types`."""
        return thaw(self.types)

    @property
    def open_ended(self) -> bool:
        return self.max_version is None

    def contains(self, version: int) -> bool:
        """Return ``True`` if *version* falls inside this range."""
        if version < self.min_version:
            return False
        return self.max_version is None or version <= self.max_version

    def __str__(self) -> str:
        upper = "open" if self.max_version is None else str(self.max_version)
        return f"[{self.min_version}, {upper}]"


def _freeze(value: Any) -> Any:
    if isinstance(value, Mapping):
        return MappingProxyType({key: _freeze(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(item) for item in value)
    return value


def thaw(value: Any) -> Any:
    """Return a mutable, JSON-compatible copy of a frozen type definition."""
    if isinstance(value, Mapping):
        return {key: thaw(item) for key, item in value.items()}
    if isinstance(value, tuple):
        return [thaw(item) for item in value]
    return value


# ---------------------------------------------------------------------------
# typesBundle wire models
# ---------------------------------------------------------------------------


class BundleRange(BaseModel):
    """One ``{"minmax": [...], "types": {...}}`` entry of a typesBundle spec."""

    minmax: tuple[Optional[int], Optional[int]]
    types: dict[str, Any] = Field(default_factory=dict)

    @field_validator("minmax")
    @classmethod
    def validate_minmax(
        cls, value: tuple[Optional[int], Optional[int]]
    ) -> tuple[Optional[int], Optional[int]]:
        low, high = value
        if low is not None and low < 0:
            raise ValueError("minmax lower bound must be non-negative")
        if high is not None and high < 0:
            raise ValueError("minmax upper bound must be non-negative")
        return value


class BundleSpec(BaseModel):
    """The ranges for one spec name."""

    types: list[BundleRange]


class TypesBundle(BaseModel):
    """Top-level polkadot ``typesBundle`` document."""

    spec: dict[str, BundleSpec]


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


class VersionedTypeRegistry:
    """Per-spec-name version range tables.

    Parameters
    ----------
    table:
        Mapping of spec name to its ranges, in any order.

    Raises
    ------
    InvalidRangeTableError
        If any spec's ranges are empty, inverted, overlapping or leave a gap,
        or if a range other than the last is open-ended.

    Example
    -------
    ::

        registry = VersionedTypeRegistry({
            "dock-main-runtime": [
                VersionRange(0, 22, {"Address": "AccountId"}),
                VersionRange(23, None, {"Address": "MultiAddress"}),
            ],
        })
        registry.types_for("dock-main-runtime", 10)["Address"]  # "AccountId"
    """

    def __init__(self, table: Mapping[str, Iterable[VersionRange]]) -> None:
        specs: dict[str, tuple[VersionRange, ...]] = {}
        for spec_name, ranges in table.items():
            specs[spec_name] = _validate_ranges(spec_name, list(ranges))
        self._specs: Mapping[str, tuple[VersionRange, ...]] = MappingProxyType(specs)
        logger.debug("Loaded type ranges for %d spec(s)", len(specs))

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def types_for(self, spec_name: str, version: int) -> Mapping[str, Any]:
        """Return the type definitions in force for *version* of *spec_name*.

        Raises
        ------
        UnknownSpecError
            If *spec_name* has no ranges.
        UnsupportedVersionError
            If *version* is below the first range or above a closed last range.
        """
        ranges = self._specs.get(spec_name)
        if ranges is None:
            raise UnknownSpecError(spec_name)
        if version < ranges[0].min_version:
            raise UnsupportedVersionError(
                spec_name, version, f"lowest supported version is {ranges[0].min_version}"
            )
        for version_range in ranges:
            if version_range.contains(version):
                return version_range.types
        raise UnsupportedVersionError(
            spec_name, version, f"highest supported version is {ranges[-1].max_version}"
        )

    def spec_names(self) -> list[str]:
        """Return the registered spec names, sorted."""
        return sorted(self._specs)

    def ranges(self, spec_name: str) -> tuple[VersionRange, ...]:
        """Return the ranges of *spec_name* in ascending order.

        Raises
        ------
        UnknownSpecError
            If *spec_name* has no ranges.
        """
        try:
            return self._specs[spec_name]
        except KeyError:
            raise UnknownSpecError(spec_name) from None

    def __contains__(self, spec_name: object) -> bool:
        return spec_name in self._specs

    def __len__(self) -> int:
        return len(self._specs)

    # ------------------------------------------------------------------
    # typesBundle conversion
    # ------------------------------------------------------------------

    @classmethod
    def from_types_bundle(cls, bundle: Mapping[str, Any] | TypesBundle) -> "VersionedTypeRegistry":
        """Build a registry from a typesBundle mapping or model.

        A missing lower bound in ``minmax`` is read as version 0.

        Raises
        ------
        pydantic.ValidationError
            If *bundle* does not have the typesBundle shape.
        InvalidRangeTableError
            If the ranges fail validation.
        """
        model = bundle if isinstance(bundle, TypesBundle) else TypesBundle.model_validate(bundle)
        table = {
            spec_name: [
                VersionRange(
                    min_version=entry.minmax[0] or 0,
                    max_version=entry.minmax[1],
                    types=entry.types,
                )
                for entry in spec.types
            ]
            for spec_name, spec in model.spec.items()
        }
        return cls(table)

    def to_types_bundle(self) -> dict[str, Any]:
        """Serialise the registry to a JSON-compatible typesBundle dict."""
        bundle = TypesBundle(
            spec={
                spec_name: BundleSpec(
                    types=[
                        BundleRange(
                            minmax=(r.min_version, r.max_version),
                            types=r.to_dict(),
                        )
                        for r in ranges
                    ]
                )
                for spec_name, ranges in self._specs.items()
            }
        )
        return bundle.model_dump(mode="json")


def _validate_ranges(spec_name: str, ranges: list[VersionRange]) -> tuple[VersionRange, ...]:
    if not ranges:
        raise InvalidRangeTableError(spec_name, "no version ranges")
    ordered = sorted(ranges, key=lambda r: r.min_version)
    for current in ordered:
        if current.min_version < 0:
            raise InvalidRangeTableError(spec_name, f"range {current} starts below 0")
        if current.max_version is not None and current.max_version < current.min_version:
            raise InvalidRangeTableError(spec_name, f"range {current} has max below min")
    for previous, current in zip(ordered, ordered[1:]):
        if previous.max_version is None:
            raise InvalidRangeTableError(
                spec_name, f"open-ended range {previous} is followed by {current}"
            )
        if current.min_version <= previous.max_version:
            raise InvalidRangeTableError(spec_name, f"range {previous} overlaps {current}")
        if current.min_version > previous.max_version + 1:
            raise InvalidRangeTableError(
                spec_name, f"gap between {previous} and {current}"
            )
    return tuple(ordered)


__all__ = [
    "BundleRange",
    "BundleSpec",
    "TypesBundle",
    "VersionRange",
    "VersionedTypeRegistry",
    "thaw",
]
