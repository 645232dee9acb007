"""DID Document model and the context normalization applied to resolver output.

Resolvers may return any JSON-compatible mapping. The registry passes that
mapping through :func:`normalize_document`, which guarantees an
``@context`` entry without overwriting one the resolver already supplied.

:class:`DIDDocument` is the structured form used by resolvers that build
documents locally (``did:key``). It serializes to the W3C DID Core JSON
representation with :meth:`DIDDocument.to_dict`.

W3C reference
-------------
https://www.w3.org/TR/did-core/#data-model
"""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from credential_resolver.did.url import Identifier
from credential_resolver.errors import MalformedIdentifierError

# ------------------------------------------------------------------
# Contexts
# ------------------------------------------------------------------

DID_CONTEXT: str = "https://www.w3.org/ns/did/v1"
ED25519_2020_CONTEXT: str = "https://w3id.org/security/suites/ed25519-2020/v1"
SECP256K1_2019_CONTEXT: str = "https://w3id.org/security/suites/secp256k1-2019/v1"

CONTEXT_KEY: str = "@context"

# Relationship names listed in DID Core §5.3.
VERIFICATION_RELATIONSHIPS: tuple[str, ...] = (
    "authentication",
    "assertionMethod",
    "keyAgreement",
    "capabilityInvocation",
    "capabilityDelegation",
)


def normalize_document(document: Mapping[str, Any]) -> dict[str, Any]:
    """Return a fresh copy of *document* that carries an ``@context`` entry.

    The DID Core context is added only when the document declares no
    context at all; a ``null`` context counts as none. A context supplied by
    the resolver, string or list, is kept exactly as given.
    """
    normalized = dict(document)
    if normalized.get(CONTEXT_KEY) is None:
        normalized.pop(CONTEXT_KEY, None)
        normalized = {CONTEXT_KEY: DID_CONTEXT, **normalized}
    return normalized


# ------------------------------------------------------------------
# Verification method
# ------------------------------------------------------------------

_ALLOWED_VERIFICATION_TYPES = frozenset(
    {
        "Ed25519VerificationKey2020",
        "EcdsaSecp256k1VerificationKey2019",
        "JsonWebKey2020",
        "Multikey",
    }
)


@dataclass(frozen=True)
class VerificationMethod:
    """A public key attached to a DID document.

    Parameters
    ----------
    id:
        The verification method DID URL (e.g. ``did:key:z6Mk...#z6Mk...``).
    type:
        One of the supported verification method types.
    controller:
        The DID that controls this key.
    public_key_multibase:
        The public key encoded as a multibase string.
    """

    id: str
    type: str
    controller: str
    public_key_multibase: str

    def __post_init__(self) -> None:
        if self.type not in _ALLOWED_VERIFICATION_TYPES:
            raise ValueError(
                f"Unsupported verification method type {self.type!r}. "
                f"Allowed: {sorted(_ALLOWED_VERIFICATION_TYPES)}"
            )
        if not self.id:
            raise ValueError("VerificationMethod.id must not be empty.")
        if not self.controller:
            raise ValueError("VerificationMethod.controller must not be empty.")
        if not self.public_key_multibase:
            raise ValueError("VerificationMethod.public_key_multibase must not be empty.")

    def to_dict(self) -> dict[str, str]:
        """Serialize to a W3C-compatible plain dictionary."""
        return {
            "id": self.id,
            "type": self.type,
            "controller": self.controller,
            "publicKeyMultibase": self.public_key_multibase,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "VerificationMethod":
        return cls(
            id=data["id"],
            type=data["type"],
            controller=data["controller"],
            public_key_multibase=data["publicKeyMultibase"],
        )


# ------------------------------------------------------------------
# DID Document (Pydantic v2)
# ------------------------------------------------------------------


class DIDDocument(BaseModel):
    """A W3C DID Core document.

    Parameters
    ----------
    context:
        JSON-LD context URIs. Defaults to the W3C DID v1 context.
    id:
        The DID subject. Must parse as a bare DID (no path, query or fragment).
    controller:
        DID(s) authorized to change this document, if any.
    verification_method:
        Public keys associated with this DID.
    authentication, assertion_method, key_agreement,
    capability_invocation, capability_delegation:
        Verification method ids referenced by each relationship.
    """

    model_config = {"arbitrary_types_allowed": True}

    context: list[str] = Field(default_factory=lambda: [DID_CONTEXT])
    id: str
    controller: str | list[str] | None = None
    verification_method: list[VerificationMethod] = Field(default_factory=list)
    authentication: list[str] = Field(default_factory=list)
    assertion_method: list[str] = Field(default_factory=list)
    key_agreement: list[str] = Field(default_factory=list)
    capability_invocation: list[str] = Field(default_factory=list)
    capability_delegation: list[str] = Field(default_factory=list)

    @field_validator("id")
    @classmethod
    def validate_did_format(cls, value: str) -> str:
        """Validate the id is a bare DID."""
        try:
            parsed = Identifier.parse(value)
        except MalformedIdentifierError as exc:
            raise ValueError(str(exc)) from exc
        if not parsed.is_did or parsed.is_url:
            raise ValueError(f"Document id {value!r} must be a bare DID.")
        return value

    @field_validator("context")
    @classmethod
    def validate_context(cls, value: list[str]) -> list[str]:
        """Ensure the DID Core context leads the list."""
        if not value or value[0] != DID_CONTEXT:
            raise ValueError(f"context must start with {DID_CONTEXT!r}.")
        return value

    @model_validator(mode="after")
    def validate_relationship_references(self) -> "DIDDocument":
        """Validate relationship references point to declared methods."""
        method_ids = {vm.id for vm in self.verification_method}
        for name, refs in self._relationships().items():
            for ref in refs:
                if ref not in method_ids:
                    raise ValueError(
                        f"{name} reference {ref!r} does not match "
                        "any declared verificationMethod id."
                    )
        return self

    def _relationships(self) -> dict[str, list[str]]:
        values = (
            self.authentication,
            self.assertion_method,
            self.key_agreement,
            self.capability_invocation,
            self.capability_delegation,
        )
        return dict(zip(VERIFICATION_RELATIONSHIPS, values))

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def resolve_verification_method(self, method_id: str) -> VerificationMethod | None:
        """Return the VerificationMethod with the given id, or None."""
        for method in self.verification_method:
            if method.id == method_id:
                return method
        return None

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the DID Core JSON representation.

        Empty relationships and an absent controller are omitted.
        """
        data: dict[str, Any] = {CONTEXT_KEY: list(self.context), "id": self.id}
        if self.controller is not None:
            data["controller"] = self.controller
        data["verificationMethod"] = [vm.to_dict() for vm in self.verification_method]
        for name, refs in self._relationships().items():
            if refs:
                data[name] = list(refs)
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DIDDocument":
        """Build a document from its DID Core JSON representation.

        Embedded verification methods inside relationships are not supported;
        relationships must reference methods by id.

        Raises
        ------
        ValueError
            If the document fails validation.
        """
        context = data.get(CONTEXT_KEY, [DID_CONTEXT])
        if isinstance(context, str):
            context = [context]
        return cls(
            context=list(context),
            id=data["id"],
            controller=data.get("controller"),
            verification_method=[
                VerificationMethod.from_dict(vm)
                for vm in data.get("verificationMethod", [])
            ],
            authentication=list(data.get("authentication", [])),
            assertion_method=list(data.get("assertionMethod", [])),
            key_agreement=list(data.get("keyAgreement", [])),
            capability_invocation=list(data.get("capabilityInvocation", [])),
            capability_delegation=list(data.get("capabilityDelegation", [])),
        )


__all__ = [
    "CONTEXT_KEY",
    "DID_CONTEXT",
    "DIDDocument",
    "ED25519_2020_CONTEXT",
    "SECP256K1_2019_CONTEXT",
    "VERIFICATION_RELATIONSHIPS",
    "VerificationMethod",
    "normalize_document",
]
