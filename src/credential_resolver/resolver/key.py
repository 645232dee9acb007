"""DIDKeyResolver: deterministic ``did:key`` resolution.

Implements the ``did:key`` method (https://w3c-ccg.github.io/did-method-key/).
The public key is recovered from the DID string alone:

1. Strip the ``z`` multibase prefix and base58btc-decode the rest.
2. Read the multicodec varint: ``0xed`` for Ed25519, ``0xe7`` for secp256k1.
3. Validate the remaining bytes as a public key of that type.
4. Build a document with a single verification method ``<did>#<msid>``
   referenced by every verification relationship except ``keyAgreement``.

No I/O is performed; the only failure mode is a malformed identifier.
"""
from __future__ import annotations

from typing import Any

from credential_resolver.did.document import (
    DID_CONTEXT,
    ED25519_2020_CONTEXT,
    SECP256K1_2019_CONTEXT,
    DIDDocument,
    VerificationMethod,
)
from credential_resolver.did.key_manager import KEY_TYPES, KeyManager
from credential_resolver.did.multibase import (
    ED25519_PUB,
    SECP256K1_PUB,
    multibase_decode,
    multibase_encode,
    multicodec_unwrap,
    multicodec_wrap,
)
from credential_resolver.did.url import Identifier
from credential_resolver.errors import MalformedIdentifierError
from credential_resolver.resolver.base import MethodResolver

# multicodec -> (verification method type, suite context)
_KEY_SUITES: dict[int, tuple[str, str]] = {
    ED25519_PUB: ("Ed25519VerificationKey2020", ED25519_2020_CONTEXT),
    SECP256K1_PUB: ("EcdsaSecp256k1VerificationKey2019", SECP256K1_2019_CONTEXT),
}


class DIDKeyResolver(MethodResolver):
    """Resolve ``did:key`` identifiers without any backend.

    Parameters
    ----------
    key_manager:
        Optional :class:`~credential_resolver.did.key_manager.KeyManager`
        used to validate decoded keys. A new instance is created if not
        provided.
    """

    def __init__(self, key_manager: KeyManager | None = None) -> None:
        self._key_manager = key_manager or KeyManager()

    async def resolve(self, identifier: Identifier) -> dict[str, Any]:
        return self.build_document(identifier).to_dict()

    def build_document(self, identifier: Identifier) -> DIDDocument:
        """Decode the key in *identifier* and build its :class:`DIDDocument`.

        Raises
        ------
        MalformedIdentifierError
            If the identifier is not ``did:key`` or the key does not decode.
        """
        did = identifier.did
        if identifier.scheme != "did" or identifier.method != "key":
            raise MalformedIdentifierError(did, "not a did:key identifier")

        msid = identifier.method_specific_id
        codec, public_key = _decode_key(did, msid)
        try:
            self._key_manager.validate_public_key(codec, public_key)
        except ValueError as exc:
            raise MalformedIdentifierError(did, str(exc)) from exc

        vm_type, suite_context = _KEY_SUITES[codec]
        vm_id = f"{did}#{msid}"
        refs = [vm_id]
        return DIDDocument(
            context=[DID_CONTEXT, suite_context],
            id=did,
            verification_method=[
                VerificationMethod(
                    id=vm_id,
                    type=vm_type,
                    controller=did,
                    public_key_multibase=msid,
                )
            ],
            authentication=refs,
            assertion_method=refs,
            capability_invocation=refs,
            capability_delegation=refs,
        )


def _decode_key(did: str, msid: str) -> tuple[int, bytes]:
    try:
        decoded = multibase_decode(msid)
        codec, public_key = multicodec_unwrap(decoded)
    except ValueError as exc:
        raise MalformedIdentifierError(did, str(exc)) from exc
    if codec not in _KEY_SUITES:
        raise MalformedIdentifierError(
            did, f"unsupported multicodec 0x{codec:x}; expected Ed25519 or secp256k1"
        )
    return codec, public_key


def did_key_from_public_key(public_key: bytes, key_type: str = "ed25519") -> str:
    """Encode a raw public key as a ``did:key`` DID.

    Parameters
    ----------
    public_key:
        32 raw bytes for Ed25519, 33 compressed bytes for secp256k1.
    key_type:
        ``"ed25519"`` or ``"secp256k1"``.

    Raises
    ------
    ValueError
        If the key type is unknown or the key bytes are invalid.
    """
    codec = KEY_TYPES.get(key_type)
    if codec is None:
        raise ValueError(f"Unsupported key type {key_type!r}. Supported: {sorted(KEY_TYPES)}")
    KeyManager().validate_public_key(codec, public_key)
    return f"did:key:{multibase_encode(multicodec_wrap(codec, public_key))}"


__all__ = ["DIDKeyResolver", "did_key_from_public_key"]
