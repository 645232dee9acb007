"""KeyManager: public key generation and validation for ``did:key``.

A thin wrapper around the ``cryptography`` package's Ed25519 and
secp256k1 primitives. Key material is handled as raw bytes so callers can
encode it into identifiers without depending on this module's internal
types:

* Ed25519 public keys are 32 raw bytes.
* secp256k1 public keys are 33-byte SEC1 compressed points.
"""
from __future__ import annotations

from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey,
    Ed25519PublicKey,
)
from cryptography.hazmat.primitives.serialization import (
    Encoding,
    NoEncryption,
    PrivateFormat,
    PublicFormat,
)

from credential_resolver.did.multibase import ED25519_PUB, SECP256K1_PUB

KEY_TYPES: dict[str, int] = {
    "ed25519": ED25519_PUB,
    "secp256k1": SECP256K1_PUB,
}


class KeyManager:
    """Generate keypairs and validate raw public keys.

    Example
    -------
    ::

        manager = KeyManager()
        private_bytes, public_bytes = manager.generate_keypair("ed25519")
        manager.validate_public_key(ED25519_PUB, public_bytes)
    """

    def generate_keypair(self, key_type: str = "ed25519") -> tuple[bytes, bytes]:
        """Generate a new keypair.

        Parameters
        ----------
        key_type:
            ``"ed25519"`` or ``"secp256k1"``.

        Returns
        -------
        tuple[bytes, bytes]
            ``(private_key_bytes, public_key_bytes)``. Ed25519 private keys
            are 32 raw bytes; secp256k1 private keys are the 32-byte scalar.

        Raises
        ------
        ValueError
            If *key_type* is not supported.
        """
        if key_type == "ed25519":
            private_key = Ed25519PrivateKey.generate()
            private_bytes = private_key.private_bytes(
                Encoding.Raw, PrivateFormat.Raw, NoEncryption()
            )
            public_bytes = private_key.public_key().public_bytes(
                Encoding.Raw, PublicFormat.Raw
            )
            return private_bytes, public_bytes
        if key_type == "secp256k1":
            secp_key = ec.generate_private_key(ec.SECP256K1())
            private_bytes = secp_key.private_numbers().private_value.to_bytes(32, "big")
            public_bytes = secp_key.public_key().public_bytes(
                Encoding.X962, PublicFormat.CompressedPoint
            )
            return private_bytes, public_bytes
        raise ValueError(
            f"Unsupported key type {key_type!r}. Supported: {sorted(KEY_TYPES)}"
        )

    def validate_public_key(self, codec: int, public_key_bytes: bytes) -> None:
        """Check that *public_key_bytes* is a valid key for multicodec *codec*.

        Raises
        ------
        ValueError
            If the codec is unsupported or the bytes are not a valid key.
        """
        if codec == ED25519_PUB:
            if len(public_key_bytes) != 32:
                raise ValueError(
                    f"Ed25519 public key must be 32 bytes, got {len(public_key_bytes)}."
                )
            Ed25519PublicKey.from_public_bytes(public_key_bytes)
        elif codec == SECP256K1_PUB:
            if len(public_key_bytes) != 33:
                raise ValueError(
                    "secp256k1 public key must be a 33-byte compressed point, "
                    f"got {len(public_key_bytes)} bytes."
                )
            ec.EllipticCurvePublicKey.from_encoded_point(ec.SECP256K1(), public_key_bytes)
        else:
            raise ValueError(f"Unsupported multicodec 0x{codec:x} for did:key.")


__all__ = ["KEY_TYPES", "KeyManager"]
