"""Ephemeral public keys and their BCS byte encoding."""

from typing import Literal

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, ed25519
from pydantic import BaseModel, ConfigDict, model_validator

ED25519_PUBLIC_KEY_BYTES = 32
SECP256R1_UNCOMPRESSED_BYTES = 65

EpkScheme = Literal["ed25519", "secp256r1_ecdsa"]

# BCS enum variant indices
_VARIANT_TAGS: dict[str, int] = {"ed25519": 0, "secp256r1_ecdsa": 1}
_KEY_LENGTHS: dict[str, int] = {
    "ed25519": ED25519_PUBLIC_KEY_BYTES,
    "secp256r1_ecdsa": SECP256R1_UNCOMPRESSED_BYTES,
}


def _uleb128(value: int) -> bytes:
    out = bytearray()
    while True:
        byte = value & 0x7F
        value >>= 7
        if value:
            out.append(byte | 0x80)
        else:
            out.append(byte)
            return bytes(out)


class EphemeralPublicKey(BaseModel):
    """A short-lived public key committed into the proof."""

    model_config = ConfigDict(frozen=True)

    scheme: EpkScheme
    public_key: bytes

    @model_validator(mode="after")
    def _check_length(self) -> "EphemeralPublicKey":
        expected = _KEY_LENGTHS[self.scheme]
        if len(self.public_key) != expected:
            raise ValueError(
                f"{self.scheme} public key must be {expected} bytes, "
                f"got {len(self.public_key)}"
            )
        return self

    @classmethod
    def ed25519(cls, public_key: bytes) -> "EphemeralPublicKey":
        return cls(scheme="ed25519", public_key=public_key)

    @classmethod
    def secp256r1_ecdsa(cls, public_key: bytes) -> "EphemeralPublicKey":
        """From an uncompressed SEC1 point."""
        return cls(scheme="secp256r1_ecdsa", public_key=public_key)

    @classmethod
    def from_ed25519_seed(cls, seed: bytes) -> "EphemeralPublicKey":
        """Derive the Ed25519 public key of a 32-byte private seed."""
        private_key = ed25519.Ed25519PrivateKey.from_private_bytes(seed)
        raw = private_key.public_key().public_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PublicFormat.Raw,
        )
        return cls.ed25519(raw)

    @classmethod
    def from_secp256r1_key(cls, key: ec.EllipticCurvePublicKey) -> "EphemeralPublicKey":
        if not isinstance(key.curve, ec.SECP256R1):
            raise ValueError(f"Expected a P-256 key, got {key.curve.name}")
        raw = key.public_bytes(
            encoding=serialization.Encoding.X962,
            format=serialization.PublicFormat.UncompressedPoint,
        )
        return cls.secp256r1_ecdsa(raw)

    def to_bytes(self) -> bytes:
        """Variant tag, length prefix, then the raw key."""
        return (
            bytes([_VARIANT_TAGS[self.scheme]])
            + _uleb128(len(self.public_key))
            + self.public_key
        )
