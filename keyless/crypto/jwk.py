"""Issuer RSA JWKs and their Poseidon scalar hash."""

import binascii

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPublicKey
from jwt.utils import base64url_decode, to_base64url_uint
from pydantic import BaseModel, ConfigDict

from keyless.core.errors import UnsupportedKeyType
from keyless.crypto.packing import pack_bytes_to_one_scalar
from keyless.crypto.poseidon import hash_scalars

RSA_MODULUS_BYTES = 256
# three 64-bit limbs per scalar
RSA_MODULUS_CHUNK_BYTES = 24
AQAB = "AQAB"


class RsaJwk(BaseModel):
    """An issuer's RSA signing key in JWK form."""

    model_config = ConfigDict(frozen=True)

    kid: str
    kty: str = "RSA"
    alg: str = "RS256"
    e: str = AQAB
    n: str

    @classmethod
    def new_256_aqab(cls, kid: str, n: str) -> "RsaJwk":
        """RS256 key with public exponent 65537."""
        return cls(kid=kid, n=n)

    @classmethod
    def from_pem(cls, public_key_pem: str, kid: str) -> "RsaJwk":
        """Convert a PEM public key to JWK form."""
        loaded = serialization.load_pem_public_key(public_key_pem.encode())
        if not isinstance(loaded, RSAPublicKey):
            raise UnsupportedKeyType(f"Key {kid!r} is not an RSA public key")
        numbers = loaded.public_numbers()
        return cls(
            kid=kid,
            n=to_base64url_uint(numbers.n).decode(),
            e=to_base64url_uint(numbers.e).decode(),
        )

    def modulus_bytes(self) -> bytes:
        """Big-endian modulus bytes."""
        try:
            return base64url_decode(self.n)
        except (binascii.Error, ValueError) as exc:
            raise UnsupportedKeyType(f"Invalid modulus encoding for {self.kid!r}") from exc

    def to_scalar_hash(self) -> int:
        """Hash the little-endian modulus in 24-byte limbs plus its byte length."""
        if self.kty != "RSA":
            raise UnsupportedKeyType(f"Key type {self.kty!r} cannot be hashed")
        modulus = self.modulus_bytes()
        if len(modulus) != RSA_MODULUS_BYTES:
            raise UnsupportedKeyType(
                f"Wrong modulus size, must be {RSA_MODULUS_BYTES} bytes, "
                f"got {len(modulus)}"
            )
        reversed_modulus = modulus[::-1]
        scalars = [
            pack_bytes_to_one_scalar(reversed_modulus[i : i + RSA_MODULUS_CHUNK_BYTES])
            for i in range(0, RSA_MODULUS_BYTES, RSA_MODULUS_CHUNK_BYTES)
        ]
        scalars.append(RSA_MODULUS_BYTES)
        return hash_scalars(scalars)
