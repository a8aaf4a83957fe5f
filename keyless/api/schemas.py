"""Request and response bodies for the public-inputs endpoint."""

from pydantic import BaseModel, Field, field_validator

from keyless.crypto.epk import EphemeralPublicKey, EpkScheme
from keyless.crypto.jwk import AQAB, RsaJwk


class JwkPayload(BaseModel):
    """Issuer RSA key as published in its JWKS."""

    kid: str
    n: str
    e: str = AQAB
    alg: str = "RS256"
    kty: str = "RSA"

    def to_jwk(self) -> RsaJwk:
        return RsaJwk(kid=self.kid, n=self.n, e=self.e, alg=self.alg, kty=self.kty)


class EpkPayload(BaseModel):
    """Ephemeral public key as hex, optionally ``0x``-prefixed."""

    scheme: EpkScheme = "ed25519"
    public_key_hex: str

    @field_validator("public_key_hex")
    @classmethod
    def _strip_prefix(cls, value: str) -> str:
        value = value.strip().removeprefix("0x")
        bytes.fromhex(value)
        return value

    def to_epk(self) -> EphemeralPublicKey:
        return EphemeralPublicKey(
            scheme=self.scheme, public_key=bytes.fromhex(self.public_key_hex)
        )


class PublicInputsHashRequest(BaseModel):
    """Body for POST /v0/public-inputs-hash.

    Field elements are accepted as decimal strings or JSON integers.
    """

    jwt_b64: str
    jwk: JwkPayload
    epk: EpkPayload
    epk_blinder: int = 0
    pepper: int
    exp_date_secs: int = Field(ge=0)
    exp_horizon_secs: int = Field(ge=0)
    uid_key: str = "sub"
    extra_field: str | None = None
    idc_aud: str | None = None
    skip_aud_checks: bool = False


class PublicInputsHashResponse(BaseModel):
    """Decimal string of the public-inputs hash."""

    public_inputs_hash: str
