"""Claim bundle and the ordered public-inputs record."""

from typing import NamedTuple

from pydantic import BaseModel, ConfigDict, Field

from keyless.crypto.epk import EphemeralPublicKey
from keyless.crypto.jwk import RsaJwk
from keyless.crypto.poseidon import BN254_MODULUS
from keyless.jwt.parts import JwtParts

U64_MAX = 2**64 - 1


class Input(BaseModel):
    """Everything one proof request commits to. Immutable once built."""

    model_config = ConfigDict(frozen=True)

    jwt_parts: JwtParts
    jwk: RsaJwk
    epk: EphemeralPublicKey
    epk_blinder: int = Field(0, ge=0, lt=BN254_MODULUS)
    pepper: int = Field(ge=0, lt=BN254_MODULUS)
    exp_date_secs: int = Field(ge=0, le=U64_MAX)
    exp_horizon_secs: int = Field(ge=0, le=U64_MAX)
    uid_key: str = "sub"
    extra_field: str | None = None
    idc_aud: str | None = None
    skip_aud_checks: bool = False

    def use_extra_field(self) -> bool:
        return self.extra_field is not None

    def use_aud_override(self) -> bool:
        return self.idc_aud is not None


class PublicInputs(NamedTuple):
    """The 14 scalars hashed into the circuit's public input, in circuit order."""

    temp_pubkey_0: int
    temp_pubkey_1: int
    temp_pubkey_2: int
    temp_pubkey_len: int
    idc: int
    exp_date_secs: int
    exp_horizon_secs: int
    iss_value_hash: int
    use_extra_field: int
    extra_field_hash: int
    jwt_header_hash: int
    jwk_hash: int
    override_aud_value_hash: int
    use_aud_override: int

    def as_scalars(self) -> list[int]:
        return list(self)
