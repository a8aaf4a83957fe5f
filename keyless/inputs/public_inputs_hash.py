"""Public-inputs hash: the one scalar the keyless circuit takes openly.

The slot order, slot count and per-field maximum lengths below are the
circuit's contract. Changing any of them yields proofs the verifier rejects.
"""

import logging

from keyless.core.errors import InternalInvariant
from keyless.crypto.packing import (
    num_packed_scalars,
    pad_and_hash_string,
    pad_and_pack_bytes_to_scalars_with_len,
)
from keyless.crypto.poseidon import hash_scalars
from keyless.crypto.types import ByteSerializable, ScalarHashable
from keyless.inputs import field_check
from keyless.inputs.config import (
    EXTRA_FIELD,
    ISS_VALUE,
    JWT_HEADER_WITH_SEPARATOR,
    PRIVATE_AUD_VALUE,
    UID_NAME,
    UID_VALUE,
    CircuitConfig,
)
from keyless.inputs.types import Input, PublicInputs
from keyless.jwt.field_parser import find_and_parse_field

logger = logging.getLogger(__name__)

NUM_EPK_SCALARS = 3
MAX_AUD_VAL_BYTES = 120


def compute_idc_hash(
    claims: Input, config: CircuitConfig, pepper: int, jwt_payload: str
) -> int:
    """Identity commitment: Poseidon(pepper, H(aud), H(uid value), H(uid key))."""
    uid_field = find_and_parse_field(jwt_payload, claims.uid_key)

    aud_hash = pad_and_hash_string(
        field_check.private_aud_value(claims),
        config.lookup_max_length(PRIVATE_AUD_VALUE),
        PRIVATE_AUD_VALUE,
    )
    uid_val_hash = pad_and_hash_string(
        uid_field.value, config.lookup_max_length(UID_VALUE), UID_VALUE
    )
    uid_key_hash = pad_and_hash_string(
        uid_field.key, config.lookup_max_length(UID_NAME), UID_NAME
    )
    return hash_scalars([pepper, aud_hash, uid_val_hash, uid_key_hash])


def pack_committed_key(epk: ByteSerializable, max_committed_epk_bytes: int) -> list[int]:
    """Three packed scalars of the key's byte encoding followed by its length."""
    if num_packed_scalars(max_committed_epk_bytes) != NUM_EPK_SCALARS:
        raise InternalInvariant(
            f"max_committed_epk_bytes={max_committed_epk_bytes} does not pack "
            f"into {NUM_EPK_SCALARS} scalars"
        )
    frs = pad_and_pack_bytes_to_scalars_with_len(
        epk.to_bytes(), max_committed_epk_bytes, "epk"
    )
    if len(frs) != NUM_EPK_SCALARS + 1:
        raise InternalInvariant(
            f"Expected {NUM_EPK_SCALARS + 1} EPK scalars, got {len(frs)}"
        )
    return frs


def compute_temp_pubkey_frs(
    claims: Input, max_committed_epk_bytes: int
) -> tuple[tuple[int, int, int], int]:
    """Pack the ephemeral key into the circuit's three slots plus its length."""
    frs = pack_committed_key(claims.epk, max_committed_epk_bytes)
    return (frs[0], frs[1], frs[2]), frs[3]


def compute_jwk_hash(jwk: ScalarHashable) -> int:
    return jwk.to_scalar_hash()


def assemble_public_inputs(claims: Input, config: CircuitConfig) -> PublicInputs:
    """Compute every slot of the public-inputs vector."""
    jwt_payload = claims.jwt_parts.payload_decoded()
    iss_field = find_and_parse_field(jwt_payload, "iss")
    temp_pubkey_frs, temp_pubkey_len = compute_temp_pubkey_frs(
        claims, config.max_committed_epk_bytes
    )
    extra_field = field_check.parsed_extra_field_or_default(claims)

    override_aud_value_hash = pad_and_hash_string(
        field_check.override_aud_value(claims), MAX_AUD_VAL_BYTES, "override_aud_value"
    )
    idc = compute_idc_hash(claims, config, claims.pepper, jwt_payload)
    iss_value_hash = pad_and_hash_string(
        iss_field.value, config.lookup_max_length(ISS_VALUE), ISS_VALUE
    )
    extra_field_hash = pad_and_hash_string(
        extra_field.whole_field, config.lookup_max_length(EXTRA_FIELD), EXTRA_FIELD
    )
    jwt_header_hash = pad_and_hash_string(
        claims.jwt_parts.header_undecoded_with_dot(),
        config.lookup_max_length(JWT_HEADER_WITH_SEPARATOR),
        JWT_HEADER_WITH_SEPARATOR,
    )

    return PublicInputs(
        temp_pubkey_0=temp_pubkey_frs[0],
        temp_pubkey_1=temp_pubkey_frs[1],
        temp_pubkey_2=temp_pubkey_frs[2],
        temp_pubkey_len=temp_pubkey_len,
        idc=idc,
        exp_date_secs=claims.exp_date_secs,
        exp_horizon_secs=claims.exp_horizon_secs,
        iss_value_hash=iss_value_hash,
        use_extra_field=int(claims.use_extra_field()),
        extra_field_hash=extra_field_hash,
        jwt_header_hash=jwt_header_hash,
        jwk_hash=compute_jwk_hash(claims.jwk),
        override_aud_value_hash=override_aud_value_hash,
        use_aud_override=int(claims.use_aud_override()),
    )


def compute_public_inputs_hash(claims: Input, config: CircuitConfig) -> int:
    """Poseidon of the 14 public-input slots."""
    public_inputs = assemble_public_inputs(claims, config)
    for name, value in public_inputs._asdict().items():
        logger.debug("public input %-24s %d", name, value)
    result = hash_scalars(public_inputs.as_scalars())
    logger.info("public_inputs_hash=%d uid_key=%s", result, claims.uid_key)
    return result
