"""Claim values whose selection depends on the request's optional fields."""

from keyless.jwt.field_parser import ParsedField, find_and_parse_field
from keyless.inputs.types import Input

# Committed in the extra-field slot when no extra field is requested.
DEFAULT_EXTRA_FIELD = ParsedField(
    index=1,
    key="",
    value="",
    colon_index=0,
    value_index=0,
    whole_field=" ",
)


def private_aud_value(claims: Input) -> str:
    """The audience bound into the identity commitment.

    With an override audience the token was issued to a recovery service, so
    the original audience comes from the request instead of the token.
    """
    if claims.idc_aud is not None:
        return claims.idc_aud
    return find_and_parse_field(claims.jwt_parts.payload_decoded(), "aud").value


def override_aud_value(claims: Input) -> str:
    """The token's own ``aud`` when an override is in use, else empty."""
    if claims.idc_aud is None:
        return ""
    return find_and_parse_field(claims.jwt_parts.payload_decoded(), "aud").value


def parsed_extra_field_or_default(claims: Input) -> ParsedField:
    if claims.extra_field is None:
        return DEFAULT_EXTRA_FIELD
    return find_and_parse_field(claims.jwt_parts.payload_decoded(), claims.extra_field)
