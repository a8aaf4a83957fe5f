"""Undecoded JWT segments and the decoded views the encoder needs."""

import binascii
from typing import Any

import jwt
from jwt.utils import base64url_decode
from pydantic import BaseModel, ConfigDict

from keyless.core.errors import MalformedToken

JWT_SEPARATOR = "."


class JwtParts(BaseModel):
    """The three base64url segments of a signed JWT."""

    model_config = ConfigDict(frozen=True)

    header_b64: str
    payload_b64: str
    signature_b64: str

    @classmethod
    def from_b64(cls, token: str) -> "JwtParts":
        """Split a compact-serialized JWT."""
        parts = token.strip().split(JWT_SEPARATOR)
        if len(parts) != 3:
            raise MalformedToken(
                f"JWT must have 3 dot-separated parts, got {len(parts)}"
            )
        header, payload, signature = parts
        return cls(header_b64=header, payload_b64=payload, signature_b64=signature)

    def to_b64(self) -> str:
        return JWT_SEPARATOR.join((self.header_b64, self.payload_b64, self.signature_b64))

    def header_undecoded_with_dot(self) -> str:
        """The header segment with its trailing separator, as the circuit hashes it."""
        return self.header_b64 + JWT_SEPARATOR

    def unsigned_undecoded(self) -> str:
        """``header.payload``, the bytes the issuer signed."""
        return self.header_b64 + JWT_SEPARATOR + self.payload_b64

    def header_decoded(self) -> dict[str, Any]:
        try:
            return jwt.get_unverified_header(self.to_b64())
        except jwt.DecodeError as exc:
            raise MalformedToken(f"JWT header is not decodable: {exc}") from exc

    def payload_decoded(self) -> str:
        """The payload JSON text exactly as the issuer encoded it."""
        try:
            return base64url_decode(self.payload_b64).decode("utf-8")
        except (binascii.Error, ValueError) as exc:
            raise MalformedToken(f"JWT payload is not decodable: {exc}") from exc

    def signature(self) -> bytes:
        try:
            return base64url_decode(self.signature_b64)
        except (binascii.Error, ValueError) as exc:
            raise MalformedToken(f"JWT signature is not decodable: {exc}") from exc
