"""Shared test fixtures for the keyless public-inputs encoder."""

from collections.abc import AsyncIterator, Callable
from pathlib import Path
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from keyless.api.deps import get_circuit_config
from keyless.core.app import create_app
from keyless.crypto.epk import EphemeralPublicKey
from keyless.crypto.jwk import RsaJwk
from keyless.inputs.config import CircuitConfig, load_circuit_config
from keyless.inputs.types import Input
from keyless.jwt.parts import JwtParts

from tests.vectors import (
    EPK_SEED_HEX,
    EXP_DATE_SECS,
    EXP_HORIZON_SECS,
    GOOGLE_JWT,
    PEPPER,
    TEST_JWK_KID,
    TEST_JWK_MODULUS,
    TEST_PAYLOAD,
    make_jwt,
)

REPO_ROOT = Path(__file__).resolve().parents[1]
CIRCUIT_CONFIG_PATH = REPO_ROOT / "circuit_config.yml"


@pytest.fixture
def circuit_config() -> CircuitConfig:
    """The repository's field-check config."""
    return load_circuit_config(CIRCUIT_CONFIG_PATH)


@pytest.fixture
def test_jwk() -> RsaJwk:
    return RsaJwk.new_256_aqab(TEST_JWK_KID, TEST_JWK_MODULUS)


@pytest.fixture
def test_epk() -> EphemeralPublicKey:
    return EphemeralPublicKey.from_ed25519_seed(bytes.fromhex(EPK_SEED_HEX[2:]))


@pytest.fixture
def google_input(test_jwk: RsaJwk, test_epk: EphemeralPublicKey) -> Input:
    """Claim bundle for the Google-issued known-answer token."""
    return Input(
        jwt_parts=JwtParts.from_b64(GOOGLE_JWT),
        jwk=test_jwk,
        epk=test_epk,
        epk_blinder=42,
        pepper=PEPPER,
        exp_date_secs=EXP_DATE_SECS,
        exp_horizon_secs=EXP_HORIZON_SECS,
        uid_key="sub",
        extra_field="family_name",
    )


@pytest.fixture
def make_input(test_jwk: RsaJwk, test_epk: EphemeralPublicKey) -> Callable[..., Input]:
    """Build a claim bundle over ``TEST_PAYLOAD`` with overridable fields."""

    def _make(payload: str | dict[str, Any] | None = None, **overrides: Any) -> Input:
        fields: dict[str, Any] = {
            "jwt_parts": JwtParts.from_b64(make_jwt(payload or TEST_PAYLOAD)),
            "jwk": test_jwk,
            "epk": test_epk,
            "pepper": PEPPER,
            "exp_date_secs": EXP_DATE_SECS,
            "exp_horizon_secs": EXP_HORIZON_SECS,
        }
        fields.update(overrides)
        return Input(**fields)

    return _make


@pytest.fixture
async def client(circuit_config: CircuitConfig) -> AsyncIterator[AsyncClient]:
    """Create an httpx test client with the repository config injected."""
    app = create_app()
    app.dependency_overrides[get_circuit_config] = lambda: circuit_config

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
