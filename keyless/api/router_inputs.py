"""Public-inputs hash endpoint for proof requests."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import ValidationError
from starlette.responses import JSONResponse

from keyless.api.deps import get_circuit_config
from keyless.api.schemas import PublicInputsHashRequest, PublicInputsHashResponse
from keyless.core.errors import InternalInvariant, KeylessError
from keyless.inputs.config import CircuitConfig
from keyless.inputs.public_inputs_hash import compute_public_inputs_hash
from keyless.inputs.types import Input
from keyless.jwt.parts import JwtParts

logger = logging.getLogger(__name__)

router = APIRouter()

HTTP_BAD_REQUEST = 400
HTTP_INTERNAL_ERROR = 500


def _error_response(exc: KeylessError) -> JSONResponse:
    status = HTTP_INTERNAL_ERROR if isinstance(exc, InternalInvariant) else HTTP_BAD_REQUEST
    return JSONResponse(
        {"error": exc.code, "error_description": str(exc)},
        status_code=status,
    )


@router.post("/v0/public-inputs-hash", response_model=None)
def public_inputs_hash(
    body: PublicInputsHashRequest,
    config: Annotated[CircuitConfig, Depends(get_circuit_config)],
) -> PublicInputsHashResponse | JSONResponse:
    """POST /v0/public-inputs-hash -- encode claims into the circuit's public input."""
    try:
        claims = Input(
            jwt_parts=JwtParts.from_b64(body.jwt_b64),
            jwk=body.jwk.to_jwk(),
            epk=body.epk.to_epk(),
            epk_blinder=body.epk_blinder,
            pepper=body.pepper,
            exp_date_secs=body.exp_date_secs,
            exp_horizon_secs=body.exp_horizon_secs,
            uid_key=body.uid_key,
            extra_field=body.extra_field,
            idc_aud=body.idc_aud,
            skip_aud_checks=body.skip_aud_checks,
        )
        result = compute_public_inputs_hash(claims, config)
    except KeylessError as exc:
        logger.warning("Rejected proof request: %s: %s", exc.code, exc)
        return _error_response(exc)
    except ValidationError as exc:
        return JSONResponse(
            {"error": "invalid_request", "error_description": str(exc)},
            status_code=HTTP_BAD_REQUEST,
        )
    return PublicInputsHashResponse(public_inputs_hash=str(result))
