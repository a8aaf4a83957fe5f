"""FastAPI application factory for the keyless prover inputs service."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from keyless.api.router_inputs import router as inputs_router
from keyless.core.logging import setup_logging
from keyless.core.settings import ProverSettings


def create_app() -> FastAPI:
    """Build and configure the FastAPI application."""
    settings = ProverSettings()

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
        setup_logging(settings)
        yield

    app = FastAPI(
        title="Keyless prover inputs",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.include_router(inputs_router)
    return app
