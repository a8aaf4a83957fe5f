"""FastAPI dependencies for settings and the shared circuit config."""

import functools
from typing import Annotated

from fastapi import Depends

from keyless.core.settings import ProverSettings
from keyless.inputs.config import CircuitConfig, load_circuit_config


def load_settings() -> ProverSettings:
    return ProverSettings()


@functools.lru_cache(maxsize=4)
def _cached_circuit_config(path: str) -> CircuitConfig:
    return load_circuit_config(path)


def get_circuit_config(
    settings: Annotated[ProverSettings, Depends(load_settings)],
) -> CircuitConfig:
    """Load the field-check config once per path and share it."""
    return _cached_circuit_config(settings.circuit_config_path)
