"""Prover settings loaded from environment variables."""

from pydantic_settings import BaseSettings, SettingsConfigDict

CIRCUIT_CONFIG_PATH_DEFAULT = "circuit_config.yml"
LOG_LEVEL_DEFAULT = "INFO"


class ProverSettings(BaseSettings):
    """Locations and knobs for the public-inputs encoder."""

    model_config = SettingsConfigDict(env_prefix="KEYLESS_")

    circuit_config_path: str = CIRCUIT_CONFIG_PATH_DEFAULT
    log_level: str = LOG_LEVEL_DEFAULT
