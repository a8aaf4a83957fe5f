"""Field-check config: the maximum byte length of every committed field."""

from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field

from keyless.core.errors import ConfigKeyMissing

PRIVATE_AUD_VALUE = "private_aud_value"
UID_VALUE = "uid_value"
UID_NAME = "uid_name"
ISS_VALUE = "iss_value"
EXTRA_FIELD = "extra_field"
JWT_HEADER_WITH_SEPARATOR = "jwt_header_with_separator"

REQUIRED_MAX_LENGTHS = (
    PRIVATE_AUD_VALUE,
    UID_VALUE,
    UID_NAME,
    ISS_VALUE,
    EXTRA_FIELD,
    JWT_HEADER_WITH_SEPARATOR,
)

# Devnet value; three packed scalars in the circuit's EPK slots.
DEVNET_MAX_COMMITTED_EPK_BYTES = 93


class CircuitConfig(BaseModel):
    """Read-only after load; share one instance across requests."""

    model_config = ConfigDict(frozen=True)

    max_lengths: dict[str, int] = Field(default_factory=dict)
    max_committed_epk_bytes: int = Field(DEVNET_MAX_COMMITTED_EPK_BYTES, gt=0)

    def lookup_max_length(self, name: str) -> int:
        try:
            return self.max_lengths[name]
        except KeyError:
            raise ConfigKeyMissing(name) from None

    def missing_keys(self) -> list[str]:
        """Required field names that this config does not declare."""
        return [name for name in REQUIRED_MAX_LENGTHS if name not in self.max_lengths]


def load_circuit_config(path: str | Path) -> CircuitConfig:
    """Parse a YAML field-check config file.

    Raises ``ConfigKeyMissing`` for the first required field the file does
    not declare.
    """
    with open(path, encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}
    config = CircuitConfig.model_validate(raw)
    missing = config.missing_keys()
    if missing:
        raise ConfigKeyMissing(missing[0])
    return config
