"""Error taxonomy for public-inputs encoding.

Every failure aborts the whole computation and reaches the caller unchanged.
"""


class KeylessError(Exception):
    """Base class for all encoder failures."""

    code = "keyless_error"


class ConfigKeyMissing(KeylessError):
    """A logical field name is absent from the field-check config."""

    code = "config_key_missing"

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Can't find key {name} in config")


class FieldNotFound(KeylessError):
    """A claim key is absent from the decoded JWT payload."""

    code = "field_not_found"

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Field {key!r} not found in JWT payload")


class LengthExceeded(KeylessError):
    """A value is longer than the maximum declared for its field."""

    code = "length_exceeded"

    def __init__(self, field: str, actual: int, max_len: int) -> None:
        self.field = field
        self.actual = actual
        self.max_len = max_len
        super().__init__(
            f"{field}: byte length {actual} is NOT <= max length of {max_len} bytes"
        )


class MalformedToken(KeylessError):
    """The JWT or its payload cannot be split, decoded or scanned."""

    code = "malformed_token"


class UnsupportedKeyType(KeylessError):
    """The issuer key cannot be reduced to a scalar hash."""

    code = "unsupported_key_type"


class InternalInvariant(KeylessError):
    """A protocol-fixed count or shape assumption was violated."""

    code = "internal_invariant"
