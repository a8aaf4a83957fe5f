"""Capability interfaces for the key material an encoder consumes."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class ScalarHashable(Protocol):
    """Key material that reduces to a single BN254 scalar."""

    def to_scalar_hash(self) -> int: ...


@runtime_checkable
class ByteSerializable(Protocol):
    """A value with a canonical byte encoding."""

    def to_bytes(self) -> bytes: ...
