"""Byte packing and length-binding commitments over Poseidon.

Bytes are zero-padded to a declared maximum, split into 31-byte chunks and
each chunk is read as a little-endian integer, so every chunk fits below the
254-bit modulus.
"""

from keyless.core.errors import InternalInvariant, LengthExceeded
from keyless.crypto.poseidon import MAX_NUM_INPUT_SCALARS, hash_scalars

BYTES_PACKED_PER_SCALAR = 31
MAX_NUM_INPUT_BYTES = MAX_NUM_INPUT_SCALARS * BYTES_PACKED_PER_SCALAR


def pack_bytes_to_one_scalar(chunk: bytes) -> int:
    """Read at most 31 bytes as one little-endian scalar."""
    if len(chunk) > BYTES_PACKED_PER_SCALAR:
        raise InternalInvariant(
            f"Cannot pack {len(chunk)} bytes into one scalar, "
            f"max is {BYTES_PACKED_PER_SCALAR}"
        )
    return int.from_bytes(chunk, byteorder="little")


def num_packed_scalars(max_bytes: int) -> int:
    """Number of scalars a ``max_bytes`` buffer packs into."""
    return -(-max_bytes // BYTES_PACKED_PER_SCALAR)


def pad_and_pack_bytes_to_scalars_no_len(
    data: bytes, max_bytes: int, field: str = "bytes"
) -> list[int]:
    """Zero-pad ``data`` to ``max_bytes`` and pack it, without a length scalar."""
    if max_bytes > MAX_NUM_INPUT_BYTES:
        raise InternalInvariant(
            f"Cannot pack more than {MAX_NUM_INPUT_BYTES} bytes, got max {max_bytes}"
        )
    if len(data) > max_bytes:
        raise LengthExceeded(field, len(data), max_bytes)
    padded = data.ljust(max_bytes, b"\x00")
    return [
        pack_bytes_to_one_scalar(padded[i : i + BYTES_PACKED_PER_SCALAR])
        for i in range(0, max_bytes, BYTES_PACKED_PER_SCALAR)
    ]


def pad_and_pack_bytes_to_scalars_with_len(
    data: bytes, max_bytes: int, field: str = "bytes"
) -> list[int]:
    """Packed scalars of ``data`` followed by one scalar holding its length."""
    packed = pad_and_pack_bytes_to_scalars_no_len(data, max_bytes, field)
    return [*packed, len(data)]


def pad_and_hash_bytes_with_len(
    data: bytes, max_bytes: int, field: str = "bytes"
) -> int:
    """Commit to ``data`` and its true length under a ``max_bytes`` bound."""
    return hash_scalars(pad_and_pack_bytes_to_scalars_with_len(data, max_bytes, field))


def pad_and_hash_string(value: str, max_bytes: int, field: str = "string") -> int:
    """Commit to the UTF-8 bytes of ``value``."""
    return pad_and_hash_bytes_with_len(value.encode("utf-8"), max_bytes, field)
