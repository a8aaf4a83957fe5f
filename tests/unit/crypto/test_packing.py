"""Tests for byte packing and string commitments."""

import pytest

from keyless.core.errors import InternalInvariant, LengthExceeded
from keyless.crypto.packing import (
    BYTES_PACKED_PER_SCALAR,
    pack_bytes_to_one_scalar,
    pad_and_hash_bytes_with_len,
    pad_and_hash_string,
    pad_and_pack_bytes_to_scalars_no_len,
    pad_and_pack_bytes_to_scalars_with_len,
)
from keyless.crypto.poseidon import hash_scalars


class TestPackBytesToOneScalar:
    """Tests for single-chunk packing."""

    def test_little_endian(self) -> None:
        assert pack_bytes_to_one_scalar(b"\x01\x02") == 0x0201

    def test_empty_is_zero(self) -> None:
        assert pack_bytes_to_one_scalar(b"") == 0

    def test_oversized_chunk_rejected(self) -> None:
        with pytest.raises(InternalInvariant):
            pack_bytes_to_one_scalar(b"\xff" * (BYTES_PACKED_PER_SCALAR + 1))


class TestPadAndPack:
    """Tests for padded multi-scalar packing."""

    def test_scalar_count_follows_max_bytes(self) -> None:
        assert len(pad_and_pack_bytes_to_scalars_no_len(b"abc", 93)) == 3
        assert len(pad_and_pack_bytes_to_scalars_no_len(b"abc", 94)) == 4

    def test_padding_fills_trailing_scalars_with_zero(self) -> None:
        packed = pad_and_pack_bytes_to_scalars_no_len(b"a", 62)
        assert packed == [ord("a"), 0]

    def test_chunk_boundary(self) -> None:
        data = bytes(range(1, 33))
        packed = pad_and_pack_bytes_to_scalars_no_len(data, 62)
        assert packed[0] == int.from_bytes(data[:31], "little")
        assert packed[1] == 32

    def test_with_len_appends_true_length(self) -> None:
        packed = pad_and_pack_bytes_to_scalars_with_len(b"hello", 31)
        assert packed == [int.from_bytes(b"hello", "little"), 5]

    def test_exact_max_accepted(self) -> None:
        assert len(pad_and_pack_bytes_to_scalars_with_len(b"x" * 31, 31)) == 2

    def test_one_byte_over_rejected(self) -> None:
        with pytest.raises(LengthExceeded) as exc_info:
            pad_and_pack_bytes_to_scalars_with_len(b"x" * 32, 31, "epk")
        assert exc_info.value.field == "epk"
        assert exc_info.value.actual == 32
        assert exc_info.value.max_len == 31

    def test_max_bytes_above_sponge_capacity_rejected(self) -> None:
        with pytest.raises(InternalInvariant):
            pad_and_pack_bytes_to_scalars_no_len(b"", 16 * 31 + 1)


class TestPadAndHashString:
    """Tests for length-binding string commitments."""

    def test_matches_manual_sponge(self) -> None:
        expected = hash_scalars([int.from_bytes(b"sub", "little"), 3])
        assert pad_and_hash_string("sub", 30) == expected

    def test_binds_length(self) -> None:
        # same zero-padded content, different true length
        assert pad_and_hash_bytes_with_len(b"a", 31) != pad_and_hash_bytes_with_len(
            b"a\x00", 31
        )

    def test_binds_max_length(self) -> None:
        assert pad_and_hash_string("aud", 31) != pad_and_hash_string("aud", 62)

    def test_utf8_bytes_are_counted(self) -> None:
        with pytest.raises(LengthExceeded) as exc_info:
            pad_and_hash_string("コンドウ", 11, "extra_field")
        assert exc_info.value.actual == 12

    def test_deterministic(self) -> None:
        assert pad_and_hash_string("https://accounts.google.com", 120) == (
            pad_and_hash_string("https://accounts.google.com", 120)
        )
