"""Tests for the circom-compatible Poseidon sponge."""

import pytest

from keyless.core.errors import InternalInvariant
from keyless.crypto.poseidon import (
    BN254_MODULUS,
    FULL_ROUNDS,
    hash_scalars,
    poseidon_params,
)


class TestPoseidonParams:
    """Tests for Grain-derived permutation parameters."""

    def test_width_3_first_round_constant(self) -> None:
        params = poseidon_params(3)
        assert params.round_constants[0] == (
            0x0EE9A592BA9A9518D05986D656F40C2114C4993C11BB29938D21D47304CD8E6E
        )

    def test_width_3_first_mds_entry(self) -> None:
        params = poseidon_params(3)
        assert params.mds[0][0] == (
            0x109B7F411BA0E4C9B2B70CAF5C36A7B194BE7C11AD24378BFEDB68592BA8118B
        )

    def test_constant_count_matches_rounds(self) -> None:
        params = poseidon_params(3)
        assert params.partial_rounds == 57
        assert len(params.round_constants) == (FULL_ROUNDS + 57) * 3
        assert len(params.mds) == 3
        assert all(len(row) == 3 for row in params.mds)

    def test_params_are_memoised(self) -> None:
        assert poseidon_params(5) is poseidon_params(5)

    @pytest.mark.parametrize("width", [1, 18])
    def test_unsupported_width_rejected(self, width: int) -> None:
        with pytest.raises(InternalInvariant):
            poseidon_params(width)


class TestHashScalars:
    """Tests for hash_scalars."""

    def test_circomlib_vector_two_inputs(self) -> None:
        assert hash_scalars([1, 2]) == (
            0x115CC0F5E7D690413DF64C6B9662E9CF2A3617F2743245519E19607A4417189A
        )

    def test_circomlib_vector_four_inputs(self) -> None:
        assert hash_scalars([1, 2, 3, 4]) == (
            0x299C867DB6C1FDD79DCEFA40E4510B9837E60EBB1CE0663DBAA525DF65250465
        )

    def test_output_is_field_element(self) -> None:
        assert 0 <= hash_scalars([7]) < BN254_MODULUS

    def test_order_matters(self) -> None:
        assert hash_scalars([1, 2]) != hash_scalars([2, 1])

    def test_arity_matters(self) -> None:
        assert hash_scalars([1, 0]) != hash_scalars([1])

    def test_empty_rejected(self) -> None:
        with pytest.raises(InternalInvariant):
            hash_scalars([])

    def test_more_than_sixteen_rejected(self) -> None:
        with pytest.raises(InternalInvariant):
            hash_scalars([0] * 17)

    def test_non_field_element_rejected(self) -> None:
        with pytest.raises(InternalInvariant) as exc_info:
            hash_scalars([BN254_MODULUS])
        assert exc_info.value.code == "internal_invariant"
