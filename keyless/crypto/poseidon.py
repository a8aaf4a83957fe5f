"""Poseidon sponge over the BN254 scalar field with circom parameters.

Round constants and the Cauchy MDS matrix for each state width are derived
with the self-shrinking Grain LFSR from the Poseidon reference parameter
generator (prime field, x^5 s-box, 254-bit field, 8 full rounds, per-width
partial rounds). Hashing ``n`` inputs uses width ``n + 1`` with a zero
capacity element in front and returns the first state element, which is the
layout circom's ``Poseidon(n)`` template computes.
"""

import functools
from collections.abc import Sequence
from typing import NamedTuple

from keyless.core.errors import InternalInvariant

BN254_MODULUS = (
    21888242871839275222246405745257275088548364400416034343698204186575808495617
)
FIELD_BITS = 254
FULL_ROUNDS = 8
SBOX_ALPHA = 5
MAX_NUM_INPUT_SCALARS = 16

# Partial rounds for state widths 2..17.
PARTIAL_ROUNDS = (56, 57, 56, 60, 60, 63, 64, 63, 60, 66, 60, 65, 70, 60, 64, 68)

_GRAIN_REGISTER_BITS = 80
_GRAIN_WARMUP_CLOCKS = 160


class PoseidonParams(NamedTuple):
    """Permutation parameters for one state width."""

    width: int
    partial_rounds: int
    round_constants: tuple[int, ...]
    mds: tuple[tuple[int, ...], ...]


def _to_bits(value: int, size: int) -> list[int]:
    return [int(c) for c in bin(value)[2:].zfill(size)]


class _GrainLFSR:
    """Grain LFSR in self-shrinking mode, seeded from the instance parameters."""

    def __init__(self, width: int, partial_rounds: int) -> None:
        seed = (
            _to_bits(1, 2)
            + _to_bits(0, 4)
            + _to_bits(FIELD_BITS, 12)
            + _to_bits(width, 12)
            + _to_bits(FULL_ROUNDS, 10)
            + _to_bits(partial_rounds, 10)
            + [1] * 30
        )
        # bit i of the register is sequence position i, position 0 is the oldest
        self._register = sum(bit << i for i, bit in enumerate(seed))
        for _ in range(_GRAIN_WARMUP_CLOCKS):
            self._clock()

    def _clock(self) -> int:
        r = self._register
        new_bit = ((r >> 62) ^ (r >> 51) ^ (r >> 38) ^ (r >> 23) ^ (r >> 13) ^ r) & 1
        self._register = (r >> 1) | (new_bit << (_GRAIN_REGISTER_BITS - 1))
        return new_bit

    def next_bit(self) -> int:
        while self._clock() == 0:
            self._clock()
        return self._clock()

    def next_bits(self, count: int) -> int:
        value = 0
        for _ in range(count):
            value = (value << 1) | self.next_bit()
        return value

    def next_field_element(self) -> int:
        """Rejection-sample a field element."""
        while True:
            value = self.next_bits(FIELD_BITS)
            if value < BN254_MODULUS:
                return value


def _cauchy_mds(grain: _GrainLFSR, width: int) -> tuple[tuple[int, ...], ...]:
    p = BN254_MODULUS
    while True:
        samples = [grain.next_bits(FIELD_BITS) % p for _ in range(2 * width)]
        if len(set(samples)) != len(samples):
            continue
        xs, ys = samples[:width], samples[width:]
        if any((x + y) % p == 0 for x in xs for y in ys):
            continue
        return tuple(tuple(pow(x + y, p - 2, p) for y in ys) for x in xs)


@functools.cache
def poseidon_params(width: int) -> PoseidonParams:
    """Derive (and memoise) the parameters for a state of ``width`` elements."""
    if not 2 <= width <= MAX_NUM_INPUT_SCALARS + 1:
        raise InternalInvariant(f"Unsupported Poseidon width {width}")
    partial_rounds = PARTIAL_ROUNDS[width - 2]
    grain = _GrainLFSR(width, partial_rounds)
    num_constants = (FULL_ROUNDS + partial_rounds) * width
    round_constants = tuple(grain.next_field_element() for _ in range(num_constants))
    mds = _cauchy_mds(grain, width)
    return PoseidonParams(width, partial_rounds, round_constants, mds)


def permute(state: Sequence[int], params: PoseidonParams) -> list[int]:
    """Apply the Poseidon permutation to ``state``."""
    p = BN254_MODULUS
    t = params.width
    half_full = FULL_ROUNDS // 2
    rc = params.round_constants
    current = list(state)
    for r in range(FULL_ROUNDS + params.partial_rounds):
        current = [(x + rc[r * t + i]) % p for i, x in enumerate(current)]
        if r < half_full or r >= half_full + params.partial_rounds:
            current = [pow(x, SBOX_ALPHA, p) for x in current]
        else:
            current[0] = pow(current[0], SBOX_ALPHA, p)
        current = [sum(m * x for m, x in zip(row, current)) % p for row in params.mds]
    return current


def hash_scalars(inputs: Sequence[int]) -> int:
    """Reduce 1..16 field elements to one with circom-compatible Poseidon."""
    if not inputs or len(inputs) > MAX_NUM_INPUT_SCALARS:
        raise InternalInvariant(
            f"Poseidon hashes between 1 and {MAX_NUM_INPUT_SCALARS} scalars, "
            f"got {len(inputs)}"
        )
    for x in inputs:
        if not 0 <= x < BN254_MODULUS:
            raise InternalInvariant(f"{x} is not a BN254 scalar field element")
    params = poseidon_params(len(inputs) + 1)
    return permute([0, *inputs], params)[0]
