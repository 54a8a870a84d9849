# seedstream/generators/mt19937.py

"""
Mersenne Twister (MT19937) generator.

A 624-word state vector regenerated in blocks, with the tempering
output step of Matsumoto & Nishimura's reference implementation
(mt19937ar.c, 2002 initialization). Both reference seeding routines are
available:

    MT19937Generator(seed)                    # init_genrand(seed)
    MT19937Generator.from_seed_array(keys)    # init_by_array(keys)

so the first outputs match the published test vectors.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from seedstream.errors import EMPTY_LIST, NULL_LIST, SEED_AND_SEED_ARRAY, ArgumentError, NullArgumentError
from seedstream.generators.base import INT_TO_DOUBLE, MASK32, AbstractGenerator


N = 624
M = 397
MATRIX_A = 0x9908B0DF
UPPER_MASK = 0x80000000
LOWER_MASK = 0x7FFFFFFF

# Seed used by the reference init_by_array before mixing in the key.
SEED_ARRAY_BASE = 19650218


class MT19937Generator(AbstractGenerator):
    """Mersenne Twister with period 2**19937 - 1."""

    def __init__(self, seed: Optional[int] = None, seed_array: Optional[Sequence[int]] = None) -> None:
        self._mt: List[int] = [0] * N
        self._mti = N
        self._seed_array: Optional[List[int]] = None

        if seed_array is not None:
            if seed is not None:
                raise ArgumentError(SEED_AND_SEED_ARRAY)
            if len(seed_array) == 0:
                raise ArgumentError(EMPTY_LIST)
            self._seed_array = [abs(int(k)) & MASK32 for k in seed_array]
            seed = SEED_ARRAY_BASE

        super().__init__(seed)

    @classmethod
    def from_seed_array(cls, seed_array: Sequence[int]) -> "MT19937Generator":
        """
        Build a generator seeded by the reference init_by_array routine.

        `reset()` without arguments replays the same key; `reset(seed)`
        applies the key on top of init_genrand(seed).
        """
        if seed_array is None:
            raise NullArgumentError(NULL_LIST)
        return cls(seed_array=seed_array)

    @property
    def seed_array(self) -> Optional[List[int]]:
        return None if self._seed_array is None else list(self._seed_array)

    # ---------------------------------------------------------------
    # State
    # ---------------------------------------------------------------

    def _reset_state(self, seed: int) -> None:
        mt = self._mt
        mt[0] = seed & MASK32
        for i in range(1, N):
            # Knuth TAOCP Vol2. 3rd Ed. P.106 multiplier.
            mt[i] = (1812433253 * (mt[i - 1] ^ (mt[i - 1] >> 30)) + i) & MASK32
        self._mti = N

        if self._seed_array is not None:
            self._apply_seed_array(self._seed_array)

    def _apply_seed_array(self, key: List[int]) -> None:
        mt = self._mt
        key_length = len(key)
        i, j = 1, 0

        for _ in range(max(N, key_length)):
            mt[i] = ((mt[i] ^ ((mt[i - 1] ^ (mt[i - 1] >> 30)) * 1664525)) + key[j] + j) & MASK32
            i += 1
            j += 1
            if i >= N:
                mt[0] = mt[N - 1]
                i = 1
            if j >= key_length:
                j = 0

        for _ in range(N - 1):
            mt[i] = ((mt[i] ^ ((mt[i - 1] ^ (mt[i - 1] >> 30)) * 1566083941)) - i) & MASK32
            i += 1
            if i >= N:
                mt[0] = mt[N - 1]
                i = 1

        # MSB is 1, assuring a non-zero initial array.
        mt[0] = 0x80000000

    def _generate_block(self) -> None:
        """Regenerate all N words at once."""
        mt = self._mt
        for kk in range(N):
            y = (mt[kk] & UPPER_MASK) | (mt[(kk + 1) % N] & LOWER_MASK)
            mt[kk] = mt[(kk + M) % N] ^ (y >> 1) ^ (MATRIX_A if y & 0x1 else 0)
        self._mti = 0

    # ---------------------------------------------------------------
    # Primitives
    # ---------------------------------------------------------------

    def next_uint32(self) -> int:
        if self._mti >= N:
            self._generate_block()

        y = self._mt[self._mti]
        self._mti += 1

        # Tempering
        y ^= y >> 11
        y ^= (y << 7) & 0x9D2C5680
        y ^= (y << 15) & 0xEFC60000
        return y ^ (y >> 18)

    def next_non_negative_int(self) -> int:
        return self.next_uint32() >> 1

    def next_double01(self) -> float:
        return (self.next_uint32() >> 1) * INT_TO_DOUBLE
