# seedstream/generators/nr3.py

"""
Generators from Numerical Recipes, 3rd edition (section 7.1).

    - NR3Generator   ("Ran"):   the full generator. A 64-bit LCG, a
                                 xorshift register and a multiply-with-carry
                                 step, combined as (x + v) ^ w. Period
                                 about 3.138 * 10**57.
    - NR3Q1Generator ("Ranq1"): a single xorshift word followed by a
                                 multiplicative step. Faster, period
                                 about 1.8 * 10**19.
    - NR3Q2Generator ("Ranq2"): xorshift word xor a multiply-with-carry
                                 word. Between the two in speed and
                                 quality, period about 8.5 * 10**37.

The quick variants spend one 64-bit output per draw; Ran splits each
output into two 32-bit draws.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Optional

from seedstream.generators.base import (
    MASK32,
    MASK64,
    ULONG_TO_DOUBLE,
    AbstractGenerator,
    Split64Generator,
)


SEED_V = 4101842887655102017
SEED_W = 1
SEED_U1 = 2862933555777941757
SEED_U2 = 7046029254386353087
SEED_U3 = 4294957665

# Ranq1 output multiplier.
SEED_Q1 = 2685821657736338717


class NR3Generator(Split64Generator):
    """Numerical Recipes "Ran": the recommended full-quality generator."""

    def __init__(self, seed: Optional[int] = None) -> None:
        self._u = 0
        self._v = SEED_V
        self._w = SEED_W
        super().__init__(seed)

    def _reset_state(self, seed: int) -> None:
        self._v = SEED_V
        self._w = SEED_W
        self._u = seed ^ self._v
        self.next_uint64()
        self._v = self._u
        self.next_uint64()
        self._w = self._v
        self.next_uint64()
        self._pending = None

    def next_uint64(self) -> int:
        self._u = (self._u * SEED_U1 + SEED_U2) & MASK64

        v = self._v
        v ^= v >> 17
        v ^= (v << 31) & MASK64
        v ^= v >> 8
        self._v = v

        self._w = (SEED_U3 * (self._w & MASK32) + (self._w >> 32)) & MASK64

        x = self._u ^ ((self._u << 21) & MASK64)
        x ^= x >> 35
        x ^= (x << 4) & MASK64

        self._pending = None
        return ((x + v) & MASK64) ^ self._w


class _QuickGenerator(AbstractGenerator):
    """Quick variants: one 64-bit output per primitive call."""

    @abstractmethod
    def next_uint64(self) -> int:
        """Advance the recurrence and return a 64-bit word."""

    def next_uint32(self) -> int:
        return self.next_uint64() & MASK32

    def next_non_negative_int(self) -> int:
        return (self.next_uint64() & MASK32) >> 1

    def next_double01(self) -> float:
        return (self.next_uint64() >> 11) * ULONG_TO_DOUBLE


class NR3Q1Generator(_QuickGenerator):
    """Numerical Recipes "Ranq1"."""

    def __init__(self, seed: Optional[int] = None) -> None:
        self._v = SEED_V
        super().__init__(seed)

    def _reset_state(self, seed: int) -> None:
        self._v = SEED_V ^ seed
        self._v = self.next_uint64()

    def next_uint64(self) -> int:
        v = self._v
        v ^= v >> 21
        v ^= (v << 35) & MASK64
        v ^= v >> 4
        self._v = v
        return (v * SEED_Q1) & MASK64


class NR3Q2Generator(_QuickGenerator):
    """Numerical Recipes "Ranq2"."""

    def __init__(self, seed: Optional[int] = None) -> None:
        self._v = SEED_V
        self._w = SEED_W
        super().__init__(seed)

    def _reset_state(self, seed: int) -> None:
        self._v = SEED_V ^ seed
        self._w = SEED_W
        self._w = self.next_uint64()
        self._v = self.next_uint64()

    def next_uint64(self) -> int:
        v = self._v
        v ^= v >> 17
        v ^= (v << 31) & MASK64
        v ^= v >> 8
        self._v = v
        self._w = (SEED_U3 * (self._w & MASK32) + (self._w >> 32)) & MASK64
        return v ^ self._w
