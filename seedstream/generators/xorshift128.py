# seedstream/generators/xorshift128.py

"""
XorShift128 generator.

Two 64-bit state words (x, y) advanced by Marsaglia's xor/shift step
with the (23, 17, 26) shift triple; the output is x + y modulo 2**64.
This is the generator every distribution falls back to when none is
passed in.

Seeding: the recurrence needs (x, y) not both zero, so both words are
offset by fixed non-zero constants before the seed is mixed in. The
first output after seeding is discarded.
"""

from __future__ import annotations

from typing import Optional

from seedstream.generators.base import MASK64, Split64Generator


SEED_X = 521288629 << 32
SEED_Y = 362436069


class XorShift128Generator(Split64Generator):
    """Fast 128-bit-state xorshift generator (full period 2**128 - 1)."""

    def __init__(self, seed: Optional[int] = None) -> None:
        self._x = 0
        self._y = 0
        super().__init__(seed)

    def _reset_state(self, seed: int) -> None:
        self._x = (SEED_X + seed) & MASK64
        self._y = (SEED_Y * (seed << 32)) & MASK64
        self._pending = None

        # Discard first result to achieve better randomness.
        self.next_uint32()

    def next_uint64(self) -> int:
        tx = self._x
        ty = self._y
        self._x = ty
        tx ^= (tx << 23) & MASK64
        tx ^= tx >> 17
        tx ^= ty ^ (ty >> 26)
        self._y = tx
        self._pending = None
        return (tx + ty) & MASK64
