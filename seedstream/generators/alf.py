# seedstream/generators/alf.py

"""
Additive lagged-Fibonacci generator (ALF).

The state is a ring of `long_lag` 32-bit words; each refill computes

    x[j] = x[j - short_lag] + x[j - long_lag]   (mod 2**32)

over the whole ring, after which words are handed out one per draw.
The default lags (418, 1279) are the pair recommended by Boost's
lagged_fibonacci1279. The initial ring is filled from an MT19937 seeded
with the same seed, so the stream is a pure function of the seed and
the lags.
"""

from __future__ import annotations

from typing import List, Optional

from seedstream.errors import ArgumentOutOfRangeError
from seedstream.generators.base import INT_TO_DOUBLE, MASK32, AbstractGenerator
from seedstream.generators.mt19937 import MT19937Generator


DEFAULT_SHORT_LAG = 418
DEFAULT_LONG_LAG = 1279


class ALFGenerator(AbstractGenerator):
    """Additive lagged-Fibonacci generator with settable lags."""

    def __init__(
        self,
        seed: Optional[int] = None,
        short_lag: int = DEFAULT_SHORT_LAG,
        long_lag: int = DEFAULT_LONG_LAG,
    ) -> None:
        if not (0 < short_lag < long_lag):
            raise ArgumentOutOfRangeError(
                f"Lags must satisfy 0 < short_lag < long_lag, got short_lag={short_lag}, long_lag={long_lag}."
            )
        self._short_lag = short_lag
        self._long_lag = long_lag
        self._x: List[int] = []
        self._i = long_lag
        super().__init__(seed)

    # ---------------------------------------------------------------
    # Lags
    # ---------------------------------------------------------------

    @property
    def short_lag(self) -> int:
        return self._short_lag

    @short_lag.setter
    def short_lag(self, value: int) -> None:
        if not self.is_valid_short_lag(value):
            raise ArgumentOutOfRangeError(f"short_lag must be in (0, {self._long_lag}), got {value}.")
        self._short_lag = value
        self.reset()

    @property
    def long_lag(self) -> int:
        return self._long_lag

    @long_lag.setter
    def long_lag(self, value: int) -> None:
        if not self.is_valid_long_lag(value):
            raise ArgumentOutOfRangeError(f"long_lag must be greater than {self._short_lag}, got {value}.")
        self._long_lag = value
        self.reset()

    def is_valid_short_lag(self, value: int) -> bool:
        return 0 < value < self._long_lag

    def is_valid_long_lag(self, value: int) -> bool:
        return value > self._short_lag

    # ---------------------------------------------------------------
    # State
    # ---------------------------------------------------------------

    def _reset_state(self, seed: int) -> None:
        seeder = MT19937Generator(seed)
        self._x = [seeder.next_uint() for _ in range(self._long_lag)]
        self._i = self._long_lag

    def _fill(self) -> None:
        x = self._x
        short_lag = self._short_lag
        long_lag = self._long_lag

        # Two loops to avoid a modulo per word.
        for j in range(short_lag):
            x[j] = (x[j] + x[j + (long_lag - short_lag)]) & MASK32
        for j in range(short_lag, long_lag):
            x[j] = (x[j] + x[j - short_lag]) & MASK32
        self._i = 0

    # ---------------------------------------------------------------
    # Primitives
    # ---------------------------------------------------------------

    def next_uint32(self) -> int:
        if self._i >= self._long_lag:
            self._fill()
        word = self._x[self._i]
        self._i += 1
        return word

    def next_non_negative_int(self) -> int:
        return self.next_uint32() >> 1

    def next_double01(self) -> float:
        return (self.next_uint32() >> 1) * INT_TO_DOUBLE
