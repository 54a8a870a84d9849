# seedstream/generators/base.py

"""
Common base class for every uniform generator.

A concrete generator only implements three primitives:

    - next_non_negative_int()  -> int in [0, INT_MAX]
    - next_double01()          -> float in [0, 1)
    - next_uint32()            -> int in [0, UINT_MAX]

plus `_reset_state(seed)`, which puts the algorithm's internal state
back to what a fresh construction with `seed` would have. Everything
else (ranged integers and doubles, unsigned values, booleans, byte
filling, lazy sequences) is derived here, once, from those primitives.

Notes / design choices:
    - Ranged integers never use a bare modulo: draws below
      `2**32 mod span` are rejected and redrawn, so every value in the
      range is equally likely.
    - Sequences are plain Python generators wrapping the scalar calls.
      Pulling element i is exactly the i-th scalar call; nothing is
      computed ahead of the consumer, and argument checks only run when
      the first element is pulled.
    - Generators are not thread-safe. Share one between threads only
      behind your own lock.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import Any, Iterator, Optional, Tuple

import numpy as np

from seedstream.config import INT_MAX, INT_MIN, UINT_MAX
from seedstream.errors import (
    INFINITE_MAX_VALUE,
    INFINITE_MAX_VALUE_MINUS_MIN_VALUE,
    MIN_VALUE_GREATER_THAN_MAX_VALUE,
    NEGATIVE_MAX_VALUE,
    NULL_BUFFER,
    ArgumentError,
    ArgumentOutOfRangeError,
    NullArgumentError,
)
from seedstream.utils.logging_utils import get_logger
from seedstream.utils.seeding import coerce_seed


logger = get_logger(__name__)


# -------------------------------------------------------------------
# Conversion constants
# -------------------------------------------------------------------

MASK32 = 0xFFFF_FFFF
MASK64 = 0xFFFF_FFFF_FFFF_FFFF

# 31-bit integer -> [0, 1)
INT_TO_DOUBLE = 1.0 / (INT_MAX + 1.0)

# 32-bit unsigned -> [0, 1)
UINT_TO_DOUBLE = 1.0 / (UINT_MAX + 1.0)

# Top 53 bits of a 64-bit word -> [0, 1)
ULONG_TO_DOUBLE = 1.0 / (1 << 53)

_UINT32_SPAN = 1 << 32


class AbstractGenerator(ABC):
    """
    Base class for uniform pseudo-random generators.

    Subclasses must set up any configuration their `_reset_state` needs
    *before* calling `super().__init__(seed)`.
    """

    # False only for wrappers over sources that cannot be reseeded.
    can_reset: bool = True

    def __init__(self, seed: Optional[int] = None) -> None:
        self._seed = coerce_seed(seed)
        self._bit_buffer = 0
        self._bit_count = 0
        self._reset_state(self._seed)
        logger.debug("Created %s with seed %d", type(self).__name__, self._seed)

    # ---------------------------------------------------------------
    # Seeding
    # ---------------------------------------------------------------

    @property
    def seed(self) -> int:
        return self._seed

    def reset(self, seed: Optional[int] = None) -> bool:
        """
        Reset the generator to the state a fresh construction would have.

        Args:
            seed:
                New seed; if None the current seed is reused, which
                replays the stream from its beginning.

        Returns:
            True if the generator was reset, False if it cannot reset.
        """
        if not self.can_reset:
            return False

        new_seed = self._seed if seed is None else coerce_seed(seed)

        # Helper state used by next_boolean().
        self._bit_buffer = 0
        self._bit_count = 0

        self._seed = new_seed
        self._reset_state(new_seed)
        logger.debug("Reset %s with seed %d", type(self).__name__, new_seed)
        return True

    @abstractmethod
    def _reset_state(self, seed: int) -> None:
        """Set the algorithm's internal state from `seed`."""

    # ---------------------------------------------------------------
    # Primitives
    # ---------------------------------------------------------------

    @abstractmethod
    def next_non_negative_int(self) -> int:
        """Return an int in [0, INT_MAX]."""

    @abstractmethod
    def next_double01(self) -> float:
        """Return a float in [0, 1)."""

    @abstractmethod
    def next_uint32(self) -> int:
        """Return an int in [0, UINT_MAX]."""

    # ---------------------------------------------------------------
    # Integers
    # ---------------------------------------------------------------

    def next_inclusive_max_value(self) -> int:
        """Return an int in [0, INT_MAX]."""
        return self.next_non_negative_int()

    def next(self, min_value: Optional[int] = None, max_value: Optional[int] = None) -> int:
        """
        Return a uniformly distributed int.

        Mirrors `range()`:

            next()          -> [0, INT_MAX)
            next(10)        -> [0, 10)
            next(-5, 5)     -> [-5, 5)

        Bounds must fit in a signed 32-bit int. When both bounds are
        equal that value is returned without consuming a draw.

        Raises:
            ArgumentOutOfRangeError: max_value < 0 (single bound) or
                min_value > max_value.
        """
        if min_value is None and max_value is None:
            while True:
                result = self.next_non_negative_int()
                if result != INT_MAX:
                    return result

        single_bound = min_value is None or max_value is None
        lo, hi = _resolve_bounds(min_value, max_value, 0)
        if single_bound and hi < 0:
            raise ArgumentOutOfRangeError(f"{NEGATIVE_MAX_VALUE} Got {hi}.")
        _check_range(lo, hi, INT_MIN, INT_MAX)
        if lo > hi:
            raise ArgumentOutOfRangeError(f"{MIN_VALUE_GREATER_THAN_MAX_VALUE} Got [{lo}, {hi}).")
        if lo == hi:
            return lo
        return lo + self._next_below(hi - lo)

    def _next_below(self, span: int) -> int:
        """
        Unbiased int in [0, span) for 1 <= span <= 2**32.

        Words below `2**32 mod span` would make the low residues more
        likely, so they are redrawn.
        """
        if span == _UINT32_SPAN:
            return self.next_uint32()

        threshold = _UINT32_SPAN % span
        while True:
            r = self.next_uint32()
            if r >= threshold:
                return r % span

    # ---------------------------------------------------------------
    # Doubles
    # ---------------------------------------------------------------

    def next_double(
        self,
        min_value: Optional[float] = None,
        max_value: Optional[float] = None,
    ) -> float:
        """
        Return a uniformly distributed float.

            next_double()           -> [0, 1)
            next_double(4.0)        -> [0, 4.0)
            next_double(-1.0, 1.0)  -> [-1.0, 1.0)

        Raises:
            ArgumentOutOfRangeError: negative single bound, or
                min_value > max_value.
            ArgumentError: a bound (or their difference) is not finite.
        """
        if min_value is None and max_value is None:
            return self.next_double01()

        if min_value is None or max_value is None:
            bound = max_value if min_value is None else min_value
            if bound < 0.0:
                raise ArgumentOutOfRangeError(f"{NEGATIVE_MAX_VALUE} Got {bound}.")
            if not math.isfinite(bound):
                raise ArgumentError(f"{INFINITE_MAX_VALUE} Got {bound}.")
            return _below(self.next_double01() * bound, 0.0, bound)

        if min_value > max_value:
            raise ArgumentOutOfRangeError(
                f"{MIN_VALUE_GREATER_THAN_MAX_VALUE} Got [{min_value}, {max_value})."
            )
        if not (math.isfinite(min_value) and math.isfinite(max_value) and math.isfinite(max_value - min_value)):
            raise ArgumentError(f"{INFINITE_MAX_VALUE_MINUS_MIN_VALUE} Got [{min_value}, {max_value}).")

        result = min_value + self.next_double01() * (max_value - min_value)
        return _below(result, min_value, max_value)

    # ---------------------------------------------------------------
    # Unsigned integers
    # ---------------------------------------------------------------

    def next_uint_inclusive_max_value(self) -> int:
        """Return an int in [0, UINT_MAX]."""
        return self.next_uint32()

    def next_uint(self, min_value: Optional[int] = None, max_value: Optional[int] = None) -> int:
        """
        Unsigned analogue of `next()`.

            next_uint()         -> [0, UINT_MAX)
            next_uint(10)       -> [0, 10)
            next_uint(5, 10)    -> [5, 10)

        Raises:
            ArgumentOutOfRangeError: a bound outside [0, UINT_MAX], or
                min_value > max_value.
        """
        if min_value is None and max_value is None:
            while True:
                result = self.next_uint32()
                if result != UINT_MAX:
                    return result

        lo, hi = _resolve_bounds(min_value, max_value, 0)
        _check_range(lo, hi, 0, UINT_MAX)
        if lo > hi:
            raise ArgumentOutOfRangeError(f"{MIN_VALUE_GREATER_THAN_MAX_VALUE} Got [{lo}, {hi}).")
        if lo == hi:
            return lo
        return lo + self._next_below(hi - lo)

    # ---------------------------------------------------------------
    # Booleans and bytes
    # ---------------------------------------------------------------

    def next_boolean(self) -> bool:
        """
        Return a random bool.

        One 32-bit word feeds 32 consecutive calls, least significant
        bit first.
        """
        if self._bit_count == 0:
            self._bit_buffer = self.next_uint32()
            self._bit_count = 31
            return (self._bit_buffer & 0x1) == 1

        self._bit_count -= 1
        self._bit_buffer >>= 1
        return (self._bit_buffer & 0x1) == 1

    def next_bytes(self, buffer: Any) -> None:
        """
        Fill a writable byte buffer in place.

        Accepts anything exposing a writable, contiguous buffer of bytes
        (bytearray, memoryview, numpy uint8 array). Bytes come from
        successive `next_uint32()` words, little-endian; a trailing
        partial word uses its low-order bytes.

        Raises:
            NullArgumentError: buffer is None.
        """
        if buffer is None:
            raise NullArgumentError(NULL_BUFFER)

        view = memoryview(buffer).cast("B")
        n = view.nbytes
        if n == 0:
            return

        n_words = (n + 3) // 4
        words = np.fromiter((self.next_uint32() for _ in range(n_words)), dtype="<u4", count=n_words)
        view[:] = words.tobytes()[:n]

    # ---------------------------------------------------------------
    # Lazy sequences
    # ---------------------------------------------------------------

    def booleans(self) -> Iterator[bool]:
        while True:
            yield self.next_boolean()

    def doubles(
        self,
        min_value: Optional[float] = None,
        max_value: Optional[float] = None,
    ) -> Iterator[float]:
        """Infinite stream of `next_double(min_value, max_value)` results."""
        while True:
            yield self.next_double(min_value, max_value)

    def integers(self, min_value: Optional[int] = None, max_value: Optional[int] = None) -> Iterator[int]:
        """Infinite stream of `next(min_value, max_value)` results."""
        while True:
            yield self.next(min_value, max_value)

    def unsigned_integers(
        self,
        min_value: Optional[int] = None,
        max_value: Optional[int] = None,
    ) -> Iterator[int]:
        """Infinite stream of `next_uint(min_value, max_value)` results."""
        while True:
            yield self.next_uint(min_value, max_value)

    def bytes_stream(self, buffer: Any) -> Iterator[Any]:
        """
        Refill `buffer` on every pull and yield it.

        The same buffer object is yielded each time; copy it if you need
        to keep an earlier fill.
        """
        if buffer is None:
            raise NullArgumentError(NULL_BUFFER)
        while True:
            self.next_bytes(buffer)
            yield buffer

    # ---------------------------------------------------------------
    # Object members
    # ---------------------------------------------------------------

    @property
    def name(self) -> str:
        """Class name without the trailing 'Generator'."""
        cls_name = type(self).__name__
        suffix = "Generator"
        return cls_name[: -len(suffix)] if cls_name.endswith(suffix) else cls_name

    def __str__(self) -> str:
        return f"Generator: {self.name}, Seed: {self._seed}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(seed={self._seed})"


# -------------------------------------------------------------------
# Bound helpers
# -------------------------------------------------------------------


def _resolve_bounds(min_value: Optional[int], max_value: Optional[int], default_min: int) -> Tuple[int, int]:
    """
    Turn the (min_value, max_value) pair into explicit bounds.

    A single positional argument is the exclusive upper bound, as with
    `range(stop)`.
    """
    if max_value is None:
        return default_min, min_value
    if min_value is None:
        return default_min, max_value
    return min_value, max_value


def _check_range(lo: int, hi: int, lowest: int, highest: int) -> None:
    for value in (lo, hi):
        if value < lowest or value > highest:
            raise ArgumentOutOfRangeError(f"Bound {value} outside [{lowest}, {highest}].")


def _below(result: float, lo: float, hi: float) -> float:
    """Keep a remapped double strictly below `hi` when rounding reaches it."""
    if result >= hi and hi > lo:
        return math.nextafter(hi, -math.inf)
    return result


class Split64Generator(AbstractGenerator):
    """
    Base for algorithms whose recurrence yields 64-bit words.

    Each 64-bit output serves two consecutive 32-bit draws: the high
    half first, then the low half. Subclasses implement `next_uint64()`
    and clear `_pending` in `_reset_state`.
    """

    _pending: Optional[int] = None

    @abstractmethod
    def next_uint64(self) -> int:
        """Advance the recurrence and return a 64-bit word."""

    def _next_word(self) -> int:
        if self._pending is not None:
            word = self._pending
            self._pending = None
            return word

        s = self.next_uint64()
        self._pending = s & MASK32
        return s >> 32

    def next_uint32(self) -> int:
        return self._next_word()

    def next_non_negative_int(self) -> int:
        return self._next_word() >> 1

    def next_double01(self) -> float:
        return (self._next_word() >> 1) * INT_TO_DOUBLE
