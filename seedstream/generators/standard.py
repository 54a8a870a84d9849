# seedstream/generators/standard.py

"""
Thin wrapper over NumPy's default bit generator.

We use NumPy's Generator API here so that:
  - callers who already rely on `np.random.default_rng` can plug the same
    source into seedstream distributions,
  - the stream is still reproducible from a seed.

Caveat: the sequence is whatever NumPy's default bit generator produces
for that seed. It is stable for a given NumPy release but is not pinned
by this package, so do not rely on it for bit-exact replay across NumPy
versions or platforms. Prefer the other generators when you need that.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from seedstream.config import INT_MAX
from seedstream.generators.base import AbstractGenerator


class StandardGenerator(AbstractGenerator):
    """Generator backed by `np.random.default_rng(seed)`."""

    def __init__(self, seed: Optional[int] = None) -> None:
        self._rng: Optional[np.random.Generator] = None
        super().__init__(seed)

    @property
    def rng(self) -> np.random.Generator:
        """The wrapped NumPy Generator (shared, not a copy)."""
        return self._rng

    def _reset_state(self, seed: int) -> None:
        self._rng = np.random.default_rng(int(seed))

    def next_non_negative_int(self) -> int:
        return int(self._rng.integers(0, INT_MAX, endpoint=True))

    def next_double01(self) -> float:
        return float(self._rng.random())

    def next_uint32(self) -> int:
        return int(self._rng.integers(0, 1 << 32, dtype=np.uint64))
