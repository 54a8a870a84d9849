# seedstream/utils/seeding.py

"""
Seed helpers shared by every generator.

Seeds are unsigned 32-bit integers. A generator built without a seed
asks `make_seed()` for one, drawn from OS entropy through NumPy's
SeedSequence (the same source `np.random.default_rng()` uses).
"""

from __future__ import annotations

import operator
from typing import Optional

import numpy as np

from seedstream.config import UINT_MAX
from seedstream.errors import SEED_OUT_OF_RANGE, ArgumentOutOfRangeError


def make_seed() -> int:
    """
    Build an entropy-derived 32-bit seed.

    Not reproducible by construction; pass an explicit seed whenever a
    stream has to be replayed.
    """
    return int(np.random.SeedSequence().entropy) & UINT_MAX


def coerce_seed(seed: Optional[int]) -> int:
    """
    Normalize a user-supplied seed.

    None -> fresh entropy seed; negative ints -> their absolute value;
    anything above 2**32 - 1 is rejected.
    """
    if seed is None:
        return make_seed()

    value = abs(operator.index(seed))
    if value > UINT_MAX:
        raise ArgumentOutOfRangeError(f"{SEED_OUT_OF_RANGE} Got {seed}.")
    return value
