# seedstream/utils/rng.py

"""
Generator factory.

Callers that only know a generator by name (configuration, the
Randomizer facade, tests that sweep every algorithm) go through
`make_generator`, which you should call once and then pass the resulting
generator down into distributions.

Names:
    "alf"          ALFGenerator (lagged Fibonacci)
    "mt19937"      MT19937Generator (Mersenne Twister)
    "nr3"          NR3Generator (Numerical Recipes "Ran")
    "nr3q1"        NR3Q1Generator ("Ranq1")
    "nr3q2"        NR3Q2Generator ("Ranq2")
    "standard"     StandardGenerator (NumPy default bit generator)
    "xorshift128"  XorShift128Generator (the default)
"""

from __future__ import annotations

from typing import Dict, Optional, Type

from seedstream.config import DEFAULT_GENERATOR
from seedstream.errors import UNKNOWN_GENERATOR, ArgumentError
from seedstream.generators.alf import ALFGenerator
from seedstream.generators.base import AbstractGenerator
from seedstream.generators.mt19937 import MT19937Generator
from seedstream.generators.nr3 import NR3Generator, NR3Q1Generator, NR3Q2Generator
from seedstream.generators.standard import StandardGenerator
from seedstream.generators.xorshift128 import XorShift128Generator


GENERATORS: Dict[str, Type[AbstractGenerator]] = {
    "alf": ALFGenerator,
    "mt19937": MT19937Generator,
    "nr3": NR3Generator,
    "nr3q1": NR3Q1Generator,
    "nr3q2": NR3Q2Generator,
    "standard": StandardGenerator,
    "xorshift128": XorShift128Generator,
}


def make_generator(name: Optional[str] = None, seed: Optional[int] = None) -> AbstractGenerator:
    """
    Create a uniform generator by name.

    Args:
        name:
            Key of GENERATORS (case-insensitive). Defaults to
            config.DEFAULT_GENERATOR.
        seed:
            If provided, used to seed the generator deterministically.
            If None, an entropy-derived seed is used.

    Returns:
        A freshly constructed generator.

    Raises:
        ArgumentError: unknown generator name.
    """
    if name is None:
        name = DEFAULT_GENERATOR

    key = name.lower()
    if key not in GENERATORS:
        raise ArgumentError(UNKNOWN_GENERATOR.format(name=name, available=", ".join(sorted(GENERATORS))))
    return GENERATORS[key](seed)
