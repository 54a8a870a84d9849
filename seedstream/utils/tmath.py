# seedstream/utils/tmath.py

"""
Floating-point helpers for the distribution formulas.

    - is_zero      tolerance test (the polar-method radius must not be zero)
    - safe_exp     math.exp, saturating to inf instead of raising
    - safe_pow     x ** y for x >= 0, saturating to inf instead of raising
    - safe_gamma   math.gamma for x > 0, saturating to inf instead of raising

Python raises OverflowError where IEEE arithmetic would give inf. The
samplers and closed-form statistics go through these helpers so that
extreme but valid parameters yield inf rather than an exception.
Underflow already rounds to 0.0 without raising.
"""

from __future__ import annotations

import math

from seedstream.config import TOLERANCE


def is_zero(d: float) -> bool:
    """True if |d| is below config.TOLERANCE."""
    return -TOLERANCE < d < TOLERANCE


def safe_exp(x: float) -> float:
    try:
        return math.exp(x)
    except OverflowError:
        return math.inf


def safe_pow(x: float, y: float) -> float:
    """x ** y for a non-negative base; inf where the result overflows."""
    try:
        return x**y
    except OverflowError:
        return math.inf


def safe_gamma(x: float) -> float:
    try:
        return math.gamma(x)
    except OverflowError:
        return math.inf
