# seedstream/core_types.py

"""
Shared type definitions and core dataclasses for the seedstream package.

This module is intentionally small and dependency-free so it can be
imported from anywhere (generators/, distributions/, utils/, the facade)
without risk of circular imports.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional, Tuple


# ---------- Basic aliases ----------

# Unsigned 32-bit seed.
Seed = int

# Statistical mode(s) of a distribution; multimodal laws return several.
Mode = Tuple[float, ...]

# Override-registry strategies:
#   sampler(generator, *params) -> sample
#   validator(*params) -> bool
Sampler = Callable[..., Any]
Validator = Callable[..., bool]


# ---------- Distribution kinds ----------


class DistributionKind(str, Enum):
    """
    Key of the override registry and of the Randomizer's distribution table.

    The value doubles as the name of the Randomizer convenience call
    (e.g. DistributionKind.STUDENTS_T -> Randomizer.students_t).
    """

    # Discrete
    BERNOULLI = "bernoulli"
    BINOMIAL = "binomial"
    CATEGORICAL = "categorical"
    DISCRETE_UNIFORM = "discrete_uniform"
    GEOMETRIC = "geometric"
    POISSON = "poisson"

    # Continuous
    BETA = "beta"
    BETA_PRIME = "beta_prime"
    CAUCHY = "cauchy"
    CHI = "chi"
    CHI_SQUARE = "chi_square"
    CONTINUOUS_UNIFORM = "continuous_uniform"
    ERLANG = "erlang"
    EXPONENTIAL = "exponential"
    FISHER_SNEDECOR = "fisher_snedecor"
    FISHER_TIPPETT = "fisher_tippett"
    GAMMA = "gamma"
    LAPLACE = "laplace"
    LOGISTIC = "logistic"
    LOGNORMAL = "lognormal"
    NORMAL = "normal"
    PARETO = "pareto"
    POWER = "power"
    RAYLEIGH = "rayleigh"
    STUDENTS_T = "students_t"
    TRIANGULAR = "triangular"
    WEIBULL = "weibull"


# ---------- Core dataclasses ----------


@dataclass(frozen=True)
class DistributionSummary:
    """
    Snapshot of the closed-form statistics of a distribution.

    Statistics that are undefined for the parameters at the time of the
    snapshot are stored as None instead of raising.
    """

    kind: DistributionKind
    minimum: float
    maximum: float
    mean: Optional[float] = None
    median: Optional[float] = None
    variance: Optional[float] = None
    mode: Optional[Mode] = None
