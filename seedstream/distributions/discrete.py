# seedstream/distributions/discrete.py

"""
Discrete distributions:

    - Bernoulli         one trial, success probability alpha
    - Binomial          successes in beta Bernoulli(alpha) trials
    - Categorical       index drawn from a weight table
    - DiscreteUniform   integers in [alpha, beta]
    - Geometric         trials up to and including the first success
    - Poisson           events in a unit interval at rate lambda

Each law is a pair of plain functions (`sample_x`, `x_params_valid`)
registered in distributions.registry, plus a class exposing the
parameters and statistics. The classes never call the functions
directly; they go through the registry so overrides apply.
"""

from __future__ import annotations

import math
from typing import List, Optional, Sequence

import numpy as np

from seedstream.config import INT_MAX, INT_MIN
from seedstream.core_types import DistributionKind, Mode
from seedstream.distributions import registry
from seedstream.distributions.base import DiscreteDistribution, Parameter, is_integer, next_open_double
from seedstream.errors import (
    EMPTY_LIST,
    INVALID_PARAMS,
    NULL_WEIGHTS,
    UNDEFINED_MEDIAN,
    UNDEFINED_MODE,
    ArgumentError,
    ArgumentOutOfRangeError,
    NullArgumentError,
    UnsupportedStatisticError,
)
from seedstream.generators.base import AbstractGenerator
from seedstream.utils.logging_utils import get_logger


logger = get_logger(__name__)

DEFAULT_VALUE_COUNT = 3

# Poisson: fold exp(lambda) into the running product in chunks this big
# so that exp(-lambda) never underflows.
POISSON_STEP = 500.0


# -------------------------------------------------------------------
# Bernoulli
# -------------------------------------------------------------------


def bernoulli_params_valid(alpha: float) -> bool:
    return 0.0 <= alpha <= 1.0


def sample_bernoulli(generator: AbstractGenerator, alpha: float) -> int:
    return 1 if generator.next_double() < alpha else 0


class BernoulliDistribution(DiscreteDistribution):
    """1 with probability alpha, else 0."""

    kind = DistributionKind.BERNOULLI
    parameters = ("alpha",)
    alpha = Parameter()

    def __init__(
        self,
        alpha: float = 0.5,
        *,
        generator: Optional[AbstractGenerator] = None,
        seed: Optional[int] = None,
    ) -> None:
        super().__init__(generator=generator, seed=seed)
        self._assign(alpha=alpha)

    @property
    def minimum(self) -> float:
        return 0.0

    @property
    def maximum(self) -> float:
        return 1.0

    @property
    def mean(self) -> float:
        return self._alpha

    @property
    def median(self) -> float:
        raise UnsupportedStatisticError(UNDEFINED_MEDIAN)

    @property
    def variance(self) -> float:
        return self._alpha * (1.0 - self._alpha)

    @property
    def mode(self) -> Mode:
        if self._alpha > 1.0 - self._alpha:
            return (1.0,)
        if self._alpha < 1.0 - self._alpha:
            return (0.0,)
        return (0.0, 1.0)


# -------------------------------------------------------------------
# Binomial
# -------------------------------------------------------------------


def binomial_params_valid(alpha: float, beta: int) -> bool:
    return 0.0 <= alpha <= 1.0 and is_integer(beta) and beta >= 0


def sample_binomial(generator: AbstractGenerator, alpha: float, beta: int) -> int:
    successes = 0
    for _ in range(beta):
        if generator.next_double() < alpha:
            successes += 1
    return successes


class BinomialDistribution(DiscreteDistribution):
    """Number of successes in `beta` independent trials of probability `alpha`."""

    kind = DistributionKind.BINOMIAL
    parameters = ("alpha", "beta")
    alpha = Parameter()
    beta = Parameter()

    def __init__(
        self,
        alpha: float = 0.5,
        beta: int = 1,
        *,
        generator: Optional[AbstractGenerator] = None,
        seed: Optional[int] = None,
    ) -> None:
        super().__init__(generator=generator, seed=seed)
        self._assign(alpha=alpha, beta=beta)

    @property
    def minimum(self) -> float:
        return 0.0

    @property
    def maximum(self) -> float:
        return float(self._beta)

    @property
    def mean(self) -> float:
        return self._alpha * self._beta

    @property
    def median(self) -> float:
        raise UnsupportedStatisticError(UNDEFINED_MEDIAN)

    @property
    def variance(self) -> float:
        return self._alpha * (1.0 - self._alpha) * self._beta

    @property
    def mode(self) -> Mode:
        # alpha == 1 would give beta + 1, past the end of the support.
        return (float(min(math.floor(self._alpha * (self._beta + 1.0)), self._beta)),)


# -------------------------------------------------------------------
# Categorical
# -------------------------------------------------------------------


def categorical_params_valid(weights: Sequence[float]) -> bool:
    """Weights must be non-negative, not NaN, and must not sum to zero."""
    arr = np.asarray(weights, dtype=float)
    if arr.ndim != 1 or arr.size == 0:
        return False
    if np.isnan(arr).any() or (arr < 0.0).any():
        return False
    total = float(arr.sum())
    return 0.0 < total < math.inf


def cumulative_weights(weights: Sequence[float]) -> np.ndarray:
    """Running totals of `weights`; the last entry is the total weight."""
    return np.cumsum(np.asarray(weights, dtype=float))


def sample_categorical(generator: AbstractGenerator, cdf: np.ndarray) -> int:
    """
    Draw an index from a cumulative weight table.

    Zero-weight categories occupy no width in the table, so searching to
    the right of the scaled draw never lands on them.
    """
    u = generator.next_double() * cdf[-1]
    index = int(np.searchsorted(cdf, u, side="right"))
    return min(index, len(cdf) - 1)


class CategoricalDistribution(DiscreteDistribution):
    """
    Index in [0, len(weights)) with probability proportional to its weight.

    Build it from explicit weights, or from `value_count` equal weights
    (3 if neither is given). Assigning `weights` validates the new table
    and rebuilds the cumulative index; a rejected assignment leaves the
    previous table in place.
    """

    kind = DistributionKind.CATEGORICAL
    parameters = ("weights",)

    def __init__(
        self,
        weights: Optional[Sequence[float]] = None,
        *,
        value_count: Optional[int] = None,
        generator: Optional[AbstractGenerator] = None,
        seed: Optional[int] = None,
    ) -> None:
        if weights is not None and value_count is not None:
            raise ArgumentError("Pass either weights or value_count, not both.")

        super().__init__(generator=generator, seed=seed)
        self._weights = np.ones(0)
        self._cdf = np.ones(0)

        if weights is None:
            count = DEFAULT_VALUE_COUNT if value_count is None else value_count
            if not is_integer(count) or count <= 0:
                raise ArgumentOutOfRangeError(f"value_count must be a positive integer, got {count!r}.")
            weights = [1.0] * count
        self.weights = weights

    @property
    def weights(self) -> List[float]:
        return [float(w) for w in self._weights]

    @weights.setter
    def weights(self, value: Sequence[float]) -> None:
        if value is None:
            raise NullArgumentError(NULL_WEIGHTS)
        if len(value) == 0:
            raise ArgumentError(EMPTY_LIST)
        if not self.is_valid_weights(value):
            raise ArgumentOutOfRangeError(f"{INVALID_PARAMS} Got weights={list(value)!r}.")

        self._weights = np.array(value, dtype=float)
        self._cdf = cumulative_weights(self._weights)
        logger.debug("Rebuilt cumulative table for %d categories", len(self._weights))

    def _sampler_args(self):
        return (self._cdf,)

    def _probabilities(self) -> np.ndarray:
        return self._weights / self._cdf[-1]

    @property
    def minimum(self) -> float:
        return 0.0

    @property
    def maximum(self) -> float:
        return float(len(self._weights) - 1)

    @property
    def mean(self) -> float:
        p = self._probabilities()
        return float(np.dot(p, np.arange(len(p))))

    @property
    def median(self) -> float:
        cdf = self._cdf / self._cdf[-1]
        return float(np.searchsorted(cdf, 0.5, side="left"))

    @property
    def variance(self) -> float:
        p = self._probabilities()
        idx = np.arange(len(p))
        mean = float(np.dot(p, idx))
        return float(np.dot(p, (idx - mean) ** 2))

    @property
    def mode(self) -> Mode:
        top = self._weights.max()
        return tuple(float(i) for i in np.flatnonzero(self._weights == top))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(weights={self.weights!r})"


# -------------------------------------------------------------------
# Discrete uniform
# -------------------------------------------------------------------


def discrete_uniform_params_valid(alpha: int, beta: int) -> bool:
    return is_integer(alpha) and is_integer(beta) and INT_MIN <= alpha <= beta < INT_MAX


def sample_discrete_uniform(generator: AbstractGenerator, alpha: int, beta: int) -> int:
    return generator.next(alpha, beta + 1)


class DiscreteUniformDistribution(DiscreteDistribution):
    """Integers in [alpha, beta], all equally likely."""

    kind = DistributionKind.DISCRETE_UNIFORM
    parameters = ("alpha", "beta")
    alpha = Parameter()
    beta = Parameter()

    def __init__(
        self,
        alpha: int = 0,
        beta: int = 1,
        *,
        generator: Optional[AbstractGenerator] = None,
        seed: Optional[int] = None,
    ) -> None:
        super().__init__(generator=generator, seed=seed)
        self._assign(alpha=alpha, beta=beta)

    @property
    def minimum(self) -> float:
        return float(self._alpha)

    @property
    def maximum(self) -> float:
        return float(self._beta)

    @property
    def mean(self) -> float:
        return (self._alpha + self._beta) / 2.0

    @property
    def median(self) -> float:
        return (self._alpha + self._beta) / 2.0

    @property
    def variance(self) -> float:
        n = self._beta - self._alpha + 1.0
        return (n * n - 1.0) / 12.0

    @property
    def mode(self) -> Mode:
        raise UnsupportedStatisticError(UNDEFINED_MODE)


# -------------------------------------------------------------------
# Geometric
# -------------------------------------------------------------------


def geometric_params_valid(alpha: float) -> bool:
    return 0.0 < alpha <= 1.0


def sample_geometric(generator: AbstractGenerator, alpha: float) -> int:
    trials = 1
    while generator.next_double() >= alpha:
        trials += 1
    return trials


class GeometricDistribution(DiscreteDistribution):
    """Number of trials needed to get the first success (support starts at 1)."""

    kind = DistributionKind.GEOMETRIC
    parameters = ("alpha",)
    alpha = Parameter()

    def __init__(
        self,
        alpha: float = 0.5,
        *,
        generator: Optional[AbstractGenerator] = None,
        seed: Optional[int] = None,
    ) -> None:
        super().__init__(generator=generator, seed=seed)
        self._assign(alpha=alpha)

    @property
    def minimum(self) -> float:
        return 1.0

    @property
    def maximum(self) -> float:
        return math.inf

    @property
    def mean(self) -> float:
        return 1.0 / self._alpha

    @property
    def median(self) -> float:
        raise UnsupportedStatisticError(UNDEFINED_MEDIAN)

    @property
    def variance(self) -> float:
        return (1.0 - self._alpha) / self._alpha / self._alpha

    @property
    def mode(self) -> Mode:
        return (1.0,)


# -------------------------------------------------------------------
# Poisson
# -------------------------------------------------------------------


def poisson_params_valid(lambda_: float) -> bool:
    return 0.0 < lambda_ < math.inf


def sample_poisson(generator: AbstractGenerator, lambda_: float) -> int:
    """
    Knuth's multiplication method.

    Instead of comparing the running product against exp(-lambda), which
    underflows for large lambda, exp(lambda) is multiplied back in slices
    of POISSON_STEP whenever the product drops below one.
    """
    lambda_left = lambda_
    k = 0
    p = 1.0
    while True:
        k += 1
        p *= next_open_double(generator)
        while p < 1.0 and lambda_left > 0.0:
            if lambda_left > POISSON_STEP:
                p *= math.exp(POISSON_STEP)
                lambda_left -= POISSON_STEP
            else:
                p *= math.exp(lambda_left)
                lambda_left = 0.0
        if p <= 1.0:
            return k - 1


class PoissonDistribution(DiscreteDistribution):
    """Count of events at average rate `lambda_`."""

    kind = DistributionKind.POISSON
    parameters = ("lambda_",)
    lambda_ = Parameter()

    def __init__(
        self,
        lambda_: float = 1.0,
        *,
        generator: Optional[AbstractGenerator] = None,
        seed: Optional[int] = None,
    ) -> None:
        super().__init__(generator=generator, seed=seed)
        self._assign(lambda_=lambda_)

    @property
    def minimum(self) -> float:
        return 0.0

    @property
    def maximum(self) -> float:
        return math.inf

    @property
    def mean(self) -> float:
        return self._lambda_

    @property
    def median(self) -> float:
        raise UnsupportedStatisticError(UNDEFINED_MEDIAN)

    @property
    def variance(self) -> float:
        return self._lambda_

    @property
    def mode(self) -> Mode:
        lam = self._lambda_
        if lam == math.floor(lam):
            return (lam - 1.0, lam)
        return (float(math.floor(lam)),)


# -------------------------------------------------------------------
# Registration
# -------------------------------------------------------------------

registry.register_defaults(DistributionKind.BERNOULLI, bernoulli_params_valid, sample_bernoulli)
registry.register_defaults(DistributionKind.BINOMIAL, binomial_params_valid, sample_binomial)
registry.register_defaults(DistributionKind.CATEGORICAL, categorical_params_valid, sample_categorical)
registry.register_defaults(DistributionKind.DISCRETE_UNIFORM, discrete_uniform_params_valid, sample_discrete_uniform)
registry.register_defaults(DistributionKind.GEOMETRIC, geometric_params_valid, sample_geometric)
registry.register_defaults(DistributionKind.POISSON, poisson_params_valid, sample_poisson)
