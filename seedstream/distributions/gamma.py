# seedstream/distributions/gamma.py

"""
The gamma law and its relatives:

    - Gamma       Ahrens-Dieter GS for the fractional part of the shape,
                  plus a sum of exponentials for the integer part
    - Erlang      integer shape, Marsaglia-Tsang squeeze on normals
    - Beta        X / (X + Y) with X ~ Gamma(alpha), Y ~ Gamma(beta)
    - BetaPrime   B / (1 - B) with B ~ Beta(alpha, beta)

Beta and BetaPrime draw through the active Gamma / Beta registry slots.
Erlang keeps the canonical polar normal: its squeeze step is only valid
for standard normal deviates.
"""

from __future__ import annotations

import math
import sys
from typing import Optional

from seedstream.core_types import DistributionKind, Mode
from seedstream.distributions import registry
from seedstream.distributions.base import ContinuousDistribution, Parameter, is_integer
from seedstream.distributions.gaussian import sample_normal
from seedstream.errors import (
    UNDEFINED_MEDIAN,
    UNDEFINED_MODE_FOR_PARAMS,
    UNDEFINED_VARIANCE_FOR_PARAMS,
    UnsupportedStatisticError,
)
from seedstream.generators.base import AbstractGenerator


# -------------------------------------------------------------------
# Gamma
# -------------------------------------------------------------------


def gamma_params_valid(alpha: float, theta: float) -> bool:
    return alpha > 0.0 and theta > 0.0


def sample_gamma(generator: AbstractGenerator, alpha: float, theta: float) -> float:
    """
    Gamma(alpha, theta) deviate.

    Shape is split as alpha = n + frac. The fractional part uses the
    Ahrens-Dieter GS rejection sampler (skipped when frac is 0); each of
    the n unit shapes adds one Exp(1) deviate.
    """
    frac = alpha - math.floor(alpha)
    xi = 0.0

    if frac > 0.0:
        e_ratio = math.e / (math.e + frac)
        while True:
            u1 = 1.0 - generator.next_double()
            u2 = 1.0 - generator.next_double()
            if u1 <= e_ratio:
                xi = (u1 / e_ratio) ** (1.0 / frac)
                # xi ** (frac - 1) overflows for subnormal xi.
                if xi <= sys.float_info.min:
                    continue
                eta = u2 * xi ** (frac - 1.0)
            else:
                xi = 1.0 - math.log((u1 - e_ratio) / (1.0 - e_ratio))
                eta = u2 * math.exp(-xi)
            if eta <= xi ** (frac - 1.0) * math.exp(-xi):
                break

    for _ in range(int(math.floor(alpha))):
        xi -= math.log(1.0 - generator.next_double())

    return xi * theta


class GammaDistribution(ContinuousDistribution):
    """Shape `alpha`, scale `theta`."""

    kind = DistributionKind.GAMMA
    parameters = ("alpha", "theta")
    alpha = Parameter()
    theta = Parameter()

    def __init__(
        self,
        alpha: float = 1.0,
        theta: float = 1.0,
        *,
        generator: Optional[AbstractGenerator] = None,
        seed: Optional[int] = None,
    ) -> None:
        super().__init__(generator=generator, seed=seed)
        self._assign(alpha=alpha, theta=theta)

    @property
    def minimum(self) -> float:
        return 0.0

    @property
    def maximum(self) -> float:
        return math.inf

    @property
    def mean(self) -> float:
        return self._alpha * self._theta

    @property
    def median(self) -> float:
        raise UnsupportedStatisticError(UNDEFINED_MEDIAN)

    @property
    def variance(self) -> float:
        return self._alpha * self._theta * self._theta

    @property
    def mode(self) -> Mode:
        if self._alpha >= 1.0:
            return ((self._alpha - 1.0) * self._theta,)
        raise UnsupportedStatisticError(UNDEFINED_MODE_FOR_PARAMS)


# -------------------------------------------------------------------
# Erlang
# -------------------------------------------------------------------


def erlang_params_valid(alpha: int, lambda_: float) -> bool:
    return is_integer(alpha) and alpha > 0 and lambda_ > 0.0


def sample_erlang(generator: AbstractGenerator, alpha: int, lambda_: float) -> float:
    """Marsaglia-Tsang: squeeze test first, log test only when it fails."""
    d = alpha - 1.0 / 3.0
    c = 1.0 / math.sqrt(9.0 * d)
    while True:
        x = sample_normal(generator, 0.0, 1.0)
        v = 1.0 + c * x
        while v <= 0.0:
            x = sample_normal(generator, 0.0, 1.0)
            v = 1.0 + c * x

        v = v * v * v
        u = 1.0 - generator.next_double()
        x = x * x
        if u < 1.0 - 0.0331 * x * x:
            return d * v / lambda_
        if math.log(u) < 0.5 * x + d * (1.0 - v + math.log(v)):
            return d * v / lambda_


class ErlangDistribution(ContinuousDistribution):
    """Integer shape `alpha`, rate `lambda_`."""

    kind = DistributionKind.ERLANG
    parameters = ("alpha", "lambda_")
    alpha = Parameter()
    lambda_ = Parameter()

    def __init__(
        self,
        alpha: int = 1,
        lambda_: float = 1.0,
        *,
        generator: Optional[AbstractGenerator] = None,
        seed: Optional[int] = None,
    ) -> None:
        super().__init__(generator=generator, seed=seed)
        self._assign(alpha=alpha, lambda_=lambda_)

    @property
    def minimum(self) -> float:
        return 0.0

    @property
    def maximum(self) -> float:
        return math.inf

    @property
    def mean(self) -> float:
        return self._alpha / self._lambda_

    @property
    def median(self) -> float:
        raise UnsupportedStatisticError(UNDEFINED_MEDIAN)

    @property
    def variance(self) -> float:
        return self._alpha / self._lambda_ / self._lambda_

    @property
    def mode(self) -> Mode:
        return ((self._alpha - 1.0) / self._lambda_,)


# -------------------------------------------------------------------
# Beta
# -------------------------------------------------------------------


def beta_params_valid(alpha: float, beta: float) -> bool:
    return alpha > 0.0 and beta > 0.0


def sample_beta(generator: AbstractGenerator, alpha: float, beta: float) -> float:
    gamma = registry.get_sampler(DistributionKind.GAMMA)
    while True:
        x = gamma(generator, alpha, 1.0)
        y = gamma(generator, beta, 1.0)
        total = x + y
        # Both deviates can underflow to 0 (or overflow) for extreme shapes.
        if 0.0 < total < math.inf:
            return x / total


class BetaDistribution(ContinuousDistribution):
    kind = DistributionKind.BETA
    parameters = ("alpha", "beta")
    alpha = Parameter()
    beta = Parameter()

    def __init__(
        self,
        alpha: float = 1.0,
        beta: float = 1.0,
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
        return 1.0

    @property
    def mean(self) -> float:
        return self._alpha / (self._alpha + self._beta)

    @property
    def median(self) -> float:
        raise UnsupportedStatisticError(UNDEFINED_MEDIAN)

    @property
    def variance(self) -> float:
        a, b = self._alpha, self._beta
        total = a + b
        return a * b / (total * total * (total + 1.0))

    @property
    def mode(self) -> Mode:
        a, b = self._alpha, self._beta
        if a > 1.0 and b > 1.0:
            return ((a - 1.0) / (a + b - 2.0),)
        if a < 1.0 and b < 1.0:
            return (0.0, 1.0)
        if (a < 1.0 and b >= 1.0) or (a == 1.0 and b > 1.0):
            return (0.0,)
        if (a >= 1.0 and b < 1.0) or (a > 1.0 and b == 1.0):
            return (1.0,)
        raise UnsupportedStatisticError(UNDEFINED_MODE_FOR_PARAMS)


# -------------------------------------------------------------------
# Beta prime
# -------------------------------------------------------------------


def beta_prime_params_valid(alpha: float, beta: float) -> bool:
    return alpha > 1.0 and beta > 1.0


def sample_beta_prime(generator: AbstractGenerator, alpha: float, beta: float) -> float:
    b = registry.get_sampler(DistributionKind.BETA)(generator, alpha, beta)
    if b == 1.0:
        return math.inf
    return b / (1.0 - b)


class BetaPrimeDistribution(ContinuousDistribution):
    kind = DistributionKind.BETA_PRIME
    parameters = ("alpha", "beta")
    alpha = Parameter()
    beta = Parameter()

    def __init__(
        self,
        alpha: float = 2.0,
        beta: float = 2.0,
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
        return math.inf

    @property
    def mean(self) -> float:
        return self._alpha / (self._beta - 1.0)

    @property
    def median(self) -> float:
        raise UnsupportedStatisticError(UNDEFINED_MEDIAN)

    @property
    def variance(self) -> float:
        a, b = self._alpha, self._beta
        if b > 2.0:
            return a * (a + b - 1.0) / ((b - 1.0) * (b - 1.0) * (b - 2.0))
        raise UnsupportedStatisticError(UNDEFINED_VARIANCE_FOR_PARAMS)

    @property
    def mode(self) -> Mode:
        return ((self._alpha - 1.0) / (self._beta + 1.0),)


# -------------------------------------------------------------------
# Registration
# -------------------------------------------------------------------

registry.register_defaults(DistributionKind.GAMMA, gamma_params_valid, sample_gamma)
registry.register_defaults(DistributionKind.ERLANG, erlang_params_valid, sample_erlang)
registry.register_defaults(DistributionKind.BETA, beta_params_valid, sample_beta)
registry.register_defaults(DistributionKind.BETA_PRIME, beta_prime_params_valid, sample_beta_prime)
