# seedstream/distributions/gaussian.py

"""
The normal law and the laws built from it:

    - Normal           Marsaglia polar method
    - Lognormal        exp(sigma * Z + mu)
    - Chi              sqrt(Z_1^2 + ... + Z_k^2)
    - ChiSquare        Z_1^2 + ... + Z_k^2
    - StudentsT        Z / sqrt(ChiSquare(nu) / nu)
    - FisherSnedecor   (ChiSquare(a) / a) / (ChiSquare(b) / b)

Every Z (and every ChiSquare draw inside StudentsT / FisherSnedecor) is
obtained from the *active* registry slot, not from the canonical
function, so overriding Normal changes all of these laws too.
"""

from __future__ import annotations

import math
from typing import Optional

from seedstream.core_types import DistributionKind, Mode
from seedstream.distributions import registry
from seedstream.distributions.base import ContinuousDistribution, Parameter, is_integer
from seedstream.errors import (
    UNDEFINED_MEAN_FOR_PARAMS,
    UNDEFINED_MEDIAN,
    UNDEFINED_MODE_FOR_PARAMS,
    UNDEFINED_VARIANCE_FOR_PARAMS,
    UnsupportedStatisticError,
)
from seedstream.generators.base import AbstractGenerator
from seedstream.utils.tmath import is_zero, safe_exp


def _standard_normal(generator: AbstractGenerator) -> float:
    return registry.get_sampler(DistributionKind.NORMAL)(generator, 0.0, 1.0)


def _chi_square(generator: AbstractGenerator, k: int) -> float:
    return registry.get_sampler(DistributionKind.CHI_SQUARE)(generator, k)


# -------------------------------------------------------------------
# Normal
# -------------------------------------------------------------------


def normal_params_valid(mu: float, sigma: float) -> bool:
    return not math.isnan(mu) and sigma > 0.0


def sample_normal(generator: AbstractGenerator, mu: float, sigma: float) -> float:
    """
    Marsaglia polar method.

    Draws a point uniformly in the square [-1, 1)^2 until it falls
    strictly inside the unit circle (and away from the origin), then
    returns one of the two resulting normal deviates, chosen by a coin
    flip.
    """
    while True:
        v1 = generator.next_double(-1.0, 1.0)
        v2 = generator.next_double(-1.0, 1.0)
        w = v1 * v1 + v2 * v2
        if w < 1.0 and not is_zero(w):
            break

    y = math.sqrt(-2.0 * math.log(w) / w) * sigma
    return v1 * y + mu if generator.next_boolean() else v2 * y + mu


class NormalDistribution(ContinuousDistribution):
    """Gaussian law with mean `mu` and standard deviation `sigma`."""

    kind = DistributionKind.NORMAL
    parameters = ("mu", "sigma")
    mu = Parameter()
    sigma = Parameter()

    def __init__(
        self,
        mu: float = 1.0,
        sigma: float = 1.0,
        *,
        generator: Optional[AbstractGenerator] = None,
        seed: Optional[int] = None,
    ) -> None:
        super().__init__(generator=generator, seed=seed)
        self._assign(mu=mu, sigma=sigma)

    @property
    def minimum(self) -> float:
        return -math.inf

    @property
    def maximum(self) -> float:
        return math.inf

    @property
    def mean(self) -> float:
        return self._mu

    @property
    def median(self) -> float:
        return self._mu

    @property
    def variance(self) -> float:
        return self._sigma * self._sigma

    @property
    def mode(self) -> Mode:
        return (self._mu,)


# -------------------------------------------------------------------
# Lognormal
# -------------------------------------------------------------------


def lognormal_params_valid(mu: float, sigma: float) -> bool:
    return not math.isnan(mu) and sigma >= 0.0


def sample_lognormal(generator: AbstractGenerator, mu: float, sigma: float) -> float:
    return safe_exp(_standard_normal(generator) * sigma + mu)


class LognormalDistribution(ContinuousDistribution):
    kind = DistributionKind.LOGNORMAL
    parameters = ("mu", "sigma")
    mu = Parameter()
    sigma = Parameter()

    def __init__(
        self,
        mu: float = 1.0,
        sigma: float = 1.0,
        *,
        generator: Optional[AbstractGenerator] = None,
        seed: Optional[int] = None,
    ) -> None:
        super().__init__(generator=generator, seed=seed)
        self._assign(mu=mu, sigma=sigma)

    @property
    def minimum(self) -> float:
        return 0.0

    @property
    def maximum(self) -> float:
        return math.inf

    @property
    def mean(self) -> float:
        return safe_exp(self._mu + 0.5 * self._sigma * self._sigma)

    @property
    def median(self) -> float:
        return safe_exp(self._mu)

    @property
    def variance(self) -> float:
        s2 = self._sigma * self._sigma
        return (safe_exp(s2) - 1.0) * safe_exp(2.0 * self._mu + s2)

    @property
    def mode(self) -> Mode:
        return (safe_exp(self._mu - self._sigma * self._sigma),)


# -------------------------------------------------------------------
# Chi
# -------------------------------------------------------------------


def chi_params_valid(alpha: int) -> bool:
    return is_integer(alpha) and alpha > 0


def sample_chi(generator: AbstractGenerator, alpha: int) -> float:
    total = 0.0
    for _ in range(alpha):
        z = _standard_normal(generator)
        total += z * z
    return math.sqrt(total)


class ChiDistribution(ContinuousDistribution):
    """Length of a vector of `alpha` independent standard normals."""

    kind = DistributionKind.CHI
    parameters = ("alpha",)
    alpha = Parameter()

    def __init__(
        self,
        alpha: int = 1,
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
        return math.inf

    @property
    def mean(self) -> float:
        k = self._alpha
        return math.sqrt(2.0) * math.exp(math.lgamma((k + 1) / 2.0) - math.lgamma(k / 2.0))

    @property
    def median(self) -> float:
        raise UnsupportedStatisticError(UNDEFINED_MEDIAN)

    @property
    def variance(self) -> float:
        mean = self.mean
        return self._alpha - mean * mean

    @property
    def mode(self) -> Mode:
        return (math.sqrt(self._alpha - 1.0),)


# -------------------------------------------------------------------
# Chi-square
# -------------------------------------------------------------------


def chi_square_params_valid(alpha: int) -> bool:
    return is_integer(alpha) and alpha > 0


def sample_chi_square(generator: AbstractGenerator, alpha: int) -> float:
    total = 0.0
    for _ in range(alpha):
        z = _standard_normal(generator)
        total += z * z
    return total


class ChiSquareDistribution(ContinuousDistribution):
    """Sum of squares of `alpha` independent standard normals."""

    kind = DistributionKind.CHI_SQUARE
    parameters = ("alpha",)
    alpha = Parameter()

    def __init__(
        self,
        alpha: int = 1,
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
        return math.inf

    @property
    def mean(self) -> float:
        return float(self._alpha)

    @property
    def median(self) -> float:
        k = self._alpha
        return k * (1.0 - 2.0 / (9.0 * k)) ** 3

    @property
    def variance(self) -> float:
        return 2.0 * self._alpha

    @property
    def mode(self) -> Mode:
        if self._alpha >= 2:
            return (self._alpha - 2.0,)
        raise UnsupportedStatisticError(UNDEFINED_MODE_FOR_PARAMS)


# -------------------------------------------------------------------
# Student's t
# -------------------------------------------------------------------


def students_t_params_valid(nu: int) -> bool:
    return is_integer(nu) and nu > 0


def sample_students_t(generator: AbstractGenerator, nu: int) -> float:
    n = _standard_normal(generator)
    c = _chi_square(generator, nu)
    if c == 0.0:
        return math.copysign(math.inf, n)
    return n / math.sqrt(c / nu)


class StudentsTDistribution(ContinuousDistribution):
    """Student's t with `nu` degrees of freedom."""

    kind = DistributionKind.STUDENTS_T
    parameters = ("nu",)
    nu = Parameter()

    def __init__(
        self,
        nu: int = 1,
        *,
        generator: Optional[AbstractGenerator] = None,
        seed: Optional[int] = None,
    ) -> None:
        super().__init__(generator=generator, seed=seed)
        self._assign(nu=nu)

    @property
    def minimum(self) -> float:
        return -math.inf

    @property
    def maximum(self) -> float:
        return math.inf

    @property
    def mean(self) -> float:
        if self._nu > 1:
            return 0.0
        raise UnsupportedStatisticError(UNDEFINED_MEAN_FOR_PARAMS)

    @property
    def median(self) -> float:
        return 0.0

    @property
    def variance(self) -> float:
        if self._nu > 2:
            return self._nu / (self._nu - 2.0)
        raise UnsupportedStatisticError(UNDEFINED_VARIANCE_FOR_PARAMS)

    @property
    def mode(self) -> Mode:
        return (0.0,)


# -------------------------------------------------------------------
# Fisher-Snedecor (F)
# -------------------------------------------------------------------


def fisher_snedecor_params_valid(alpha: int, beta: int) -> bool:
    return is_integer(alpha) and is_integer(beta) and alpha > 0 and beta > 0


def sample_fisher_snedecor(generator: AbstractGenerator, alpha: int, beta: int) -> float:
    csa = _chi_square(generator, alpha)
    csb = _chi_square(generator, beta)
    if csb == 0.0:
        return math.inf
    return (csa / csb) * (beta / alpha)


class FisherSnedecorDistribution(ContinuousDistribution):
    """F law with `alpha` and `beta` degrees of freedom."""

    kind = DistributionKind.FISHER_SNEDECOR
    parameters = ("alpha", "beta")
    alpha = Parameter()
    beta = Parameter()

    def __init__(
        self,
        alpha: int = 1,
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
        return math.inf

    @property
    def mean(self) -> float:
        if self._beta > 2:
            return self._beta / (self._beta - 2.0)
        raise UnsupportedStatisticError(UNDEFINED_MEAN_FOR_PARAMS)

    @property
    def median(self) -> float:
        raise UnsupportedStatisticError(UNDEFINED_MEDIAN)

    @property
    def variance(self) -> float:
        a, b = self._alpha, self._beta
        if b > 4:
            return 2.0 * b * b * (a + b - 2.0) / (a * (b - 2.0) * (b - 2.0) * (b - 4.0))
        raise UnsupportedStatisticError(UNDEFINED_VARIANCE_FOR_PARAMS)

    @property
    def mode(self) -> Mode:
        a, b = self._alpha, self._beta
        if a > 2:
            return ((a - 2.0) / a * b / (b + 2.0),)
        raise UnsupportedStatisticError(UNDEFINED_MODE_FOR_PARAMS)


# -------------------------------------------------------------------
# Registration
# -------------------------------------------------------------------

registry.register_defaults(DistributionKind.NORMAL, normal_params_valid, sample_normal)
registry.register_defaults(DistributionKind.LOGNORMAL, lognormal_params_valid, sample_lognormal)
registry.register_defaults(DistributionKind.CHI, chi_params_valid, sample_chi)
registry.register_defaults(DistributionKind.CHI_SQUARE, chi_square_params_valid, sample_chi_square)
registry.register_defaults(DistributionKind.STUDENTS_T, students_t_params_valid, sample_students_t)
registry.register_defaults(DistributionKind.FISHER_SNEDECOR, fisher_snedecor_params_valid, sample_fisher_snedecor)
