# seedstream/distributions/continuous.py

"""
Continuous distributions sampled from a single uniform draw, mostly by
inverting the CDF in closed form:

    - ContinuousUniform   linear remap of [0, 1)
    - Cauchy              alpha + gamma * tan(pi * (u - 1/2))
    - Exponential         -ln(1 - u) / lambda
    - FisherTippett       Gumbel, mu - alpha * ln(-ln(1 - u))
    - Laplace             mu - alpha * sgn(r) * ln(2|r|), r = 1/2 - u
    - Logistic            mu + sigma * ln(u / (1 - u))
    - Pareto              alpha / (1 - u)^(1 / beta)
    - Power               u^(1 / alpha) / beta
    - Rayleigh            sigma * sqrt(-2 ln(1 - u))
    - Triangular          piecewise square-root inverse
    - Weibull             lambda * (-ln(1 - u))^(1 / alpha)

Wherever a logarithm would see 0, the uniform draw is taken from the open
interval (0, 1) instead of [0, 1).
"""

from __future__ import annotations

import math
from typing import Optional

from seedstream.core_types import DistributionKind, Mode
from seedstream.distributions import registry
from seedstream.distributions.base import ContinuousDistribution, Parameter, next_open_double
from seedstream.errors import (
    UNDEFINED_MEAN,
    UNDEFINED_MEAN_FOR_PARAMS,
    UNDEFINED_MEDIAN,
    UNDEFINED_MODE,
    UNDEFINED_MODE_FOR_PARAMS,
    UNDEFINED_VARIANCE,
    UNDEFINED_VARIANCE_FOR_PARAMS,
    UnsupportedStatisticError,
)
from seedstream.generators.base import AbstractGenerator
from seedstream.utils.tmath import safe_gamma, safe_pow


EULER_MASCHERONI = 0.5772156649015329


# -------------------------------------------------------------------
# Continuous uniform
# -------------------------------------------------------------------


def continuous_uniform_params_valid(alpha: float, beta: float) -> bool:
    return math.isfinite(alpha) and math.isfinite(beta) and alpha <= beta and math.isfinite(beta - alpha)


def sample_continuous_uniform(generator: AbstractGenerator, alpha: float, beta: float) -> float:
    return generator.next_double(alpha, beta)


class ContinuousUniformDistribution(ContinuousDistribution):
    """Reals in [alpha, beta), all equally likely."""

    kind = DistributionKind.CONTINUOUS_UNIFORM
    parameters = ("alpha", "beta")
    alpha = Parameter()
    beta = Parameter()

    def __init__(
        self,
        alpha: float = 0.0,
        beta: float = 1.0,
        *,
        generator: Optional[AbstractGenerator] = None,
        seed: Optional[int] = None,
    ) -> None:
        super().__init__(generator=generator, seed=seed)
        self._assign(alpha=alpha, beta=beta)

    @property
    def minimum(self) -> float:
        return self._alpha

    @property
    def maximum(self) -> float:
        return self._beta

    @property
    def mean(self) -> float:
        return (self._alpha + self._beta) / 2.0

    @property
    def median(self) -> float:
        return (self._alpha + self._beta) / 2.0

    @property
    def variance(self) -> float:
        width = self._beta - self._alpha
        return width * width / 12.0

    @property
    def mode(self) -> Mode:
        raise UnsupportedStatisticError(UNDEFINED_MODE)


# -------------------------------------------------------------------
# Cauchy
# -------------------------------------------------------------------


def cauchy_params_valid(alpha: float, gamma: float) -> bool:
    return not math.isnan(alpha) and gamma > 0.0


def sample_cauchy(generator: AbstractGenerator, alpha: float, gamma: float) -> float:
    return alpha + gamma * math.tan(math.pi * (generator.next_double() - 0.5))


class CauchyDistribution(ContinuousDistribution):
    """Location `alpha`, scale `gamma`. Has no mean and no variance."""

    kind = DistributionKind.CAUCHY
    parameters = ("alpha", "gamma")
    alpha = Parameter()
    gamma = Parameter()

    def __init__(
        self,
        alpha: float = 1.0,
        gamma: float = 1.0,
        *,
        generator: Optional[AbstractGenerator] = None,
        seed: Optional[int] = None,
    ) -> None:
        super().__init__(generator=generator, seed=seed)
        self._assign(alpha=alpha, gamma=gamma)

    @property
    def minimum(self) -> float:
        return -math.inf

    @property
    def maximum(self) -> float:
        return math.inf

    @property
    def mean(self) -> float:
        raise UnsupportedStatisticError(UNDEFINED_MEAN)

    @property
    def median(self) -> float:
        return self._alpha

    @property
    def variance(self) -> float:
        raise UnsupportedStatisticError(UNDEFINED_VARIANCE)

    @property
    def mode(self) -> Mode:
        return (self._alpha,)


# -------------------------------------------------------------------
# Exponential
# -------------------------------------------------------------------


def exponential_params_valid(lambda_: float) -> bool:
    return lambda_ > 0.0


def sample_exponential(generator: AbstractGenerator, lambda_: float) -> float:
    return -math.log(1.0 - generator.next_double()) / lambda_


class ExponentialDistribution(ContinuousDistribution):
    kind = DistributionKind.EXPONENTIAL
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
        return 1.0 / self._lambda_

    @property
    def median(self) -> float:
        return math.log(2.0) / self._lambda_

    @property
    def variance(self) -> float:
        return 1.0 / self._lambda_ / self._lambda_

    @property
    def mode(self) -> Mode:
        return (0.0,)


# -------------------------------------------------------------------
# Fisher-Tippett (Gumbel)
# -------------------------------------------------------------------


def fisher_tippett_params_valid(alpha: float, mu: float) -> bool:
    return alpha > 0.0 and not math.isnan(mu)


def sample_fisher_tippett(generator: AbstractGenerator, alpha: float, mu: float) -> float:
    return mu - alpha * math.log(-math.log1p(-next_open_double(generator)))


class FisherTippettDistribution(ContinuousDistribution):
    """Gumbel (type I extreme value) law with scale `alpha` and location `mu`."""

    kind = DistributionKind.FISHER_TIPPETT
    parameters = ("alpha", "mu")
    alpha = Parameter()
    mu = Parameter()

    def __init__(
        self,
        alpha: float = 1.0,
        mu: float = 0.0,
        *,
        generator: Optional[AbstractGenerator] = None,
        seed: Optional[int] = None,
    ) -> None:
        super().__init__(generator=generator, seed=seed)
        self._assign(alpha=alpha, mu=mu)

    @property
    def minimum(self) -> float:
        return -math.inf

    @property
    def maximum(self) -> float:
        return math.inf

    @property
    def mean(self) -> float:
        return self._mu + self._alpha * EULER_MASCHERONI

    @property
    def median(self) -> float:
        return self._mu - self._alpha * math.log(math.log(2.0))

    @property
    def variance(self) -> float:
        return math.pi**2 / 6.0 * self._alpha * self._alpha

    @property
    def mode(self) -> Mode:
        return (self._mu,)


# -------------------------------------------------------------------
# Laplace
# -------------------------------------------------------------------


def laplace_params_valid(alpha: float, mu: float) -> bool:
    return alpha > 0.0 and not math.isnan(mu)


def sample_laplace(generator: AbstractGenerator, alpha: float, mu: float) -> float:
    while True:
        rand = 0.5 - generator.next_double()
        if rand != 0.0:
            break
    return mu - alpha * math.copysign(1.0, rand) * math.log(2.0 * abs(rand))


class LaplaceDistribution(ContinuousDistribution):
    """Double exponential law with scale `alpha` and location `mu`."""

    kind = DistributionKind.LAPLACE
    parameters = ("alpha", "mu")
    alpha = Parameter()
    mu = Parameter()

    def __init__(
        self,
        alpha: float = 1.0,
        mu: float = 0.0,
        *,
        generator: Optional[AbstractGenerator] = None,
        seed: Optional[int] = None,
    ) -> None:
        super().__init__(generator=generator, seed=seed)
        self._assign(alpha=alpha, mu=mu)

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
        return 2.0 * self._alpha * self._alpha

    @property
    def mode(self) -> Mode:
        return (self._mu,)


# -------------------------------------------------------------------
# Logistic
# -------------------------------------------------------------------


def logistic_params_valid(mu: float, sigma: float) -> bool:
    return not math.isnan(mu) and not math.isnan(sigma) and sigma != 0.0


def sample_logistic(generator: AbstractGenerator, mu: float, sigma: float) -> float:
    u = next_open_double(generator)
    return mu + sigma * math.log(u / (1.0 - u))


class LogisticDistribution(ContinuousDistribution):
    kind = DistributionKind.LOGISTIC
    parameters = ("mu", "sigma")
    mu = Parameter()
    sigma = Parameter()

    def __init__(
        self,
        mu: float = 0.0,
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
        return self._sigma * self._sigma * math.pi**2 / 3.0

    @property
    def mode(self) -> Mode:
        return (self._mu,)


# -------------------------------------------------------------------
# Pareto
# -------------------------------------------------------------------


def pareto_params_valid(alpha: float, beta: float) -> bool:
    return alpha > 0.0 and beta > 0.0


def sample_pareto(generator: AbstractGenerator, alpha: float, beta: float) -> float:
    denominator = (1.0 - generator.next_double()) ** (1.0 / beta)
    # Small shapes drive the root towards 0.0.
    if denominator == 0.0:
        return math.inf
    return alpha / denominator


class ParetoDistribution(ContinuousDistribution):
    """Scale (minimum) `alpha`, shape `beta`."""

    kind = DistributionKind.PARETO
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
        return self._alpha

    @property
    def maximum(self) -> float:
        return math.inf

    @property
    def mean(self) -> float:
        if self._beta > 1.0:
            return self._alpha * self._beta / (self._beta - 1.0)
        raise UnsupportedStatisticError(UNDEFINED_MEAN_FOR_PARAMS)

    @property
    def median(self) -> float:
        return self._alpha * safe_pow(2.0, 1.0 / self._beta)

    @property
    def variance(self) -> float:
        if self._beta > 2.0:
            a, b = self._alpha, self._beta
            return b * a * a / (b - 1.0) / (b - 1.0) / (b - 2.0)
        raise UnsupportedStatisticError(UNDEFINED_VARIANCE_FOR_PARAMS)

    @property
    def mode(self) -> Mode:
        return (self._alpha,)


# -------------------------------------------------------------------
# Power
# -------------------------------------------------------------------


def power_params_valid(alpha: float, beta: float) -> bool:
    return alpha > 0.0 and beta > 0.0


def sample_power(generator: AbstractGenerator, alpha: float, beta: float) -> float:
    return generator.next_double() ** (1.0 / alpha) / beta


class PowerDistribution(ContinuousDistribution):
    """Power-function law on [0, 1 / beta] with shape `alpha`."""

    kind = DistributionKind.POWER
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
        return 1.0 / self._beta

    @property
    def mean(self) -> float:
        return self._alpha / self._beta / (self._alpha + 1.0)

    @property
    def median(self) -> float:
        raise UnsupportedStatisticError(UNDEFINED_MEDIAN)

    @property
    def variance(self) -> float:
        a, b = self._alpha, self._beta
        return a / b / b / (a + 1.0) / (a + 1.0) / (a + 2.0)

    @property
    def mode(self) -> Mode:
        if self._alpha > 1.0:
            return (1.0 / self._beta,)
        if self._alpha < 1.0:
            return (0.0,)
        raise UnsupportedStatisticError(UNDEFINED_MODE_FOR_PARAMS)


# -------------------------------------------------------------------
# Rayleigh
# -------------------------------------------------------------------


def rayleigh_params_valid(sigma: float) -> bool:
    return sigma > 0.0


def sample_rayleigh(generator: AbstractGenerator, sigma: float) -> float:
    return sigma * math.sqrt(-2.0 * math.log(1.0 - generator.next_double()))


class RayleighDistribution(ContinuousDistribution):
    kind = DistributionKind.RAYLEIGH
    parameters = ("sigma",)
    sigma = Parameter()

    def __init__(
        self,
        sigma: float = 1.0,
        *,
        generator: Optional[AbstractGenerator] = None,
        seed: Optional[int] = None,
    ) -> None:
        super().__init__(generator=generator, seed=seed)
        self._assign(sigma=sigma)

    @property
    def minimum(self) -> float:
        return 0.0

    @property
    def maximum(self) -> float:
        return math.inf

    @property
    def mean(self) -> float:
        return self._sigma * math.sqrt(math.pi / 2.0)

    @property
    def median(self) -> float:
        return self._sigma * math.sqrt(math.log(4.0))

    @property
    def variance(self) -> float:
        return self._sigma * self._sigma * (4.0 - math.pi) / 2.0

    @property
    def mode(self) -> Mode:
        return (self._sigma,)


# -------------------------------------------------------------------
# Triangular
# -------------------------------------------------------------------


def triangular_params_valid(alpha: float, beta: float, gamma: float) -> bool:
    return alpha < beta and alpha <= gamma <= beta


def sample_triangular(generator: AbstractGenerator, alpha: float, beta: float, gamma: float) -> float:
    u = generator.next_double()
    width = beta - alpha
    if u < (gamma - alpha) / width:
        return alpha + math.sqrt(u * width * (gamma - alpha))
    return beta - math.sqrt((1.0 - u) * width * (beta - gamma))


class TriangularDistribution(ContinuousDistribution):
    """Lower limit `alpha`, upper limit `beta`, peak at `gamma`."""

    kind = DistributionKind.TRIANGULAR
    parameters = ("alpha", "beta", "gamma")
    alpha = Parameter()
    beta = Parameter()
    gamma = Parameter()

    def __init__(
        self,
        alpha: float = 0.0,
        beta: float = 1.0,
        gamma: float = 0.5,
        *,
        generator: Optional[AbstractGenerator] = None,
        seed: Optional[int] = None,
    ) -> None:
        super().__init__(generator=generator, seed=seed)
        self._assign(alpha=alpha, beta=beta, gamma=gamma)

    @property
    def minimum(self) -> float:
        return self._alpha

    @property
    def maximum(self) -> float:
        return self._beta

    @property
    def mean(self) -> float:
        return (self._alpha + self._beta + self._gamma) / 3.0

    @property
    def median(self) -> float:
        a, b, c = self._alpha, self._beta, self._gamma
        if c >= (a + b) / 2.0:
            return a + math.sqrt((b - a) * (c - a) / 2.0)
        return b - math.sqrt((b - a) * (b - c) / 2.0)

    @property
    def variance(self) -> float:
        a, b, c = self._alpha, self._beta, self._gamma
        return (a * a + b * b + c * c - a * b - a * c - b * c) / 18.0

    @property
    def mode(self) -> Mode:
        return (self._gamma,)


# -------------------------------------------------------------------
# Weibull
# -------------------------------------------------------------------


def weibull_params_valid(alpha: float, lambda_: float) -> bool:
    return alpha > 0.0 and lambda_ > 0.0


def sample_weibull(generator: AbstractGenerator, alpha: float, lambda_: float) -> float:
    return lambda_ * safe_pow(-math.log(1.0 - generator.next_double()), 1.0 / alpha)


class WeibullDistribution(ContinuousDistribution):
    """Shape `alpha`, scale `lambda_`."""

    kind = DistributionKind.WEIBULL
    parameters = ("alpha", "lambda_")
    alpha = Parameter()
    lambda_ = Parameter()

    def __init__(
        self,
        alpha: float = 1.0,
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
        return self._lambda_ * safe_gamma(1.0 + 1.0 / self._alpha)

    @property
    def median(self) -> float:
        return self._lambda_ * math.log(2.0) ** (1.0 / self._alpha)

    @property
    def variance(self) -> float:
        g2 = safe_gamma(1.0 + 2.0 / self._alpha)
        if math.isinf(g2):
            return math.inf
        g1 = math.gamma(1.0 + 1.0 / self._alpha)
        return self._lambda_ * self._lambda_ * (g2 - g1 * g1)

    @property
    def mode(self) -> Mode:
        if self._alpha >= 1.0:
            return (self._lambda_ * (1.0 - 1.0 / self._alpha) ** (1.0 / self._alpha),)
        raise UnsupportedStatisticError(UNDEFINED_MODE_FOR_PARAMS)


# -------------------------------------------------------------------
# Registration
# -------------------------------------------------------------------

registry.register_defaults(
    DistributionKind.CONTINUOUS_UNIFORM, continuous_uniform_params_valid, sample_continuous_uniform
)
registry.register_defaults(DistributionKind.CAUCHY, cauchy_params_valid, sample_cauchy)
registry.register_defaults(DistributionKind.EXPONENTIAL, exponential_params_valid, sample_exponential)
registry.register_defaults(DistributionKind.FISHER_TIPPETT, fisher_tippett_params_valid, sample_fisher_tippett)
registry.register_defaults(DistributionKind.LAPLACE, laplace_params_valid, sample_laplace)
registry.register_defaults(DistributionKind.LOGISTIC, logistic_params_valid, sample_logistic)
registry.register_defaults(DistributionKind.PARETO, pareto_params_valid, sample_pareto)
registry.register_defaults(DistributionKind.POWER, power_params_valid, sample_power)
registry.register_defaults(DistributionKind.RAYLEIGH, rayleigh_params_valid, sample_rayleigh)
registry.register_defaults(DistributionKind.TRIANGULAR, triangular_params_valid, sample_triangular)
registry.register_defaults(DistributionKind.WEIBULL, weibull_params_valid, sample_weibull)
