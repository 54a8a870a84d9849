# seedstream/randomizer.py

"""
Randomizer: one generator, every distribution.

This is the "just give me numbers" entry point. A Randomizer:

    - owns one uniform generator (built by name via utils.rng, or passed
      in) and forwards every generator operation to it,
    - offers one convenience call per distribution kind, e.g.

          r = Randomizer(seed=42)
          r.normal(0.0, 2.0)
          r.categorical([1, 1, 4])
          xs = itertools.islice(r.exponential_samples(0.5), 1000)

      Each call validates its parameters with the kind's *active*
      validator and draws with its *active* sampler from the override
      registry, exactly like the distribution classes do,
    - lazily builds a default-parameter instance of every distribution
      class bound to its generator (`distribution(kind)`).

Like generators, a Randomizer is not thread-safe.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Iterator, Optional, Sequence, Type, TypeVar, Union

import numpy as np

from seedstream.choice import choice as _choice
from seedstream.choice import choices as _choices
from seedstream.config import DEFAULT_GENERATOR
from seedstream.core_types import DistributionKind
from seedstream.distributions import registry
from seedstream.distributions.base import AbstractDistribution, is_integer
from seedstream.distributions.continuous import (
    CauchyDistribution,
    ContinuousUniformDistribution,
    ExponentialDistribution,
    FisherTippettDistribution,
    LaplaceDistribution,
    LogisticDistribution,
    ParetoDistribution,
    PowerDistribution,
    RayleighDistribution,
    TriangularDistribution,
    WeibullDistribution,
)
from seedstream.distributions.discrete import (
    BernoulliDistribution,
    BinomialDistribution,
    CategoricalDistribution,
    DiscreteUniformDistribution,
    GeometricDistribution,
    PoissonDistribution,
    cumulative_weights,
)
from seedstream.distributions.gamma import (
    BetaDistribution,
    BetaPrimeDistribution,
    ErlangDistribution,
    GammaDistribution,
)
from seedstream.distributions.gaussian import (
    ChiDistribution,
    ChiSquareDistribution,
    FisherSnedecorDistribution,
    LognormalDistribution,
    NormalDistribution,
    StudentsTDistribution,
)
from seedstream.errors import (
    EMPTY_LIST,
    GENERATOR_AND_SEED,
    INVALID_PARAMS,
    NULL_WEIGHTS,
    UNKNOWN_DISTRIBUTION_KIND,
    ArgumentError,
    ArgumentOutOfRangeError,
    NullArgumentError,
)
from seedstream.generators.base import AbstractGenerator
from seedstream.utils.logging_utils import get_logger
from seedstream.utils.rng import make_generator


logger = get_logger(__name__)

T = TypeVar("T")

DISTRIBUTION_CLASSES: Dict[DistributionKind, Type[AbstractDistribution]] = {
    DistributionKind.BERNOULLI: BernoulliDistribution,
    DistributionKind.BINOMIAL: BinomialDistribution,
    DistributionKind.CATEGORICAL: CategoricalDistribution,
    DistributionKind.DISCRETE_UNIFORM: DiscreteUniformDistribution,
    DistributionKind.GEOMETRIC: GeometricDistribution,
    DistributionKind.POISSON: PoissonDistribution,
    DistributionKind.BETA: BetaDistribution,
    DistributionKind.BETA_PRIME: BetaPrimeDistribution,
    DistributionKind.CAUCHY: CauchyDistribution,
    DistributionKind.CHI: ChiDistribution,
    DistributionKind.CHI_SQUARE: ChiSquareDistribution,
    DistributionKind.CONTINUOUS_UNIFORM: ContinuousUniformDistribution,
    DistributionKind.ERLANG: ErlangDistribution,
    DistributionKind.EXPONENTIAL: ExponentialDistribution,
    DistributionKind.FISHER_SNEDECOR: FisherSnedecorDistribution,
    DistributionKind.FISHER_TIPPETT: FisherTippettDistribution,
    DistributionKind.GAMMA: GammaDistribution,
    DistributionKind.LAPLACE: LaplaceDistribution,
    DistributionKind.LOGISTIC: LogisticDistribution,
    DistributionKind.LOGNORMAL: LognormalDistribution,
    DistributionKind.NORMAL: NormalDistribution,
    DistributionKind.PARETO: ParetoDistribution,
    DistributionKind.POWER: PowerDistribution,
    DistributionKind.RAYLEIGH: RayleighDistribution,
    DistributionKind.STUDENTS_T: StudentsTDistribution,
    DistributionKind.TRIANGULAR: TriangularDistribution,
    DistributionKind.WEIBULL: WeibullDistribution,
}

DISCRETE_KINDS = frozenset(
    {
        DistributionKind.BERNOULLI,
        DistributionKind.BINOMIAL,
        DistributionKind.CATEGORICAL,
        DistributionKind.DISCRETE_UNIFORM,
        DistributionKind.GEOMETRIC,
        DistributionKind.POISSON,
    }
)


class Randomizer:
    """Facade binding one generator to every distribution kind."""

    def __init__(
        self,
        seed: Optional[int] = None,
        *,
        generator: Optional[AbstractGenerator] = None,
    ) -> None:
        if generator is not None and seed is not None:
            raise ArgumentError(GENERATOR_AND_SEED)
        self._generator = generator if generator is not None else make_generator(DEFAULT_GENERATOR, seed)
        self._distributions: Dict[DistributionKind, AbstractDistribution] = {}

    @classmethod
    def new(cls, generator_name: Optional[str] = None, seed: Optional[int] = None) -> "Randomizer":
        """Build a Randomizer around a generator chosen by name (see utils.rng.GENERATORS)."""
        return cls(generator=make_generator(generator_name, seed))

    # ---------------------------------------------------------------
    # Generator delegation
    # ---------------------------------------------------------------

    @property
    def generator(self) -> AbstractGenerator:
        return self._generator

    @property
    def seed(self) -> int:
        return self._generator.seed

    @property
    def can_reset(self) -> bool:
        return self._generator.can_reset

    def reset(self, seed: Optional[int] = None) -> bool:
        return self._generator.reset(seed)

    def next_non_negative_int(self) -> int:
        return self._generator.next_non_negative_int()

    def next_double01(self) -> float:
        return self._generator.next_double01()

    def next_uint32(self) -> int:
        return self._generator.next_uint32()

    def next(self, min_value: Optional[int] = None, max_value: Optional[int] = None) -> int:
        return self._generator.next(min_value, max_value)

    def next_inclusive_max_value(self) -> int:
        return self._generator.next_inclusive_max_value()

    def next_double(self, min_value: Optional[float] = None, max_value: Optional[float] = None) -> float:
        return self._generator.next_double(min_value, max_value)

    def next_uint(self, min_value: Optional[int] = None, max_value: Optional[int] = None) -> int:
        return self._generator.next_uint(min_value, max_value)

    def next_uint_inclusive_max_value(self) -> int:
        return self._generator.next_uint_inclusive_max_value()

    def next_boolean(self) -> bool:
        return self._generator.next_boolean()

    def next_bytes(self, buffer: Any) -> None:
        self._generator.next_bytes(buffer)

    def booleans(self) -> Iterator[bool]:
        return self._generator.booleans()

    def doubles(self, min_value: Optional[float] = None, max_value: Optional[float] = None) -> Iterator[float]:
        return self._generator.doubles(min_value, max_value)

    def integers(self, min_value: Optional[int] = None, max_value: Optional[int] = None) -> Iterator[int]:
        return self._generator.integers(min_value, max_value)

    def unsigned_integers(self, min_value: Optional[int] = None, max_value: Optional[int] = None) -> Iterator[int]:
        return self._generator.unsigned_integers(min_value, max_value)

    def bytes_stream(self, buffer: Any) -> Iterator[Any]:
        return self._generator.bytes_stream(buffer)

    def choice(self, items: Iterable[T]) -> T:
        return _choice(self._generator, items)

    def choices(self, items: Iterable[T]) -> Iterator[T]:
        return _choices(self._generator, items)

    # ---------------------------------------------------------------
    # Distribution instances
    # ---------------------------------------------------------------

    def distribution(self, kind: Union[DistributionKind, str]) -> AbstractDistribution:
        """
        Default-parameter instance of `kind`, bound to this generator.

        Built on first request and cached; later calls return the same
        object, so parameter changes made through it persist.
        """
        try:
            resolved = DistributionKind(kind)
        except ValueError:
            raise ArgumentError(UNKNOWN_DISTRIBUTION_KIND.format(kind=kind)) from None

        dist = self._distributions.get(resolved)
        if dist is None:
            dist = DISTRIBUTION_CLASSES[resolved](generator=self._generator)
            self._distributions[resolved] = dist
            logger.debug("Created %s bound to %s", type(dist).__name__, self._generator)
        return dist

    # ---------------------------------------------------------------
    # Draw helpers
    # ---------------------------------------------------------------

    def _draw(self, kind: DistributionKind, *params: Any) -> Any:
        if not registry.get_validator(kind)(*params):
            raise ArgumentOutOfRangeError(f"{INVALID_PARAMS} Got {kind.value}{params!r}.")
        value = registry.get_sampler(kind)(self._generator, *params)
        return int(value) if kind in DISCRETE_KINDS else float(value)

    def _samples(self, kind: DistributionKind, *params: Any) -> Iterator[Any]:
        while True:
            yield self._draw(kind, *params)

    @staticmethod
    def _category_weights(weights_or_count: Union[int, Sequence[float]]) -> Sequence[float]:
        if weights_or_count is None:
            raise NullArgumentError(NULL_WEIGHTS)
        if is_integer(weights_or_count):
            if weights_or_count <= 0:
                raise ArgumentOutOfRangeError(f"value_count must be positive, got {weights_or_count}.")
            return [1.0] * int(weights_or_count)
        if len(weights_or_count) == 0:
            raise ArgumentError(EMPTY_LIST)
        return weights_or_count

    def _categorical_table(self, weights_or_count: Union[int, Sequence[float]]) -> np.ndarray:
        weights = self._category_weights(weights_or_count)
        if not registry.get_validator(DistributionKind.CATEGORICAL)(weights):
            raise ArgumentOutOfRangeError(f"{INVALID_PARAMS} Got weights={list(weights)!r}.")
        return cumulative_weights(weights)

    # ---------------------------------------------------------------
    # Discrete convenience calls
    # ---------------------------------------------------------------

    def bernoulli(self, alpha: float = 0.5) -> int:
        return self._draw(DistributionKind.BERNOULLI, alpha)

    def bernoulli_samples(self, alpha: float = 0.5) -> Iterator[int]:
        return self._samples(DistributionKind.BERNOULLI, alpha)

    def binomial(self, alpha: float = 0.5, beta: int = 1) -> int:
        return self._draw(DistributionKind.BINOMIAL, alpha, beta)

    def binomial_samples(self, alpha: float = 0.5, beta: int = 1) -> Iterator[int]:
        return self._samples(DistributionKind.BINOMIAL, alpha, beta)

    def categorical(self, weights_or_count: Union[int, Sequence[float]] = 3) -> int:
        """Index drawn with probability proportional to its weight (an int means that many equal weights)."""
        cdf = self._categorical_table(weights_or_count)
        return int(registry.get_sampler(DistributionKind.CATEGORICAL)(self._generator, cdf))

    def categorical_samples(self, weights_or_count: Union[int, Sequence[float]] = 3) -> Iterator[int]:
        cdf = self._categorical_table(weights_or_count)
        while True:
            yield int(registry.get_sampler(DistributionKind.CATEGORICAL)(self._generator, cdf))

    def discrete_uniform(self, alpha: int = 0, beta: int = 1) -> int:
        return self._draw(DistributionKind.DISCRETE_UNIFORM, alpha, beta)

    def discrete_uniform_samples(self, alpha: int = 0, beta: int = 1) -> Iterator[int]:
        return self._samples(DistributionKind.DISCRETE_UNIFORM, alpha, beta)

    def geometric(self, alpha: float = 0.5) -> int:
        return self._draw(DistributionKind.GEOMETRIC, alpha)

    def geometric_samples(self, alpha: float = 0.5) -> Iterator[int]:
        return self._samples(DistributionKind.GEOMETRIC, alpha)

    def poisson(self, lambda_: float = 1.0) -> int:
        return self._draw(DistributionKind.POISSON, lambda_)

    def poisson_samples(self, lambda_: float = 1.0) -> Iterator[int]:
        return self._samples(DistributionKind.POISSON, lambda_)

    # ---------------------------------------------------------------
    # Continuous convenience calls
    # ---------------------------------------------------------------

    def beta(self, alpha: float = 1.0, beta: float = 1.0) -> float:
        return self._draw(DistributionKind.BETA, alpha, beta)

    def beta_samples(self, alpha: float = 1.0, beta: float = 1.0) -> Iterator[float]:
        return self._samples(DistributionKind.BETA, alpha, beta)

    def beta_prime(self, alpha: float = 2.0, beta: float = 2.0) -> float:
        return self._draw(DistributionKind.BETA_PRIME, alpha, beta)

    def beta_prime_samples(self, alpha: float = 2.0, beta: float = 2.0) -> Iterator[float]:
        return self._samples(DistributionKind.BETA_PRIME, alpha, beta)

    def cauchy(self, alpha: float = 1.0, gamma: float = 1.0) -> float:
        return self._draw(DistributionKind.CAUCHY, alpha, gamma)

    def cauchy_samples(self, alpha: float = 1.0, gamma: float = 1.0) -> Iterator[float]:
        return self._samples(DistributionKind.CAUCHY, alpha, gamma)

    def chi(self, alpha: int = 1) -> float:
        return self._draw(DistributionKind.CHI, alpha)

    def chi_samples(self, alpha: int = 1) -> Iterator[float]:
        return self._samples(DistributionKind.CHI, alpha)

    def chi_square(self, alpha: int = 1) -> float:
        return self._draw(DistributionKind.CHI_SQUARE, alpha)

    def chi_square_samples(self, alpha: int = 1) -> Iterator[float]:
        return self._samples(DistributionKind.CHI_SQUARE, alpha)

    def continuous_uniform(self, alpha: float = 0.0, beta: float = 1.0) -> float:
        return self._draw(DistributionKind.CONTINUOUS_UNIFORM, alpha, beta)

    def continuous_uniform_samples(self, alpha: float = 0.0, beta: float = 1.0) -> Iterator[float]:
        return self._samples(DistributionKind.CONTINUOUS_UNIFORM, alpha, beta)

    def erlang(self, alpha: int = 1, lambda_: float = 1.0) -> float:
        return self._draw(DistributionKind.ERLANG, alpha, lambda_)

    def erlang_samples(self, alpha: int = 1, lambda_: float = 1.0) -> Iterator[float]:
        return self._samples(DistributionKind.ERLANG, alpha, lambda_)

    def exponential(self, lambda_: float = 1.0) -> float:
        return self._draw(DistributionKind.EXPONENTIAL, lambda_)

    def exponential_samples(self, lambda_: float = 1.0) -> Iterator[float]:
        return self._samples(DistributionKind.EXPONENTIAL, lambda_)

    def fisher_snedecor(self, alpha: int = 1, beta: int = 1) -> float:
        return self._draw(DistributionKind.FISHER_SNEDECOR, alpha, beta)

    def fisher_snedecor_samples(self, alpha: int = 1, beta: int = 1) -> Iterator[float]:
        return self._samples(DistributionKind.FISHER_SNEDECOR, alpha, beta)

    def fisher_tippett(self, alpha: float = 1.0, mu: float = 0.0) -> float:
        return self._draw(DistributionKind.FISHER_TIPPETT, alpha, mu)

    def fisher_tippett_samples(self, alpha: float = 1.0, mu: float = 0.0) -> Iterator[float]:
        return self._samples(DistributionKind.FISHER_TIPPETT, alpha, mu)

    def gamma(self, alpha: float = 1.0, theta: float = 1.0) -> float:
        return self._draw(DistributionKind.GAMMA, alpha, theta)

    def gamma_samples(self, alpha: float = 1.0, theta: float = 1.0) -> Iterator[float]:
        return self._samples(DistributionKind.GAMMA, alpha, theta)

    def laplace(self, alpha: float = 1.0, mu: float = 0.0) -> float:
        return self._draw(DistributionKind.LAPLACE, alpha, mu)

    def laplace_samples(self, alpha: float = 1.0, mu: float = 0.0) -> Iterator[float]:
        return self._samples(DistributionKind.LAPLACE, alpha, mu)

    def logistic(self, mu: float = 0.0, sigma: float = 1.0) -> float:
        return self._draw(DistributionKind.LOGISTIC, mu, sigma)

    def logistic_samples(self, mu: float = 0.0, sigma: float = 1.0) -> Iterator[float]:
        return self._samples(DistributionKind.LOGISTIC, mu, sigma)

    def lognormal(self, mu: float = 1.0, sigma: float = 1.0) -> float:
        return self._draw(DistributionKind.LOGNORMAL, mu, sigma)

    def lognormal_samples(self, mu: float = 1.0, sigma: float = 1.0) -> Iterator[float]:
        return self._samples(DistributionKind.LOGNORMAL, mu, sigma)

    def normal(self, mu: float = 1.0, sigma: float = 1.0) -> float:
        return self._draw(DistributionKind.NORMAL, mu, sigma)

    def normal_samples(self, mu: float = 1.0, sigma: float = 1.0) -> Iterator[float]:
        return self._samples(DistributionKind.NORMAL, mu, sigma)

    def pareto(self, alpha: float = 1.0, beta: float = 1.0) -> float:
        return self._draw(DistributionKind.PARETO, alpha, beta)

    def pareto_samples(self, alpha: float = 1.0, beta: float = 1.0) -> Iterator[float]:
        return self._samples(DistributionKind.PARETO, alpha, beta)

    def power(self, alpha: float = 1.0, beta: float = 1.0) -> float:
        return self._draw(DistributionKind.POWER, alpha, beta)

    def power_samples(self, alpha: float = 1.0, beta: float = 1.0) -> Iterator[float]:
        return self._samples(DistributionKind.POWER, alpha, beta)

    def rayleigh(self, sigma: float = 1.0) -> float:
        return self._draw(DistributionKind.RAYLEIGH, sigma)

    def rayleigh_samples(self, sigma: float = 1.0) -> Iterator[float]:
        return self._samples(DistributionKind.RAYLEIGH, sigma)

    def students_t(self, nu: int = 1) -> float:
        return self._draw(DistributionKind.STUDENTS_T, nu)

    def students_t_samples(self, nu: int = 1) -> Iterator[float]:
        return self._samples(DistributionKind.STUDENTS_T, nu)

    def triangular(self, alpha: float = 0.0, beta: float = 1.0, gamma: float = 0.5) -> float:
        return self._draw(DistributionKind.TRIANGULAR, alpha, beta, gamma)

    def triangular_samples(self, alpha: float = 0.0, beta: float = 1.0, gamma: float = 0.5) -> Iterator[float]:
        return self._samples(DistributionKind.TRIANGULAR, alpha, beta, gamma)

    def weibull(self, alpha: float = 1.0, lambda_: float = 1.0) -> float:
        return self._draw(DistributionKind.WEIBULL, alpha, lambda_)

    def weibull_samples(self, alpha: float = 1.0, lambda_: float = 1.0) -> Iterator[float]:
        return self._samples(DistributionKind.WEIBULL, alpha, lambda_)

    # ---------------------------------------------------------------
    # Object members
    # ---------------------------------------------------------------

    def __str__(self) -> str:
        return f"Randomizer({self._generator})"

    def __repr__(self) -> str:
        return f"Randomizer(generator={self._generator!r})"
