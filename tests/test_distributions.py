# tests/test_distributions.py

from __future__ import annotations

import math
from collections import Counter
from itertools import islice

import numpy as np
import pytest

from seedstream.config import INT_MIN
from seedstream.core_types import DistributionKind
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
    ArgumentError,
    ArgumentOutOfRangeError,
    NullArgumentError,
    UnsupportedStatisticError,
)
from seedstream.generators.mt19937 import MT19937Generator
from seedstream.generators.xorshift128 import XorShift128Generator


# ---------------------------------------------------------------
# Closed-form statistics
# ---------------------------------------------------------------


@pytest.mark.parametrize("alpha", [0.0, 0.1, 0.5, 0.75, 1.0])
def test_bernoulli_mean_and_variance(alpha):
    dist = BernoulliDistribution(alpha, seed=1)
    assert dist.mean == alpha
    assert dist.variance == pytest.approx(alpha * (1.0 - alpha))


@pytest.mark.parametrize("alpha,expected", [(0.2, (0.0,)), (0.8, (1.0,)), (0.5, (0.0, 1.0))])
def test_bernoulli_mode(alpha, expected):
    assert BernoulliDistribution(alpha, seed=1).mode == expected


@pytest.mark.parametrize("a,b", [(0.0, 1.0), (-3.0, 5.0), (2.5, 2.5)])
def test_continuous_uniform_mean(a, b):
    assert ContinuousUniformDistribution(a, b, seed=1).mean == (a + b) / 2


def test_normal_statistics():
    dist = NormalDistribution(2.0, 3.0, seed=1)
    assert (dist.mean, dist.median, dist.variance, dist.mode) == (2.0, 2.0, 9.0, (2.0,))


def test_exponential_median():
    assert ExponentialDistribution(2.0, seed=1).median == pytest.approx(math.log(2.0) / 2.0)


@pytest.mark.parametrize("lam,expected", [(3.0, (2.0, 3.0)), (2.5, (2.0,))])
def test_poisson_mode(lam, expected):
    assert PoissonDistribution(lam, seed=1).mode == expected


def test_categorical_statistics_are_over_zero_based_indices():
    dist = CategoricalDistribution([1, 2, 3, 4], seed=1)
    assert dist.minimum == 0.0
    assert dist.maximum == 3.0
    assert dist.mean == pytest.approx(2.0)
    assert dist.median == 2.0
    assert dist.variance == pytest.approx(1.0)
    assert dist.mode == (3.0,)


def test_categorical_mode_lists_every_maximum():
    assert CategoricalDistribution([2, 1, 2], seed=1).mode == (0.0, 2.0)


def test_triangular_median_on_both_sides_of_the_midpoint():
    right = TriangularDistribution(0.0, 4.0, 3.0, seed=1)
    left = TriangularDistribution(0.0, 4.0, 1.0, seed=1)
    assert right.median == pytest.approx(math.sqrt(6.0))
    assert left.median == pytest.approx(4.0 - math.sqrt(6.0))


def test_chi_variance_uses_its_mean():
    dist = ChiDistribution(3, seed=1)
    assert dist.mean == pytest.approx(2.0 * math.sqrt(2.0 / math.pi))
    assert dist.variance == pytest.approx(3.0 - dist.mean**2)


@pytest.mark.parametrize("beta", [1, 5, 30])
def test_binomial_mode_stays_inside_the_support_when_alpha_is_one(beta):
    dist = BinomialDistribution(1.0, beta, seed=1)
    assert dist.mode == (float(beta),)
    assert dist.next() == beta


def test_weibull_mode_for_shapes_of_at_least_one():
    assert WeibullDistribution(1.0, 2.0, seed=1).mode == (0.0,)
    assert WeibullDistribution(2.0, 1.0, seed=1).mode[0] == pytest.approx(math.sqrt(0.5))


@pytest.mark.parametrize(
    "dist,stat",
    [
        (BernoulliDistribution(seed=1), "median"),
        (BinomialDistribution(seed=1), "median"),
        (CauchyDistribution(seed=1), "mean"),
        (CauchyDistribution(seed=1), "variance"),
        (DiscreteUniformDistribution(seed=1), "mode"),
        (ContinuousUniformDistribution(seed=1), "mode"),
        (ParetoDistribution(1.0, 1.0, seed=1), "mean"),
        (ParetoDistribution(1.0, 2.0, seed=1), "variance"),
        (StudentsTDistribution(1, seed=1), "mean"),
        (StudentsTDistribution(2, seed=1), "variance"),
        (ChiSquareDistribution(1, seed=1), "mode"),
        (GammaDistribution(0.5, 1.0, seed=1), "mode"),
        (PowerDistribution(1.0, 1.0, seed=1), "mode"),
        (BetaDistribution(1.0, 1.0, seed=1), "mode"),
        (FisherSnedecorDistribution(2, 4, seed=1), "variance"),
        (WeibullDistribution(0.5, 1.0, seed=1), "mode"),
    ],
)
def test_undefined_statistics_raise(dist, stat):
    with pytest.raises(UnsupportedStatisticError):
        getattr(dist, stat)


def test_undefined_statistics_are_arithmetic_errors():
    with pytest.raises(ArithmeticError):
        CauchyDistribution(seed=1).mean


def test_summary_reports_undefined_statistics_as_none():
    summary = CauchyDistribution(0.0, 2.0, seed=1).summary()
    assert summary.kind is DistributionKind.CAUCHY
    assert summary.mean is None
    assert summary.variance is None
    assert summary.median == 0.0
    assert summary.mode == (0.0,)
    assert (summary.minimum, summary.maximum) == (-math.inf, math.inf)


# ---------------------------------------------------------------
# Construction and parameter validation
# ---------------------------------------------------------------


def test_generator_and_seed_are_mutually_exclusive():
    with pytest.raises(ArgumentError):
        NormalDistribution(generator=XorShift128Generator(1), seed=1)


def test_default_generator_is_xorshift128():
    dist = NormalDistribution(seed=5)
    assert isinstance(dist.generator, XorShift128Generator)
    assert dist.generator.seed == 5


def test_borrowed_generator_is_shared():
    gen = MT19937Generator(3)
    a = NormalDistribution(generator=gen)
    b = ExponentialDistribution(generator=gen)
    assert a.generator is gen and b.generator is gen


@pytest.mark.parametrize(
    "factory",
    [
        lambda: BernoulliDistribution(1.5),
        lambda: BinomialDistribution(0.5, -1),
        lambda: BinomialDistribution(0.5, 2.5),
        lambda: DiscreteUniformDistribution(5, 1),
        lambda: DiscreteUniformDistribution(0, 2**31 - 1),
        lambda: DiscreteUniformDistribution(-(2**40), 0),
        lambda: DiscreteUniformDistribution(INT_MIN - 1, 0),
        lambda: GeometricDistribution(0.0),
        lambda: PoissonDistribution(0.0),
        lambda: NormalDistribution(0.0, 0.0),
        lambda: NormalDistribution(math.nan, 1.0),
        lambda: LognormalDistribution(0.0, -1.0),
        lambda: LogisticDistribution(0.0, 0.0),
        lambda: CauchyDistribution(0.0, -1.0),
        lambda: ContinuousUniformDistribution(2.0, 1.0),
        lambda: ContinuousUniformDistribution(0.0, math.inf),
        lambda: TriangularDistribution(0.0, 1.0, 2.0),
        lambda: TriangularDistribution(1.0, 1.0, 1.0),
        lambda: BetaPrimeDistribution(1.0, 2.0),
        lambda: ChiDistribution(0),
        lambda: ErlangDistribution(1.5, 1.0),
        lambda: StudentsTDistribution(0),
        lambda: CategoricalDistribution([1.0, -1.0]),
        lambda: CategoricalDistribution([0.0, 0.0]),
        lambda: CategoricalDistribution([1.0, math.nan]),
        lambda: CategoricalDistribution(value_count=0),
    ],
)
def test_invalid_parameters_are_rejected_at_construction(factory):
    with pytest.raises(ArgumentOutOfRangeError):
        factory()


def test_setter_validates_before_assigning():
    dist = NormalDistribution(0.0, 2.0, seed=1)
    with pytest.raises(ArgumentOutOfRangeError):
        dist.sigma = -1.0
    assert dist.sigma == 2.0

    dist.sigma = 0.5
    assert dist.sigma == 0.5


def test_setter_checks_against_the_other_current_parameters():
    dist = DiscreteUniformDistribution(0, 10, seed=1)
    assert dist.is_valid_alpha(10)
    assert not dist.is_valid_alpha(11)
    with pytest.raises(ArgumentOutOfRangeError):
        dist.alpha = 11
    assert dist.alpha == 0


def test_logistic_accepts_negative_sigma():
    dist = LogisticDistribution(0.0, -2.0, seed=1)
    assert dist.variance == pytest.approx(4.0 * math.pi**2 / 3.0)


def test_categorical_weight_errors():
    dist = CategoricalDistribution([1, 2, 3], seed=1)
    with pytest.raises(NullArgumentError):
        dist.weights = None
    with pytest.raises(ArgumentError):
        dist.weights = []
    with pytest.raises(ArgumentOutOfRangeError):
        dist.weights = [1.0, -2.0]
    assert dist.weights == [1.0, 2.0, 3.0]

    with pytest.raises(ArgumentError):
        CategoricalDistribution([1, 2], value_count=2)


def test_categorical_default_has_three_equal_weights():
    assert CategoricalDistribution(seed=1).weights == [1.0, 1.0, 1.0]
    assert CategoricalDistribution(value_count=5, seed=1).weights == [1.0] * 5


def test_categorical_weight_change_rebuilds_table():
    dist = CategoricalDistribution([1.0, 1.0], seed=4)
    dist.weights = [0.0, 0.0, 1.0]
    assert all(dist.next() == 2 for _ in range(200))


# ---------------------------------------------------------------
# Sampling
# ---------------------------------------------------------------


def test_categorical_equal_weights_are_uniform():
    dist = CategoricalDistribution([1, 1, 1, 1, 1, 1], seed=17)
    n = 60_000
    counts = Counter(islice(dist.distributed_integers(), n))
    for index in range(6):
        assert counts[index] / n == pytest.approx(1 / 6, abs=0.01)


def test_categorical_never_picks_zero_weights():
    dist = CategoricalDistribution([1.0, 0.0, 2.0, 0.0], seed=2)
    seen = {dist.next() for _ in range(5000)}
    assert seen == {0, 2}


def test_discrete_next_double_is_the_same_draw():
    a = PoissonDistribution(4.0, seed=12)
    b = PoissonDistribution(4.0, seed=12)
    for _ in range(100):
        assert a.next_double() == float(b.next())


def test_distributed_sequences_match_scalar_calls():
    a = GammaDistribution(2.5, 1.0, seed=3)
    b = GammaDistribution(2.5, 1.0, seed=3)
    assert list(islice(a.distributed_doubles(), 50)) == [b.next_double() for _ in range(50)]

    c = BinomialDistribution(0.3, 8, seed=3)
    d = BinomialDistribution(0.3, 8, seed=3)
    assert list(islice(c.distributed_integers(), 50)) == [d.next() for _ in range(50)]


def test_reset_delegates_to_generator():
    dist = WeibullDistribution(2.0, 1.0, seed=8)
    first = [dist.next_double() for _ in range(20)]
    assert dist.can_reset
    assert dist.reset() is True
    assert [dist.next_double() for _ in range(20)] == first


@pytest.mark.parametrize(
    "dist",
    [
        BernoulliDistribution(0.3, seed=1),
        BinomialDistribution(0.4, 6, seed=1),
        DiscreteUniformDistribution(-3, 3, seed=1),
        BetaDistribution(0.5, 0.5, seed=1),
        ContinuousUniformDistribution(-1.0, 1.0, seed=1),
        PowerDistribution(2.0, 4.0, seed=1),
        TriangularDistribution(1.0, 2.0, 1.5, seed=1),
        ParetoDistribution(2.0, 3.0, seed=1),
        RayleighDistribution(1.0, seed=1),
        GeometricDistribution(0.3, seed=1),
    ],
)
def test_samples_stay_within_support(dist):
    for _ in range(2000):
        x = dist.next_double()
        assert dist.minimum <= x <= dist.maximum


@pytest.mark.parametrize(
    "dist,n",
    [
        (BernoulliDistribution(0.3, seed=1), 20_000),
        (BinomialDistribution(0.3, 10, seed=2), 10_000),
        (DiscreteUniformDistribution(1, 6, seed=3), 20_000),
        (GeometricDistribution(0.25, seed=4), 20_000),
        (PoissonDistribution(3.0, seed=5), 20_000),
        (PoissonDistribution(800.0, seed=6), 1_000),
        (BetaDistribution(2.0, 3.0, seed=7), 10_000),
        (BetaPrimeDistribution(3.0, 6.0, seed=8), 10_000),
        (ChiDistribution(3, seed=9), 10_000),
        (ChiSquareDistribution(4, seed=10), 10_000),
        (ContinuousUniformDistribution(2.0, 6.0, seed=11), 20_000),
        (ErlangDistribution(3, 2.0, seed=12), 10_000),
        (ExponentialDistribution(2.0, seed=13), 20_000),
        (FisherSnedecorDistribution(5, 10, seed=14), 10_000),
        (FisherTippettDistribution(1.0, 0.0, seed=15), 20_000),
        (GammaDistribution(2.5, 2.0, seed=16), 10_000),
        (GammaDistribution(3.0, 1.0, seed=17), 10_000),
        (GammaDistribution(0.4, 1.0, seed=18), 10_000),
        (LaplaceDistribution(1.0, 2.0, seed=19), 20_000),
        (LogisticDistribution(1.0, 2.0, seed=20), 20_000),
        (LognormalDistribution(0.0, 0.5, seed=21), 20_000),
        (NormalDistribution(0.0, 1.0, seed=22), 20_000),
        (ParetoDistribution(1.0, 5.0, seed=23), 20_000),
        (PowerDistribution(2.0, 1.0, seed=24), 20_000),
        (RayleighDistribution(2.0, seed=25), 20_000),
        (StudentsTDistribution(5, seed=26), 10_000),
        (TriangularDistribution(0.0, 4.0, 1.0, seed=27), 20_000),
        (WeibullDistribution(2.0, 1.0, seed=28), 20_000),
    ],
    ids=lambda value: type(value).__name__ if not isinstance(value, int) else str(value),
)
def test_empirical_mean_matches_closed_form(dist, n):
    samples = np.fromiter((dist.next_double() for _ in range(n)), dtype=float, count=n)
    tolerance = 5.0 * math.sqrt(dist.variance / n)
    assert samples.mean() == pytest.approx(dist.mean, abs=tolerance)


def test_normal_empirical_variance():
    dist = NormalDistribution(1.0, 2.0, seed=99)
    samples = np.array([dist.next_double() for _ in range(20_000)])
    assert samples.var() == pytest.approx(4.0, rel=0.05)


def test_cauchy_empirical_median():
    dist = CauchyDistribution(3.0, 1.0, seed=5)
    samples = np.array([dist.next_double() for _ in range(20_000)])
    assert np.median(samples) == pytest.approx(3.0, abs=0.05)


# ---------------------------------------------------------------
# Extreme but valid parameters
# ---------------------------------------------------------------


@pytest.mark.parametrize(
    "dist",
    [
        ParetoDistribution(1.0, 0.001, seed=1),
        WeibullDistribution(0.001, 1.0, seed=1),
        LognormalDistribution(709.0, 1.0, seed=1),
        LognormalDistribution(-745.0, 1.0, seed=1),
    ],
    ids=["pareto", "weibull", "lognormal-high", "lognormal-low"],
)
def test_extreme_shapes_draw_without_raising(dist):
    for _ in range(500):
        x = dist.next_double()
        assert not math.isnan(x)
        assert dist.minimum <= x <= dist.maximum


def test_pareto_tiny_shape_saturates_to_infinity():
    dist = ParetoDistribution(1.0, 0.001, seed=1)
    samples = [dist.next_double() for _ in range(200)]
    assert math.inf in samples
    assert ParetoDistribution(1.0, 1e-4).median == math.inf


def test_weibull_tiny_shape_statistics_are_infinite():
    dist = WeibullDistribution(0.001, 1.0)
    assert dist.mean == math.inf
    assert dist.variance == math.inf


def test_lognormal_huge_location_statistics_are_infinite():
    dist = LognormalDistribution(709.0, 1.0)
    assert dist.mean == math.inf
    assert dist.median == pytest.approx(math.exp(709.0))
    assert dist.variance == math.inf
    assert LognormalDistribution(710.0, 1.0).median == math.inf


@pytest.mark.parametrize(
    "dist",
    [
        ExponentialDistribution(1e-200),
        GeometricDistribution(1e-200),
        GammaDistribution(1.0, 1e200),
        NormalDistribution(0.0, 1e200),
        LaplaceDistribution(1e200, 0.0),
        RayleighDistribution(1e200),
        ContinuousUniformDistribution(-1e200, 1e200),
        ParetoDistribution(1e200, 3.0),
    ],
    ids=lambda value: type(value).__name__,
)
def test_variance_overflows_to_infinity(dist):
    assert dist.variance == math.inf


def test_discrete_uniform_at_the_lower_int_limit():
    dist = DiscreteUniformDistribution(INT_MIN, 0, seed=1)
    for _ in range(1000):
        assert INT_MIN <= dist.next() <= 0
