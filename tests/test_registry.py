# tests/test_registry.py

from __future__ import annotations

import math

import numpy as np
import pytest

from seedstream.core_types import DistributionKind
from seedstream.distributions import registry
from seedstream.distributions.continuous import ExponentialDistribution
from seedstream.distributions.discrete import CategoricalDistribution
from seedstream.distributions.gamma import BetaDistribution, BetaPrimeDistribution, ErlangDistribution
from seedstream.distributions.gaussian import (
    ChiDistribution,
    ChiSquareDistribution,
    FisherSnedecorDistribution,
    LognormalDistribution,
    NormalDistribution,
    StudentsTDistribution,
    sample_normal,
)
from seedstream.errors import ArgumentError, ArgumentOutOfRangeError, NullArgumentError
from seedstream.generators.xorshift128 import XorShift128Generator
from seedstream.randomizer import Randomizer


def shifted_normal(generator, mu, sigma):
    return generator.next_double() + mu + sigma + mu * sigma


def constant_normal(generator, mu, sigma):
    return 2.0


# ---------------------------------------------------------------
# Overrides reach every consumer
# ---------------------------------------------------------------


def test_override_applies_to_existing_instances_and_randomizer():
    dist = NormalDistribution(2.0, 3.0, seed=11)
    rnd = Randomizer(11)
    reference = XorShift128Generator(11)

    registry.set_sampler(DistributionKind.NORMAL, shifted_normal)

    for _ in range(20):
        expected = reference.next_double() + 2.0 + 3.0 + 6.0
        assert dist.next_double() == expected
    reference.reset()
    for _ in range(20):
        assert rnd.normal(2.0, 3.0) == reference.next_double() + 2.0 + 3.0 + 6.0


def test_restore_defaults_brings_back_the_canonical_algorithm():
    registry.set_sampler(DistributionKind.NORMAL, constant_normal)
    assert NormalDistribution(seed=3).next_double() == 2.0

    registry.restore_defaults()

    dist = NormalDistribution(0.0, 1.0, seed=3)
    reference = XorShift128Generator(3)
    assert dist.next_double() == sample_normal(reference, 0.0, 1.0)
    assert not registry.is_overridden(DistributionKind.NORMAL)


def test_restore_single_kind_leaves_others_overridden():
    registry.set_sampler(DistributionKind.NORMAL, constant_normal)
    registry.set_sampler(DistributionKind.EXPONENTIAL, lambda g, lam: -1.0)

    registry.restore_defaults(DistributionKind.NORMAL)

    assert not registry.is_overridden(DistributionKind.NORMAL)
    assert registry.is_overridden(DistributionKind.EXPONENTIAL)
    assert ExponentialDistribution(seed=1).next_double() == -1.0


def test_overridden_context_restores_previous_slots():
    registry.set_sampler(DistributionKind.NORMAL, shifted_normal)

    with registry.overridden(DistributionKind.NORMAL, sampler=constant_normal) as kind:
        assert kind is DistributionKind.NORMAL
        assert NormalDistribution(seed=1).next_double() == 2.0

    assert registry.get_sampler(DistributionKind.NORMAL) is shifted_normal


def test_overridden_context_restores_on_error():
    with pytest.raises(RuntimeError):
        with registry.overridden("normal", sampler=constant_normal):
            raise RuntimeError("boom")
    assert not registry.is_overridden(DistributionKind.NORMAL)


# ---------------------------------------------------------------
# Composite laws draw through the active slots
# ---------------------------------------------------------------


@pytest.mark.parametrize(
    "dist,expected",
    [
        (ChiSquareDistribution(3, seed=1), 12.0),
        (LognormalDistribution(0.0, 1.0, seed=1), math.exp(2.0)),
        (ChiDistribution(4, seed=1), 4.0),
        (StudentsTDistribution(1, seed=1), 1.0),
        (FisherSnedecorDistribution(2, 3, seed=1), 1.0),
    ],
)
def test_normal_override_propagates_to_derived_laws(dist, expected):
    registry.set_sampler(DistributionKind.NORMAL, constant_normal)
    assert dist.next_double() == pytest.approx(expected)


def test_gamma_override_propagates_to_beta_and_beta_prime():
    registry.set_sampler(DistributionKind.GAMMA, lambda g, alpha, theta: alpha * theta)
    assert BetaDistribution(2.0, 3.0, seed=1).next_double() == pytest.approx(0.4)
    assert BetaPrimeDistribution(2.0, 3.0, seed=1).next_double() == pytest.approx(0.4 / 0.6)


def test_erlang_ignores_normal_override():
    registry.set_sampler(DistributionKind.NORMAL, constant_normal)
    dist = ErlangDistribution(3, 1.0, seed=1)
    samples = {dist.next_double() for _ in range(50)}
    assert len(samples) > 1


def test_categorical_sampler_receives_cumulative_table():
    seen = []

    def record(generator, cdf):
        seen.append(np.asarray(cdf).tolist())
        return 0

    registry.set_sampler(DistributionKind.CATEGORICAL, record)
    CategoricalDistribution([1, 2, 3], seed=1).next()
    Randomizer(1).categorical([1, 2, 3])

    assert seen == [[1.0, 3.0, 6.0], [1.0, 3.0, 6.0]]


# ---------------------------------------------------------------
# Validators
# ---------------------------------------------------------------


def test_validator_override_relaxes_checks():
    with pytest.raises(ArgumentOutOfRangeError):
        NormalDistribution(0.0, -1.0)

    registry.set_validator(DistributionKind.NORMAL, lambda mu, sigma: True)
    dist = NormalDistribution(0.0, -1.0, seed=1)
    assert dist.sigma == -1.0
    assert Randomizer(1).normal(0.0, -1.0) == pytest.approx(-Randomizer(1).normal(0.0, 1.0))


def test_validator_override_tightens_checks_on_existing_instances():
    dist = NormalDistribution(0.0, 1.0, seed=1)
    registry.set_validator(DistributionKind.NORMAL, lambda mu, sigma: sigma >= 10.0)

    assert not dist.is_valid_sigma(5.0)
    with pytest.raises(ArgumentOutOfRangeError):
        dist.sigma = 5.0
    dist.sigma = 10.0
    assert dist.sigma == 10.0


# ---------------------------------------------------------------
# Registry errors and lookups
# ---------------------------------------------------------------


@pytest.mark.parametrize("kind", list(DistributionKind))
def test_every_kind_has_default_slots(kind):
    assert callable(registry.get_sampler(kind))
    assert callable(registry.get_validator(kind))
    assert not registry.is_overridden(kind)


def test_kind_may_be_given_by_value():
    assert registry.get_sampler("normal") is registry.get_sampler(DistributionKind.NORMAL)


def test_unknown_kind_is_rejected():
    with pytest.raises(ArgumentError):
        registry.get_sampler("zipf")
    with pytest.raises(ArgumentError):
        registry.set_sampler("zipf", constant_normal)


def test_none_strategy_is_rejected():
    with pytest.raises(NullArgumentError):
        registry.set_sampler(DistributionKind.NORMAL, None)
    with pytest.raises(NullArgumentError):
        registry.set_validator(DistributionKind.NORMAL, None)
    assert not registry.is_overridden(DistributionKind.NORMAL)


def test_reregistering_defaults_keeps_active_override():
    from seedstream.distributions.gaussian import normal_params_valid

    registry.set_sampler(DistributionKind.NORMAL, constant_normal)
    registry.register_defaults(DistributionKind.NORMAL, normal_params_valid, sample_normal)
    assert registry.get_sampler(DistributionKind.NORMAL) is constant_normal
