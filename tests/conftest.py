# tests/conftest.py

"""
Shared fixtures.

Every test runs with the override registry restored to its canonical
samplers and validators afterwards, so an override made in one test can
never leak into another.
"""

from __future__ import annotations

import pytest

from seedstream.distributions import registry
from seedstream.utils.rng import GENERATORS, make_generator


@pytest.fixture(autouse=True)
def restore_registry():
    yield
    registry.restore_defaults()


@pytest.fixture(params=sorted(GENERATORS))
def generator_name(request) -> str:
    return request.param


@pytest.fixture
def generator_pair(generator_name):
    """Two independent generators of the same algorithm and seed."""
    return make_generator(generator_name, seed=42), make_generator(generator_name, seed=42)
