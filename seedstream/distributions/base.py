# seedstream/distributions/base.py

"""
Common shape of every distribution.

A distribution is three things:

    - a *borrowed* generator (never owned, never closed),
    - a parameter set, validated as a whole on construction and on every
      single-parameter assignment (reject before assign),
    - closed-form statistics recomputed from the current parameters.

Neither the sampling algorithm nor the validity predicate is stored on
the instance: both are fetched from distributions.registry at call time
using the class's `kind`, so an override installed later still applies
to instances built earlier.

Subclasses declare:

    kind = DistributionKind.X
    parameters = ("alpha", "beta")
    alpha = Parameter()
    beta = Parameter()

and implement the statistics properties. `is_valid_<param>` methods are
generated for every declared parameter.
"""

from __future__ import annotations

import numbers
from abc import ABC, abstractmethod
from typing import Any, Callable, ClassVar, Iterator, Optional, Tuple

from seedstream.core_types import DistributionKind, DistributionSummary, Mode
from seedstream.distributions import registry
from seedstream.errors import (
    GENERATOR_AND_SEED,
    INVALID_PARAMS,
    ArgumentError,
    ArgumentOutOfRangeError,
    UnsupportedStatisticError,
)
from seedstream.generators.base import AbstractGenerator
from seedstream.generators.xorshift128 import XorShift128Generator


# -------------------------------------------------------------------
# Helpers shared by the sampler modules
# -------------------------------------------------------------------


def next_open_double(generator: AbstractGenerator) -> float:
    """Uniform double in the open interval (0, 1)."""
    while True:
        u = generator.next_double()
        if u != 0.0:
            return u


def is_integer(value: Any) -> bool:
    """True for ints (numpy ints included), False for bools and floats."""
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


# -------------------------------------------------------------------
# Parameters
# -------------------------------------------------------------------


class Parameter:
    """
    Validated distribution parameter.

    Assignment checks the kind's validity predicate with the new value
    substituted into the current parameter set, and raises
    ArgumentOutOfRangeError without touching the instance if it fails.
    """

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name
        self.attr = f"_{name}"

    def __get__(self, obj: Any, objtype: Optional[type] = None) -> Any:
        if obj is None:
            return self
        return getattr(obj, self.attr)

    def __set__(self, obj: "AbstractDistribution", value: Any) -> None:
        if not obj.is_valid_parameter(self.name, value):
            raise ArgumentOutOfRangeError(f"{INVALID_PARAMS} Got {self.name}={value!r}.")
        setattr(obj, self.attr, value)


def _validity_check(name: str) -> Callable[["AbstractDistribution", Any], bool]:
    def check(self: "AbstractDistribution", value: Any) -> bool:
        return self.is_valid_parameter(name, value)

    check.__name__ = f"is_valid_{name}"
    check.__doc__ = f"True if `{name}` may be set to `value` given the other current parameters."
    return check


# -------------------------------------------------------------------
# Base classes
# -------------------------------------------------------------------


class AbstractDistribution(ABC):
    """Base class of all distributions."""

    kind: ClassVar[DistributionKind]
    parameters: ClassVar[Tuple[str, ...]] = ()

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        for name in cls.__dict__.get("parameters", ()):
            method = f"is_valid_{name}"
            if method not in cls.__dict__:
                setattr(cls, method, _validity_check(name))

    def __init__(
        self,
        *,
        generator: Optional[AbstractGenerator] = None,
        seed: Optional[int] = None,
    ) -> None:
        if generator is not None and seed is not None:
            raise ArgumentError(GENERATOR_AND_SEED)
        self._generator = generator if generator is not None else XorShift128Generator(seed)

    # ---------------------------------------------------------------
    # Parameters
    # ---------------------------------------------------------------

    @classmethod
    def are_valid_params(cls, *values: Any) -> bool:
        """Evaluate the active validity predicate of this kind."""
        return bool(registry.get_validator(cls.kind)(*values))

    def is_valid_parameter(self, name: str, value: Any) -> bool:
        values = [value if p == name else getattr(self, p) for p in self.parameters]
        return self.are_valid_params(*values)

    def _assign(self, **values: Any) -> None:
        """Validate a full parameter set, then store it."""
        ordered = [values[p] for p in self.parameters]
        if not self.are_valid_params(*ordered):
            detail = ", ".join(f"{p}={values[p]!r}" for p in self.parameters)
            raise ArgumentOutOfRangeError(f"{INVALID_PARAMS} Got {detail}.")
        for p in self.parameters:
            setattr(self, f"_{p}", values[p])

    def _sampler_args(self) -> Tuple[Any, ...]:
        return tuple(getattr(self, p) for p in self.parameters)

    def _sample(self) -> Any:
        return registry.get_sampler(self.kind)(self._generator, *self._sampler_args())

    # ---------------------------------------------------------------
    # Generator
    # ---------------------------------------------------------------

    @property
    def generator(self) -> AbstractGenerator:
        return self._generator

    @property
    def can_reset(self) -> bool:
        return self._generator.can_reset

    def reset(self) -> bool:
        """Reset the borrowed generator to its seed."""
        return self._generator.reset()

    # ---------------------------------------------------------------
    # Statistics
    # ---------------------------------------------------------------

    @property
    @abstractmethod
    def minimum(self) -> float:
        ...

    @property
    @abstractmethod
    def maximum(self) -> float:
        ...

    @property
    @abstractmethod
    def mean(self) -> float:
        ...

    @property
    @abstractmethod
    def median(self) -> float:
        ...

    @property
    @abstractmethod
    def variance(self) -> float:
        ...

    @property
    @abstractmethod
    def mode(self) -> Mode:
        ...

    def summary(self) -> DistributionSummary:
        """Snapshot of every statistic; undefined ones become None."""

        def safe(stat: str) -> Any:
            try:
                return getattr(self, stat)
            except UnsupportedStatisticError:
                return None

        return DistributionSummary(
            kind=self.kind,
            minimum=self.minimum,
            maximum=self.maximum,
            mean=safe("mean"),
            median=safe("median"),
            variance=safe("variance"),
            mode=safe("mode"),
        )

    def __repr__(self) -> str:
        params = ", ".join(f"{p}={getattr(self, p)!r}" for p in self.parameters)
        return f"{type(self).__name__}({params})"


class DiscreteDistribution(AbstractDistribution):
    """Distributions over integers."""

    def next(self) -> int:
        return int(self._sample())

    def next_double(self) -> float:
        """The same draw as `next()`, as a float."""
        return float(self.next())

    def distributed_integers(self) -> Iterator[int]:
        while True:
            yield self.next()


class ContinuousDistribution(AbstractDistribution):
    """Distributions over the reals."""

    def next_double(self) -> float:
        return float(self._sample())

    def distributed_doubles(self) -> Iterator[float]:
        while True:
            yield self.next_double()
