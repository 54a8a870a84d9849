# seedstream/errors.py

"""
Exception types and message texts shared by generators, distributions
and the Randomizer facade.

Every exception derives from SeedstreamError and from the built-in that
best matches its meaning, so callers can catch either:

    ArgumentError              (ValueError)  parameter outside its domain
      ArgumentOutOfRangeError                numeric bound / parameter range
      NullArgumentError        (TypeError)   a required object is None
    InvalidOperationError      (IndexError)  operation on an empty source
    UnsupportedStatisticError  (ArithmeticError)
                                             statistic undefined for the
                                             current parameters
"""

from __future__ import annotations


# -------------------------------------------------------------------
# Messages
# -------------------------------------------------------------------

EMPTY_LIST = "List must not be empty."
INVALID_PARAMS = "Given parameter (or parameters) are not valid."
MIN_VALUE_GREATER_THAN_MAX_VALUE = "max_value should be greater than or equal to min_value."
NEGATIVE_MAX_VALUE = "max_value must be greater than or equal to zero."
INFINITE_MAX_VALUE = "max_value must be finite."
INFINITE_MAX_VALUE_MINUS_MIN_VALUE = "Bounds must be finite, and so must max_value minus min_value."
SEED_OUT_OF_RANGE = "Seed must fit in an unsigned 32-bit integer."
GENERATOR_AND_SEED = "Pass either a generator or a seed, not both."
SEED_AND_SEED_ARRAY = "Pass either a seed or a seed array, not both."
NULL_BUFFER = "Buffer must not be None."
NULL_DISTRIBUTION = "Distribution must not be None."
NULL_GENERATOR = "Generator must not be None."
NULL_LIST = "List must not be None."
NULL_STRATEGY = "Strategy must not be None."
NULL_WEIGHTS = "Weights collection must not be None."
UNDEFINED_MEAN = "Mean is undefined for given distribution."
UNDEFINED_MEAN_FOR_PARAMS = "Mean is undefined for given distribution under given parameters."
UNDEFINED_MEDIAN = "Median is undefined for given distribution."
UNDEFINED_MODE = "Mode is undefined for given distribution."
UNDEFINED_MODE_FOR_PARAMS = "Mode is undefined for given distribution under given parameters."
UNDEFINED_VARIANCE = "Variance is undefined for given distribution."
UNDEFINED_VARIANCE_FOR_PARAMS = "Variance is undefined for given distribution under given parameters."
UNKNOWN_DISTRIBUTION_KIND = "Unknown distribution kind: {kind!r}."
UNKNOWN_GENERATOR = "Unknown generator name: {name!r}. Available: {available}."


# -------------------------------------------------------------------
# Exception hierarchy
# -------------------------------------------------------------------


class SeedstreamError(Exception):
    """Base class for all errors raised by seedstream."""


class ArgumentError(SeedstreamError, ValueError):
    """An argument is not acceptable (e.g. a non-finite bound)."""


class ArgumentOutOfRangeError(ArgumentError):
    """An argument lies outside its documented domain."""


class NullArgumentError(ArgumentError, TypeError):
    """A required argument is None."""


class InvalidOperationError(SeedstreamError, IndexError):
    """The operation needs a non-empty source."""


class UnsupportedStatisticError(SeedstreamError, ArithmeticError):
    """The statistic is undefined for the current parameters."""
