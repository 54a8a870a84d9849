# seedstream/distributions/registry.py

"""
Process-wide override registry for distribution sampling algorithms.

Every distribution kind owns two slots:

    - sampler(generator, *params) -> sample
    - validator(*params) -> bool

The distribution modules register their canonical pair with
`register_defaults` when they are imported. Distribution instances and
the Randomizer facade look both slots up *at draw time*, so replacing a
slot changes the behaviour of every existing and future instance of
that kind at once.

Because the slots are global, two callers sharing a process observe each
other's overrides. Pair every `set_sampler` / `set_validator` with a
`restore_defaults`, or use the `overridden(...)` context manager:

    with registry.overridden(DistributionKind.NORMAL, sampler=my_normal):
        ...  # every Normal draw goes through my_normal here
"""

from __future__ import annotations

import importlib
from contextlib import contextmanager
from typing import Dict, Iterator, Optional, Tuple, Union

from seedstream.core_types import DistributionKind, Sampler, Validator
from seedstream.errors import NULL_STRATEGY, UNKNOWN_DISTRIBUTION_KIND, ArgumentError, NullArgumentError
from seedstream.utils.logging_utils import get_logger


logger = get_logger(__name__)

KindLike = Union[DistributionKind, str]

# Modules whose import registers the built-in catalogue.
_CATALOGUE_MODULES = (
    "seedstream.distributions.discrete",
    "seedstream.distributions.continuous",
    "seedstream.distributions.gaussian",
    "seedstream.distributions.gamma",
)

_defaults: Dict[DistributionKind, Tuple[Validator, Sampler]] = {}
_samplers: Dict[DistributionKind, Sampler] = {}
_validators: Dict[DistributionKind, Validator] = {}


# -------------------------------------------------------------------
# Internal helpers
# -------------------------------------------------------------------


def _load_catalogue() -> None:
    for module_name in _CATALOGUE_MODULES:
        importlib.import_module(module_name)


def _resolve(kind: KindLike) -> DistributionKind:
    """Map `kind` to a registered DistributionKind or raise ArgumentError."""
    try:
        resolved = DistributionKind(kind)
    except ValueError:
        raise ArgumentError(UNKNOWN_DISTRIBUTION_KIND.format(kind=kind)) from None

    if resolved not in _defaults:
        _load_catalogue()
    if resolved not in _defaults:
        raise ArgumentError(UNKNOWN_DISTRIBUTION_KIND.format(kind=kind))
    return resolved


# -------------------------------------------------------------------
# Public API
# -------------------------------------------------------------------


def register_defaults(kind: DistributionKind, validator: Validator, sampler: Sampler) -> None:
    """
    Install the canonical validator and sampler of `kind`.

    Called once per kind by the module defining it. Active slots are
    only initialized if empty, so re-importing never drops an override.
    """
    if validator is None or sampler is None:
        raise NullArgumentError(NULL_STRATEGY)

    kind = DistributionKind(kind)
    _defaults[kind] = (validator, sampler)
    _validators.setdefault(kind, validator)
    _samplers.setdefault(kind, sampler)


def get_sampler(kind: KindLike) -> Sampler:
    return _samplers[_resolve(kind)]


def set_sampler(kind: KindLike, sampler: Sampler) -> None:
    """Replace the active sampling algorithm of `kind`."""
    if sampler is None:
        raise NullArgumentError(NULL_STRATEGY)
    resolved = _resolve(kind)
    _samplers[resolved] = sampler
    logger.info("Sampler for %s replaced by %r", resolved.value, sampler)


def get_validator(kind: KindLike) -> Validator:
    return _validators[_resolve(kind)]


def set_validator(kind: KindLike, validator: Validator) -> None:
    """Replace the active parameter validity predicate of `kind`."""
    if validator is None:
        raise NullArgumentError(NULL_STRATEGY)
    resolved = _resolve(kind)
    _validators[resolved] = validator
    logger.info("Validator for %s replaced by %r", resolved.value, validator)


def is_overridden(kind: KindLike) -> bool:
    resolved = _resolve(kind)
    validator, sampler = _defaults[resolved]
    return _validators[resolved] is not validator or _samplers[resolved] is not sampler


def restore_defaults(kind: Optional[KindLike] = None) -> None:
    """
    Put the canonical slots back.

    Args:
        kind:
            The kind to restore. If None, every registered kind is
            restored.
    """
    if kind is None:
        kinds = list(_defaults)
    else:
        kinds = [_resolve(kind)]

    for k in kinds:
        if not is_overridden(k):
            continue
        validator, sampler = _defaults[k]
        _validators[k] = validator
        _samplers[k] = sampler
        logger.info("Restored default sampler and validator for %s", k.value)


@contextmanager
def overridden(
    kind: KindLike,
    sampler: Optional[Sampler] = None,
    validator: Optional[Validator] = None,
) -> Iterator[DistributionKind]:
    """
    Temporarily replace the slots of `kind`.

    The previously active slots (which may themselves be overrides) are
    put back on exit, even if the block raises.
    """
    resolved = _resolve(kind)
    previous_sampler = _samplers[resolved]
    previous_validator = _validators[resolved]

    if sampler is not None:
        set_sampler(resolved, sampler)
    if validator is not None:
        set_validator(resolved, validator)
    try:
        yield resolved
    finally:
        _samplers[resolved] = previous_sampler
        _validators[resolved] = previous_validator
        logger.info("Override of %s ended", resolved.value)
