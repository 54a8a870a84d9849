# seedstream/choice.py

"""
Uniform picks from finite sequences.

    - choice(generator, seq)   one element, every position equally likely
    - choices(generator, seq)  infinite lazy stream of picks, with replacement

Each pick spends exactly one `next_double01()` draw, so a pick stream
consumes the generator at the same pace as a stream of plain doubles.
"""

from __future__ import annotations

from collections.abc import Sequence as SequenceABC
from typing import Iterable, Iterator, Sequence, TypeVar

from seedstream.errors import EMPTY_LIST, NULL_LIST, InvalidOperationError, NullArgumentError
from seedstream.generators.base import AbstractGenerator


T = TypeVar("T")


def _as_sequence(items: Iterable[T]) -> Sequence[T]:
    if items is None:
        raise NullArgumentError(NULL_LIST)
    if not isinstance(items, SequenceABC):
        items = list(items)
    if len(items) == 0:
        raise InvalidOperationError(EMPTY_LIST)
    return items


def _pick(generator: AbstractGenerator, items: Sequence[T]) -> T:
    n = len(items)
    index = int(generator.next_double01() * n)
    # Rounding can land exactly on n for very long sequences.
    return items[min(index, n - 1)]


def choice(generator: AbstractGenerator, items: Iterable[T]) -> T:
    """
    Pick one element uniformly at random.

    Args:
        generator:
            Source of the single uniform draw.
        items:
            A finite sequence. Other finite iterables (sets, dict views)
            are copied to a list first, in their iteration order.

    Raises:
        NullArgumentError: items is None.
        InvalidOperationError: items is empty.
    """
    return _pick(generator, _as_sequence(items))


def choices(generator: AbstractGenerator, items: Iterable[T]) -> Iterator[T]:
    """
    Infinite stream of uniform picks with replacement.

    Nothing is checked (or drawn) until the first element is pulled; the
    errors of `choice` are raised at that point.
    """
    seq = _as_sequence(items)
    while True:
        yield _pick(generator, seq)
