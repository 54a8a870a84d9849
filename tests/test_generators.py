# tests/test_generators.py

from __future__ import annotations

import math
from collections import Counter
from itertools import islice

import numpy as np
import pytest

from seedstream.config import INT_MAX, UINT_MAX
from seedstream.errors import ArgumentError, ArgumentOutOfRangeError, NullArgumentError
from seedstream.generators.alf import ALFGenerator
from seedstream.generators.mt19937 import MT19937Generator
from seedstream.generators.nr3 import NR3Generator
from seedstream.generators.standard import StandardGenerator
from seedstream.generators.xorshift128 import XorShift128Generator
from seedstream.utils.rng import GENERATORS, make_generator
from seedstream.utils.seeding import make_seed


SEEDS = [0, 1, 42, 123456789, 2**32 - 1]
N = 500


# ---------------------------------------------------------------
# Seeding and reset
# ---------------------------------------------------------------


@pytest.mark.parametrize("seed", SEEDS)
def test_reset_replays_fresh_stream(generator_name, seed):
    gen = make_generator(generator_name, seed)
    first = [gen.next_uint32() for _ in range(N)]

    # Leave the boolean buffer half consumed as well.
    for _ in range(5):
        gen.next_boolean()

    assert gen.reset() is True
    assert [gen.next_uint32() for _ in range(N)] == first


def test_reset_with_new_seed_matches_fresh_instance(generator_name):
    gen = make_generator(generator_name, 1)
    gen.next_double()
    gen.reset(99)

    fresh = make_generator(generator_name, 99)
    assert gen.seed == 99
    assert [gen.next_double() for _ in range(N)] == [fresh.next_double() for _ in range(N)]


def test_every_generator_can_reset(generator_name):
    assert make_generator(generator_name, 3).can_reset


def test_negative_seed_is_taken_as_absolute_value():
    assert XorShift128Generator(-17).seed == 17


def test_seed_above_uint_max_is_rejected():
    with pytest.raises(ArgumentOutOfRangeError):
        XorShift128Generator(UINT_MAX + 1)


def test_entropy_seed_is_32_bit():
    gen = XorShift128Generator()
    assert 0 <= gen.seed <= UINT_MAX


def test_make_seed_masks_seed_sequence_entropy(monkeypatch):
    class FixedEntropy:
        entropy = 2**100 + 12345

    monkeypatch.setattr(np.random, "SeedSequence", FixedEntropy)
    assert make_seed() == 12345


def test_make_seed_varies_between_calls():
    seeds = {make_seed() for _ in range(8)}
    assert all(0 <= seed <= UINT_MAX for seed in seeds)
    assert len(seeds) > 1


def test_same_seed_same_derived_outputs(generator_pair):
    g1, g2 = generator_pair
    for _ in range(N):
        assert g1.next(-100, 100) == g2.next(-100, 100)
        assert g1.next_double(-5.0, 5.0) == g2.next_double(-5.0, 5.0)
        assert g1.next_uint(10, 1000) == g2.next_uint(10, 1000)
        assert g1.next_boolean() == g2.next_boolean()

    b1, b2 = bytearray(13), bytearray(13)
    g1.next_bytes(b1)
    g2.next_bytes(b2)
    assert b1 == b2


# ---------------------------------------------------------------
# Primitives and ranges
# ---------------------------------------------------------------


def test_primitive_ranges(generator_name):
    gen = make_generator(generator_name, 7)
    for _ in range(N):
        assert 0 <= gen.next_non_negative_int() <= INT_MAX
        assert 0.0 <= gen.next_double01() < 1.0
        assert 0 <= gen.next_uint32() <= UINT_MAX


@pytest.mark.parametrize("lo,hi", [(0, 1), (-10, 10), (5, 6), (-(2**31), 2**31 - 1), (0, 7)])
def test_next_range_is_half_open(generator_name, lo, hi):
    gen = make_generator(generator_name, 11)
    for _ in range(N):
        assert lo <= gen.next(lo, hi) < hi


def test_single_bound_is_the_exclusive_maximum(generator_name):
    gen = make_generator(generator_name, 5)
    for _ in range(N):
        assert 0 <= gen.next(5) < 5
        assert 0.0 <= gen.next_double(2.5) < 2.5
        assert 0 <= gen.next_uint(3) < 3
        assert 3 <= gen.next_uint(3, 7) < 7
        assert -1.0 <= gen.next_double(-1.0, 1.0) < 1.0


def test_unbounded_calls_exclude_the_maximum():
    gen = XorShift128Generator(3)
    for _ in range(N):
        assert 0 <= gen.next() < INT_MAX
        assert 0 <= gen.next_uint() < UINT_MAX
        assert 0 <= gen.next_inclusive_max_value() <= INT_MAX
        assert 0 <= gen.next_uint_inclusive_max_value() <= UINT_MAX


def test_equal_bounds_return_bound_without_drawing():
    g1, g2 = XorShift128Generator(8), XorShift128Generator(8)
    assert g1.next(7, 7) == 7
    assert g1.next_uint(9, 9) == 9
    assert [g1.next_uint32() for _ in range(10)] == [g2.next_uint32() for _ in range(10)]


def test_ranged_integers_are_uniform():
    gen = MT19937Generator(2024)
    n = 60_000
    counts = Counter(gen.next(0, 6) for _ in range(n))
    assert sorted(counts) == list(range(6))
    for value in range(6):
        assert counts[value] / n == pytest.approx(1 / 6, abs=0.01)


def test_range_errors():
    gen = XorShift128Generator(1)
    with pytest.raises(ArgumentOutOfRangeError):
        gen.next(-1)
    with pytest.raises(ArgumentOutOfRangeError):
        gen.next(5, 1)
    with pytest.raises(ArgumentOutOfRangeError):
        gen.next(0, 2**31)
    with pytest.raises(ArgumentOutOfRangeError):
        gen.next_uint(-1)
    with pytest.raises(ArgumentOutOfRangeError):
        gen.next_uint(10, 2)
    with pytest.raises(ArgumentOutOfRangeError):
        gen.next_double(-1.0)
    with pytest.raises(ArgumentOutOfRangeError):
        gen.next_double(5.0, 1.0)


@pytest.mark.parametrize(
    "args",
    [(math.inf,), (0.0, math.inf), (-math.inf, 0.0), (-1e308, 1e308)],
)
def test_non_finite_double_bounds_are_argument_errors(args):
    gen = XorShift128Generator(1)
    with pytest.raises(ArgumentError) as excinfo:
        gen.next_double(*args)
    assert type(excinfo.value) is ArgumentError


# ---------------------------------------------------------------
# Booleans and bytes
# ---------------------------------------------------------------


def test_booleans_consume_one_word_least_significant_bit_first(generator_pair):
    g1, g2 = generator_pair
    word = g2.next_uint32()
    expected = [(word >> i) & 1 == 1 for i in range(32)]

    assert [g1.next_boolean() for _ in range(32)] == expected

    # The 33rd call pulls a new word.
    next_word = g2.next_uint32()
    assert g1.next_boolean() == bool(next_word & 1)


def test_next_bytes_is_little_endian_word_stream(generator_pair):
    g1, g2 = generator_pair
    buf = bytearray(7)
    g1.next_bytes(buf)

    words = [g2.next_uint32(), g2.next_uint32()]
    expected = b"".join(w.to_bytes(4, "little") for w in words)[:7]
    assert bytes(buf) == expected


def test_next_bytes_accepts_numpy_buffers():
    g1, g2 = XorShift128Generator(4), XorShift128Generator(4)
    arr = np.zeros(16, dtype=np.uint8)
    ba = bytearray(16)
    g1.next_bytes(arr)
    g2.next_bytes(ba)
    assert arr.tobytes() == bytes(ba)


def test_next_bytes_empty_buffer_draws_nothing():
    g1, g2 = XorShift128Generator(4), XorShift128Generator(4)
    g1.next_bytes(bytearray())
    assert g1.next_uint32() == g2.next_uint32()


def test_next_bytes_rejects_none():
    with pytest.raises(NullArgumentError):
        XorShift128Generator(1).next_bytes(None)


# ---------------------------------------------------------------
# Lazy sequences
# ---------------------------------------------------------------


def test_sequences_match_scalar_calls(generator_pair):
    g1, g2 = generator_pair
    assert list(islice(g1.integers(0, 10), 50)) == [g2.next(0, 10) for _ in range(50)]
    assert list(islice(g1.doubles(-2.0, 3.0), 50)) == [g2.next_double(-2.0, 3.0) for _ in range(50)]
    assert list(islice(g1.doubles(), 50)) == [g2.next_double() for _ in range(50)]
    assert list(islice(g1.unsigned_integers(100), 50)) == [g2.next_uint(100) for _ in range(50)]
    assert list(islice(g1.booleans(), 70)) == [g2.next_boolean() for _ in range(70)]


def test_sequences_do_not_draw_ahead():
    g1, g2 = XorShift128Generator(21), XorShift128Generator(21)
    seq = g1.integers()
    next(seq)
    g2.next()
    assert g1.next_uint32() == g2.next_uint32()


def test_bytes_stream_refills_the_same_buffer():
    g1, g2 = XorShift128Generator(6), XorShift128Generator(6)
    buf = bytearray(5)
    stream = g1.bytes_stream(buf)

    for _ in range(3):
        filled = next(stream)
        expected = bytearray(5)
        g2.next_bytes(expected)
        assert filled is buf
        assert filled == expected


def test_sequence_argument_checks_are_deferred():
    gen = XorShift128Generator(1)
    bad = gen.integers(5, 1)
    with pytest.raises(ArgumentOutOfRangeError):
        next(bad)

    no_buffer = gen.bytes_stream(None)
    with pytest.raises(NullArgumentError):
        next(no_buffer)


# ---------------------------------------------------------------
# Algorithm specifics
# ---------------------------------------------------------------


def test_mt19937_reference_outputs_from_seed():
    gen = MT19937Generator(5489)
    assert [gen.next_uint32() for _ in range(3)] == [3499211612, 581869302, 3890346734]


def test_mt19937_reference_outputs_from_seed_array():
    gen = MT19937Generator.from_seed_array([0x123, 0x234, 0x345, 0x456])
    assert [gen.next_uint32() for _ in range(3)] == [1067595299, 955945823, 477289528]

    gen.reset()
    assert gen.next_uint32() == 1067595299


def test_mt19937_seed_array_errors():
    with pytest.raises(NullArgumentError):
        MT19937Generator.from_seed_array(None)
    with pytest.raises(ArgumentError):
        MT19937Generator.from_seed_array([])
    with pytest.raises(ArgumentError):
        MT19937Generator(1, seed_array=[1, 2])


def test_alf_lag_setters_validate_before_assigning():
    gen = ALFGenerator(7)
    with pytest.raises(ArgumentOutOfRangeError):
        gen.short_lag = 0
    with pytest.raises(ArgumentOutOfRangeError):
        gen.short_lag = gen.long_lag
    with pytest.raises(ArgumentOutOfRangeError):
        gen.long_lag = gen.short_lag
    assert (gen.short_lag, gen.long_lag) == (418, 1279)


def test_alf_lag_change_resets_stream():
    gen = ALFGenerator(7)
    for _ in range(2000):
        gen.next_uint32()

    gen.short_lag = 100
    fresh = ALFGenerator(7, short_lag=100)
    assert [gen.next_uint32() for _ in range(N)] == [fresh.next_uint32() for _ in range(N)]


def test_alf_rejects_invalid_lags_at_construction():
    with pytest.raises(ArgumentOutOfRangeError):
        ALFGenerator(1, short_lag=10, long_lag=5)


def test_xorshift_and_nr3_expose_64_bit_words():
    for gen in (XorShift128Generator(5), NR3Generator(5)):
        for _ in range(100):
            assert 0 <= gen.next_uint64() < 2**64


def test_standard_generator_follows_numpy():
    gen = StandardGenerator(12)
    rng = np.random.default_rng(12)
    assert gen.next_double01() == float(rng.random())


def test_generators_differ_from_each_other():
    streams = {name: tuple(make_generator(name, 42).next_uint32() for _ in range(4)) for name in GENERATORS}
    assert len(set(streams.values())) == len(GENERATORS)


# ---------------------------------------------------------------
# Factory and object members
# ---------------------------------------------------------------


def test_make_generator_defaults_to_xorshift128():
    assert isinstance(make_generator(seed=1), XorShift128Generator)


def test_make_generator_is_case_insensitive():
    assert isinstance(make_generator("MT19937", seed=1), MT19937Generator)


def test_make_generator_rejects_unknown_names():
    with pytest.raises(ArgumentError, match="Unknown generator name"):
        make_generator("lcg")


def test_str_and_name():
    gen = XorShift128Generator(42)
    assert gen.name == "XorShift128"
    assert str(gen) == "Generator: XorShift128, Seed: 42"
    assert repr(gen) == "XorShift128Generator(seed=42)"
