import itertools

import pytest

from src.stippling.seeded_stream import Mulberry32


def take(stream, n):
    return list(itertools.islice(stream, n))


def test_values_in_unit_interval():
    values = take(Mulberry32(123), 10000)
    assert all(0.0 <= v < 1.0 for v in values)
    # Crude uniformity check
    assert 0.45 < sum(values) / len(values) < 0.55


def test_same_seed_same_sequence():
    assert take(Mulberry32(42), 100) == take(Mulberry32(42), 100)


def test_different_seeds_differ():
    assert take(Mulberry32(1), 10) != take(Mulberry32(2), 10)


@pytest.mark.parametrize('seed, equivalent', [
    (42, 42 + 2 ** 32),
    (-1, 0xFFFFFFFF),
])
def test_seed_reduced_modulo_2_32(seed, equivalent):
    assert take(Mulberry32(seed), 20) == take(Mulberry32(equivalent), 20)


def test_matches_reference_values():
    # First outputs of the JavaScript mulberry32 for seed 42
    assert take(Mulberry32(42), 3) == [0.6011037519201636, 0.44829055899754167, 0.8524657934904099]


def test_state_advances_by_fixed_increment():
    stream = Mulberry32(7)
    stream.next()
    assert stream.state == (7 + 0x6D2B79F5) & 0xFFFFFFFF
    stream()
    assert stream.state == (7 + 2 * 0x6D2B79F5) & 0xFFFFFFFF


def test_call_next_and_iter_share_state():
    a = Mulberry32(99)
    b = Mulberry32(99)
    assert [a(), a.next(), next(a)] == take(b, 3)
