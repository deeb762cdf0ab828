import pytest

from bb84sim import LcgGenerator, normalize_seed
from bb84sim.generator import entropy_seed


def test_lcg_golden_stream():
    rng = LcgGenerator(42)

    assert rng.next() == 0.8858839163237311
    assert rng.next() == 0.8176268861454047
    assert rng.next() == 0.9589891975308642
    assert rng.draws == 3


def test_lcg_same_seed_same_sequence():
    first = LcgGenerator(2024)
    second = LcgGenerator(2024)

    assert [first.next() for _ in range(50)] == [second.next() for _ in range(50)]


def test_lcg_values_in_unit_interval():
    rng = LcgGenerator(7)
    values = [rng.next() for _ in range(1000)]

    assert all(0.0 <= value < 1.0 for value in values)
    assert {rng.next_bit() for _ in range(100)} == {0, 1}


def test_lcg_large_seed_is_equivalent_to_reduced_seed():
    big = LcgGenerator(42 + 233280 * 1000)
    small = LcgGenerator(42)

    assert [big.next() for _ in range(10)] == [small.next() for _ in range(10)]


def test_next_index_stays_in_range():
    rng = LcgGenerator(99)

    assert all(0 <= rng.next_index(16) < 16 for _ in range(200))


@pytest.mark.parametrize(
    "raw, expected",
    [
        (None, None),
        (42, 42),
        ("42", 42),
        (" 17 ", 17),
        ("", None),
        ("abc", None),
        (12.9, 12),
        ("12.9", 12),
        (233280 + 5, 5),
        (-1, 233279),
        (float("nan"), None),
    ],
)
def test_normalize_seed(raw, expected):
    assert normalize_seed(raw) == expected


def test_entropy_seed_in_range():
    seeds = {entropy_seed() for _ in range(10)}

    assert all(0 <= seed < 1_000_000 for seed in seeds)
