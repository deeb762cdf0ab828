import math

import pytest

from bb84sim import CascadeErrorCorrector, LcgGenerator


def test_cascade_flips_random_position_in_mismatched_block():
    alice = [0] * 20
    bob = [1] + [0] * 19

    result = CascadeErrorCorrector().correct(LcgGenerator(1), alice, bob)

    # the flip lands on position 4, leaving the original error in place
    assert result.flipped_positions == [4]
    assert result.bob_key == [1, 0, 0, 0, 1] + [0] * 15
    assert result.queries == 3
    assert result.residual_errors == 2


def test_cascade_golden_small_blocks():
    alice = [1, 0, 1, 1, 0, 1, 0, 0, 1, 1]
    bob = [1, 1, 1, 1, 0, 1, 0, 0, 1, 0]

    result = CascadeErrorCorrector(block_size=4).correct(LcgGenerator(11), alice, bob)

    assert result.bob_key == [1, 1, 0, 1, 0, 1, 0, 0, 1, 1]
    assert result.flipped_positions == [2, 9]
    assert result.queries == 5


def test_cascade_never_mutates_inputs_or_changes_lengths():
    alice = [1, 0, 1, 1, 0, 1, 0, 0, 1, 1, 0, 1, 1, 1, 0, 0, 1, 0]
    bob = [0, 0, 1, 1, 0, 1, 0, 1, 1, 1, 0, 1, 1, 1, 0, 0, 1, 1]
    alice_copy, bob_copy = list(alice), list(bob)

    corrector = CascadeErrorCorrector(block_size=5)
    result = corrector.correct(LcgGenerator(3), alice, bob)

    assert alice == alice_copy
    assert bob == bob_copy
    assert result.alice_key == alice
    assert len(result.bob_key) == len(bob)
    assert result.queries >= math.ceil(len(alice) / 5)
    assert result.queries == corrector.block_count(len(alice)) + len(result.flipped_positions)


def test_cascade_consistent_keys_use_one_query_per_block():
    key = [1, 0, 1] * 11
    rng = LcgGenerator(9)

    result = CascadeErrorCorrector(block_size=16).correct(rng, key, list(key))

    assert result.queries == 3
    assert result.flipped_positions == []
    assert rng.draws == 0


def test_cascade_empty_keys():
    result = CascadeErrorCorrector().correct(LcgGenerator(1), [], [])

    assert result.queries == 0
    assert result.bob_key == []


def test_cascade_requires_equal_length():
    corrector = CascadeErrorCorrector()
    with pytest.raises(ValueError):
        corrector.correct(LcgGenerator(1), [1, 0, 1, 0], [1, 0, 1])


def test_cascade_rejects_non_positive_block_size():
    with pytest.raises(ValueError):
        CascadeErrorCorrector(block_size=0)
