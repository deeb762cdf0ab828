import pytest

from bb84sim import LcgGenerator, QuantumChannel, noise_probability


def test_noise_probability_levels():
    assert noise_probability(True) == pytest.approx(0.02)
    assert noise_probability(False) == pytest.approx(0.001)


def test_channel_clamps_probabilities():
    channel = QuantumChannel(eve_probability=1.5, noise_probability=-0.2)

    assert channel.eve_probability == 1.0
    assert channel.noise_probability == 0.0


def test_channel_draw_order_is_fixed():
    rng = LcgGenerator(5)
    channel = QuantumChannel(eve_probability=1.0, noise_probability=0.5)

    bob_bits = channel.transmit(rng, [0, 1, 0, 1, 1, 0], [0, 0, 1, 1, 0, 1], [0, 1, 1, 0, 0, 1])

    assert bob_bits == [0, 0, 1, 1, 0, 0]
    assert rng.draws == 23
    assert rng.seed == 207436


def test_channel_without_eve_or_noise_preserves_matching_bases():
    rng = LcgGenerator(3)
    channel = QuantumChannel(eve_probability=0.0, noise_probability=0.0)

    assert channel.transmit(rng, [1, 0, 1, 0], [0, 1, 0, 1], [0, 1, 0, 1]) == [1, 0, 1, 0]
    # one eve draw and one noise draw per qubit
    assert rng.draws == 8


def test_detailed_transmission_records_eve_activity():
    rng = LcgGenerator(11)
    channel = QuantumChannel(eve_probability=1.0, noise_probability=0.0)
    transits = channel.transmit_detailed(rng, [0] * 32, [0] * 32, [0] * 32)

    assert all(transit.eve_intercepted for transit in transits)
    assert all(transit.eve_basis in (0, 1) for transit in transits)
    for transit in transits:
        if transit.eve_basis == 0:
            assert not transit.eve_flipped
        assert transit.bob_bit == int(transit.eve_flipped)
        assert transit.cause == ("Eve" if transit.eve_flipped else None)


def test_transmit_and_detailed_transmit_agree():
    args = ([1, 0, 1, 1, 0, 0, 1, 0], [0, 1, 1, 0, 0, 1, 0, 1], [0, 0, 1, 1, 0, 1, 1, 1])
    channel = QuantumChannel.for_run(0.5, noise_enabled=True)

    plain = channel.transmit(LcgGenerator(8), *args)
    detailed = channel.transmit_detailed(LcgGenerator(8), *args)

    assert plain == [transit.bob_bit for transit in detailed]


def test_channel_requires_equal_lengths():
    channel = QuantumChannel()
    with pytest.raises(ValueError):
        channel.transmit(LcgGenerator(1), [0, 1], [0], [0, 1])
