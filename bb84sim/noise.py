from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from .constants import (
    BASELINE_NOISE_PROBABILITY,
    ENABLED_NOISE_PROBABILITY,
    EVE_WRONG_BASIS_FLIP_PROBABILITY,
)
from .generator import LcgGenerator


def clamp(value: float, lower: float = 0.0, upper: float = 1.0) -> float:
    return max(lower, min(upper, value))


def noise_probability(noise_enabled: bool) -> float:
    return ENABLED_NOISE_PROBABILITY if noise_enabled else BASELINE_NOISE_PROBABILITY


@dataclass(frozen=True)
class QubitTransit:
    bob_bit: int
    eve_intercepted: bool
    eve_basis: Optional[int]
    eve_flipped: bool
    noise_flipped: bool
    bases_match: bool

    @property
    def cause(self) -> Optional[str]:
        # two flips cancel out
        if not self.bases_match or self.eve_flipped == self.noise_flipped:
            return None
        return "Eve" if self.eve_flipped else "Noise"


@dataclass(frozen=True)
class QuantumChannel:
    """Classical model of the BB84 quantum channel.

    An intercept-resend eavesdropper acts on each qubit with probability
    ``eve_probability``; background noise flips the carried bit with
    probability ``noise_probability``. Every qubit consumes its draws in a
    fixed order so that seeded runs are reproducible.
    """

    eve_probability: float = 0.0
    noise_probability: float = BASELINE_NOISE_PROBABILITY

    def __post_init__(self) -> None:
        object.__setattr__(self, "eve_probability", clamp(float(self.eve_probability)))
        object.__setattr__(self, "noise_probability", clamp(float(self.noise_probability)))

    @classmethod
    def for_run(cls, eve_probability: float, noise_enabled: bool) -> "QuantumChannel":
        return cls(eve_probability=eve_probability, noise_probability=noise_probability(noise_enabled))

    def transmit(
        self,
        rng: LcgGenerator,
        alice_bits: Sequence[int],
        alice_bases: Sequence[int],
        bob_bases: Sequence[int],
    ) -> List[int]:
        return [transit.bob_bit for transit in self.transmit_detailed(rng, alice_bits, alice_bases, bob_bases)]

    def transmit_detailed(
        self,
        rng: LcgGenerator,
        alice_bits: Sequence[int],
        alice_bases: Sequence[int],
        bob_bases: Sequence[int],
    ) -> List[QubitTransit]:
        if not len(alice_bits) == len(alice_bases) == len(bob_bases):
            raise ValueError("alice_bits, alice_bases and bob_bases must have equal length")

        transits: List[QubitTransit] = []
        for bit, alice_basis, bob_basis in zip(alice_bits, alice_bases, bob_bases):
            eve_intercepted = False
            eve_basis: Optional[int] = None
            eve_flipped = False
            noise_flipped = False

            if rng.next() < self.eve_probability:
                eve_intercepted = True
                eve_basis = rng.next_bit()
                if eve_basis != alice_basis and rng.next() < EVE_WRONG_BASIS_FLIP_PROBABILITY:
                    bit = 1 - bit
                    eve_flipped = True

            if rng.next() < self.noise_probability:
                bit = 1 - bit
                noise_flipped = True

            bases_match = alice_basis == bob_basis
            if not bases_match:
                bit = rng.next_bit()

            transits.append(
                QubitTransit(
                    bob_bit=bit,
                    eve_intercepted=eve_intercepted,
                    eve_basis=eve_basis,
                    eve_flipped=eve_flipped,
                    noise_flipped=noise_flipped,
                    bases_match=bases_match,
                )
            )
        return transits
