from __future__ import annotations

from typing import Any, Optional

from numpy.random import default_rng

from .constants import ENTROPY_SEED_BOUND, LCG_INCREMENT, LCG_MODULUS, LCG_MULTIPLIER


def normalize_seed(raw: Any) -> Optional[int]:
    """Convert raw input to a seed inside the generator's state space, or None."""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, float):
        if raw != raw or raw in (float("inf"), float("-inf")):
            return None
        return int(raw) % LCG_MODULUS
    text = str(raw).strip()
    if not text:
        return None
    try:
        value = int(text)
    except ValueError:
        try:
            value = int(float(text))
        except (ValueError, OverflowError):
            return None
    return value % LCG_MODULUS


def entropy_seed() -> int:
    """Pick a fresh seed from system entropy."""
    return int(default_rng().integers(0, ENTROPY_SEED_BOUND))


class LcgGenerator:
    """Seeded linear congruential generator producing uniform values in [0, 1).

    The state update is ``seed = (seed * 9301 + 49297) % 233280`` and each draw
    emits ``seed / 233280``. Reducing the initial seed modulo 233280 does not
    change the emitted stream.
    """

    def __init__(self, seed: int):
        self.seed = int(seed) % LCG_MODULUS
        self.draws = 0

    def next(self) -> float:
        self.seed = (self.seed * LCG_MULTIPLIER + LCG_INCREMENT) % LCG_MODULUS
        self.draws += 1
        return self.seed / LCG_MODULUS

    def next_bit(self) -> int:
        return int(self.next() * 2)

    def next_index(self, size: int) -> int:
        return int(self.next() * size)

    def __repr__(self) -> str:
        return f"LcgGenerator(seed={self.seed}, draws={self.draws})"
