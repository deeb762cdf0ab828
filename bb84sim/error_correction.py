from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from .constants import DEFAULT_BLOCK_SIZE
from .generator import LcgGenerator


@dataclass
class CascadeResult:
    alice_key: List[int]
    bob_key: List[int]
    queries: int
    flipped_positions: List[int]

    @property
    def residual_errors(self) -> int:
        return sum(1 for a, b in zip(self.alice_key, self.bob_key) if a != b)


class CascadeErrorCorrector:
    """Single-pass, CASCADE-style parity reconciliation.

    Both keys are cut into consecutive blocks of ``block_size`` bits (the last
    block may be shorter). Each block costs one parity query. When the
    parities differ, one random position inside the block is flipped on Bob's
    side and a second query is charged; the block is not re-checked, so the
    flip may miss the actual error.
    """

    def __init__(self, block_size: int = DEFAULT_BLOCK_SIZE):
        if block_size <= 0:
            raise ValueError("block_size must be positive")
        self.block_size = block_size

    def correct(self, rng: LcgGenerator, alice_key: Sequence[int], bob_key: Sequence[int]) -> CascadeResult:
        if len(alice_key) != len(bob_key):
            raise ValueError("Keys must be of equal length for Cascade")

        alice = list(alice_key)
        bob = list(bob_key)
        length = len(alice)
        flipped_positions: List[int] = []
        queries = 0

        for start in range(0, length, self.block_size):
            end = min(start + self.block_size, length)
            queries += 1
            if self._parity(alice, start, end) != self._parity(bob, start, end):
                idx = start + rng.next_index(end - start)
                bob[idx] ^= 1
                flipped_positions.append(idx)
                queries += 1

        return CascadeResult(
            alice_key=alice,
            bob_key=bob,
            queries=queries,
            flipped_positions=flipped_positions,
        )

    def block_count(self, length: int) -> int:
        return -(-length // self.block_size) if length > 0 else 0

    @staticmethod
    def _parity(bits: List[int], start: int, end: int) -> int:
        parity = 0
        for bit in bits[start:end]:
            parity ^= bit
        return parity
