from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from .constants import HASH_WIDTH, MIN_AMPLIFIED_LENGTH

_HASH_MASK = (1 << HASH_WIDTH) - 1


@dataclass
class PrivacyAmplificationResult:
    final_key: List[int]
    hash_value: int
    target_length: int
    discarded_bits: int


class PrivacyAmplifier:
    """Illustrative XOR-fold privacy amplification.

    The key is folded into a 32-bit word by XOR-ing ``bit << (i % 32)`` for
    every position ``i``, and output bit ``j`` is bit ``j % 32`` of that word.
    This is not a secure extractor. Keys are compared across seeded runs, so
    the fold must stay bit-for-bit stable.
    """

    def __init__(self, min_length: int = MIN_AMPLIFIED_LENGTH):
        if min_length < 0:
            raise ValueError("min_length must be non-negative")
        self.min_length = min_length

    def default_length(self, key_length: int) -> int:
        return max(self.min_length, key_length // 2)

    def apply(self, key: Sequence[int], target_length: Optional[int] = None) -> PrivacyAmplificationResult:
        if target_length is None:
            target_length = self.default_length(len(key))
        if target_length < 0:
            raise ValueError("target_length must be non-negative")

        hash_value = self.fold(key)
        final_key = [(hash_value >> (j % HASH_WIDTH)) & 1 for j in range(target_length)]
        return PrivacyAmplificationResult(
            final_key=final_key,
            hash_value=hash_value,
            target_length=target_length,
            discarded_bits=max(len(key) - target_length, 0),
        )

    @staticmethod
    def fold(key: Sequence[int]) -> int:
        hash_value = 0
        for i, bit in enumerate(key):
            hash_value ^= (bit & 1) << (i % HASH_WIDTH)
        return hash_value & _HASH_MASK
