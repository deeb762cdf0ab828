"""Protocol constants.

Seeded runs depend on every value here; changing one changes the golden
results of every seed.
"""

# Security
QBER_THRESHOLD: float = 0.11  # Shor-Preskill bound (11%)

# Channel noise
BASELINE_NOISE_PROBABILITY: float = 0.001  # background noise, never zero
ENABLED_NOISE_PROBABILITY: float = 0.02
EVE_WRONG_BASIS_FLIP_PROBABILITY: float = 0.5

# Linear congruential generator
LCG_MULTIPLIER: int = 9301
LCG_INCREMENT: int = 49297
LCG_MODULUS: int = 233280
ENTROPY_SEED_BOUND: int = 1_000_000

# Error correction
DEFAULT_BLOCK_SIZE: int = 16

# Privacy amplification
MIN_AMPLIFIED_LENGTH: int = 32
HASH_WIDTH: int = 32

# Scenario labels used by sweeps
SCENARIO_IDEAL: str = "Ideal Channel"
SCENARIO_EAVESDROPPING: str = "With Eavesdropping"
