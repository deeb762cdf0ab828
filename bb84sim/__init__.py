"""Seeded BB84 quantum key distribution simulation engine."""

from .bb84_protocol import (
	BB84Protocol,
	BB84Parameters,
	BB84Result,
	BB84RunResult,
	BB84Event,
	ProtocolStep,
	assess_security,
	calculate_qber,
	construct,
	generate_bits_and_bases,
	protocol_steps,
	sift_keys,
)
from .generator import LcgGenerator, normalize_seed
from .noise import QuantumChannel, QubitTransit, noise_probability
from .error_correction import CascadeErrorCorrector, CascadeResult
from .privacy import PrivacyAmplifier, PrivacyAmplificationResult

__all__ = [
	"BB84Protocol",
	"BB84Parameters",
	"BB84Result",
	"BB84RunResult",
	"BB84Event",
	"ProtocolStep",
	"assess_security",
	"calculate_qber",
	"construct",
	"generate_bits_and_bases",
	"protocol_steps",
	"sift_keys",
	"LcgGenerator",
	"normalize_seed",
	"QuantumChannel",
	"QubitTransit",
	"noise_probability",
	"CascadeErrorCorrector",
	"CascadeResult",
	"PrivacyAmplifier",
	"PrivacyAmplificationResult",
]
