from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .constants import QBER_THRESHOLD
from .error_correction import CascadeErrorCorrector, CascadeResult
from .generator import LcgGenerator, entropy_seed, normalize_seed
from .log import get_logger
from .noise import QuantumChannel, QubitTransit, clamp
from .privacy import PrivacyAmplificationResult, PrivacyAmplifier

logger = get_logger(__name__)

BASIS_LABELS = {0: "Z", 1: "X"}


@dataclass(frozen=True)
class BB84Parameters:
    n_qubits: int = 100
    eve_probability: float = 0.0
    noise_enabled: bool = False
    error_correction_enabled: bool = False
    privacy_amplification_enabled: bool = False
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "n_qubits", int(self.n_qubits))
        object.__setattr__(self, "eve_probability", clamp(float(self.eve_probability)))
        object.__setattr__(self, "seed", normalize_seed(self.seed))


@dataclass(frozen=True)
class BB84Result:
    n_qubits: int
    eve_probability: float
    sifted_key_length: int
    qber_sifted: float
    secure: bool
    qber_final: Optional[float] = None
    final_key_length: Optional[int] = None
    ec_queries: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {key: value for key, value in asdict(self).items() if value is not None}

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "BB84Result":
        return cls(
            n_qubits=int(payload["n_qubits"]),
            eve_probability=float(payload["eve_probability"]),
            sifted_key_length=int(payload["sifted_key_length"]),
            qber_sifted=float(payload["qber_sifted"]),
            secure=bool(payload["secure"]),
            qber_final=payload.get("qber_final"),
            final_key_length=payload.get("final_key_length"),
            ec_queries=payload.get("ec_queries"),
        )


@dataclass
class BB84Event:
    index: int
    alice_bit: int
    alice_basis: int
    bob_basis: int
    bob_bit: int
    sifted: bool
    match: bool
    eve_intercepted: bool
    eve_basis: Optional[int]
    cause: Optional[str]


@dataclass
class BB84RunResult:
    params: BB84Parameters
    seed: int
    events: List[BB84Event]
    alice_bits: List[int]
    alice_bases: List[int]
    bob_bases: List[int]
    bob_bits: List[int]
    sifted_indices: List[int]
    sifted_alice_bits: List[int]
    sifted_bob_bits: List[int]
    result: BB84Result
    correction: Optional[CascadeResult] = None
    amplification: Optional[PrivacyAmplificationResult] = None
    final_alice_bits: List[int] = field(default_factory=list)
    final_bob_bits: List[int] = field(default_factory=list)

    def sifted_key_length(self) -> int:
        return len(self.sifted_indices)

    def mismatch_indices(self) -> List[int]:
        return [event.index for event in self.events if event.sifted and not event.match]

    def to_dataframe(self) -> "pandas.DataFrame":
        import pandas as pd

        rows: List[Dict[str, Any]] = []
        for event in self.events:
            rows.append(
                {
                    "Pos": event.index,
                    "Bit_Alice": event.alice_bit,
                    "Base_A": BASIS_LABELS[event.alice_basis],
                    "Base_B": BASIS_LABELS[event.bob_basis],
                    "Bit_Bob": event.bob_bit,
                    "Match": "✅" if event.match else "❌",
                    "Sifted": "Yes" if event.sifted else "No",
                    "Eve": BASIS_LABELS[event.eve_basis] if event.eve_intercepted else "-",
                    "Cause": event.cause or "-",
                }
            )
        return pd.DataFrame(rows)


@dataclass(frozen=True)
class ProtocolStep:
    name: str
    description: str


def protocol_steps(error_correction_enabled: bool, privacy_amplification_enabled: bool) -> List[ProtocolStep]:
    steps = [
        ProtocolStep("Initialization", "Alice and Bob prepare their equipment"),
        ProtocolStep("Bit & Basis Generation", "Alice generates random bits and measurement bases"),
        ProtocolStep("Quantum Transmission", "Alice sends qubits through quantum channel"),
        ProtocolStep("Key Sifting", "Alice and Bob compare bases publicly"),
        ProtocolStep("Error Estimation", "Calculate quantum bit error rate (QBER)"),
    ]
    if error_correction_enabled:
        steps.append(ProtocolStep("Error Correction", "Remove errors using CASCADE protocol"))
    if privacy_amplification_enabled:
        steps.append(ProtocolStep("Privacy Amplification", "Compress key to remove Eve's information"))
    steps.append(ProtocolStep("Security Assessment", "Determine if key is secure"))
    return steps


def generate_bits_and_bases(rng: LcgGenerator, n: int) -> Tuple[List[int], List[int]]:
    count = max(int(n), 0)
    bits = [rng.next_bit() for _ in range(count)]
    bases = [rng.next_bit() for _ in range(count)]
    return bits, bases


def sifted_indices(alice_bases: Sequence[int], bob_bases: Sequence[int]) -> List[int]:
    return [idx for idx, (a, b) in enumerate(zip(alice_bases, bob_bases)) if a == b]


def sift_keys(
    alice_bits: Sequence[int],
    alice_bases: Sequence[int],
    bob_bits: Sequence[int],
    bob_bases: Sequence[int],
) -> Tuple[List[int], List[int]]:
    kept = sifted_indices(alice_bases, bob_bases)
    return [alice_bits[i] for i in kept], [bob_bits[i] for i in kept]


def calculate_qber(key_a: Sequence[int], key_b: Sequence[int]) -> float:
    if len(key_a) != len(key_b):
        raise ValueError("Keys must be of equal length to compare")
    if not key_a:
        return 1.0
    errors = sum(1 for a, b in zip(key_a, key_b) if a != b)
    return errors / len(key_a)


def assess_security(qber: float) -> bool:
    return qber <= QBER_THRESHOLD


class BB84Protocol:
    """Seeded BB84 simulation engine.

    Each instance owns one :class:`LcgGenerator`; all randomness of a run is
    drawn from it in a fixed order, so two instances built with the same seed
    and fed the same calls produce identical results. Without a seed, one is
    drawn from system entropy at construction time.
    """

    def __init__(self, seed: Optional[int] = None, block_size: Optional[int] = None):
        normalized = normalize_seed(seed)
        self.seed = normalized if normalized is not None else entropy_seed()
        self._rng = LcgGenerator(self.seed)
        self._corrector = CascadeErrorCorrector() if block_size is None else CascadeErrorCorrector(block_size)
        self._amplifier = PrivacyAmplifier()

    @classmethod
    def from_parameters(cls, params: BB84Parameters) -> "BB84Protocol":
        return cls(params.seed)

    @property
    def rng(self) -> LcgGenerator:
        return self._rng

    def generate_bits_and_bases(self, n: int) -> Tuple[List[int], List[int]]:
        return generate_bits_and_bases(self._rng, n)

    def simulate_quantum_channel(
        self,
        alice_bits: Sequence[int],
        alice_bases: Sequence[int],
        bob_bases: Sequence[int],
        eve_probability: float,
        noise_probability: float,
    ) -> List[int]:
        channel = QuantumChannel(eve_probability=eve_probability, noise_probability=noise_probability)
        return channel.transmit(self._rng, alice_bits, alice_bases, bob_bases)

    sift_keys = staticmethod(sift_keys)
    calculate_qber = staticmethod(calculate_qber)

    def error_correction(self, alice_key: Sequence[int], bob_key: Sequence[int]) -> CascadeResult:
        return self._corrector.correct(self._rng, alice_key, bob_key)

    def privacy_amplification(
        self, key: Sequence[int], target_length: Optional[int] = None
    ) -> PrivacyAmplificationResult:
        return self._amplifier.apply(key, target_length)

    def run(self, params: BB84Parameters) -> BB84RunResult:
        if params.seed is not None and params.seed != self.seed:
            raise ValueError(
                f"params.seed={params.seed} does not match this protocol's seed {self.seed}; "
                "use BB84Protocol.from_parameters(params)"
            )
        return self.run_with_trace(
            params.n_qubits,
            params.eve_probability,
            params.noise_enabled,
            params.error_correction_enabled,
            params.privacy_amplification_enabled,
        )

    def run_protocol(
        self,
        n_qubits: int,
        eve_probability: float = 0.0,
        noise_enabled: bool = False,
        error_correction_enabled: bool = False,
        privacy_amplification_enabled: bool = False,
    ) -> BB84Result:
        return self.run_with_trace(
            n_qubits,
            eve_probability,
            noise_enabled,
            error_correction_enabled,
            privacy_amplification_enabled,
        ).result

    def run_with_trace(
        self,
        n_qubits: int,
        eve_probability: float = 0.0,
        noise_enabled: bool = False,
        error_correction_enabled: bool = False,
        privacy_amplification_enabled: bool = False,
    ) -> BB84RunResult:
        params = BB84Parameters(
            n_qubits=n_qubits,
            eve_probability=eve_probability,
            noise_enabled=noise_enabled,
            error_correction_enabled=error_correction_enabled,
            privacy_amplification_enabled=privacy_amplification_enabled,
            seed=self.seed,
        )
        logger.debug("Starting run: %s", params)

        alice_bits, alice_bases = self.generate_bits_and_bases(params.n_qubits)
        # Bob measures rather than prepares; only the bases are kept
        _, bob_bases = self.generate_bits_and_bases(params.n_qubits)

        channel = QuantumChannel.for_run(params.eve_probability, params.noise_enabled)
        transits = channel.transmit_detailed(self._rng, alice_bits, alice_bases, bob_bases)
        bob_bits = [transit.bob_bit for transit in transits]
        logger.debug("Transmitted %d qubits (noise=%.3f)", len(bob_bits), channel.noise_probability)

        kept = sifted_indices(alice_bases, bob_bases)
        sifted_alice, sifted_bob = sift_keys(alice_bits, alice_bases, bob_bits, bob_bases)
        qber_sifted = calculate_qber(sifted_alice, sifted_bob)
        logger.debug("Sifted key length %d, QBER %.4f", len(sifted_alice), qber_sifted)

        final_alice, final_bob = sifted_alice, sifted_bob
        qber_final = qber_sifted
        ec_queries: Optional[int] = None
        correction: Optional[CascadeResult] = None
        if params.error_correction_enabled and sifted_alice:
            correction = self.error_correction(sifted_alice, sifted_bob)
            final_alice, final_bob = correction.alice_key, correction.bob_key
            qber_final = calculate_qber(final_alice, final_bob)
            ec_queries = correction.queries
            logger.debug("Error correction used %d queries, QBER %.4f", ec_queries, qber_final)

        final_key_length = len(final_alice)
        amplification: Optional[PrivacyAmplificationResult] = None
        if params.privacy_amplification_enabled and final_alice:
            amplification = self.privacy_amplification(final_alice)
            final_key_length = amplification.target_length
            logger.debug("Privacy amplification: %d -> %d bits", len(final_alice), final_key_length)

        secure = assess_security(qber_final)
        logger.info(
            "Run complete: n=%d eve=%.2f sifted=%d qber=%.4f secure=%s",
            params.n_qubits,
            params.eve_probability,
            len(sifted_alice),
            qber_final,
            secure,
        )

        result = BB84Result(
            n_qubits=params.n_qubits,
            eve_probability=params.eve_probability,
            sifted_key_length=len(sifted_alice),
            qber_sifted=qber_sifted,
            secure=secure,
            qber_final=qber_final,
            final_key_length=final_key_length,
            ec_queries=ec_queries,
        )

        return BB84RunResult(
            params=params,
            seed=self.seed,
            events=self._build_events(alice_bits, alice_bases, bob_bases, transits),
            alice_bits=alice_bits,
            alice_bases=alice_bases,
            bob_bases=bob_bases,
            bob_bits=bob_bits,
            sifted_indices=kept,
            sifted_alice_bits=sifted_alice,
            sifted_bob_bits=sifted_bob,
            result=result,
            correction=correction,
            amplification=amplification,
            final_alice_bits=list(final_alice),
            final_bob_bits=list(final_bob),
        )

    @staticmethod
    def _build_events(
        alice_bits: List[int],
        alice_bases: List[int],
        bob_bases: List[int],
        transits: List[QubitTransit],
    ) -> List[BB84Event]:
        events: List[BB84Event] = []
        for idx, transit in enumerate(transits):
            match = transit.bases_match and transit.bob_bit == alice_bits[idx]
            events.append(
                BB84Event(
                    index=idx,
                    alice_bit=alice_bits[idx],
                    alice_basis=alice_bases[idx],
                    bob_basis=bob_bases[idx],
                    bob_bit=transit.bob_bit,
                    sifted=transit.bases_match,
                    match=match,
                    eve_intercepted=transit.eve_intercepted,
                    eve_basis=transit.eve_basis,
                    cause=None if match else transit.cause,
                )
            )
        return events


def construct(seed: Optional[int] = None) -> BB84Protocol:
    return BB84Protocol(seed)
