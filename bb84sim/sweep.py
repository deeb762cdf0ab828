"""Parameter sweeps and chart-ready summaries for BB84 runs."""

from typing import Any, Dict, Iterable, List, Optional, Sequence

import numpy as np
import pandas as pd

from .bb84_protocol import BB84Protocol, BB84Result
from .constants import SCENARIO_EAVESDROPPING, SCENARIO_IDEAL
from .log import get_logger
from .noise import clamp

logger = get_logger(__name__)


def scenario_label(eve_probability: float) -> str:
    """Label a run the way the QBER history chart groups it."""
    return SCENARIO_EAVESDROPPING if eve_probability > 0 else SCENARIO_IDEAL


def eve_grid(points: int = 11) -> List[float]:
    """Evenly spaced eavesdropping probabilities from 0 to 1."""
    if points <= 1:
        return [0.0]
    return [float(value) for value in np.linspace(0.0, 1.0, points)]


def run_single(
    n_qubits: int,
    seed: Any,
    eve_probability: float,
    noise_enabled: bool = False,
    error_correction_enabled: bool = False,
    privacy_amplification_enabled: bool = False,
) -> BB84Result:
    """Execute one BB84 run on a fresh engine."""
    protocol = BB84Protocol(seed)
    return protocol.run_protocol(
        n_qubits,
        clamp(eve_probability),
        noise_enabled,
        error_correction_enabled,
        privacy_amplification_enabled,
    )


def sweep_eve_probability(
    n_qubits: int,
    values: Iterable[float],
    seeds: Sequence[Any] = (42,),
    noise_enabled: bool = False,
    error_correction_enabled: bool = False,
    privacy_amplification_enabled: bool = False,
) -> pd.DataFrame:
    """Run one independent engine per (eve probability, seed) pair.

    Returns one row per run with the result fields plus ``seed`` and
    ``scenario`` columns.
    """
    rows: List[Dict[str, Any]] = []
    for value in values:
        for seed in seeds:
            result = run_single(
                n_qubits,
                seed,
                value,
                noise_enabled,
                error_correction_enabled,
                privacy_amplification_enabled,
            )
            row = result.to_dict()
            row["seed"] = seed
            row["scenario"] = scenario_label(result.eve_probability)
            rows.append(row)
    logger.debug("Sweep produced %d runs", len(rows))
    columns = [
        "n_qubits",
        "eve_probability",
        "seed",
        "scenario",
        "sifted_key_length",
        "qber_sifted",
        "qber_final",
        "final_key_length",
        "ec_queries",
        "secure",
    ]
    return pd.DataFrame(rows, columns=columns)


def sweep_qubit_counts(
    counts: Iterable[int],
    eve_probability: float,
    seed: Any = 42,
    noise_enabled: bool = False,
) -> pd.DataFrame:
    """QBER history points (qubits, qber, scenario) for increasing run sizes."""
    rows = []
    for count in counts:
        result = run_single(count, seed, eve_probability, noise_enabled)
        rows.append(
            {
                "qubits": result.n_qubits,
                "qber": result.qber_sifted,
                "scenario": scenario_label(result.eve_probability),
            }
        )
    return pd.DataFrame(rows, columns=["qubits", "qber", "scenario"])


def summarize_sweep(data: pd.DataFrame) -> pd.DataFrame:
    """Aggregate a sweep per eavesdropping probability.

    Columns: ``runs``, ``qber_mean``, ``qber_std``, ``secure_fraction``,
    ``sifted_mean``.
    """
    if data.empty:
        return pd.DataFrame(columns=["eve_probability", "runs", "qber_mean", "qber_std", "secure_fraction", "sifted_mean"])

    rows = []
    for value, group in data.groupby("eve_probability", sort=True):
        qber = group["qber_final"].to_numpy(dtype=float)
        rows.append(
            {
                "eve_probability": float(value),
                "runs": int(len(group)),
                "qber_mean": float(np.mean(qber)),
                "qber_std": float(np.std(qber)),
                "secure_fraction": float(np.mean(group["secure"].to_numpy(dtype=bool))),
                "sifted_mean": float(np.mean(group["sifted_key_length"].to_numpy(dtype=float))),
            }
        )
    return pd.DataFrame(rows)


def key_length_progression(result: BB84Result) -> List[Dict[str, Any]]:
    """Raw, sifted and final key lengths of a run, in pipeline order."""
    final_length: Optional[int] = result.final_key_length
    return [
        {"stage": "Raw Bits", "length": result.n_qubits},
        {"stage": "Sifted Key", "length": result.sifted_key_length},
        {"stage": "Final Key", "length": final_length if final_length is not None else result.sifted_key_length},
    ]


def format_key_preview(bits: Sequence[int], limit: int = 64) -> str:
    """Format a bit sequence with ellipsis if too long."""
    key = "".join(str(bit) for bit in bits)
    if not key:
        return "-"
    if len(key) <= limit:
        return key
    head = max(limit // 2, 1)
    tail = max(limit - head - 3, 0)
    if tail <= 0:
        return key[:limit]
    return key[:head] + "..." + key[-tail:]
