"""Run a BB84 simulation from the command line.

Usage:
    python -m bb84sim                              # Default parameters
    python -m bb84sim --qubits 500 --eve 1.0       # Full intercept-resend attack
    python -m bb84sim --scenario noisy             # Load a YAML scenario

Examples:
    # Every post-processing stage, reproducible
    python -m bb84sim --noise --error-correction --privacy-amplification --seed 7

    # Per-qubit table of a small run
    python -m bb84sim --qubits 16 --eve 0.5 --trace

    # QBER and secure fraction for eve = 0, 0.25, ..., 1 over 20 seeds each
    python -m bb84sim --qubits 400 --sweep 5 --sweep-runs 20
"""

import argparse
import json
import sys
from typing import List, Optional

from bb84sim.bb84_protocol import BB84Parameters, BB84Protocol
from bb84sim.configs import list_scenarios, load_scenario, parameters_from_config
from bb84sim.constants import QBER_THRESHOLD
from bb84sim.log import get_logger, set_log_level
from bb84sim.sweep import eve_grid, format_key_preview, summarize_sweep, sweep_eve_probability

logger = get_logger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments.

    Returns
    -------
    argparse.Namespace
        Parsed arguments.
    """
    parser = argparse.ArgumentParser(
        prog="bb84sim",
        description="Simulate the BB84 quantum key distribution protocol",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )

    parser.add_argument("--scenario", type=str, default=None, help="YAML scenario to load (see --list-scenarios)")
    parser.add_argument("--list-scenarios", action="store_true", help="List available scenarios and exit")

    parser.add_argument("--qubits", type=int, default=None, help="Number of qubits Alice sends (default: 100)")
    parser.add_argument("--eve", type=float, default=None, help="Eve's intercept probability, 0-1 (default: 0.0)")
    parser.add_argument("--seed", type=str, default=None, help="Seed for reproducible runs (default: scenario seed)")
    parser.add_argument(
        "--noise",
        action="store_true",
        default=None,
        help="Enable channel noise (2%% flip rate instead of the 0.1%% baseline)",
    )
    parser.add_argument(
        "--error-correction",
        action="store_true",
        default=None,
        help="Run the single-pass CASCADE parity check",
    )
    parser.add_argument(
        "--privacy-amplification",
        action="store_true",
        default=None,
        help="Compress the key with the XOR-fold hash",
    )

    parser.add_argument("--trace", action="store_true", help="Print the per-qubit table")
    parser.add_argument(
        "--sweep",
        type=int,
        default=None,
        metavar="POINTS",
        help="Sweep Eve's probability over POINTS values from 0 to 1 and print a summary",
    )
    parser.add_argument("--sweep-runs", type=int, default=10, help="Seeds per sweep point (default: 10)")
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: from configuration)",
    )

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    if args.list_scenarios:
        for name in list_scenarios():
            print(name)
        return 0

    config = load_scenario(args.scenario)
    set_log_level(args.log_level or config.get("logging", {}).get("level", "WARNING"))

    params = parameters_from_config(
        config,
        {
            "n_qubits": args.qubits,
            "eve_probability": args.eve,
            "noise_enabled": args.noise,
            "error_correction_enabled": args.error_correction,
            "privacy_amplification_enabled": args.privacy_amplification,
            "seed": args.seed,
        },
    )
    logger.debug("Resolved parameters: %s", params)

    if args.sweep is not None:
        return _print_sweep(params, args.sweep, args.sweep_runs)

    protocol = BB84Protocol.from_parameters(params)
    trace = protocol.run(params)
    result = trace.result

    if args.trace:
        print(trace.to_dataframe().to_string(index=False))
        print()
        print(f"Sifted key (Alice): {format_key_preview(trace.sifted_alice_bits)}")
        print(f"Sifted key (Bob)  : {format_key_preview(trace.sifted_bob_bits)}")
        if trace.amplification is not None:
            print(f"Final key         : {format_key_preview(trace.amplification.final_key)}")
        print()

    payload = result.to_dict()
    payload["seed"] = protocol.seed
    print(json.dumps(payload, indent=2))

    verdict = "SECURE" if result.secure else "INSECURE"
    relation = "<=" if result.secure else ">"
    print(f"{verdict}: QBER {result.qber_final:.2%} {relation} {QBER_THRESHOLD:.0%} threshold")
    return 0


def _print_sweep(params: BB84Parameters, points: int, runs: int) -> int:
    base_seed = params.seed if params.seed is not None else 1
    data = sweep_eve_probability(
        params.n_qubits,
        eve_grid(points),
        seeds=[base_seed + offset for offset in range(max(runs, 1))],
        noise_enabled=params.noise_enabled,
        error_correction_enabled=params.error_correction_enabled,
        privacy_amplification_enabled=params.privacy_amplification_enabled,
    )
    print(summarize_sweep(data).to_string(index=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
