"""YAML run presets.

``base.yaml`` holds the defaults; each file under ``scenarios/`` overrides
only the keys it names. The ``protocol`` section maps onto
:class:`~bb84sim.bb84_protocol.BB84Parameters`, the ``logging`` section
carries the log level the CLI applies.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from bb84sim.bb84_protocol import BB84Parameters

CONFIGS_DIR = Path(__file__).parent
SCENARIOS_DIR = CONFIGS_DIR / "scenarios"

_PROTOCOL_KEYS = (
    "n_qubits",
    "eve_probability",
    "noise_enabled",
    "error_correction_enabled",
    "privacy_amplification_enabled",
    "seed",
)


def _read_yaml(path: Path) -> Dict[str, Any]:
    with open(path, "r") as f:
        return yaml.safe_load(f) or {}


def _overlay(base: Dict[str, Any], layer: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in layer.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _overlay(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_scenario(name: Optional[str] = None) -> Dict[str, Any]:
    """Base defaults overlaid with scenario ``name`` (base only when ``name`` is None).

    Raises ``FileNotFoundError`` for an unknown scenario.
    """
    config = _read_yaml(CONFIGS_DIR / "base.yaml")
    if name is None:
        return config

    scenario_path = SCENARIOS_DIR / f"{name}.yaml"
    if not scenario_path.exists():
        raise FileNotFoundError(f"Scenario not found: {scenario_path}")
    return _overlay(config, _read_yaml(scenario_path))


def list_scenarios() -> List[str]:
    return sorted(path.stem for path in SCENARIOS_DIR.glob("*.yaml"))


def parameters_from_config(config: Dict[str, Any], overrides: Optional[Dict[str, Any]] = None) -> BB84Parameters:
    """Build run parameters from the ``protocol`` section of a configuration.

    Unknown keys are ignored; ``None`` values in ``overrides`` are skipped.
    """
    section = dict(config.get("protocol") or {})
    section.update({key: value for key, value in (overrides or {}).items() if value is not None})
    return BB84Parameters(**{key: section[key] for key in _PROTOCOL_KEYS if key in section})


__all__ = [
    "load_scenario",
    "list_scenarios",
    "parameters_from_config",
    "CONFIGS_DIR",
    "SCENARIOS_DIR",
]
