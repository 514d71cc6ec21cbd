"""YAML scenario loading.

A scenario file holds an ``assumptions`` mapping (camelCase or snake_case keys)
and optionally a ``presets`` mapping::

    assumptions:
      smpPrice: 130
      peakHours: 3.5
    presets:
      bank_loan_period: 12
"""

from __future__ import annotations

from pathlib import Path

import yaml

from solar_profit.config.assumptions import SimulationAssumptions
from solar_profit.config.financing import FinancingPresets


def _read(path: str | Path) -> dict:
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping at the top level, got {type(data).__name__}")
    return data


def load_assumptions(path: str | Path) -> SimulationAssumptions:
    """Load the ``assumptions`` section of a scenario file."""
    return SimulationAssumptions(**(_read(path).get("assumptions") or {}))


def load_presets(path: str | Path) -> FinancingPresets:
    """Load the ``presets`` section of a scenario file (defaults if absent)."""
    return FinancingPresets(**(_read(path).get("presets") or {}))
