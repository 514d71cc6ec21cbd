"""Configuration models — projection inputs, scenario presets, KEPCO tariff."""

from solar_profit.config.financing import (
    FINANCING_TYPES,
    FINANCING_TYPE_DESCRIPTIONS,
    FINANCING_TYPE_LABELS,
    PROJECTION_YEARS,
    AmortizationMethod,
    AnalysisInput,
    FinancingPresets,
    FinancingType,
    financing_defaults,
)
from solar_profit.config.assumptions import SimulationAssumptions
from solar_profit.config.kepco import (
    PAYMENT_TYPE_LABELS,
    InstallmentTerms,
    KepcoTariff,
    PaymentType,
    SupplyType,
    VoltageType,
)
from solar_profit.config.loader import load_assumptions, load_presets

__all__ = [
    "FINANCING_TYPES",
    "FINANCING_TYPE_DESCRIPTIONS",
    "FINANCING_TYPE_LABELS",
    "PROJECTION_YEARS",
    "AmortizationMethod",
    "AnalysisInput",
    "FinancingPresets",
    "FinancingType",
    "financing_defaults",
    "SimulationAssumptions",
    "PAYMENT_TYPE_LABELS",
    "InstallmentTerms",
    "KepcoTariff",
    "PaymentType",
    "SupplyType",
    "VoltageType",
    "load_assumptions",
    "load_presets",
]
