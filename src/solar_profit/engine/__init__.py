"""Engine — deterministic profit projection and KEPCO charge computation."""

from solar_profit.engine.loan import annuity_payment, build_loan_schedule
from solar_profit.engine.profit import calculate_profit_analysis, yearly_generation
from solar_profit.engine.kepco import (
    calc_basic_charge,
    calc_basic_charge_details,
    calc_installment,
    calculate_kepco_charge,
)
from solar_profit.engine.scenarios import (
    best_financing_model,
    build_scenario_inputs,
    run_financing_comparison,
)

__all__ = [
    "annuity_payment",
    "build_loan_schedule",
    "calculate_profit_analysis",
    "yearly_generation",
    "calc_basic_charge",
    "calc_basic_charge_details",
    "calc_installment",
    "calculate_kepco_charge",
    "best_financing_model",
    "build_scenario_inputs",
    "run_financing_comparison",
]
