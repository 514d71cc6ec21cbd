"""Four-way financing comparison — one plant, four capital structures.

  SELF_FUNDING     100% equity, no debt
  BANK_LOAN        20% equity, 80% commercial loan (10 years, no grace)
  GOVERNMENT_LOAN  20% equity, 80% subsidized loan (1.75%, 1 grace + 10 years)
  FACTORING        0% equity, full loan at the commercial rate (5 years, equal principal)
                   + guarantee fee + yearly factoring fee

Optionally folds the KEPCO connection charge into the investment before
projecting.
"""

from __future__ import annotations

import logging

from solar_profit.config.assumptions import SimulationAssumptions
from solar_profit.config.financing import AnalysisInput, FinancingPresets, FinancingType
from solar_profit.engine.profit import calculate_profit_analysis
from solar_profit.models.results import AnalysisResult, FinancingComparison, KepcoChargeResult

logger = logging.getLogger(__name__)


def build_scenario_inputs(
    capacity_kw: float,
    total_investment: int,
    assumptions: SimulationAssumptions | None = None,
    presets: FinancingPresets | None = None,
) -> dict[FinancingType, AnalysisInput]:
    """One ``AnalysisInput`` per financing type, sharing the plant & market assumptions.

    Raises pydantic ``ValidationError`` if capacity or investment is not positive.
    """
    a = assumptions or SimulationAssumptions()
    p = presets or FinancingPresets()

    common = dict(
        capacity_kw=capacity_kw,
        total_investment=total_investment,
        peak_hours=a.peak_hours,
        degradation_rate=a.degradation_rate,
        smp_price=a.smp_price,
        rec_price=a.rec_price,
        rec_weight=a.rec_weight,
        maintenance_cost=a.maintenance_cost,
        monitoring_cost=a.monitoring_cost,
    )
    borrowed = total_investment * p.loan_ratio
    equity_share = round(1 - p.loan_ratio, 10)

    return {
        "SELF_FUNDING": AnalysisInput(
            **common,
            financing_type="SELF_FUNDING",
            self_funding_rate=1.0,
        ),
        "BANK_LOAN": AnalysisInput(
            **common,
            financing_type="BANK_LOAN",
            self_funding_rate=equity_share,
            loan_amount=borrowed,
            interest_rate=a.bank_interest_rate,
            loan_period=p.bank_loan_period,
            grace_period=p.bank_grace_period,
            amortization_method=a.amortization_method,
        ),
        "GOVERNMENT_LOAN": AnalysisInput(
            **common,
            financing_type="GOVERNMENT_LOAN",
            self_funding_rate=equity_share,
            loan_amount=borrowed,
            interest_rate=p.government_interest_rate,
            loan_period=p.government_loan_period,
            grace_period=p.government_grace_period,
            amortization_method=a.amortization_method,
        ),
        "FACTORING": AnalysisInput(
            **common,
            financing_type="FACTORING",
            self_funding_rate=0.0,
            loan_amount=float(total_investment),
            interest_rate=a.bank_interest_rate,
            loan_period=p.factoring_loan_period,
            grace_period=0,
            amortization_method="EQUAL_PRINCIPAL",
            guarantee_fee_rate=p.factoring_guarantee_fee_rate,
            factoring_fee_rate=a.factoring_fee_rate,
        ),
    }


def best_financing_model(results: dict[str, AnalysisResult]) -> FinancingType:
    """Financing type with the highest 20-year total profit (first wins ties)."""
    best_type = None
    best_profit = float("-inf")
    for financing_type, result in results.items():
        if result.total_profit_20y > best_profit:
            best_type, best_profit = financing_type, result.total_profit_20y
    if best_type is None:
        raise ValueError("No results to rank")
    return best_type


def run_financing_comparison(
    capacity_kw: float,
    total_investment: int,
    assumptions: SimulationAssumptions | None = None,
    presets: FinancingPresets | None = None,
    kepco_charge: KepcoChargeResult | None = None,
) -> FinancingComparison:
    """Project all four financing models for one plant.

    Parameters
    ----------
    capacity_kw : float
        Installed capacity.
    total_investment : int
        Project cost before the KEPCO charge.
    assumptions : SimulationAssumptions | None
        Market & operating assumptions (defaults if None).
    presets : FinancingPresets | None
        Fixed loan structures (defaults if None).
    kepco_charge : KepcoChargeResult | None
        When given, its ``total_charge`` is added to the investment.
    """
    investment = total_investment
    if kepco_charge is not None:
        investment += kepco_charge.total_charge

    inputs = build_scenario_inputs(capacity_kw, investment, assumptions, presets)
    results = {ft: calculate_profit_analysis(inp) for ft, inp in inputs.items()}
    best = best_financing_model(results)

    logger.info(
        "Financing comparison for %.1f kW / %d KRW: best model %s (%.0f over 20 years)",
        capacity_kw, investment, best, results[best].total_profit_20y,
    )

    return FinancingComparison(
        capacity_kw=capacity_kw,
        total_investment=investment,
        self_funding=results["SELF_FUNDING"],
        bank_loan=results["BANK_LOAN"],
        government_loan=results["GOVERNMENT_LOAN"],
        factoring=results["FACTORING"],
        best_model=best,
        kepco_charge=kepco_charge,
    )
