"""Profit projection — 20-year cash flow for one financing model.

Per year y = 1..20:

  energy   = capacity_kw × peak_hours × 365 × (1 − degradation)^(y−1)
  revenue  = energy × SMP  +  energy × rec_weight × rec_price / 1000
  expense  = maintenance + monitoring + loan principal + loan interest + fees
  net      = revenue − expense
  cumul_y  = cumul_(y−1) + net,   cumul_0 = −total_investment × self_funding_rate

Factoring adds a one-time guarantee fee in year 1 and a factoring fee in
every year of the loan, both on top of ordinary loan interest.
"""

from __future__ import annotations

import logging

from solar_profit.config.financing import (
    DEFAULT_FACTORING_FEE_RATE,
    DEFAULT_GUARANTEE_FEE_RATE,
    PROJECTION_YEARS,
    AnalysisInput,
)
from solar_profit.engine.loan import build_loan_schedule
from solar_profit.models.results import AnalysisResult, LoanSchedule, YearlyDataItem

logger = logging.getLogger(__name__)

DAYS_PER_YEAR = 365
KWH_PER_REC = 1000


def yearly_generation(capacity_kw: float, peak_hours: float, degradation_rate: float, year: int) -> float:
    """Energy produced in ``year`` (1-indexed), in kWh."""
    return capacity_kw * peak_hours * DAYS_PER_YEAR * (1 - degradation_rate) ** (year - 1)


def find_payback_year(cumulative: list[float]) -> int | None:
    """First 1-indexed year whose cumulative cash flow is ≥ 0."""
    for year, value in enumerate(cumulative, start=1):
        if value >= 0:
            return year
    return None


def interpolate_payback(baseline: float, cumulative: list[float]) -> float | None:
    """Fractional break-even year, linear within the payback year, rounded to 0.1."""
    previous = baseline
    for year, value in enumerate(cumulative, start=1):
        if value >= 0:
            if previous >= 0:
                return float(year - 1)
            fraction = -previous / (value - previous)
            return round(year - 1 + fraction, 1)
        previous = value
    return None


def _loan_schedule_for(inp: AnalysisInput) -> LoanSchedule | None:
    if not inp.has_debt:
        return None
    return build_loan_schedule(
        inp.loan_amount,
        inp.interest_rate,
        inp.loan_period,
        inp.grace_period,
        inp.amortization_method,
    )


def _factoring_fees(inp: AnalysisInput, year: int) -> float:
    if inp.financing_type != "FACTORING" or inp.loan_amount <= 0:
        return 0.0
    guarantee_rate = (
        inp.guarantee_fee_rate if inp.guarantee_fee_rate is not None else DEFAULT_GUARANTEE_FEE_RATE
    )
    factoring_rate = (
        inp.factoring_fee_rate if inp.factoring_fee_rate is not None else DEFAULT_FACTORING_FEE_RATE
    )
    fees = 0.0
    if year == 1:
        fees += guarantee_rate * inp.loan_amount
    if year <= inp.loan_period:
        fees += factoring_rate * inp.loan_amount
    return fees


def calculate_profit_analysis(inp: AnalysisInput) -> AnalysisResult:
    """Project 20 years of cash flow for one financing model.

    Parameters
    ----------
    inp : AnalysisInput
        Validated plant, market and financing assumptions.

    Returns
    -------
    AnalysisResult
        Yearly table plus payback, total profit and ROI.
    """
    schedule = _loan_schedule_for(inp)
    initial_cost = inp.total_investment * inp.effective_self_funding_rate
    operating_cost = inp.maintenance_cost + inp.monitoring_cost

    yearly: list[YearlyDataItem] = []
    cumulative_values: list[float] = []
    cumulative = -initial_cost

    for year in range(1, PROJECTION_YEARS + 1):
        generation = yearly_generation(inp.capacity_kw, inp.peak_hours, inp.degradation_rate, year)
        smp_revenue = generation * inp.smp_price
        rec_revenue = generation / KWH_PER_REC * inp.rec_price * inp.rec_weight
        total_revenue = smp_revenue + rec_revenue

        row = schedule.row_for_year(year) if schedule is not None else None
        principal = row.principal if row is not None else 0.0
        interest = row.interest if row is not None else 0.0
        fees = _factoring_fees(inp, year)

        total_expense = operating_cost + principal + interest + fees
        net = total_revenue - total_expense
        cumulative += net
        cumulative_values.append(cumulative)

        yearly.append(YearlyDataItem(
            year=year,
            generation_kwh=generation,
            smp_revenue=smp_revenue,
            rec_revenue=rec_revenue,
            total_revenue=total_revenue,
            maintenance_cost=inp.maintenance_cost,
            monitoring_cost=inp.monitoring_cost,
            operating_cost=operating_cost,
            loan_principal=principal,
            loan_interest=interest,
            financing_fees=fees,
            total_expense=total_expense,
            net_cash_flow=net,
            cumulative_cash_flow=cumulative,
        ))

    total_profit = sum(item.net_cash_flow for item in yearly)
    total_revenue_20y = sum(item.total_revenue for item in yearly)
    total_expense_20y = sum(item.total_expense for item in yearly)
    payback = find_payback_year(cumulative_values)

    equity_roi = (total_profit - initial_cost) / initial_cost if initial_cost > 0 else None

    logger.debug(
        "%s: %.1f kW, investment %d, total profit %.0f, payback %s",
        inp.financing_type, inp.capacity_kw, inp.total_investment, total_profit, payback,
    )

    return AnalysisResult(
        financing_type=inp.financing_type,
        yearly_data=tuple(yearly),
        payback_period=payback,
        payback_period_interpolated=interpolate_payback(-initial_cost, cumulative_values),
        total_profit_20y=total_profit,
        roi=total_profit / inp.total_investment,
        initial_cost=initial_cost,
        equity_roi=equity_roi,
        total_revenue_20y=total_revenue_20y,
        total_expense_20y=total_expense_20y,
    )
