"""Loan amortization — yearly debt service with an interest-only grace period.

Two repayment profiles after the grace years:

  EQUAL_PRINCIPAL  principal = L / n each year, interest on the opening balance
  EQUAL_PAYMENT    payment  = L × r × (1+r)^n / ((1+r)^n − 1), principal = payment − interest

where n = loan_period − grace_period and r = interest_rate / 100.
The final year always repays whatever balance is left, so the schedule
closes at exactly zero.
"""

from __future__ import annotations

import logging

from solar_profit.config.financing import AmortizationMethod
from solar_profit.models.results import LoanSchedule, LoanScheduleRow

logger = logging.getLogger(__name__)


def annuity_payment(principal: float, annual_rate: float, years: int) -> float:
    """Constant yearly payment that amortizes ``principal`` over ``years``."""
    if years <= 0:
        return 0.0
    if annual_rate <= 0:
        return principal / years
    factor = (1 + annual_rate) ** years
    return principal * annual_rate * factor / (factor - 1)


def build_loan_schedule(
    loan_amount: float,
    interest_rate_pct: float,
    loan_period: int,
    grace_period: int = 0,
    method: AmortizationMethod = "EQUAL_PRINCIPAL",
) -> LoanSchedule:
    """Generate the year-by-year amortization schedule.

    Parameters
    ----------
    loan_amount : float
        Principal borrowed.
    interest_rate_pct : float
        Annual interest rate in percent (5.5 means 5.5%).
    loan_period : int
        Total term in years, grace years included.
    grace_period : int
        Leading interest-only years.  Must be shorter than ``loan_period``.
    method : AmortizationMethod
        Repayment profile once the grace period is over.
    """
    rate = interest_rate_pct / 100
    if loan_amount <= 0 or loan_period <= 0:
        return LoanSchedule(
            loan_amount=max(loan_amount, 0.0), annual_rate=rate, rows=(),
            total_interest_paid=0.0, total_principal_paid=0.0,
        )
    if grace_period >= loan_period:
        raise ValueError(
            f"grace_period ({grace_period}) must be shorter than loan_period ({loan_period})"
        )

    amort_years = loan_period - grace_period
    equal_principal = loan_amount / amort_years
    payment = annuity_payment(loan_amount, rate, amort_years)

    rows: list[LoanScheduleRow] = []
    balance = loan_amount
    total_interest = 0.0
    total_principal = 0.0

    for year in range(1, loan_period + 1):
        interest = balance * rate
        if year <= grace_period:
            principal = 0.0
        elif year == loan_period:
            principal = balance
        elif method == "EQUAL_PAYMENT":
            principal = min(payment - interest, balance)
        else:
            principal = min(equal_principal, balance)

        closing = 0.0 if year == loan_period else balance - principal

        rows.append(LoanScheduleRow(
            year=year,
            opening_balance=balance,
            interest=interest,
            principal=principal,
            payment=interest + principal,
            closing_balance=closing,
        ))

        total_interest += interest
        total_principal += principal
        balance = closing

    logger.debug(
        "Loan schedule: %.0f at %.2f%% over %d years (%d grace, %s), interest %.0f",
        loan_amount, interest_rate_pct, loan_period, grace_period, method, total_interest,
    )

    return LoanSchedule(
        loan_amount=loan_amount,
        annual_rate=rate,
        rows=tuple(rows),
        total_interest_paid=total_interest,
        total_principal_paid=total_principal,
    )
