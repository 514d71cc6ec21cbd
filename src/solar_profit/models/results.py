"""Result types — the contract between the engines and the API.

Every result is frozen: a projection or charge calculation is built once
and never mutated afterwards.  JSON uses camelCase aliases.
"""

from __future__ import annotations

from pydantic import Field, field_validator

from solar_profit.config.base import FrozenCamelModel
from solar_profit.config.financing import FinancingType
from solar_profit.config.kepco import PaymentType, SupplyType, VoltageType


# ═══════════════════════════════════════════════════════════════════════════
# Loan schedule
# ═══════════════════════════════════════════════════════════════════════════

class LoanScheduleRow(FrozenCamelModel):
    """One year of the loan amortization schedule."""

    year: int
    opening_balance: float
    interest: float
    principal: float
    """Zero during the grace period."""
    payment: float
    """interest + principal."""
    closing_balance: float


class LoanSchedule(FrozenCamelModel):
    """Full yearly amortization schedule."""

    loan_amount: float
    annual_rate: float
    """Fraction, e.g. 0.055 for 5.5%."""
    rows: tuple[LoanScheduleRow, ...]
    total_interest_paid: float
    total_principal_paid: float
    """Equals loan_amount."""

    def row_for_year(self, year: int) -> LoanScheduleRow | None:
        if 1 <= year <= len(self.rows):
            return self.rows[year - 1]
        return None


# ═══════════════════════════════════════════════════════════════════════════
# Profit projection
# ═══════════════════════════════════════════════════════════════════════════

class YearlyDataItem(FrozenCamelModel):
    """One projection year."""

    year: int
    generation_kwh: float
    smp_revenue: float
    rec_revenue: float
    total_revenue: float
    maintenance_cost: float
    monitoring_cost: float
    operating_cost: float
    """maintenance_cost + monitoring_cost."""
    loan_principal: float
    loan_interest: float
    financing_fees: float
    """Factoring guarantee (year 1) and factoring fees; zero for other models."""
    total_expense: float
    net_cash_flow: float
    cumulative_cash_flow: float
    """Starts from −(equity outlay) before year 1."""


class AnalysisResult(FrozenCamelModel):
    """20-year projection for one financing model."""

    financing_type: FinancingType
    yearly_data: tuple[YearlyDataItem, ...]
    payback_period: int | None
    """First year whose cumulative cash flow is ≥ 0.  None if never recovered."""
    payback_period_interpolated: float | None
    """Break-even point in fractional years (0.1 precision).  None if never recovered."""
    total_profit_20y: float = Field(alias="totalProfit20y")
    """Σ net_cash_flow over all years."""
    roi: float
    """total_profit_20y / total_investment (fraction, not annualized)."""
    initial_cost: float
    """Equity outlay = total_investment × self-funding rate."""
    equity_roi: float | None
    """(total_profit_20y − initial_cost) / initial_cost.  None when nothing is invested up front."""
    total_revenue_20y: float = Field(alias="totalRevenue20y")
    total_expense_20y: float = Field(alias="totalExpense20y")

    @field_validator("yearly_data")
    @classmethod
    def _years_in_order(cls, v: tuple[YearlyDataItem, ...]) -> tuple[YearlyDataItem, ...]:
        for expected, item in enumerate(v, start=1):
            if item.year != expected:
                raise ValueError(f"yearly_data out of order: expected year {expected}, got {item.year}")
        return v


# ═══════════════════════════════════════════════════════════════════════════
# KEPCO connection charge
# ═══════════════════════════════════════════════════════════════════════════

class ChargeDetailLine(FrozenCamelModel):
    """One line of the basic-charge breakdown."""

    description: str
    amount: int


class InstallmentScheduleItem(FrozenCamelModel):
    month: int
    principal: int
    interest: int
    total: int
    remaining_balance: int


class InstallmentResult(FrozenCamelModel):
    """12-month split payment of the connection charge."""

    down_payment: int
    remaining: int
    monthly_principal: int
    schedule: tuple[InstallmentScheduleItem, ...]
    total_interest: int
    total_with_interest: int


class KepcoChargeResult(FrozenCamelModel):
    capacity_kw: float
    voltage_type: VoltageType
    supply_type: SupplyType
    basic_charge: int
    basic_charge_details: tuple[ChargeDetailLine, ...]
    distance_charge: int
    total_charge: int
    payment_type: PaymentType
    installment: InstallmentResult | None = None
    """Present only for INSTALLMENT."""


# ═══════════════════════════════════════════════════════════════════════════
# Four-way comparison
# ═══════════════════════════════════════════════════════════════════════════

class FinancingComparison(FrozenCamelModel):
    """The same plant projected under all four financing models."""

    capacity_kw: float
    total_investment: int
    """Investment actually projected (includes the KEPCO charge when applied)."""
    self_funding: AnalysisResult
    bank_loan: AnalysisResult
    government_loan: AnalysisResult
    factoring: AnalysisResult
    best_model: FinancingType
    """Model with the highest 20-year total profit."""
    kepco_charge: KepcoChargeResult | None = Field(default=None)

    def by_type(self) -> dict[str, AnalysisResult]:
        return {
            "SELF_FUNDING": self.self_funding,
            "BANK_LOAN": self.bank_loan,
            "GOVERNMENT_LOAN": self.government_loan,
            "FACTORING": self.factoring,
        }
