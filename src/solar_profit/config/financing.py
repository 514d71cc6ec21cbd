"""Financing configuration — one projection run and the four fixed scenario presets."""

from __future__ import annotations

from typing import Literal, get_args

from pydantic import Field, model_validator

from solar_profit.config.base import FrozenCamelModel


FinancingType = Literal["SELF_FUNDING", "BANK_LOAN", "GOVERNMENT_LOAN", "FACTORING"]
FINANCING_TYPES: tuple[str, ...] = get_args(FinancingType)

AmortizationMethod = Literal["EQUAL_PRINCIPAL", "EQUAL_PAYMENT"]

PROJECTION_YEARS = 20

DEFAULT_GUARANTEE_FEE_RATE = 0.05
DEFAULT_FACTORING_FEE_RATE = 0.08

FINANCING_TYPE_LABELS: dict[str, str] = {
    "SELF_FUNDING": "자부담 100%",
    "BANK_LOAN": "은행 80% 대출",
    "GOVERNMENT_LOAN": "금융지원사업",
    "FACTORING": "팩토링",
}

FINANCING_TYPE_DESCRIPTIONS: dict[str, str] = {
    "SELF_FUNDING": "초기 투자 전액 자부담, 대출 없음",
    "BANK_LOAN": "자부담 20%, 은행 대출 80% (시중금리)",
    "GOVERNMENT_LOAN": "자부담 20%, 정부 대출 80% (1.75% 고정, 2등급 모듈 필수)",
    "FACTORING": "자부담 0%, 서울보증 5% + 동부화재 7~9% + 은행대출",
}


class AnalysisInput(FrozenCamelModel):
    """Physical, market, and financing assumptions for one 20-year projection.

    Capacity and investment are checked here, at construction, so that the
    engine can treat every instance as valid.
    """

    # --- Plant & investment ---
    capacity_kw: float = Field(gt=0, description="Installed DC capacity (kW)")
    total_investment: int = Field(gt=0, description="Total project cost (KRW)")
    financing_type: FinancingType = Field(description="Financing model to project")

    # --- Financing structure ---
    self_funding_rate: float | None = Field(
        default=None, ge=0, le=1.0,
        description="Equity share of total_investment (0–1). "
                    "None = 1.0 for SELF_FUNDING, 0.0 for FACTORING, 0.2 otherwise.",
    )
    loan_amount: float = Field(default=0.0, ge=0, description="Principal borrowed (KRW)")
    interest_rate: float = Field(default=0.0, ge=0, le=100, description="Annual interest rate (%)")
    loan_period: int = Field(default=0, ge=0, le=40, description="Total loan term incl. grace (years)")
    grace_period: int = Field(default=0, ge=0, description="Interest-only years before principal starts")
    amortization_method: AmortizationMethod = Field(
        default="EQUAL_PRINCIPAL",
        description="EQUAL_PRINCIPAL = straight-line principal, interest on declining balance; "
                    "EQUAL_PAYMENT = constant annuity payment.",
    )
    guarantee_fee_rate: float | None = Field(
        default=None, ge=0, le=1.0,
        description="FACTORING only: one-time guarantee fee as a fraction of loan_amount. "
                    "None = 0.05.",
    )
    factoring_fee_rate: float | None = Field(
        default=None, ge=0, le=1.0,
        description="FACTORING only: yearly factoring fee as a fraction of loan_amount, "
                    "charged for every year of the loan. None = 0.08.",
    )

    # --- Generation ---
    peak_hours: float = Field(default=3.7, gt=0, le=24, description="Daily full-sun-equivalent hours")
    degradation_rate: float = Field(default=0.008, ge=0, lt=1.0, description="Annual output decay fraction")

    # --- Market ---
    smp_price: float = Field(default=120.0, ge=0, description="System Marginal Price (KRW/kWh)")
    rec_price: float = Field(default=40_000.0, ge=0, description="REC price (KRW/REC, 1 REC = 1 MWh)")
    rec_weight: float = Field(default=1.0, ge=0, description="REC weighting multiplier")

    # --- Fixed yearly costs ---
    maintenance_cost: float = Field(default=500_000.0, ge=0, description="Annual safety-management cost (KRW)")
    monitoring_cost: float = Field(default=300_000.0, ge=0, description="Annual monitoring cost (KRW)")

    @model_validator(mode="after")
    def _check_loan_terms(self) -> AnalysisInput:
        if self.financing_type != "SELF_FUNDING" and self.loan_amount > 0 and self.loan_period > 0:
            if self.grace_period >= self.loan_period:
                raise ValueError(
                    f"grace_period ({self.grace_period}) must be shorter than "
                    f"loan_period ({self.loan_period})"
                )
        return self

    @property
    def effective_self_funding_rate(self) -> float:
        if self.self_funding_rate is not None:
            return self.self_funding_rate
        if self.financing_type == "SELF_FUNDING":
            return 1.0
        if self.financing_type == "FACTORING":
            return 0.0
        return 0.2

    @property
    def has_debt(self) -> bool:
        return self.financing_type != "SELF_FUNDING" and self.loan_amount > 0 and self.loan_period > 0


class FinancingPresets(FrozenCamelModel):
    """Scenario parameters fixed by the simulator, not exposed to end users."""

    loan_ratio: float = Field(default=0.8, gt=0, le=1.0, description="Debt share for bank & government loans")

    bank_loan_period: int = Field(default=10, ge=1, description="Bank loan term (years)")
    bank_grace_period: int = Field(default=0, ge=0, description="Bank loan grace (years)")

    government_interest_rate: float = Field(default=1.75, ge=0, description="Fixed government rate (%)")
    government_loan_period: int = Field(default=11, ge=1, description="Grace 1 year + repayment 10 years")
    government_grace_period: int = Field(default=1, ge=0, description="Government loan grace (years)")

    factoring_guarantee_fee_rate: float = Field(
        default=DEFAULT_GUARANTEE_FEE_RATE, ge=0, le=1.0,
        description="Seoul Guarantee one-time fee",
    )
    factoring_loan_period: int = Field(default=5, ge=1, description="Factoring loan term (years)")


def financing_defaults(financing_type: FinancingType, total_investment: float) -> dict[str, float | int]:
    """Default loan structure for a financing type.

    Used to pre-fill a single-scenario analysis.  The returned keys are
    ``AnalysisInput`` field names.
    """
    if financing_type == "SELF_FUNDING":
        return {
            "self_funding_rate": 1.0,
            "loan_amount": 0.0,
            "interest_rate": 0.0,
            "loan_period": 0,
            "grace_period": 0,
        }
    if financing_type == "BANK_LOAN":
        return {
            "self_funding_rate": 0.2,
            "loan_amount": total_investment * 0.8,
            "interest_rate": 5.5,
            "loan_period": 10,
            "grace_period": 0,
        }
    if financing_type == "GOVERNMENT_LOAN":
        return {
            "self_funding_rate": 0.2,
            "loan_amount": total_investment * 0.8,
            "interest_rate": 1.75,
            "loan_period": 11,
            "grace_period": 1,
        }
    if financing_type == "FACTORING":
        return {
            "self_funding_rate": 0.0,
            "loan_amount": float(total_investment),
            "interest_rate": 5.5,
            "loan_period": 5,
            "grace_period": 0,
            "guarantee_fee_rate": DEFAULT_GUARANTEE_FEE_RATE,
            "factoring_fee_rate": DEFAULT_FACTORING_FEE_RATE,
        }
    raise ValueError(f"Unknown financing type: {financing_type!r}")
