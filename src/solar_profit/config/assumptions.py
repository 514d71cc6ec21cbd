"""Market & operating assumptions shared by all four financing scenarios."""

from pydantic import Field

from solar_profit.config.base import CamelModel
from solar_profit.config.financing import AmortizationMethod


class SimulationAssumptions(CamelModel):
    """User-adjustable assumptions for a side-by-side financing comparison.

    Every field has the simulator's public default, so an empty body yields
    the standard comparison.
    """

    # --- Market ---
    smp_price: float = Field(default=120.0, ge=0, description="SMP (KRW/kWh)")
    rec_price: float = Field(default=40_000.0, ge=0, description="REC price (KRW/REC)")
    rec_weight: float = Field(default=1.0, ge=0, description="REC weighting multiplier")

    # --- Generation ---
    peak_hours: float = Field(default=3.7, gt=0, le=24, description="Daily full-sun-equivalent hours")
    degradation_rate: float = Field(default=0.008, ge=0, lt=1.0, description="Annual output decay fraction")

    # --- Fixed yearly costs ---
    maintenance_cost: float = Field(default=500_000.0, ge=0, description="Annual safety-management cost (KRW)")
    monitoring_cost: float = Field(default=300_000.0, ge=0, description="Annual monitoring cost (KRW)")

    # --- Financing knobs ---
    bank_interest_rate: float = Field(
        default=5.5, ge=0, le=100,
        description="Commercial rate (%) for the bank loan and the factoring loan",
    )
    factoring_fee_rate: float = Field(
        default=0.08, ge=0, le=1.0,
        description="Yearly factoring fee as a fraction of the loan (typically 0.07–0.09)",
    )
    amortization_method: AmortizationMethod = Field(
        default="EQUAL_PRINCIPAL",
        description="Repayment profile for bank & government loans",
    )
