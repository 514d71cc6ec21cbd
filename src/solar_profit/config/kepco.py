"""KEPCO grid-connection tariff — basic-facility charge and installment terms."""

from typing import Literal

from pydantic import BaseModel, Field


VoltageType = Literal["저압", "고압", "특별고압"]
SupplyType = Literal["공중", "지중"]
PaymentType = Literal["LUMP_SUM", "INSTALLMENT"]

PAYMENT_TYPE_LABELS: dict[str, str] = {
    "LUMP_SUM": "일시불",
    "INSTALLMENT": "분할납부 (12개월, 이자 3.21%)",
}


class LowVoltageRate(BaseModel):
    """저압 tariff: flat charge up to the base capacity, then per extra kW."""

    base: int = Field(ge=0, description="Charge covering the first base_capacity_kw (KRW)")
    extra_per_kw: int = Field(ge=0, description="Charge per kW above base (KRW, kW rounded up)")


class PerKwRate(BaseModel):
    """고압 / 특별고압 tariff: linear in capacity."""

    overhead: int = Field(default=24_000, ge=0, description="공중 supply (KRW per kW)")
    underground: int = Field(default=50_000, ge=0, description="지중 supply (KRW per kW)")

    def for_supply(self, supply: SupplyType) -> int:
        return self.overhead if supply == "공중" else self.underground


class InstallmentTerms(BaseModel):
    """Split-payment terms offered by KEPCO."""

    down_payment_ratio: float = Field(default=0.30, ge=0, le=1.0, description="Paid up front")
    months: int = Field(default=12, ge=1, description="Number of monthly installments")
    annual_interest_rate: float = Field(default=0.0321, ge=0, description="Annual rate (fraction)")


class KepcoTariff(BaseModel):
    """Complete basic-facility charge schedule."""

    low_voltage_base_capacity_kw: float = Field(default=5.0, gt=0, description="Capacity covered by the 저압 base charge")
    low_voltage_overhead: LowVoltageRate = Field(
        default_factory=lambda: LowVoltageRate(base=306_000, extra_per_kw=121_000),
    )
    low_voltage_underground: LowVoltageRate = Field(
        default_factory=lambda: LowVoltageRate(base=588_000, extra_per_kw=141_000),
    )
    high_voltage: PerKwRate = Field(default_factory=PerKwRate)
    extra_high_voltage: PerKwRate = Field(default_factory=PerKwRate)
    installment: InstallmentTerms = Field(default_factory=InstallmentTerms)

    def low_voltage_rate(self, supply: SupplyType) -> LowVoltageRate:
        return self.low_voltage_overhead if supply == "공중" else self.low_voltage_underground

    def per_kw_rate(self, voltage: VoltageType, supply: SupplyType) -> int:
        rates = self.high_voltage if voltage == "고압" else self.extra_high_voltage
        return rates.for_supply(supply)
