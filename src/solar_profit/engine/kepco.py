"""KEPCO grid-connection charge — basic-facility charge + 12-month installment.

Basic charge:
  저압           base (≤ 5 kW) + ceil(kW − 5) × extra-per-kW
  고압 / 특별고압  ceil(kW) × per-kW rate
  (rates depend on 공중 / 지중 supply)

Installment (KEPCO split payment):
  down_payment      = round(total × 30%)
  monthly_principal = round(remaining / 12); month 12 pays the leftover balance
  interest_m        = round(balance_before_m × 3.21% / 12)

All amounts are whole KRW.  Rounding is half-up, as in KEPCO's own
calculator, not Python's banker's rounding.
"""

from __future__ import annotations

import logging
import math

from solar_profit.config.kepco import (
    PaymentType,
    SupplyType,
    VoltageType,
    KepcoTariff,
)
from solar_profit.models.results import (
    ChargeDetailLine,
    InstallmentResult,
    InstallmentScheduleItem,
    KepcoChargeResult,
)

logger = logging.getLogger(__name__)

DEFAULT_TARIFF = KepcoTariff()


def round_half_up(value: float) -> int:
    """Round to the nearest won, halves going up."""
    return int(math.floor(value + 0.5))


def _excess_kw(capacity_kw: float, base_kw: float) -> int:
    return math.ceil(capacity_kw - base_kw)


def calc_basic_charge(
    capacity_kw: float,
    voltage: VoltageType,
    supply: SupplyType,
    tariff: KepcoTariff = DEFAULT_TARIFF,
) -> int:
    """Basic-facility charge (기본시설부담금) in KRW."""
    if voltage == "저압":
        rate = tariff.low_voltage_rate(supply)
        base_kw = tariff.low_voltage_base_capacity_kw
        if capacity_kw <= base_kw:
            return rate.base
        return rate.base + _excess_kw(capacity_kw, base_kw) * rate.extra_per_kw
    return math.ceil(capacity_kw) * tariff.per_kw_rate(voltage, supply)


def calc_basic_charge_details(
    capacity_kw: float,
    voltage: VoltageType,
    supply: SupplyType,
    tariff: KepcoTariff = DEFAULT_TARIFF,
) -> list[ChargeDetailLine]:
    """Line-by-line breakdown of :func:`calc_basic_charge`."""
    details: list[ChargeDetailLine] = []
    if voltage == "저압":
        rate = tariff.low_voltage_rate(supply)
        base_kw = tariff.low_voltage_base_capacity_kw
        details.append(ChargeDetailLine(description=f"{base_kw:g}kW까지 기본", amount=rate.base))
        if capacity_kw > base_kw:
            extra_kw = _excess_kw(capacity_kw, base_kw)
            details.append(ChargeDetailLine(
                description=f"{base_kw:g}kW 초과 {extra_kw}kW × {rate.extra_per_kw:,}원",
                amount=extra_kw * rate.extra_per_kw,
            ))
    else:
        per_kw = tariff.per_kw_rate(voltage, supply)
        kw = math.ceil(capacity_kw)
        details.append(ChargeDetailLine(description=f"{kw}kW × {per_kw:,}원", amount=kw * per_kw))
    return details


def calc_installment(total_charge: int, tariff: KepcoTariff = DEFAULT_TARIFF) -> InstallmentResult:
    """Split ``total_charge`` into a down payment and monthly installments.

    Interest for each month accrues on the balance before that month's
    principal is paid.  The last month's principal is whatever remains, so
    the schedule always closes at exactly zero and the principals sum to
    ``remaining``.
    """
    terms = tariff.installment
    months = terms.months

    down_payment = round_half_up(total_charge * terms.down_payment_ratio)
    remaining = total_charge - down_payment
    monthly_principal = round_half_up(remaining / months)

    schedule: list[InstallmentScheduleItem] = []
    balance = remaining
    for month in range(1, months + 1):
        principal = balance if month == months else min(monthly_principal, balance)
        interest = round_half_up(balance * terms.annual_interest_rate / 12)
        schedule.append(InstallmentScheduleItem(
            month=month,
            principal=principal,
            interest=interest,
            total=principal + interest,
            remaining_balance=balance - principal,
        ))
        balance -= principal

    total_interest = sum(item.interest for item in schedule)

    return InstallmentResult(
        down_payment=down_payment,
        remaining=remaining,
        monthly_principal=monthly_principal,
        schedule=tuple(schedule),
        total_interest=total_interest,
        total_with_interest=total_charge + total_interest,
    )


def calculate_kepco_charge(
    capacity_kw: float,
    voltage_type: VoltageType,
    supply_type: SupplyType,
    distance_charge: int = 0,
    payment_type: PaymentType = "LUMP_SUM",
    tariff: KepcoTariff = DEFAULT_TARIFF,
) -> KepcoChargeResult:
    """Full connection charge: basic charge + distance charge, optionally in installments.

    ``distance_charge`` is quoted by KEPCO per site and passed through as-is.
    """
    if capacity_kw <= 0:
        raise ValueError(f"capacity_kw must be positive, got {capacity_kw}")
    if distance_charge < 0:
        raise ValueError(f"distance_charge must not be negative, got {distance_charge}")

    basic_charge = calc_basic_charge(capacity_kw, voltage_type, supply_type, tariff)
    details = calc_basic_charge_details(capacity_kw, voltage_type, supply_type, tariff)
    total_charge = basic_charge + distance_charge

    installment = None
    if payment_type == "INSTALLMENT":
        installment = calc_installment(total_charge, tariff)

    logger.debug(
        "KEPCO charge: %.1f kW %s/%s, basic %d + distance %d = %d (%s)",
        capacity_kw, voltage_type, supply_type, basic_charge, distance_charge, total_charge, payment_type,
    )

    return KepcoChargeResult(
        capacity_kw=capacity_kw,
        voltage_type=voltage_type,
        supply_type=supply_type,
        basic_charge=basic_charge,
        basic_charge_details=tuple(details),
        distance_charge=distance_charge,
        total_charge=total_charge,
        payment_type=payment_type,
        installment=installment,
    )
