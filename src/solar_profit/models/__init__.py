"""Result models — engine output contracts."""

from solar_profit.models.results import (
    AnalysisResult,
    ChargeDetailLine,
    FinancingComparison,
    InstallmentResult,
    InstallmentScheduleItem,
    KepcoChargeResult,
    LoanSchedule,
    LoanScheduleRow,
    YearlyDataItem,
)

__all__ = [
    "AnalysisResult",
    "ChargeDetailLine",
    "FinancingComparison",
    "InstallmentResult",
    "InstallmentScheduleItem",
    "KepcoChargeResult",
    "LoanSchedule",
    "LoanScheduleRow",
    "YearlyDataItem",
]
