"""Narrative generator — plain-text interpretation of a financing comparison.

Turns a ``FinancingComparison`` into a readable summary: one block per
financing model, a ranking by 20-year profit, and the recommended model.
"""

from __future__ import annotations

from solar_profit.config.financing import FINANCING_TYPE_DESCRIPTIONS, FINANCING_TYPE_LABELS
from solar_profit.config.kepco import PAYMENT_TYPE_LABELS
from solar_profit.models.results import AnalysisResult, FinancingComparison, KepcoChargeResult


def _won(value: float) -> str:
    return f"{value:,.0f}원"


def _payback_text(result: AnalysisResult) -> str:
    if result.payback_period is None:
        return "not recovered within 20 years"
    return f"year {result.payback_period} (≈{result.payback_period_interpolated:.1f} years)"


def headline_metrics(result: AnalysisResult) -> dict[str, float | int | None]:
    """Compact numbers for one model, keyed in camelCase like the rest of the JSON."""
    return {
        "totalProfit20y": round(result.total_profit_20y),
        "roiPct": round(result.roi * 100, 1),
        "paybackPeriod": result.payback_period,
        "initialCost": round(result.initial_cost),
    }


def _kepco_section(charge: KepcoChargeResult) -> list[str]:
    lines = [
        "",
        "=" * 60,
        "KEPCO CONNECTION CHARGE",
        "=" * 60,
        f"{charge.capacity_kw:g} kW, {charge.voltage_type} / {charge.supply_type}",
    ]
    for detail in charge.basic_charge_details:
        lines.append(f"  {detail.description:30s} {_won(detail.amount):>16s}")
    lines.append(f"  {'Distance charge':30s} {_won(charge.distance_charge):>16s}")
    lines.append(f"  {'Total':30s} {_won(charge.total_charge):>16s}")
    lines.append(f"Payment: {PAYMENT_TYPE_LABELS[charge.payment_type]}")
    if charge.installment is not None:
        inst = charge.installment
        lines.append(
            f"Paid in installments: {_won(inst.down_payment)} down, "
            f"{len(inst.schedule)} months, {_won(inst.total_interest)} interest"
        )
    return lines


def generate_comparison_narrative(comparison: FinancingComparison) -> str:
    """Summarize all four financing models and recommend one.

    Sections:
      1. Project summary
      2. Per-model results
      3. Ranking by 20-year profit
      4. KEPCO charge (when included)
    """
    by_type = comparison.by_type()
    sections: list[str] = []

    # ── 1. Project summary ──
    first_year = comparison.self_funding.yearly_data[0]
    sections.append("=" * 60)
    sections.append("PROJECT SUMMARY")
    sections.append("=" * 60)
    sections.append(
        f"Capacity: {comparison.capacity_kw:g} kW\n"
        f"Total investment: {_won(comparison.total_investment)}\n"
        f"Year-1 generation: {first_year.generation_kwh:,.0f} kWh\n"
        f"Year-1 revenue: {_won(first_year.total_revenue)}"
    )

    # ── 2. Per-model results ──
    sections.append("")
    sections.append("=" * 60)
    sections.append("FINANCING MODELS")
    sections.append("=" * 60)
    for financing_type, result in by_type.items():
        sections.append(
            f"{FINANCING_TYPE_LABELS[financing_type]} — {FINANCING_TYPE_DESCRIPTIONS[financing_type]}\n"
            f"  Equity outlay:     {_won(result.initial_cost)}\n"
            f"  20-year profit:    {_won(result.total_profit_20y)}\n"
            f"  ROI:               {result.roi * 100:.1f}%\n"
            f"  Payback:           {_payback_text(result)}"
        )

    # ── 3. Ranking ──
    ranked = sorted(by_type.items(), key=lambda kv: kv[1].total_profit_20y, reverse=True)
    sections.append("")
    sections.append("=" * 60)
    sections.append("RANKING (20-year profit)")
    sections.append("=" * 60)
    for rank, (financing_type, result) in enumerate(ranked, start=1):
        sections.append(f"  {rank}. {FINANCING_TYPE_LABELS[financing_type]:16s} {_won(result.total_profit_20y):>20s}")
    sections.append(f"\nRecommended: {FINANCING_TYPE_LABELS[comparison.best_model]}")

    unrecovered = [FINANCING_TYPE_LABELS[ft] for ft, r in by_type.items() if r.payback_period is None]
    if unrecovered:
        sections.append(f"Warning: investment not recovered within 20 years for {', '.join(unrecovered)}.")

    # ── 4. KEPCO ──
    if comparison.kepco_charge is not None:
        sections.extend(_kepco_section(comparison.kepco_charge))

    return "\n".join(sections)
