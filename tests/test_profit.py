"""Tests for the 20-year profit projection."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from solar_profit.config import PROJECTION_YEARS, AnalysisInput
from solar_profit.engine.profit import (
    calculate_profit_analysis,
    find_payback_year,
    interpolate_payback,
    yearly_generation,
)


def _revised(inp: AnalysisInput, **changes) -> AnalysisInput:
    """Copy of ``inp`` with ``changes`` applied, re-running every validator."""
    return AnalysisInput(**{**inp.model_dump(), **changes})


def _assert_payback_consistent(result):
    cumulative = [y.cumulative_cash_flow for y in result.yearly_data]
    if result.payback_period is None:
        assert all(c < 0 for c in cumulative)
        assert result.payback_period_interpolated is None
    else:
        idx = result.payback_period - 1
        assert cumulative[idx] >= 0
        assert all(c < 0 for c in cumulative[:idx])


class TestGeneration:
    def test_first_year_energy(self):
        assert yearly_generation(100, 3.7, 0.008, 1) == pytest.approx(135_050)

    def test_degradation_compounds(self):
        y1 = yearly_generation(100, 3.7, 0.008, 1)
        y3 = yearly_generation(100, 3.7, 0.008, 3)
        assert y3 == pytest.approx(y1 * 0.992 ** 2)

    def test_strictly_decreasing_with_degradation(self, self_funding_input):
        result = calculate_profit_analysis(self_funding_input)
        energy = [y.generation_kwh for y in result.yearly_data]
        for prev, cur in zip(energy, energy[1:]):
            assert cur < prev

    def test_constant_without_degradation(self, self_funding_input):
        inp = _revised(self_funding_input, degradation_rate=0.0)
        result = calculate_profit_analysis(inp)
        energy = {y.generation_kwh for y in result.yearly_data}
        assert len(energy) == 1


class TestSelfFunding:
    def test_reference_plant_year_one(self, self_funding_input):
        result = calculate_profit_analysis(self_funding_input)
        y1 = result.yearly_data[0]
        assert y1.generation_kwh == pytest.approx(135_050)
        assert y1.smp_revenue == pytest.approx(16_206_000)
        assert y1.rec_revenue == pytest.approx(5_402_000)
        assert y1.total_revenue == pytest.approx(21_608_000)
        assert y1.operating_cost == 800_000
        assert y1.net_cash_flow == pytest.approx(20_808_000)
        assert y1.cumulative_cash_flow == pytest.approx(-150_000_000 + 20_808_000)

    def test_no_debt_service(self, self_funding_input):
        result = calculate_profit_analysis(self_funding_input)
        for y in result.yearly_data:
            assert y.loan_principal == 0
            assert y.loan_interest == 0
            assert y.financing_fees == 0

    def test_roi_and_payback(self, self_funding_input):
        result = calculate_profit_analysis(self_funding_input)
        assert result.roi > 0
        assert result.payback_period == 8
        assert 7 < result.payback_period_interpolated < 8
        assert result.initial_cost == 150_000_000
        assert result.equity_roi > 0

    def test_loan_fields_ignored(self, self_funding_input):
        """A SELF_FUNDING run never services debt, even if loan fields are filled in."""
        inp = _revised(self_funding_input, loan_amount=50_000_000, interest_rate=5, loan_period=5)
        result = calculate_profit_analysis(inp)
        assert result.total_profit_20y == calculate_profit_analysis(self_funding_input).total_profit_20y

    def test_revised_input_is_validated(self, self_funding_input):
        with pytest.raises(ValidationError):
            _revised(self_funding_input, financing_type="BANK_LOAN", loan_amount=1_000_000, loan_period=2, grace_period=5)
        with pytest.raises(ValidationError):
            _revised(self_funding_input, degradation_rate=1.0)


class TestResultShape:
    @pytest.mark.parametrize("fixture", [
        "self_funding_input", "bank_loan_input", "government_loan_input", "factoring_input",
    ])
    def test_twenty_ordered_years(self, fixture, request):
        result = calculate_profit_analysis(request.getfixturevalue(fixture))
        assert len(result.yearly_data) == PROJECTION_YEARS
        assert [y.year for y in result.yearly_data] == list(range(1, 21))

    @pytest.mark.parametrize("fixture", [
        "self_funding_input", "bank_loan_input", "government_loan_input", "factoring_input",
    ])
    def test_total_profit_is_sum_of_net(self, fixture, request):
        result = calculate_profit_analysis(request.getfixturevalue(fixture))
        assert result.total_profit_20y == sum(y.net_cash_flow for y in result.yearly_data)

    @pytest.mark.parametrize("fixture", [
        "self_funding_input", "bank_loan_input", "government_loan_input", "factoring_input",
    ])
    def test_payback_is_first_non_negative_year(self, fixture, request):
        _assert_payback_consistent(calculate_profit_analysis(request.getfixturevalue(fixture)))

    def test_cumulative_is_running_sum(self, bank_loan_input):
        result = calculate_profit_analysis(bank_loan_input)
        running = -result.initial_cost
        for y in result.yearly_data:
            running += y.net_cash_flow
            assert y.cumulative_cash_flow == pytest.approx(running)

    def test_expense_breakdown(self, factoring_input):
        result = calculate_profit_analysis(factoring_input)
        for y in result.yearly_data:
            assert y.total_expense == pytest.approx(
                y.operating_cost + y.loan_principal + y.loan_interest + y.financing_fees
            )
            assert y.net_cash_flow == pytest.approx(y.total_revenue - y.total_expense)

    def test_totals(self, bank_loan_input):
        result = calculate_profit_analysis(bank_loan_input)
        assert result.total_revenue_20y == pytest.approx(sum(y.total_revenue for y in result.yearly_data))
        assert result.total_expense_20y == pytest.approx(sum(y.total_expense for y in result.yearly_data))
        assert result.total_profit_20y == pytest.approx(result.total_revenue_20y - result.total_expense_20y)

    def test_result_is_immutable(self, self_funding_input):
        result = calculate_profit_analysis(self_funding_input)
        with pytest.raises(ValidationError):
            result.roi = 0
        with pytest.raises(ValidationError):
            result.yearly_data[0].net_cash_flow = 0

    def test_roi_is_fraction_of_investment(self, bank_loan_input):
        result = calculate_profit_analysis(bank_loan_input)
        assert result.roi == pytest.approx(result.total_profit_20y / 150_000_000)


class TestBankLoan:
    def test_year_one_debt_service(self, bank_loan_input):
        y1 = calculate_profit_analysis(bank_loan_input).yearly_data[0]
        assert y1.loan_principal == pytest.approx(12_000_000)
        assert y1.loan_interest == pytest.approx(120_000_000 * 0.055)

    def test_interest_on_declining_balance(self, bank_loan_input):
        data = calculate_profit_analysis(bank_loan_input).yearly_data
        interest = [y.loan_interest for y in data[:10]]
        for prev, cur in zip(interest, interest[1:]):
            assert cur < prev
        assert data[9].loan_interest == pytest.approx(12_000_000 * 0.055)

    def test_debt_free_after_term(self, bank_loan_input):
        data = calculate_profit_analysis(bank_loan_input).yearly_data
        assert sum(y.loan_principal for y in data) == pytest.approx(120_000_000)
        for y in data[10:]:
            assert y.loan_principal == 0
            assert y.loan_interest == 0

    def test_equity_baseline(self, bank_loan_input):
        result = calculate_profit_analysis(bank_loan_input)
        assert result.initial_cost == pytest.approx(30_000_000)
        assert result.yearly_data[0].cumulative_cash_flow == pytest.approx(
            -30_000_000 + result.yearly_data[0].net_cash_flow
        )

    def test_equal_payment_profile(self, bank_loan_input):
        inp = _revised(bank_loan_input, amortization_method="EQUAL_PAYMENT")
        data = calculate_profit_analysis(inp).yearly_data
        payments = [y.loan_principal + y.loan_interest for y in data[:10]]
        for p in payments:
            assert p == pytest.approx(payments[0], rel=1e-9)
        assert sum(y.loan_principal for y in data) == pytest.approx(120_000_000)


class TestGovernmentLoan:
    def test_grace_year_is_interest_only(self, government_loan_input):
        data = calculate_profit_analysis(government_loan_input).yearly_data
        assert data[0].loan_principal == 0
        assert data[0].loan_interest == pytest.approx(120_000_000 * 0.0175)

    def test_repayment_after_grace(self, government_loan_input):
        data = calculate_profit_analysis(government_loan_input).yearly_data
        assert data[1].loan_principal == pytest.approx(12_000_000)
        assert data[1].loan_interest == pytest.approx(120_000_000 * 0.0175)
        assert data[10].loan_principal == pytest.approx(12_000_000)
        assert data[11].loan_principal == 0

    def test_cumulative_negative_during_grace(self, government_loan_input):
        result = calculate_profit_analysis(government_loan_input)
        assert result.yearly_data[0].cumulative_cash_flow < 0

    def test_cheaper_than_bank(self, government_loan_input, bank_loan_input):
        gov = calculate_profit_analysis(government_loan_input)
        bank = calculate_profit_analysis(bank_loan_input)
        assert gov.total_profit_20y > bank.total_profit_20y


class TestFactoring:
    def test_fees_on_top_of_interest(self, factoring_input):
        data = calculate_profit_analysis(factoring_input).yearly_data
        assert data[0].financing_fees == pytest.approx(150_000_000 * (0.05 + 0.08))
        assert data[0].loan_interest == pytest.approx(150_000_000 * 0.055)
        assert data[0].loan_principal == pytest.approx(30_000_000)

    def test_recurring_fee_during_loan_only(self, factoring_input):
        data = calculate_profit_analysis(factoring_input).yearly_data
        for y in data[1:5]:
            assert y.financing_fees == pytest.approx(150_000_000 * 0.08)
        for y in data[5:]:
            assert y.financing_fees == 0
            assert y.loan_principal == 0

    def test_default_fee_rates(self, factoring_input):
        inp = _revised(factoring_input, guarantee_fee_rate=None, factoring_fee_rate=None)
        data = calculate_profit_analysis(inp).yearly_data
        assert data[0].financing_fees == pytest.approx(150_000_000 * 0.13)

    def test_no_equity_outlay(self, factoring_input):
        result = calculate_profit_analysis(factoring_input)
        assert result.initial_cost == 0
        assert result.equity_roi is None
        assert result.yearly_data[0].cumulative_cash_flow == pytest.approx(result.yearly_data[0].net_cash_flow)

    def test_early_years_negative(self, factoring_input):
        data = calculate_profit_analysis(factoring_input).yearly_data
        assert data[0].net_cash_flow < 0


class TestPayback:
    def test_never_recovered(self, self_funding_input):
        inp = _revised(self_funding_input, total_investment=10_000_000_000)
        result = calculate_profit_analysis(inp)
        assert result.payback_period is None
        assert result.payback_period_interpolated is None
        assert result.equity_roi < 0

    def test_find_payback_year(self):
        assert find_payback_year([-10, -5, 0, 5]) == 3
        assert find_payback_year([-10, -5]) is None
        assert find_payback_year([1, 2]) == 1

    def test_interpolation(self):
        assert interpolate_payback(-100, [-50, 50]) == pytest.approx(1.5)
        assert interpolate_payback(-100, [-90, -80]) is None
        assert interpolate_payback(0, [10, 20]) == 0.0


class TestInputDefaults:
    @pytest.mark.parametrize("financing_type,expected", [
        ("SELF_FUNDING", 1.0),
        ("BANK_LOAN", 0.2),
        ("GOVERNMENT_LOAN", 0.2),
        ("FACTORING", 0.0),
    ])
    def test_self_funding_rate_fallback(self, financing_type, expected):
        inp = AnalysisInput(capacity_kw=10, total_investment=1_000_000, financing_type=financing_type)
        assert inp.effective_self_funding_rate == expected
