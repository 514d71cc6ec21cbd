"""Shared test fixtures — the 100 kW reference plant used across the suite."""

from __future__ import annotations

import pytest

from solar_profit.config import AnalysisInput, FinancingPresets, SimulationAssumptions


@pytest.fixture
def self_funding_input() -> AnalysisInput:
    return AnalysisInput(
        capacity_kw=100,
        total_investment=150_000_000,
        financing_type="SELF_FUNDING",
        self_funding_rate=1.0,
        peak_hours=3.7,
        degradation_rate=0.008,
        smp_price=120,
        rec_price=40_000,
        rec_weight=1.0,
        maintenance_cost=500_000,
        monitoring_cost=300_000,
    )


@pytest.fixture
def bank_loan_input(self_funding_input: AnalysisInput) -> AnalysisInput:
    return AnalysisInput(**(self_funding_input.model_dump() | dict(
        financing_type="BANK_LOAN",
        self_funding_rate=0.2,
        loan_amount=120_000_000,
        interest_rate=5.5,
        loan_period=10,
        grace_period=0,
    )))


@pytest.fixture
def government_loan_input(self_funding_input: AnalysisInput) -> AnalysisInput:
    return AnalysisInput(**(self_funding_input.model_dump() | dict(
        financing_type="GOVERNMENT_LOAN",
        self_funding_rate=0.2,
        loan_amount=120_000_000,
        interest_rate=1.75,
        loan_period=11,
        grace_period=1,
    )))


@pytest.fixture
def factoring_input(self_funding_input: AnalysisInput) -> AnalysisInput:
    return AnalysisInput(**(self_funding_input.model_dump() | dict(
        financing_type="FACTORING",
        self_funding_rate=0.0,
        loan_amount=150_000_000,
        interest_rate=5.5,
        loan_period=5,
        grace_period=0,
        guarantee_fee_rate=0.05,
        factoring_fee_rate=0.08,
    )))


@pytest.fixture
def assumptions() -> SimulationAssumptions:
    return SimulationAssumptions()


@pytest.fixture
def presets() -> FinancingPresets:
    return FinancingPresets()
