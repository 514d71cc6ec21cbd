"""FastAPI server — public profitability simulator & KEPCO charge calculator.

Run with:
    uvicorn solar_profit.api.server:app --reload --port 8000

Or:
    python -m solar_profit.api.server

Endpoints:
    GET  /                      — welcome + pointers
    GET  /health                — liveness probe
    GET  /simulation/defaults   — default assumptions as JSON
    POST /simulation            — four financing models side by side
    POST /simulation/narrative  — same, as plain text + headline metrics
    POST /profit-analysis       — one 20-year projection for a single AnalysisInput
    POST /kepco-charge          — KEPCO connection charge (+ optional installment plan)
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import Field

from solar_profit.api.narrative import generate_comparison_narrative, headline_metrics
from solar_profit.config.assumptions import SimulationAssumptions
from solar_profit.config.base import CamelModel
from solar_profit.config.financing import AnalysisInput
from solar_profit.config.kepco import PaymentType, SupplyType, VoltageType
from solar_profit.engine.kepco import calculate_kepco_charge
from solar_profit.engine.profit import calculate_profit_analysis
from solar_profit.engine.scenarios import run_financing_comparison
from solar_profit.models.results import AnalysisResult, FinancingComparison, KepcoChargeResult

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════
# App setup
# ═══════════════════════════════════════════════════════════════════════════

app = FastAPI(
    title="Solar Profit Simulator API",
    version="1.0",
    description=(
        "Profitability simulator for solar installations: 20-year cash flow "
        "under self-funding, bank loan, government loan and factoring, plus "
        "the KEPCO grid-connection charge calculator."
    ),
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


# ═══════════════════════════════════════════════════════════════════════════
# Request / response models
# ═══════════════════════════════════════════════════════════════════════════

class KepcoChargeRequest(CamelModel):
    """Request body for /kepco-charge."""
    capacity_kw: float = Field(gt=0, description="Contracted capacity (kW)")
    voltage_type: VoltageType = Field(description="저압 / 고압 / 특별고압")
    supply_type: SupplyType = Field(description="공중 (overhead) / 지중 (underground)")
    distance_charge: int = Field(default=0, ge=0, description="Distance charge quoted by KEPCO (KRW)")
    payment_type: PaymentType = Field(default="LUMP_SUM")


class SimulationRequest(SimulationAssumptions):
    """Request body for /simulation. Only capacity and investment are required."""
    capacity_kw: float = Field(gt=0, description="Installed capacity (kW)")
    total_investment: int = Field(gt=0, description="Total project cost (KRW)")
    kepco_charge: KepcoChargeRequest | None = Field(
        default=None,
        description="When given, the KEPCO connection charge is computed and added to the investment.",
    )

    def assumptions(self) -> SimulationAssumptions:
        return SimulationAssumptions(**self.model_dump(include=set(SimulationAssumptions.model_fields)))


class NarrativeResponse(CamelModel):
    """Response from /simulation/narrative."""
    narrative: str
    best_model: str
    headline_metrics: dict[str, dict[str, Any]]


# ═══════════════════════════════════════════════════════════════════════════
# Helpers
# ═══════════════════════════════════════════════════════════════════════════

def _kepco(req: KepcoChargeRequest) -> KepcoChargeResult:
    return calculate_kepco_charge(
        req.capacity_kw,
        req.voltage_type,
        req.supply_type,
        req.distance_charge,
        req.payment_type,
    )


def _run_comparison(req: SimulationRequest) -> FinancingComparison:
    charge = _kepco(req.kepco_charge) if req.kepco_charge is not None else None
    return run_financing_comparison(
        req.capacity_kw,
        req.total_investment,
        assumptions=req.assumptions(),
        kepco_charge=charge,
    )


# ═══════════════════════════════════════════════════════════════════════════
# Endpoints
# ═══════════════════════════════════════════════════════════════════════════

@app.get("/health")
def health_check():
    """Health check for deployment platforms."""
    return {"status": "ok"}


@app.get("/")
def root():
    """API root — returns a welcome message and the main entry points."""
    return {
        "name": "Solar Profit Simulator API",
        "version": "1.0",
        "start_here": "POST /simulation with {capacityKw, totalInvestment}",
        "docs": "GET /docs (interactive Swagger UI)",
    }


@app.get("/simulation/defaults")
def get_defaults():
    """Default assumptions used for every field the request leaves out."""
    return SimulationAssumptions().model_dump(by_alias=True)


@app.post("/simulation", response_model=FinancingComparison)
def simulate(req: SimulationRequest):
    """Compare all four financing models for one plant.

    Example minimal request:
    ```json
    {"capacityKw": 100, "totalInvestment": 150000000}
    ```
    """
    logger.info("POST /simulation: %.1f kW, %d KRW", req.capacity_kw, req.total_investment)
    return _run_comparison(req)


@app.post("/simulation/narrative", response_model=NarrativeResponse)
def simulate_with_narrative(req: SimulationRequest):
    """Run the comparison and return a plain-text interpretation plus headline numbers."""
    logger.info("POST /simulation/narrative: %.1f kW, %d KRW", req.capacity_kw, req.total_investment)
    comparison = _run_comparison(req)
    return NarrativeResponse(
        narrative=generate_comparison_narrative(comparison),
        best_model=comparison.best_model,
        headline_metrics={ft: headline_metrics(r) for ft, r in comparison.by_type().items()},
    )


@app.post("/profit-analysis", response_model=AnalysisResult)
def profit_analysis(inp: AnalysisInput):
    """Project a single, fully specified financing scenario."""
    logger.info("POST /profit-analysis: %s, %.1f kW", inp.financing_type, inp.capacity_kw)
    return calculate_profit_analysis(inp)


@app.post("/kepco-charge", response_model=KepcoChargeResult)
def kepco_charge(req: KepcoChargeRequest):
    """Compute the KEPCO connection charge, with the installment plan if requested."""
    logger.info("POST /kepco-charge: %.1f kW %s/%s", req.capacity_kw, req.voltage_type, req.supply_type)
    return _kepco(req)


# ═══════════════════════════════════════════════════════════════════════════
# CLI entry point
# ═══════════════════════════════════════════════════════════════════════════

def main():
    """Run the API server."""
    import uvicorn
    uvicorn.run(
        "solar_profit.api.server:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )


if __name__ == "__main__":
    main()
