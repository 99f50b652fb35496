import logging
from typing import List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from . import database
from .catalog import default_catalog, ProductCatalog
from .config import (
    API_DESCRIPTION,
    API_TITLE,
    API_VERSION,
    CORS_CREDENTIALS,
    CORS_HEADERS,
    CORS_METHODS,
    CORS_ORIGINS,
    LOG_FORMAT,
    LOG_LEVEL,
)
from .engine import simulate, yearly_view
from .goals import goal_report
from .inflation import compare_inflation, simulate_inflation
from .models import (
    GoalInput,
    GoalReport,
    InflationComparison,
    InflationParams,
    InflationResult,
    MonteCarloRequest,
    MonteCarloSummary,
    RetirementInput,
    RetirementPlan,
    ScenarioAnalysis,
    ScenarioRequest,
    SensitivityCurve,
    SimulationInput,
    SimulationResult,
    SnapshotIn,
    SnapshotOut,
    StressResult,
    WithdrawalInput,
    WithdrawalPlan,
    YearlyRecord,
)
from .retirement import InfeasiblePlanError, plan_retirement, plan_withdrawals
from .scenarios import analyze_scenarios, run_monte_carlo, sensitivity_analysis, stress_test

logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
logger = logging.getLogger(__name__)

CATALOG = default_catalog()

# ============================
# FastAPI app
# ============================
app = FastAPI(title=API_TITLE, description=API_DESCRIPTION, version=API_VERSION)
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=CORS_CREDENTIALS,
    allow_methods=CORS_METHODS,
    allow_headers=CORS_HEADERS,
)


@app.get("/")
def root():
    return {"message": API_TITLE, "docs": "Visit /docs for API documentation"}


@app.get("/api/catalog")
def catalog() -> ProductCatalog:
    return CATALOG


# ============================
# Simulation
# ============================
@app.post("/api/simulate")
def run_simulation(sim: SimulationInput) -> SimulationResult:
    return simulate(sim, CATALOG)


@app.post("/api/simulate/yearly")
def run_simulation_yearly(sim: SimulationInput) -> List[YearlyRecord]:
    return yearly_view(simulate(sim, CATALOG).trajectory)


@app.post("/api/inflation")
def inflation(params: InflationParams) -> InflationResult:
    return simulate_inflation(params)


@app.post("/api/inflation/compare")
def inflation_compare(params: InflationParams) -> InflationComparison:
    return compare_inflation(params)


# ============================
# Retirement & Goals
# ============================
@app.post("/api/retirement")
def retirement(inp: RetirementInput) -> RetirementPlan:
    try:
        return plan_retirement(inp)
    except InfeasiblePlanError as e:
        logger.info("Rejected retirement plan: %s", e)
        raise HTTPException(status_code=400, detail=str(e))


@app.post("/api/retirement/withdrawals")
def withdrawals(inp: WithdrawalInput) -> WithdrawalPlan:
    return plan_withdrawals(inp)


@app.post("/api/goals")
def goals(goal: GoalInput) -> GoalReport:
    return goal_report(goal)


# ============================
# Scenarios
# ============================
@app.post("/api/scenarios")
def scenarios(request: ScenarioRequest) -> ScenarioAnalysis:
    return analyze_scenarios(request.base, request.shifts, CATALOG)


@app.post("/api/scenarios/monte-carlo")
def monte_carlo(request: MonteCarloRequest) -> MonteCarloSummary:
    return run_monte_carlo(request.base, request.params, CATALOG)


@app.post("/api/scenarios/sensitivity")
def sensitivity(sim: SimulationInput) -> List[SensitivityCurve]:
    return sensitivity_analysis(sim, CATALOG)


@app.post("/api/scenarios/stress")
def stress(sim: SimulationInput) -> List[StressResult]:
    return stress_test(sim, CATALOG)


# ============================
# Saved snapshots
# ============================
@app.get("/api/snapshots")
def list_snapshots() -> List[SnapshotOut]:
    return database.list_snapshots()


@app.get("/api/snapshots/{sid}")
def get_snapshot(sid: int) -> SnapshotOut:
    snapshot: Optional[SnapshotOut] = database.get_snapshot(sid)
    if snapshot is None:
        raise HTTPException(404, "Not found")
    return snapshot


@app.post("/api/snapshots")
def save_snapshot(snapshot: SnapshotIn) -> SnapshotOut:
    return database.save_snapshot(snapshot)


@app.delete("/api/snapshots/{sid}")
def delete_snapshot(sid: int):
    if not database.delete_snapshot(sid):
        raise HTTPException(404, "Not found")
    return {"deleted": sid}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("finsim.main:app", host="0.0.0.0", port=8020)
