"""
Pessimistic / realistic / optimistic variants of a simulation.
"""

import math
from typing import List, Optional

from ..catalog import ProductCatalog
from ..config import (
    RISK_HIGH_CV,
    RISK_LOW_CV,
    RISK_MODERATE_CV,
    SCENARIO_BASE_INFLATION,
    SCENARIO_RATE_FLOOR,
    SCENARIO_WEIGHTS,
)
from ..engine import simulate
from ..models import (
    InflationSettings,
    RateMode,
    RiskLevel,
    ScenarioAnalysis,
    ScenarioLabel,
    ScenarioShifts,
    ScenarioStatistics,
    ScenarioVariant,
    SimulationInput,
)
from ..rates import RateResolver


def base_inflation(sim: SimulationInput) -> float:
    """Inflation (% p.a.) scenario runs start from."""
    return sim.inflation.annual_rate if sim.inflation is not None else SCENARIO_BASE_INFLATION


def shifted_input(sim: SimulationInput, base_rate: float, rate_shift: float,
                  inflation_shift: Optional[float], contribution_shift: Optional[float],
                  floor: bool) -> SimulationInput:
    """
    Copy of `sim` with the rate, inflation and contribution scaled by percentage
    shifts. The rate is pinned as a custom rate; `floor` clamps the shifted
    values from below.
    """
    rate = base_rate * (1 + rate_shift / 100)
    if floor:
        rate = max(SCENARIO_RATE_FLOOR, rate)
    update = {"rate_mode": RateMode.CUSTOM, "custom_rate": rate}

    if contribution_shift is not None:
        contribution = sim.monthly_contribution * (1 + contribution_shift / 100)
        update["monthly_contribution"] = max(0.0, contribution) if floor else contribution

    if inflation_shift is not None:
        inflation = base_inflation(sim) * (1 + inflation_shift / 100)
        if floor:
            inflation = max(0.0, inflation)
        enabled = sim.inflation.enabled if sim.inflation is not None else False
        update["inflation"] = InflationSettings(enabled=enabled, annual_rate=inflation)

    return sim.model_copy(update=update)


def classify_risk(coefficient_of_variation: float) -> RiskLevel:
    if coefficient_of_variation < RISK_LOW_CV:
        return RiskLevel.LOW
    if coefficient_of_variation < RISK_MODERATE_CV:
        return RiskLevel.MODERATE
    if coefficient_of_variation < RISK_HIGH_CV:
        return RiskLevel.HIGH
    return RiskLevel.VERY_HIGH


def scenario_statistics(variants: List[ScenarioVariant]) -> ScenarioStatistics:
    values = [v.result.final_balance for v in variants]
    minimum = min(values)
    maximum = max(values)
    mean = sum(values) / len(values)

    expected = sum(v.result.final_balance * v.probability_weight / 100 for v in variants)
    # Dispersion is weighted but measured around the plain mean
    variance = sum(
        (v.result.final_balance - mean) ** 2 * (v.probability_weight / 100) for v in variants
    )
    std = math.sqrt(variance)

    return ScenarioStatistics(
        minimum=minimum,
        maximum=maximum,
        mean=mean,
        expected_value=expected,
        standard_deviation=std,
        coefficient_of_variation=std / expected * 100 if expected else 0.0,
        amplitude=maximum - minimum,
        amplitude_percent=(maximum - minimum) / mean * 100 if mean else 0.0,
    )


def analyze_scenarios(sim: SimulationInput, shifts: Optional[ScenarioShifts] = None,
                      catalog: Optional[ProductCatalog] = None) -> ScenarioAnalysis:
    """
    Re-run the engine on three shifted copies of the input.

    Weights are fixed at 20/60/20 (pessimistic/realistic/optimistic).
    """
    shifts = shifts or ScenarioShifts()
    base_rate = RateResolver(catalog).resolve(sim)
    w_pess, w_real, w_opt = SCENARIO_WEIGHTS

    pessimistic = shifted_input(
        sim, base_rate, shifts.rate_pessimistic,
        shifts.inflation_pessimistic, shifts.contribution_pessimistic, floor=True,
    )
    optimistic = shifted_input(
        sim, base_rate, shifts.rate_optimistic,
        shifts.inflation_optimistic, shifts.contribution_optimistic, floor=False,
    )

    variants = [
        ScenarioVariant(
            label=ScenarioLabel.PESSIMISTIC,
            probability_weight=w_pess,
            rate_shift_percent=shifts.rate_pessimistic,
            inflation_shift_percent=shifts.inflation_pessimistic,
            contribution_shift_percent=shifts.contribution_pessimistic,
            simulation=pessimistic,
            result=simulate(pessimistic, catalog),
        ),
        ScenarioVariant(
            label=ScenarioLabel.REALISTIC,
            probability_weight=w_real,
            rate_shift_percent=0.0,
            inflation_shift_percent=0.0,
            contribution_shift_percent=0.0,
            simulation=sim,
            result=simulate(sim, catalog),
        ),
        ScenarioVariant(
            label=ScenarioLabel.OPTIMISTIC,
            probability_weight=w_opt,
            rate_shift_percent=shifts.rate_optimistic,
            inflation_shift_percent=shifts.inflation_optimistic,
            contribution_shift_percent=shifts.contribution_optimistic,
            simulation=optimistic,
            result=simulate(optimistic, catalog),
        ),
    ]

    stats = scenario_statistics(variants)
    best = max(variants, key=lambda v: v.result.final_balance)
    worst = min(variants, key=lambda v: v.result.final_balance)

    return ScenarioAnalysis(
        variants=variants,
        statistics=stats,
        risk_level=classify_risk(stats.coefficient_of_variation),
        best=best.label,
        worst=worst.label,
    )
