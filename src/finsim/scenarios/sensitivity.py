"""
Sensitivity sweeps and stress tests on a simplified monthly loop
(nominal rate / 12, contribution added at month end).
"""

from typing import List, Optional

from ..catalog import ProductCatalog
from ..config import SCENARIO_RATE_FLOOR
from ..engine import period_in_months
from ..models import SensitivityCurve, SensitivityPoint, SimulationInput, StressResult
from ..rates import RateResolver, discount
from .deterministic import base_inflation

RATE_SHIFTS = [-50, -25, -10, 0, 10, 25, 50]
CONTRIBUTION_SHIFTS = [-40, -20, -10, 0, 10, 20, 40]
PERIOD_SHIFTS = [-30, -15, -5, 0, 5, 15, 30]

# name, description, (rate %, inflation %, contribution %), probability
STRESS_PRESETS = [
    ("Financial crisis", "Rate falls 60%, inflation doubles", (-60, 100, -20), 5),
    ("Moderate recession", "Rate falls 30%, inflation up 50%", (-30, 50, -10), 15),
    ("Political instability", "Rate falls 40%, inflation up 80%", (-40, 80, -15), 10),
    ("Economic boom", "Rate up 40%, inflation under control", (40, -20, 20), 20),
]


def grow(initial: float, monthly: float, annual_rate: float, months: int) -> float:
    balance = initial
    monthly_rate = annual_rate / 100 / 12
    for _ in range(months):
        balance = balance * (1 + monthly_rate) + monthly
    return balance


def _curve(variable: str, shifts: List[float], finals: List[float], baseline: float) -> SensitivityCurve:
    """Impact of each shift as the percent change against the unshifted final value."""
    points = [
        SensitivityPoint(
            shift_percent=shift,
            final_value=final,
            impact_percent=(final / baseline - 1) * 100 if baseline else 0.0,
        )
        for shift, final in zip(shifts, finals)
    ]
    span = shifts[-1] - shifts[0]
    elasticity = abs(points[-1].impact_percent - points[0].impact_percent) / span
    return SensitivityCurve(variable=variable, points=points, elasticity=elasticity)


def sensitivity_analysis(sim: SimulationInput,
                         catalog: Optional[ProductCatalog] = None) -> List[SensitivityCurve]:
    """Sweep rate, contribution and period one at a time around the base input."""
    rate = RateResolver(catalog).resolve(sim)
    months = max(period_in_months(sim.period_count, sim.period_unit), 0)
    initial = sim.initial_value
    monthly = sim.monthly_contribution
    baseline = grow(initial, monthly, rate, months)

    rate_finals = [
        grow(initial, monthly, max(SCENARIO_RATE_FLOOR, rate * (1 + s / 100)), months)
        for s in RATE_SHIFTS
    ]
    contribution_finals = [
        grow(initial, max(0.0, monthly * (1 + s / 100)), rate, months)
        for s in CONTRIBUTION_SHIFTS
    ]
    period_finals = [
        grow(initial, monthly, rate, max(1, round(months * (1 + s / 100))))
        for s in PERIOD_SHIFTS
    ]

    return [
        _curve("rate", RATE_SHIFTS, rate_finals, baseline),
        _curve("contribution", CONTRIBUTION_SHIFTS, contribution_finals, baseline),
        _curve("period", PERIOD_SHIFTS, period_finals, baseline),
    ]


def stress_test(sim: SimulationInput,
                catalog: Optional[ProductCatalog] = None) -> List[StressResult]:
    """Run the fixed stress presets; impact is measured against the base contributions."""
    rate = RateResolver(catalog).resolve(sim)
    months = max(period_in_months(sim.period_count, sim.period_unit), 0)
    contributed = sim.initial_value + sim.monthly_contribution * months
    inflation = base_inflation(sim)

    results = []
    for name, description, (rate_shift, inflation_shift, contribution_shift), probability in STRESS_PRESETS:
        stressed_rate = max(SCENARIO_RATE_FLOOR, rate * (1 + rate_shift / 100))
        stressed_monthly = max(0.0, sim.monthly_contribution * (1 + contribution_shift / 100))
        stressed_inflation = max(0.0, inflation * (1 + inflation_shift / 100))

        final = grow(sim.initial_value, stressed_monthly, stressed_rate, months)
        results.append(StressResult(
            name=name,
            description=description,
            probability=probability,
            annual_rate=stressed_rate,
            inflation_rate=stressed_inflation,
            final_value=final,
            real_final_value=discount(final, stressed_inflation / 100 / 12, months),
            impact_percent=(final - contributed) / contributed * 100 if contributed else 0.0,
        ))
    return results
