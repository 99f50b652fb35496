"""
Simplified Monte Carlo over the annual rate and inflation.
"""

import logging
import math
from typing import List, Optional

import numpy as np

from ..catalog import ProductCatalog
from ..config import INFLATION_VOLATILITY, OPTIMISTIC_RETURN_THRESHOLD, SCENARIO_RATE_FLOOR
from ..engine import period_in_months
from ..models import (
    MonteCarloParams,
    MonteCarloSummary,
    MonteCarloTrial,
    SimulationInput,
    TrialCategory,
)
from ..rates import RateResolver
from .deterministic import base_inflation

logger = logging.getLogger(__name__)


def nearest_rank(sorted_values: np.ndarray, p: float) -> float:
    """Percentile by nearest rank: element floor(p/100 * n), no interpolation."""
    return float(sorted_values[math.floor(p / 100 * len(sorted_values))])


def categorize(return_percent: float) -> TrialCategory:
    if return_percent < 0:
        return TrialCategory.PESSIMISTIC
    if return_percent < OPTIMISTIC_RETURN_THRESHOLD:
        return TrialCategory.REALISTIC
    return TrialCategory.OPTIMISTIC


class MonteCarloEngine:
    """Monte Carlo sampler for a compound-interest simulation."""

    def __init__(self, sim: SimulationInput, params: Optional[MonteCarloParams] = None,
                 catalog: Optional[ProductCatalog] = None):
        self.sim = sim
        self.params = params or MonteCarloParams()
        self.months = max(period_in_months(sim.period_count, sim.period_unit), 0)
        self.base_rate = RateResolver(catalog).resolve(sim)
        self.base_inflation = base_inflation(sim)
        self.total_contributed = sim.initial_value + sim.monthly_contribution * self.months

    def _draw_rates(self, rng: np.random.Generator):
        """
        Draw per-trial annual rate and inflation (%), with the inflation shock
        partly driven by the market shock.
        """
        n = self.params.trials
        corr = self.params.inflation_correlation
        shock_market = rng.uniform(-1.0, 1.0, size=n)
        shock_inflation = shock_market * corr + rng.uniform(-1.0, 1.0, size=n) * (1 - corr)

        rates = self.base_rate * (1 + shock_market * self.params.volatility + self.params.trend)
        rates = np.maximum(SCENARIO_RATE_FLOOR, rates)
        inflation = self.base_inflation * (1 + shock_inflation * INFLATION_VOLATILITY)
        inflation = np.maximum(0.0, inflation)
        return rates, inflation

    def run_trials(self) -> List[MonteCarloTrial]:
        """
        Run every trial and return them sorted by final (real) value, ascending.
        """
        rng = np.random.default_rng(self.params.seed)
        rates, inflation = self._draw_rates(rng)
        monthly_rates = rates / 100 / 12
        monthly_inflation = inflation / 100 / 12

        logger.debug("Monte Carlo: %d trials x %d months", self.params.trials, self.months)

        balances = np.full(self.params.trials, float(self.sim.initial_value))
        for _ in range(self.months):
            balances = balances * (1 + monthly_rates) + self.sim.monthly_contribution

        real_values = balances / (1 + monthly_inflation) ** self.months
        if self.total_contributed > 0:
            returns = (real_values - self.total_contributed) / self.total_contributed * 100
        else:
            returns = np.zeros_like(real_values)

        order = np.argsort(real_values, kind="stable")
        return [
            MonteCarloTrial(
                trial_index=int(i) + 1,
                final_value=float(real_values[i]),
                return_percent=float(returns[i]),
                category=categorize(float(returns[i])),
            )
            for i in order
        ]

    def run(self) -> MonteCarloSummary:
        return summarize_trials(self.run_trials(), self.total_contributed)


def summarize_trials(trials: List[MonteCarloTrial], total_contributed: float) -> MonteCarloSummary:
    """
    Reduce trials to summary statistics. Percentiles use nearest-rank indexing
    on the values sorted ascending.
    """
    values = np.sort(np.array([t.final_value for t in trials], dtype=float))
    returns = np.array([t.return_percent for t in trials], dtype=float)
    n = len(values)

    var = nearest_rank(values, 5)
    tail = values[:math.floor(n * 0.05)]
    cvar = float(tail.mean()) if len(tail) else var

    std = float(returns.std())
    sharpe = float(returns.mean()) / std if std > 0 else 0.0

    distribution = {
        label: sum(1 for t in trials if t.category == label) / n * 100
        for label in TrialCategory
    }

    return MonteCarloSummary(
        trials=n,
        total_contributed=total_contributed,
        mean=float(values.mean()),
        median=nearest_rank(values, 50),
        percentile5=var,
        percentile25=nearest_rank(values, 25),
        percentile75=nearest_rank(values, 75),
        percentile95=nearest_rank(values, 95),
        minimum=float(values[0]),
        maximum=float(values[-1]),
        value_at_risk=var,
        conditional_var=cvar,
        sharpe_ratio=sharpe,
        max_drawdown=float(returns.min()),
        probability_of_loss=float((values < total_contributed).mean() * 100),
        distribution=distribution,
    )


def run_monte_carlo(sim: SimulationInput, params: Optional[MonteCarloParams] = None,
                    catalog: Optional[ProductCatalog] = None) -> MonteCarloSummary:
    return MonteCarloEngine(sim, params, catalog).run()
