"""
Month-by-month compound interest engine.
"""

import logging
from typing import List, Optional

from .catalog import ProductCatalog
from .models import (
    MonthlyRecord,
    PeriodUnit,
    SimulationInput,
    SimulationResult,
    YearlyRecord,
)
from .rates import (
    RateResolver,
    annual_to_daily_rate,
    annual_to_monthly_rate,
    discount,
    real_annual_rate,
)

logger = logging.getLogger(__name__)


def period_in_months(count: int, unit: PeriodUnit) -> int:
    return count * 12 if unit == PeriodUnit.YEARS else count


def _flat_result(value: float) -> SimulationResult:
    """Result for runs that never start: nothing accrues, value echoed back."""
    return SimulationResult(
        total_contributed=value,
        total_interest=0.0,
        final_balance=value,
        daily_gain=0.0,
        monthly_gain=0.0,
        annual_gain=0.0,
        trajectory=[],
        effective_monthly_rate=0.0,
        effective_daily_rate=0.0,
        total_return_percent=0.0,
    )


class CompoundInterestEngine:
    """Compound interest simulation for a single input."""

    def __init__(self, sim: SimulationInput, catalog: Optional[ProductCatalog] = None):
        """
        Initialize the engine.

        Args:
            sim: The simulation request
            catalog: Product tables used to resolve the rate (built-in if omitted)
        """
        self.sim = sim
        self.annual_rate = RateResolver(catalog).resolve(sim)
        self.months = period_in_months(sim.period_count, sim.period_unit)
        self.monthly_rate = annual_to_monthly_rate(self.annual_rate)
        self.daily_rate = annual_to_daily_rate(self.annual_rate)

        inflation = sim.inflation
        self.inflation_enabled = bool(inflation and inflation.enabled)
        self.inflation_rate = inflation.annual_rate if self.inflation_enabled else 0.0
        self.monthly_inflation = (
            annual_to_monthly_rate(self.inflation_rate) if self.inflation_enabled else 0.0
        )

    def run(self) -> SimulationResult:
        """
        Run the simulation.

        Returns:
            SimulationResult with the monthly trajectory and summary figures
        """
        sim = self.sim
        if not sim.initial_value and not sim.monthly_contribution:
            return _flat_result(0.0)
        if sim.period_count <= 0:
            return _flat_result(sim.initial_value)

        logger.debug("Simulating %d months at %.4f%% p.a.", self.months, self.annual_rate)

        balance = sim.initial_value
        total_inflation_loss = 0.0
        trajectory: List[MonthlyRecord] = []

        for month in range(1, self.months + 1):
            interest = balance * self.monthly_rate

            # First month books the initial value; contributions start in month 2
            if month == 1 and sim.initial_value > 0:
                contribution = sim.initial_value
            else:
                contribution = sim.monthly_contribution

            balance = balance + interest + (0.0 if month == 1 else sim.monthly_contribution)

            if self.inflation_enabled:
                real_balance = discount(balance, self.monthly_inflation, month)
                inflation_loss = balance * self.monthly_inflation
                total_inflation_loss += inflation_loss
                trajectory.append(MonthlyRecord(
                    month=month,
                    contribution=contribution,
                    interest=interest,
                    balance=balance,
                    real_balance=real_balance,
                    inflation_loss=inflation_loss,
                    real_gain=interest - inflation_loss,
                ))
            else:
                trajectory.append(MonthlyRecord(
                    month=month,
                    contribution=contribution,
                    interest=interest,
                    balance=balance,
                ))

        total_contributed = sim.initial_value + sim.monthly_contribution * (self.months - 1)
        final_balance = balance
        total_interest = final_balance - total_contributed
        total_return = total_interest / total_contributed * 100 if total_contributed > 0 else 0.0

        result = SimulationResult(
            total_contributed=total_contributed,
            total_interest=total_interest,
            final_balance=final_balance,
            daily_gain=final_balance * self.daily_rate,
            monthly_gain=final_balance * self.monthly_rate,
            annual_gain=final_balance * (self.annual_rate / 100),
            trajectory=trajectory,
            effective_monthly_rate=self.monthly_rate * 100,
            effective_daily_rate=self.daily_rate * 100,
            total_return_percent=total_return,
        )

        if self.inflation_enabled:
            real_final = discount(final_balance, self.monthly_inflation, self.months)
            real_interest = real_final - total_contributed
            result.real_final_balance = real_final
            result.real_total_interest = real_interest
            result.real_return_percent = (
                real_interest / total_contributed * 100 if total_contributed > 0 else 0.0
            )
            result.real_annual_rate = real_annual_rate(self.annual_rate, self.inflation_rate)
            result.total_inflation_loss = total_inflation_loss

        return result


def simulate(sim: SimulationInput, catalog: Optional[ProductCatalog] = None) -> SimulationResult:
    return CompoundInterestEngine(sim, catalog).run()


def yearly_view(trajectory: List[MonthlyRecord]) -> List[YearlyRecord]:
    """Fold a monthly trajectory into 12-month rows (last row may be partial)."""
    rows: List[YearlyRecord] = []
    for start in range(0, len(trajectory), 12):
        block = trajectory[start:start + 12]
        last = block[-1]
        rows.append(YearlyRecord(
            year=start // 12 + 1,
            contribution=sum(r.contribution for r in block),
            interest=sum(r.interest for r in block),
            balance=last.balance,
            real_balance=last.real_balance,
            inflation_loss=sum(r.inflation_loss or 0.0 for r in block),
            real_gain=sum(r.real_gain or 0.0 for r in block),
        ))
    return rows
