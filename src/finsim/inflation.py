"""
Nominal versus real value of an accumulation schedule.
"""

import math
from typing import List, Optional

from .models import (
    InflationComparison,
    InflationImpact,
    InflationParams,
    InflationPoint,
    InflationResult,
)


def months_to_recover(loss: float, monthly_contribution: float) -> Optional[int]:
    """Months of contributions needed to cover a loss; None without contributions."""
    if not monthly_contribution:
        return None
    return math.ceil(loss / monthly_contribution)


def simulate_inflation(params: InflationParams) -> InflationResult:
    """
    Grow the schedule at the nominal rate and measure what inflation takes away.

    Alongside the nominal balance, each month tracks that balance discounted by
    accumulated inflation and a separate balance compounded at the Fisher real
    rate. Rates convert to monthly by plain division by 12.
    """
    p = params
    if not p.initial_value or p.period_months <= 0 or p.annual_rate < 0 or p.inflation_rate < 0:
        return InflationResult(
            final_nominal=0.0,
            final_real=0.0,
            final_real_compounded=0.0,
            total_loss=0.0,
            loss_percent=0.0,
            trajectory=[],
            purchasing_power_initial=p.initial_value,
            purchasing_power_final=0.0,
        )

    monthly_rate = p.annual_rate / 100 / 12
    monthly_inflation = p.inflation_rate / 100 / 12
    real_monthly_rate = (1 + monthly_rate) / (1 + monthly_inflation) - 1

    nominal = p.initial_value
    real_compounded = p.initial_value
    accumulated_inflation = 1.0

    trajectory: List[InflationPoint] = [InflationPoint(
        month=0,
        nominal_value=nominal,
        real_value=nominal,
        real_compounded_value=real_compounded,
        loss=0.0,
        loss_percent=0.0,
    )]

    for month in range(1, p.period_months + 1):
        nominal = nominal * (1 + monthly_rate) + p.monthly_contribution
        real_compounded = real_compounded * (1 + real_monthly_rate) + p.monthly_contribution
        accumulated_inflation *= 1 + monthly_inflation

        real_value = nominal / accumulated_inflation
        loss = nominal - real_value
        trajectory.append(InflationPoint(
            month=month,
            nominal_value=nominal,
            real_value=real_value,
            real_compounded_value=real_compounded,
            loss=loss,
            loss_percent=loss / nominal * 100 if nominal else 0.0,
        ))

    final_real = nominal / accumulated_inflation
    total_loss = nominal - final_real
    return InflationResult(
        final_nominal=nominal,
        final_real=final_real,
        final_real_compounded=real_compounded,
        total_loss=total_loss,
        loss_percent=total_loss / nominal * 100 if nominal else 0.0,
        trajectory=trajectory,
        purchasing_power_initial=p.initial_value,
        purchasing_power_final=final_real,
        months_to_recover_loss=months_to_recover(total_loss, p.monthly_contribution),
    )


def compare_inflation(params: InflationParams) -> InflationComparison:
    """Run the schedule with and without inflation and report the gap."""
    with_inflation = simulate_inflation(params)
    without_inflation = simulate_inflation(params.model_copy(update={"inflation_rate": 0.0}))

    difference = without_inflation.final_nominal - with_inflation.final_real
    if without_inflation.final_nominal:
        difference_percent = difference / without_inflation.final_nominal * 100
    else:
        difference_percent = 0.0

    return InflationComparison(
        with_inflation=with_inflation,
        without_inflation=without_inflation,
        absolute_difference=difference,
        percent_difference=difference_percent,
        impact=InflationImpact(
            value_lost=with_inflation.total_loss,
            impact_percent=with_inflation.loss_percent,
            months_to_recover=with_inflation.months_to_recover_loss,
        ),
    )
