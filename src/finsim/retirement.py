"""
Retirement planning: accumulation up to retirement and withdrawals after it.
"""

import logging
import math
from typing import List

from .config import RETIREMENT_WITHDRAWAL_CAP_MONTHS
from .models import (
    MonthlyRecord,
    RetirementInput,
    RetirementPlan,
    WithdrawalInput,
    WithdrawalPlan,
)
from .rates import compound_factor, discount

logger = logging.getLogger(__name__)


class InfeasiblePlanError(ValueError):
    """The inputs describe a plan with no meaningful annuity value."""


# ============================
# Annuity helpers
# ============================
def _growth(rate: float, months: float) -> float:
    """(1 + rate) ** months, raising when it leaves the float range."""
    factor = compound_factor(rate, months)
    if not math.isfinite(factor):
        raise InfeasiblePlanError(f"Compounding {rate:.6f} over {months} months overflows")
    return factor


def present_value_factor(rate: float, months: int) -> float:
    """PV of 1 paid monthly for `months` months: (1 - (1+r)^-n) / r."""
    if months <= 0:
        return 0.0
    if 1 + rate <= 0:
        raise InfeasiblePlanError(f"Monthly discount rate {rate:.6f} is at or below -100%")
    if rate == 0:
        return float(months)
    return (1 - _growth(rate, -months)) / rate


def future_value_factor(rate: float, months: int) -> float:
    """FV of 1 paid monthly for `months` months: ((1+r)^n - 1) / r."""
    if months <= 0:
        return 0.0
    if rate == 0:
        return float(months)
    return (_growth(rate, months) - 1) / rate


# ============================
# Accumulation
# ============================
def plan_retirement(inp: RetirementInput) -> RetirementPlan:
    """
    Size the corpus needed at retirement and compare it with what the current
    assets and contributions project to.

    The required corpus is the present value of the inflation-adjusted income
    over the retirement years, discounted at the real monthly rate
    (nominal monthly minus monthly inflation).

    Raises:
        InfeasiblePlanError: when the real monthly rate is at or below -100%,
            or compounding over the plan overflows
    """
    years_accumulating = inp.retirement_age - inp.current_age
    years_retired = inp.life_expectancy - inp.retirement_age
    accumulation_months = years_accumulating * 12
    retirement_months = years_retired * 12

    monthly_rate = inp.annual_rate / 100 / 12
    monthly_inflation = inp.inflation_rate / 100 / 12
    real_monthly_rate = monthly_rate - monthly_inflation

    adjusted_income = inp.desired_monthly_income * _growth(inp.inflation_rate / 100, years_accumulating)
    required = adjusted_income * present_value_factor(real_monthly_rate, retirement_months)

    growth = _growth(monthly_rate, max(accumulation_months, 0))
    fv_factor = future_value_factor(monthly_rate, accumulation_months)
    projected = inp.current_assets * growth + inp.monthly_contribution * fv_factor

    shortfall = max(0.0, required - projected)
    suggested = shortfall / fv_factor if shortfall > 0 and fv_factor > 0 else 0.0

    logger.debug("Retirement plan: required=%.2f projected=%.2f", required, projected)

    accumulation: List[MonthlyRecord] = []
    balance = inp.current_assets
    for month in range(1, accumulation_months + 1):
        interest = balance * monthly_rate
        balance += interest + inp.monthly_contribution
        accumulation.append(MonthlyRecord(
            month=month,
            contribution=inp.monthly_contribution,
            interest=interest,
            balance=balance,
            real_balance=discount(balance, monthly_inflation, month),
        ))

    withdrawals: List[MonthlyRecord] = []
    balance = projected
    for month in range(1, min(retirement_months, RETIREMENT_WITHDRAWAL_CAP_MONTHS) + 1):
        interest = balance * monthly_rate
        balance = balance + interest - adjusted_income
        floored = max(0.0, balance)
        withdrawals.append(MonthlyRecord(
            month=month,
            contribution=-adjusted_income,
            interest=interest,
            balance=floored,
            real_balance=discount(floored, monthly_inflation, accumulation_months + month),
        ))
        if balance <= 0:
            break

    return RetirementPlan(
        required_corpus=required,
        projected_corpus=projected,
        shortfall=shortfall,
        suggested_contribution=suggested,
        adjusted_monthly_income=adjusted_income,
        years_accumulating=years_accumulating,
        years_retired=years_retired,
        accumulation_trajectory=accumulation,
        withdrawal_trajectory=withdrawals,
    )


# ============================
# Withdrawals
# ============================
def plan_withdrawals(inp: WithdrawalInput) -> WithdrawalPlan:
    """Draw down a corpus month by month until it runs out or the horizon ends."""
    monthly_rate = inp.annual_rate / 100 / 12
    monthly_inflation = inp.inflation_rate / 100 / 12
    horizon_months = inp.horizon_years * 12

    balance = inp.initial_corpus
    total_withdrawn = 0.0
    duration = 0
    trajectory: List[MonthlyRecord] = []

    for month in range(1, horizon_months + 1):
        interest = balance * monthly_rate
        if inp.index_to_inflation:
            withdrawal = inp.monthly_withdrawal * compound_factor(monthly_inflation, month - 1)
        else:
            withdrawal = inp.monthly_withdrawal

        balance = balance + interest - withdrawal
        total_withdrawn += withdrawal
        floored = max(0.0, balance)
        trajectory.append(MonthlyRecord(
            month=month,
            contribution=-withdrawal,
            interest=interest,
            balance=floored,
            real_balance=discount(floored, monthly_inflation, month),
        ))

        if balance > 0:
            duration = month
        else:
            break

    return WithdrawalPlan(
        sustainable=balance > 0,
        duration_months=duration,
        final_balance=max(0.0, balance),
        total_withdrawn=total_withdrawn,
        trajectory=trajectory,
    )
