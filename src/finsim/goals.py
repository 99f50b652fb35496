"""
Inverse compound interest: what it takes to reach a target amount.
"""

from typing import List, Optional

from .config import (
    GOAL_ALTERNATIVE_RATES,
    GOAL_DIFFICULT_CONTRIBUTION,
    GOAL_DIFFICULT_LUMP_SUM,
    GOAL_INFEASIBLE_CONTRIBUTION,
    GOAL_INFEASIBLE_LUMP_SUM,
    GOAL_INFEASIBLE_TARGET,
    GOAL_INITIAL_AMOUNTS,
    GOAL_LOW_RATE,
    GOAL_SHORT_PERIOD_MONTHS,
    GOAL_TERMS_MONTHS,
)
from .models import (
    GoalAlternative,
    GoalAnalysis,
    GoalInitialValueScenario,
    GoalInput,
    GoalReport,
    GoalTermScenario,
    Viability,
)
from .rates import annual_to_monthly_rate, compound_factor, discount


def required_contribution(target_amount: float, period_months: int, annual_rate: float,
                          initial_amount: float = 0.0) -> float:
    """Level monthly contribution that, with the initial amount, reaches the target."""
    if period_months <= 0 or annual_rate <= 0:
        return 0.0

    r = annual_to_monthly_rate(annual_rate)
    growth = compound_factor(r, period_months)
    remaining = target_amount - initial_amount * growth if initial_amount else target_amount
    if remaining <= 0:
        return 0.0
    return remaining / ((growth - 1) / r)


def required_lump_sum(target_amount: float, period_months: int, annual_rate: float) -> float:
    """Single deposit today that grows into the target with no contributions."""
    if period_months <= 0 or annual_rate <= 0:
        return target_amount
    r = annual_to_monthly_rate(annual_rate)
    return discount(target_amount, r, period_months)


def classify_viability(contribution: float, lump_sum: float, period_months: int,
                       target_amount: float) -> Viability:
    if (contribution > GOAL_INFEASIBLE_CONTRIBUTION
            or lump_sum > GOAL_INFEASIBLE_LUMP_SUM
            or target_amount > GOAL_INFEASIBLE_TARGET):
        return Viability.INFEASIBLE
    if (contribution > GOAL_DIFFICULT_CONTRIBUTION
            or lump_sum > GOAL_DIFFICULT_LUMP_SUM
            or period_months < GOAL_SHORT_PERIOD_MONTHS):
        return Viability.DIFFICULT
    return Viability.VIABLE


def goal_suggestions(contribution: float, lump_sum: float, period_months: int,
                     annual_rate: float) -> List[str]:
    suggestions: List[str] = []
    if contribution > GOAL_DIFFICULT_CONTRIBUTION:
        suggestions.append("Consider a longer term to lower the monthly contribution")
        suggestions.append("Look at investments with a higher return")
    if lump_sum > GOAL_DIFFICULT_LUMP_SUM:
        suggestions.append("Monthly contributions would lower the initial amount needed")
    if period_months < GOAL_SHORT_PERIOD_MONTHS:
        suggestions.append("A longer term gives compound interest more room to work")
    if annual_rate < GOAL_LOW_RATE:
        suggestions.append("Higher-risk investments may offer better returns")
    if not suggestions:
        suggestions.append("Well-structured goal: keep contributing consistently")
    return suggestions


def analyze_goal(goal: GoalInput) -> Optional[GoalAnalysis]:
    """Full goal breakdown; None when there is no target or no period."""
    if not goal.target_amount or not goal.period_months:
        return None

    contribution = required_contribution(
        goal.target_amount, goal.period_months, goal.annual_rate, goal.initial_amount
    )
    lump_sum = required_lump_sum(goal.target_amount, goal.period_months, goal.annual_rate)
    total_invested = goal.initial_amount + contribution * goal.period_months

    alternatives = {
        name: GoalAlternative(
            annual_rate=rate,
            contribution=required_contribution(
                goal.target_amount, goal.period_months, rate, goal.initial_amount
            ),
            lump_sum=required_lump_sum(goal.target_amount, goal.period_months, rate),
        )
        for name, rate in GOAL_ALTERNATIVE_RATES.items()
    }

    return GoalAnalysis(
        required_contribution=contribution,
        required_lump_sum=lump_sum,
        total_invested=total_invested,
        interest_earned=goal.target_amount - total_invested,
        viability=classify_viability(contribution, lump_sum, goal.period_months, goal.target_amount),
        suggestions=goal_suggestions(contribution, lump_sum, goal.period_months, goal.annual_rate),
        alternatives=alternatives,
    )


def term_scenarios(goal: GoalInput) -> List[GoalTermScenario]:
    """Required contribution across the standard terms."""
    if not goal.target_amount:
        return []

    rows = []
    for months in GOAL_TERMS_MONTHS:
        contribution = required_contribution(
            goal.target_amount, months, goal.annual_rate, goal.initial_amount
        )
        total_invested = goal.initial_amount + contribution * months
        interest = goal.target_amount - total_invested
        rows.append(GoalTermScenario(
            period_months=months,
            period_years=months / 12,
            required_contribution=contribution,
            total_invested=total_invested,
            interest_earned=interest,
            interest_percent=interest / total_invested * 100 if total_invested else 0.0,
        ))
    return rows


def initial_value_scenarios(goal: GoalInput) -> List[GoalInitialValueScenario]:
    """How much each starting amount trims the monthly contribution."""
    if not goal.target_amount or not goal.period_months:
        return []

    baseline = required_contribution(goal.target_amount, goal.period_months, goal.annual_rate, 0.0)
    rows = []
    for initial in GOAL_INITIAL_AMOUNTS:
        contribution = required_contribution(
            goal.target_amount, goal.period_months, goal.annual_rate, initial
        )
        total_invested = initial + contribution * goal.period_months
        rows.append(GoalInitialValueScenario(
            initial_amount=initial,
            required_contribution=contribution,
            total_invested=total_invested,
            interest_earned=goal.target_amount - total_invested,
            contribution_reduction=baseline - contribution if initial > 0 else 0.0,
        ))
    return rows


def goal_report(goal: GoalInput) -> GoalReport:
    return GoalReport(
        analysis=analyze_goal(goal),
        terms=term_scenarios(goal),
        initial_values=initial_value_scenarios(goal),
    )
