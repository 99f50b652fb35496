"""
Test retirement accumulation planning and the withdrawal simulator.
"""

import pytest

from finsim.models import RetirementInput, WithdrawalInput
from finsim.retirement import (
    InfeasiblePlanError,
    future_value_factor,
    plan_retirement,
    plan_withdrawals,
    present_value_factor,
)


def _retirement(**overrides):
    values = dict(current_age=30, retirement_age=60, desired_monthly_income=5000,
                  current_assets=50000, monthly_contribution=1000, annual_rate=10,
                  inflation_rate=4, life_expectancy=85)
    values.update(overrides)
    return RetirementInput(**values)


class TestAnnuityFactors:

    def test_zero_rate_limits(self):
        assert present_value_factor(0.0, 120) == 120
        assert future_value_factor(0.0, 120) == 120

    def test_non_positive_months(self):
        assert present_value_factor(0.01, 0) == 0.0
        assert future_value_factor(0.01, -5) == 0.0

    def test_rate_at_minus_one_raises(self):
        with pytest.raises(InfeasiblePlanError):
            present_value_factor(-1.0, 12)

    def test_overflowing_factors_raise(self):
        with pytest.raises(InfeasiblePlanError):
            present_value_factor(-0.99, 1000)
        with pytest.raises(InfeasiblePlanError):
            future_value_factor(10.0, 1000)

    def test_infeasible_is_value_error(self):
        assert issubclass(InfeasiblePlanError, ValueError)


class TestPlanRetirement:

    def test_required_corpus(self):
        plan = plan_retirement(_retirement())
        adjusted = 5000 * 1.04 ** 30
        real = 0.10 / 12 - 0.04 / 12
        expected = adjusted * (1 - (1 + real) ** -300) / real
        assert abs(plan.adjusted_monthly_income - adjusted) < 1e-6
        assert abs(plan.required_corpus - expected) / expected < 1e-9, (
            f"Required corpus {plan.required_corpus} vs {expected}"
        )
        assert plan.years_accumulating == 30
        assert plan.years_retired == 25

    def test_projection_matches_trajectory(self):
        plan = plan_retirement(_retirement())
        assert len(plan.accumulation_trajectory) == 360
        last = plan.accumulation_trajectory[-1].balance
        assert abs(last - plan.projected_corpus) / plan.projected_corpus < 1e-9

    def test_shortfall_and_suggestion(self):
        plan = plan_retirement(_retirement())
        assert plan.shortfall == max(0.0, plan.required_corpus - plan.projected_corpus)
        fv = future_value_factor(0.10 / 12, 360)
        assert abs(plan.suggested_contribution * fv - plan.shortfall) < 1e-6

    def test_no_shortfall_when_overfunded(self):
        plan = plan_retirement(_retirement(current_assets=10_000_000))
        assert plan.shortfall == 0.0
        assert plan.suggested_contribution == 0.0

    def test_zero_real_rate_uses_limit(self):
        """Rate equal to inflation: the annuity factor is simply the month count."""
        plan = plan_retirement(_retirement(annual_rate=6, inflation_rate=6))
        assert abs(plan.required_corpus - plan.adjusted_monthly_income * 300) < 1e-6

    def test_negative_real_rate_needs_more_than_undiscounted(self):
        plan = plan_retirement(_retirement(annual_rate=2, inflation_rate=8))
        assert plan.required_corpus > plan.adjusted_monthly_income * 300

    def test_runaway_inflation_raises(self):
        with pytest.raises(InfeasiblePlanError):
            plan_retirement(_retirement(annual_rate=0, inflation_rate=1200))

    def test_discount_overflow_raises(self):
        """A real rate just above -100% overflows the annuity factor."""
        with pytest.raises(InfeasiblePlanError):
            plan_retirement(_retirement(current_assets=0, monthly_contribution=0,
                                        annual_rate=0, inflation_rate=1150))

    def test_growth_overflow_raises(self):
        with pytest.raises(InfeasiblePlanError):
            plan_retirement(_retirement(annual_rate=1e6, inflation_rate=0))

    def test_withdrawal_trajectory_capped(self):
        plan = plan_retirement(_retirement(life_expectancy=100, current_assets=50_000_000))
        assert len(plan.withdrawal_trajectory) == 360, "Withdrawal trajectory is capped at 360 months"

    def test_withdrawal_trajectory_stops_at_depletion(self):
        plan = plan_retirement(_retirement(current_assets=0, monthly_contribution=100))
        trajectory = plan.withdrawal_trajectory
        assert trajectory[-1].balance == 0.0
        assert len(trajectory) < 300
        assert all(r.contribution == -plan.adjusted_monthly_income for r in trajectory)


class TestWithdrawals:

    def test_indexed_withdrawals_deplete(self):
        """1M corpus, 8000/month indexed at 4%, 8% return, 30 years."""
        plan = plan_withdrawals(WithdrawalInput(
            initial_corpus=1_000_000, monthly_withdrawal=8000, annual_rate=8,
            inflation_rate=4, horizon_years=30, index_to_inflation=True,
        ))
        depleted = plan.trajectory[-1].balance <= 0
        assert plan.sustainable == (not depleted), "Sustainable must match whether the balance ran out"
        assert not plan.sustainable
        assert plan.duration_months < 360
        assert plan.duration_months == len(plan.trajectory) - 1
        assert plan.final_balance == 0.0

    def test_flat_withdrawals_sustainable(self):
        plan = plan_withdrawals(WithdrawalInput(
            initial_corpus=1_000_000, monthly_withdrawal=5000, annual_rate=8,
            inflation_rate=4, horizon_years=30, index_to_inflation=False,
        ))
        assert plan.sustainable
        assert plan.duration_months == 360
        assert plan.final_balance > 1_000_000
        assert abs(plan.total_withdrawn - 5000 * 360) < 1e-6

    def test_indexing_raises_withdrawals(self):
        plan = plan_withdrawals(WithdrawalInput(
            initial_corpus=5_000_000, monthly_withdrawal=1000, annual_rate=8,
            inflation_rate=6, horizon_years=2,
        ))
        first, last = plan.trajectory[0], plan.trajectory[-1]
        assert first.contribution == -1000
        assert abs(last.contribution + 1000 * 1.005 ** 23) < 1e-9
