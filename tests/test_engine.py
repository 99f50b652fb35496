"""
Test the month-by-month compound interest engine.
"""

import pytest

from finsim.engine import CompoundInterestEngine, period_in_months, simulate, yearly_view
from finsim.models import InflationSettings, PeriodUnit, RateMode, SimulationInput


class TestEngineProperties:
    """Invariants that hold for every simulation."""

    @pytest.mark.parametrize("initial,monthly,rate,months", [
        (1000, 500, 12, 24),
        (0, 200, 8, 60),
        (50000, 0, 15, 36),
        (100, 100, 0, 12),
    ])
    def test_monotonic_balance(self, initial, monthly, rate, months):
        """Balances never decrease with non-negative contributions and rate."""
        result = simulate(SimulationInput(
            initial_value=initial, monthly_contribution=monthly,
            custom_rate=rate, period_count=months,
        ))
        balances = [r.balance for r in result.trajectory]
        for prev, curr in zip(balances, balances[1:]):
            assert curr >= prev, f"Balance decreased from {prev} to {curr}"

    @pytest.mark.parametrize("initial,monthly,rate,months", [
        (1000, 500, 12, 24),
        (0, 300, 10, 120),
        (25000, 0, 6.17, 12),
    ])
    def test_conservation(self, initial, monthly, rate, months):
        """Contributed plus interest equals the final balance."""
        result = simulate(SimulationInput(
            initial_value=initial, monthly_contribution=monthly,
            custom_rate=rate, period_count=months,
        ))
        total = result.total_contributed + result.total_interest
        assert abs(total - result.final_balance) < 1e-6, (
            f"Conservation broken: {total} vs {result.final_balance}"
        )

    def test_zero_rate_idempotence(self):
        """No interest accrues at 0%."""
        result = simulate(SimulationInput(
            initial_value=1000, monthly_contribution=500, custom_rate=0, period_count=24,
        ))
        assert result.final_balance == result.total_contributed
        assert result.total_interest == 0.0
        assert all(r.interest == 0.0 for r in result.trajectory)

    def test_period_unit_equivalence(self, base_input):
        """12 months and 1 year give the same trajectory."""
        months = simulate(base_input.model_copy(update={"period_count": 12}))
        years = simulate(base_input.model_copy(
            update={"period_count": 1, "period_unit": PeriodUnit.YEARS}
        ))
        assert months.trajectory == years.trajectory
        assert months.final_balance == years.final_balance

    def test_period_in_months(self):
        assert period_in_months(3, PeriodUnit.YEARS) == 36
        assert period_in_months(7, PeriodUnit.MONTHS) == 7


class TestConcreteScenario:
    """1000 initial, 500/month, 24 months at 12% custom."""

    def test_effective_monthly_rate(self, base_input):
        result = simulate(base_input)
        assert abs(result.effective_monthly_rate - 0.9489) < 1e-3, (
            f"Expected ~0.9489%, got {result.effective_monthly_rate}"
        )

    def test_trajectory_shape(self, base_input):
        result = simulate(base_input)
        assert len(result.trajectory) == 24
        assert [r.month for r in result.trajectory] == list(range(1, 25))
        balances = [r.balance for r in result.trajectory]
        assert all(b < a for b, a in zip(balances, balances[1:])), "Balances must strictly increase"

    def test_first_month_books_initial_value(self, base_input):
        """Month 1 records the initial value; contributions start in month 2."""
        result = simulate(base_input)
        first, second = result.trajectory[0], result.trajectory[1]
        assert first.contribution == 1000
        assert abs(first.balance - 1000 * (1.12 ** (1 / 12))) < 1e-9
        assert second.contribution == 500
        assert result.total_contributed == 1000 + 500 * 23

    def test_gains(self, base_input):
        result = simulate(base_input)
        assert abs(result.annual_gain - result.final_balance * 0.12) < 1e-9
        assert result.daily_gain < result.monthly_gain < result.annual_gain

    def test_inflation_fields_absent_when_disabled(self, base_input):
        result = simulate(base_input)
        assert result.real_final_balance is None
        assert result.total_inflation_loss is None
        assert result.trajectory[0].real_balance is None


class TestEngineEdgeCases:
    """Degenerate inputs resolve to sentinel results, never exceptions."""

    def test_nothing_invested(self):
        result = simulate(SimulationInput(custom_rate=12, period_count=24))
        assert result.final_balance == 0.0
        assert result.total_contributed == 0.0
        assert result.trajectory == []

    @pytest.mark.parametrize("count", [0, -3])
    def test_non_positive_period_echoes_initial(self, count):
        result = simulate(SimulationInput(initial_value=1500, custom_rate=12, period_count=count))
        assert result.final_balance == 1500
        assert result.total_interest == 0.0
        assert result.trajectory == []

    def test_unresolvable_rate_runs_at_zero(self):
        sim = SimulationInput(initial_value=1000, rate_mode=RateMode.FIXED_PRODUCT, period_count=6)
        result = CompoundInterestEngine(sim).run()
        assert result.final_balance == 1000
        assert result.effective_monthly_rate == 0.0


    def test_overflowing_inflation_discount_degrades_to_zero(self):
        """Real values fall to 0 once the inflation factor leaves the float range."""
        result = simulate(SimulationInput(
            initial_value=1000, monthly_contribution=100, custom_rate=10,
            period_count=100, period_unit=PeriodUnit.YEARS,
            inflation=InflationSettings(enabled=True, annual_rate=1e6),
        ))
        assert len(result.trajectory) == 1200
        assert result.trajectory[0].real_balance > 0
        assert result.trajectory[-1].real_balance == 0.0
        assert result.real_final_balance == 0.0
        assert result.final_balance > 0, "Nominal balance is unaffected by inflation"


class TestEngineInflation:
    """Real values when inflation is enabled."""

    def test_real_balance_below_nominal(self, inflation_input):
        result = simulate(inflation_input)
        assert result.real_final_balance < result.final_balance
        for record in result.trajectory:
            assert record.real_balance < record.balance, f"Month {record.month} real >= nominal"
            assert abs(record.real_gain - (record.interest - record.inflation_loss)) < 1e-9

    def test_real_final_discount(self, inflation_input):
        result = simulate(inflation_input)
        monthly_inflation = 1.045 ** (1 / 12) - 1
        expected = result.final_balance / (1 + monthly_inflation) ** 24
        assert abs(result.real_final_balance - expected) < 1e-6
        assert abs(result.real_annual_rate - (1.12 / 1.045 - 1) * 100) < 1e-9

    def test_total_inflation_loss(self, inflation_input):
        result = simulate(inflation_input)
        summed = sum(r.inflation_loss for r in result.trajectory)
        assert abs(result.total_inflation_loss - summed) < 1e-9

    def test_disabled_settings_ignored(self, base_input):
        sim = base_input.model_copy(update={"inflation": InflationSettings(enabled=False, annual_rate=10)})
        assert simulate(sim).real_final_balance is None


class TestYearlyView:

    def test_folds_months(self, base_input):
        result = simulate(base_input)
        years = yearly_view(result.trajectory)
        assert len(years) == 2
        assert years[0].year == 1
        assert years[1].balance == result.final_balance
        contributed = sum(y.contribution for y in years)
        assert contributed == result.total_contributed

    def test_partial_last_year(self):
        result = simulate(SimulationInput(initial_value=100, custom_rate=5, period_count=14))
        years = yearly_view(result.trajectory)
        assert len(years) == 2
        assert years[-1].balance == result.trajectory[-1].balance

    def test_empty(self):
        assert yearly_view([]) == []
