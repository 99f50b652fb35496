"""
Shared fixtures for the simulation core tests.
"""

import sys
import os
import tempfile

import pytest

# Point persistence at a throwaway database before finsim is imported
_TMP_DIR = tempfile.mkdtemp(prefix="finsim-tests-")
os.environ.setdefault("FINSIM_DATABASE_URL", f"sqlite:///{os.path.join(_TMP_DIR, 'test.db')}")

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from finsim.catalog import default_catalog
from finsim.models import InflationSettings, PeriodUnit, RateMode, SimulationInput


@pytest.fixture
def catalog():
    """Built-in product catalog."""
    return default_catalog()


@pytest.fixture
def base_input():
    """1000 up front, 500 a month, 12% a year for two years."""
    return SimulationInput(
        initial_value=1000,
        monthly_contribution=500,
        rate_mode=RateMode.CUSTOM,
        custom_rate=12,
        period_count=24,
        period_unit=PeriodUnit.MONTHS,
    )


@pytest.fixture
def inflation_input(base_input):
    """Base input with 4.5% inflation enabled."""
    return base_input.model_copy(
        update={"inflation": InflationSettings(enabled=True, annual_rate=4.5)}
    )


@pytest.fixture
def ten_year_input():
    """Monte Carlo base case: 10% a year over ten years."""
    return SimulationInput(
        initial_value=10000,
        monthly_contribution=1000,
        rate_mode=RateMode.CUSTOM,
        custom_rate=10,
        period_count=10,
        period_unit=PeriodUnit.YEARS,
    )


@pytest.fixture
def tolerance():
    """Tolerances for floating-point comparisons."""
    return {
        "abs": 1e-6,   # currency values
        "rel": 1e-9,   # exact closed forms
        "goal": 0.02,  # goal round trip over n months
    }
