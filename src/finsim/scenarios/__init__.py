"""
Scenario analysis: deterministic variants, Monte Carlo, sensitivity and stress.
"""

from .deterministic import analyze_scenarios, classify_risk, scenario_statistics
from .monte_carlo import MonteCarloEngine, run_monte_carlo, summarize_trials
from .sensitivity import sensitivity_analysis, stress_test

__all__ = [
    "analyze_scenarios",
    "classify_risk",
    "scenario_statistics",
    "MonteCarloEngine",
    "run_monte_carlo",
    "summarize_trials",
    "sensitivity_analysis",
    "stress_test",
]
