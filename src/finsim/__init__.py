"""
Personal-finance simulation core: compound interest, inflation, retirement,
goals and scenario analysis.
"""

from .engine import CompoundInterestEngine, simulate, yearly_view
from .rates import RateResolver, resolve_rate

__version__ = "1.0.0"

__all__ = [
    "CompoundInterestEngine",
    "simulate",
    "yearly_view",
    "RateResolver",
    "resolve_rate",
]
