"""
Rate resolution and rate conversions.
"""

import logging
import math
from typing import Optional

from .catalog import ProductCatalog, default_catalog
from .config import DEFAULT_INDEX_RATE
from .models import RateMode, SimulationInput

logger = logging.getLogger(__name__)


def annual_to_monthly_rate(annual_rate: float) -> float:
    """Effective monthly rate (decimal) from an annual rate in %."""
    return (1 + annual_rate / 100) ** (1 / 12) - 1


def annual_to_daily_rate(annual_rate: float) -> float:
    """Effective daily rate (decimal) from an annual rate in %."""
    return (1 + annual_rate / 100) ** (1 / 365) - 1


def real_annual_rate(nominal_rate: float, inflation_rate: float) -> float:
    """Fisher combination of nominal rate and inflation, both in % per year."""
    return ((1 + nominal_rate / 100) / (1 + inflation_rate / 100) - 1) * 100


def compound_factor(rate: float, periods: float) -> float:
    """(1 + rate) ** periods, or inf when the result does not fit a float."""
    try:
        return (1 + rate) ** periods
    except OverflowError:
        return math.inf


def discount(value: float, rate: float, periods: float) -> float:
    """Value deflated over `periods` at `rate`; 0 once the factor overflows."""
    factor = compound_factor(rate, periods)
    return value / factor if math.isfinite(factor) else 0.0


class RateResolver:
    """
    Resolve the annual rate (%) a simulation input asks for.

    Missing or unknown rate configuration degrades to 0 instead of raising.
    """

    def __init__(self, catalog: Optional[ProductCatalog] = None,
                 default_index_rate: float = DEFAULT_INDEX_RATE):
        self.catalog = catalog if catalog is not None else default_catalog()
        self.default_index_rate = default_index_rate

    def resolve(self, sim: SimulationInput) -> float:
        if sim.rate_mode == RateMode.FIXED_PRODUCT:
            rate = self._fixed_product(sim)
        elif sim.rate_mode == RateMode.DIGITAL_BANK_PRODUCT:
            rate = self._digital_bank_product(sim)
        elif sim.rate_mode == RateMode.INDEX_PERCENTAGE:
            index_value = sim.index_value if sim.index_value is not None else self.default_index_rate
            percentage = sim.index_percentage if sim.index_percentage is not None else 100.0
            rate = index_value * (percentage / 100)
        elif sim.rate_mode == RateMode.CUSTOM:
            rate = sim.custom_rate if sim.custom_rate is not None else 0.0
        else:
            rate = 0.0

        if not math.isfinite(rate) or rate < 0:
            logger.debug("Rate %r for mode %s degraded to 0", rate, sim.rate_mode)
            return 0.0
        return float(rate)

    def _fixed_product(self, sim: SimulationInput) -> float:
        product = sim.fixed_product
        if product is None:
            return 0.0
        if product.annual_rate is not None:
            return product.annual_rate
        if product.product_id is not None:
            found = self.catalog.find_product(product.product_id)
            if found is not None:
                return found.annual_rate
        return 0.0

    def _digital_bank_product(self, sim: SimulationInput) -> float:
        ref = sim.digital_bank_ref
        if ref is None:
            return 0.0
        found = self.catalog.find_bank_product(ref.bank_id, ref.product_id)
        if found is None:
            logger.debug("Unknown bank product %s/%s", ref.bank_id, ref.product_id)
            return 0.0
        return found.annual_rate


def resolve_rate(sim: SimulationInput, catalog: Optional[ProductCatalog] = None) -> float:
    return RateResolver(catalog).resolve(sim)
