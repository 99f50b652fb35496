"""
Pydantic models for the simulation core.
All data models passed into and returned from the calculators.
"""

from enum import Enum
from typing import List, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, conint, confloat

from .config import (
    DEFAULT_INFLATION_RATE,
    DEFAULT_TRIALS,
    MIN_TRIALS,
    MAX_TRIALS,
    DEFAULT_VOLATILITY,
    DEFAULT_TREND,
    DEFAULT_INFLATION_CORRELATION,
)


# ============================
# Enumerations
# ============================
class RateMode(str, Enum):
    FIXED_PRODUCT = "fixed_product"
    DIGITAL_BANK_PRODUCT = "digital_bank_product"
    INDEX_PERCENTAGE = "index_percentage"
    CUSTOM = "custom"


class PeriodUnit(str, Enum):
    MONTHS = "months"
    YEARS = "years"


class ScenarioLabel(str, Enum):
    PESSIMISTIC = "pessimistic"
    REALISTIC = "realistic"
    OPTIMISTIC = "optimistic"


class TrialCategory(str, Enum):
    """Monte Carlo trial bucket by real return"""
    PESSIMISTIC = "pessimistic"  # below 0%
    REALISTIC = "realistic"      # 0% up to the optimistic threshold
    OPTIMISTIC = "optimistic"


class RiskLevel(str, Enum):
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    VERY_HIGH = "very_high"


class Viability(str, Enum):
    VIABLE = "viable"
    DIFFICULT = "difficult"
    INFEASIBLE = "infeasible"


# ============================
# Simulation Input
# ============================
class FixedProduct(BaseModel):
    """Bank product picked from the product table, or typed in directly"""
    model_config = ConfigDict(frozen=True)

    annual_rate: Optional[float] = None
    product_id: Optional[str] = None


class DigitalBankRef(BaseModel):
    model_config = ConfigDict(frozen=True)

    bank_id: str
    product_id: str


class InflationSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    enabled: bool = False
    annual_rate: float = DEFAULT_INFLATION_RATE  # % per year


class SimulationInput(BaseModel):
    """
    One compound-interest simulation request.

    Optional rate fields are substituted only when absent (None):
    index_value -> configured reference index, index_percentage -> 100,
    custom_rate -> 0. An explicit 0 is kept.
    """
    model_config = ConfigDict(frozen=True)

    initial_value: float = 0.0
    monthly_contribution: float = 0.0
    rate_mode: RateMode = RateMode.CUSTOM
    fixed_product: Optional[FixedProduct] = None
    digital_bank_ref: Optional[DigitalBankRef] = None
    index_value: Optional[float] = None       # % per year
    index_percentage: Optional[float] = None  # % of the index
    custom_rate: Optional[float] = None       # % per year
    period_count: int = 12
    period_unit: PeriodUnit = PeriodUnit.MONTHS
    inflation: Optional[InflationSettings] = None


# ============================
# Simulation Output
# ============================
class MonthlyRecord(BaseModel):
    """One month of a trajectory"""
    model_config = ConfigDict(frozen=True)

    month: int
    contribution: float
    interest: float
    balance: float
    real_balance: Optional[float] = None
    inflation_loss: Optional[float] = None
    real_gain: Optional[float] = None


class YearlyRecord(BaseModel):
    """Twelve months of a trajectory folded into one row"""
    year: int
    contribution: float
    interest: float
    balance: float
    real_balance: Optional[float] = None
    inflation_loss: float = 0.0
    real_gain: float = 0.0


class SimulationResult(BaseModel):
    total_contributed: float
    total_interest: float
    final_balance: float
    daily_gain: float
    monthly_gain: float
    annual_gain: float
    trajectory: List[MonthlyRecord] = Field(default_factory=list)
    effective_monthly_rate: float  # %
    effective_daily_rate: float    # %
    total_return_percent: float

    # Only set when inflation is enabled
    real_final_balance: Optional[float] = None
    real_total_interest: Optional[float] = None
    real_return_percent: Optional[float] = None
    real_annual_rate: Optional[float] = None
    total_inflation_loss: Optional[float] = None


# ============================
# Inflation Models
# ============================
class InflationParams(BaseModel):
    initial_value: float
    monthly_contribution: float = 0.0
    period_months: int
    annual_rate: float       # nominal % per year
    inflation_rate: float    # % per year


class InflationPoint(BaseModel):
    month: int
    nominal_value: float
    real_value: float             # nominal value discounted by inflation
    real_compounded_value: float  # balance compounded at the Fisher real rate
    loss: float
    loss_percent: float


class InflationResult(BaseModel):
    final_nominal: float
    final_real: float
    final_real_compounded: float
    total_loss: float
    loss_percent: float
    trajectory: List[InflationPoint] = Field(default_factory=list)
    purchasing_power_initial: float
    purchasing_power_final: float
    months_to_recover_loss: Optional[int] = None


class InflationImpact(BaseModel):
    value_lost: float
    impact_percent: float
    months_to_recover: Optional[int] = None


class InflationComparison(BaseModel):
    with_inflation: InflationResult
    without_inflation: InflationResult
    absolute_difference: float
    percent_difference: float
    impact: InflationImpact


# ============================
# Retirement Models
# ============================
class RetirementInput(BaseModel):
    current_age: int
    retirement_age: int
    desired_monthly_income: float  # in today's money
    current_assets: float = 0.0
    monthly_contribution: float = 0.0
    annual_rate: float             # % per year
    inflation_rate: float          # % per year
    life_expectancy: int


class RetirementPlan(BaseModel):
    required_corpus: float
    projected_corpus: float
    shortfall: float
    suggested_contribution: float
    adjusted_monthly_income: float
    years_accumulating: int
    years_retired: int
    accumulation_trajectory: List[MonthlyRecord] = Field(default_factory=list)
    withdrawal_trajectory: List[MonthlyRecord] = Field(default_factory=list)


class WithdrawalInput(BaseModel):
    initial_corpus: float
    monthly_withdrawal: float
    annual_rate: float       # % per year
    inflation_rate: float    # % per year
    horizon_years: int
    index_to_inflation: bool = True


class WithdrawalPlan(BaseModel):
    sustainable: bool
    duration_months: int
    final_balance: float
    total_withdrawn: float
    trajectory: List[MonthlyRecord] = Field(default_factory=list)


# ============================
# Goal Models
# ============================
class GoalInput(BaseModel):
    target_amount: float
    period_months: int
    annual_rate: float          # % per year
    initial_amount: float = 0.0


class GoalAlternative(BaseModel):
    annual_rate: float
    contribution: float
    lump_sum: float


class GoalAnalysis(BaseModel):
    required_contribution: float
    required_lump_sum: float
    total_invested: float
    interest_earned: float
    viability: Viability
    suggestions: List[str]
    alternatives: Dict[str, GoalAlternative]


class GoalTermScenario(BaseModel):
    period_months: int
    period_years: float
    required_contribution: float
    total_invested: float
    interest_earned: float
    interest_percent: float


class GoalInitialValueScenario(BaseModel):
    initial_amount: float
    required_contribution: float
    total_invested: float
    interest_earned: float
    contribution_reduction: float


class GoalReport(BaseModel):
    """Goal breakdown plus the term and initial-amount what-if tables"""
    analysis: Optional[GoalAnalysis] = None
    terms: List[GoalTermScenario] = Field(default_factory=list)
    initial_values: List[GoalInitialValueScenario] = Field(default_factory=list)


# ============================
# Scenario Models
# ============================
class ScenarioShifts(BaseModel):
    """Percentage shifts applied to the base input per scenario"""
    rate_pessimistic: float = -30.0
    rate_optimistic: float = 20.0
    inflation_pessimistic: Optional[float] = None
    inflation_optimistic: Optional[float] = None
    contribution_pessimistic: Optional[float] = None
    contribution_optimistic: Optional[float] = None


class ScenarioRequest(BaseModel):
    base: SimulationInput
    shifts: ScenarioShifts = ScenarioShifts()


class ScenarioVariant(BaseModel):
    label: ScenarioLabel
    probability_weight: float  # 0-100
    rate_shift_percent: float
    inflation_shift_percent: Optional[float] = None
    contribution_shift_percent: Optional[float] = None
    simulation: SimulationInput
    result: SimulationResult


class ScenarioStatistics(BaseModel):
    minimum: float
    maximum: float
    mean: float
    expected_value: float
    standard_deviation: float
    coefficient_of_variation: float
    amplitude: float
    amplitude_percent: float


class ScenarioAnalysis(BaseModel):
    variants: List[ScenarioVariant]
    statistics: ScenarioStatistics
    risk_level: RiskLevel
    best: ScenarioLabel
    worst: ScenarioLabel


# ============================
# Monte Carlo Models
# ============================
class MonteCarloParams(BaseModel):
    trials: conint(ge=MIN_TRIALS, le=MAX_TRIALS) = DEFAULT_TRIALS
    volatility: confloat(ge=0.0, le=1.0) = DEFAULT_VOLATILITY
    trend: float = DEFAULT_TREND  # annual drift applied to the rate
    inflation_correlation: confloat(ge=0.0, le=1.0) = DEFAULT_INFLATION_CORRELATION
    seed: Optional[int] = None


class MonteCarloRequest(BaseModel):
    base: SimulationInput
    params: MonteCarloParams = MonteCarloParams()


class MonteCarloTrial(BaseModel):
    trial_index: int
    final_value: float      # inflation-discounted
    return_percent: float
    category: TrialCategory


class MonteCarloSummary(BaseModel):
    trials: int
    total_contributed: float
    mean: float
    median: float
    percentile5: float
    percentile25: float
    percentile75: float
    percentile95: float
    minimum: float
    maximum: float
    value_at_risk: float
    conditional_var: float
    sharpe_ratio: float
    max_drawdown: float
    probability_of_loss: float  # %
    distribution: Dict[TrialCategory, float]  # % of trials per category


# ============================
# Sensitivity & Stress Models
# ============================
class SensitivityPoint(BaseModel):
    shift_percent: float
    final_value: float
    impact_percent: float


class SensitivityCurve(BaseModel):
    variable: str
    points: List[SensitivityPoint]
    elasticity: float


class StressResult(BaseModel):
    name: str
    description: str
    probability: float
    annual_rate: float
    inflation_rate: float
    final_value: float
    real_final_value: float
    impact_percent: float


# ============================
# Snapshot Models
# ============================
class SnapshotIn(BaseModel):
    """Saved simulation (request and result) for the history view"""
    name: str
    kind: str = "simulation"
    payload: Dict = Field(default_factory=dict)


class SnapshotOut(SnapshotIn):
    id: int
