"""
Application configuration and constants.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment overrides (.env in the working directory, if any)
load_dotenv()

# API configuration
API_VERSION = "1.0.0"
API_TITLE = "Compound Interest Simulator API"
API_DESCRIPTION = "Compound interest, inflation, retirement, goal and scenario simulations"

# CORS configuration
CORS_ORIGINS = ["*"]  # In production, replace with specific origins
CORS_CREDENTIALS = True
CORS_METHODS = ["*"]
CORS_HEADERS = ["*"]

# Persistence (saved simulation snapshots)
DATA_DIR = Path(__file__).parent.parent.parent / "data"
DATABASE_URL = os.getenv("FINSIM_DATABASE_URL", f"sqlite:///{DATA_DIR / 'finsim.db'}")

# Rate defaults (% per year)
DEFAULT_INDEX_RATE = 13.75         # reference index (CDI) when none is given
DEFAULT_INFLATION_RATE = 3.25      # central bank target
SCENARIO_BASE_INFLATION = 4.5      # scenario runs without an inflation setting
SCENARIO_RATE_FLOOR = 0.1          # shifted rates never drop below this

# Deterministic scenarios: (pessimistic, realistic, optimistic), sums to 100
SCENARIO_WEIGHTS = (20, 60, 20)

# Risk bands on the coefficient of variation (%)
RISK_LOW_CV = 10
RISK_MODERATE_CV = 25
RISK_HIGH_CV = 50

# Monte Carlo defaults
DEFAULT_TRIALS = 1000
MIN_TRIALS = 1
MAX_TRIALS = 100000
DEFAULT_VOLATILITY = 0.15
DEFAULT_TREND = 0.02
DEFAULT_INFLATION_CORRELATION = 0.3
INFLATION_VOLATILITY = 0.1
OPTIMISTIC_RETURN_THRESHOLD = 50.0  # % real return

# Retirement
RETIREMENT_WITHDRAWAL_CAP_MONTHS = 360

# Goal viability thresholds
GOAL_DIFFICULT_CONTRIBUTION = 5000
GOAL_DIFFICULT_LUMP_SUM = 50000
GOAL_SHORT_PERIOD_MONTHS = 12
GOAL_INFEASIBLE_CONTRIBUTION = 10000
GOAL_INFEASIBLE_LUMP_SUM = 100000
GOAL_INFEASIBLE_TARGET = 1000000
GOAL_LOW_RATE = 10.0
GOAL_ALTERNATIVE_RATES = {"conservative": 8.0, "moderate": 12.0, "aggressive": 18.0}
GOAL_TERMS_MONTHS = [12, 24, 36, 48, 60, 72, 84, 96, 120]
GOAL_INITIAL_AMOUNTS = [0, 5000, 10000, 20000, 30000, 50000]

# Logging configuration
LOG_LEVEL = os.getenv("FINSIM_LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
