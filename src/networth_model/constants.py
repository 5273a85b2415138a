# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Model constants for net worth projections.

All returns are real (after inflation) annual rates in decimal form.
"""

# ===== ASSET CLASS RETURNS =====
REAL_RETURN_CASH = 0.02  # High yield savings, net of inflation
REAL_RETURN_INVESTMENT = 0.07  # Long-run equity average
REAL_RETURN_OTHER = 0.00  # Vehicles and other flat/depreciating assets

# ===== TAXES =====
DEFAULT_TAX_DRAG = 0.15  # Long-term capital gains
FEDERAL_EFFECTIVE_TAX = 0.24  # Simplified effective federal rate

# ===== CAREER =====
DEFAULT_START_AGE = 22
DEFAULT_SAVINGS_RATE = 0.25
MAX_SAVINGS_RATE = 0.9
EXECUTIVE_ANNUAL_RAISE = 0.03
LEVEL_INTERPOLATION_WEIGHT = 0.5  # Max share of the gap to the next level

# ===== ALLOCATION =====
ALLOCATION_TOLERANCE = 0.01
DEFAULT_CASH_PERCENT = 0.20
DEFAULT_INVESTMENT_PERCENT = 0.70
DEFAULT_OTHER_PERCENT = 0.10

# ===== MONTE CARLO =====
CASH_BUFFER_MONTHS = 3
GROWING_THRESHOLD = 1.5  # Final / initial net worth for a "growing" path
DEPLETION_CHECKPOINTS = (12, 24, 36)
HISTOGRAM_BUCKETS = 50
NUM_SAMPLE_PATHS = 20
SCENARIO_FRACTION = 0.10
VAR_CONFIDENCE = 0.95

# ===== DETERMINISTIC RUNWAY =====
RUNWAY_MAX_MONTHS = 600
RUNWAY_TAX_RATE = 0.20  # On realized investment gains
RUNWAY_INFLATION = 0.03
RUNWAY_RESERVE_MONTHS = 12  # Cash above this many months of burn is reinvested
LIQUIDITY_WARNING_MONTHS = 6
SAFE_WITHDRAWAL_RATE = 0.04
CAUTION_WITHDRAWAL_RATE = 0.06
DAYS_PER_MONTH = 30.44
MAX_BURN_INTERVAL_MONTHS = 12

# ===== RETURN SCENARIOS =====
SCENARIO_YEARS = 10
SCENARIO_SIMULATIONS = 1000

# ===== TRAJECTORY =====
DAYS_PER_YEAR = 365.25
MIN_INFLECTION_VELOCITY = 5.0  # $/day
SMOOTHING_HALF_WINDOW_DAYS = 45
STABLE_ACCELERATION = 1.0  # $/day^2

# ===== FIRE =====
LEAN_FIRE_WITHDRAWAL_RATE = 0.04
REGULAR_FIRE_WITHDRAWAL_RATE = 0.035
FAT_FIRE_WITHDRAWAL_RATE = 0.025
COAST_FIRE_TARGET_AGE = 65
MAX_PROJECTION_YEARS = 100
BARISTA_WITHDRAWAL_RATE = 0.03
DEFAULT_PART_TIME_INCOME = 20000
COUPLE_EXPENSE_MULTIPLIER = 1.7
MAX_SPEND_INCOME_SHARE = 0.95
MAX_SPEND_TOLERANCE = 100  # Dollars a year
