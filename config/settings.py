"""
Configuration settings for PulseTrend.

Centralized configuration for all pipeline stages.
"""

import os
from pathlib import Path

# Project paths
PROJECT_ROOT = Path(__file__).parent.parent
DATA_ROOT = Path(os.getenv("PULSETREND_DATA_ROOT", PROJECT_ROOT / "data"))

# Raw table columns, in source order
RAW_COLUMNS = [
    "date",
    "stars",
    "employed",
    "technical",
    "recommends",
    "outlook",
    "ceo_opinion",
    "years",
]

# Grid / disambiguation granularity
GRID_STEP_HOURS = int(os.getenv("PULSETREND_GRID_STEP_HOURS", "1"))

# Dual-band filter (cutoff periods in grid units)
SHORT_PERIOD = float(os.getenv("PULSETREND_SHORT_PERIOD", str(24 * 30)))  # ~1 month
LONG_PERIOD = float(os.getenv("PULSETREND_LONG_PERIOD", str(24 * 180)))  # ~6 months
FILTER_ORDER = 2

# Statistic classification thresholds
GOOD_THRESHOLD = 2 / 3
OK_THRESHOLD = 1 / 3

# Imputation neutral fills
NEUTRAL_RECOMMENDS = 0.5  # Undecided, participates in averaging
NEUTRAL_OUTLOOK = 0
NEUTRAL_CEO_OPINION = 0

# Logging
LOG_LEVEL = os.getenv("PULSETREND_LOG_LEVEL", "INFO")  # DEBUG, INFO, WARNING, ERROR
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
