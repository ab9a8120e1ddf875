"""
config.py

Default assumptions for the FIRE calculator and the small amount of
environment-driven configuration (store location, log level).
"""

import logging
import os
from datetime import datetime, timedelta, timezone

APP_NAME = "FIRE计算器"

# Reference instant from which salary accrues into the deposit
START_DATE = datetime(2024, 7, 7, tzinfo=timezone(timedelta(hours=8)))

# Annual rates as fractions
INTEREST_RATE = 0.04
INFLATION_RATE = 0.02229

# Simulation never runs longer than this many years
MAX_YEARS = 200

DEFAULTS = {
    "deposit": 100_000,
    "annual_income": 120_000,
    "life_style": {
        "desc": "普通生活方式",
        "year_cost": 60_000,
        "interest_rate": 4.0,      # percent
        "inflation_rate": 2.229,   # percent
    },
    # Seconds between live deposit refreshes on the page
    "refresh_seconds": 1,
}

STORAGE_ENV = "FIRE_CALCULATOR_CONFIG"
LOG_LEVEL_ENV = "FIRE_CALCULATOR_LOG_LEVEL"
DEFAULT_STORAGE_PATH = "user_data/carrot-config.json"


def storage_path():
    return os.environ.get(STORAGE_ENV) or DEFAULT_STORAGE_PATH


def configure_logging(level=None):
    """
    Set up root logging once. The level comes from the argument, then
    FIRE_CALCULATOR_LOG_LEVEL, then INFO.
    """
    level = level or os.environ.get(LOG_LEVEL_ENV, "INFO")
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
