# config.py
# Paths, empty defaults and tunables (no sample data)

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent
DATA_DIR = Path(os.environ.get("FINANCE_DATA_DIR", BASE_DIR / "data"))

CARDS_FILE = DATA_DIR / "cards.json"
SETTINGS_FILE = DATA_DIR / "settings.json"

LOG_LEVEL = os.environ.get("FINANCE_LOG_LEVEL", "INFO").upper()

# Empty defaults: nothing is tracked until the user adds a card
EMPTY_CARDS = []
DEFAULT_SETTINGS = {"currency": "₹"}

# Upper bound on periods walked when locating the period for a date (100 years of months)
MAX_PERIOD_STEPS = 1200

# Bills due within this many days count as "due soon" on the dashboard
DUE_SOON_DAYS = 7

# Periods shown in a tracker's spend history
HISTORY_PERIODS = 6
