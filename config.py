"""
config.py
---------
Central configuration module. Loads all environment variables
from the .env file and exposes them as typed constants.
"""

import os
from pathlib import Path

from dotenv import load_dotenv
from platformdirs import user_data_dir

load_dotenv()


# ── Storage ───────────────────────────────────────────────
DATA_DIR: Path = Path(os.getenv("REPEAT_DATA_DIR", user_data_dir("repeat", appauthor=False)))
DB_PATH: Path = Path(os.getenv("REPEAT_DB_PATH", str(DATA_DIR / "cards.db")))

# ── Logging ───────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("REPEAT_LOG_LEVEL", "WARNING").upper()

# ── Scheduling ────────────────────────────────────────────
DESIRED_RETENTION: float = float(os.getenv("REPEAT_DESIRED_RETENTION", "0.9"))
MAX_INTERVAL_DAYS: int = int(os.getenv("REPEAT_MAX_INTERVAL_DAYS", "36500"))

# Cards with an interval above this many days count as mature.
MATURE_INTERVAL_DAYS: float = 21.0
