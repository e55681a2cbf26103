"""
config.py
---------
Central configuration module. Loads environment overrides
from the .env file and exposes them as typed constants.
"""

import os
from dotenv import load_dotenv

load_dotenv()


# ── Database ──────────────────────────────────────────────
DB_DRIVER: str = "sqlite3"
DB_PATH: str = os.getenv("DB_PATH", "TestDB")
DB_TIMEOUT: float = float(os.getenv("DB_TIMEOUT", "5.0"))

# ── Logging ───────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FORMAT: str = os.getenv("LOG_FORMAT", "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
LOG_DATE_FORMAT: str = "%Y-%m-%d %H:%M:%S"
