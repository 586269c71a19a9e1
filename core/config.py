"""Application configuration.

Values are read from the environment (optionally populated from a `.env`
file) once at import time and exposed as module-level constants.
"""

import os
from dotenv import load_dotenv

load_dotenv()

# ------------------ Database ------------------
# An explicitly empty DATABASE_URL means persistence is not configured.
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///nutrition.db")
READ_DATABASE_URL = os.getenv("READ_DATABASE_URL", DATABASE_URL)

# ------------------ Logging ------------------
LOG_DIR = os.getenv("LOG_DIR", os.path.join(os.path.dirname(__file__), "..", "logs"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# ------------------ HTTP ------------------
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

# ------------------ Preferences ------------------
MIN_DAILY_BUDGET = int(os.getenv("MIN_DAILY_BUDGET", "50"))
MAX_DAILY_BUDGET = int(os.getenv("MAX_DAILY_BUDGET", "500"))
