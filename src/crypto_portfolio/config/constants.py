"""Global configuration constants for Crypto Portfolio.

These values are intentionally free of any UI concerns so they can be reused
by services, the store, and the command-line entrypoint. Each tunable value
can be overridden from the environment.
"""

from __future__ import annotations

import os
from pathlib import Path

# Base directory for data files (defaults to project root)
BASE_DIR = Path(os.environ.get("CRYPTO_PORTFOLIO_DATA_DIR") or Path(__file__).resolve().parents[3])

# --- Durable client-side storage ---
STORAGE_FILE = str(BASE_DIR / "local_storage.json")
COINS_DATA_STORAGE_KEY = "COINS_DATA"

# --- Coin list endpoint ---
COINS_API_URL = os.environ.get("CRYPTO_PORTFOLIO_COINS_API_URL", "http://localhost:3000/api/coins")
HTTP_TIMEOUT_SECONDS = float(os.environ.get("CRYPTO_PORTFOLIO_HTTP_TIMEOUT", "10"))

LOG_LEVEL = os.environ.get("CRYPTO_PORTFOLIO_LOG_LEVEL", "INFO")

# Field names a row reports when one of its cells is clicked
FIELD_COIN = "coin"
FIELD_UNITS = "units"
FIELD_INITIAL_PRICE = "initial-price"
EDITABLE_FIELDS = (FIELD_COIN, FIELD_UNITS, FIELD_INITIAL_PRICE)
