"""Load payoff settings from environment (e.g. .env)."""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root (parent of src)
_env_path = Path(__file__).resolve().parents[2] / ".env"
load_dotenv(_env_path)

# Shares per contract (equity options in the US are 100)
CONTRACT_MULTIPLIER = float(os.getenv("PAYOFF_CONTRACT_MULTIPLIER", "100"))

# Default sweep when the caller gives no explicit price range
PRICE_STEP = float(os.getenv("PAYOFF_PRICE_STEP", "10"))
STRIKE_MARGIN = float(os.getenv("PAYOFF_STRIKE_MARGIN", "50"))

# Upper bound on swept prices so a tiny step over a wide range stays cheap
MAX_SWEEP_POINTS = int(os.getenv("PAYOFF_MAX_SWEEP_POINTS", "10000"))
