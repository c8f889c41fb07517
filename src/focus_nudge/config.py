# focus_nudge/config.py
from __future__ import annotations

import os

from dotenv import load_dotenv

load_dotenv()

# Pages under this prefix are the monitored site
MONITORED_URL_PREFIX = os.getenv("FOCUS_NUDGE_URL_PREFIX", "https://www.linkedin.com/")

# Tick cadence for the drift loop
TICK_INTERVAL_MS = int(os.getenv("FOCUS_NUDGE_TICK_INTERVAL_MS", "5000"))

# Optional bound on a single sample fetch; unset means no timeout
_sample_timeout = os.getenv("FOCUS_NUDGE_SAMPLE_TIMEOUT_S")
SAMPLE_TIMEOUT_S: float | None = float(_sample_timeout) if _sample_timeout else None
