# focus_nudge/drift/constants.py
"""Tuning constants for drift accumulation and nudge scheduling.

Heuristic values carried over unchanged; override them through
``DriftAccumulatorConfig`` / ``NudgeSchedulerConfig`` rather than here.
"""

from __future__ import annotations

# Passivity: lots of scrolling, little typing (events per minute)
PASSIVE_SCROLL_THRESHOLD = 5
PASSIVE_KEY_THRESHOLD = 2

# Drift decays this many times faster than it accumulates
DRIFT_DECAY_RATE = 2

# Fraction of the threshold kept after a nudge fires
DRIFT_RESET_RATIO = 0.6
