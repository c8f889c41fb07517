# focus_nudge/drift/__init__.py
"""Drift accumulation and nudge scheduling policy."""

from focus_nudge.drift.accumulator import DriftAccumulator, DriftAccumulatorConfig
from focus_nudge.drift.constants import (
    DRIFT_DECAY_RATE,
    DRIFT_RESET_RATIO,
    PASSIVE_KEY_THRESHOLD,
    PASSIVE_SCROLL_THRESHOLD,
)
from focus_nudge.drift.messages import DEFAULT_TONE, MESSAGES, messages_for
from focus_nudge.drift.scheduler import NudgeScheduler, NudgeSchedulerConfig

__all__ = [
    "DriftAccumulator",
    "DriftAccumulatorConfig",
    "NudgeScheduler",
    "NudgeSchedulerConfig",
    "DEFAULT_TONE",
    "MESSAGES",
    "messages_for",
    "DRIFT_DECAY_RATE",
    "DRIFT_RESET_RATIO",
    "PASSIVE_KEY_THRESHOLD",
    "PASSIVE_SCROLL_THRESHOLD",
]
