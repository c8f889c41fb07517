# focus_nudge/models/metrics.py
"""Weekly outcome counters."""

from __future__ import annotations

from pydantic import BaseModel, Field

from focus_nudge.models.base import DictCompatModel


class WeeklyCounters(BaseModel):
    """Raw counters for the current week."""

    week_start_ms: int
    nudges_fired_weekly: int = Field(default=0, ge=0)
    early_exits_weekly: int = Field(default=0, ge=0)
    # Cleared once an early exit has been attributed to the nudge
    last_nudge_shown_ms: int | None = None


class WeeklySummary(DictCompatModel):
    """What the popup shows for the week so far."""

    nudges: int = 0
    early_exits: int = 0
    estimated_minutes: int = 0
