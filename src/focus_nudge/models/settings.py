# focus_nudge/models/settings.py
"""Settings and plan records."""

from __future__ import annotations

from pydantic import ConfigDict, Field

from focus_nudge.models.base import DictCompatModel
from focus_nudge.models.enums import PlanSource, Tone

MINUTE_MS = 60_000

# Bounds for user-configurable minute values
MIN_MINUTES = 1
MAX_MINUTES = 120


class EffectiveSettings(DictCompatModel):
    """Resolved nudge policy, re-read on every tick.

    Also accepts the camelCase wire shape
    ``{"tone", "driftThresholdMin", "cooldownMin"}`` so a provider can
    hand back a plain dict.
    """

    model_config = ConfigDict(populate_by_name=True)

    tone: Tone = Tone.GENTLE
    drift_threshold_min: float = Field(default=15, ge=MIN_MINUTES, le=MAX_MINUTES, alias="driftThresholdMin")
    cooldown_min: float = Field(default=30, ge=MIN_MINUTES, le=MAX_MINUTES, alias="cooldownMin")

    @property
    def drift_threshold_ms(self) -> int:
        return round(self.drift_threshold_min * MINUTE_MS)

    @property
    def cooldown_ms(self) -> int:
        return round(self.cooldown_min * MINUTE_MS)


class UserSettings(DictCompatModel):
    """
    Settings as the options page stores them.

    Unvalidated on purpose: values are clamped when resolved against
    the plan, so a tampered store cannot push them out of range.
    """

    tone: str = Tone.GENTLE.value
    drift_threshold_min: float | None = 15
    cooldown_min: float | None = 10


class Plan(DictCompatModel):
    """Subscription tier for the current user."""

    is_pro: bool = False
    source: PlanSource = PlanSource.BASIC
