# focus_nudge/drift/scheduler.py
"""
Nudge scheduler: threshold and cooldown policy.

A nudge fires when accumulated drift reaches the threshold and the
cooldown since the last nudge has elapsed. After firing, drift is reset
to a fraction of the threshold rather than zero, so a user who keeps
scrolling is nudged again once the cooldown runs out instead of having
to re-accumulate from scratch.
"""

from __future__ import annotations

import logging
import random

from pydantic import BaseModel, Field

from focus_nudge.drift.constants import DRIFT_RESET_RATIO
from focus_nudge.drift.messages import messages_for
from focus_nudge.models import DriftState, EffectiveSettings, Tone

logger = logging.getLogger(__name__)


class NudgeSchedulerConfig(BaseModel):
    """Post-fire reset behavior."""

    reset_ratio: float = Field(default=DRIFT_RESET_RATIO, ge=0.0, le=1.0)


class NudgeScheduler:
    """Decides when to nudge and resets state after a nudge."""

    def __init__(
        self,
        config: NudgeSchedulerConfig | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.config = config or NudgeSchedulerConfig()
        self._rng = rng or random.Random()

    def cooldown_elapsed(self, state: DriftState, settings: EffectiveSettings, now_ms: int) -> bool:
        if state.last_nudge_at_ms is None:
            return True
        return now_ms - state.last_nudge_at_ms >= settings.cooldown_ms

    def should_nudge(self, state: DriftState, settings: EffectiveSettings, now_ms: int) -> bool:
        """True when drift has reached the threshold and the cooldown has elapsed."""
        return state.accumulated_drift_ms >= settings.drift_threshold_ms and self.cooldown_elapsed(
            state, settings, now_ms
        )

    def on_nudge_fired(self, state: DriftState, settings: EffectiveSettings, now_ms: int) -> DriftState:
        """Stamp the nudge time and drop drift to ``reset_ratio`` of the threshold."""
        reset_ms = round(settings.drift_threshold_ms * self.config.reset_ratio)
        logger.debug(f"Nudge fired at {now_ms}, drift {state.accumulated_drift_ms} -> {reset_ms}")
        return state.model_copy(
            update={
                "last_nudge_at_ms": now_ms,
                "accumulated_drift_ms": reset_ms,
            }
        )

    def pick_message(self, tone: Tone | str | None) -> str:
        """Uniformly random message for the tone."""
        return self._rng.choice(messages_for(tone))
