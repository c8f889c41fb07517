# focus_nudge/drift/accumulator.py
"""
Drift accumulator.

Tracks how long a context has spent in passive browsing of drift-prone
pages. Accumulation and decay are asymmetric: drift grows one-for-one
with elapsed time while the user scrolls passively through a DRIFT page,
and collapses at ``decay_rate`` times that speed otherwise.

Usage::

    accumulator = DriftAccumulator()
    state = accumulator.update(state, elapsed_ms, PageMode.DRIFT, behavior)
"""

from __future__ import annotations

import logging

from pydantic import BaseModel, Field

from focus_nudge.drift.constants import (
    DRIFT_DECAY_RATE,
    PASSIVE_KEY_THRESHOLD,
    PASSIVE_SCROLL_THRESHOLD,
)
from focus_nudge.models import BehaviorRates, DriftState, PageMode

logger = logging.getLogger(__name__)


class DriftAccumulatorConfig(BaseModel):
    """Thresholds for the passivity predicate and decay speed."""

    passive_scroll_threshold: float = Field(default=PASSIVE_SCROLL_THRESHOLD, ge=0)
    passive_key_threshold: float = Field(default=PASSIVE_KEY_THRESHOLD, ge=0)
    decay_rate: float = Field(default=DRIFT_DECAY_RATE, gt=0)


class DriftAccumulator:
    """Pure update rule for ``DriftState.accumulated_drift_ms``."""

    def __init__(self, config: DriftAccumulatorConfig | None = None) -> None:
        self.config = config or DriftAccumulatorConfig()

    def is_passive(self, behavior: BehaviorRates) -> bool:
        """High scroll rate with low keyboard activity. Clicks are not considered."""
        return (
            behavior.scroll_per_min >= self.config.passive_scroll_threshold
            and behavior.key_per_min <= self.config.passive_key_threshold
        )

    def update(
        self,
        state: DriftState,
        elapsed_ms: int,
        mode: PageMode,
        behavior: BehaviorRates,
    ) -> DriftState:
        """
        Apply one tick's worth of elapsed time to the accumulator.

        Args:
            state: Current drift state (not mutated)
            elapsed_ms: Time since the previous tick for this context
            mode: Page classification for this tick
            behavior: Interaction rates for this tick

        Returns:
            A new DriftState with the accumulator and observed mode updated
        """
        if elapsed_ms < 0:
            raise ValueError(f"elapsed_ms must be non-negative, got {elapsed_ms}")

        if mode == PageMode.DRIFT and self.is_passive(behavior):
            drift_ms = state.accumulated_drift_ms + elapsed_ms
        else:
            drift_ms = max(0, state.accumulated_drift_ms - round(elapsed_ms * self.config.decay_rate))

        return state.model_copy(
            update={
                "accumulated_drift_ms": drift_ms,
                "last_observed_mode": mode,
            }
        )
