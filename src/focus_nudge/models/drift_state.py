# focus_nudge/models/drift_state.py
"""Per-context drift state."""

from __future__ import annotations

from pydantic import BaseModel, Field

from focus_nudge.models.enums import PageMode


class DriftState(BaseModel):
    """
    Drift bookkeeping for one monitored context.

    ``last_nudge_at_ms`` is None until the first nudge fires for the
    context; the scheduler treats that as an elapsed cooldown.
    """

    accumulated_drift_ms: int = Field(default=0, ge=0)
    last_nudge_at_ms: int | None = None
    last_tick_at_ms: int = 0
    last_observed_mode: PageMode = PageMode.UNKNOWN
    last_url: str = ""

    @classmethod
    def initial(cls, now_ms: int) -> DriftState:
        """Fresh state for a context seen for the first time."""
        return cls(last_tick_at_ms=now_ms)

    @property
    def has_nudged(self) -> bool:
        return self.last_nudge_at_ms is not None
