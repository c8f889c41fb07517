# focus_nudge/metrics.py
"""
Weekly outcome metrics.

Counts nudges shown and early exits (leaving the monitored site within
``EARLY_EXIT_WINDOW_MS`` of a nudge) for the current week. Weeks start
on Monday 00:00 local time; counters reset when the week changes.

Kept in memory; durable storage belongs to the host extension.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta

from focus_nudge.clock import Clock, now_ms
from focus_nudge.models import WeeklyCounters, WeeklySummary

logger = logging.getLogger(__name__)

EARLY_EXIT_WINDOW_MS = 120_000

# Rough minutes saved per early exit, for the weekly summary
MINUTES_SAVED_PER_EXIT = 5


def week_start_ms(at_ms: int) -> int:
    """Monday 00:00 local time of the week containing ``at_ms``."""
    moment = datetime.fromtimestamp(at_ms / 1000)
    monday = (moment - timedelta(days=moment.weekday())).replace(hour=0, minute=0, second=0, microsecond=0)
    return int(monday.timestamp() * 1000)


class WeeklyMetrics:
    """In-memory MetricsRecorder with a weekly summary."""

    def __init__(
        self,
        clock: Clock = now_ms,
        early_exit_window_ms: int = EARLY_EXIT_WINDOW_MS,
    ):
        self._clock = clock
        self.early_exit_window_ms = early_exit_window_ms
        self._counters: WeeklyCounters | None = None

    @property
    def counters(self) -> WeeklyCounters | None:
        return self._counters

    def _fresh(self) -> WeeklyCounters:
        return WeeklyCounters(week_start_ms=week_start_ms(self._clock()))

    async def ensure_week_initialized(self) -> WeeklyCounters:
        """Reset the counters if this is the first call or the week changed."""
        current = week_start_ms(self._clock())
        if self._counters is None or self._counters.week_start_ms != current:
            if self._counters is not None:
                logger.info("New week, resetting nudge metrics")
            self._counters = WeeklyCounters(week_start_ms=current)
        return self._counters

    async def record_nudge_shown(self, at_ms: int) -> None:
        counters = await self.ensure_week_initialized()
        counters.nudges_fired_weekly += 1
        counters.last_nudge_shown_ms = at_ms

    async def maybe_record_early_exit(self, at_ms: int) -> bool:
        """
        Attribute a departure to the last nudge if it falls inside the window.

        Recording clears the nudge marker, so one nudge yields at most one
        early exit.

        Returns:
            True if an early exit was recorded
        """
        counters = await self.ensure_week_initialized()
        if counters.last_nudge_shown_ms is None:
            return False

        since_nudge = at_ms - counters.last_nudge_shown_ms
        if 0 < since_nudge <= self.early_exit_window_ms:
            counters.early_exits_weekly += 1
            counters.last_nudge_shown_ms = None
            return True
        return False

    async def get_weekly_summary(self) -> WeeklySummary:
        counters = await self.ensure_week_initialized()
        return WeeklySummary(
            nudges=counters.nudges_fired_weekly,
            early_exits=counters.early_exits_weekly,
            estimated_minutes=counters.early_exits_weekly * MINUTES_SAVED_PER_EXIT,
        )

    async def reset_weekly_summary(self) -> None:
        self._counters = self._fresh()
