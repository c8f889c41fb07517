# focus_nudge/exit_watcher.py
"""
Early-exit detection.

An early exit is the user leaving the monitored site shortly after a
nudge. The watcher follows the most recent context confirmed to be on
the site and, when that context navigates away or closes, asks the
metrics collaborator to attribute the departure to the last nudge.
The collaborator owns the time window and the once-per-nudge rule.

Losing focus is not leaving: if the tracked context is still on the
site when another context is activated, nothing is recorded.
"""

from __future__ import annotations

import logging

from focus_nudge.clock import Clock, now_ms
from focus_nudge.collaborators import BrowserRuntime, MetricsRecorder, is_monitored_url
from focus_nudge.config import MONITORED_URL_PREFIX
from focus_nudge.state_store import DriftStateStore

logger = logging.getLogger(__name__)


class ExitWatcher:
    """Reacts to context activation, navigation and removal events."""

    def __init__(
        self,
        metrics: MetricsRecorder,
        runtime: BrowserRuntime,
        store: DriftStateStore | None = None,
        url_prefix: str = MONITORED_URL_PREFIX,
        clock: Clock = now_ms,
    ):
        self._metrics = metrics
        self._runtime = runtime
        self._store = store
        self.url_prefix = url_prefix
        self._clock = clock
        self._tracked_context_id: int | None = None

    @property
    def tracked_context_id(self) -> int | None:
        return self._tracked_context_id

    async def on_activated(self, context_id: int, url: str | None) -> bool:
        """
        A context became the foreground context.

        Returns:
            True if an early exit was recorded
        """
        if is_monitored_url(url, self.url_prefix):
            self._tracked_context_id = context_id
            return False

        previous = self._tracked_context_id
        if previous is None:
            return False
        if previous == context_id:
            # The tracked context itself is now off the site
            return await self._record_departure()

        lookup = await self._previous_url(previous)
        if lookup is not None and is_monitored_url(lookup, self.url_prefix):
            logger.debug(f"Context {previous} still on site, focus change only")
            return False
        return await self._record_departure()

    async def on_updated(self, context_id: int, url: str | None) -> bool:
        """A context finished loading a new URL."""
        if is_monitored_url(url, self.url_prefix):
            self._tracked_context_id = context_id
            return False
        if context_id == self._tracked_context_id:
            return await self._record_departure()
        return False

    async def on_removed(self, context_id: int) -> bool:
        """A context closed. Its drift state is dropped as well."""
        recorded = False
        if context_id == self._tracked_context_id:
            recorded = await self._record_departure()
        if self._store is not None:
            self._store.remove(context_id)
        return recorded

    async def _previous_url(self, context_id: int) -> str | None:
        """URL of the tracked context, or None if it is gone."""
        try:
            result = await self._runtime.get_context_url(context_id)
        except Exception as e:
            logger.debug(f"Lookup of context {context_id} failed: {e}")
            return None
        return result.url if result.ok else None

    async def _record_departure(self) -> bool:
        self._tracked_context_id = None
        at_ms = self._clock()
        try:
            recorded = await self._metrics.maybe_record_early_exit(at_ms)
        except Exception as e:
            logger.warning(f"Failed to record early exit: {e}")
            return False
        if recorded:
            logger.info(f"Early exit recorded at {at_ms}")
        return bool(recorded)
