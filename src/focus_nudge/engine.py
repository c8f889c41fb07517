# focus_nudge/engine.py
"""
FocusNudgeEngine - wires the drift engine to its collaborators.

The host (a browser extension background process, or a simulation)
supplies the content layer and browser runtime, then forwards browser
events to the engine's entry points.

Examples:
    ```python
    engine = FocusNudgeEngine(content=content, runtime=runtime)
    await engine.on_installed()
    engine.start()

    # From the host's tab listeners
    await engine.on_context_activated(tab_id, url)
    await engine.on_context_updated(tab_id, url)
    await engine.on_context_removed(tab_id)

    # From the message channel
    response = await engine.handle_message({"type": "GET_WEEKLY_SUMMARY"})
    ```
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from focus_nudge.clock import Clock, now_ms
from focus_nudge.collaborators import BrowserRuntime, ContentLayer
from focus_nudge.config import MONITORED_URL_PREFIX, TICK_INTERVAL_MS
from focus_nudge.drift import DriftAccumulator, NudgeScheduler
from focus_nudge.exit_watcher import ExitWatcher
from focus_nudge.metrics import WeeklyMetrics
from focus_nudge.plan import InMemorySettingsProvider
from focus_nudge.router import MessageRouter
from focus_nudge.state_store import DriftStateStore
from focus_nudge.tick_loop import TickLoop, TickOutcome

logger = logging.getLogger(__name__)


class FocusNudgeEngine:
    """
    Owns the state store and the components that share it.

    A content layer that sends ``NUDGE_SHOWN`` after drawing the overlay
    should be wired with ``content_reports_nudges=True``. The tick loop
    then leaves nudge counting to the router.
    """

    def __init__(
        self,
        content: ContentLayer,
        runtime: BrowserRuntime,
        settings: InMemorySettingsProvider | None = None,
        metrics: WeeklyMetrics | None = None,
        accumulator: DriftAccumulator | None = None,
        scheduler: NudgeScheduler | None = None,
        interval_ms: int = TICK_INTERVAL_MS,
        url_prefix: str = MONITORED_URL_PREFIX,
        clock: Clock = now_ms,
        content_reports_nudges: bool = False,
    ):
        self.store = DriftStateStore()
        self.settings = settings or InMemorySettingsProvider()
        self.metrics = metrics or WeeklyMetrics(clock=clock)
        self.tick_loop = TickLoop(
            self.store,
            content=content,
            settings=self.settings,
            metrics=self.metrics,
            runtime=runtime,
            accumulator=accumulator,
            scheduler=scheduler,
            interval_ms=interval_ms,
            url_prefix=url_prefix,
            clock=clock,
            report_nudges=not content_reports_nudges,
        )
        self.exit_watcher = ExitWatcher(
            self.metrics,
            runtime,
            store=self.store,
            url_prefix=url_prefix,
            clock=clock,
        )
        self.router = MessageRouter(self.settings, self.metrics, clock=clock)

    # --- Lifecycle ---

    async def on_startup(self) -> None:
        await self.router.on_startup()

    async def on_installed(self) -> None:
        await self.router.on_installed()

    def start(self) -> asyncio.Task:
        return self.tick_loop.start()

    async def stop(self) -> None:
        await self.tick_loop.stop()
        self.store.clear()

    async def tick(self) -> TickOutcome:
        """Run a single tick now, outside the timer."""
        return await self.tick_loop.run_once()

    # --- Browser events ---

    async def on_context_activated(self, context_id: int, url: str | None) -> bool:
        return await self.exit_watcher.on_activated(context_id, url)

    async def on_context_updated(self, context_id: int, url: str | None) -> bool:
        return await self.exit_watcher.on_updated(context_id, url)

    async def on_context_removed(self, context_id: int) -> bool:
        return await self.exit_watcher.on_removed(context_id)

    # --- Messages ---

    async def handle_message(self, message: dict[str, Any]) -> dict[str, Any]:
        return await self.router.handle(message)
