# focus_nudge/tick_loop.py
"""
Tick loop: the fixed-cadence driver of drift detection.

Every ``interval_ms`` the loop looks at the single foreground context on
the monitored site, polls it for a behavior sample, feeds the sample to
the DriftAccumulator and asks the NudgeScheduler whether to nudge.

Per-context lifecycle:
- Uninitialized -> Tracking: first tick for a context id creates its state
- Tracking -> Tracking: every later tick updates and evaluates it
- Tracking -> Removed: the context closes (``forget``); terminal

Only the active context is evaluated. Background contexts neither accrue
nor decay drift while they are not in the foreground.

Concurrency notes:
- Each timer firing runs as its own task, so a tick stuck on a sample
  fetch never delays the next one.
- Every await is a point where the context may be removed. State is
  re-read from the store by id after each await and written back with
  the generation observed at the start of the tick, so a removed context
  never receives a late update.
- With no sample timeout, a fetch that never resolves stays pending.
  Its tick task and the store's in-flight entry remain until the
  context is removed or the loop stops, so each stalled firing adds one
  more of each.
"""

from __future__ import annotations

import asyncio
import logging
from enum import Enum

from pydantic import ValidationError

from focus_nudge.clock import Clock, now_ms
from focus_nudge.collaborators import (
    BrowserRuntime,
    ContentLayer,
    MetricsRecorder,
    SettingsProvider,
    is_monitored_url,
)
from focus_nudge.config import MONITORED_URL_PREFIX, SAMPLE_TIMEOUT_S, TICK_INTERVAL_MS
from focus_nudge.drift import DriftAccumulator, NudgeScheduler
from focus_nudge.models import (
    ActiveContext,
    BehaviorSample,
    DispatchResult,
    EffectiveSettings,
    SampleResult,
)
from focus_nudge.state_store import DriftStateStore

logger = logging.getLogger(__name__)


class TickOutcome(str, Enum):
    """What a single tick did."""

    DISABLED = "disabled"  # Global switch off; nothing touched
    NO_CONTEXT = "no_context"  # No active context on the monitored site
    UNAVAILABLE = "unavailable"  # Sample fetch failed; only timing was updated
    STALE = "stale"  # Context removed mid-tick; update dropped
    EVALUATED = "evaluated"  # Drift updated, no nudge
    NUDGED = "nudged"  # Drift updated and a nudge was fired


class TickLoop:
    """
    Drives DriftAccumulator and NudgeScheduler against the active context.

    Set ``report_nudges=False`` when the content layer reports shown
    overlays itself (through a ``NUDGE_SHOWN`` message), so each nudge is
    counted once.

    With ``sample_timeout_s=None`` a fetch that never answers is not
    bounded, so each firing leaves one more pending task in ``_ticks`` and
    in the store's in-flight set until the context is removed or the loop
    is stopped.

    Examples:
        ```python
        loop = TickLoop(store, content, settings, metrics, runtime)
        loop.start()
        ...
        await loop.stop()
        ```

        Driving a single tick with explicit inputs (no runtime needed):
        ```python
        outcome = await loop.tick(enabled=True, active=ActiveContext(context_id=7, url=url), now_ms=t)
        ```
    """

    def __init__(
        self,
        store: DriftStateStore,
        content: ContentLayer,
        settings: SettingsProvider,
        metrics: MetricsRecorder,
        runtime: BrowserRuntime | None = None,
        accumulator: DriftAccumulator | None = None,
        scheduler: NudgeScheduler | None = None,
        interval_ms: int = TICK_INTERVAL_MS,
        sample_timeout_s: float | None = SAMPLE_TIMEOUT_S,
        url_prefix: str = MONITORED_URL_PREFIX,
        clock: Clock = now_ms,
        report_nudges: bool = True,
    ):
        self.store = store
        self._content = content
        self._settings = settings
        self._metrics = metrics
        self._runtime = runtime
        self.accumulator = accumulator or DriftAccumulator()
        self.scheduler = scheduler or NudgeScheduler()
        self.interval_ms = interval_ms
        self.sample_timeout_s = sample_timeout_s
        self.url_prefix = url_prefix
        self._clock = clock
        self.report_nudges = report_nudges

        self._running = False
        self._runner: asyncio.Task | None = None
        self._ticks: set[asyncio.Task] = set()

    # --- Timer ---

    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> asyncio.Task:
        """Start the periodic timer on the running event loop."""
        if self._runner is not None and not self._runner.done():
            return self._runner
        self._running = True
        self._runner = asyncio.create_task(self.run())
        logger.info(f"Tick loop started ({self.interval_ms} ms)")
        return self._runner

    async def run(self) -> None:
        """Fire a tick every ``interval_ms`` until stopped."""
        self._running = True
        interval_s = self.interval_ms / 1000
        while self._running:
            await asyncio.sleep(interval_s)
            if not self._running:
                break
            task = asyncio.create_task(self._guarded_run_once())
            self._ticks.add(task)
            task.add_done_callback(self._ticks.discard)

    async def stop(self) -> None:
        """Stop the timer and cancel ticks still in flight."""
        self._running = False
        pending = [t for t in (self._runner, *self._ticks) if t is not None and not t.done()]
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
        self._runner = None
        self._ticks.clear()
        logger.info("Tick loop stopped")

    async def _guarded_run_once(self) -> None:
        try:
            await self.run_once()
        except asyncio.CancelledError:
            raise
        except Exception:
            logger.exception("Unexpected error in tick")

    # --- Tick ---

    async def run_once(self) -> TickOutcome:
        """Source the enabled flag and active context once, then tick."""
        try:
            enabled = await self._settings.is_enabled()
        except Exception as e:
            logger.warning(f"Could not read enabled flag, skipping tick: {e}")
            return TickOutcome.UNAVAILABLE
        if not enabled:
            return TickOutcome.DISABLED

        active = await self._active_context()
        return await self.tick(enabled=True, active=active, now_ms=self._clock())

    async def tick(self, enabled: bool, active: ActiveContext | None, now_ms: int) -> TickOutcome:
        """
        Run one tick against an explicitly supplied active context.

        Args:
            enabled: Global on/off switch, read once for this tick
            active: Foreground context, or None
            now_ms: Tick timestamp

        Returns:
            TickOutcome describing what happened
        """
        if not enabled:
            return TickOutcome.DISABLED
        if active is None or not is_monitored_url(active.url, self.url_prefix):
            return TickOutcome.NO_CONTEXT

        context_id = active.context_id
        generation = self.store.generation(context_id)
        state = self.store.get_or_create(context_id, now_ms)

        # Timing advances even if the rest of the tick fails
        elapsed_ms = max(0, now_ms - state.last_tick_at_ms)
        self.store.put(context_id, state.model_copy(update={"last_tick_at_ms": now_ms}), generation)

        result = await self._fetch_sample(context_id)
        if not result.ok or result.sample is None:
            logger.debug(f"No sample from context {context_id} this tick ({result.status.value}: {result.error})")
            return TickOutcome.UNAVAILABLE

        sample = result.sample
        state = self.store.get(context_id)
        if state is None or self.store.generation(context_id) != generation:
            return TickOutcome.STALE

        state = self.accumulator.update(state, elapsed_ms, sample.mode.mode, sample.behavior)
        state = state.model_copy(update={"last_url": sample.url or active.url})
        self.store.put(context_id, state, generation)

        settings = await self._effective_settings()
        state = self.store.get(context_id)
        if state is None or self.store.generation(context_id) != generation:
            return TickOutcome.STALE
        if settings is None:
            return TickOutcome.EVALUATED

        if not self.scheduler.should_nudge(state, settings, now_ms):
            return TickOutcome.EVALUATED

        message = self.scheduler.pick_message(settings.tone)
        logger.info(f"Nudging context {context_id} after {state.accumulated_drift_ms} ms of drift")
        dispatch = await self._dispatch(context_id, message)

        # Reset even when the overlay failed, otherwise we'd retry every tick
        state = self.store.get(context_id)
        if state is None or self.store.generation(context_id) != generation:
            return TickOutcome.STALE
        self.store.put(context_id, self.scheduler.on_nudge_fired(state, settings, now_ms), generation)

        if not dispatch.ok:
            logger.debug(f"Overlay not shown in context {context_id} ({dispatch.status.value}: {dispatch.error})")
        elif self.report_nudges:
            await self._report_nudge(now_ms)
        return TickOutcome.NUDGED

    def forget(self, context_id: int) -> bool:
        """Tracking -> Removed. Safe to call for unknown ids."""
        return self.store.remove(context_id)

    # --- Boundary calls ---

    async def _active_context(self) -> ActiveContext | None:
        if self._runtime is None:
            return None
        try:
            return await self._runtime.get_active_context()
        except Exception as e:
            logger.debug(f"Active context lookup failed: {e}")
            return None

    async def _fetch_sample(self, context_id: int) -> SampleResult:
        task = asyncio.create_task(self._request_sample(context_id))
        self.store.bind(context_id, task)
        try:
            if self.sample_timeout_s is None:
                return await task
            return await asyncio.wait_for(task, self.sample_timeout_s)
        except TimeoutError:
            return SampleResult.unavailable("sample request timed out")
        except asyncio.CancelledError:
            current = asyncio.current_task()
            if current is not None and current.cancelling():
                raise
            return SampleResult.unavailable("context removed")

    async def _request_sample(self, context_id: int) -> SampleResult:
        try:
            result = await self._content.get_state(context_id)
        except Exception as e:
            return SampleResult.transport_error(str(e))

        if result is None:
            return SampleResult.unavailable("empty response")
        if isinstance(result, dict):
            return SampleResult.of(BehaviorSample.from_payload(result))
        return result

    async def _effective_settings(self) -> EffectiveSettings | None:
        try:
            settings = await self._settings.get_effective_settings()
        except Exception as e:
            logger.warning(f"Could not resolve settings, skipping nudge evaluation: {e}")
            return None

        if isinstance(settings, EffectiveSettings):
            return settings
        if isinstance(settings, dict):
            try:
                return EffectiveSettings.model_validate(settings)
            except ValidationError as e:
                logger.warning(f"Invalid settings, skipping nudge evaluation: {e}")
                return None
        logger.warning(f"Unexpected settings type {type(settings).__name__}, skipping nudge evaluation")
        return None

    async def _dispatch(self, context_id: int, message: str) -> DispatchResult:
        try:
            result = await self._content.show_overlay(context_id, message)
        except Exception as e:
            return DispatchResult.transport_error(str(e))
        return result if result is not None else DispatchResult.acked()

    async def _report_nudge(self, at_ms: int) -> None:
        try:
            await self._metrics.record_nudge_shown(at_ms)
        except Exception as e:
            logger.warning(f"Failed to record nudge: {e}")
