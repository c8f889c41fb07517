#!/usr/bin/env python3
# examples/simulated_session.py
"""
Simulated session: a user doom-scrolls the feed, gets nudged, and leaves.

Drives the engine with a simulated clock and in-process stand-ins for the
browser, so twenty minutes of scrolling run in well under a second.

Run with: python examples/simulated_session.py
"""

import asyncio
import logging

from dotenv import load_dotenv

from focus_nudge import (
    ActiveContext,
    BehaviorRates,
    BehaviorSample,
    DispatchResult,
    FocusNudgeEngine,
    PageClassification,
    PageMode,
    SampleResult,
    TickOutcome,
    UrlResult,
)

load_dotenv()
logging.basicConfig(level=logging.INFO, format="%(name)s: %(message)s")

FEED_URL = "https://www.linkedin.com/feed/"
TICK_MS = 5_000


class SimClock:
    def __init__(self):
        self.now = 1_700_000_000_000

    def __call__(self):
        return self.now


class SimulatedTab:
    """One tab: answers state polls and prints overlays."""

    def __init__(self):
        self.url = FEED_URL
        self.behavior = BehaviorRates(scroll_per_min=18, key_per_min=0, click_per_min=1)

    async def get_state(self, context_id):
        return SampleResult.of(
            BehaviorSample(
                mode=PageClassification(mode=PageMode.DRIFT, confidence=0.9),
                behavior=self.behavior,
                url=self.url,
            )
        )

    async def show_overlay(self, context_id, message):
        print(f"   💬 overlay in tab {context_id}: {message}")
        return DispatchResult.acked()


class SimulatedBrowser:
    def __init__(self, tab):
        self.tab = tab

    async def get_active_context(self):
        return ActiveContext(context_id=1, url=self.tab.url)

    async def get_context_url(self, context_id):
        return UrlResult.of(self.tab.url)


async def main():
    print("🌀 Focus nudge simulation")
    print("=" * 40)

    clock = SimClock()
    tab = SimulatedTab()
    engine = FocusNudgeEngine(content=tab, runtime=SimulatedBrowser(tab), clock=clock)
    await engine.on_installed()
    await engine.on_context_updated(1, tab.url)

    # 20 minutes of passive scrolling, one tick every 5 seconds
    for tick in range(20 * 60 * 1000 // TICK_MS):
        outcome = await engine.tick()
        if tick % 60 == 0 or outcome == TickOutcome.NUDGED:
            drift_s = engine.store.get(1).accumulated_drift_ms // 1000
            print(f"⏱️  t={tick * TICK_MS // 1000:>5}s drift={drift_s:>4}s {outcome.value}")
        clock.now += TICK_MS

    # The user takes the hint a minute later
    clock.now += 60_000
    tab.url = "https://example.com/todo"
    await engine.on_context_updated(1, tab.url)

    summary = await engine.handle_message({"type": "GET_WEEKLY_SUMMARY"})
    print("=" * 40)
    print(f"📊 Weekly summary: {summary}")


if __name__ == "__main__":
    asyncio.run(main())
