# tests/helpers.py
"""
Constants and fake collaborators shared across the focus_nudge tests.

The fakes stand in for the browser extension: a content layer that
answers state requests, a runtime that reports the active tab, and a
metrics recorder that remembers what it was told.
"""

from focus_nudge.models import (
    ActiveContext,
    BehaviorRates,
    BehaviorSample,
    DispatchResult,
    EffectiveSettings,
    PageClassification,
    PageMode,
    SampleResult,
    UrlResult,
)

FEED_URL = "https://www.linkedin.com/feed/"
JOBS_URL = "https://www.linkedin.com/jobs/"
OFF_SITE_URL = "https://example.com/"

TICK_MS = 5_000
THRESHOLD_MS = 900_000  # 15 min
COOLDOWN_MS = 1_800_000  # 30 min


# ---------------------------------------------------------------------------
# Sample helpers
# ---------------------------------------------------------------------------


PASSIVE = BehaviorRates(scroll_per_min=5, key_per_min=2, click_per_min=0)
ACTIVE = BehaviorRates(scroll_per_min=1, key_per_min=30, click_per_min=4)


def make_sample(mode=PageMode.DRIFT, behavior=PASSIVE, url=FEED_URL) -> BehaviorSample:
    return BehaviorSample(
        mode=PageClassification(mode=mode, confidence=0.9),
        behavior=behavior,
        url=url,
    )


# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------


class FakeClock:
    """Manually advanced millisecond clock."""

    def __init__(self, start: int = 0):
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> int:
        self.now += ms
        return self.now


class FakeContentLayer:
    """Content layer returning a configurable response per context."""

    def __init__(self):
        self.default = SampleResult.of(make_sample())
        self.responses = {}
        self.overlay_result = DispatchResult.acked()
        self.overlays = []
        self.state_requests = []

    async def get_state(self, context_id):
        self.state_requests.append(context_id)
        response = self.responses.get(context_id, self.default)
        if isinstance(response, Exception):
            raise response
        return response

    async def show_overlay(self, context_id, message):
        self.overlays.append((context_id, message))
        if isinstance(self.overlay_result, Exception):
            raise self.overlay_result
        return self.overlay_result


class FakeRuntime:
    """Browser runtime with a settable active tab and tab URLs."""

    def __init__(self, active: ActiveContext | None = None):
        self.active = active
        self.urls = {}

    async def get_active_context(self):
        return self.active

    async def get_context_url(self, context_id):
        url = self.urls.get(context_id)
        if url is None:
            return UrlResult.unavailable("no such tab")
        return UrlResult.of(url)


class FixedSettings:
    """SettingsProvider with fixed values."""

    def __init__(self, settings: EffectiveSettings | None = None, enabled: bool = True):
        self.settings = settings or EffectiveSettings(drift_threshold_min=15, cooldown_min=30)
        self.enabled = enabled
        self.reads = 0

    async def get_effective_settings(self):
        self.reads += 1
        return self.settings

    async def is_enabled(self):
        return self.enabled


class RecordingMetrics:
    """MetricsRecorder that records calls and can be told to fail."""

    def __init__(self, exit_result: bool = True, fail: bool = False):
        self.nudges = []
        self.exits = []
        self.exit_result = exit_result
        self.fail = fail

    async def record_nudge_shown(self, at_ms):
        if self.fail:
            raise RuntimeError("metrics storage unavailable")
        self.nudges.append(at_ms)

    async def maybe_record_early_exit(self, at_ms):
        if self.fail:
            raise RuntimeError("metrics storage unavailable")
        self.exits.append(at_ms)
        return self.exit_result
