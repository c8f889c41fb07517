# focus_nudge/__init__.py
"""
focus_nudge - engagement-drift detection and nudge scheduling.

Components:
- DriftAccumulator: per-context drift time with asymmetric decay
- NudgeScheduler: threshold and cooldown policy, post-fire reset
- TickLoop: fixed-cadence driver over the active context
- ExitWatcher: early-exit detection after a nudge
- DriftStateStore: owned per-context state table
- FocusNudgeEngine: composition of the above
"""

from focus_nudge.collaborators import (
    BrowserRuntime,
    ContentLayer,
    MetricsRecorder,
    SettingsProvider,
    is_monitored_url,
)
from focus_nudge.drift import (
    DriftAccumulator,
    DriftAccumulatorConfig,
    NudgeScheduler,
    NudgeSchedulerConfig,
)
from focus_nudge.engine import FocusNudgeEngine
from focus_nudge.exit_watcher import ExitWatcher
from focus_nudge.metrics import EARLY_EXIT_WINDOW_MS, WeeklyMetrics
from focus_nudge.models import (
    ActiveContext,
    BehaviorRates,
    BehaviorSample,
    CallStatus,
    DispatchResult,
    DriftState,
    EffectiveSettings,
    PageClassification,
    PageMode,
    Plan,
    SampleResult,
    Tone,
    UrlResult,
    UserSettings,
    WeeklySummary,
)
from focus_nudge.plan import InMemorySettingsProvider, resolve_effective_settings
from focus_nudge.router import MessageRouter
from focus_nudge.state_store import DriftStateStore
from focus_nudge.tick_loop import TickLoop, TickOutcome


__all__ = [
    # Engine
    "FocusNudgeEngine",
    "TickLoop",
    "TickOutcome",
    "ExitWatcher",
    "DriftStateStore",
    "MessageRouter",
    # Policy
    "DriftAccumulator",
    "DriftAccumulatorConfig",
    "NudgeScheduler",
    "NudgeSchedulerConfig",
    # Collaborators
    "BrowserRuntime",
    "ContentLayer",
    "MetricsRecorder",
    "SettingsProvider",
    "is_monitored_url",
    "InMemorySettingsProvider",
    "resolve_effective_settings",
    "WeeklyMetrics",
    "EARLY_EXIT_WINDOW_MS",
    # Models
    "ActiveContext",
    "BehaviorRates",
    "BehaviorSample",
    "CallStatus",
    "DispatchResult",
    "DriftState",
    "EffectiveSettings",
    "PageClassification",
    "PageMode",
    "Plan",
    "SampleResult",
    "Tone",
    "UrlResult",
    "UserSettings",
    "WeeklySummary",
]
