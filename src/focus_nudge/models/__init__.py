# focus_nudge/models/__init__.py
"""
Data model for the drift engine.
"""

from focus_nudge.models.base import DictCompatModel
from focus_nudge.models.drift_state import DriftState
from focus_nudge.models.enums import CallStatus, MessageType, PageMode, PlanSource, Tone
from focus_nudge.models.metrics import WeeklyCounters, WeeklySummary
from focus_nudge.models.results import BoundaryResult, DispatchResult, SampleResult, UrlResult
from focus_nudge.models.sample import (
    ActiveContext,
    BehaviorRates,
    BehaviorSample,
    PageClassification,
)
from focus_nudge.models.settings import (
    MAX_MINUTES,
    MIN_MINUTES,
    MINUTE_MS,
    EffectiveSettings,
    Plan,
    UserSettings,
)

__all__ = [
    # Enums
    "CallStatus",
    "MessageType",
    "PageMode",
    "PlanSource",
    "Tone",
    # Samples
    "ActiveContext",
    "BehaviorRates",
    "BehaviorSample",
    "PageClassification",
    # State
    "DriftState",
    # Settings
    "EffectiveSettings",
    "Plan",
    "UserSettings",
    "MINUTE_MS",
    "MIN_MINUTES",
    "MAX_MINUTES",
    # Results
    "BoundaryResult",
    "DispatchResult",
    "SampleResult",
    "UrlResult",
    # Metrics
    "WeeklyCounters",
    "WeeklySummary",
    # Base
    "DictCompatModel",
]
