# focus_nudge/collaborators.py
"""
Interfaces the drift engine consumes from the rest of the extension.

The engine never classifies pages, verifies payments, or persists
metrics itself. It talks to those parts through these protocols.
Boundary calls that can fail for expected reasons (context not ready,
tab closed) report it through result envelopes instead of raising.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from focus_nudge.config import MONITORED_URL_PREFIX
from focus_nudge.models import (
    ActiveContext,
    DispatchResult,
    EffectiveSettings,
    SampleResult,
    UrlResult,
)


@runtime_checkable
class ContentLayer(Protocol):
    """Per-context content script: classification, counters, overlay."""

    async def get_state(self, context_id: int) -> SampleResult:
        """Poll a context for its current classification and behavior rates."""
        ...

    async def show_overlay(self, context_id: int, message: str) -> DispatchResult:
        """Ask a context to display a nudge."""
        ...


@runtime_checkable
class SettingsProvider(Protocol):
    """Plan-resolved settings and the global on/off switch."""

    async def get_effective_settings(self) -> EffectiveSettings: ...

    async def is_enabled(self) -> bool: ...


@runtime_checkable
class MetricsRecorder(Protocol):
    """Weekly outcome counters."""

    async def record_nudge_shown(self, at_ms: int) -> None: ...

    async def maybe_record_early_exit(self, at_ms: int) -> bool:
        """Record an early exit if a nudge was shown within the window. Idempotent per nudge."""
        ...


@runtime_checkable
class BrowserRuntime(Protocol):
    """Tab/window queries."""

    async def get_active_context(self) -> ActiveContext | None:
        """The context in the last focused window, if any."""
        ...

    async def get_context_url(self, context_id: int) -> UrlResult:
        """Current URL of a context; UNAVAILABLE if it no longer exists."""
        ...


def is_monitored_url(url: str | None, prefix: str = MONITORED_URL_PREFIX) -> bool:
    """True if the URL belongs to the monitored site."""
    return bool(url) and url.startswith(prefix)
