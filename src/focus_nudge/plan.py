# focus_nudge/plan.py
"""
Plan-aware settings resolution.

Basic users always get fixed defaults regardless of what is stored, so
tampering with stored settings cannot unlock Pro behavior. Pro users get
their stored settings with the tone validated and minute values clamped
to [MIN_MINUTES, MAX_MINUTES].

Verifying a paid license is not done here; whoever does it reports the
outcome through ``InMemorySettingsProvider.set_license_plan``.
"""

from __future__ import annotations

import logging

from focus_nudge.models import (
    MAX_MINUTES,
    MIN_MINUTES,
    EffectiveSettings,
    Plan,
    PlanSource,
    Tone,
    UserSettings,
)

logger = logging.getLogger(__name__)

BASIC_DEFAULTS = EffectiveSettings(tone=Tone.GENTLE, drift_threshold_min=15, cooldown_min=30)
DEFAULT_USER_SETTINGS = UserSettings(tone=Tone.GENTLE.value, drift_threshold_min=15, cooldown_min=10)


def _clamp_minutes(value: float | None, default: float) -> float:
    if not value:
        value = default
    return max(MIN_MINUTES, min(MAX_MINUTES, value))


def resolve_effective_settings(plan: Plan, user_settings: UserSettings | None = None) -> EffectiveSettings:
    """Settings the tick loop should apply for this plan."""
    if not plan.is_pro:
        return BASIC_DEFAULTS.model_copy()

    stored = user_settings or DEFAULT_USER_SETTINGS
    try:
        tone = Tone(stored.tone)
    except ValueError:
        logger.debug(f"Unknown tone {stored.tone!r}, using {Tone.GENTLE.value}")
        tone = Tone.GENTLE

    return EffectiveSettings(
        tone=tone,
        drift_threshold_min=_clamp_minutes(stored.drift_threshold_min, DEFAULT_USER_SETTINGS.drift_threshold_min),
        cooldown_min=_clamp_minutes(stored.cooldown_min, DEFAULT_USER_SETTINGS.cooldown_min),
    )


class InMemorySettingsProvider:
    """
    SettingsProvider backed by process memory.

    Holds the global enabled flag, the user's stored settings, the
    developer Pro toggle and the last license verdict.
    """

    def __init__(
        self,
        user_settings: UserSettings | None = None,
        enabled: bool = True,
    ):
        self._user_settings = user_settings or DEFAULT_USER_SETTINGS.model_copy()
        self._enabled = enabled
        self._dev_pro = False
        self._license_plan: Plan | None = None

    # --- SettingsProvider ---

    async def is_enabled(self) -> bool:
        return self._enabled

    async def get_effective_settings(self) -> EffectiveSettings:
        return resolve_effective_settings(await self.get_plan(), self._user_settings)

    # --- Plan ---

    async def get_plan(self) -> Plan:
        """A valid license wins over the dev toggle; otherwise Basic."""
        if self._license_plan is not None and self._license_plan.is_pro:
            return self._license_plan
        if self._dev_pro:
            return Plan(is_pro=True, source=PlanSource.DEV)
        return Plan(is_pro=False, source=PlanSource.BASIC)

    async def set_pro_plan(self, is_pro: bool) -> None:
        """Developer/testing toggle."""
        self._dev_pro = bool(is_pro)
        logger.info(f"Dev Pro plan {'enabled' if self._dev_pro else 'disabled'}")

    async def set_license_plan(self, is_pro: bool) -> None:
        """Record the outcome of an external license check."""
        self._license_plan = Plan(is_pro=is_pro, source=PlanSource.LICENSE if is_pro else PlanSource.BASIC)

    async def clear_dev_plan(self) -> None:
        self._dev_pro = False

    # --- Stored state ---

    async def set_enabled(self, enabled: bool) -> None:
        self._enabled = bool(enabled)

    async def get_user_settings(self) -> UserSettings:
        return self._user_settings.model_copy()

    async def save_user_settings(self, settings: UserSettings) -> None:
        self._user_settings = settings.model_copy()
