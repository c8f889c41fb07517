# tests/test_plan.py
"""
Tests for plan-aware settings resolution.

Covers:
- Basic plan hard defaults
- Pro plan clamping and tone validation
- Plan precedence (license over dev toggle)
"""

import pytest

from focus_nudge.models import EffectiveSettings, Plan, PlanSource, Tone, UserSettings
from focus_nudge.plan import (
    BASIC_DEFAULTS,
    InMemorySettingsProvider,
    resolve_effective_settings,
)

PRO = Plan(is_pro=True, source=PlanSource.DEV)
BASIC = Plan()


class TestResolve:
    """resolve_effective_settings."""

    def test_basic_ignores_user_settings(self):
        custom = UserSettings(tone="sarcastic", drift_threshold_min=3, cooldown_min=3)
        resolved = resolve_effective_settings(BASIC, custom)
        assert resolved == BASIC_DEFAULTS
        assert resolved.drift_threshold_ms == 900_000
        assert resolved.cooldown_ms == 1_800_000

    def test_pro_uses_user_settings(self):
        custom = UserSettings(tone="sarcastic", drift_threshold_min=5, cooldown_min=20)
        resolved = resolve_effective_settings(PRO, custom)
        assert resolved.tone == Tone.SARCASTIC
        assert resolved.drift_threshold_min == 5
        assert resolved.cooldown_min == 20

    @pytest.mark.parametrize(
        "raw, expected",
        [(0, 15), (None, 15), (-4, 1), (500, 120), (60, 60)],
    )
    def test_pro_clamps_threshold(self, raw, expected):
        resolved = resolve_effective_settings(PRO, UserSettings(drift_threshold_min=raw))
        assert resolved.drift_threshold_min == expected

    def test_pro_clamps_cooldown(self):
        resolved = resolve_effective_settings(PRO, UserSettings(cooldown_min=1_000))
        assert resolved.cooldown_min == 120

    def test_pro_unknown_tone_falls_back(self):
        resolved = resolve_effective_settings(PRO, UserSettings(tone="snarky"))
        assert resolved.tone == Tone.GENTLE

    def test_pro_without_stored_settings(self):
        resolved = resolve_effective_settings(PRO)
        assert resolved == EffectiveSettings(tone=Tone.GENTLE, drift_threshold_min=15, cooldown_min=10)

    def test_effective_settings_bounds(self):
        with pytest.raises(ValueError):
            EffectiveSettings(drift_threshold_min=0)
        with pytest.raises(ValueError):
            EffectiveSettings(cooldown_min=121)


class TestInMemorySettingsProvider:
    """Provider state and plan precedence."""

    @pytest.mark.asyncio
    async def test_defaults(self):
        provider = InMemorySettingsProvider()
        assert await provider.is_enabled() is True
        plan = await provider.get_plan()
        assert plan.is_pro is False
        assert plan.source == PlanSource.BASIC
        assert await provider.get_effective_settings() == BASIC_DEFAULTS

    @pytest.mark.asyncio
    async def test_dev_toggle_unlocks_user_settings(self):
        provider = InMemorySettingsProvider(UserSettings(tone="motivational", drift_threshold_min=5, cooldown_min=5))
        await provider.set_pro_plan(True)

        assert (await provider.get_plan()).source == PlanSource.DEV
        settings = await provider.get_effective_settings()
        assert settings.tone == Tone.MOTIVATIONAL
        assert settings.drift_threshold_ms == 300_000

    @pytest.mark.asyncio
    async def test_license_wins_over_dev_toggle(self):
        provider = InMemorySettingsProvider()
        await provider.set_pro_plan(True)
        await provider.set_license_plan(True)
        assert (await provider.get_plan()).source == PlanSource.LICENSE

    @pytest.mark.asyncio
    async def test_invalid_license_falls_back_to_dev(self):
        provider = InMemorySettingsProvider()
        await provider.set_license_plan(False)
        await provider.set_pro_plan(True)
        assert (await provider.get_plan()).source == PlanSource.DEV

    @pytest.mark.asyncio
    async def test_clear_dev_plan(self):
        provider = InMemorySettingsProvider()
        await provider.set_pro_plan(True)
        await provider.clear_dev_plan()
        assert (await provider.get_plan()).is_pro is False

    @pytest.mark.asyncio
    async def test_saved_settings_are_copies(self):
        provider = InMemorySettingsProvider()
        settings = UserSettings(tone="sarcastic")
        await provider.save_user_settings(settings)
        settings.tone = "gentle"
        assert (await provider.get_user_settings()).tone == "sarcastic"

    @pytest.mark.asyncio
    async def test_enabled_flag(self):
        provider = InMemorySettingsProvider(enabled=False)
        assert await provider.is_enabled() is False
        await provider.set_enabled(True)
        assert await provider.is_enabled() is True
