# focus_nudge/router.py
"""
Background message router.

Handles request/response messages from the content script, popup and
options page. Responses are plain dicts; a failing handler answers
``{"error": "<message>"}`` instead of raising.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any

from focus_nudge.clock import Clock, now_ms
from focus_nudge.metrics import WeeklyMetrics
from focus_nudge.models import MessageType
from focus_nudge.plan import InMemorySettingsProvider

logger = logging.getLogger(__name__)

Handler = Callable[[dict[str, Any]], Awaitable[dict[str, Any]]]

OK_RESPONSE: dict[str, Any] = {"ok": True}


class MessageRouter:
    """Dispatches ``{"type": ...}`` messages to their handlers."""

    def __init__(
        self,
        settings: InMemorySettingsProvider,
        metrics: WeeklyMetrics,
        clock: Clock = now_ms,
    ):
        self._settings = settings
        self._metrics = metrics
        self._clock = clock
        self._handlers: dict[MessageType, Handler] = {
            MessageType.NUDGE_SHOWN: self._nudge_shown,
            MessageType.GET_EFFECTIVE_SETTINGS: self._get_effective_settings,
            MessageType.GET_WEEKLY_SUMMARY: self._get_weekly_summary,
            MessageType.RESET_WEEKLY_SUMMARY: self._reset_weekly_summary,
            MessageType.GET_PLAN: self._get_plan,
            MessageType.SET_PRO_DEV: self._set_pro_dev,
        }

    async def handle(self, message: dict[str, Any]) -> dict[str, Any]:
        """Route one message and return its response."""
        try:
            message_type = MessageType(message.get("type"))
        except (ValueError, AttributeError):
            logger.debug(f"Ignoring unknown message: {message!r}")
            return {"error": "unknown message type"}

        try:
            return await self._handlers[message_type](message)
        except Exception as e:
            logger.warning(f"{message_type.value} failed: {e}")
            return {"error": str(e)}

    # --- Lifecycle ---

    async def on_startup(self) -> None:
        await self._metrics.ensure_week_initialized()

    async def on_installed(self) -> None:
        await self._metrics.ensure_week_initialized()
        await self._settings.set_enabled(True)

    # --- Handlers ---

    async def _nudge_shown(self, message: dict[str, Any]) -> dict[str, Any]:
        await self._metrics.record_nudge_shown(int(message.get("ts_ms") or self._clock()))
        return dict(OK_RESPONSE)

    async def _get_effective_settings(self, message: dict[str, Any]) -> dict[str, Any]:
        return (await self._settings.get_effective_settings()).to_response()

    async def _get_weekly_summary(self, message: dict[str, Any]) -> dict[str, Any]:
        return (await self._metrics.get_weekly_summary()).to_response()

    async def _reset_weekly_summary(self, message: dict[str, Any]) -> dict[str, Any]:
        await self._metrics.reset_weekly_summary()
        return dict(OK_RESPONSE)

    async def _get_plan(self, message: dict[str, Any]) -> dict[str, Any]:
        return (await self._settings.get_plan()).to_response()

    async def _set_pro_dev(self, message: dict[str, Any]) -> dict[str, Any]:
        await self._settings.set_pro_plan(bool(message.get("isPro")))
        return dict(OK_RESPONSE)
