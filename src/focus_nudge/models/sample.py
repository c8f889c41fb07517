# focus_nudge/models/sample.py
"""Behavior samples reported by the content layer."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from focus_nudge.models.enums import PageMode

logger = logging.getLogger(__name__)


class BehaviorRates(BaseModel):
    """Interaction rates over the content layer's rolling minute."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    scroll_per_min: float = Field(default=0.0, ge=0, alias="scrollPerMin")
    key_per_min: float = Field(default=0.0, ge=0, alias="keyPerMin")
    click_per_min: float = Field(default=0.0, ge=0, alias="clickPerMin")


class PageClassification(BaseModel):
    """Mode the content layer assigned to the current page."""

    model_config = ConfigDict(frozen=True)

    mode: PageMode = PageMode.UNKNOWN
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)


class BehaviorSample(BaseModel):
    """One poll of a monitored context."""

    model_config = ConfigDict(frozen=True)

    mode: PageClassification = Field(default_factory=PageClassification)
    behavior: BehaviorRates = Field(default_factory=BehaviorRates)
    url: str = ""

    @classmethod
    def from_payload(cls, payload: Any) -> BehaviorSample:
        """
        Build a sample from a raw content-layer response.

        Missing or malformed parts fall back to neutral values
        (UNKNOWN mode, zero rates) instead of failing.
        """
        if not isinstance(payload, dict):
            return cls()

        try:
            mode = PageClassification.model_validate(payload.get("mode") or {})
        except ValidationError:
            logger.debug("Malformed page classification, using UNKNOWN: %r", payload.get("mode"))
            mode = PageClassification()

        try:
            behavior = BehaviorRates.model_validate(payload.get("behavior") or {})
        except ValidationError:
            logger.debug("Malformed behavior rates, using zeros: %r", payload.get("behavior"))
            behavior = BehaviorRates()

        url = payload.get("url")
        return cls(mode=mode, behavior=behavior, url=url if isinstance(url, str) else "")


class ActiveContext(BaseModel):
    """The foreground browsing context as reported by the runtime."""

    model_config = ConfigDict(frozen=True)

    context_id: int
    url: str = ""
