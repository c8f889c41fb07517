# focus_nudge/models/results.py
"""Result envelopes for calls across the extension boundary.

Collaborators report failures through these instead of raising, so the
tick loop branches on ``status`` rather than suppressing exceptions.
"""

from __future__ import annotations

from typing import Self

from pydantic import BaseModel

from focus_nudge.models.enums import CallStatus
from focus_nudge.models.sample import BehaviorSample


class BoundaryResult(BaseModel):
    """Common shape of every boundary result."""

    status: CallStatus = CallStatus.OK
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == CallStatus.OK

    @classmethod
    def unavailable(cls, error: str | None = None) -> Self:
        return cls(status=CallStatus.UNAVAILABLE, error=error)

    @classmethod
    def transport_error(cls, error: str | None = None) -> Self:
        return cls(status=CallStatus.TRANSPORT_ERROR, error=error)


class SampleResult(BoundaryResult):
    """Response to a state request sent to a context."""

    sample: BehaviorSample | None = None

    @classmethod
    def of(cls, sample: BehaviorSample) -> SampleResult:
        return cls(sample=sample)


class DispatchResult(BoundaryResult):
    """Acknowledgement of an overlay request."""

    @classmethod
    def acked(cls) -> DispatchResult:
        return cls()


class UrlResult(BoundaryResult):
    """Current URL of a context, if it still exists."""

    url: str = ""

    @classmethod
    def of(cls, url: str) -> UrlResult:
        return cls(url=url)
