# tests/conftest.py
"""
Shared pytest fixtures for focus_nudge tests.

The fake collaborators behind these fixtures live in ``tests/helpers.py``.
"""

import logging

import pytest

from focus_nudge.models import ActiveContext
from focus_nudge.state_store import DriftStateStore
from tests.helpers import (
    FEED_URL,
    FakeClock,
    FakeContentLayer,
    FakeRuntime,
    FixedSettings,
    RecordingMetrics,
)

# Configure logging for tests
logging.basicConfig(level=logging.WARNING)
logging.getLogger("focus_nudge").setLevel(logging.DEBUG)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store():
    return DriftStateStore()


@pytest.fixture
def content():
    return FakeContentLayer()


@pytest.fixture
def runtime():
    return FakeRuntime(active=ActiveContext(context_id=1, url=FEED_URL))


@pytest.fixture
def settings():
    return FixedSettings()


@pytest.fixture
def metrics():
    return RecordingMetrics()
