# focus_nudge/models/enums.py
"""Enums shared across the drift engine."""

from enum import Enum


class PageMode(str, Enum):
    """Classification of the page a context is showing."""

    GOOD = "GOOD"  # Intent-driven areas (jobs, messaging, search)
    DRIFT = "DRIFT"  # Drift-prone areas (feed, notifications)
    UNKNOWN = "UNKNOWN"


class Tone(str, Enum):
    """Voice used for nudge copy."""

    GENTLE = "gentle"
    MOTIVATIONAL = "motivational"
    SARCASTIC = "sarcastic"


class CallStatus(str, Enum):
    """Outcome of a call across the extension boundary."""

    OK = "ok"
    UNAVAILABLE = "unavailable"  # Context not ready, closed, or cancelled
    TRANSPORT_ERROR = "transport_error"  # Delivery failed or collaborator raised


class PlanSource(str, Enum):
    """Where a plan decision came from."""

    BASIC = "basic"
    DEV = "dev"
    LICENSE = "license"


class MessageType(str, Enum):
    """Requests accepted by the background message router."""

    NUDGE_SHOWN = "NUDGE_SHOWN"
    GET_EFFECTIVE_SETTINGS = "GET_EFFECTIVE_SETTINGS"
    GET_WEEKLY_SUMMARY = "GET_WEEKLY_SUMMARY"
    RESET_WEEKLY_SUMMARY = "RESET_WEEKLY_SUMMARY"
    GET_PLAN = "GET_PLAN"
    SET_PRO_DEV = "SET_PRO_DEV"
