# focus_nudge/drift/messages.py
"""Nudge copy, keyed by tone."""

from __future__ import annotations

from focus_nudge.models import Tone

DEFAULT_TONE = Tone.GENTLE

MESSAGES: dict[Tone, tuple[str, ...]] = {
    Tone.SARCASTIC: (
        'Bold of you to call this "networking."',
        "You've been marinating in the feed. Want to do the thing you came for?",
        "Your future self just cleared their throat.",
        "If scrolling paid bills, you'd be a billionaire.",
    ),
    Tone.MOTIVATIONAL: (
        "Quick reset: what's the one thing you want to finish next?",
        "Small step now. Big relief later.",
        "Choose progress for 5 minutes. Just 5.",
    ),
    Tone.GENTLE: (
        "Tiny nudge: do you want to stay here a bit longer?",
        "If this isn't serving you, it's okay to step away.",
    ),
}


def messages_for(tone: Tone | str | None) -> tuple[str, ...]:
    """Messages for a tone; unknown tones get the default tone's list."""
    try:
        return MESSAGES[Tone(tone)]
    except (ValueError, KeyError):
        return MESSAGES[DEFAULT_TONE]
