# focus_nudge/models/base.py
"""Base model with dict-style access for router responses."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class DictCompatModel(BaseModel):
    """Base for records handed to message-router callers.

    UI callers consume responses as plain dicts, so ``obj["key"]``,
    ``"key" in obj`` and equality against a dict all work.
    """

    def __getitem__(self, key: str) -> Any:
        return getattr(self, key)

    def __contains__(self, key: object) -> bool:
        if isinstance(key, str):
            return key in type(self).model_fields
        return False

    def __eq__(self, other: object) -> bool:
        if isinstance(other, dict):
            return self.to_response() == other
        return super().__eq__(other)

    def to_response(self) -> dict[str, Any]:
        """JSON-safe dict for the message channel."""
        return self.model_dump(mode="json")
