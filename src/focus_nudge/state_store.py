# focus_nudge/state_store.py
"""
Per-context drift state table.

The DriftStateStore is the single owner of DriftState entries. It is
handed explicitly to the components that need it (TickLoop writes,
ExitWatcher removes); there is no module-level instance.

Each context id carries a lifetime generation. Removing a context bumps
its generation and cancels any async operation bound to it, so a sample
fetch that was in flight when the tab closed cannot write into a new
entry that happens to reuse the same id.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterator

from focus_nudge.models import DriftState

logger = logging.getLogger(__name__)


class DriftStateStore:
    """Keyed store of DriftState with lifetime generations."""

    def __init__(self) -> None:
        self._states: dict[int, DriftState] = {}
        # Generations outlive their entries so ids reused after removal differ
        self._generations: dict[int, int] = {}
        self._inflight: dict[int, set[asyncio.Task]] = {}

    # --- CRUD ---

    def create(self, context_id: int, now_ms: int) -> DriftState:
        """Start tracking a context with a fresh state, replacing any existing entry."""
        state = DriftState.initial(now_ms)
        self._states[context_id] = state
        logger.debug(f"Tracking context {context_id}")
        return state

    def get(self, context_id: int) -> DriftState | None:
        return self._states.get(context_id)

    def get_or_create(self, context_id: int, now_ms: int) -> DriftState:
        state = self._states.get(context_id)
        if state is None:
            state = self.create(context_id, now_ms)
        return state

    def put(self, context_id: int, state: DriftState, generation: int | None = None) -> bool:
        """
        Store a state for a context.

        Args:
            context_id: Context the state belongs to
            state: New state
            generation: Generation observed when the update started; if the
                context has been removed since, the write is rejected

        Returns:
            True if the state was stored
        """
        if generation is not None and generation != self.generation(context_id):
            logger.debug(f"Dropping stale update for context {context_id} (generation {generation})")
            return False
        self._states[context_id] = state
        return True

    def remove(self, context_id: int) -> bool:
        """
        Stop tracking a context. Removing an unknown id is a no-op and
        leaves no generation entry behind.

        Returns:
            True if an entry existed
        """
        existed = self._states.pop(context_id, None) is not None
        inflight = self._inflight.pop(context_id, set())
        if not existed and not inflight:
            return False
        self._generations[context_id] = self.generation(context_id) + 1

        for task in inflight:
            if not task.done():
                task.cancel()

        if existed:
            logger.debug(f"Removed context {context_id}")
        return existed

    def clear(self) -> None:
        for context_id in list(self._states):
            self.remove(context_id)

    # --- Lifetimes ---

    def generation(self, context_id: int) -> int:
        return self._generations.get(context_id, 0)

    def bind(self, context_id: int, task: asyncio.Task) -> None:
        """Tie an async operation to the context's lifetime; removal cancels it."""
        tasks = self._inflight.setdefault(context_id, set())
        tasks.add(task)
        task.add_done_callback(lambda t: self._release(context_id, t))

    def _release(self, context_id: int, task: asyncio.Task) -> None:
        tasks = self._inflight.get(context_id)
        if tasks is None:
            return
        tasks.discard(task)
        if not tasks:
            self._inflight.pop(context_id, None)

    def inflight_count(self, context_id: int) -> int:
        return len(self._inflight.get(context_id, ()))

    # --- Introspection ---

    def context_ids(self) -> list[int]:
        return list(self._states)

    def __contains__(self, context_id: object) -> bool:
        return context_id in self._states

    def __len__(self) -> int:
        return len(self._states)

    def __iter__(self) -> Iterator[int]:
        return iter(list(self._states))
