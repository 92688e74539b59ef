"""Date-keyed, append-only thought log."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from focusflow.models import Thought

if TYPE_CHECKING:
    from focusflow.clock import Clock
    from focusflow.state import AppState

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%H:%M:%S"


class ThoughtStore:
    """Appends thoughts to a day and reads them back in creation order."""

    def __init__(
        self,
        state: AppState,
        clock: Clock,
        persist: Callable[[dict[str, list[Thought]]], None],
    ) -> None:
        self._state = state
        self._clock = clock
        self._persist = persist

    def add_thought(self, day: str, content: str) -> Thought | None:
        """Append a thought to ``day``. Blank content is ignored."""
        if not content.strip():
            logger.debug("Ignoring blank thought for %s", day)
            return None

        thought = Thought(
            id=self._state.ids.next_id(),
            content=content,
            timestamp=self._clock.now().strftime(TIMESTAMP_FORMAT),
        )
        self._state.thoughts.setdefault(day, []).append(thought)
        logger.debug("Added thought %d on %s", thought.id, day)
        self._persist(self._state.thoughts)
        return thought

    def get_thoughts(self, day: str) -> list[Thought]:
        return list(self._state.thoughts.get(day, ()))

    def days(self) -> list[str]:
        """Days that have at least one thought, oldest first."""
        return sorted(day for day, entries in self._state.thoughts.items() if entries)
