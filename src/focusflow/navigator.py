"""Active-day tracking for the thought log."""

from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from focusflow.clock import Clock
    from focusflow.state import AppState

logger = logging.getLogger(__name__)


class DateNavigator:
    """Moves the active day by whole calendar days.

    Arithmetic is done on ``date`` objects, never on timestamps, so DST
    transitions cannot shift the result.
    """

    def __init__(self, state: AppState, clock: Clock) -> None:
        self._state = state
        self._clock = clock

    def current_date(self) -> str:
        return self._state.active_date

    def shift_date(self, offset_days: int) -> str:
        try:
            shifted = date.fromisoformat(self._state.active_date) + timedelta(days=offset_days)
        except OverflowError:
            logger.debug("Shift by %d days leaves the calendar, staying on %s",
                         offset_days, self._state.active_date)
            return self._state.active_date
        self._state.active_date = shifted.isoformat()
        return self._state.active_date

    def go_to_today(self) -> str:
        self._state.active_date = self._clock.today().isoformat()
        return self._state.active_date
