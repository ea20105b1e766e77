"""In-memory holiday list that persists every change through the gateway."""

from __future__ import annotations

import logging

from longweekend.holidays import preset_records
from longweekend.models import BridgeSuggestion, HolidayRecord, Recommendation, create_holiday
from longweekend.recommender import (
    calculate_recommendations,
    find_holiday_bridges,
    parse_holiday_date,
)
from longweekend.storage import LoadResult, StorageError, StorageGateway

log = logging.getLogger(__name__)


class HolidayPlanner:
    """Holds the current holidays and keeps the store in step with them.

    Each mutation saves the whole list. When the save fails the mutation
    is rolled back, so memory never runs ahead of what was persisted.
    """

    def __init__(self, gateway: StorageGateway) -> None:
        self.gateway = gateway
        self._holidays: list[HolidayRecord] = []

    @property
    def holidays(self) -> tuple[HolidayRecord, ...]:
        return tuple(self._holidays)

    def load(self) -> LoadResult:
        result = self.gateway.load_holidays()
        self._holidays = list(result.holidays)
        if result.had_corruption:
            log.warning("Holiday data was partly or fully corrupted on load")
        return result

    def _commit(self, updated: list[HolidayRecord]) -> StorageError | None:
        error = self.gateway.save_holidays(updated)
        if error is None:
            self._holidays = updated
        return error

    def add_holiday(self, name: str, date: str) -> StorageError | None:
        """Add a holiday. Raises ``ValueError`` for a blank name or bad date."""
        if not name.strip():
            raise ValueError("Holiday name must not be empty")
        if parse_holiday_date(date) is None:
            raise ValueError(f"Invalid date {date!r}. Use YYYY-MM-DD.")
        record = create_holiday(name.strip(), date)
        return self._commit([*self._holidays, record])

    def add_presets(self, country: str, year: int) -> tuple[int, StorageError | None]:
        """Add a preset's holidays, skipping dates already on the list.

        Returns the number added and the save error, if any.
        """
        existing = {h.date for h in self._holidays}
        new = [r for r in preset_records(country, year) if r.date not in existing]
        if not new:
            return 0, None
        error = self._commit([*self._holidays, *new])
        return (0 if error else len(new)), error

    def delete_holiday(self, holiday_id: str) -> StorageError | None:
        """Remove the holiday with *holiday_id*. Raises ``KeyError`` if absent."""
        updated = [h for h in self._holidays if h.id != holiday_id]
        if len(updated) == len(self._holidays):
            raise KeyError(holiday_id)
        return self._commit(updated)

    def recommendations(self) -> list[Recommendation]:
        try:
            return calculate_recommendations(list(self._holidays))
        except Exception:
            log.exception("Could not calculate recommendations")
            return []

    def bridges(self) -> list[BridgeSuggestion]:
        try:
            return find_holiday_bridges(list(self._holidays))
        except Exception:
            log.exception("Could not calculate holiday bridges")
            return []
