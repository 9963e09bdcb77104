# core/services/work_calendar/engine.py
from __future__ import annotations

from datetime import date, timedelta
from typing import FrozenSet, Iterable, Iterator, Optional

from core.domain import WorkingCalendar
from core.interfaces import WorkingCalendarRepository


class WorkCalendarEngine:
    """Working-day arithmetic over an already loaded calendar and its holidays."""

    def __init__(self, calendar: Optional[WorkingCalendar] = None, holidays: Iterable[date] = ()):
        self._calendar: WorkingCalendar = calendar or WorkingCalendar.create_default()
        self._holidays: FrozenSet[date] = frozenset(holidays)

    @classmethod
    def from_repository(
        cls, calendar_repo: WorkingCalendarRepository, calendar_id: str = "default"
    ) -> "WorkCalendarEngine":
        cal = calendar_repo.get(calendar_id)
        if cal is None:
            # ephemeral default, not persisted
            return cls(WorkingCalendar.create_default())
        return cls(cal, (h.date for h in calendar_repo.list_holidays(cal.id)))

    def is_working_day(self, d: date) -> bool:
        if d.weekday() not in self._calendar.working_days:
            return False
        return d not in self._holidays

    def working_dates(self, start: date, end: date) -> Iterator[date]:
        current = start
        while current <= end:
            if self.is_working_day(current):
                yield current
            current += timedelta(days=1)
