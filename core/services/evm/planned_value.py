from __future__ import annotations

from collections import defaultdict
from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional, Protocol

from core.services.evm.series import Series
from core.services.work_calendar.engine import WorkCalendarEngine


class ScheduledItem(Protocol):
    start_date: Optional[date]
    estimated_hours: Optional[float]

    @property
    def planned_due_date(self) -> Optional[date]: ...


def _calendar_days(start: date, end: date) -> List[date]:
    return [start + timedelta(days=i) for i in range((end - start).days + 1)]


def _spread_days(start: date, end: date, calendar: Optional[WorkCalendarEngine]) -> List[date]:
    if calendar is not None:
        working = list(calendar.working_dates(start, end))
        if working:
            return working
    return _calendar_days(start, end)


class PlannedValue:
    """
    Time-phased planned value of a set of scheduled items.

    Each item's estimate is spread evenly over the days between its start and
    due date (both inclusive). With a calendar only its working days are loaded;
    an interval without any working day falls back to plain calendar days.
    """

    def __init__(
        self,
        items: Iterable[ScheduledItem],
        basis_date: date,
        calendar: Optional[WorkCalendarEngine] = None,
    ):
        self.basis_date = basis_date
        daily: Dict[date, float] = defaultdict(float)
        starts: List[date] = []
        dues: List[date] = []

        for item in items:
            start = item.start_date
            due = item.planned_due_date
            if start is None or due is None:
                continue
            if due < start:
                due = start
            starts.append(start)
            dues.append(due)

            hours = float(item.estimated_hours or 0.0)
            if hours <= 0:
                continue
            days = _spread_days(start, due, calendar)
            per_day = hours / len(days)
            for d in days:
                daily[d] += per_day

        self.daily_pv = Series.from_mapping(daily)
        self.cumulative_pv = self.daily_pv.cumulative()
        self.start_date: Optional[date] = min(starts) if starts else None
        self.due_date: Optional[date] = max(dues) if dues else None
        self.bac: float = self.cumulative_pv.last_value or 0.0

    @property
    def today_value(self) -> Optional[float]:
        if not self.cumulative_pv:
            return None
        return self.cumulative_pv.value_on(self.basis_date) or 0.0


__all__ = ["PlannedValue", "ScheduledItem"]
