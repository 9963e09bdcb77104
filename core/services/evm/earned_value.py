from __future__ import annotations

from collections import defaultdict
from datetime import date, datetime
from typing import Dict, Iterable, List, Optional

from core.domain import Issue
from core.services.evm.series import Series


def _as_date(value: date | datetime | None) -> Optional[date]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    return value


class EarnedValue:
    """
    Earned value as of the basis date.

    Issues closed on or before the basis date earn their whole estimate on the
    day they were closed. Everything else earns ``done_ratio`` percent of its
    estimate on the basis date itself.
    """

    def __init__(self, issues: Iterable[Issue], basis_date: date):
        self.basis_date = basis_date
        daily: Dict[date, float] = defaultdict(float)
        closed_dates: List[date] = []
        all_closed = True
        seen = False

        for issue in issues:
            seen = True
            hours = float(issue.estimated_hours or 0.0)
            closed = _as_date(issue.closed_on)
            if closed is not None and closed <= basis_date:
                closed_dates.append(closed)
                if hours > 0:
                    daily[closed] += hours
                continue

            all_closed = False
            ratio = max(0.0, min(1.0, float(issue.done_ratio or 0) / 100.0))
            if hours > 0 and ratio > 0:
                daily[basis_date] += hours * ratio

        self.daily_ev = Series.from_mapping(daily)
        self.cumulative_ev = self.daily_ev.cumulative()
        self.finished_date: Optional[date] = (
            max(closed_dates) if seen and all_closed and closed_dates else None
        )

    @property
    def min_date(self) -> date:
        return self.cumulative_ev.first_date or self.basis_date

    @property
    def max_date(self) -> date:
        last = self.cumulative_ev.last_date
        return min(last, self.basis_date) if last else self.basis_date

    @property
    def today_value(self) -> float:
        return self.cumulative_ev.value_on(self.basis_date) or 0.0


__all__ = ["EarnedValue"]
