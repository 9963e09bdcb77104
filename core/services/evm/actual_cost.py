from __future__ import annotations

from collections import defaultdict
from datetime import date
from typing import Dict, Iterable, Optional

from core.domain import DailyCost
from core.services.evm.series import Series


class ActualCost:
    """Running total of spent hours. Rows sharing a day are summed."""

    def __init__(self, costs: Iterable[DailyCost], basis_date: date):
        self.basis_date = basis_date
        daily: Dict[date, float] = defaultdict(float)
        for cost in costs:
            hours = float(cost.hours or 0.0)
            if hours <= 0:
                continue
            daily[cost.spent_on] += hours

        self.daily_ac = Series.from_mapping(daily)
        self.cumulative_ac = self.daily_ac.cumulative()

    @property
    def min_date(self) -> date:
        return self.cumulative_ac.first_date or self.basis_date

    @property
    def max_date(self) -> date:
        last = self.cumulative_ac.last_date
        return min(last, self.basis_date) if last else self.basis_date

    @property
    def today_value(self) -> Optional[float]:
        # No observations at all: the cost side of every index is undefined.
        if not self.cumulative_ac:
            return None
        return self.cumulative_ac.value_on(self.basis_date) or 0.0


__all__ = ["ActualCost"]
