from __future__ import annotations

from bisect import bisect_right
from datetime import date
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

from core.exceptions import ValidationError

DatedValue = Tuple[date, float]


class Series:
    """
    Read-only, date-ordered mapping of day -> value.

    Two lookups are offered and they mean different things:

    - ``at(d)`` is an exact lookup; a day without a sample has no value.
    - ``value_on(d)`` follows step-function semantics and holds the last
      sample until the next one.
    """

    __slots__ = ("_dates", "_values")

    def __init__(self, pairs: Iterable[DatedValue] = ()):
        values: Dict[date, float] = {}
        for d, v in pairs:
            if d in values:
                raise ValidationError(f"Duplicate series date: {d.isoformat()}", code="DUPLICATE_DATE")
            values[d] = float(v)
        self._dates: List[date] = sorted(values)
        self._values: Dict[date, float] = {d: values[d] for d in self._dates}

    @classmethod
    def from_mapping(cls, values: Mapping[date, float]) -> "Series":
        return cls(values.items())

    def __len__(self) -> int:
        return len(self._dates)

    def __bool__(self) -> bool:
        return bool(self._dates)

    def __iter__(self) -> Iterator[date]:
        return iter(self._dates)

    def __contains__(self, d: object) -> bool:
        return d in self._values

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Series):
            return NotImplemented
        return self._values == other._values

    def __repr__(self) -> str:
        return f"Series({self.items()!r})"

    def dates(self) -> List[date]:
        return list(self._dates)

    def values(self) -> List[float]:
        return [self._values[d] for d in self._dates]

    def items(self) -> List[DatedValue]:
        return [(d, self._values[d]) for d in self._dates]

    def as_dict(self) -> Dict[date, float]:
        return dict(self._values)

    @property
    def first_date(self) -> Optional[date]:
        return self._dates[0] if self._dates else None

    @property
    def last_date(self) -> Optional[date]:
        return self._dates[-1] if self._dates else None

    @property
    def last_value(self) -> Optional[float]:
        return self._values[self._dates[-1]] if self._dates else None

    def at(self, d: date) -> Optional[float]:
        return self._values.get(d)

    def value_on(self, d: date) -> Optional[float]:
        idx = bisect_right(self._dates, d)
        if idx == 0:
            return None
        return self._values[self._dates[idx - 1]]

    def clipped(self, until: Optional[date]) -> "Series":
        """Entries dated on or before ``until``; everything when ``until`` is None."""
        if until is None:
            return self
        return Series((d, v) for d, v in self.items() if d <= until)

    def cumulative(self) -> "Series":
        """Running totals, one entry per sample date."""
        total = 0.0
        out: List[DatedValue] = []
        for d, v in self.items():
            total += v
            out.append((d, total))
        return Series(out)


__all__ = ["DatedValue", "Series"]
