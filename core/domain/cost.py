from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from core.domain.identifiers import generate_id


@dataclass
class TimeEntry:
    id: str
    issue_id: str
    spent_on: date
    hours: float = 0.0

    @staticmethod
    def create(issue_id: str, spent_on: date, hours: float) -> "TimeEntry":
        return TimeEntry(id=generate_id(), issue_id=issue_id, spent_on=spent_on, hours=hours)


@dataclass(frozen=True)
class DailyCost:
    """Hours spent on one day, summed over every time entry of the scope."""

    spent_on: date
    hours: float


__all__ = ["TimeEntry", "DailyCost"]
