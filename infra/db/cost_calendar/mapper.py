from __future__ import annotations

from typing import Set

from core.domain import Holiday, TimeEntry, WorkingCalendar
from infra.db.models import HolidayORM, TimeEntryORM, WorkingCalendarORM


def time_entry_to_orm(entry: TimeEntry) -> TimeEntryORM:
    return TimeEntryORM(
        id=entry.id,
        issue_id=entry.issue_id,
        spent_on=entry.spent_on,
        hours=entry.hours,
    )


def calendar_from_orm(obj: WorkingCalendarORM) -> WorkingCalendar:
    days: Set[int] = set()
    if obj.working_days:
        for part in obj.working_days.split(","):
            part = part.strip()
            if part:
                days.add(int(part))
    return WorkingCalendar(id=obj.id, name=obj.name, working_days=days)


def holiday_from_orm(obj: HolidayORM) -> Holiday:
    return Holiday(
        id=obj.id,
        calendar_id=obj.calendar_id,
        date=obj.holiday_date,
        name=obj.name,
    )


def holiday_to_orm(holiday: Holiday) -> HolidayORM:
    return HolidayORM(
        id=holiday.id,
        calendar_id=holiday.calendar_id,
        holiday_date=holiday.date,
        name=holiday.name,
    )


__all__ = [
    "time_entry_to_orm",
    "calendar_from_orm",
    "holiday_from_orm",
    "holiday_to_orm",
]
