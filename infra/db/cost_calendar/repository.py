from __future__ import annotations

from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from core.domain import DailyCost, Holiday, ScopeKind, ScopeSelector, TimeEntry, WorkingCalendar
from core.interfaces import CostRepository, WorkingCalendarRepository
from infra.db.cost_calendar.mapper import (
    calendar_from_orm,
    holiday_from_orm,
    holiday_to_orm,
    time_entry_to_orm,
)
from infra.db.issue.scope import selector_conditions
from infra.db.models import HolidayORM, IssueORM, TimeEntryORM, WorkingCalendarORM
from infra.db.project.repository import descendant_project_ids


class SqlAlchemyCostRepository(CostRepository):
    def __init__(self, session: Session):
        self.session = session

    def add(self, entry: TimeEntry) -> None:
        self.session.add(time_entry_to_orm(entry))

    def scope_costs(self, project_id: str, selector: ScopeSelector) -> List[DailyCost]:
        """Hours spent per day on the issues of the scope, oldest day first."""
        project_ids = [project_id] + descendant_project_ids(self.session, project_id)
        conditions = selector_conditions(project_ids, selector)
        if selector.kind == ScopeKind.PROJECT:
            # same issues the plan is built from: started, with a due date or a version
            conditions.append(IssueORM.start_date.is_not(None))
            conditions.append(
                (IssueORM.due_date.is_not(None)) | (IssueORM.fixed_version_id.is_not(None))
            )

        total = func.sum(TimeEntryORM.hours)
        stmt = (
            select(TimeEntryORM.spent_on, total)
            .join(IssueORM, TimeEntryORM.issue_id == IssueORM.id)
            .where(*conditions)
            .group_by(TimeEntryORM.spent_on)
            .order_by(TimeEntryORM.spent_on)
        )
        return [
            DailyCost(spent_on=spent_on, hours=float(hours or 0.0))
            for spent_on, hours in self.session.execute(stmt).all()
        ]


class SqlAlchemyWorkingCalendarRepository(WorkingCalendarRepository):
    def __init__(self, session: Session):
        self.session = session

    def get(self, calendar_id: str) -> Optional[WorkingCalendar]:
        obj = self.session.get(WorkingCalendarORM, calendar_id)
        return calendar_from_orm(obj) if obj else None

    def upsert(self, calendar: WorkingCalendar) -> None:
        existing = self.session.get(WorkingCalendarORM, calendar.id)
        wd_str = ",".join(str(day) for day in sorted(calendar.working_days))
        if existing:
            existing.name = calendar.name
            existing.working_days = wd_str
        else:
            self.session.add(
                WorkingCalendarORM(
                    id=calendar.id,
                    name=calendar.name,
                    working_days=wd_str,
                )
            )

    def list_holidays(self, calendar_id: str) -> List[Holiday]:
        stmt = select(HolidayORM).where(HolidayORM.calendar_id == calendar_id)
        rows = self.session.execute(stmt).scalars().all()
        return [holiday_from_orm(row) for row in rows]

    def add_holiday(self, holiday: Holiday) -> None:
        self.session.add(holiday_to_orm(holiday))


__all__ = [
    "SqlAlchemyCostRepository",
    "SqlAlchemyWorkingCalendarRepository",
]
