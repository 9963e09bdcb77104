from __future__ import annotations

from datetime import date, datetime, time
from typing import List

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from core.domain import Issue, ScopeSelector
from core.interfaces import IssueRepository
from infra.db.issue.mapper import issue_from_orm, issue_to_orm
from infra.db.issue.scope import scheduled_condition, selector_conditions
from infra.db.models import IssueORM, VersionORM
from infra.db.project.repository import descendant_project_ids


class SqlAlchemyIssueRepository(IssueRepository):
    def __init__(self, session: Session):
        self.session = session

    def add(self, issue: Issue) -> None:
        self.session.add(issue_to_orm(issue))

    def _scoped(self, project_id: str, selector: ScopeSelector):
        project_ids = [project_id] + descendant_project_ids(self.session, project_id)
        return (
            select(IssueORM)
            .outerjoin(VersionORM, IssueORM.fixed_version_id == VersionORM.id)
            .where(scheduled_condition(), *selector_conditions(project_ids, selector))
        )

    def scope_issues(self, project_id: str, selector: ScopeSelector) -> List[Issue]:
        stmt = self._scoped(project_id, selector).order_by(IssueORM.start_date, IssueORM.id)
        rows = self.session.execute(stmt).scalars().all()
        return [issue_from_orm(row) for row in rows]

    def incomplete_issues(
        self, project_id: str, selector: ScopeSelector, basis_date: date
    ) -> List[Issue]:
        end_of_day = datetime.combine(basis_date, time.max)
        stmt = (
            self._scoped(project_id, selector)
            .where(
                IssueORM.start_date <= basis_date,
                or_(IssueORM.closed_on.is_(None), IssueORM.closed_on > end_of_day),
            )
            .order_by(IssueORM.start_date, IssueORM.id)
        )
        rows = self.session.execute(stmt).scalars().all()
        return [issue_from_orm(row) for row in rows]


__all__ = ["SqlAlchemyIssueRepository"]
