from __future__ import annotations

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from core.domain import BaselineIssue, BaselineSnapshot, EvmBaseline
from core.interfaces import BaselineRepository
from infra.db.baseline.mapper import (
    baseline_from_orm,
    baseline_issue_from_orm,
    baseline_issue_to_orm,
    baseline_to_orm,
)
from infra.db.models import BaselineIssueORM, EvmBaselineORM


class SqlAlchemyBaselineRepository(BaselineRepository):
    def __init__(self, session: Session):
        self.session = session

    def add_baseline(self, baseline: EvmBaseline) -> EvmBaseline:
        self.session.add(baseline_to_orm(baseline))
        return baseline

    def add_baseline_issues(self, issues: List[BaselineIssue]) -> None:
        self.session.add_all([baseline_issue_to_orm(issue) for issue in issues])

    def get_baseline(self, baseline_id: str) -> Optional[EvmBaseline]:
        row = self.session.get(EvmBaselineORM, baseline_id)
        return baseline_from_orm(row) if row else None

    def get_latest_for_project(self, project_id: str) -> Optional[EvmBaseline]:
        stmt = (
            select(EvmBaselineORM)
            .where(EvmBaselineORM.project_id == project_id)
            .order_by(EvmBaselineORM.created_on.desc())
        )
        row = self.session.execute(stmt).scalars().first()
        return baseline_from_orm(row) if row else None

    def list_issues(self, baseline_id: str) -> List[BaselineIssue]:
        stmt = select(BaselineIssueORM).where(BaselineIssueORM.baseline_id == baseline_id)
        rows = self.session.execute(stmt).scalars().all()
        return [baseline_issue_from_orm(row) for row in rows]

    def baseline_for(
        self, project_id: str, baseline_id: Optional[str] = None
    ) -> Optional[BaselineSnapshot]:
        """The given baseline of the project, or its latest one when no id is given."""
        if baseline_id:
            baseline = self.get_baseline(baseline_id)
            if baseline is not None and baseline.project_id != project_id:
                baseline = None
        else:
            baseline = self.get_latest_for_project(project_id)
        if baseline is None:
            return None
        return BaselineSnapshot(baseline=baseline, issues=self.list_issues(baseline.id))


__all__ = ["SqlAlchemyBaselineRepository"]
