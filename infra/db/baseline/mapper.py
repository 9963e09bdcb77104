from __future__ import annotations

from core.domain import BaselineIssue, EvmBaseline
from infra.db.models import BaselineIssueORM, EvmBaselineORM


def baseline_from_orm(obj: EvmBaselineORM) -> EvmBaseline:
    return EvmBaseline(
        id=obj.id,
        project_id=obj.project_id,
        subject=obj.subject,
        created_on=obj.created_on,
    )


def baseline_to_orm(baseline: EvmBaseline) -> EvmBaselineORM:
    return EvmBaselineORM(
        id=baseline.id,
        project_id=baseline.project_id,
        subject=baseline.subject,
        created_on=baseline.created_on,
    )


def baseline_issue_from_orm(obj: BaselineIssueORM) -> BaselineIssue:
    return BaselineIssue(
        id=obj.id,
        baseline_id=obj.baseline_id,
        issue_id=obj.issue_id,
        start_date=obj.start_date,
        due_date=obj.due_date,
        estimated_hours=obj.estimated_hours,
    )


def baseline_issue_to_orm(issue: BaselineIssue) -> BaselineIssueORM:
    return BaselineIssueORM(
        id=issue.id,
        baseline_id=issue.baseline_id,
        issue_id=issue.issue_id,
        start_date=issue.start_date,
        due_date=issue.due_date,
        estimated_hours=issue.estimated_hours,
    )


__all__ = [
    "baseline_from_orm",
    "baseline_to_orm",
    "baseline_issue_from_orm",
    "baseline_issue_to_orm",
]
