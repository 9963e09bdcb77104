from __future__ import annotations

from core.domain import Issue
from infra.db.models import IssueORM


def issue_from_orm(obj: IssueORM) -> Issue:
    return Issue(
        id=obj.id,
        project_id=obj.project_id,
        subject=obj.subject,
        tracker_id=obj.tracker_id,
        fixed_version_id=obj.fixed_version_id,
        assigned_to_id=obj.assigned_to_id,
        start_date=obj.start_date,
        due_date=obj.due_date,
        estimated_hours=obj.estimated_hours,
        done_ratio=obj.done_ratio or 0,
        closed_on=obj.closed_on,
        fixed_version_due_date=obj.fixed_version.effective_date if obj.fixed_version else None,
    )


def issue_to_orm(issue: Issue) -> IssueORM:
    return IssueORM(
        id=issue.id,
        project_id=issue.project_id,
        subject=issue.subject,
        tracker_id=issue.tracker_id,
        fixed_version_id=issue.fixed_version_id,
        assigned_to_id=issue.assigned_to_id,
        start_date=issue.start_date,
        due_date=issue.due_date,
        estimated_hours=issue.estimated_hours,
        done_ratio=issue.done_ratio,
        closed_on=issue.closed_on,
    )


__all__ = ["issue_from_orm", "issue_to_orm"]
