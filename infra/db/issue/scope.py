from __future__ import annotations

from typing import List

from sqlalchemy import and_, or_
from sqlalchemy.sql.elements import ColumnElement

from core.domain import ScopeKind, ScopeSelector
from infra.db.models import IssueORM, VersionORM


def scheduled_condition() -> ColumnElement[bool]:
    """Issue has a start date and a due date, its own or its version's."""
    return and_(
        IssueORM.start_date.is_not(None),
        or_(
            IssueORM.due_date.is_not(None),
            and_(IssueORM.fixed_version_id.is_not(None), VersionORM.effective_date.is_not(None)),
        ),
    )


def selector_conditions(project_ids: List[str], selector: ScopeSelector) -> List[ColumnElement[bool]]:
    conditions: List[ColumnElement[bool]] = [IssueORM.project_id.in_(project_ids)]
    if selector.kind == ScopeKind.VERSION:
        conditions.append(IssueORM.fixed_version_id == selector.version_id)
    elif selector.kind == ScopeKind.TRACKER:
        conditions.append(IssueORM.tracker_id.in_(list(selector.tracker_ids)))
    elif selector.kind == ScopeKind.ASSIGNEE:
        conditions.append(IssueORM.assigned_to_id == selector.assignee_id)
    return conditions


__all__ = ["scheduled_condition", "selector_conditions"]
