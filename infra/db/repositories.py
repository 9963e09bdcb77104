# infra/db/repositories.py
from infra.db.baseline import SqlAlchemyBaselineRepository
from infra.db.cost_calendar import SqlAlchemyCostRepository, SqlAlchemyWorkingCalendarRepository
from infra.db.issue import SqlAlchemyIssueRepository
from infra.db.project import SqlAlchemyProjectRepository

__all__ = [
    "SqlAlchemyProjectRepository",
    "SqlAlchemyIssueRepository",
    "SqlAlchemyCostRepository",
    "SqlAlchemyWorkingCalendarRepository",
    "SqlAlchemyBaselineRepository",
]
