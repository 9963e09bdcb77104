from infra.db.issue.mapper import issue_from_orm, issue_to_orm
from infra.db.issue.repository import SqlAlchemyIssueRepository

__all__ = ["issue_from_orm", "issue_to_orm", "SqlAlchemyIssueRepository"]
