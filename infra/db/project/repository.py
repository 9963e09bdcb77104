from __future__ import annotations

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from core.domain import Project, Version
from core.interfaces import ProjectRepository
from infra.db.models import ProjectORM
from infra.db.project.mapper import project_from_orm, project_to_orm, version_to_orm


def descendant_project_ids(session: Session, project_id: str) -> List[str]:
    """Ids of every project below ``project_id``, breadth first."""
    found: List[str] = []
    frontier = [project_id]
    while frontier:
        stmt = select(ProjectORM.id).where(ProjectORM.parent_id.in_(frontier))
        children = [pid for pid in session.execute(stmt).scalars().all() if pid not in found]
        found.extend(children)
        frontier = children
    return found


class SqlAlchemyProjectRepository(ProjectRepository):
    def __init__(self, session: Session):
        self.session = session

    def add(self, project: Project) -> None:
        self.session.add(project_to_orm(project))

    def get(self, project_id: str) -> Optional[Project]:
        obj = self.session.get(ProjectORM, project_id)
        return project_from_orm(obj) if obj else None

    def descendant_ids(self, project_id: str) -> List[str]:
        return descendant_project_ids(self.session, project_id)

    def add_version(self, version: Version) -> None:
        self.session.add(version_to_orm(version))


__all__ = ["SqlAlchemyProjectRepository", "descendant_project_ids"]
