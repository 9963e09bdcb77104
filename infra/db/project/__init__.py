from infra.db.project.mapper import (
    project_from_orm,
    project_to_orm,
    version_from_orm,
    version_to_orm,
)
from infra.db.project.repository import SqlAlchemyProjectRepository, descendant_project_ids

__all__ = [
    "project_from_orm",
    "project_to_orm",
    "version_from_orm",
    "version_to_orm",
    "SqlAlchemyProjectRepository",
    "descendant_project_ids",
]
