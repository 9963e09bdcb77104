from __future__ import annotations

from core.domain import Project, Version
from infra.db.models import ProjectORM, VersionORM


def project_from_orm(obj: ProjectORM) -> Project:
    return Project(id=obj.id, name=obj.name, parent_id=obj.parent_id)


def project_to_orm(project: Project) -> ProjectORM:
    return ProjectORM(id=project.id, name=project.name, parent_id=project.parent_id)


def version_from_orm(obj: VersionORM) -> Version:
    return Version(
        id=obj.id,
        project_id=obj.project_id,
        name=obj.name,
        effective_date=obj.effective_date,
    )


def version_to_orm(version: Version) -> VersionORM:
    return VersionORM(
        id=version.id,
        project_id=version.project_id,
        name=version.name,
        effective_date=version.effective_date,
    )


__all__ = ["project_from_orm", "project_to_orm", "version_from_orm", "version_to_orm"]
