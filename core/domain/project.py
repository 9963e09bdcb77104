from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from core.domain.identifiers import generate_id


@dataclass
class Project:
    id: str
    name: str
    parent_id: Optional[str] = None

    @staticmethod
    def create(name: str, parent_id: Optional[str] = None) -> "Project":
        return Project(id=generate_id(), name=name, parent_id=parent_id)


@dataclass
class Version:
    id: str
    project_id: str
    name: str
    effective_date: Optional[date] = None

    @staticmethod
    def create(project_id: str, name: str, effective_date: Optional[date] = None) -> "Version":
        return Version(
            id=generate_id(),
            project_id=project_id,
            name=name,
            effective_date=effective_date,
        )


__all__ = ["Project", "Version"]
