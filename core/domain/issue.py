from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from core.domain.identifiers import generate_id


@dataclass
class Issue:
    """A scheduled work item of the tracking store.

    ``fixed_version_due_date`` is filled by the data-access layer from the
    issue's target version and stands in for a missing ``due_date``.
    """

    id: str
    project_id: str
    subject: str
    tracker_id: Optional[str] = None
    fixed_version_id: Optional[str] = None
    assigned_to_id: Optional[str] = None
    start_date: Optional[date] = None
    due_date: Optional[date] = None
    estimated_hours: Optional[float] = None
    done_ratio: int = 0
    closed_on: Optional[datetime] = None
    fixed_version_due_date: Optional[date] = None

    @property
    def planned_due_date(self) -> Optional[date]:
        return self.due_date or self.fixed_version_due_date

    @staticmethod
    def create(project_id: str, subject: str, **extra) -> "Issue":
        return Issue(
            id=generate_id(),
            project_id=project_id,
            subject=subject,
            **extra,
        )


__all__ = ["Issue"]
