from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import List, Optional

from core.domain.identifiers import generate_id


@dataclass
class EvmBaseline:
    id: str
    project_id: str
    subject: str
    created_on: datetime

    @staticmethod
    def create(project_id: str, subject: str, created_on: Optional[datetime] = None) -> "EvmBaseline":
        return EvmBaseline(
            id=generate_id(),
            project_id=project_id,
            subject=subject.strip() or "Baseline",
            created_on=created_on or datetime.now(),
        )


@dataclass
class BaselineIssue:
    """Frozen schedule of one issue at the time the baseline was taken."""

    id: str
    baseline_id: str
    issue_id: str
    start_date: Optional[date]
    due_date: Optional[date]
    estimated_hours: float = 0.0

    @property
    def planned_due_date(self) -> Optional[date]:
        return self.due_date

    @staticmethod
    def create(
        baseline_id: str,
        issue_id: str,
        start_date: Optional[date],
        due_date: Optional[date],
        estimated_hours: float,
    ) -> "BaselineIssue":
        return BaselineIssue(
            id=generate_id(),
            baseline_id=baseline_id,
            issue_id=issue_id,
            start_date=start_date,
            due_date=due_date,
            estimated_hours=max(0.0, estimated_hours or 0.0),
        )


@dataclass
class BaselineSnapshot:
    baseline: EvmBaseline
    issues: List[BaselineIssue]


__all__ = ["EvmBaseline", "BaselineIssue", "BaselineSnapshot"]
