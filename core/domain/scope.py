from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from core.domain.enums import ScopeKind


@dataclass(frozen=True)
class ScopeSelector:
    """Which issues of a project (and its descendants) take part in a calculation."""

    kind: ScopeKind = ScopeKind.PROJECT
    version_id: Optional[str] = None
    tracker_ids: Tuple[str, ...] = ()
    assignee_id: Optional[str] = None

    @staticmethod
    def project() -> "ScopeSelector":
        return ScopeSelector()

    @staticmethod
    def version(version_id: str) -> "ScopeSelector":
        return ScopeSelector(kind=ScopeKind.VERSION, version_id=version_id)

    @staticmethod
    def trackers(*tracker_ids: str) -> "ScopeSelector":
        return ScopeSelector(kind=ScopeKind.TRACKER, tracker_ids=tuple(tracker_ids))

    @staticmethod
    def assignee(assignee_id: str) -> "ScopeSelector":
        return ScopeSelector(kind=ScopeKind.ASSIGNEE, assignee_id=assignee_id)


__all__ = ["ScopeSelector"]
