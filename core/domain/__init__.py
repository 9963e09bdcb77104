from core.domain.baseline import BaselineIssue, BaselineSnapshot, EvmBaseline
from core.domain.calendar import Holiday, WorkingCalendar
from core.domain.cost import DailyCost, TimeEntry
from core.domain.enums import EtcMethod, ScopeKind
from core.domain.identifiers import generate_id
from core.domain.issue import Issue
from core.domain.project import Project, Version
from core.domain.scope import ScopeSelector

__all__ = [
    "generate_id",
    "ScopeKind",
    "EtcMethod",
    "Project",
    "Version",
    "ScopeSelector",
    "Issue",
    "TimeEntry",
    "DailyCost",
    "EvmBaseline",
    "BaselineIssue",
    "BaselineSnapshot",
    "WorkingCalendar",
    "Holiday",
]
