# core/interfaces.py
from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from typing import List, Optional

from core.domain import (
    BaselineIssue,
    BaselineSnapshot,
    DailyCost,
    EvmBaseline,
    Holiday,
    Issue,
    Project,
    ScopeSelector,
    TimeEntry,
    Version,
    WorkingCalendar,
)


class ProjectRepository(ABC):
    @abstractmethod
    def add(self, project: Project) -> None: ...
    @abstractmethod
    def get(self, project_id: str) -> Optional[Project]: ...
    @abstractmethod
    def descendant_ids(self, project_id: str) -> List[str]: ...
    @abstractmethod
    def add_version(self, version: Version) -> None: ...


class IssueRepository(ABC):
    @abstractmethod
    def add(self, issue: Issue) -> None: ...
    @abstractmethod
    def scope_issues(self, project_id: str, selector: ScopeSelector) -> List[Issue]: ...
    @abstractmethod
    def incomplete_issues(
        self, project_id: str, selector: ScopeSelector, basis_date: date
    ) -> List[Issue]: ...


class CostRepository(ABC):
    @abstractmethod
    def add(self, entry: TimeEntry) -> None: ...
    @abstractmethod
    def scope_costs(self, project_id: str, selector: ScopeSelector) -> List[DailyCost]: ...


class BaselineRepository(ABC):
    @abstractmethod
    def add_baseline(self, baseline: EvmBaseline) -> EvmBaseline: ...
    @abstractmethod
    def add_baseline_issues(self, issues: List[BaselineIssue]) -> None: ...
    @abstractmethod
    def get_baseline(self, baseline_id: str) -> Optional[EvmBaseline]: ...
    @abstractmethod
    def get_latest_for_project(self, project_id: str) -> Optional[EvmBaseline]: ...
    @abstractmethod
    def list_issues(self, baseline_id: str) -> List[BaselineIssue]: ...
    @abstractmethod
    def baseline_for(
        self, project_id: str, baseline_id: Optional[str] = None
    ) -> Optional[BaselineSnapshot]: ...


class WorkingCalendarRepository(ABC):
    @abstractmethod
    def get(self, calendar_id: str) -> Optional[WorkingCalendar]: ...
    @abstractmethod
    def upsert(self, calendar: WorkingCalendar) -> None: ...
    @abstractmethod
    def add_holiday(self, holiday: Holiday) -> None: ...
    @abstractmethod
    def list_holidays(self, calendar_id: str) -> List[Holiday]: ...
