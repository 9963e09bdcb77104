from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from core.domain import BaselineIssue, ScopeKind, ScopeSelector
from core.exceptions import DomainError, NotFoundError
from core.interfaces import (
    BaselineRepository,
    CostRepository,
    IssueRepository,
    ProjectRepository,
    WorkingCalendarRepository,
)
from core.services.evm.calculator import EvmCalculator
from core.services.evm.chart_data import ChartSeriesBuilder
from core.services.evm.indicators import summarize
from core.services.evm.models import EvmReport
from core.services.evm.options import EvmOptions
from core.services.work_calendar.engine import WorkCalendarEngine

logger = logging.getLogger(__name__)


class EvmService:
    def __init__(
        self,
        project_repo: ProjectRepository,
        issue_repo: IssueRepository,
        cost_repo: CostRepository,
        baseline_repo: BaselineRepository,
        calendar_repo: Optional[WorkingCalendarRepository] = None,
        chart_builder: Optional[ChartSeriesBuilder] = None,
    ):
        self._project_repo: ProjectRepository = project_repo
        self._issue_repo: IssueRepository = issue_repo
        self._cost_repo: CostRepository = cost_repo
        self._baseline_repo: BaselineRepository = baseline_repo
        self._calendar_repo: Optional[WorkingCalendarRepository] = calendar_repo
        self._charts: ChartSeriesBuilder = chart_builder or ChartSeriesBuilder()

    def build_report(self, project_id: str, options: EvmOptions) -> EvmReport:
        """
        EVM figures and chart series of one project scope.

        - Scope comes from the options: version, trackers, assignee or the whole project.
        - The baseline is only used for the whole project and unless ``no_use_baseline``.
        - An empty scope, or a calculation that fails, yields a report without result.
        """
        project = self._project_repo.get(project_id)
        if not project:
            raise NotFoundError("Project not found.", code="PROJECT_NOT_FOUND")

        selector = options.scope_selector()
        report = EvmReport(project_id=project_id, options=options)

        if options.display_incomplete:
            report.incomplete_issues = self._issue_repo.incomplete_issues(
                project_id, selector, options.basis_date
            )

        issues = self._issue_repo.scope_issues(project_id, selector)
        if not issues:
            logger.info(
                "No scheduled issues for project %s (scope %s); EVM skipped",
                project_id,
                selector.kind.value,
            )
            return report

        costs = self._cost_repo.scope_costs(project_id, selector)
        baseline_id, baseline_issues = self._load_baseline(project_id, selector, options)
        calendar = self._load_calendar(options)

        try:
            evm = EvmCalculator(baseline_issues, issues, costs, options, calendar).calculate()
            chart = self._charts.evm_chart_data(evm)
            performance = None
            if options.display_performance:
                performance = self._charts.performance_chart_data(evm)
            indicators = summarize(evm)
        except (DomainError, ArithmeticError) as exc:
            logger.exception("EVM calculation failed for project %s", project_id)
            report.error = str(exc)
            return report

        report.result = evm
        report.chart = chart
        report.performance = performance
        report.indicators = indicators
        report.baseline_id = baseline_id
        logger.info(
            "EVM report built for project %s: scope=%s issues=%d days=%d baseline=%s",
            project_id,
            selector.kind.value,
            len(issues),
            len(chart.labels),
            baseline_id or "-",
        )
        return report

    def _load_baseline(
        self,
        project_id: str,
        selector: ScopeSelector,
        options: EvmOptions,
    ) -> Tuple[Optional[str], Optional[List[BaselineIssue]]]:
        if options.no_use_baseline or selector.kind != ScopeKind.PROJECT:
            return None, None

        snapshot = self._baseline_repo.baseline_for(project_id, options.baseline_id)
        if snapshot is None:
            if options.baseline_id:
                logger.warning(
                    "Baseline %s not found for project %s; continuing without baseline",
                    options.baseline_id,
                    project_id,
                )
            return None, None
        return snapshot.baseline.id, snapshot.issues

    def _load_calendar(self, options: EvmOptions) -> Optional[WorkCalendarEngine]:
        if not options.exclude_holidays:
            return None
        if self._calendar_repo is None:
            return WorkCalendarEngine()
        return WorkCalendarEngine.from_repository(self._calendar_repo, options.calendar_id)


__all__ = ["EvmService"]
