from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from sqlalchemy.orm import Session

from core.services.evm import EvmOptions, EvmReport, EvmService
from infra.db.repositories import (
    SqlAlchemyBaselineRepository,
    SqlAlchemyCostRepository,
    SqlAlchemyIssueRepository,
    SqlAlchemyProjectRepository,
    SqlAlchemyWorkingCalendarRepository,
)
from infra.operational_support import bind_trace_id

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ServiceGraph:
    session: Session
    project_repo: SqlAlchemyProjectRepository
    issue_repo: SqlAlchemyIssueRepository
    cost_repo: SqlAlchemyCostRepository
    baseline_repo: SqlAlchemyBaselineRepository
    work_calendar_repo: SqlAlchemyWorkingCalendarRepository
    evm_service: EvmService

    def as_dict(self) -> dict[str, Any]:
        return {
            "session": self.session,
            "project_repo": self.project_repo,
            "issue_repo": self.issue_repo,
            "cost_repo": self.cost_repo,
            "baseline_repo": self.baseline_repo,
            "work_calendar_repo": self.work_calendar_repo,
            "evm_service": self.evm_service,
        }


def build_service_graph(session: Session) -> ServiceGraph:
    project_repo = SqlAlchemyProjectRepository(session)
    issue_repo = SqlAlchemyIssueRepository(session)
    cost_repo = SqlAlchemyCostRepository(session)
    baseline_repo = SqlAlchemyBaselineRepository(session)
    work_calendar_repo = SqlAlchemyWorkingCalendarRepository(session)

    evm_service = EvmService(
        project_repo=project_repo,
        issue_repo=issue_repo,
        cost_repo=cost_repo,
        baseline_repo=baseline_repo,
        calendar_repo=work_calendar_repo,
    )
    return ServiceGraph(
        session=session,
        project_repo=project_repo,
        issue_repo=issue_repo,
        cost_repo=cost_repo,
        baseline_repo=baseline_repo,
        work_calendar_repo=work_calendar_repo,
        evm_service=evm_service,
    )


def build_services(session: Session) -> dict[str, Any]:
    return build_service_graph(session).as_dict()


def build_evm_report(
    evm_service: EvmService,
    project_id: str,
    params: Mapping[str, Any],
    trace_id: Optional[str] = None,
) -> EvmReport:
    """Parse request parameters and build the report under one trace id."""
    with bind_trace_id(trace_id) as bound:
        options = EvmOptions.from_params(params)
        logger.info("EVM report requested for project %s", project_id)
        report = evm_service.build_report(project_id, options)
        report.trace_id = bound
    return report


__all__ = ["ServiceGraph", "build_service_graph", "build_services", "build_evm_report"]
