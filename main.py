# main.py
from __future__ import annotations

import argparse
import logging
import sys
from typing import Any, Optional, Sequence

from core.exceptions import DomainError
from core.services.evm import EvmReport
from infra.db.base import default_db_url, make_engine, make_session_factory
from infra.logging_config import setup_logging
from infra.migrate import run_migrations
from infra.services import build_service_graph, build_evm_report

logger = logging.getLogger(__name__)


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Earned value figures of one project")
    parser.add_argument("project_id", help="Project id")
    parser.add_argument("--basis-date", help="Evaluation date, YYYY-MM-DD (default: today)")
    parser.add_argument("--version", dest="selected_version_id", help="Only issues of this version")
    parser.add_argument(
        "--tracker",
        dest="selected_tracker_id",
        action="append",
        default=[],
        help="Only issues of this tracker (repeatable)",
    )
    parser.add_argument("--assignee", dest="selected_assignee_id", help="Only issues of this assignee")
    parser.add_argument("--baseline", dest="baseline_id", help="Baseline id (default: latest)")
    parser.add_argument("--no-baseline", dest="no_use_baseline", action="store_true")
    parser.add_argument("--forecast", action="store_true", help="Compute EAC and forecast finish")
    parser.add_argument("--performance", dest="display_performance", action="store_true")
    parser.add_argument("--incomplete", dest="display_incomplete", action="store_true")
    parser.add_argument("--exclude-holidays", action="store_true", default=None)
    parser.add_argument("--etc-method", choices=["AC_PLUS_REMAINING", "CPI", "CPI_SPI"])
    parser.add_argument("--db-url", help="SQLAlchemy database URL (default: PM_EVM_DB_URL or user data dir)")
    return parser


def _params(args: argparse.Namespace) -> dict[str, Any]:
    params = {
        key: value
        for key, value in vars(args).items()
        if key not in ("project_id", "db_url") and value not in (None, [], False)
    }
    if "selected_tracker_id" in params:
        params["selected_tracker_id"] = ",".join(params["selected_tracker_id"])
    return params


def _fmt(value: Optional[float]) -> str:
    return "-" if value is None else f"{value:,.2f}"


def render_report(report: EvmReport) -> str:
    if report.error:
        return f"EVM calculation failed: {report.error} (trace {report.trace_id})"
    if report.is_empty:
        return "No scheduled issues in scope."

    ind = report.indicators
    lines = [
        f"Basis date: {ind.basis_date.isoformat()}",
        f"BAC {_fmt(ind.BAC)}  PV {_fmt(ind.PV)}  EV {_fmt(ind.EV)}  AC {_fmt(ind.AC)}",
        f"SV {_fmt(ind.SV)}  CV {_fmt(ind.CV)}",
        f"SPI {_fmt(ind.SPI)}  CPI {_fmt(ind.CPI)}  CR {_fmt(ind.CR)}",
    ]
    if report.result.has_forecast:
        finish = ind.forecast_finish_date.isoformat() if ind.forecast_finish_date else "-"
        lines.append(f"EAC {_fmt(ind.EAC)}  ETC {_fmt(ind.ETC)}  VAC {_fmt(ind.VAC)}  finish {finish}")
    if report.baseline_id:
        lines.append(f"Baseline: {report.baseline_id}")
    for issue in report.incomplete_issues:
        lines.append(f"  open: {issue.subject} ({issue.done_ratio}%)")
    lines.append(ind.status_text)
    return "\n".join(lines)


def main(argv: Optional[Sequence[str]] = None, configure_logging: bool = True) -> int:
    args = _parser().parse_args(argv)
    if configure_logging:
        setup_logging()

    db_url = args.db_url or default_db_url()
    run_migrations(db_url)
    engine = make_engine(db_url)
    session = make_session_factory(engine)()
    try:
        graph = build_service_graph(session)
        report = build_evm_report(graph.evm_service, args.project_id, _params(args))
    except DomainError as exc:
        logger.error("EVM report for %s failed: %s", args.project_id, exc)
        print(f"Error: {exc}", file=sys.stderr)
        return 2
    finally:
        session.close()
        engine.dispose()

    print(render_report(report))
    return 1 if report.error else 0


if __name__ == "__main__":
    sys.exit(main())
