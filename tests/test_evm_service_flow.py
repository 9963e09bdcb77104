from __future__ import annotations

from datetime import date, datetime

import pytest

from core.domain import (
    BaselineIssue,
    EvmBaseline,
    Holiday,
    Issue,
    Project,
    ScopeSelector,
    TimeEntry,
    Version,
    WorkingCalendar,
)
from core.exceptions import NotFoundError
from core.services.evm import EvmOptions
from core.services.evm.chart_data import date_label
from infra.services import build_evm_report


def d(day: int) -> date:
    return date(2024, 1, day)


@pytest.fixture
def seeded(services):
    """
    Parent project with one sub-project:

    - parent: a 10-day issue of 100h (40% done), time spent 20h + 30h
    - child: a 4-day issue of 40h (closed), its due date from a version
    - parent: an unscheduled issue that never takes part
    """
    session = services["session"]
    projects = services["project_repo"]
    issues = services["issue_repo"]
    costs = services["cost_repo"]

    parent = Project.create("Platform")
    child = Project.create("Platform / API", parent_id=parent.id)
    projects.add(parent)
    projects.add(child)
    session.flush()

    release = Version.create(child.id, "1.0", effective_date=d(4))
    projects.add_version(release)

    main = Issue.create(
        parent.id,
        "Build",
        tracker_id="feature",
        assigned_to_id="alice",
        start_date=d(1),
        due_date=d(10),
        estimated_hours=100.0,
        done_ratio=40,
    )
    api = Issue.create(
        child.id,
        "API",
        tracker_id="bug",
        fixed_version_id=release.id,
        assigned_to_id="bob",
        start_date=d(1),
        estimated_hours=40.0,
        done_ratio=100,
        closed_on=datetime(2024, 1, 4, 15, 0),
    )
    loose = Issue.create(parent.id, "Someday", estimated_hours=5.0)
    for issue in (main, api, loose):
        issues.add(issue)
    session.flush()

    costs.add(TimeEntry.create(main.id, d(2), 12.0))
    costs.add(TimeEntry.create(main.id, d(2), 8.0))
    costs.add(TimeEntry.create(main.id, d(5), 30.0))
    costs.add(TimeEntry.create(api.id, d(3), 25.0))
    session.commit()

    return {
        "parent": parent,
        "child": child,
        "release": release,
        "main": main,
        "api": api,
        "loose": loose,
    }


def test_scope_issues_cover_descendants_and_version_due_dates(services, seeded):
    repo = services["issue_repo"]
    found = repo.scope_issues(seeded["parent"].id, ScopeSelector.project())

    assert {i.id for i in found} == {seeded["main"].id, seeded["api"].id}
    api = next(i for i in found if i.id == seeded["api"].id)
    assert api.due_date is None
    assert api.fixed_version_due_date == d(4)
    assert api.planned_due_date == d(4)

    assert repo.scope_issues(seeded["child"].id, ScopeSelector.project())[0].id == seeded["api"].id


def test_scope_selectors_filter_issues_and_costs(services, seeded):
    issues = services["issue_repo"]
    costs = services["cost_repo"]
    pid = seeded["parent"].id

    by_version = ScopeSelector.version(seeded["release"].id)
    by_tracker = ScopeSelector.trackers("feature")
    by_assignee = ScopeSelector.assignee("bob")

    assert [i.id for i in issues.scope_issues(pid, by_version)] == [seeded["api"].id]
    assert [i.id for i in issues.scope_issues(pid, by_tracker)] == [seeded["main"].id]
    assert [i.id for i in issues.scope_issues(pid, by_assignee)] == [seeded["api"].id]

    daily = costs.scope_costs(pid, ScopeSelector.project())
    assert [(c.spent_on, c.hours) for c in daily] == [(d(2), 20.0), (d(3), 25.0), (d(5), 30.0)]
    assert [(c.spent_on, c.hours) for c in costs.scope_costs(pid, by_tracker)] == [
        (d(2), 20.0),
        (d(5), 30.0),
    ]


def test_incomplete_issues_as_of_basis_date(services, seeded):
    repo = services["issue_repo"]
    pid = seeded["parent"].id

    on_3rd = repo.incomplete_issues(pid, ScopeSelector.project(), d(3))
    assert {i.id for i in on_3rd} == {seeded["main"].id, seeded["api"].id}

    # closed during the 4th: no longer incomplete at the end of that day
    on_4th = repo.incomplete_issues(pid, ScopeSelector.project(), d(4))
    assert [i.id for i in on_4th] == [seeded["main"].id]


def test_report_for_whole_project(services, seeded):
    service = services["evm_service"]
    options = EvmOptions(basis_date=d(5), forecast=True, display_performance=True, display_incomplete=True)

    report = service.build_report(seeded["parent"].id, options)

    assert not report.is_empty
    assert report.error is None
    assert report.baseline_id is None
    evm = report.result
    assert evm.bac == pytest.approx(140.0)
    # 40h closed on the 4th, 40% of 100h on the basis date
    assert evm.ev.cumulative_ev.items() == [(d(4), 40.0), (d(5), 80.0)]
    assert evm.ac.today_value == 75.0
    assert evm.pv.today_value == pytest.approx(90.0)

    assert report.chart.labels[0] == date_label(d(1))
    assert len(report.chart.pv) == len(report.chart.labels)
    assert report.performance is not None and report.performance.labels
    assert report.indicators.SPI == pytest.approx(80.0 / 90.0)
    assert report.indicators.CPI == pytest.approx(80.0 / 75.0)
    assert [i.id for i in report.incomplete_issues] == [seeded["main"].id]


def test_report_uses_latest_baseline_unless_disabled(services, seeded):
    session = services["session"]
    baselines = services["baseline_repo"]
    pid = seeded["parent"].id

    old = EvmBaseline.create(pid, "Kick-off", created_on=datetime(2023, 12, 1, 9, 0))
    new = EvmBaseline.create(pid, "Re-plan", created_on=datetime(2023, 12, 20, 9, 0))
    baselines.add_baseline(old)
    baselines.add_baseline(new)
    session.flush()
    baselines.add_baseline_issues(
        [
            BaselineIssue.create(old.id, seeded["main"].id, d(1), d(5), 50.0),
            BaselineIssue.create(new.id, seeded["main"].id, d(1), d(8), 80.0),
        ]
    )
    session.commit()

    service = services["evm_service"]
    latest = service.build_report(pid, EvmOptions(basis_date=d(5)))
    assert latest.baseline_id == new.id
    assert latest.result.bac == pytest.approx(80.0)
    assert latest.chart.baseline is not None
    assert len(latest.chart.baseline) == len(latest.chart.labels)

    chosen = service.build_report(pid, EvmOptions(basis_date=d(5), baseline_id=old.id))
    assert chosen.baseline_id == old.id
    assert chosen.result.bac == pytest.approx(50.0)

    without = service.build_report(pid, EvmOptions(basis_date=d(5), no_use_baseline=True))
    assert without.baseline_id is None
    assert without.chart.baseline is None
    assert without.result.bac == pytest.approx(140.0)

    # baselines only apply to the whole project
    scoped = service.build_report(pid, EvmOptions(basis_date=d(5), selected_tracker_ids=("feature",)))
    assert scoped.baseline_id is None
    assert scoped.result.bac == pytest.approx(100.0)


def test_unknown_baseline_means_no_baseline(services, seeded, caplog):
    service = services["evm_service"]
    with caplog.at_level("WARNING"):
        report = service.build_report(seeded["parent"].id, EvmOptions(basis_date=d(5), baseline_id="missing"))

    assert report.baseline_id is None
    assert report.result.pv_baseline is None
    assert report.chart.baseline is None
    assert "missing" in caplog.text


def test_report_excluding_holidays_uses_working_calendar(services, seeded):
    session = services["session"]
    calendars = services["work_calendar_repo"]
    calendars.upsert(WorkingCalendar(id="default", name="Office", working_days={0, 1, 2, 3, 4}))
    calendars.add_holiday(Holiday.create("default", d(2), "Bridge day"))
    session.commit()

    report = services["evm_service"].build_report(
        seeded["parent"].id,
        EvmOptions(basis_date=d(5), selected_tracker_ids=("feature",), exclude_holidays=True),
    )

    daily = report.result.pv.daily_pv
    # 100h over Jan 1-10 minus the weekend and the holiday: 7 working days
    assert daily.at(d(2)) is None
    assert daily.at(d(6)) is None
    assert daily.at(d(1)) == pytest.approx(100.0 / 7)
    assert report.result.bac == pytest.approx(100.0)


def test_empty_scope_gives_empty_report(services, seeded):
    report = services["evm_service"].build_report(
        seeded["parent"].id, EvmOptions(basis_date=d(5), selected_assignee_id="nobody")
    )
    assert report.is_empty
    assert report.error is None
    assert report.chart.labels == []
    assert report.indicators is None


def test_unknown_project_raises(services):
    with pytest.raises(NotFoundError):
        services["evm_service"].build_report("nope", EvmOptions())


def test_failed_calculation_surfaces_as_empty_report(services, seeded, monkeypatch):
    from core.services.evm import service as service_module

    def boom(self):
        raise ZeroDivisionError("boom")

    monkeypatch.setattr(service_module.EvmCalculator, "calculate", boom)
    report = services["evm_service"].build_report(seeded["parent"].id, EvmOptions(basis_date=d(5)))

    assert report.is_empty
    assert report.error == "boom"


def test_build_evm_report_parses_params_and_binds_trace_id(services, seeded):
    report = build_evm_report(
        services["evm_service"],
        seeded["parent"].id,
        {"basis_date": "2024-01-05", "forecast": "true", "selected_version_id": seeded["release"].id},
        trace_id="evm-test-1",
    )

    assert report.trace_id == "evm-test-1"
    assert report.options.forecast is True
    assert report.result.bac == pytest.approx(40.0)
    assert report.result.finished_date == d(4)
    assert report.result.forecast.forecast_finish_date == d(4)


def test_baseline_of_another_project_is_not_used(services, seeded):
    session = services["session"]
    baselines = services["baseline_repo"]
    foreign = EvmBaseline.create(seeded["child"].id, "Child plan", created_on=datetime(2023, 12, 1))
    baselines.add_baseline(foreign)
    session.commit()

    assert baselines.baseline_for(seeded["child"].id, foreign.id).baseline.id == foreign.id
    assert baselines.baseline_for(seeded["parent"].id, foreign.id) is None
    assert baselines.baseline_for(seeded["parent"].id) is None
