from __future__ import annotations

from datetime import date, datetime

import pytest

from core.domain import BaselineIssue, DailyCost, EtcMethod, Issue
from core.services.evm import EvmCalculator, EvmOptions
from core.services.evm.calculator import estimate_at_completion
from core.services.evm.ratios import safe_div
from core.services.work_calendar import WorkCalendarEngine


def d(day: int) -> date:
    return date(2024, 1, day)


def _issue(start, due, hours, **extra) -> Issue:
    return Issue.create("p1", "Work", start_date=start, due_date=due, estimated_hours=hours, **extra)


def _calc(issues, costs=(), baseline=None, calendar=None, **opts):
    options = EvmOptions(basis_date=opts.pop("basis_date", d(5)), **opts)
    return EvmCalculator(baseline, issues, costs, options, calendar).calculate()


def test_planned_value_spreads_effort_evenly_over_the_schedule():
    evm = _calc([_issue(d(1), d(10), 100.0)])

    assert evm.pv.daily_pv.values() == [10.0] * 10
    assert evm.pv.cumulative_pv.values() == [10.0 * k for k in range(1, 11)]
    assert evm.pv.start_date == d(1)
    assert evm.pv.due_date == d(10)
    assert evm.bac == 100.0
    assert evm.pv.today_value == 50.0


def test_planned_value_uses_version_due_date_when_issue_has_none():
    issue = _issue(d(1), None, 40.0, fixed_version_due_date=d(4))
    evm = _calc([issue])

    assert evm.pv.due_date == d(4)
    assert evm.pv.daily_pv.values() == [10.0] * 4


def test_planned_value_due_before_start_collapses_to_start_day():
    evm = _calc([_issue(d(5), d(2), 8.0)])
    assert evm.pv.daily_pv.items() == [(d(5), 8.0)]
    assert evm.pv.due_date == d(5)


def test_distribution_policy_calendar_days_by_default_even_with_calendar():
    # 2024-01-01 is a Monday; without exclude_holidays the weekend still gets effort
    calendar = WorkCalendarEngine()
    evm = _calc([_issue(d(1), d(7), 70.0)], calendar=calendar, exclude_holidays=False)
    assert evm.pv.daily_pv.values() == [10.0] * 7


def test_distribution_policy_working_days_when_excluding_holidays():
    calendar = WorkCalendarEngine(holidays=[d(3)])
    evm = _calc([_issue(d(1), d(7), 40.0)], calendar=calendar, exclude_holidays=True)

    assert evm.pv.daily_pv.items() == [(d(1), 10.0), (d(2), 10.0), (d(4), 10.0), (d(5), 10.0)]
    assert evm.bac == 40.0


def test_distribution_policy_falls_back_to_calendar_days_without_working_days():
    calendar = WorkCalendarEngine()
    evm = _calc([_issue(d(6), d(7), 20.0)], calendar=calendar, exclude_holidays=True)
    assert evm.pv.daily_pv.items() == [(d(6), 10.0), (d(7), 10.0)]


def test_earned_value_closed_and_in_progress_issues():
    issues = [
        _issue(d(1), d(3), 40.0, closed_on=datetime(2024, 1, 3, 10, 0)),
        _issue(d(2), d(9), 60.0, done_ratio=50),
        # closed after the basis date: counts as in progress
        _issue(d(2), d(9), 10.0, done_ratio=100, closed_on=datetime(2024, 1, 8, 9, 0)),
    ]
    evm = _calc(issues)

    assert evm.ev.daily_ev.items() == [(d(3), 40.0), (d(5), 40.0)]
    assert evm.ev.cumulative_ev.items() == [(d(3), 40.0), (d(5), 80.0)]
    assert evm.ev.today_value == 80.0
    assert evm.ev.min_date == d(3)
    assert evm.ev.max_date == d(5)
    assert evm.finished_date is None


def test_finished_date_is_last_close_when_everything_is_closed():
    issues = [
        _issue(d(1), d(3), 10.0, closed_on=datetime(2024, 1, 3, 10, 0)),
        _issue(d(1), d(6), 10.0, closed_on=datetime(2024, 1, 4, 18, 30)),
    ]
    evm = _calc(issues)
    assert evm.finished_date == d(4)
    assert evm.chart_adjust_date == d(4)


def test_actual_cost_sums_same_day_rows_and_ignores_non_positive():
    costs = [
        DailyCost(d(2), 5.0),
        DailyCost(d(2), 3.0),
        DailyCost(d(3), 0.0),
        DailyCost(d(3), -1.0),
        DailyCost(d(6), 2.0),
    ]
    evm = _calc([_issue(d(1), d(10), 100.0)], costs, basis_date=d(4))

    assert evm.ac.daily_ac.items() == [(d(2), 8.0), (d(6), 2.0)]
    assert evm.ac.cumulative_ac.items() == [(d(2), 8.0), (d(6), 10.0)]
    assert evm.ac.min_date == d(2)
    assert evm.ac.max_date == d(4)
    assert evm.ac.today_value == 8.0


def test_cumulative_series_are_non_decreasing():
    issues = [
        _issue(d(1), d(10), 100.0, closed_on=datetime(2024, 1, 4)),
        _issue(d(3), d(12), 30.0, done_ratio=30),
        _issue(d(8), d(9), 0.0),
    ]
    costs = [DailyCost(d(k), float(k % 3)) for k in range(1, 12)]
    evm = _calc(issues, costs, basis_date=d(9))

    for series in (evm.pv.cumulative_pv, evm.ev.cumulative_ev, evm.ac.cumulative_ac):
        values = series.values()
        assert all(a <= b for a, b in zip(values, values[1:]))


def _forecast_case(**opts):
    issues = [_issue(d(1), d(10), 100.0, done_ratio=40)]
    costs = [DailyCost(d(2), 20.0), DailyCost(d(5), 30.0)]
    return _calc(issues, costs, forecast=True, **opts)


def test_forecast_with_cpi_method():
    evm = _forecast_case()

    assert evm.has_forecast
    assert evm.forecast.today_ev == 40.0
    assert evm.forecast.today_ac == 50.0
    assert evm.forecast.eac == pytest.approx(125.0)
    # ceil(10 / 0.8) = 13 days from the planned start
    assert evm.forecast.forecast_finish_date == d(13)


def test_forecast_other_etc_methods():
    assert _forecast_case(etc_method=EtcMethod.AC_PLUS_REMAINING).forecast.eac == pytest.approx(110.0)
    assert _forecast_case(etc_method=EtcMethod.CPI_SPI).forecast.eac == pytest.approx(143.75)


def test_forecast_without_actual_cost_has_no_eac():
    evm = _calc([_issue(d(1), d(10), 100.0, done_ratio=40)], forecast=True)

    assert evm.forecast.today_ac is None
    assert evm.forecast.eac is None
    assert evm.forecast.forecast_finish_date == d(13)


def test_forecast_without_progress_keeps_planned_due_date():
    evm = _calc([_issue(d(1), d(10), 100.0)], [DailyCost(d(2), 5.0)], forecast=True)
    assert evm.forecast.eac is None
    assert evm.forecast.forecast_finish_date == d(10)


def test_forecast_of_finished_project_is_its_finish_date():
    issues = [_issue(d(1), d(10), 100.0, closed_on=datetime(2024, 1, 4, 12, 0))]
    evm = _calc(issues, [DailyCost(d(3), 90.0)], forecast=True)
    assert evm.forecast.forecast_finish_date == d(4)


def test_no_forecast_unless_requested():
    evm = _calc([_issue(d(1), d(10), 100.0, done_ratio=40)], [DailyCost(d(2), 20.0)])
    assert evm.forecast is None
    assert not evm.has_forecast


def test_baseline_becomes_the_measured_plan():
    baseline = [BaselineIssue.create("b1", "i1", d(1), d(5), 50.0)]
    evm = _calc([_issue(d(1), d(10), 100.0)], baseline=baseline)

    assert evm.pv_baseline is not None
    assert evm.pv is evm.pv_baseline
    assert evm.bac == 50.0
    assert evm.pv_actual.bac == 100.0


def test_no_issues_yields_empty_curves():
    evm = _calc([])

    assert not evm.pv.cumulative_pv
    assert evm.bac == 0.0
    assert evm.pv.today_value is None
    assert evm.ev.today_value == 0.0
    assert evm.ac.today_value is None


def test_ratio_helpers_return_none_when_undefined():
    assert safe_div(1.0, 0.0) is None
    assert safe_div(None, 2.0) is None
    assert safe_div(1.0, None) is None
    assert safe_div(float("inf"), 1.0) is None
    assert safe_div(4.0, 2.0) == 2.0
    assert estimate_at_completion(EtcMethod.CPI, 100.0, 40.0, None, None, None) is None
