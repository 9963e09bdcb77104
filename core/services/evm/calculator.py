from __future__ import annotations

import logging
import math
from datetime import date, timedelta
from typing import Iterable, Optional, Sequence

from core.domain import BaselineIssue, DailyCost, EtcMethod, Issue
from core.services.evm.actual_cost import ActualCost
from core.services.evm.earned_value import EarnedValue
from core.services.evm.models import EvmForecast, EvmResult
from core.services.evm.options import EvmOptions
from core.services.evm.planned_value import PlannedValue
from core.services.evm.ratios import safe_div, safe_mul
from core.services.work_calendar.engine import WorkCalendarEngine

logger = logging.getLogger(__name__)


class EvmCalculator:
    """
    Builds the EVM curves of one scope.

    - ``pv_actual``: planned value of the current issues.
    - ``pv_baseline``: planned value of the baseline snapshot (only with baseline rows).
    - ``pv``: the plan performance is measured against, baseline first.
    - ``ev`` / ``ac``: earned value and actual cost as of the basis date.

    With ``options.forecast`` the result also carries EAC and a forecast finish date.
    """

    def __init__(
        self,
        baseline_issues: Optional[Sequence[BaselineIssue]],
        issues: Sequence[Issue],
        costs: Iterable[DailyCost],
        options: EvmOptions,
        calendar: Optional[WorkCalendarEngine] = None,
    ):
        self._baseline_issues = baseline_issues
        self._issues = list(issues)
        self._costs = list(costs)
        self._options = options
        self._calendar = calendar if options.exclude_holidays else None

    def calculate(self) -> EvmResult:
        basis_date = self._options.basis_date

        pv_actual = PlannedValue(self._issues, basis_date, self._calendar)
        pv_baseline = None
        if self._baseline_issues:
            pv_baseline = PlannedValue(self._baseline_issues, basis_date, self._calendar)
        pv = pv_baseline or pv_actual

        ev = EarnedValue(self._issues, basis_date)
        ac = ActualCost(self._costs, basis_date)

        forecast = None
        if self._options.forecast:
            forecast = self._forecast(pv, ev, ac)

        logger.debug(
            "EVM calculated: basis=%s issues=%d bac=%.2f baseline=%s forecast=%s",
            basis_date,
            len(self._issues),
            pv.bac,
            pv_baseline is not None,
            forecast is not None,
        )

        return EvmResult(
            basis_date=basis_date,
            pv=pv,
            pv_actual=pv_actual,
            pv_baseline=pv_baseline,
            ev=ev,
            ac=ac,
            bac=pv.bac,
            finished_date=ev.finished_date,
            forecast=forecast,
        )

    def _forecast(self, pv: PlannedValue, ev: EarnedValue, ac: ActualCost) -> EvmForecast:
        today_ev = ev.today_value
        today_ac = ac.today_value
        spi = safe_div(today_ev, pv.today_value)
        cpi = safe_div(today_ev, today_ac)

        return EvmForecast(
            eac=estimate_at_completion(self._options.etc_method, pv.bac, today_ev, today_ac, cpi, spi),
            forecast_finish_date=forecast_finish_date(pv, ev, spi, self._options.basis_date),
            today_ac=today_ac,
            today_ev=today_ev,
            etc_method=self._options.etc_method,
        )


def estimate_at_completion(
    method: EtcMethod,
    bac: float,
    ev: float,
    ac: Optional[float],
    cpi: Optional[float],
    spi: Optional[float],
) -> Optional[float]:
    if ac is None:
        return None
    remaining = bac - ev
    if method == EtcMethod.AC_PLUS_REMAINING:
        return ac + remaining
    if method == EtcMethod.CPI_SPI:
        etc = safe_div(remaining, safe_mul(cpi, spi))
    else:
        etc = safe_div(remaining, cpi)
    return None if etc is None else ac + etc


def forecast_finish_date(
    pv: PlannedValue,
    ev: EarnedValue,
    spi: Optional[float],
    basis_date: date,
) -> Optional[date]:
    """Planned duration stretched by the schedule performance index."""
    if ev.finished_date is not None:
        return ev.finished_date
    if pv.start_date is None or pv.due_date is None:
        return None
    if not spi:
        return pv.due_date

    planned_days = (pv.due_date - pv.start_date).days + 1
    forecast_days = math.ceil(planned_days / spi)
    try:
        finish = pv.start_date + timedelta(days=forecast_days - 1)
    except OverflowError:
        logger.warning("Forecast finish out of range (planned_days=%d, spi=%s)", planned_days, spi)
        return None
    return max(finish, basis_date)


__all__ = ["EvmCalculator", "estimate_at_completion", "forecast_finish_date"]
