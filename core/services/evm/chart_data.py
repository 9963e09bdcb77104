from __future__ import annotations

from datetime import date, datetime, time, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Iterator, List, Optional

from core.services.evm.models import EvmChartData, EvmResult, PerformanceChartData
from core.services.evm.ratios import safe_div, safe_mul
from core.services.evm.series import Series


def evm_round(value: Optional[float]) -> Optional[float]:
    """Two decimals, halves rounded away from zero (0.125 -> 0.13)."""
    if value is None:
        return None
    return float(Decimal(repr(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def date_label(d: date) -> int:
    """Local midnight of ``d`` as epoch milliseconds."""
    return int(datetime.combine(d, time.min).timestamp()) * 1000


def each_day(start: date, end: date) -> Iterator[date]:
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def complement_evm_value(series: Series) -> Series:
    """
    Densify a sparse series to one entry per day.

    Days between two samples are interpolated linearly; sample days keep their
    exact values. Applying it to a dense series returns an equal series.
    """
    items = series.items()
    if not items:
        return Series()

    dense: Dict[date, float] = {}
    before_date, before_value = items[0]
    dense[before_date] = before_value
    for current_date, current_value in items[1:]:
        span = (current_date - before_date).days
        step = (current_value - before_value) / span
        for offset in range(1, span):
            dense[before_date + timedelta(days=offset)] = before_value + offset * step
        dense[current_date] = current_value
        before_date, before_value = current_date, current_value
    return Series.from_mapping(dense)


def chart_duration(evm: EvmResult) -> Optional[Dict[str, date]]:
    """Start and end date of the chart, or None when there is nothing to plot."""
    min_dates = [evm.pv.start_date, evm.pv_actual.start_date, evm.ev.min_date, evm.ac.min_date]
    if evm.pv_baseline is not None:
        min_dates.append(evm.pv_baseline.start_date)

    max_dates = [evm.pv.due_date, evm.pv_actual.due_date]
    if evm.forecast is not None:
        max_dates.append(evm.forecast.forecast_finish_date)
    if evm.pv_baseline is not None:
        max_dates.append(evm.pv_baseline.due_date)
    if evm.finished_date is not None:
        max_dates.append(evm.ev.max_date)
        max_dates.append(evm.ac.max_date)
    else:
        # not finished: the last recorded sample, whatever the basis date
        max_dates.append(evm.ev.cumulative_ev.last_date)
        max_dates.append(evm.ac.cumulative_ac.last_date)

    starts = [d for d in min_dates if d is not None]
    ends = [d for d in max_dates if d is not None]
    if not starts or not ends:
        return None
    return {"start_date": min(starts), "end_date": max(max(ends), min(starts))}


class ChartSeriesBuilder:
    """Turns an EvmResult into day-by-day series a charting layer can plot."""

    def evm_chart_data(self, evm: EvmResult) -> EvmChartData:
        """
        PV, EV, AC, baseline and daily PV on a common daily axis.

        With forecasting the BAC/EAC top lines and the forecast AC/EV lines are
        added; they are two-point series, so they only have values at their ends.
        Days without a sample stay None.
        """
        duration = chart_duration(evm)
        if duration is None:
            return EvmChartData(baseline=[] if evm.pv_baseline is not None else None)
        start_date = duration["start_date"]
        end_date = duration["end_date"]

        planned_value = evm.pv_actual.cumulative_pv.clipped(evm.pv_actual.due_date)
        baseline_value = None
        if evm.pv_baseline is not None:
            baseline_value = evm.pv_baseline.cumulative_pv.clipped(evm.pv_baseline.due_date)

        chart_adjust_date = evm.chart_adjust_date
        earned_value = evm.ev.cumulative_ev.clipped(chart_adjust_date)
        actual_cost = evm.ac.cumulative_ac.clipped(chart_adjust_date)

        bac_top_line: Dict[date, Optional[float]] = {}
        eac_top_line: Dict[date, Optional[float]] = {}
        actual_cost_forecast: Dict[date, Optional[float]] = {}
        earned_value_forecast: Dict[date, Optional[float]] = {}
        forecast = evm.forecast
        if forecast is not None:
            bac_top_line[start_date] = evm.bac
            bac_top_line[end_date] = evm.bac
            eac_top_line[start_date] = forecast.eac
            eac_top_line[end_date] = forecast.eac
            if forecast.forecast_finish_date is not None:
                actual_cost_forecast[evm.basis_date] = forecast.today_ac
                actual_cost_forecast[forecast.forecast_finish_date] = forecast.eac
                earned_value_forecast[evm.basis_date] = forecast.today_ev
                earned_value_forecast[forecast.forecast_finish_date] = evm.bac

        data = EvmChartData(baseline=[] if baseline_value is not None else None)
        for chart_date in each_day(start_date, end_date):
            data.labels.append(date_label(chart_date))
            data.pv.append(evm_round(planned_value.at(chart_date)))
            data.ac.append(evm_round(actual_cost.at(chart_date)))
            data.ev.append(evm_round(earned_value.at(chart_date)))
            if baseline_value is not None:
                data.baseline.append(evm_round(baseline_value.at(chart_date)))
            data.pv_daily.append(evm_round(evm.pv.daily_pv.at(chart_date)))
            data.bac.append(evm_round(bac_top_line.get(chart_date)))
            data.eac.append(evm_round(eac_top_line.get(chart_date)))
            data.ac_forecast.append(evm_round(actual_cost_forecast.get(chart_date)))
            data.ev_forecast.append(evm_round(earned_value_forecast.get(chart_date)))
        return data

    def performance_chart_data(self, evm: EvmResult) -> PerformanceChartData:
        """
        SPI, CPI and CR for each day on which PV, EV and AC all have a value.

        Without any actual cost the days common to PV and EV are used and CPI
        and CR stay None.
        """
        chart_adjust_date = evm.chart_adjust_date
        new_ev = complement_evm_value(evm.ev.cumulative_ev.clipped(chart_adjust_date))
        new_ac = complement_evm_value(evm.ac.cumulative_ac.clipped(chart_adjust_date))
        new_pv = complement_evm_value(evm.pv.cumulative_pv)

        data = PerformanceChartData()
        if not new_ev or not new_pv:
            return data

        operands = [s for s in (new_ev, new_ac, new_pv) if s]
        performance_min_date = max(s.first_date for s in operands)
        performance_max_date = min(s.last_date for s in operands)

        for d in each_day(performance_min_date, performance_max_date):
            ev = new_ev.at(d)
            spi = safe_div(ev, new_pv.at(d))
            cpi = safe_div(ev, new_ac.at(d))
            data.labels.append(date_label(d))
            data.spi.append(evm_round(spi))
            data.cpi.append(evm_round(cpi))
            data.cr.append(evm_round(safe_mul(spi, cpi)))
        return data


__all__ = [
    "ChartSeriesBuilder",
    "chart_duration",
    "complement_evm_value",
    "date_label",
    "each_day",
    "evm_round",
]
